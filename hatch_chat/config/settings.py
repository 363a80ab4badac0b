"""Application configuration settings"""

import os
from dotenv import load_dotenv

load_dotenv()

_TRUTHY = {"1", "true", "yes", "on"}


class Config:
    # Runtime environment: "development", "test" or "production"
    APP_ENV = os.getenv("APP_ENV", "development").lower()
    DEV = os.getenv("DEV", "false").lower() in _TRUTHY

    # Strict mode: contract violations raise instead of being logged.
    # Resolved once here; everything else receives it as a value.
    STRICT_MODE = APP_ENV in {"development", "test"} or DEV

    # Server
    HOST = os.getenv("HOST", "0.0.0.0")
    PORT = int(os.getenv("PORT", "5001"))
    ALLOWED_ORIGINS = [
        o.strip()
        for o in os.getenv("ALLOWED_ORIGINS", "http://localhost:5173").split(",")
        if o.strip()
    ]

    # Chat settings
    CHAT_MAX_TOKENS = int(os.getenv("CHAT_MAX_TOKENS", "400"))
    CONVERSATION_MESSAGE_LIMIT: int = int(
        os.getenv("CONVERSATION_MESSAGE_LIMIT", "200")
    )
    # Messages of history handed to the reply generator
    REPLY_HISTORY_LIMIT: int = int(os.getenv("REPLY_HISTORY_LIMIT", "10"))

    # OpenAI
    OPENAI_KEY = os.getenv("OPENAI_API_KEY", "")
    OPENAI_MODEL = os.getenv("OPENAI_MODEL", "gpt-4o-mini")
    OPENAI_TEMPERATURE = float(os.getenv("OPENAI_TEMPERATURE", "0.7"))

    # Logging
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    LOG_PATH = os.getenv("LOG_PATH") or None
    LOG_FORMAT = os.getenv(
        "LOG_FORMAT",
        "%(asctime)s %(levelname)s [%(correlation_id)s] %(name)s: %(message)s",
    )
