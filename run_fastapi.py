"""
Main entry point for the FastAPI application.
Run this file to start the FastAPI server.

Usage:
    python run_fastapi.py

Or with uvicorn directly:
    uvicorn hatch_chat.fastapi_app:app --host 0.0.0.0 --port 5001 --reload
"""

import logging

import uvicorn

from hatch_chat.config.logging_config import setup_logging
from hatch_chat.config.settings import Config

logger = logging.getLogger("hatch_chat.run")

if __name__ == "__main__":
    setup_logging(Config.LOG_LEVEL, Config.LOG_PATH)
    debug = Config.APP_ENV == "development"

    logger.info("Starting FastAPI application in %s mode...", Config.APP_ENV)
    logger.info("Server running on http://%s:%s", Config.HOST, Config.PORT)

    uvicorn.run(
        "hatch_chat.fastapi_app:app",
        host=Config.HOST,
        port=Config.PORT,
        reload=debug,
        log_level="info" if debug else "warning",
    )
