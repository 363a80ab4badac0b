"""
FastAPI Application Factory.
Creates and configures the FastAPI application with all routers, middleware, and DI.

Endpoints:
- WS /ws, POST /chat
- projects, teams and agents roster
- conversation bootstrap and history
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from dishka import AsyncContainer
from dishka.integrations.fastapi import setup_dishka
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

from hatch_chat import __version__
from hatch_chat.config.logging_config import (
    NO_CORRELATION_ID,
    correlation_id_var,
    setup_logging,
)
from hatch_chat.config.settings import Config
from hatch_chat.domain.exceptions import (
    ConversationIdError,
    DomainValidationError,
    EntityNotFoundError,
    EnvelopeValidationError,
    InvariantViolationError,
)
from hatch_chat.presentation.api import chat_router, conversations_router, projects_router
from hatch_chat.setup.ioc import create_container

setup_logging(Config.LOG_LEVEL, Config.LOG_PATH)
logger = logging.getLogger(__name__)


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    """Middleware to extract and set correlation ID from request headers."""

    async def dispatch(self, request: Request, call_next):
        correlation_id = request.headers.get("X-Correlation-ID", NO_CORRELATION_ID)
        correlation_id_var.set(correlation_id)
        response = await call_next(request)
        response.headers["X-Correlation-ID"] = correlation_id
        return response


def _error(status_code: int, error: str, **extra) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": error, **extra})


def create_fastapi_app(
    *,
    strict: Optional[bool] = None,
    container: Optional[AsyncContainer] = None,
) -> FastAPI:
    """
    Application factory for creating FastAPI app.

    Args:
        strict: Strict mode; defaults to Config.STRICT_MODE
        container: Prebuilt DI container (tests pass a fresh one)

    Returns:
        FastAPI application instance
    """
    strict = Config.STRICT_MODE if strict is None else strict
    # Dishka adds middleware, so the container must exist before startup
    container = container or create_container(strict=strict)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("FastAPI application started (env=%s, strict=%s)", Config.APP_ENV, strict)
        yield
        await container.close()
        logger.info("FastAPI application shutdown. DI container closed.")

    app = FastAPI(
        title="Hatch Chat API",
        description="Multi-agent project chat: conversation routing and speaking authority",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.strict = strict

    setup_dishka(container, app)

    # Correlation ID middleware (must be added before CORS)
    app.add_middleware(CorrelationIdMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=Config.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        logger.warning("[VALIDATION ERROR] %s", errors)
        return _error(400, "Validation error", details=jsonable_errors(errors))

    @app.exception_handler(EnvelopeValidationError)
    async def envelope_exception_handler(request: Request, exc: EnvelopeValidationError):
        logger.warning("[ENVELOPE ERROR] %s", exc.message)
        return _error(400, exc.message, code=exc.code, details=exc.errors)

    @app.exception_handler(EntityNotFoundError)
    async def not_found_handler(request: Request, exc: EntityNotFoundError):
        logger.info("[NOT FOUND] %s", exc)
        return _error(404, str(exc))

    @app.exception_handler(DomainValidationError)
    async def domain_validation_handler(request: Request, exc: DomainValidationError):
        # ConversationIdError is a DomainValidationError subclass
        logger.warning("[DOMAIN ERROR] %s", exc)
        return _error(422, str(exc))

    @app.exception_handler(InvariantViolationError)
    async def invariant_handler(request: Request, exc: InvariantViolationError):
        logger.error("[INVARIANT] %s", exc)
        return _error(500, exc.message, code="INVARIANT_VIOLATION", invariant=exc.invariant)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        logger.warning("[HTTP ERROR %s] %s", exc.status_code, exc.detail)
        return _error(exc.status_code, exc.detail)

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.exception("[GLOBAL ERROR] %s: %s", type(exc).__name__, exc)
        return _error(500, "Internal server error")

    @app.get("/", tags=["health"])
    async def root():
        return {"message": "FastAPI server is running."}

    @app.get("/health", tags=["health"])
    async def health():
        return {"status": "healthy"}

    app.include_router(chat_router)  # POST /chat, WS /ws
    app.include_router(conversations_router)
    app.include_router(projects_router)

    return app


def jsonable_errors(errors) -> list:
    """Pydantic error dicts may carry exception objects in ctx."""
    return [
        {key: (str(value) if key == "ctx" else value) for key, value in err.items()}
        for err in errors
    ]


# Create the app instance
app = create_fastapi_app()
