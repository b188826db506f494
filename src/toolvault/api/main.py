"""FastAPI application factory."""
import logging
from collections.abc import AsyncGenerator, Awaitable, Callable
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from toolvault import __version__
from toolvault.api.routers import auth, bookmarks, health
from toolvault.core.config import get_settings
from toolvault.core.context import AppContext
from toolvault.core.logging_config import setup_logging
from toolvault.services.exceptions import (
    AuthError,
    DatabaseConnectionError,
    InternalError,
    ToolVaultError,
    ValidationError,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Manage application lifespan - startup and shutdown."""
    context: AppContext = app.state.context

    # Startup: a database we can't reach is fatal, the server process exits
    try:
        await context.startup()
    except DatabaseConnectionError:
        logger.critical("Database connection failed at startup", exc_info=True)
        raise

    yield

    # Shutdown: release pooled connections
    await context.shutdown()


def format_validation_errors(exc: RequestValidationError) -> str:
    """Summarize FastAPI validation errors as 'field: message' pairs."""
    messages = []
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "path", "query")]
        field = ".".join(loc) if loc else "body"
        messages.append(f"{field}: {err.get('msg', 'invalid')}")
    return "; ".join(messages) if messages else "Validation error"


def error_response(exc: ToolVaultError) -> JSONResponse:
    """Render a service error as ``{"error": <message>}`` with its status."""
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AuthError) else None
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc)},
        headers=headers,
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Render every error as ``{"error": <message>}``."""

    @app.exception_handler(ToolVaultError)
    async def toolvault_error_handler(_request: Request, exc: ToolVaultError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error("Request failed: %s", exc)
        return error_response(exc)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        _request: Request, exc: RequestValidationError,
    ) -> JSONResponse:
        return error_response(ValidationError(format_validation_errors(exc)))

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(
        _request: Request, exc: StarletteHTTPException,
    ) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(SQLAlchemyError)
    async def database_error_handler(_request: Request, _exc: SQLAlchemyError) -> JSONResponse:
        logger.exception("Database error")
        return error_response(InternalError("Database error"))


async def catch_unhandled_errors(
    request: Request,
    call_next: Callable[[Request], Awaitable[Response]],
) -> Response:
    """
    Turn any unhandled exception into a 500 ``{"error": ...}`` response.

    Registered inside CORSMiddleware so error responses still carry CORS
    headers. An ``Exception`` handler would run in ServerErrorMiddleware,
    outside CORS.
    """
    try:
        return await call_next(request)
    except Exception:
        logger.exception("Unhandled error")
        return error_response(InternalError("Internal server error"))


def create_app(context: AppContext | None = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        context: Application context to serve. Defaults to one built from
            environment settings; tests pass their own.

    Bookmark and auth routes are mounted under ``settings.api_prefix``. Auth
    routes exist only when ``AUTH_ENABLED`` is set.
    """
    if context is None:
        context = AppContext(settings=get_settings())
    settings = context.settings

    setup_logging(settings.log_level)

    app = FastAPI(
        title="ToolVault API",
        description="A bookmark catalog with optional admin-gated editing.",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.context = context

    register_exception_handlers(app)
    app.middleware("http")(catch_unhandled_errors)

    origins = settings.cors_origins
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        # Credentials can't be combined with a wildcard origin
        allow_credentials="*" not in origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health.router)
    app.include_router(bookmarks.router, prefix=settings.api_prefix)
    if settings.auth_enabled:
        app.include_router(auth.router, prefix=settings.api_prefix)

    return app
