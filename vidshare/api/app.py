"""
FastAPI application for Vidshare.

Accounts, login, and video metadata with private/public visibility.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from vidshare.api import users, videos
from vidshare.auth import routes as auth_routes
from vidshare.auth.passwords import CredentialHasher
from vidshare.auth.tokens import TokenConfig, TokenService
from vidshare.config import Settings, configure_logging, get_settings
from vidshare.core.errors import InternalError, ValidationError, VidshareError
from vidshare.integrations.sentry import capture_exception, init_sentry
from vidshare.services import AccountService, VideoService
from vidshare.storage import StorageProvider, create_local_storage

logger = logging.getLogger(__name__)


# =============================================================================
# Error Handlers
# =============================================================================


async def handle_app_error(request: Request, exc: VidshareError) -> JSONResponse:
    if exc.status_code >= 500:
        capture_exception(exc)
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def handle_request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Body/query problems are reported like any other ValidationError."""
    errors = [
        {"field": ".".join(str(p) for p in err.get("loc", ()) if p != "body"), "msg": err.get("msg", "")}
        for err in exc.errors()
    ]
    return await handle_app_error(request, ValidationError(errors=errors))


async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return await handle_app_error(request, InternalError())


# =============================================================================
# App Factory
# =============================================================================


def create_app(
    settings: Settings | None = None,
    storage: StorageProvider | None = None,
    tokens: TokenService | None = None,
) -> FastAPI:
    """
    Build the API.

    Services are wired here so tests can pass their own storage or
    token service; startup refuses to proceed without a signing secret.
    """
    settings = settings or get_settings()
    storage = storage or create_local_storage()
    tokens = tokens or TokenService(TokenConfig.from_settings(settings))

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        configure_logging(settings)
        tokens.config.ensure_configured()

        if init_sentry(settings):
            logger.info("Sentry error tracking enabled")

        logger.info("Vidshare API starting in %s mode", settings.environment)
        yield
        logger.info("Vidshare API shutting down")

    app = FastAPI(
        title="Vidshare API",
        description="Accounts, authentication and video metadata",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.state.storage = storage
    app.state.tokens = tokens
    app.state.accounts = AccountService(storage, tokens, CredentialHasher(settings.bcrypt_rounds))
    app.state.videos = VideoService(storage)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(VidshareError, handle_app_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation)
    app.add_exception_handler(Exception, handle_unexpected)

    app.include_router(auth_routes.router)
    app.include_router(users.router)
    app.include_router(videos.router)

    @app.get("/health", tags=["meta"])
    async def health():
        return {"status": "ok"}

    return app


app = create_app()
