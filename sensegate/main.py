#!/usr/bin/env python3
"""
SenseGate - Main Entry Point

This is the thin orchestration layer that:
1. Loads configuration
2. Builds the session stack (credential cache + upstream client)
3. Exposes the register/login/logout API

All business logic is in the modules, following black box principles.
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Optional

import redis
import uvicorn
from fastapi import Depends, FastAPI, Header, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from sensegate import __version__
from sensegate.config.provider import ConfigProvider, EnvConfigProvider
from sensegate.errors import InvalidArgument, NotAuthenticated, UpstreamError
from sensegate.logging_config import configure_logging, get_logging_config
from sensegate.modules.api import ApiResponse, LoginRequest, RegisterRequest, get_session_service
from sensegate.modules.auth import SessionFactory, SessionService

logger = logging.getLogger(__name__)


async def purge_expired_periodically(service: SessionService, interval: int) -> None:
    """Sweep expired bindings from the cache every `interval` seconds."""
    while True:
        await asyncio.sleep(interval)
        purged = await service.purge_expired()
        if purged:
            logger.info(f"Purged {purged} expired cache entries")


def _failure(status_code: int, message: str, errors: Optional[list] = None) -> JSONResponse:
    body = ApiResponse.failure_response(message, errors)
    return JSONResponse(status_code=status_code, content=jsonable_encoder(body))


def register_exception_handlers(app: FastAPI) -> None:
    """Translate SenseGate errors into ApiResponse envelopes."""

    @app.exception_handler(InvalidArgument)
    async def invalid_argument_handler(request: Request, exc: InvalidArgument):
        logger.warning(f"Invalid argument: {exc}")
        return _failure(400, "Invalid argument.", [str(exc)])

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        errors = [str(error.get("msg")) for error in exc.errors()]
        return _failure(400, "Validation failed", errors)

    @app.exception_handler(NotAuthenticated)
    async def not_authenticated_handler(request: Request, exc: NotAuthenticated):
        return _failure(401, str(exc))

    @app.exception_handler(UpstreamError)
    async def upstream_error_handler(request: Request, exc: UpstreamError):
        logger.error(f"Upstream error ({exc.status_code}): {exc}")
        return _failure(exc.status_code, str(exc))

    @app.exception_handler(redis.ConnectionError)
    async def redis_error_handler(request: Request, exc: redis.ConnectionError):
        logger.error(f"Redis connection error: {exc}")
        return _failure(503, "Credential store unavailable")

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception(f"An unhandled exception occurred: {exc}")
        return _failure(500, "An unexpected error occurred.", [str(exc)])


def create_app(
    config_provider: Optional[ConfigProvider] = None,
    session_service: Optional[SessionService] = None,
) -> FastAPI:
    """
    Build the SenseGate application.

    Args:
        config_provider: Configuration source (environment by default)
        session_service: Pre-built session service; built from configuration at
            startup when omitted

    Returns:
        Configured FastAPI application
    """
    config_provider = config_provider or EnvConfigProvider()
    api_config = config_provider.get_api_config()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Manage application lifecycle - build the session stack and the purge task.
        """
        logger.info("Starting SenseGate API...")

        owns_service = app.state.session_service is None
        if owns_service:
            app.state.session_service = SessionFactory.build(config_provider)
            logger.info("Session service initialized via factory")

        purge_task = None
        interval = config_provider.get_cache_config().purge_interval_seconds
        if interval > 0:
            purge_task = asyncio.create_task(
                purge_expired_periodically(app.state.session_service, interval)
            )

        logger.info("SenseGate API started successfully")

        yield

        logger.info("Shutting down SenseGate API...")
        if purge_task:
            purge_task.cancel()
            try:
                await purge_task
            except asyncio.CancelledError:
                pass
        if owns_service:
            await app.state.session_service.close()
            app.state.session_service = None
        logger.info("SenseGate API shutdown complete")

    app = FastAPI(
        title="SenseGate API",
        description="Authentication broker for the openSenseMap API",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.session_service = session_service

    app.add_middleware(
        CORSMiddleware,
        allow_origins=api_config.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    @app.post("/api/users/register", tags=["users"])
    async def register(request: RegisterRequest, service: SessionService = Depends(get_session_service)):
        """
        Register a new user in openSenseMap.

        Returns:
            200: Upstream registration response
            400: Validation failed
        """
        return await service.register(request.name, request.email, request.password)

    @app.post("/api/users/login", tags=["users"])
    async def login(request: LoginRequest, service: SessionService = Depends(get_session_service)):
        """
        Login user and store authentication token.

        Returns:
            200: Upstream login response (includes the bearer token)
            400: Validation failed
            401: Upstream rejected the credentials
        """
        return await service.login(request.email, request.password)

    @app.post("/api/users/logout", tags=["users"])
    async def logout(
        authorization: Optional[str] = Header(None, description="Bearer token"),
        service: SessionService = Depends(get_session_service),
    ):
        """
        Logout user and clear cached token.

        Returns:
            200: Logout successful
            401: Missing, malformed or unknown bearer token
        """
        result = await service.logout(authorization)
        return ApiResponse.success_response(result, "Logout successful")

    @app.get("/health")
    async def health_check(request: Request):
        """
        Health check endpoint.

        Returns:
            200: Service healthy
            503: Session stack not initialized
        """
        if getattr(request.app.state, "session_service", None) is None:
            return JSONResponse(status_code=503, content={"status": "unhealthy"})
        return {"status": "healthy", "version": __version__}

    return app


def main() -> None:
    """Run the API server with uvicorn."""
    config_provider = EnvConfigProvider()
    api_config = config_provider.get_api_config()
    configure_logging(api_config.log_level)

    uvicorn.run(
        "sensegate.main:create_app",
        factory=True,
        host=api_config.host,
        port=api_config.port,
        log_level=api_config.log_level.lower(),
        log_config=get_logging_config(api_config.log_level),
    )


if __name__ == "__main__":
    main()
