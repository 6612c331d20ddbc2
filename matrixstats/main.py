#!/usr/bin/env python3
"""
Matrixstats - Main Entry Point

This is the thin orchestration layer that:
1. Loads configuration
2. Initializes modules
3. Runs the API server

All business logic is in the modules, following black box principles.
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional

import uvicorn
from dotenv import load_dotenv
from fastapi import Depends, FastAPI, Header, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware

from matrixstats import __version__
from matrixstats.config.provider import ConfigProvider, EnvConfigProvider
from matrixstats.logging_config import configure_logging, get_logging_config
from matrixstats.modules.api import (
    HealthResponse,
    LoginRequest,
    LoginResponse,
    StatsPipeline,
    StatsResponse,
    register_exception_handlers,
)
from matrixstats.modules.auth import AuthenticationService, AuthFactory

load_dotenv()

# Configuration provider (centralized config access)
config_provider: ConfigProvider = EnvConfigProvider()
api_config = config_provider.get_api_config()

# Configure logging with health check suppression
configure_logging(api_config.log_level)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifecycle - build the auth stack unless one was injected.
    """
    logger.info("Starting Matrixstats API...")

    if app.state.auth_service is None:
        app.state.auth_service = AuthFactory.build(app.state.config_provider)
        logger.info("Authentication service initialized via factory")

    logger.info("Matrixstats API started successfully")

    yield

    logger.info("Matrixstats API shutdown complete")


def create_app(
    provider: Optional[ConfigProvider] = None,
    auth_service: Optional[AuthenticationService] = None,
) -> FastAPI:
    """
    Create the FastAPI application.

    Args:
        provider: Configuration provider (defaults to the process-wide one)
        auth_service: Pre-built authentication service; built at startup if None

    Returns:
        Configured FastAPI application
    """
    provider = provider or config_provider
    settings = provider.get_api_config()

    app = FastAPI(
        title=settings.service_name,
        description="Matrixstats - authenticated matrix batch statistics",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.config_provider = provider
    app.state.auth_service = auth_service
    app.state.service_name = settings.service_name

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)
    _register_routes(app)
    return app


# Dependency injection helpers
def get_auth_service(request: Request) -> AuthenticationService:
    """Return the authentication service of the running app."""
    auth_service = request.app.state.auth_service
    if auth_service is None:
        raise HTTPException(503, "Service not initialized")
    return auth_service


def _register_routes(app: FastAPI) -> None:
    @app.post("/api/login", response_model=LoginResponse)
    async def login(
        credentials: LoginRequest,
        auth_service: AuthenticationService = Depends(get_auth_service),
    ):
        """
        Exchange credentials for a bearer token.

        Returns:
            200: Token issued
            401: Invalid credentials
        """
        issued = await auth_service.login(credentials.username, credentials.password)
        return LoginResponse(token=issued.token)

    @app.post("/api/stats")
    async def compute_stats(
        request: Request,
        authorization: Optional[str] = Header(None, description="Bearer token"),
        auth_service: AuthenticationService = Depends(get_auth_service),
    ):
        """
        Compute statistics over a batch of matrices.

        The body is read raw so that authentication runs before any
        validation of its contents.

        Returns:
            200: Statistics
            400: matrices missing, not a list, or empty
            401: No bearer token
            403: Invalid or expired token
            500: Unexpected failure
        """
        body = await request.body()
        context = await StatsPipeline(auth_service).run(authorization, body)

        response = StatsResponse(
            **context.result.to_response(),
            message="Statistics computed successfully",
        )
        return response.model_dump(by_alias=True)

    @app.get("/health", response_model=HealthResponse)
    async def health_check(request: Request):
        """
        Liveness check. Unauthenticated.

        Returns:
            200: Service is running
        """
        return HealthResponse(
            service=request.app.state.service_name,
            timestamp=datetime.now(timezone.utc).isoformat(),
        )


# Create FastAPI application
app = create_app()


def main() -> None:
    """Run the API server with uvicorn."""
    uvicorn.run(
        "matrixstats.main:app",
        host=api_config.host,
        port=api_config.port,
        log_level=api_config.log_level.lower(),
        reload=api_config.debug,
        log_config=get_logging_config(api_config.log_level),
    )


if __name__ == "__main__":
    main()
