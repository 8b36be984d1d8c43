"""Auth Dispatch Service

Main FastAPI application entry point.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from auth_dispatch.api.routes import login
from auth_dispatch.config.settings import DEFAULT_JWT_SECRET, Settings, get_settings
from auth_dispatch.core.auth import EmailPasswordLogin, LoginDispatcher, LoginHandlerBuilder
from auth_dispatch.core.auth.email_password import UserLoginDataLookup
from auth_dispatch.infrastructure.auth.credential_store import RedisCredentialStore
from auth_dispatch.infrastructure.redis.client import close_redis_client, get_redis_client

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


def build_login_dispatcher(
    settings: Settings, get_user_login_data: UserLoginDataLookup
) -> LoginDispatcher:
    """Compose the login providers enabled for this deployment.

    Args:
        settings: Application settings
        get_user_login_data: Credential lookup for the email/password provider

    Returns:
        LoginDispatcher routing to the configured providers
    """
    if settings.jwt_private_key_path is None and settings.jwt_secret_key == DEFAULT_JWT_SECRET:
        logger.warning(
            "Using default JWT_SECRET_KEY! "
            "Set JWT_SECRET_KEY environment variable in production!"
        )

    return (
        LoginHandlerBuilder.new()
        .add_provider(
            settings.login_provider_name,
            EmailPasswordLogin,
            {
                "secret_or_private_key": settings.signing_key,
                "expires_in": settings.token_expires_in,
                "algorithm": settings.jwt_algorithm,
                "get_user_login_data": get_user_login_data,
            },
        )
        .build()
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events"""
    settings = get_settings()

    # Startup
    logger.info(f"Starting {settings.service_name} v{settings.service_version}")
    logger.info(f"Environment: {settings.environment}")

    connected_redis = False
    if getattr(app.state, "login_dispatcher", None) is None:
        try:
            redis_client = await get_redis_client()
            connected_redis = True
            logger.info("Redis connection established")
        except Exception as e:
            logger.error(f"Failed to connect to Redis: {e}")
            raise

        store = RedisCredentialStore(redis_client.get_client())
        app.state.login_dispatcher = build_login_dispatcher(settings, store.get_user_login_data)

    logger.info(f"Login providers: {', '.join(app.state.login_dispatcher.provider_names)}")

    yield

    # Shutdown
    logger.info("Shutting down Auth Dispatch Service")
    if connected_redis:
        await close_redis_client()
        logger.info("Redis connection closed")


def create_app(dispatcher: Optional[LoginDispatcher] = None) -> FastAPI:
    """Create the FastAPI application.

    Args:
        dispatcher: Prebuilt login dispatcher. When omitted, one is built at
            startup from settings with the Redis credential store.

    Returns:
        Configured FastAPI application
    """
    settings = get_settings()
    app = FastAPI(
        title="Auth Dispatch Service",
        version=settings.service_version,
        description="Pluggable login provider dispatch",
        lifespan=lifespan
    )
    app.state.login_dispatcher = dispatcher

    # CORS configuration
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    @app.get("/health")
    async def root_health_check():
        """Root health check endpoint"""
        current = app.state.login_dispatcher
        return {
            "status": "healthy",
            "service": settings.service_name,
            "version": settings.service_version,
            "environment": settings.environment,
            "providers": list(current.provider_names) if current else [],
        }

    @app.get("/")
    async def root():
        """Root endpoint with service information"""
        return {
            "service": settings.service_name,
            "version": settings.service_version,
            "description": "Auth Dispatch Service",
            "docs": "/docs",
            "health": "/health"
        }

    app.include_router(login.router, tags=["authentication"])

    # Provider failures outside the login outcomes end up here
    @app.exception_handler(Exception)
    async def global_exception_handler(request, exc):
        """Global exception handler for unhandled errors"""
        logger.error(f"Unhandled exception: {exc}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content={
                "error": "internal_server_error",
                "message": "An unexpected error occurred. Please try again later."
            }
        )

    return app


configure_logging(get_settings())
app = create_app()


if __name__ == "__main__":
    import uvicorn
    settings = get_settings()
    uvicorn.run(
        "auth_dispatch.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level.lower()
    )
