"""Main FastAPI application for the Hearing Test API."""

from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import RedirectResponse

from . import __version__
from .api import auth, health, hearing_tests, tenants
from .api.middleware import (
    RequestSizeLimitMiddleware,
    SecurityHeadersMiddleware,
    UnhandledErrorMiddleware,
    register_exception_handlers,
)
from .auth.jwt_auth import JWTTokenManager
from .config import get_config
from .repositories.dependencies import build_memory_container
from .repositories.interfaces import RepositoryContainer
from .utils.logging_config import get_logger

logger = get_logger('main')


def create_app(
    repositories: Optional[RepositoryContainer] = None,
    token_manager: Optional[JWTTokenManager] = None,
) -> FastAPI:
    """
    Build the application around an explicitly constructed store.

    Args:
        repositories: Store to serve; a freshly seeded in-memory store by default
        token_manager: Session token manager; built from configuration by default
    """
    config = get_config()

    app = FastAPI(
        title=config.app.app_name,
        description=config.app.description,
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    app.state.repositories = repositories or build_memory_container()
    app.state.token_manager = token_manager or JWTTokenManager()

    register_exception_handlers(app)

    # Added innermost first
    app.add_middleware(RequestSizeLimitMiddleware, max_request_bytes=config.app.max_request_bytes)
    app.add_middleware(UnhandledErrorMiddleware)
    app.add_middleware(SecurityHeadersMiddleware, include_hsts=config.app.include_hsts)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.app.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type", "Accept", "Origin"],
    )

    app.include_router(auth.router)
    app.include_router(tenants.router)
    app.include_router(hearing_tests.router)
    app.include_router(health.router)

    @app.get("/", include_in_schema=False)
    async def root():
        """Redirect to the interactive API documentation."""
        return RedirectResponse(url="/docs")

    logger.info(f"{config.app.app_name} {__version__} application created")
    return app


app = create_app()
