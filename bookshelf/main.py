"""
Application entry point.

Creates the FastAPI application and wires together:
- Routers (library, health)
- Error handlers (centralized domain-to-HTTP mapping)
- Security middleware (headers, rate limiting)
- Logging configuration
- MongoDB gateway lifecycle (one client per process)

No business logic belongs here.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from bookshelf.application.library.reconcile_book_references import (
    ReconcileBookReferencesUseCase,
)
from bookshelf.core.config import settings
from bookshelf.infrastructure.library.book_repository import BookRepositoryAdapter
from bookshelf.infrastructure.library.mongo_gateway import MongoGateway
from bookshelf.infrastructure.library.user_repository import UserRepositoryAdapter
from bookshelf.interfaces.health import router as health_router
from bookshelf.interfaces.library.router import router as library_router
from bookshelf.shared.errors.handlers import register_error_handlers
from bookshelf.shared.logging import configure_logging
from bookshelf.shared.security.headers import SecurityHeadersMiddleware
from bookshelf.shared.security.rate_limiting import (
    limiter,
    rate_limit_exceeded_handler,
)

logger = logging.getLogger(__name__)


def reconcile_book_references(gateway: MongoGateway) -> int:
    """Run the dangling book reference repair pass against ``gateway``."""
    use_case = ReconcileBookReferencesUseCase(
        book_repo=BookRepositoryAdapter(gateway),
        user_repo=UserRepositoryAdapter(gateway),
    )
    return use_case.execute()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: open the MongoDB gateway, close it on shutdown.

    Startup fails, and nothing is served, if MONGO_URL is missing or the
    server cannot be reached.
    """
    gateway = MongoGateway.connect(settings)
    try:
        gateway.ensure_indexes()
        if settings.reconcile_on_startup:
            reconcile_book_references(gateway)
        app.state.mongo = gateway
        yield
    finally:
        gateway.close()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Registers routers, error handlers, and security middleware.
    This is the composition root of the application.

    Returns:
        A fully configured FastAPI application instance.
    """
    configure_logging(level=settings.log_level)

    app = FastAPI(
        title=settings.project_name,
        version=settings.version,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        openapi_url="/openapi.json" if settings.debug else None,
        redirect_slashes=False,
        lifespan=lifespan,
    )

    # --- Rate Limiting ---
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
    app.add_middleware(SlowAPIMiddleware)

    # --- Security Middleware ---
    app.add_middleware(SecurityHeadersMiddleware)

    # --- Error Handlers ---
    register_error_handlers(app)

    # --- Routers ---
    app.include_router(health_router)
    app.include_router(library_router)

    return app


app = create_app()
