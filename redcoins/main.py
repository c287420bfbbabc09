"""
Application entry point.

Creates the FastAPI application and wires together:
- Routers (one per bounded context)
- Error handlers (centralized domain-to-HTTP mapping)
- Security middleware (headers, rate limiting)
- Logging configuration
- Schema bootstrap on startup

No business logic belongs here.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from redcoins.core.config import Settings, get_settings
from redcoins.infrastructure.ledger.schema import (
    bootstrap_schema,
    create_database_if_missing,
)
from redcoins.interfaces.health import router as health_router
from redcoins.interfaces.ledger.dependencies import (
    build_database,
    build_price_quote,
)
from redcoins.interfaces.ledger.router import router as ledger_router
from redcoins.shared.errors.handlers import register_error_handlers
from redcoins.shared.logging import configure_logging
from redcoins.shared.security.headers import SecurityHeadersMiddleware
from redcoins.shared.security.rate_limiting import (
    build_limiter,
    rate_limit_exceeded_handler,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Provision the store on startup and release its pool on shutdown."""
    settings: Settings = app.state.settings
    database = app.state.database

    if settings.bootstrap_schema:
        create_database_if_missing(database.config)
        bootstrap_schema(database)

    yield

    app.state.price_quote.close()
    database.dispose()


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Registers routers, error handlers, and security middleware.
    This is the composition root of the application.

    Args:
        settings: Overrides the process-wide settings. The database and
            the price-quote client are built from these settings.

    Returns:
        A fully configured FastAPI application instance.
    """
    settings = settings or get_settings()
    configure_logging(level=settings.log_level, sql_echo=settings.sql_echo)

    app = FastAPI(
        title=settings.project_name,
        version=settings.version,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.database = build_database(settings)
    app.state.price_quote = build_price_quote(settings)

    # --- Rate Limiting ---
    app.state.limiter = build_limiter(settings.rate_limit_default)
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
    app.add_middleware(SlowAPIMiddleware)

    # --- Security Middleware ---
    app.add_middleware(SecurityHeadersMiddleware)

    # --- Error Handlers ---
    register_error_handlers(app)

    # --- Routers ---
    app.include_router(health_router, prefix="/api/v1")
    app.include_router(ledger_router, prefix="/api/v1")

    return app


app = create_app()
