"""FastAPI application — main entry point."""

from contextlib import asynccontextmanager
from datetime import timedelta
from typing import Optional

import structlog
from fastapi import FastAPI

from hightribe.config import Settings, get_settings
from hightribe.core.exceptions import register_exception_handlers
from hightribe.core.logging import configure_logging
from hightribe.core.middleware import setup_middleware
from hightribe.core.security import TokenIssuer
from hightribe.infrastructure.database import Database
from hightribe.interfaces.api.auth import router as auth_router
from hightribe.interfaces.api.users import router as users_router

logger = structlog.get_logger(__name__)


def create_app(settings: Optional[Settings] = None, database: Optional[Database] = None) -> FastAPI:
    """Build the application; tests pass their own settings and database."""
    settings = settings or get_settings()
    database = database or Database(settings.DATABASE_URL, pool_pre_ping=True)

    configure_logging(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Starting High Tribe backend...", env=settings.ENVIRONMENT)
        database.init()

        yield

        database.dispose()
        logger.info("High Tribe backend stopped")

    app = FastAPI(
        title="High Tribe",
        description="API Backend — authentication and user management",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.database = database
    app.state.token_issuer = TokenIssuer(
        settings.SECRET_KEY,
        settings.JWT_ALGORITHM,
        login_ttl=timedelta(days=settings.LOGIN_TOKEN_TTL_DAYS),
        account_ttl=timedelta(hours=settings.ACCOUNT_TOKEN_TTL_HOURS),
    )

    setup_middleware(app, settings)
    register_exception_handlers(app)

    app.include_router(auth_router)
    app.include_router(users_router)

    @app.get("/")
    def root():
        return {
            "name": "High Tribe",
            "version": "1.0.0",
            "status": "running",
            "docs": "/docs",
        }

    @app.get("/health")
    def health():
        return {"status": "healthy"}

    return app


app = create_app()
