"""
Database engine & session management.

A ``Database`` is constructed once by the application factory and
initialized explicitly during startup. Route handlers receive a
per-request session through ``hightribe.interfaces.deps.get_db``.
"""

from typing import Any, Generator, Optional

import structlog
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

logger = structlog.get_logger(__name__)

Base = declarative_base()


class Database:
    """Owns the SQLAlchemy engine and session factory for one application."""

    def __init__(self, url: str, **engine_kwargs: Any):
        self.url = url
        self.engine_kwargs = engine_kwargs
        self.engine: Optional[Engine] = None
        self.SessionLocal: Optional[sessionmaker] = None

    @property
    def initialized(self) -> bool:
        return self.engine is not None

    def init(self) -> None:
        """Create the engine, the session factory and any missing tables."""
        if self.initialized:
            return

        # Register models on Base.metadata before create_all
        from hightribe.domain.models.user import User  # noqa: F401

        self.engine = create_engine(self.url, **self.engine_kwargs)
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

        # Dev only, schema migrations are managed outside the service
        Base.metadata.create_all(bind=self.engine)
        logger.info("Database initialized", dialect=self.engine.dialect.name)

    def session(self) -> Generator[Session, None, None]:
        """Yield a session and make sure it is closed afterwards."""
        if not self.initialized:
            raise RuntimeError("Database.init() must be called before opening sessions")

        db = self.SessionLocal()
        try:
            yield db
        finally:
            db.close()

    def dispose(self) -> None:
        if self.engine is not None:
            self.engine.dispose()
            self.engine = None
            self.SessionLocal = None
            logger.info("Database connections disposed")
