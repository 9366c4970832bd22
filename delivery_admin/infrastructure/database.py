"""Database configuration and session management."""

from __future__ import annotations

from collections.abc import Generator

import logging

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from delivery_admin.config import get_settings


class Base(DeclarativeBase):
    """Base class for SQLAlchemy models."""


settings = get_settings()

logger = logging.getLogger(__name__)


def _build_engine(database_url: str) -> Engine:
    """Create the SQLAlchemy engine for ``database_url``."""

    connect_args: dict[str, object] = {}
    if database_url.startswith("sqlite"):
        # Requests and background sends use sessions from different threads.
        connect_args["check_same_thread"] = False
    return create_engine(database_url, pool_pre_ping=True, connect_args=connect_args)


engine = _build_engine(settings.database_url)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def initialize_database() -> None:
    """Ensure all ORM models have corresponding database tables."""

    from delivery_admin.infrastructure import models  # noqa: F401  # ensure models are imported

    Base.metadata.create_all(bind=engine, checkfirst=True)
    logger.debug("Database tables ensured on %s", engine.url.render_as_string(hide_password=True))


def get_db() -> Generator[Session, None, None]:
    """Yield a database session and close it afterwards."""

    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
