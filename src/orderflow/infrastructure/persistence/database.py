"""SQLAlchemy engine and session factory setup."""

from __future__ import annotations

from sqlalchemy import Engine, create_engine, event
from sqlalchemy.orm import DeclarativeBase, sessionmaker


class Base(DeclarativeBase):
    """Base class for declarative ORM models."""


def create_database_engine(database_url: str, **kwargs) -> Engine:
    engine = create_engine(database_url, **kwargs)

    if engine.dialect.name == "sqlite":
        # SQLite ignores ON DELETE CASCADE unless foreign keys are switched on.
        @event.listens_for(engine, "connect")
        def _enable_foreign_keys(dbapi_connection, _record) -> None:
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return engine


def create_session_factory(engine: Engine) -> sessionmaker:
    """Create a configured "Session" class bound to *engine*."""
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


def init_schema(engine: Engine) -> None:
    """Create database tables if they don't exist."""
    # Importing the models registers them on Base.metadata.
    from orderflow.infrastructure.persistence import models  # noqa: F401

    Base.metadata.create_all(bind=engine)
