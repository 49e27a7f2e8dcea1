"""SQLAlchemy engine and request-scoped sessions for the study store."""

from collections.abc import Generator
from typing import Annotated, Any

from fastapi import Depends
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import StaticPool

from studytext.config import Settings, get_settings


class Base(DeclarativeBase):
    """Declarative base for annotation and study document tables."""


_engine: Engine | None = None
_sessions: sessionmaker[Session] | None = None


def _engine_options(url: str) -> dict[str, Any]:
    if url.startswith("sqlite"):
        # A single shared connection keeps in-memory databases alive across requests
        return {"connect_args": {"check_same_thread": False}, "poolclass": StaticPool}
    return {"pool_size": 10, "max_overflow": 20, "pool_pre_ping": True, "pool_recycle": 3600}


def initialize_database(settings: Settings) -> Engine:
    """Build the engine and session factory. Safe to call more than once."""
    global _engine, _sessions  # noqa: PLW0603

    if _engine is None:
        _engine = create_engine(settings.DATABASE_URL, **_engine_options(settings.DATABASE_URL))
        _sessions = sessionmaker(bind=_engine, autoflush=False)
    return _engine


def create_tables() -> None:
    """Create the annotation and study document tables if missing."""
    from studytext import models  # noqa: F401

    if _engine is None:
        raise RuntimeError("Database not initialized. Call initialize_database() first.")
    Base.metadata.create_all(bind=_engine)


def dispose_engine() -> None:
    global _engine, _sessions  # noqa: PLW0603
    if _engine is not None:
        _engine.dispose()
    _engine = None
    _sessions = None


def get_db(settings: Annotated[Settings, Depends(get_settings)]) -> Generator[Session, None, None]:
    """Yield a session for one request, opening the database lazily."""
    initialize_database(settings)
    if _sessions is None:
        raise RuntimeError("Failed to initialize database session factory.")

    with _sessions() as db:
        yield db


DatabaseSession = Annotated[Session, Depends(get_db)]
