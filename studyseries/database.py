"""SQLAlchemy engine, session factory and the request-scoped session dependency."""

from collections.abc import Generator
from typing import Annotated, Any

from fastapi import Depends
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import StaticPool

from studyseries.config import Settings, get_settings


class Base(DeclarativeBase):
    """Declarative base shared by the study tables and the item catalogs."""


# Created once per process by initialize_database()
_engine: Engine | None = None
_session_factory: sessionmaker[Session] | None = None


def _engine_options(database_url: str) -> dict[str, Any]:
    if database_url.startswith("sqlite"):
        # One shared connection, so in-memory databases survive across sessions
        return {"connect_args": {"check_same_thread": False}, "poolclass": StaticPool}
    return {"pool_size": 10, "max_overflow": 20, "pool_pre_ping": True, "pool_recycle": 3600}


def initialize_database(settings: Settings) -> None:
    """Create the engine and session factory for ``settings.DATABASE_URL``."""
    global _engine, _session_factory  # noqa: PLW0603

    _engine = create_engine(settings.DATABASE_URL, **_engine_options(settings.DATABASE_URL))
    _session_factory = sessionmaker(autocommit=False, autoflush=False, bind=_engine)


def dispose_engine() -> None:
    """Release pooled connections; the next request initializes again."""
    global _engine, _session_factory  # noqa: PLW0603
    if _engine is None:
        return
    _engine.dispose()
    _engine = None
    _session_factory = None


def get_session_factory(
    settings: Annotated[Settings, Depends(get_settings)],
) -> sessionmaker[Session]:
    if _session_factory is None:
        initialize_database(settings)
    if _session_factory is None:
        raise RuntimeError("Database session factory could not be initialized")
    return _session_factory


def get_db(
    session_factory: Annotated[sessionmaker[Session], Depends(get_session_factory)],
) -> Generator[Session, None, None]:
    """One session per request, closed when the response is sent."""
    with session_factory() as db:
        yield db


DatabaseSession = Annotated[Session, Depends(get_db)]
