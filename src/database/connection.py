"""Database connection and session management."""

import os
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

DATABASE_NAME = "job_tracker"


def get_database_url() -> str:
    """Build the PostgreSQL database URL from environment variables.

    DATABASE_URL takes precedence; otherwise the URL is composed from
    DATABASE_HOST, DATABASE_PORT and APP_DB_PASSWORD.

    :returns: The database connection URL.
    :raises KeyError: If required environment variables are not set.
    """
    url = os.environ.get("DATABASE_URL")
    if url:
        return url

    host = os.environ["DATABASE_HOST"]
    port = os.environ.get("DATABASE_PORT", "5432")
    password = os.environ["APP_DB_PASSWORD"]

    return f"postgresql://app:{password}@{host}:{port}/{DATABASE_NAME}"


def create_db_engine(*, echo: bool = False) -> Engine:
    """Create a SQLAlchemy engine for the database.

    :param echo: If True, log all SQL statements.
    :returns: A configured SQLAlchemy engine.
    """
    return create_engine(get_database_url(), echo=echo, pool_pre_ping=True)


@dataclass
class _DatabaseState:
    """Container for database connection state."""

    engine: Engine | None = field(default=None)
    session_factory: sessionmaker[Session] | None = field(default=None)


_state = _DatabaseState()


def get_engine() -> Engine:
    """Get or create the database engine singleton.

    :returns: The database engine.
    """
    if _state.engine is None:
        _state.engine = create_db_engine()
    return _state.engine


def get_session_factory() -> sessionmaker[Session]:
    """Get or create the session factory singleton.

    Objects stay loaded after commit so the reminder processor can keep using
    the due set (and its joined owner/application rows) across sessions.

    :returns: A sessionmaker bound to the database engine.
    """
    if _state.session_factory is None:
        _state.session_factory = sessionmaker(bind=get_engine(), expire_on_commit=False)
    return _state.session_factory


@contextmanager
def get_session() -> Iterator[Session]:
    """Create a new database session with automatic cleanup.

    Commits on successful completion, rolls back on exception.

    :yields: A database session.
    """
    session = get_session_factory()()
    try:
        yield session
        session.commit()

    except Exception:
        session.rollback()
        raise

    finally:
        session.close()


def dispose_engine() -> None:
    """Close pooled connections and forget the engine and session factory.

    Called when a long-running process (API or scheduler worker) shuts down.
    """
    if _state.engine is not None:
        _state.engine.dispose()
    _state.engine = None
    _state.session_factory = None
