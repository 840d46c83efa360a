from contextlib import contextmanager
from typing import Callable, Generator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from .schema import create_all

SessionFactory = Callable[[], Session]

MEMORY_PATH = ":memory:"


def get_engine(sqlite_path: str) -> Engine:
    """
    Build a thread-shareable engine for the given SQLite path and ensure the schema exists.

    An in-memory database lives inside a single connection, so it is pinned to a
    StaticPool; otherwise every pooled connection would see an empty database.
    """
    if sqlite_path == MEMORY_PATH:
        engine = create_engine(
            "sqlite://",
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
            future=True,
        )
    else:
        engine = create_engine(
            f"sqlite:///{sqlite_path}",
            connect_args={"check_same_thread": False},
            future=True,
        )
    create_all(engine)
    return engine


def get_session_factory(engine: Engine) -> SessionFactory:
    """The long-lived store handle handed to the app and the CLI."""
    return sessionmaker(bind=engine, autoflush=False, autocommit=False, expire_on_commit=False)


@contextmanager
def session_context(session_factory: SessionFactory) -> Generator[Session, None, None]:
    """
    Context manager for SQLAlchemy sessions.

    Rolls back on any exception and always closes the session. Commits are left
    to the repo functions that write.

    Usage:
        with session_context(factory) as session:
            todos = list_todos(session, params)
    """
    session = session_factory()
    try:
        yield session
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
