"""Database engine and helpers.

The engine is built from the configured `DATABASE_URL` by the app factory
and stored on `app.state`; request handlers obtain a `Session` through
the `get_session` dependency instead of importing a global engine.
"""

from fastapi import Request
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, create_engine, Session

from . import models  # noqa: F401  registers tables on SQLModel.metadata


def make_engine(url: str) -> Engine:
    """Create an engine for `url`.

    SQLite needs `check_same_thread=False` because FastAPI runs sync
    handlers in a threadpool. An in-memory SQLite URL additionally uses a
    single shared connection, otherwise every connection would see its
    own empty database.
    """
    if not url.startswith("sqlite"):
        return create_engine(url, echo=False, pool_pre_ping=True)
    kwargs = {"connect_args": {"check_same_thread": False}}
    if url in ("sqlite://", "sqlite:///:memory:"):
        kwargs["poolclass"] = StaticPool
    return create_engine(url, echo=False, **kwargs)


def create_db_and_tables(engine: Engine):
    """Create missing tables using SQLModel metadata.

    Only creates what does not exist yet; schema changes are not migrated.
    """
    SQLModel.metadata.create_all(engine)


def get_session(request: Request):
    """Yield a database `Session` bound to the application's engine.

    The generator yields a session and ensures it is closed when the
    request scope finishes.
    """
    with Session(request.app.state.engine) as session:
        yield session
