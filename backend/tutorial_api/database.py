"""Database engine and helpers.

This module configures the SQLModel/SQLAlchemy engine from
`settings.DATABASE_URL` and provides small helpers used by the
application and tests. By default the database is a local SQLite file
at the backend root as `app.db`.
"""

import logging
from sqlalchemy import event
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, create_engine, Session
from .config import settings, IN_MEMORY_URLS

logger = logging.getLogger("app.db")


def _enable_case_sensitive_like(dbapi_connection, connection_record):
    # SQLite LIKE ignores ASCII case unless this pragma is set per connection
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA case_sensitive_like = ON")
    cursor.close()


def make_engine(url: str, echo: bool = False):
    """Create an engine for `url`.

    SQLite connections are shared across threads (FastAPI runs sync
    routes in a threadpool), in-memory databases are pinned to a single
    connection so every session sees the same data, and `LIKE` is made
    case-sensitive.
    """
    kwargs = {}
    if url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        if url in IN_MEMORY_URLS:
            kwargs["poolclass"] = StaticPool
    eng = create_engine(url, echo=echo, **kwargs)
    if eng.dialect.name == "sqlite":
        event.listen(eng, "connect", _enable_case_sensitive_like)
    return eng


engine = make_engine(settings.DATABASE_URL, echo=settings.DB_ECHO)


def create_db_and_tables(target=None):
    """Create database tables using SQLModel metadata.

    This function is intended for local development and lightweight
    scripts; production deployments should rely on a proper migration
    tool (alembic) instead.
    """
    target = target or engine
    SQLModel.metadata.create_all(target)
    logger.info("tables ready on %s", target.url.render_as_string(hide_password=True))


def get_session():
    """Yield a database `Session` for FastAPI dependency injection.

    The generator yields a session and ensures it is closed when the
    request scope finishes.
    """
    with Session(engine) as session:
        yield session
