# database.py
"""Database configuration and session management."""

import logging
from sqlalchemy import create_engine, event, NullPool
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from .config import DATABASE_URL

logger = logging.getLogger(__name__)


def _enable_sqlite_savepoints(engine) -> None:
    # pysqlite defers BEGIN on its own, which breaks SAVEPOINT; let SQLAlchemy emit it.
    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None
        dbapi_connection.execute("PRAGMA foreign_keys=ON")

    @event.listens_for(engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN")


def make_engine(url: str):
    """Create an engine suited to the URL's backend.

    PostgreSQL runs without pooling (one connection per Lambda invocation).
    In-memory SQLite shares a single connection so every session sees the same data.
    """
    if url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if ":memory:" in url or url.rstrip("/") == "sqlite:":
            kwargs["poolclass"] = StaticPool
        sqlite_engine = create_engine(url, **kwargs)
        _enable_sqlite_savepoints(sqlite_engine)
        return sqlite_engine
    return create_engine(url, client_encoding='utf8', poolclass=NullPool)


logger.info("Connecting to database...")

# Create the SQLAlchemy engine
engine = make_engine(DATABASE_URL)

# Create a configured "SessionLocal" class
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Base class for models
Base = declarative_base()
