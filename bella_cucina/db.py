"""
Database connection management.

The engine is built from DATABASE_URL (SQLite by default). SQLite connections
get a busy timeout of DB_TIMEOUT_SECONDS, so a write that cannot obtain the
database lock fails with an OperationalError instead of hanging the request.

Environment variables:
    - DATABASE_URL: SQLAlchemy connection URL
    - DB_TIMEOUT_SECONDS: SQLite busy timeout
"""

from typing import Generator

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, Session

from . import config
from .models import Base


def build_engine(url: str, **kwargs) -> Engine:
    """Create an engine, applying SQLite connection settings when needed."""
    if url.startswith("sqlite"):
        connect_args = kwargs.pop("connect_args", {})
        connect_args.setdefault("check_same_thread", False)
        connect_args.setdefault("timeout", config.DB_TIMEOUT_SECONDS)
        engine = create_engine(url, connect_args=connect_args, **kwargs)

        @event.listens_for(engine, "connect")
        def _enable_foreign_keys(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

        return engine

    return create_engine(url, pool_pre_ping=True, **kwargs)


engine = build_engine(config.DATABASE_URL)

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)


def get_db() -> Generator[Session, None, None]:
    """FastAPI dependency that yields a SQLAlchemy Session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db() -> None:
    """Create all tables that do not exist yet."""
    Base.metadata.create_all(bind=engine)
