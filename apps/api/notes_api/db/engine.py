"""Database engine builder (single source of truth).

- PostgreSQL: pre-ping pooled connections, application_name tagging
- SQLite file: check_same_thread disabled (FastAPI threadpool)
- SQLite in-memory: StaticPool so every session shares one connection
- ENV: DB_POOL_SIZE / DB_MAX_OVERFLOW tune the PostgreSQL pool
"""

import logging
import os
import re
from typing import Any

from sqlalchemy import Engine, create_engine, event
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

logger = logging.getLogger(__name__)


def _mask_password(url: str) -> str:
    """Mask password in database URL for safe logging."""
    return re.sub(r"://([^:]+):([^@]+)@", r"://\1:***@", url)


def is_sqlite_url(url: str) -> bool:
    return url.startswith("sqlite")


def _is_memory_sqlite(url: str) -> bool:
    return url in {"sqlite://", "sqlite:///:memory:"} or "mode=memory" in url


def build_engine(database_url: str) -> Engine:
    """
    Build SQLAlchemy Engine.

    Args:
        database_url: SQLAlchemy URL

    Returns:
        Configured Engine

    Raises:
        ValueError: If database_url is empty
    """
    if not database_url:
        raise ValueError("database_url is required to build an engine.")

    if is_sqlite_url(database_url):
        kwargs: dict[str, Any] = {"connect_args": {"check_same_thread": False}}
        if _is_memory_sqlite(database_url):
            kwargs["poolclass"] = StaticPool
        engine = create_engine(database_url, **kwargs)

        @event.listens_for(engine, "connect")
        def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    else:
        engine = create_engine(
            database_url,
            pool_pre_ping=True,
            pool_size=int(os.getenv("DB_POOL_SIZE", "5")),
            max_overflow=int(os.getenv("DB_MAX_OVERFLOW", "10")),
            connect_args={"application_name": os.getenv("DB_APPLICATION_NAME", "notes-api")},
        )

    logger.debug(
        "Database engine created: pool=%s, url=%s",
        engine.pool.__class__.__name__,
        _mask_password(database_url),
    )
    return engine


def build_sessionmaker(engine: Engine) -> sessionmaker[Session]:
    """
    Build SQLAlchemy sessionmaker.

    Args:
        engine: SQLAlchemy Engine instance.

    Returns:
        sessionmaker configured with autoflush=False and expire_on_commit=False.
    """
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)
