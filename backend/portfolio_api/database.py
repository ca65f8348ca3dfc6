# backend/portfolio_api/database.py
"""
Engine, session factory and database health check.

SQLite (tests, local demo) runs on one shared connection with foreign keys
switched on; PostgreSQL gets a QueuePool sized from settings:

- DB_POOL_SIZE / DB_POOL_MAX_OVERFLOW: steady and burst connections
- DB_POOL_RECYCLE: seconds before a connection is replaced
- DB_POOL_PRE_PING: test connections before handing them out
"""

import logging
import time
from collections.abc import Generator
from typing import Any

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool, QueuePool

from .config import settings

logger = logging.getLogger(__name__)

POOL_TIMEOUT_SECONDS = 30


def enable_sqlite_foreign_keys(dbapi_connection: Any, connection_record: Any) -> None:
    """`connect` listener: SQLite ignores FOREIGN KEY clauses unless asked."""
    cursor = dbapi_connection.cursor()
    try:
        cursor.execute("PRAGMA foreign_keys=ON")
    finally:
        cursor.close()


def _sqlite_engine(url: str) -> Engine:
    # One connection shared by every session, so :memory: data is visible
    # from the threadpool FastAPI runs sync routes in.
    sqlite_engine = create_engine(
        url,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
        echo=settings.debug,
    )
    event.listen(sqlite_engine, "connect", enable_sqlite_foreign_keys)
    return sqlite_engine


def _postgres_engine(url: str) -> Engine:
    logger.info(
        f"PostgreSQL pool: size={settings.db_pool_size} "
        f"overflow={settings.db_pool_max_overflow} "
        f"recycle={settings.db_pool_recycle}s pre_ping={settings.db_pool_pre_ping}"
    )
    return create_engine(
        url,
        poolclass=QueuePool,
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_pool_max_overflow,
        pool_recycle=settings.db_pool_recycle,
        pool_pre_ping=settings.db_pool_pre_ping,
        pool_timeout=POOL_TIMEOUT_SECONDS,
        echo=settings.debug,
    )


def _create_engine() -> Engine:
    if settings.is_sqlite:
        logger.info("Using SQLite database")
        return _sqlite_engine(settings.database_url)
    return _postgres_engine(settings.database_url)


engine = _create_engine()
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator[Session, None, None]:
    """FastAPI dependency: one session per request, closed afterwards."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def check_database_health() -> dict:
    """
    Run a trivial query against the engine.

    Returns:
        {"status": "healthy", "database": ..., "latency_ms": ...} or
        {"status": "unhealthy", "error": ...}
    """
    started = time.perf_counter()
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.error(f"Database health check failed: {e}")
        return {"status": "unhealthy", "error": str(e)}

    return {
        "status": "healthy",
        "database": settings.database_backend,
        "latency_ms": round((time.perf_counter() - started) * 1000, 2),
    }
