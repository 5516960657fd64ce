import asyncio
from collections.abc import AsyncGenerator
from typing import Any

from sqlalchemy import event
from sqlalchemy.exc import IntegrityError, OperationalError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

import novels_api.models  # noqa: F401  (registers tables on the metadata)
from novels_api.exceptions import DatabaseError
from novels_api.logging import logger
from novels_api.settings import app_settings


def engine_options(database_url: str) -> dict[str, Any]:
    """
    Build ``create_async_engine`` keyword arguments for a database URL.

    SQLite does not support server-side pool sizing; in-memory SQLite
    databases additionally need a single shared connection, otherwise every
    session would see its own empty database.
    """
    if database_url.startswith("sqlite"):
        options: dict[str, Any] = {
            "connect_args": {"check_same_thread": False}
        }
        if ":memory:" in database_url or database_url.endswith("://"):
            options["poolclass"] = StaticPool
        return options

    return {
        "pool_size": app_settings.DB_POOL_SIZE,
        "max_overflow": app_settings.DB_MAX_OVERFLOW,
        "pool_recycle": app_settings.DB_POOL_RECYCLE,
        "pool_pre_ping": app_settings.DB_POOL_PRE_PING,
    }


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # SQLite ignores ON DELETE SET NULL unless enforcement is switched on
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_engine(database_url: str | None = None) -> AsyncEngine:
    """Create the process-wide async engine for ``database_url``."""
    database_url = database_url or app_settings.DATABASE_URL
    async_engine = create_async_engine(
        database_url,
        echo=app_settings.DB_ECHO,
        **engine_options(database_url),
    )
    if database_url.startswith("sqlite"):
        event.listen(
            async_engine.sync_engine, "connect", _enable_sqlite_foreign_keys
        )
    return async_engine


engine: AsyncEngine = create_engine()
async_session = sessionmaker(
    engine, expire_on_commit=False, class_=AsyncSession
)


async def wait_and_init_db(
    retry_interval: int | None = None,
    max_retries: int | None = None,
) -> None:
    """
    Wait until the database is available and create missing tables.

    Args:
        retry_interval: Time in seconds between retries.
            Defaults to app_settings.DB_INIT_RETRY_INTERVAL
        max_retries: Maximum number of retries before giving up.
            Defaults to app_settings.DB_INIT_MAX_RETRIES

    Raises:
        DatabaseError: If the database is still unreachable after
            ``max_retries`` attempts.
    """
    if retry_interval is None:
        retry_interval = app_settings.DB_INIT_RETRY_INTERVAL
    if max_retries is None:
        max_retries = app_settings.DB_INIT_MAX_RETRIES
    for attempt in range(max_retries):
        try:
            async with engine.begin() as conn:
                await conn.exec_driver_sql("SELECT 1")
                await conn.run_sync(SQLModel.metadata.create_all)
            logger.info("Database is now ready.")
            return
        except (OperationalError, OSError) as ex:
            logger.warning(
                f"Database not ready, retrying in {retry_interval} seconds... (Attempt {attempt + 1}/{max_retries}): {ex}"
            )
            await asyncio.sleep(retry_interval)

    logger.error("Failed to connect to the database after multiple attempts.")
    raise DatabaseError("Database connection could not be established.")


async def close_db() -> None:
    """Release every pooled connection held by the engine."""
    await engine.dispose()
    logger.info("Closed database connection pool")


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Get an asynchronous session from the SQLAlchemy session factory.

    The session is committed once the request handler returns and rolled
    back if it raises.

    Yields:
        AsyncSession: An asynchronous SQLAlchemy session.
    """
    async with async_session() as session:
        try:
            yield session
            await session.commit()
        except IntegrityError as ex:
            await session.rollback()
            logger.error(f"Database integrity error: {ex}")
            raise
        except SQLAlchemyError as ex:
            await session.rollback()
            logger.error(f"Database error: {ex}")
            raise
