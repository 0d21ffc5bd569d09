import logging
from collections.abc import AsyncIterator

from sqlalchemy import event
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from punch.core.config import settings
from punch.core.errors import StorageUnavailable

logger = logging.getLogger(__name__)


def _enable_sqlite_foreign_keys(dbapi_connection, _connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys = ON")
    cursor.close()


def create_engine(url: str | None = None) -> AsyncEngine:
    """Create an async engine; SQLite connections get foreign keys enabled."""
    url = url or settings.DATABASE_URL
    if url.startswith("sqlite"):
        engine = create_async_engine(url, echo=False)
        event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
        return engine
    return create_async_engine(
        url, echo=False, pool_pre_ping=True, pool_size=settings.DB_POOL_SIZE
    )


engine = create_engine()
AsyncSessionLocal = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def get_db() -> AsyncIterator[AsyncSession]:
    async with AsyncSessionLocal() as session:
        try:
            yield session
        except OperationalError as exc:
            logger.error("Database unavailable: %s", exc)
            raise StorageUnavailable(str(exc)) from exc
