import contextlib
import logging
from collections.abc import AsyncIterator

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from wedding_api.config.settings import settings

logger = logging.getLogger(__name__)


def create_engine(url: str) -> AsyncEngine:
    is_sqlite = url.startswith("sqlite")
    return create_async_engine(
        url,
        echo=settings.LOG_DB,
        # Postgres connections can be dropped by the host between requests
        pool_pre_ping=not is_sqlite,
        connect_args={"timeout": 15} if is_sqlite else {},
    )


engine = create_engine(settings.DB_DSN)

async_session_maker = async_sessionmaker(engine, expire_on_commit=False)


@contextlib.asynccontextmanager
async def async_session_manager(
    auto_commit=True, session_overwrite: AsyncSession | None = None
) -> AsyncIterator[AsyncSession]:
    """
    Yield a session that commits on success and rolls back on any error.

    A ``session_overwrite`` is yielded as-is and never committed or rolled back here;
    its owner controls the transaction.
    """
    if session_overwrite is not None:
        yield session_overwrite
        return

    async with async_session_maker() as session:
        try:
            yield session
        except Exception:
            logger.debug("Rolling back session after error")
            await session.rollback()
            raise
        if auto_commit:
            await session.commit()
