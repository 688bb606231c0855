"""
Async engine and per-request session dependency.

One AsyncSession per request: services flush, this dependency commits
once the route returns and rolls back if anything raised.
"""

from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from app.core.config import get_settings
from app.services.cache_service import STALE_VIEWS_FLAG, invalidate_booking_views

settings = get_settings()


def _engine_kwargs(url: str) -> dict:
    if url.startswith("sqlite"):
        return {}
    return {
        "pool_size": settings.DB_POOL_SIZE,
        "max_overflow": settings.DB_MAX_OVERFLOW,
        "pool_timeout": settings.DB_POOL_TIMEOUT,
        "pool_recycle": settings.DB_POOL_RECYCLE,
        "pool_pre_ping": True,
    }


engine = create_async_engine(
    settings.DATABASE_URL,
    echo=settings.DEBUG,
    **_engine_kwargs(settings.DATABASE_URL),
)

AsyncSessionLocal = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def commit_session(session: AsyncSession) -> None:
    """Commit, then drop cached booking views if this transaction wrote bookings."""
    await session.commit()
    if session.info.pop(STALE_VIEWS_FLAG, False):
        await invalidate_booking_views()


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    async with AsyncSessionLocal() as session:
        try:
            yield session
            await commit_session(session)
        except Exception:
            await session.rollback()
            raise
