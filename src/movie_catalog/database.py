"""Async engine and per-request sessions for the movie store."""

import logging
from collections.abc import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from movie_catalog.config import get_settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Declarative base for the catalog tables."""


settings = get_settings()

engine = create_async_engine(
    settings.database_url,
    echo=settings.debug,
    pool_pre_ping=True,
)

# Returned movies are serialized after commit
session_factory = async_sessionmaker(engine, expire_on_commit=False)


async def get_db() -> AsyncGenerator[AsyncSession]:
    """Provide one session per request.

    The request's changes are committed when the handler returns and rolled
    back when it raises, so a failed write never leaves a partial movie.
    """
    async with session_factory() as session:
        try:
            yield session
        except Exception as e:
            logger.debug("Rolling back session after %s", type(e).__name__)
            await session.rollback()
            raise
        await session.commit()
