import logging
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker

from config import DATABASE_ECHO, DATABASE_URL
from .models import Base

logger = logging.getLogger(__name__)

async_engine = create_async_engine(DATABASE_URL, echo=DATABASE_ECHO, pool_pre_ping=True)
SessionFactory = async_sessionmaker(async_engine, expire_on_commit=False)

async def create_all_tables():
    """Creates the tables of every mapped model that does not exist yet."""
    async with async_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info(f"Tables ready: {', '.join(sorted(Base.metadata.tables))}")

async def dispose_engine():
    await async_engine.dispose()
    logger.info("Database connections closed.")

async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    One session and one transaction per request.
    Committed when the request succeeds, rolled back if the endpoint raises.
    """
    async with SessionFactory() as session:
        async with session.begin():
            yield session
