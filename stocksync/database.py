# stocksync/database.py

from typing import Tuple

from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.orm import declarative_base

Base = declarative_base()


def create_engine_and_sessionmaker(database_url: str, **engine_kwargs) -> Tuple[AsyncEngine, async_sessionmaker]:
    """Build an async engine and a session factory bound to it."""
    if database_url.startswith('postgresql+asyncpg://'):
        engine_kwargs.setdefault('pool_size', 10)
        engine_kwargs.setdefault('max_overflow', 20)
        engine_kwargs.setdefault('pool_timeout', 30)
        engine_kwargs.setdefault('pool_recycle', 1800)

    engine = create_async_engine(database_url, echo=False, future=True, **engine_kwargs)
    session_factory = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False
    )
    return engine, session_factory


async def create_all(engine: AsyncEngine) -> None:
    """Create all tables registered on Base"""
    # Import models so they are registered with Base
    from stocksync.models import product, credential  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
