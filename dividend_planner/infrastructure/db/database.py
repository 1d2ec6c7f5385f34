"""
Database Configuration
SQLAlchemy async engine for saved configurations
(SQLite by default, PostgreSQL via asyncpg)
"""

import os
from typing import AsyncGenerator, Optional

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from dividend_planner.config import settings


class Base(DeclarativeBase):
    """Declarative base for the planner tables"""


def normalize_async_url(url: str) -> str:
    """Point plain PostgreSQL URLs at the asyncpg driver"""
    if url.startswith("postgres://"):
        url = "postgresql://" + url[len("postgres://"):]
    if url.startswith("postgresql://"):
        url = "postgresql+asyncpg://" + url[len("postgresql://"):]
    return url


def build_engine(url: str, echo: bool = False) -> AsyncEngine:
    options = {"echo": echo}
    if not url.startswith("sqlite"):
        # Server databases get a bounded, recycled pool
        options.update(pool_size=5, max_overflow=10, pool_pre_ping=True, pool_recycle=1800)
    return create_async_engine(url, **options)


DATABASE_URL = normalize_async_url(settings.DATABASE_URL)

# Alembic runs with a sync driver; skip the async engine there
ALEMBIC_MODE = os.getenv("ALEMBIC_MODE") == "1"

engine: Optional[AsyncEngine] = None
async_session_factory: Optional[async_sessionmaker] = None

if not ALEMBIC_MODE:
    engine = build_engine(DATABASE_URL, echo=settings.DEBUG)
    async_session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Request-scoped session: commit on success, roll back on error

    Usage:
        db: AsyncSession = Depends(get_db)
    """
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def init_db() -> None:
    """Create missing tables unless migrations own the schema"""
    if not settings.AUTO_CREATE_TABLES:
        return
    from dividend_planner.infrastructure.db import models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def close_db() -> None:
    if engine is not None:
        await engine.dispose()
