"""Async SQLAlchemy engine and session helpers."""

from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlmodel import SQLModel

from volleyleague.config import settings
from volleyleague.utils.db_url import prepare_asyncpg_connection

DATABASE_URL, CONNECT_ARGS = prepare_asyncpg_connection(settings.database_url)

# SQL statement logging goes through the "sqlalchemy.engine" logger; see logging_config.
engine = create_async_engine(
    DATABASE_URL,
    pool_pre_ping=True,
    connect_args=CONNECT_ARGS,
)
SessionLocal = async_sessionmaker(bind=engine, expire_on_commit=False, class_=AsyncSession)


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """Yield an async database session."""
    async with SessionLocal() as session:
        yield session


def import_all_tables() -> None:
    """Import every table module so SQLModel.metadata is complete."""
    from volleyleague.schemas import (  # noqa: F401
        game_days,
        newsletters,
        seasons,
        teams,
        users,
    )


async def init_db() -> None:
    """Create any missing tables (dev only; migrations own the schema elsewhere)."""
    import_all_tables()

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)


async def dispose_engine() -> None:
    """Dispose of the async engine and its connection pool."""
    await engine.dispose()
