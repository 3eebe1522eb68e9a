from collections.abc import AsyncGenerator
from typing import Any

from sqlalchemy import MetaData
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from articles_api.config import Settings, settings

# Predictable constraint and index names across PostgreSQL and SQLite.
NAMING_CONVENTION: dict[str, str] = {
    "ix": "ix_%(column_0_label)s",  # Index
    "uq": "uq_%(table_name)s_%(column_0_name)s",  # Unique constraint
    "ck": "ck_%(table_name)s_%(constraint_name)s",  # Check constraint
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",  # Foreign key
    "pk": "pk_%(table_name)s",  # Primary key
}


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models.

    Base.metadata tracks every model's table; startup and the test suite
    create the schema from it directly.
    """

    metadata = MetaData(naming_convention=NAMING_CONVENTION)


def engine_options(config: Settings) -> dict[str, Any]:
    """Keyword arguments for create_async_engine derived from settings.

    SQLite runs without a server-side pool or statement timeout, so those
    options are only passed for server databases (asyncpg).
    """
    options: dict[str, Any] = {"echo": config.db_echo}
    if config.is_sqlite:
        return options
    options.update(
        pool_size=config.db_pool_size,
        max_overflow=config.db_max_overflow,
        pool_timeout=config.db_pool_timeout,
        pool_recycle=config.db_pool_recycle,
        pool_pre_ping=config.db_pool_pre_ping,
        # asyncpg driver options, passed directly to asyncpg.connect()
        connect_args={"command_timeout": config.db_statement_timeout},
    )
    return options


engine = create_async_engine(settings.database_url, **engine_options(settings))

# expire_on_commit=False keeps loaded articles usable after commit without
# triggering lazy (sync) I/O on attribute access.
async_session = async_sessionmaker(engine, expire_on_commit=False)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency that provides a database session per request.

    Commits on success, rolls back on exception. This is the single place where
    transaction boundaries are managed; services and repositories never call
    commit() or rollback() directly, so each request is one unit of work.
    """
    async with async_session() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def create_tables() -> None:
    """Create any missing tables for the registered models."""
    import articles_api.models  # noqa: F401  registers models with Base.metadata

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def shutdown() -> None:
    """Close all pooled database connections."""
    await engine.dispose()
