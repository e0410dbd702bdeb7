from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel

from shipstats.config import settings

# The database only backs the per-day stats cache, so it is optional.
# With no DATABASE_URL there is no engine and no session maker.
engine: AsyncEngine | None = None
async_session_maker = None

if settings.database_url:
    # Day-cache reads and writes fan out per day, each on its own session
    engine = create_async_engine(
        settings.database_url,
        echo=False,
        future=True,
        pool_size=10,
        max_overflow=20,
        pool_pre_ping=True,  # Detects stale connections before use
        pool_recycle=300,
        pool_timeout=30,
        connect_args={
            "statement_cache_size": 0,
            "prepared_statement_cache_size": 0,
            "command_timeout": 60,  # Query timeout in seconds (prevents hung queries)
        },
    )

    async_session_maker = sessionmaker(  # type: ignore[call-overload]
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False,
    )


async def init_db() -> None:
    """Create all tables (for development only - use Alembic in production)."""
    if engine is None:
        return
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)


async def close_db() -> None:
    """Dispose of the engine's connection pool on shutdown."""
    if engine is not None:
        await engine.dispose()
