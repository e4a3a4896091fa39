"""Database connection and session management."""

from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from src.core.config import settings

from .models import Base


class DatabaseSessionManager:
    """
    Manages database connections and sessions.

    Uses SQLAlchemy async engine for non-blocking database operations.
    """

    def __init__(self):
        self._engine: AsyncEngine | None = None
        self._sessionmaker: async_sessionmaker[AsyncSession] | None = None

    def init(self, database_url: str | None = None):
        """
        Initialize the database engine and session factory.

        Args:
            database_url: Optional override for the database URL
        """
        url = database_url or settings.database_url

        # Convert postgres:// to postgresql+asyncpg://
        if url.startswith("postgres://"):
            url = url.replace("postgres://", "postgresql+asyncpg://", 1)
        elif url.startswith("postgresql://"):
            url = url.replace("postgresql://", "postgresql+asyncpg://", 1)
        elif url.startswith("sqlite://"):
            url = url.replace("sqlite://", "sqlite+aiosqlite://", 1)

        engine_kwargs = {"echo": settings.debug}
        if not url.startswith("sqlite"):
            engine_kwargs.update(
                pool_size=settings.db_pool_size,
                max_overflow=settings.db_max_overflow,
                pool_pre_ping=True,
            )

        self.bind(create_async_engine(url, **engine_kwargs))

    def bind(self, engine: AsyncEngine):
        """Use an existing engine, e.g. an in-memory SQLite engine in tests."""
        self._engine = engine
        self._sessionmaker = async_sessionmaker(
            bind=self._engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autocommit=False,
            autoflush=False,
        )

    @property
    def sessionmaker(self) -> async_sessionmaker[AsyncSession]:
        if self._sessionmaker is None:
            raise RuntimeError("Database not initialized. Call init() first.")
        return self._sessionmaker

    async def create_all(self):
        """Create any missing tables."""
        if self._engine is None:
            raise RuntimeError("Database not initialized. Call init() first.")
        async with self._engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def ping(self) -> bool:
        """Check that the database answers a trivial query."""
        if self._engine is None:
            return False
        async with self._engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        return True

    async def close(self):
        """Close the database engine."""
        if self._engine:
            await self._engine.dispose()
        self._engine = None
        self._sessionmaker = None


db_manager = DatabaseSessionManager()
