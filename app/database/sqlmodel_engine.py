"""
SQLModel database engine and session management.

This module provides SQLAlchemy/SQLModel engine initialization, connection
pooling and async session management for the PostgreSQL carrier store.
"""

import asyncio
from typing import Optional, AsyncGenerator, Dict, Any
from contextlib import asynccontextmanager
import structlog
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, AsyncEngine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.sql import text
from sqlmodel import SQLModel

from app.core.config import Settings

logger = structlog.get_logger(__name__)


class SQLModelDatabaseManager:
    """
    SQLModel database manager with async session support.
    
    The engine is created on the first successful ``initialize`` call and
    reused afterwards. A failed attempt is not cached, so the next request
    tries to connect again.
    """
    
    def __init__(self, settings: Settings):
        self.settings = settings
        self.engine: Optional[AsyncEngine] = None
        self.async_session_factory: Optional[sessionmaker] = None
        self._initialized = False
        self._lock = asyncio.Lock()
        self._pending: Optional[asyncio.Future] = None
        
    @property
    def is_initialized(self) -> bool:
        """Check if SQLModel manager is initialized."""
        return self._initialized and self.engine is not None
    
    def _build_database_url(self) -> str:
        """
        Build SQLAlchemy async database URL from settings.
        
        Converts PostgreSQL URL to SQLAlchemy async format. Raises
        ConfigurationError when no connection string is configured.
        """
        url = str(self.settings.get_postgres_url())
        if url.startswith("postgresql://"):
            return url.replace("postgresql://", "postgresql+asyncpg://", 1)
        elif url.startswith("postgres://"):
            return url.replace("postgres://", "postgresql+asyncpg://", 1)
        return url
    
    async def initialize(self) -> None:
        """
        Initialize SQLModel engine and session factory.
        
        Connectivity is verified with ``SELECT 1`` bounded by
        ``DATABASE_CONNECT_TIMEOUT``. Concurrent callers await the same
        in-flight attempt and all receive its outcome.
        """
        if self.is_initialized:
            return
        
        async with self._lock:
            if self.is_initialized:
                return
            if self._pending is None or self._pending.done():
                self._pending = asyncio.ensure_future(self._connect())
            pending = self._pending
        
        try:
            await asyncio.shield(pending)
        finally:
            if pending.done() and self._pending is pending:
                self._pending = None
    
    async def _connect(self) -> None:
        database_url = self._build_database_url()
        timeout = self.settings.DATABASE_CONNECT_TIMEOUT
        
        engine = create_async_engine(
            database_url,
            pool_size=10,
            max_overflow=20,
            pool_timeout=timeout,
            pool_recycle=3600,
            pool_pre_ping=True,
            echo=False,
            future=True,
            connect_args={
                "timeout": timeout,
                "server_settings": {
                    "application_name": "lanelist",
                }
            }
        )
        
        try:
            await asyncio.wait_for(self._ping(engine), timeout=timeout)
        except Exception as e:
            await engine.dispose()
            logger.error("Failed to connect to carrier store", error=str(e))
            raise
        
        self.engine = engine
        self.async_session_factory = sessionmaker(
            bind=self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=True,
            autocommit=False
        )
        self._initialized = True
        logger.info(
            "SQLModel database manager initialized successfully",
            database_url=database_url.split("@")[-1]  # Hide credentials
        )
    
    @staticmethod
    async def _ping(engine: AsyncEngine) -> None:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    
    async def create_tables(self) -> None:
        """
        Create all SQLModel tables.
        
        This is used for development, seeding and testing. In production,
        use Alembic migrations instead.
        """
        if not self.engine:
            raise RuntimeError("Database manager not initialized")
        
        # Import models so they register on the metadata
        from app.infrastructure.persistence.models.carrier_table import CarrierTable  # noqa: F401
        
        async with self.engine.begin() as conn:
            await conn.run_sync(SQLModel.metadata.create_all)
        
        logger.info("SQLModel tables created successfully")
    
    @asynccontextmanager
    async def get_session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Get async database session with automatic commit and cleanup.
        
        Usage:
            async with db_manager.get_session() as session:
                result = await session.execute(select(CarrierTable))
        """
        if not self.async_session_factory:
            raise RuntimeError("Database manager not initialized")
        
        session = self.async_session_factory()
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()
    
    async def check_health(self) -> Dict[str, Any]:
        """
        Perform health check on the database connection.
        
        Returns health status information for monitoring.
        """
        if not self.engine:
            return {
                "status": "unhealthy",
                "error": "Database manager not initialized"
            }
        
        try:
            await asyncio.wait_for(
                self._ping(self.engine),
                timeout=self.settings.DATABASE_CONNECT_TIMEOUT,
            )
            pool = self.engine.pool
            return {
                "status": "healthy",
                "pool_size": pool.size(),
                "checked_out": pool.checkedout(),
            }
        except Exception as e:
            logger.error("SQLModel database health check failed", error=str(e))
            return {
                "status": "unhealthy",
                "error": str(e)
            }
    
    async def close(self) -> None:
        """
        Shutdown SQLModel database manager and close connections.
        """
        if self.engine:
            try:
                await self.engine.dispose()
                logger.info("SQLModel database manager shut down successfully")
            except Exception as e:
                logger.error("Error during SQLModel database shutdown", error=str(e))
            finally:
                self.engine = None
                self.async_session_factory = None
                self._initialized = False

