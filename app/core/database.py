"""
Database handle: one explicitly owned async engine and session factory per application
"""

import ssl
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Dict, Optional

from sqlalchemy import event, text
from sqlalchemy.exc import DBAPIError, DisconnectionError, OperationalError
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from app.core.config import Settings
from app.core.logging import log


# Only used while waiting for the database at startup
db_retry = retry(
    stop=stop_after_attempt(5),
    wait=wait_exponential(multiplier=1, min=1, max=10),
    reraise=True,
    retry=retry_if_exception_type((OperationalError, DisconnectionError, DBAPIError, OSError)),
)


def _ssl_context(ssl_mode: str) -> Any:
    """Map a libpq-style sslmode onto what asyncpg accepts"""
    if ssl_mode in ("", "disable"):
        return False
    if ssl_mode in ("allow", "prefer", "require"):
        context = ssl.create_default_context()
        context.check_hostname = False
        context.verify_mode = ssl.CERT_NONE
        return context
    # verify-ca / verify-full
    return ssl.create_default_context()


class DatabaseConfig:
    """Engine configuration derived from settings"""

    def __init__(self, settings: Settings, url: Optional[str] = None):
        self.database_url = url or settings.database_url
        self.ssl_mode = settings.db_ssl_mode
        self.pool_size = settings.db_pool_size
        self.max_overflow = settings.db_max_overflow
        self.pool_pre_ping = settings.db_pool_pre_ping
        self.echo = settings.db_echo
        self.application_name = settings.SERVICE_NAME

        # Advanced pool settings
        self.pool_recycle = 3600  # Recycle connections after 1 hour
        self.pool_timeout = 30  # Pool timeout in seconds

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")

    @property
    def engine_kwargs(self) -> Dict[str, Any]:
        """Get async engine configuration"""
        if self.is_sqlite:
            # A single shared connection keeps in-memory databases alive
            return {
                "echo": self.echo,
                "poolclass": StaticPool,
                "connect_args": {"check_same_thread": False},
            }

        return {
            "echo": self.echo,
            "pool_pre_ping": self.pool_pre_ping,
            "pool_size": self.pool_size,
            "max_overflow": self.max_overflow,
            "pool_recycle": self.pool_recycle,
            "pool_timeout": self.pool_timeout,
            "connect_args": {
                "ssl": _ssl_context(self.ssl_mode),
                "server_settings": {"application_name": self.application_name, "jit": "off"},
            },
        }


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    """SQLite leaves foreign keys off unless asked per connection"""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Database:
    """Owns the connection pool; constructed at startup and passed to whoever needs sessions"""

    def __init__(self, settings: Settings, url: Optional[str] = None):
        self.config = DatabaseConfig(settings, url=url)
        self.engine: AsyncEngine = create_async_engine(self.config.database_url, **self.config.engine_kwargs)
        self._sessionmaker = async_sessionmaker(
            bind=self.engine,
            class_=AsyncSession,
            autoflush=False,
            expire_on_commit=False,
        )

        if self.config.is_sqlite:
            event.listen(self.engine.sync_engine, "connect", _enable_sqlite_foreign_keys)

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Request-scoped session, rolled back on error and always closed"""
        async with self._sessionmaker() as session:
            try:
                yield session
            except Exception as e:
                await session.rollback()
                log.debug("Database session rolled back", error=str(e))
                raise

    async def init_models(self):
        """Create tables directly from the models (local runs and tests; production uses Alembic)"""
        # Register table models on the metadata
        import app.models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(SQLModel.metadata.create_all)
        log.info("Database tables created")

    async def ping(self) -> bool:
        """Round trip to the database"""
        async with self.engine.connect() as conn:
            result = await conn.execute(text("SELECT 1"))
            return result.scalar() == 1

    @db_retry
    async def wait_until_ready(self) -> bool:
        """Block startup until the database answers"""
        ok = await self.ping()
        log.info("Database connection established successfully")
        return ok

    async def dispose(self):
        """Close all pooled connections"""
        await self.engine.dispose()
        log.info("Database connection closed")
