# hospital/db/db_manager.py
"""
Engine and session ownership for the record store.

One DbManager per process, opened in the application lifespan. PostgreSQL
schemas are owned by Alembic; a sqlite file (development, tests) or an
explicit DB_AUTO_CREATE gets its collection tables created in place.
"""

from sqlalchemy.ext.asyncio import (
    create_async_engine,
    async_sessionmaker,
    AsyncSession,
    AsyncEngine,
)
from sqlalchemy import inspect, text
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Any, Optional
import ssl as ssl_module
import time
from common import DatabaseConfig, SslMode, get_app_logger
from .models import DbBaseModel

logger = get_app_logger(__name__)

SUPPORTED_URL_PREFIXES = ("postgresql+asyncpg://", "sqlite+aiosqlite://")


def _ssl_connect_args(config: DatabaseConfig) -> dict[str, Any]:
    """asyncpg `ssl` argument for DB_SSL_MODE / DB_SSL_CA."""
    if config.is_sqlite or config.ssl_mode is None:
        return {}
    if config.ssl_mode is SslMode.DISABLE:
        return {"ssl": False}

    context = ssl_module.create_default_context()
    if config.ssl_ca_path:
        context.load_verify_locations(cafile=str(config.ssl_ca_path))
    if config.ssl_mode is not SslMode.VERIFY_FULL:
        context.check_hostname = False
    if config.ssl_mode is SslMode.REQUIRE:
        # encrypted, certificate not checked
        context.verify_mode = ssl_module.CERT_NONE
    return {"ssl": context}


class DbManager:
    """
    Usage:
        db_manager = DbManager.from_config(config.database)
        await db_manager.verify_connection()
        await db_manager.prepare_schema(auto_create=config.database.auto_create)

        async with db_manager.session() as session:
            store = RecordStore(session)

        await db_manager.dispose()
    """

    def __init__(
        self,
        url: str,
        *,
        pool_size: int = 10,
        max_overflow: int = 20,
        pool_timeout: int = 30,
        pool_recycle: int = 3600,
        echo: bool = False,
        connect_args: Optional[dict[str, Any]] = None,
    ):
        """
        Args:
            url: postgresql+asyncpg:// or sqlite+aiosqlite:// URL
            pool_size, max_overflow, pool_timeout, pool_recycle: PostgreSQL pool
                settings; sqlite uses SQLAlchemy's default pool
            echo: Log every SQL statement
            connect_args: Driver arguments (SSL context for asyncpg)
        """
        if not url.startswith(SUPPORTED_URL_PREFIXES):
            raise ValueError(
                f"Unsupported database URL {url.split('://', 1)[0]}://..., "
                f"expected one of {SUPPORTED_URL_PREFIXES}"
            )
        self.driver = url.split("://", 1)[0]
        self._is_sqlite = url.startswith("sqlite")

        engine_kwargs: dict[str, Any] = {
            "echo": echo,
            "pool_pre_ping": True,
            "connect_args": connect_args or {},
        }
        if not self._is_sqlite:
            engine_kwargs.update(
                pool_size=pool_size,
                max_overflow=max_overflow,
                pool_timeout=pool_timeout,
                pool_recycle=pool_recycle,
            )

        self.engine: AsyncEngine = create_async_engine(url, **engine_kwargs)
        # Records stay readable after the store commits
        self.session_maker = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

        logger.info(
            "DbManager initialized",
            driver=self.driver,
            pool_size=None if self._is_sqlite else pool_size,
        )

    @classmethod
    def from_config(cls, config: DatabaseConfig, **kwargs: Any) -> "DbManager":
        return cls(
            url=config.get_connection_url(include_password=True),
            pool_size=config.pool_size,
            max_overflow=config.max_overflow,
            pool_timeout=config.pool_timeout,
            pool_recycle=config.pool_recycle,
            connect_args={**_ssl_connect_args(config), **kwargs.pop("connect_args", {})},
            **kwargs,
        )

    @property
    def is_sqlite(self) -> bool:
        return self._is_sqlite

    async def verify_connection(self) -> None:
        """
        Raises:
            ConnectionError: The record store cannot be reached
        """
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except Exception as e:
            logger.error("❌ Database connection failed", driver=self.driver, error=str(e))
            raise ConnectionError(f"Failed to connect to database: {e}") from e
        logger.info("✓ Database connection verified", driver=self.driver)

    async def prepare_schema(self, auto_create: bool = False) -> None:
        """Create the collection tables, or require Alembic to have done it."""
        if self._is_sqlite or auto_create:
            await self.create_all()
        else:
            await self.verify_migrations_current()

    async def verify_migrations_current(self) -> str:
        """
        Returns:
            The stamped Alembic revision

        Raises:
            RuntimeError: The database was never migrated
        """
        async with self.engine.connect() as conn:
            stamped = await conn.run_sync(
                lambda sync_conn: inspect(sync_conn).has_table("alembic_version")
            )
            if not stamped:
                raise RuntimeError(
                    "alembic_version table not found. Run 'alembic upgrade head' "
                    "or set DB_AUTO_CREATE=true"
                )
            revision = (await conn.execute(text("SELECT version_num FROM alembic_version"))).scalar()

        if not revision:
            raise RuntimeError("alembic_version is empty. Run 'alembic upgrade head'")
        logger.info("✓ Migrations applied", revision=revision)
        return revision

    async def create_all(self) -> None:
        async with self.engine.begin() as conn:
            await conn.run_sync(DbBaseModel.metadata.create_all)
        logger.info("✓ Tables ready", tables=sorted(DbBaseModel.metadata.tables))

    async def drop_all(self) -> None:
        """Development and tests only."""
        async with self.engine.begin() as conn:
            await conn.run_sync(DbBaseModel.metadata.drop_all)

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Request-scoped session. Pending work is committed when the block
        exits and rolled back when it raises.
        """
        session = self.session_maker()
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()

    async def health_check(self) -> dict[str, Any]:
        """
        Example:
            {"healthy": True, "driver": "sqlite+aiosqlite", "response_time_ms": 0.4}
        """
        start = time.perf_counter()
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except Exception as e:
            return {"healthy": False, "driver": self.driver, "error": str(e)}

        return {
            "healthy": True,
            "driver": self.driver,
            "response_time_ms": round((time.perf_counter() - start) * 1000, 2),
        }

    async def dispose(self) -> None:
        await self.engine.dispose()
        logger.info("✓ Database connections disposed")


__all__ = ["DbManager"]
