import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import Request
from sqlalchemy import exc as sa_exc
from sqlalchemy.ext.asyncio import AsyncConnection, AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.pool import AsyncAdaptedQueuePool

from storefront.config import Settings, get_settings
from storefront.core.errors import ConnectivityError, PoolExhaustedError, describe
from storefront.models.base import Base

log = logging.getLogger(__name__)


class ConnectionPool:
    """Bounded set of reusable connections shared by every request.

    Callers lease a connection with ``acquire()`` (or an ORM session with
    ``session()``); the lease is returned to the pool on every exit path.
    When all connections are leased, callers wait up to ``timeout`` seconds.
    A ``queue_limit`` above zero caps how many callers may wait at once;
    anyone beyond it is refused straight away.
    """

    def __init__(self, engine: AsyncEngine, size: int, timeout: float, queue_limit: int = 0):
        self.engine = engine
        self.size = size
        self.timeout = timeout
        self.queue_limit = queue_limit
        self.in_use = 0
        self.waiting = 0

    @classmethod
    def from_settings(cls, settings: Settings) -> "ConnectionPool":
        url = settings.url()
        kwargs = dict(echo=settings.db_echo, connect_args=settings.connect_args())
        # In-memory SQLite runs on a single static connection, no queue to size
        if url.get_backend_name() != "sqlite" or url.database not in (None, "", ":memory:"):
            kwargs.update(
                poolclass=AsyncAdaptedQueuePool,
                pool_size=settings.db_pool_size,
                max_overflow=0,
                pool_timeout=settings.db_pool_timeout,
                pool_pre_ping=True,
            )
        engine = create_async_engine(url, **kwargs)
        return cls(
            engine,
            size=settings.db_pool_size,
            timeout=settings.db_pool_timeout,
            queue_limit=settings.db_queue_limit,
        )

    @property
    def dialect_name(self) -> str:
        return self.engine.dialect.name

    @asynccontextmanager
    async def acquire(self) -> AsyncIterator[AsyncConnection]:
        if self.queue_limit and self.in_use >= self.size and self.waiting >= self.queue_limit:
            raise PoolExhaustedError(
                f"Connection pool exhausted: {self.waiting} requests already waiting"
            )

        self.waiting += 1
        try:
            conn = await self.engine.connect()
        except sa_exc.TimeoutError as e:
            log.warning("Pool wait timed out after %ss (size=%s)", self.timeout, self.size)
            raise PoolExhaustedError(
                f"Timed out after {self.timeout}s waiting for a database connection"
            ) from e
        except (sa_exc.SQLAlchemyError, OSError) as e:
            log.error("Database connection failed: %s", describe(e))
            raise ConnectivityError(describe(e)) from e
        finally:
            self.waiting -= 1

        self.in_use += 1
        try:
            yield conn
        finally:
            self.in_use -= 1
            await conn.close()

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        async with self.acquire() as conn:
            async with AsyncSession(bind=conn, expire_on_commit=False) as session:
                yield session

    async def verify(self) -> bool:
        """Lease one connection and hand it straight back; log the outcome."""
        try:
            async with self.acquire():
                pass
        except ConnectivityError:
            log.error("Startup connectivity check failed; requests will fail until the store is reachable")
            return False
        log.info("Connected to database (%s) successfully", self.dialect_name)
        return True

    async def create_tables(self) -> None:
        import storefront.models  # registers every model on Base.metadata

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    def status(self) -> dict:
        return {"size": self.size, "in_use": self.in_use, "waiting": self.waiting}

    async def dispose(self) -> None:
        await self.engine.dispose()


# Dependency
def get_pool(request: Request) -> ConnectionPool:
    return request.app.state.pool


# Pool builder for the maintenance scripts
def build_pool(settings: Optional[Settings] = None) -> ConnectionPool:
    return ConnectionPool.from_settings(settings or get_settings())
