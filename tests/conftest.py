import pytest
from sqlalchemy import create_engine
from fastapi.testclient import TestClient

from storefront.config import Settings
from storefront.db import ConnectionPool
from storefront.main import create_app


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def db_path(tmp_path):
    return tmp_path / "storefront.db"


@pytest.fixture
def settings(db_path):
    return Settings(
        database_url=f"sqlite+aiosqlite:///{db_path}",
        db_ssl=False,
        db_pool_size=5,
        db_pool_timeout=5,
        db_queue_limit=0,
        create_tables=True,
        expose_errors=True,
    )


@pytest.fixture
async def pool(settings):
    pool = ConnectionPool.from_settings(settings)
    await pool.create_tables()
    yield pool
    await pool.dispose()


@pytest.fixture
def sync_engine(db_path):
    """Plain sync engine on the same file, for seeding and inspecting rows."""
    engine = create_engine(f"sqlite:///{db_path}")
    yield engine
    engine.dispose()


@pytest.fixture
def client(settings):
    with TestClient(create_app(settings)) as client:
        yield client
