"""集成测试共享 fixture"""

from collections.abc import AsyncGenerator
from pathlib import Path

import pytest
import pytest_asyncio
from evtrack.core.store import create_store_group
from httpx import ASGITransport, AsyncClient


@pytest_asyncio.fixture
async def integration_app(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    """集成测试用 FastAPI app"""
    db_path = str(tmp_path / "test.db")
    monkeypatch.setenv("EVTRACK_DB_PATH", db_path)

    from evtrack.gateway.main import create_app

    app = create_app()

    store_group = await create_store_group(db_path)
    app.state.store_group = store_group
    app.state.store_timeout_s = 5.0

    yield app

    await store_group.close()


@pytest_asyncio.fixture
async def client(integration_app) -> AsyncGenerator[AsyncClient, None]:
    async with AsyncClient(
        transport=ASGITransport(app=integration_app),
        base_url="http://test",
    ) as ac:
        yield ac
