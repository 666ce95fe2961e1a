"""apps/gateway 测试配置 -- httpx AsyncClient + 临时 DB fixture"""

from collections.abc import AsyncGenerator
from pathlib import Path

import pytest
import pytest_asyncio
from evtrack.core.store import create_store_group
from httpx import ASGITransport, AsyncClient


@pytest_asyncio.fixture
async def store_group(tmp_path: Path):
    """临时数据库上的 StoreGroup"""
    group = await create_store_group(str(tmp_path / "sqlite" / "test.db"))
    yield group
    await group.close()


@pytest_asyncio.fixture
async def app(tmp_path: Path, store_group, monkeypatch: pytest.MonkeyPatch):
    """创建测试用 FastAPI app，手动初始化 lifespan 状态"""
    monkeypatch.setenv("EVTRACK_DB_PATH", str(tmp_path / "sqlite" / "test.db"))

    from evtrack.gateway.main import create_app

    application = create_app()
    # ASGITransport 不触发 lifespan，这里手动注入
    application.state.store_group = store_group
    application.state.store_timeout_s = 5.0
    yield application


@pytest_asyncio.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    """提供 httpx AsyncClient 用于测试"""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac
