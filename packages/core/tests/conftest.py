"""packages/core 测试配置 -- 核心层 fixture"""

from collections.abc import AsyncGenerator, Callable
from datetime import UTC, datetime, timedelta
from pathlib import Path

import aiosqlite
import pytest
import pytest_asyncio
from evtrack.core.store.event_store import SqliteEventStore


class StepClock:
    """可控时钟：每次调用前进固定步长，保证 started_at 严格递增"""

    def __init__(self, start: datetime | None = None, step: timedelta | None = None) -> None:
        self.now = start or datetime(2025, 1, 1, 9, 0, tzinfo=UTC)
        self.step = step or timedelta(seconds=1)

    def __call__(self) -> datetime:
        current = self.now
        self.now = self.now + self.step
        return current


@pytest_asyncio.fixture
async def core_db_path(tmp_path: Path) -> Path:
    """核心层临时数据库路径"""
    return tmp_path / "core_test.db"


@pytest_asyncio.fixture
async def core_db(core_db_path: Path) -> AsyncGenerator[aiosqlite.Connection, None]:
    """核心层已初始化数据库连接"""
    from evtrack.core.store.sqlite_init import init_db

    conn = await aiosqlite.connect(str(core_db_path), isolation_level=None)
    await init_db(conn)
    yield conn
    await conn.close()


@pytest.fixture
def clock() -> StepClock:
    return StepClock()


@pytest_asyncio.fixture
async def event_store(core_db: aiosqlite.Connection, clock: Callable[[], datetime]):
    """使用可控时钟的 SqliteEventStore"""
    return SqliteEventStore(core_db, clock=clock)
