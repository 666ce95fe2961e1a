"""evtrack Core Store -- SQLite 持久化实现

提供工厂函数创建共享数据库连接的 Store 实例组。
"""

from pathlib import Path

import aiosqlite

from ..config import DEFAULT_STORE_TIMEOUT_S
from .event_store import SqliteEventStore
from .protocols import EventStore
from .sqlite_init import init_db

# 未设超时时的写锁等待上限（SQLite busy_timeout 取值上限，约 24 天）
_UNBOUNDED_BUSY_TIMEOUT_MS = 2**31 - 1


def lock_timeout_ms(timeout_s: float | None) -> int:
    """存储超时（秒）-> SQLite busy_timeout（毫秒），None 表示不设上限"""
    if timeout_s is None:
        return _UNBOUNDED_BUSY_TIMEOUT_MS
    return max(1, min(int(timeout_s * 1000), _UNBOUNDED_BUSY_TIMEOUT_MS))


class StoreGroup:
    """Store 实例组 -- 共享同一个数据库连接"""

    def __init__(self, conn: aiosqlite.Connection, timeout_s: float | None = None) -> None:
        self.conn = conn
        self.event_store = SqliteEventStore(conn, lock_timeout_s=timeout_s)

    async def close(self) -> None:
        """关闭数据库连接"""
        await self.conn.close()


async def create_store_group(
    db_path: str,
    timeout_s: float | None = DEFAULT_STORE_TIMEOUT_S,
) -> StoreGroup:
    """创建 Store 实例组

    连接使用 autocommit 模式：每个存储操作都是单条语句，
    多个请求共享连接时不会互相卷入对方的事务。

    Args:
        db_path: SQLite 数据库文件路径
        timeout_s: 写语句等待写锁的上限（秒），None 表示不设上限

    Returns:
        StoreGroup 实例
    """
    # 确保数据库目录存在
    if db_path != ":memory:":
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)

    conn = await aiosqlite.connect(db_path, isolation_level=None)
    conn.row_factory = aiosqlite.Row
    await init_db(conn, busy_timeout_ms=lock_timeout_ms(timeout_s))

    return StoreGroup(conn=conn, timeout_s=timeout_s)


__all__ = [
    "StoreGroup",
    "create_store_group",
    "lock_timeout_ms",
    "EventStore",
    "SqliteEventStore",
    "init_db",
]
