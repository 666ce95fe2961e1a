"""EventStore SQLite 实现

同一 type 至多一条活跃事件，由部分唯一索引 idx_events_active_type 兜底。
finish_active 使用单条 UPDATE ... RETURNING 完成查找+流转，
并发 finish 同一 type 时只有一个调用能命中该行。

写语句的超时由连接的 busy_timeout 限定：语句要么在上限内拿到写锁并完整执行，
要么失败且不写入。写语句一旦提交给连接就会在工作线程上执行到底，
取消等待它的协程并不能撤销写入。
"""

from collections.abc import AsyncIterator, Callable
from datetime import UTC, datetime

import aiosqlite
from ulid import ULID

from ..exceptions import (
    ActiveEventConflictError,
    ActiveEventNotFoundError,
    StorageError,
    StorageTimeoutError,
)
from ..models.enums import EventState
from ..models.event import Event

_COLUMNS = "event_id, type, state, started_at, finished_at"

# MAX(started_at, ?) 保证 finished_at 不早于 started_at（同格式 ISO 字符串可直接比较）
_FINISH_SQL = f"""
UPDATE events
SET state = ?, finished_at = MAX(started_at, ?)
WHERE event_id = (
    SELECT event_id FROM events
    WHERE type = ? AND state = ?
    ORDER BY started_at DESC
    LIMIT 1
) AND state = ?
RETURNING {_COLUMNS}
"""


def utcnow() -> datetime:
    """当前 UTC 时间"""
    return datetime.now(UTC)


def to_db_ts(ts: datetime) -> str:
    """datetime -> 存储用 ISO 字符串（UTC，固定微秒精度）"""
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=UTC)
    return ts.astimezone(UTC).isoformat(timespec="microseconds")


class SqliteEventStore:
    """EventStore 的 SQLite 实现"""

    def __init__(
        self,
        conn: aiosqlite.Connection,
        clock: Callable[[], datetime] = utcnow,
        lock_timeout_s: float | None = None,
    ) -> None:
        """
        Args:
            conn: 共享的 aiosqlite 连接（autocommit 模式）
            clock: 时间来源
            lock_timeout_s: 连接上配置的写锁等待上限（秒），
                写语句因等锁超时失败时据此抛出 StorageTimeoutError
        """
        self._conn = conn
        self._clock = clock
        self._lock_timeout_s = lock_timeout_s

    async def find_active(self, event_type: str) -> Event | None:
        """查询指定类型的活跃事件，不存在返回 None"""
        try:
            cursor = await self._conn.execute(
                f"SELECT {_COLUMNS} FROM events WHERE type = ? AND state = ? LIMIT 1",
                (event_type, EventState.ACTIVE.value),
            )
            row = await cursor.fetchone()
            await cursor.close()
        except aiosqlite.Error as e:
            raise StorageError("Failed to query active event", e) from e
        if row is None:
            return None
        return self._row_to_event(row)

    async def create(self, event_type: str) -> Event:
        """插入新的活跃事件

        不做先查后插；如果该 type 已有活跃事件，
        唯一索引冲突会以 ActiveEventConflictError 抛出；
        等待写锁超时以 StorageTimeoutError 抛出，不会插入任何记录。
        """
        event = Event(
            event_id=str(ULID()),
            type=event_type,
            state=EventState.ACTIVE,
            started_at=self._clock(),
        )
        try:
            await self._conn.execute(
                """
                INSERT INTO events (event_id, type, state, started_at, finished_at)
                VALUES (?, ?, ?, ?, NULL)
                """,
                (
                    event.event_id,
                    event.type,
                    event.state.value,
                    to_db_ts(event.started_at),
                ),
            )
            await self._conn.commit()
        except aiosqlite.IntegrityError as e:
            await self._conn.rollback()
            if self._is_active_type_conflict(e):
                raise ActiveEventConflictError(event_type, e) from e
            raise StorageError("Failed to create event", e) from e
        except aiosqlite.Error as e:
            await self._conn.rollback()
            raise self._write_error("Failed to create event", e) from e
        return event

    async def finish_active(self, event_type: str) -> Event:
        """原子地完成指定类型的活跃事件

        Raises:
            ActiveEventNotFoundError: 执行时刻不存在该类型的活跃事件
            StorageError: 底层存储失败
            StorageTimeoutError: 等待写锁超时，事件保持原状态
        """
        now = to_db_ts(self._clock())
        try:
            cursor = await self._conn.execute(
                _FINISH_SQL,
                (
                    EventState.FINISHED.value,
                    now,
                    event_type,
                    EventState.ACTIVE.value,
                    EventState.ACTIVE.value,
                ),
            )
            # 读完 RETURNING 结果后再提交
            rows = await cursor.fetchall()
            await cursor.close()
            await self._conn.commit()
        except aiosqlite.Error as e:
            await self._conn.rollback()
            raise self._write_error("Failed to finish event", e) from e

        if not rows:
            raise ActiveEventNotFoundError(event_type)
        return self._row_to_event(rows[0])

    async def list_events(
        self,
        offset: int = 0,
        limit: int = 0,
        event_type: str | None = None,
    ) -> AsyncIterator[Event]:
        """按 started_at 倒序列出事件

        同一时间戳按插入顺序倒序。每次调用重新查询，
        返回的异步迭代器只能消费一次。

        Args:
            offset: 跳过的行数
            limit: 最多返回的行数，0 表示不限制
            event_type: 按类型精确筛选，None/空串表示不筛选
        """
        sql = f"SELECT {_COLUMNS} FROM events"
        params: list[str | int] = []
        if event_type:
            sql += " WHERE type = ?"
            params.append(event_type)
        sql += " ORDER BY started_at DESC, rowid DESC"
        if limit > 0 or offset > 0:
            # SQLite 中 LIMIT -1 表示不限制
            sql += " LIMIT ? OFFSET ?"
            params.extend([limit if limit > 0 else -1, offset])

        try:
            async with self._conn.execute(sql, params) as cursor:
                async for row in cursor:
                    yield self._row_to_event(row)
        except aiosqlite.Error as e:
            raise StorageError("Failed to list events", e) from e

    async def count_events(self, event_type: str | None = None) -> int:
        """统计事件数量，可按类型筛选"""
        try:
            if event_type:
                cursor = await self._conn.execute(
                    "SELECT COUNT(*) FROM events WHERE type = ?",
                    (event_type,),
                )
            else:
                cursor = await self._conn.execute("SELECT COUNT(*) FROM events")
            row = await cursor.fetchone()
            await cursor.close()
        except aiosqlite.Error as e:
            raise StorageError("Failed to count events", e) from e
        return row[0] if row else 0

    def _write_error(self, message: str, error: aiosqlite.Error) -> StorageError:
        """写语句失败 -> StorageError；等写锁超时的语句未执行任何写入"""
        if self._lock_timeout_s is not None and "database is locked" in str(error):
            return StorageTimeoutError(self._lock_timeout_s, error)
        return StorageError(message, error)

    @staticmethod
    def _is_active_type_conflict(error: Exception) -> bool:
        text = str(error)
        return "idx_events_active_type" in text or "events.type" in text

    @staticmethod
    def _row_to_event(row: aiosqlite.Row) -> Event:
        """将数据库行转换为 Event 模型"""
        return Event(
            event_id=row[0],
            type=row[1],
            state=EventState(row[2]),
            started_at=datetime.fromisoformat(row[3]),
            finished_at=datetime.fromisoformat(row[4]) if row[4] else None,
        )
