"""EventService -- 事件启动/完成/查询业务逻辑

按 type 划分的生命周期：
- 无活跃事件时 start 创建新事件；已有活跃事件时 start 原样返回（幂等）
- finish 将活跃事件原子地置为完成；不存在活跃事件时抛出 ActiveEventNotFoundError
- 服务本身无状态，全部状态在存储中

超时：
- 读调用（find_active / list_events）包在 asyncio.timeout 中，超时抛出 StorageTimeoutError
- 写调用（create / finish_active）不在此处取消，由存储层的写锁等待上限约束；
  超时的写入不会生效，调用方看到的失败与存储状态一致
"""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import structlog
from evtrack.core.exceptions import ActiveEventConflictError, StorageTimeoutError
from evtrack.core.models import Event
from evtrack.core.store import EventStore

log = structlog.get_logger()


class EventService:
    """事件生命周期服务"""

    def __init__(self, event_store: EventStore, timeout_s: float | None = None) -> None:
        self._store = event_store
        self._timeout_s = timeout_s

    async def start(self, event_type: str) -> Event:
        """启动指定类型的事件（幂等）

        已存在活跃事件时直接返回，不修改任何字段。
        并发首次启动时唯一索引冲突的一方回查并返回胜出方的事件。

        Args:
            event_type: 已校验的事件类型

        Returns:
            活跃事件
        """
        active = await self._find_active(event_type)
        if active is not None:
            log.info(
                "event_start_reused",
                event_type=event_type,
                event_id=active.event_id,
            )
            return active

        try:
            event = await self._store.create(event_type)
        except ActiveEventConflictError:
            existing = await self._find_active(event_type)
            if existing is None:
                raise
            log.info(
                "event_start_conflict_resolved",
                event_type=event_type,
                event_id=existing.event_id,
            )
            return existing

        log.info("event_started", event_type=event_type, event_id=event.event_id)
        return event

    async def finish(self, event_type: str) -> Event:
        """完成指定类型的活跃事件

        Raises:
            ActiveEventNotFoundError: 不存在该类型的活跃事件
            StorageError: 存储失败或等待写锁超时（此时事件保持活跃）
        """
        event = await self._store.finish_active(event_type)

        log.info("event_finished", event_type=event_type, event_id=event.event_id)
        return event

    async def list_events(
        self,
        offset: int = 0,
        limit: int = 0,
        event_type: str | None = None,
    ) -> AsyncIterator[Event]:
        """按 started_at 倒序列出事件，直接委托存储层"""
        async with self._deadline():
            async for event in self._store.list_events(offset, limit, event_type):
                yield event

    async def _find_active(self, event_type: str) -> Event | None:
        async with self._deadline():
            return await self._store.find_active(event_type)

    @asynccontextmanager
    async def _deadline(self):
        """将读调用包在超时上下文中，超时转换为 StorageTimeoutError"""
        try:
            async with asyncio.timeout(self._timeout_s):
                yield
        except TimeoutError as e:
            raise StorageTimeoutError(self._timeout_s) from e
