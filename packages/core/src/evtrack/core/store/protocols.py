"""Store Protocol 接口定义

定义 EventStore 的抽象接口，
使用 Python Protocol 实现结构化子类型（duck typing）。
服务层只依赖此接口，便于测试替换。
"""

from collections.abc import AsyncIterator
from typing import Protocol

from ..models.event import Event


class EventStore(Protocol):
    """Event 存储接口

    所有状态只存在于存储中；finish_active 必须是单次原子读改写。
    """

    async def find_active(self, event_type: str) -> Event | None:
        """查询指定类型的活跃事件，不存在返回 None（不是错误）"""
        ...

    async def create(self, event_type: str) -> Event:
        """插入一条新的活跃事件，不做存在性检查"""
        ...

    async def finish_active(self, event_type: str) -> Event:
        """原子地将活跃事件置为完成并返回更新后的记录

        Raises:
            ActiveEventNotFoundError: 不存在该类型的活跃事件
        """
        ...

    def list_events(
        self,
        offset: int = 0,
        limit: int = 0,
        event_type: str | None = None,
    ) -> AsyncIterator[Event]:
        """按 started_at 倒序列出事件（limit=0 表示不限制）"""
        ...

    async def count_events(self, event_type: str | None = None) -> int:
        """统计事件数量"""
        ...
