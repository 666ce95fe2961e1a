"""evtrack Core Domain Models -- 公共类型导出

所有公共模型类型从此入口导入。
"""

from .enums import (
    STATE_LABELS,
    EventState,
    state_from_label,
    state_label,
)
from .event import Event

__all__ = [
    # 枚举
    "EventState",
    "STATE_LABELS",
    "state_label",
    "state_from_label",
    # Event
    "Event",
]
