"""枚举定义 -- EventState 状态定义

内部以序号存储（ACTIVE=0, FINISHED=1），
对外以 "started" / "finished" 字符串表示，双向映射仅在序列化边界使用。
"""

from enum import IntEnum


class EventState(IntEnum):
    """Event 状态（ACTIVE -> FINISHED 仅流转一次，由存储层的条件更新保证）"""

    ACTIVE = 0
    FINISHED = 1


# 对外字符串表示
STATE_LABELS: dict[EventState, str] = {
    EventState.ACTIVE: "started",
    EventState.FINISHED: "finished",
}

_LABEL_TO_STATE: dict[str, EventState] = {
    label: state for state, label in STATE_LABELS.items()
}


def state_label(state: EventState) -> str:
    """内部状态 -> 对外字符串"""
    return STATE_LABELS[state]


def state_from_label(label: str) -> EventState:
    """对外字符串 -> 内部状态

    Raises:
        ValueError: 未知的状态字符串
    """
    try:
        return _LABEL_TO_STATE[label]
    except KeyError:
        raise ValueError(f"Unknown event state label: {label!r}") from None
