"""Event Domain Model

同一 type 任意时刻至多一条 ACTIVE 记录。
finished_at 当且仅当 state=FINISHED 时存在，且不早于 started_at。
记录只会被 finish 修改一次，正常流程不删除。
"""

from datetime import datetime

from pydantic import BaseModel, Field, model_validator

from .enums import EventState


class Event(BaseModel):
    """Event 数据模型"""

    event_id: str = Field(description="唯一标识，ULID 格式，由存储层分配")
    type: str = Field(pattern=r"^[a-z0-9]+$", description="事件类型")
    state: EventState = Field(default=EventState.ACTIVE, description="当前状态")
    started_at: datetime = Field(description="开始时间")
    finished_at: datetime | None = Field(default=None, description="结束时间")

    @model_validator(mode="after")
    def _check_finished_at(self) -> "Event":
        if self.state == EventState.FINISHED:
            if self.finished_at is None:
                raise ValueError("finished event requires finished_at")
            if self.finished_at < self.started_at:
                raise ValueError("finished_at must not be earlier than started_at")
        elif self.finished_at is not None:
            raise ValueError("active event must not have finished_at")
        return self
