"""事件路由

GET  /v1: 事件列表，按 startedAt 倒序，支持 offset / limit / type。
POST /v1/start: 启动指定类型事件；已有活跃事件时返回已有事件。
POST /v1/finish: 完成指定类型的活跃事件；不存在时返回 404。
"""

from datetime import datetime
from typing import Literal

import structlog
from evtrack.core.exceptions import (
    ActiveEventNotFoundError,
    EventValidationError,
    StorageError,
)
from evtrack.core.models import Event, state_label
from evtrack.core.validation import require_type, validate_pagination
from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, ConfigDict, Field

from ..deps import get_event_service
from ..errors import BAD_REQUEST, EVENT_NOT_FOUND, STORAGE_ERROR, error_response
from ..services.event_service import EventService

log = structlog.get_logger()

router = APIRouter(prefix="/v1")


class EventTypeRequest(BaseModel):
    """start / finish 请求体"""

    type: str | None = Field(default=None, description="事件类型，仅小写字母和数字")


class EventResponse(BaseModel):
    """事件对外表示（camelCase，未完成时不输出 finishedAt）"""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    type: str
    state: Literal["started", "finished"]
    started_at: datetime = Field(alias="startedAt")
    finished_at: datetime | None = Field(default=None, alias="finishedAt")

    @classmethod
    def from_event(cls, event: Event) -> "EventResponse":
        return cls(
            id=event.event_id,
            type=event.type,
            state=state_label(event.state),
            started_at=event.started_at,
            finished_at=event.finished_at,
        )


@router.get(
    "",
    response_model=list[EventResponse],
    response_model_exclude_none=True,
)
async def list_events(
    offset: str | None = Query(default=None, description="跳过的条数，>= 0"),
    limit: str | None = Query(default=None, description="最多返回条数，0-100，0 表示不限制"),
    event_type: str | None = Query(default=None, alias="type", description="按类型筛选"),
    service: EventService = Depends(get_event_service),
):
    """查询事件列表，按 startedAt 倒序"""
    try:
        offset_value, limit_value = validate_pagination(offset, limit)
        return [
            EventResponse.from_event(event)
            async for event in service.list_events(offset_value, limit_value, event_type)
        ]
    except EventValidationError as e:
        return error_response(400, BAD_REQUEST, e.message)
    except StorageError as e:
        log.error("event_list_failed", error_type=type(e).__name__)
        return error_response(500, STORAGE_ERROR, "Failed to list events")


@router.post(
    "/start",
    response_model=EventResponse,
    response_model_exclude_none=True,
)
async def start_event(
    body: EventTypeRequest,
    service: EventService = Depends(get_event_service),
):
    """启动事件（幂等）"""
    try:
        event_type = require_type(body.type)
        event = await service.start(event_type)
    except EventValidationError as e:
        return error_response(400, BAD_REQUEST, e.message)
    except StorageError as e:
        log.error("event_start_failed", event_type=body.type, error_type=type(e).__name__)
        return error_response(500, STORAGE_ERROR, "Failed to start event")

    return EventResponse.from_event(event)


@router.post(
    "/finish",
    response_model=EventResponse,
    response_model_exclude_none=True,
)
async def finish_event(
    body: EventTypeRequest,
    service: EventService = Depends(get_event_service),
):
    """完成指定类型的活跃事件"""
    try:
        event_type = require_type(body.type)
        event = await service.finish(event_type)
    except EventValidationError as e:
        return error_response(400, BAD_REQUEST, e.message)
    except ActiveEventNotFoundError as e:
        return error_response(404, EVENT_NOT_FOUND, str(e))
    except StorageError as e:
        log.error("event_finish_failed", event_type=body.type, error_type=type(e).__name__)
        return error_response(500, STORAGE_ERROR, "Failed to finish event")

    return EventResponse.from_event(event)
