"""依赖注入模块 -- 通过 FastAPI Depends 注入 Store / Service 实例

Store 实例通过 app.state 管理，在 lifespan 中初始化/清理。
"""

from evtrack.core.store import StoreGroup
from fastapi import Request

from .services.event_service import EventService


def get_store_group(request: Request) -> StoreGroup:
    """从 app.state 获取 StoreGroup 实例"""
    return request.app.state.store_group


def get_event_service(request: Request) -> EventService:
    """基于共享 StoreGroup 构造 EventService"""
    store_group = get_store_group(request)
    return EventService(
        store_group.event_store,
        timeout_s=request.app.state.store_timeout_s,
    )
