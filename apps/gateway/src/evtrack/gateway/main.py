"""FastAPI 应用主文件

app 创建 + lifespan 管理：DB 初始化/关闭 + 路由注册。
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from evtrack.core.config import get_db_path, get_store_timeout_s
from evtrack.core.store import create_store_group
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError

from .errors import request_validation_handler
from .middleware.logging_config import setup_logfire, setup_logging
from .middleware.logging_mw import LoggingMiddleware
from .routes import events, health

log = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """应用生命周期管理：启动时打开共享数据库连接，关闭时释放"""
    db_path = get_db_path()
    timeout_s = get_store_timeout_s()
    store_group = await create_store_group(db_path, timeout_s=timeout_s)
    app.state.store_group = store_group
    app.state.store_timeout_s = timeout_s
    log.info(
        "store_initialized",
        db_path=db_path,
        store_timeout_s=app.state.store_timeout_s,
    )

    yield

    if getattr(app.state, "store_group", None):
        await app.state.store_group.close()
        log.info("store_closed")


def create_app() -> FastAPI:
    """创建 FastAPI 应用实例"""
    app = FastAPI(
        title="evtrack",
        version="0.1.0",
        description="按类型跟踪事件生命周期（start / finish / list）",
        lifespan=lifespan,
    )

    app.add_middleware(LoggingMiddleware)
    app.add_exception_handler(RequestValidationError, request_validation_handler)

    # 初始化日志
    setup_logging()
    setup_logfire(app)

    # 注册路由
    app.include_router(events.router, tags=["events"])
    app.include_router(health.router, tags=["health"])

    return app


# 默认 app 实例（uvicorn 入口）
app = create_app()
