"""错误响应封装

统一错误体：{"error": {"code": ..., "message": ...}}
"""

import structlog
from fastapi import Request
from fastapi.exceptions import RequestValidationError
from starlette.responses import JSONResponse

log = structlog.get_logger()

BAD_REQUEST = "BAD_REQUEST"
EVENT_NOT_FOUND = "EVENT_NOT_FOUND"
STORAGE_ERROR = "STORAGE_ERROR"


def error_response(status_code: int, code: str, message: str) -> JSONResponse:
    """构造统一格式的错误响应"""
    return JSONResponse(
        status_code=status_code,
        content={
            "error": {
                "code": code,
                "message": message,
            }
        },
    )


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """请求体/参数绑定失败（缺字段、非法 JSON、类型不符）统一返回 400"""
    errors = exc.errors()
    if errors:
        loc = ".".join(str(part) for part in errors[0].get("loc", ()) if part != "body")
        detail = errors[0].get("msg", "invalid request")
        message = f"{loc}: {detail}" if loc else detail
    else:
        message = "Invalid request"
    await log.ainfo("request_validation_failed", message=message)
    return error_response(400, BAD_REQUEST, message)
