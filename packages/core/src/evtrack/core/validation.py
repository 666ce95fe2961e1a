"""请求参数校验 -- type 格式 + 分页参数边界

供 gateway 在调用 EventService 之前使用。
越界或格式错误直接报错，不做静默截断。
"""

import re

from .config import LIST_LIMIT_MAX, OFFSET_MAX
from .exceptions import EventValidationError

# 仅小写字母和数字，至少一个字符
TYPE_PATTERN = re.compile(r"[a-z0-9]+")

_INT_PATTERN = re.compile(r"[+-]?[0-9]+")


def validate_type(value: str | None) -> bool:
    """判断事件类型是否合法（^[a-z0-9]+$）"""
    if not isinstance(value, str):
        return False
    return TYPE_PATTERN.fullmatch(value) is not None


def require_type(value: str | None) -> str:
    """校验事件类型，不合法时抛出 EventValidationError

    Returns:
        原样返回合法的 type
    """
    if not value:
        raise EventValidationError("type", "Field 'type' is required and must not be empty")
    if not validate_type(value):
        raise EventValidationError(
            "type",
            "Field 'type' must contain only lowercase letters and digits",
        )
    return value


def _parse_int(field: str, raw: str, message: str) -> int:
    if _INT_PATTERN.fullmatch(raw) is None:
        raise EventValidationError(field, message)
    return int(raw)


def validate_pagination(
    offset_raw: str | None,
    limit_raw: str | None,
) -> tuple[int, int]:
    """解析并校验分页参数

    Args:
        offset_raw: 原始 offset 字符串，None/空串表示缺省
        limit_raw: 原始 limit 字符串，None/空串表示缺省

    Returns:
        (offset, limit) 元组，缺省值均为 0（limit=0 表示不限制）

    Raises:
        EventValidationError: 非整数或越界
    """
    offset = 0
    limit = 0

    if offset_raw:
        message = "Parameter 'offset' must be a non-negative integer"
        offset = _parse_int("offset", offset_raw, message)
        if offset < 0 or offset > OFFSET_MAX:
            raise EventValidationError("offset", message)

    if limit_raw:
        message = f"Parameter 'limit' must be an integer between 0 and {LIST_LIMIT_MAX}"
        limit = _parse_int("limit", limit_raw, message)
        if limit < 0 or limit > LIST_LIMIT_MAX:
            raise EventValidationError("limit", message)

    return offset, limit
