"""配置常量模块 -- 可通过环境变量覆盖

包含数据库路径、存储调用超时、分页上限等可配置常量。
"""

import os
from pathlib import Path

import structlog

log = structlog.get_logger()

# 存储调用默认超时（秒）
DEFAULT_STORE_TIMEOUT_S: float = 5.0

# 列表查询 limit 上限
LIST_LIMIT_MAX: int = 100

# 列表查询 offset 上限（SQLite INTEGER 最大值）
OFFSET_MAX: int = 2**63 - 1


def _get_base_dir() -> Path:
    """获取项目 data 基础目录"""
    return Path(os.environ.get("EVTRACK_DATA_DIR", "data"))


def get_db_path() -> str:
    """获取 SQLite 数据库路径"""
    return os.environ.get(
        "EVTRACK_DB_PATH",
        str(_get_base_dir() / "sqlite" / "evtrack.db"),
    )


def get_store_timeout_s() -> float | None:
    """获取存储调用超时（秒）

    EVTRACK_STORE_TIMEOUT_S=0 表示不设超时；
    非法值记录告警并回退到默认值，不阻塞启动。
    """
    raw = os.environ.get("EVTRACK_STORE_TIMEOUT_S")
    if raw is None:
        return DEFAULT_STORE_TIMEOUT_S
    try:
        value = float(raw)
    except ValueError:
        log.warning(
            "invalid_timeout_config",
            env_var="EVTRACK_STORE_TIMEOUT_S",
            value=raw,
            fallback=DEFAULT_STORE_TIMEOUT_S,
        )
        return DEFAULT_STORE_TIMEOUT_S
    if value < 0:
        log.warning(
            "invalid_timeout_config",
            env_var="EVTRACK_STORE_TIMEOUT_S",
            value=raw,
            fallback=DEFAULT_STORE_TIMEOUT_S,
        )
        return DEFAULT_STORE_TIMEOUT_S
    return value or None
