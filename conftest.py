"""全局 pytest 配置 -- 环境隔离"""

import pytest


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """屏蔽宿主环境中的 EVTRACK_* / Logfire 配置"""
    for key in (
        "EVTRACK_DATA_DIR",
        "EVTRACK_DB_PATH",
        "EVTRACK_STORE_TIMEOUT_S",
        "EVTRACK_LOG_FORMAT",
        "EVTRACK_LOG_LEVEL",
    ):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("LOGFIRE_SEND_TO_LOGFIRE", "false")
