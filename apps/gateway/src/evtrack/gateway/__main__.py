"""服务启动入口 -- python -m evtrack.gateway

监听地址由 EVTRACK_HOST / EVTRACK_PORT 控制，默认 0.0.0.0:8080。
"""

import os

import uvicorn


def main() -> None:
    host = os.environ.get("EVTRACK_HOST", "0.0.0.0")
    port = int(os.environ.get("EVTRACK_PORT", "8080"))
    # 日志由 setup_logging 统一接管
    uvicorn.run(
        "evtrack.gateway.main:app",
        host=host,
        port=port,
        log_config=None,
    )


if __name__ == "__main__":
    main()
