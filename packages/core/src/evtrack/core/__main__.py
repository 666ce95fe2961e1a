"""CLI 入口模块 -- python -m evtrack.core <command>

支持的命令：
  init-db        创建数据库文件和表结构
  list [type]    按开始时间倒序打印事件
"""

import asyncio
import sys

from .config import get_db_path, get_store_timeout_s
from .models.enums import state_label


def _usage() -> None:
    print("用法: python -m evtrack.core <command>")
    print("命令:")
    print("  init-db        创建数据库文件和表结构")
    print("  list [type]    按开始时间倒序打印事件")


def main() -> None:
    """CLI 主入口"""
    if len(sys.argv) < 2:
        _usage()
        sys.exit(1)

    command = sys.argv[1]

    if command == "init-db":
        asyncio.run(init_database())
    elif command == "list":
        event_type = sys.argv[2] if len(sys.argv) > 2 else None
        asyncio.run(list_events(event_type))
    else:
        print(f"未知命令: {command}")
        print("可用命令: init-db, list")
        sys.exit(1)


async def init_database() -> None:
    """创建数据库并初始化表结构"""
    from .store import create_store_group

    db_path = get_db_path()
    print(f"数据库路径: {db_path}")

    store_group = await create_store_group(db_path, timeout_s=get_store_timeout_s())
    await store_group.close()
    print("初始化完成")


async def list_events(event_type: str | None = None) -> None:
    """打印事件列表"""
    from .store import create_store_group

    store_group = await create_store_group(get_db_path(), timeout_s=get_store_timeout_s())
    try:
        store = store_group.event_store
        async for event in store.list_events(event_type=event_type):
            finished = event.finished_at.isoformat() if event.finished_at else "-"
            print(
                f"{event.event_id}  {event.type:<16} {state_label(event.state):<8} "
                f"{event.started_at.isoformat()}  {finished}"
            )
        total = await store.count_events(event_type)
        print(f"共 {total} 条事件")
    finally:
        await store_group.close()


if __name__ == "__main__":
    main()
