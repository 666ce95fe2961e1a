"""SQLite 数据库初始化

PRAGMA 配置 + events 表 DDL + 索引创建。
使用 aiosqlite 异步操作。
"""

import aiosqlite

# events 表 DDL
# state: 0=ACTIVE, 1=FINISHED；时间统一存 UTC ISO 字符串（微秒精度，字典序即时间序）
_EVENTS_DDL = """
CREATE TABLE IF NOT EXISTS events (
    event_id     TEXT PRIMARY KEY,
    type         TEXT NOT NULL,
    state        INTEGER NOT NULL DEFAULT 0,
    started_at   TEXT NOT NULL,
    finished_at  TEXT,

    CHECK (state IN (0, 1)),
    CHECK ((state = 0 AND finished_at IS NULL) OR (state = 1 AND finished_at IS NOT NULL))
);
"""

_EVENTS_INDEXES = [
    # 同一 type 至多一条活跃事件（部分唯一索引，仅对 state=0 生效）
    (
        "CREATE UNIQUE INDEX IF NOT EXISTS idx_events_active_type "
        "ON events(type) WHERE state = 0;"
    ),
    # 列表查询：按 started_at 倒序
    "CREATE INDEX IF NOT EXISTS idx_events_started_at ON events(started_at DESC);",
    # 按 type 筛选后倒序
    "CREATE INDEX IF NOT EXISTS idx_events_type_started_at ON events(type, started_at DESC);",
]


async def init_db(conn: aiosqlite.Connection, busy_timeout_ms: int = 5000) -> None:
    """初始化数据库：设置 PRAGMA + 创建表 + 创建索引

    Args:
        conn: aiosqlite 数据库连接
        busy_timeout_ms: 写锁等待上限（毫秒），超过后语句失败且不产生写入
    """
    # 设置 PRAGMA
    await conn.execute("PRAGMA journal_mode = WAL;")
    await conn.execute(f"PRAGMA busy_timeout = {int(busy_timeout_ms)};")

    # 创建表
    await conn.execute(_EVENTS_DDL)

    # 创建索引
    for idx_sql in _EVENTS_INDEXES:
        await conn.execute(idx_sql)

    await conn.commit()


async def verify_wal_mode(conn: aiosqlite.Connection) -> bool:
    """验证 WAL 模式是否生效

    Returns:
        True 如果 WAL 模式已启用
    """
    cursor = await conn.execute("PRAGMA journal_mode;")
    row = await cursor.fetchone()
    return row is not None and row[0].lower() == "wal"
