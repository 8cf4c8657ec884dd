"""SQLite 数据库初始化 -- 存档 key/value 表

PRAGMA 配置 + 单表 DDL，整个游戏状态以 JSON blob 存在一行中。
使用 aiosqlite 异步操作。
"""

import aiosqlite

# game_saves 表 DDL
_GAME_SAVES_DDL = """
CREATE TABLE IF NOT EXISTS game_saves (
    save_key    TEXT PRIMARY KEY,
    version     TEXT NOT NULL,
    saved_at    INTEGER NOT NULL,
    payload     TEXT NOT NULL DEFAULT '{}'
);
"""


async def init_db(conn: aiosqlite.Connection) -> None:
    """初始化数据库：设置 PRAGMA + 创建表

    Args:
        conn: aiosqlite 数据库连接
    """
    await conn.execute("PRAGMA journal_mode = WAL;")
    await conn.execute("PRAGMA foreign_keys = ON;")
    await conn.execute("PRAGMA busy_timeout = 5000;")

    await conn.execute(_GAME_SAVES_DDL)
    await conn.commit()


async def verify_wal_mode(conn: aiosqlite.Connection) -> bool:
    """验证 WAL 模式是否生效

    Returns:
        True 如果 WAL 模式已启用
    """
    cursor = await conn.execute("PRAGMA journal_mode;")
    row = await cursor.fetchone()
    return row is not None and row[0].lower() == "wal"
