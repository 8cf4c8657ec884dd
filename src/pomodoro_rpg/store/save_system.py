"""SaveSystem -- 游戏状态持久化（SQLite key/value，JSON blob）

save() 防抖合并写入（默认 500ms，后写覆盖先写），flush() 立即写入待保存状态。
加载时校验结构并要求版本严格一致，不做迁移。
所有操作返回 SaveResult，存储层异常记录日志后转成错误信息。
"""

import asyncio
import json
from pathlib import Path

import aiosqlite
import structlog
from pydantic import ValidationError

from ..config import CURRENT_SAVE_VERSION, STORAGE_KEY
from ..exceptions import PersistenceError, SaveVersionError
from ..models import GameState, SaveResult
from ..utils import Clock, now_ms
from .sqlite_init import init_db

log = structlog.get_logger()

_REQUIRED_SECTIONS = ("timer", "timer_config", "character", "inventory", "progression", "metadata")


def _has_valid_structure(data: object) -> bool:
    if not isinstance(data, dict):
        return False
    if not all(data.get(section) for section in _REQUIRED_SECTIONS):
        return False
    metadata = data["metadata"]
    return (
        isinstance(metadata, dict)
        and isinstance(metadata.get("version"), str)
        and isinstance(metadata.get("last_save_timestamp"), int)
        and isinstance(metadata.get("created_timestamp"), int)
    )


class SaveSystem:
    """存档读写

    连接由 create_save_system() 创建并初始化；调用方负责最后 close()。
    """

    def __init__(
        self,
        conn: aiosqlite.Connection,
        debounce_ms: int = 500,
        clock: Clock | None = None,
        storage_key: str = STORAGE_KEY,
    ) -> None:
        self._conn = conn
        self._debounce_ms = debounce_ms
        self._clock = clock or now_ms
        self._key = storage_key
        self._pending: GameState | None = None
        self._debounce_task: asyncio.Task | None = None

    @property
    def has_pending_save(self) -> bool:
        return self._pending is not None

    def save(self, state: GameState) -> None:
        """防抖保存：重置计时器，到期后写入最近一次传入的状态

        需在运行中的事件循环内调用。
        """
        self._pending = state
        if self._debounce_task is not None and not self._debounce_task.done():
            self._debounce_task.cancel()
        self._debounce_task = asyncio.get_running_loop().create_task(self._debounced_write())

    async def _debounced_write(self) -> None:
        await asyncio.sleep(self._debounce_ms / 1000)
        pending, self._pending = self._pending, None
        if pending is not None:
            await self.save_immediate(pending)

    async def save_immediate(self, state: GameState) -> SaveResult[None]:
        """立即写入（刷新 metadata 中的版本和保存时间）"""
        try:
            state.metadata.version = CURRENT_SAVE_VERSION
            state.metadata.last_save_timestamp = self._clock()
            payload = state.model_dump_json()
            await self._conn.execute(
                """
                INSERT INTO game_saves (save_key, version, saved_at, payload)
                VALUES (?, ?, ?, ?)
                ON CONFLICT(save_key) DO UPDATE SET
                    version = excluded.version,
                    saved_at = excluded.saved_at,
                    payload = excluded.payload
                """,
                (self._key, state.metadata.version, state.metadata.last_save_timestamp, payload),
            )
            await self._conn.commit()
        except (aiosqlite.Error, OSError) as e:
            err = PersistenceError("save", e)
            await log.aerror("save_failed", error_type=type(e).__name__, error=str(e))
            return SaveResult.fail(str(err))

        await log.adebug(
            "game_saved",
            version=state.metadata.version,
            saved_at=state.metadata.last_save_timestamp,
        )
        return SaveResult.ok()

    async def flush(self) -> SaveResult[None]:
        """取消防抖计时器，立即写入待保存状态（没有时直接成功）"""
        if self._debounce_task is not None and not self._debounce_task.done():
            self._debounce_task.cancel()
        self._debounce_task = None

        pending, self._pending = self._pending, None
        if pending is None:
            return SaveResult.ok()
        return await self.save_immediate(pending)

    async def _read_payload(self) -> str | None:
        cursor = await self._conn.execute(
            "SELECT payload FROM game_saves WHERE save_key = ?",
            (self._key,),
        )
        row = await cursor.fetchone()
        return None if row is None else row[0]

    async def load(self) -> SaveResult[GameState]:
        """读取并校验存档

        Returns:
            成功时 data 为 GameState；失败原因包括无存档、结构非法、版本不一致、存储异常
        """
        try:
            payload = await self._read_payload()
        except (aiosqlite.Error, OSError) as e:
            err = PersistenceError("load", e)
            await log.aerror("load_failed", error_type=type(e).__name__, error=str(e))
            return SaveResult.fail(str(err))

        if payload is None:
            return SaveResult.fail("No saved game state found")

        try:
            data = json.loads(payload)
        except json.JSONDecodeError:
            await log.awarning("save_corrupted", reason="invalid_json")
            return SaveResult.fail("Invalid game state structure")

        if not _has_valid_structure(data):
            return SaveResult.fail("Invalid game state structure")

        version = data["metadata"]["version"]
        if version != CURRENT_SAVE_VERSION:
            err = SaveVersionError(version, CURRENT_SAVE_VERSION)
            await log.awarning("save_version_mismatch", found=version, expected=CURRENT_SAVE_VERSION)
            return SaveResult.fail(str(err))

        try:
            state = GameState.model_validate(data)
        except ValidationError as e:
            await log.awarning("save_corrupted", reason="validation", error_count=e.error_count())
            return SaveResult.fail("Invalid game state structure")

        await log.adebug("game_loaded", version=version)
        return SaveResult.ok(state)

    async def has_saved_game(self) -> bool:
        try:
            return await self._read_payload() is not None
        except (aiosqlite.Error, OSError) as e:
            await log.aerror("load_failed", error_type=type(e).__name__, error=str(e))
            return False

    async def clear(self) -> SaveResult[None]:
        """删除存档并丢弃待保存状态"""
        if self._debounce_task is not None and not self._debounce_task.done():
            self._debounce_task.cancel()
        self._debounce_task = None
        self._pending = None
        try:
            await self._conn.execute("DELETE FROM game_saves WHERE save_key = ?", (self._key,))
            await self._conn.commit()
        except (aiosqlite.Error, OSError) as e:
            err = PersistenceError("clear", e)
            await log.aerror("clear_failed", error_type=type(e).__name__, error=str(e))
            return SaveResult.fail(str(err))
        await log.ainfo("save_cleared")
        return SaveResult.ok()

    async def get_last_save_age(self) -> int | None:
        """距上次保存的毫秒数，没有可用存档时返回 None"""
        result = await self.load()
        if not result.success or result.data is None:
            return None
        return self._clock() - result.data.metadata.last_save_timestamp

    async def close(self) -> None:
        await self.flush()
        await self._conn.close()


async def create_save_system(
    db_path: str,
    debounce_ms: int = 500,
    clock: Clock | None = None,
) -> SaveSystem:
    """创建 SaveSystem（建目录、连接、初始化表）

    Args:
        db_path: SQLite 数据库文件路径
        debounce_ms: 防抖时长（毫秒）
        clock: 毫秒时钟

    Returns:
        SaveSystem 实例
    """
    Path(db_path).parent.mkdir(parents=True, exist_ok=True)

    conn = await aiosqlite.connect(db_path)
    await init_db(conn)
    return SaveSystem(conn, debounce_ms=debounce_ms, clock=clock)
