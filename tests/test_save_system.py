"""SaveSystem 测试

测试内容：
1. 立即保存 / 加载往返
2. 无存档、结构非法、版本不一致的错误信息
3. 防抖合并写入与 flush
4. 清除存档与存档年龄
5. WAL 模式
"""

import asyncio
import json

import aiosqlite
import pytest
from pomodoro_rpg.config import CURRENT_SAVE_VERSION, STORAGE_KEY
from pomodoro_rpg.engine import create_new_game_state
from pomodoro_rpg.models import TimerPhase
from pomodoro_rpg.store import SaveSystem, verify_wal_mode


async def _write_raw_payload(db_path, payload: str, version: str = CURRENT_SAVE_VERSION) -> None:
    """绕过 SaveSystem 直接写库，模拟外部损坏或旧版本存档"""
    async with aiosqlite.connect(str(db_path)) as conn:
        await conn.execute(
            """
            INSERT INTO game_saves (save_key, version, saved_at, payload)
            VALUES (?, ?, 0, ?)
            ON CONFLICT(save_key) DO UPDATE SET
                version = excluded.version,
                payload = excluded.payload
            """,
            (STORAGE_KEY, version, payload),
        )
        await conn.commit()


class TestSaveAndLoad:
    async def test_save_immediate_then_load(self, save_system: SaveSystem, clock):
        """立即保存后能完整读回"""
        state = create_new_game_state(clock=clock)
        state.inventory.gold = 123
        state.character.level = 3

        clock.advance(5)
        result = await save_system.save_immediate(state)
        assert result.success is True
        assert state.metadata.last_save_timestamp == clock.now

        loaded = await save_system.load()
        assert loaded.success is True
        assert loaded.data.inventory.gold == 123
        assert loaded.data.character.level == 3
        assert loaded.data.metadata.version == CURRENT_SAVE_VERSION
        assert loaded.data.timer.phase == TimerPhase.IDLE

    async def test_load_without_save(self, save_system: SaveSystem):
        """没有存档时读取失败"""
        result = await save_system.load()
        assert result.success is False
        assert result.error == "No saved game state found"
        assert await save_system.has_saved_game() is False

    async def test_second_save_overwrites(self, save_system: SaveSystem, clock):
        """再次保存覆盖旧存档"""
        state = create_new_game_state(clock=clock)
        await save_system.save_immediate(state)
        state.inventory.gold = 77
        await save_system.save_immediate(state)

        loaded = await save_system.load()
        assert loaded.data.inventory.gold == 77


class TestLoadValidation:
    async def test_invalid_json(self, save_system: SaveSystem, db_path):
        """存档不是合法 JSON 时读取失败"""
        await _write_raw_payload(db_path, "{not json")
        result = await save_system.load()
        assert result.success is False
        assert result.error == "Invalid game state structure"

    async def test_missing_sections(self, save_system: SaveSystem, db_path):
        """缺少顶层分区时读取失败"""
        await _write_raw_payload(db_path, json.dumps({"timer": {"phase": "IDLE"}}))
        result = await save_system.load()
        assert result.error == "Invalid game state structure"

    async def test_metadata_wrong_types(self, save_system: SaveSystem, db_path, clock):
        """元数据类型错误时读取失败"""
        data = create_new_game_state(clock=clock).model_dump(mode="json")
        data["metadata"]["last_save_timestamp"] = "yesterday"
        await _write_raw_payload(db_path, json.dumps(data))
        result = await save_system.load()
        assert result.error == "Invalid game state structure"

    async def test_version_mismatch(self, save_system: SaveSystem, db_path, clock):
        """版本不一致时读取失败"""
        data = create_new_game_state(clock=clock).model_dump(mode="json")
        data["metadata"]["version"] = "0.9.0"
        await _write_raw_payload(db_path, json.dumps(data), version="0.9.0")

        result = await save_system.load()
        assert result.success is False
        assert result.error == "Incompatible save version: 0.9.0 (current: 1.0.0)"

    async def test_model_validation_failure(self, save_system: SaveSystem, db_path, clock):
        """模型校验失败时读取失败"""
        data = create_new_game_state(clock=clock).model_dump(mode="json")
        data["character"]["level"] = "high"
        await _write_raw_payload(db_path, json.dumps(data))
        result = await save_system.load()
        assert result.error == "Invalid game state structure"


class TestDebouncedSave:
    async def test_debounce_writes_latest_state(self, save_system: SaveSystem, clock):
        """防抖后只写入最后一次状态"""
        first = create_new_game_state(clock=clock)
        second = create_new_game_state(clock=clock)
        second.inventory.gold = 500

        save_system.save(first)
        save_system.save(second)
        assert save_system.has_pending_save is True
        assert await save_system.has_saved_game() is False

        await asyncio.sleep(0.2)
        assert save_system.has_pending_save is False
        loaded = await save_system.load()
        assert loaded.data.inventory.gold == 500

    async def test_flush_writes_pending_immediately(self, save_system: SaveSystem, clock):
        """flush 立即写入待保存状态"""
        state = create_new_game_state(clock=clock)
        state.inventory.gold = 42
        save_system.save(state)

        result = await save_system.flush()
        assert result.success is True
        assert save_system.has_pending_save is False
        assert (await save_system.load()).data.inventory.gold == 42

    async def test_flush_without_pending(self, save_system: SaveSystem):
        """无待保存状态时 flush 不写入"""
        result = await save_system.flush()
        assert result.success is True
        assert await save_system.has_saved_game() is False

    def test_save_requires_running_loop(self, db_path, clock):
        """没有事件循环时不能安排防抖保存"""
        system = SaveSystem(conn=None, clock=clock)  # type: ignore[arg-type]
        with pytest.raises(RuntimeError):
            system.save(create_new_game_state(clock=clock))


class TestClearAndAge:
    async def test_clear_removes_save_and_pending(self, save_system: SaveSystem, clock):
        """清除存档并取消待保存任务"""
        state = create_new_game_state(clock=clock)
        await save_system.save_immediate(state)
        save_system.save(state)

        result = await save_system.clear()
        assert result.success is True
        assert save_system.has_pending_save is False
        assert await save_system.has_saved_game() is False

        await asyncio.sleep(0.1)
        assert await save_system.has_saved_game() is False

    async def test_last_save_age(self, save_system: SaveSystem, clock):
        """距上次保存的毫秒数"""
        assert await save_system.get_last_save_age() is None

        await save_system.save_immediate(create_new_game_state(clock=clock))
        clock.advance(30)
        assert await save_system.get_last_save_age() == 30_000


async def test_wal_mode_enabled(save_system: SaveSystem):
    """连接启用 WAL 模式"""
    assert await verify_wal_mode(save_system._conn) is True
