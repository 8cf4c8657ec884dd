"""GameStateManager 与 CLI 摘要测试"""

import pytest
from pomodoro_rpg.__main__ import format_summary, run_command
from pomodoro_rpg.engine import GameStateManager, create_new_game_state
from pomodoro_rpg.models import CharacterClass, InjurySeverity, TimerPhase
from pomodoro_rpg.store import create_save_system


class TestCreateNewGameState:
    def test_fresh_state(self, clock):
        """新游戏状态的初始值"""
        state = create_new_game_state(CharacterClass.ARCANIST, clock=clock)
        assert state.character.character_class == CharacterClass.ARCANIST
        assert state.character.level == 1
        assert state.timer.phase == TimerPhase.IDLE
        assert state.inventory.gold == 0
        assert state.chests == []
        assert state.metadata.created_timestamp == clock.now

    def test_timer_config_is_copied(self, clock):
        """每个新状态持有独立的计时器配置"""
        first = create_new_game_state(clock=clock)
        first.timer_config.work_duration = 50
        second = create_new_game_state(clock=clock)
        assert second.timer_config.work_duration == 25


class TestGameStateManager:
    async def test_new_game_is_saved(self, save_system, clock):
        """新游戏立即写入存档"""
        manager = GameStateManager(save_system, clock)
        result = await manager.new_game(CharacterClass.ROGUE)
        assert result.success is True
        assert manager.state is result.data
        assert await save_system.has_saved_game() is True

    async def test_load_or_create_without_save(self, save_system, clock):
        """无存档时创建并保存新游戏"""
        manager = GameStateManager(save_system, clock)
        state = await manager.load_or_create()
        assert state.character.level == 1
        assert await save_system.has_saved_game() is True

    async def test_load_or_create_uses_existing(self, save_system, clock):
        """有存档时直接读取"""
        existing = create_new_game_state(clock=clock)
        existing.inventory.gold = 321
        await save_system.save_immediate(existing)

        manager = GameStateManager(save_system, clock)
        state = await manager.load_or_create()
        assert state.inventory.gold == 321

    async def test_update_then_flush(self, save_system, clock):
        """更新后防抖保存，flush 立即落盘"""
        manager = GameStateManager(save_system, clock)
        await manager.new_game()

        def add_gold(state):
            state.inventory.gold += 10

        manager.update(add_gold)
        assert save_system.has_pending_save is True
        await manager.flush()

        loaded = await manager.load()
        assert loaded.data.inventory.gold == 10

    def test_update_without_state(self, clock):
        """未加载状态时更新报错"""
        manager = GameStateManager(save_system=None, clock=clock)  # type: ignore[arg-type]
        with pytest.raises(RuntimeError):
            manager.update()

    async def test_clear(self, save_system, clock):
        """清除后状态与存档都不存在"""
        manager = GameStateManager(save_system, clock)
        await manager.new_game()
        result = await manager.clear()
        assert result.success is True
        assert manager.state is None
        assert (await manager.load()).error == "No saved game state found"


class TestCli:
    def test_format_summary(self, clock):
        """存档摘要包含等级、金币与惩罚"""
        state = create_new_game_state(clock=clock)
        state.inventory.gold = 15
        state.character.injury.is_injured = True
        state.character.injury.severity = InjurySeverity.MINOR
        state.character.injury.success_penalty = 5

        summary = format_summary(state)
        assert "等级: 1" in summary
        assert "金币: 15" in summary
        assert "成功率 -5%" in summary
        assert "医院账单" not in summary

    async def test_run_command_cycle(self, monkeypatch, db_path, capsys):
        """show/new/reset 命令的完整流程"""
        monkeypatch.setenv("POMODORO_RPG_DB_PATH", str(db_path))

        assert await run_command("show") == 1
        assert await run_command("new") == 0
        assert await run_command("show") == 0
        assert await run_command("reset") == 0
        assert await run_command("show") == 1

        output = capsys.readouterr().out
        assert "已创建新存档" in output
        assert "存档已删除" in output

        system = await create_save_system(str(db_path))
        assert await system.has_saved_game() is False
        await system.close()
