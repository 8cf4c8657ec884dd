"""GameController 集成测试

测试内容：
1. 阶段变化驱动任务开始 / 结算 / 取消
2. tick 推进任务进度与事件
3. 玩家操作：选任务、开箱、用物品、装备、就医、还账单
4. 存档恢复后继续任务
"""

import asyncio

import pytest
from pomodoro_rpg.config import GameSettings
from pomodoro_rpg.data import get_consumable
from pomodoro_rpg.engine import GameController, create_new_game_state
from pomodoro_rpg.exceptions import InvalidStateTransitionError
from pomodoro_rpg.models import (
    EquipmentSlot,
    InjurySeverity,
    RiskLevel,
    StatBonuses,
    TaskType,
    TimerPhase,
    WeaponItem,
    WeaponType,
)


@pytest.fixture
def settings(db_path) -> GameSettings:
    return GameSettings(db_path=str(db_path), event_mode="disabled", tick_seconds=0.01)


@pytest.fixture
def controller(settings, rng, clock) -> GameController:
    state = create_new_game_state(clock=clock)
    game = GameController(state, None, settings, rng, clock)
    yield game
    game.destroy()


class TestWorkSessionFlow:
    def test_start_begins_selected_task(self, controller: GameController):
        """开始计时即开始所选任务"""
        controller.select_task(TaskType.RAID, RiskLevel.SAFE)
        controller.start()
        task = controller.task_manager.get_active_task()
        assert controller.state.timer.phase == TimerPhase.WORK
        assert task.task_type == TaskType.RAID
        assert task.risk_level == RiskLevel.SAFE
        assert controller.executor.is_executing() is True

    def test_skip_work_settles_task(self, controller: GameController):
        """跳过 WORK 时结算任务并发放奖励"""
        controller.start()
        controller.skip()

        report = controller.last_report
        assert report is not None
        assert controller.state.timer.phase == TimerPhase.SHORT_BREAK
        assert controller.task_manager.get_active_task() is None
        assert len(controller.state.tasks.task_history) == 1
        assert controller.state.inventory.gold == report.result.rewards.gold
        assert controller.state.progression.total_xp == report.result.rewards.xp
        assert controller.state.progression.streak.current_streak == 1
        assert len(controller.state.chests) == len(report.chests_awarded)

    def test_materials_go_to_inventory(self, controller: GameController):
        """材料奖励放入背包"""
        controller.start()
        controller.skip()
        materials = controller.last_report.result.rewards.materials
        assert controller.inventory.get_item_count("salvaged-materials") == materials

    def test_reset_during_work_cancels_task(self, controller: GameController):
        """WORK 中重置会取消任务"""
        controller.start()
        controller.reset()
        assert controller.state.timer.phase == TimerPhase.IDLE
        assert controller.task_manager.get_active_task() is None
        assert controller.state.tasks.statistics.total.started == 0
        assert controller.last_report is None

    def test_next_work_phase_starts_new_task(self, controller: GameController):
        """下一个 WORK 阶段开始新任务"""
        controller.start()
        controller.skip()
        controller.skip()
        assert controller.state.timer.phase == TimerPhase.WORK
        assert controller.task_manager.get_active_task() is not None

    def test_natural_completion_via_ticks(self, controller: GameController):
        """按 tick 自然走完 WORK 后结算"""
        controller.update_timer_config(work_duration=1)
        controller.start()
        for _ in range(59):
            controller.tick()
        assert controller.task_manager.get_active_task().progress == pytest.approx(59 / 60 * 100)

        controller.tick()
        assert controller.state.timer.phase == TimerPhase.SHORT_BREAK
        assert controller.last_report is not None

    def test_pause_freezes_progress(self, controller: GameController):
        """暂停期间任务进度与事件生成冻结"""
        controller.start()
        for _ in range(30):
            controller.tick()
        controller.pause()
        progress = controller.task_manager.get_active_task().progress
        for _ in range(30):
            controller.tick()
        assert controller.task_manager.get_active_task().progress == progress
        assert controller.events.generator.is_paused is True

        controller.resume()
        controller.tick()
        assert controller.task_manager.get_active_task().progress > progress

    def test_events_recorded_on_task(self, settings, rng, clock):
        """生成的事件记录到进行中任务"""
        settings = settings.model_copy(update={"event_mode": "test"})
        game = GameController(create_new_game_state(clock=clock), None, settings, rng, clock)
        game.start()
        events = [game.tick() for _ in range(20)]
        generated = [e for e in events if e is not None]
        assert generated
        assert len(game.task_manager.get_active_task().events) == len(generated)
        game.destroy()


class TestPlayerActions:
    def test_select_unavailable_task(self, controller: GameController):
        """选择未开放的任务报错"""
        with pytest.raises(InvalidStateTransitionError):
            controller.select_task(TaskType.CRAFT, RiskLevel.STANDARD)

    def test_open_chest_fills_inventory(self, controller: GameController):
        """开箱所得放入背包并移除宝箱"""
        chest = controller.chests.award_chests(TaskType.EXPEDITION, 1)[0]
        result = controller.open_chest(chest.id)
        assert result is not None
        assert controller.state.inventory.gold == result.gold
        for item in result.items:
            assert controller.inventory.get_item(item.id) is not None
        assert controller.state.chests == []
        assert controller.open_chest(chest.id) is None

    def test_use_consumable(self, controller: GameController):
        """使用消耗品生效并扣减数量"""
        controller.inventory.add_item(get_consumable("healing-salve"), 2)
        controller.character.apply_injury(InjurySeverity.MODERATE)
        result = controller.use_item("healing-salve")
        assert result.success is True
        assert "Injury cured" in result.effects
        assert controller.inventory.get_item_count("healing-salve") == 1

    def test_use_missing_item(self, controller: GameController):
        """使用不存在的物品失败"""
        assert controller.use_item("nothing").success is False

    def test_equip_and_unequip(self, controller: GameController):
        """装备与卸下时重算属性"""
        sword = WeaponItem(
            id="blade",
            name="Blade",
            weapon_type=WeaponType.SWORD,
            stat_bonuses=StatBonuses(power=6),
        )
        controller.inventory.add_item(sword)
        assert controller.equip_item("blade").success is True
        assert controller.state.character.computed_stats.power == 16

        # 其他重算不会丢失装备加成
        controller.character.add_hospital_bill(10)
        assert controller.state.character.computed_stats.power == 16

        assert controller.unequip_item(EquipmentSlot.WEAPON).success is True
        assert controller.state.character.computed_stats.power == 10
        assert controller.unequip_item(EquipmentSlot.WEAPON).success is False

    def test_hospital_on_credit_accumulates_bill(self, controller: GameController):
        """多次赊账治疗的账单累加"""
        controller.character.apply_injury(InjurySeverity.MODERATE)
        controller.character.take_damage(40)
        result = controller.visit_hospital()
        assert result.bill_created is True
        assert controller.state.character.injury.is_injured is False
        assert controller.state.character.computed_stats.health == 100
        assert controller.state.character.hospital_bill.amount == 50

        controller.character.apply_injury(InjurySeverity.MINOR)
        controller.visit_hospital()
        assert controller.state.character.hospital_bill.amount == 70
        assert controller.state.character.hospital_bill.penalty == 7

    def test_hospital_short_on_gold_bills_shortfall(self, controller: GameController):
        """金币不足时先付清现有金币，只把差额记入账单"""
        controller.inventory.add_gold(30)
        controller.character.apply_injury(InjurySeverity.MODERATE)
        result = controller.visit_hospital()
        assert result.gold_paid == 30
        assert result.bill_amount == 20
        assert controller.state.inventory.gold == 0
        assert controller.state.character.hospital_bill.amount == 20
        assert controller.state.character.hospital_bill.penalty == 2
        assert controller.state.character.injury.is_injured is False

    def test_hospital_paid_with_gold(self, controller: GameController):
        """金币足够时直接付费治疗"""
        controller.inventory.add_gold(30)
        controller.character.apply_injury(InjurySeverity.MINOR)
        result = controller.visit_hospital()
        assert result.gold_paid == 20
        assert controller.state.inventory.gold == 10
        assert controller.state.character.hospital_bill is None

    def test_pay_bill(self, controller: GameController):
        """付清账单后移除惩罚"""
        controller.character.add_hospital_bill(50)
        assert controller.pay_bill().success is False

        controller.inventory.add_gold(60)
        result = controller.pay_bill()
        assert result.success is True
        assert controller.state.inventory.gold == 10
        assert controller.state.character.hospital_bill is None
        assert controller.state.character.computed_stats.focus == 10


class TestPersistence:
    async def test_resume_work_session_from_save(self, save_system, settings, rng, clock):
        """从存档恢复进行中的 WORK 会话"""
        game = GameController(create_new_game_state(clock=clock), save_system, settings, rng, clock)
        game.start()
        await game.flush()
        game.destroy()

        loaded = await save_system.load()
        assert loaded.success is True
        assert loaded.data.timer.phase == TimerPhase.WORK

        restored = GameController(loaded.data, save_system, settings, rng, clock)
        assert restored.executor.is_executing() is True
        restored.skip()
        assert restored.last_report is not None
        restored.destroy()

    async def test_run_loop_stops_and_flushes(self, save_system, settings, rng, clock):
        """主循环停止后写入存档"""
        game = GameController(create_new_game_state(clock=clock), save_system, settings, rng, clock)
        game.start()
        stop = asyncio.Event()
        loop_task = asyncio.create_task(game.run(stop))
        await asyncio.sleep(0.1)
        stop.set()
        await loop_task

        assert game.state.timer.remaining_seconds < 25 * 60
        assert save_system.has_pending_save is False
        assert await save_system.has_saved_game() is True
        game.destroy()
