"""GameController -- 游戏根对象，把计时器、任务、事件、掉落、成长与存档串起来

阶段变化驱动游戏流程：
- 进入 WORK：开始所选任务，启动任务进度与事件会话
- WORK 正常结束（进入休息）：结算任务，发放金币/材料/经验/宝箱，判定受伤
- WORK 被重置回 IDLE：取消任务
每次状态变化后请求一次防抖保存。
"""

import asyncio
import random

import structlog
from pydantic import BaseModel, Field

from ..character.hospital import BillPaymentResult, HospitalSystem, HospitalVisitResult
from ..character.state import CharacterStore
from ..config import GameSettings
from ..data.event_config import get_event_config_preset
from ..data.tasks import get_task_config
from ..events.integration import EventTaskIntegration
from ..exceptions import InvalidStateTransitionError
from ..inventory import InventoryManager
from ..loot.chests import ChestManager, determine_chest_quality
from ..models import (
    Chest,
    ChestOpenResult,
    ConsumableItem,
    EquipmentSlot,
    EventEffectResult,
    GameEvent,
    GameState,
    ItemGenerationContext,
    RiskLevel,
    TaskCompletionResult,
    TaskOutcome,
    TaskSelectionContext,
    TaskType,
    TimerPhase,
    TimerState,
    XPGainEvent,
    is_equippable,
)
from ..progression import ProgressionManager
from ..store.save_system import SaveSystem
from ..tasks.completion import TaskCompletionHandler
from ..tasks.executor import TaskExecutor
from ..tasks.manager import TaskManager, TaskStore
from ..timer import PomodoroTimer
from ..utils import Clock, now_ms

log = structlog.get_logger()

# 事件把掉落品质扣到 0 以下时，宝箱仍保留最低品质
MIN_CHEST_LOOT_QUALITY = 0.1

_BREAK_PHASES = (TimerPhase.SHORT_BREAK, TimerPhase.LONG_BREAK)


class WorkSessionReport(BaseModel):
    """一次 WORK 阶段结束后的结算汇总"""

    result: TaskCompletionResult
    xp_gain: XPGainEvent
    chests_awarded: list[Chest] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)


class ActionResult(BaseModel):
    success: bool
    message: str
    effects: list[str] = Field(default_factory=list)


class GameController:
    """游戏根对象

    所有管理器都在这里创建并共享同一个 GameState 中的子状态对象，
    因此任何管理器的修改都直接体现在 GameState 上，保存时整体序列化。
    """

    def __init__(
        self,
        state: GameState,
        save_system: SaveSystem | None = None,
        settings: GameSettings | None = None,
        rng: random.Random | None = None,
        clock: Clock | None = None,
    ) -> None:
        self.state = state
        self._save_system = save_system
        self._settings = settings or GameSettings()
        self._rng = rng or random.Random()
        self._clock = clock or now_ms

        self.character = CharacterStore(state.character, self._clock)
        self.inventory = InventoryManager(state.inventory)
        self.task_manager = TaskManager(TaskStore(state.tasks), self._rng, self._clock)
        self.completion = TaskCompletionHandler(self.character, self.inventory)
        self.progression = ProgressionManager(state.progression, self.character, self._clock)
        self.chests = ChestManager(state.chests, self._rng, self._clock)
        self.hospital = HospitalSystem(self._clock)
        self.executor = TaskExecutor(self._rng, self._clock)
        self.events = EventTaskIntegration(
            config=get_event_config_preset(self._settings.event_mode),
            rng=self._rng,
            clock=self._clock,
        )

        self.selected_task: tuple[TaskType, RiskLevel] = (TaskType.EXPEDITION, RiskLevel.STANDARD)
        self.last_report: WorkSessionReport | None = None

        self.timer = PomodoroTimer(state.timer_config, state.timer, self._clock)
        self._phase = state.timer.phase
        self._unsubscribe = self.timer.subscribe(self._on_timer_change)

        self._sync_equipment()
        self.progression.sync_with_character()

        # 存档恢复到 WORK 阶段时继续执行未完成的任务
        active = self.task_manager.get_active_task()
        if self._phase == TimerPhase.WORK and active is not None:
            self._resume_active_task()

    # 状态辅助

    def _request_save(self) -> None:
        if self._save_system is None:
            return
        try:
            self._save_system.save(self.state)
        except RuntimeError:
            # 没有运行中的事件循环（同步调用场景），由调用方 flush
            log.debug("save_deferred_no_loop")

    def _sync_equipment(self) -> None:
        self.character.recalculate_stats(
            self.inventory.get_equipment_bonuses(self.character.state.equipment)
        )

    def build_selection_context(self) -> TaskSelectionContext:
        character = self.character.state
        bill = character.hospital_bill
        return TaskSelectionContext(
            character_level=character.level,
            character_stats=character.computed_stats.model_copy(),
            is_injured=character.injury.is_injured,
            injury_penalty=character.injury.success_penalty,
            bill_penalty=bill.penalty if bill else 0,
            equipment_bonuses=self.inventory.get_equipment_bonuses(character.equipment),
        )

    # 计时器

    def _on_timer_change(self, timer_state: TimerState) -> None:
        previous = self._phase
        self.state.timer = timer_state
        self._phase = timer_state.phase
        if timer_state.phase == previous:
            return

        if previous == TimerPhase.WORK and timer_state.phase in _BREAK_PHASES:
            self._finish_work_session()
        elif previous == TimerPhase.WORK and timer_state.phase == TimerPhase.IDLE:
            self._abort_work_session()

        if timer_state.phase == TimerPhase.WORK:
            self._begin_work_session()

        self._request_save()

    def _begin_work_session(self) -> None:
        if self.task_manager.get_active_task() is None:
            task_type, risk_level = self.selected_task
            self.task_manager.start_task(
                task_type,
                risk_level,
                get_task_config(task_type),
                self.build_selection_context(),
            )
        self._resume_active_task()

    def _resume_active_task(self) -> None:
        task = self.task_manager.get_active_task()
        duration_ms = self.timer.get_config().work_duration * 60 * 1000
        self.executor.start_execution(task, duration_ms, task.started_at)
        self.events.start_task_events(task.task_type)

    def _abort_work_session(self) -> None:
        self.events.end_task_events()
        self.executor.stop_execution()
        self.task_manager.cancel_task()

    def _finish_work_session(self) -> WorkSessionReport | None:
        self.events.end_task_events()
        self.executor.stop_execution()

        result = self.task_manager.complete_task(self.build_selection_context())
        if result is None:
            return None

        warnings = self.completion.process_completion(result)
        rewards = result.rewards
        task_type = result.task.task_type

        # 奖励已按结果折算，直接发放
        xp_gain = self.progression.add_xp(rewards.xp, result.outcome, task_type.value)
        self.task_manager.store.update_available_tasks(self.character.state.level)

        awarded: list[Chest] = []
        if rewards.chests > 0:
            quality = determine_chest_quality(
                self._rng,
                result.outcome == TaskOutcome.SUCCESS,
                self.character.state.computed_stats.luck,
            )
            awarded = self.chests.award_chests(
                task_type,
                rewards.chests,
                max(MIN_CHEST_LOOT_QUALITY, rewards.loot_quality),
                quality,
            )

        self.progression.record_session_completion()

        self.last_report = WorkSessionReport(
            result=result,
            xp_gain=xp_gain,
            chests_awarded=awarded,
            warnings=warnings,
        )
        log.info(
            "work_session_finished",
            task_type=task_type,
            outcome=result.outcome,
            gold=rewards.gold,
            xp=rewards.xp,
            chests=len(awarded),
            leveled_up=xp_gain.leveled_up,
        )
        return self.last_report

    def start(self) -> None:
        self.timer.start()

    def pause(self) -> None:
        self.timer.pause()
        self.events.pause()

    def resume(self) -> None:
        self.timer.resume()
        self.events.resume()

    def skip(self) -> None:
        self.timer.skip()

    def reset(self) -> None:
        self.timer.reset()

    def update_timer_config(self, **changes) -> None:
        self.timer.update_config(**changes)
        self.state.timer_config = self.timer.get_config()
        self.state.timer = self.timer.get_state()
        self._request_save()

    def tick(self) -> GameEvent | None:
        """推进一秒：计时器、状态效果、任务进度与随机事件

        Returns:
            本次 tick 生成的事件，没有时返回 None
        """
        self.timer.tick()
        now = self._clock()
        self.character.update_status_effects(now)

        task = self.task_manager.get_active_task()
        if self._phase != TimerPhase.WORK or task is None or not self.executor.is_executing():
            return None
        if self.state.timer.is_paused:
            return None

        # 进度按计时器已走过的专注时间计算，暂停期间不推进
        timer_state = self.timer.get_state()
        elapsed_seconds = (
            self.timer.get_config().duration_seconds(TimerPhase.WORK) - timer_state.remaining_seconds
        )
        progress, milestones = self.executor.update(task.started_at + elapsed_seconds * 1000)
        self.task_manager.update_progress(progress)
        for milestone in milestones:
            log.info("task_milestone", task_type=task.task_type, description=milestone)

        event = self.events.update(
            task.task_type, self.character.state, self.inventory.state, task
        )
        if event is not None:
            self.apply_event(event)
        self._request_save()
        return event

    def apply_event(self, event: GameEvent) -> EventEffectResult:
        task = self.task_manager.get_active_task()
        effect = self.events.apply_event(event, self.character.state, self.inventory.state, task)
        self.task_manager.add_event(event)
        log.info(
            "event_applied",
            template_id=event.template_id,
            severity=event.severity,
            applied=effect.applied_effects,
            blocked=effect.blocked_effects,
        )
        return effect

    async def run(self, stop: asyncio.Event | None = None) -> None:
        """游戏循环：先补偿离线时间，之后每 tick_seconds 推进一秒，直到 stop 被设置"""
        stop = stop or asyncio.Event()
        self.timer.sync_with_real_time()
        await log.ainfo("game_loop_started", tick_seconds=self._settings.tick_seconds)
        try:
            while not stop.is_set():
                try:
                    await asyncio.wait_for(stop.wait(), timeout=self._settings.tick_seconds)
                except TimeoutError:
                    self.tick()
        finally:
            await self.flush()
            await log.ainfo("game_loop_stopped")

    async def flush(self) -> None:
        if self._save_system is not None:
            await self._save_system.flush()

    # 玩家操作

    def select_task(self, task_type: TaskType, risk_level: RiskLevel) -> None:
        """选择下一个 WORK 阶段要执行的任务

        Raises:
            InvalidStateTransitionError: 任务未开放或等级不足
        """
        level = self.character.state.level
        if task_type not in self.task_manager.get_available_tasks(level):
            raise InvalidStateTransitionError("select task", f"Task {task_type} is not available")
        self.selected_task = (task_type, risk_level)
        log.info("task_selected", task_type=task_type, risk_level=risk_level)

    def open_chest(self, chest_id: str) -> ChestOpenResult | None:
        """开箱并把物品和金币放进背包

        Raises:
            ChestAlreadyOpenedError: 宝箱已开启过
        """
        stats = self.character.state.computed_stats
        result = self.chests.open_chest(
            chest_id,
            ItemGenerationContext(character_level=self.character.state.level, luck=stats.luck),
        )
        if result is None:
            return None

        self.inventory.add_gold(result.gold)
        for item in result.items:
            added = self.inventory.add_item(item)
            if added.items_overflow:
                log.warning("chest_item_lost_inventory_full", item_id=item.id, name=item.name)
        self._request_save()
        return result

    def use_item(self, item_id: str) -> ActionResult:
        """使用背包中的消耗品（消耗一个）"""
        item = self.inventory.get_item(item_id)
        if item is None:
            return ActionResult(success=False, message="Item not found")
        if not isinstance(item, ConsumableItem):
            return ActionResult(success=False, message=f"{item.name} cannot be used")

        effects = self.character.apply_consumable(item)
        self.inventory.remove_item(item_id, 1)
        self._request_save()
        log.info("item_used", item_id=item_id, effects=effects)
        return ActionResult(success=True, message=f"Used {item.name}", effects=effects)

    def equip_item(self, item_id: str) -> ActionResult:
        item = self.inventory.get_item(item_id)
        if item is None or not is_equippable(item):
            return ActionResult(success=False, message="Item cannot be equipped")
        self.character.equip_item(EquipmentSlot(item.equipment_slot), item_id)
        self._sync_equipment()
        self._request_save()
        return ActionResult(success=True, message=f"Equipped {item.name}")

    def unequip_item(self, slot: EquipmentSlot) -> ActionResult:
        previous = self.character.unequip_item(slot)
        if previous is None:
            return ActionResult(success=False, message=f"Nothing equipped in {slot} slot")
        self._sync_equipment()
        self._request_save()
        return ActionResult(success=True, message=f"Unequipped {slot}")

    def visit_hospital(self) -> HospitalVisitResult:
        """就医：治愈伤势、回满生命；金币不足时记入账单（与已有账单累加）"""
        character = self.character.state
        result = self.hospital.process_hospital_visit(character.injury, self.inventory.state.gold)
        if not result.success:
            return result

        if result.gold_paid:
            self.inventory.remove_gold(result.gold_paid)
        if result.bill_created:
            existing = character.hospital_bill.amount if character.hospital_bill else 0
            self.character.add_hospital_bill(existing + result.bill_amount)

        self.character.heal_injury()
        self.character.full_heal()
        self._request_save()
        log.info(
            "hospital_visited",
            gold_paid=result.gold_paid,
            bill_created=result.bill_created,
            bill_amount=result.bill_amount,
        )
        return result

    def pay_bill(self) -> BillPaymentResult:
        result = self.hospital.process_bill_payment(
            self.character.state.hospital_bill, self.inventory.state.gold
        )
        if result.success:
            self.inventory.remove_gold(result.amount_paid)
            self.character.pay_hospital_bill()
            self._request_save()
            log.info("hospital_bill_paid", amount=result.amount_paid)
        return result

    def destroy(self) -> None:
        self._unsubscribe()
        self.timer.destroy()
        self.events.reset()
