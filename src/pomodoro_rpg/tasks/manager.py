"""TaskStore / TaskManager -- 任务选择、执行、结算的生命周期"""

import random

import structlog

from ..config import TASK_HISTORY_LIMIT
from ..data.tasks import get_task_configs_for_level
from ..models import (
    ActiveTask,
    GameEvent,
    OutcomeCounts,
    RiskLevel,
    SuccessChanceCalculation,
    TaskCompletionResult,
    TaskConfig,
    TaskSelectionContext,
    TaskState,
    TaskType,
)
from ..utils import Clock, now_ms
from .resolver import (
    calculate_rewards,
    calculate_success_chance,
    determine_injury_severity,
    generate_task_summary,
    resolve_task_outcome,
    should_apply_injury,
)

log = structlog.get_logger()


class TaskStore:
    """任务状态容器"""

    def __init__(self, state: TaskState | None = None) -> None:
        self.state = state or TaskState()

    def set_active_task(self, task: ActiveTask) -> None:
        self.state.active_task = task

    def clear_active_task(self) -> None:
        self.state.active_task = None

    def update_task_progress(self, progress: float) -> None:
        if self.state.active_task is not None:
            self.state.active_task.progress = max(0.0, min(100.0, progress))

    def add_task_event(self, event: GameEvent) -> None:
        if self.state.active_task is not None:
            self.state.active_task.events.append(event)

    def complete_active_task(self, result: TaskCompletionResult) -> None:
        """写入结果：清空进行中任务，历史新的在前并截断，更新统计"""
        self.state.active_task = None
        self.state.last_completed_task = result
        self.state.task_history = [result, *self.state.task_history][:TASK_HISTORY_LIMIT]

        stats = self.state.statistics
        task = result.task
        stats.total.record(result.outcome)
        stats.by_type.setdefault(task.task_type, OutcomeCounts()).record(result.outcome)
        stats.by_risk.setdefault(task.risk_level, OutcomeCounts()).record(result.outcome)

    def clear_last_completed_task(self) -> None:
        self.state.last_completed_task = None

    def update_available_tasks(self, character_level: int) -> None:
        """按等级刷新可选任务（已开放且满足最低等级）"""
        self.state.available_tasks = [
            config.id for config in get_task_configs_for_level(character_level)
        ]

    def get_overall_success_rate(self) -> int:
        return self.state.statistics.total.success_rate()

    def get_task_type_success_rate(self, task_type: TaskType) -> int:
        counts = self.state.statistics.by_type.get(task_type)
        return counts.success_rate() if counts else 0

    def get_risk_level_success_rate(self, risk_level: RiskLevel) -> int:
        counts = self.state.statistics.by_risk.get(risk_level)
        return counts.success_rate() if counts else 0

    def reset(self) -> None:
        self.state = TaskState()


class TaskManager:
    """任务生命周期编排

    start_task() 计算初始成功率并设置进行中任务；
    complete_task() 汇总事件成功率修正后重新计算成功率、掷骰、计算奖励与受伤。
    """

    def __init__(
        self,
        store: TaskStore,
        rng: random.Random | None = None,
        clock: Clock | None = None,
    ) -> None:
        self._store = store
        self._rng = rng or random.Random()
        self._clock = clock or now_ms

    @property
    def store(self) -> TaskStore:
        return self._store

    def start_task(
        self,
        task_type: TaskType,
        risk_level: RiskLevel,
        config: TaskConfig,
        context: TaskSelectionContext,
    ) -> ActiveTask:
        calculation = calculate_success_chance(config, risk_level, context)
        task = ActiveTask(
            task_type=task_type,
            risk_level=risk_level,
            config=config,
            started_at=self._clock(),
            calculated_success_chance=calculation.final_chance,
        )
        self._store.set_active_task(task)
        log.info(
            "task_started",
            task_type=task_type,
            risk_level=risk_level,
            success_chance=calculation.final_chance,
        )
        return task

    def update_progress(self, progress: float) -> None:
        self._store.update_task_progress(progress)

    def add_event(self, event: GameEvent) -> None:
        self._store.add_task_event(event)

    def complete_task(self, context: TaskSelectionContext) -> TaskCompletionResult | None:
        """结算进行中任务

        Args:
            context: 结算时的角色快照

        Returns:
            TaskCompletionResult，没有进行中任务时返回 None
        """
        task = self._store.state.active_task
        if task is None:
            log.warning("no_active_task_to_complete")
            return None

        event_modifier = sum(e.effects.success_chance_modifier or 0 for e in task.events)
        calculation = calculate_success_chance(
            task.config, task.risk_level, context, event_modifier
        )
        outcome, roll = resolve_task_outcome(self._rng, calculation.final_chance)
        rewards = calculate_rewards(
            self._rng,
            task.config,
            task.risk_level,
            outcome,
            context.character_stats.luck,
            task.event_bonus,
        )

        was_injured = should_apply_injury(
            self._rng, task.config, outcome, context.character_stats.defense
        )
        severity = determine_injury_severity(self._rng, task.risk_level) if was_injured else None

        task.outcome = outcome
        task.earned_rewards = rewards
        task.progress = 100

        result = TaskCompletionResult(
            task=task,
            outcome=outcome,
            rewards=rewards,
            final_success_chance=calculation.final_chance,
            roll=roll,
            was_injured=was_injured,
            injury_severity=severity,
            event_count=len(task.events),
            summary=generate_task_summary(task, outcome, rewards, was_injured),
        )
        self._store.complete_active_task(result)

        log.info(
            "task_completed",
            task_type=task.task_type,
            outcome=outcome,
            success_chance=calculation.final_chance,
            roll=round(roll, 2),
            was_injured=was_injured,
        )
        return result

    def cancel_task(self) -> None:
        if self._store.state.active_task is not None:
            log.info("task_cancelled", task_type=self._store.state.active_task.task_type)
        self._store.clear_active_task()

    def get_available_tasks(self, character_level: int) -> list[TaskType]:
        self._store.update_available_tasks(character_level)
        return list(self._store.state.available_tasks)

    def get_active_task(self) -> ActiveTask | None:
        return self._store.state.active_task

    def get_last_completed_task(self) -> TaskCompletionResult | None:
        return self._store.state.last_completed_task

    def clear_last_completed_task(self) -> None:
        self._store.clear_last_completed_task()

    def get_task_history(self) -> list[TaskCompletionResult]:
        return self._store.state.task_history

    def get_success_rate(self) -> int:
        return self._store.get_overall_success_rate()

    def get_task_type_success_rate(self, task_type: TaskType) -> int:
        return self._store.get_task_type_success_rate(task_type)

    def get_risk_level_success_rate(self, risk_level: RiskLevel) -> int:
        return self._store.get_risk_level_success_rate(risk_level)

    @staticmethod
    def preview_success_chance(
        config: TaskConfig, risk_level: RiskLevel, context: TaskSelectionContext
    ) -> SuccessChanceCalculation:
        return calculate_success_chance(config, risk_level, context)
