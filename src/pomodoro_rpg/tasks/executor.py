"""TaskExecutor -- 按 WORK 阶段实际流逝时间推进任务进度"""

import random

import structlog

from ..data.tasks import TASK_START_MESSAGES, get_progress_flavor, get_task_milestones
from ..models import ActiveTask
from ..utils import Clock, now_ms, random_choice

log = structlog.get_logger()


class TaskExecutor:
    """单个任务的执行进度

    进度 = clamp(已用时间 / 总时长 * 100, 0, 100)，每个里程碑在一次执行内只触发一次。
    """

    def __init__(self, rng: random.Random | None = None, clock: Clock | None = None) -> None:
        self._rng = rng or random.Random()
        self._clock = clock or now_ms
        self._task: ActiveTask | None = None
        self._duration_ms = 0
        self._started_at = 0
        self._progress = 0.0
        self._fired_milestones: set[int] = set()
        self._last_update = 0

    def start_execution(
        self, active_task: ActiveTask, duration_ms: int, started_at: int | None = None
    ) -> None:
        """开始执行

        Args:
            active_task: 进行中的任务
            duration_ms: 任务总时长（即 WORK 时长）
            started_at: 开始时间，默认取当前时钟
        """
        self._task = active_task
        self._duration_ms = max(0, duration_ms)
        self._started_at = self._clock() if started_at is None else started_at
        self._last_update = self._started_at
        self._progress = 0.0
        self._fired_milestones = set()

    def update(self, now: int | None = None) -> tuple[float, list[str]]:
        """按当前时间更新进度

        Returns:
            (进度, 本次新达到的里程碑描述)
        """
        if self._task is None:
            return self._progress, []

        current = self._clock() if now is None else now
        self._last_update = current
        if self._duration_ms <= 0:
            self._progress = 100.0
        else:
            elapsed = current - self._started_at
            self._progress = max(0.0, min(100.0, elapsed / self._duration_ms * 100))

        reached: list[str] = []
        for threshold, description in get_task_milestones(self._task.task_type):
            if self._progress >= threshold and threshold not in self._fired_milestones:
                self._fired_milestones.add(threshold)
                reached.append(description)
                log.debug(
                    "task_milestone_reached",
                    task_type=self._task.task_type,
                    milestone=threshold,
                )
        return self._progress, reached

    def get_progress(self) -> float:
        return self._progress

    def is_executing(self) -> bool:
        return self._task is not None

    def get_active_task(self) -> ActiveTask | None:
        return self._task

    def stop_execution(self) -> None:
        self._task = None
        self._duration_ms = 0
        self._progress = 0.0
        self._fired_milestones = set()

    def get_time_remaining(self, now: int | None = None) -> int:
        """剩余毫秒数，不小于 0"""
        if self._task is None:
            return 0
        current = self._last_update if now is None else now
        return max(0, self._started_at + self._duration_ms - current)

    def is_complete(self, now: int | None = None) -> bool:
        return self._task is not None and self.get_time_remaining(now) <= 0

    def get_progress_flavor(self) -> str:
        if self._task is None:
            return ""
        return get_progress_flavor(self._task.task_type, self._progress)

    def get_start_message(self) -> str:
        if self._task is None:
            return ""
        messages = TASK_START_MESSAGES.get(self._task.task_type)
        if not messages:
            return f"{self._task.config.name} begins."
        return random_choice(self._rng, messages)
