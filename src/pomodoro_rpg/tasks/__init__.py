"""任务系统：成功率判定、执行进度、生命周期管理与结算"""

from .completion import TaskCompletionHandler
from .executor import TaskExecutor
from .manager import TaskManager, TaskStore
from .resolver import (
    MAX_SUCCESS_CHANCE,
    MIN_SUCCESS_CHANCE,
    calculate_rewards,
    calculate_success_chance,
    determine_injury_severity,
    generate_task_summary,
    resolve_task_outcome,
    should_apply_injury,
)

__all__ = [
    "TaskCompletionHandler",
    "TaskExecutor",
    "TaskManager",
    "TaskStore",
    "MIN_SUCCESS_CHANCE",
    "MAX_SUCCESS_CHANCE",
    "calculate_success_chance",
    "resolve_task_outcome",
    "calculate_rewards",
    "should_apply_injury",
    "determine_injury_severity",
    "generate_task_summary",
]
