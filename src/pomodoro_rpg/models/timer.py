"""番茄钟数据模型 -- TimerConfig / TimerState / TimerAction"""

from typing import Any

from pydantic import BaseModel, Field

from ..exceptions import TimerConfigValidationError
from .enums import TimerActionType, TimerPhase

# 各字段允许范围（分钟 / 次数）
TIMER_CONFIG_BOUNDS: dict[str, tuple[int, int, str]] = {
    "work_duration": (1, 60, "Work duration must be between 1 and 60 minutes"),
    "short_break_duration": (1, 30, "Short break duration must be between 1 and 30 minutes"),
    "long_break_duration": (1, 60, "Long break duration must be between 1 and 60 minutes"),
    "sessions_before_long_break": (
        1,
        10,
        "Sessions before long break must be between 1 and 10",
    ),
}


class TimerConfig(BaseModel):
    """计时器配置（用户设置）

    范围校验由 validate_timer_config() 完成，便于给出逐字段的错误信息。
    """

    work_duration: int = Field(default=25, description="专注时长（分钟）")
    short_break_duration: int = Field(default=5, description="短休息时长（分钟）")
    long_break_duration: int = Field(default=15, description="长休息时长（分钟）")
    sessions_before_long_break: int = Field(
        default=4,
        description="进入长休息前需要完成的专注次数",
    )

    def duration_seconds(self, phase: TimerPhase) -> int:
        """指定阶段的总秒数，IDLE 为 0"""
        minutes = {
            TimerPhase.WORK: self.work_duration,
            TimerPhase.SHORT_BREAK: self.short_break_duration,
            TimerPhase.LONG_BREAK: self.long_break_duration,
        }.get(phase, 0)
        return minutes * 60


DEFAULT_TIMER_CONFIG = TimerConfig()


def validate_timer_config(config: TimerConfig) -> TimerConfig:
    """校验计时器配置范围

    Args:
        config: 待校验配置

    Returns:
        原配置（校验通过）

    Raises:
        TimerConfigValidationError: 任一字段超出范围
    """
    errors = []
    for field_name, (low, high, message) in TIMER_CONFIG_BOUNDS.items():
        value = getattr(config, field_name)
        if value < low or value > high:
            errors.append(message)
    if errors:
        raise TimerConfigValidationError(errors)
    return config


class TimerState(BaseModel):
    """计时器状态

    不变量：is_paused 为 True 时 is_running 必为 True；
    每次进入新阶段 remaining_seconds 重置为该阶段时长 * 60。
    """

    phase: TimerPhase = Field(default=TimerPhase.IDLE, description="当前阶段")
    remaining_seconds: int = Field(default=0, ge=0, description="当前阶段剩余秒数")
    is_running: bool = Field(default=False, description="是否在运行")
    is_paused: bool = Field(default=False, description="是否暂停")
    completed_sessions: int = Field(default=0, ge=0, description="本轮已完成专注次数")
    total_completed_sessions: int = Field(default=0, ge=0, description="累计完成专注次数")
    last_update_timestamp: int = Field(default=0, description="最近一次更新的 epoch 毫秒")


class TimerAction(BaseModel):
    """计时器动作"""

    type: TimerActionType = Field(description="动作类型")
    delta_seconds: int = Field(default=0, ge=0, description="TICK 经过的秒数")
    config: dict[str, Any] | None = Field(
        default=None,
        description="UPDATE_CONFIG 的部分配置",
    )

    @classmethod
    def tick(cls, delta_seconds: int = 1) -> "TimerAction":
        return cls(type=TimerActionType.TICK, delta_seconds=delta_seconds)

    @classmethod
    def update_config(cls, **changes: Any) -> "TimerAction":
        return cls(type=TimerActionType.UPDATE_CONFIG, config=changes)
