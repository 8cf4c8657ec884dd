"""成长数据模型 -- 经验、等级、连续专注天数"""

from pydantic import BaseModel, Field

from .enums import TaskOutcome


class StreakData(BaseModel):
    """连续天数统计"""

    current_streak: int = Field(default=0, ge=0, description="当前连续天数")
    longest_streak: int = Field(default=0, ge=0, description="历史最长连续天数")
    last_completion_date: str | None = Field(default=None, description="最近完成日期（ISO）")
    total_active_days: int = Field(default=0, ge=0, description="累计活跃天数")


class ProgressionState(BaseModel):
    level: int = Field(default=1, ge=1)
    current_xp: int = Field(default=0, ge=0, description="本级已获得经验")
    xp_to_next_level: int = Field(default=100, ge=0, description="距下一级还需经验")
    total_xp: int = Field(default=0, ge=0, description="累计经验")
    streak: StreakData = Field(default_factory=StreakData)


class LevelUpEvent(BaseModel):
    previous_level: int
    new_level: int
    overflow: int = Field(description="升级后本级已有经验")
    timestamp: int


class XPGainEvent(BaseModel):
    amount: int
    source: str
    outcome: TaskOutcome
    leveled_up: bool = False
    level_up_event: LevelUpEvent | None = None
    timestamp: int
