"""任务数据模型 -- 配置、进行中任务、完成结果、统计"""

import math

from pydantic import BaseModel, Field

from .character import CharacterStats, StatBonuses
from .enums import InjurySeverity, RiskLevel, StatName, TaskOutcome, TaskType
from .events import GameEvent


class RewardRange(BaseModel):
    min: int = Field(ge=0)
    max: int = Field(ge=0)


class TaskRewards(BaseModel):
    """任务配置上的奖励基数"""

    gold: RewardRange
    xp: RewardRange
    materials: RewardRange
    chests: int = Field(ge=0, description="成功时获得的宝箱数")
    loot_quality: float = Field(gt=0, description="掉落品质倍率")


class RiskModifier(BaseModel):
    """风险等级对成功率与奖励的修正"""

    success_chance_modifier: int = Field(description="成功率修正（百分点）")
    reward_multiplier: float = Field(gt=0, description="奖励倍率")
    display_name: str
    description: str = ""


class TaskConfig(BaseModel):
    """任务配置"""

    id: TaskType
    name: str
    description: str = ""
    base_success_chance: int = Field(ge=0, le=100, description="基础成功率")
    primary_stat: StatName = Field(description="主属性")
    risk_modifiers: dict[RiskLevel, RiskModifier]
    rewards: TaskRewards
    injury_chance_on_failure: int = Field(ge=0, le=100, description="失败时基础受伤几率")
    available: bool = True
    min_level: int = Field(default=1, ge=1)


class EarnedRewards(BaseModel):
    """任务实际获得的奖励"""

    gold: int = Field(default=0, ge=0)
    xp: int = Field(default=0, ge=0)
    materials: int = Field(default=0, ge=0)
    chests: int = Field(default=0, ge=0)
    loot_quality: float = Field(default=1.0, ge=0)


class EventRewardBonus(BaseModel):
    """任务期间事件累积的奖励修正，完成时并入 EarnedRewards"""

    xp: int = 0
    materials: int = 0
    extra_chests: int = 0
    loot_quality: float = 0.0


class ActiveTask(BaseModel):
    """进行中的任务"""

    task_type: TaskType
    risk_level: RiskLevel
    config: TaskConfig
    started_at: int = Field(description="开始时间（epoch 毫秒）")
    calculated_success_chance: float = Field(ge=0, le=100, description="当前预估成功率")
    progress: float = Field(default=0, ge=0, le=100, description="进度百分比")
    events: list[GameEvent] = Field(default_factory=list)
    event_bonus: EventRewardBonus = Field(default_factory=EventRewardBonus)
    outcome: TaskOutcome | None = None
    earned_rewards: EarnedRewards | None = None


class TaskCompletionResult(BaseModel):
    """任务完成结果"""

    task: ActiveTask
    outcome: TaskOutcome
    rewards: EarnedRewards
    final_success_chance: float
    roll: float = Field(description="判定掷骰 [0, 100)")
    was_injured: bool = False
    injury_severity: InjurySeverity | None = None
    event_count: int = 0
    summary: str = ""


class OutcomeCounts(BaseModel):
    started: int = 0
    succeeded: int = 0
    partial: int = 0
    failed: int = 0

    def record(self, outcome: TaskOutcome) -> None:
        self.started += 1
        if outcome == TaskOutcome.SUCCESS:
            self.succeeded += 1
        elif outcome == TaskOutcome.PARTIAL:
            self.partial += 1
        else:
            self.failed += 1

    def success_rate(self) -> int:
        """成功率（部分成功计半），0-100 取整"""
        if self.started == 0:
            return 0
        # 四舍五入（.5 进位）
        return math.floor((self.succeeded + self.partial * 0.5) / self.started * 100 + 0.5)


class TaskStatistics(BaseModel):
    total: OutcomeCounts = Field(default_factory=OutcomeCounts)
    by_type: dict[TaskType, OutcomeCounts] = Field(default_factory=dict)
    by_risk: dict[RiskLevel, OutcomeCounts] = Field(default_factory=dict)


def _default_available_tasks() -> list[TaskType]:
    return [TaskType.EXPEDITION, TaskType.RAID]


class TaskState(BaseModel):
    """任务系统状态"""

    active_task: ActiveTask | None = None
    last_completed_task: TaskCompletionResult | None = None
    task_history: list[TaskCompletionResult] = Field(
        default_factory=list,
        description="最近完成的任务（新的在前）",
    )
    available_tasks: list[TaskType] = Field(default_factory=_default_available_tasks)
    statistics: TaskStatistics = Field(default_factory=TaskStatistics)


class TaskSelectionContext(BaseModel):
    """成功率计算所需的角色快照"""

    character_level: int = 1
    character_stats: CharacterStats
    is_injured: bool = False
    injury_penalty: int = 0
    bill_penalty: int = 0
    equipment_bonuses: StatBonuses = Field(default_factory=StatBonuses)


class SuccessChanceCalculation(BaseModel):
    """成功率计算明细"""

    base_chance: int
    stat_modifier: int
    equipment_modifier: int
    risk_modifier: int
    injury_penalty: int
    bill_penalty: int
    event_modifier: float
    final_chance: float
    breakdown: list[str] = Field(default_factory=list)
