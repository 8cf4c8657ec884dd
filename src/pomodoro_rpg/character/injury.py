"""伤势规则 -- 受伤判定、伤势等级、惩罚与治疗费用

只在任务失败时判定受伤，几率 max(5, 基础几率 - floor(防御 / 2))。
伤势等级由风险决定：safe 只会轻伤；standard 70/30 轻/中；risky 40/40/20。
"""

import random

from pydantic import BaseModel, Field

from ..models import CharacterState, InjurySeverity, RiskLevel, StatBonuses, TaskOutcome
from ..utils import Clock, now_ms, percent_chance, weighted_choice

MIN_INJURY_CHANCE = 5


class InjurySeverityConfig(BaseModel):
    """伤势等级配置"""

    severity: InjurySeverity
    success_penalty: int = Field(description="任务成功率惩罚（百分点）")
    stat_penalty_percent: int = Field(description="基础力量/专注扣减百分比")
    healing_cost: int = Field(description="医院治疗费用")
    display_name: str
    description: str


INJURY_SEVERITY_CONFIG: dict[InjurySeverity, InjurySeverityConfig] = {
    InjurySeverity.MINOR: InjurySeverityConfig(
        severity=InjurySeverity.MINOR,
        success_penalty=5,
        stat_penalty_percent=5,
        healing_cost=20,
        display_name="Minor Injury",
        description="A light wound that slightly impairs performance",
    ),
    InjurySeverity.MODERATE: InjurySeverityConfig(
        severity=InjurySeverity.MODERATE,
        success_penalty=10,
        stat_penalty_percent=10,
        healing_cost=50,
        display_name="Moderate Injury",
        description="A painful injury that significantly affects combat ability",
    ),
    InjurySeverity.SEVERE: InjurySeverityConfig(
        severity=InjurySeverity.SEVERE,
        success_penalty=20,
        stat_penalty_percent=20,
        healing_cost=100,
        display_name="Severe Injury",
        description="A critical wound requiring immediate medical attention",
    ),
}

# 风险等级 -> 伤势等级权重
SEVERITY_WEIGHTS_BY_RISK: dict[RiskLevel, list[tuple[InjurySeverity, int]]] = {
    RiskLevel.SAFE: [(InjurySeverity.MINOR, 100)],
    RiskLevel.STANDARD: [(InjurySeverity.MINOR, 70), (InjurySeverity.MODERATE, 30)],
    RiskLevel.RISKY: [
        (InjurySeverity.MINOR, 40),
        (InjurySeverity.MODERATE, 40),
        (InjurySeverity.SEVERE, 20),
    ],
}


def calculate_injury_chance(injury_chance: int, defense: int) -> int:
    return max(MIN_INJURY_CHANCE, injury_chance - defense // 2)


def roll_injury(
    rng: random.Random, outcome: TaskOutcome, injury_chance: int, defense: int
) -> bool:
    """失败时按几率判定是否受伤；成功 / 部分成功从不受伤"""
    if outcome != TaskOutcome.FAILURE:
        return False
    return percent_chance(rng, calculate_injury_chance(injury_chance, defense))


def roll_injury_severity(rng: random.Random, risk_level: RiskLevel) -> InjurySeverity:
    severity, _ = weighted_choice(rng, SEVERITY_WEIGHTS_BY_RISK[risk_level], lambda w: w[1])
    return severity


class InjuryApplicationResult(BaseModel):
    was_applied: bool = False
    severity: InjurySeverity | None = None
    message: str = ""


class InjuryManager:
    """伤势查询与判定"""

    def __init__(self, rng: random.Random | None = None, clock: Clock | None = None) -> None:
        self._rng = rng or random.Random()
        self._clock = clock or now_ms

    def should_apply_injury(self, outcome: TaskOutcome, injury_chance: int, defense: int) -> bool:
        return roll_injury(self._rng, outcome, injury_chance, defense)

    def determine_injury_severity(self, risk_level: RiskLevel) -> InjurySeverity:
        return roll_injury_severity(self._rng, risk_level)

    def apply_injury_if_needed(
        self,
        outcome: TaskOutcome,
        risk_level: RiskLevel,
        injury_chance: int,
        defense: int,
    ) -> InjuryApplicationResult:
        """判定受伤及等级（不修改角色，由调用方调用 CharacterStore.apply_injury）"""
        if not self.should_apply_injury(outcome, injury_chance, defense):
            return InjuryApplicationResult(message="You escaped without injury.")
        severity = self.determine_injury_severity(risk_level)
        config = INJURY_SEVERITY_CONFIG[severity]
        return InjuryApplicationResult(
            was_applied=True,
            severity=severity,
            message=f"You suffered a {config.display_name.lower()}! {config.description}.",
        )

    @staticmethod
    def get_success_chance_penalty(character: CharacterState) -> int:
        if not character.injury.is_injured:
            return 0
        return INJURY_SEVERITY_CONFIG[character.injury.severity].success_penalty

    @staticmethod
    def calculate_stat_penalties(character: CharacterState) -> StatBonuses:
        """伤势对基础力量/专注的扣减量（正数）"""
        if not character.injury.is_injured:
            return StatBonuses()
        percent = INJURY_SEVERITY_CONFIG[character.injury.severity].stat_penalty_percent
        return StatBonuses(
            power=character.base_stats.power * percent // 100,
            focus=character.base_stats.focus * percent // 100,
        )

    @staticmethod
    def is_critically_injured(character: CharacterState) -> bool:
        return character.injury.is_injured and character.injury.severity == InjurySeverity.SEVERE

    def get_time_since_injury(self, character: CharacterState) -> int | None:
        """受伤至今毫秒数，未受伤返回 None"""
        injury = character.injury
        if not injury.is_injured or injury.injured_at is None:
            return None
        return self._clock() - injury.injured_at

    @staticmethod
    def get_injury_status_message(character: CharacterState) -> str:
        if not character.injury.is_injured:
            return "You are in good health."
        config = INJURY_SEVERITY_CONFIG[character.injury.severity]
        return f"{config.display_name}: -{config.success_penalty}% success chance"

    @staticmethod
    def get_healing_cost(severity: InjurySeverity) -> int:
        return INJURY_SEVERITY_CONFIG[severity].healing_cost
