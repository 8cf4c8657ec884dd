"""任务判定规则 -- 成功率、结果掷骰、奖励计算、总结文案

成功率 = 基础 + floor(主属性 / 2) + floor((装备力量 + 专注 + 幸运) * 0.5)
        + 风险修正 - 伤势惩罚 - 账单惩罚 + 事件修正，限制在 [5, 95]。
掷骰 [0, 100)：< 成功率为成功，< 成功率 + 20 为部分成功，否则失败。
"""

import math
import random

from ..character.injury import roll_injury, roll_injury_severity
from ..models import (
    ActiveTask,
    EarnedRewards,
    EventRewardBonus,
    InjurySeverity,
    RewardRange,
    RiskLevel,
    StatBonuses,
    SuccessChanceCalculation,
    TaskConfig,
    TaskOutcome,
    TaskSelectionContext,
)
from ..utils import random_int

MIN_SUCCESS_CHANCE = 5
MAX_SUCCESS_CHANCE = 95
PARTIAL_SUCCESS_WINDOW = 20

OUTCOME_REWARD_MULTIPLIERS: dict[TaskOutcome, float] = {
    TaskOutcome.SUCCESS: 1.0,
    TaskOutcome.PARTIAL: 0.5,
    TaskOutcome.FAILURE: 0.0,
}


def _fmt(value: float) -> str:
    """整数值不带小数，其余保留一位"""
    return str(int(value)) if float(value).is_integer() else f"{value:.1f}"


def _signed(value: float) -> str:
    return f"{'+' if value >= 0 else ''}{_fmt(value)}"


def calculate_stat_modifier(stat_value: int) -> int:
    return stat_value // 2


def calculate_equipment_modifier(bonuses: StatBonuses) -> int:
    return math.floor((bonuses.power + bonuses.focus + bonuses.luck) * 0.5)


def calculate_success_chance(
    config: TaskConfig,
    risk_level: RiskLevel,
    context: TaskSelectionContext,
    event_modifier: float = 0,
) -> SuccessChanceCalculation:
    """计算任务成功率及明细

    Args:
        config: 任务配置
        risk_level: 风险等级
        context: 角色快照
        event_modifier: 本次任务事件累计的成功率修正

    Returns:
        SuccessChanceCalculation，final_chance 在 [5, 95]
    """
    breakdown: list[str] = []

    base = config.base_success_chance
    breakdown.append(f"Base: {base}%")

    stat_name = config.primary_stat.value
    stat_modifier = calculate_stat_modifier(getattr(context.character_stats, stat_name))
    breakdown.append(f"{stat_name.capitalize()} (+{stat_modifier}%)")

    equipment_modifier = calculate_equipment_modifier(context.equipment_bonuses)
    if equipment_modifier > 0:
        breakdown.append(f"Equipment (+{equipment_modifier}%)")

    risk = config.risk_modifiers[risk_level]
    risk_modifier = risk.success_chance_modifier
    if risk_modifier != 0:
        breakdown.append(f"{risk.display_name} ({_signed(risk_modifier)}%)")

    injury_penalty = context.injury_penalty if context.is_injured else 0
    if injury_penalty > 0:
        breakdown.append(f"Injury (-{injury_penalty}%)")

    bill_penalty = context.bill_penalty
    if bill_penalty > 0:
        breakdown.append(f"Unpaid Bill (-{bill_penalty}%)")

    if event_modifier != 0:
        breakdown.append(f"Events ({_signed(event_modifier)}%)")

    final = (
        base
        + stat_modifier
        + equipment_modifier
        + risk_modifier
        - injury_penalty
        - bill_penalty
        + event_modifier
    )
    final = max(MIN_SUCCESS_CHANCE, min(MAX_SUCCESS_CHANCE, final))

    return SuccessChanceCalculation(
        base_chance=base,
        stat_modifier=stat_modifier,
        equipment_modifier=equipment_modifier,
        risk_modifier=risk_modifier,
        injury_penalty=injury_penalty,
        bill_penalty=bill_penalty,
        event_modifier=event_modifier,
        final_chance=final,
        breakdown=breakdown,
    )


def resolve_task_outcome(rng: random.Random, success_chance: float) -> tuple[TaskOutcome, float]:
    """掷骰判定结果

    Returns:
        (结果, 掷骰值)
    """
    roll = rng.random() * 100
    if roll < success_chance:
        return TaskOutcome.SUCCESS, roll
    if roll < success_chance + PARTIAL_SUCCESS_WINDOW:
        return TaskOutcome.PARTIAL, roll
    return TaskOutcome.FAILURE, roll


def _roll_range(rng: random.Random, reward: RewardRange, multiplier: float) -> int:
    low = math.floor(reward.min * multiplier)
    high = math.floor(reward.max * multiplier)
    return random_int(rng, low, max(low, high))


def calculate_rewards(
    rng: random.Random,
    config: TaskConfig,
    risk_level: RiskLevel,
    outcome: TaskOutcome,
    luck: int,
    event_bonus: EventRewardBonus | None = None,
) -> EarnedRewards:
    """计算实际奖励

    金币与材料受幸运加成（每点 +1%），经验不受；部分成功奖励减半、宝箱减半，
    失败无奖励。事件累积的奖励修正直接叠加，结果不低于 0。
    """
    rewards = config.rewards
    risk_multiplier = config.risk_modifiers[risk_level].reward_multiplier
    outcome_multiplier = OUTCOME_REWARD_MULTIPLIERS[outcome]
    luck_multiplier = 1.0 + luck * 0.01

    gold = _roll_range(rng, rewards.gold, risk_multiplier * outcome_multiplier * luck_multiplier)
    xp = _roll_range(rng, rewards.xp, risk_multiplier * outcome_multiplier)
    materials = _roll_range(
        rng, rewards.materials, risk_multiplier * outcome_multiplier * luck_multiplier
    )

    if outcome == TaskOutcome.SUCCESS:
        chests = rewards.chests
    elif outcome == TaskOutcome.PARTIAL:
        chests = rewards.chests // 2
    else:
        chests = 0

    loot_quality = rewards.loot_quality * risk_multiplier

    if event_bonus is not None:
        xp += event_bonus.xp
        materials += event_bonus.materials
        chests += event_bonus.extra_chests
        loot_quality += event_bonus.loot_quality

    return EarnedRewards(
        gold=max(0, gold),
        xp=max(0, xp),
        materials=max(0, materials),
        chests=max(0, chests),
        loot_quality=max(0.0, loot_quality),
    )


def should_apply_injury(
    rng: random.Random, config: TaskConfig, outcome: TaskOutcome, defense: int
) -> bool:
    return roll_injury(rng, outcome, config.injury_chance_on_failure, defense)


def determine_injury_severity(rng: random.Random, risk_level: RiskLevel) -> InjurySeverity:
    return roll_injury_severity(rng, risk_level)


def generate_task_summary(
    task: ActiveTask, outcome: TaskOutcome, rewards: EarnedRewards, was_injured: bool
) -> str:
    name = task.config.name
    risk_name = task.config.risk_modifiers[task.risk_level].display_name

    if outcome == TaskOutcome.SUCCESS:
        chest_word = "chest" if rewards.chests == 1 else "chests"
        return (
            f"{name} ({risk_name}) completed successfully! "
            f"Earned {rewards.gold} gold, {rewards.xp} XP, and {rewards.chests} {chest_word}."
        )
    if outcome == TaskOutcome.PARTIAL:
        return (
            f"{name} ({risk_name}) partially completed. "
            f"Earned {rewards.gold} gold and {rewards.xp} XP, but some objectives were missed."
        )
    if was_injured:
        return f"{name} ({risk_name}) failed! You were injured and need medical attention."
    return f"{name} ({risk_name}) failed! No rewards earned, but you escaped unharmed."
