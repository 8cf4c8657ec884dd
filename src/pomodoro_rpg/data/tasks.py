"""任务配置目录

expedition / raid 为当前开放任务；craft / hunt / rest 已定义但默认未开放。
"""

from ..exceptions import UnknownTaskError
from ..models import (
    RewardRange,
    RiskLevel,
    RiskModifier,
    StatName,
    TaskConfig,
    TaskRewards,
    TaskType,
)


def _risk(
    modifier: int, multiplier: float, name: str, description: str
) -> RiskModifier:
    return RiskModifier(
        success_chance_modifier=modifier,
        reward_multiplier=multiplier,
        display_name=name,
        description=description,
    )


def _rewards(
    gold: tuple[int, int],
    xp: tuple[int, int],
    materials: tuple[int, int],
    chests: int,
    loot_quality: float,
) -> TaskRewards:
    return TaskRewards(
        gold=RewardRange(min=gold[0], max=gold[1]),
        xp=RewardRange(min=xp[0], max=xp[1]),
        materials=RewardRange(min=materials[0], max=materials[1]),
        chests=chests,
        loot_quality=loot_quality,
    )


EXPEDITION_CONFIG = TaskConfig(
    id=TaskType.EXPEDITION,
    name="Expedition",
    description=(
        "Explore the wilderness in search of materials and treasure. "
        "Steady rewards with manageable risk."
    ),
    base_success_chance=60,
    primary_stat=StatName.FOCUS,
    risk_modifiers={
        RiskLevel.SAFE: _risk(
            15, 0.7, "Safe Route",
            "Take the well-traveled path. Higher success chance but lower rewards.",
        ),
        RiskLevel.STANDARD: _risk(
            0, 1.0, "Standard Route",
            "Balance risk and reward. Standard success chance and rewards.",
        ),
        RiskLevel.RISKY: _risk(
            -20, 1.5, "Dangerous Route",
            "Venture into perilous areas. Lower success chance but much higher rewards.",
        ),
    },
    rewards=_rewards(gold=(15, 30), xp=(20, 40), materials=(3, 8), chests=1, loot_quality=1.0),
    injury_chance_on_failure=20,
    available=True,
    min_level=1,
)

RAID_CONFIG = TaskConfig(
    id=TaskType.RAID,
    name="Raid",
    description="Assault enemy strongholds for gold and equipment. Dangerous but lucrative.",
    base_success_chance=50,
    primary_stat=StatName.POWER,
    risk_modifiers={
        RiskLevel.SAFE: _risk(
            20, 0.6, "Outpost Raid",
            "Target a lightly defended outpost. Higher success, modest rewards.",
        ),
        RiskLevel.STANDARD: _risk(
            0, 1.0, "Fortress Raid",
            "Attack a standard fortress. Balanced risk and reward.",
        ),
        RiskLevel.RISKY: _risk(
            -25, 1.8, "Citadel Raid",
            "Assault a heavily fortified citadel. Very dangerous but incredible rewards.",
        ),
    },
    rewards=_rewards(gold=(25, 50), xp=(30, 60), materials=(1, 4), chests=2, loot_quality=1.3),
    injury_chance_on_failure=35,
    available=True,
    min_level=1,
)

CRAFT_CONFIG = TaskConfig(
    id=TaskType.CRAFT,
    name="Crafting",
    description="Spend time crafting equipment, potions, and consumables. Safe and productive.",
    base_success_chance=75,
    primary_stat=StatName.FOCUS,
    risk_modifiers={
        RiskLevel.SAFE: _risk(10, 0.8, "Simple Crafts", "Craft basic items. Very safe, modest output."),
        RiskLevel.STANDARD: _risk(
            0, 1.0, "Standard Crafts",
            "Craft intermediate items. Balanced effort and output.",
        ),
        RiskLevel.RISKY: _risk(
            -15, 1.4, "Master Crafts",
            "Attempt complex recipes. Risk of failure but exceptional results.",
        ),
    },
    rewards=_rewards(gold=(10, 20), xp=(15, 30), materials=(5, 12), chests=1, loot_quality=0.8),
    injury_chance_on_failure=5,
    available=False,
    min_level=3,
)

HUNT_CONFIG = TaskConfig(
    id=TaskType.HUNT,
    name="Hunt",
    description=(
        "Track and hunt wild creatures for rare materials and pelts. "
        "Luck plays a major role."
    ),
    base_success_chance=55,
    primary_stat=StatName.LUCK,
    risk_modifiers={
        RiskLevel.SAFE: _risk(
            15, 0.7, "Small Game", "Hunt common creatures. Safer but less valuable."
        ),
        RiskLevel.STANDARD: _risk(
            0, 1.0, "Medium Game", "Hunt standard creatures. Balanced risk and reward."
        ),
        RiskLevel.RISKY: _risk(
            -20, 1.6, "Legendary Beast",
            "Hunt rare and dangerous creatures. High risk, exceptional rewards.",
        ),
    },
    rewards=_rewards(gold=(20, 40), xp=(25, 50), materials=(4, 10), chests=2, loot_quality=1.5),
    injury_chance_on_failure=30,
    available=False,
    min_level=2,
)

REST_CONFIG = TaskConfig(
    id=TaskType.REST,
    name="Rest & Recovery",
    description=(
        "Take a break to rest and recover. Heals injuries and restores health. "
        "No risk of failure."
    ),
    base_success_chance=100,
    primary_stat=StatName.FOCUS,
    risk_modifiers={
        RiskLevel.SAFE: _risk(0, 1.0, "Light Rest", "Gentle recovery. Modest healing."),
        RiskLevel.STANDARD: _risk(0, 1.0, "Full Rest", "Complete rest. Good healing."),
        RiskLevel.RISKY: _risk(0, 1.0, "Deep Rest", "Extended rest. Maximum healing."),
    },
    rewards=_rewards(gold=(5, 10), xp=(10, 20), materials=(0, 1), chests=0, loot_quality=0.5),
    injury_chance_on_failure=0,
    available=False,
    min_level=1,
)

TASK_CONFIGS: dict[TaskType, TaskConfig] = {
    TaskType.EXPEDITION: EXPEDITION_CONFIG,
    TaskType.RAID: RAID_CONFIG,
    TaskType.CRAFT: CRAFT_CONFIG,
    TaskType.HUNT: HUNT_CONFIG,
    TaskType.REST: REST_CONFIG,
}


def get_task_config(task_type: TaskType | str) -> TaskConfig:
    """按任务类型获取配置

    Raises:
        UnknownTaskError: 未知任务类型
    """
    try:
        return TASK_CONFIGS[TaskType(task_type)]
    except (KeyError, ValueError) as e:
        raise UnknownTaskError(str(task_type)) from e


def get_task_configs_for_level(level: int) -> list[TaskConfig]:
    """已开放且等级满足的任务"""
    return [c for c in TASK_CONFIGS.values() if c.available and c.min_level <= level]


# 进度里程碑（进度百分比, 描述），每次执行各触发一次
TASK_MILESTONES: dict[TaskType, list[tuple[int, str]]] = {
    TaskType.EXPEDITION: [
        (25, "First quarter complete - the expedition is underway."),
        (50, "Halfway point reached - the path ahead is clearer."),
        (75, "Three quarters done - the destination is in sight."),
    ],
    TaskType.RAID: [
        (20, "Breached the outer defenses - the raid begins in earnest."),
        (50, "Reached the inner sanctum - the highest value targets await."),
        (80, "Extraction phase - time to escape with the loot."),
    ],
}

_DEFAULT_MILESTONES = [
    (25, "A quarter of the way there."),
    (50, "Halfway there."),
    (75, "Almost done."),
]

# 进度描述（进度上限, 描述），取第一个 progress < 上限 的条目
TASK_PROGRESS_FLAVOR: dict[TaskType, list[tuple[int, str]]] = {
    TaskType.EXPEDITION: [
        (10, "Setting out on the expedition, checking supplies and equipment."),
        (25, "Traversing the initial terrain, mapping the route ahead."),
        (40, "Steadily progressing through diverse landscapes."),
        (60, "Reaching deeper into unexplored territory."),
        (75, "Gathering resources and documenting discoveries."),
        (90, "Beginning the return journey with collected materials."),
        (101, "Final stretch - nearly back to base camp."),
    ],
    TaskType.RAID: [
        (15, "Approaching the target under cover of darkness."),
        (30, "Breaching outer defenses, initial resistance encountered."),
        (50, "Fighting through enemy territory, securing key positions."),
        (65, "Deep within enemy stronghold, high-value targets in sight."),
        (80, "Claiming loot and securing objectives amidst fierce combat."),
        (95, "Fighting a tactical retreat, protecting acquired treasure."),
        (101, "Final push to escape with the spoils of war."),
    ],
}

TASK_START_MESSAGES: dict[TaskType, list[str]] = {
    TaskType.EXPEDITION: [
        "The expedition begins - adventure awaits beyond the horizon.",
        "You set out with determination, ready to explore the unknown.",
        "Maps unfurled, supplies checked - it's time to venture forth.",
        "The call of discovery pulls you into uncharted lands.",
    ],
    TaskType.RAID: [
        "The raid begins - steel yourself for battle!",
        "You approach the enemy stronghold under cover of night.",
        "Time to strike - for glory and gold!",
        "The fortress stands before you, ripe for plunder.",
    ],
}


def get_task_milestones(task_type: TaskType) -> list[tuple[int, str]]:
    return TASK_MILESTONES.get(task_type, _DEFAULT_MILESTONES)


def get_progress_flavor(task_type: TaskType, progress: float) -> str:
    for limit, text in TASK_PROGRESS_FLAVOR.get(task_type, []):
        if progress < limit:
            return text
    return "Working steadily on the task."
