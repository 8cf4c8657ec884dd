"""枚举定义

包含计时器阶段、角色、物品、任务、事件、宝箱相关枚举，
以及计时器阶段的 VALID_TRANSITIONS 合法流转映射。
"""

from enum import StrEnum


class TimerPhase(StrEnum):
    """番茄钟阶段"""

    IDLE = "IDLE"
    WORK = "WORK"
    SHORT_BREAK = "SHORT_BREAK"
    LONG_BREAK = "LONG_BREAK"


class TimerActionType(StrEnum):
    """计时器动作"""

    START = "START"
    PAUSE = "PAUSE"
    RESUME = "RESUME"
    SKIP = "SKIP"
    RESET = "RESET"
    TICK = "TICK"
    UPDATE_CONFIG = "UPDATE_CONFIG"


# 阶段合法流转（RESET 可从任意阶段回到 IDLE，单独处理）
VALID_TRANSITIONS: dict[TimerPhase, set[TimerPhase]] = {
    TimerPhase.IDLE: {TimerPhase.WORK},
    TimerPhase.WORK: {TimerPhase.SHORT_BREAK, TimerPhase.LONG_BREAK},
    TimerPhase.SHORT_BREAK: {TimerPhase.WORK},
    TimerPhase.LONG_BREAK: {TimerPhase.WORK},
}


def validate_transition(from_phase: TimerPhase, to_phase: TimerPhase) -> bool:
    """验证阶段流转是否合法

    Args:
        from_phase: 当前阶段
        to_phase: 目标阶段

    Returns:
        True 如果流转合法，否则 False
    """
    return to_phase in VALID_TRANSITIONS.get(from_phase, set())


class CharacterClass(StrEnum):
    """角色职业"""

    VANGUARD = "Vanguard"
    ARCANIST = "Arcanist"
    ROGUE = "Rogue"


class StatName(StrEnum):
    """可被装备/效果修正的属性"""

    POWER = "power"
    DEFENSE = "defense"
    FOCUS = "focus"
    LUCK = "luck"
    HEALTH = "health"
    MAX_HEALTH = "max_health"


class InjurySeverity(StrEnum):
    """伤势等级"""

    MINOR = "minor"
    MODERATE = "moderate"
    SEVERE = "severe"


class StatusEffectType(StrEnum):
    BUFF = "buff"
    DEBUFF = "debuff"


class ItemType(StrEnum):
    """物品类型"""

    WEAPON = "weapon"
    ARMOR = "armor"
    ACCESSORY = "accessory"
    CONSUMABLE = "consumable"
    MATERIAL = "material"


class ItemRarity(StrEnum):
    """稀有度，声明顺序即从低到高"""

    COMMON = "common"
    UNCOMMON = "uncommon"
    RARE = "rare"
    EPIC = "epic"
    LEGENDARY = "legendary"


RARITY_ORDER: list[ItemRarity] = list(ItemRarity)


class EquipmentSlot(StrEnum):
    """装备栏位"""

    WEAPON = "weapon"
    ARMOR = "armor"
    ACCESSORY = "accessory"


class WeaponType(StrEnum):
    SWORD = "sword"
    AXE = "axe"
    STAFF = "staff"
    BOW = "bow"
    DAGGER = "dagger"
    MACE = "mace"
    SPEAR = "spear"


class ArmorType(StrEnum):
    LIGHT = "light"
    MEDIUM = "medium"
    HEAVY = "heavy"
    ROBE = "robe"


class AccessoryType(StrEnum):
    RING = "ring"
    AMULET = "amulet"
    CHARM = "charm"
    TRINKET = "trinket"


class ConsumableType(StrEnum):
    POTION = "potion"
    FOOD = "food"
    SCROLL = "scroll"
    ELIXIR = "elixir"


class TaskType(StrEnum):
    """任务类型"""

    EXPEDITION = "expedition"
    RAID = "raid"
    CRAFT = "craft"
    HUNT = "hunt"
    REST = "rest"


class RiskLevel(StrEnum):
    """任务风险等级"""

    SAFE = "safe"
    STANDARD = "standard"
    RISKY = "risky"


class TaskOutcome(StrEnum):
    """任务结果"""

    SUCCESS = "success"
    PARTIAL = "partial"
    FAILURE = "failure"


class EventSeverity(StrEnum):
    """事件严重度"""

    FLAVOR = "flavor"
    INFO = "info"
    WARNING = "warning"
    CRITICAL = "critical"


class EventCategory(StrEnum):
    """事件类别"""

    COMBAT = "combat"
    LOOT = "loot"
    HAZARD = "hazard"
    NPC = "npc"
    FORTUNE = "fortune"
    EQUIPMENT = "equipment"
    HEALTH = "health"
    ECONOMY = "economy"
    MYSTERY = "mystery"


class VisualCueType(StrEnum):
    SPARKLE = "sparkle"
    DAMAGE = "damage"
    WARNING = "warning"
    TREASURE = "treasure"
    SHIELD = "shield"
    SKULL = "skull"
    STAR = "star"
    QUESTION = "question"


class ChestQuality(StrEnum):
    """宝箱品质，声明顺序即从低到高"""

    BASIC = "basic"
    QUALITY = "quality"
    SUPERIOR = "superior"
    MASTERWORK = "masterwork"


class HealingOption(StrEnum):
    """治疗方式"""

    POTION = "potion"
    HOSPITAL = "hospital"
    REST = "rest"
