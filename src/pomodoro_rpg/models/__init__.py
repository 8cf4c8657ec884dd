"""Pomodoro RPG 数据模型 -- 公共类型导出

所有公共模型类型从此入口导入。
"""

from .character import (
    CharacterMetadata,
    CharacterState,
    CharacterStats,
    ClassConfig,
    EquippedItem,
    Equipment,
    HospitalBill,
    InjuryState,
    StatBonuses,
    StatusEffect,
)
from .enums import (
    RARITY_ORDER,
    VALID_TRANSITIONS,
    AccessoryType,
    ArmorType,
    CharacterClass,
    ChestQuality,
    ConsumableType,
    EquipmentSlot,
    EventCategory,
    EventSeverity,
    HealingOption,
    InjurySeverity,
    ItemRarity,
    ItemType,
    RiskLevel,
    StatName,
    StatusEffectType,
    TaskOutcome,
    TaskType,
    TimerActionType,
    TimerPhase,
    VisualCueType,
    WeaponType,
    validate_transition,
)
from .events import (
    EffectRange,
    EventConditionContext,
    EventConditions,
    EventEffectRanges,
    EventEffectResult,
    EventEffects,
    EventGenerationConfig,
    EventGenerationResult,
    EventTemplate,
    GameEvent,
    SeverityWeights,
    VisualCue,
)
from .game_state import GameMetadata, GameState, SaveResult
from .items import (
    AccessoryItem,
    AddedItem,
    AddItemResult,
    ArmorItem,
    BaseItem,
    ConsumableItem,
    DamageRange,
    EquipmentItem,
    InventoryMetadata,
    InventorySlot,
    InventoryState,
    Item,
    ItemComparison,
    ItemFilter,
    ItemTemplate,
    MaterialItem,
    OverflowItem,
    WeaponItem,
    is_equippable,
)
from .loot import (
    Chest,
    ChestOpenResult,
    ChestQualityConfig,
    ItemGenerationContext,
    LootTable,
    RarityConfig,
    TypeWeights,
)
from .progression import LevelUpEvent, ProgressionState, StreakData, XPGainEvent
from .tasks import (
    ActiveTask,
    EarnedRewards,
    EventRewardBonus,
    OutcomeCounts,
    RewardRange,
    RiskModifier,
    SuccessChanceCalculation,
    TaskCompletionResult,
    TaskConfig,
    TaskRewards,
    TaskSelectionContext,
    TaskState,
    TaskStatistics,
)
from .timer import (
    DEFAULT_TIMER_CONFIG,
    TimerAction,
    TimerConfig,
    TimerState,
    validate_timer_config,
)

__all__ = [
    # 枚举 / 状态机
    "TimerPhase",
    "TimerActionType",
    "VALID_TRANSITIONS",
    "validate_transition",
    "CharacterClass",
    "StatName",
    "InjurySeverity",
    "StatusEffectType",
    "ItemType",
    "ItemRarity",
    "RARITY_ORDER",
    "EquipmentSlot",
    "WeaponType",
    "ArmorType",
    "AccessoryType",
    "ConsumableType",
    "TaskType",
    "RiskLevel",
    "TaskOutcome",
    "EventSeverity",
    "EventCategory",
    "VisualCueType",
    "ChestQuality",
    "HealingOption",
    # 计时器
    "TimerConfig",
    "TimerState",
    "TimerAction",
    "DEFAULT_TIMER_CONFIG",
    "validate_timer_config",
    # 角色
    "CharacterStats",
    "StatBonuses",
    "EquippedItem",
    "Equipment",
    "InjuryState",
    "HospitalBill",
    "StatusEffect",
    "CharacterMetadata",
    "CharacterState",
    "ClassConfig",
    # 物品 / 背包
    "BaseItem",
    "DamageRange",
    "WeaponItem",
    "ArmorItem",
    "AccessoryItem",
    "ConsumableItem",
    "MaterialItem",
    "EquipmentItem",
    "Item",
    "is_equippable",
    "ItemTemplate",
    "InventorySlot",
    "InventoryMetadata",
    "InventoryState",
    "AddedItem",
    "OverflowItem",
    "AddItemResult",
    "ItemComparison",
    "ItemFilter",
    # 事件
    "EffectRange",
    "EventEffectRanges",
    "EventEffects",
    "VisualCue",
    "EventConditionContext",
    "EventConditions",
    "EventTemplate",
    "GameEvent",
    "SeverityWeights",
    "EventGenerationConfig",
    "EventGenerationResult",
    "EventEffectResult",
    # 任务
    "RewardRange",
    "TaskRewards",
    "RiskModifier",
    "TaskConfig",
    "EarnedRewards",
    "EventRewardBonus",
    "ActiveTask",
    "TaskCompletionResult",
    "OutcomeCounts",
    "TaskStatistics",
    "TaskState",
    "TaskSelectionContext",
    "SuccessChanceCalculation",
    # 掉落
    "RarityConfig",
    "ChestQualityConfig",
    "TypeWeights",
    "LootTable",
    "Chest",
    "ItemGenerationContext",
    "ChestOpenResult",
    # 成长
    "StreakData",
    "ProgressionState",
    "LevelUpEvent",
    "XPGainEvent",
    # 根状态
    "GameMetadata",
    "GameState",
    "SaveResult",
]
