"""掉落系统：稀有度、物品生成与宝箱"""

from .chests import (
    CHEST_QUALITY_CONFIGS,
    ChestManager,
    create_chest,
    create_chests,
    determine_chest_quality,
    estimate_chest_value,
    get_chest_quality_config,
    open_chest,
)
from .generator import LootGenerator
from .rarity import RARITY_CONFIGS, RaritySystem

__all__ = [
    "CHEST_QUALITY_CONFIGS",
    "ChestManager",
    "create_chest",
    "create_chests",
    "determine_chest_quality",
    "estimate_chest_value",
    "get_chest_quality_config",
    "open_chest",
    "LootGenerator",
    "RARITY_CONFIGS",
    "RaritySystem",
]
