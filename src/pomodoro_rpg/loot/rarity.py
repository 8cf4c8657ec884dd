"""稀有度系统 -- 配置、倍率与按幸运加权的稀有度抽取

抽取权重 = 基础掉落权重 * (1 + 幸运 * 0.02) ** 档位下标，
幸运越高，越高档位的权重放大得越多。
"""

import math
import random

from ..models import RARITY_ORDER, ItemRarity, RarityConfig
from ..utils import random_choice, weighted_choice

RARITY_CONFIGS: dict[ItemRarity, RarityConfig] = {
    ItemRarity.COMMON: RarityConfig(
        rarity=ItemRarity.COMMON,
        display_name="Common",
        stat_multiplier=1.0,
        value_multiplier=1.0,
        drop_weight=100,
        color="#9CA3AF",
    ),
    ItemRarity.UNCOMMON: RarityConfig(
        rarity=ItemRarity.UNCOMMON,
        display_name="Uncommon",
        stat_multiplier=1.3,
        value_multiplier=1.5,
        drop_weight=40,
        color="#10B981",
    ),
    ItemRarity.RARE: RarityConfig(
        rarity=ItemRarity.RARE,
        display_name="Rare",
        stat_multiplier=1.6,
        value_multiplier=2.5,
        drop_weight=15,
        color="#3B82F6",
    ),
    ItemRarity.EPIC: RarityConfig(
        rarity=ItemRarity.EPIC,
        display_name="Epic",
        stat_multiplier=2.0,
        value_multiplier=4.0,
        drop_weight=5,
        color="#A855F7",
    ),
    ItemRarity.LEGENDARY: RarityConfig(
        rarity=ItemRarity.LEGENDARY,
        display_name="Legendary",
        stat_multiplier=2.5,
        value_multiplier=7.0,
        drop_weight=1,
        color="#F59E0B",
    ),
}

RARITY_NAME_PREFIXES: dict[ItemRarity, list[str]] = {
    ItemRarity.UNCOMMON: ["Fine", "Quality", "Superior", "Refined"],
    ItemRarity.RARE: ["Exceptional", "Masterwork", "Pristine", "Exquisite"],
    ItemRarity.EPIC: ["Legendary", "Mythic", "Fabled", "Renowned"],
    ItemRarity.LEGENDARY: ["Ancient", "Divine", "Celestial", "Eternal", "Godlike"],
}


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


class RaritySystem:
    """稀有度抽取与倍率计算"""

    def __init__(self, rng: random.Random | None = None) -> None:
        self._rng = rng or random.Random()
        self._drops: dict[ItemRarity, int] = {r: 0 for r in RARITY_ORDER}

    @staticmethod
    def get_config(rarity: ItemRarity) -> RarityConfig:
        return RARITY_CONFIGS[rarity]

    @staticmethod
    def get_rarity_weights(luck: float = 0) -> list[tuple[ItemRarity, float]]:
        return [
            (rarity, RARITY_CONFIGS[rarity].drop_weight * (1 + luck * 0.02) ** index)
            for index, rarity in enumerate(RARITY_ORDER)
        ]

    def select_rarity(self, luck: float = 0) -> ItemRarity:
        rarity, _ = weighted_choice(self._rng, self.get_rarity_weights(luck), lambda w: w[1])
        self._drops[rarity] += 1
        return rarity

    @staticmethod
    def apply_stat_multiplier(base_stat: int, rarity: ItemRarity) -> int:
        return _round_half_up(base_stat * RARITY_CONFIGS[rarity].stat_multiplier)

    @staticmethod
    def apply_value_multiplier(base_value: int, rarity: ItemRarity) -> int:
        return _round_half_up(base_value * RARITY_CONFIGS[rarity].value_multiplier)

    def generate_item_name(self, base_name: str, rarity: ItemRarity) -> str:
        """非普通稀有度加随机前缀"""
        prefixes = RARITY_NAME_PREFIXES.get(rarity)
        if not prefixes:
            return base_name
        return f"{random_choice(self._rng, prefixes)} {base_name}"

    @staticmethod
    def compare(a: ItemRarity, b: ItemRarity) -> int:
        """a 高于 b 返回正数，低于返回负数"""
        return RARITY_ORDER.index(a) - RARITY_ORDER.index(b)

    @staticmethod
    def get_tier(rarity: ItemRarity) -> int:
        return RARITY_ORDER.index(rarity)

    def get_drop_rates(self) -> dict[ItemRarity, float]:
        """本实例已抽取的各稀有度占比（百分比）"""
        total = sum(self._drops.values())
        if total == 0:
            return {r: 0.0 for r in RARITY_ORDER}
        return {r: count / total * 100 for r, count in self._drops.items()}
