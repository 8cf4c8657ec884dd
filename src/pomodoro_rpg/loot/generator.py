"""LootGenerator -- 由模板和掉落表生成具体物品

装备：稀有度按 幸运 * 掉落品质 加权抽取，属性 = 模板区间随机值 * 稀有度属性倍率，
价值 = (10 + 等级 * randint(1, 5)) * 稀有度价值倍率。
消耗品：直接取目录中的定义，保留目录 ID 以便堆叠。
"""

import random

from ..data.items import get_consumable
from ..models import (
    AccessoryItem,
    ArmorItem,
    DamageRange,
    EquipmentItem,
    Item,
    ItemGenerationContext,
    ItemRarity,
    ItemTemplate,
    ItemType,
    LootTable,
    StatBonuses,
    WeaponItem,
)
from ..utils import new_id, random_choice, random_int
from .rarity import RaritySystem

_GENERATED_STATS = ("power", "defense", "focus", "luck")

# 类型掷骰顺序，消耗品补足剩余区间
_TYPE_ORDER = (ItemType.WEAPON, ItemType.ARMOR, ItemType.ACCESSORY)


class LootGenerator:
    """随机物品生成"""

    def __init__(
        self, rng: random.Random | None = None, rarity_system: RaritySystem | None = None
    ) -> None:
        self._rng = rng or random.Random()
        self._rarity = rarity_system or RaritySystem(self._rng)

    @property
    def rarity_system(self) -> RaritySystem:
        return self._rarity

    def generate_item(self, template: ItemTemplate, context: ItemGenerationContext) -> EquipmentItem:
        """按模板生成一件装备

        Raises:
            ValueError: 模板不是装备类型，或缺少对应的子类型
        """
        rarity = context.force_rarity or self._rarity.select_rarity(
            context.luck * context.loot_quality
        )
        stat_bonuses = self._generate_stat_bonuses(template, rarity)
        common = {
            "id": new_id(),
            "name": self._rarity.generate_item_name(template.name, rarity),
            "description": template.description,
            "rarity": rarity,
            "value": self.calculate_item_value(rarity, context.character_level),
            "icon": template.icon,
            "stat_bonuses": stat_bonuses,
        }

        if template.type == ItemType.WEAPON:
            if template.weapon_type is None:
                raise ValueError(f"Weapon template {template.id} has no weapon_type")
            base_damage = (stat_bonuses.power or 5) + context.character_level
            variance = max(3, int(base_damage * 0.3))
            return WeaponItem(
                **common,
                weapon_type=template.weapon_type,
                damage_range=DamageRange(
                    min=max(1, base_damage - variance), max=base_damage + variance
                ),
            )

        if template.type == ItemType.ARMOR:
            if template.armor_type is None:
                raise ValueError(f"Armor template {template.id} has no armor_type")
            base_armor = (stat_bonuses.defense or 3) + context.character_level // 2
            return ArmorItem(
                **common,
                armor_type=template.armor_type,
                armor_rating=self._rarity.apply_stat_multiplier(base_armor, rarity),
            )

        if template.type == ItemType.ACCESSORY:
            if template.accessory_type is None:
                raise ValueError(f"Accessory template {template.id} has no accessory_type")
            return AccessoryItem(
                **common,
                accessory_type=template.accessory_type,
                special_effect=template.special_effect,
            )

        raise ValueError(f"Cannot generate equipment from {template.type} template")

    def _generate_stat_bonuses(self, template: ItemTemplate, rarity: ItemRarity) -> StatBonuses:
        values: dict[str, int] = {}
        for stat in _GENERATED_STATS:
            stat_range = template.stat_ranges.get(stat)
            if stat_range is None:
                continue
            low, high = stat_range
            values[stat] = self._rarity.apply_stat_multiplier(
                random_int(self._rng, low, high), rarity
            )
        return StatBonuses(**values)

    def calculate_item_value(self, rarity: ItemRarity, character_level: int) -> int:
        base_value = 10 + character_level * random_int(self._rng, 1, 5)
        return self._rarity.apply_value_multiplier(base_value, rarity)

    def roll_item_type(self, table: LootTable) -> ItemType:
        """randint(1, 100) 对比累积类型权重"""
        roll = random_int(self._rng, 1, 100)
        cumulative = 0
        for item_type in _TYPE_ORDER:
            cumulative += getattr(table.type_weights, item_type.value)
            if roll <= cumulative:
                return item_type
        return ItemType.CONSUMABLE

    def generate_from_table(self, table: LootTable, context: ItemGenerationContext) -> Item | None:
        """从掉落表生成一件物品，对应池为空时返回 None"""
        item_type = self.roll_item_type(table)

        if item_type == ItemType.CONSUMABLE:
            if not table.consumable_pool:
                return None
            return get_consumable(random_choice(self._rng, table.consumable_pool))

        templates = [t for t in table.item_pool if t.type == item_type]
        if not templates:
            return None
        return self.generate_item(random_choice(self._rng, templates), context)

    def generate_items(
        self, templates: list[ItemTemplate], context: ItemGenerationContext, count: int = 1
    ) -> list[EquipmentItem]:
        return [
            self.generate_item(random_choice(self._rng, templates), context) for _ in range(count)
        ]

    def generate_gold(self, low: int, high: int, luck: float = 0) -> int:
        base = random_int(self._rng, low, high)
        return base + int(base * luck * 0.1)
