"""掉落表 -- 各任务类型的宝箱物品池与类型权重"""

from ..exceptions import UnknownTaskError
from ..models import ArmorType, LootTable, TaskType, TypeWeights, WeaponType
from .items import (
    ACCESSORY_TEMPLATES,
    get_armor_templates_by_type,
    get_weapon_templates_by_type,
)

_accessories = list(ACCESSORY_TEMPLATES.values())

EXPEDITION_LOOT_TABLE = LootTable(
    task_type=TaskType.EXPEDITION,
    item_pool=[
        # 远程与轻装
        *get_weapon_templates_by_type(WeaponType.BOW),
        *get_weapon_templates_by_type(WeaponType.STAFF),
        *get_weapon_templates_by_type(WeaponType.DAGGER),
        *get_weapon_templates_by_type(WeaponType.SPEAR),
        *get_armor_templates_by_type(ArmorType.LIGHT),
        *get_armor_templates_by_type(ArmorType.ROBE),
        *get_armor_templates_by_type(ArmorType.MEDIUM)[:2],
        *_accessories,
    ],
    consumable_pool=[
        "health-potion-minor",
        "health-potion",
        "bread",
        "cooked-meat",
        "fruit-basket",
        "travelers-rations",
        "elixir-of-focus",
        "elixir-of-fortune",
    ],
    type_weights=TypeWeights(weapon=30, armor=30, accessory=10, consumable=30),
)

RAID_LOOT_TABLE = LootTable(
    task_type=TaskType.RAID,
    item_pool=[
        # 近战与重装
        *get_weapon_templates_by_type(WeaponType.SWORD),
        *get_weapon_templates_by_type(WeaponType.AXE),
        *get_weapon_templates_by_type(WeaponType.MACE),
        *get_weapon_templates_by_type(WeaponType.SPEAR),
        *get_armor_templates_by_type(ArmorType.HEAVY),
        *get_armor_templates_by_type(ArmorType.MEDIUM),
        *_accessories,
    ],
    consumable_pool=[
        "health-potion",
        "health-potion-major",
        "healing-salve",
        "elixir-of-strength",
        "elixir-of-fortitude",
        "travelers-rations",
        "feast",
        "scroll-of-protection",
        "grand-elixir",
    ],
    type_weights=TypeWeights(weapon=40, armor=40, accessory=10, consumable=10),
)

CRAFT_LOOT_TABLE = LootTable(
    task_type=TaskType.CRAFT,
    item_pool=[
        *get_weapon_templates_by_type(WeaponType.DAGGER)[:2],
        *get_armor_templates_by_type(ArmorType.LIGHT)[:2],
        *_accessories,
    ],
    consumable_pool=[
        "health-potion-minor",
        "health-potion",
        "healing-salve",
        "bread",
        "cooked-meat",
        "fruit-basket",
        "elixir-of-focus",
    ],
    type_weights=TypeWeights(weapon=10, armor=10, accessory=10, consumable=70),
)

HUNT_LOOT_TABLE = LootTable(
    task_type=TaskType.HUNT,
    item_pool=[
        *get_weapon_templates_by_type(WeaponType.BOW),
        *get_weapon_templates_by_type(WeaponType.DAGGER),
        *get_armor_templates_by_type(ArmorType.LIGHT),
        *_accessories,
    ],
    consumable_pool=[
        "cooked-meat",
        "fruit-basket",
        "travelers-rations",
        "elixir-of-fortune",
        "scroll-of-fortune",
    ],
    type_weights=TypeWeights(weapon=35, armor=35, accessory=15, consumable=15),
)

# 休息任务只掉治疗物品
REST_LOOT_TABLE = LootTable(
    task_type=TaskType.REST,
    item_pool=[],
    consumable_pool=[
        "health-potion-minor",
        "health-potion",
        "health-potion-major",
        "healing-salve",
        "bread",
        "fruit-basket",
    ],
    type_weights=TypeWeights(weapon=0, armor=0, accessory=0, consumable=100),
)

LOOT_TABLES: dict[TaskType, LootTable] = {
    TaskType.EXPEDITION: EXPEDITION_LOOT_TABLE,
    TaskType.RAID: RAID_LOOT_TABLE,
    TaskType.CRAFT: CRAFT_LOOT_TABLE,
    TaskType.HUNT: HUNT_LOOT_TABLE,
    TaskType.REST: REST_LOOT_TABLE,
}


def get_loot_table(task_type: TaskType) -> LootTable:
    """Raises:
    UnknownTaskError: 未知任务类型
    """
    try:
        return LOOT_TABLES[task_type]
    except KeyError as e:
        raise UnknownTaskError(str(task_type)) from e
