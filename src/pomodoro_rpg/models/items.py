"""物品与背包数据模型

Item 是按 type 字段区分的联合类型：Weapon / Armor / Accessory / Consumable / Material。
"""

from typing import Annotated, Literal

from pydantic import BaseModel, Field

from ..config import DEFAULT_INVENTORY_SLOTS, DEFAULT_QUICK_SLOTS
from .character import StatBonuses
from .enums import (
    AccessoryType,
    ArmorType,
    ConsumableType,
    EquipmentSlot,
    ItemRarity,
    ItemType,
    WeaponType,
)


class BaseItem(BaseModel):
    """所有物品的公共字段"""

    id: str = Field(description="物品 ID（同 ID 可堆叠）")
    name: str = Field(description="显示名")
    description: str = Field(default="", description="描述")
    rarity: ItemRarity = Field(default=ItemRarity.COMMON, description="稀有度")
    value: int = Field(default=0, ge=0, description="金币价值")
    icon: str = Field(default="", description="图标标识")
    sellable: bool = Field(default=True, description="是否可出售")
    max_stack: int = Field(default=1, ge=1, description="单格最大堆叠数")


class DamageRange(BaseModel):
    min: int
    max: int


class WeaponItem(BaseItem):
    type: Literal["weapon"] = "weapon"
    equipment_slot: Literal["weapon"] = "weapon"
    stat_bonuses: StatBonuses = Field(default_factory=StatBonuses)
    weapon_type: WeaponType
    damage_range: DamageRange | None = None


class ArmorItem(BaseItem):
    type: Literal["armor"] = "armor"
    equipment_slot: Literal["armor"] = "armor"
    stat_bonuses: StatBonuses = Field(default_factory=StatBonuses)
    armor_type: ArmorType
    armor_rating: int = 0


class AccessoryItem(BaseItem):
    type: Literal["accessory"] = "accessory"
    equipment_slot: Literal["accessory"] = "accessory"
    stat_bonuses: StatBonuses = Field(default_factory=StatBonuses)
    accessory_type: AccessoryType
    special_effect: str | None = None


class ConsumableItem(BaseItem):
    type: Literal["consumable"] = "consumable"
    consumable_type: ConsumableType
    heal_amount: int | None = Field(default=None, description="恢复生命值")
    cures_injury: bool = Field(default=False, description="是否治愈伤势")
    buff_duration: int | None = Field(default=None, description="增益持续时间（毫秒）")
    buff_stats: StatBonuses | None = Field(default=None, description="增益属性")


class MaterialItem(BaseItem):
    type: Literal["material"] = "material"
    material_type: str = Field(description="材料类别")
    tier: int = Field(default=1, ge=1, description="材料等级")


EquipmentItem = WeaponItem | ArmorItem | AccessoryItem

Item = Annotated[
    WeaponItem | ArmorItem | AccessoryItem | ConsumableItem | MaterialItem,
    Field(discriminator="type"),
]


def is_equippable(item: BaseItem) -> bool:
    """物品是否可装备"""
    return isinstance(item, WeaponItem | ArmorItem | AccessoryItem)


class ItemTemplate(BaseModel):
    """装备模板 -- 掉落生成时在 stat_ranges 内随机"""

    id: str
    name: str
    description: str = ""
    type: ItemType
    icon: str = ""
    stat_ranges: dict[str, tuple[int, int]] = Field(
        default_factory=dict,
        description="属性名 -> (最小值, 最大值)",
    )
    weapon_type: WeaponType | None = None
    armor_type: ArmorType | None = None
    accessory_type: AccessoryType | None = None
    special_effect: str | None = None


class InventorySlot(BaseModel):
    slot_id: str = Field(description="格子 ID（slot-0 ...）")
    item: Item | None = Field(default=None, description="格中物品")
    quantity: int = Field(default=0, ge=0, description="数量")
    locked: bool = Field(default=False, description="锁定后不可放入/移入")


class InventoryMetadata(BaseModel):
    total_items_collected: int = 0
    total_gold_earned: int = 0
    most_valuable_item_id: str | None = None


def _default_slots() -> list[InventorySlot]:
    return [InventorySlot(slot_id=f"slot-{i}") for i in range(DEFAULT_INVENTORY_SLOTS)]


class InventoryState(BaseModel):
    """背包状态"""

    slots: list[InventorySlot] = Field(default_factory=_default_slots, description="固定格子")
    max_slots: int = Field(default=DEFAULT_INVENTORY_SLOTS, description="格子数")
    gold: int = Field(default=0, ge=0, description="金币")
    quick_slots: list[str | None] = Field(
        default_factory=lambda: [None] * DEFAULT_QUICK_SLOTS,
        description="快捷栏（物品 ID）",
    )
    metadata: InventoryMetadata = Field(default_factory=InventoryMetadata)


class AddedItem(BaseModel):
    item: Item
    quantity: int
    slot_id: str


class OverflowItem(BaseModel):
    item: Item
    quantity: int


class AddItemResult(BaseModel):
    """add_item 结果"""

    success: bool = Field(description="至少放入一个")
    items_added: list[AddedItem] = Field(default_factory=list)
    items_overflow: list[OverflowItem] = Field(default_factory=list)
    failure_reason: Literal["inventory-full", "invalid-item"] | None = None


class ItemComparison(BaseModel):
    """两件物品的属性对比"""

    stat_differences: dict[str, int] = Field(default_factory=dict)
    is_upgrade: bool = False
    value_difference: int = 0


class ItemFilter(BaseModel):
    """背包筛选 / 排序条件"""

    item_type: ItemType | None = None
    rarity: ItemRarity | None = None
    name_query: str | None = None
    equipment_slot: EquipmentSlot | None = None
    has_stat_bonuses: bool | None = None
    sort_by: Literal["name", "rarity", "value", "type"] | None = None
    sort_order: Literal["asc", "desc"] = "asc"
