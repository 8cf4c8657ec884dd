"""InventoryManager -- 背包格子、堆叠、金币、快捷栏与装备加成

堆叠按物品 ID 进行：先填满已有同 ID 的格子，再占用空格，放不下的部分作为溢出返回。
锁定的格子既不接收新物品，也不参与堆叠。
"""

import structlog

from .models import (
    RARITY_ORDER,
    AccessoryItem,
    AddedItem,
    AddItemResult,
    ArmorItem,
    BaseItem,
    Equipment,
    EquipmentItem,
    InventorySlot,
    InventoryState,
    Item,
    ItemComparison,
    ItemFilter,
    OverflowItem,
    StatBonuses,
    WeaponItem,
    is_equippable,
)

log = structlog.get_logger()

_COMPARED_STATS = ("power", "defense", "focus", "luck")

STAT_DISPLAY_NAMES = {
    "power": "Power",
    "defense": "Defense",
    "focus": "Focus",
    "luck": "Luck",
    "health": "Health",
    "max_health": "Max Health",
}


class InventoryManager:
    """背包状态容器"""

    def __init__(self, state: InventoryState | None = None) -> None:
        self.state = state or InventoryState()

    # 查询

    def find_item(self, item_id: str) -> tuple[InventorySlot, int] | None:
        """返回第一个装有该 ID 物品的格子及其下标"""
        for index, slot in enumerate(self.state.slots):
            if slot.item is not None and slot.item.id == item_id:
                return slot, index
        return None

    def get_item(self, item_id: str) -> Item | None:
        found = self.find_item(item_id)
        return found[0].item if found else None

    def get_item_count(self, item_id: str) -> int:
        return sum(
            slot.quantity
            for slot in self.state.slots
            if slot.item is not None and slot.item.id == item_id
        )

    def _is_free(self, slot: InventorySlot) -> bool:
        return slot.item is None and not slot.locked

    def is_full(self) -> bool:
        return not any(self._is_free(slot) for slot in self.state.slots)

    def empty_slot_count(self) -> int:
        return sum(1 for slot in self.state.slots if self._is_free(slot))

    def get_occupied_slots(self) -> list[InventorySlot]:
        return [slot for slot in self.state.slots if slot.item is not None]
        return [s for s in self.state.slots if s.item is not None and s.item.rarity == rarity]

    # 物品增减

    def add_item(self, item: Item, quantity: int = 1) -> AddItemResult:
        """放入物品

        Args:
            item: 物品（放入格子的是副本）
            quantity: 数量，必须 > 0

        Returns:
            AddItemResult；放入至少一个即 success，放不下的部分在 items_overflow 中
        """
        if quantity <= 0:
            return AddItemResult(success=False, failure_reason="invalid-item")

        result = AddItemResult(success=False)
        remaining = quantity

        if item.max_stack > 1:
            for slot in self.state.slots:
                if remaining <= 0:
                    break
                if (
                    slot.item is not None
                    and slot.item.id == item.id
                    and not slot.locked
                    and slot.quantity < item.max_stack
                ):
                    amount = min(item.max_stack - slot.quantity, remaining)
                    slot.quantity += amount
                    remaining -= amount
                    result.items_added.append(
                        AddedItem(item=item, quantity=amount, slot_id=slot.slot_id)
                    )

        for slot in self.state.slots:
            if remaining <= 0:
                break
            if self._is_free(slot):
                amount = min(item.max_stack, remaining)
                slot.item = item.model_copy(deep=True)
                slot.quantity = amount
                remaining -= amount
                result.items_added.append(
                    AddedItem(item=item, quantity=amount, slot_id=slot.slot_id)
                )

        added = quantity - remaining
        self.state.metadata.total_items_collected += added
        if added:
            self._track_most_valuable(item)

        if remaining > 0:
            result.items_overflow.append(OverflowItem(item=item, quantity=remaining))
            result.failure_reason = "inventory-full"
            log.info("inventory_overflow", item_id=item.id, overflow=remaining)

        result.success = bool(result.items_added)
        return result

    def _track_most_valuable(self, item: BaseItem) -> None:
        current_id = self.state.metadata.most_valuable_item_id
        current = self.get_item(current_id) if current_id else None
        if current is None or item.value > current.value:
            self.state.metadata.most_valuable_item_id = item.id

    def remove_item(self, item_id: str, quantity: int = 1) -> bool:
        """移除指定数量；数量不足时不做任何修改并返回 False"""
        if quantity <= 0 or self.get_item_count(item_id) < quantity:
            return False

        remaining = quantity
        for slot in self.state.slots:
            if remaining <= 0:
                break
            if slot.item is not None and slot.item.id == item_id:
                amount = min(slot.quantity, remaining)
                slot.quantity -= amount
                remaining -= amount
                if slot.quantity <= 0:
                    slot.item = None
                    slot.quantity = 0
        return True

    def move_item(self, from_slot_id: str, to_slot_id: str) -> bool:
        """移动格子内容：同 ID 可堆叠时合并，否则交换

        Returns:
            False 如果格子不存在、源格为空或目标格锁定
        """
        slots = {slot.slot_id: slot for slot in self.state.slots}
        source = slots.get(from_slot_id)
        target = slots.get(to_slot_id)
        if source is None or target is None or from_slot_id == to_slot_id:
            return False
        if source.item is None or target.locked:
            return False

        item = source.item
        if target.item is not None and target.item.id == item.id and item.max_stack > 1:
            amount = min(item.max_stack - target.quantity, source.quantity)
            target.quantity += amount
            source.quantity -= amount
            if source.quantity <= 0:
                source.item = None
                source.quantity = 0
        else:
            source.item, target.item = target.item, source.item
            source.quantity, target.quantity = target.quantity, source.quantity
        return True

    def clear(self) -> None:
        """清空所有未锁定的格子"""
        for slot in self.state.slots:
            if not slot.locked:
                slot.item = None
                slot.quantity = 0

    # 金币

    def add_gold(self, amount: int) -> None:
        if amount <= 0:
            return
        self.state.gold += amount
        self.state.metadata.total_gold_earned += amount

    def remove_gold(self, amount: int) -> bool:
        if amount <= 0 or self.state.gold < amount:
            return False
        self.state.gold -= amount
        return True

    # 快捷栏

    def set_quick_slot(self, index: int, item_id: str | None) -> bool:
        if index < 0 or index >= len(self.state.quick_slots):
            return False
        self.state.quick_slots[index] = item_id
        return True

    # 装备

    def get_equipment_bonuses(self, equipment: Equipment) -> StatBonuses:
        """累加已装备物品的属性加成（装备通过 ID 指向背包中的物品）"""
        total = StatBonuses()
        for item_id in equipment.equipped_item_ids():
            item = self.get_item(item_id)
            if item is not None and is_equippable(item):
                total = total + item.stat_bonuses
        return total

    @staticmethod
    def compare_items(current: EquipmentItem | None, new: EquipmentItem) -> ItemComparison:
        """对比两件装备，任一属性提升即视为升级"""
        differences: dict[str, int] = {}
        for stat in _COMPARED_STATS:
            before = getattr(current.stat_bonuses, stat) if current else 0
            diff = getattr(new.stat_bonuses, stat) - before
            if diff != 0 or current is None:
                differences[stat] = diff
        return ItemComparison(
            stat_differences=differences,
            is_upgrade=any(diff > 0 for diff in differences.values()),
            value_difference=new.value - (current.value if current else 0),
        )

    def filter_items(self, item_filter: ItemFilter) -> list[InventorySlot]:
        slots = self.get_occupied_slots()

        if item_filter.item_type is not None:
            slots = [s for s in slots if s.item.type == item_filter.item_type]
        if item_filter.rarity is not None:
            slots = [s for s in slots if s.item.rarity == item_filter.rarity]
        if item_filter.name_query:
            query = item_filter.name_query.lower()
            slots = [s for s in slots if query in s.item.name.lower()]
        if item_filter.equipment_slot is not None:
            slots = [
                s
                for s in slots
                if is_equippable(s.item) and s.item.equipment_slot == item_filter.equipment_slot
            ]
        if item_filter.has_stat_bonuses is not None:
            slots = [
                s
                for s in slots
                if _has_stat_bonuses(s.item) == item_filter.has_stat_bonuses
            ]

        if item_filter.sort_by is not None:
            keys = {
                "name": lambda s: s.item.name.lower(),
                "rarity": lambda s: RARITY_ORDER.index(s.item.rarity),
                "value": lambda s: s.item.value,
                "type": lambda s: s.item.type,
            }
            slots.sort(key=keys[item_filter.sort_by], reverse=item_filter.sort_order == "desc")
        return slots


def _has_stat_bonuses(item: BaseItem) -> bool:
    return isinstance(item, WeaponItem | ArmorItem | AccessoryItem) and not item.stat_bonuses.is_empty()


def format_stat_bonus(stat: str, value: int) -> str:
    """+5 Power / -2 Defense"""
    sign = "+" if value >= 0 else ""
    return f"{sign}{value} {STAT_DISPLAY_NAMES.get(stat, stat)}"


def format_stat_bonuses(bonuses: StatBonuses) -> list[str]:
    return [
        format_stat_bonus(stat, value)
        for stat, value in bonuses.model_dump().items()
        if value != 0
    ]


def format_item(item: BaseItem, quantity: int = 1) -> str:
    """单行物品描述，如 "Iron Sword [rare] +5 Power" """
    text = item.name if quantity <= 1 else f"{item.name} x{quantity}"
    text += f" [{item.rarity}]"
    if isinstance(item, WeaponItem | ArmorItem | AccessoryItem):
        bonuses = format_stat_bonuses(item.stat_bonuses)
        if bonuses:
            text += " " + ", ".join(bonuses)
    return text
