"""物品目录 -- 装备模板（武器 / 护甲 / 饰品）与消耗品"""

from ..models import (
    AccessoryType,
    ArmorType,
    ConsumableItem,
    ConsumableType,
    ItemRarity,
    ItemTemplate,
    ItemType,
    MaterialItem,
    StatBonuses,
    WeaponType,
)

_MINUTE_MS = 60 * 1000


def _weapon(
    item_id: str,
    name: str,
    weapon_type: WeaponType,
    description: str,
    **stat_ranges: tuple[int, int],
) -> ItemTemplate:
    return ItemTemplate(
        id=item_id,
        name=name,
        description=description,
        type=ItemType.WEAPON,
        icon=f"weapon-{weapon_type.value}-{item_id}",
        weapon_type=weapon_type,
        stat_ranges=stat_ranges,
    )


def _armor(
    item_id: str,
    name: str,
    armor_type: ArmorType,
    description: str,
    **stat_ranges: tuple[int, int],
) -> ItemTemplate:
    return ItemTemplate(
        id=item_id,
        name=name,
        description=description,
        type=ItemType.ARMOR,
        icon=f"armor-{armor_type.value}-{item_id}",
        armor_type=armor_type,
        stat_ranges=stat_ranges,
    )


def _accessory(
    item_id: str,
    name: str,
    accessory_type: AccessoryType,
    description: str,
    special_effect: str | None = None,
    **stat_ranges: tuple[int, int],
) -> ItemTemplate:
    return ItemTemplate(
        id=item_id,
        name=name,
        description=description,
        type=ItemType.ACCESSORY,
        icon=f"accessory-{accessory_type.value}-{item_id}",
        accessory_type=accessory_type,
        special_effect=special_effect,
        stat_ranges=stat_ranges,
    )


_W = WeaponType
_A = ArmorType

WEAPON_TEMPLATES: dict[str, ItemTemplate] = {
    t.id: t
    for t in [
        # 剑：力量与专注均衡
        _weapon("iron-sword", "Iron Sword", _W.SWORD,
                "A reliable blade forged from quality iron.",
                power=(3, 6), defense=(0, 1), focus=(1, 3)),
        _weapon("steel-sword", "Steel Sword", _W.SWORD,
                "A well-crafted sword made from hardened steel.",
                power=(5, 9), defense=(1, 2), focus=(2, 4)),
        _weapon("silver-sword", "Silver Sword", _W.SWORD,
                "An elegant blade with silver inlay, excellent against dark foes.",
                power=(7, 12), defense=(1, 3), focus=(3, 6), luck=(1, 2)),
        _weapon("scimitar", "Scimitar", _W.SWORD,
                "A curved blade favored by desert wanderers.",
                power=(6, 10), defense=(0, 2), focus=(4, 8), luck=(3, 6)),
        _weapon("katana", "Katana", _W.SWORD,
                "A single-edged blade of legendary sharpness.",
                power=(8, 14), defense=(1, 3), focus=(6, 12), luck=(2, 5)),
        # 斧：高力量，低专注
        _weapon("hand-axe", "Hand Axe", _W.AXE,
                "A small, versatile axe for combat and utility.",
                power=(5, 8), defense=(0, 1), focus=(0, 2)),
        _weapon("battle-axe", "Battle Axe", _W.AXE,
                "A heavy axe built for the battlefield.",
                power=(8, 13), defense=(0, 2), focus=(0, 1)),
        _weapon("great-axe", "Great Axe", _W.AXE,
                "A massive two-handed axe that cleaves through armor.",
                power=(12, 18), defense=(1, 3), focus=(0, 1)),
        # 法杖：专注与幸运
        _weapon("wooden-staff", "Wooden Staff", _W.STAFF,
                "A simple staff carved from ancient oak.",
                power=(2, 4), focus=(3, 6), luck=(1, 2)),
        _weapon("mystic-staff", "Mystic Staff", _W.STAFF,
                "A staff humming with arcane energy.",
                power=(4, 7), focus=(5, 9), luck=(2, 4)),
        _weapon("crystal-staff", "Crystal Staff", _W.STAFF,
                "A staff topped with a resonating crystal.",
                power=(6, 10), focus=(8, 14), luck=(3, 6)),
        # 弓
        _weapon("short-bow", "Short Bow", _W.BOW,
                "A compact bow for quick shots.",
                power=(3, 5), focus=(4, 7), luck=(0, 1)),
        _weapon("long-bow", "Long Bow", _W.BOW,
                "A tall bow with impressive range.",
                power=(5, 9), focus=(6, 10), luck=(1, 2)),
        _weapon("composite-bow", "Composite Bow", _W.BOW,
                "Layered horn and wood give this bow tremendous power.",
                power=(8, 13), focus=(9, 15), luck=(2, 4)),
        _weapon("crossbow", "Crossbow", _W.BOW,
                "A mechanical bow that fires heavy bolts.",
                power=(6, 11), focus=(7, 12), luck=(2, 5)),
        # 匕首：幸运
        _weapon("iron-dagger", "Iron Dagger", _W.DAGGER,
                "A simple but effective dagger.",
                power=(2, 4), focus=(2, 4), luck=(2, 5)),
        _weapon("stiletto", "Stiletto", _W.DAGGER,
                "A slender blade designed to find gaps in armor.",
                power=(3, 6), focus=(4, 7), luck=(4, 8)),
        _weapon("shadow-blade", "Shadow Blade", _W.DAGGER,
                "A dagger that seems to drink the light around it.",
                power=(5, 9), focus=(6, 11), luck=(6, 12)),
        # 锤：力量与防御
        _weapon("wooden-club", "Wooden Club", _W.MACE,
                "A sturdy club. Crude but effective.",
                power=(4, 6), defense=(1, 2), focus=(0, 1)),
        _weapon("iron-mace", "Iron Mace", _W.MACE,
                "A flanged mace that crushes armor.",
                power=(6, 10), defense=(2, 4), focus=(0, 2)),
        _weapon("holy-mace", "Holy Mace", _W.MACE,
                "A blessed mace that glows with righteous light.",
                power=(9, 14), defense=(3, 6), focus=(2, 4), luck=(1, 3)),
        _weapon("warhammer", "Warhammer", _W.MACE,
                "A brutal hammer that shatters shields.",
                power=(10, 16), defense=(2, 5), focus=(0, 1)),
        # 长矛
        _weapon("spear", "Spear", _W.SPEAR,
                "A long spear that keeps enemies at bay.",
                power=(4, 7), defense=(1, 3), focus=(2, 4)),
        _weapon("pike", "Pike", _W.SPEAR,
                "An extended polearm for disciplined fighters.",
                power=(6, 10), defense=(2, 5), focus=(3, 6)),
        _weapon("halberd", "Halberd", _W.SPEAR,
                "An axe blade mounted on a long shaft.",
                power=(9, 15), defense=(3, 7), focus=(4, 8)),
    ]
}

ARMOR_TEMPLATES: dict[str, ItemTemplate] = {
    t.id: t
    for t in [
        # 轻甲：低防御，高专注与幸运
        _armor("cloth-tunic", "Cloth Tunic", _A.LIGHT,
               "Simple cloth offering minimal protection.",
               defense=(1, 2), focus=(1, 2)),
        _armor("leather-armor", "Leather Armor", _A.LIGHT,
               "Supple leather protection that allows freedom of movement.",
               defense=(2, 4), focus=(2, 4), luck=(1, 2)),
        _armor("studded-leather", "Studded Leather", _A.LIGHT,
               "Leather armor reinforced with metal studs.",
               defense=(3, 6), power=(0, 1), focus=(3, 6), luck=(2, 4)),
        _armor("shadow-leather", "Shadow Leather", _A.LIGHT,
               "Dark leather armor favored by rogues and scouts.",
               defense=(5, 9), power=(1, 3), focus=(5, 9), luck=(4, 7)),
        # 中甲：均衡
        _armor("chainmail", "Chainmail", _A.MEDIUM,
               "Interlocking metal rings provide solid protection.",
               defense=(4, 7), power=(1, 3), focus=(1, 3)),
        _armor("scale-mail", "Scale Mail", _A.MEDIUM,
               "Overlapping metal scales offer flexible defense.",
               defense=(6, 10), power=(2, 4), focus=(2, 4)),
        _armor("brigandine", "Brigandine", _A.MEDIUM,
               "Cloth armor lined with small steel plates.",
               defense=(8, 13), power=(3, 6), focus=(3, 6), luck=(1, 2)),
        # 重甲：高防御与力量，低专注
        _armor("iron-plate", "Iron Plate", _A.HEAVY,
               "Heavy iron plates that turn aside most blows.",
               defense=(7, 11), power=(2, 5), focus=(0, 1)),
        _armor("steel-plate", "Steel Plate", _A.HEAVY,
               "Masterfully forged steel plate armor.",
               defense=(10, 16), power=(4, 8), focus=(0, 2)),
        _armor("dragon-scale-plate", "Dragon Scale Plate", _A.HEAVY,
               "Armor forged from the scales of a slain dragon.",
               defense=(14, 22), power=(6, 12), focus=(2, 4), luck=(2, 4)),
        # 法袍
        _armor("apprentice-robe", "Apprentice Robe", _A.ROBE,
               "Simple robes worn by students of the arcane.",
               defense=(1, 2), focus=(4, 7), luck=(2, 4)),
        _armor("mage-robe", "Mage Robe", _A.ROBE,
               "Enchanted robes that amplify magical focus.",
               defense=(2, 4), power=(1, 3), focus=(6, 11), luck=(3, 6)),
        _armor("archmage-robe", "Archmage Robe", _A.ROBE,
               "Robes woven with threads of pure mana.",
               defense=(3, 6), power=(2, 5), focus=(10, 18), luck=(5, 10)),
    ]
}

ACCESSORY_TEMPLATES: dict[str, ItemTemplate] = {
    t.id: t
    for t in [
        _accessory("copper-ring", "Copper Ring", AccessoryType.RING,
                   "A plain ring that brings a little fortune.",
                   luck=(1, 3)),
        _accessory("signet-ring", "Signet Ring", AccessoryType.RING,
                   "A noble's ring that commands respect.",
                   power=(1, 3), luck=(1, 2)),
        _accessory("focus-amulet", "Focus Amulet", AccessoryType.AMULET,
                   "An amulet that quiets a wandering mind.",
                   focus=(2, 5)),
        _accessory("guardian-amulet", "Guardian Amulet", AccessoryType.AMULET,
                   "A protective charm etched with warding runes.",
                   "Reduces injury chance",
                   defense=(2, 4), max_health=(5, 15)),
        _accessory("rabbit-foot", "Rabbit's Foot", AccessoryType.CHARM,
                   "Everyone knows it is lucky.",
                   luck=(2, 6)),
        _accessory("hourglass-trinket", "Hourglass Trinket", AccessoryType.TRINKET,
                   "Sand that never quite runs out.",
                   "Extends buff durations",
                   focus=(1, 3), luck=(1, 3)),
    ]
}


def get_weapon_templates_by_type(weapon_type: WeaponType) -> list[ItemTemplate]:
    return [t for t in WEAPON_TEMPLATES.values() if t.weapon_type == weapon_type]


def get_armor_templates_by_type(armor_type: ArmorType) -> list[ItemTemplate]:
    return [t for t in ARMOR_TEMPLATES.values() if t.armor_type == armor_type]


def _consumable(
    item_id: str,
    name: str,
    consumable_type: ConsumableType,
    rarity: ItemRarity,
    value: int,
    max_stack: int,
    description: str,
    heal_amount: int | None = None,
    cures_injury: bool = False,
    buff_minutes: int | None = None,
    buff_stats: StatBonuses | None = None,
) -> ConsumableItem:
    return ConsumableItem(
        id=item_id,
        name=name,
        description=description,
        consumable_type=consumable_type,
        rarity=rarity,
        value=value,
        icon=f"consumable-{consumable_type.value}-{item_id}",
        max_stack=max_stack,
        heal_amount=heal_amount,
        cures_injury=cures_injury,
        buff_duration=buff_minutes * _MINUTE_MS if buff_minutes else None,
        buff_stats=buff_stats,
    )


_C = ConsumableType
_R = ItemRarity

CONSUMABLES: dict[str, ConsumableItem] = {
    c.id: c
    for c in [
        # 药水
        _consumable("health-potion-minor", "Minor Health Potion", _C.POTION, _R.COMMON, 10, 99,
                    "Restores a small amount of health.", heal_amount=25),
        _consumable("health-potion", "Health Potion", _C.POTION, _R.UNCOMMON, 25, 99,
                    "Restores a moderate amount of health.", heal_amount=50),
        _consumable("health-potion-major", "Major Health Potion", _C.POTION, _R.RARE, 50, 99,
                    "Restores a large amount of health.", heal_amount=100),
        _consumable("healing-salve", "Healing Salve", _C.POTION, _R.UNCOMMON, 40, 50,
                    "Removes injuries and restores health.",
                    heal_amount=30, cures_injury=True),
        # 药剂
        _consumable("elixir-of-strength", "Elixir of Strength", _C.ELIXIR, _R.UNCOMMON, 35, 50,
                    "Temporarily increases Power.",
                    buff_minutes=30, buff_stats=StatBonuses(power=5)),
        _consumable("elixir-of-fortitude", "Elixir of Fortitude", _C.ELIXIR, _R.UNCOMMON, 35, 50,
                    "Temporarily increases Defense.",
                    buff_minutes=30, buff_stats=StatBonuses(defense=5)),
        _consumable("elixir-of-focus", "Elixir of Focus", _C.ELIXIR, _R.UNCOMMON, 35, 50,
                    "Temporarily increases Focus.",
                    buff_minutes=30, buff_stats=StatBonuses(focus=5)),
        _consumable("elixir-of-fortune", "Elixir of Fortune", _C.ELIXIR, _R.UNCOMMON, 35, 50,
                    "Temporarily increases Luck.",
                    buff_minutes=30, buff_stats=StatBonuses(luck=5)),
        _consumable("grand-elixir", "Grand Elixir", _C.ELIXIR, _R.EPIC, 100, 20,
                    "Significantly boosts all stats.",
                    buff_minutes=30,
                    buff_stats=StatBonuses(power=8, defense=8, focus=8, luck=8)),
        # 食物
        _consumable("bread", "Bread", _C.FOOD, _R.COMMON, 5, 99,
                    "Simple bread that restores a small amount of health.", heal_amount=15),
        _consumable("cooked-meat", "Cooked Meat", _C.FOOD, _R.COMMON, 15, 99,
                    "Hearty meal that restores health and boosts Power.",
                    heal_amount=20, buff_minutes=15, buff_stats=StatBonuses(power=2)),
        _consumable("fruit-basket", "Fruit Basket", _C.FOOD, _R.COMMON, 12, 99,
                    "Fresh fruit that restores health and boosts Focus.",
                    heal_amount=20, buff_minutes=15, buff_stats=StatBonuses(focus=2)),
        _consumable("travelers-rations", "Traveler's Rations", _C.FOOD, _R.UNCOMMON, 20, 99,
                    "Preserved food for long journeys. Modest health and stat boost.",
                    heal_amount=30, buff_minutes=30,
                    buff_stats=StatBonuses(power=3, defense=3)),
        _consumable("feast", "Feast", _C.FOOD, _R.RARE, 75, 20,
                    "A magnificent meal that provides substantial benefits.",
                    heal_amount=75, buff_minutes=60,
                    buff_stats=StatBonuses(power=5, defense=5, focus=5, luck=5)),
        # 卷轴
        _consumable("scroll-of-fortune", "Scroll of Fortune", _C.SCROLL, _R.RARE, 60, 10,
                    "Greatly increases luck for the next task.",
                    buff_minutes=30, buff_stats=StatBonuses(luck=15)),
        _consumable("scroll-of-protection", "Scroll of Protection", _C.SCROLL, _R.RARE, 60, 10,
                    "Provides a powerful defensive barrier.",
                    buff_minutes=30, buff_stats=StatBonuses(defense=15)),
        _consumable("scroll-of-clarity", "Scroll of Clarity", _C.SCROLL, _R.RARE, 60, 10,
                    "Sharpens the mind, greatly increasing Focus.",
                    buff_minutes=30, buff_stats=StatBonuses(focus=15)),
    ]
}


def get_consumable(consumable_id: str) -> ConsumableItem | None:
    """按 ID 获取消耗品副本"""
    consumable = CONSUMABLES.get(consumable_id)
    return consumable.model_copy(deep=True) if consumable else None


# 任务材料奖励统一折算成一种可堆叠材料
SALVAGED_MATERIALS = MaterialItem(
    id="salvaged-materials",
    name="Salvaged Materials",
    description="Scraps and components gathered while on tasks.",
    rarity=ItemRarity.COMMON,
    value=1,
    icon="material-salvage",
    max_stack=999,
    material_type="salvage",
)


def create_material_stack() -> MaterialItem:
    return SALVAGED_MATERIALS.model_copy(deep=True)
