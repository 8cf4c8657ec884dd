"""掉落系统单元测试

测试内容：
1. 稀有度权重、倍率与命名
2. 装备生成与掉落表类型掷骰
3. 宝箱开启（只能一次）与品质判定
4. ChestManager 持有与移除
"""

import random

import pytest
from pomodoro_rpg.data import get_loot_table
from pomodoro_rpg.exceptions import ChestAlreadyOpenedError, InvalidStateTransitionError
from pomodoro_rpg.loot import (
    ChestManager,
    LootGenerator,
    RaritySystem,
    create_chest,
    determine_chest_quality,
    estimate_chest_value,
    open_chest,
)
from pomodoro_rpg.models import (
    ArmorItem,
    ChestQuality,
    ConsumableItem,
    ItemGenerationContext,
    ItemRarity,
    ItemTemplate,
    ItemType,
    LootTable,
    TaskType,
    TypeWeights,
    WeaponItem,
    WeaponType,
)


def sword_template(**overrides) -> ItemTemplate:
    fields = {
        "id": "test-sword",
        "name": "Test Sword",
        "type": ItemType.WEAPON,
        "weapon_type": WeaponType.SWORD,
        "stat_ranges": {"power": (4, 4), "focus": (1, 1)},
    }
    fields.update(overrides)
    return ItemTemplate(**fields)


class TestRaritySystem:
    def test_base_weights(self):
        """无幸运时使用基础权重"""
        weights = dict(RaritySystem.get_rarity_weights(0))
        assert weights == {
            ItemRarity.COMMON: 100,
            ItemRarity.UNCOMMON: 40,
            ItemRarity.RARE: 15,
            ItemRarity.EPIC: 5,
            ItemRarity.LEGENDARY: 1,
        }

    def test_luck_favors_higher_tiers(self):
        """幸运提高高稀有度权重，普通不变"""
        weights = dict(RaritySystem.get_rarity_weights(50))
        assert weights[ItemRarity.COMMON] == 100
        assert weights[ItemRarity.EPIC] == pytest.approx(40)

    @pytest.mark.parametrize(
        "base,rarity,expected",
        [(10, ItemRarity.COMMON, 10), (3, ItemRarity.RARE, 5), (10, ItemRarity.LEGENDARY, 25)],
    )
    def test_stat_multiplier(self, base, rarity, expected):
        """属性按稀有度倍率放大并取整"""
        assert RaritySystem.apply_stat_multiplier(base, rarity) == expected

    def test_value_multiplier(self):
        """价值按稀有度倍率放大"""
        assert RaritySystem.apply_value_multiplier(10, ItemRarity.EPIC) == 40

    def test_name_prefix(self, rng):
        """非普通物品带稀有度前缀"""
        system = RaritySystem(rng)
        assert system.generate_item_name("Axe", ItemRarity.COMMON) == "Axe"
        assert system.generate_item_name("Axe", ItemRarity.RARE).endswith(" Axe")

    def test_ordering(self):
        """稀有度比较与阶位"""
        assert RaritySystem.compare(ItemRarity.EPIC, ItemRarity.RARE) > 0
        assert RaritySystem.get_tier(ItemRarity.LEGENDARY) == 4

    def test_drop_rates_tracked(self, rng):
        """掉落统计百分比合计为 100"""
        system = RaritySystem(rng)
        for _ in range(20):
            system.select_rarity()
        assert sum(system.get_drop_rates().values()) == pytest.approx(100)


class TestLootGenerator:
    def test_generate_forced_rarity(self, rng):
        """指定稀有度生成的属性与价值"""
        generator = LootGenerator(rng)
        item = generator.generate_item(
            sword_template(), ItemGenerationContext(force_rarity=ItemRarity.EPIC)
        )
        assert isinstance(item, WeaponItem)
        assert item.rarity == ItemRarity.EPIC
        assert item.stat_bonuses.power == 8
        assert item.stat_bonuses.focus == 2
        assert 44 <= item.value <= 60
        assert item.damage_range.min >= 1

    def test_common_value_range(self, rng):
        """普通物品价值在浮动范围内"""
        generator = LootGenerator(rng)
        for _ in range(20):
            item = generator.generate_item(
                sword_template(), ItemGenerationContext(force_rarity=ItemRarity.COMMON)
            )
            assert 11 <= item.value <= 15

    def test_generated_ids_are_unique(self, rng):
        """批量生成的物品 id 互不相同"""
        generator = LootGenerator(rng)
        items = generator.generate_items([sword_template()], ItemGenerationContext(), count=5)
        assert len({item.id for item in items}) == 5

    def test_armor_requires_subtype(self, rng):
        """防具模板缺少子类型时报错"""
        with pytest.raises(ValueError):
            LootGenerator(rng).generate_item(
                sword_template(type=ItemType.ARMOR, weapon_type=None), ItemGenerationContext()
            )

    def test_consumable_template_rejected(self, rng):
        """消耗品不走装备模板生成"""
        with pytest.raises(ValueError):
            LootGenerator(rng).generate_item(
                sword_template(type=ItemType.CONSUMABLE), ItemGenerationContext()
            )

    def test_roll_item_type_follows_weights(self, rng):
        """物品类型按掉落表权重选取"""
        generator = LootGenerator(rng)
        table = LootTable(task_type=TaskType.RAID, type_weights=TypeWeights(armor=100))
        assert {generator.roll_item_type(table) for _ in range(30)} == {ItemType.ARMOR}

    def test_consumables_keep_catalog_id(self, rng):
        """消耗品保留目录 id 以便堆叠"""
        generator = LootGenerator(rng)
        table = get_loot_table(TaskType.REST)
        item = generator.generate_from_table(table, ItemGenerationContext())
        assert isinstance(item, ConsumableItem)
        assert item.id in table.consumable_pool

    def test_empty_pool_yields_none(self, rng):
        """空物品池不产出物品"""
        generator = LootGenerator(rng)
        table = LootTable(task_type=TaskType.RAID, type_weights=TypeWeights(weapon=100))
        assert generator.generate_from_table(table, ItemGenerationContext()) is None

    def test_raid_table_generates_gear(self, rng):
        """突袭掉落表能产出装备"""
        generator = LootGenerator(rng)
        table = get_loot_table(TaskType.RAID)
        items = [generator.generate_from_table(table, ItemGenerationContext()) for _ in range(30)]
        assert any(isinstance(item, WeaponItem | ArmorItem) for item in items)


class TestChests:
    def test_open_once(self, rng, clock):
        """宝箱只能打开一次"""
        chest = create_chest(TaskType.REST, clock=clock)
        result = open_chest(rng, chest, ItemGenerationContext())
        assert chest.opened is True
        assert 1 <= len(result.items) <= 2
        assert 10 <= result.gold <= 30
        assert result.total_value == result.gold + sum(i.value for i in result.items)

        with pytest.raises(ChestAlreadyOpenedError):
            open_chest(rng, chest, ItemGenerationContext())

    def test_double_open_is_invalid_transition(self, rng, clock):
        """重复开箱属于非法状态流转"""
        chest = create_chest(TaskType.EXPEDITION, clock=clock)
        open_chest(rng, chest, ItemGenerationContext())
        with pytest.raises(InvalidStateTransitionError, match="already been opened"):
            open_chest(rng, chest, ItemGenerationContext())

    def test_masterwork_item_count_and_gold(self, rng, clock):
        """大师宝箱的物品数与金币范围"""
        chest = create_chest(TaskType.REST, loot_quality=2.0, quality=ChestQuality.MASTERWORK, clock=clock)
        result = open_chest(rng, chest, ItemGenerationContext())
        assert 4 <= len(result.items) <= 6
        assert 60 <= result.gold <= 180

    def test_luck_raises_chest_gold(self, clock):
        """同一随机序列下，幸运更高的开箱金币更多"""
        gold = {}
        for luck in (0, 50):
            chest = create_chest(TaskType.EXPEDITION, clock=clock)
            result = open_chest(random.Random(7), chest, ItemGenerationContext(luck=luck))
            gold[luck] = result.gold
        assert gold[50] > gold[0]
        assert gold[50] <= gold[0] * 1.5

    def test_generate_gold_luck_bonus(self):
        """幸运加成按基础金币的 luck * 10% 追加"""
        base = LootGenerator(random.Random(3)).generate_gold(10, 30)
        boosted = LootGenerator(random.Random(3)).generate_gold(10, 30, luck=10)
        assert boosted == base * 2

    def test_failed_task_gives_basic(self, rng):
        """任务失败只给基础宝箱"""
        for _ in range(20):
            assert determine_chest_quality(rng, False, 100) == ChestQuality.BASIC

    def test_estimate_value(self, clock):
        """按品质估算宝箱价值范围"""
        chest = create_chest(TaskType.RAID, quality=ChestQuality.QUALITY, clock=clock)
        assert estimate_chest_value(chest) == (30, 150)


class TestChestManager:
    def test_award_shares_list(self, rng, clock):
        """发放的宝箱写入共享列表"""
        chests = []
        manager = ChestManager(chests, rng, clock)
        manager.award_chests(TaskType.RAID, 2, quality=ChestQuality.SUPERIOR)
        assert len(chests) == 2
        assert manager.get_unopened_count() == 2
        assert len(manager.get_chests_by_quality(ChestQuality.SUPERIOR)) == 2
        assert manager.get_chests_by_task(TaskType.EXPEDITION) == []

    def test_open_removes_chest(self, rng, clock):
        """开箱后移出列表并累计统计"""
        manager = ChestManager([], rng, clock)
        chest = manager.award_chests(TaskType.EXPEDITION, 1)[0]
        result = manager.open_chest(chest.id, ItemGenerationContext())
        assert result is not None
        assert manager.chests == []
        assert manager.total_opened == 1
        assert manager.total_value_obtained == result.total_value

    def test_open_unknown_returns_none(self, rng, clock):
        """打开不存在的宝箱返回 None"""
        manager = ChestManager([], rng, clock)
        assert manager.open_chest("missing", ItemGenerationContext()) is None
