"""角色状态与伤势单元测试

测试内容：
1. 属性重算顺序与下限
2. 升级成长
3. 伤势判定与等级分布
4. 状态效果过期
5. 消耗品效果
"""

import random

import pytest
from pomodoro_rpg.character import (
    CharacterStore,
    InjuryManager,
    calculate_bill_penalty,
    calculate_injury_chance,
    compute_stats,
    create_initial_character_state,
    roll_injury,
    roll_injury_severity,
)
from pomodoro_rpg.models import (
    CharacterClass,
    CharacterStats,
    ConsumableItem,
    ConsumableType,
    EquipmentSlot,
    InjurySeverity,
    ItemRarity,
    RiskLevel,
    StatBonuses,
    StatusEffect,
    StatusEffectType,
    TaskOutcome,
)


class FixedRandom(random.Random):
    """random() 恒定返回给定值"""

    def __init__(self, value: float) -> None:
        super().__init__(0)
        self.value = value

    def random(self) -> float:
        return self.value


@pytest.fixture
def store(clock) -> CharacterStore:
    return CharacterStore(clock=clock)


class TestInitialCharacter:
    def test_vanguard_base_stats(self, clock):
        """先锋职业的初始属性"""
        state = create_initial_character_state(CharacterClass.VANGUARD, clock)
        assert state.level == 1
        assert state.base_stats == CharacterStats(
            power=10, defense=15, focus=10, luck=5, health=100, max_health=100
        )
        assert state.computed_stats == state.base_stats
        assert state.metadata.created_at == clock()


class TestStatCalculation:
    def test_injury_and_bill_reduce_focus(self, store: CharacterStore):
        """基础专注 10，中度伤势扣 1，账单 50 扣 5，最终 4"""
        store.apply_injury(InjurySeverity.MODERATE)
        store.add_hospital_bill(50)
        assert store.state.computed_stats.focus == 4

    def test_injury_reduces_power_by_base_percentage(self, store: CharacterStore):
        """重伤按基础力量的百分比扣减"""
        store.apply_injury(InjurySeverity.SEVERE)
        assert store.state.computed_stats.power == 8

    def test_recalculate_is_idempotent(self, store: CharacterStore):
        """重复重算结果不变"""
        store.apply_injury(InjurySeverity.MINOR)
        store.add_hospital_bill(120)
        first = store.recalculate_stats(StatBonuses(power=4))
        second = store.recalculate_stats()
        assert first == second

    def test_equipment_bonuses_survive_other_changes(self, store: CharacterStore):
        """其他变动触发重算时保留装备加成"""
        store.recalculate_stats(StatBonuses(power=5, defense=2))
        store.add_hospital_bill(30)
        assert store.state.computed_stats.power == 15
        assert store.state.computed_stats.defense == 17

    def test_floors_clamp_stats(self):
        """属性下限与生命上限夹取"""
        base = CharacterStats(power=2, defense=1, focus=2, luck=0, health=50, max_health=40)
        computed = compute_stats(
            base,
            StatBonuses(),
            StatBonuses(defense=-5),
            StatBonuses(power=5, focus=5),
            10,
        )
        assert computed.power == 1
        assert computed.focus == 1
        assert computed.defense == 0
        assert computed.health == 40

    def test_bill_penalty_capped(self):
        """账单惩罚每 10 金币 1 点，封顶 10"""
        assert calculate_bill_penalty(9) == 0
        assert calculate_bill_penalty(50) == 5
        assert calculate_bill_penalty(500) == 10

    def test_success_chance_penalty_combines_injury_and_bill(self, store: CharacterStore):
        """成功率惩罚为伤势与账单之和"""
        store.apply_injury(InjurySeverity.MINOR)
        store.add_hospital_bill(40)
        assert store.get_success_chance_penalty() == 5 + 4


class TestLevelAndHealth:
    def test_level_up_applies_growth(self, store: CharacterStore):
        """升级按职业成长并回满生命"""
        store.take_damage(30)
        store.level_up()
        stats = store.state.computed_stats
        assert store.state.level == 2
        assert (stats.power, stats.defense, stats.focus, stats.luck) == (12, 18, 12, 6)
        assert stats.max_health == 110
        assert stats.health == 110

    def test_set_level_rejects_zero(self, store: CharacterStore):
        """等级不能设为 0"""
        with pytest.raises(ValueError):
            store.set_level(0)

    def test_damage_and_heal_bounded(self, store: CharacterStore):
        """伤害与治疗受 0 和生命上限约束"""
        store.take_damage(500)
        assert store.state.computed_stats.health == 0
        store.heal(1000)
        assert store.state.computed_stats.health == 100
        assert store.state.base_stats.health == 100

    def test_health_survives_recalculation(self, store: CharacterStore):
        """重算属性不会回满当前生命"""
        store.take_damage(25)
        store.recalculate_stats()
        assert store.state.computed_stats.health == 75


class TestEquipmentSlots:
    def test_equip_returns_previous(self, store: CharacterStore):
        """装备时返回被替换的旧装备"""
        assert store.equip_item(EquipmentSlot.WEAPON, "sword-1") is None
        previous = store.equip_item(EquipmentSlot.WEAPON, "sword-2")
        assert previous is not None
        assert previous.item_id == "sword-1"
        assert store.state.equipment.weapon.item_id == "sword-2"

    def test_unequip(self, store: CharacterStore):
        """卸下装备后槽位为空"""
        store.equip_item(EquipmentSlot.ARMOR, "plate-1")
        removed = store.unequip_item(EquipmentSlot.ARMOR)
        assert removed.item_id == "plate-1"
        assert store.state.equipment.armor is None


class TestStatusEffects:
    def test_effect_applies_and_expires(self, store: CharacterStore, clock):
        """限时效果到期后移除并恢复属性"""
        store.add_status_effect(
            StatusEffect(
                id="focus-buff",
                name="Focus Tea",
                type=StatusEffectType.BUFF,
                stat_modifiers=StatBonuses(focus=3),
                duration=60_000,
                applied_at=clock(),
            )
        )
        assert store.state.computed_stats.focus == 13

        assert store.update_status_effects(clock() + 59_999) == 0
        assert store.update_status_effects(clock() + 60_000) == 1
        assert store.state.computed_stats.focus == 10

    def test_permanent_effect_stacks(self, store: CharacterStore, clock):
        """永久效果按层数叠加且不过期"""
        store.add_status_effect(
            StatusEffect(
                id="curse",
                name="Curse",
                type=StatusEffectType.DEBUFF,
                stat_modifiers=StatBonuses(luck=-1),
                applied_at=clock(),
                stacks=3,
            )
        )
        assert store.update_status_effects(clock() + 10**9) == 0
        assert store.state.computed_stats.luck == 2

        store.remove_status_effect("curse")
        assert store.state.computed_stats.luck == 5


class TestConsumables:
    def test_potion_heals_and_cures(self, store: CharacterStore):
        """药水先治愈伤势再回复生命"""
        store.apply_injury(InjurySeverity.MINOR)
        store.take_damage(60)
        potion = ConsumableItem(
            id="healing-potion",
            name="Healing Potion",
            rarity=ItemRarity.COMMON,
            value=25,
            consumable_type=ConsumableType.POTION,
            heal_amount=50,
            cures_injury=True,
        )
        applied = store.apply_consumable(potion)
        assert applied == ["Injury cured", "HP +50"]
        assert store.state.injury.is_injured is False
        assert store.state.computed_stats.health == 90


class TestInjuryRules:
    def test_injury_chance_floor(self):
        """受伤概率不低于 5%"""
        assert calculate_injury_chance(20, 15) == 13
        assert calculate_injury_chance(10, 30) == 5

    def test_success_never_injures(self):
        """成功与部分成功从不受伤"""
        rng = FixedRandom(0.0)
        assert roll_injury(rng, TaskOutcome.SUCCESS, 100, 0) is False
        assert roll_injury(rng, TaskOutcome.PARTIAL, 100, 0) is False

    def test_failure_injures_below_threshold(self):
        """失败时掷骰低于受伤概率才受伤"""
        assert roll_injury(FixedRandom(0.04), TaskOutcome.FAILURE, 0, 0) is True
        assert roll_injury(FixedRandom(0.05), TaskOutcome.FAILURE, 0, 0) is False

    def test_safe_risk_always_minor(self, rng):
        """安全难度只会轻伤"""
        for _ in range(50):
            assert roll_injury_severity(rng, RiskLevel.SAFE) == InjurySeverity.MINOR

    def test_risky_can_be_severe(self):
        """冒险难度可能重伤"""
        assert roll_injury_severity(FixedRandom(0.99), RiskLevel.RISKY) == InjurySeverity.SEVERE
        assert roll_injury_severity(FixedRandom(0.0), RiskLevel.RISKY) == InjurySeverity.MINOR

    def test_standard_never_severe(self, rng):
        """标准难度不会重伤"""
        severities = {roll_injury_severity(rng, RiskLevel.STANDARD) for _ in range(200)}
        assert InjurySeverity.SEVERE not in severities


class TestInjuryManager:
    def test_apply_if_needed_on_failure(self, clock):
        """失败且掷中时施加伤势"""
        manager = InjuryManager(FixedRandom(0.0), clock)
        result = manager.apply_injury_if_needed(TaskOutcome.FAILURE, RiskLevel.SAFE, 20, 10)
        assert result.was_applied is True
        assert result.severity == InjurySeverity.MINOR

    def test_no_injury_on_success(self, clock):
        """成功时不施加伤势"""
        manager = InjuryManager(FixedRandom(0.0), clock)
        result = manager.apply_injury_if_needed(TaskOutcome.SUCCESS, RiskLevel.RISKY, 50, 0)
        assert result.was_applied is False

    def test_status_queries(self, store: CharacterStore, clock):
        """伤势状态查询与惩罚"""
        manager = InjuryManager(clock=clock)
        assert manager.get_injury_status_message(store.state) == "You are in good health."
        assert manager.get_time_since_injury(store.state) is None

        store.apply_injury(InjurySeverity.SEVERE)
        clock.advance(30)
        assert manager.is_critically_injured(store.state) is True
        assert manager.get_success_chance_penalty(store.state) == 20
        assert manager.calculate_stat_penalties(store.state) == StatBonuses(power=2, focus=2)
        assert manager.get_time_since_injury(store.state) == 30_000
        assert manager.get_healing_cost(InjurySeverity.SEVERE) == 100
