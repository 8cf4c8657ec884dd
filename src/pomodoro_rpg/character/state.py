"""CharacterStore -- 角色状态的显式变更方法与属性重算

属性重算顺序：基础 -> + 装备 -> + 状态效果 -> - 伤势（基础力量/专注的百分比）
-> - 账单专注惩罚 -> 下限（力量/专注 >= 1，防御 >= 0）-> 生命 <= 上限 -> 取整。
"""

import math

import structlog

from ..data.classes import get_class_config
from ..models import (
    CharacterClass,
    CharacterMetadata,
    CharacterState,
    CharacterStats,
    ConsumableItem,
    EquipmentSlot,
    EquippedItem,
    HospitalBill,
    InjurySeverity,
    StatBonuses,
    StatusEffect,
    StatusEffectType,
)
from ..utils import Clock, new_id, now_ms
from .injury import INJURY_SEVERITY_CONFIG

log = structlog.get_logger()

MAX_BILL_PENALTY = 10


def calculate_bill_penalty(amount: int) -> int:
    """每 10 金币欠款 1 点惩罚，最多 10"""
    return min(amount // 10, MAX_BILL_PENALTY)


def create_initial_character_state(
    character_class: CharacterClass = CharacterClass.VANGUARD,
    clock: Clock | None = None,
) -> CharacterState:
    """按职业配置创建 1 级角色"""
    config = get_class_config(character_class)
    return CharacterState(
        character_class=character_class,
        level=1,
        base_stats=config.base_stats.model_copy(),
        computed_stats=config.base_stats.model_copy(),
        metadata=CharacterMetadata(created_at=(clock or now_ms)()),
    )


def compute_stats(
    base: CharacterStats,
    equipment_bonuses: StatBonuses,
    status_modifiers: StatBonuses,
    injury_penalties: StatBonuses,
    bill_focus_penalty: int,
) -> CharacterStats:
    """纯函数：由基础属性和各项修正得到最终属性"""
    computed = base.model_copy()

    for bonuses in (equipment_bonuses, status_modifiers):
        computed.power += bonuses.power
        computed.defense += bonuses.defense
        computed.focus += bonuses.focus
        computed.luck += bonuses.luck
        computed.max_health += bonuses.max_health

    computed.power -= injury_penalties.power
    computed.defense -= injury_penalties.defense
    computed.focus -= injury_penalties.focus + bill_focus_penalty

    computed.power = max(1, computed.power)
    computed.focus = max(1, computed.focus)
    computed.defense = max(0, computed.defense)
    computed.health = min(computed.health, computed.max_health)

    for name in ("power", "defense", "focus", "luck", "health", "max_health"):
        setattr(computed, name, math.floor(getattr(computed, name)))
    return computed


class CharacterStore:
    """角色状态容器

    装备加成由调用方（背包）算好后传入 recalculate_stats()；
    不传时沿用最近一次的装备加成，保证其他变更不会丢掉装备属性。
    """

    def __init__(self, state: CharacterState | None = None, clock: Clock | None = None) -> None:
        self._clock = clock or now_ms
        self.state = state or create_initial_character_state(clock=self._clock)
        self._equipment_bonuses = StatBonuses()

    # 属性重算

    def status_effect_modifiers(self) -> StatBonuses:
        total = StatBonuses()
        for effect in self.state.status_effects:
            for _ in range(effect.stacks):
                total = total + effect.stat_modifiers
        return total

    def injury_penalties(self) -> StatBonuses:
        injury = self.state.injury
        if not injury.is_injured:
            return StatBonuses()
        percent = INJURY_SEVERITY_CONFIG[injury.severity].stat_penalty_percent
        return StatBonuses(
            power=self.state.base_stats.power * percent // 100,
            focus=self.state.base_stats.focus * percent // 100,
        )

    def recalculate_stats(self, equipment_bonuses: StatBonuses | None = None) -> CharacterStats:
        """重算 computed_stats（幂等）

        Args:
            equipment_bonuses: 当前装备加成，None 时沿用上次

        Returns:
            新的 computed_stats
        """
        if equipment_bonuses is not None:
            self._equipment_bonuses = equipment_bonuses.model_copy()

        bill = self.state.hospital_bill
        self.state.computed_stats = compute_stats(
            self.state.base_stats,
            self._equipment_bonuses,
            self.status_effect_modifiers(),
            self.injury_penalties(),
            bill.penalty if bill else 0,
        )
        return self.state.computed_stats

    # 等级

    def _base_stats_for_level(self, level: int) -> CharacterStats:
        config = get_class_config(self.state.character_class)
        delta = level - 1
        base, growth = config.base_stats, config.stat_growth
        return CharacterStats(
            power=base.power + growth.power * delta,
            defense=base.defense + growth.defense * delta,
            focus=base.focus + growth.focus * delta,
            luck=base.luck + growth.luck * delta,
            health=self.state.computed_stats.health,
            max_health=base.max_health + growth.max_health * delta,
        )

    def level_up(self) -> None:
        """升一级：按职业成长重算基础属性并回满生命"""
        self.state.level += 1
        self.state.base_stats = self._base_stats_for_level(self.state.level)
        self.state.base_stats.health = self.state.base_stats.max_health
        self.recalculate_stats()
        log.info("character_leveled_up", level=self.state.level)

    def set_level(self, level: int) -> None:
        """Raises:
        ValueError: level < 1
        """
        if level < 1:
            raise ValueError("Level must be at least 1")
        self.state.level = level
        self.state.base_stats = self._base_stats_for_level(level)
        self.recalculate_stats()

    # 装备

    def equip_item(self, slot: EquipmentSlot, item_id: str) -> EquippedItem | None:
        """装备到栏位，返回被替换下来的装备"""
        previous = self.state.equipment.get(slot)
        setattr(self.state.equipment, slot.value, EquippedItem(item_id=item_id, slot=slot))
        return previous

    def unequip_item(self, slot: EquipmentSlot) -> EquippedItem | None:
        previous = self.state.equipment.get(slot)
        setattr(self.state.equipment, slot.value, None)
        return previous

    # 生命

    def _set_health(self, value: int) -> None:
        self.state.computed_stats.health = value
        self.state.base_stats.health = value

    def take_damage(self, amount: int) -> None:
        self._set_health(max(0, self.state.computed_stats.health - amount))

    def heal(self, amount: int) -> None:
        stats = self.state.computed_stats
        self._set_health(min(stats.max_health, stats.health + amount))

    def full_heal(self) -> None:
        self._set_health(self.state.computed_stats.max_health)

    # 伤势与账单

    def apply_injury(self, severity: InjurySeverity) -> None:
        injury = self.state.injury
        injury.is_injured = True
        injury.severity = severity
        injury.success_penalty = INJURY_SEVERITY_CONFIG[severity].success_penalty
        injury.injured_at = self._clock()
        self.recalculate_stats()
        log.info("injury_applied", severity=severity)

    def heal_injury(self) -> None:
        injury = self.state.injury
        injury.is_injured = False
        injury.success_penalty = 0
        injury.injured_at = None
        self.recalculate_stats()

    def add_hospital_bill(self, amount: int) -> HospitalBill:
        bill = HospitalBill(
            amount=amount,
            created_at=self._clock(),
            penalty=calculate_bill_penalty(amount),
        )
        self.state.hospital_bill = bill
        self.recalculate_stats()
        return bill

    def pay_hospital_bill(self) -> int:
        """清除账单，返回账单金额（扣款由调用方处理）"""
        amount = self.state.hospital_bill.amount if self.state.hospital_bill else 0
        self.state.hospital_bill = None
        self.recalculate_stats()
        return amount

    def get_success_chance_penalty(self) -> int:
        penalty = self.state.injury.success_penalty if self.state.injury.is_injured else 0
        if self.state.hospital_bill:
            penalty += self.state.hospital_bill.penalty
        return penalty

    # 状态效果

    def add_status_effect(self, effect: StatusEffect) -> None:
        self.state.status_effects.append(effect)
        self.recalculate_stats()

    def remove_status_effect(self, effect_id: str) -> None:
        self.state.status_effects = [e for e in self.state.status_effects if e.id != effect_id]
        self.recalculate_stats()

    def update_status_effects(self, now: int | None = None) -> int:
        """清理过期效果（now - applied_at >= duration），返回清理数量"""
        current = self._clock() if now is None else now
        before = len(self.state.status_effects)
        self.state.status_effects = [
            e
            for e in self.state.status_effects
            if e.duration is None or current - e.applied_at < e.duration
        ]
        self.recalculate_stats()
        return before - len(self.state.status_effects)

    # 统计

    def increment_tasks_completed(self) -> None:
        self.state.metadata.tasks_completed += 1

    def increment_tasks_failed(self) -> None:
        self.state.metadata.tasks_failed += 1

    # 消耗品

    def apply_consumable(self, item: ConsumableItem) -> list[str]:
        """应用消耗品效果（数量扣减由背包负责），返回效果描述"""
        applied: list[str] = []
        if item.cures_injury and self.state.injury.is_injured:
            self.heal_injury()
            applied.append("Injury cured")
        if item.heal_amount:
            before = self.state.computed_stats.health
            self.heal(item.heal_amount)
            applied.append(f"HP +{self.state.computed_stats.health - before}")
        if item.buff_stats is not None and not item.buff_stats.is_empty():
            self.add_status_effect(
                StatusEffect(
                    id=new_id(),
                    name=item.name,
                    type=StatusEffectType.BUFF,
                    stat_modifiers=item.buff_stats,
                    duration=item.buff_duration,
                    applied_at=self._clock(),
                )
            )
            applied.append(f"{item.name} active")
        return applied
