"""EventEffectApplier -- 把事件效果落到角色 / 背包 / 进行中任务上

即时生效：金币（>= 0）、生命（0..max_health）、成功率（0..100）、装备耐久。
累积到任务：经验、材料、额外宝箱、掉落品质，完成任务时并入奖励。
"""

from ..models import (
    ActiveTask,
    CharacterState,
    EventEffectResult,
    EventEffects,
    GameEvent,
    InventoryState,
)


def _signed(value: float, fmt: str = "") -> str:
    return f"{'+' if value > 0 else ''}{value:{fmt}}"


class EventEffectApplier:
    """事件效果应用（原地修改传入的状态模型）"""

    @classmethod
    def apply_event_effects(
        cls,
        event: GameEvent,
        character: CharacterState,
        inventory: InventoryState,
        active_task: ActiveTask | None,
    ) -> EventEffectResult:
        """应用单个事件的全部效果

        Args:
            event: 事件实例
            character: 角色状态
            inventory: 背包状态
            active_task: 进行中的任务，None 时任务相关效果被拦截

        Returns:
            EventEffectResult，含已应用 / 被拦截的效果描述和前后变化
        """
        result = EventEffectResult()
        effects = event.effects

        if effects.gold_modifier is not None:
            cls._apply_gold(effects.gold_modifier, inventory, result)

        if effects.health_modifier is not None:
            cls._apply_health(effects.health_modifier, character, result)

        if effects.success_chance_modifier is not None:
            if active_task is not None:
                cls._apply_success(effects.success_chance_modifier, active_task, result)
            else:
                result.blocked_effects.append("No active task for success modifier")

        if effects.durability_damage is not None:
            cls._apply_durability(effects.durability_damage, character, result)

        cls._apply_task_bonus(effects, active_task, result)
        return result

    @staticmethod
    def _apply_gold(modifier: int, inventory: InventoryState, result: EventEffectResult) -> None:
        before = inventory.gold
        inventory.gold = max(0, before + modifier)
        if inventory.gold > before:
            inventory.metadata.total_gold_earned += inventory.gold - before
        result.state_changes["gold"] = {"before": before, "after": inventory.gold}
        result.applied_effects.append(f"Gold {_signed(modifier)}")

    @staticmethod
    def _apply_health(modifier: int, character: CharacterState, result: EventEffectResult) -> None:
        before = character.base_stats.health
        max_health = character.computed_stats.max_health
        after = max(0, min(max_health, before + modifier))
        character.base_stats.health = after
        character.computed_stats.health = after
        result.state_changes["health"] = {"before": before, "after": after}
        result.applied_effects.append(f"HP {_signed(modifier)}")
        if after == 0 and before > 0:
            result.applied_effects.append("Character knocked out!")

    @staticmethod
    def _apply_success(modifier: float, task: ActiveTask, result: EventEffectResult) -> None:
        before = task.calculated_success_chance
        task.calculated_success_chance = max(0.0, min(100.0, before + modifier))
        result.state_changes["success_chance"] = {
            "before": before,
            "after": task.calculated_success_chance,
        }
        result.applied_effects.append(f"Success chance {_signed(modifier, '.1f')}%")

    @staticmethod
    def _apply_durability(
        damage: int, character: CharacterState, result: EventEffectResult
    ) -> None:
        total_before = 0
        total = 0
        for label, equipped in (
            ("Weapon", character.equipment.weapon),
            ("Armor", character.equipment.armor),
        ):
            if equipped is None:
                continue
            before = equipped.durability
            total_before += before
            equipped.durability = max(0, before - damage)
            total += before - equipped.durability
            if equipped.durability == 0:
                result.applied_effects.append(f"{label} broken!")

        if total > 0:
            result.state_changes["durability"] = {
                "before": total_before,
                "after": total_before - total,
            }
            result.applied_effects.append(f"Durability -{total}")
        else:
            result.blocked_effects.append("No equipped items to damage")

    @staticmethod
    def _apply_task_bonus(
        effects: EventEffects, task: ActiveTask | None, result: EventEffectResult
    ) -> None:
        pending = [
            ("xp", effects.xp_modifier, "XP"),
            ("materials", effects.materials_modifier, "Materials"),
            ("extra_chests", effects.extra_chests, "Chests"),
            ("loot_quality", effects.loot_quality_modifier, "Loot quality"),
        ]
        for field_name, value, label in pending:
            if value is None:
                continue
            if task is None:
                result.blocked_effects.append(f"No active task for {label.lower()} bonus")
                continue
            before = getattr(task.event_bonus, field_name)
            setattr(task.event_bonus, field_name, before + value)
            result.state_changes[field_name] = {"before": before, "after": before + value}
            result.applied_effects.append(f"{label} {_signed(value)}")

    @staticmethod
    def is_harmful(effects: EventEffects) -> bool:
        return any(
            (
                (effects.gold_modifier or 0) < 0,
                (effects.health_modifier or 0) < 0,
                (effects.materials_modifier or 0) < 0,
                (effects.success_chance_modifier or 0) < 0,
                (effects.durability_damage or 0) > 0,
            )
        )

    @staticmethod
    def is_beneficial(effects: EventEffects) -> bool:
        return any(
            (
                (effects.gold_modifier or 0) > 0,
                (effects.health_modifier or 0) > 0,
                (effects.materials_modifier or 0) > 0,
                (effects.success_chance_modifier or 0) > 0,
                (effects.extra_chests or 0) > 0,
                (effects.xp_modifier or 0) > 0,
                (effects.loot_quality_modifier or 0) > 0,
            )
        )

    @staticmethod
    def get_impact_score(effects: EventEffects) -> float:
        """事件影响评分，范围 [-100, 100]，正数为有利"""
        score = (
            (effects.gold_modifier or 0) * 0.5
            + (effects.health_modifier or 0) * 2
            + (effects.materials_modifier or 0) * 1
            + (effects.success_chance_modifier or 0) * 3
            - (effects.durability_damage or 0) * 1
            + (effects.extra_chests or 0) * 50
            + (effects.xp_modifier or 0) * 0.5
            + (effects.loot_quality_modifier or 0) * 10
        )
        return max(-100.0, min(100.0, score))
