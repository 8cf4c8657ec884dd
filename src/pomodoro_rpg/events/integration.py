"""EventTaskIntegration -- 把事件生成接到一次任务会话上"""

import random

from ..data.event_bank import EVENT_TEMPLATES
from ..data.event_config import PRODUCTION_EVENT_CONFIG, get_task_event_config
from ..models import (
    ActiveTask,
    CharacterState,
    EventCategory,
    EventConditionContext,
    EventEffectResult,
    EventGenerationConfig,
    EventSeverity,
    GameEvent,
    InventoryState,
    TaskType,
)
from ..utils import Clock
from .bank import EventBank
from .effects import EventEffectApplier
from .generator import EventGenerator


class EventTaskIntegration:
    """任务期间的事件会话

    start_task_events() 按任务类型调整节奏并开启会话；
    每个 tick 调用 update()，返回新事件或 None；
    end_task_events() 结束会话并返回全部事件。
    """

    def __init__(
        self,
        bank: EventBank | None = None,
        config: EventGenerationConfig | None = None,
        rng: random.Random | None = None,
        clock: Clock | None = None,
    ) -> None:
        self._bank = bank or EventBank(EVENT_TEMPLATES)
        self._base_config = config or PRODUCTION_EVENT_CONFIG
        self._generator = EventGenerator(self._bank, self._base_config, rng=rng, clock=clock)
        self._generated_events: list[GameEvent] = []

    @property
    def generator(self) -> EventGenerator:
        return self._generator

    @property
    def bank(self) -> EventBank:
        return self._bank

    def start_task_events(
        self, task_type: TaskType, base_config: EventGenerationConfig | None = None
    ) -> None:
        config = get_task_event_config(task_type, base_config or self._base_config)
        self._generator.update_config(config)
        self._generator.start_session()
        self._generated_events = []

    def update(
        self,
        task_type: TaskType,
        character: CharacterState,
        inventory: InventoryState,
        active_task: ActiveTask | None,
    ) -> GameEvent | None:
        context = self.build_condition_context(character, inventory, active_task)
        result = self._generator.try_generate_event(task_type, context)
        if result.success and result.event is not None:
            self._generated_events.append(result.event)
            return result.event
        return None

    def apply_event(
        self,
        event: GameEvent,
        character: CharacterState,
        inventory: InventoryState,
        active_task: ActiveTask | None,
    ) -> EventEffectResult:
        return EventEffectApplier.apply_event_effects(event, character, inventory, active_task)

    def end_task_events(self) -> list[GameEvent]:
        events = self._generator.end_session()
        self._generated_events = []
        return events

    def pause(self) -> None:
        self._generator.pause()

    def resume(self) -> None:
        self._generator.resume()

    def reset(self) -> None:
        self._generator.reset()
        self._generated_events = []

    def build_condition_context(
        self,
        character: CharacterState,
        inventory: InventoryState,
        active_task: ActiveTask | None,
    ) -> EventConditionContext:
        return EventConditionContext(
            character_level=character.level,
            current_health=character.computed_stats.health,
            max_health=character.computed_stats.max_health,
            is_injured=character.injury.is_injured,
            gold=inventory.gold,
            has_weapon=character.equipment.weapon is not None,
            has_armor=character.equipment.armor is not None,
            task_type=active_task.task_type if active_task else TaskType.EXPEDITION,
            task_progress=active_task.progress if active_task else 0,
            event_count=len(self._generated_events),
        )

    def get_session_statistics(self) -> dict:
        """本会话事件统计"""
        events = self._generated_events
        return {
            "total": len(events),
            "by_severity": {
                s.value: sum(1 for e in events if e.severity == s) for s in EventSeverity
            },
            "by_category": {
                c.value: sum(1 for e in events if e.category == c) for c in EventCategory
            },
            "total_impact": sum(EventEffectApplier.get_impact_score(e.effects) for e in events),
            "beneficial_events": sum(1 for e in events if EventEffectApplier.is_beneficial(e.effects)),
            "harmful_events": sum(1 for e in events if EventEffectApplier.is_harmful(e.effects)),
        }
