"""EventGenerator -- 专注期间的随机事件生成

每个 WORK 会话一次 start_session()；之后每个 tick 调用 try_generate_event()，
由节流（随机间隔 + 单会话上限）决定是否真正生成。
"""

import math
import random

import structlog

from ..data.event_config import PRODUCTION_EVENT_CONFIG
from ..models import (
    EventConditionContext,
    EventEffects,
    EventGenerationConfig,
    EventGenerationResult,
    EventSeverity,
    EventTemplate,
    GameEvent,
    TaskType,
)
from ..utils import (
    Clock,
    new_id,
    now_ms,
    random_choice,
    random_float,
    random_int,
    weighted_choice,
)
from .bank import EventBank

log = structlog.get_logger()

# 整数效果取闭区间整数，成功率与掉落品质保留小数
_INT_EFFECTS = (
    "gold_modifier",
    "health_modifier",
    "materials_modifier",
    "durability_damage",
    "extra_chests",
    "xp_modifier",
)
_FLOAT_EFFECTS = ("success_chance_modifier", "loot_quality_modifier")

# 不可生成时的重试间隔（毫秒）
_DISABLED_RETRY_MS = 60_000
_PAUSED_RETRY_MS = 10_000
_CAP_RETRY_MS = 60_000


class EventGenerator:
    """事件生成器"""

    def __init__(
        self,
        bank: EventBank,
        config: EventGenerationConfig | None = None,
        rng: random.Random | None = None,
        clock: Clock | None = None,
    ) -> None:
        self._bank = bank
        self._config = (config or PRODUCTION_EVENT_CONFIG).model_copy(deep=True)
        self._rng = rng or random.Random()
        self._clock = clock or now_ms
        self._session_events: list[GameEvent] = []
        self._fired_template_ids: set[str] = set()
        self._is_paused = False
        self._last_event_timestamp = 0
        self._next_event_time: int | None = None

    @property
    def config(self) -> EventGenerationConfig:
        return self._config

    @property
    def is_paused(self) -> bool:
        return self._is_paused

    @property
    def next_event_time(self) -> int | None:
        return self._next_event_time

    def start_session(self) -> None:
        """开始新会话：清空事件与已触发的不可重复模板，并安排第一个事件时间"""
        self._session_events = []
        self._fired_template_ids = set()
        self._is_paused = False
        self._last_event_timestamp = self._clock()
        self._next_event_time = self._calculate_next_event_time()

    def end_session(self) -> list[GameEvent]:
        """结束会话并返回本会话事件"""
        events = self._session_events
        self._session_events = []
        self._next_event_time = None
        return events

    def pause(self) -> None:
        self._is_paused = True

    def resume(self) -> None:
        self._is_paused = False

    def reset(self) -> None:
        self._session_events = []
        self._fired_template_ids = set()
        self._is_paused = False
        self._last_event_timestamp = 0
        self._next_event_time = None

    def update_config(self, config: EventGenerationConfig) -> None:
        self._config = config.model_copy(deep=True)

    def get_session_events(self) -> list[GameEvent]:
        return list(self._session_events)

    def try_generate_event(
        self, task_type: TaskType, context: EventConditionContext
    ) -> EventGenerationResult:
        """尝试生成一个事件

        Args:
            task_type: 当前任务类型
            context: 条件判定上下文

        Returns:
            EventGenerationResult，未生成时 reason 说明原因
        """
        now = self._clock()

        if not self._config.enabled:
            return EventGenerationResult(
                success=False,
                reason="Event generation is disabled",
                next_attempt_time=now + _DISABLED_RETRY_MS,
            )

        if self._is_paused:
            return EventGenerationResult(
                success=False,
                reason="Event generation is paused",
                next_attempt_time=now + _PAUSED_RETRY_MS,
            )

        if len(self._session_events) >= self._config.max_events_per_session:
            return EventGenerationResult(
                success=False,
                reason="Maximum events per session reached",
                next_attempt_time=now + _CAP_RETRY_MS,
            )

        if self._next_event_time is not None and now < self._next_event_time:
            return EventGenerationResult(
                success=False,
                reason="Not yet time for next event",
                next_attempt_time=self._next_event_time,
            )

        severity = self._select_severity()
        template = self._bank.select_random_template(
            self._rng,
            task_type,
            context,
            preferred_severity=severity,
            exclude_template_ids=self._fired_template_ids,
        )

        if template is None:
            self._next_event_time = self._calculate_next_event_time()
            return EventGenerationResult(
                success=False,
                reason="No eligible event templates found",
                next_attempt_time=self._next_event_time,
            )

        event = self._create_event(template, now)
        self._session_events.append(event)
        self._last_event_timestamp = now
        if not template.repeatable:
            self._fired_template_ids.add(template.template_id)
        self._next_event_time = self._calculate_next_event_time()

        log.info(
            "event_generated",
            template_id=template.template_id,
            severity=template.severity,
            task_type=task_type,
            session_event_count=len(self._session_events),
        )
        return EventGenerationResult(
            success=True,
            event=event,
            next_attempt_time=self._next_event_time,
        )

    def _select_severity(self) -> EventSeverity:
        weights = self._config.severity_weights
        return weighted_choice(self._rng, list(EventSeverity), weights.get)

    def _calculate_next_event_time(self) -> int:
        low = self._config.min_time_between_events
        high = self._config.max_time_between_events
        return self._clock() + int(random_float(self._rng, low, high))

    def _create_event(self, template: EventTemplate, now: int) -> GameEvent:
        effects = self.generate_effects(template)
        message = self.replace_placeholders(random_choice(self._rng, template.messages), effects)
        return GameEvent(
            id=new_id(),
            template_id=template.template_id,
            severity=template.severity,
            category=template.category,
            timestamp=now,
            message=message,
            effects=effects,
            visual_cue=template.visual_cue.model_copy() if template.visual_cue else None,
        )

    def generate_effects(self, template: EventTemplate) -> EventEffects:
        """在模板范围内均匀取值：整数效果取闭区间整数，其余取浮点"""
        values: dict[str, float | int] = {}
        for name in _INT_EFFECTS:
            effect_range = getattr(template.effects, name)
            if effect_range is None:
                continue
            low, high = math.ceil(effect_range.min), math.floor(effect_range.max)
            values[name] = random_int(self._rng, low, high) if low <= high else low
        for name in _FLOAT_EFFECTS:
            effect_range = getattr(template.effects, name)
            if effect_range is not None:
                values[name] = random_float(self._rng, effect_range.min, effect_range.max)
        return EventEffects(**values)

    @staticmethod
    def replace_placeholders(message: str, effects: EventEffects) -> str:
        """以效果绝对值替换消息占位符，成功率保留一位小数"""
        replacements: dict[str, str] = {}
        if effects.gold_modifier is not None:
            replacements["{gold}"] = str(abs(effects.gold_modifier))
        if effects.health_modifier is not None:
            replacements["{damage}"] = str(abs(effects.health_modifier))
            replacements["{heal}"] = str(abs(effects.health_modifier))
        if effects.materials_modifier is not None:
            replacements["{materials}"] = str(abs(effects.materials_modifier))
        if effects.durability_damage is not None:
            replacements["{durability}"] = str(abs(effects.durability_damage))
        if effects.extra_chests is not None:
            replacements["{chests}"] = str(abs(effects.extra_chests))
        if effects.success_chance_modifier is not None:
            replacements["{success}"] = f"{abs(effects.success_chance_modifier):.1f}"
        if effects.xp_modifier is not None:
            replacements["{xp}"] = str(abs(effects.xp_modifier))

        for placeholder, value in replacements.items():
            message = message.replace(placeholder, value)
        return message
