"""随机事件数据模型

EventTemplate 是静态目录数据；GameEvent 是模板在某一时刻、效果随机取值后的实例。
"""

from collections.abc import Callable

from pydantic import BaseModel, ConfigDict, Field

from .enums import EventCategory, EventSeverity, TaskType, VisualCueType


class EffectRange(BaseModel):
    """效果取值范围（闭区间）"""

    min: float
    max: float


class EventEffectRanges(BaseModel):
    """模板上的效果范围，未设置的效果不生成"""

    success_chance_modifier: EffectRange | None = None
    gold_modifier: EffectRange | None = None
    health_modifier: EffectRange | None = None
    materials_modifier: EffectRange | None = None
    durability_damage: EffectRange | None = None
    extra_chests: EffectRange | None = None
    loot_quality_modifier: EffectRange | None = None
    xp_modifier: EffectRange | None = None


class EventEffects(BaseModel):
    """事件实例的具体效果"""

    success_chance_modifier: float | None = Field(default=None, description="成功率修正（百分点）")
    gold_modifier: int | None = Field(default=None, description="金币变化")
    health_modifier: int | None = Field(default=None, description="生命变化")
    materials_modifier: int | None = Field(default=None, description="材料变化")
    durability_damage: int | None = Field(default=None, description="耐久损伤")
    extra_chests: int | None = Field(default=None, description="额外宝箱")
    loot_quality_modifier: float | None = Field(default=None, description="掉落品质修正")
    xp_modifier: int | None = Field(default=None, description="经验变化")


class VisualCue(BaseModel):
    type: VisualCueType
    duration: int = Field(default=2000, description="展示时长（毫秒）")
    color: str | None = None


class EventConditionContext(BaseModel):
    """事件条件判定上下文"""

    character_level: int = 1
    current_health: int = 100
    max_health: int = 100
    is_injured: bool = False
    gold: int = 0
    has_weapon: bool = False
    has_armor: bool = False
    task_type: TaskType = TaskType.EXPEDITION
    task_progress: float = 0
    event_count: int = 0


class EventConditions(BaseModel):
    """模板触发条件，全部满足才算合格"""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    min_level: int | None = None
    max_level: int | None = None
    min_health_percent: float | None = None
    max_health_percent: float | None = None
    requires_injury: bool | None = None
    requires_not_injured: bool | None = None
    min_gold: int | None = None
    requires_weapon: bool | None = None
    requires_armor: bool | None = None
    custom_condition: Callable[[EventConditionContext], bool] | None = Field(
        default=None,
        exclude=True,
    )


class EventTemplate(BaseModel):
    """事件模板"""

    template_id: str = Field(description="模板 ID")
    severity: EventSeverity
    category: EventCategory
    messages: list[str] = Field(min_length=1, description="消息变体，支持占位符")
    effects: EventEffectRanges = Field(default_factory=EventEffectRanges)
    visual_cue: VisualCue | None = None
    conditions: EventConditions | None = None
    weight: float = Field(default=10, ge=0, description="选择权重")
    applicable_tasks: list[TaskType] = Field(
        default_factory=list,
        description="适用任务，空列表表示全部",
    )
    repeatable: bool = Field(default=True, description="同一次会话内可否重复触发")


class GameEvent(BaseModel):
    """事件实例"""

    id: str
    template_id: str
    severity: EventSeverity
    category: EventCategory
    timestamp: int = Field(description="触发时间（epoch 毫秒）")
    message: str
    effects: EventEffects = Field(default_factory=EventEffects)
    visual_cue: VisualCue | None = None
    acknowledged: bool = False


class SeverityWeights(BaseModel):
    flavor: float = 0
    info: float = 0
    warning: float = 0
    critical: float = 0

    def get(self, severity: EventSeverity) -> float:
        return getattr(self, severity.value)


class EventGenerationConfig(BaseModel):
    """事件生成节奏配置"""

    min_time_between_events: int = Field(ge=0, description="事件最小间隔（毫秒）")
    max_time_between_events: int = Field(ge=0, description="事件最大间隔（毫秒）")
    max_events_per_session: int = Field(ge=0, description="单次会话最多事件数")
    severity_weights: SeverityWeights
    enabled: bool = True


class EventGenerationResult(BaseModel):
    """try_generate_event 结果"""

    success: bool
    event: GameEvent | None = None
    reason: str | None = None
    next_attempt_time: int | None = None


class EventEffectResult(BaseModel):
    """事件效果应用结果"""

    success: bool = True
    applied_effects: list[str] = Field(default_factory=list)
    blocked_effects: list[str] = Field(default_factory=list)
    state_changes: dict[str, dict[str, float]] = Field(
        default_factory=dict,
        description="字段 -> {before, after}",
    )
