"""EventBank -- 事件模板索引与合格模板筛选"""

import random

from ..models import (
    EventCategory,
    EventConditionContext,
    EventConditions,
    EventSeverity,
    EventTemplate,
    TaskType,
)
from ..utils import weighted_choice


def evaluate_conditions(conditions: EventConditions | None, context: EventConditionContext) -> bool:
    """模板条件是否全部满足

    Args:
        conditions: 模板条件，None 视为无条件
        context: 当前角色 / 任务快照

    Returns:
        True 如果全部条件成立
    """
    if conditions is None:
        return True

    if conditions.min_level is not None and context.character_level < conditions.min_level:
        return False
    if conditions.max_level is not None and context.character_level > conditions.max_level:
        return False

    health_percent = (
        context.current_health / context.max_health * 100 if context.max_health > 0 else 0
    )
    if conditions.min_health_percent is not None and health_percent < conditions.min_health_percent:
        return False
    if conditions.max_health_percent is not None and health_percent > conditions.max_health_percent:
        return False

    if conditions.requires_injury and not context.is_injured:
        return False
    if conditions.requires_not_injured and context.is_injured:
        return False

    if conditions.min_gold is not None and context.gold < conditions.min_gold:
        return False

    if conditions.requires_weapon and not context.has_weapon:
        return False
    if conditions.requires_armor and not context.has_armor:
        return False

    if conditions.custom_condition is not None and not conditions.custom_condition(context):
        return False

    return True


class EventBank:
    """事件模板库，按严重度 / 类别 / 任务类型建索引"""

    def __init__(self, templates: list[EventTemplate]) -> None:
        self._templates = list(templates)
        self._by_severity: dict[EventSeverity, list[EventTemplate]] = {s: [] for s in EventSeverity}
        self._by_category: dict[EventCategory, list[EventTemplate]] = {c: [] for c in EventCategory}
        self._by_task: dict[TaskType, list[EventTemplate]] = {t: [] for t in TaskType}

        for template in self._templates:
            self._by_severity[template.severity].append(template)
            self._by_category[template.category].append(template)
            # applicable_tasks 为空表示适用全部任务
            for task_type in template.applicable_tasks or list(TaskType):
                self._by_task[task_type].append(template)

    def get_by_severity(self, severity: EventSeverity) -> list[EventTemplate]:
        return list(self._by_severity[severity])

    def get_by_category(self, category: EventCategory) -> list[EventTemplate]:
        return list(self._by_category[category])

    def get_by_task_type(self, task_type: TaskType) -> list[EventTemplate]:
        return list(self._by_task.get(task_type, []))

    def get_eligible_templates(
        self,
        task_type: TaskType,
        context: EventConditionContext,
        preferred_severity: EventSeverity | None = None,
        exclude_template_ids: set[str] | None = None,
    ) -> list[EventTemplate]:
        """筛选合格模板

        先按任务类型、排除集合、条件过滤；若指定严重度且存在该严重度的模板，
        只保留该严重度，否则返回全部合格模板。
        """
        excluded = exclude_template_ids or set()
        eligible = [
            t
            for t in self.get_by_task_type(task_type)
            if t.template_id not in excluded and evaluate_conditions(t.conditions, context)
        ]

        if preferred_severity is not None:
            preferred = [t for t in eligible if t.severity == preferred_severity]
            if preferred:
                eligible = preferred

        return eligible

    def select_random_template(
        self,
        rng: random.Random,
        task_type: TaskType,
        context: EventConditionContext,
        preferred_severity: EventSeverity | None = None,
        exclude_template_ids: set[str] | None = None,
    ) -> EventTemplate | None:
        """按 weight 加权抽取一个合格模板，无合格模板时返回 None"""
        eligible = self.get_eligible_templates(
            task_type, context, preferred_severity, exclude_template_ids
        )
        if not eligible:
            return None
        return weighted_choice(rng, eligible, lambda t: t.weight)

    def get_statistics(self) -> dict:
        return {
            "total_templates": len(self._templates),
            "by_severity": {s.value: len(v) for s, v in self._by_severity.items()},
            "by_category": {c.value: len(v) for c, v in self._by_category.items()},
            "repeatable": sum(1 for t in self._templates if t.repeatable),
            "non_repeatable": sum(1 for t in self._templates if not t.repeatable),
        }
