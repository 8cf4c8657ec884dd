"""事件生成节奏配置 -- 预设与按任务类型的调整"""

from ..models import EventGenerationConfig, SeverityWeights, TaskType

# 约每 2 分钟一个事件，25 分钟专注最多 10 个，偏向不打扰的氛围事件
PRODUCTION_EVENT_CONFIG = EventGenerationConfig(
    min_time_between_events=90_000,
    max_time_between_events=150_000,
    max_events_per_session=10,
    severity_weights=SeverityWeights(flavor=50, info=30, warning=15, critical=5),
    enabled=True,
)

DEVELOPMENT_EVENT_CONFIG = EventGenerationConfig(
    min_time_between_events=10_000,
    max_time_between_events=20_000,
    max_events_per_session=50,
    severity_weights=SeverityWeights(flavor=25, info=35, warning=25, critical=15),
    enabled=True,
)

# 无间隔，便于测试逐 tick 触发
TEST_EVENT_CONFIG = EventGenerationConfig(
    min_time_between_events=0,
    max_time_between_events=0,
    max_events_per_session=100,
    severity_weights=SeverityWeights(flavor=25, info=25, warning=25, critical=25),
    enabled=True,
)

DISABLED_EVENT_CONFIG = EventGenerationConfig(
    min_time_between_events=0,
    max_time_between_events=0,
    max_events_per_session=0,
    severity_weights=SeverityWeights(),
    enabled=False,
)

EVENT_CONFIG_PRESETS: dict[str, EventGenerationConfig] = {
    "production": PRODUCTION_EVENT_CONFIG,
    "development": DEVELOPMENT_EVENT_CONFIG,
    "test": TEST_EVENT_CONFIG,
    "disabled": DISABLED_EVENT_CONFIG,
}

# 事件频率倍率：>1 更频繁
TASK_EVENT_RATE_MODIFIERS: dict[TaskType, float] = {
    TaskType.RAID: 1.2,
    TaskType.EXPEDITION: 1.0,
    TaskType.CRAFT: 0.7,
    TaskType.HUNT: 1.1,
    TaskType.REST: 0.5,
}

TASK_SEVERITY_ADJUSTMENTS: dict[TaskType, SeverityWeights] = {
    TaskType.RAID: SeverityWeights(flavor=30, info=25, warning=25, critical=20),
    TaskType.EXPEDITION: SeverityWeights(flavor=50, info=30, warning=15, critical=5),
    TaskType.CRAFT: SeverityWeights(flavor=60, info=30, warning=8, critical=2),
    TaskType.HUNT: SeverityWeights(flavor=40, info=30, warning=20, critical=10),
    TaskType.REST: SeverityWeights(flavor=80, info=15, warning=4, critical=1),
}

# 单个事件效果的上下限，供事件目录自检
EVENT_BALANCING = {
    "max_gold_gain": 150,
    "max_gold_loss": -80,
    "max_health_damage": -60,
    "max_health_heal": 100,
    "max_success_bonus": 25,
    "max_success_penalty": -15,
    "max_materials_gain": 50,
    "max_durability_damage": 60,
    "max_extra_chests": 1,
    "max_xp_gain": 150,
}


def get_event_config_preset(mode: str) -> EventGenerationConfig:
    """按模式名取预设，未知模式回退 production"""
    return EVENT_CONFIG_PRESETS.get(mode, PRODUCTION_EVENT_CONFIG).model_copy(deep=True)


def get_task_event_config(
    task_type: TaskType,
    base_config: EventGenerationConfig = PRODUCTION_EVENT_CONFIG,
) -> EventGenerationConfig:
    """按任务类型调整事件配置

    间隔除以任务频率倍率（向下取整），严重度权重替换为该任务的分布。
    禁用配置原样返回。
    """
    if not base_config.enabled:
        return base_config.model_copy(deep=True)

    rate = TASK_EVENT_RATE_MODIFIERS.get(task_type, 1.0)
    return base_config.model_copy(
        update={
            "min_time_between_events": int(base_config.min_time_between_events // rate),
            "max_time_between_events": int(base_config.max_time_between_events // rate),
            "severity_weights": TASK_SEVERITY_ADJUSTMENTS.get(
                task_type, base_config.severity_weights
            ).model_copy(),
        },
        deep=True,
    )
