"""静态目录数据：职业、任务、物品、掉落表、事件模板与事件节奏配置"""

from .classes import CLASS_CONFIGS, get_available_classes, get_class_config
from .event_bank import EVENT_TEMPLATES
from .event_config import (
    DEVELOPMENT_EVENT_CONFIG,
    DISABLED_EVENT_CONFIG,
    EVENT_BALANCING,
    PRODUCTION_EVENT_CONFIG,
    TEST_EVENT_CONFIG,
    get_event_config_preset,
    get_task_event_config,
)
from .items import (
    ACCESSORY_TEMPLATES,
    ARMOR_TEMPLATES,
    CONSUMABLES,
    SALVAGED_MATERIALS,
    WEAPON_TEMPLATES,
    create_material_stack,
    get_consumable,
)
from .loot_tables import LOOT_TABLES, get_loot_table
from .tasks import (
    TASK_CONFIGS,
    get_task_config,
    get_task_configs_for_level,
)

__all__ = [
    "CLASS_CONFIGS",
    "get_class_config",
    "get_available_classes",
    "EVENT_TEMPLATES",
    "PRODUCTION_EVENT_CONFIG",
    "DEVELOPMENT_EVENT_CONFIG",
    "TEST_EVENT_CONFIG",
    "DISABLED_EVENT_CONFIG",
    "EVENT_BALANCING",
    "get_event_config_preset",
    "get_task_event_config",
    "WEAPON_TEMPLATES",
    "ARMOR_TEMPLATES",
    "ACCESSORY_TEMPLATES",
    "CONSUMABLES",
    "get_consumable",
    "SALVAGED_MATERIALS",
    "create_material_stack",
    "LOOT_TABLES",
    "get_loot_table",
    "TASK_CONFIGS",
    "get_task_config",
    "get_task_configs_for_level",
]
