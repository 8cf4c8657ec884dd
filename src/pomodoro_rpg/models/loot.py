"""掉落与宝箱数据模型"""

from pydantic import BaseModel, Field

from .enums import ChestQuality, ItemRarity, TaskType
from .items import Item, ItemTemplate


class RarityConfig(BaseModel):
    """稀有度配置"""

    rarity: ItemRarity
    display_name: str
    stat_multiplier: float = Field(gt=0, description="属性倍率")
    value_multiplier: float = Field(gt=0, description="价值倍率")
    drop_weight: float = Field(ge=0, description="基础掉落权重")
    color: str


class ChestQualityConfig(BaseModel):
    """宝箱品质配置"""

    quality: ChestQuality
    display_name: str
    min_items: int = Field(ge=0)
    max_items: int = Field(ge=0)
    gold_multiplier: float = Field(gt=0)
    lucky_chance: float = Field(ge=0, le=100, description="幸运开箱基础几率（%）")
    color: str


class TypeWeights(BaseModel):
    """掉落物品类型权重（合计 100，消耗品补足剩余）"""

    weapon: int = 0
    armor: int = 0
    accessory: int = 0
    consumable: int = 0


class LootTable(BaseModel):
    """某类任务的掉落表"""

    task_type: TaskType
    item_pool: list[ItemTemplate] = Field(default_factory=list)
    consumable_pool: list[str] = Field(default_factory=list, description="消耗品 ID")
    type_weights: TypeWeights


class Chest(BaseModel):
    """宝箱 -- 只能打开一次"""

    id: str
    quality: ChestQuality
    source_task: TaskType
    loot_quality: float = Field(default=1.0, gt=0)
    earned_at: int = Field(description="获得时间（epoch 毫秒）")
    opened: bool = False


class ItemGenerationContext(BaseModel):
    """物品生成上下文"""

    character_level: int = Field(default=1, ge=1)
    luck: int = 0
    loot_quality: float = 1.0
    force_rarity: ItemRarity | None = None


class ChestOpenResult(BaseModel):
    """开箱结果"""

    chest: Chest
    items: list[Item] = Field(default_factory=list)
    gold: int = 0
    total_value: int = 0
    was_lucky: bool = Field(default=False, description="仅用于展示，不影响奖励")
