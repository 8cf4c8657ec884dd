"""宝箱 -- 品质配置、创建、开启与 ChestManager

宝箱只能开启一次；再次开启抛出 ChestAlreadyOpenedError。
"幸运开箱" 只做展示，不额外增加奖励。
"""

import math
import random

import structlog

from ..data.loot_tables import get_loot_table
from ..exceptions import ChestAlreadyOpenedError
from ..models import (
    Chest,
    ChestOpenResult,
    ChestQuality,
    ChestQualityConfig,
    ItemGenerationContext,
    TaskType,
)
from ..utils import Clock, new_id, now_ms, percent_chance, random_int, weighted_choice
from .generator import LootGenerator

log = structlog.get_logger()

CHEST_QUALITY_CONFIGS: dict[ChestQuality, ChestQualityConfig] = {
    ChestQuality.BASIC: ChestQualityConfig(
        quality=ChestQuality.BASIC,
        display_name="Basic Chest",
        min_items=1,
        max_items=2,
        gold_multiplier=1.0,
        lucky_chance=5,
        color="#9CA3AF",
    ),
    ChestQuality.QUALITY: ChestQualityConfig(
        quality=ChestQuality.QUALITY,
        display_name="Quality Chest",
        min_items=2,
        max_items=3,
        gold_multiplier=1.5,
        lucky_chance=10,
        color="#10B981",
    ),
    ChestQuality.SUPERIOR: ChestQualityConfig(
        quality=ChestQuality.SUPERIOR,
        display_name="Superior Chest",
        min_items=3,
        max_items=4,
        gold_multiplier=2.0,
        lucky_chance=20,
        color="#3B82F6",
    ),
    ChestQuality.MASTERWORK: ChestQualityConfig(
        quality=ChestQuality.MASTERWORK,
        display_name="Masterwork Chest",
        min_items=4,
        max_items=6,
        gold_multiplier=3.0,
        lucky_chance=30,
        color="#A855F7",
    ),
}

CHEST_GOLD_RANGE = (10, 30)


def get_chest_quality_config(quality: ChestQuality) -> ChestQualityConfig:
    return CHEST_QUALITY_CONFIGS[quality]


def create_chest(
    source_task: TaskType,
    loot_quality: float = 1.0,
    quality: ChestQuality = ChestQuality.BASIC,
    clock: Clock | None = None,
) -> Chest:
    return Chest(
        id=new_id(),
        quality=quality,
        source_task=source_task,
        loot_quality=loot_quality,
        earned_at=(clock or now_ms)(),
    )


def create_chests(
    source_task: TaskType,
    count: int,
    loot_quality: float = 1.0,
    quality: ChestQuality = ChestQuality.BASIC,
    clock: Clock | None = None,
) -> list[Chest]:
    return [create_chest(source_task, loot_quality, quality, clock) for _ in range(count)]


def open_chest(
    rng: random.Random,
    chest: Chest,
    context: ItemGenerationContext,
    generator: LootGenerator | None = None,
) -> ChestOpenResult:
    """开启宝箱

    Args:
        rng: 随机数源
        chest: 宝箱（原地标记为已开启）
        context: 物品生成上下文
        generator: 物品生成器，默认使用同一个 rng 新建

    Returns:
        ChestOpenResult

    Raises:
        ChestAlreadyOpenedError: 宝箱已开启过
    """
    if chest.opened:
        raise ChestAlreadyOpenedError(chest.id)

    generator = generator or LootGenerator(rng)
    config = CHEST_QUALITY_CONFIGS[chest.quality]
    table = get_loot_table(chest.source_task)

    was_lucky = percent_chance(rng, config.lucky_chance + context.luck * 0.5)

    # 每点幸运 +1% 基础金币
    base_gold = generator.generate_gold(*CHEST_GOLD_RANGE, luck=context.luck * 0.1)
    gold = math.floor(base_gold * config.gold_multiplier * chest.loot_quality)

    item_context = context.model_copy(update={"loot_quality": chest.loot_quality})
    items = []
    for _ in range(random_int(rng, config.min_items, config.max_items)):
        item = generator.generate_from_table(table, item_context)
        if item is not None:
            items.append(item)

    total_value = gold + sum(item.value for item in items)

    chest.opened = True
    return ChestOpenResult(
        chest=chest,
        items=items,
        gold=gold,
        total_value=total_value,
        was_lucky=was_lucky,
    )


def determine_chest_quality(rng: random.Random, task_succeeded: bool, luck: int) -> ChestQuality:
    """失败只给普通宝箱；成功按 2 ** (3 - i) * (1 + 幸运 * 0.02) 抽取品质"""
    if not task_succeeded:
        return ChestQuality.BASIC
    qualities = list(ChestQuality)
    weighted = [
        (quality, 2 ** (len(qualities) - index - 1) * (1 + luck * 0.02))
        for index, quality in enumerate(qualities)
    ]
    quality, _ = weighted_choice(rng, weighted, lambda w: w[1])
    return quality


def estimate_chest_value(chest: Chest) -> tuple[int, int]:
    """粗略估值区间 (min, max)"""
    config = CHEST_QUALITY_CONFIGS[chest.quality]
    return (
        math.floor(20 * config.gold_multiplier * chest.loot_quality),
        math.floor(100 * config.gold_multiplier * chest.loot_quality),
    )


class ChestManager:
    """未开启宝箱的持有者

    chests 列表与 GameState.chests 是同一个对象，开启后的宝箱从列表中移除。
    """

    def __init__(
        self,
        chests: list[Chest] | None = None,
        rng: random.Random | None = None,
        clock: Clock | None = None,
    ) -> None:
        self.chests = chests if chests is not None else []
        self._rng = rng or random.Random()
        self._clock = clock or now_ms
        self._generator = LootGenerator(self._rng)
        self.total_opened = 0
        self.total_value_obtained = 0

    def award_chests(
        self,
        source_task: TaskType,
        count: int,
        loot_quality: float = 1.0,
        quality: ChestQuality = ChestQuality.BASIC,
    ) -> list[Chest]:
        awarded = create_chests(source_task, count, loot_quality, quality, self._clock)
        self.chests.extend(awarded)
        if awarded:
            log.info("chests_awarded", count=count, quality=quality, source_task=source_task)
        return awarded

    def get_chest(self, chest_id: str) -> Chest | None:
        return next((c for c in self.chests if c.id == chest_id), None)

    def open_chest(self, chest_id: str, context: ItemGenerationContext) -> ChestOpenResult | None:
        """开启并移出列表，找不到返回 None

        Raises:
            ChestAlreadyOpenedError: 宝箱已开启过
        """
        chest = self.get_chest(chest_id)
        if chest is None:
            return None

        result = open_chest(self._rng, chest, context, self._generator)
        self.chests.remove(chest)
        self.total_opened += 1
        self.total_value_obtained += result.total_value
        log.info(
            "chest_opened",
            chest_id=chest_id,
            quality=chest.quality,
            item_count=len(result.items),
            gold=result.gold,
            was_lucky=result.was_lucky,
        )
        return result

    def get_unopened_chests(self) -> list[Chest]:
        return [c for c in self.chests if not c.opened]

    def get_unopened_count(self) -> int:
        return len(self.get_unopened_chests())

    def get_chests_by_task(self, task_type: TaskType) -> list[Chest]:
        return [c for c in self.chests if c.source_task == task_type]

    def get_chests_by_quality(self, quality: ChestQuality) -> list[Chest]:
        return [c for c in self.chests if c.quality == quality]
