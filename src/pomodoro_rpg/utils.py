"""随机与时间工具

事件、掉落、稀有度共用同一个加权随机选择；
所有随机数都来自可注入的 random.Random，所有时间读取都来自可注入的毫秒时钟，
测试中传入固定种子和假时钟即可得到确定结果。
"""

import random
import time
from collections.abc import Callable, Sequence
from typing import TypeVar

from ulid import ULID

T = TypeVar("T")

Clock = Callable[[], int]


def now_ms() -> int:
    """当前 epoch 毫秒"""
    return int(time.time() * 1000)


def new_id() -> str:
    """生成 ULID 字符串 ID"""
    return str(ULID())


def random_int(rng: random.Random, low: int, high: int) -> int:
    """闭区间 [low, high] 内的随机整数"""
    return rng.randint(low, high)


def random_float(rng: random.Random, low: float, high: float) -> float:
    """[low, high) 内的均匀随机浮点数"""
    return low + rng.random() * (high - low)


def percent_chance(rng: random.Random, percent: float) -> bool:
    """以 percent% 的概率返回 True"""
    return rng.random() * 100 < percent


def random_choice(rng: random.Random, items: Sequence[T]) -> T:
    """等概率选择一个元素

    Raises:
        ValueError: items 为空
    """
    if not items:
        raise ValueError("Cannot choose from an empty sequence")
    return items[rng.randrange(len(items))]


def weighted_choice(
    rng: random.Random,
    items: Sequence[T],
    weight_fn: Callable[[T], float],
) -> T:
    """按权重随机选择一个元素

    权重总和为 0 时退化为等概率选择。

    Args:
        rng: 随机数源
        items: 候选元素
        weight_fn: 从元素提取非负权重

    Returns:
        被选中的元素

    Raises:
        ValueError: items 为空
    """
    if not items:
        raise ValueError("Cannot choose from an empty sequence")

    weights = [max(0.0, float(weight_fn(item))) for item in items]
    total = sum(weights)
    if total <= 0:
        return random_choice(rng, items)

    roll = rng.random() * total
    for item, weight in zip(items, weights):
        roll -= weight
        if roll < 0:
            return item
    # 浮点误差兜底：取最后一个权重为正的元素
    return next(item for item, weight in zip(reversed(items), reversed(weights)) if weight > 0)
