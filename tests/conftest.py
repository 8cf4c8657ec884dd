"""Pomodoro RPG 测试配置 -- 公共 fixture"""

import random
from collections.abc import AsyncGenerator
from pathlib import Path

import pytest
import pytest_asyncio
from pomodoro_rpg.store import SaveSystem, create_save_system

# 固定起始时间：2026-01-15 08:00:00 UTC
START_MS = 1_768_464_000_000


class FakeClock:
    """可手动推进的毫秒时钟"""

    def __init__(self, start_ms: int = START_MS) -> None:
        self.now = start_ms

    def __call__(self) -> int:
        return self.now

    def advance(self, seconds: float) -> int:
        self.now += int(seconds * 1000)
        return self.now


@pytest.fixture
def clock() -> FakeClock:
    """固定起点的假时钟"""
    return FakeClock()


@pytest.fixture
def rng() -> random.Random:
    """固定种子的随机数源"""
    return random.Random(42)


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    """临时存档数据库路径"""
    return tmp_path / "pomodoro_test.db"


@pytest_asyncio.fixture
async def save_system(db_path: Path, clock: FakeClock) -> AsyncGenerator[SaveSystem, None]:
    """已初始化的存档系统（防抖 50ms）"""
    system = await create_save_system(str(db_path), debounce_ms=50, clock=clock)
    yield system
    await system.close()
