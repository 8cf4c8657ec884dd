"""配置常量模块 -- 可通过环境变量覆盖

包含存档数据库路径、存档键、存档版本、保存防抖时长、事件生成模式等。
"""

import os
from pathlib import Path
from typing import Literal, get_args

import structlog
from pydantic import BaseModel, Field

log = structlog.get_logger()

# 存档键（整个游戏状态存成一个 JSON blob）
STORAGE_KEY = "pomodoro-rpg:game-state"

# 当前存档格式版本，加载时要求严格相等
CURRENT_SAVE_VERSION = "1.0.0"

# 任务历史保留条数
TASK_HISTORY_LIMIT = 10

# 事件生成预设名，对应 data.event_config 中的预设
EventMode = Literal["production", "development", "test", "disabled"]

# 背包默认容量 / 快捷栏数量
DEFAULT_INVENTORY_SLOTS = 20
DEFAULT_QUICK_SLOTS = 4


def _get_base_dir() -> Path:
    """获取 data 基础目录"""
    return Path(os.environ.get("POMODORO_RPG_DATA_DIR", "data"))


def get_db_path() -> str:
    """获取存档 SQLite 数据库路径"""
    return os.environ.get(
        "POMODORO_RPG_DB_PATH",
        str(_get_base_dir() / "pomodoro_rpg.db"),
    )


class GameSettings(BaseModel):
    """运行时设置 -- 从环境变量加载

    环境变量:
        POMODORO_RPG_DB_PATH: 存档数据库路径
        POMODORO_RPG_SAVE_DEBOUNCE_MS: 自动保存防抖时长（毫秒，默认 500）
        POMODORO_RPG_EVENT_MODE: 事件生成模式（production/development/test/disabled）
        POMODORO_RPG_TICK_SECONDS: 游戏循环 tick 间隔（秒，默认 1）
    """

    db_path: str = Field(default_factory=get_db_path, description="存档数据库路径")
    save_debounce_ms: int = Field(default=500, ge=0, description="自动保存防抖时长（毫秒）")
    event_mode: EventMode = Field(
        default="production",
        description="事件生成预设",
    )
    tick_seconds: float = Field(default=1.0, gt=0, description="游戏循环 tick 间隔（秒）")


def load_game_settings() -> GameSettings:
    """从环境变量加载运行时设置

    非法取值记录 warning 并回退默认值，不阻塞启动。

    Returns:
        GameSettings 实例
    """
    kwargs: dict = {}

    if val := os.environ.get("POMODORO_RPG_DB_PATH"):
        kwargs["db_path"] = val

    if val := os.environ.get("POMODORO_RPG_SAVE_DEBOUNCE_MS"):
        try:
            debounce = int(val)
            if debounce < 0:
                raise ValueError(val)
            kwargs["save_debounce_ms"] = debounce
        except ValueError:
            log.warning(
                "invalid_save_debounce_config",
                env_var="POMODORO_RPG_SAVE_DEBOUNCE_MS",
                value=val,
                fallback=500,
            )

    if val := os.environ.get("POMODORO_RPG_EVENT_MODE"):
        if val in get_args(EventMode):
            kwargs["event_mode"] = val
        else:
            log.warning(
                "invalid_event_mode_config",
                env_var="POMODORO_RPG_EVENT_MODE",
                value=val,
                fallback="production",
            )

    if val := os.environ.get("POMODORO_RPG_TICK_SECONDS"):
        try:
            tick = float(val)
            if tick <= 0:
                raise ValueError(val)
            kwargs["tick_seconds"] = tick
        except ValueError:
            log.warning(
                "invalid_tick_config",
                env_var="POMODORO_RPG_TICK_SECONDS",
                value=val,
                fallback=1.0,
            )

    return GameSettings(**kwargs)
