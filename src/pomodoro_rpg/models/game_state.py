"""根游戏状态 -- 整体作为一个 JSON blob 持久化"""

from typing import Generic, TypeVar

from pydantic import BaseModel, Field

from ..config import CURRENT_SAVE_VERSION
from .character import CharacterState
from .items import InventoryState
from .loot import Chest
from .progression import ProgressionState
from .tasks import TaskState
from .timer import TimerConfig, TimerState

T = TypeVar("T")


class GameMetadata(BaseModel):
    version: str = Field(default=CURRENT_SAVE_VERSION, description="存档格式版本")
    last_save_timestamp: int = Field(description="最近保存时间（epoch 毫秒）")
    created_timestamp: int = Field(description="创建时间（epoch 毫秒）")


class GameState(BaseModel):
    """完整游戏状态"""

    timer: TimerState
    timer_config: TimerConfig
    character: CharacterState
    inventory: InventoryState
    tasks: TaskState = Field(default_factory=TaskState)
    progression: ProgressionState = Field(default_factory=ProgressionState)
    chests: list[Chest] = Field(default_factory=list, description="未开启的宝箱")
    metadata: GameMetadata


class SaveResult(BaseModel, Generic[T]):
    """存档操作结果"""

    success: bool
    data: T | None = None
    error: str | None = None

    @classmethod
    def ok(cls, data: T | None = None) -> "SaveResult[T]":
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, error: str) -> "SaveResult[T]":
        return cls(success=False, error=error)
