"""GameStateManager -- 新建 / 加载 / 更新 / 刷盘 / 清除游戏状态"""

from collections.abc import Callable

import structlog

from ..character.state import create_initial_character_state
from ..models import (
    DEFAULT_TIMER_CONFIG,
    CharacterClass,
    GameMetadata,
    GameState,
    InventoryState,
    SaveResult,
    TimerConfig,
    TimerState,
)
from ..store.save_system import SaveSystem
from ..utils import Clock, now_ms

log = structlog.get_logger()


def create_new_game_state(
    character_class: CharacterClass = CharacterClass.VANGUARD,
    timer_config: TimerConfig | None = None,
    clock: Clock | None = None,
) -> GameState:
    """全新游戏状态：1 级角色、空背包、IDLE 计时器"""
    now = (clock or now_ms)()
    return GameState(
        timer=TimerState(last_update_timestamp=now),
        timer_config=(timer_config or DEFAULT_TIMER_CONFIG).model_copy(),
        character=create_initial_character_state(character_class, clock),
        inventory=InventoryState(),
        metadata=GameMetadata(last_save_timestamp=now, created_timestamp=now),
    )


class GameStateManager:
    """持有当前 GameState，并通过 SaveSystem 持久化"""

    def __init__(self, save_system: SaveSystem, clock: Clock | None = None) -> None:
        self._save_system = save_system
        self._clock = clock or now_ms
        self._state: GameState | None = None

    @property
    def state(self) -> GameState | None:
        return self._state

    @property
    def save_system(self) -> SaveSystem:
        return self._save_system

    async def new_game(
        self, character_class: CharacterClass = CharacterClass.VANGUARD
    ) -> SaveResult[GameState]:
        """创建新游戏并立即保存"""
        self._state = create_new_game_state(character_class, clock=self._clock)
        result = await self._save_system.save_immediate(self._state)
        if not result.success:
            return SaveResult.fail(result.error or "Failed to save new game")
        await log.ainfo("new_game_created", character_class=character_class)
        return SaveResult.ok(self._state)

    async def load(self) -> SaveResult[GameState]:
        result = await self._save_system.load()
        if result.success:
            self._state = result.data
        return result

    async def load_or_create(
        self, character_class: CharacterClass = CharacterClass.VANGUARD
    ) -> GameState:
        """加载存档；没有存档或存档不可用时回退到全新游戏"""
        result = await self.load()
        if result.success and result.data is not None:
            return result.data

        if result.error != "No saved game state found":
            await log.awarning("save_unusable_starting_fresh", error=result.error)
        await self.new_game(character_class)
        return self._state

    def update(self, mutator: Callable[[GameState], None] | None = None) -> None:
        """修改状态（可选）并请求防抖保存

        Raises:
            RuntimeError: 尚未加载或创建游戏
        """
        if self._state is None:
            raise RuntimeError("No game state loaded")
        if mutator is not None:
            mutator(self._state)
        self._save_system.save(self._state)

    async def flush(self) -> SaveResult[None]:
        return await self._save_system.flush()

    async def clear(self) -> SaveResult[None]:
        self._state = None
        return await self._save_system.clear()
