"""游戏编排：GameController 与 GameStateManager"""

from .controller import ActionResult, GameController, WorkSessionReport
from .state_manager import GameStateManager, create_new_game_state

__all__ = [
    "ActionResult",
    "GameController",
    "WorkSessionReport",
    "GameStateManager",
    "create_new_game_state",
]
