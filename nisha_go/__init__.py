from nisha_go.config import DEFAULT_CONFIG, GameConfig
from nisha_go.loop import GameLoop
from nisha_go.machine import GameMachine
from nisha_go.state import DeathReason, GameState, RunState

__all__ = [
    "DEFAULT_CONFIG",
    "DeathReason",
    "GameConfig",
    "GameLoop",
    "GameMachine",
    "GameState",
    "RunState",
]
