"""Run state and the plain entity records the simulation moves around.

Nothing in here has behaviour beyond containment and reset; the systems in
difficulty/spawner/motion/collision/ledger mutate these records in place.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from nisha_go.config import GameConfig


class GameState(Enum):
    START = "start"
    PLAYING = "playing"
    PAUSED = "paused"
    GAMEOVER = "gameover"


class DeathReason(Enum):
    COLLISION = "collision"
    MOMENTUM_DEPLETED = "momentum"


@dataclass
class Obstacle:
    lane: int
    y: float
    speed: float


@dataclass
class Pickup:
    lane: int
    y: float
    speed: float


@dataclass
class Particle:
    x: float
    y: float
    vx: float
    vy: float
    life: int
    max_life: int


@dataclass
class ScorePopup:
    x: float
    y: float
    text: str
    life: int
    max_life: int


@dataclass
class RunState:
    game_state: GameState = GameState.START

    # Player
    player_lane: int = 1

    # Entities
    obstacles: List[Obstacle] = field(default_factory=list)
    pickups: List[Pickup] = field(default_factory=list)
    particles: List[Particle] = field(default_factory=list)
    popups: List[ScorePopup] = field(default_factory=list)

    # Score / momentum
    score: float = 0.0
    momentum: float = 100.0
    momentum_warned: bool = False

    # Difficulty (only the difficulty controller writes these)
    wave_number: int = 1
    current_chaos_interval: float = 1800.0
    current_chaos_speed: float = 1.2
    current_momentum_decay: float = 0.02
    speed_multiplier: float = 1.0

    # Timing, in ms of game time except game_start_time which is clock time
    game_start_time: float = 0.0
    last_chaos_spawn: float = 0.0
    last_trainer_spawn: float = 0.0
    last_difficulty_increase: float = 0.0

    # Outcome
    death_reason: Optional[DeathReason] = None
    new_record: bool = False

    # Session scoped, survives restarts
    reduced_motion: bool = False

    @classmethod
    def initial(cls, config: GameConfig, reduced_motion=False):
        state = cls(reduced_motion=reduced_motion)
        state.reset(config)
        state.game_state = GameState.START
        return state

    def reset(self, config: GameConfig, now=0.0):
        """Put every per-run field back to its start-of-run default."""
        self.player_lane = config.player_start_lane
        self.obstacles = []
        self.pickups = []
        self.particles = []
        self.popups = []

        self.score = 0.0
        self.momentum = config.momentum_max
        self.momentum_warned = False

        self.wave_number = 1
        self.current_chaos_interval = config.chaos_spawn_interval
        self.current_chaos_speed = config.chaos_speed
        self.current_momentum_decay = config.momentum_decay
        self.speed_multiplier = 1.0

        self.game_start_time = now
        self.last_chaos_spawn = 0.0
        self.last_trainer_spawn = 0.0
        self.last_difficulty_increase = 0.0

        self.death_reason = None
        self.new_record = False

    @property
    def is_playing(self):
        return self.game_state is GameState.PLAYING
