import dataclasses
from dataclasses import dataclass


# --- Colors ---
COLOR_BG = (5, 5, 5)
COLOR_LANE_LINE = (26, 26, 26)
COLOR_LANE_DOT = (51, 28, 0)
COLOR_PLAYER = (255, 138, 0)
COLOR_PLAYER_OUTLINE = (255, 176, 0)
COLOR_CHAOS_FILL = (102, 55, 0)
COLOR_CHAOS_OUTLINE = (255, 85, 0)
COLOR_TRAINER = (255, 176, 0)
COLOR_TRAINER_INNER = (255, 204, 68)
COLOR_PARTICLE = (255, 176, 0)
COLOR_POPUP = (255, 204, 68)
COLOR_TEXT = (255, 138, 0)
COLOR_TEXT_DIM = (102, 55, 0)


@dataclass(frozen=True)
class GameConfig:
    # Canvas
    canvas_width: int = 144
    canvas_height: int = 256

    # Lanes
    lane_count: int = 3
    lane_width: int = 48

    # Player
    player_size: int = 32
    player_start_lane: int = 1
    player_bottom_margin: int = 32

    # Obstacles (chaos)
    chaos_size: int = 24
    chaos_spawn_interval: float = 1800.0
    chaos_min_interval: float = 600.0
    chaos_speed: float = 1.2
    chaos_max_speed: float = 4.0

    # Pickups (trainers)
    trainer_size: int = 20
    trainer_spawn_interval: float = 3000.0
    trainer_speed: float = 1.0
    trainer_score_bonus: float = 100.0
    trainer_momentum_bonus: float = 20.0

    # Momentum
    momentum_max: float = 100.0
    momentum_decay: float = 0.02
    momentum_min_decay: float = 0.05
    momentum_warning_ratio: float = 0.25

    # Scoring
    score_per_second: float = 10.0

    # Difficulty
    difficulty_increase_interval: float = 8000.0
    difficulty_multiplier: float = 1.08

    # Cosmetics
    particle_count: int = 8
    particle_life: int = 20
    particle_speed: float = 2.0
    popup_life: int = 30

    def __post_init__(self):
        if self.lane_count < 1:
            raise ValueError(f"lane_count must be positive, got {self.lane_count}")
        if not 0 <= self.player_start_lane < self.lane_count:
            raise ValueError(
                f"player_start_lane {self.player_start_lane} outside 0..{self.lane_count - 1}"
            )
        if self.difficulty_multiplier < 1.0:
            raise ValueError("difficulty_multiplier must be >= 1.0")
        if self.chaos_min_interval > self.chaos_spawn_interval:
            raise ValueError("chaos_min_interval exceeds chaos_spawn_interval")
        if self.chaos_max_speed < self.chaos_speed:
            raise ValueError("chaos_max_speed is below chaos_speed")
        if self.momentum_max <= 0:
            raise ValueError("momentum_max must be positive")

    @classmethod
    def from_dict(cls, values):
        known = {f.name for f in dataclasses.fields(cls)}
        unknown = sorted(set(values) - known)
        if unknown:
            raise ValueError(f"Unknown config keys: {', '.join(unknown)}")
        return cls(**values)

    def replace(self, **overrides):
        return dataclasses.replace(self, **overrides)

    # --- Geometry ---
    @property
    def player_y(self):
        # Player sits near the bottom of the playfield
        return self.canvas_height - self.player_size - self.player_bottom_margin

    @property
    def momentum_warning_level(self):
        return self.momentum_max * self.momentum_warning_ratio

    def lane_x(self, lane):
        return lane * self.lane_width

    def entity_x(self, lane, size):
        return self.lane_x(lane) + (self.lane_width - size) / 2

    def player_x(self, lane):
        return self.entity_x(lane, self.player_size)


DEFAULT_CONFIG = GameConfig()
