import logging
import time

import numpy as np

from nisha_go import collision, difficulty, ledger, motion, spawner
from nisha_go.controls import apply_intent
from nisha_go.state import DeathReason, GameState

logger = logging.getLogger(__name__)


def monotonic_ms():
    return time.perf_counter() * 1000.0


def generate_session_id(rng):
    digits = "0123456789ABCDEF"
    return "0x" + "".join(digits[int(rng.integers(0, 16))] for _ in range(6))


class GameLoop:
    """Per-frame driver. One tick() per display refresh; updates only while playing."""

    def __init__(self, machine, seed=None, rng=None, clock=monotonic_ms, renderer=None):
        self.machine = machine
        self.config = machine.config
        self.rng = rng if rng is not None else np.random.default_rng(seed)
        self.clock = clock
        self.renderer = renderer

        self.session_id = generate_session_id(self.rng)
        logger.debug("Session %s", self.session_id)
        self.last_frame_time = None

        # FPS tracking
        self.frame_count = 0
        self.last_fps_update = None
        self.fps = 0

    @property
    def state(self):
        return self.machine.state

    def handle_intent(self, intent, now=None):
        if now is None:
            now = self.clock()
        return apply_intent(self.machine, intent, now)

    def tick(self, now=None):
        if now is None:
            now = self.clock()
        delta = 0.0 if self.last_frame_time is None else now - self.last_frame_time
        self.last_frame_time = now

        self._track_fps(now)

        if self.state.game_state is GameState.PLAYING:
            self.update(now, delta)

        if self.renderer is not None:
            self.renderer(self.state)
        return delta

    def _track_fps(self, now):
        if self.last_fps_update is None:
            self.last_fps_update = now
        self.frame_count += 1
        if now - self.last_fps_update >= 1000:
            self.fps = self.frame_count
            self.frame_count = 0
            self.last_fps_update = now

    def update(self, now, delta):
        state, config, feedback = self.state, self.config, self.machine.feedback
        game_time = now - state.game_start_time

        # Depletion ends the tick before anything can collide
        if ledger.accrue(state, config, delta):
            self.machine.end_game(DeathReason.MOMENTUM_DEPLETED)
            return

        difficulty.maybe_advance(state, config, game_time)
        spawner.run_spawn_checks(state, config, self.rng, game_time)
        motion.step_entities(state, config)

        if collision.resolve_collisions(state, config, feedback):
            self.machine.end_game(DeathReason.COLLISION)
            return

        motion.step_cosmetics(state)
        ledger.check_momentum_warning(state, config, feedback)
