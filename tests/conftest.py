from __future__ import annotations

import os

import pytest

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

from nisha_go.config import GameConfig
from nisha_go.feedback import RecordingFeedback
from nisha_go.loop import GameLoop
from nisha_go.machine import GameMachine
from nisha_go.persistence import MemoryHighScoreStore
from nisha_go.state import RunState


class FakeRng:
    """Stands in for numpy's Generator with scripted draws."""

    def __init__(self, integers=(), randoms=()):
        self._integers = list(integers)
        self._randoms = list(randoms)

    def integers(self, low, high=None):
        if not self._integers:
            return low
        value = self._integers.pop(0)
        assert low <= value < high
        return value

    def random(self):
        if not self._randoms:
            return 0.0
        return self._randoms.pop(0)


@pytest.fixture
def config() -> GameConfig:
    return GameConfig()


@pytest.fixture
def quiet_config() -> GameConfig:
    """No spawns and no difficulty ramp for the length of any test."""
    far = 1e12
    return GameConfig(
        chaos_spawn_interval=far,
        chaos_min_interval=far,
        trainer_spawn_interval=far,
        difficulty_increase_interval=far,
    )


@pytest.fixture
def feedback() -> RecordingFeedback:
    return RecordingFeedback()


@pytest.fixture
def store() -> MemoryHighScoreStore:
    return MemoryHighScoreStore()


@pytest.fixture
def state(config) -> RunState:
    return RunState.initial(config)


@pytest.fixture
def machine(config, store, feedback) -> GameMachine:
    return GameMachine(config, store=store, feedback=feedback)


@pytest.fixture
def make_loop(store, feedback):
    def _make(cfg, rng=None):
        m = GameMachine(cfg, store=store, feedback=feedback)
        return GameLoop(m, rng=rng if rng is not None else FakeRng(), clock=lambda: 0.0)

    return _make
