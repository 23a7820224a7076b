from __future__ import annotations

import dataclasses

import pytest

from nisha_go.config import DEFAULT_CONFIG, GameConfig


def test_defaults_match_the_original_tuning() -> None:
    c = DEFAULT_CONFIG
    assert c.lane_count == 3
    assert c.lane_width * c.lane_count == c.canvas_width
    assert c.player_y == 192
    assert c.momentum_warning_level == 25.0
    assert c.trainer_score_bonus == 100
    assert c.trainer_momentum_bonus == 20


def test_config_is_immutable() -> None:
    with pytest.raises(dataclasses.FrozenInstanceError):
        DEFAULT_CONFIG.lane_count = 4  # type: ignore[misc]


def test_replace_and_from_dict() -> None:
    c = DEFAULT_CONFIG.replace(momentum_decay=0.5)
    assert c.momentum_decay == 0.5
    assert DEFAULT_CONFIG.momentum_decay == 0.02

    c2 = GameConfig.from_dict({"lane_count": 4, "canvas_width": 192})
    assert c2.lane_count == 4


def test_from_dict_rejects_unknown_keys() -> None:
    with pytest.raises(ValueError, match="nope"):
        GameConfig.from_dict({"nope": 1})


@pytest.mark.parametrize(
    "overrides",
    [
        {"lane_count": 0},
        {"player_start_lane": 3},
        {"difficulty_multiplier": 0.9},
        {"chaos_min_interval": 5000.0},
        {"chaos_max_speed": 1.0},
    ],
)
def test_invalid_config_raises(overrides) -> None:
    with pytest.raises(ValueError):
        GameConfig(**overrides)


def test_lane_geometry_centres_entities() -> None:
    c = DEFAULT_CONFIG
    assert c.lane_x(2) == 96
    assert c.player_x(0) == 8
    assert c.entity_x(1, c.chaos_size) == 60
    assert c.entity_x(1, c.trainer_size) == 62
