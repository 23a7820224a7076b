from __future__ import annotations

import dataclasses
import datetime

from nisha_go.feedback import FeedbackEvent, RecordingFeedback
from nisha_go.machine import GameMachine
from nisha_go.persistence import HighScoreStore, MemoryHighScoreStore
from nisha_go.state import DeathReason, GameState, Obstacle, Pickup


class BrokenStore(HighScoreStore):
    def load(self):
        raise OSError("storage unavailable")

    def save(self, score):
        raise OSError("storage unavailable")


def test_initial_state_is_start(machine, config) -> None:
    assert machine.state.game_state is GameState.START
    assert machine.state.momentum == config.momentum_max
    assert machine.state.player_lane == config.player_start_lane


def test_start_only_from_start(machine, feedback) -> None:
    assert machine.start(now=100.0)
    assert machine.state.game_state is GameState.PLAYING
    assert machine.state.game_start_time == 100.0
    assert feedback.count(FeedbackEvent.GAME_STARTED) == 1
    assert not machine.start()


def test_pause_and_resume_only_around_playing(machine) -> None:
    assert not machine.pause()
    assert not machine.resume()
    machine.start()
    assert not machine.resume()
    assert machine.toggle_pause()
    assert machine.state.game_state is GameState.PAUSED
    assert not machine.pause()
    assert machine.toggle_pause()
    assert machine.state.game_state is GameState.PLAYING


def test_moves_are_bounded_and_silent_at_the_edge(machine, feedback) -> None:
    assert not machine.move_left()  # not playing yet
    machine.start()
    assert machine.move_left()
    assert machine.state.player_lane == 0
    assert not machine.move_left()
    assert machine.state.player_lane == 0
    for _ in range(5):
        machine.move_right()
    assert machine.state.player_lane == 2
    assert feedback.count(FeedbackEvent.MOVED) == 3


def test_moves_ignored_while_paused(machine) -> None:
    machine.start()
    machine.pause()
    assert not machine.move_right()
    assert machine.state.player_lane == 1


def test_game_over_is_absorbing(machine, feedback) -> None:
    machine.start()
    assert machine.end_game(DeathReason.COLLISION)
    assert machine.state.game_state is GameState.GAMEOVER
    assert machine.state.death_reason is DeathReason.COLLISION
    assert feedback.count(FeedbackEvent.COLLIDED) == 1

    assert not machine.end_game(DeathReason.MOMENTUM_DEPLETED)
    assert machine.state.death_reason is DeathReason.COLLISION
    assert not machine.start()
    assert not machine.pause()
    assert not machine.resume()
    assert not machine.move_left()
    assert feedback.count(FeedbackEvent.GAME_OVER) == 1


def test_depletion_does_not_emit_collided(machine, feedback) -> None:
    machine.start()
    machine.end_game(DeathReason.MOMENTUM_DEPLETED)
    assert feedback.count(FeedbackEvent.COLLIDED) == 0
    assert feedback.count(FeedbackEvent.GAME_OVER) == 1


def test_new_record_saves_high_score(machine, store) -> None:
    machine.start()
    machine.state.score = 250.7
    machine.end_game()
    assert machine.state.new_record
    assert machine.high_score == 250.7
    assert store.score == 250.7
    assert store.saves == 1


def test_lower_score_keeps_record(config, feedback) -> None:
    store = MemoryHighScoreStore(score=500.0)
    machine = GameMachine(config, store=store, feedback=feedback)
    assert machine.high_score == 500.0
    machine.start()
    machine.state.score = 500.0
    machine.end_game()
    assert not machine.state.new_record
    assert store.saves == 0


def test_broken_store_is_best_effort(config) -> None:
    machine = GameMachine(config, store=BrokenStore(), feedback=RecordingFeedback())
    assert machine.high_score == 0.0
    machine.start()
    machine.state.score = 42.0
    assert machine.end_game()
    assert machine.high_score == 42.0
    assert machine.restart()


def test_abort_from_playing_or_paused(machine) -> None:
    assert not machine.abort()
    machine.start()
    machine.pause()
    assert machine.abort()
    assert machine.state.game_state is GameState.GAMEOVER
    assert machine.state.death_reason is DeathReason.COLLISION


def test_restart_only_from_gameover_or_paused(machine) -> None:
    assert not machine.restart()
    machine.start()
    assert not machine.restart()
    machine.pause()
    assert machine.restart()
    assert machine.state.game_state is GameState.PLAYING


def _comparable(state):
    data = dataclasses.asdict(state)
    data.pop("game_start_time")
    return data


def test_restart_matches_a_fresh_run(config, store, feedback) -> None:
    played = GameMachine(config, store=store, feedback=feedback)
    played.start(now=0.0)
    s = played.state
    s.score = 321.0
    s.momentum = 12.0
    s.momentum_warned = True
    s.player_lane = 2
    s.wave_number = 5
    s.current_chaos_speed = 3.0
    s.current_chaos_interval = 900.0
    s.current_momentum_decay = 0.04
    s.speed_multiplier = 1.5
    s.last_chaos_spawn = 4000.0
    s.last_trainer_spawn = 3000.0
    s.last_difficulty_increase = 8001.0
    s.obstacles.append(Obstacle(0, 10.0, 2.0))
    s.pickups.append(Pickup(1, 20.0, 1.0))
    played.end_game()
    assert played.restart(now=9000.0)

    fresh = GameMachine(config, store=MemoryHighScoreStore(), feedback=RecordingFeedback())
    fresh.start(now=0.0)

    assert _comparable(played.state) == _comparable(fresh.state)
    assert played.state.score == 0
    assert played.state.momentum == config.momentum_max
    assert played.state.wave_number == 1
    assert played.state.obstacles == [] and played.state.pickups == []
    assert played.state.death_reason is None
    assert played.state.game_start_time == 9000.0


def test_reduced_motion_survives_restart(config) -> None:
    machine = GameMachine(config, reduced_motion=True)
    machine.start()
    machine.end_game()
    machine.restart()
    assert machine.state.reduced_motion


def test_export_score(machine) -> None:
    machine.start()
    machine.state.score = 77.0
    ts = datetime.datetime(2026, 1, 2, 3, 4, 5, tzinfo=datetime.timezone.utc)
    data = machine.export_score(ts)
    assert data == {
        "game": "NISHA GO!",
        "score": 77.0,
        "highScore": 0.0,
        "timestamp": "2026-01-02T03:04:05+00:00",
    }


def test_muted_feedback_drops_events(config) -> None:
    feedback = RecordingFeedback()
    machine = GameMachine(config, feedback=feedback)
    assert feedback.toggle() is False
    machine.start()
    machine.move_left()
    assert feedback.events == []
    assert feedback.toggle() is True
    machine.move_right()
    assert feedback.count(FeedbackEvent.MOVED) == 1
