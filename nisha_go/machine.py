import datetime
import json
import logging

from nisha_go.config import DEFAULT_CONFIG
from nisha_go.feedback import FeedbackEvent, NullFeedback
from nisha_go.persistence import MemoryHighScoreStore
from nisha_go.state import DeathReason, GameState, RunState

logger = logging.getLogger(__name__)

GAME_TITLE = "NISHA GO!"


class GameMachine:
    """Start/playing/paused/gameover transitions plus high score ownership.

    Requests that don't apply to the current state are ignored and return
    False. GameOver only leaves through restart().
    """

    def __init__(self, config=DEFAULT_CONFIG, store=None, feedback=None, reduced_motion=False):
        self.config = config
        self.store = store if store is not None else MemoryHighScoreStore()
        self.feedback = feedback if feedback is not None else NullFeedback()
        self.state = RunState.initial(config, reduced_motion=reduced_motion)
        self.high_score = self._load_high_score()

    def _load_high_score(self):
        try:
            return float(self.store.load())
        except Exception as e:
            logger.warning("High score unavailable, starting from 0: %s", e)
            return 0.0

    def _save_high_score(self):
        try:
            self.store.save(self.high_score)
            logger.info("New high score saved: %d", int(self.high_score))
        except Exception as e:
            logger.warning("High score save failed: %s", e)

    # --- Transitions ---
    def _begin_run(self, now):
        self.state.reset(self.config, now)
        self.state.game_state = GameState.PLAYING
        # sfx: start jingle
        self.feedback.emit(FeedbackEvent.GAME_STARTED)
        logger.info("Run started")

    def start(self, now=0.0):
        if self.state.game_state is not GameState.START:
            return False
        self._begin_run(now)
        return True

    def restart(self, now=0.0):
        if self.state.game_state not in (GameState.GAMEOVER, GameState.PAUSED):
            return False
        self._begin_run(now)
        return True

    def pause(self):
        if self.state.game_state is not GameState.PLAYING:
            return False
        self.state.game_state = GameState.PAUSED
        return True

    def resume(self):
        if self.state.game_state is not GameState.PAUSED:
            return False
        self.state.game_state = GameState.PLAYING
        return True

    def toggle_pause(self):
        if self.state.game_state is GameState.PLAYING:
            return self.pause()
        return self.resume()

    def end_game(self, reason=DeathReason.COLLISION):
        state = self.state
        if state.game_state not in (GameState.PLAYING, GameState.PAUSED):
            return False

        state.game_state = GameState.GAMEOVER
        state.death_reason = reason

        if reason is DeathReason.COLLISION:
            # sfx: hit burst
            self.feedback.emit(FeedbackEvent.COLLIDED, lane=state.player_lane)

        state.new_record = state.score > self.high_score
        if state.new_record:
            self.high_score = state.score
            self._save_high_score()

        # sfx: game over
        self.feedback.emit(
            FeedbackEvent.GAME_OVER, reason=reason, score=state.score, new_record=state.new_record
        )
        logger.info(
            "Game over (%s): score %d%s",
            reason.value, int(state.score), ", new record" if state.new_record else "",
        )
        return True

    def abort(self):
        return self.end_game(DeathReason.COLLISION)

    # --- Player ---
    def move(self, direction):
        state = self.state
        if state.game_state is not GameState.PLAYING:
            return False
        new_lane = state.player_lane + direction
        if not 0 <= new_lane < self.config.lane_count:
            return False
        state.player_lane = new_lane
        # sfx: lane blip
        self.feedback.emit(FeedbackEvent.MOVED, lane=new_lane)
        return True

    def move_left(self):
        return self.move(-1)

    def move_right(self):
        return self.move(1)

    # --- Misc ---
    def export_score(self, timestamp=None):
        if timestamp is None:
            timestamp = datetime.datetime.now(datetime.timezone.utc)
        data = {
            "game": GAME_TITLE,
            "score": self.state.score,
            "highScore": self.high_score,
            "timestamp": timestamp.isoformat(),
        }
        logger.info("SCORE EXPORT: %s", json.dumps(data, indent=2))
        return data
