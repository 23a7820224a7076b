from enum import Enum

from nisha_go.state import GameState

SWIPE_THRESHOLD = 30


class Intent(Enum):
    MOVE_LEFT = "move_left"
    MOVE_RIGHT = "move_right"
    START = "start"
    TOGGLE_PAUSE = "toggle_pause"
    RESTART = "restart"
    ABORT = "abort"


def intent_for_key(key, game_state):
    """Map a lower-cased key name ("arrowleft", "escape", " ") to an intent."""
    key = key.lower()

    if key == "escape":
        return Intent.TOGGLE_PAUSE

    if key == "r":
        if game_state in (GameState.GAMEOVER, GameState.PAUSED):
            return Intent.RESTART
        return None

    if game_state is GameState.PLAYING:
        if key in ("a", "arrowleft", "left"):
            return Intent.MOVE_LEFT
        if key in ("d", "arrowright", "right"):
            return Intent.MOVE_RIGHT

    if game_state is GameState.START and key in (" ", "space", "enter", "return"):
        return Intent.START

    return None


def intent_for_tap(game_state):
    if game_state is GameState.START:
        return Intent.START
    if game_state is GameState.GAMEOVER:
        return Intent.RESTART
    if game_state is GameState.PAUSED:
        return Intent.TOGGLE_PAUSE
    return None


def intent_for_swipe(dx, dy, game_state, threshold=SWIPE_THRESHOLD):
    # Horizontal swipe takes priority over a tap
    if abs(dx) > abs(dy) and abs(dx) > threshold:
        if game_state is not GameState.PLAYING:
            return None
        return Intent.MOVE_RIGHT if dx > 0 else Intent.MOVE_LEFT
    if abs(dx) < threshold and abs(dy) < threshold:
        return intent_for_tap(game_state)
    return None


def apply_intent(machine, intent, now=0.0):
    if intent is Intent.MOVE_LEFT:
        return machine.move_left()
    if intent is Intent.MOVE_RIGHT:
        return machine.move_right()
    if intent is Intent.START:
        return machine.start(now)
    if intent is Intent.TOGGLE_PAUSE:
        return machine.toggle_pause()
    if intent is Intent.RESTART:
        return machine.restart(now)
    if intent is Intent.ABORT:
        return machine.abort()
    return False
