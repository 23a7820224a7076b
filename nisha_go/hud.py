import math

from nisha_go.state import DeathReason, GameState

LANE_NAMES = ["L", "C", "R"]

MODE_TEXT = {
    GameState.START: "READY",
    GameState.PLAYING: "ACTIVE",
    GameState.PAUSED: "PAUSED",
    GameState.GAMEOVER: "ENDED",
}

DEATH_TEXT = {
    DeathReason.COLLISION: "COLLISION DETECTED",
    DeathReason.MOMENTUM_DEPLETED: "MOMENTUM DEPLETED",
}


def format_score(score):
    return str(int(math.floor(score))).zfill(5)


def lane_name(lane, lane_count=3):
    if lane_count == len(LANE_NAMES):
        return LANE_NAMES[lane]
    return str(lane + 1)


def momentum_percent(momentum, momentum_max):
    return max(0.0, min(100.0, momentum / momentum_max * 100.0))


def momentum_band(percent):
    if percent < 25:
        return "critical"
    if percent < 50:
        return "low"
    return "ok"


def hud_snapshot(state, config, high_score):
    """Display-ready values for whatever draws the HUD."""
    percent = momentum_percent(state.momentum, config.momentum_max)
    return {
        "score": format_score(state.score),
        "high_score": format_score(high_score),
        "momentum_percent": percent,
        "momentum_text": f"{int(percent)}%",
        "momentum_band": momentum_band(percent),
        "speed": f"{state.speed_multiplier:.1f}x",
        "lane": lane_name(state.player_lane, config.lane_count),
        "wave": str(state.wave_number).zfill(2),
        "mode": MODE_TEXT[state.game_state],
        "death_reason": DEATH_TEXT.get(state.death_reason, ""),
        "new_record": state.new_record,
    }
