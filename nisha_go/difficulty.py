import logging

logger = logging.getLogger(__name__)


def advance(state, config):
    """Ramp difficulty by one wave. Every parameter is clamped on its own bound."""
    m = config.difficulty_multiplier

    state.wave_number += 1
    state.current_chaos_speed = min(config.chaos_max_speed, state.current_chaos_speed * m)
    state.current_chaos_interval = max(config.chaos_min_interval, state.current_chaos_interval / m)
    # momentum_min_decay is the ceiling on the decay rate
    state.current_momentum_decay = min(config.momentum_min_decay, state.current_momentum_decay * m)
    state.speed_multiplier *= m

    logger.debug(
        "Wave %d: chaos speed %.3f, interval %.1f ms, decay %.4f",
        state.wave_number, state.current_chaos_speed,
        state.current_chaos_interval, state.current_momentum_decay,
    )


def maybe_advance(state, config, game_time):
    if game_time - state.last_difficulty_increase > config.difficulty_increase_interval:
        advance(state, config)
        state.last_difficulty_increase = game_time
        return True
    return False
