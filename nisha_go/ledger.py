from nisha_go.feedback import FeedbackEvent


def accrue(state, config, delta_ms):
    """Add time-based score and drain one tick of momentum.

    Score accrues by elapsed time; momentum drops by a flat amount per tick, so
    a faster frame rate drains it faster. Returns True once momentum is spent.
    """
    state.score += config.score_per_second * (delta_ms / 1000)

    state.momentum -= state.current_momentum_decay
    if state.momentum <= 0:
        state.momentum = 0.0
        return True
    return False


def check_momentum_warning(state, config, feedback):
    # One-shot until a pickup clears the flag
    if state.momentum < config.momentum_warning_level and not state.momentum_warned:
        state.momentum_warned = True
        # sfx: momentum low alarm
        feedback.emit(FeedbackEvent.MOMENTUM_LOW, momentum=state.momentum)
        return True
    return False
