from nisha_go.state import GameState

LOOKAHEAD = 96


def policy(env):
    # Strategy: treat any chaos block inside the lookahead window above the player
    # as blocking its lane. Stay put when the current lane is clear, otherwise head
    # for the nearest clear lane, and drift toward a clear lane with a trainer.
    # Actions are edge triggered, so emit a no-op whenever a move was just sent.
    state, config = env.state, env.config

    if state.game_state is not GameState.PLAYING:
        if env.prev_space_held:
            return [0, 0, 0]
        return [0, 1, 0]  # Start / restart / resume

    if env.prev_movement != 0:
        return [0, 0, 0]

    player_top = config.player_y
    player_bottom = config.player_y + config.player_size

    blocked = set()
    for chaos in state.obstacles:
        if chaos.y + config.chaos_size > player_top - LOOKAHEAD and chaos.y < player_bottom:
            blocked.add(chaos.lane)

    rewarding = set()
    for trainer in state.pickups:
        if trainer.y < player_bottom:
            rewarding.add(trainer.lane)

    lane = state.player_lane
    clear = [l for l in range(config.lane_count) if l not in blocked]
    if not clear:
        return [0, 0, 0]

    # Only adjacent lanes count, a move through a blocked lane would collide
    candidates = [l for l in clear if abs(l - lane) <= 1]
    if lane in blocked:
        target = min(candidates, key=lambda l: (l not in rewarding, abs(l - lane))) if candidates else lane
    else:
        bonus = [l for l in candidates if l in rewarding]
        target = lane if (lane in rewarding or not bonus) else bonus[0]

    if target < lane:
        return [3, 0, 0]  # Move left
    if target > lane:
        return [4, 0, 0]  # Move right
    return [0, 0, 0]
