import math

from nisha_go.feedback import FeedbackEvent
from nisha_go.state import Particle, ScorePopup


def rects_intersect(a, b):
    ax, ay, aw, ah = a
    bx, by, bw, bh = b
    return ax < bx + bw and ax + aw > bx and ay < by + bh and ay + ah > by


def player_rect(state, config):
    return (config.player_x(state.player_lane), config.player_y, config.player_size, config.player_size)


def obstacle_rect(obstacle, config):
    return (config.entity_x(obstacle.lane, config.chaos_size), obstacle.y, config.chaos_size, config.chaos_size)


def pickup_rect(pickup, config):
    return (config.entity_x(pickup.lane, config.trainer_size), pickup.y, config.trainer_size, config.trainer_size)


def spawn_particles(state, config, x, y):
    if state.reduced_motion:
        return
    n = config.particle_count
    for i in range(n):
        angle = (math.pi * 2 / n) * i
        state.particles.append(Particle(
            x=x, y=y,
            vx=math.cos(angle) * config.particle_speed,
            vy=math.sin(angle) * config.particle_speed,
            life=config.particle_life,
            max_life=config.particle_life,
        ))


def spawn_score_popup(state, config, x, y, text):
    state.popups.append(ScorePopup(x=x, y=y, text=text, life=config.popup_life, max_life=config.popup_life))


def collect_pickup(state, config, index, feedback):
    pickup = state.pickups[index]
    state.score += config.trainer_score_bonus
    state.momentum = min(config.momentum_max, state.momentum + config.trainer_momentum_bonus)
    state.momentum_warned = False

    cx = config.entity_x(pickup.lane, config.trainer_size) + config.trainer_size / 2
    cy = pickup.y + config.trainer_size / 2
    spawn_particles(state, config, cx, cy)
    spawn_score_popup(state, config, cx, cy - 10, f"+{config.trainer_score_bonus:g}")

    del state.pickups[index]
    # sfx: collect arpeggio
    feedback.emit(FeedbackEvent.COLLECTED, lane=pickup.lane, x=cx, y=cy)


def resolve_collisions(state, config, feedback):
    """Returns True on a chaos hit. Pickups are only checked when nothing was hit."""
    player = player_rect(state, config)

    for obstacle in state.obstacles:
        if rects_intersect(player, obstacle_rect(obstacle, config)):
            return True

    for i in range(len(state.pickups) - 1, -1, -1):
        if rects_intersect(player, pickup_rect(state.pickups[i], config)):
            collect_pickup(state, config, i, feedback)
    return False
