import logging

from nisha_go.state import Obstacle, Pickup

logger = logging.getLogger(__name__)


def spawn_obstacle(state, config, rng):
    lane = int(rng.integers(0, config.lane_count))
    # Speed is copied now; later difficulty changes don't touch this block
    obstacle = Obstacle(lane=lane, y=-config.chaos_size, speed=state.current_chaos_speed)
    state.obstacles.append(obstacle)
    logger.debug("Spawned chaos in lane %d at speed %.3f", lane, obstacle.speed)
    return obstacle


def spawn_pickup(state, config, rng):
    lane = int(rng.integers(0, config.lane_count))

    # Soft avoidance: a chaos block near the top of this lane gives a coin
    # flip chance of shifting over one lane
    chaos_in_lane = any(
        c.lane == lane and c.y < config.canvas_height / 3 for c in state.obstacles
    )
    if chaos_in_lane and rng.random() > 0.5:
        lane = (lane + 1) % config.lane_count

    pickup = Pickup(
        lane=lane,
        y=-config.trainer_size,
        speed=config.trainer_speed * state.speed_multiplier,
    )
    state.pickups.append(pickup)
    logger.debug("Spawned trainer in lane %d at speed %.3f", lane, pickup.speed)
    return pickup


def run_spawn_checks(state, config, rng, game_time):
    """Spawn whichever kinds are due; returns (obstacle, pickup), either may be None."""
    obstacle = pickup = None

    if game_time - state.last_chaos_spawn > state.current_chaos_interval:
        obstacle = spawn_obstacle(state, config, rng)
        state.last_chaos_spawn = game_time

    if game_time - state.last_trainer_spawn > config.trainer_spawn_interval:
        pickup = spawn_pickup(state, config, rng)
        state.last_trainer_spawn = game_time

    return obstacle, pickup
