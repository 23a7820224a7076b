def advance_entities(entities, far_bound):
    # Back to front so removal doesn't skip the next entity
    for i in range(len(entities) - 1, -1, -1):
        entity = entities[i]
        entity.y += entity.speed
        if entity.y > far_bound:
            del entities[i]


def step_entities(state, config):
    advance_entities(state.obstacles, config.canvas_height)
    advance_entities(state.pickups, config.canvas_height)


def step_cosmetics(state):
    for i in range(len(state.particles) - 1, -1, -1):
        p = state.particles[i]
        p.x += p.vx
        p.y += p.vy
        p.life -= 1
        if p.life <= 0:
            del state.particles[i]

    for i in range(len(state.popups) - 1, -1, -1):
        popup = state.popups[i]
        popup.y -= 1
        popup.life -= 1
        if popup.life <= 0:
            del state.popups[i]
