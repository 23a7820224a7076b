import logging
import os

# Headless by default; a real display can still be forced from the shell.
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

import gymnasium as gym
import numpy as np
import pygame
import pygame.gfxdraw
from gymnasium.spaces import MultiDiscrete

from nisha_go import config as cfg
from nisha_go.controls import Intent, intent_for_key, intent_for_tap
from nisha_go.feedback import FeedbackEvent, RecordingFeedback
from nisha_go.hud import hud_snapshot
from nisha_go.loop import GameLoop
from nisha_go.machine import GameMachine
from nisha_go.state import GameState

logger = logging.getLogger(__name__)


class SurfaceRenderer:
    """Draws a RunState onto an off-screen pygame Surface."""

    def __init__(self, config, machine):
        self.config = config
        self.machine = machine
        self.surface = pygame.Surface((config.canvas_width, config.canvas_height))
        self.font_main = pygame.font.Font(None, 18)
        self.font_small = pygame.font.Font(None, 14)

    def __call__(self, state):
        self.surface.fill(cfg.COLOR_BG)
        self._render_lanes()
        self._render_pickups(state)
        self._render_obstacles(state)
        self._render_player(state)
        self._render_particles(state)
        self._render_popups(state)
        self._render_ui(state)
        return self.surface

    def _render_lanes(self):
        c = self.config
        for i in range(1, c.lane_count):
            x = i * c.lane_width
            pygame.draw.line(self.surface, cfg.COLOR_LANE_LINE, (x, 0), (x, c.canvas_height), 1)
        for i in range(c.lane_count):
            lx = int(i * c.lane_width + c.lane_width / 2 - 2)
            for y in range(0, c.canvas_height, 32):
                pygame.draw.rect(self.surface, cfg.COLOR_LANE_DOT, (lx, y, 4, 4))

    def _render_player(self, state):
        c = self.config
        rect = pygame.Rect(int(c.player_x(state.player_lane)), int(c.player_y), c.player_size, c.player_size)
        pygame.draw.rect(self.surface, cfg.COLOR_PLAYER, rect)
        pygame.draw.rect(self.surface, cfg.COLOR_PLAYER_OUTLINE, rect, 2)

    def _render_obstacles(self, state):
        c = self.config
        for chaos in state.obstacles:
            rect = pygame.Rect(int(c.entity_x(chaos.lane, c.chaos_size)), int(chaos.y), c.chaos_size, c.chaos_size)
            pygame.draw.rect(self.surface, cfg.COLOR_CHAOS_FILL, rect)
            pygame.draw.rect(self.surface, cfg.COLOR_CHAOS_OUTLINE, rect, 2)

    def _render_pickups(self, state):
        c = self.config
        r = c.trainer_size // 2
        for trainer in state.pickups:
            cx = int(c.entity_x(trainer.lane, c.trainer_size) + r)
            cy = int(trainer.y + r)
            pygame.gfxdraw.filled_circle(self.surface, cx, cy, r, cfg.COLOR_TRAINER)
            pygame.gfxdraw.aacircle(self.surface, cx, cy, r, cfg.COLOR_TRAINER)
            pygame.gfxdraw.filled_circle(self.surface, cx, cy, max(1, r // 2), cfg.COLOR_TRAINER_INNER)

    def _render_particles(self, state):
        for p in state.particles:
            alpha = p.life / p.max_life
            color = tuple(int(ch * alpha) for ch in cfg.COLOR_PARTICLE)
            pygame.draw.rect(self.surface, color, (int(p.x - 2), int(p.y - 2), 4, 4))

    def _render_popups(self, state):
        for popup in state.popups:
            alpha = popup.life / popup.max_life
            text = self.font_small.render(popup.text, True, cfg.COLOR_POPUP)
            text.set_alpha(int(255 * alpha))
            self.surface.blit(text, text.get_rect(center=(int(popup.x), int(popup.y))))

    def _render_ui(self, state):
        c = self.config
        hud = hud_snapshot(state, c, self.machine.high_score)

        score_surf = self.font_main.render(hud["score"], True, cfg.COLOR_TEXT)
        self.surface.blit(score_surf, (4, 4))
        wave_surf = self.font_small.render(f"W{hud['wave']}", True, cfg.COLOR_TEXT)
        self.surface.blit(wave_surf, wave_surf.get_rect(topright=(c.canvas_width - 4, 4)))

        # Momentum bar
        bar_w = c.canvas_width - 8
        pygame.draw.rect(self.surface, cfg.COLOR_TEXT_DIM, (4, 20, bar_w, 4))
        fill_color = {"critical": (255, 51, 0), "low": cfg.COLOR_PLAYER}.get(hud["momentum_band"], cfg.COLOR_PLAYER_OUTLINE)
        pygame.draw.rect(self.surface, fill_color, (4, 20, int(bar_w * hud["momentum_percent"] / 100), 4))

        if state.game_state is GameState.PLAYING:
            return

        overlay = pygame.Surface((c.canvas_width, c.canvas_height), pygame.SRCALPHA)
        overlay.fill((0, 0, 0, 180))
        self.surface.blit(overlay, (0, 0))

        if state.game_state is GameState.START:
            lines = ["NISHA GO!", "SPACE TO START"]
        elif state.game_state is GameState.PAUSED:
            lines = ["PAUSED", "SPACE TO RESUME"]
        else:
            lines = [hud["death_reason"], f"SCORE {hud['score']}", f"BEST {hud['high_score']}"]
            if hud["new_record"]:
                lines.append("NEW RECORD")

        y = c.canvas_height // 2 - 10 * len(lines)
        for line in lines:
            surf = self.font_small.render(line, True, cfg.COLOR_TEXT)
            self.surface.blit(surf, surf.get_rect(center=(c.canvas_width // 2, y)))
            y += 20


class GameEnv(gym.Env):
    metadata = {"render_modes": ["rgb_array"], "render_fps": 60}

    user_guide = (
        "Controls: ←→ to switch lanes. Space to start or restart. Shift to pause."
    )

    game_description = (
        "Dodge falling chaos blocks across three lanes and grab trainers to keep your momentum up. "
        "The run ends on a hit or when momentum runs dry."
    )

    auto_advance = True

    FPS = 60
    MAX_STEPS = 10000
    GAME_OVER_PENALTY = 10.0

    def __init__(self, render_mode="rgb_array", config=cfg.DEFAULT_CONFIG, store=None, reduced_motion=False):
        super().__init__()
        self.render_mode = render_mode
        self.config = config
        self.frame_ms = 1000.0 / self.FPS

        # --- Spaces ---
        self.observation_space = gym.spaces.Box(
            low=0, high=255, shape=(config.canvas_height, config.canvas_width, 3), dtype=np.uint8
        )
        self.action_space = MultiDiscrete([5, 2, 2])

        # --- Pygame Setup ---
        pygame.init()
        pygame.font.init()

        self.feedback = RecordingFeedback()
        self.machine = GameMachine(config, store=store, feedback=self.feedback, reduced_motion=reduced_motion)
        self.renderer = SurfaceRenderer(config, self.machine)
        self.loop = GameLoop(self.machine, rng=self.np_random, clock=lambda: self.sim_time, renderer=self.renderer)

        # --- State Variables (initialized in reset) ---
        self.sim_time = 0.0
        self.steps = 0
        self.prev_movement = 0
        self.prev_space_held = False
        self.prev_shift_held = False
        self.pickups_collected = 0

    @property
    def state(self):
        return self.machine.state

    def reset(self, seed=None, options=None):
        super().reset(seed=seed)
        self.loop.rng = self.np_random

        self.sim_time = 0.0
        self.steps = 0
        self.prev_movement = 0
        self.prev_space_held = False
        self.prev_shift_held = False
        self.pickups_collected = 0
        self.feedback.drain()

        if not self.machine.start(self.sim_time):
            self.machine.pause()
            self.machine.restart(self.sim_time)
        self.loop.last_frame_time = self.sim_time
        self.renderer(self.state)

        return self._get_observation(), self._get_info()

    def step(self, action):
        if self.state.game_state is GameState.GAMEOVER and not action[1] == 1:
            self.prev_space_held = False
            return self._get_observation(), 0, True, False, self._get_info()

        movement, space_held, shift_held = int(action[0]), action[1] == 1, action[2] == 1
        space_pressed = space_held and not self.prev_space_held
        shift_pressed = shift_held and not self.prev_shift_held
        movement_pressed = movement != 0 and movement != self.prev_movement

        if shift_pressed:
            self.loop.handle_intent(Intent.TOGGLE_PAUSE)
        if space_pressed:
            tap = intent_for_tap(self.state.game_state)
            if tap is not None:
                self.loop.handle_intent(tap)
        if movement_pressed:
            if movement == 3:
                self.loop.handle_intent(Intent.MOVE_LEFT)
            elif movement == 4:
                self.loop.handle_intent(Intent.MOVE_RIGHT)

        self.prev_movement = movement
        self.prev_space_held = space_held
        self.prev_shift_held = shift_held

        was_over = self.state.game_state is GameState.GAMEOVER
        score_before = self.state.score
        self.sim_time += self.frame_ms
        self.loop.tick(self.sim_time)
        self.steps += 1

        reward = max(0.0, self.state.score - score_before)
        for event, _ in self.feedback.drain():
            if event is FeedbackEvent.COLLECTED:
                self.pickups_collected += 1

        terminated = self.state.game_state is GameState.GAMEOVER
        if terminated and not was_over:
            reward -= self.GAME_OVER_PENALTY
        truncated = self.steps >= self.MAX_STEPS

        return (
            self._get_observation(),
            float(reward),
            terminated,
            truncated,
            self._get_info()
        )

    def render(self):
        return self._get_observation()

    def _get_observation(self):
        arr = pygame.surfarray.array3d(self.renderer.surface)
        # Pygame array is (width, height, channels). Obs space is (height, width, channels).
        return np.transpose(arr, (1, 0, 2)).astype(np.uint8)

    def _get_info(self):
        state = self.state
        return {
            "score": state.score,
            "steps": self.steps,
            "momentum": state.momentum,
            "wave": state.wave_number,
            "lane": state.player_lane,
            "high_score": self.machine.high_score,
            "pickups": self.pickups_collected,
            "death_reason": state.death_reason.value if state.death_reason else None,
        }

    def close(self):
        pygame.quit()

    def validate_implementation(self):
        # Test action space
        assert self.action_space.shape == (3,)
        assert self.action_space.nvec.tolist() == [5, 2, 2]

        # Test reset
        obs, info = self.reset()
        assert obs.shape == (self.config.canvas_height, self.config.canvas_width, 3)
        assert obs.dtype == np.uint8
        assert isinstance(info, dict)

        # Test step
        test_action = self.action_space.sample()
        obs, reward, term, trunc, info = self.step(test_action)
        assert obs.shape == (self.config.canvas_height, self.config.canvas_width, 3)
        assert isinstance(reward, float)
        assert isinstance(term, bool)
        assert trunc == False
        assert isinstance(info, dict)

        logger.info("Implementation validated successfully")
        return True


if __name__ == '__main__':
    # Manual play; not used when the environment is driven by an agent
    logging.basicConfig(level=logging.INFO)
    os.environ.pop("SDL_VIDEODRIVER", None)

    from nisha_go.persistence import JsonHighScoreStore

    env = GameEnv(store=JsonHighScoreStore())
    obs, info = env.reset()
    scale = 2
    pygame.display.set_caption("NISHA GO!")
    screen = pygame.display.set_mode((env.config.canvas_width * scale, env.config.canvas_height * scale))
    clock = pygame.time.Clock()

    running = True
    while running:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_q:
                    running = False
                intent = intent_for_key(pygame.key.name(event.key), env.state.game_state)
                if intent is not None:
                    env.loop.handle_intent(intent)

        obs, reward, terminated, truncated, info = env.step([0, 0, 0])

        draw_surface = pygame.surfarray.make_surface(np.transpose(obs, (1, 0, 2)))
        screen.blit(pygame.transform.scale(draw_surface, screen.get_size()), (0, 0))
        pygame.display.flip()
        clock.tick(env.FPS)

    env.close()
