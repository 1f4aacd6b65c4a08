# tiny_runner/env/runner_env.py
from __future__ import annotations
import random
from typing import Optional, Dict, Any
import numpy as np
import gymnasium as gym
import pygame

from ..game.config import WIDTH, HEIGHT
from ..game.score_store import MemoryScoreStore
from ..game.session import GameSession, GameState
from .observations import OBS_LOW, OBS_HIGH, build_observation

# Guard against a countdown that never ends (it is 1.2 s by default)
MAX_COUNTDOWN_FRAMES = 10_000


class RunnerEnv(gym.Env):
    """
    Tiny Runner Gymnasium environment (vector observations).
    - Simulation at 60 Hz (internal), countdown skipped on reset.
    - Agent acts every `frame_skip` frames (default 4) -> 15 decisions/sec.
    - Action 0 = jump released, 1 = jump held; a 0->1 edge is a press.
    - Observation: shape (10,), float32 (see observations.py).
    """
    metadata = {"render_modes": ["human", "rgb_array"], "render_fps": 60}

    def __init__(self,
                 render_mode: Optional[str] = None,
                 frame_skip: int = 4,
                 time_limit_seconds: Optional[float] = 60.0):
        super().__init__()
        assert frame_skip >= 1, "frame_skip must be >= 1"
        assert render_mode is None or render_mode in self.metadata["render_modes"]
        self.render_mode = render_mode
        self.frame_skip = int(frame_skip)

        self.sim_fps = 60
        self.dt = 1.0 / self.sim_fps

        self.time_limit_decisions = None
        if time_limit_seconds is not None:
            self.time_limit_decisions = int(self.sim_fps * time_limit_seconds / self.frame_skip)

        self.action_space = gym.spaces.Discrete(2)
        self.observation_space = gym.spaces.Box(low=OBS_LOW, high=OBS_HIGH, dtype=np.float32)

        # --- Runtime state ---
        self.session: Optional[GameSession] = None
        self.store = MemoryScoreStore()
        self.timestep: int = 0
        self.current_seed: Optional[int] = None
        self.prev_action: int = 0

        # Rendering
        self.screen = None
        self.clock = None
        self.renderer = None

    # -------------------- Core API --------------------

    def reset(self, *, seed: Optional[int] = None, options: Optional[Dict[str, Any]] = None):
        super().reset(seed=seed)  # initializes self.np_random

        # Level layout comes from np_random so reset(seed=...) is reproducible
        self.current_seed = int(self.np_random.integers(0, 2**31 - 1))
        self.session = GameSession(rng=random.Random(self.current_seed), store=self.store)
        self.session.level.seed = self.current_seed
        self.session.start()
        for _ in range(MAX_COUNTDOWN_FRAMES):
            if self.session.state is not GameState.COUNTDOWN:
                break
            self.session.step(self.dt)

        self.timestep = 0
        self.prev_action = 0

        if self.render_mode == "human":
            self.render()
        return self._get_obs(), self._info(dead=False)

    def step(self, action: int):
        assert self.action_space.contains(action), f"Invalid action {action}"
        assert self.session is not None, "call reset() first"
        s = self.session

        action = int(action)
        if action == 1 and self.prev_action == 0:
            s.request_jump()
        elif action == 0:
            s.release_jump()
        self.prev_action = action

        died = False
        scored = 0
        for _ in range(self.frame_skip):
            result = s.step(self.dt)
            scored += result.scored
            if result.game_over:
                died = True
                break
        s.drain_events()

        # Reward: +1 per surviving decision, +1 per obstacle cleared, -1 on death
        reward = (-1.0 if died else 1.0) + float(scored)

        self.timestep += 1
        terminated = died
        truncated = False
        if (self.time_limit_decisions is not None) and (self.timestep >= self.time_limit_decisions):
            truncated = not terminated

        if self.render_mode == "human":
            self.render()
        return self._get_obs(), reward, terminated, truncated, self._info(dead=died)

    # -------------------- Helpers --------------------

    def _get_obs(self) -> np.ndarray:
        assert self.session is not None
        obs = build_observation(self.session.snapshot(), self.session.world)
        return np.clip(obs, OBS_LOW, OBS_HIGH)

    def _info(self, dead: bool) -> Dict[str, Any]:
        s = self.session
        return {
            "score": s.score,
            "best": s.best,
            "elapsed": s.t,
            "timestep": self.timestep,
            "seed": self.current_seed,
            "dead": dead,
        }

    # -------------------- Rendering --------------------

    def render(self):
        if self.render_mode is None or self.session is None:
            return None

        if self.screen is None:
            # Local import keeps font setup out of headless runs
            from ..game.render import Renderer
            pygame.init()
            if self.render_mode == "human":
                self.screen = pygame.display.set_mode((WIDTH, HEIGHT))
                pygame.display.set_caption("Tiny Runner — Gym Env")
            else:
                self.screen = pygame.Surface((WIDTH, HEIGHT))
            self.clock = pygame.time.Clock()
            self.renderer = Renderer(self.screen, self.session.world)

        if self.render_mode == "human":
            # Pump the queue so the OS doesn't think we're hung
            pygame.event.pump()

        self.renderer.draw(self.session.snapshot())

        if self.render_mode == "human":
            pygame.display.flip()
            self.clock.tick(self.metadata.get("render_fps", 60))
            return None

        arr = pygame.surfarray.array3d(self.screen)  # (W, H, 3)
        return np.transpose(arr, (1, 0, 2))

    def close(self):
        if self.screen is not None:
            pygame.display.quit()
            pygame.quit()
            self.screen = None
            self.clock = None
            self.renderer = None
