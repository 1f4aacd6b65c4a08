# tiny_runner/game/config.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Tuple

# --- Display ---
WIDTH = 960
HEIGHT = 540
FPS = 60
MAX_DT = 0.033              # longest step the sim will integrate (s), tab-stall guard

# --- World / Physics ---
GRAVITY = 2400.0            # px/s^2, +y is down
FLOOR_Y = 430.0             # player's top y when standing
SPEED_BASE = 360.0          # scroll speed at t=0 (px/s)
SPEED_MAX = 780.0           # scroll speed after the ramp (px/s)
SPEED_RAMP_S = 50.0         # seconds to go from base to max

# --- Player ---
PLAYER_X = 170.0            # player's fixed x (world scrolls left)
PLAYER_W = 42.0
PLAYER_H = 54.0
JUMP_VY = -820.0            # launch velocity

# --- Jump feel ---
COYOTE_S = 0.09             # grace after leaving the ground
JUMP_BUFFER_S = 0.12        # early press is remembered this long
JUMP_CUT = 0.86             # per-step damping of rise when jump is released

# --- Session ---
COUNTDOWN_S = 1.2
COUNTDOWN_TICK_S = 0.4      # one overlay digit per tick
SHAKE_ON_DEATH = 0.22
SHAKE_DECAY = 0.02          # per rendered frame

# --- Obstacles ---
FIRST_GAP = 520.0
GAP_MIN = 380.0
GAP_MAX = 720.0
OBST_MIN_W = 22.0
OBST_MAX_W = 44.0
OBST_MIN_H = 38.0
OBST_MAX_H = 84.0
FLYING_CHANCE = 0.28
FLYING_MIN_H = 24.0
FLYING_MAX_H = 40.0
FLYING_MIN_CLEAR = 62.0     # gap between ground line and a flyer's bottom
FLYING_MAX_CLEAR = 110.0
SPAWN_THRESHOLD = 360.0     # spawn when rightmost x < WIDTH - this
CLEANUP_MARGIN = 60.0       # drop once trailing edge <= -this

# --- Score store ---
BEST_KEY = "tinyRunnerBest"
BEST_FILE_DEFAULT = "~/.tiny_runner/scores.json"

# --- Colors (RGB) ---
COLOR_BG = (11, 14, 26)
COLOR_FG = (235, 238, 248)
COLOR_GROUND = (40, 44, 58)
COLOR_PLAYER = (255, 214, 74)
COLOR_BLUSH = (255, 120, 170)
COLOR_EYE = (40, 34, 30)
COLOR_OBSTACLE = (255, 120, 120)
COLOR_FLYER = (150, 130, 255)


@dataclass(frozen=True)
class WorldConfig:
    """Immutable tuning for one session. Defaults mirror the module constants."""
    width: float = WIDTH
    gravity: float = GRAVITY
    floor_y: float = FLOOR_Y
    speed_base: float = SPEED_BASE
    speed_max: float = SPEED_MAX
    speed_ramp_s: float = SPEED_RAMP_S
    max_dt: float = MAX_DT

    player_x: float = PLAYER_X
    player_w: float = PLAYER_W
    player_h: float = PLAYER_H
    jump_vy: float = JUMP_VY
    coyote_s: float = COYOTE_S
    jump_buffer_s: float = JUMP_BUFFER_S
    jump_cut: float = JUMP_CUT

    countdown_s: float = COUNTDOWN_S
    shake_on_death: float = SHAKE_ON_DEATH
    shake_decay: float = SHAKE_DECAY

    first_gap: float = FIRST_GAP
    gap_range: Tuple[float, float] = (GAP_MIN, GAP_MAX)
    width_range: Tuple[float, float] = (OBST_MIN_W, OBST_MAX_W)
    height_range: Tuple[float, float] = (OBST_MIN_H, OBST_MAX_H)
    flying_chance: float = FLYING_CHANCE
    flying_height_range: Tuple[float, float] = (FLYING_MIN_H, FLYING_MAX_H)
    flying_clear_range: Tuple[float, float] = (FLYING_MIN_CLEAR, FLYING_MAX_CLEAR)
    spawn_threshold: float = SPAWN_THRESHOLD
    cleanup_margin: float = CLEANUP_MARGIN

    def __post_init__(self):
        for name in ("gap_range", "width_range", "height_range",
                     "flying_height_range", "flying_clear_range"):
            lo, hi = getattr(self, name)
            if lo > hi:
                raise ValueError(f"{name}: min {lo} > max {hi}")
        if self.gravity <= 0:
            raise ValueError("gravity must be positive (+y is down)")
        if self.jump_vy >= 0:
            raise ValueError("jump_vy must be negative (upwards)")
        if not 0.0 <= self.flying_chance <= 1.0:
            raise ValueError("flying_chance must be in [0, 1]")
        if not 0.0 < self.jump_cut <= 1.0:
            raise ValueError("jump_cut must be in (0, 1]")
        if self.max_dt <= 0:
            raise ValueError("max_dt must be positive")

    @property
    def ground_line(self) -> float:
        """y of the surface obstacles stand on (player's bottom when grounded)."""
        return self.floor_y + self.player_h

    def scroll_speed(self, t: float) -> float:
        k = clamp(t / self.speed_ramp_s, 0.0, 1.0)
        return lerp(self.speed_base, self.speed_max, k)


def default_world() -> WorldConfig:
    return WorldConfig()


def clamp(v: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, v))


def lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t
