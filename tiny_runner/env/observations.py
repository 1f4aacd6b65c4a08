# tiny_runner/env/observations.py
from __future__ import annotations
from typing import List, Tuple

import numpy as np

from ..game.config import HEIGHT, WIDTH, WorldConfig
from ..game.session import ObstacleView, Snapshot

N_AHEAD = 2                  # obstacles described in the vector
OBS_SIZE = 4 + 3 * N_AHEAD
MAX_VY = 1200.0              # |vy| used for normalisation (launch is -820)

# Layout: [y_norm, vy_norm, on_ground, speed_norm,
#          dx_0, top_0, bottom_0,
#          dx_1, top_1, bottom_1]
OBS_LOW = np.array([0.0, -1.0, 0.0, 0.0] + [0.0, 0.0, 0.0] * N_AHEAD, dtype=np.float32)
OBS_HIGH = np.array([1.0, 1.0, 1.0, 1.0] + [1.0, 1.0, 1.0] * N_AHEAD, dtype=np.float32)

# No obstacle ahead: far away, occupying nothing
MISSING = (1.0, 1.0, 1.0)


def _clamp01(x: float) -> float:
    return 0.0 if x < 0.0 else (1.0 if x > 1.0 else x)


def _ahead(snap: Snapshot) -> List[ObstacleView]:
    """Obstacles not yet cleared by the player, nearest first (list is already left-to-right)."""
    px = snap.player.x
    return [o for o in snap.obstacles if o.x + o.w >= px]


def _describe(ob: ObstacleView, player_x: float) -> Tuple[float, float, float]:
    dx = _clamp01((ob.x - player_x) / (WIDTH * 2))
    top = _clamp01(ob.y / HEIGHT)
    bottom = _clamp01((ob.y + ob.h) / HEIGHT)
    return dx, top, bottom


def build_observation(snap: Snapshot, world: WorldConfig) -> np.ndarray:
    """
    Fixed-size float32 vector for an agent.
    Obstacle slots are filled nearest-first; empty slots use MISSING.
    """
    y_norm = _clamp01(snap.player.y / max(1.0, world.floor_y))
    vy_norm = max(-1.0, min(1.0, snap.vy / MAX_VY))
    speed_span = max(1e-6, world.speed_max - world.speed_base)
    speed_norm = _clamp01((snap.speed - world.speed_base) / speed_span)

    vec = [y_norm, vy_norm, 1.0 if snap.on_ground else 0.0, speed_norm]
    ahead = _ahead(snap)
    for i in range(N_AHEAD):
        vec.extend(_describe(ahead[i], snap.player.x) if i < len(ahead) else MISSING)
    return np.asarray(vec, dtype=np.float32)
