# tiny_runner/game/obstacles.py
from __future__ import annotations
import random
from dataclasses import dataclass
from typing import List, Optional, Protocol

from .config import WorldConfig

GROUND = "ground"
FLYING = "flying"


class RandomSource(Protocol):
    def random(self) -> float: ...
    def uniform(self, a: float, b: float) -> float: ...


@dataclass
class Obstacle:
    x: float
    y: float
    w: float
    h: float
    kind: str = GROUND     # "ground" or "flying"
    passed: bool = False

    @property
    def right(self) -> float:
        return self.x + self.w

    @property
    def box(self):
        return (self.x, self.y, self.w, self.h)


class ObstacleGen:
    """
    Endless stream of obstacles scrolling left.
    The list is kept in spawn order, which is also left-to-right order, since
    every gap is measured from the trailing edge of the rightmost obstacle.
    """
    def __init__(self, world: WorldConfig, rng: Optional[RandomSource] = None,
                 seed: Optional[int] = None):
        self.world = world
        if rng is None:
            if seed is None:
                seed = random.randrange(0, 2**32 - 1)
            rng = random.Random(seed)
        self.seed = seed
        self.rng = rng
        self.obstacles: List[Obstacle] = []

    def reset(self):
        self.obstacles = []
        self.spawn(first=True)

    @property
    def rightmost(self) -> Optional[Obstacle]:
        return self.obstacles[-1] if self.obstacles else None

    def spawn(self, first: bool = False) -> Obstacle:
        w_cfg = self.world
        gap = w_cfg.first_gap if first else self.rng.uniform(*w_cfg.gap_range)
        last = self.rightmost
        anchor = last.right if last is not None else w_cfg.width
        x = anchor + gap

        # First obstacle is always on the ground so the opening is learnable
        flying = (not first) and self.rng.random() < w_cfg.flying_chance
        w = self.rng.uniform(*w_cfg.width_range)
        if flying:
            h = self.rng.uniform(*w_cfg.flying_height_range)
            clear = self.rng.uniform(*w_cfg.flying_clear_range)
            y = w_cfg.ground_line - clear - h
            kind = FLYING
        else:
            h = self.rng.uniform(*w_cfg.height_range)
            y = w_cfg.ground_line - h
            kind = GROUND

        ob = Obstacle(x=x, y=y, w=w, h=h, kind=kind)
        self.obstacles.append(ob)
        return ob

    def scroll(self, dx: float):
        for ob in self.obstacles:
            ob.x -= dx

    def cleanup(self) -> int:
        """Drop obstacles whose trailing edge left the screen. Returns how many."""
        before = len(self.obstacles)
        margin = self.world.cleanup_margin
        self.obstacles = [ob for ob in self.obstacles if ob.right > -margin]
        return before - len(self.obstacles)

    def needs_spawn(self) -> bool:
        last = self.rightmost
        return last is None or last.x < self.world.width - self.world.spawn_threshold

    def ensure_ahead(self) -> Optional[Obstacle]:
        if self.needs_spawn():
            return self.spawn(first=False)
        return None
