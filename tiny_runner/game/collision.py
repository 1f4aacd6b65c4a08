# tiny_runner/game/collision.py
from __future__ import annotations
from typing import Iterable, Optional, Sequence, Tuple

from .obstacles import Obstacle

Box = Tuple[float, float, float, float]


def aabb(ax: float, ay: float, aw: float, ah: float,
         bx: float, by: float, bw: float, bh: float) -> bool:
    """Half-open overlap on both axes: touching edges do not collide."""
    return ax < bx + bw and ax + aw > bx and ay < by + bh and ay + ah > by


def boxes_overlap(a: Box, b: Box) -> bool:
    return aabb(*a, *b)


def score_passed(obstacles: Iterable[Obstacle], player_x: float) -> int:
    """Mark obstacles whose trailing edge is left of the player. Returns newly passed count."""
    scored = 0
    for ob in obstacles:
        if not ob.passed and ob.right < player_x:
            ob.passed = True
            scored += 1
    return scored


def first_hit(box: Box, obstacles: Sequence[Obstacle]) -> Optional[Obstacle]:
    for ob in obstacles:
        if boxes_overlap(box, ob.box):
            return ob
    return None
