# tiny_runner/game/player.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Tuple

from .config import JUMP_VY, WorldConfig


@dataclass
class JumpTiming:
    """
    Jump-feel timers, in seconds:
    - coyote: grace after walking/falling off the ground, a jump still counts
    - buffer: an early press keeps retrying until it lands or this runs out
    - held:   jump input is down; releasing it cuts the rise short
    """
    coyote: float = 0.0
    buffer: float = 0.0
    held: bool = False

    def tick(self, dt: float):
        self.buffer = max(0.0, self.buffer - dt)
        self.coyote = max(0.0, self.coyote - dt)

    def clear(self):
        self.coyote = 0.0
        self.buffer = 0.0


@dataclass
class Player:
    """Runner body. x never changes, y is the top edge (+y down)."""
    x: float
    y: float
    w: float
    h: float
    vy: float = 0.0
    on_ground: bool = True
    jump_vy: float = JUMP_VY

    @classmethod
    def spawn(cls, world: WorldConfig) -> "Player":
        return cls(
            x=world.player_x, y=world.floor_y,
            w=world.player_w, h=world.player_h,
            vy=0.0, on_ground=True, jump_vy=world.jump_vy,
        )

    @property
    def box(self) -> Tuple[float, float, float, float]:
        return (self.x, self.y, self.w, self.h)

    def can_jump(self, timing: JumpTiming) -> bool:
        return self.on_ground or timing.coyote > 0.0

    def try_jump(self, timing: JumpTiming) -> bool:
        """Launch if grounded or inside coyote time. Returns True if performed."""
        if not self.can_jump(timing):
            return False
        self.vy = self.jump_vy
        self.on_ground = False
        timing.clear()
        return True

    def request_jump(self, timing: JumpTiming, buffer_s: float) -> bool:
        timing.buffer = buffer_s
        timing.held = True
        return self.try_jump(timing)

    def update_physics(self, dt: float, timing: JumpTiming, world: WorldConfig) -> bool:
        """
        Integrate one step of vertical motion and retry a buffered jump.
        Returns True if the buffered jump fired this step.
        """
        timing.tick(dt)

        self.vy += world.gravity * dt

        # Variable height: let go early and the rise is damped
        if not timing.held and self.vy < 0.0:
            self.vy *= world.jump_cut

        self.y += self.vy * dt

        if self.y >= world.floor_y:
            self.y = world.floor_y
            self.vy = 0.0
            self.on_ground = True
        else:
            if self.on_ground:
                timing.coyote = world.coyote_s
            self.on_ground = False

        if timing.buffer > 0.0:
            return self.try_jump(timing)
        return False
