# tiny_runner/game/session.py
"""
Game state machine for Tiny Runner.

A GameSession owns everything that changes during play (player, jump timers,
obstacles, score) and is advanced only through `step(dt)` and the command
methods. It never schedules itself: a driver (the pygame loop, the gym env,
a test) decides when to call `step`.

    IDLE -> COUNTDOWN -> ACTIVE <-> PAUSED
                           |
                           v
                       GAME_OVER   (start() goes back to COUNTDOWN)
"""
from __future__ import annotations
import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

from .collision import first_hit, score_passed
from .config import WorldConfig, default_world
from .obstacles import ObstacleGen, RandomSource
from .player import JumpTiming, Player
from .score_store import MemoryScoreStore
from .sound import SoundEvent

logger = logging.getLogger(__name__)


class GameState(Enum):
    IDLE = "idle"
    COUNTDOWN = "countdown"
    ACTIVE = "active"
    PAUSED = "paused"
    GAME_OVER = "game_over"


@dataclass(frozen=True)
class StepResult:
    game_over: bool = False
    scored: int = 0
    jumped: bool = False
    state: GameState = GameState.IDLE


@dataclass(frozen=True)
class Box:
    x: float
    y: float
    w: float
    h: float


@dataclass(frozen=True)
class ObstacleView:
    x: float
    y: float
    w: float
    h: float
    kind: str
    passed: bool


@dataclass(frozen=True)
class Snapshot:
    """Everything a renderer needs, detached from the live session."""
    state: GameState
    running: bool
    paused: bool
    countdown: float
    score: int
    best: int
    shake: float
    muted: bool
    elapsed: float
    speed: float
    player: Box
    vy: float
    on_ground: bool
    obstacles: Tuple[ObstacleView, ...]


class GameSession:
    def __init__(self,
                 world: Optional[WorldConfig] = None,
                 rng: Optional[RandomSource] = None,
                 seed: Optional[int] = None,
                 store=None,
                 sound=None):
        self.world = world or default_world()
        self.store = store if store is not None else MemoryScoreStore()
        self.sound = sound
        self.level = ObstacleGen(self.world, rng=rng, seed=seed)

        self.state = GameState.IDLE
        self.t = 0.0
        self.countdown = 0.0
        self.score = 0
        self.best = max(0, int(self.store.load_best()))
        self.shake = 0.0
        self.muted = False
        self.player = Player.spawn(self.world)
        self.timing = JumpTiming()
        self._events: List[SoundEvent] = []
        self._resume_state = GameState.ACTIVE

    # -------------------- Flags --------------------

    @property
    def running(self) -> bool:
        return self.state in (GameState.COUNTDOWN, GameState.ACTIVE, GameState.PAUSED)

    @property
    def paused(self) -> bool:
        return self.state is GameState.PAUSED

    @property
    def obstacles(self):
        return self.level.obstacles

    def speed(self) -> float:
        return self.world.scroll_speed(self.t)

    # -------------------- Commands --------------------

    def start(self):
        self.t = 0.0
        self.score = 0
        self.shake = 0.0
        self.countdown = self.world.countdown_s
        self.player = Player.spawn(self.world)
        self.timing = JumpTiming()
        self.level.reset()
        self._events.clear()
        self.state = GameState.COUNTDOWN
        logger.info("Session started (best=%d, seed=%s)", self.best, self.level.seed)

    def toggle_pause(self) -> bool:
        if not self.running:
            return False
        if self.state is GameState.PAUSED:
            self.state = self._resume_state
            logger.info("Resumed at t=%.2fs", self.t)
        else:
            self._resume_state = self.state
            self.state = GameState.PAUSED
            logger.info("Paused at t=%.2fs", self.t)
        return self.paused

    def request_jump(self) -> bool:
        """Press jump. Ignored unless actively playing. Returns True on an immediate launch."""
        if self.state is not GameState.ACTIVE:
            return False
        jumped = self.player.request_jump(self.timing, self.world.jump_buffer_s)
        if jumped:
            self._emit(SoundEvent.JUMP)
        return jumped

    def release_jump(self):
        self.timing.held = False

    def toggle_mute(self) -> bool:
        self.muted = not self.muted
        return self.muted

    # -------------------- Simulation --------------------

    def _sanitize_dt(self, dt) -> float:
        """Negative or non-finite dt would corrupt vy/y for good: treat as 0. Cap at max_dt."""
        try:
            value = float(dt)
        except (TypeError, ValueError):
            value = math.nan
        if not math.isfinite(value) or value < 0.0:
            logger.debug("Rejected dt=%r, using 0", dt)
            return 0.0
        return min(value, self.world.max_dt)

    def step(self, dt: float) -> StepResult:
        if not self.running or self.paused:
            return StepResult(state=self.state)
        dt = self._sanitize_dt(dt)
        if dt == 0.0:
            return StepResult(state=self.state)

        self.t += dt

        if self.state is GameState.COUNTDOWN:
            self.countdown = max(0.0, self.countdown - dt)
            if self.countdown <= 0.0:
                self.state = GameState.ACTIVE
            return StepResult(state=self.state)

        jumped = self.player.update_physics(dt, self.timing, self.world)
        if jumped:
            self._emit(SoundEvent.JUMP)

        self.level.scroll(self.speed() * dt)

        scored = score_passed(self.level.obstacles, self.player.x)
        for _ in range(scored):
            self.score += 1
            self._emit(SoundEvent.SCORE)

        self.level.cleanup()
        self.level.ensure_ahead()

        if first_hit(self.player.box, self.level.obstacles) is not None:
            self._game_over()
            return StepResult(game_over=True, scored=scored, jumped=jumped, state=self.state)

        return StepResult(scored=scored, jumped=jumped, state=self.state)

    def _game_over(self):
        self.state = GameState.GAME_OVER
        self.shake = self.world.shake_on_death
        self._emit(SoundEvent.GAME_OVER)
        if self.score > self.best:
            self.best = self.score
            self.store.save_best(self.best)
        logger.info("Game over: score=%d best=%d t=%.2fs", self.score, self.best, self.t)

    def _emit(self, event: SoundEvent):
        self._events.append(event)
        if self.sound is not None and not self.muted:
            self.sound.play(event)

    def drain_events(self) -> List[SoundEvent]:
        events, self._events = self._events, []
        return events

    def decay_shake(self):
        self.shake = max(0.0, self.shake - self.world.shake_decay)

    # -------------------- Read-only view --------------------

    def snapshot(self) -> Snapshot:
        p = self.player
        return Snapshot(
            state=self.state,
            running=self.running,
            paused=self.paused,
            countdown=self.countdown,
            score=self.score,
            best=self.best,
            shake=self.shake,
            muted=self.muted,
            elapsed=self.t,
            speed=self.speed(),
            player=Box(p.x, p.y, p.w, p.h),
            vy=p.vy,
            on_ground=p.on_ground,
            obstacles=tuple(
                ObstacleView(o.x, o.y, o.w, o.h, o.kind, o.passed)
                for o in self.level.obstacles
            ),
        )
