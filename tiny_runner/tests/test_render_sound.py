# tiny_runner/tests/test_render_sound.py
import os
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import random

import numpy as np
import pygame

from tiny_runner.env.runner_env import RunnerEnv
from tiny_runner.game.config import HEIGHT, WIDTH
from tiny_runner.game.obstacles import Obstacle
from tiny_runner.game.render import Renderer
from tiny_runner.game.session import GameSession, GameState
from tiny_runner.game.sound import TONES, Blipper, SoundEvent, triangle_tone


def test_triangle_tone_is_short_quiet_int16():
    freq, dur = TONES[SoundEvent.JUMP]
    samples = triangle_tone(freq, dur, sample_rate=22050)
    assert samples.dtype == np.int16
    assert samples.shape == (int(22050 * dur),)
    assert np.abs(samples).max() <= int(0.12 * 32767) + 1


def test_disabled_blipper_is_inert():
    b = Blipper(enabled=False)
    assert not b.enabled
    for ev in SoundEvent:
        b.play(ev)


def test_renderer_draws_every_state():
    pygame.init()
    try:
        surface = pygame.Surface((WIDTH, HEIGHT))
        s = GameSession(seed=4)
        r = Renderer(surface, s.world, rng=random.Random(0))

        r.draw(s.snapshot())                       # idle
        s.start()
        r.draw(s.snapshot())                       # countdown
        while s.state is GameState.COUNTDOWN:
            s.step(1 / 60)
        s.level.obstacles.append(Obstacle(x=300.0, y=380.0, w=30.0, h=30.0, kind="flying"))
        r.draw(s.snapshot())                       # active
        s.toggle_pause()
        r.draw(s.snapshot())                       # paused
        s.toggle_pause()
        s.level.obstacles.append(Obstacle(x=s.player.x, y=s.world.ground_line - 40, w=30.0, h=40.0))
        s.step(1 / 60)
        assert s.state is GameState.GAME_OVER
        r.draw(s.snapshot())                       # game over, shaking
        assert surface.get_size() == (WIDTH, HEIGHT)
    finally:
        pygame.quit()


def test_env_rgb_array_render():
    env = RunnerEnv(render_mode="rgb_array")
    try:
        env.reset(seed=2)
        frame = env.render()
        assert frame.shape == (HEIGHT, WIDTH, 3)
        assert frame.dtype == np.uint8
    finally:
        env.close()
