# tiny_runner/tests/test_physics.py
"""
Jump feel: buffering, coyote time, variable height, ground clamp.

Usage (from repo root):
  pytest tiny_runner/tests/test_physics.py
"""
from __future__ import annotations

import pytest

from tiny_runner.game.config import JUMP_VY, WorldConfig
from tiny_runner.game.player import JumpTiming, Player

WORLD = WorldConfig()
DT = 0.01


def fresh():
    return Player.spawn(WORLD), JumpTiming()


def test_jump_from_ground_launches():
    p, timing = fresh()
    assert p.request_jump(timing, WORLD.jump_buffer_s)
    assert p.vy == WORLD.jump_vy
    assert not p.on_ground
    assert timing.buffer == 0.0 and timing.coyote == 0.0
    assert timing.held


def test_ground_clamp_keeps_player_on_floor():
    p, timing = fresh()
    for _ in range(200):
        p.update_physics(DT, timing, WORLD)
        assert p.y <= WORLD.floor_y
    assert p.y == WORLD.floor_y
    assert p.vy == 0.0 and p.on_ground


def test_timers_never_go_negative():
    timing = JumpTiming(coyote=0.05, buffer=0.02)
    timing.tick(1.0)
    assert timing.coyote == 0.0 and timing.buffer == 0.0


def test_buffered_jump_fires_on_landing_step():
    p, timing = fresh()
    p.y = WORLD.floor_y - 5.0
    p.vy = 400.0
    p.on_ground = False

    # airborne, no coyote: the press is only remembered
    assert not p.request_jump(timing, WORLD.jump_buffer_s)
    assert timing.buffer == pytest.approx(WORLD.jump_buffer_s)
    assert p.vy == 400.0

    fired = p.update_physics(0.016, timing, WORLD)
    assert fired, "landing inside the buffer window must jump that same step"
    assert p.vy == WORLD.jump_vy
    assert not p.on_ground


def test_buffered_jump_expires_before_a_long_fall_lands():
    p, timing = fresh()
    p.y = WORLD.floor_y - 200.0
    p.vy = 0.0
    p.on_ground = False
    assert not p.request_jump(timing, WORLD.jump_buffer_s)

    for _ in range(500):
        fired = p.update_physics(DT, timing, WORLD)
        assert not fired
        if p.on_ground:
            break
    assert p.on_ground
    assert p.vy == 0.0
    assert timing.buffer == 0.0


def _step_off_ledge(p: Player, timing: JumpTiming):
    """Put the body slightly above the floor while still flagged grounded, then step once."""
    p.y = WORLD.floor_y - 20.0
    p.vy = 0.0
    p.on_ground = True
    p.update_physics(DT, timing, WORLD)
    assert not p.on_ground


def test_leaving_ground_arms_coyote():
    p, timing = fresh()
    _step_off_ledge(p, timing)
    assert timing.coyote == pytest.approx(WORLD.coyote_s)


def test_coyote_jump_inside_grace_succeeds():
    p, timing = fresh()
    _step_off_ledge(p, timing)
    for _ in range(7):  # 0.07 s of 0.09 s grace used
        p.update_physics(DT, timing, WORLD)
    assert not p.on_ground and timing.coyote > 0.0

    assert p.request_jump(timing, WORLD.jump_buffer_s)
    assert p.vy == WORLD.jump_vy
    assert timing.coyote == 0.0


def test_coyote_jump_after_grace_fails():
    p, timing = fresh()
    _step_off_ledge(p, timing)
    for _ in range(10):
        p.update_physics(DT, timing, WORLD)
    assert not p.on_ground and timing.coyote == 0.0

    vy_before = p.vy
    assert not p.request_jump(timing, WORLD.jump_buffer_s)
    assert p.vy == vy_before


def test_releasing_early_gives_a_lower_hop():
    held, t_held = fresh()
    tapped, t_tapped = fresh()
    held.request_jump(t_held, WORLD.jump_buffer_s)
    tapped.request_jump(t_tapped, WORLD.jump_buffer_s)
    t_tapped.held = False

    apex_held = apex_tapped = WORLD.floor_y
    for _ in range(120):
        held.update_physics(DT, t_held, WORLD)
        tapped.update_physics(DT, t_tapped, WORLD)
        apex_held = min(apex_held, held.y)
        apex_tapped = min(apex_tapped, tapped.y)

    # smaller y is higher on screen
    assert apex_held < apex_tapped < WORLD.floor_y


def test_release_does_not_cancel_buffer():
    p, timing = fresh()
    p.y = WORLD.floor_y - 5.0
    p.vy = 400.0
    p.on_ground = False
    p.request_jump(timing, WORLD.jump_buffer_s)
    timing.held = False

    assert timing.buffer > 0.0
    assert p.update_physics(0.016, timing, WORLD)


def test_bare_player_uses_configured_launch_velocity():
    p = Player(x=0.0, y=0.0, w=10.0, h=10.0)
    assert p.jump_vy == JUMP_VY == WorldConfig().jump_vy
