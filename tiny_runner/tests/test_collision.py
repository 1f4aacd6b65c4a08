# tiny_runner/tests/test_collision.py
from tiny_runner.game.collision import aabb, first_hit, score_passed
from tiny_runner.game.obstacles import Obstacle

PLAYER = (170, 430, 42, 54)


def test_overlap_on_both_axes():
    assert aabb(*PLAYER, 150, 400, 30, 60)


def test_no_horizontal_overlap():
    assert not aabb(*PLAYER, 230, 400, 30, 60)


def test_touching_edges_do_not_collide():
    assert not aabb(*PLAYER, 212, 430, 10, 10)   # right edge
    assert not aabb(*PLAYER, 140, 430, 30, 10)   # left edge
    assert not aabb(*PLAYER, 180, 484, 10, 10)   # bottom edge
    assert not aabb(*PLAYER, 180, 420, 10, 10)   # top edge


def test_score_passed_counts_each_obstacle_once():
    obs = [
        Obstacle(x=100.0, y=440.0, w=30.0, h=44.0),   # right 130 < 170
        Obstacle(x=139.0, y=440.0, w=30.0, h=44.0),   # right 169 < 170
        Obstacle(x=150.0, y=440.0, w=30.0, h=44.0),   # right 180, not yet
    ]
    assert score_passed(obs, 170.0) == 2
    assert [o.passed for o in obs] == [True, True, False]
    assert score_passed(obs, 170.0) == 0


def test_first_hit_returns_overlapping_obstacle():
    miss = Obstacle(x=230.0, y=400.0, w=30.0, h=60.0)
    hit = Obstacle(x=150.0, y=400.0, w=30.0, h=60.0)
    assert first_hit(PLAYER, [miss]) is None
    assert first_hit(PLAYER, [miss, hit]) is hit
