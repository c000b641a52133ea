import pytest

from gamekit.collision import (
    circles_overlap,
    collides,
    collision_step,
    contact_normal,
    rects_overlap,
    resolve_circle_rect,
    settle_speed,
)
from gamekit.context import SimulationContext
from gamekit.entities import Bounds, Obstacle, make_ball, make_player

RECT_ORIGIN = (10.0, 20.0)
RECT_SIZE = (40.0, 30.0)


@pytest.mark.parametrize("center", [(10.0, 20.0), (30.0, 35.0), (50.0, 50.0), (11.5, 49.0)])
def test_center_inside_rect_always_collides(center):
    # even with a zero radius the clamped point equals the centre
    assert collides(center, 0.0, RECT_ORIGIN, RECT_SIZE)


@pytest.mark.parametrize(
    "center,radius",
    [
        ((0.0, 0.0), 5.0),  # up-left, gap of 10 on both axes
        ((70.0, 70.0), 15.0),  # down-right
        ((-5.0, 60.0), 10.0),
    ],
)
def test_separated_on_both_axes_does_not_collide(center, radius):
    assert not collides(center, radius, RECT_ORIGIN, RECT_SIZE)


def test_distance_exactly_radius_is_a_hit():
    # 5 units left of the left edge
    assert collides((5.0, 30.0), 5.0, RECT_ORIGIN, RECT_SIZE)
    # 3-4-5 triangle off the bottom-right corner
    assert collides((53.0, 54.0), 5.0, RECT_ORIGIN, RECT_SIZE)
    assert not collides((53.0, 54.0), 4.999, RECT_ORIGIN, RECT_SIZE)


def test_circle_overlapping_edge():
    assert collides((30.0, 15.0), 6.0, RECT_ORIGIN, RECT_SIZE)
    assert not collides((30.0, 15.0), 4.0, RECT_ORIGIN, RECT_SIZE)


def test_circles_and_rects_overlap_helpers():
    assert circles_overlap((0, 0), 2, (3, 4), 3)
    assert not circles_overlap((0, 0), 2, (3, 4), 2.9)
    assert rects_overlap((0, 0), (10, 10), (5, 5), (10, 10))
    # shared edge only
    assert not rects_overlap((0, 0), (10, 10), (10, 0), (10, 10))


def test_contact_normal_inside_uses_nearest_side():
    normal, gap = contact_normal((12.0, 35.0), RECT_ORIGIN, RECT_SIZE)
    assert normal == (-1.0, 0.0)
    assert gap == pytest.approx(-2.0)


def test_resolve_pushes_ball_out_and_reflects():
    ball = make_ball(30.0, 17.0, vx=1.0, vy=4.0, radius=5.0)
    resolve_circle_rect(ball, RECT_ORIGIN, RECT_SIZE, restitution=1.0)
    assert ball.y == pytest.approx(15.0)
    assert ball.vy == pytest.approx(-4.0)
    assert ball.vx == pytest.approx(1.0)
    assert not collides(ball.pos, 4.99, RECT_ORIGIN, RECT_SIZE)


def test_resolve_leaves_separating_velocity_alone():
    ball = make_ball(30.0, 17.0, vx=0.0, vy=-2.0, radius=5.0)
    resolve_circle_rect(ball, RECT_ORIGIN, RECT_SIZE)
    assert ball.vy == -2.0


def test_resolve_slow_approach_comes_to_rest():
    ball = make_ball(30.0, 17.0, vy=0.4, radius=5.0)
    resolve_circle_rect(ball, RECT_ORIGIN, RECT_SIZE, restitution=0.8, settle_speed=0.8)
    assert ball.y == pytest.approx(15.0)
    assert ball.vy == pytest.approx(0.0)


def test_settle_speed_scales_with_gravity_and_restitution():
    assert settle_speed(0.4, 0.8) == pytest.approx(5.0)
    assert settle_speed(0.0, 0.8) == 0.0
    # elastic contacts always bounce
    assert settle_speed(0.4, 1.0) == 0.0


class RecordingAudio:
    def __init__(self):
        self.played = []

    def play(self, name, loops=0):
        self.played.append(name)


class RecordingParticles:
    def __init__(self):
        self.bursts = []

    def spawn_burst(self, pos, count, **kwargs):
        self.bursts.append((pos, count))


def test_collision_step_ball_hits_obstacle_and_fires_effects():
    audio = RecordingAudio()
    particles = RecordingParticles()
    ctx = SimulationContext(
        bounds=Bounds(200, 200),
        obstacles=[Obstacle(50, 100, 100, 10)],
        audio=audio,
        particles=particles,
    )
    ball = make_ball(80, 96, vy=8.0, radius=6.0)
    ctx.entities.append(ball)
    events = collision_step(ctx)
    assert len(events) == 1
    assert events[0].target == "obstacle"
    assert events[0].entity_id == ball.id
    assert ball.vy < 0
    assert audio.played == ["hit"]
    assert len(particles.bursts) == 1


def test_collision_step_ball_bounces_off_player():
    ctx = SimulationContext(bounds=Bounds(200, 200))
    player = make_player(60, 150, size=(40, 10))
    ball = make_ball(80, 146, vy=5.0, radius=6.0)
    ctx.entities.extend([player, ball])
    events = collision_step(ctx)
    assert [e.target for e in events] == ["player"]
    assert ball.vy == pytest.approx(-5.0)
    assert ball.y + 6.0 <= 150.0 + 1e-9


def test_collision_step_no_contact():
    ctx = SimulationContext(bounds=Bounds(200, 200), obstacles=[Obstacle(0, 0, 10, 10)])
    ctx.entities.append(make_ball(100, 100, radius=5.0))
    assert collision_step(ctx) == []


def test_collision_step_slow_contact_settles_quietly():
    audio = RecordingAudio()
    particles = RecordingParticles()
    ctx = SimulationContext(
        bounds=Bounds(200, 200),
        obstacles=[Obstacle(50, 100, 100, 10)],
        audio=audio,
        particles=particles,
    )
    ball = make_ball(80, 95, vy=0.4, radius=6.0)
    ctx.entities.append(ball)
    events = collision_step(ctx)
    assert len(events) == 1
    assert events[0].impact_speed == pytest.approx(0.4)
    assert ball.vy == pytest.approx(0.0)
    assert ball.y == pytest.approx(94.0)
    assert audio.played == []
    assert particles.bursts == []
