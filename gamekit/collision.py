"""Collision step.

``collides`` is the circle-rectangle overlap test everything else is
built on: clamp the circle centre onto the rectangle to get the nearest
point, then compare squared distances (no square root, centre-inside
handled for free because the clamped point equals the centre).

``collision_step`` runs the tests for every ball against the static
obstacles and the player paddle, pushes the ball out along the contact
normal, reflects its velocity and fires the impact effects (spark burst
+ ``hit`` sound) through the context's ports. Contacts no faster than
``settle_speed`` leave the ball resting on the surface and fire nothing.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Tuple

from gamekit.constants import BURST_COUNT_IMPACT, SETTLE_GRAVITY_TICKS
from gamekit.entities import Entity, EntityKind
from gamekit.logger import get_logger

_log = get_logger("collision")

Vec = Tuple[float, float]


@dataclass
class CollisionEvent:
    entity_id: int
    target: str  # "obstacle" | "player"
    point: Vec
    impact_speed: float = 0.0


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(value, high))


def nearest_point(point: Vec, rect_origin: Vec, rect_size: Vec) -> Vec:
    """Closest point of the rectangle to ``point``."""
    rx, ry = rect_origin
    rw, rh = rect_size
    return clamp(point[0], rx, rx + rw), clamp(point[1], ry, ry + rh)


def collides(circle_center: Vec, circle_radius: float, rect_origin: Vec, rect_size: Vec) -> bool:
    """True iff the circle and the rectangle overlap or touch."""
    nx, ny = nearest_point(circle_center, rect_origin, rect_size)
    dx = circle_center[0] - nx
    dy = circle_center[1] - ny
    return dx * dx + dy * dy <= circle_radius * circle_radius


def circles_overlap(a_center: Vec, a_radius: float, b_center: Vec, b_radius: float) -> bool:
    dx = a_center[0] - b_center[0]
    dy = a_center[1] - b_center[1]
    reach = a_radius + b_radius
    return dx * dx + dy * dy <= reach * reach


def rects_overlap(a_origin: Vec, a_size: Vec, b_origin: Vec, b_size: Vec) -> bool:
    """AABB test; rectangles that only share an edge do not overlap."""
    return (
        a_origin[0] < b_origin[0] + b_size[0]
        and b_origin[0] < a_origin[0] + a_size[0]
        and a_origin[1] < b_origin[1] + b_size[1]
        and b_origin[1] < a_origin[1] + a_size[1]
    )


def contact_normal(circle_center: Vec, rect_origin: Vec, rect_size: Vec) -> Tuple[Vec, float]:
    """Unit normal pointing from the rectangle towards the circle and the gap to the surface.

    When the centre is inside the rectangle the normal points out through
    the nearest side and the gap is negative (penetration depth).
    """
    cx, cy = circle_center
    nx, ny = nearest_point(circle_center, rect_origin, rect_size)
    dx, dy = cx - nx, cy - ny
    dist = math.hypot(dx, dy)
    if dist > 0:
        return (dx / dist, dy / dist), dist
    rx, ry = rect_origin
    rw, rh = rect_size
    exits = [
        (cx - rx, (-1.0, 0.0)),
        (rx + rw - cx, (1.0, 0.0)),
        (cy - ry, (0.0, -1.0)),
        (ry + rh - cy, (0.0, 1.0)),
    ]
    depth, normal = min(exits, key=lambda e: e[0])
    return normal, -depth


def resolve_circle_rect(
    entity: Entity,
    rect_origin: Vec,
    rect_size: Vec,
    restitution: float = 1.0,
    settle_speed: float = 0.0,
) -> Vec:
    """Separate a circular entity from a rectangle and reflect its velocity.

    Returns the contact point on the rectangle.
    """
    r = entity.radius
    (nx, ny), gap = contact_normal(entity.pos, rect_origin, rect_size)
    push = r - gap
    entity.x += nx * push
    entity.y += ny * push
    along = entity.vx * nx + entity.vy * ny
    if along < 0:
        # slow approaches come to rest on the surface instead of rebounding
        bounce = 1.0 if -along <= settle_speed else 1 + restitution
        entity.vx -= bounce * along * nx
        entity.vy -= bounce * along * ny
    return entity.x - nx * r, entity.y - ny * r


def approach_speed(entity: Entity, rect_origin: Vec, rect_size: Vec) -> float:
    """Speed at which a circular entity moves into the rectangle (0 when leaving)."""
    (nx, ny), _ = contact_normal(entity.pos, rect_origin, rect_size)
    return max(0.0, -(entity.vx * nx + entity.vy * ny))


def settle_speed(gravity: float, restitution: float) -> float:
    """Impact speed at or below which a ball rests on a surface instead of hopping.

    Explicit Euler hands back up to two ticks of gravity on every bounce, so
    below ``2 * gravity / (1 - restitution)`` the hop never dies out. The
    threshold sits a little above that. Elastic contacts never settle.
    """
    if restitution >= 1.0:
        return 0.0
    return SETTLE_GRAVITY_TICKS * gravity / (1.0 - restitution)


def _on_impact(ctx, point: Vec) -> None:
    particles = getattr(ctx, "particles", None)
    if particles is not None:
        particles.spawn_burst(point, BURST_COUNT_IMPACT)
    audio = getattr(ctx, "audio", None)
    if audio is not None:
        audio.play("hit")


def _hit(ctx, events, ball: Entity, target: str, origin: Vec, size: Vec, restitution: float) -> None:
    speed = approach_speed(ball, origin, size)
    settle = settle_speed(ball.payload.gravity, restitution)
    point = resolve_circle_rect(ball, origin, size, restitution, settle_speed=settle)
    events.append(CollisionEvent(ball.id, target, point, speed))
    # resting contacts repeat every tick; only real impacts get effects
    if speed > settle:
        _on_impact(ctx, point)


def collision_step(ctx) -> List[CollisionEvent]:
    events: List[CollisionEvent] = []
    balls = [e for e in ctx.entities if e.kind is EntityKind.BALL]
    players = [e for e in ctx.entities if e.kind is EntityKind.PLAYER]
    for ball in balls:
        for obstacle in ctx.obstacles:
            if collides(ball.pos, ball.radius, obstacle.origin, obstacle.size):
                _hit(ctx, events, ball, "obstacle", obstacle.origin, obstacle.size, ball.payload.restitution)
        for player in players:
            px, py, pw, ph = player.rect()
            if collides(ball.pos, ball.radius, (px, py), (pw, ph)):
                # Paddle hits are elastic so the ball keeps its height
                _hit(ctx, events, ball, "player", (px, py), (pw, ph), 1.0)
    if events:
        _log.debug("collisions", len(events))
    return events


__all__ = [
    "CollisionEvent",
    "collides",
    "circles_overlap",
    "rects_overlap",
    "nearest_point",
    "contact_normal",
    "resolve_circle_rect",
    "approach_speed",
    "settle_speed",
    "collision_step",
]
