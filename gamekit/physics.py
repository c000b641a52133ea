"""Update step: per-entity kinematics.

Every entity moves by its velocity first, then its kind rule runs:

* ball     -> gravity (explicit Euler), then wall / ground reflection
* particle -> optional gravity, life countdown and alpha fade
* player   -> velocity follows the movement flags, position clamped

Rules only read the entity they advance, so the step has no ordering
dependency between entities.
"""

from __future__ import annotations

from gamekit.entities import BallPayload, Bounds, Entity, EntityKind, ParticlePayload, PlayerPayload


def apply_velocity(entity: Entity) -> None:
    entity.x += entity.vx
    entity.y += entity.vy


def apply_gravity(entity: Entity, gravity: float) -> None:
    entity.vy += gravity


def reflect_in_bounds(entity: Entity, bounds: Bounds, restitution: float = 1.0) -> bool:
    """Keep a circular entity inside ``bounds``; returns True when it bounced."""
    r = entity.radius
    bounced = False
    if entity.x - r < 0:
        entity.x = r
        entity.vx = abs(entity.vx) * restitution
        bounced = True
    elif entity.x + r > bounds.width:
        entity.x = bounds.width - r
        entity.vx = -abs(entity.vx) * restitution
        bounced = True
    if entity.y - r < 0:
        entity.y = r
        entity.vy = abs(entity.vy) * restitution
        bounced = True
    elif entity.y + r > bounds.height:
        # ground
        entity.y = bounds.height - r
        entity.vy = -abs(entity.vy) * restitution
        bounced = True
    return bounced


def _update_ball(entity: Entity, payload: BallPayload, bounds: Bounds) -> None:
    apply_velocity(entity)
    apply_gravity(entity, payload.gravity)
    reflect_in_bounds(entity, bounds, payload.restitution)


def _update_particle(entity: Entity, payload: ParticlePayload) -> None:
    apply_velocity(entity)
    if payload.gravity:
        apply_gravity(entity, payload.gravity)
    payload.life -= 1
    payload.alpha = max(0.0, payload.alpha - payload.fade)


def _update_player(entity: Entity, payload: PlayerPayload, bounds: Bounds) -> None:
    direction = int(payload.moving_right) - int(payload.moving_left)
    entity.vx = direction * payload.speed
    apply_velocity(entity)
    entity.x = min(max(entity.x, 0.0), max(0.0, bounds.width - payload.width))
    entity.y = min(max(entity.y, 0.0), max(0.0, bounds.height - payload.height))


def update_entity(entity: Entity, bounds: Bounds) -> None:
    """Advance one entity by a single tick."""
    kind = entity.kind
    if kind is EntityKind.BALL:
        _update_ball(entity, entity.payload, bounds)
    elif kind is EntityKind.PARTICLE:
        _update_particle(entity, entity.payload)
    elif kind is EntityKind.PLAYER:
        _update_player(entity, entity.payload, bounds)
    else:  # pragma: no cover - EntityKind is closed
        raise AssertionError(f"unhandled entity kind {kind!r}")


def update_step(ctx) -> None:
    for entity in ctx.entities:
        update_entity(entity, ctx.bounds)


__all__ = ["apply_velocity", "apply_gravity", "reflect_in_bounds", "update_entity", "update_step"]
