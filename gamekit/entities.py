"""Entity data model.

One ``Entity`` type covers every simulated object. The ``kind`` tag says
which payload is attached, so step functions branch on the tag instead
of on a class hierarchy:

    PLAYER   -> PlayerPayload   (x, y is the top-left corner)
    BALL     -> BallPayload     (x, y is the centre)
    PARTICLE -> ParticlePayload (x, y is the centre)

Factories validate geometry and raise ``ConfigurationError`` for
negative sizes so broken spawns fail at the call site rather than
mid-tick.
"""

from __future__ import annotations

import itertools
from dataclasses import dataclass, field
from enum import Enum
from typing import Tuple, Union

from gamekit.constants import (
    BALL_COLOR,
    BALL_RADIUS,
    BALL_RESTITUTION,
    GRAVITY_ACCEL,
    PARTICLE_ALPHA,
    PARTICLE_COLOR,
    PARTICLE_FADE,
    PARTICLE_LIFE_FRAMES,
    PARTICLE_RADIUS,
    PLAYER_SIZE,
    PLAYER_SPEED,
)
from gamekit.errors import ConfigurationError

Color = Tuple[int, int, int]

_ids = itertools.count(1)


class EntityKind(Enum):
    PLAYER = "player"
    BALL = "ball"
    PARTICLE = "particle"


@dataclass
class PlayerPayload:
    width: float
    height: float
    speed: float = PLAYER_SPEED
    moving_left: bool = False
    moving_right: bool = False


@dataclass
class BallPayload:
    radius: float
    gravity: float = GRAVITY_ACCEL
    restitution: float = BALL_RESTITUTION
    color: Color = BALL_COLOR


@dataclass
class ParticlePayload:
    radius: float
    life: int = PARTICLE_LIFE_FRAMES
    alpha: float = PARTICLE_ALPHA
    fade: float = PARTICLE_FADE
    gravity: float = 0.0
    color: Color = PARTICLE_COLOR


Payload = Union[PlayerPayload, BallPayload, ParticlePayload]


@dataclass
class Entity:
    kind: EntityKind
    x: float
    y: float
    vx: float = 0.0
    vy: float = 0.0
    payload: Payload | None = None
    id: int = field(default_factory=lambda: next(_ids))

    @property
    def pos(self) -> Tuple[float, float]:
        return self.x, self.y

    @property
    def radius(self) -> float:
        """Collision radius for circular kinds (0 for the player)."""
        if isinstance(self.payload, (BallPayload, ParticlePayload)):
            return self.payload.radius
        return 0.0

    def rect(self) -> Tuple[float, float, float, float]:
        """Axis-aligned bounding box as (x, y, w, h)."""
        if self.kind is EntityKind.PLAYER:
            return self.x, self.y, self.payload.width, self.payload.height
        r = self.radius
        return self.x - r, self.y - r, r * 2, r * 2


@dataclass(frozen=True)
class Bounds:
    width: float
    height: float


@dataclass(frozen=True)
class Obstacle:
    """Immutable axis-aligned rectangle of static geometry."""

    x: float
    y: float
    width: float
    height: float

    def __post_init__(self):
        if self.width < 0 or self.height < 0:
            raise ConfigurationError(f"obstacle size must be non-negative, got {self.width}x{self.height}")

    @property
    def origin(self) -> Tuple[float, float]:
        return self.x, self.y

    @property
    def size(self) -> Tuple[float, float]:
        return self.width, self.height


def make_player(x: float, y: float, size=PLAYER_SIZE, speed: float = PLAYER_SPEED) -> Entity:
    w, h = size
    if w < 0 or h < 0:
        raise ConfigurationError(f"player size must be non-negative, got {w}x{h}")
    return Entity(EntityKind.PLAYER, float(x), float(y), payload=PlayerPayload(float(w), float(h), speed))


def make_ball(
    x: float,
    y: float,
    vx: float = 0.0,
    vy: float = 0.0,
    radius: float = BALL_RADIUS,
    gravity: float = GRAVITY_ACCEL,
    restitution: float = BALL_RESTITUTION,
) -> Entity:
    if radius < 0:
        raise ConfigurationError(f"ball radius must be non-negative, got {radius}")
    payload = BallPayload(float(radius), gravity, restitution)
    return Entity(EntityKind.BALL, float(x), float(y), float(vx), float(vy), payload)


def make_particle(
    x: float,
    y: float,
    vx: float = 0.0,
    vy: float = 0.0,
    life: int = PARTICLE_LIFE_FRAMES,
    radius: float = PARTICLE_RADIUS,
    fade: float = PARTICLE_FADE,
    gravity: float = 0.0,
    color: Color = PARTICLE_COLOR,
) -> Entity:
    if radius < 0:
        raise ConfigurationError(f"particle radius must be non-negative, got {radius}")
    payload = ParticlePayload(float(radius), life=life, fade=fade, gravity=gravity, color=color)
    return Entity(EntityKind.PARTICLE, float(x), float(y), float(vx), float(vy), payload)


__all__ = [
    "Entity",
    "EntityKind",
    "PlayerPayload",
    "BallPayload",
    "ParticlePayload",
    "Bounds",
    "Obstacle",
    "make_player",
    "make_ball",
    "make_particle",
]
