"""Simulation: the per-tick pipeline and the demo scene built on it.

``tick`` runs the three core steps in a fixed order over the whole
store:

    update -> collision -> lifecycle

Rendering is not part of the tick; the driver draws after it returns.
The returned summary feeds the HUD and the tests.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List

from gamekit.collision import collision_step
from gamekit.constants import (
    BALL_RADIUS,
    BURST_COUNT_POINTER,
    MAX_PARTICLES,
    PLAYER_GROUND_OFFSET,
    PLAYER_SIZE,
)
from gamekit.context import AudioPort, SimulationContext
from gamekit.entities import Bounds, Entity, EntityKind, Obstacle, make_ball, make_player
from gamekit.lifecycle import lifecycle_step
from gamekit.logger import get_logger
from gamekit.particle_system import ParticleSystem
from gamekit.physics import update_step
from gamekit.rng_service import RNGService

_log = get_logger("simulation")


@dataclass
class TickSummary:
    tick: int
    active: int
    removed: int
    collisions: int


def tick(ctx: SimulationContext) -> TickSummary:
    update_step(ctx)
    events = collision_step(ctx)
    removed = lifecycle_step(ctx)
    ctx.tick += 1
    return TickSummary(ctx.tick, len(ctx.entities), removed, len(events))


def default_obstacles(bounds: Bounds) -> List[Obstacle]:
    w, h = bounds.width, bounds.height
    return [
        Obstacle(w * 0.15, h * 0.35, w * 0.2, 16),
        Obstacle(w * 0.65, h * 0.45, w * 0.2, 16),
    ]


class Simulation:
    """Demo scene: a paddle, a bouncing ball, obstacles and pointer bursts."""

    def __init__(
        self,
        bounds: Bounds,
        audio: AudioPort | None = None,
        obstacles: List[Obstacle] | None = None,
        max_particles: int = MAX_PARTICLES,
        rng: RNGService | None = None,
    ) -> None:
        self.ctx = SimulationContext(bounds=bounds, audio=audio)
        self.ctx.obstacles = list(obstacles) if obstacles is not None else default_obstacles(bounds)
        self.particle_system = ParticleSystem(self.ctx.entities, max_particles=max_particles, rng=rng)
        self.ctx.particles = self.particle_system
        self.last_summary: TickSummary | None = None

    @property
    def entities(self) -> List[Entity]:
        return self.ctx.entities

    @property
    def player(self) -> Entity | None:
        for e in self.ctx.entities:
            if e.kind is EntityKind.PLAYER:
                return e
        return None

    def balls(self) -> List[Entity]:
        return [e for e in self.ctx.entities if e.kind is EntityKind.BALL]

    def reset(self) -> None:
        """Clear the store and spawn the starting paddle and ball."""
        b = self.ctx.bounds
        self.ctx.entities.clear()
        self.ctx.tick = 0
        self.last_summary = None
        pw = PLAYER_SIZE[0]
        self.ctx.entities.append(make_player((b.width - pw) / 2, b.height - PLAYER_GROUND_OFFSET, PLAYER_SIZE))
        self.ctx.entities.append(make_ball(b.width / 2, BALL_RADIUS * 3, vx=3.0))
        _log.info("scene reset", len(self.ctx.entities), "entities")

    def set_movement(self, left: bool | None = None, right: bool | None = None) -> None:
        player = self.player
        if player is None:
            return
        if left is not None:
            player.payload.moving_left = left
        if right is not None:
            player.payload.moving_right = right

    def launch_ball(self) -> Entity:
        """Spawn an extra ball just above the paddle, thrown upwards."""
        player = self.player
        b = self.ctx.bounds
        if player is not None:
            x = player.x + player.payload.width / 2
            y = player.y - BALL_RADIUS * 2
        else:
            x, y = b.width / 2, b.height / 2
        ball = make_ball(x, y, vx=self.particle_system.rng.uniform(-3.0, 3.0), vy=-12.0)
        self.ctx.entities.append(ball)
        self.ctx.play("pop")
        return ball

    def spawn_burst(self, pos, count: int = BURST_COUNT_POINTER) -> List[Entity]:
        spawned = self.particle_system.spawn_burst(pos, count)
        self.ctx.play("pop")
        return spawned

    def step(self) -> TickSummary:
        self.last_summary = tick(self.ctx)
        return self.last_summary


__all__ = ["TickSummary", "tick", "Simulation", "default_obstacles"]
