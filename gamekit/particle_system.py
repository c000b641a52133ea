"""ParticleSystem: spawning side of the particle effects.

Particles live in the simulation's single entity store; this system
only creates them (singly or as radial bursts) and enforces the
particle cap. Movement, fading and removal happen in the regular
update and lifecycle steps like every other entity.

When the cap is exceeded the oldest particles are dropped first.
"""

from __future__ import annotations

from typing import List, Tuple

from gamekit.constants import (
    MAX_PARTICLES,
    PARTICLE_GRAVITY,
    PARTICLE_LIFE_FRAMES,
    PARTICLE_SPEED_MAX,
)
from gamekit.entities import Entity, EntityKind, make_particle
from gamekit.logger import get_logger
from gamekit.rng_service import RNGService

_log = get_logger("particles")


class ParticleSystem:
    def __init__(self, store: List[Entity], max_particles: int = MAX_PARTICLES, rng: RNGService | None = None):
        self.store = store
        self.max_particles = max_particles
        self.rng = rng or RNGService.get()

    def __len__(self) -> int:
        return sum(1 for e in self.store if e.kind is EntityKind.PARTICLE)

    def spawn_particle(self, pos: Tuple[float, float], velocity=(0.0, 0.0), **kwargs) -> Entity:
        p = make_particle(pos[0], pos[1], velocity[0], velocity[1], **kwargs)
        self.store.append(p)
        self._enforce_cap()
        return p

    def spawn_burst(
        self,
        pos: Tuple[float, float],
        count: int,
        speed_max: float = PARTICLE_SPEED_MAX,
        life: int = PARTICLE_LIFE_FRAMES,
    ) -> List[Entity]:
        """Emit ``count`` particles in random directions from ``pos``."""
        spawned = []
        for _ in range(count):
            vx, vy = self.rng.velocity(speed_max)
            # jitter lifetimes so a burst does not vanish on a single frame
            p = make_particle(
                pos[0],
                pos[1],
                vx,
                vy,
                life=life - self.rng.randint(0, life // 3),
                gravity=PARTICLE_GRAVITY,
            )
            spawned.append(p)
        self.store.extend(spawned)
        self._enforce_cap()
        _log.debug("burst", count, "at", pos)
        return spawned

    def _enforce_cap(self) -> None:
        excess = len(self) - self.max_particles
        if excess <= 0:
            return
        # Store order is spawn order, so the first particles found are the oldest
        kept: List[Entity] = []
        for e in self.store:
            if excess > 0 and e.kind is EntityKind.PARTICLE:
                excess -= 1
                continue
            kept.append(e)
        self.store[:] = kept

    def particles(self) -> List[Entity]:
        return [e for e in self.store if e.kind is EntityKind.PARTICLE]

    def clear(self) -> None:
        self.store[:] = [e for e in self.store if e.kind is not EntityKind.PARTICLE]


__all__ = ["ParticleSystem"]
