"""Simulation context and collaborator ports.

The context is the one object the step functions receive. It owns the
entity store and the static geometry and carries narrow ports to the
outside world (audio, particle spawning) so steps never import the
pygame-backed services directly. The driver loop creates and owns it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Protocol, Tuple

from gamekit.entities import Bounds, Entity, Obstacle


class AudioPort(Protocol):
    def play(self, name: str, loops: int = 0) -> None: ...


class ParticlePort(Protocol):
    def spawn_burst(self, pos: Tuple[float, float], count: int, **kwargs): ...


@dataclass
class SimulationContext:
    bounds: Bounds
    entities: List[Entity] = field(default_factory=list)
    obstacles: List[Obstacle] = field(default_factory=list)
    audio: AudioPort | None = None
    particles: ParticlePort | None = None
    tick: int = 0

    def play(self, name: str) -> None:
        if self.audio is not None:
            self.audio.play(name)


__all__ = ["AudioPort", "ParticlePort", "SimulationContext"]
