import math
import random
from typing import Tuple

from gamekit.logger import get_logger

log = get_logger("rng")


class RNGService:
    """Seeded random source shared by spawners.

    Kept separate from the global ``random`` module so a run (or a test)
    can be replayed by reseeding just this generator.
    """

    _instance: "RNGService | None" = None

    def __init__(self, seed: int | float | str | None = None):
        self._generator = random.Random(seed)
        self._seed_val = seed
        log.debug(f"RNG initialized with seed: {seed!r}")

    @classmethod
    def get(cls) -> "RNGService":
        if cls._instance is None:
            from gamekit.settings import settings

            cls._instance = cls(settings.rng_seed)
        return cls._instance

    @classmethod
    def initialize(cls, seed: int | float | str | None = None) -> None:
        cls._instance = cls(seed)

    @property
    def seed_value(self):
        return self._seed_val

    def seed(self, a: int | float | str | None = None) -> None:
        self._seed_val = a
        self._generator.seed(a)
        log.debug(f"RNG re-seeded: {a!r}")

    def random(self) -> float:
        """Return the next random float in [0.0, 1.0)."""
        return self._generator.random()

    def randint(self, a: int, b: int) -> int:
        return self._generator.randint(a, b)

    def uniform(self, a: float, b: float) -> float:
        return self._generator.uniform(a, b)

    def angle(self) -> float:
        """Return a uniformly distributed angle in radians."""
        return self._generator.random() * math.pi * 2

    def velocity(self, speed_max: float) -> Tuple[float, float]:
        """Random direction with a speed in [0, speed_max)."""
        theta = self.angle()
        speed = self._generator.random() * speed_max
        return math.cos(theta) * speed, math.sin(theta) * speed
