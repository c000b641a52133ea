"""Lifecycle filter: drop entities whose death predicate holds.

Two flavours with the same result:

* ``prune`` builds a new list of survivors (safe while the original is
  still being iterated elsewhere).
* ``prune_in_place`` walks indices backwards so deleting never shifts an
  element the loop has yet to visit.

Both keep the relative order of survivors.
"""

from __future__ import annotations

from typing import Callable, List

from gamekit.entities import Entity, EntityKind

DeathPredicate = Callable[[Entity], bool]


def is_dead(entity: Entity) -> bool:
    """Default predicate: particles die when their life or alpha runs out."""
    if entity.kind is EntityKind.PARTICLE:
        return entity.payload.life <= 0 or entity.payload.alpha <= 0
    return False


def prune(entities: List[Entity], predicate: DeathPredicate = is_dead) -> List[Entity]:
    return [e for e in entities if not predicate(e)]


def prune_in_place(entities: List[Entity], predicate: DeathPredicate = is_dead) -> int:
    removed = 0
    for i in range(len(entities) - 1, -1, -1):
        if predicate(entities[i]):
            del entities[i]
            removed += 1
    return removed


def lifecycle_step(ctx, predicate: DeathPredicate = is_dead) -> int:
    """Prune the context's store; returns the number of entities removed."""
    return prune_in_place(ctx.entities, predicate)


__all__ = ["DeathPredicate", "is_dead", "prune", "prune_in_place", "lifecycle_step"]
