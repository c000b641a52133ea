from gamekit.context import SimulationContext
from gamekit.entities import Bounds, make_ball, make_particle, make_player
from gamekit.lifecycle import is_dead, lifecycle_step, prune, prune_in_place


def life_le_zero(e):
    return e.payload.life <= 0


def _particles(lives):
    return [make_particle(0, 0, life=life) for life in lives]


def test_prune_keeps_survivors_in_order():
    entities = _particles([10, -1, 5, 0])
    survivors = prune(entities, life_le_zero)
    assert [e.payload.life for e in survivors] == [10, 5]
    # original untouched
    assert len(entities) == 4


def test_prune_in_place_matches_prune():
    entities = _particles([10, -1, 5, 0])
    ids = [e.id for e in entities]
    removed = prune_in_place(entities, life_le_zero)
    assert removed == 2
    assert [e.payload.life for e in entities] == [10, 5]
    assert [e.id for e in entities] == [ids[0], ids[2]]


def test_prune_in_place_adjacent_dead_entries_are_not_skipped():
    entities = _particles([0, 0, 0, 3, 0, 0])
    prune_in_place(entities, life_le_zero)
    assert [e.payload.life for e in entities] == [3]


def test_default_predicate_only_kills_spent_particles():
    faded = make_particle(0, 0, life=10)
    faded.payload.alpha = 0
    assert is_dead(faded)
    assert is_dead(make_particle(0, 0, life=0))
    assert not is_dead(make_particle(0, 0, life=1))
    assert not is_dead(make_ball(0, 0))
    assert not is_dead(make_player(0, 0))


def test_lifecycle_step_prunes_context_store():
    ctx = SimulationContext(bounds=Bounds(10, 10))
    ball = make_ball(5, 5)
    ctx.entities.extend([make_particle(0, 0, life=0), ball, make_particle(0, 0, life=4)])
    assert lifecycle_step(ctx) == 1
    assert ctx.entities[0] is ball
    assert len(ctx.entities) == 2
