import random

from core.spawner import PromptSpawner
from settings import BASE_FALL_RATE, SPAWN_X_MAX, SPAWN_X_MIN, SPAWN_Y
from stages.catalog import CATALOG


def make_spawner(period=3):
    return PromptSpawner(CATALOG, rng=random.Random(1), clock=lambda: 12.5,
                         interleave_period=period)


def test_interleave_every_third_question():
    spawner = make_spawner()
    assert [q for q in range(10) if spawner.is_interleaved(q)] == [3, 6, 9]


def test_interleaved_question_uses_base_glyphs():
    spawner = make_spawner()
    for _ in range(20):
        assert spawner.spawn(3, 3, 1.0).glyph in ('F', 'J')


def test_other_questions_use_stage_glyphs():
    spawner = make_spawner()
    stage = set(CATALOG.glyphs(3))
    for q in (0, 1, 2, 4, 5):
        assert spawner.spawn(3, q, 1.0).glyph in stage


def test_zero_period_disables_interleave():
    spawner = make_spawner(period=0)
    assert not spawner.is_interleaved(3)
    assert spawner.spawn(2, 3, 1.0).glyph in CATALOG.glyphs(2)


def test_spawn_position_and_rate():
    spawner = make_spawner()
    for _ in range(50):
        prompt = spawner.spawn(1, 0, 2.0)
        assert SPAWN_X_MIN <= prompt.x <= SPAWN_X_MAX
        assert prompt.y == SPAWN_Y
        assert prompt.fall_rate == BASE_FALL_RATE * 2.0
        assert prompt.spawned_at == 12.5


def test_ids_strictly_increase():
    spawner = make_spawner()
    ids = [spawner.spawn(1, 0, 1.0).id for _ in range(5)]
    assert ids == sorted(set(ids))


def test_same_seed_same_sequence():
    a = [make_spawner().spawn(2, q, 1.0).glyph for q in range(10)]
    b = [make_spawner().spawn(2, q, 1.0).glyph for q in range(10)]
    assert a == b
