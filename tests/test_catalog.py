import pytest

from core.errors import ConfigurationError, UnknownGlyph
from stages.catalog import (
    CATALOG, SPELLINGS, STAGE_GROUPS, STAGE_SETS, StageCatalog,
    groups_for_stages, stages_for_groups,
)


def test_every_glyph_has_a_spelling():
    for glyphs in STAGE_SETS.values():
        for glyph in glyphs:
            assert CATALOG.spellings_of(glyph)


def test_stage_ids_sorted():
    assert CATALOG.stage_ids() == sorted(STAGE_SETS)


def test_base_glyphs_are_f_and_j():
    assert CATALOG.base_glyphs == ('F', 'J')


def test_alternate_spellings_keep_order():
    assert CATALOG.spellings_of('し') == ('SI', 'SHI')
    assert CATALOG.spellings_of('ん') == ('NN',)


def test_unknown_glyph_raises():
    with pytest.raises(UnknownGlyph):
        CATALOG.spellings_of('ゑ')
    # still a KeyError for callers that catch lookups generally
    with pytest.raises(KeyError):
        CATALOG.spellings_of('ゑ')


def test_unknown_stage_raises():
    with pytest.raises(ConfigurationError):
        CATALOG.glyphs(99)


def test_glyph_without_spelling_rejected():
    with pytest.raises(ConfigurationError):
        StageCatalog({1: ['F', 'J'], 2: ['ゑ']}, SPELLINGS)


def test_lowercase_spelling_rejected():
    with pytest.raises(ConfigurationError):
        StageCatalog({1: ['F']}, {'F': ['f']})


def test_validate_empty_order():
    with pytest.raises(ConfigurationError):
        CATALOG.validate_stage_order([])


def test_validate_unknown_stage():
    with pytest.raises(ConfigurationError):
        CATALOG.validate_stage_order([2, 42])


def test_validate_requires_base_glyphs():
    catalog = StageCatalog({1: [], 2: ['あ']}, SPELLINGS)
    with pytest.raises(ConfigurationError):
        catalog.validate_stage_order([2])


def test_validate_accepts_known_order():
    CATALOG.validate_stage_order([3, 2, 1])


def test_groups_cover_every_stage():
    covered = stages_for_groups(gid for gid, _, _ in STAGE_GROUPS)
    assert covered == sorted(STAGE_SETS)


def test_stages_for_groups_sorted_unique():
    assert stages_for_groups(['ka', 'a', 'ka', 'nope']) == [2, 3]


def test_groups_for_stages_round_trip():
    assert groups_for_stages([2, 3]) == ['a', 'ka']
    assert groups_for_stages([]) == []


def test_validate_stage_without_glyphs():
    catalog = StageCatalog({1: ['F', 'J'], 2: []}, SPELLINGS)
    with pytest.raises(ConfigurationError):
        catalog.validate_stage_order([2])
