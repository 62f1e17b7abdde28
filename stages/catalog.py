"""
stages/catalog.py — Stage catalog for Typing Taro.

The catalog is the only place that knows which glyphs belong to which stage
and how each glyph may be typed. It is built once at import time and never
mutated afterwards.

Catalog format:
    STAGE_SETS:     { stage_id: [glyph, ...] }
    SPELLINGS:      { glyph: [spelling, ...] }

    stage_id:  Positive integer. Stage 1 is the base F/J key drill; its
               glyphs double as the interleaved practice glyphs in every
               later stage (see core/spawner.py).
    spelling:  Uppercase Latin keystroke sequence. A glyph may have several
               (し accepts both SI and SHI); the first one is shown as the
               typing hint.

Adding a stage:
    1. Add its glyphs to STAGE_SETS
    2. Add a spelling entry for every new glyph
    3. Offer it in the settings panel by adding it to STAGE_GROUPS
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, Mapping, Sequence

from core.errors import ConfigurationError, UnknownGlyph

BASE_STAGE_ID = 1

# ── Stage glyph sets ──────────────────────────────────────────────────────────
STAGE_SETS: dict[int, list[str]] = {
    1:  ["F", "J"],
    2:  ["あ", "い", "う", "え", "お"],
    3:  ["か", "き", "く", "け", "こ"],
    4:  ["さ", "し", "す", "せ", "そ"],
    5:  ["た", "ち", "つ", "て", "と"],
    6:  ["な", "に", "ぬ", "ね", "の"],
    7:  ["は", "ひ", "ふ", "へ", "ほ"],
    8:  ["ま", "み", "む", "め", "も"],
    9:  ["や", "ゆ", "よ"],
    10: ["わ", "を", "ん"],
}

# ── Accepted spellings ────────────────────────────────────────────────────────
SPELLINGS: dict[str, list[str]] = {
    "F": ["F"], "J": ["J"],
    "あ": ["A"],  "い": ["I"],  "う": ["U"],  "え": ["E"],  "お": ["O"],
    "か": ["KA"], "き": ["KI"], "く": ["KU"], "け": ["KE"], "こ": ["KO"],
    "さ": ["SA"], "し": ["SI", "SHI"], "す": ["SU"], "せ": ["SE"], "そ": ["SO"],
    "た": ["TA"], "ち": ["TI", "CHI"], "つ": ["TU", "TSU"], "て": ["TE"], "と": ["TO"],
    "な": ["NA"], "に": ["NI"], "ぬ": ["NU"], "ね": ["NE"], "の": ["NO"],
    "は": ["HA"], "ひ": ["HI"], "ふ": ["FU", "HU"], "へ": ["HE"], "ほ": ["HO"],
    "ま": ["MA"], "み": ["MI"], "む": ["MU"], "め": ["ME"], "も": ["MO"],
    "や": ["YA"], "ゆ": ["YU"], "よ": ["YO"],
    "わ": ["WA"], "を": ["WO"], "ん": ["NN"],
}

# ── Settings panel groups ─────────────────────────────────────────────────────
# Format: (group_id, label, stage ids). Labels are romanised so the default
# UI font can render them.
STAGE_GROUPS: list[tuple[str, str, tuple[int, ...]]] = [
    ("a",     "A row",  (2,)),
    ("ka",    "KA row", (3,)),
    ("sa",    "SA row", (4,)),
    ("ta",    "TA row", (5,)),
    ("na",    "NA row", (6,)),
    ("ha",    "HA row", (7,)),
    ("ma",    "MA row", (8,)),
    ("ya",    "YA row", (9,)),
    ("wa",    "WA row", (10,)),
    ("basic", "F/J drill", (1,)),
]


def stages_for_groups(group_ids: Iterable[str]) -> list[int]:
    """Return the sorted, de-duplicated stage ids for the selected groups.

    Unknown group ids are ignored.
    """
    wanted = set(group_ids)
    stages = {s for gid, _, ids in STAGE_GROUPS if gid in wanted for s in ids}
    return sorted(stages)


def groups_for_stages(stage_ids: Iterable[int]) -> list[str]:
    """Return the ids of every group whose stages are all in stage_ids."""
    have = set(stage_ids)
    return [gid for gid, _, ids in STAGE_GROUPS if set(ids) <= have]


@dataclass(frozen=True)
class StageEntry:
    """One stage: its id and ordered glyph set."""
    stage_id: int
    glyphs:   tuple[str, ...]


def _is_spelling(text: str) -> bool:
    return bool(text) and text.isascii() and text.isalpha() and text.isupper()


class StageCatalog:
    """Immutable stage → glyphs and glyph → spellings lookup.

    Attributes:
        _entries:   Dict mapping stage id → StageEntry.
        _spellings: Dict mapping glyph → tuple of accepted spellings.
    """

    def __init__(
        self,
        stage_sets: Mapping[int, Sequence[str]],
        spellings: Mapping[str, Sequence[str]],
    ) -> None:
        """Build and validate a catalog.

        Args:
            stage_sets: Mapping of stage id → ordered glyphs.
            spellings:  Mapping of glyph → ordered accepted spellings.

        Raises:
            ConfigurationError: If a glyph used by a stage has no spellings,
                                or a spelling is not uppercase Latin.
        """
        self._spellings: dict[str, tuple[str, ...]] = {}
        for glyph, options in spellings.items():
            options = tuple(dict.fromkeys(options))
            if not options:
                raise ConfigurationError(f"Glyph {glyph!r} has no spellings")
            bad = [s for s in options if not _is_spelling(s)]
            if bad:
                raise ConfigurationError(
                    f"Glyph {glyph!r} has non-uppercase-Latin spellings {bad}"
                )
            self._spellings[glyph] = options

        self._entries: dict[int, StageEntry] = {}
        for stage_id, glyphs in stage_sets.items():
            glyphs = tuple(dict.fromkeys(glyphs))
            missing = [g for g in glyphs if g not in self._spellings]
            if missing:
                raise ConfigurationError(
                    f"Stage {stage_id} uses glyphs without spellings: {missing}"
                )
            self._entries[int(stage_id)] = StageEntry(int(stage_id), glyphs)

    # ── Lookups ───────────────────────────────────────────────────────────────

    def stage_ids(self) -> list[int]:
        """Return every known stage id in ascending order."""
        return sorted(self._entries)

    def has_stage(self, stage_id: int) -> bool:
        return stage_id in self._entries

    def glyphs(self, stage_id: int) -> tuple[str, ...]:
        """Return the ordered glyph set for a stage.

        Raises:
            ConfigurationError: If the stage id is not in the catalog.
        """
        entry = self._entries.get(stage_id)
        if entry is None:
            raise ConfigurationError(f"Unknown stage {stage_id}")
        return entry.glyphs

    def spellings_of(self, glyph: str) -> tuple[str, ...]:
        """Return the accepted spellings for a glyph.

        Raises:
            UnknownGlyph: If the glyph is absent. This is a data bug.
        """
        try:
            return self._spellings[glyph]
        except KeyError:
            raise UnknownGlyph(glyph) from None

    @property
    def base_glyphs(self) -> tuple[str, ...]:
        """The base-practice glyph set (stage 1)."""
        return self.glyphs(BASE_STAGE_ID)

    def validate_stage_order(self, stage_order: Sequence[int]) -> None:
        """Check a configured stage order can be played.

        Raises:
            ConfigurationError: On an empty order, an unknown stage, a
                                stage with no glyphs, or a catalog with
                                no base-practice glyphs to interleave.
        """
        if not stage_order:
            raise ConfigurationError("No stages selected")
        if not self.base_glyphs:
            raise ConfigurationError(f"Stage {BASE_STAGE_ID} has no glyphs")
        for stage_id in stage_order:
            if not self.glyphs(stage_id):
                raise ConfigurationError(f"Stage {stage_id} has no glyphs")


# Default catalog, built once at import time
CATALOG = StageCatalog(STAGE_SETS, SPELLINGS)
