"""
core/spawner.py — Falling prompt factory for Typing Taro.

The spawner is the only place that decides which glyph falls next. It reads
glyph sets from stages/catalog.py and applies two rules:

    1. Interleave — every `interleave_period`-th question (3rd, 6th, ...)
                    is a base-practice glyph (F or J) whatever the stage,
                    keeping the home-row drill mixed into later stages.
    2. Uniform    — otherwise the glyph is drawn uniformly from the
                    current stage's set.

The controller calls spawn() whenever no prompt is active and receives a
fresh FallingPrompt positioned above the visible field.

Design note:
    Randomness and the clock are injected so tests can pin both. Prompt
    ids come from a counter owned by the spawner, never from the clock,
    so two prompts spawned in the same millisecond stay distinct.
"""

from __future__ import annotations
import itertools
import random
import time
from dataclasses import dataclass
from typing import Callable

from settings import (
    BASE_FALL_RATE, INTERLEAVE_PERIOD,
    SPAWN_X_MIN, SPAWN_X_MAX, SPAWN_Y,
)
from stages.catalog import StageCatalog


@dataclass(frozen=True)
class FallingPrompt:
    """A glyph instance falling through the play field.

    Attributes:
        id:         Unique, monotonically increasing token.
        glyph:      The glyph the player must transliterate.
        x:          Horizontal position in field percent, within [10, 90].
        y:          Vertical position in field units; the floor is at 100.
        fall_rate:  Field units added to y on each fall tick.
        spawned_at: Clock reading at spawn time, in seconds.
    """
    id:         int
    glyph:      str
    x:          float
    y:          float
    fall_rate:  float
    spawned_at: float


class PromptSpawner:
    """Builds falling prompts for the current stage and question.

    Attributes:
        _catalog:  StageCatalog to draw glyphs from.
        _rng:      random.Random used for glyph and x selection.
        _clock:    Callable returning the current time in seconds.
        _period:   Interleave period. 0 disables interleaving.
        _ids:      Counter producing prompt ids.
    """

    def __init__(
        self,
        catalog: StageCatalog,
        rng: random.Random | None = None,
        clock: Callable[[], float] = time.monotonic,
        interleave_period: int = INTERLEAVE_PERIOD,
    ) -> None:
        self._catalog = catalog
        self._rng     = rng or random.Random()
        self._clock   = clock
        self._period  = interleave_period
        self._ids     = itertools.count(1)

    def is_interleaved(self, question_count: int) -> bool:
        """Return True if this question index takes a base-practice glyph."""
        return (
            self._period > 0
            and question_count > 0
            and question_count % self._period == 0
        )

    def spawn(self, stage_id: int, question_count: int, speed: float) -> FallingPrompt:
        """Return a new prompt for the given stage and question index.

        Args:
            stage_id:       Stage currently being played.
            question_count: Correct answers so far in this stage.
            speed:          Session fall-speed multiplier.

        Returns:
            A FallingPrompt at y = SPAWN_Y with a random x in
            [SPAWN_X_MIN, SPAWN_X_MAX].
        """
        if self.is_interleaved(question_count):
            pool = self._catalog.base_glyphs
        else:
            pool = self._catalog.glyphs(stage_id)

        return FallingPrompt(
            id=next(self._ids),
            glyph=self._rng.choice(pool),
            x=self._rng.uniform(SPAWN_X_MIN, SPAWN_X_MAX),
            y=SPAWN_Y,
            fall_rate=BASE_FALL_RATE * speed,
            spawned_at=self._clock(),
        )
