"""
core/session.py — Session state for Typing Taro.

SessionState is the single mutable aggregate of a play session:
    - Phase (title, playing, stage clear, game over, all clear)
    - Score, life and the stage / question position
    - The keys typed for the active prompt
    - The active falling prompt
    - A cached mirror of the stored high score

Session does NOT own the clock, the spawner or any rendering. It is a pure
data container with reset helpers. core/controller.py is the only writer;
everything else reads a frozen SessionSnapshot.

Usage:
    state = SessionState(high_score=store.get())
    state.reset_for_session(max_life=10)

    # each frame, for the renderer:
    snap = state.snapshot(config, catalog, questions_per_stage=20)
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum, auto

from core.config import SessionConfig
from core.spawner import FallingPrompt
from settings import MAX_LIFE
from stages.catalog import BASE_STAGE_ID, StageCatalog


class Phase(Enum):
    """Session phases."""
    START       = auto()
    PLAYING     = auto()
    STAGE_CLEAR = auto()
    GAME_OVER   = auto()
    CLEAR       = auto()

    @property
    def terminal(self) -> bool:
        return self in (Phase.GAME_OVER, Phase.CLEAR)


def _is_base_glyph(catalog: StageCatalog, glyph: str) -> bool:
    return catalog.has_stage(BASE_STAGE_ID) and glyph in catalog.base_glyphs


@dataclass(frozen=True)
class SessionSnapshot:
    """Read-only view of SessionState handed to the renderer each frame.

    Attributes mirror SessionState, plus:
        stage_id:            Stage at stage_index, or None past the last stage.
        hint:                First accepted spelling of the active glyph, or ""
                             for base-practice glyphs and between prompts.
        questions_per_stage: Stage length, for the "n/20" counter.
        max_life:            Life at session start, for the heart row.
    """
    phase:               Phase
    stage_index:         int
    stage_id:            int | None
    score:               int
    life:                int
    question_count:      int
    input_buffer:        str
    active_prompt:       FallingPrompt | None
    high_score:          int
    new_record:          bool
    transitioning:       bool
    hint:                str
    questions_per_stage: int
    max_life:            int


@dataclass
class SessionState:
    """Mutable state of one session.

    Attributes:
        phase:          Current Phase.
        stage_index:    Index into SessionConfig.stage_order.
        score:          Points earned this session.
        life:           Misses left before game over.
        question_count: Correct answers in the current stage.
        input_buffer:   Uppercase keys typed for the active prompt.
        active_prompt:  The falling prompt, or None between prompts.
        high_score:     Mirror of HighScoreStore.get().
        new_record:     True once this session has beaten the stored record.
        transitioning:  True while a deferred stage continue is pending.
    """
    phase:          Phase = Phase.START
    stage_index:    int   = 0
    score:          int   = 0
    life:           int   = MAX_LIFE
    question_count: int   = 0
    input_buffer:   str   = ""
    active_prompt:  FallingPrompt | None = None
    high_score:     int   = 0
    new_record:     bool  = False
    transitioning:  bool  = False

    def reset_for_session(self, max_life: int = MAX_LIFE) -> None:
        """Zero everything a new session starts from. Keeps high_score."""
        self.stage_index    = 0
        self.score          = 0
        self.life           = max_life
        self.question_count = 0
        self.input_buffer   = ""
        self.active_prompt  = None
        self.new_record     = False
        self.transitioning  = False

    def reset_for_stage(self) -> None:
        """Clear per-stage progress before the next stage starts."""
        self.question_count = 0
        self.input_buffer   = ""
        self.active_prompt  = None

    def stage_id(self, config: SessionConfig) -> int | None:
        """Return the stage being played, or None past the end of the order."""
        if 0 <= self.stage_index < len(config.stage_order):
            return config.stage_order[self.stage_index]
        return None

    def snapshot(
        self,
        config: SessionConfig,
        catalog: StageCatalog,
        questions_per_stage: int,
        max_life: int = MAX_LIFE,
    ) -> SessionSnapshot:
        """Freeze the current state for the renderer.

        Args:
            config:              Session config in effect.
            catalog:             Catalog used to look up the typing hint.
            questions_per_stage: Stage length.
            max_life:            Life at session start.
        """
        hint = ""
        prompt = self.active_prompt
        # interleaved F/J drill prompts carry no hint
        if prompt is not None and not _is_base_glyph(catalog, prompt.glyph):
            hint = catalog.spellings_of(prompt.glyph)[0]
        return SessionSnapshot(
            phase=self.phase,
            stage_index=self.stage_index,
            stage_id=self.stage_id(config),
            score=self.score,
            life=self.life,
            question_count=self.question_count,
            input_buffer=self.input_buffer,
            active_prompt=self.active_prompt,
            high_score=self.high_score,
            new_record=self.new_record,
            transitioning=self.transitioning,
            hint=hint,
            questions_per_stage=questions_per_stage,
            max_life=max_life,
        )
