"""
core/controller.py — Session state machine for Typing Taro.

SessionController owns SessionState and is its only writer. It drives the
fall tick through the Scheduler, applies InputMatcher and scoring results,
manages life and stage progression, persists high scores and emits
GameEvents to subscribers (audio, effects).

Phases:
    START        — title screen, waiting for start
    PLAYING      — a prompt is falling, keys are being matched
    STAGE_CLEAR  — stage finished, waiting for continue
    GAME_OVER    — life exhausted or a prompt hit the floor
    CLEAR        — every configured stage finished

Transitions:
    START        → PLAYING      : start()
    PLAYING      → STAGE_CLEAR  : 20th correct answer, more stages left
    PLAYING      → CLEAR        : 20th correct answer of the last stage
    PLAYING      → GAME_OVER    : life reaches 0, or a prompt passes y = 100
    STAGE_CLEAR  → PLAYING      : continue_stage(), after the transition delay
    GAME_OVER    → PLAYING      : restart() (through START's reset)
    CLEAR        → PLAYING      : restart() (through START's reset)
    any          → START        : reset()

The two user intents are confirm() (start / continue / restart, bound to
Space and the on-screen buttons) and type_char(). Everything else is
driven by update(dt_ms), which advances the scheduler and fires fall ticks.

Usage:
    controller = SessionController(CATALOG, provider.session_config(), HighScoreStore())
    controller.subscribe(game.on_event)
    controller.start()

    # each frame:
    controller.update(dt_ms)
    snap = controller.snapshot()
"""

from __future__ import annotations
import logging
from dataclasses import replace

from core.config import SessionConfig
from core.errors import ConfigurationError
from core.events import EventKind, GameEvent, Listener
from core.highscore import HighScoreStore
from core.matcher import MatchResult, evaluate
from core.scheduler import Job, Scheduler
from core.scoring import points
from core.session import Phase, SessionSnapshot, SessionState
from core.spawner import FallingPrompt, PromptSpawner
from settings import (
    FALL_TICK_MS, STAGE_TRANSITION_MS, FIELD_FLOOR,
    MAX_LIFE, QUESTIONS_PER_STAGE,
)
from stages.catalog import StageCatalog

logger = logging.getLogger(__name__)


class SessionController:
    """Orchestrates one play session at a time.

    Attributes:
        catalog:   StageCatalog prompts are drawn from.
        config:    SessionConfig in effect.
        state:     The mutable SessionState. Read it through snapshot().
        scheduler: Scheduler holding the fall tick and transition delay.
        _pending_config: Settings received outside START, applied on the
                         next START entry.
    """

    def __init__(
        self,
        catalog: StageCatalog,
        config: SessionConfig,
        high_scores: HighScoreStore,
        *,
        spawner: PromptSpawner | None = None,
        scheduler: Scheduler | None = None,
        questions_per_stage: int = QUESTIONS_PER_STAGE,
        max_life: int = MAX_LIFE,
        fall_tick_ms: float = FALL_TICK_MS,
        transition_ms: float = STAGE_TRANSITION_MS,
    ) -> None:
        self.catalog   = catalog
        self.config    = config
        self.scheduler = scheduler or Scheduler()
        self._spawner  = spawner or PromptSpawner(catalog)
        self._high_scores = high_scores

        self._questions_per_stage = questions_per_stage
        self._max_life      = max_life
        self._fall_tick_ms  = fall_tick_ms
        self._transition_ms = transition_ms

        self.state = SessionState(life=max_life, high_score=high_scores.get())
        self._pending_config: SessionConfig | None = None
        self._listeners: list[Listener] = []
        self._fall_job:       Job | None = None
        self._transition_job: Job | None = None

    # ── Notifications ─────────────────────────────────────────────────────────

    def subscribe(self, listener: Listener) -> None:
        """Register a callable to receive every GameEvent."""
        self._listeners.append(listener)

    def unsubscribe(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _emit(self, kind: EventKind, prompt: FallingPrompt | None = None,
              pts: int = 0) -> None:
        event = GameEvent(kind, prompt=prompt, points=pts, score=self.state.score)
        for listener in list(self._listeners):
            listener(event)

    # ── Reads ─────────────────────────────────────────────────────────────────

    @property
    def phase(self) -> Phase:
        return self.state.phase

    def snapshot(self) -> SessionSnapshot:
        """Return a frozen view of the session for the renderer."""
        return self.state.snapshot(
            self.config, self.catalog, self._questions_per_stage, self._max_life,
        )

    # ── Settings ──────────────────────────────────────────────────────────────

    def apply_settings(self, config: SessionConfig) -> bool:
        """Replace the stage order and speed.

        Applied immediately in START (stage_index goes back to 0). In any
        other phase the change is held and applied on the next START entry.

        Returns:
            True if the settings took effect now, False if deferred.
        """
        if self.state.phase is Phase.START:
            self.config = config
            self._pending_config = None
            self.state.stage_index = 0
            return True
        self._pending_config = config
        logger.debug("[settings] deferred until next start: %s", config)
        return False

    # ── Scheduling ────────────────────────────────────────────────────────────

    def update(self, dt_ms: float) -> None:
        """Advance the scheduler by dt_ms, firing due ticks and deferred actions."""
        self.scheduler.advance(dt_ms)

    def _arm_fall_tick(self) -> None:
        if self._fall_job is not None:
            self._fall_job.cancel()
        self._fall_job = self.scheduler.every(self._fall_tick_ms, self.tick)

    def _stop_fall_tick(self) -> None:
        if self._fall_job is not None:
            self._fall_job.cancel()
            self._fall_job = None

    def _cancel_jobs(self) -> None:
        self._stop_fall_tick()
        if self._transition_job is not None:
            self._transition_job.cancel()
            self._transition_job = None

    def shutdown(self) -> None:
        """Cancel every scheduled job. Call when tearing the game down."""
        self._cancel_jobs()

    # ── Phase transitions ─────────────────────────────────────────────────────

    def reset(self) -> None:
        """Return to START from any phase.

        Cancels the fall tick and any pending stage transition, applies
        deferred settings, and clears the session fields.
        """
        self._cancel_jobs()
        if self._pending_config is not None:
            self.config = self._pending_config
            self._pending_config = None
        self.state.reset_for_session(self._max_life)
        self.state.phase = Phase.START

    def start(self) -> None:
        """Begin a session from START.

        Raises:
            ConfigurationError: If the stage order is empty, names an
                                unknown stage, a stage has no glyphs, or
                                the speed is not positive.
        """
        if self.state.phase is not Phase.START:
            logger.debug("[session-start] ignored in phase %s", self.state.phase.name)
            return
        self.catalog.validate_stage_order(self.config.stage_order)
        if self.config.speed <= 0:
            raise ConfigurationError(f"Speed must be positive, got {self.config.speed}")

        self.state.reset_for_session(self._max_life)
        self.state.phase = Phase.PLAYING
        self._arm_fall_tick()
        logger.info(
            "[session-start] stages=%s speed=%s",
            list(self.config.stage_order), self.config.speed,
        )
        self._emit(EventKind.SESSION_BEGIN)

    def restart(self) -> None:
        """Start over from GAME_OVER or CLEAR."""
        if not self.state.phase.terminal:
            return
        self.reset()
        self.start()

    def continue_stage(self) -> bool:
        """Schedule the move from STAGE_CLEAR into the next stage.

        The next stage becomes playable STAGE_TRANSITION_MS later. Repeated
        calls while the transition is pending are ignored.

        Returns:
            True if a transition was scheduled.
        """
        if self.state.phase is not Phase.STAGE_CLEAR or self.state.transitioning:
            return False
        self.state.transitioning = True
        self._transition_job = self.scheduler.after(self._transition_ms, self._resume_stage)
        return True

    def _resume_stage(self) -> None:
        self._transition_job = None
        self.state.transitioning = False
        self.state.reset_for_stage()
        self.state.phase = Phase.PLAYING
        self._arm_fall_tick()
        logger.info("[stage-start] stage=%s", self.state.stage_id(self.config))

    def confirm(self) -> None:
        """The start/continue intent: starts, continues or restarts by phase.

        Raises:
            ConfigurationError: From start() on an unplayable config.
        """
        phase = self.state.phase
        if phase is Phase.START:
            self.start()
        elif phase is Phase.STAGE_CLEAR:
            self.continue_stage()
        elif phase.terminal:
            self.restart()

    def _game_over(self, reason: str) -> None:
        self._stop_fall_tick()
        self.state.active_prompt = None
        self.state.input_buffer  = ""
        self.state.phase = Phase.GAME_OVER
        logger.info(
            "[game-over] reason=%s stage=%s score=%d",
            reason, self.state.stage_id(self.config), self.state.score,
        )
        self._record_high_score()
        self._emit(EventKind.GAME_OVER)

    def _record_high_score(self) -> None:
        if self._high_scores.set(self.state.score):
            self.state.high_score = self._high_scores.get()
            self.state.new_record = True
            self._emit(EventKind.HIGH_SCORE)

    # ── Fall tick ─────────────────────────────────────────────────────────────

    def _spawn(self) -> FallingPrompt:
        return self._spawner.spawn(
            self.config.stage_order[self.state.stage_index],
            self.state.question_count,
            self.config.speed,
        )

    def tick(self) -> None:
        """One fall tick: spawn a prompt if none is active, else move it down.

        A prompt that passes the floor ends the session immediately without
        touching life. No-op outside PLAYING.
        """
        if self.state.phase is not Phase.PLAYING:
            return
        prompt = self.state.active_prompt
        if prompt is None:
            self.state.active_prompt = self._spawn()
            return

        moved = replace(prompt, y=prompt.y + prompt.fall_rate)
        if moved.y > FIELD_FLOOR:
            self._game_over("floor")
            return
        self.state.active_prompt = moved

    # ── Keystrokes ────────────────────────────────────────────────────────────

    def type_char(self, char: str) -> MatchResult | None:
        """Feed one typed character to the active prompt.

        Only single ASCII letters are accepted; anything else, or a key
        typed with no active prompt or outside PLAYING, is ignored.

        Args:
            char: The character typed.

        Returns:
            The MatchResult, or None if the key was ignored.
        """
        prompt = self.state.active_prompt
        if self.state.phase is not Phase.PLAYING or prompt is None:
            return None
        if len(char) != 1 or not (char.isascii() and char.isalpha()):
            return None

        self.state.input_buffer += char.upper()
        result = evaluate(self.state.input_buffer, self.catalog.spellings_of(prompt.glyph))
        logger.debug("[key] glyph=%s buffer=%s result=%s",
                     prompt.glyph, self.state.input_buffer, result.name)

        self._emit(EventKind.KEYSTROKE, prompt)
        if result is MatchResult.FAILURE:
            self._on_miss()
        elif result is MatchResult.SUCCESS:
            self._on_correct(prompt)
        return result

    def _on_miss(self) -> None:
        self.state.life = max(0, self.state.life - 1)
        self.state.input_buffer = ""
        self._emit(EventKind.MISS)
        if self.state.life == 0:
            self._game_over("life")

    def _on_correct(self, prompt: FallingPrompt) -> None:
        pts = points(prompt.y, self.config.speed)
        self.state.score += pts
        self.state.input_buffer = ""
        self.state.question_count += 1
        self.state.active_prompt = None
        self._emit(EventKind.CORRECT, prompt, pts)

        if self.state.question_count >= self._questions_per_stage:
            self._on_stage_complete()
        else:
            self.state.active_prompt = self._spawn()

    def _on_stage_complete(self) -> None:
        cleared = self.state.stage_id(self.config)
        self._stop_fall_tick()
        self.state.stage_index += 1
        if self.state.stage_index >= len(self.config.stage_order):
            self.state.phase = Phase.CLEAR
            logger.info("[clear] score=%d", self.state.score)
            self._record_high_score()
            self._emit(EventKind.SESSION_CLEAR)
        else:
            self.state.phase = Phase.STAGE_CLEAR
            logger.info("[stage-clear] stage=%s score=%d", cleared, self.state.score)
            self._record_high_score()
            self._emit(EventKind.STAGE_CLEAR)
