"""
core/game.py — pygame glue for Typing Taro.

Game owns the scene (play or settings panel) and wires the subsystems
together:
    - SessionController (the session state machine)
    - SettingsProvider / HighScoreStore (persistence)
    - AdminPanel (settings panel selection)
    - Effects (particles, popups, shake, score pulse)
    - Audio (synthesised tones)

Input routing:
    Space / on-screen button  → controller.confirm()  (start, continue, retry)
    Letters (TEXTINPUT)       → controller.type_char() while PLAYING
    V on the title screen     → settings panel
    M outside PLAYING         → toggle mute
    Escape                    → back to the title screen

Audio hookup:
    All sound triggers live here. The controller emits GameEvents; on_event()
    turns them into sounds and cosmetic effects. The mixer is initialised on
    the first SESSION_BEGIN, so no audio device is opened until play starts.

game.py does NOT call pygame.display.flip() or manage the window.
That is main.py's responsibility.
"""

from __future__ import annotations
import logging
from enum import Enum, auto

import pygame

from core.admin import AdminPanel
from core.config import SessionConfig, SettingsProvider
from core.controller import SessionController
from core.errors import ConfigurationError
from core.events import EventKind, GameEvent
from core.highscore import HighScoreStore
from core.session import Phase
from renderer import ui
from renderer.admin import draw_admin
from renderer.effects import Effects
from renderer.field import draw_field, draw_input_box
from renderer.menu import draw_menu
from settings import COLOR
from stages.catalog import CATALOG, StageCatalog

logger = logging.getLogger(__name__)

# Events that have a matching sound in core/audio.py
_SOUND_EVENTS = {
    EventKind.SESSION_BEGIN, EventKind.KEYSTROKE, EventKind.CORRECT,
    EventKind.MISS, EventKind.STAGE_CLEAR, EventKind.SESSION_CLEAR,
    EventKind.GAME_OVER,
}


class Scene(Enum):
    """Top-level screens."""
    PLAY  = auto()
    ADMIN = auto()


class Game:
    """Routes pygame input to the controller and renders its snapshots.

    Attributes:
        scene:      Current Scene.
        controller: SessionController for the play scene.
        provider:   SettingsProvider backing the settings panel.
        effects:    Effects layer fed by controller events.
        admin:      AdminPanel while the settings panel is open, else None.
        error:      Last configuration error, shown on the title screen.
        _audio:     Audio instance injected via set_audio(). None until set.
        _btn_rect:  Rect of the current overlay button for hit detection.
        _targets:   Settings panel hit targets from the last render.
    """

    def __init__(
        self,
        provider: SettingsProvider | None = None,
        high_scores: HighScoreStore | None = None,
        catalog: StageCatalog = CATALOG,
    ) -> None:
        self.provider = provider or SettingsProvider()
        high_scores = high_scores or HighScoreStore(self.provider.path)
        self.controller = SessionController(catalog, self.provider.session_config(), high_scores)
        self.controller.subscribe(self.on_event)

        self.scene:   Scene = Scene.PLAY
        self.effects: Effects = Effects()
        self.admin:   AdminPanel | None = None
        self.error:   str | None = None

        self._audio = None
        self._btn_rect: pygame.Rect | None = None
        self._targets: list = []
        self._mouse:   tuple[int, int] | None = None
        self._dt:      float = 0.0
        self._clock:   float = 0.0
        self._clear_t: float = 0.0

    # ── Audio ─────────────────────────────────────────────────────────────────

    def set_audio(self, audio) -> None:
        """Inject the Audio instance after construction.

        Args:
            audio: core.audio.Audio instance; init() is deferred to the
                   first session start.
        """
        self._audio = audio

    def _play(self, name: str) -> None:
        """Play a sound by name. Silent no-op if audio not set."""
        if self._audio:
            self._audio.play(name)

    @property
    def muted(self) -> bool:
        return bool(self._audio and self._audio.muted)

    def toggle_mute(self) -> None:
        if self._audio:
            self.provider.save_muted(self._audio.toggle_muted())

    # ── Controller notifications ──────────────────────────────────────────────

    def on_event(self, event: GameEvent) -> None:
        """Turn a controller event into sound and cosmetic effects."""
        if event.kind is EventKind.SESSION_BEGIN:
            self.effects.clear()
            if self._audio:
                self._audio.init()
        elif event.kind is EventKind.CORRECT and event.prompt is not None:
            self.effects.reward(event.prompt.x, event.prompt.y, event.points)
        elif event.kind is EventKind.MISS:
            self.effects.shake()
        elif event.kind is EventKind.SESSION_CLEAR:
            self._clear_t = 0.0

        if event.kind in _SOUND_EVENTS:
            self._play(event.kind.value)

    # ── Intents ───────────────────────────────────────────────────────────────

    def confirm(self) -> None:
        """Start, continue or retry depending on the session phase."""
        try:
            self.controller.confirm()
        except ConfigurationError as exc:
            self.error = str(exc)
            logger.warning("[session-start] rejected: %s", exc)
        else:
            self.error = None

    def to_title(self) -> None:
        """Abandon the current session and show the title screen."""
        self.controller.reset()
        self.effects.clear()

    def open_admin(self) -> None:
        """Open the settings panel. Only reachable from the title screen."""
        if self.controller.phase is not Phase.START:
            return
        self.admin = AdminPanel(self.controller.config)
        self.scene = Scene.ADMIN

    def close_admin(self) -> None:
        self.admin = None
        self.scene = Scene.PLAY

    def _apply_admin(self, config: SessionConfig) -> None:
        saved = self.provider.save(config.stage_order, int(config.speed))
        self.controller.apply_settings(saved)
        self.error = None

    def shutdown(self) -> None:
        """Cancel every scheduled controller job and release the mixer."""
        self.controller.shutdown()
        if self._audio:
            self._audio.quit()

    # ── Per-frame update ──────────────────────────────────────────────────────

    def update(self, dt: float, game_mouse_pos: tuple[int, int] | None) -> None:
        """Advance the session and the effects by dt seconds.

        Args:
            dt:             Delta time in seconds since last frame.
            game_mouse_pos: Mouse position in native coordinates, or None
                            when the cursor is in a letterbox bar.
        """
        self._dt = dt
        self._clock += dt
        self._clear_t += dt
        self._mouse = game_mouse_pos
        self.effects.update(dt)
        self.controller.update(dt * 1000.0)

    # ── Event handling ────────────────────────────────────────────────────────

    def handle_event(self, event: pygame.event.Event) -> None:
        """Route a pygame event to the handler for the current scene.

        Mouse positions in events are expected to already be in game
        coordinates; main.py translates them.
        """
        if self.scene is Scene.ADMIN:
            self._handle_admin_event(event)
        else:
            self._handle_play_event(event)

    def _handle_play_event(self, event: pygame.event.Event) -> None:
        phase = self.controller.phase

        if event.type == pygame.KEYDOWN:
            if event.key == pygame.K_ESCAPE and phase is not Phase.START:
                self.to_title()
            elif event.key == pygame.K_SPACE and phase is not Phase.PLAYING:
                self.confirm()
            elif event.key == pygame.K_v and phase is Phase.START:
                self.open_admin()
            elif event.key == pygame.K_m and phase is not Phase.PLAYING:
                self.toggle_mute()

        elif event.type == pygame.TEXTINPUT and phase is Phase.PLAYING:
            for char in event.text:
                self.controller.type_char(char)

        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            if self._btn_rect and self._btn_rect.collidepoint(event.pos):
                self.confirm()

    def _handle_admin_event(self, event: pygame.event.Event) -> None:
        if event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
            self.close_admin()
            return
        if event.type != pygame.MOUSEBUTTONDOWN or event.button != 1 or self.admin is None:
            return

        for rect, (action, value) in self._targets:
            if not rect.collidepoint(event.pos):
                continue
            if action == "back":
                self.close_admin()
            elif action == "all":
                self._apply_admin(self.admin.select_all())
            elif action == "none":
                self._apply_admin(self.admin.clear_all())
            elif action == "group":
                self._apply_admin(self.admin.toggle_group(value))
            elif action == "speed":
                self._apply_admin(self.admin.set_speed(value))
            return

    # ── Rendering ─────────────────────────────────────────────────────────────

    def render(self, surface: pygame.Surface) -> None:
        """Draw the current scene onto the native game surface."""
        surface.fill(COLOR["background"])
        self._btn_rect = None

        if self.scene is Scene.ADMIN and self.admin is not None:
            self._targets = draw_admin(surface, self.admin, self._mouse)
            return

        snap = self.controller.snapshot()
        ui.draw_header(surface, snap, self.effects.score_pulse(), self.muted)

        if snap.phase is Phase.START:
            self._btn_rect = draw_menu(surface, self._dt, self._mouse, self.error)
            return

        field = draw_field(surface, snap, self.effects.shake_offset())
        self.effects.draw(surface, field)

        if snap.phase is Phase.PLAYING:
            draw_input_box(surface, snap.input_buffer, int(self._clock * 2) % 2 == 0)
        elif snap.phase is Phase.STAGE_CLEAR:
            self._btn_rect = ui.draw_stage_clear(surface, snap, self._mouse)
        elif snap.phase is Phase.GAME_OVER:
            self._btn_rect = ui.draw_game_over(surface, snap, self._mouse)
        elif snap.phase is Phase.CLEAR:
            self._btn_rect = ui.draw_clear(surface, snap, self._clear_t, self._mouse)
