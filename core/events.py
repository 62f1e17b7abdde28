"""
core/events.py — Notifications emitted by the session controller.

The controller never calls audio or drawing code directly. It emits a
GameEvent after each transition is applied; core/game.py subscribes and
fans events out to the Audio engine and the renderer's Effects layer.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Callable

from core.spawner import FallingPrompt


class EventKind(Enum):
    """What happened. Values double as Audio sound names."""
    SESSION_BEGIN = "session_begin"
    KEYSTROKE     = "keystroke"
    CORRECT       = "correct"
    MISS          = "miss"
    STAGE_CLEAR   = "stage_clear"
    SESSION_CLEAR = "session_clear"
    GAME_OVER     = "game_over"
    HIGH_SCORE    = "high_score"


@dataclass(frozen=True)
class GameEvent:
    """A single notification.

    Attributes:
        kind:   EventKind.
        prompt: Prompt involved (CORRECT carries the answered prompt so the
                renderer can place particles and the score popup).
        points: Points awarded (CORRECT only).
        score:  Session score after the transition.
    """
    kind:   EventKind
    prompt: FallingPrompt | None = None
    points: int = 0
    score:  int = 0


Listener = Callable[[GameEvent], None]
