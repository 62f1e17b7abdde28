"""
core/highscore.py — Durable best-score cell for Typing Taro.

The high score lives under the "highscore" key of the same JSON file as the
rest of the user config (core/config.py). The store is read once when the
controller is built and written only when a session beats it.

Writes are best-effort: if the file cannot be written the in-memory value
still moves up, so the current run keeps showing the right record, and the
next successful write catches the file up.
"""

from __future__ import annotations
import logging
from pathlib import Path

from core.config import CONFIG_PATH, load_config, save_config

logger = logging.getLogger(__name__)


class HighScoreStore:
    """Monotonic integer cell backed by the config file.

    Attributes:
        path:   Config file location.
        _value: Best score known to this process.
    """

    def __init__(self, path: Path | None = None) -> None:
        """Load the stored high score. Missing or bad data reads as 0."""
        self.path   = Path(path or CONFIG_PATH)
        self._value = int(load_config(self.path)["highscore"])

    def get(self) -> int:
        """Return the best score ever recorded."""
        return self._value

    def set(self, score: int) -> bool:
        """Record score if it beats the stored value.

        Writing the same or a lower value is a no-op.

        Args:
            score: Candidate high score.

        Returns:
            True if score became the new high score.
        """
        score = int(score)
        if score <= self._value:
            return False
        self._value = score
        try:
            save_config({"highscore": score}, self.path)
        except OSError as exc:
            logger.warning("[highscore] could not persist %d to %s: %s", score, self.path, exc)
        else:
            logger.info("[highscore] new record %d", score)
        return True
