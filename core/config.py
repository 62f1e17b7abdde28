"""
core/config.py — Persistent user configuration for Typing Taro.

settings.py holds constants; this module holds what the player can change
and what must survive a restart: the selected stages, the fall speed, the
mute flag and the high score. They live in a single JSON file that is
deep-merged over DEFAULT_CFG on load and patched (not rewritten) on save.

The file path defaults to config.json next to the game and can be
overridden with the TYPING_TARO_CONFIG environment variable.

Usage:
    provider = SettingsProvider()
    config   = provider.session_config()     # SessionConfig for the controller
    provider.save([2, 3, 4], speed=3)        # persist a settings-panel change
"""

from __future__ import annotations
import copy
import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Sequence

from settings import SPEED_MIN, SPEED_MAX, SPEED_DEFAULT
from stages.catalog import STAGE_SETS

logger = logging.getLogger(__name__)

PACKAGE_DIR = Path(__file__).resolve().parent.parent
CONFIG_PATH = Path(os.environ.get("TYPING_TARO_CONFIG", PACKAGE_DIR / "config.json"))

DEFAULT_CFG: dict[str, Any] = {
    "stages": sorted(STAGE_SETS),
    "speed": SPEED_DEFAULT,
    "audio": {"muted": False, "volume": 0.8},
    "highscore": 0,
}


@dataclass(frozen=True)
class SessionConfig:
    """Settings for one session. Immutable for the session's lifetime.

    Attributes:
        stage_order: Stage ids to play, in order.
        speed:       Fall-speed multiplier (> 0).
    """
    stage_order: tuple[int, ...]
    speed:       float


# ── File helpers ──────────────────────────────────────────────────────────────

def _merge(dst: dict, src: dict) -> dict:
    """Recursively merge src into dst in place and return dst."""
    for k, v in src.items():
        if isinstance(v, dict) and isinstance(dst.get(k), dict):
            _merge(dst[k], v)
        else:
            dst[k] = v
    return dst


def _sanitize_cfg(cfg: dict) -> dict:
    """Clamp and coerce every known field to a playable value.

    Unknown stage ids are dropped; order is kept and duplicates removed.
    An empty stage list is kept as-is so the title screen can report it.
    """
    try:
        speed = int(cfg.get("speed", SPEED_DEFAULT))
    except (TypeError, ValueError):
        speed = SPEED_DEFAULT
    cfg["speed"] = max(SPEED_MIN, min(SPEED_MAX, speed))

    stages = cfg.get("stages")
    if not isinstance(stages, list):
        stages = list(DEFAULT_CFG["stages"])
    cleaned: list[int] = []
    for s in stages:
        if type(s) is int and s in STAGE_SETS and s not in cleaned:
            cleaned.append(s)
    cfg["stages"] = cleaned

    a = cfg.get("audio")
    if not isinstance(a, dict):
        a = cfg["audio"] = copy.deepcopy(DEFAULT_CFG["audio"])
    a["muted"] = bool(a.get("muted", False))
    try:
        a["volume"] = float(max(0.0, min(1.0, float(a.get("volume", 0.8)))))
    except (TypeError, ValueError):
        a["volume"] = 0.8

    try:
        cfg["highscore"] = max(0, int(cfg.get("highscore", 0)))
    except (TypeError, ValueError):
        cfg["highscore"] = 0
    return cfg


def _read(path: Path) -> dict:
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    return data if isinstance(data, dict) else {}


def save_config(partial_cfg: dict, path: Path | None = None) -> None:
    """Deep-merge partial_cfg into the config file and write it back.

    Raises:
        OSError: If the file cannot be written. Callers decide whether the
                 write is best-effort.
    """
    path = Path(path or CONFIG_PATH)
    try:
        base = _read(path)
    except FileNotFoundError:
        base = {}
    except (OSError, ValueError) as exc:
        logger.warning("[config] unreadable %s, rewriting: %s", path, exc)
        base = {}
    merged = _merge(base, partial_cfg)
    # write beside the target and swap in, so a failed write keeps the old file
    tmp = path.with_name(path.name + ".tmp")
    try:
        with open(tmp, "w", encoding="utf-8") as f:
            json.dump(merged, f, ensure_ascii=False, indent=2)
        os.replace(tmp, path)
    except Exception:
        tmp.unlink(missing_ok=True)
        raise


def load_config(path: Path | None = None) -> dict:
    """Load the config file over DEFAULT_CFG.

    A missing file is created with the defaults. An unreadable or malformed
    file falls back to the defaults with a warning.
    """
    path = Path(path or CONFIG_PATH)
    cfg = copy.deepcopy(DEFAULT_CFG)
    try:
        _merge(cfg, _read(path))
    except FileNotFoundError:
        try:
            save_config(cfg, path)
            logger.info("[config] created %s", path)
        except OSError as exc:
            logger.warning("[config] could not create %s: %s", path, exc)
    except (OSError, ValueError) as exc:
        logger.warning("[config] using defaults, failed to read %s: %s", path, exc)
    return _sanitize_cfg(cfg)


# ── Provider ──────────────────────────────────────────────────────────────────

class SettingsProvider:
    """Supplies the stage order and speed, and persists panel changes.

    Attributes:
        path: Config file location.
        cfg:  Sanitised in-memory copy of the config file.
    """

    def __init__(self, path: Path | None = None) -> None:
        self.path = Path(path or CONFIG_PATH)
        self.cfg  = load_config(self.path)

    def session_config(self) -> SessionConfig:
        """Return the current selection as a SessionConfig."""
        return SessionConfig(tuple(self.cfg["stages"]), float(self.cfg["speed"]))

    @property
    def muted(self) -> bool:
        return bool(self.cfg["audio"]["muted"])

    @property
    def volume(self) -> float:
        return float(self.cfg["audio"]["volume"])

    def save(self, stage_order: Sequence[int], speed: int) -> SessionConfig:
        """Persist a new stage selection and speed.

        The in-memory copy always updates; a failed write is logged and the
        change only lasts until the game exits.

        Returns:
            The sanitised SessionConfig now in effect.
        """
        self.cfg["stages"] = list(stage_order)
        self.cfg["speed"]  = speed
        _sanitize_cfg(self.cfg)
        self._write({"stages": self.cfg["stages"], "speed": self.cfg["speed"]})
        logger.info("[settings] stages=%s speed=%s", self.cfg["stages"], self.cfg["speed"])
        return self.session_config()

    def save_muted(self, muted: bool) -> None:
        self.cfg["audio"]["muted"] = bool(muted)
        self._write({"audio": {"muted": bool(muted)}})

    def _write(self, partial: dict) -> None:
        try:
            save_config(partial, self.path)
        except OSError as exc:
            logger.warning("[settings] could not write %s: %s", self.path, exc)
