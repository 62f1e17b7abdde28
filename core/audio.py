"""
core/audio.py — Audio engine for Typing Taro.

All sounds are synthesised at startup in pure Python — no numpy, no audio
files — and cached as pygame.mixer.Sound objects. Works under CPython and
pygbag alike.

Each tone decays exponentially to 1% of its start volume over its length,
the same envelope an oscillator with an exponential gain ramp produces.

Sound design:
    session_begin — 400→800Hz sine sweep              — game is starting
    keystroke     — 800Hz square tick                 — every accepted key
    correct       — 880Hz + 1760Hz sine, layered      — bright chime
    miss          — 220Hz square                      — low buzz
    stage_clear   — C5 E5 G5 C6 sine arpeggio         — fanfare
    session_clear — C5 E5 G5 C6 E6 G6 C7 arpeggio,
                    triangle an octave below on every other note
    game_over     — G4→E4→C4 descent                  — session lost

Usage:
    audio = Audio()
    audio.init()
    audio.play("correct")
"""

from __future__ import annotations
import logging
import math
import struct

import pygame

logger = logging.getLogger(__name__)

# ── Synthesis constants ───────────────────────────────────────────────────────
_SAMPLE_RATE = 22050
_MAX_AMP     = 32767   # int16 max
_DECAY_FLOOR = 0.01    # envelope end level relative to start

_STAGE_CLEAR_NOTES   = [523.25, 659.25, 783.99, 1046.5]
_SESSION_CLEAR_NOTES = [523.25, 659.25, 783.99, 1046.5, 1318.51, 1567.98, 2093.0]


def _pack(samples: list[float]) -> bytes:
    """Pack float samples in [-1, 1] into interleaved int16 stereo PCM."""
    buf = []
    for s in samples:
        v = int(max(-1.0, min(1.0, s)) * _MAX_AMP)
        buf.append(struct.pack("<hh", v, v))
    return b"".join(buf)


def _oscillator(wave: str, freq: float, t: float) -> float:
    """Return one sample of a unit-amplitude waveform at time t."""
    phase = (freq * t) % 1.0
    if wave == "square":
        return 1.0 if phase < 0.5 else -1.0
    if wave == "triangle":
        return 4.0 * abs(phase - 0.5) - 1.0
    return math.sin(2 * math.pi * phase)


def _tone(freq: float, duration: float, volume: float = 0.3,
          wave: str = "sine") -> list[float]:
    """Generate a tone with an exponential decay envelope.

    Args:
        freq:     Frequency in Hz.
        duration: Length in seconds; the envelope reaches 1% at the end.
        volume:   Start amplitude in [0.0, 1.0].
        wave:     "sine", "square" or "triangle".

    Returns:
        List of float samples.
    """
    n = max(1, int(_SAMPLE_RATE * duration))
    decay = math.log(_DECAY_FLOOR) / n
    return [
        volume * math.exp(decay * i) * _oscillator(wave, freq, i / _SAMPLE_RATE)
        for i in range(n)
    ]


def _sweep(f_start: float, f_end: float, duration: float,
           volume: float = 0.3) -> list[float]:
    """Generate a sine glide from f_start to f_end with a linear fade."""
    n = int(_SAMPLE_RATE * duration)
    samples = []
    phase = 0.0
    for i in range(n):
        t = i / n
        phase += 2 * math.pi * (f_start + (f_end - f_start) * t) / _SAMPLE_RATE
        samples.append(volume * (1.0 - t) * math.sin(phase))
    return samples


def _mix(*layers: tuple[float, list[float]]) -> list[float]:
    """Sum sample lists, each starting at its own offset in seconds.

    Used for arpeggios whose notes ring over each other.
    """
    length = 0
    for offset, samples in layers:
        length = max(length, int(offset * _SAMPLE_RATE) + len(samples))
    out = [0.0] * length
    for offset, samples in layers:
        start = int(offset * _SAMPLE_RATE)
        for i, s in enumerate(samples):
            out[start + i] += s
    return out


def _make_sound(samples: list[float]) -> pygame.mixer.Sound:
    return pygame.mixer.Sound(buffer=_pack(samples))


# ── Audio manager ─────────────────────────────────────────────────────────────

class Audio:
    """Synthesised sound effects with mute and volume control.

    Attributes:
        _sounds:    Dict mapping sound name → pygame.mixer.Sound.
        _available: True if pygame.mixer initialised successfully.
        muted:      When True, play() is a no-op.
        _volume:    Global volume in [0.0, 1.0].
    """

    def __init__(self, muted: bool = False, volume: float = 0.8) -> None:
        """Create an uninitialised engine. Call init() before use."""
        self._sounds:    dict[str, pygame.mixer.Sound] = {}
        self._available: bool = False
        self.muted:      bool = muted
        self._volume:    float = max(0.0, min(1.0, volume))

    def init(self) -> None:
        """Initialise pygame.mixer and synthesise every sound.

        Safe to call more than once; later calls are no-ops. If the mixer
        cannot start, audio stays disabled for the rest of the run.
        """
        if self._available:
            return
        try:
            pygame.mixer.pre_init(_SAMPLE_RATE, -16, 2, 512)
            pygame.mixer.init()
        except pygame.error as exc:
            logger.warning("[audio] mixer unavailable, running silent: %s", exc)
            self._available = False
            return
        self._available = True
        self._generate_sounds()
        self.set_volume(self._volume)

    def _generate_sounds(self) -> None:
        """Synthesise and cache every sound."""
        self._sounds["session_begin"] = _make_sound(_sweep(400, 800, 0.25, volume=0.25))

        self._sounds["keystroke"] = _make_sound(_tone(800, 0.05, volume=0.1, wave="square"))

        self._sounds["correct"] = _make_sound(_mix(
            (0.0, _tone(880, 0.10, volume=0.2)),
            (0.0, _tone(1760, 0.15, volume=0.1)),
        ))

        self._sounds["miss"] = _make_sound(_tone(220, 0.15, volume=0.2, wave="square"))

        self._sounds["stage_clear"] = _make_sound(_mix(*[
            (i * 0.2, _tone(note, 0.5, volume=0.2))
            for i, note in enumerate(_STAGE_CLEAR_NOTES)
        ]))

        layers = []
        for i, note in enumerate(_SESSION_CLEAR_NOTES):
            layers.append((i * 0.3, _tone(note, 0.8, volume=0.15)))
            if i % 2 == 0:
                layers.append((i * 0.3, _tone(note / 2, 0.8, volume=0.1, wave="triangle")))
        self._sounds["session_clear"] = _make_sound(_mix(*layers))

        self._sounds["game_over"] = _make_sound(_mix(
            (0.00, _tone(392.00, 0.30, volume=0.2, wave="triangle")),
            (0.25, _tone(329.63, 0.30, volume=0.2, wave="triangle")),
            (0.50, _tone(261.63, 0.60, volume=0.2, wave="triangle")),
        ))

    def play(self, name: str) -> None:
        """Play a sound by name. Silent no-op if muted, unavailable or unknown."""
        if self.muted or not self._available:
            return
        sound = self._sounds.get(name)
        if sound:
            sound.play()

    def toggle_muted(self) -> bool:
        """Flip the mute flag and return the new value."""
        self.muted = not self.muted
        return self.muted

    def set_volume(self, volume: float) -> None:
        """Set global volume for all sounds, clamped to [0.0, 1.0]."""
        self._volume = max(0.0, min(1.0, volume))
        for sound in self._sounds.values():
            sound.set_volume(self._volume)

    def quit(self) -> None:
        """Shut down pygame.mixer on exit."""
        if self._available:
            pygame.mixer.quit()
            self._available = False
