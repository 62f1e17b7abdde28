"""
renderer/effects.py — Transient cosmetic effects for Typing Taro.

Effects react to controller events but are never part of SessionState:
they age out on their own in update(dt).

    particles    — burst of colored dots where a prompt was answered
    score popups — floating "+N" that drifts up and fades
    shake        — horizontal jitter of the play field after a miss
    score pulse  — the header score briefly grows and turns green

Field positions are in field coordinates (see utils/viewport.py) so the
effects stay aligned with the prompt that triggered them.
"""

from __future__ import annotations
import math
import random
from dataclasses import dataclass

import pygame

from settings import (
    COLOR, PARTICLE_COLORS, PARTICLE_COUNT, PARTICLE_LIFETIME_S,
    POPUP_LIFETIME_S, SHAKE_DURATION_S, SCORE_PULSE_S, FONT_SIZE_LG,
)
from renderer.shapes import font
from utils.color import RGBColor, with_alpha
from utils.viewport import to_field_px


@dataclass
class Particle:
    x:     float
    y:     float
    vx:    float
    vy:    float
    color: RGBColor
    age:   float = 0.0


@dataclass
class Popup:
    points: int
    x:      float
    y:      float
    age:    float = 0.0


class Effects:
    """Owns every live cosmetic effect.

    Attributes:
        particles:    Live Particle list.
        popups:       Live Popup list.
        _shake_left:  Seconds of shake remaining.
        _pulse_left:  Seconds of score pulse remaining.
    """

    def __init__(self, rng: random.Random | None = None) -> None:
        self.particles: list[Particle] = []
        self.popups:    list[Popup] = []
        self._shake_left = 0.0
        self._pulse_left = 0.0
        self._t = 0.0
        self._rng = rng or random.Random()

    def clear(self) -> None:
        """Drop every live effect (new session)."""
        self.particles.clear()
        self.popups.clear()
        self._shake_left = 0.0
        self._pulse_left = 0.0

    # ── Triggers ──────────────────────────────────────────────────────────────

    def reward(self, x: float, y: float, pts: int) -> None:
        """Particles, a popup and a score pulse at a correct answer."""
        for _ in range(PARTICLE_COUNT):
            angle = self._rng.uniform(0.0, math.tau)
            speed = self._rng.uniform(15.0, 40.0)
            self.particles.append(Particle(
                x, y, math.cos(angle) * speed, math.sin(angle) * speed,
                self._rng.choice(PARTICLE_COLORS),
            ))
        self.popups.append(Popup(pts, x, y))
        self._pulse_left = SCORE_PULSE_S

    def shake(self) -> None:
        self._shake_left = SHAKE_DURATION_S

    # ── Per-frame ─────────────────────────────────────────────────────────────

    def update(self, dt: float) -> None:
        """Age every effect by dt seconds and drop the expired ones."""
        self._t += dt
        for p in self.particles:
            p.age += dt
            p.x += p.vx * dt
            p.y += p.vy * dt
        self.particles = [p for p in self.particles if p.age < PARTICLE_LIFETIME_S]
        for pop in self.popups:
            pop.age += dt
        self.popups = [p for p in self.popups if p.age < POPUP_LIFETIME_S]
        self._shake_left = max(0.0, self._shake_left - dt)
        self._pulse_left = max(0.0, self._pulse_left - dt)

    def shake_offset(self) -> int:
        """Horizontal field offset in pixels for the current frame."""
        if self._shake_left <= 0.0:
            return 0
        strength = self._shake_left / SHAKE_DURATION_S
        return int(math.sin(self._t * 60.0) * 8 * strength)

    def score_pulse(self) -> float:
        """1.0 at the start of a pulse, fading to 0.0."""
        return self._pulse_left / SCORE_PULSE_S if SCORE_PULSE_S else 0.0

    def draw(self, surface: pygame.Surface, field: pygame.Rect) -> None:
        """Draw particles and popups inside the play field."""
        layer = pygame.Surface(surface.get_size(), pygame.SRCALPHA)
        for p in self.particles:
            alpha = int(255 * (1.0 - p.age / PARTICLE_LIFETIME_S))
            px, py = to_field_px(field, p.x, p.y)
            pygame.draw.circle(layer, with_alpha(p.color, alpha), (px, py), 4)

        f = font(FONT_SIZE_LG, bold=True)
        for pop in self.popups:
            t = pop.age / POPUP_LIFETIME_S
            px, py = to_field_px(field, pop.x, pop.y)
            text = f.render(f"+{pop.points}", True, COLOR["hint"])
            text.set_alpha(int(255 * (1.0 - t)))
            layer.blit(text, (px - text.get_width() // 2, py - int(40 * t)))

        surface.blit(layer, (0, 0))
