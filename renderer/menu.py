"""
renderer/menu.py — Title screen for Typing Taro.

Pure vector graphics plus text. Kana from the catalog drift slowly up the
play field behind a start card:

    - Floating glyphs with sine sway (parallax, low alpha)
    - Pulsing trophy above the start button
    - Start button (Space also starts)
    - "V opens settings" hint
    - Configuration error line when the selected stages cannot be played

The menu stores animation state in module-level variables so it persists
across render calls without needing an object. core/game.py calls
draw_menu() every frame.
"""

import math
import random

import pygame

from renderer.field import FIELD_RECT
from renderer.shapes import blit_centered, draw_button, draw_gradient, draw_panel, font
from settings import (
    COLOR, STAGE_BACKGROUNDS, BUTTON_H,
    GLYPH_FONT_FAMILY, FONT_SIZE_LG, FONT_SIZE_MD, FONT_SIZE_SM,
)
from stages.catalog import STAGE_SETS

# ── Animation state (module-level, initialised once) ─────────────────────────
_time:        float = 0.0
_initialized: bool  = False

# Floating glyphs, each (glyph, x, y start, size, speed, phase_offset)
_floaters: list[tuple[str, float, float, int, float, float]] = []
_FLOATER_COUNT = 14


def _init_floaters() -> None:
    """Pick a fixed set of drifting glyphs. Seeded so the layout is stable."""
    global _floaters
    rng = random.Random(42)
    glyphs = [g for stage in sorted(STAGE_SETS) for g in STAGE_SETS[stage]]
    _floaters = [
        (
            rng.choice(glyphs),
            rng.uniform(0, FIELD_RECT.w - 30),
            rng.uniform(0, FIELD_RECT.h),
            rng.randint(22, 44),
            rng.uniform(8.0, 22.0),
            rng.uniform(0.0, math.tau),
        )
        for _ in range(_FLOATER_COUNT)
    ]


def _draw_background(surface: pygame.Surface) -> None:
    top, bottom = STAGE_BACKGROUNDS[1]
    field = pygame.Surface(FIELD_RECT.size, pygame.SRCALPHA)
    draw_gradient(field, field.get_rect(), top, bottom)

    for glyph, ox, oy, size, speed, phase in _floaters:
        y = (oy - _time * speed) % (FIELD_RECT.h + 60) - 30
        x = ox + math.sin(_time * 0.4 + phase) * 12
        text = font(size, GLYPH_FONT_FAMILY).render(glyph, True, COLOR["text_light"])
        text.set_alpha(40 + int(25 * math.sin(_time * 0.6 + phase)))
        field.blit(text, (x, y))

    surface.blit(field, FIELD_RECT.topleft)


def _draw_trophy(surface: pygame.Surface, cx: int, y: int) -> None:
    """Gold cup: bowl, handles, stem and base."""
    scale = 1.0 + 0.06 * math.sin(_time * 2.2)
    w = int(56 * scale)
    gold = COLOR["record"]
    bowl = pygame.Rect(0, 0, w, int(w * 0.8))
    bowl.midtop = (cx, y)
    pygame.draw.ellipse(surface, gold, bowl)
    pygame.draw.rect(surface, gold, (bowl.x, bowl.y, bowl.w, bowl.h // 2))
    pygame.draw.circle(surface, gold, (bowl.left, bowl.y + bowl.h // 3), w // 6, 4)
    pygame.draw.circle(surface, gold, (bowl.right, bowl.y + bowl.h // 3), w // 6, 4)
    pygame.draw.rect(surface, gold, (cx - 4, bowl.bottom, 8, w // 4))
    pygame.draw.rect(surface, gold, (cx - w // 3, bowl.bottom + w // 4, 2 * w // 3, 8),
                     border_radius=3)


def draw_menu(surface: pygame.Surface, dt: float, mouse: tuple[int, int] | None,
              error: str | None = None) -> pygame.Rect:
    """Draw the title screen and return the start button rect.

    Args:
        surface: Native game surface.
        dt:      Seconds since the last frame, for the animations.
        mouse:   Mouse position in native coordinates, for button hover.
        error:   Message to show when the last start attempt was rejected.
    """
    global _time, _initialized
    if not _initialized:
        _init_floaters()
        _initialized = True
    _time += dt

    _draw_background(surface)

    card = FIELD_RECT.inflate(-80, -160)
    draw_panel(surface, card, alpha=230)
    cx = card.centerx
    _draw_trophy(surface, cx, card.y + 30)

    blit_centered(surface, font(FONT_SIZE_LG, bold=True).render(
        "Type the romaji before it lands!", True, COLOR["text"]), cx, card.y + 120)

    btn = pygame.Rect(0, 0, card.w - 100, BUTTON_H)
    btn.center = (cx, card.y + 200)
    rect = draw_button(surface, btn, "Start!", hovered=mouse is not None and btn.collidepoint(mouse))

    f_sm = font(FONT_SIZE_SM)
    blit_centered(surface, f_sm.render("Space also starts", True, COLOR["text_muted"]),
                  cx, card.y + 250)
    blit_centered(surface, f_sm.render("V opens settings", True, COLOR["text_muted"]),
                  cx, card.y + 270)
    if error:
        blit_centered(surface, font(FONT_SIZE_MD, bold=True).render(
            error, True, COLOR["gameover"]), cx, card.bottom - 40)
    return rect
