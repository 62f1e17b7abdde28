"""
renderer/field.py — Play field and typing box for Typing Taro.

Draws the stage-colored field, the falling prompt and the input box that
echoes the keys typed so far. Stateless: every call reads a SessionSnapshot.

The prompt wobbles by a few degrees as it falls (angle = sin(y / 10) * 5).
From stage 2 on, the first accepted spelling is shown under the glyph as a
hint; the F/J drill needs none.
"""

import math

import pygame

from core.session import SessionSnapshot
from renderer.shapes import draw_gradient, font
from settings import (
    COLOR, STAGE_BACKGROUNDS,
    FIELD_X, FIELD_Y, FIELD_W, FIELD_H, INPUT_Y, INPUT_H,
    GLYPH_FONT_FAMILY, GLYPH_FONT_SIZE, FONT_SIZE_MD, FONT_SIZE_LG,
)
from stages.catalog import BASE_STAGE_ID
from utils.viewport import to_field_px

FIELD_RECT = pygame.Rect(FIELD_X, FIELD_Y, FIELD_W, FIELD_H)
INPUT_RECT = pygame.Rect(FIELD_X, INPUT_Y, FIELD_W, INPUT_H)


def draw_field(surface: pygame.Surface, snap: SessionSnapshot, shake_px: int = 0) -> pygame.Rect:
    """Draw the play field background and the active prompt.

    Args:
        surface:  Native game surface.
        snap:     Current session snapshot.
        shake_px: Horizontal offset for the miss shake.

    Returns:
        The (possibly shaken) field rect, for the effects layer.
    """
    rect = FIELD_RECT.move(shake_px, 0)
    stage = snap.stage_id or BASE_STAGE_ID
    top, bottom = STAGE_BACKGROUNDS.get(stage, STAGE_BACKGROUNDS[BASE_STAGE_ID])

    field = pygame.Surface(rect.size)
    draw_gradient(field, field.get_rect(), top, bottom)

    prompt = snap.active_prompt
    if prompt is not None:
        local = field.get_rect()
        px, py = to_field_px(local, prompt.x, prompt.y)
        glyph = font(GLYPH_FONT_SIZE, GLYPH_FONT_FAMILY, bold=True).render(
            prompt.glyph, True, COLOR["text_light"],
        )
        angle = math.sin(prompt.y / 10) * 5
        glyph = pygame.transform.rotate(glyph, angle)
        field.blit(glyph, (px - glyph.get_width() // 2, py))

        if stage != BASE_STAGE_ID and snap.hint:
            hint = font(FONT_SIZE_MD, bold=True).render(snap.hint, True, COLOR["hint"])
            field.blit(hint, (px - hint.get_width() // 2, py + glyph.get_height()))

    mask = pygame.Surface(rect.size, pygame.SRCALPHA)
    pygame.draw.rect(mask, (255, 255, 255, 255), mask.get_rect(), border_radius=12)
    rounded = pygame.Surface(rect.size, pygame.SRCALPHA)
    rounded.blit(field, (0, 0))
    rounded.blit(mask, (0, 0), special_flags=pygame.BLEND_RGBA_MIN)
    surface.blit(rounded, rect.topleft)
    return rect


def draw_input_box(surface: pygame.Surface, buffer: str, blink: bool) -> None:
    """Draw the typing box with the current buffer and a blinking caret."""
    pygame.draw.rect(surface, COLOR["input_bg"], INPUT_RECT, border_radius=10)
    pygame.draw.rect(surface, COLOR["highlight"], INPUT_RECT, 2, border_radius=10)

    text = font(FONT_SIZE_LG, bold=True).render(buffer, True, COLOR["text"])
    tx = INPUT_RECT.centerx - text.get_width() // 2
    ty = INPUT_RECT.centery - text.get_height() // 2
    surface.blit(text, (tx, ty))
    if blink:
        cx = tx + text.get_width() + 3
        pygame.draw.line(surface, COLOR["text"], (cx, ty + 4), (cx, ty + text.get_height() - 4), 2)
