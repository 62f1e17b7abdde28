"""
renderer/shapes.py — Vector drawing primitives for Typing Taro.

Everything on screen is drawn with pygame.draw — no image assets:

    draw_button       raised button: a darker base offset down by
                      BUTTON_DEPTH under the face, pressed flat on hover
    draw_panel        white rounded card with a border
    draw_heart        life indicator built from two circles and a triangle
    draw_gradient     vertical gradient fill for the play field
    draw_progress_bar stage progress (question n of 20)
    draw_star         four-point sparkle for the clear screen

Coordinates are native SCREEN_W x SCREEN_H pixels.
"""

import pygame

from settings import COLOR, BUTTON_DEPTH, FONT_FAMILY
from utils.color import darker, gradient, lighter, RGBColor

_fonts: dict[tuple[str, int, bool], pygame.font.Font] = {}


def font(size: int, family: str = FONT_FAMILY, bold: bool = False) -> pygame.font.Font:
    """Return a cached SysFont. Falls back to pygame's default font."""
    key = (family, size, bold)
    if key not in _fonts:
        _fonts[key] = pygame.font.SysFont(family, size, bold=bold)
    return _fonts[key]


def blit_centered(surface: pygame.Surface, text: pygame.Surface, cx: int, y: int) -> None:
    surface.blit(text, (cx - text.get_width() // 2, y))


def draw_button(
    surface: pygame.Surface,
    rect: pygame.Rect,
    label: str,
    color: RGBColor = COLOR["highlight"],
    hovered: bool = False,
    size: int = 20,
) -> pygame.Rect:
    """Draw a raised, labelled button and return its rect for hit tests.

    Args:
        surface: Native game surface.
        rect:    Button face position when not pressed.
        label:   Text centred on the face.
        color:   Face color; the base is derived via darker().
        hovered: If True the face sinks onto its base.
        size:    Label font size.
    """
    depth = 0 if hovered else BUTTON_DEPTH
    base = rect.move(0, BUTTON_DEPTH)
    pygame.draw.rect(surface, darker(color, 50), base, border_radius=10)
    face = rect.move(0, BUTTON_DEPTH - depth)
    pygame.draw.rect(surface, lighter(color, 15) if hovered else color, face, border_radius=10)

    text = font(size, bold=True).render(label, True, COLOR["text_light"])
    surface.blit(text, (face.centerx - text.get_width() // 2,
                        face.centery - text.get_height() // 2))
    return rect.union(base)


def draw_panel(surface: pygame.Surface, rect: pygame.Rect,
               fill: RGBColor = COLOR["tile"], alpha: int = 255) -> None:
    """Draw a rounded card, optionally translucent."""
    card = pygame.Surface(rect.size, pygame.SRCALPHA)
    pygame.draw.rect(card, (*fill, alpha), card.get_rect(), border_radius=12)
    pygame.draw.rect(card, (*COLOR["tile_border"], alpha), card.get_rect(), 2, border_radius=12)
    surface.blit(card, rect.topleft)


def draw_heart(surface: pygame.Surface, cx: int, cy: int, size: int,
               color: RGBColor = COLOR["heart"]) -> None:
    """Draw a filled heart centred at (cx, cy), `size` pixels wide."""
    r = size // 4
    pygame.draw.circle(surface, color, (cx - r, cy - r // 2), r)
    pygame.draw.circle(surface, color, (cx + r, cy - r // 2), r)
    pygame.draw.polygon(surface, color, [
        (cx - 2 * r, cy - r // 4),
        (cx + 2 * r, cy - r // 4),
        (cx, cy + 2 * r),
    ])


def draw_gradient(surface: pygame.Surface, rect: pygame.Rect,
                  top: RGBColor, bottom: RGBColor) -> None:
    """Fill rect with a vertical gradient, one line per pixel row."""
    for i, col in enumerate(gradient(top, bottom, rect.h)):
        pygame.draw.line(surface, col, (rect.x, rect.y + i), (rect.right - 1, rect.y + i))


def draw_progress_bar(surface: pygame.Surface, rect: pygame.Rect, fill: float,
                      color: RGBColor = COLOR["highlight"]) -> None:
    """Draw a rounded bar filled left-to-right to `fill` in [0, 1]."""
    fill = max(0.0, min(1.0, fill))
    pygame.draw.rect(surface, COLOR["tile_border"], rect, border_radius=rect.h // 2)
    filled = int(rect.w * fill)
    if filled > 0:
        pygame.draw.rect(surface, color, (rect.x, rect.y, filled, rect.h),
                         border_radius=rect.h // 2)


def draw_star(surface: pygame.Surface, cx: int, cy: int, size: int,
              color: RGBColor) -> None:
    """Draw a four-point sparkle."""
    s, k = size, max(1, size // 4)
    pygame.draw.polygon(surface, color, [
        (cx, cy - s), (cx + k, cy - k), (cx + s, cy), (cx + k, cy + k),
        (cx, cy + s), (cx - k, cy + k), (cx - s, cy), (cx - k, cy - k),
    ])
