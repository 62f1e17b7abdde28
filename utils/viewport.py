"""
utils/viewport.py — Coordinate mapping for Typing Taro.

Two mappings live here:

    Viewport  — letterboxes the native SCREEN_W x SCREEN_H surface into any
                window size without stretching, and maps window pixels back
                to native pixels for mouse hit tests.
    to_field_px — maps play-field coordinates (x in percent, y in field
                units with the floor at 100) to native pixels inside the
                field rectangle.

Usage:
    viewport = Viewport(window_w, window_h)
    viewport.blit(window, game_surface)
    gx, gy = viewport.to_game(*event.pos)
"""

import pygame

from settings import SCREEN_W, SCREEN_H, FIELD_FLOOR


class Viewport:
    """Uniformly scaled, centred placement of the native surface.

    Attributes:
        scale:     Scale factor applied to the native surface.
        dest_rect: pygame.Rect where the scaled surface lands in the window.
    """

    def __init__(self, window_w: int, window_h: int) -> None:
        self.update(window_w, window_h)

    def update(self, window_w: int, window_h: int) -> None:
        """Recompute scale and letterbox offsets after a resize."""
        self.scale = max(1e-6, min(window_w / SCREEN_W, window_h / SCREEN_H))
        scaled_w = int(SCREEN_W * self.scale)
        scaled_h = int(SCREEN_H * self.scale)
        self.dest_rect = pygame.Rect(
            (window_w - scaled_w) // 2, (window_h - scaled_h) // 2, scaled_w, scaled_h,
        )

    def blit(self, window_surface: pygame.Surface, game_surface: pygame.Surface) -> None:
        """Scale game_surface into the window, filling the bars with black."""
        window_surface.fill((0, 0, 0))
        scaled = pygame.transform.smoothscale(game_surface, self.dest_rect.size)
        window_surface.blit(scaled, self.dest_rect.topleft)

    def to_game(self, window_x: int, window_y: int) -> tuple[int, int]:
        """Convert window pixels to native pixels. May fall outside the screen."""
        return (
            int((window_x - self.dest_rect.x) / self.scale),
            int((window_y - self.dest_rect.y) / self.scale),
        )

    def in_bounds(self, window_x: int, window_y: int) -> bool:
        return self.dest_rect.collidepoint(window_x, window_y)


def to_field_px(rect: pygame.Rect, x: float, y: float) -> tuple[int, int]:
    """Map field coordinates to native pixels inside rect.

    Args:
        rect: Play-field rectangle in native pixels.
        x:    Horizontal position in percent of the field width.
        y:    Vertical position in field units; FIELD_FLOOR is the bottom edge.

    Returns:
        (px, py) native pixel position. y < 0 maps above the field.
    """
    px = rect.x + rect.w * x / 100.0
    py = rect.y + rect.h * y / FIELD_FLOOR
    return int(px), int(py)
