"""
utils/color.py — Color helpers for Typing Taro.

Used by renderer/shapes.py to shade raised buttons and by renderer/field.py
to paint the per-stage play-field gradient.
"""

from typing import Tuple

RGBColor = Tuple[int, int, int]


def clamp(value: int, lo: int = 0, hi: int = 255) -> int:
    """Clamp an integer channel value to [lo, hi]."""
    return max(lo, min(hi, value))


def lighter(color: RGBColor, amount: int = 40) -> RGBColor:
    """Return color with every channel raised by amount."""
    r, g, b = color
    return (clamp(r + amount), clamp(g + amount), clamp(b + amount))


def darker(color: RGBColor, amount: int = 40) -> RGBColor:
    """Return color with every channel lowered by amount.

    Used for the shadow face under raised buttons.
    """
    r, g, b = color
    return (clamp(r - amount), clamp(g - amount), clamp(b - amount))


def with_alpha(color: RGBColor, alpha: int) -> Tuple[int, int, int, int]:
    """Append an alpha channel (0–255) for SRCALPHA surfaces."""
    return (color[0], color[1], color[2], clamp(alpha))


def lerp_color(a: RGBColor, b: RGBColor, t: float) -> RGBColor:
    """Linearly interpolate between two colors.

    Args:
        a: Start color.
        b: End color.
        t: Factor, clamped to [0.0, 1.0]. 0 → a, 1 → b.

    Returns:
        Interpolated RGB tuple.
    """
    t = max(0.0, min(1.0, t))
    return (
        clamp(int(a[0] + (b[0] - a[0]) * t)),
        clamp(int(a[1] + (b[1] - a[1]) * t)),
        clamp(int(a[2] + (b[2] - a[2]) * t)),
    )


def gradient(top: RGBColor, bottom: RGBColor, steps: int) -> list[RGBColor]:
    """Return `steps` colors running from top to bottom inclusive.

    One entry per pixel row of a vertical gradient.
    """
    if steps <= 1:
        return [top] * max(0, steps)
    return [lerp_color(top, bottom, i / (steps - 1)) for i in range(steps)]
