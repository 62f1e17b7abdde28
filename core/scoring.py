"""
core/scoring.py — Points awarded for a correct answer.

Catching a prompt early (small y) is worth more, and so is playing at a
higher configured fall speed:

    points = max(MIN_SCORE, ceil(MAX_SCORE * (1 - y / MAX_HEIGHT)
                                 * (1 + speed * SPEED_BONUS)))
"""

import math

from settings import MAX_SCORE, MIN_SCORE, MAX_HEIGHT, SPEED_BONUS


def points(y: float, speed: float) -> int:
    """Return the points for answering a prompt at vertical position y.

    Args:
        y:     Prompt position in field units, expected in [-10, 100].
        speed: Session fall-speed multiplier (> 0).

    Returns:
        Integer points, never below MIN_SCORE.
    """
    raw = MAX_SCORE * (1 - y / MAX_HEIGHT) * (1 + speed * SPEED_BONUS)
    return max(MIN_SCORE, math.ceil(raw))
