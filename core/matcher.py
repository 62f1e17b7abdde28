"""
core/matcher.py — Keystroke buffer matching for Typing Taro.

A glyph may be typed several ways (し is SI or SHI). Rather than commit to
one spelling up front, the buffer only has to stay a live prefix of *some*
accepted spelling; the ambiguity resolves itself as more keys arrive.

Usage:
    evaluate("S",  ("SI", "SHI"))   # MatchResult.PENDING
    evaluate("SH", ("SI", "SHI"))   # MatchResult.PENDING
    evaluate("SI", ("SI", "SHI"))   # MatchResult.SUCCESS
    evaluate("SA", ("SI", "SHI"))   # MatchResult.FAILURE
"""

from __future__ import annotations
from enum import Enum, auto
from typing import Iterable


class MatchResult(Enum):
    """Outcome of comparing the typed buffer with a glyph's spellings."""
    PENDING = auto()
    SUCCESS = auto()
    FAILURE = auto()


def evaluate(buffer: str, spellings: Iterable[str]) -> MatchResult:
    """Classify the typed buffer against a glyph's accepted spellings.

    The buffer is uppercased before comparison. An exact match wins over a
    prefix match, so a buffer that is both a full spelling and the prefix of
    a longer one is a SUCCESS.

    Args:
        buffer:    Keys typed so far for the active prompt.
        spellings: Accepted uppercase spellings for the prompt's glyph.

    Returns:
        SUCCESS on an exact match, PENDING on an empty buffer or a strict
        prefix of at least one spelling, FAILURE otherwise.
    """
    typed = buffer.upper()
    if not typed:
        return MatchResult.PENDING

    spellings = tuple(spellings)
    if typed in spellings:
        return MatchResult.SUCCESS
    if any(s.startswith(typed) for s in spellings):
        return MatchResult.PENDING
    return MatchResult.FAILURE
