"""
renderer/ui.py — Header and phase overlays for Typing Taro.

Draws all chrome around the play field:
    - Header (title, stage, question counter, hearts, score, high score)
    - Stage-clear overlay with a continue button
    - Game-over overlay with a retry button
    - All-clear overlay with sparkles and a play-again button

All functions are stateless — they take a SessionSnapshot (plus animation
inputs) and draw to the provided surface. Overlay functions return their
button rect so core/game.py can hit-test clicks.
"""

import math

import pygame

from core.session import SessionSnapshot
from renderer.field import FIELD_RECT
from renderer.shapes import (
    blit_centered, draw_button, draw_gradient, draw_heart, draw_panel,
    draw_progress_bar, draw_star, font,
)
from settings import (
    COLOR, SCREEN_W, HEADER_H, BUTTON_H, TITLE,
    FONT_SIZE_XL, FONT_SIZE_LG, FONT_SIZE_MD, FONT_SIZE_SM,
)
from utils.color import lerp_color

_STAR_COUNT = 12


# ── Header ────────────────────────────────────────────────────────────────────

def draw_header(surface: pygame.Surface, snap: SessionSnapshot, pulse: float,
                muted: bool) -> None:
    """Draw the title bar and the stage / life / score row.

    Args:
        surface: Native game surface.
        snap:    Current session snapshot.
        pulse:   Score pulse factor in [0, 1]; 1 right after a correct answer.
        muted:   Whether audio is muted (shown top-right).
    """
    draw_gradient(surface, pygame.Rect(0, 0, SCREEN_W, HEADER_H),
                  COLOR["panel_top"], COLOR["panel_bottom"])

    title = font(FONT_SIZE_LG, bold=True).render(TITLE, True, COLOR["text"])
    surface.blit(title, (16, 10))
    sound = font(FONT_SIZE_SM).render("M: sound off" if muted else "M: sound on",
                                      True, COLOR["text_muted"])
    surface.blit(sound, (SCREEN_W - sound.get_width() - 16, 16))

    # Stage + question counter, left
    f_md = font(FONT_SIZE_MD)
    f_sm = font(FONT_SIZE_SM)
    stage = snap.stage_id if snap.stage_id is not None else "-"
    surface.blit(f_md.render(f"Stage {stage}", True, COLOR["text"]), (16, 48))
    surface.blit(f_sm.render(f"Question {snap.question_count}/{snap.questions_per_stage}",
                             True, COLOR["text_muted"]), (16, 72))
    draw_progress_bar(surface, pygame.Rect(16, 92, 120, 6),
                      snap.question_count / max(1, snap.questions_per_stage))

    # Hearts, two rows of five
    per_row = 5
    for i in range(snap.life):
        row, col = divmod(i, per_row)
        draw_heart(surface, 176 + col * 22, 56 + row * 22, 16)

    # Score + high score, right
    score_col = lerp_color(COLOR["text"], COLOR["correct"], pulse)
    score_font = font(int(FONT_SIZE_MD * (1.0 + 0.25 * pulse)), bold=True)
    score = score_font.render(f"Score: {snap.score}", True, score_col)
    surface.blit(score, (SCREEN_W - score.get_width() - 16, 48))
    best = f_sm.render(f"High score: {snap.high_score}", True, COLOR["text_muted"])
    surface.blit(best, (SCREEN_W - best.get_width() - 16, 76))


# ── Overlays ──────────────────────────────────────────────────────────────────

def _overlay_card(surface: pygame.Surface) -> pygame.Rect:
    dim = pygame.Surface(FIELD_RECT.size, pygame.SRCALPHA)
    pygame.draw.rect(dim, (0, 0, 0, 110), dim.get_rect(), border_radius=12)
    surface.blit(dim, FIELD_RECT.topleft)
    card = FIELD_RECT.inflate(-60, -140)
    draw_panel(surface, card, alpha=235)
    return card


def _card_button(surface: pygame.Surface, card: pygame.Rect, label: str,
                 hovered_at: tuple[int, int] | None) -> pygame.Rect:
    btn = pygame.Rect(0, 0, card.w - 80, BUTTON_H)
    btn.midbottom = (card.centerx, card.bottom - 30)
    hovered = hovered_at is not None and btn.collidepoint(hovered_at)
    return draw_button(surface, btn, label, hovered=hovered)


def draw_stage_clear(surface: pygame.Surface, snap: SessionSnapshot,
                     mouse: tuple[int, int] | None) -> pygame.Rect:
    """Draw the stage-clear card and return the continue button rect."""
    card = _overlay_card(surface)
    cx = card.centerx
    blit_centered(surface, font(FONT_SIZE_XL, bold=True).render(
        "Stage clear!", True, COLOR["highlight"]), cx, card.y + 40)
    blit_centered(surface, font(FONT_SIZE_MD).render(
        f"Score {snap.score}", True, COLOR["text"]), cx, card.y + 110)
    if snap.stage_id is not None:
        blit_centered(surface, font(FONT_SIZE_SM).render(
            f"Next: stage {snap.stage_id}", True, COLOR["text_muted"]), cx, card.y + 140)
    blit_centered(surface, font(FONT_SIZE_SM).render(
        "Space also continues", True, COLOR["text_muted"]), cx, card.bottom - 110)
    label = "Get ready..." if snap.transitioning else "Next stage"
    return _card_button(surface, card, label, mouse)


def draw_game_over(surface: pygame.Surface, snap: SessionSnapshot,
                   mouse: tuple[int, int] | None) -> pygame.Rect:
    """Draw the game-over card and return the retry button rect."""
    card = _overlay_card(surface)
    cx = card.centerx
    blit_centered(surface, font(FONT_SIZE_XL, bold=True).render(
        "Game over", True, COLOR["gameover"]), cx, card.y + 40)
    if snap.new_record:
        blit_centered(surface, font(FONT_SIZE_MD, bold=True).render(
            "New high score!", True, COLOR["record"]), cx, card.y + 100)
    blit_centered(surface, font(FONT_SIZE_MD).render(
        f"Score {snap.score}", True, COLOR["text"]), cx, card.y + 135)
    stage = snap.stage_id if snap.stage_id is not None else "-"
    blit_centered(surface, font(FONT_SIZE_SM).render(
        f"Stage {stage} - {snap.question_count}/{snap.questions_per_stage} cleared",
        True, COLOR["text_muted"]), cx, card.y + 165)
    return _card_button(surface, card, "Try again", mouse)


def draw_clear(surface: pygame.Surface, snap: SessionSnapshot, t: float,
               mouse: tuple[int, int] | None) -> pygame.Rect:
    """Draw the all-stages-clear card and return the play-again button rect.

    Args:
        t: Seconds since the clear screen appeared; drives the sparkles.
    """
    card = _overlay_card(surface)
    cx = card.centerx

    for i in range(_STAR_COUNT):
        # golden-angle spread keeps the layout stable between frames
        sx = FIELD_RECT.x + int((i * 137.5) % FIELD_RECT.w)
        sy = FIELD_RECT.y + int((i * 71.3) % FIELD_RECT.h)
        twinkle = 0.5 + 0.5 * math.sin(t * 3.0 + i)
        draw_star(surface, sx, sy, int(6 + 6 * twinkle), COLOR["record"])

    blit_centered(surface, font(FONT_SIZE_XL, bold=True).render(
        "All clear!", True, COLOR["highlight"]), cx, card.y + 40)
    blit_centered(surface, font(FONT_SIZE_MD).render(
        "Congratulations!", True, COLOR["text"]), cx, card.y + 100)
    blit_centered(surface, font(FONT_SIZE_LG, bold=True).render(
        f"Final score: {snap.score}", True, COLOR["text"]), cx, card.y + 130)
    if snap.new_record:
        blit_centered(surface, font(FONT_SIZE_MD, bold=True).render(
            "New high score!", True, COLOR["record"]), cx, card.y + 170)
    return _card_button(surface, card, "Play again", mouse)
