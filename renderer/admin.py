"""
renderer/admin.py — Settings panel screen for Typing Taro.

Layout (top to bottom):
    Back button + "Settings" title
    Stage groups: "All" / "None" buttons, then a 2-column grid of toggles
    Fall speed: five buttons, 1–5
    Summary of the current selection

draw_admin() returns every clickable rect keyed by action so core/game.py
can route a click without knowing the layout:

    ("back", None)  ("all", None)  ("none", None)
    ("group", group_id)            ("speed", value)
"""

import pygame

from core.admin import AdminPanel
from renderer.shapes import draw_button, draw_panel, font
from settings import (
    COLOR, SCREEN_W, SCREEN_H, SPEED_MIN, SPEED_MAX,
    FONT_SIZE_LG, FONT_SIZE_MD, FONT_SIZE_SM,
)
from stages.catalog import STAGE_GROUPS

Action = tuple[str, object]

_MARGIN = 24
_TOGGLE_H = 40
_TOGGLE_GAP = 10


def _wrap(text: str, f: pygame.font.Font, width: int) -> list[str]:
    """Split text on spaces into lines no wider than width pixels."""
    lines: list[str] = []
    line = ""
    for word in text.split(" "):
        candidate = f"{line} {word}" if line else word
        if line and f.size(candidate)[0] > width:
            lines.append(line)
            line = word
        else:
            line = candidate
    if line:
        lines.append(line)
    return lines


def _toggle(surface: pygame.Surface, rect: pygame.Rect, label: str, selected: bool,
            hovered: bool) -> None:
    fill = COLOR["selected_bg"] if selected else COLOR["tile"]
    border = COLOR["highlight"] if selected or hovered else COLOR["tile_border"]
    pygame.draw.rect(surface, fill, rect, border_radius=8)
    pygame.draw.rect(surface, border, rect, 2, border_radius=8)
    col = COLOR["highlight"] if selected else COLOR["text"]
    text = font(FONT_SIZE_MD, bold=selected).render(label, True, col)
    surface.blit(text, (rect.centerx - text.get_width() // 2,
                        rect.centery - text.get_height() // 2))
    if selected:
        # check mark in the left padding
        x, y = rect.x + 12, rect.centery
        pygame.draw.lines(surface, COLOR["highlight"], False,
                          [(x, y), (x + 5, y + 5), (x + 14, y - 6)], 3)


def draw_admin(surface: pygame.Surface, panel: AdminPanel,
               mouse: tuple[int, int] | None) -> list[tuple[pygame.Rect, Action]]:
    """Draw the settings panel and return (rect, action) hit targets."""
    def hot(r: pygame.Rect) -> bool:
        return mouse is not None and r.collidepoint(mouse)

    targets: list[tuple[pygame.Rect, Action]] = []
    surface.fill(COLOR["background"])
    draw_panel(surface, pygame.Rect(_MARGIN // 2, _MARGIN // 2,
                                    SCREEN_W - _MARGIN, SCREEN_H - _MARGIN))

    back = pygame.Rect(_MARGIN, _MARGIN, 90, 36)
    targets.append((draw_button(surface, back, "Back", COLOR["text_muted"], hot(back), 16),
                    ("back", None)))
    title = font(FONT_SIZE_LG, bold=True).render("Settings", True, COLOR["text"])
    surface.blit(title, (SCREEN_W - title.get_width() - _MARGIN, _MARGIN + 4))

    # ── Stage groups ──────────────────────────────────────────────────────────
    y = 90
    surface.blit(font(FONT_SIZE_MD, bold=True).render("Stages", True, COLOR["text"]), (_MARGIN, y))
    for i, (key, label) in enumerate((("all", "All"), ("none", "None"))):
        r = pygame.Rect(SCREEN_W - _MARGIN - 170 + i * 90, y - 4, 80, 30)
        targets.append((draw_button(surface, r, label, COLOR["highlight"], hot(r), 14), (key, None)))

    y += 44
    col_w = (SCREEN_W - 2 * _MARGIN - _TOGGLE_GAP) // 2
    for i, (gid, label, _) in enumerate(STAGE_GROUPS):
        row, col = divmod(i, 2)
        r = pygame.Rect(_MARGIN + col * (col_w + _TOGGLE_GAP),
                        y + row * (_TOGGLE_H + _TOGGLE_GAP), col_w, _TOGGLE_H)
        _toggle(surface, r, label, panel.is_selected(gid), hot(r))
        targets.append((r, ("group", gid)))

    # ── Speed ─────────────────────────────────────────────────────────────────
    rows = (len(STAGE_GROUPS) + 1) // 2
    y += rows * (_TOGGLE_H + _TOGGLE_GAP) + 20
    surface.blit(font(FONT_SIZE_MD, bold=True).render("Fall speed", True, COLOR["text"]),
                 (_MARGIN, y))
    y += 32
    count = SPEED_MAX - SPEED_MIN + 1
    w = (SCREEN_W - 2 * _MARGIN - (count - 1) * _TOGGLE_GAP) // count
    for i, value in enumerate(range(SPEED_MIN, SPEED_MAX + 1)):
        r = pygame.Rect(_MARGIN + i * (w + _TOGGLE_GAP), y, w, _TOGGLE_H)
        _toggle(surface, r, str(value), panel.speed == value, hot(r))
        targets.append((r, ("speed", value)))

    # ── Summary ───────────────────────────────────────────────────────────────
    y += _TOGGLE_H + 30
    f_sm = font(FONT_SIZE_SM)
    lines = _wrap(f"Selected: {panel.summary()}", f_sm, SCREEN_W - 2 * _MARGIN)
    lines += [f"Fall speed: {panel.speed}", "Esc returns to the title screen"]
    for i, line in enumerate(lines):
        surface.blit(f_sm.render(line, True, COLOR["text_muted"]), (_MARGIN, y + i * 20))
    return targets
