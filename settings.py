"""
settings.py — Global constants for Typing Taro.

All magic numbers live here. No other module should hardcode colors,
dimensions, or timing values. Import what you need with:
    from settings import COLOR, SCREEN_W, ...

User-editable values (selected stages, fall speed, high score, mute) are
not constants — they live in config.json, see core/config.py.
"""

# ── Screen ────────────────────────────────────────────────────────────────────
SCREEN_W = 480
SCREEN_H = 720
FPS = 60
TITLE = "Typing Taro"

# ── Colors ────────────────────────────────────────────────────────────────────
COLOR = {
    "background":   (243, 244, 246),   # #F3F4F6
    "panel_top":    (219, 234, 254),   # #DBEAFE — header gradient start
    "panel_bottom": (191, 219, 254),   # #BFDBFE — header gradient end
    "tile":         (255, 255, 255),
    "tile_border":  (209, 213, 219),   # #D1D5DB
    "highlight":    ( 59, 130, 246),   # #3B82F6 — buttons, selection
    "selected_bg":  (239, 246, 255),   # #EFF6FF
    "text":         ( 31,  41,  55),   # #1F2937
    "text_muted":   (107, 114, 128),   # #6B7280
    "text_light":   (255, 255, 255),
    "heart":        (239,  68,  68),   # #EF4444
    "correct":      ( 22, 163,  74),   # #16A34A — score pulse
    "record":       (234, 179,   8),   # #EAB308 — new high score banner
    "gameover":     (220,  38,  38),   # #DC2626
    "hint":         (253, 224,  71),   # #FDE047 — romaji hint under a glyph
    "input_bg":     (255, 255, 255),
}

# Play-field gradient per stage (top, bottom)
STAGE_BACKGROUNDS = {
    1:  ((71,  85, 105), (30,  41,  59)),    # slate
    2:  ((5,  150, 105), (6,   95,  70)),    # emerald
    3:  ((124, 58, 237), (91,  33, 182)),    # violet
    4:  ((217, 119,  6), (146, 64,  14)),    # amber
    5:  ((225, 29,  72), (159, 18,  57)),    # rose
    6:  ((8,  145, 178), (21,  94, 117)),    # cyan
    7:  ((192, 38, 211), (134, 25, 143)),    # fuchsia
    8:  ((101, 163, 13), (63,  98,  18)),    # lime
    9:  ((234, 88,  12), (154, 52,  18)),    # orange
    10: ((2,  132, 199), (7,   89, 133)),    # sky
}

PARTICLE_COLORS = [(96, 165, 250), (52, 211, 153), (251, 191, 36)]

# ── Layout ────────────────────────────────────────────────────────────────────
HEADER_H   = 110   # px — title, stage, hearts, score
FIELD_X    = 24
FIELD_Y    = HEADER_H + 10
FIELD_W    = SCREEN_W - FIELD_X * 2
FIELD_H    = 460
INPUT_H    = 52
INPUT_Y    = FIELD_Y + FIELD_H + 24
BUTTON_H   = 48
BUTTON_DEPTH = 6   # px offset for the raised button face

# ── Fonts ─────────────────────────────────────────────────────────────────────
# pygame.font.SysFont accepts a comma-separated fallback list. The glyph font
# must cover kana; the first installed family wins.
FONT_FAMILY       = "arial,helvetica,dejavusans"
GLYPH_FONT_FAMILY = ("notosanscjkjp,notosansjp,yugothic,msgothic,"
                     "hiraginosans,takaogothic,ipagothic,arialunicodems")
FONT_SIZE_XL = 40
FONT_SIZE_LG = 24
FONT_SIZE_MD = 18
FONT_SIZE_SM = 14
GLYPH_FONT_SIZE = 56

# ── Timing ────────────────────────────────────────────────────────────────────
FALL_TICK_MS        = 50    # period of the fall tick
STAGE_TRANSITION_MS = 500   # delay between "continue" and the next stage
MAX_FRAME_MS        = 50    # dt clamp — prevents spiral on tab switch

# ── Session rules ─────────────────────────────────────────────────────────────
MAX_LIFE            = 10
QUESTIONS_PER_STAGE = 20
INTERLEAVE_PERIOD   = 3     # every Nth question is a base-practice glyph

# ── Falling prompts ───────────────────────────────────────────────────────────
# Field coordinates are percentages: x in [0, 100], y grows downward and the
# floor is at FIELD_FLOOR.
BASE_FALL_RATE = 0.6 + 1 * 0.09   # field units per tick before the multiplier
SPAWN_Y        = -10.0
SPAWN_X_MIN    = 10.0
SPAWN_X_MAX    = 90.0
FIELD_FLOOR    = 100.0

# ── Scoring ───────────────────────────────────────────────────────────────────
MAX_SCORE  = 8
MIN_SCORE  = 1
MAX_HEIGHT = 100.0
SPEED_BONUS = 0.2   # per unit of speed multiplier

# ── Speed (settings panel) ────────────────────────────────────────────────────
SPEED_MIN     = 1
SPEED_MAX     = 5
SPEED_DEFAULT = 2

# ── Effects ───────────────────────────────────────────────────────────────────
PARTICLE_COUNT      = 10
PARTICLE_LIFETIME_S = 1.0
POPUP_LIFETIME_S    = 1.0
SHAKE_DURATION_S    = 0.5
SCORE_PULSE_S       = 0.3
