"""
settings.py — Global constants for Click Speed Test.

All magic numbers live here. No other module should hardcode colors,
dimensions, timing values or the storage key. Import what you need with:
    from settings import COLOR, TICK_MS, ...
"""

from pathlib import Path

# ── Screen ────────────────────────────────────────────────────────────────────
SCREEN_W = 360
SCREEN_H = 560
FPS = 60
TITLE = "Click Speed Test"

# ── Timing ────────────────────────────────────────────────────────────────────
TICK_MS            = 100    # countdown tick; gives tenths of a second
DEFAULT_DURATION_S = 5      # fallback for missing or invalid durations
DURATION_CHOICES   = (5, 10, 15, 30, 60)
PRESS_FEEDBACK_S   = 0.08   # click button stays drawn "pressed" this long

# ── Persistence ───────────────────────────────────────────────────────────────
STORAGE_KEY    = "clickSpeedHighScore"
HIGHSCORE_FILE = Path.home() / ".click_speed_test.json"

# ── Messages ──────────────────────────────────────────────────────────────────
MSG_WELCOME  = "Press Start to begin. Use Space / Enter as a shortcut while playing."
MSG_RUNNING  = "Game running - click as fast as you can!"
MSG_RESTART  = "Press Start to play again."
MSG_TIMES_UP = "Time's up! You clicked {clicks} times."
MSG_NEW_HIGH = " New high score!"
MSG_RESULT   = "Final score: {clicks}"

# ── Colors ────────────────────────────────────────────────────────────────────
COLOR = {
    "background":  (240, 240, 240),   # #F0F0F0
    "panel":       (255, 255, 255),
    "panel_border": (204, 204, 204),  # #CCCCCC
    "primary":     ( 74, 144, 217),   # #4A90D9, click button
    "accent":      ( 42,  93, 176),   # #2A5DB0, focused control
    "disabled":    (189, 189, 189),
    "chrome":      (117, 117, 117),   # #757575
    "text":        ( 33,  33,  33),   # #212121
    "text_light":  (255, 255, 255),
    "good":        ( 52, 168,  83),   # new high score
    "timer":       (229,  57,  53),   # #E53935
}

# ── Widgets ───────────────────────────────────────────────────────────────────
CUBOID_DEPTH = 8    # px offset for top/right faces of raised buttons

# ── Layout (relative to 360x560) ──────────────────────────────────────────────
HEADER_H      = 56
STAT_PANEL_H  = 64
STAT_GAP      = 10
MARGIN        = 20
CLICK_BTN_H   = 170
CONTROL_BTN_H = 44
CHIP_W        = 96

# ── Fonts ─────────────────────────────────────────────────────────────────────
FONT_FAMILY  = "couriernew"
FONT_SIZE_XL = 28
FONT_SIZE_LG = 18
FONT_SIZE_MD = 14
FONT_SIZE_SM = 11
