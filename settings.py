"""
settings.py — Global constants for Flower Button.

All magic numbers live here. No other module should hardcode colors,
dimensions, or timing values. Import what you need with:
    from settings import COLOR, SCREEN_W, ...
"""

# ── Screen ────────────────────────────────────────────────────────────────────
SCREEN_W = 720
SCREEN_H = 480
FPS = 60
TITLE = "Flower Button"
MODULE_NAME = "Flower Button"

# ── Colors ────────────────────────────────────────────────────────────────────
COLOR = {
    "background":    ( 38,  41,  46),   # #26292E
    "bomb_casing":   ( 70,  74,  82),   # #464A52
    "module_face":   (196, 190, 176),   # #C4BEB0
    "module_border": ( 92,  88,  80),   # #5C5850
    "button":        (214,  86, 128),   # #D65680, flower pink
    "button_core":   (247, 205,  72),   # #F7CD48, flower centre
    "lcd_back":      ( 22,  28,  22),   # #161C16
    "lcd_text":      (120, 240, 130),   # #78F082
    "timer_text":    (232,  48,  40),   # #E83028
    "light_off":     ( 60,  60,  60),
    "light_pass":    ( 52, 200,  83),   # green
    "light_strike":  (234,  40,  40),   # red
    "tint":          (120,  40, 160),   # distortion tint
    "text":          (235, 235, 235),
    "text_dim":      (150, 150, 150),
}

# ── Cuboid ────────────────────────────────────────────────────────────────────
CUBOID_DEPTH = 10          # px offset for top/right faces (isometric illusion)
BUTTON_PRESSED_DEPTH = 3   # the button sinks to this depth while held

# ── Layout ────────────────────────────────────────────────────────────────────
BOMB_TIMER_H  = 96     # px, host bomb timer strip at the top
MODULE_W      = 200
MODULE_H      = 220
MODULE_GAP    = 24
MANUAL_H      = 72     # px, rule manual strip at the bottom

# ── Fonts ─────────────────────────────────────────────────────────────────────
FONT_FAMILY  = "couriernew"
FONT_SIZE_XL = 54
FONT_SIZE_LG = 30
FONT_SIZE_MD = 16
FONT_SIZE_SM = 12

# ── Host bomb ─────────────────────────────────────────────────────────────────
BOMB_START_S       = 300.0   # seconds on the bomb timer
BOMB_MAX_STRIKES   = 3       # None = unlimited
BOMB_ARMING_S      = 1.0     # delay before the modules light up
DEFAULT_MODULES    = 2
MAX_MODULES        = 3       # side by side in the window

# ── Module display texts ──────────────────────────────────────────────────────
COUNTDOWN_TEXT_AWAITING_LIGHTS = "  "
COUNTDOWN_TEXT_AWAITING_HOLD   = "__"
COUNTDOWN_TEXT_SOLVED          = "ΞΞ"
COUNTDOWN_TEXT_ERROR           = "Er"
TIMED_OUT_READOUT              = "00:00"

# ── Music box clock ───────────────────────────────────────────────────────────
MUSIC_BOX_TOTAL_NOTES = 160
MUSIC_BOX_NOTE_SPEED  = 2.45398   # notes per real-time second

# ── Time manipulation ─────────────────────────────────────────────────────────
SLOWED_TIME_SCALE = 0.001
NORMAL_TIME_SCALE = 1.0

# ── Penalty ───────────────────────────────────────────────────────────────────
PENALTY_TIME_SCALE            = 0.75    # fraction of real time drained per frame
HUMAN_RELEASE_TIME_THRESHOLD  = 50      # release times above this are not human
MIN_PENALTY_MAX_AT            = 30      # baseline cap
MAX_PENALTY_S                 = 60.0
AVERAGE_BASELINE_REFERENCE    = 25.0    # mean of a uniform 0..50 spread

# ── Display obfuscation ───────────────────────────────────────────────────────
NON_PREFERRED_MIN = 1
NON_PREFERRED_MAX = 2

# ── Routine timings (seconds) ─────────────────────────────────────────────────
WIND_UP_DISTORTION_APPEAR_S = 0.5
WIND_UP_COUNT_S             = 1.5
WIND_UP_COUNT_STEPS         = 30
WIND_UP_POST_WAIT_S         = 0.75

SOLUTION_CHECK_TICKS = (
    0.00, 0.25, 0.35, 0.45,
    1.50, 1.60, 1.75, 1.85, 2.15,
    2.95, 3.80, 4.05, 4.30, 4.50,
    4.70, 4.75, 4.80, 4.85, 4.90, 4.95, 5.00, 5.05, 5.10, 5.15,
)
SOLUTION_CHECK_BOOSTS = (
    # (at, amount, duration)
    (0.00, 5.0,  1.0),
    (1.50, 9.0,  2.0),
    (2.95, 5.0,  1.0),
    (5.15, 10.0, 1.5),
)
SOLUTION_CHECK_LIGHT_OFF_AT   = 2.95
SOLUTION_CHECK_SUSPENSE_END   = 5.15
SOLUTION_CHECK_RESTORE_AT     = 6.40
SOLUTION_CHECK_REVEAL_STEPS   = 60
SOLUTION_CHECK_OOPS_S         = 0.55

DISTORTION_DISAPPEAR_S = 0.25
DISTORTION_MAX_PX      = 6      # wobble amplitude at full strength
DISTORTION_TINT_ALPHA  = 70     # tint overlay opacity at full strength
DISTORTION_BAND_H      = 8      # px height of each wobbling slice

TIMEOUT_BLINK_S     = 0.5
TIMEOUT_BLINKS      = 3

STRIKE_INTERVAL_S   = 0.5
STRIKE_FLASH_S      = 1.0    # how long the host shows a strike
ZEN_MODE_STRIKES    = 3

# ── Persisted user settings ───────────────────────────────────────────────────
SETTINGS_FILE    = "FlowerButtonSettings.json"
SETTINGS_VERSION = 1
