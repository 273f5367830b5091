"""Layout, color, and rendering constants."""
from __future__ import annotations

SCREEN_W = 1024
SCREEN_H = 768
FPS = 60

# SpriteKit-style gravity is in m/s^2; the field is in points.
POINTS_PER_METER = 150.0

TARGET_RADIUS = 56
LIFE_ICON_SPACING = 70
LIFE_ICON_Y = 48
PATH_FADE_SECONDS = 0.25
EFFECT_TEXT_SECONDS = 0.6

BG_COLOR = (28, 40, 58)
REGULAR_COLOR = (90, 170, 255)
REGULAR_OUTLINE = (240, 240, 255)
HAZARD_COLOR = (30, 30, 30)
HAZARD_OUTLINE = (255, 80, 60)
FUSE_COLOR = (255, 200, 40)
PATH_BG_COLOR = (255, 230, 0)
PATH_FG_COLOR = (255, 255, 255)
PATH_BG_WIDTH = 9
PATH_FG_WIDTH = 5
TEXT_COLOR = (235, 235, 235)
TEXT_DIM = (140, 150, 170)
LIFE_COLOR = (230, 60, 80)
LIFE_GONE_COLOR = (70, 70, 80)
GAME_OVER_COLOR = (255, 90, 90)

EFFECT_LABELS: dict[str, str] = {
    "whack": "WHACK!",
    "explosion": "BOOM!",
    "wrong": "MISSED",
}
