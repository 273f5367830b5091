"""Pygame renderer for slice_arcade sessions."""
from __future__ import annotations

import math
from typing import Sequence

import pygame

from slice_arcade import Point, TargetId, TargetKind

from game.physics import EulerPhysics
from ui.constants import (
    BG_COLOR,
    EFFECT_LABELS,
    EFFECT_TEXT_SECONDS,
    FUSE_COLOR,
    GAME_OVER_COLOR,
    HAZARD_COLOR,
    HAZARD_OUTLINE,
    LIFE_COLOR,
    LIFE_GONE_COLOR,
    LIFE_ICON_SPACING,
    LIFE_ICON_Y,
    PATH_BG_COLOR,
    PATH_BG_WIDTH,
    PATH_FADE_SECONDS,
    PATH_FG_COLOR,
    PATH_FG_WIDTH,
    REGULAR_COLOR,
    REGULAR_OUTLINE,
    SCREEN_H,
    SCREEN_W,
    TARGET_RADIUS,
    TEXT_COLOR,
    TEXT_DIM,
)


def to_screen(p: Point) -> tuple[int, int]:
    """Field coordinates are y-up; pygame is y-down."""
    return int(p[0]), int(SCREEN_H - p[1])


def to_field(pos: tuple[int, int]) -> Point:
    return float(pos[0]), float(SCREEN_H - pos[1])


class PygameRenderer:
    """Collects what the session tells it and draws it once per frame.

    Conforms to slice_arcade's Renderer protocol. There are no audio
    assets, so effects show up as short captions instead of sounds.
    """

    def __init__(self, max_lives: int) -> None:
        self.max_lives = max_lives
        self.path: tuple[Point, ...] = ()
        self.path_alpha = 0.0
        self.path_fading = False
        self.visuals: dict[TargetId, TargetKind] = {}
        self.score = 0
        self.lives = max_lives
        self.fuse_on = False
        self.captions: list[tuple[str, float]] = []

    # -- Renderer protocol --

    def show_path(self, points: Sequence[Point]) -> None:
        self.path = tuple(points)
        self.path_alpha = 1.0
        self.path_fading = False

    def remove_path(self) -> None:
        self.path = ()

    def fade_path(self) -> None:
        self.path_fading = True

    def spawn_visual(self, target_id: TargetId, kind: TargetKind, position: Point) -> None:
        self.visuals[target_id] = kind

    def remove_visual(self, target_id: TargetId) -> None:
        self.visuals.pop(target_id, None)

    def play_effect(self, name: str) -> None:
        if name == "fuse":
            self.fuse_on = True
        label = EFFECT_LABELS.get(name)
        if label is not None:
            self.captions.append((label, EFFECT_TEXT_SECONDS))

    def stop_effect(self, name: str) -> None:
        if name == "fuse":
            self.fuse_on = False

    def update_score_display(self, value: int) -> None:
        self.score = value

    def update_lives_display(self, remaining: int) -> None:
        self.lives = remaining

    # -- Frame --

    def update(self, dt: float) -> None:
        if self.path_fading and self.path_alpha > 0.0:
            self.path_alpha = max(0.0, self.path_alpha - dt / PATH_FADE_SECONDS)
        self.captions = [(text, t - dt) for text, t in self.captions if t - dt > 0.0]

    def draw(
        self,
        surface: pygame.Surface,
        physics: EulerPhysics,
        font: pygame.font.Font,
        big_font: pygame.font.Font,
        game_over: bool,
    ) -> None:
        surface.fill(BG_COLOR)

        for tid, kind in self.visuals.items():
            body = physics.bodies.get(tid)
            if body is None:
                continue
            center = to_screen(body.position)
            if kind is TargetKind.HAZARD:
                pygame.draw.circle(surface, HAZARD_COLOR, center, TARGET_RADIUS)
                pygame.draw.circle(surface, HAZARD_OUTLINE, center, TARGET_RADIUS, 3)
                if self.fuse_on:
                    tip = (
                        center[0] + int(math.cos(body.rotation) * TARGET_RADIUS),
                        center[1] - int(math.sin(body.rotation) * TARGET_RADIUS),
                    )
                    pygame.draw.circle(surface, FUSE_COLOR, tip, 6)
            else:
                pygame.draw.circle(surface, REGULAR_COLOR, center, TARGET_RADIUS)
                pygame.draw.circle(surface, REGULAR_OUTLINE, center, TARGET_RADIUS, 2)

        if len(self.path) >= 2 and self.path_alpha > 0.0:
            points = [to_screen(p) for p in self.path]
            layer = pygame.Surface((SCREEN_W, SCREEN_H), pygame.SRCALPHA)
            alpha = int(255 * self.path_alpha)
            pygame.draw.lines(layer, (*PATH_BG_COLOR, alpha), False, points, PATH_BG_WIDTH)
            pygame.draw.lines(layer, (*PATH_FG_COLOR, alpha), False, points, PATH_FG_WIDTH)
            surface.blit(layer, (0, 0))

        surface.blit(font.render(f"Score: {self.score}", True, TEXT_COLOR), (8, SCREEN_H - 40))

        for i in range(self.max_lives):
            x = SCREEN_W - (self.max_lives - i) * LIFE_ICON_SPACING
            # Icons go grey left to right as lives are lost.
            lost = self.max_lives - self.lives
            color = LIFE_GONE_COLOR if i < lost else LIFE_COLOR
            pygame.draw.circle(surface, color, (x, LIFE_ICON_Y), 22)

        for i, (text, _) in enumerate(self.captions[-3:]):
            surf = font.render(text, True, TEXT_DIM)
            surface.blit(surf, (8, 8 + i * 28))

        if game_over:
            surf = big_font.render("GAME OVER", True, GAME_OVER_COLOR)
            surface.blit(surf, surf.get_rect(center=(SCREEN_W // 2, SCREEN_H // 2)))
            hint = font.render("R = restart   Esc = quit", True, TEXT_DIM)
            surface.blit(hint, hint.get_rect(center=(SCREEN_W // 2, SCREEN_H // 2 + 60)))
