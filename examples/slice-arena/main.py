"""Slice Arena — pygame host for the slice-arcade core.

Drag with the left mouse button to slice. Blue targets score a point;
black hazards end the game when sliced. Every blue target that falls off
the bottom costs a life.

Controls:
  Drag    Slice
  R       Restart after game over
  Esc     Quit
"""
from __future__ import annotations

import argparse
import dataclasses
import logging
import sys

import pygame

from slice_arcade import GameConfig, GameSession, signals

from game.physics import EulerPhysics
from ui.constants import FPS, SCREEN_H, SCREEN_W
from ui.renderer import PygameRenderer, to_field

logger = logging.getLogger("slice_arena")


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Slice Arena — slice-arcade visual demo")
    p.add_argument("--seed", type=int, default=None, help="Random seed (default: random)")
    p.add_argument("--lives", type=int, default=3, help="Starting lives (1-9, default: 3)")
    p.add_argument("-v", "--verbose", action="store_true", help="Log every wave and spawn")
    args = p.parse_args()
    args.lives = max(1, min(9, args.lives))
    return args


def new_game(
    config: GameConfig, seed: int | None
) -> tuple[GameSession, PygameRenderer, EulerPhysics]:
    renderer = PygameRenderer(max_lives=config.starting_lives)
    physics = EulerPhysics()
    session = GameSession(renderer, physics, config=config, seed=seed)
    session.bus.subscribe(signals.GAME_OVER, _log_game_over)
    session.start()
    logger.info("New game, seed=%d", session.seed)
    return session, renderer, physics


def _log_game_over(signal: str, data: dict) -> None:
    cause = "hazard" if data["triggered_by_bomb"] else "out of lives"
    logger.info("Final score %d (%s)", data["score"], cause)


def main() -> None:
    args = parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    config = dataclasses.replace(
        GameConfig(field_width=SCREEN_W, field_height=SCREEN_H),
        starting_lives=args.lives,
    )

    pygame.init()
    screen = pygame.display.set_mode((SCREEN_W, SCREEN_H))
    pygame.display.set_caption("Slice Arena — slice-arcade demo")
    clock = pygame.time.Clock()
    font = pygame.font.SysFont("monospace", 24, bold=True)
    big_font = pygame.font.SysFont("monospace", 64, bold=True)

    session, renderer, physics = new_game(config, args.seed)
    dragging = False
    running = True

    while running:
        dt = clock.tick(FPS) / 1000.0

        # --- Events ---
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False

            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    running = False
                elif event.key == pygame.K_r and session.game_ended:
                    session, renderer, physics = new_game(config, None)
                    dragging = False

            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                dragging = True
                session.on_gesture_begin(to_field(event.pos))

            elif event.type == pygame.MOUSEMOTION and dragging:
                session.on_gesture_sample(to_field(event.pos))

            elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
                dragging = False
                session.on_gesture_end()

        # --- Tick ---
        physics.step(dt)
        session.on_tick(dt)
        renderer.update(dt)

        # --- Render ---
        renderer.draw(screen, physics, font, big_font, session.game_ended)
        pygame.display.flip()

    pygame.quit()
    sys.exit()


if __name__ == "__main__":
    main()
