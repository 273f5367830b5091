"""Randomized launch kinematics for newly spawned targets."""
from __future__ import annotations

import random as _random_mod
from dataclasses import dataclass

from slice_arcade.config import GameConfig
from slice_arcade.types import Point


@dataclass(frozen=True, slots=True)
class LaunchParams:
    velocity: Point
    angular_velocity: float


class RandomKinematics:
    """Samples spawn positions and launch parameters from an injected RNG.

    Horizontal speed depends on which quarter of the field the target starts
    in: the outer lanes throw fast toward the centre, the inner lanes slow.
    """

    def __init__(
        self, rng: _random_mod.Random, config: GameConfig | None = None
    ) -> None:
        self._rng = rng
        self._config = config if config is not None else GameConfig()

    @property
    def config(self) -> GameConfig:
        return self._config

    def spawn_position(self) -> Point:
        cfg = self._config
        return (float(cfg.spawn_x.sample(self._rng)), cfg.spawn_y)

    def launch_params_for(self, x: float) -> LaunchParams:
        cfg = self._config
        rng = self._rng

        angular_velocity = cfg.spin.sample(rng) / cfg.spin_divisor

        lane = cfg.lane_width
        if x < lane:
            x_units = cfg.fast_x_speed.sample(rng)
        elif x < lane * 2:
            x_units = cfg.slow_x_speed.sample(rng)
        elif x < lane * 3:
            x_units = -cfg.slow_x_speed.sample(rng)
        else:
            x_units = -cfg.fast_x_speed.sample(rng)

        y_units = cfg.y_speed.sample(rng)

        velocity = (
            float(x_units * cfg.velocity_scale),
            float(y_units * cfg.velocity_scale),
        )
        return LaunchParams(velocity=velocity, angular_velocity=angular_velocity)
