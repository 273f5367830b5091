"""Game configuration dataclass."""
from __future__ import annotations

from dataclasses import dataclass

from slice_arcade.types import IntRange, Point


@dataclass(frozen=True)
class GameConfig:
    """Immutable tuning for one game session.

    The play field uses a y-up coordinate system with the origin at the
    bottom-left corner. Targets spawn below the visible area and are
    launched upward against gravity supplied by the physics delegate.

    Attributes:
        field_width: Width of the play field; lanes are its quarters.
        field_height: Height of the play field.
        starting_lives: Lives at session start.
        max_path_points: Most recent gesture samples kept for a path.
        hazard_odds: A randomly-kinded target is a hazard 1 time in N.
        spawn_x: Horizontal spawn position range.
        spawn_y: Vertical spawn position.
        exit_threshold: A target below this height has left play.
        hit_radius: Radius of a target's circular hit region.
        fast_x_speed: Horizontal speed units for the outer lanes.
        slow_x_speed: Horizontal speed units for the inner lanes.
        y_speed: Vertical launch speed units.
        spin: Angular velocity units, divided by ``spin_divisor``.
        velocity_scale: Multiplier from speed units to field units/second.
        gravity: Gravity vector handed to the physics delegate.
        initial_time_scale: Physics time-scale at session start.
        initial_popup_interval: Delay between a cleared board and the next wave.
        initial_chain_interval: Total spread of a chain wave's spawns.
        first_wave_delay: Delay before the very first wave.
        popup_decay: Per-wave multiplier on the popup interval.
        chain_decay: Per-wave multiplier on the chain interval.
        time_scale_growth: Per-wave multiplier on the physics time-scale.
        min_popup_interval: Optional floor for the popup interval.
        min_chain_interval: Optional floor for the chain interval.
        max_time_scale: Optional ceiling for the physics time-scale.
        random_wave_count: Randomly drawn waves after the opening ones.
        swoosh_duration: Seconds a gesture swoosh cue plays for.
    """

    field_width: float = 1024.0
    field_height: float = 768.0
    starting_lives: int = 3
    max_path_points: int = 12
    hazard_odds: int = 7
    spawn_x: IntRange = IntRange(64, 960)
    spawn_y: float = -128.0
    exit_threshold: float = -140.0
    hit_radius: float = 64.0
    fast_x_speed: IntRange = IntRange(8, 15)
    slow_x_speed: IntRange = IntRange(3, 5)
    y_speed: IntRange = IntRange(24, 32)
    spin: IntRange = IntRange(-6, 6)
    spin_divisor: float = 2.0
    velocity_scale: float = 40.0
    gravity: Point = (0.0, -6.0)
    initial_time_scale: float = 0.85
    initial_popup_interval: float = 0.9
    initial_chain_interval: float = 3.0
    first_wave_delay: float = 2.0
    popup_decay: float = 0.991
    chain_decay: float = 0.99
    time_scale_growth: float = 1.02
    min_popup_interval: float | None = None
    min_chain_interval: float | None = None
    max_time_scale: float | None = None
    random_wave_count: int = 1000
    swoosh_duration: float = 0.25

    def __post_init__(self) -> None:
        if self.field_width <= 0 or self.field_height <= 0:
            raise ValueError("field dimensions must be positive")
        if self.starting_lives <= 0:
            raise ValueError("starting_lives must be positive")
        if self.max_path_points < 2:
            raise ValueError("max_path_points must be at least 2")
        if self.hazard_odds < 1:
            raise ValueError("hazard_odds must be at least 1")
        if self.hit_radius <= 0:
            raise ValueError("hit_radius must be positive")
        if self.spin_divisor == 0:
            raise ValueError("spin_divisor must be non-zero")
        for name in ("popup_decay", "chain_decay"):
            factor = getattr(self, name)
            if not 0.0 < factor <= 1.0:
                raise ValueError(f"{name} must be in (0, 1], got {factor}")
        if self.time_scale_growth < 1.0:
            raise ValueError("time_scale_growth must be >= 1")
        if self.random_wave_count < 0:
            raise ValueError("random_wave_count must be non-negative")

    @property
    def lane_width(self) -> float:
        return self.field_width / 4.0
