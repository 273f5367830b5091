"""Target entity and its lifecycle."""
from __future__ import annotations

import random as _random_mod
from dataclasses import dataclass
from enum import Enum

from slice_arcade.geometry import segment_intersects_circle
from slice_arcade.types import HazardPolicy, InvariantError, Point, TargetId, TargetKind


class TargetState(Enum):
    SPAWNED = "spawned"
    ACTIVE = "active"
    SLICED = "sliced"
    EXITED_BOUNDS = "exited_bounds"


_TRANSITIONS: dict[TargetState, frozenset[TargetState]] = {
    TargetState.SPAWNED: frozenset({TargetState.ACTIVE}),
    TargetState.ACTIVE: frozenset({TargetState.SLICED, TargetState.EXITED_BOUNDS}),
    TargetState.SLICED: frozenset(),
    TargetState.EXITED_BOUNDS: frozenset(),
}


@dataclass
class Target:
    """One in-flight object. Position is mirrored from the physics delegate."""

    id: TargetId
    kind: TargetKind
    position: Point
    velocity: Point
    angular_velocity: float
    spawn_time: float
    state: TargetState = TargetState.SPAWNED

    @property
    def alive(self) -> bool:
        return self.state in (TargetState.SPAWNED, TargetState.ACTIVE)

    @property
    def is_hazard(self) -> bool:
        return self.kind is TargetKind.HAZARD

    def _transition(self, new_state: TargetState) -> None:
        if new_state not in _TRANSITIONS[self.state]:
            raise InvariantError(
                f"Target {self.id}: illegal transition "
                f"{self.state.value} -> {new_state.value}"
            )
        self.state = new_state

    def activate(self) -> None:
        self._transition(TargetState.ACTIVE)

    def mark_sliced(self) -> None:
        self._transition(TargetState.SLICED)

    def mark_exited(self) -> None:
        self._transition(TargetState.EXITED_BOUNDS)

    def below(self, threshold: float) -> bool:
        return self.position[1] < threshold

    def hit_by(self, start: Point, end: Point, radius: float) -> bool:
        return self.state is TargetState.ACTIVE and segment_intersects_circle(
            start, end, self.position, radius
        )


def choose_kind(
    rng: _random_mod.Random,
    policy: HazardPolicy = HazardPolicy.RANDOM,
    hazard_odds: int = 7,
) -> TargetKind:
    """Pick a target kind. RANDOM yields a hazard 1 time in ``hazard_odds``."""
    if policy is HazardPolicy.NEVER:
        return TargetKind.REGULAR
    if policy is HazardPolicy.ALWAYS:
        return TargetKind.HAZARD
    if rng.randint(0, hazard_odds - 1) == 0:
        return TargetKind.HAZARD
    return TargetKind.REGULAR
