"""Shared type aliases, enums and errors for the slicing core."""
from __future__ import annotations

import random as _random
from dataclasses import dataclass
from enum import Enum

Point = tuple[float, float]
TargetId = int


class TargetKind(Enum):
    REGULAR = "regular"
    HAZARD = "hazard"


class HazardPolicy(Enum):
    """How a spawn request picks the target kind."""

    RANDOM = "random"
    NEVER = "never"
    ALWAYS = "always"


class InvariantError(RuntimeError):
    """Raised when core game logic reaches a state it must never be in."""


@dataclass(frozen=True, slots=True)
class IntRange:
    """Inclusive integer range sampled uniformly."""

    lo: int
    hi: int

    def __post_init__(self) -> None:
        if self.lo > self.hi:
            raise ValueError(f"IntRange lo ({self.lo}) must not exceed hi ({self.hi})")

    def sample(self, rng: _random.Random) -> int:
        return rng.randint(self.lo, self.hi)

    def __contains__(self, value: object) -> bool:
        return isinstance(value, int) and self.lo <= value <= self.hi
