"""Wave patterns, the wave sequence, and the sequencer state machine."""
from __future__ import annotations

import logging
import random as _random_mod
from enum import Enum
from typing import TYPE_CHECKING, Callable, Sequence

from slice_arcade.config import GameConfig
from slice_arcade.schedule import CHAIN_SPAWN, TOSS_WAVE, Scheduler
from slice_arcade.types import HazardPolicy, InvariantError

if TYPE_CHECKING:
    from slice_arcade.collaborators import PhysicsDelegate

logger = logging.getLogger(__name__)


class WavePattern(Enum):
    SINGLE_SAFE = "single_safe"
    SINGLE_RANDOM = "single_random"
    PAIR_ONE_HAZARD = "pair_one_hazard"
    PAIR_RANDOM = "pair_random"
    TRIPLE_RANDOM = "triple_random"
    QUAD_RANDOM = "quad_random"
    CHAIN = "chain"
    FAST_CHAIN = "fast_chain"

    @property
    def is_chain(self) -> bool:
        return self in _CHAIN_SHAPES

    @property
    def chain_count(self) -> int:
        return _CHAIN_SHAPES[self][0] if self.is_chain else 0

    @property
    def interval_divisor(self) -> float:
        return _CHAIN_SHAPES[self][1] if self.is_chain else 0.0


# (count, interval divisor)
_CHAIN_SHAPES: dict[WavePattern, tuple[int, float]] = {
    WavePattern.CHAIN: (5, 5.0),
    WavePattern.FAST_CHAIN: (5, 10.0),
}

# Kind policy of every target spawned together in a non-chain batch.
BATCHES: dict[WavePattern, tuple[HazardPolicy, ...]] = {
    WavePattern.SINGLE_SAFE: (HazardPolicy.NEVER,),
    WavePattern.SINGLE_RANDOM: (HazardPolicy.RANDOM,),
    WavePattern.PAIR_ONE_HAZARD: (HazardPolicy.NEVER, HazardPolicy.ALWAYS),
    WavePattern.PAIR_RANDOM: (HazardPolicy.RANDOM,) * 2,
    WavePattern.TRIPLE_RANDOM: (HazardPolicy.RANDOM,) * 3,
    WavePattern.QUAD_RANDOM: (HazardPolicy.RANDOM,) * 4,
}

OPENING_WAVES: tuple[WavePattern, ...] = (
    WavePattern.SINGLE_SAFE,
    WavePattern.SINGLE_SAFE,
    WavePattern.PAIR_ONE_HAZARD,
    WavePattern.PAIR_ONE_HAZARD,
    WavePattern.TRIPLE_RANDOM,
    WavePattern.SINGLE_RANDOM,
    WavePattern.CHAIN,
)

RANDOM_WAVE_POOL: tuple[WavePattern, ...] = (
    WavePattern.PAIR_ONE_HAZARD,
    WavePattern.PAIR_RANDOM,
    WavePattern.TRIPLE_RANDOM,
    WavePattern.QUAD_RANDOM,
    WavePattern.CHAIN,
    WavePattern.FAST_CHAIN,
)


def build_sequence(
    rng: _random_mod.Random, random_count: int = 1000
) -> tuple[WavePattern, ...]:
    """Hand-authored opening followed by ``random_count`` uniform draws."""
    tail = tuple(rng.choice(RANDOM_WAVE_POOL) for _ in range(random_count))
    return OPENING_WAVES + tail


class WaveSequencer:
    """Decides when the next wave is thrown and what it contains.

    A wave is queued on the scheduler only once the board is clear. Each
    toss speeds the game up geometrically: shorter popup and chain
    intervals, faster physics. Chain waves throw one target at once and
    queue the rest as ``chain_spawn`` actions.

    Args:
        sequence: Patterns to play, in order.
        scheduler: Where delayed tosses and chain spawns are queued.
        spawn: Called once per target with the kind policy to use.
        physics: Receives the escalating world time-scale.
        is_ended: Cancellation flag checked whenever an action fires.
        config: Intervals, decay rates and optional clamps.
    """

    def __init__(
        self,
        sequence: Sequence[WavePattern],
        scheduler: Scheduler,
        spawn: Callable[[HazardPolicy], object],
        physics: PhysicsDelegate,
        is_ended: Callable[[], bool],
        config: GameConfig | None = None,
    ) -> None:
        cfg = config if config is not None else GameConfig()
        self._config = cfg
        self._sequence = tuple(sequence)
        self._scheduler = scheduler
        self._spawn = spawn
        self._physics = physics
        self._is_ended = is_ended

        self.position = 0
        self.popup_interval = cfg.initial_popup_interval
        self.chain_interval = cfg.initial_chain_interval
        self.time_scale = cfg.initial_time_scale
        self.next_wave_queued = False
        self.exhausted = False

    @property
    def sequence(self) -> tuple[WavePattern, ...]:
        return self._sequence

    def start(self) -> None:
        """Queue the opening wave after the first-wave delay."""
        self._scheduler.schedule(self._config.first_wave_delay, TOSS_WAVE)
        self.next_wave_queued = True

    def tick(self, active_count: int) -> bool:
        """Queue the next wave if the board is clear. Returns True if queued."""
        if active_count > 0 or self.next_wave_queued:
            return False
        self._scheduler.schedule(self.popup_interval, TOSS_WAVE)
        self.next_wave_queued = True
        return True

    def toss_next_wave(self) -> WavePattern | None:
        """Throw the wave at the current position. Returns the pattern thrown."""
        if self._is_ended():
            return None

        if self.position >= len(self._sequence):
            if not self.exhausted:
                logger.warning(
                    "Wave sequence exhausted after %d waves; no more spawns",
                    self.position,
                )
            # Leave next_wave_queued set so tick() never queues again.
            self.exhausted = True
            return None

        self._escalate()

        pattern = self._sequence[self.position]
        logger.debug(
            "Tossing wave %d: %s (popup=%.3f chain=%.3f speed=%.3f)",
            self.position, pattern.value,
            self.popup_interval, self.chain_interval, self.time_scale,
        )
        self._dispatch(pattern)

        self.position += 1
        self.next_wave_queued = False
        return pattern

    def fire_chain_spawn(self) -> bool:
        """Handle a queued chain spawn. False if the game ended meanwhile."""
        if self._is_ended():
            return False
        self._spawn(HazardPolicy.RANDOM)
        return True

    def _escalate(self) -> None:
        cfg = self._config
        self.popup_interval *= cfg.popup_decay
        self.chain_interval *= cfg.chain_decay
        self.time_scale *= cfg.time_scale_growth
        if cfg.min_popup_interval is not None:
            self.popup_interval = max(self.popup_interval, cfg.min_popup_interval)
        if cfg.min_chain_interval is not None:
            self.chain_interval = max(self.chain_interval, cfg.min_chain_interval)
        if cfg.max_time_scale is not None:
            self.time_scale = min(self.time_scale, cfg.max_time_scale)
        self._physics.set_world_time_scale(self.time_scale)

    def _dispatch(self, pattern: WavePattern) -> None:
        if pattern.is_chain:
            step = self.chain_interval / pattern.interval_divisor
            self._spawn(HazardPolicy.RANDOM)
            for i in range(1, pattern.chain_count):
                self._scheduler.schedule(step * i, CHAIN_SPAWN, wave=self.position)
            return

        policies = BATCHES.get(pattern)
        if policies is None:
            raise InvariantError(f"Unknown wave pattern: {pattern!r}")
        for policy in policies:
            self._spawn(policy)
