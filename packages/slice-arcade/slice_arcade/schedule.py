"""Delay-then-run work items drained by the host tick loop."""
from __future__ import annotations

import heapq
from dataclasses import dataclass, field
from typing import Any

TOSS_WAVE = "toss_wave"
CHAIN_SPAWN = "chain_spawn"
SWOOSH_DONE = "swoosh_done"


@dataclass(frozen=True, order=True)
class ScheduledAction:
    """A tagged action due at ``fire_time``. Ties fire in insertion order."""

    fire_time: float
    seq: int
    tag: str = field(compare=False)
    data: dict[str, Any] = field(compare=False, default_factory=dict)


class Scheduler:
    """Session-local clock plus a min-heap of pending actions.

    Actions are never cancelled here. Whoever handles a fired action is
    expected to check its own cancellation flag and return early.
    """

    def __init__(self) -> None:
        self._now = 0.0
        self._seq = 0
        self._heap: list[ScheduledAction] = []

    @property
    def now(self) -> float:
        return self._now

    def __len__(self) -> int:
        return len(self._heap)

    def schedule(self, delay: float, tag: str, **data: Any) -> ScheduledAction:
        if delay < 0:
            raise ValueError(f"delay must be non-negative, got {delay}")
        action = ScheduledAction(
            fire_time=self._now + delay, seq=self._seq, tag=tag, data=data
        )
        self._seq += 1
        heapq.heappush(self._heap, action)
        return action

    def advance(self, dt: float) -> list[ScheduledAction]:
        """Move the clock forward and pop every action now due, in order."""
        if dt < 0:
            raise ValueError(f"dt must be non-negative, got {dt}")
        self._now += dt
        due: list[ScheduledAction] = []
        while self._heap and self._heap[0].fire_time <= self._now:
            due.append(heapq.heappop(self._heap))
        return due

    def pending(self, tag: str | None = None) -> list[ScheduledAction]:
        actions = sorted(self._heap)
        if tag is None:
            return actions
        return [a for a in actions if a.tag == tag]

    def clear(self) -> None:
        self._heap.clear()
