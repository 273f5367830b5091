"""Queued session events, delivered when the session flushes."""
from __future__ import annotations

from typing import Any, Callable

TARGET_SPAWNED = "target_spawned"
TARGET_SLICED = "target_sliced"
TARGET_EXITED = "target_exited"
LIFE_LOST = "life_lost"
WAVE_TOSSED = "wave_tossed"
SEQUENCE_EXHAUSTED = "sequence_exhausted"
GAME_OVER = "game_over"

_Handler = Callable[[str, dict[str, Any]], None]


class SignalBus:
    """Publish/subscribe queue. Nothing is delivered until ``flush()``.

    Handlers subscribed under ``"*"`` receive every signal after the
    name-specific handlers.
    """

    def __init__(self) -> None:
        self._subscribers: dict[str, list[_Handler]] = {}
        self._queue: list[tuple[str, dict[str, Any]]] = []

    @property
    def pending(self) -> int:
        return len(self._queue)

    def subscribe(self, signal_name: str, handler: _Handler) -> None:
        self._subscribers.setdefault(signal_name, []).append(handler)

    def unsubscribe(self, signal_name: str, handler: _Handler) -> None:
        handlers = self._subscribers.get(signal_name)
        if handlers and handler in handlers:
            handlers.remove(handler)

    def publish(self, signal_name: str, **data: Any) -> None:
        self._queue.append((signal_name, data))

    def flush(self) -> None:
        # Signals published by handlers during this flush wait for the next one.
        batch, self._queue = self._queue, []
        for signal_name, data in batch:
            for handler in self._subscribers.get(signal_name, ()):
                handler(signal_name, data)
            for handler in self._subscribers.get("*", ()):
                handler(signal_name, data)
