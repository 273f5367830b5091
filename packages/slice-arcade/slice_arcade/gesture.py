"""Bounded slice gesture path."""
from __future__ import annotations

from collections import deque
from dataclasses import dataclass

from slice_arcade.types import Point


@dataclass(frozen=True, slots=True)
class GestureSample:
    """Result of extending a gesture.

    ``path`` is what should be drawn (empty below two points). ``segment``
    is the only part that still needs hit testing: the stretch between the
    previous sample and this one.
    """

    path: tuple[Point, ...]
    segment: tuple[Point, Point] | None


class SliceGesture:
    def __init__(self, max_points: int = 12) -> None:
        if max_points < 2:
            raise ValueError("max_points must be at least 2")
        self._points: deque[Point] = deque(maxlen=max_points)
        self._active = False

    @property
    def max_points(self) -> int:
        return self._points.maxlen or 0

    @property
    def active(self) -> bool:
        return self._active

    @property
    def points(self) -> tuple[Point, ...]:
        return tuple(self._points)

    def begin(self, point: Point) -> None:
        self._points.clear()
        self._points.append(point)
        self._active = True

    def extend(self, point: Point) -> GestureSample:
        """Append a sample, dropping the oldest beyond the cap.

        Extending an idle gesture starts a fresh path at ``point``.
        """
        if not self._active:
            self.begin(point)
            return GestureSample(path=(), segment=None)

        previous = self._points[-1]
        self._points.append(point)
        return GestureSample(path=self.render_path(), segment=(previous, point))

    def end(self) -> None:
        # Points stay for the fade-out; the next begin() clears them.
        self._active = False

    def render_path(self) -> tuple[Point, ...]:
        if len(self._points) < 2:
            return ()
        return tuple(self._points)
