"""Host collaborator protocols and in-memory implementations for testing."""
from __future__ import annotations

from typing import Any, Protocol, Sequence, runtime_checkable

from slice_arcade.types import Point, TargetId, TargetKind


@runtime_checkable
class Renderer(Protocol):
    """Display and audio side of the host engine.

    The core only tells the renderer what happened; animation, textures and
    mixing stay on the host side.
    """

    def show_path(self, points: Sequence[Point]) -> None: ...

    def remove_path(self) -> None: ...

    def fade_path(self) -> None: ...

    def spawn_visual(self, target_id: TargetId, kind: TargetKind, position: Point) -> None: ...

    def remove_visual(self, target_id: TargetId) -> None: ...

    def play_effect(self, name: str) -> None: ...

    def stop_effect(self, name: str) -> None: ...

    def update_score_display(self, value: int) -> None: ...

    def update_lives_display(self, remaining: int) -> None: ...


@runtime_checkable
class PhysicsDelegate(Protocol):
    """Rigid-body simulator that owns target motion."""

    def create_body(
        self,
        target_id: TargetId,
        position: Point,
        velocity: Point,
        angular_velocity: float,
    ) -> None: ...

    def remove_body(self, target_id: TargetId) -> None: ...

    def current_position(self, target_id: TargetId) -> Point | None: ...

    def set_world_time_scale(self, factor: float) -> None: ...

    def set_gravity(self, vector: Point) -> None: ...


class RecordingRenderer:
    """Renderer that records every call as ``(method, args)``.

    Conforms to the Renderer protocol. Also keeps the latest score, lives,
    path and visible targets so tests can assert on end state directly.
    """

    def __init__(self) -> None:
        self.calls: list[tuple[str, tuple[Any, ...]]] = []
        self.path: tuple[Point, ...] = ()
        self.visuals: dict[TargetId, TargetKind] = {}
        self.score = 0
        self.lives: int | None = None
        self.playing: set[str] = set()

    def _record(self, method: str, *args: Any) -> None:
        self.calls.append((method, args))

    def effects(self) -> list[str]:
        return [args[0] for method, args in self.calls if method == "play_effect"]

    def show_path(self, points: Sequence[Point]) -> None:
        self._record("show_path", tuple(points))
        self.path = tuple(points)

    def remove_path(self) -> None:
        self._record("remove_path")
        self.path = ()

    def fade_path(self) -> None:
        self._record("fade_path")

    def spawn_visual(self, target_id: TargetId, kind: TargetKind, position: Point) -> None:
        self._record("spawn_visual", target_id, kind, position)
        self.visuals[target_id] = kind

    def remove_visual(self, target_id: TargetId) -> None:
        self._record("remove_visual", target_id)
        self.visuals.pop(target_id, None)

    def play_effect(self, name: str) -> None:
        self._record("play_effect", name)
        self.playing.add(name)

    def stop_effect(self, name: str) -> None:
        self._record("stop_effect", name)
        self.playing.discard(name)

    def update_score_display(self, value: int) -> None:
        self._record("update_score_display", value)
        self.score = value

    def update_lives_display(self, remaining: int) -> None:
        self._record("update_lives_display", remaining)
        self.lives = remaining


class ManualPhysics:
    """Physics delegate whose bodies only move when a test moves them.

    Conforms to the PhysicsDelegate protocol.
    """

    def __init__(self) -> None:
        self.positions: dict[TargetId, Point] = {}
        self.velocities: dict[TargetId, Point] = {}
        self.angular_velocities: dict[TargetId, float] = {}
        self.time_scale = 1.0
        self.time_scale_history: list[float] = []
        self.gravity: Point = (0.0, 0.0)

    def create_body(
        self,
        target_id: TargetId,
        position: Point,
        velocity: Point,
        angular_velocity: float,
    ) -> None:
        self.positions[target_id] = position
        self.velocities[target_id] = velocity
        self.angular_velocities[target_id] = angular_velocity

    def remove_body(self, target_id: TargetId) -> None:
        self.positions.pop(target_id, None)
        self.velocities.pop(target_id, None)
        self.angular_velocities.pop(target_id, None)

    def current_position(self, target_id: TargetId) -> Point | None:
        return self.positions.get(target_id)

    def set_world_time_scale(self, factor: float) -> None:
        self.time_scale = factor
        self.time_scale_history.append(factor)

    def set_gravity(self, vector: Point) -> None:
        self.gravity = vector

    def move(self, target_id: TargetId, position: Point) -> None:
        if target_id not in self.positions:
            raise KeyError(f"No body for target {target_id}")
        self.positions[target_id] = position
