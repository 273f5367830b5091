"""2D vector helpers and segment/circle hit tests on tuple[float, float]."""
from __future__ import annotations

from slice_arcade.types import Point


def add(a: Point, b: Point) -> Point:
    return (a[0] + b[0], a[1] + b[1])


def sub(a: Point, b: Point) -> Point:
    return (a[0] - b[0], a[1] - b[1])


def scale(v: Point, s: float) -> Point:
    return (v[0] * s, v[1] * s)


def dot(a: Point, b: Point) -> float:
    return a[0] * b[0] + a[1] * b[1]


def distance_sq(a: Point, b: Point) -> float:
    dx = a[0] - b[0]
    dy = a[1] - b[1]
    return dx * dx + dy * dy


def closest_point_on_segment(start: Point, end: Point, p: Point) -> Point:
    """Project p onto the segment start-end, clamped to its endpoints."""
    seg = sub(end, start)
    length_sq = dot(seg, seg)
    if length_sq == 0.0:
        return start
    t = dot(sub(p, start), seg) / length_sq
    t = max(0.0, min(1.0, t))
    return add(start, scale(seg, t))


def segment_intersects_circle(
    start: Point,
    end: Point,
    center: Point,
    radius: float,
) -> bool:
    """True when the segment passes strictly inside the circle. Touching is a miss."""
    closest = closest_point_on_segment(start, end, center)
    return distance_sq(closest, center) < radius * radius
