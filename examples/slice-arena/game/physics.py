"""Minimal rigid-body stand-in for the demo host."""
from __future__ import annotations

import math
from dataclasses import dataclass

from slice_arcade import Point, TargetId

from ui.constants import POINTS_PER_METER


@dataclass
class Body:
    position: Point
    velocity: Point
    angular_velocity: float
    rotation: float = 0.0


class EulerPhysics:
    """Semi-implicit Euler integrator: gravity -> velocity -> position.

    Conforms to slice_arcade's PhysicsDelegate protocol. Bodies never
    collide with each other; the time-scale multiplies every step.
    """

    def __init__(self) -> None:
        self.bodies: dict[TargetId, Body] = {}
        self.time_scale = 1.0
        self._gravity: Point = (0.0, 0.0)

    def create_body(
        self,
        target_id: TargetId,
        position: Point,
        velocity: Point,
        angular_velocity: float,
    ) -> None:
        self.bodies[target_id] = Body(position, velocity, angular_velocity)

    def remove_body(self, target_id: TargetId) -> None:
        self.bodies.pop(target_id, None)

    def current_position(self, target_id: TargetId) -> Point | None:
        body = self.bodies.get(target_id)
        return body.position if body is not None else None

    def set_world_time_scale(self, factor: float) -> None:
        self.time_scale = factor

    def set_gravity(self, vector: Point) -> None:
        self._gravity = (vector[0] * POINTS_PER_METER, vector[1] * POINTS_PER_METER)

    def step(self, dt: float) -> None:
        h = dt * self.time_scale
        if h <= 0.0:
            return
        gx, gy = self._gravity
        for body in self.bodies.values():
            vx = body.velocity[0] + gx * h
            vy = body.velocity[1] + gy * h
            body.velocity = (vx, vy)
            body.position = (body.position[0] + vx * h, body.position[1] + vy * h)
            body.rotation = math.fmod(body.rotation + body.angular_velocity * h, math.tau)
