"""Planar rigid body with position, orientation, velocity and mass properties."""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass
class RigidBody:
    """A rigid body in the plane.

    ``index`` is the body's slot in a rigid body system, or -1 while the body
    is not part of one.
    """

    p_x: float = 0.0
    p_y: float = 0.0
    v_x: float = 0.0
    v_y: float = 0.0
    theta: float = 0.0
    v_theta: float = 0.0
    mass: float = 0.0
    inertia: float = 0.0
    index: int = -1

    def local_to_world(self, x: float, y: float) -> tuple[float, float]:
        """Map a point in body coordinates to world coordinates."""
        cos_theta = math.cos(self.theta)
        sin_theta = math.sin(self.theta)
        return (
            cos_theta * x - sin_theta * y + self.p_x,
            sin_theta * x + cos_theta * y + self.p_y,
        )

    def world_to_local(self, x: float, y: float) -> tuple[float, float]:
        """Map a point in world coordinates to body coordinates."""
        cos_theta = math.cos(self.theta)
        sin_theta = math.sin(self.theta)
        dx = x - self.p_x
        dy = y - self.p_y
        return (
            cos_theta * dx + sin_theta * dy,
            -sin_theta * dx + cos_theta * dy,
        )

    def reset(self) -> None:
        """Zero the kinematic state and mass properties; the index is kept."""
        self.p_x = self.p_y = 0.0
        self.v_x = self.v_y = 0.0
        self.theta = 0.0
        self.v_theta = 0.0
        self.mass = 0.0
        self.inertia = 0.0

    def energy(self) -> float:
        """Translational plus rotational kinetic energy."""
        speed_2 = self.v_x * self.v_x + self.v_y * self.v_y
        kinetic = 0.5 * self.mass * speed_2
        rotational = 0.5 * self.inertia * self.v_theta * self.v_theta
        return kinetic + rotational