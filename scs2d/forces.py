"""Generators that add external forces and torques to a system state."""

from __future__ import annotations

import math
from abc import ABC, abstractmethod

from .rigid_body import RigidBody
from .system_state import SystemState


class ForceGenerator(ABC):
    """Adds forces to a state each time the system evaluates forces.

    ``index`` is the generator's slot in a rigid body system, or -1.
    """

    def __init__(self) -> None:
        self.index = -1

    @abstractmethod
    def apply(self, state: SystemState) -> None:
        """Accumulate this generator's forces into ``state``."""


class GravityForceGenerator(ForceGenerator):
    """Uniform gravity pulling every body along negative y."""

    def __init__(self, g: float = 9.81) -> None:
        super().__init__()
        self.g = g

    def apply(self, state: SystemState) -> None:
        for i in range(state.n):
            state.f_y[i] += -state.m[i] * self.g


class StaticForceGenerator(ForceGenerator):
    """A constant world-space force applied at a body-local point."""

    def __init__(self, body: RigidBody | None = None) -> None:
        super().__init__()
        self.body = body
        self.f_x = self.f_y = 0.0
        self.p_x = self.p_y = 0.0

    def apply(self, state: SystemState) -> None:
        if self.body is None:
            raise ValueError("static force generator has no body")
        state.apply_force(self.p_x, self.p_y, self.f_x, self.f_y, self.body.index)


class Spring(ForceGenerator):
    """A damped spring between points on two bodies.

    A body with index -1 is not part of the system: it acts as a fixed
    anchor and receives no force.
    """

    def __init__(
        self, body1: RigidBody | None = None, body2: RigidBody | None = None
    ) -> None:
        super().__init__()
        self.body1 = body1
        self.body2 = body2
        self.rest_length = 1.0
        self.ks = 0.0
        self.kd = 0.0
        self.p1_x = self.p1_y = 0.0
        self.p2_x = self.p2_y = 0.0

    @staticmethod
    def _end_state(
        state: SystemState, body: RigidBody, x: float, y: float
    ) -> tuple[float, float, float, float]:
        if body.index != -1:
            w_x, w_y = state.local_to_world(x, y, body.index)
            v_x, v_y = state.velocity_at_point(x, y, body.index)
        else:
            w_x, w_y = body.local_to_world(x, y)
            v_x = v_y = 0.0
        return w_x, w_y, v_x, v_y

    def apply(self, state: SystemState) -> None:
        if self.body1 is None or self.body2 is None:
            return

        x1, y1, v_x1, v_y1 = self._end_state(state, self.body1, self.p1_x, self.p1_y)
        x2, y2, v_x2, v_y2 = self._end_state(state, self.body2, self.p2_x, self.p2_y)

        dx = x2 - x1
        dy = y2 - y1
        length = math.sqrt(dx * dx + dy * dy)
        if length != 0:
            dx /= length
            dy /= length
        else:
            dx, dy = 1.0, 0.0

        v = dx * (v_x2 - v_x1) + dy * (v_y2 - v_y1)
        x = length - self.rest_length
        magnitude = x * self.ks + v * self.kd

        if self.body1.index != -1:
            state.apply_force(
                self.p1_x, self.p1_y, dx * magnitude, dy * magnitude, self.body1.index
            )
        if self.body2.index != -1:
            state.apply_force(
                self.p2_x, self.p2_y, -dx * magnitude, -dy * magnitude, self.body2.index
            )

    def ends(self) -> tuple[float, float, float, float]:
        """World coordinates ``(x1, y1, x2, y2)`` of both attachment points."""
        if self.body1 is None or self.body2 is None:
            raise ValueError("spring is not attached to two bodies")
        x1, y1 = self.body1.local_to_world(self.p1_x, self.p1_y)
        x2, y2 = self.body2.local_to_world(self.p2_x, self.p2_y)
        return x1, y1, x2, y2

    def energy(self) -> float:
        """Potential energy stored in the spring; zero when unattached."""
        if self.body1 is None or self.body2 is None:
            return 0.0
        x1, y1, x2, y2 = self.ends()
        stretch = math.hypot(x2 - x1, y2 - y1) - self.rest_length
        return 0.5 * self.ks * stretch * stretch


class ConstantSpeedMotor(ForceGenerator):
    """Drives ``body1`` to spin at ``speed`` relative to ``body0``.

    The applied torque is limited to ``max_torque`` in either direction; a
    ``body0`` with index -1 is treated as the fixed ground.
    """

    def __init__(
        self, body0: RigidBody | None = None, body1: RigidBody | None = None
    ) -> None:
        super().__init__()
        self.body0 = body0
        self.body1 = body1
        self.ks = 1.0
        self.kd = 1.0
        self.max_torque = 500.0
        self.speed = 1.0

    def apply(self, state: SystemState) -> None:
        if self.body0 is None or self.body1 is None:
            raise ValueError("motor is not attached to two bodies")

        ground = self.body0.index == -1
        if ground:
            v0 = a0 = 0.0
        else:
            v0 = state.v_theta[self.body0.index]
            a0 = state.a_theta[self.body0.index]

        rel_v = state.v_theta[self.body1.index] - v0
        rel_a = state.a_theta[self.body1.index] - a0
        delta = self.speed - rel_v

        total = delta * self.ks - rel_a * self.kd
        limited = min(self.max_torque, max(-self.max_torque, total))

        if not ground:
            state.t[self.body0.index] -= limited
        state.t[self.body1.index] += limited