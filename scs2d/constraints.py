"""Concrete constraints between rigid bodies and the world."""

from __future__ import annotations

import math
from typing import Sequence

from .constraint import DBL_MAX, Constraint, ConstraintOutput
from .rigid_body import RigidBody
from .system_state import SystemState


class _LocalPoint:
    """A point fixed in a body's frame, with its angle derivatives."""

    def __init__(self, state: SystemState, body: int, lx: float, ly: float) -> None:
        self.p_x = state.p_x[body]
        self.p_y = state.p_y[body]
        self.theta_dot = state.v_theta[body]
        self.cos = math.cos(state.theta[body])
        self.sin = math.sin(state.theta[body])
        self.lx = lx
        self.ly = ly

    def world(self) -> tuple[float, float]:
        c, s, lx, ly = self.cos, self.sin, self.lx, self.ly
        return self.p_x + c * lx - s * ly, self.p_y + s * lx + c * ly

    def jacobian(self) -> tuple[float, float]:
        """Derivative of the world position with respect to the body angle."""
        c, s, lx, ly = self.cos, self.sin, self.lx, self.ly
        return -s * lx - c * ly, c * lx - s * ly

    def jacobian_dot(self) -> tuple[float, float]:
        """Time derivative of :meth:`jacobian`."""
        c, s, lx, ly, w = self.cos, self.sin, self.lx, self.ly, self.theta_dot
        return -c * w * lx + s * w * ly, -s * w * lx - c * w * ly


class _TunedConstraint(Constraint):
    """Constraint with stiffness and damping and the usual output assembly."""

    def __init__(
        self, constraint_count: int, body_count: int, *bodies: RigidBody | None
    ) -> None:
        super().__init__(constraint_count, body_count)
        for slot, body in enumerate(bodies):
            self.bodies[slot] = body
        self.ks = 10.0
        self.kd = 1.0

    def _output(
        self,
        jacobian: Sequence[Sequence[float]],
        c: Sequence[float],
        jacobian_dot: Sequence[Sequence[float]] = (),
        v_bias: float = 0.0,
        limits: tuple[float, float] | None = None,
    ) -> ConstraintOutput:
        out = ConstraintOutput()
        for row, values in enumerate(jacobian):
            out.j[row][: len(values)] = list(values)
            out.ks[row] = self.ks
            out.kd[row] = self.kd
            out.c[row] = c[row]
            out.v_bias[row] = v_bias
        for row, values in enumerate(jacobian_dot):
            out.j_dot[row][: len(values)] = list(values)
        if limits is not None:
            out.limits[0] = list(limits)
        return out


class _TorqueLimitedConstraint(_TunedConstraint):
    """Single-row angular constraint whose torque lies in a range."""

    def __init__(self, body_count: int, *bodies: RigidBody | None) -> None:
        super().__init__(1, body_count, *bodies)
        self.max_torque = DBL_MAX
        self.min_torque = -DBL_MAX

    @property
    def _torque_limits(self) -> tuple[float, float]:
        return self.min_torque, self.max_torque


class ClutchConstraint(_TorqueLimitedConstraint):
    """Matches the angular velocities of two bodies within a torque range."""

    def __init__(
        self, body1: RigidBody | None = None, body2: RigidBody | None = None
    ) -> None:
        super().__init__(2, body1, body2)

    def calculate(self, state: SystemState) -> ConstraintOutput:
        return self._output(
            [[0.0, 0.0, -1.0, 0.0, 0.0, 1.0]], [0.0], limits=self._torque_limits
        )


class ConstantRotationConstraint(_TorqueLimitedConstraint):
    """Drives a body's angular velocity towards a fixed speed."""

    def __init__(self, body: RigidBody | None = None) -> None:
        super().__init__(1, body)
        self.rotation_speed = 0.0

    def calculate(self, state: SystemState) -> ConstraintOutput:
        return self._output(
            [[0.0, 0.0, 1.0]],
            [0.0],
            v_bias=self.rotation_speed,
            limits=self._torque_limits,
        )


class RotationFrictionConstraint(_TorqueLimitedConstraint):
    """Resists a body's rotation with a bounded torque."""

    def __init__(self, body: RigidBody | None = None) -> None:
        super().__init__(1, body)

    def calculate(self, state: SystemState) -> ConstraintOutput:
        self._body_index(0)
        return self._output([[0.0, 0.0, 1.0]], [0.0], limits=self._torque_limits)


class FixedPositionConstraint(_TunedConstraint):
    """Pins a point on a body to a point in the world."""

    def __init__(self, body: RigidBody | None = None) -> None:
        super().__init__(2, 1, body)
        self.local_x = self.local_y = 0.0
        self.world_x = self.world_y = 0.0

    def calculate(self, state: SystemState) -> ConstraintOutput:
        point = _LocalPoint(state, self._body_index(0), self.local_x, self.local_y)
        x, y = point.world()
        j_x, j_y = point.jacobian()
        jd_x, jd_y = point.jacobian_dot()
        return self._output(
            [[1.0, 0.0, j_x], [0.0, 1.0, j_y]],
            [x - self.world_x, y - self.world_y],
            [[0.0, 0.0, jd_x], [0.0, 0.0, jd_y]],
        )


class FixedRotationConstraint(_TunedConstraint):
    """Holds a body at a fixed orientation."""

    def __init__(self, body: RigidBody | None = None) -> None:
        super().__init__(1, 1, body)
        self.rotation = 0.0

    def calculate(self, state: SystemState) -> ConstraintOutput:
        theta = state.theta[self._body_index(0)]
        return self._output([[0.0, 0.0, 1.0]], [theta - self.rotation])


class LineConstraint(_TunedConstraint):
    """Keeps a point on a body on the line through ``p0`` along ``(dx, dy)``."""

    def __init__(self, body: RigidBody | None = None) -> None:
        super().__init__(1, 1, body)
        self.local_x = self.local_y = 0.0
        self.p0_x = self.p0_y = 0.0
        self.dx = self.dy = 0.0

    def calculate(self, state: SystemState) -> ConstraintOutput:
        point = _LocalPoint(state, self._body_index(0), self.local_x, self.local_y)
        x, y = point.world()
        j_x, j_y = point.jacobian()
        jd_x, jd_y = point.jacobian_dot()

        perp_x = -self.dy
        perp_y = self.dx
        delta_x = x - self.p0_x
        delta_y = y - self.p0_y

        return self._output(
            [[perp_x, perp_y, j_x * perp_x + j_y * perp_y]],
            [delta_x * perp_x + delta_y * perp_y],
            [[0.0, 0.0, jd_x * perp_x + jd_y * perp_y]],
        )


class LinkConstraint(_TunedConstraint):
    """Joins a point on one body to a point on another."""

    def __init__(
        self, body1: RigidBody | None = None, body2: RigidBody | None = None
    ) -> None:
        super().__init__(2, 2, body1, body2)
        self.local_x_1 = self.local_y_1 = 0.0
        self.local_x_2 = self.local_y_2 = 0.0

    def calculate(self, state: SystemState) -> ConstraintOutput:
        first = _LocalPoint(state, self._body_index(0), self.local_x_1, self.local_y_1)
        second = _LocalPoint(state, self._body_index(1), self.local_x_2, self.local_y_2)

        x1, y1 = first.world()
        x2, y2 = second.world()
        j1_x, j1_y = first.jacobian()
        j2_x, j2_y = second.jacobian()
        jd1_x, jd1_y = first.jacobian_dot()
        jd2_x, jd2_y = second.jacobian_dot()

        return self._output(
            [
                [1.0, 0.0, j1_x, -1.0, 0.0, -j2_x],
                [0.0, 1.0, j1_y, 0.0, -1.0, -j2_y],
            ],
            [x1 - x2, y1 - y2],
            [
                [0.0, 0.0, jd1_x, 0.0, 0.0, -jd2_x],
                [0.0, 0.0, jd1_y, 0.0, 0.0, -jd2_y],
            ],
        )


class SimpleGearConstraint(_TunedConstraint):
    """Couples two bodies' rotation by a ratio; in neutral it transmits nothing."""

    def __init__(
        self, body1: RigidBody | None = None, body2: RigidBody | None = None
    ) -> None:
        super().__init__(1, 2, body1, body2)
        self.ratio = 1.0
        self.neutral = False

    def calculate(self, state: SystemState) -> ConstraintOutput:
        return self._output(
            [[0.0, 0.0, 1.0, 0.0, 0.0, -self.ratio]],
            [0.0],
            limits=(0.0, 0.0) if self.neutral else None,
        )