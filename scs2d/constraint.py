"""Base class for constraints and the per-evaluation output they produce."""

from __future__ import annotations

import sys
from dataclasses import dataclass, field

from .rigid_body import RigidBody
from .system_state import SystemState

MAX_CONSTRAINT_COUNT = 3
MAX_BODY_COUNT = 2
DBL_MAX = sys.float_info.max


def _zeros() -> list[float]:
    return [0.0] * MAX_CONSTRAINT_COUNT


def _jacobian_rows() -> list[list[float]]:
    return [[0.0] * (3 * MAX_BODY_COUNT) for _ in range(MAX_CONSTRAINT_COUNT)]


def _no_limits() -> list[list[float]]:
    return [[-DBL_MAX, DBL_MAX] for _ in range(MAX_CONSTRAINT_COUNT)]


@dataclass
class ConstraintOutput:
    """Values a constraint reports for the current state.

    Each list has one entry per scalar constraint. Jacobian rows hold three
    columns (x, y, theta) for each body the constraint acts on. Limits are
    ``[min, max]`` pairs and default to unbounded.
    """

    c: list[float] = field(default_factory=_zeros)
    j: list[list[float]] = field(default_factory=_jacobian_rows)
    j_dot: list[list[float]] = field(default_factory=_jacobian_rows)
    v_bias: list[float] = field(default_factory=_zeros)
    limits: list[list[float]] = field(default_factory=_no_limits)
    ks: list[float] = field(default_factory=_zeros)
    kd: list[float] = field(default_factory=_zeros)


class Constraint:
    """A constraint of up to three scalar equations acting on up to two bodies.

    ``f_x``, ``f_y`` and ``f_t`` hold the reaction forces found for each
    scalar constraint and body after the system has been processed.
    """

    MAX_CONSTRAINT_COUNT = MAX_CONSTRAINT_COUNT
    MAX_BODY_COUNT = MAX_BODY_COUNT

    def __init__(self, constraint_count: int, body_count: int) -> None:
        if not 0 <= constraint_count <= MAX_CONSTRAINT_COUNT:
            raise ValueError(
                f"constraint count must be between 0 and {MAX_CONSTRAINT_COUNT}"
            )
        if not 0 <= body_count <= MAX_BODY_COUNT:
            raise ValueError(f"body count must be between 0 and {MAX_BODY_COUNT}")
        self._constraint_count = constraint_count
        self.body_count = body_count
        self.index = -1
        self.bodies: list[RigidBody | None] = [None] * MAX_BODY_COUNT
        self.f_x = [[0.0] * MAX_BODY_COUNT for _ in range(MAX_CONSTRAINT_COUNT)]
        self.f_y = [[0.0] * MAX_BODY_COUNT for _ in range(MAX_CONSTRAINT_COUNT)]
        self.f_t = [[0.0] * MAX_BODY_COUNT for _ in range(MAX_CONSTRAINT_COUNT)]

    @property
    def constraint_count(self) -> int:
        """Number of scalar constraint equations."""
        return self._constraint_count

    def _body_index(self, slot: int) -> int:
        body = self.bodies[slot]
        if body is None:
            raise ValueError(f"{type(self).__name__} has no body in slot {slot}")
        return body.index

    def calculate(self, state: SystemState) -> ConstraintOutput:
        """Evaluate the constraint; the base constraint reports nothing."""
        return ConstraintOutput()