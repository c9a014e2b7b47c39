"""Flat per-body and per-constraint arrays that the solvers operate on."""

from __future__ import annotations

import math

_BODY_FIELDS = (
    "a_theta", "v_theta", "theta",
    "a_x", "a_y", "v_x", "v_y", "p_x", "p_y",
    "f_x", "f_y", "t",
    "m",
)
_REACTION_FIELDS = ("r_x", "r_y", "r_t")


class SystemState:
    """State of every body (index ``0..n-1``) and every scalar constraint.

    Reaction arrays ``r_x``, ``r_y`` and ``r_t`` hold two slots per scalar
    constraint, one for each body it may act on.
    """

    def __init__(self) -> None:
        self.n = 0
        self.n_c = 0
        self.dt = 0.0
        self.index_map: list[int] = []
        self.a_theta: list[float] = []
        self.v_theta: list[float] = []
        self.theta: list[float] = []
        self.a_x: list[float] = []
        self.a_y: list[float] = []
        self.v_x: list[float] = []
        self.v_y: list[float] = []
        self.p_x: list[float] = []
        self.p_y: list[float] = []
        self.f_x: list[float] = []
        self.f_y: list[float] = []
        self.t: list[float] = []
        self.m: list[float] = []
        self.r_x: list[float] = []
        self.r_y: list[float] = []
        self.r_t: list[float] = []

    def resize(self, body_count: int, constraint_count: int) -> None:
        """Grow storage; a state already large enough is left untouched."""
        if body_count < 0 or constraint_count < 0:
            raise ValueError("counts must be non-negative")
        if self.n >= body_count and self.n_c >= constraint_count:
            return
        self.n = body_count
        self.n_c = constraint_count
        self.index_map = [0] * constraint_count
        for name in _BODY_FIELDS:
            setattr(self, name, [0.0] * body_count)
        for name in _REACTION_FIELDS:
            setattr(self, name, [0.0] * (2 * constraint_count))

    def copy_from(self, state: "SystemState") -> None:
        """Make this state hold the values of ``state``."""
        self.resize(state.n, state.n_c)
        if state.n == 0:
            return
        self.index_map[:len(state.index_map)] = state.index_map
        for name in _BODY_FIELDS + _REACTION_FIELDS:
            source = getattr(state, name)
            getattr(self, name)[:len(source)] = source

    def _check(self, body: int) -> None:
        if not 0 <= body < self.n:
            raise IndexError(f"body {body} out of range for {self.n} bodies")

    def local_to_world(self, x: float, y: float, body: int) -> tuple[float, float]:
        """Map a point in a body's coordinates to world coordinates."""
        self._check(body)
        cos_theta = math.cos(self.theta[body])
        sin_theta = math.sin(self.theta[body])
        return (
            cos_theta * x - sin_theta * y + self.p_x[body],
            sin_theta * x + cos_theta * y + self.p_y[body],
        )

    def velocity_at_point(self, x: float, y: float, body: int) -> tuple[float, float]:
        """World velocity of a point given in a body's coordinates."""
        w_x, w_y = self.local_to_world(x, y, body)
        omega = self.v_theta[body]
        return (
            self.v_x[body] - omega * (w_y - self.p_y[body]),
            self.v_y[body] + omega * (w_x - self.p_x[body]),
        )

    def apply_force(
        self, x_l: float, y_l: float, f_x: float, f_y: float, body: int
    ) -> None:
        """Accumulate a world-space force applied at a body-local point."""
        w_x, w_y = self.local_to_world(x_l, y_l, body)
        self.f_x[body] += f_x
        self.f_y[body] += f_y
        self.t[body] += (w_y - self.p_y[body]) * -f_x + (w_x - self.p_x[body]) * f_y