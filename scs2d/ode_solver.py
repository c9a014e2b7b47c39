"""Time integrators stepping a SystemState forward."""

from __future__ import annotations

from .system_state import SystemState

_POSITION_RATES = (("p_x", "v_x"), ("p_y", "v_y"), ("theta", "v_theta"))
_VELOCITY_RATES = (("v_x", "a_x"), ("v_y", "a_y"), ("v_theta", "a_theta"))


def _advance(system: SystemState, pairs, dt: float) -> None:
    """Add ``rate * dt`` to each named quantity of every body."""
    for value_name, rate_name in pairs:
        values = getattr(system, value_name)
        rates = getattr(system, rate_name)
        for i in range(system.n):
            values[i] += rates[i] * dt


class OdeSolver:
    """Base integrator: drives a start/step/solve/end cycle per time step.

    ``step`` prepares the state for evaluation and returns True on the last
    stage of the time step; ``solve`` then integrates using the accelerations
    evaluated for that stage.
    """

    def __init__(self) -> None:
        self.dt = 0.0

    def start(self, initial: SystemState, dt: float) -> None:
        self.dt = dt

    def step(self, system: SystemState) -> bool:
        return True

    def solve(self, system: SystemState) -> None:
        """Integrate one stage; the base solver leaves the state alone."""

    def end(self) -> None:
        """Finish the time step."""


class _SingleStageSolver(OdeSolver):
    """Integrator that evaluates once per time step."""

    def _prepare(self, system: SystemState) -> bool:
        system.dt = self.dt
        return True

    def _integrate(self, system: SystemState, first, second) -> None:
        system.dt = self.dt
        _advance(system, first, self.dt)
        _advance(system, second, self.dt)


class EulerOdeSolver(_SingleStageSolver):
    """Explicit Euler: positions advance with the old velocities."""

    def step(self, system: SystemState) -> bool:
        return self._prepare(system)

    def solve(self, system: SystemState) -> None:
        self._integrate(system, _POSITION_RATES, _VELOCITY_RATES)


class NsvOdeSolver(_SingleStageSolver):
    """Semi-implicit Euler: velocities advance first, positions use them."""

    def step(self, system: SystemState) -> bool:
        return self._prepare(system)

    def solve(self, system: SystemState) -> None:
        self._integrate(system, _VELOCITY_RATES, _POSITION_RATES)