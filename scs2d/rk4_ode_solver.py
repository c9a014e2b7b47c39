"""Classical fourth-order Runge-Kutta integrator."""

from __future__ import annotations

from enum import Enum, auto

from .ode_solver import OdeSolver
from .system_state import SystemState


class RkStage(Enum):
    STAGE_1 = auto()
    STAGE_2 = auto()
    STAGE_3 = auto()
    STAGE_4 = auto()
    COMPLETE = auto()
    UNDEFINED = auto()


_NEXT_STAGE = {
    RkStage.STAGE_1: RkStage.STAGE_2,
    RkStage.STAGE_2: RkStage.STAGE_3,
    RkStage.STAGE_3: RkStage.STAGE_4,
    RkStage.STAGE_4: RkStage.COMPLETE,
}

_STAGE_WEIGHT = {
    RkStage.STAGE_1: 1.0,
    RkStage.STAGE_2: 2.0,
    RkStage.STAGE_3: 2.0,
    RkStage.STAGE_4: 1.0,
}

_KINEMATIC_FIELDS = ("v_theta", "theta", "v_x", "v_y", "p_x", "p_y")
_REACTION_FIELDS = ("r_x", "r_y", "r_t")


class Rk4OdeSolver(OdeSolver):
    """Four evaluation stages per time step, combined with weights 1-2-2-1."""

    def __init__(self) -> None:
        super().__init__()
        self.stage = RkStage.UNDEFINED
        self.next_stage = RkStage.UNDEFINED
        self._initial_state = SystemState()
        self._accumulator = SystemState()

    def start(self, initial: SystemState, dt: float) -> None:
        super().start(initial, dt)
        self._initial_state.copy_from(initial)
        self._accumulator.copy_from(initial)
        self.stage = RkStage.STAGE_1

    def step(self, system: SystemState) -> bool:
        if self.stage is RkStage.STAGE_1:
            system.dt = 0.0
        elif self.stage in (RkStage.STAGE_2, RkStage.STAGE_3):
            self._predict(system, self.dt / 2.0)
            system.dt = self.dt / 2.0
        elif self.stage is RkStage.STAGE_4:
            self._predict(system, self.dt)
            system.dt = self.dt

        self.next_stage = _NEXT_STAGE.get(self.stage, RkStage.UNDEFINED)
        return self.next_stage is RkStage.COMPLETE

    def _predict(self, state: SystemState, h: float) -> None:
        initial = self._initial_state
        for i in range(state.n):
            state.v_theta[i] = initial.v_theta[i] + h * state.a_theta[i]
            state.theta[i] = initial.theta[i] + h * state.v_theta[i]
            state.v_x[i] = initial.v_x[i] + h * state.a_x[i]
            state.v_y[i] = initial.v_y[i] + h * state.a_y[i]
            state.p_x[i] = initial.p_x[i] + h * state.v_x[i]
            state.p_y[i] = initial.p_y[i] + h * state.v_y[i]

    def solve(self, system: SystemState) -> None:
        factor = (self.dt / 6.0) * _STAGE_WEIGHT.get(self.stage, 0.0)
        acc = self._accumulator

        for i in range(system.n):
            acc.v_theta[i] += factor * system.a_theta[i]
            acc.theta[i] += factor * system.v_theta[i]
            acc.v_x[i] += factor * system.a_x[i]
            acc.v_y[i] += factor * system.a_y[i]
            acc.p_x[i] += factor * system.v_x[i]
            acc.p_y[i] += factor * system.v_y[i]

        for i in range(system.n_c):
            acc.r_x[i] += factor * system.r_x[i]
            acc.r_y[i] += factor * system.r_y[i]
            acc.r_t[i] += factor * system.r_t[i]

        if self.stage is RkStage.STAGE_4:
            for name in _KINEMATIC_FIELDS:
                getattr(system, name)[:system.n] = getattr(acc, name)[:system.n]
            for name in _REACTION_FIELDS:
                getattr(system, name)[:system.n_c] = getattr(acc, name)[:system.n_c]

        self.stage = self.next_stage

    def end(self) -> None:
        super().end()
        self.stage = self.next_stage = RkStage.UNDEFINED