# scs2d

Pure-Python building blocks for a 2D rigid body physics engine built
around a constraint solver: dense and block-sparse matrices, a flat
system state, time integrators, solvers for the constraint linear
system, constraints that report their Jacobians, and force generators.
It has no dependencies outside the standard library.

## Installing

```
pip install .
```

For running the test suite:

```
pip install .[test]
pytest
```

## What is in the package

- `scs2d.matrix.Matrix`: a dense matrix addressed as `(column, row)`,
  with `multiply`, `transpose`, `left_scale`, `right_scale`, `add`,
  `subtract`, `dot`, `madd`, `pmadd` and friends. Most operations return
  a new matrix; `madd`, `pmadd`, `set`, `add_at` and `swap_rows` work in
  place.
- `scs2d.sparse_matrix.SparseMatrix`: each row holds up to `entries`
  blocks of `stride` columns (3 and 2 by default: x, y and angle for up
  to two bodies). `expand()` gives the dense equivalent.
- `scs2d.rigid_body.RigidBody`: position (`p_x`, `p_y`, `theta`),
  velocity (`v_x`, `v_y`, `v_theta`), `mass`, `inertia` and `index`,
  with `local_to_world`, `world_to_local` and `energy`.
- `scs2d.system_state.SystemState`: per-body lists (`p_x`, `v_x`,
  `a_x`, `f_x`, `t`, `m`, ...) and per-constraint reaction lists
  (`r_x`, `r_y`, `r_t`), with `resize`, `copy_from`, `local_to_world`,
  `velocity_at_point` and `apply_force`.
- Integrators: `scs2d.ode_solver.EulerOdeSolver`,
  `scs2d.ode_solver.NsvOdeSolver` (semi-implicit Euler) and
  `scs2d.rk4_ode_solver.Rk4OdeSolver`. Each runs a
  `start` / `step` / `solve` / `end` cycle per time step; `step`
  returns `True` on the last stage.
- Linear solvers for `(J W Jᵀ) x = right`, each returning the solution
  as a column `Matrix` and raising `scs2d.sle_solver.SolverError` when
  they cannot solve:
  `GaussSeidelSleSolver` (also `solve_with_limits`, clamping each
  unknown), `GaussianEliminationSleSolver` and
  `ConjugateGradientSleSolver`.
- Constraints (`scs2d.constraints`, `scs2d.rolling_constraint`):
  `FixedPositionConstraint`, `FixedRotationConstraint`,
  `LinkConstraint`, `LineConstraint`, `RollingConstraint`,
  `ConstantRotationConstraint`, `ClutchConstraint`,
  `RotationFrictionConstraint` and `SimpleGearConstraint`. Their
  `calculate(state)` returns a `scs2d.constraint.ConstraintOutput` with
  the constraint values `c`, the Jacobian rows `j` and `j_dot`,
  `v_bias`, `limits`, `ks` and `kd`.
- Force generators (`scs2d.forces`): `GravityForceGenerator`,
  `StaticForceGenerator`, `Spring` and `ConstantSpeedMotor`, each
  adding forces and torques into a `SystemState` with `apply(state)`.

## Integrating a state

```python
from scs2d.system_state import SystemState
from scs2d.ode_solver import EulerOdeSolver

state = SystemState()
state.resize(1, 1)
state.v_x[0] = 9.0
state.a_x[0] = -2.0

solver = EulerOdeSolver()
for _ in range(100):
    solver.start(state, 0.1)
    while True:
        done = solver.step(state)
        solver.solve(state)
        if done:
            break
    solver.end()

print(state.v_x[0])  # about -11.0
```

`Rk4OdeSolver` is driven the same way; it takes four passes through
the loop per time step.

## Solving a constraint system

```python
from scs2d.matrix import Matrix
from scs2d.sparse_matrix import SparseMatrix
from scs2d.gaussian_elimination_sle_solver import GaussianEliminationSleSolver

j = SparseMatrix(3, 2)          # 3 columns, 2 rows, one block per row
j.set_block(0, 0, 0)
j.set_block(1, 0, 0)
for k, v in enumerate([500.0, 0.0, 2.0]):
    j.set(0, 0, k, v)
for k, v in enumerate([0.0, -600.0, 1.0]):
    j.set(1, 0, k, v)

w = Matrix(1, 3, 1.0)
right = Matrix(1, 2)
right.set_values([50.0, 100.0])

x = GaussianEliminationSleSolver().solve(j, w, right)
```

## Evaluating a constraint

```python
from scs2d.rigid_body import RigidBody
from scs2d.system_state import SystemState
from scs2d.constraints import FixedPositionConstraint

body = RigidBody(mass=1.0, inertia=1.0, index=0)
state = SystemState()
state.resize(1, 2)
state.p_x[0] = 1.0

pivot = FixedPositionConstraint(body)
pivot.local_x = -1.0   # the pivot point on the body, in body coordinates
out = pivot.calculate(state)
print(out.c[:2])  # [0.0, 0.0]: the pivot sits at the world origin
```

## What the package does not do

There is no rigid body system object here: nothing collects bodies,
constraints and force generators, copies bodies into a `SystemState`,
assembles the Jacobian from each `ConstraintOutput`, calls a linear
solver and an integrator per frame, or writes results back to the
bodies and reports timings. The caller does that assembly, using the
pieces above. There is also no command-line tool.