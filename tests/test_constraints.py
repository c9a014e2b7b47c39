import math
import random
import sys

import pytest

from scs2d.constraints import (
    ClutchConstraint,
    ConstantRotationConstraint,
    FixedPositionConstraint,
    FixedRotationConstraint,
    LineConstraint,
    LinkConstraint,
    RotationFrictionConstraint,
    SimpleGearConstraint,
)
from scs2d.rigid_body import RigidBody
from scs2d.system_state import SystemState

DBL_MAX = sys.float_info.max


def make_state(n):
    state = SystemState()
    state.resize(n, n)
    return state


def randomize(state, rng):
    for i in range(state.n):
        state.p_x[i] = (rng.random() - 0.5) * 100
        state.p_y[i] = (rng.random() - 0.5) * 100
        state.theta[i] = (rng.random() - 0.5) * 100
        state.v_x[i] = state.v_y[i] = state.v_theta[i] = 0.0


def verify(state, constraint):
    """Check J against finite differences of C, and J_dot against those of J."""
    n = constraint.body_count
    m = constraint.constraint_count
    d = 0.1
    dt = 0.001
    q = [state.p_x, state.p_y, state.theta]
    q_dot = [state.v_x, state.v_y, state.v_theta]

    for coord in range(n * 3):
        axis, body = coord % 3, coord // 3
        original = q[axis][body]
        q_dot[axis][body] = d
        o0 = constraint.calculate(state)
        q[axis][body] += d * dt
        o1 = constraint.calculate(state)
        q[axis][body] = original
        q_dot[axis][body] = 0.0

        for i in range(m):
            dc = (o1.c[i] - o0.c[i]) / (d * dt)
            assert dc == pytest.approx((o0.j[i][coord] + o1.j[i][coord]) / 2, abs=1e-4)

        for k in range(n * 3):
            for row in range(m):
                j_dot = (o1.j[row][k] - o0.j[row][k]) / dt
                expected = (o0.j_dot[row][k] + o1.j_dot[row][k]) / 2
                assert j_dot == pytest.approx(expected, abs=1e-4)


def test_fixed_position_derivatives():
    body = RigidBody(index=0)
    constraint = FixedPositionConstraint(body)
    constraint.local_x = 0.3
    constraint.local_y = -0.7
    constraint.world_x = 2.0
    constraint.world_y = 1.0
    state = make_state(1)
    rng = random.Random(0)
    for _ in range(5):
        randomize(state, rng)
        verify(state, constraint)


def test_fixed_position_zero_when_point_at_target():
    body = RigidBody(index=0)
    constraint = FixedPositionConstraint(body)
    constraint.local_x, constraint.local_y = 1.0, 0.5
    state = make_state(1)
    state.p_x[0], state.p_y[0], state.theta[0] = 3.0, -2.0, 0.8
    constraint.world_x, constraint.world_y = state.local_to_world(1.0, 0.5, 0)
    out = constraint.calculate(state)
    assert out.c[0] == pytest.approx(0.0, abs=1e-12)
    assert out.c[1] == pytest.approx(0.0, abs=1e-12)
    assert out.ks[:2] == [10.0, 10.0]
    assert out.kd[:2] == [1.0, 1.0]
    assert out.limits[0] == [-DBL_MAX, DBL_MAX]


def test_link_derivatives():
    a, b = RigidBody(index=0), RigidBody(index=1)
    constraint = LinkConstraint(a, b)
    constraint.local_x_1, constraint.local_y_1 = 0.5, 0.2
    constraint.local_x_2, constraint.local_y_2 = -0.4, 1.1
    state = make_state(2)
    rng = random.Random(1)
    for _ in range(5):
        randomize(state, rng)
        verify(state, constraint)


def test_link_is_antisymmetric_between_bodies():
    a, b = RigidBody(index=0), RigidBody(index=1)
    state = make_state(2)
    randomize(state, random.Random(2))
    forward = LinkConstraint(a, b).calculate(state)
    backward = LinkConstraint(b, a).calculate(state)
    assert forward.c[0] == pytest.approx(-backward.c[0])
    assert forward.c[1] == pytest.approx(-backward.c[1])


def test_line_derivatives():
    body = RigidBody(index=0)
    constraint = LineConstraint(body)
    constraint.local_x, constraint.local_y = 0.2, 0.6
    constraint.p0_x, constraint.p0_y = 1.0, -3.0
    constraint.dx, constraint.dy = math.cos(0.4), math.sin(0.4)
    state = make_state(1)
    rng = random.Random(3)
    for _ in range(5):
        randomize(state, rng)
        verify(state, constraint)


def test_line_zero_for_point_on_line():
    body = RigidBody(index=0)
    constraint = LineConstraint(body)
    constraint.dx, constraint.dy = 1.0, 0.0
    constraint.p0_y = 2.0
    state = make_state(1)
    state.p_x[0], state.p_y[0] = 17.0, 2.0
    assert constraint.calculate(state).c[0] == pytest.approx(0.0)


def test_fixed_rotation_error_is_angle_difference():
    body = RigidBody(index=0)
    constraint = FixedRotationConstraint(body)
    constraint.rotation = 0.75
    state = make_state(1)
    state.theta[0] = 0.75
    out = constraint.calculate(state)
    assert out.c[0] == pytest.approx(0.0)
    assert out.j[0][:3] == [0.0, 0.0, 1.0]
    verify(state, constraint)


def test_clutch_output():
    constraint = ClutchConstraint(RigidBody(index=0), RigidBody(index=1))
    constraint.min_torque, constraint.max_torque = -5.0, 5.0
    out = constraint.calculate(make_state(2))
    assert out.j[0] == [0.0, 0.0, -1.0, 0.0, 0.0, 1.0]
    assert out.j_dot[0] == [0.0] * 6
    assert out.limits[0] == [-5.0, 5.0]
    assert (out.ks[0], out.kd[0]) == (10.0, 1.0)


def test_clutch_default_limits_unbounded():
    out = ClutchConstraint().calculate(make_state(2))
    assert out.limits[0] == [-DBL_MAX, DBL_MAX]


def test_constant_rotation_bias_is_speed():
    constraint = ConstantRotationConstraint(RigidBody(index=0))
    constraint.rotation_speed = 4.5
    constraint.min_torque, constraint.max_torque = -2.0, 3.0
    out = constraint.calculate(make_state(1))
    assert out.v_bias[0] == 4.5
    assert out.j[0][:3] == [0.0, 0.0, 1.0]
    assert out.limits[0] == [-2.0, 3.0]


def test_rotation_friction_limits():
    constraint = RotationFrictionConstraint(RigidBody(index=0))
    constraint.min_torque, constraint.max_torque = -7.0, 7.0
    out = constraint.calculate(make_state(1))
    assert out.limits[0] == [-7.0, 7.0]
    assert out.c[0] == 0.0


def test_rotation_friction_requires_body():
    with pytest.raises(ValueError):
        RotationFrictionConstraint().calculate(make_state(1))


@pytest.mark.parametrize(
    "factory",
    [FixedPositionConstraint, FixedRotationConstraint, LineConstraint],
)
def test_single_body_constraints_require_body(factory):
    with pytest.raises(ValueError):
        factory().calculate(make_state(1))


def test_link_requires_both_bodies():
    with pytest.raises(ValueError):
        LinkConstraint(RigidBody(index=0)).calculate(make_state(2))


def test_gear_ratio_and_neutral():
    constraint = SimpleGearConstraint(RigidBody(index=0), RigidBody(index=1))
    constraint.ratio = 2.5
    out = constraint.calculate(make_state(2))
    assert out.j[0] == [0.0, 0.0, 1.0, 0.0, 0.0, -2.5]
    assert out.limits[0] == [-DBL_MAX, DBL_MAX]

    constraint.neutral = True
    assert constraint.calculate(make_state(2)).limits[0] == [0.0, 0.0]


@pytest.mark.parametrize(
    "factory, count, bodies",
    [
        (ClutchConstraint, 1, 2),
        (ConstantRotationConstraint, 1, 1),
        (FixedPositionConstraint, 2, 1),
        (FixedRotationConstraint, 1, 1),
        (LineConstraint, 1, 1),
        (LinkConstraint, 2, 2),
        (RotationFrictionConstraint, 1, 1),
        (SimpleGearConstraint, 1, 2),
    ],
)
def test_counts(factory, count, bodies):
    constraint = factory()
    assert constraint.constraint_count == count
    assert constraint.body_count == bodies