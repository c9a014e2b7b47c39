import pytest

from scs2d.gauss_seidel_sle_solver import GaussSeidelSleSolver
from scs2d.matrix import Matrix
from scs2d.sle_solver import SolverError
from scs2d.sparse_matrix import SparseMatrix

FLAT_J = [
    500.0, 2.0, 4.0, 0.0, 0.0, 0.0,
    5.0, -700.0, 10.0, 45.0, 10.0, 20.0,
    0.0, 5.0, 10.0, 200.0, 5.0, 5.0,
    10.0, 20.0, -10.0, 30.0, 500.0, 300.0,
]
RIGHT = [5.0, 10.0, -1.0, 20.0]
HUGE = 1e30


def filled(width, height, values):
    result = Matrix(width, height)
    result.set_values(list(values))
    return result


def to_sparse(full, stride=3):
    sparse = SparseMatrix(full.width, full.height, stride=stride, entries=2)
    for row in range(full.height):
        entry = 0
        for block in range(full.width // stride):
            columns = range(block * stride, (block + 1) * stride)
            values = [full.get(column, row) for column in columns]
            if not any(values):
                continue
            sparse.set_block(row, entry, block)
            for k, v in enumerate(values):
                sparse.set(row, entry, k, v)
            entry += 1
    return sparse


def unbounded(n):
    return filled(2, n, [-HUGE, HUGE] * n)


@pytest.fixture
def dense_problem():
    j_mat = filled(6, 4, FLAT_J)
    return j_mat, to_sparse(j_mat), Matrix(1, 6, 1.0), filled(1, 4, RIGHT)


@pytest.fixture
def diagonal_problem():
    j_mat = filled(6, 2, [2.0, 0.0, 0.0, 0.0, 0.0, 0.0,
                          0.0, 0.0, 0.0, 3.0, 0.0, 0.0])
    return j_mat, to_sparse(j_mat), Matrix(1, 6, 1.0)


def test_solve_diagonal_system(diagonal_problem):
    j_mat, j, w = diagonal_problem
    right = filled(1, 2, [8.0, 18.0])
    solution = GaussSeidelSleSolver().solve(j, w, right)
    lhs = j_mat.right_scale(w).multiply(j_mat.transpose())
    assert lhs.multiply(solution).equals(right, 1e-9)


def test_solve_with_limits_dense_system(dense_problem):
    j_mat, j, w, right = dense_problem
    solver = GaussSeidelSleSolver(max_iterations=1000, min_delta=1e-10)
    solution = solver.solve_with_limits(j, w, right, unbounded(4))
    assert solution.height == 4
    lhs = j_mat.right_scale(w).multiply(j_mat.transpose())
    assert lhs.multiply(solution).equals(right, 1e-6)


def test_limits_clamp_solution(diagonal_problem):
    _, j, w = diagonal_problem
    right = filled(1, 2, [8.0, -18.0])
    limits = filled(2, 2, [-1.0, 1.0, -1.0, 1.0])
    solution = GaussSeidelSleSolver().solve_with_limits(j, w, right, limits)
    assert solution.get(0, 0) == pytest.approx(1.0)
    assert solution.get(0, 1) == pytest.approx(-1.0)


def test_previous_solution_is_reused(dense_problem):
    _, j, w, right = dense_problem
    exact = GaussSeidelSleSolver(1000, 1e-10).solve_with_limits(
        j, w, right, unbounded(4))
    again = GaussSeidelSleSolver(max_iterations=1).solve_with_limits(
        j, w, right, unbounded(4), exact)
    assert again.equals(exact, 1e-12)


def test_no_convergence_raises(dense_problem):
    _, j, w, right = dense_problem
    solver = GaussSeidelSleSolver(max_iterations=1, min_delta=1e-12)
    with pytest.raises(SolverError):
        solver.solve_with_limits(j, w, right, unbounded(4))


def test_bad_limits_shape_raises(diagonal_problem):
    _, j, w = diagonal_problem
    with pytest.raises(ValueError):
        GaussSeidelSleSolver().solve_with_limits(
            j, w, filled(1, 2, [1.0, 1.0]), Matrix(1, 2))


def test_supports_limits():
    assert GaussSeidelSleSolver().supports_limits is True