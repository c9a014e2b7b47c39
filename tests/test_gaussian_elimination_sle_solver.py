from itertools import chain

import pytest

from scs2d.gaussian_elimination_sle_solver import GaussianEliminationSleSolver
from scs2d.matrix import Matrix
from scs2d.sle_solver import SolverError
from scs2d.sparse_matrix import SparseMatrix

STRIDE = 3

ROWS_4X6 = (
    (500.0, 2.0, 4.0, 0.0, 0.0, 0.0),
    (5.0, -700.0, 10.0, 45.0, 10.0, 20.0),
    (0.0, 5.0, 10.0, 200.0, 5.0, 5.0),
    (10.0, 20.0, -10.0, 30.0, 500.0, 300.0),
)


def from_rows(rows):
    result = Matrix(len(rows[0]), len(rows))
    result.set_values(list(chain.from_iterable(rows)))
    return result


def column(*values):
    return from_rows([(v,) for v in values])


def sparse_from_rows(rows):
    width = len(rows[0])
    sparse = SparseMatrix(width, len(rows), stride=STRIDE, entries=2)
    for r, row in enumerate(rows):
        chunks = (row[start:start + STRIDE] for start in range(0, width, STRIDE))
        used = [(block, chunk) for block, chunk in enumerate(chunks) if any(chunk)]
        for entry, (block, chunk) in enumerate(used):
            sparse.set_block(r, entry, block)
            for k, v in enumerate(chunk):
                sparse.set(r, entry, k, v)
    return sparse


def test_basic():
    rows = ((500.0, 0.0, 2.0), (0.0, -600.0, 1.0))
    right = column(50.0, 100.0)
    s = Matrix(1, 3, 1.0)

    solution = GaussianEliminationSleSolver().solve(sparse_from_rows(rows), s, right)

    j_mat = from_rows(rows)
    check = j_mat.right_scale(s).multiply(j_mat.transpose()).multiply(solution)
    assert check.get(0, 0) == pytest.approx(50.0, abs=1e-7)
    assert check.get(0, 1) == pytest.approx(100.0, abs=1e-7)


def test_4x4():
    j_mat = from_rows(ROWS_4X6)
    right = column(5.0, 10.0, -1.0, 20.0)
    s = Matrix(1, 6, 1.0)

    j_sparse = sparse_from_rows(ROWS_4X6)
    assert j_sparse.expand().equals(j_mat)

    jw = j_mat.right_scale(s)
    jw_sparse = j_sparse.right_scale(s)
    assert jw_sparse.expand().equals(jw)

    l_mat = jw.multiply(j_mat.transpose())
    assert jw_sparse.multiply_transpose(j_sparse).equals(l_mat)

    solution = GaussianEliminationSleSolver().solve(j_sparse, s, right)
    assert l_mat.multiply(solution).equals(right)


def test_singular_system_raises():
    j = sparse_from_rows(((1.0, 0.0, 0.0), (1.0, 0.0, 0.0)))
    with pytest.raises(SolverError):
        GaussianEliminationSleSolver().solve(j, Matrix(1, 3, 1.0), column(1.0, 2.0))


def test_mismatched_right_raises():
    j = sparse_from_rows(((1.0, 0.0, 0.0), (0.0, 0.0, 0.0)))
    with pytest.raises(ValueError):
        GaussianEliminationSleSolver().solve(j, Matrix(1, 3, 1.0), Matrix(1, 3))


def test_limits_not_supported():
    solver = GaussianEliminationSleSolver()
    assert solver.supports_limits is False
    j = sparse_from_rows(((1.0, 0.0, 0.0),))
    with pytest.raises(SolverError):
        solver.solve_with_limits(j, Matrix(1, 3, 1.0), column(1.0), Matrix(2, 1))