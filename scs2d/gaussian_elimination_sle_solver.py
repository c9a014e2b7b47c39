"""Direct solver using Gaussian elimination with partial pivoting."""

from __future__ import annotations

import math

from .matrix import Matrix
from .sle_solver import SleSolver, SolverError
from .sparse_matrix import SparseMatrix


class GaussianEliminationSleSolver(SleSolver):
    """Forms ``J W J^T`` densely and eliminates; ``previous`` is ignored."""

    def __init__(self) -> None:
        super().__init__(False)

    def solve(
        self,
        j: SparseMatrix,
        w: Matrix,
        right: Matrix,
        previous: Matrix | None = None,
    ) -> Matrix:
        m_mat = j.right_scale(w).multiply_transpose(j)
        if right.height != m_mat.width:
            raise ValueError("right must have one entry per unknown")

        n = m_mat.width + 1
        m = m_mat.height
        if m == 0:
            return Matrix(1, 0)

        a = [
            [m_mat.get(c, r) for c in range(n - 1)] + [right.get(0, r)]
            for r in range(m)
        ]

        h = k = 0
        while h < m and k < n:
            i_max = max(range(h, m), key=lambda i: abs(a[i][k]))
            if a[i_max][k] == 0:
                k += 1
                continue
            a[h], a[i_max] = a[i_max], a[h]
            pivot_row = a[h]
            for row in a[h + 1:]:
                f = row[k] / pivot_row[k]
                row[k] = 0.0
                for c in range(k + 1, n):
                    row[c] -= pivot_row[c] * f
            h += 1
            k += 1

        if a[m - 1][n - 2] == 0:
            raise SolverError("system is singular")

        x = [0.0] * m
        x[m - 1] = a[m - 1][n - 1] / a[m - 1][n - 2]
        for i in range(m - 2, -1, -1):
            total = sum(a[i][c] * x[c] for c in range(i + 1, m))
            x[i] = (a[i][n - 1] - total) / a[i][i] if a[i][i] != 0 else 0.0

        if any(math.isnan(v) or math.isinf(v) for v in x):
            raise SolverError("solution is not finite")

        result = Matrix(1, m)
        result.set_values(x)
        return result