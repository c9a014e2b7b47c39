"""Iterative Gauss-Seidel solver, with optional clamping of each unknown."""

from __future__ import annotations

from .matrix import Matrix
from .sle_solver import SleSolver, SolverError
from .sparse_matrix import SparseMatrix


class GaussSeidelSleSolver(SleSolver):
    """Gauss-Seidel iteration on ``J W J^T``; stops when the change is small."""

    def __init__(self, max_iterations: int = 128, min_delta: float = 1e-1) -> None:
        super().__init__(True)
        self.max_iterations = max_iterations
        self.min_delta = min_delta

    @staticmethod
    def _system(j: SparseMatrix, w: Matrix, right: Matrix) -> list[list[float]]:
        if right.width != 1 or right.height != j.height:
            raise ValueError("right must be a column vector with one entry per row of J")
        m = j.right_scale(w).multiply_transpose(j)
        n = m.height
        rows = [[m.get(c, r) for c in range(n)] for r in range(n)]
        if any(rows[i][i] == 0 for i in range(n)):
            raise SolverError("system has a zero on its diagonal")
        return rows

    @staticmethod
    def _start(n: int, previous: Matrix | None) -> list[float]:
        if previous is not None and previous.height == n:
            return [previous.get(0, i) for i in range(n)]
        return [0.0] * n

    @staticmethod
    def _result(x: list[float]) -> Matrix:
        result = Matrix(1, len(x))
        result.set_values(x)
        return result

    def solve(
        self,
        j: SparseMatrix,
        w: Matrix,
        right: Matrix,
        previous: Matrix | None = None,
    ) -> Matrix:
        m = self._system(j, w, right)
        b = [right.get(0, i) for i in range(right.height)]
        x = self._start(len(b), previous)

        for _ in range(self.max_iterations):
            max_delta = 0.0
            for i, row in enumerate(m):
                s = sum(a * v for c, (a, v) in enumerate(zip(row, x)) if c != i)
                new = (b[i] - s) / row[i]
                min_k = max(1e-3, x[i])
                max_delta = max(max_delta, (abs(new) - min_k) / min_k)
                x[i] = new
            if max_delta < self.min_delta:
                return self._result(x)

        raise SolverError(f"no convergence after {self.max_iterations} iterations")

    def solve_with_limits(
        self,
        j: SparseMatrix,
        w: Matrix,
        right: Matrix,
        limits: Matrix,
        previous: Matrix | None = None,
    ) -> Matrix:
        m = self._system(j, w, right)
        n = len(m)
        if limits.width != 2 or limits.height != n:
            raise ValueError("limits must have two columns and one row per unknown")
        b = [right.get(0, i) for i in range(n)]
        bounds = [(limits.get(0, i), limits.get(1, i)) for i in range(n)]
        x = self._start(n, previous)

        for _ in range(self.max_iterations):
            max_delta = 0.0
            for i, row in enumerate(m):
                s = sum(a * v for c, (a, v) in enumerate(zip(row, x)) if c != i)
                new = (b[i] - s) / row[i]
                low, high = bounds[i]
                clamped = max(low, min(high, new))
                min_k = max(1e-3, abs(x[i]))
                max_delta = max(max_delta, abs(clamped - x[i]) / min_k)
                x[i] = clamped
            if max_delta < self.min_delta:
                return self._result(x)

        raise SolverError(f"no convergence after {self.max_iterations} iterations")