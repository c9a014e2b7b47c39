"""Conjugate gradient solver working directly on the sparse Jacobian."""

from __future__ import annotations

from .matrix import Matrix
from .sle_solver import SleSolver, SolverError
from .sparse_matrix import SparseMatrix


class ConjugateGradientSleSolver(SleSolver):
    """Conjugate gradient on ``J W J^T`` without forming it densely.

    Iteration stops once every residual entry is within
    ``max(|max_error * right_i|, min_error)``.
    """

    def __init__(
        self,
        max_iterations: int = 1000,
        max_error: float = 1e-2,
        min_error: float = 1e-3,
    ) -> None:
        super().__init__(False)
        self.max_iterations = max_iterations
        self.max_error = max_error
        self.min_error = min_error

    @staticmethod
    def _apply(j: SparseMatrix, w: Matrix, x: Matrix) -> Matrix:
        return j.multiply(w.component_multiply(j.transpose_multiply_vector(x)))

    def _sufficiently_small(self, residual: Matrix, right: Matrix) -> bool:
        return all(
            abs(residual.get(0, i))
            <= max(abs(self.max_error * right.get(0, i)), self.min_error)
            for i in range(residual.height)
        )

    def solve(
        self,
        j: SparseMatrix,
        w: Matrix,
        right: Matrix,
        previous: Matrix | None = None,
    ) -> Matrix:
        n = right.height
        if right.width != 1 or n != j.height:
            raise ValueError("right must be a column vector with one entry per row of J")

        if previous is not None and previous.height == n:
            x = previous.copy()
        else:
            x = Matrix(1, n)

        r = right.copy()
        r.madd(self._apply(j, w, x), -1.0)
        if self._sufficiently_small(r, right):
            return x

        p = r.copy()
        for _ in range(self.max_iterations):
            ap = self._apply(j, w, p)
            rk_mag = r.vector_magnitude_squared()
            denominator = p.dot(ap)
            if denominator == 0:
                raise SolverError("search direction is degenerate")
            alpha = rk_mag / denominator
            x.madd(p, alpha)
            r.madd(ap, -alpha)

            if self._sufficiently_small(r, right):
                return x

            beta = r.vector_magnitude_squared() / rk_mag
            p.pmadd(r, beta)

        raise SolverError(f"no convergence after {self.max_iterations} iterations")