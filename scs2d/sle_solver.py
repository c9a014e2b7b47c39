"""Common interface for solvers of the constraint linear system."""

from __future__ import annotations

from .matrix import Matrix
from .sparse_matrix import SparseMatrix


class SolverError(RuntimeError):
    """Raised when a linear system cannot be solved."""


class SleSolver:
    """Solves ``(J W J^T) x = right`` for ``x``.

    ``W`` is a column vector holding the diagonal of the weight matrix.
    Solvers that support limits can also clamp each unknown to a
    ``[min, max]`` range given as a two-column matrix.
    """

    def __init__(self, supports_limits: bool = False) -> None:
        self._supports_limits = supports_limits

    @property
    def supports_limits(self) -> bool:
        return self._supports_limits

    def solve(
        self,
        j: SparseMatrix,
        w: Matrix,
        right: Matrix,
        previous: Matrix | None = None,
    ) -> Matrix:
        """Return the solution vector; ``previous`` may seed iterative solvers."""
        raise SolverError(f"{type(self).__name__} cannot solve systems")

    def solve_with_limits(
        self,
        j: SparseMatrix,
        w: Matrix,
        right: Matrix,
        limits: Matrix,
        previous: Matrix | None = None,
    ) -> Matrix:
        """Return the solution vector with each entry clamped to its limits."""
        raise SolverError(f"{type(self).__name__} does not support limits")