"""Dense row-major matrix of floats used throughout the solver."""

from __future__ import annotations

from typing import Iterable


class Matrix:
    """A dense matrix addressed as (column, row)."""

    __slots__ = ("_width", "_height", "_rows")

    def __init__(self, width: int = 0, height: int = 0, value: float = 0.0) -> None:
        if width < 0 or height < 0:
            raise ValueError("matrix dimensions must be non-negative")
        self._width = width
        self._height = height
        self._rows = [[value] * width for _ in range(height)]

    @classmethod
    def _from_rows(cls, rows: list[list[float]], width: int) -> "Matrix":
        result = cls()
        result._width = width
        result._height = len(rows)
        result._rows = rows
        return result

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    def __repr__(self) -> str:
        return f"Matrix({self._width}x{self._height}, {self._rows!r})"

    def resize(self, width: int, height: int) -> None:
        """Change the dimensions; contents are zeroed unless the shape is unchanged."""
        if width < 0 or height < 0:
            raise ValueError("matrix dimensions must be non-negative")
        if width == self._width and height == self._height:
            return
        self._width = width
        self._height = height
        self._rows = [[0.0] * width for _ in range(height)]

    def fill(self, value: float) -> None:
        """Set every entry to ``value``."""
        self._rows = [[value] * self._width for _ in range(self._height)]

    def set_values(self, values: Iterable[float]) -> None:
        """Overwrite all entries from a flat, row-major sequence."""
        flat = list(values)
        if len(flat) != self._width * self._height:
            raise ValueError(
                f"expected {self._width * self._height} values, got {len(flat)}"
            )
        w = self._width
        self._rows = [flat[r * w:(r + 1) * w] for r in range(self._height)]

    def copy(self) -> "Matrix":
        return Matrix._from_rows([list(row) for row in self._rows], self._width)

    def _check(self, column: int, row: int) -> None:
        if not (0 <= column < self._width and 0 <= row < self._height):
            raise IndexError(
                f"({column}, {row}) outside {self._width}x{self._height} matrix"
            )

    def get(self, column: int, row: int) -> float:
        self._check(column, row)
        return self._rows[row][column]

    def set(self, column: int, row: int, value: float) -> None:
        self._check(column, row)
        self._rows[row][column] = value

    def add_at(self, column: int, row: int, value: float) -> None:
        """Add ``value`` to a single entry."""
        self._check(column, row)
        self._rows[row][column] += value

    def _require_same_shape(self, b: "Matrix") -> None:
        if self._width != b._width or self._height != b._height:
            raise ValueError(
                f"shape mismatch: {self._width}x{self._height} "
                f"vs {b._width}x{b._height}"
            )

    def _require_vector(self) -> None:
        if self._width != 1:
            raise ValueError("operation requires a column vector")

    def multiply(self, b: "Matrix") -> "Matrix":
        """Return ``self @ b``."""
        if self._width != b._height:
            raise ValueError("inner dimensions do not match")
        columns = [[row[j] for row in b._rows] for j in range(b._width)]
        rows = [
            [sum(x * y for x, y in zip(row, col)) for col in columns]
            for row in self._rows
        ]
        return Matrix._from_rows(rows, b._width)

    def component_multiply(self, b: "Matrix") -> "Matrix":
        """Return the element-wise product."""
        self._require_same_shape(b)
        rows = [[x * y for x, y in zip(ra, rb)] for ra, rb in zip(self._rows, b._rows)]
        return Matrix._from_rows(rows, self._width)

    def transpose_multiply(self, b: "Matrix") -> "Matrix":
        """Return ``transpose(self) @ b``."""
        if self._height != b._height:
            raise ValueError("row counts do not match")
        return self.transpose().multiply(b)

    def left_scale(self, scale: "Matrix") -> "Matrix":
        """Scale each row by the matching entry of a column vector."""
        if scale._width != 1 or scale._height != self._height:
            raise ValueError("scale must be a column vector with one entry per row")
        rows = [[s[0] * v for v in row] for s, row in zip(scale._rows, self._rows)]
        return Matrix._from_rows(rows, self._width)

    def right_scale(self, scale: "Matrix") -> "Matrix":
        """Scale each column by the matching entry of a column vector."""
        if scale._width != 1 or scale._height != self._width:
            raise ValueError("scale must be a column vector with one entry per column")
        factors = [s[0] for s in scale._rows]
        rows = [[f * v for f, v in zip(factors, row)] for row in self._rows]
        return Matrix._from_rows(rows, self._width)

    def scale(self, s: float) -> "Matrix":
        rows = [[s * v for v in row] for row in self._rows]
        return Matrix._from_rows(rows, self._width)

    def subtract(self, b: "Matrix") -> "Matrix":
        self._require_same_shape(b)
        rows = [[x - y for x, y in zip(ra, rb)] for ra, rb in zip(self._rows, b._rows)]
        return Matrix._from_rows(rows, self._width)

    def add(self, b: "Matrix") -> "Matrix":
        self._require_same_shape(b)
        rows = [[x + y for x, y in zip(ra, rb)] for ra, rb in zip(self._rows, b._rows)]
        return Matrix._from_rows(rows, self._width)

    def negate(self) -> "Matrix":
        rows = [[-v for v in row] for row in self._rows]
        return Matrix._from_rows(rows, self._width)

    def equals(self, b: "Matrix", err: float = 1e-6) -> bool:
        """True when shapes match and every entry differs by at most ``err``."""
        if self._width != b._width or self._height != b._height:
            return False
        return all(
            abs(x - y) <= err
            for ra, rb in zip(self._rows, b._rows)
            for x, y in zip(ra, rb)
        )

    def vector_magnitude_squared(self) -> float:
        self._require_vector()
        return sum(row[0] * row[0] for row in self._rows)

    def dot(self, b: "Matrix") -> float:
        self._require_vector()
        b._require_vector()
        if self._height != b._height:
            raise ValueError("vector lengths do not match")
        return sum(ra[0] * rb[0] for ra, rb in zip(self._rows, b._rows))

    def madd(self, b: "Matrix", s: float) -> None:
        """In place: ``self += b * s``."""
        self._require_same_shape(b)
        self._rows = [
            [x + y * s for x, y in zip(ra, rb)] for ra, rb in zip(self._rows, b._rows)
        ]

    def pmadd(self, b: "Matrix", s: float) -> None:
        """In place: ``self = s * self + b``."""
        self._require_same_shape(b)
        self._rows = [
            [s * x + y for x, y in zip(ra, rb)] for ra, rb in zip(self._rows, b._rows)
        ]

    def transpose(self) -> "Matrix":
        rows = [[row[j] for row in self._rows] for j in range(self._width)]
        return Matrix._from_rows(rows, self._height)

    def swap_rows(self, a: int, b: int) -> None:
        if not (0 <= a < self._height and 0 <= b < self._height):
            raise IndexError("row index out of range")
        self._rows[a], self._rows[b] = self._rows[b], self._rows[a]