"""Block-sparse matrix: each row holds a few fixed-width blocks of columns."""

from __future__ import annotations

from typing import Iterator

from .matrix import Matrix


class SparseMatrix:
    """A matrix whose rows store up to ``entries`` blocks of ``stride`` columns.

    Each block records which column block it occupies; a block index of
    ``None`` marks an empty slot.
    """

    def __init__(
        self, width: int = 0, height: int = 0, stride: int = 3, entries: int = 2
    ) -> None:
        if stride < 1 or entries < 1:
            raise ValueError("stride and entries must be positive")
        self._stride = stride
        self._entries = entries
        self.initialize(width, height)

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def stride(self) -> int:
        return self._stride

    @property
    def entries(self) -> int:
        return self._entries

    def initialize(self, width: int, height: int) -> None:
        """Reshape and clear: every block becomes empty."""
        if width < 0 or height < 0:
            raise ValueError("matrix dimensions must be non-negative")
        self._width = width
        self._height = height
        self._values = [[0.0] * (self._entries * self._stride) for _ in range(height)]
        self._blocks: list[list[int | None]] = [
            [None] * self._entries for _ in range(height)
        ]

    def _check(self, row: int, entry: int) -> None:
        if not 0 <= row < self._height:
            raise IndexError(f"row {row} out of range")
        if not 0 <= entry < self._entries:
            raise IndexError(f"entry {entry} out of range")

    def set_block(self, row: int, entry: int, index: int) -> None:
        """Assign the column block that a row's entry occupies."""
        self._check(row, entry)
        if not 0 <= index < self._width:
            raise IndexError(f"block index {index} out of range")
        self._blocks[row][entry] = index

    def set(self, row: int, entry: int, slice_: int, value: float) -> None:
        self._check(row, entry)
        if not 0 <= slice_ < self._stride:
            raise IndexError(f"slice {slice_} out of range")
        self._values[row][entry * self._stride + slice_] = value

    def get(self, row: int, entry: int, slice_: int) -> float:
        self._check(row, entry)
        if not 0 <= slice_ < self._stride:
            raise IndexError(f"slice {slice_} out of range")
        return self._values[row][entry * self._stride + slice_]

    def set_empty(self, row: int, entry: int) -> None:
        """Mark a row's entry as unused and zero its values."""
        self._check(row, entry)
        self._blocks[row][entry] = None
        s = self._stride
        self._values[row][entry * s:(entry + 1) * s] = [0.0] * s

    def _row_blocks(self, row: int) -> Iterator[tuple[int, int, list[float]]]:
        s = self._stride
        values = self._values[row]
        for entry, block in enumerate(self._blocks[row]):
            if block is not None:
                yield entry, block, values[entry * s:(entry + 1) * s]

    def expand(self) -> Matrix:
        """Return the equivalent dense matrix."""
        result = Matrix(self._width, self._height)
        for i in range(self._height):
            for _, block, values in self._row_blocks(i):
                for k, v in enumerate(values):
                    result.set(block * self._stride + k, i, v)
        return result

    def expand_transposed(self) -> Matrix:
        """Return the dense transpose."""
        result = Matrix(self._height, self._width)
        for i in range(self._height):
            for _, block, values in self._row_blocks(i):
                for k, v in enumerate(values):
                    result.set(i, block * self._stride + k, v)
        return result

    def multiply_transpose(self, b_t: "SparseMatrix") -> Matrix:
        """Return ``self @ transpose(b_t)`` as a dense matrix."""
        if self._width != b_t._width:
            raise ValueError("widths do not match")
        if self._stride != b_t._stride:
            raise ValueError("strides do not match")
        result = Matrix(b_t._height, self._height)
        for i in range(self._height):
            left = list(self._row_blocks(i))
            for j in range(b_t._height):
                right = list(b_t._row_blocks(j))
                total = 0.0
                for _, block0, values0 in left:
                    for _, block1, values1 in right:
                        if block0 == block1:
                            total += sum(x * y for x, y in zip(values0, values1))
                result.set(j, i, total)
        return result

    def transpose_multiply_vector(self, b: Matrix) -> Matrix:
        """Return ``transpose(self) @ b`` for a column vector ``b``."""
        if b.width != 1 or b.height != self._height:
            raise ValueError("b must be a column vector with one entry per row")
        result = Matrix(1, self._width)
        for i in range(self._height):
            factor = b.get(0, i)
            for _, block, values in self._row_blocks(i):
                for l, v in enumerate(values):
                    result.add_at(0, block * self._stride + l, v * factor)
        return result

    def multiply(self, b: Matrix) -> Matrix:
        """Return ``self @ b`` as a dense matrix."""
        if self._width != b.height:
            raise ValueError("inner dimensions do not match")
        result = Matrix(b.width, self._height)
        for i in range(self._height):
            blocks = list(self._row_blocks(i))
            for j in range(b.width):
                total = 0.0
                for _, block, values in blocks:
                    base = block * self._stride
                    total += sum(v * b.get(j, base + l) for l, v in enumerate(values))
                result.set(j, i, total)
        return result

    def right_scale(self, scale: Matrix) -> "SparseMatrix":
        """Scale each column by the matching entry of a column vector."""
        if scale.width != 1 or scale.height != self._width:
            raise ValueError("scale must be a column vector with one entry per column")
        target = SparseMatrix(self._width, self._height, self._stride, self._entries)
        for i in range(self._height):
            for entry, block, values in self._row_blocks(i):
                target.set_block(i, entry, block)
                for k, v in enumerate(values):
                    target.set(i, entry, k, scale.get(0, block * self._stride + k) * v)
        return target

    def left_scale(self, scale: Matrix) -> "SparseMatrix":
        """Scale each row by the matching entry of a column vector."""
        if scale.height != self._height or (scale.width != 1 and self._height != 0):
            raise ValueError("scale must be a column vector with one entry per row")
        target = SparseMatrix(self._width, self._height, self._stride, self._entries)
        for i in range(self._height):
            factor = scale.get(0, i) if self._blocks[i] else 0.0
            for entry, block, values in self._row_blocks(i):
                target.set_block(i, entry, block)
                for k, v in enumerate(values):
                    target.set(i, entry, k, factor * v)
        return target