"""Dense numeric matrix with the three elementary row operations.

The matrix knows nothing about elimination strategy; it only stores a
``rows × cols`` grid of float64 values (NumPy) and mutates it in place.
"""

import numpy as np

from rref.errors import DimensionMismatch, IndexOutOfRange, NonFiniteValue


class Matrix:
    """A rectangular ``rows × cols`` grid of finite floats."""

    def __init__(self, data: np.ndarray):
        data = np.array(data, dtype=np.float64)
        if data.ndim != 2:
            raise DimensionMismatch(
                f"Matrix data must be two-dimensional, got {data.ndim} dimension(s).")
        rows, cols = data.shape
        if rows < 1 or cols < 1:
            raise DimensionMismatch(
                f"Matrix must have at least one row and one column, got {rows}×{cols}.")
        if not np.isfinite(data).all():
            raise NonFiniteValue("Matrix values must be finite (no NaN or infinity).")
        self._data = data

    # ── Construction ────────────────────────────────────────────────────

    @classmethod
    def create(cls, rows: int, cols: int, values) -> "Matrix":
        """Build a matrix from a flat row-major sequence of values."""
        if rows < 1 or cols < 1:
            raise DimensionMismatch(
                f"Matrix must have at least one row and one column, got {rows}×{cols}.")
        values = list(values)
        if len(values) != rows * cols:
            raise DimensionMismatch(
                f"Expected {rows * cols} values for a {rows}×{cols} matrix, "
                f"got {len(values)}.")
        return cls(np.array(values, dtype=np.float64).reshape(rows, cols))

    @classmethod
    def from_rows(cls, rows) -> "Matrix":
        """Build a matrix from a list of equal-length rows."""
        rows = [list(r) for r in rows]
        if not rows or not rows[0]:
            raise DimensionMismatch("Matrix must have at least one row and one column.")
        width = len(rows[0])
        for i, r in enumerate(rows):
            if len(r) != width:
                raise DimensionMismatch(
                    f"Row {i} has {len(r)} entries, expected {width}.")
        return cls.create(len(rows), width, [v for r in rows for v in r])

    def copy(self) -> "Matrix":
        return Matrix(self._data.copy())

    # ── Shape ───────────────────────────────────────────────────────────

    @property
    def rows(self) -> int:
        return self._data.shape[0]

    @property
    def cols(self) -> int:
        return self._data.shape[1]

    @property
    def shape(self) -> tuple[int, int]:
        return self.rows, self.cols

    # ── Element access ──────────────────────────────────────────────────

    def _check_row(self, r: int) -> None:
        if not 0 <= r < self.rows:
            raise IndexOutOfRange(f"Row index {r} out of range [0, {self.rows}).")

    def _check_col(self, c: int) -> None:
        if not 0 <= c < self.cols:
            raise IndexOutOfRange(f"Column index {c} out of range [0, {self.cols}).")

    def get(self, r: int, c: int) -> float:
        self._check_row(r)
        self._check_col(c)
        return float(self._data[r, c])

    def set(self, r: int, c: int, value: float) -> None:
        self._check_row(r)
        self._check_col(c)
        value = float(value)
        if not np.isfinite(value):
            raise NonFiniteValue(f"Cannot store non-finite value {value} at ({r}, {c}).")
        self._data[r, c] = value

    def snapshot(self) -> np.ndarray:
        """Return a read-only copy of the grid."""
        view = self._data.copy()
        view.flags.writeable = False
        return view

    def to_list(self) -> list[list[float]]:
        return self._data.tolist()

    # ── Elementary row operations ───────────────────────────────────────

    def swap_rows(self, r1: int, r2: int) -> None:
        """Exchange rows *r1* and *r2* (no-op when equal)."""
        self._check_row(r1)
        self._check_row(r2)
        if r1 == r2:
            return
        self._data[[r1, r2]] = self._data[[r2, r1]]

    def scale_row(self, r: int, factor: float) -> None:
        """Multiply every entry of row *r* by *factor*.

        A zero factor is accepted here; avoiding it is the caller's job.
        """
        self._check_row(r)
        self._data[r] *= factor

    def add_scaled_row(self, target: int, source: int, factor: float) -> None:
        """R_target = R_target + factor · R_source"""
        self._check_row(target)
        self._check_row(source)
        self._data[target] += factor * self._data[source]

    # ── Dunder helpers ──────────────────────────────────────────────────

    def __eq__(self, other):
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.shape == other.shape and bool(np.array_equal(self._data, other._data))

    __hash__ = None

    def __repr__(self) -> str:
        return f"Matrix({self.to_list()!r})"
