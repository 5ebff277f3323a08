import numpy as np
import pytest

from rref.errors import DimensionMismatch, IndexOutOfRange, NonFiniteValue
from rref.matrix import Matrix


# ── Construction ─────────────────────────────────────────────────────────

def test_create_row_major() -> None:
    m = Matrix.create(2, 3, [1, 2, 3, 4, 5, 6])
    assert m.shape == (2, 3)
    assert m.get(0, 2) == 3.0
    assert m.get(1, 0) == 4.0


@pytest.mark.parametrize(
    "rows,cols,values",
    [
        (2, 2, [1, 2, 3]),
        (1, 1, []),
        (0, 3, []),
        (2, 0, []),
    ],
)
def test_create_rejects_bad_shapes(rows, cols, values) -> None:
    with pytest.raises(DimensionMismatch):
        Matrix.create(rows, cols, values)


def test_from_rows_rejects_ragged_and_empty() -> None:
    with pytest.raises(DimensionMismatch):
        Matrix.from_rows([[1, 2], [3]])
    with pytest.raises(DimensionMismatch):
        Matrix.from_rows([])


@pytest.mark.parametrize("bad", [float("nan"), float("inf"), float("-inf")])
def test_non_finite_values_rejected(bad: float) -> None:
    with pytest.raises(NonFiniteValue):
        Matrix.create(1, 2, [bad, 1])
    with pytest.raises(NonFiniteValue):
        Matrix(np.array([[1.0, bad]]))

    m = Matrix.from_rows([[1, 2]])
    with pytest.raises(NonFiniteValue):
        m.set(0, 0, bad)
    assert m.to_list() == [[1.0, 2.0]]


def test_copy_is_independent() -> None:
    m = Matrix.from_rows([[1, 2], [3, 4]])
    c = m.copy()
    c.set(0, 0, 9)
    assert m.get(0, 0) == 1.0
    assert c != m


# ── Element access ───────────────────────────────────────────────────────

def test_get_set_bounds() -> None:
    m = Matrix.from_rows([[1, 2], [3, 4]])
    m.set(1, 1, -7.5)
    assert m.get(1, 1) == -7.5
    for r, c in [(2, 0), (0, 2), (-1, 0), (0, -1)]:
        with pytest.raises(IndexOutOfRange):
            m.get(r, c)
        with pytest.raises(IndexOutOfRange):
            m.set(r, c, 0.0)


def test_snapshot_is_read_only_copy() -> None:
    m = Matrix.from_rows([[1, 2], [3, 4]])
    snap = m.snapshot()
    with pytest.raises(ValueError):
        snap[0, 0] = 10
    m.set(0, 0, 10)
    assert snap[0, 0] == 1.0


# ── Row operations ───────────────────────────────────────────────────────

def test_swap_twice_restores_bitwise() -> None:
    m = Matrix.from_rows([[0.1, 0.2, 0.3], [1 / 3, 2 / 3, 1e-17], [7, 8, 9]])
    before = m.copy()
    m.swap_rows(0, 1)
    assert m.to_list()[0] == before.to_list()[1]
    m.swap_rows(0, 1)
    assert m == before


def test_swap_same_row_is_noop() -> None:
    m = Matrix.from_rows([[1, 2], [3, 4]])
    before = m.copy()
    m.swap_rows(1, 1)
    assert m == before


def test_scale_then_inverse_restores_within_tolerance() -> None:
    m = Matrix.from_rows([[3, -7, 11.5], [1, 1, 1]])
    before = m.snapshot()
    m.scale_row(0, 3.7)
    m.scale_row(0, 1 / 3.7)
    assert np.allclose(m.snapshot(), before, atol=1e-12)


def test_scale_by_zero_is_allowed() -> None:
    m = Matrix.from_rows([[3, 4]])
    m.scale_row(0, 0.0)
    assert m.to_list() == [[0.0, 0.0]]


def test_add_scaled_row() -> None:
    m = Matrix.from_rows([[1, 2, 3], [4, 5, 6]])
    m.add_scaled_row(1, 0, -4)
    assert m.to_list() == [[1.0, 2.0, 3.0], [0.0, -3.0, -6.0]]


def test_row_operations_reject_bad_indices() -> None:
    m = Matrix.from_rows([[1, 2], [3, 4]])
    with pytest.raises(IndexOutOfRange):
        m.swap_rows(0, 2)
    with pytest.raises(IndexOutOfRange):
        m.scale_row(-1, 2.0)
    with pytest.raises(IndexOutOfRange):
        m.add_scaled_row(0, 5, 1.0)
