import sys
from pathlib import Path

# Ensure the project root is on sys.path so `rref` and `backend` are importable
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import pytest

from rref.matrix import Matrix


@pytest.fixture
def unique_system() -> Matrix:
    # x + y + 2z = 9, 2x + 4y - 3z = 1, 3x + 6y - 5z = 0  →  (1, 2, 3)
    return Matrix.from_rows([[1, 1, 2, 9], [2, 4, -3, 1], [3, 6, -5, 0]])


@pytest.fixture
def dependent_system() -> Matrix:
    return Matrix.from_rows([[1, 2, 3], [2, 4, 6]])


@pytest.fixture
def inconsistent_system() -> Matrix:
    return Matrix.from_rows([[1, 2, 5], [0, 0, 3]])
