"""Display contract between the engine and whatever renders the matrix.

Nothing here draws anything.  It turns an engine snapshot into cell text
(near-zero values shown as exactly ``0.00``) plus a highlight role per cell,
so a grid widget, a web page or the console can colour cells the same way.
The stored matrix is never touched.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

import numpy as np

from rref.config import DISPLAY_DECIMALS, EPSILON


class CellRole(Enum):
    PIVOT = "pivot"                 # current pivot cell
    PIVOT_ROW = "pivot_row"
    PIVOT_COLUMN = "pivot_column"
    CONSTANT = "constant"           # last column, after completion
    PIVOT_ONE = "pivot_one"         # a 1 in a variable column, after completion
    PLAIN = "plain"


# ── Value formatting ────────────────────────────────────────────────────

def clean_value(value: float) -> float:
    """Snap values within ``EPSILON`` of zero to exactly ``0.0``."""
    value = float(value)
    if abs(value) < EPSILON:
        return 0.0
    return value


def format_value(value: float, decimals: int = DISPLAY_DECIMALS) -> str:
    """Fixed-point text of *value*, never rendering ``-0.00``."""
    text = f"{clean_value(value):.{decimals}f}"
    if text.startswith("-") and float(text) == 0:
        text = text[1:]
    return text


def format_matrix(grid, decimals: int = DISPLAY_DECIMALS) -> str:
    """Format a 2-D grid as a readable bracketed matrix on one line."""
    rows = []
    for row in np.asarray(grid):
        rows.append("[" + ", ".join(format_value(v, decimals) for v in row) + "]")
    return "[" + ", ".join(rows) + "]"


# ── Highlighting ────────────────────────────────────────────────────────

def cell_roles(grid, cursor=None, active: bool = True) -> list[list[CellRole]]:
    """Highlight role of every cell.

    While *active*, the cell under *cursor* is the pivot and the rest of its
    row / column are marked.  Once the run is over, variable-column cells
    holding 1 are ``PIVOT_ONE`` and the constant column is ``CONSTANT``.
    A cursor of ``None`` (or one past the grid edge) marks nothing.
    """
    grid = np.asarray(grid)
    n_rows, n_cols = grid.shape
    roles = [[CellRole.PLAIN] * n_cols for _ in range(n_rows)]

    if active:
        if cursor is None:
            return roles
        pr, pc = cursor
        for r in range(n_rows):
            for c in range(n_cols):
                if r == pr and c == pc:
                    roles[r][c] = CellRole.PIVOT
                elif r == pr:
                    roles[r][c] = CellRole.PIVOT_ROW
                elif c == pc:
                    roles[r][c] = CellRole.PIVOT_COLUMN
        return roles

    for r in range(n_rows):
        for c in range(n_cols):
            value = clean_value(grid[r, c])
            if n_cols > 1 and c == n_cols - 1:
                roles[r][c] = CellRole.CONSTANT
            elif c < n_cols - 1 and abs(value - 1.0) < EPSILON:
                roles[r][c] = CellRole.PIVOT_ONE
    return roles


# ── Views ───────────────────────────────────────────────────────────────

@dataclass
class MatrixView:
    """Everything a renderer needs after one ``advance()``."""
    cells: list[list[str]]
    roles: list[list[CellRole]]
    values: list[list[float]]
    cursor: Optional[tuple[int, int]]
    description: str
    active: bool

    def to_dict(self) -> dict:
        return {
            "cells": self.cells,
            "roles": [[role.value for role in row] for row in self.roles],
            "values": self.values,
            "cursor": list(self.cursor) if self.cursor is not None else None,
            "description": self.description,
            "active": self.active,
        }


def build_view(engine, description: str = "",
               decimals: int = DISPLAY_DECIMALS) -> MatrixView:
    """Snapshot *engine* into a ``MatrixView``.

    The cursor is only reported while the forward pass is running; during
    and after classification it is ``None``.
    """
    grid = engine.snapshot()
    cursor = tuple(engine.cursor) if engine.in_elimination else None
    if not description and engine.last_step is not None:
        description = engine.last_step.description
    return MatrixView(
        cells=[[format_value(v, decimals) for v in row] for row in grid],
        roles=cell_roles(grid, cursor, engine.is_active),
        values=[[clean_value(v) for v in row] for row in grid],
        cursor=cursor,
        description=description,
        active=engine.is_active,
    )


def render_table(view: MatrixView) -> str:
    """Aligned plain-text table; the pivot is wrapped in ``[ ]`` and the
    constant column is separated by ``|``."""
    if not view.cells:
        return ""
    width = max(len(text) for row in view.cells for text in row) + 2
    lines = []
    for texts, roles in zip(view.cells, view.roles):
        parts = []
        n_cols = len(texts)
        for c, (text, role) in enumerate(zip(texts, roles)):
            cell = f"[{text}]" if role is CellRole.PIVOT else f" {text} "
            if n_cols > 1 and c == n_cols - 1:
                parts.append("|")
            parts.append(cell.rjust(width + 2))
        lines.append("".join(parts).rstrip())
    return "\n".join(lines)
