"""Step-by-step Gauss-Jordan elimination engine.

``StepEngine`` owns a private copy of a ``Matrix`` and walks it to reduced
row-echelon form one micro-step at a time.  Every call to ``advance()``
returns exactly one ``Step`` describing what just happened; the matrix has
already been mutated accordingly when the step comes back, so a caller can
re-render the snapshot after every call.

Mutating actions are announced twice: once before ("Swapping R1 and R3.")
and once after ("R1 and R3 swapped.").  The mutation itself runs at the start
of the ``advance()`` call that returns the second announcement.

After the forward pass the engine classifies the augmented system
(last column = constants) as having no solution, a unique solution or
infinitely many solutions.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, NamedTuple, Optional

import numpy as np

from rref.config import EPSILON
from rref.matrix import Matrix
from rref.parsing import parse_matrix

logger = logging.getLogger(__name__)


# ── Public types ────────────────────────────────────────────────────────

class StepKind(Enum):
    PIVOT_SEARCH = "pivot_search"
    NO_PIVOT_IN_COLUMN = "no_pivot_in_column"
    PIVOT_FOUND = "pivot_found"
    SWAP_PERFORMED = "swap_performed"
    SCALE_NEEDED = "scale_needed"
    SCALE_PERFORMED = "scale_performed"
    PIVOT_ALREADY_ONE = "pivot_already_one"
    ELIMINATION_START = "elimination_start"
    ELIMINATION_ROW = "elimination_row"
    ELIMINATION_ROW_DONE = "elimination_row_done"
    COLUMN_COMPLETE = "column_complete"
    COMPLETE = "complete"
    CONTRADICTION_FOUND = "contradiction_found"
    NO_SOLUTION = "no_solution"
    PIVOT_SUMMARY = "pivot_summary"
    UNIQUE_SOLUTION = "unique_solution"
    INFINITE_SOLUTIONS = "infinite_solutions"
    ANALYSIS_COMPLETE = "analysis_complete"
    NOT_APPLICABLE = "not_applicable"


# The run ends as soon as one of these has been handed out.
TERMINAL_KINDS = frozenset({StepKind.ANALYSIS_COMPLETE, StepKind.NOT_APPLICABLE})


class RunState(Enum):
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    FINISHED = "finished"


class Verdict(Enum):
    NO_SOLUTION = "no_solution"
    UNIQUE_SOLUTION = "unique_solution"
    INFINITE_SOLUTIONS = "infinite_solutions"
    NOT_APPLICABLE = "not_applicable"


class PivotCursor(NamedTuple):
    """Next unprocessed pivot position (zero-based)."""
    row: int
    col: int


@dataclass(frozen=True)
class Step:
    kind: StepKind
    description: str
    data: dict = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "kind": self.kind.value,
            "description": self.description,
            "data": dict(self.data),
        }


@dataclass(frozen=True)
class Classification:
    verdict: Verdict
    num_pivots: int = 0
    num_variables: int = 0
    free_variables: int = 0
    contradiction_row: Optional[int] = None

    def to_dict(self) -> dict:
        return {
            "verdict": self.verdict.value,
            "num_pivots": self.num_pivots,
            "num_variables": self.num_variables,
            "free_variables": self.free_variables,
            "contradiction_row": self.contradiction_row,
        }


def _is_zero(value: float) -> bool:
    return abs(value) <= EPSILON


def _plural(n: int, word: str) -> str:
    return f"{n} {word}{'' if n == 1 else 's'}"


# ── Engine ──────────────────────────────────────────────────────────────

class StepEngine:
    """Resumable Gauss-Jordan elimination over one matrix.

    Usage::

        engine = StepEngine.from_text("1 1 2 9\\n2 4 -3 1\\n3 6 -5 0")
        while (step := engine.advance()) is not None:
            print(step.description)

    The engine is single-owner: concurrent ``advance()`` calls on the same
    instance must be serialized by the caller.
    """

    def __init__(self, matrix: Matrix):
        self._steps = None
        self.reset(matrix)

    @classmethod
    def from_text(cls, text: str) -> "StepEngine":
        """Parse *text* (see ``rref.parsing``) and wrap it in a new engine."""
        return cls(parse_matrix(text))

    def reset(self, matrix: Matrix) -> None:
        """Discard the current run and start over on *matrix*."""
        if self._steps is not None:
            self._steps.close()
        self._matrix = matrix.copy()
        self._row = 0
        self._col = 0
        self._classifying = False
        self._pivot_columns = []
        self._classification = None
        self._last_step = None
        self._state = RunState.NOT_STARTED
        self._steps = self._procedure()

    # ── Read-only state ─────────────────────────────────────────────────

    @property
    def state(self) -> RunState:
        return self._state

    @property
    def is_active(self) -> bool:
        """True until the final step has been handed out."""
        return self._state is not RunState.FINISHED

    @property
    def in_elimination(self) -> bool:
        """True while the forward pass runs (the cursor is meaningful)."""
        return self.is_active and not self._classifying

    @property
    def cursor(self) -> PivotCursor:
        return PivotCursor(self._row, self._col)

    @property
    def pivot_columns(self) -> list[int]:
        return list(self._pivot_columns)

    @property
    def classification(self) -> Optional[Classification]:
        return self._classification

    @property
    def last_step(self) -> Optional[Step]:
        return self._last_step

    @property
    def rows(self) -> int:
        return self._matrix.rows

    @property
    def cols(self) -> int:
        return self._matrix.cols

    def snapshot(self) -> np.ndarray:
        """Read-only copy of the current matrix."""
        return self._matrix.snapshot()

    # ── Driving ─────────────────────────────────────────────────────────

    def advance(self) -> Optional[Step]:
        """Run until the next pause point and return its step.

        Returns ``None`` once the run is finished; never raises for a
        well-formed matrix.
        """
        if self._state is RunState.FINISHED:
            return None
        if self._state is RunState.NOT_STARTED:
            self._state = RunState.IN_PROGRESS
            logger.info("Starting elimination on a %d×%d matrix", self.rows, self.cols)

        step = next(self._steps, None)
        if step is None:
            self._finish()
            return None

        self._last_step = step
        logger.debug("%s: %s", step.kind.value, step.description)
        if step.kind in TERMINAL_KINDS:
            self._finish()
        return step

    def run(self) -> list[Step]:
        """Advance until exhausted and return the remaining steps."""
        return list(self)

    def __iter__(self) -> Iterator[Step]:
        return iter(self.advance, None)

    def _finish(self) -> None:
        self._state = RunState.FINISHED
        self._steps.close()
        verdict = self._classification.verdict.value if self._classification else "none"
        logger.info("Elimination finished (verdict: %s)", verdict)

    # ── The procedure ───────────────────────────────────────────────────

    def _find_pivot(self, start_row: int, col: int) -> Optional[int]:
        # First qualifying row wins; no magnitude-based pivoting.
        for r in range(start_row, self._matrix.rows):
            if not _is_zero(self._matrix.get(r, col)):
                return r
        return None

    def _procedure(self) -> Iterator[Step]:
        m = self._matrix
        n_rows, n_cols = m.rows, m.cols

        # ── Phase A: forward elimination ────────────────────────────────
        while self._row < n_rows and self._col < n_cols:
            row, col = self._row, self._col

            yield Step(StepKind.PIVOT_SEARCH,
                       f"Finding pivot in Column {col + 1}, at or below Row {row + 1}.",
                       {"row": row, "col": col})

            pivot_row = self._find_pivot(row, col)
            if pivot_row is None:
                yield Step(StepKind.NO_PIVOT_IN_COLUMN,
                           f"Column {col + 1} has no pivot. Moving to next column.",
                           {"col": col})
                self._col += 1
                continue

            # Swap
            if pivot_row != row:
                yield Step(StepKind.PIVOT_FOUND,
                           f"Pivot found at ({pivot_row + 1}, {col + 1}). "
                           f"Swapping R{row + 1} and R{pivot_row + 1}.",
                           {"row": pivot_row, "col": col, "swap": True})
                m.swap_rows(row, pivot_row)
                yield Step(StepKind.SWAP_PERFORMED,
                           f"R{row + 1} and R{pivot_row + 1} swapped.",
                           {"rows": (row, pivot_row)})
            else:
                yield Step(StepKind.PIVOT_FOUND,
                           f"Pivot found at ({row + 1}, {col + 1}). No swap needed.",
                           {"row": row, "col": col, "swap": False})

            # Scale
            pivot = m.get(row, col)
            if abs(pivot - 1.0) > EPSILON:
                factor = 1.0 / pivot
                yield Step(StepKind.SCALE_NEEDED,
                           f"Scaling R{row + 1} by 1 / {pivot:.2f} to make pivot = 1.",
                           {"row": row, "pivot": pivot, "factor": factor})
                m.scale_row(row, factor)
                yield Step(StepKind.SCALE_PERFORMED, f"R{row + 1} scaled.", {"row": row})
            else:
                yield Step(StepKind.PIVOT_ALREADY_ONE,
                           "Pivot is already 1. No scaling needed.",
                           {"row": row})

            # Eliminate
            yield Step(StepKind.ELIMINATION_START,
                       f"Eliminating other entries in Column {col + 1}.",
                       {"col": col})
            for r in range(n_rows):
                if r == row:
                    continue
                factor = m.get(r, col)
                if _is_zero(factor):
                    continue
                yield Step(StepKind.ELIMINATION_ROW,
                           f"Eliminating in R{r + 1}:  "
                           f"R{r + 1} = R{r + 1} - ({factor:.2f}) * R{row + 1}.",
                           {"row": r, "source": row, "factor": factor})
                m.add_scaled_row(r, row, -factor)
                yield Step(StepKind.ELIMINATION_ROW_DONE, f"R{r + 1} updated.", {"row": r})

            self._pivot_columns.append(col)
            yield Step(StepKind.COLUMN_COMPLETE, f"Column {col + 1} is complete.",
                       {"col": col})
            self._row += 1
            self._col += 1

        # ── Phase B: classification ─────────────────────────────────────
        self._classifying = True
        yield Step(StepKind.COMPLETE,
                   "RREF calculation complete. Analyzing system solution...")

        if n_cols <= 1:
            self._classification = Classification(Verdict.NOT_APPLICABLE)
            yield Step(StepKind.NOT_APPLICABLE,
                       "Matrix has only one column. Solution analysis is not applicable.")
            return

        num_variables = n_cols - 1
        # A pivot in the constant column always leaves a contradiction row,
        # so only variable columns count towards the rank.
        num_pivots = sum(1 for c in self._pivot_columns if c < num_variables)

        contradiction = self._find_contradiction(num_variables)
        if contradiction is not None:
            constant = m.get(contradiction, n_cols - 1)
            self._classification = Classification(
                Verdict.NO_SOLUTION, num_pivots, num_variables,
                contradiction_row=contradiction,
            )
            yield Step(StepKind.CONTRADICTION_FOUND,
                       f"Inconsistency found in R{contradiction + 1}: "
                       f"[ 0 ... 0 | {constant:.2f} ].",
                       {"row": contradiction, "constant": constant})
            yield Step(StepKind.NO_SOLUTION,
                       "This means 0 equals a non-zero number. "
                       "The system has NO SOLUTION.")
        else:
            yield Step(StepKind.PIVOT_SUMMARY,
                       f"Analysis found {_plural(num_pivots, 'pivot')} for "
                       f"{_plural(num_variables, 'variable')}.",
                       {"num_pivots": num_pivots, "num_variables": num_variables})
            if num_pivots < num_variables:
                free = num_variables - num_pivots
                self._classification = Classification(
                    Verdict.INFINITE_SOLUTIONS, num_pivots, num_variables, free)
                yield Step(StepKind.INFINITE_SOLUTIONS,
                           f"There {'is' if free == 1 else 'are'} "
                           f"{_plural(free, 'free variable')}. "
                           f"The system has an INFINITE number of solutions.",
                           {"free_variables": free})
            else:
                self._classification = Classification(
                    Verdict.UNIQUE_SOLUTION, num_pivots, num_variables)
                yield Step(StepKind.UNIQUE_SOLUTION,
                           "There are no free variables. The system has a UNIQUE SOLUTION.")

        yield Step(StepKind.ANALYSIS_COMPLETE, "Analysis complete.")

    def _find_contradiction(self, num_variables: int) -> Optional[int]:
        """First row reading [ 0 … 0 | b ] with b ≠ 0, scanning every row."""
        m = self._matrix
        for r in range(m.rows):
            coefficients_zero = all(_is_zero(m.get(r, c)) for c in range(num_variables))
            if coefficients_zero and not _is_zero(m.get(r, num_variables)):
                return r
        return None
