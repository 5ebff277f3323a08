"""Start / advance / reset controller around one ``StepEngine``.

A session is what a front end talks to: it keeps the input text, the step
log and the latest description, and replaces its engine wholesale on every
start or reset.
"""

import logging
from typing import Optional

from rref.config import DEFAULT_MATRIX_TEXT, DISPLAY_DECIMALS, IDLE_PROMPT, LOADED_PROMPT
from rref.display import MatrixView, build_view
from rref.engine import StepEngine, Step
from rref.errors import SessionError, ValidationError
from rref.parsing import parse_matrix

logger = logging.getLogger(__name__)


class StepSession:
    def __init__(self, decimals: int = DISPLAY_DECIMALS):
        self.decimals = decimals
        self.reset()

    # ── Controls ────────────────────────────────────────────────────────

    def start(self, text: str) -> MatrixView:
        """Parse *text* and begin a fresh run.

        On a parse error the session is left exactly as it was.
        """
        try:
            matrix = parse_matrix(text)
        except ValidationError as e:
            logger.info("Rejected matrix input: %s", e)
            raise
        self.input_text = text
        self._engine = StepEngine(matrix)
        self._log = []
        self.description = LOADED_PROMPT
        logger.info("Session started with a %d×%d matrix", matrix.rows, matrix.cols)
        return self.view()

    def advance(self) -> Optional[Step]:
        """Take one step; ``None`` once the run is exhausted."""
        if self._engine is None:
            raise SessionError("No matrix loaded. Start a session first.")
        step = self._engine.advance()
        if step is not None:
            self.description = step.description
            self._log.append(step.description)
        return step

    def reset(self) -> None:
        """Drop the run and go back to the idle state. Never fails."""
        self._engine = None
        self._log = []
        self.input_text = DEFAULT_MATRIX_TEXT
        self.description = IDLE_PROMPT

    # ── State ───────────────────────────────────────────────────────────

    @property
    def engine(self) -> Optional[StepEngine]:
        return self._engine

    @property
    def is_started(self) -> bool:
        return self._engine is not None

    @property
    def can_advance(self) -> bool:
        return self._engine is not None and self._engine.is_active

    @property
    def log(self) -> list[str]:
        return list(self._log)

    def view(self) -> Optional[MatrixView]:
        """Current display view, or ``None`` before ``start``."""
        if self._engine is None:
            return None
        return build_view(self._engine, self.description, self.decimals)
