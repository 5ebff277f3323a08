"""
RREF Stepper: Gauss-Jordan elimination one observable step at a time.
"""

from .config import EPSILON
from .errors import (
    RrefError,
    ValidationError,
    DimensionMismatch,
    IndexOutOfRange,
    SessionError,
    NonFiniteValue,
)
from .matrix import Matrix
from .parsing import parse_matrix
from .engine import (
    StepEngine,
    Step,
    StepKind,
    RunState,
    PivotCursor,
    Classification,
    Verdict,
)
from .display import CellRole, MatrixView, build_view, format_value, format_matrix
from .session import StepSession

__version__ = "0.1.0"

__all__ = [
    "EPSILON",
    # Errors
    "RrefError",
    "ValidationError",
    "DimensionMismatch",
    "IndexOutOfRange",
    "SessionError",
    "NonFiniteValue",
    # Core
    "Matrix",
    "parse_matrix",
    "StepEngine",
    "Step",
    "StepKind",
    "RunState",
    "PivotCursor",
    "Classification",
    "Verdict",
    # Display
    "CellRole",
    "MatrixView",
    "build_view",
    "format_value",
    "format_matrix",
    # Controller
    "StepSession",
]
