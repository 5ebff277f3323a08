"""Exception types raised by the RREF stepper."""


class RrefError(Exception):
    """Base class for every error raised by this package."""


class ValidationError(RrefError, ValueError):
    """Malformed matrix input (empty text, ragged rows, bad numeric token).

    The optional attributes locate the problem; ``row`` and ``column`` are
    1-based, matching the message text.
    """

    def __init__(self, message: str, *, row=None, column=None, token=None,
                 expected=None, actual=None):
        super().__init__(message)
        self.row = row
        self.column = column
        self.token = token
        self.expected = expected
        self.actual = actual


class DimensionMismatch(RrefError, ValueError):
    """Value count does not fit the requested matrix shape."""


class IndexOutOfRange(RrefError, IndexError):
    """Row or column index outside the matrix."""


class SessionError(RrefError, RuntimeError):
    """A session operation was called in the wrong state."""


class NonFiniteValue(RrefError, ValueError):
    """A NaN or infinite value was put into a matrix."""
