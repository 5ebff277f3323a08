"""Text → Matrix input contract.

Rows are separated by line breaks and values by runs of whitespace, e.g.::

    1 1 2 9
    2 4 -3 1
    3 6 -5 0

Every row must hold the same number of values as the first one.  Nothing is
ever truncated or padded: the first problem found raises ``ValidationError``
naming the row (and column / token where that applies), all 1-based.
"""

import math
import re

from rref.errors import ValidationError
from rref.matrix import Matrix

_LINE_SPLIT = re.compile(r'[\r\n]+')
# Plain decimal with optional exponent; rejects "nan", "inf", "1_000", "0x1p3".
_NUMBER = re.compile(r'[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?')


def _parse_token(token: str, row: int, column: int) -> float:
    value = float(token) if _NUMBER.fullmatch(token) else None
    # "1e999" matches but overflows to infinity; the matrix must stay finite.
    if value is None or not math.isfinite(value):
        raise ValidationError(
            f"Invalid number '{token}' at Row {row}, Column {column}.",
            row=row, column=column, token=token,
        )
    return value


def split_rows(text: str) -> list[list[str]]:
    """Split raw text into non-blank rows of whitespace-separated tokens."""
    return [line.split() for line in _LINE_SPLIT.split(text) if line.strip()]


def parse_matrix(text: str) -> Matrix:
    """Parse *text* into a ``Matrix`` or raise ``ValidationError``."""
    if text is None:
        raise ValidationError("No rows found.")
    token_rows = split_rows(text)
    if not token_rows:
        raise ValidationError("No rows found.")

    n_cols = len(token_rows[0])
    values = []
    for r, tokens in enumerate(token_rows, 1):
        if len(tokens) != n_cols:
            raise ValidationError(
                f"Row {r} has {len(tokens)} columns, but expected {n_cols}.",
                row=r, expected=n_cols, actual=len(tokens),
            )
        for c, token in enumerate(tokens, 1):
            values.append(_parse_token(token, r, c))

    return Matrix.create(len(token_rows), n_cols, values)
