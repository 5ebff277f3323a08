"""
RREF Stepper: shared constants and default settings.

Every "is this zero" / "is this one" comparison in the package goes through
``EPSILON``; nothing compares floats for exact equality.
"""

# ── Numerics ───────────────────────────────────────────────────────────────

EPSILON = 1e-9

# ── Display ────────────────────────────────────────────────────────────────

DISPLAY_DECIMALS = 2

# Example system shown when a session is reset (x = 1, y = 2, z = 3).
DEFAULT_MATRIX_TEXT = "1 1 2 9\n2 4 -3 1\n3 6 -5 0"

IDLE_PROMPT = "Enter an augmented matrix and press 'Start'."
LOADED_PROMPT = "Matrix loaded. Advance to find the first pivot."

DEFAULT_SETTINGS = {
    "decimals": DISPLAY_DECIMALS,
    "log_level": "INFO",
}

# ── HTTP sessions ──────────────────────────────────────────────────────────

# Oldest sessions are dropped once this many are open.
MAX_SESSIONS = 256
