"""
RREF Stepper: entry point.

Read an augmented matrix from a file (or stdin) and print every elimination
step followed by the re-rendered matrix.

    python main.py system.txt
    echo "1 2 3
    2 4 6" | python main.py --interactive
"""

import argparse
import sys

from rref.config import DEFAULT_SETTINGS
from rref.display import render_table
from rref.errors import ValidationError
from rref.logging_config import setup_logging
from rref.session import StepSession


def _read_input(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    with open(path, "r", encoding="utf-8") as f:
        return f.read()


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Step through Gauss-Jordan elimination.")
    parser.add_argument("file", nargs="?", default="-",
                        help="matrix file, one row per line (default: stdin)")
    parser.add_argument("--decimals", type=int, default=DEFAULT_SETTINGS["decimals"])
    parser.add_argument("--log-level", default=DEFAULT_SETTINGS["log_level"])
    parser.add_argument("--interactive", action="store_true",
                        help="wait for Enter before every step")
    args = parser.parse_args(argv)

    setup_logging(args.log_level)

    session = StepSession(decimals=args.decimals)
    try:
        view = session.start(_read_input(args.file))
    except ValidationError as e:
        print(f"Error parsing matrix: {e}")
        return 1

    print(session.description)
    print(render_table(view))

    while session.can_advance:
        if args.interactive:
            input()
        step = session.advance()
        if step is None:
            break
        print()
        print(step.description)
        print(render_table(session.view()))

    return 0


if __name__ == "__main__":
    sys.exit(main())
