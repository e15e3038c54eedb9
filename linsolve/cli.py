"""
Command-line front end.

Usage:
    python main.py FILE [OPTIONS]

Options:
    --method NAME   gauss (default), gauss-jordan or inverse
    --steps         Print every elimination step
    --compare       Run all three methods and report how far they disagree
    -v, --verbose   Log progress (repeat for debug output)
"""

import argparse
import logging
import sys
from typing import Optional, Sequence

from linsolve import engine, matrix_io
from linsolve.constants import DEFAULT_METHOD
from linsolve.errors import MatrixError
from linsolve.formatting import render_result

EXIT_SOLVED = 0
EXIT_NOT_UNIQUE = 1
EXIT_BAD_INPUT = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="linsolve",
        description="Solve a system of linear equations stored in a matrix file.",
    )
    parser.add_argument("file", help="matrix file: size line, then tab-separated rows")
    parser.add_argument("--method", default=DEFAULT_METHOD,
                        help="gauss, gauss-jordan or inverse (default: %(default)s)")
    parser.add_argument("--steps", action="store_true", help="print every step")
    parser.add_argument("--compare", action="store_true",
                        help="solve with every method and compare the answers")
    parser.add_argument("-v", "--verbose", action="count", default=0)
    return parser


def _configure_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    _configure_logging(args.verbose)

    try:
        matrix = matrix_io.load(args.file)
    except (OSError, MatrixError) as e:
        print(f"Could not read {args.file}: {e}", file=sys.stderr)
        return EXIT_BAD_INPUT

    if args.compare:
        results = engine.compare_methods(matrix, trace=args.steps)
        for name, result in results.items():
            title = engine.get_solver(name).title
            print(render_result(result, title=title, show_steps=args.steps))
            print()
        print(f"Largest disagreement between methods: "
              f"{engine.max_disagreement(results):.3e}")
        solved = all(r.is_unique for r in results.values())
        return EXIT_SOLVED if solved else EXIT_NOT_UNIQUE

    try:
        solver = engine.get_solver(args.method)
    except ValueError as e:
        print(str(e), file=sys.stderr)
        return EXIT_BAD_INPUT

    result = solver.solve(matrix, trace=args.steps)
    print(render_result(result, title=solver.title, show_steps=args.steps))
    return EXIT_SOLVED if result.is_unique else EXIT_NOT_UNIQUE


if __name__ == "__main__":
    sys.exit(main())
