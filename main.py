"""
linsolve — Entry point.

Solve a linear system stored in a matrix file from the command line.
"""

import sys

from linsolve.cli import main


if __name__ == "__main__":
    sys.exit(main())
