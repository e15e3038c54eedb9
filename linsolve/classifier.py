"""Kronecker–Capelli solvability check for an augmented matrix."""

import logging
from typing import Optional

from linsolve import matrix_ops
from linsolve.result import SolutionStatus
from linsolve.trace import StepKind, Trace, record

LOG = logging.getLogger(__name__)


def ranks(augmented) -> tuple[int, int]:
    """Return ``(rank(A), rank([A|b]))`` for an n x (n+1) matrix."""
    matrix = matrix_ops.as_augmented(augmented)
    coefficients = matrix_ops.extract_coefficients(matrix)
    return matrix_ops.rank(coefficients), matrix_ops.rank(matrix)


def classify(augmented, trace: Optional[Trace] = None) -> SolutionStatus:
    """Decide whether the system has a unique solution, infinitely many, or none.

      - rank(A) != rank([A|b])            -> no solution
      - rank(A) == rank([A|b]) == n       -> unique solution
      - rank(A) == rank([A|b]) <  n       -> infinitely many solutions
    """
    matrix = matrix_ops.as_augmented(augmented)
    n = matrix.shape[0]
    rank_a, rank_ab = ranks(matrix)

    if rank_a != rank_ab:
        status = SolutionStatus.NO_SOLUTION
    elif rank_a == n:
        status = SolutionStatus.UNIQUE_SOLUTION
    else:
        status = SolutionStatus.INFINITE_SOLUTIONS

    LOG.debug("classified %dx%d system: rank(A)=%d rank(A|b)=%d -> %s",
              n, n + 1, rank_a, rank_ab, status.value)
    record(trace, StepKind.CLASSIFIED, rank_coefficients=rank_a,
           rank_augmented=rank_ab, unknowns=n, status=status.value)
    return status
