"""
Gaussian elimination with partial pivoting.

Two phases on the working copy:
  1. Forward elimination: pick the largest pivot in column k, swap it into
     row k, normalise row k, and clear column k in the rows below.
  2. Back substitution: resolve the unknowns from the last to the first.
"""

import logging
from typing import Optional

import numpy as np

from linsolve import matrix_ops
from linsolve.base import Solver
from linsolve.errors import DegenerateMatrixError
from linsolve.result import SolverResult
from linsolve.trace import StepKind, Trace, record

LOG = logging.getLogger(__name__)


class GaussianEliminationSolver(Solver):
    name = "gauss"
    title = "Gaussian elimination (partial pivoting)"

    def _solve_unique(self, original: np.ndarray, work: np.ndarray,
                      trace: Optional[Trace]) -> SolverResult:
        forward_eliminate(work, trace)
        solution = back_substitute(work, trace)
        return self._success(original, solution, trace)


def forward_eliminate(work: np.ndarray, trace: Optional[Trace] = None) -> None:
    """Reduce *work* in place to unit upper-triangular form."""
    n = work.shape[0]
    for k in range(n):
        pivot_row = matrix_ops.find_pivot_row(work, k, k)
        pivot = work[pivot_row, k]
        if matrix_ops.is_near_zero(pivot):
            raise DegenerateMatrixError(f"Zero pivot in column {k + 1}.")
        record(trace, StepKind.PIVOT_SELECTED, column=k, row=pivot_row, value=pivot)

        if pivot_row != k:
            matrix_ops.swap_rows(work, k, pivot_row)
            record(trace, StepKind.ROWS_SWAPPED, matrix=work, first=k, second=pivot_row)

        work[k, k:] /= pivot
        record(trace, StepKind.ROW_NORMALIZED, matrix=work, row=k, divisor=pivot)

        for i in range(k + 1, n):
            factor = work[i, k]
            if matrix_ops.is_near_zero(factor):
                continue
            work[i, k:] -= factor * work[k, k:]
            record(trace, StepKind.ROW_ELIMINATED, matrix=work,
                   target=i, source=k, factor=factor)
        LOG.debug("column %d eliminated below pivot row", k)


def back_substitute(work: np.ndarray, trace: Optional[Trace] = None) -> np.ndarray:
    """Solve a unit upper-triangular augmented system, last unknown first."""
    n = work.shape[0]
    solution = np.zeros(n, dtype=np.float64)
    for i in range(n - 1, -1, -1):
        terms = [(j, work[i, j], solution[j]) for j in range(i + 1, n)]
        value = work[i, n]
        for _, coeff, known in terms:
            value -= coeff * known
        solution[i] = value
        record(trace, StepKind.BACK_SUBSTITUTED, index=i, rhs=work[i, n],
               terms=terms, value=value)
    return solution
