"""
Gauss-Jordan (full) elimination.

Pivoting and normalisation match :mod:`linsolve.gauss`, but every pivot
column is cleared in all other rows, above as well as below. Once the last
column is done the right-hand-side column already holds the solution, so
there is no back-substitution phase.
"""

from typing import Optional

import numpy as np

from linsolve import matrix_ops
from linsolve.base import Solver
from linsolve.errors import DegenerateMatrixError
from linsolve.result import SolverResult
from linsolve.trace import StepKind, Trace, record


class GaussJordanSolver(Solver):
    name = "gauss-jordan"
    title = "Gauss-Jordan elimination (full elimination)"

    def _solve_unique(self, original: np.ndarray, work: np.ndarray,
                      trace: Optional[Trace]) -> SolverResult:
        n = work.shape[0]
        for k in range(n):
            pivot_row = matrix_ops.find_pivot_row(work, k, k)
            pivot = work[pivot_row, k]
            if matrix_ops.is_near_zero(pivot):
                raise DegenerateMatrixError(f"Zero pivot in column {k + 1}.")
            record(trace, StepKind.PIVOT_SELECTED, column=k, row=pivot_row,
                   value=pivot)

            if pivot_row != k:
                matrix_ops.swap_rows(work, k, pivot_row)
                record(trace, StepKind.ROWS_SWAPPED, matrix=work,
                       first=k, second=pivot_row)

            work[k, k:] /= pivot
            record(trace, StepKind.ROW_NORMALIZED, matrix=work, row=k,
                   divisor=pivot)

            for i in range(n):
                if i == k:
                    continue
                factor = work[i, k]
                if matrix_ops.is_near_zero(factor):
                    continue
                work[i, k:] -= factor * work[k, k:]
                record(trace, StepKind.ROW_ELIMINATED, matrix=work,
                       target=i, source=k, factor=factor)

        # [I | x]: the augmented column is the answer.
        solution = work[:, n].copy()
        return self._success(original, solution, trace)
