"""
Common contract for the elimination strategies.

``Solver.solve`` owns everything outside the algorithm itself: cloning and
validating the input, the solvability check, floating-point error trapping,
residual computation against the untouched input, and conversion of every
failure into an ``error`` result. Subclasses implement ``_solve_unique``.
"""

import logging
from typing import Optional

import numpy as np

from linsolve import matrix_ops
from linsolve.classifier import classify
from linsolve.errors import MatrixError
from linsolve.result import SolutionStatus, SolverResult
from linsolve.trace import StepKind, Trace, record

LOG = logging.getLogger(__name__)


class Solver:
    name = ""
    title = ""

    def solve(self, matrix, trace: bool = False) -> SolverResult:
        """Solve the n x (n+1) augmented system *matrix*.

        The caller's matrix is never modified. With ``trace=True`` the
        result carries a :class:`~linsolve.trace.Trace` of every step taken,
        including the steps completed before a failure.
        """
        log = Trace() if trace else None
        LOG.info("solving with %s", self.name)
        try:
            with np.errstate(over="raise", divide="raise", invalid="raise"):
                original = matrix_ops.as_augmented(matrix)
                if not np.all(np.isfinite(original)):
                    raise MatrixError("Matrix contains non-finite values.")
                work = matrix_ops.clone(original)
                record(log, StepKind.SYSTEM_LOADED, matrix=work,
                       unknowns=work.shape[0])

                status = classify(work, trace=log)
                if status is not SolutionStatus.UNIQUE_SOLUTION:
                    return self._not_unique(status, original, log)
                return self._solve_unique(original, work, log)
        except (ValueError, ArithmeticError) as exc:
            # MatrixError is a ValueError; FloatingPointError is an ArithmeticError.
            return self._failure(str(exc) or type(exc).__name__, log)

    def _solve_unique(self, original: np.ndarray, work: np.ndarray,
                      trace: Optional[Trace]) -> SolverResult:
        raise NotImplementedError

    # ── Result builders ─────────────────────────────────────────────────

    def _not_unique(self, status: SolutionStatus, original: np.ndarray,
                    trace: Optional[Trace]) -> SolverResult:
        LOG.info("%s: system has no unique solution (%s)", self.name, status.value)
        return SolverResult(
            status=status,
            method=self.name,
            classification=status,
            trace=_sealed(trace),
        )

    def _success(self, original: np.ndarray, solution: np.ndarray,
                 trace: Optional[Trace],
                 determinant: Optional[float] = None) -> SolverResult:
        if not np.all(np.isfinite(solution)):
            raise ArithmeticError("Solution contains non-finite values.")

        n = original.shape[0]
        errors = matrix_ops.residuals(original, solution)
        if trace is not None:
            for i in range(n):
                lhs = float(np.dot(original[i, :n], solution))
                record(trace, StepKind.RESIDUAL_CHECKED, row=i, lhs=lhs,
                       rhs=original[i, n], error=errors[i])
        max_error = float(np.max(errors))
        record(trace, StepKind.SOLUTION_EXTRACTED, solution=solution,
               max_error=max_error)
        LOG.info("%s: unique solution, max residual %.3e", self.name, max_error)

        return SolverResult(
            status=SolutionStatus.UNIQUE_SOLUTION,
            method=self.name,
            solution=tuple(float(v) for v in solution),
            max_error=max_error,
            determinant=determinant,
            classification=SolutionStatus.UNIQUE_SOLUTION,
            trace=_sealed(trace),
        )

    def _failure(self, message: str, trace: Optional[Trace],
                 determinant: Optional[float] = None,
                 classification: Optional[SolutionStatus] = None) -> SolverResult:
        LOG.warning("%s failed: %s", self.name, message)
        if trace is not None and not trace.sealed:
            record(trace, StepKind.FAILED, message=message)
        return SolverResult(
            status=SolutionStatus.ERROR,
            method=self.name,
            determinant=determinant,
            error_message=message,
            classification=classification,
            trace=_sealed(trace),
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


def _sealed(trace: Optional[Trace]) -> Optional[Trace]:
    return None if trace is None else trace.seal()
