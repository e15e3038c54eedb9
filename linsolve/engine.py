"""
Solver dispatcher.

Picks one of the three exact methods by name, alias or index and runs it:

  - ``gauss``         Gaussian elimination + back substitution
  - ``gauss-jordan``  full elimination, answer read off the last column
  - ``inverse``       ``x = A⁻¹ · b``

All three share the :class:`~linsolve.base.Solver` contract, so callers
can switch methods without changing anything else.
"""

import itertools
import logging
from typing import Union

from linsolve.base import Solver
from linsolve.constants import DEFAULT_METHOD, METHOD_ORDER
from linsolve.gauss import GaussianEliminationSolver
from linsolve.gauss_jordan import GaussJordanSolver
from linsolve.inverse_method import InverseMatrixSolver
from linsolve.result import SolverResult

LOG = logging.getLogger(__name__)

SOLVERS: dict[str, Solver] = {
    solver.name: solver
    for solver in (GaussianEliminationSolver(), GaussJordanSolver(), InverseMatrixSolver())
}

_METHOD_ALIASES = {
    "gauss": "gauss",
    "gaussian": "gauss",
    "gaussian_elimination": "gauss",
    "gauss_jordan": "gauss-jordan",
    "gaussjordan": "gauss-jordan",
    "jordan": "gauss-jordan",
    "jordan_gauss": "gauss-jordan",
    "inverse": "inverse",
    "inverse_matrix": "inverse",
    "matrix": "inverse",
}


def _normalize_method(method: Union[str, int]) -> str:
    if isinstance(method, bool):
        raise ValueError(f"Unknown solution method: {method!r}")
    if isinstance(method, int):
        if not 0 <= method < len(METHOD_ORDER):
            raise ValueError(
                f"Method index must be between 0 and {len(METHOD_ORDER) - 1}, got {method}."
            )
        return METHOD_ORDER[method]
    key = str(method).strip().lower().replace(" ", "_").replace("-", "_")
    try:
        return _METHOD_ALIASES[key]
    except KeyError:
        known = ", ".join(METHOD_ORDER)
        raise ValueError(f"Unknown solution method: {method!r}. Choose one of: {known}.") from None


def available_methods() -> list[str]:
    return list(METHOD_ORDER)


def get_solver(method: Union[str, int] = DEFAULT_METHOD) -> Solver:
    """Return the solver registered for *method* (name, alias or index)."""
    return SOLVERS[_normalize_method(method)]


def solve_system(matrix, method: Union[str, int] = DEFAULT_METHOD,
                 trace: bool = False) -> SolverResult:
    """Solve the augmented system *matrix* with the chosen method.

    Raises ``ValueError`` only for an unknown method; every problem with the
    matrix itself is reported through the result's ``error`` status.
    """
    solver = get_solver(method)
    result = solver.solve(matrix, trace=trace)
    LOG.info("%s -> %s", solver.name, result.status.value)
    return result


def compare_methods(matrix, trace: bool = False) -> dict[str, SolverResult]:
    """Run every method on the same input, in ``METHOD_ORDER``."""
    return {name: SOLVERS[name].solve(matrix, trace=trace) for name in METHOD_ORDER}


def max_disagreement(results: dict[str, SolverResult]) -> float:
    """Largest component-wise difference between any two unique solutions.

    Returns ``0.0`` when fewer than two results carry a solution.
    """
    solutions = [r.solution for r in results.values() if r.is_unique]
    worst = 0.0
    for first, second in itertools.combinations(solutions, 2):
        for a, b in zip(first, second):
            worst = max(worst, abs(a - b))
    return worst
