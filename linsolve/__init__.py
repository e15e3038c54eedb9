"""Exact solvers for small dense systems of linear equations."""

from linsolve.classifier import classify, ranks
from linsolve.engine import (
    available_methods,
    compare_methods,
    get_solver,
    max_disagreement,
    solve_system,
)
from linsolve.errors import (
    DegenerateMatrixError,
    DimensionError,
    MatrixError,
    MatrixFormatError,
)
from linsolve.gauss import GaussianEliminationSolver
from linsolve.gauss_jordan import GaussJordanSolver
from linsolve.inverse_method import InverseMatrixSolver
from linsolve.matrix_ops import determinant, inverse, rank
from linsolve.result import SolutionStatus, SolverResult
from linsolve.trace import StepKind, Trace, TraceStep

__all__ = [
    "classify",
    "ranks",
    "available_methods",
    "compare_methods",
    "get_solver",
    "max_disagreement",
    "solve_system",
    "DegenerateMatrixError",
    "DimensionError",
    "MatrixError",
    "MatrixFormatError",
    "GaussianEliminationSolver",
    "GaussJordanSolver",
    "InverseMatrixSolver",
    "determinant",
    "inverse",
    "rank",
    "SolutionStatus",
    "SolverResult",
    "StepKind",
    "Trace",
    "TraceStep",
]
