"""Result types returned by every solver."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from linsolve.constants import HIGH_ACCURACY, SUFFICIENT_ACCURACY
from linsolve.trace import Trace


class SolutionStatus(str, Enum):
    UNIQUE_SOLUTION = "unique"
    INFINITE_SOLUTIONS = "infinite"
    NO_SOLUTION = "none"
    ERROR = "error"


def accuracy_grade(max_error: Optional[float]) -> Optional[str]:
    """Classify a residual: ``"high"``, ``"sufficient"`` or ``"poor"``.

    A ``"poor"`` grade usually points at an ill-conditioned matrix.
    """
    if max_error is None:
        return None
    if max_error < HIGH_ACCURACY:
        return "high"
    if max_error < SUFFICIENT_ACCURACY:
        return "sufficient"
    return "poor"


@dataclass(frozen=True)
class SolverResult:
    """Outcome of one solve call.

    Which fields are meaningful depends on ``status``:
      - ``solution`` and ``max_error`` only for a unique solution;
      - ``error_message`` only for ``ERROR``;
      - ``determinant`` whenever the method computed it;
      - ``trace`` whenever tracing was requested, whatever the status.
    """

    status: SolutionStatus
    method: str
    solution: Optional[tuple] = None
    max_error: Optional[float] = None
    determinant: Optional[float] = None
    error_message: Optional[str] = None
    classification: Optional[SolutionStatus] = None
    trace: Optional[Trace] = None

    @property
    def is_unique(self) -> bool:
        return self.status is SolutionStatus.UNIQUE_SOLUTION

    @property
    def accuracy(self) -> Optional[str]:
        return accuracy_grade(self.max_error)

    def to_dict(self) -> dict:
        return {
            "status": self.status.value,
            "method": self.method,
            "solution": None if self.solution is None else list(self.solution),
            "max_error": self.max_error,
            "accuracy": self.accuracy,
            "determinant": self.determinant,
            "error_message": self.error_message,
            "classification": (
                None if self.classification is None else self.classification.value
            ),
            "steps": None if self.trace is None else self.trace.to_dicts(),
        }
