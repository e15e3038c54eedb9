"""
Structured, append-only record of the steps a solver takes.

Every record carries a :class:`StepKind` tag, a ``details`` dict with the
exact indices and factors used (0-based), and optionally a snapshot of the
working matrix right after the step. Rendering is left to the caller; see
:mod:`linsolve.formatting` for a plain-text renderer.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterator, Optional

import numpy as np


class StepKind(str, Enum):
    SYSTEM_LOADED = "system-loaded"
    CLASSIFIED = "classified"
    DETERMINANT = "determinant"
    PIVOT_SELECTED = "pivot-selected"
    ROWS_SWAPPED = "rows-swapped"
    ROW_NORMALIZED = "row-normalized"
    ROW_ELIMINATED = "row-eliminated"
    BACK_SUBSTITUTED = "back-substituted"
    INVERSE_COMPUTED = "inverse-computed"
    PRODUCT_COMPUTED = "product-computed"
    RESIDUAL_CHECKED = "residual-checked"
    SOLUTION_EXTRACTED = "solution-extracted"
    FAILED = "failed"


def _snapshot(matrix) -> tuple:
    """Freeze a 1-D or 2-D array into nested tuples of floats."""
    arr = np.asarray(matrix, dtype=np.float64)
    if arr.ndim == 1:
        return tuple(float(v) for v in arr)
    return tuple(tuple(float(v) for v in row) for row in arr)


def _plain(value: Any) -> Any:
    """Convert NumPy scalars/arrays in *value* to plain Python objects."""
    if isinstance(value, np.ndarray):
        return _snapshot(value)
    if isinstance(value, np.generic):
        return value.item()
    if isinstance(value, (list, tuple)):
        return tuple(_plain(v) for v in value)
    return value


@dataclass(frozen=True)
class TraceStep:
    kind: StepKind
    details: dict = field(default_factory=dict)
    matrix: Optional[tuple] = None

    def to_dict(self) -> dict:
        data = {"kind": self.kind.value, "details": dict(self.details)}
        if self.matrix is not None:
            data["matrix"] = [list(row) for row in self.matrix]
        return data


class Trace:
    """Ordered log of :class:`TraceStep` records.

    A trace is sealed once the owning result is built; recording after that
    raises ``RuntimeError`` so a returned result never changes.
    """

    def __init__(self) -> None:
        self._steps: list[TraceStep] = []
        self._sealed = False

    def record(self, kind: StepKind, matrix=None, **details) -> TraceStep:
        if self._sealed:
            raise RuntimeError("trace is sealed; no further steps may be recorded")
        step = TraceStep(
            kind=StepKind(kind),
            details={key: _plain(val) for key, val in details.items()},
            matrix=None if matrix is None else _snapshot(matrix),
        )
        self._steps.append(step)
        return step

    def seal(self) -> "Trace":
        self._sealed = True
        return self

    @property
    def sealed(self) -> bool:
        return self._sealed

    @property
    def steps(self) -> tuple:
        return tuple(self._steps)

    def kinds(self) -> list[StepKind]:
        return [s.kind for s in self._steps]

    def of_kind(self, kind: StepKind) -> list[TraceStep]:
        return [s for s in self._steps if s.kind == kind]

    def to_dicts(self) -> list[dict]:
        return [s.to_dict() for s in self._steps]

    def __iter__(self) -> Iterator[TraceStep]:
        return iter(tuple(self._steps))

    def __len__(self) -> int:
        return len(self._steps)

    def __repr__(self) -> str:
        state = "sealed" if self._sealed else "open"
        return f"Trace({len(self._steps)} steps, {state})"


def record(trace: Optional[Trace], kind: StepKind, matrix=None, **details) -> None:
    """Append to *trace* if one was requested; no-op otherwise."""
    if trace is not None:
        trace.record(kind, matrix=matrix, **details)
