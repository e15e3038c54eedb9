"""
Plain-text rendering of matrices, traces and results.

Nothing in the solving core depends on this module; it only reads the
structured :class:`~linsolve.trace.Trace` and
:class:`~linsolve.result.SolverResult` objects.
"""

from typing import Optional

import numpy as np

from linsolve.result import SolutionStatus, SolverResult
from linsolve.trace import StepKind, Trace, TraceStep


# ── Numbers ──────────────────────────────────────────────────────────────

def _fmt_num(value: float, max_decimals: int = 10) -> str:
    """Format a float into a clean decimal string.

    - Removes trailing zeros after the decimal point.
    - Uses up to *max_decimals* digits of precision.
    - Returns integers without a decimal point (e.g. ``7`` not ``7.0``).
    """
    if abs(value - round(value)) < 1e-12:
        return str(int(round(value)))
    formatted = f"{value:.{max_decimals}f}".rstrip("0").rstrip(".")
    if formatted in ("", "-", "-0"):
        return "0"
    return formatted


def format_matrix(matrix, decimals: int = 4, augmented: Optional[bool] = None) -> str:
    """Lay out a matrix one row per line.

    Augmented (n x n+1) matrices get a bar before the last column. Pass
    *augmented* to force or suppress the bar.
    """
    arr = np.asarray(matrix, dtype=np.float64)
    if arr.ndim == 1:
        arr = arr.reshape(1, -1)
    rows, cols = arr.shape
    if augmented is None:
        augmented = cols == rows + 1
    width = decimals + 7
    lines = []
    for row in arr:
        cells = [f"{v:{width}.{decimals}f}" for v in row]
        if augmented:
            body = "  ".join(cells[:-1]) + " │ " + cells[-1]
        else:
            body = "  ".join(cells)
        lines.append(f"│ {body} │")
    return "\n".join(lines)


# ── Trace ────────────────────────────────────────────────────────────────

def _terms(terms) -> str:
    return " + ".join(f"({_fmt_num(a)}) × {_fmt_num(b)}" for a, b in terms)


def describe_step(step: TraceStep) -> str:
    """One line of text for a trace record (indices shown 1-based)."""
    d = step.details
    kind = step.kind
    if kind is StepKind.SYSTEM_LOADED:
        return f"Initial augmented matrix ({d['unknowns']} unknowns)"
    if kind is StepKind.CLASSIFIED:
        return (f"rank(A) = {d['rank_coefficients']}, rank(A|b) = {d['rank_augmented']}, "
                f"n = {d['unknowns']} → {d['status']}")
    if kind is StepKind.DETERMINANT:
        return f"det(A) = {_fmt_num(d['value'])}"
    if kind is StepKind.PIVOT_SELECTED:
        return (f"Pivot for column {d['column'] + 1}: row {d['row'] + 1}, "
                f"value {_fmt_num(d['value'])}")
    if kind is StepKind.ROWS_SWAPPED:
        return f"Swap rows R{d['first'] + 1} ↔ R{d['second'] + 1}"
    if kind is StepKind.ROW_NORMALIZED:
        return f"R{d['row'] + 1} = R{d['row'] + 1} ÷ {_fmt_num(d['divisor'])}"
    if kind is StepKind.ROW_ELIMINATED:
        t, s = d["target"] + 1, d["source"] + 1
        return f"R{t} = R{t} - ({_fmt_num(d['factor'])}) × R{s}"
    if kind is StepKind.BACK_SUBSTITUTED:
        i = d["index"] + 1
        parts = "".join(f" - ({_fmt_num(c)}) × {_fmt_num(x)}" for _, c, x in d["terms"])
        return f"x{i} = {_fmt_num(d['rhs'])}{parts} = {_fmt_num(d['value'])}"
    if kind is StepKind.INVERSE_COMPUTED:
        return "Inverse matrix A⁻¹"
    if kind is StepKind.PRODUCT_COMPUTED:
        return f"x{d['index'] + 1} = {_terms(d['terms'])} = {_fmt_num(d['value'])}"
    if kind is StepKind.RESIDUAL_CHECKED:
        return (f"Equation {d['row'] + 1}: {_fmt_num(d['lhs'])} ≈ {_fmt_num(d['rhs'])} "
                f"(error {d['error']:.2e})")
    if kind is StepKind.SOLUTION_EXTRACTED:
        values = ", ".join(_fmt_num(v) for v in d["solution"])
        return f"Solution: [{values}], max error {d['max_error']:.3e}"
    if kind is StepKind.FAILED:
        return f"Failed: {d['message']}"
    return kind.value


def render_trace(trace: Trace, show_matrices: bool = True) -> str:
    lines: list[str] = []
    for number, step in enumerate(trace, 1):
        lines.append(f"Step {number}: {describe_step(step)}")
        if show_matrices and step.matrix is not None:
            for row in format_matrix(step.matrix).split("\n"):
                lines.append(f"    {row}")
    return "\n".join(lines)


# ── Results ──────────────────────────────────────────────────────────────

_STATUS_TEXT = {
    SolutionStatus.INFINITE_SOLUTIONS: "The system has infinitely many solutions.",
    SolutionStatus.NO_SOLUTION: "The system is inconsistent (no solution).",
}

_ACCURACY_TEXT = {
    "high": "Solution found with high accuracy.",
    "sufficient": "Solution found with sufficient accuracy.",
    "poor": "Warning: large error, the matrix may be ill-conditioned.",
}


def render_result(result: SolverResult, title: Optional[str] = None,
                  show_steps: bool = True) -> str:
    """Build a readable report for *result*."""
    lines: list[str] = []
    heading = title or result.method
    lines.append("=" * 56)
    lines.append(f"  {heading}")
    lines.append("=" * 56)

    if result.is_unique:
        lines.append("Solution:")
        for i, value in enumerate(result.solution, 1):
            lines.append(f"  x{i} = {value:.8f}")
        lines.append(f"Max error: {result.max_error:.3e}")
        lines.append(_ACCURACY_TEXT[result.accuracy])
    elif result.status is SolutionStatus.ERROR:
        lines.append(f"Error: {result.error_message}")
    else:
        lines.append(_STATUS_TEXT[result.status])

    if result.determinant is not None:
        lines.append(f"det(A) = {_fmt_num(result.determinant)}")

    if show_steps and result.trace is not None and len(result.trace):
        lines.append("")
        lines.append("── STEPS ──────────────────────────────────")
        lines.append(render_trace(result.trace))
    return "\n".join(lines)
