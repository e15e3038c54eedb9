"""
Dense matrix primitives used by the solvers.

All matrices are C-contiguous ``float64`` NumPy arrays. Functions that
return a matrix never alias their input; ``swap_rows`` is the only routine
that mutates its argument.

Failure modes are part of each contract:
  - ``DimensionError`` for shape violations (non-square input, mismatched
    product operands, something that is not an n x (n+1) augmented matrix).
  - ``DegenerateMatrixError`` when ``inverse`` meets a zero pivot.
"""

import logging
from typing import Optional

import numpy as np

from linsolve.constants import EPSILON
from linsolve.errors import DegenerateMatrixError, DimensionError
from linsolve.trace import StepKind, Trace, record

LOG = logging.getLogger(__name__)


# ── Construction and shape checks ───────────────────────────────────────

def as_matrix(data) -> np.ndarray:
    """Return *data* as a fresh C-contiguous 2-D float64 array."""
    arr = np.array(data, dtype=np.float64, order="C", copy=True)
    if arr.ndim != 2:
        raise DimensionError(f"Expected a 2-D matrix, got {arr.ndim} dimension(s).")
    return arr


def as_vector(data) -> np.ndarray:
    arr = np.array(data, dtype=np.float64, copy=True)
    if arr.ndim != 1:
        raise DimensionError(f"Expected a 1-D vector, got {arr.ndim} dimension(s).")
    return arr


def clone(matrix) -> np.ndarray:
    """Deep copy; the result shares no memory with *matrix*."""
    return np.array(matrix, dtype=np.float64, order="C", copy=True)


def require_square(matrix: np.ndarray) -> int:
    rows, cols = matrix.shape
    if rows != cols:
        raise DimensionError(f"Matrix must be square, got {rows}x{cols}.")
    return rows


def require_augmented(matrix: np.ndarray) -> int:
    """Return ``n`` for an n x (n+1) matrix; raise ``DimensionError`` otherwise."""
    if matrix.ndim != 2:
        raise DimensionError("Augmented matrix must be 2-D.")
    rows, cols = matrix.shape
    if rows < 1 or cols != rows + 1:
        raise DimensionError(
            f"Augmented matrix must be n x (n+1) with n >= 1, got {rows}x{cols}."
        )
    return rows


def as_augmented(data) -> np.ndarray:
    matrix = as_matrix(data)
    require_augmented(matrix)
    return matrix


def extract_coefficients(augmented) -> np.ndarray:
    """The n x n coefficient block of an augmented matrix (a copy)."""
    augmented = np.asarray(augmented, dtype=np.float64)
    n = require_augmented(augmented)
    return clone(augmented[:, :n])


def extract_rhs(augmented) -> np.ndarray:
    """The right-hand-side column of an augmented matrix (a copy)."""
    augmented = np.asarray(augmented, dtype=np.float64)
    n = require_augmented(augmented)
    return augmented[:, n].copy()


# ── Row operations ──────────────────────────────────────────────────────

def swap_rows(matrix: np.ndarray, r1: int, r2: int) -> None:
    """Exchange two full rows in place."""
    if r1 != r2:
        matrix[[r1, r2]] = matrix[[r2, r1]]


def find_pivot_row(matrix: np.ndarray, col: int, from_row: int) -> int:
    """Row index in ``[from_row, n)`` with the largest ``|matrix[row, col]|``.

    Ties go to the lowest index (``argmax`` returns the first maximum).
    """
    column = np.abs(matrix[from_row:, col])
    return from_row + int(np.argmax(column))


def is_near_zero(value: float) -> bool:
    return abs(value) < EPSILON


# ── Determinant, rank, inverse ──────────────────────────────────────────

def determinant(square, trace: Optional[Trace] = None) -> float:
    """Determinant by Gaussian elimination with partial pivoting.

    Works on a private copy. Each row swap flips the sign; a near-zero
    candidate pivot means the matrix is degenerate and ``0.0`` is returned
    straight away.
    """
    temp = as_matrix(square)
    n = require_square(temp)
    det = 1.0
    swaps = 0

    for k in range(n):
        pivot_row = find_pivot_row(temp, k, k)
        if is_near_zero(temp[pivot_row, k]):
            record(trace, StepKind.DETERMINANT, value=0.0, degenerate_column=k,
                   swaps=swaps)
            return 0.0
        if pivot_row != k:
            swap_rows(temp, k, pivot_row)
            swaps += 1
        det *= temp[k, k]
        for i in range(k + 1, n):
            factor = temp[i, k] / temp[k, k]
            temp[i, k:] -= factor * temp[k, k:]

    if swaps % 2 == 1:
        det = -det
    det = float(det)
    record(trace, StepKind.DETERMINANT, value=det, swaps=swaps, matrix=temp)
    return det


def rank(matrix) -> int:
    """Number of pivots placed by forward row-echelon reduction.

    The pivot is the first entry at or below the current pivot row that is
    not near zero (no magnitude search). Columns without such an entry are
    skipped. Used unchanged for both the coefficient and augmented matrices.
    """
    temp = as_matrix(matrix)
    rows, cols = temp.shape
    r = 0

    for col in range(cols):
        if r >= rows:
            break
        pivot_row = next(
            (row for row in range(r, rows) if not is_near_zero(temp[row, col])),
            None,
        )
        if pivot_row is None:
            continue
        swap_rows(temp, r, pivot_row)
        for row in range(r + 1, rows):
            if not is_near_zero(temp[row, col]):
                factor = temp[row, col] / temp[r, col]
                temp[row, col:] -= factor * temp[r, col:]
        r += 1

    return r


def inverse(square, trace: Optional[Trace] = None) -> np.ndarray:
    """Inverse by Gauss-Jordan elimination on the block ``[A | I]``.

    Callers are expected to have checked the determinant already. A zero
    pivot still raises ``DegenerateMatrixError`` here.
    """
    a = as_matrix(square)
    n = require_square(a)
    block = np.hstack([a, np.eye(n)])

    for k in range(n):
        pivot_row = find_pivot_row(block, k, k)
        record(trace, StepKind.PIVOT_SELECTED, column=k, row=pivot_row,
               value=block[pivot_row, k])
        if pivot_row != k:
            swap_rows(block, k, pivot_row)
            record(trace, StepKind.ROWS_SWAPPED, matrix=block,
                   first=k, second=pivot_row)

        pivot = block[k, k]
        if is_near_zero(pivot):
            raise DegenerateMatrixError(
                f"Matrix is singular: zero pivot in column {k + 1}."
            )

        block[k] /= pivot
        record(trace, StepKind.ROW_NORMALIZED, matrix=block, row=k, divisor=pivot)

        for i in range(n):
            if i == k:
                continue
            factor = block[i, k]
            block[i] -= factor * block[k]
            record(trace, StepKind.ROW_ELIMINATED, matrix=block,
                   target=i, source=k, factor=factor)

    LOG.debug("inverted %dx%d matrix", n, n)
    return clone(block[:, n:])


# ── Products and residuals ──────────────────────────────────────────────

def multiply(matrix, vector) -> np.ndarray:
    """Matrix-vector product."""
    m = as_matrix(matrix)
    v = as_vector(vector)
    if m.shape[1] != v.shape[0]:
        raise DimensionError(
            f"Cannot multiply a {m.shape[0]}x{m.shape[1]} matrix "
            f"by a vector of length {v.shape[0]}."
        )
    return m @ v


def residuals(original_augmented, solution) -> np.ndarray:
    """Per-row ``|sum(coeff * x) - rhs|`` against the unmodified system."""
    original = np.asarray(original_augmented, dtype=np.float64)
    x = as_vector(solution)
    n = require_augmented(original)
    if x.shape[0] != n:
        raise DimensionError(
            f"Solution has {x.shape[0]} components, system has {n} unknowns."
        )
    lhs = multiply(original[:, :n], x)
    return np.abs(lhs - original[:, n])


def max_residual_error(original_augmented, solution) -> float:
    return float(np.max(residuals(original_augmented, solution)))
