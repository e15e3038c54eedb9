"""
Plain-text persistence for augmented matrices.

File layout::

    3
    2\t1\t-1\t8
    -3\t-1\t2\t-11
    -2\t1\t2\t-3

A size line holding ``n`` is followed by ``n`` rows of ``n + 1``
tab-separated numbers written with a decimal point. The loader searches the
whole document for the first such block, so files that carry a header or a
report around the matrix still load.
"""

import logging
import os
from typing import Optional, Sequence

import numpy as np

from linsolve import matrix_ops
from linsolve.constants import MAX_UNKNOWNS, MIN_UNKNOWNS
from linsolve.errors import MatrixFormatError

LOG = logging.getLogger(__name__)


# ── Cells ────────────────────────────────────────────────────────────────

def parse_cell(text: str, row: int, col: int) -> float:
    """Parse one cell; *row* and *col* are 0-based, messages are 1-based."""
    value = (text or "").strip().replace(",", ".")
    if not value:
        raise MatrixFormatError(
            f"Empty cell in row {row + 1}, column {col + 1}. Please fill in every cell."
        )
    try:
        number = float(value)
    except ValueError:
        raise MatrixFormatError(
            f"Invalid number in row {row + 1}, column {col + 1}: '{text}'"
        ) from None
    if not np.isfinite(number):
        raise MatrixFormatError(
            f"Non-finite number in row {row + 1}, column {col + 1}: '{text}'"
        )
    return number


def matrix_from_cells(cells: Sequence[Sequence[str]]) -> np.ndarray:
    """Build an augmented matrix from rows of cell strings."""
    n = len(cells)
    if n == 0:
        raise MatrixFormatError("No rows given.")
    values = []
    for i, row in enumerate(cells):
        if len(row) != n + 1:
            raise MatrixFormatError(
                f"Row {i + 1} has {len(row)} cells, expected {n + 1}."
            )
        values.append([parse_cell(cell, i, j) for j, cell in enumerate(row)])
    return matrix_ops.as_augmented(values)


def format_cell(value: float) -> str:
    """Shortest text that reads back to the same float."""
    value = float(value)
    if value.is_integer() and abs(value) < 1e15:
        return str(int(value))
    return repr(value)


# ── Text ─────────────────────────────────────────────────────────────────

def dumps(matrix) -> str:
    augmented = matrix_ops.as_augmented(matrix)
    n = augmented.shape[0]
    if not MIN_UNKNOWNS <= n <= MAX_UNKNOWNS:
        raise MatrixFormatError(
            f"Only systems with {MIN_UNKNOWNS}-{MAX_UNKNOWNS} unknowns can be written, got {n}."
        )
    lines = [str(n)]
    for row in augmented:
        lines.append("\t".join(format_cell(v) for v in row))
    return "\n".join(lines) + "\n"


def _find_block(lines: list[str]) -> Optional[tuple[int, int]]:
    """Return ``(size_line_index, n)`` of the first valid matrix block."""
    for i, line in enumerate(lines):
        try:
            n = int(line.strip())
        except ValueError:
            continue
        if not MIN_UNKNOWNS <= n <= MAX_UNKNOWNS:
            continue
        if i + n >= len(lines):
            continue
        if all(len(lines[i + j].split("\t")) == n + 1 for j in range(1, n + 1)):
            return i, n
    return None


def loads(text: str) -> np.ndarray:
    lines = text.splitlines()
    if len(lines) < 2:
        raise MatrixFormatError("Not a matrix file: expected a size line and matrix rows.")
    block = _find_block(lines)
    if block is None:
        raise MatrixFormatError(
            f"No matrix found: expected a size line ({MIN_UNKNOWNS}-{MAX_UNKNOWNS}) "
            f"followed by that many tab-separated rows."
        )
    start, n = block
    cells = [lines[start + 1 + i].split("\t") for i in range(n)]
    LOG.debug("found %dx%d matrix at line %d", n, n + 1, start + 1)
    return matrix_from_cells(cells)


# ── Files ────────────────────────────────────────────────────────────────

def save(path: str, matrix) -> None:
    text = dumps(matrix)
    directory = os.path.dirname(os.path.abspath(path))
    os.makedirs(directory, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write(text)
    LOG.info("saved matrix to %s", path)


def load(path: str) -> np.ndarray:
    with open(path, "r", encoding="utf-8-sig") as f:
        matrix = loads(f.read())
    LOG.info("loaded %dx%d matrix from %s", matrix.shape[0], matrix.shape[1], path)
    return matrix
