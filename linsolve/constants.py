"""Numeric tolerances and defaults shared by every linsolve module."""

# Single zero tolerance for pivots, rank defects and the determinant test.
EPSILON = 1e-12

# System sizes accepted by the text loader. The core accepts any n >= 1.
MIN_UNKNOWNS = 2
MAX_UNKNOWNS = 10

# ── Residual thresholds for the accuracy verdict ─────────────────────────
HIGH_ACCURACY = 1e-10
SUFFICIENT_ACCURACY = 1e-6

# ── Solver selection ────────────────────────────────────────────────────
METHOD_ORDER = ("gauss", "gauss-jordan", "inverse")
DEFAULT_METHOD = METHOD_ORDER[0]
