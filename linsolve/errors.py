"""Exception hierarchy for matrix and solver failures."""


class MatrixError(ValueError):
    """Base class for every error raised by linsolve."""


class DimensionError(MatrixError):
    """A matrix or vector has the wrong shape for the requested operation."""


class DegenerateMatrixError(MatrixError):
    """A required pivot is effectively zero.

    The solvers report this as an ``error`` result; only the bare
    primitives let it propagate.
    """


class MatrixFormatError(MatrixError):
    """Matrix text or cell contents could not be parsed."""
