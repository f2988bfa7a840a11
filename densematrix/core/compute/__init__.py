"""
Shared compute infrastructure for densematrix.

Holds the numeric constants that every kernel and backend reads. The
execution backends themselves live in densematrix.matrix.backends.

Submodules:
    tolerances: Pivot/equality tolerances and the parallel threshold
"""

from densematrix.core.compute.tolerances import (
    EQUALITY_TOLERANCE,
    PARALLEL_THRESHOLD,
    PIVOT_TOLERANCE,
)

__all__ = [
    "EQUALITY_TOLERANCE",
    "PARALLEL_THRESHOLD",
    "PIVOT_TOLERANCE",
]
