"""
Serial execution backend.

Reference path: evaluates the kernel once over every output row on the
calling thread.
"""

from __future__ import annotations

from typing import Any
import numpy as np
from numpy.typing import NDArray

from densematrix.core.protocols import RowKernel


class SerialBackend:
    """Single-threaded parallel-for; one kernel call covering all rows."""

    @property
    def name(self) -> str:
        return 'serial'

    def fill(self, out: NDArray[np.floating[Any]], kernel: RowKernel) -> None:
        rows = slice(0, out.shape[0])
        out[rows] = kernel(rows)
