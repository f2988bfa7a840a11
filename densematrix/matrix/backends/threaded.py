"""
Threaded execution backend.

Performance path for large matrices. Output rows are split into
contiguous blocks and each block is computed on a worker thread. NumPy
releases the GIL inside its array loops, so the blocks run concurrently.

Every block writes a disjoint slice of the output and only reads the
operands, so there is no shared mutable state between workers.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from typing import Any
import os
import numpy as np
from numpy.typing import NDArray

from densematrix.core.exceptions import ValidationError
from densematrix.core.protocols import RowKernel


def row_blocks(n_rows: int, n_blocks: int) -> list[slice]:
    """
    Split range(n_rows) into at most n_blocks contiguous, non-empty slices.

    Block sizes differ by at most one row.
    """
    n_blocks = max(1, min(n_blocks, n_rows))
    base, extra = divmod(n_rows, n_blocks)
    blocks = []
    start = 0
    for i in range(n_blocks):
        stop = start + base + (1 if i < extra else 0)
        blocks.append(slice(start, stop))
        start = stop
    return blocks


class ThreadedBackend:
    """
    Thread-pool parallel-for over row blocks.

    Each output cell is produced by exactly one kernel call, and kernels
    are pure functions of the operands, so elementwise results match
    SerialBackend exactly. Products may differ in the last ulp because
    BLAS can block a row subset differently.
    """

    def __init__(self, max_workers: int | None = None):
        """
        Initialize threaded backend.

        Parameters
        ----------
        max_workers : int, optional
            Number of worker threads. Defaults to os.cpu_count().
        """
        if max_workers is None:
            max_workers = os.cpu_count() or 1
        if max_workers < 1:
            raise ValidationError(
                f"max_workers: must be >= 1, got {max_workers}"
            )
        self.max_workers = max_workers

    @property
    def name(self) -> str:
        return 'threaded'

    def fill(self, out: NDArray[np.floating[Any]], kernel: RowKernel) -> None:
        blocks = row_blocks(out.shape[0], self.max_workers)
        if len(blocks) == 1:
            out[blocks[0]] = kernel(blocks[0])
            return

        def _run(rows: slice) -> None:
            out[rows] = kernel(rows)

        with ThreadPoolExecutor(max_workers=len(blocks)) as pool:
            futures = [pool.submit(_run, rows) for rows in blocks]
            # result() re-raises the first worker failure in the caller
            for future in futures:
                future.result()
