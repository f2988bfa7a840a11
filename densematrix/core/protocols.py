"""
Core protocols for densematrix.

These define structural interfaces that execution strategies must satisfy.
We use Protocol (structural typing) rather than ABC (nominal typing) so a
caller can pass any object with the right shape as a backend.

Design Principles:
    - Minimal contracts: a backend only knows how to fill output rows
    - Stateless kernels: every kernel reads immutable inputs
    - Disjoint writes: each kernel call owns a distinct row block of output
"""

from typing import Any, Callable, Protocol, runtime_checkable

import numpy as np
from numpy.typing import NDArray


# A kernel maps a block of output rows to the values for that block.
RowKernel = Callable[[slice], NDArray[np.floating[Any]]]


@runtime_checkable
class ExecutionBackend(Protocol):
    """
    Protocol for parallel-for execution over independent output rows.

    A backend receives a preallocated output array and a kernel. It must
    call the kernel on row slices that together cover every output row
    exactly once and store each result into the matching slice of out.
    How the slices are scheduled (inline, on threads) is the backend's
    business; the result must not depend on it.
    """

    @property
    def name(self) -> str:
        """
        Backend identifier.

        Examples: 'serial', 'threaded'
        """
        ...

    def fill(self, out: NDArray[np.floating[Any]], kernel: RowKernel) -> None:
        """
        Populate out by evaluating kernel over row blocks.

        Args:
            out: Preallocated output array, shape (n_rows, n_cols)
            kernel: Callable returning the rows out[rows] for a row slice

        Raises:
            Whatever the kernel raises, unchanged.
        """
        ...
