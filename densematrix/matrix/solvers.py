"""
Backend dispatch for Matrix operations.

Maps the user-facing backend choice onto an ExecutionBackend, using the
output size to decide when 'auto' is worth threading.
"""

from __future__ import annotations

from typing import Literal
import os
import warnings

from densematrix.core.compute.tolerances import PARALLEL_THRESHOLD
from densematrix.core.exceptions import ValidationError
from densematrix.core.protocols import ExecutionBackend
from densematrix.matrix.backends.serial import SerialBackend
from densematrix.matrix.backends.threaded import ThreadedBackend


BackendChoice = Literal['auto', 'serial', 'threaded']


def _cpu_count() -> int:
    return os.cpu_count() or 1


def get_backend(
    backend: BackendChoice | ExecutionBackend,
    n_elements: int,
) -> ExecutionBackend:
    """
    Select an execution backend.

    Parameters
    ----------
    backend : str or ExecutionBackend
        'auto', 'serial', 'threaded', or a ready-made backend instance,
        which is returned unchanged.
    n_elements : int
        Number of output cells the operation will produce.

    Returns
    -------
    ExecutionBackend

    Raises
    ------
    ValidationError
        If backend is not a known choice.
    """
    if isinstance(backend, ExecutionBackend):
        return backend

    if backend == 'serial':
        return SerialBackend()

    if backend == 'auto':
        if n_elements > PARALLEL_THRESHOLD and _cpu_count() > 1:
            return ThreadedBackend()
        return SerialBackend()

    if backend == 'threaded':
        if _cpu_count() < 2:
            warnings.warn(
                "Threaded backend requested on a single-CPU host, using serial backend",
                RuntimeWarning,
                stacklevel=3,
            )
            return SerialBackend()
        return ThreadedBackend()

    raise ValidationError(f"Unknown backend: {backend!r}")
