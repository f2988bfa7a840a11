"""
Execution backends for Matrix elementwise and product operations.

    serial: SerialBackend, the reference single-thread path
    threaded: ThreadedBackend, row blocks on a thread pool
"""

from densematrix.matrix.backends.serial import SerialBackend
from densematrix.matrix.backends.threaded import ThreadedBackend

__all__ = [
    "SerialBackend",
    "ThreadedBackend",
]
