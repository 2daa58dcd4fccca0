"""Numba backend and worker-count configuration.

This module centralizes everything the package takes from numba: the JIT
decorator used by the compiled kernels and the runtime query for how many
worker threads are currently configured.

The worker count is read on every call, never cached, so changes made with
``numba.set_num_threads`` (or the ``threads`` context manager below) between
two loops are honored by the second one.
"""

import os
from contextlib import contextmanager

import numba
from numba import njit, prange

SERIAL_ENV = "NEIGHBORGRID_SERIAL"


def serial_forced():
    """Return True if the serial escape hatch environment variable is set."""
    return os.getenv(SERIAL_ENV, "0").lower() in ("1", "true", "yes")


def max_threads():
    """Upper bound on the worker count, fixed when numba is configured."""
    return numba.config.NUMBA_NUM_THREADS


def num_threads():
    """Number of parallel workers available right now.

    Returns:
        1 if NEIGHBORGRID_SERIAL is set, otherwise numba's current thread
        count for the calling thread.
    """
    if serial_forced():
        return 1
    return numba.get_num_threads()


@contextmanager
def threads(n: int):
    """Temporarily set the numba worker count for the calling thread.

    Args:
        n: Number of workers, 1 <= n <= max_threads()

    Raises:
        ValueError: If n is outside the configurable range
    """
    if n < 1 or n > max_threads():
        raise ValueError(
            f"Thread count must be between 1 and {max_threads()}, got {n}"
        )
    previous = numba.get_num_threads()
    numba.set_num_threads(n)
    try:
        yield n
    finally:
        numba.set_num_threads(previous)


__all__ = [
    "SERIAL_ENV",
    "njit",
    "prange",
    "serial_forced",
    "max_threads",
    "num_threads",
    "threads",
]
