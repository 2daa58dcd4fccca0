"""Numba-compiled counterparts of the primitives in util.py.

These are meant to be called from inside the grid code's own kernels. They
produce the same results as the reference implementations in util.py, which
are kept for testing and for plain Python callers.

Kernels that divide by a cell size use error_model="numpy", so a zero or
vanishing cell size yields inf/NaN and saturates instead of raising
ZeroDivisionError.
"""

from functools import lru_cache

import numpy as np
from numba.np.unsafe.ndarray import to_fixed_tuple

from .backend import njit, prange
from .util import INT_MAX, INT_MIN, INT_MAX_FLOAT, INT_MIN_FLOAT


@njit(cache=True)
def floor_to_int_numba(x):
    """Numba floor_to_int: int64 floor of x, INT_MAX for NaN/overflow, INT_MIN for underflow."""
    if np.isnan(x) or x >= INT_MAX_FLOAT:
        return np.int64(INT_MAX)
    if x < INT_MIN_FLOAT:
        return np.int64(INT_MIN)
    return np.int64(np.floor(x))


@lru_cache(maxsize=None)
def make_extract_svector_numba(ndims):
    """Build a kernel that extracts an ndims-long tuple from a matrix column.

    The tuple length is a compile-time constant of the returned kernel, so
    each dimension gets its own specialization (cached per ndims).

    Args:
        ndims: Number of rows to read, >= 1

    Returns:
        njit function extract(A, i) -> UniTuple of length ndims
    """
    ndims = int(ndims)
    if ndims < 1:
        raise ValueError(f"ndims must be positive, got {ndims}")

    @njit
    def extract_svector_numba(A, i):
        if A.shape[0] < ndims:
            raise IndexError("coordinate array has too few rows")
        if i < 0 or i >= A.shape[1]:
            raise IndexError("column index out of bounds")
        return to_fixed_tuple(A[:ndims, i], ndims)

    return extract_svector_numba


@njit(cache=True, error_model="numpy")
def cell_coords_numba(x, cell_size):
    """Cell coordinates of one position vector.

    Args:
        x: Position, shape (D,)
        cell_size: Cell edge length per axis, shape (D,)

    Returns:
        int64 array of shape (D,)
    """
    ndims = x.shape[0]
    out = np.empty(ndims, dtype=np.int64)
    for dim in range(ndims):
        out[dim] = floor_to_int_numba(x[dim] / cell_size[dim])
    return out


@njit(cache=True, parallel=True, error_model="numpy")
def assign_cells_numba(coordinates, cell_size):
    """Cell coordinates of every particle in a (D, N) coordinate array.

    Args:
        coordinates: Particle positions, shape (D, N)
        cell_size: Cell edge length per axis, shape (D,)

    Returns:
        int64 array of shape (D, N)
    """
    ndims, n_particles = coordinates.shape
    out = np.empty((ndims, n_particles), dtype=np.int64)
    for i in prange(n_particles):
        for dim in range(ndims):
            out[dim, i] = floor_to_int_numba(coordinates[dim, i] / cell_size[dim])
    return out
