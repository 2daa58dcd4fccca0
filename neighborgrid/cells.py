"""Cell coordinates from particle positions.

This is the path a cell-list build takes through the primitives: pull a
particle's position out of the coordinate matrix, divide by the cell size
and floor each axis to an integer cell index. Diverged particles land on the
INT_MAX / INT_MIN sentinel cells rather than raising.
"""

import numpy as np

from .threaded import threaded_for
from .util import extract_svector, floor_to_int


def _per_axis(cell_size, ndims):
    cell_size = np.broadcast_to(np.asarray(cell_size, dtype=np.float64), (ndims,))
    return tuple(float(s) for s in cell_size)


def cell_coords(x, cell_size):
    """Integer cell coordinates of a single position.

    Args:
        x: Position vector of length D
        cell_size: Scalar or per-axis cell edge lengths

    Returns:
        Tuple of D ints
    """
    sizes = _per_axis(cell_size, len(x))
    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        return tuple(
            floor_to_int(np.float64(xi) / s) for xi, s in zip(x, sizes)
        )


def assign_cells(coordinates, cell_size):
    """Cell coordinates of every particle, computed with threaded_for.

    Args:
        coordinates: Particle positions, shape (D, N)
        cell_size: Scalar or per-axis cell edge lengths

    Returns:
        int64 array of shape (D, N)
    """
    coordinates = np.asarray(coordinates)
    ndims, n_particles = coordinates.shape
    sizes = _per_axis(cell_size, ndims)
    out = np.empty((ndims, n_particles), dtype=np.int64)

    def body(i):
        out[:, i] = cell_coords(extract_svector(coordinates, ndims, i), sizes)

    threaded_for(range(n_particles), body)
    return out
