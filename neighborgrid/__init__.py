"""neighborgrid: numerically safe cell indexing and adaptive parallel loops for particle neighbor search."""

from .backend import num_threads, max_threads, threads
from .util import (
    INT_MAX,
    INT_MIN,
    floor_to_int,
    floor_to_int_array,
    extract_svector,
)
from .util_numba import (
    floor_to_int_numba,
    make_extract_svector_numba,
    cell_coords_numba,
    assign_cells_numba,
)
from .threaded import threaded_for, split_range
from .cells import cell_coords, assign_cells

__all__ = [
    "num_threads",
    "max_threads",
    "threads",
    "INT_MAX",
    "INT_MIN",
    "floor_to_int",
    "floor_to_int_array",
    "extract_svector",
    "floor_to_int_numba",
    "make_extract_svector_numba",
    "cell_coords_numba",
    "assign_cells_numba",
    "threaded_for",
    "split_range",
    "cell_coords",
    "assign_cells",
]
