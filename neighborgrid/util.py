"""Reference implementations of the coordinate and cell-index primitives.

Cell indices are platform integers (int64). Converting a cell coordinate that
has run off to infinity or NaN must not raise: particles that far away cannot
interact with anything at finite range, and an adaptive time integrator will
reject the step on its own error estimate. A crash here would take down a
simulation that was about to recover, so out-of-range input saturates to
INT_MAX / INT_MIN instead.
"""

import math

import numpy as np

INT_MAX = int(np.iinfo(np.int64).max)
INT_MIN = int(np.iinfo(np.int64).min)

# float(INT_MAX) rounds up to 2**63, so every float >= 2**63 is out of range,
# while -2**63 itself is exactly INT_MIN.
INT_MAX_FLOAT = 2.0 ** 63
INT_MIN_FLOAT = -(2.0 ** 63)


def floor_to_int(x):
    """Floor a scalar to int64, saturating instead of failing.

    Args:
        x: Real scalar (Python or numpy float/int)

    Returns:
        floor(x) as int, INT_MAX for NaN or values above INT_MAX,
        INT_MIN for values below INT_MIN
    """
    if isinstance(x, (int, np.integer)):
        return min(max(int(x), INT_MIN), INT_MAX)
    if math.isnan(x) or x >= INT_MAX_FLOAT:
        return INT_MAX
    if x < INT_MIN_FLOAT:
        return INT_MIN
    # wider floats (longdouble) can sit below 2**63 and still floor onto it
    return min(max(int(math.floor(x)), INT_MIN), INT_MAX)


def floor_to_int_array(x):
    """Elementwise floor_to_int for arrays of cell coordinates.

    Args:
        x: Array-like of real values, any shape

    Returns:
        int64 array of the same shape
    """
    x = np.asarray(x, dtype=np.float64)
    with np.errstate(invalid="ignore"):
        too_big = np.isnan(x) | (x >= INT_MAX_FLOAT)
        too_small = x < INT_MIN_FLOAT
        in_range = ~(too_big | too_small)
        out = np.floor(np.where(in_range, x, 0.0)).astype(np.int64)
    out = np.where(too_big, np.int64(INT_MAX), out)
    out = np.where(too_small, np.int64(INT_MIN), out)
    return out


def extract_svector(A, ndims, i):
    """Return column i of a (D, N) coordinate array as a fixed-length tuple.

    Args:
        A: Coordinate array, shape (D, N) with D >= ndims
        ndims: Number of leading rows to read
        i: Column (particle) index, 0 <= i < N

    Returns:
        Tuple (A[0, i], ..., A[ndims - 1, i])

    Raises:
        ValueError: If ndims < 1 or A is not 2D
        IndexError: If A has fewer than ndims rows or i is not a valid column
    """
    if ndims < 1:
        raise ValueError(f"ndims must be positive, got {ndims}")
    A = np.asarray(A)
    if A.ndim != 2:
        raise ValueError(f"Coordinate array must be 2D, got shape {A.shape}")
    if A.shape[0] < ndims:
        raise IndexError(
            f"Coordinate array of shape {A.shape} has fewer than {ndims} rows"
        )
    if not 0 <= i < A.shape[1]:
        raise IndexError(
            f"Column index {i} out of bounds for {A.shape[1]} particles"
        )
    return tuple(A[dim, i] for dim in range(ndims))
