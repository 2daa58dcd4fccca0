"""Adaptive parallel loop over contiguous index ranges.

threaded_for(range(lo, hi), body) calls body(i) exactly once for every i.
With a single configured worker the loop runs inline on the calling thread,
without an executor or futures, so serial runs pay nothing for the
parallel code path. With several workers the range is cut into one
contiguous chunk per worker; the calling thread takes the first chunk and a
shared thread pool takes the rest. Every chunk runs in ascending order.

Bodies run concurrently with each other and get no locking from here: each
index should touch only its own memory, or synchronize explicitly. Short
bodies only scale if they release the GIL, e.g. numba kernels compiled with
njit(nogil=True).
"""

import logging
import threading
from concurrent.futures import ThreadPoolExecutor

from .backend import max_threads, num_threads

logger = logging.getLogger(__name__)

_pool = None
_pool_lock = threading.Lock()
_local = threading.local()


def _executor():
    global _pool
    with _pool_lock:
        if _pool is None:
            _pool = ThreadPoolExecutor(
                max_workers=max_threads(), thread_name_prefix="neighborgrid"
            )
        return _pool


def split_range(indices, parts):
    """Split a step-1 range into contiguous chunks of near-equal length.

    Args:
        indices: range with step 1
        parts: Maximum number of chunks, >= 1

    Returns:
        List of at most `parts` non-empty ranges covering `indices` in order;
        chunk lengths differ by at most one
    """
    n = len(indices)
    if n == 0:
        return []
    parts = max(1, min(parts, n))
    base, rem = divmod(n, parts)
    chunks = []
    start = indices.start
    for k in range(parts):
        stop = start + base + (1 if k < rem else 0)
        chunks.append(range(start, stop))
        start = stop
    return chunks


def _run_chunk(body, chunk):
    _local.in_chunk = True
    try:
        for i in chunk:
            body(i)
    finally:
        _local.in_chunk = False


def threaded_for(indices, body):
    """Call body(i) for every i in indices, in parallel when workers allow.

    Args:
        indices: range with step 1
        body: Callable taking a single int index

    Raises:
        TypeError: If indices is not a range
        ValueError: If indices has a step other than 1
        Exception: The first exception raised by body, re-raised once all
            chunks have finished
    """
    if not isinstance(indices, range):
        raise TypeError(
            f"threaded_for expects a range, got {type(indices).__name__}"
        )
    if indices.step != 1:
        raise ValueError(f"threaded_for expects a step of 1, got {indices.step}")

    n_workers = num_threads()
    if n_workers <= 1 or len(indices) <= 1 or getattr(_local, "in_chunk", False):
        for i in indices:
            body(i)
        return

    chunks = split_range(indices, n_workers)
    logger.debug(
        "threaded_for: %d indices in %d chunks", len(indices), len(chunks)
    )

    pool = _executor()
    futures = [pool.submit(_run_chunk, body, chunk) for chunk in chunks[1:]]

    errors = []
    try:
        _run_chunk(body, chunks[0])
    except Exception as exc:
        errors.append(exc)

    # Join every chunk before reporting, there is no cancellation.
    for future in futures:
        exc = future.exception()
        if exc is not None:
            errors.append(exc)

    if errors:
        for extra in errors[1:]:
            logger.error(
                "threaded_for: additional chunk failure: %r", extra
            )
        raise errors[0]
