"""Pytest configuration and fixtures."""

import numpy as np
import pytest


def pytest_addoption(parser):
    """Add command-line options for pytest."""
    parser.addoption(
        "--runslow",
        action="store_true",
        default=False,
        help="run slow tests"
    )


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')")


def pytest_collection_modifyitems(config, items):
    """Modify test collection based on command-line options."""
    if config.getoption("--runslow"):
        return

    skip_slow = pytest.mark.skip(reason="need --runslow option to run")
    for item in items:
        if "slow" in item.keywords:
            item.add_marker(skip_slow)


@pytest.fixture(scope="session", autouse=True)
def warmup_numba_jit():
    """Compile the numba kernels once per session so tests measure behavior, not JIT time."""
    from neighborgrid.util_numba import (
        floor_to_int_numba,
        make_extract_svector_numba,
        cell_coords_numba,
        assign_cells_numba,
    )

    coords = np.arange(6, dtype=np.float64).reshape(3, 2)
    cell_size = np.ones(3)
    floor_to_int_numba(1.5)
    make_extract_svector_numba(3)(coords, 0)
    cell_coords_numba(coords[:, 0].copy(), cell_size)
    assign_cells_numba(coords, cell_size)


@pytest.fixture
def workers(monkeypatch):
    """Force the worker count seen by threaded_for.

    Returns a setter; calling workers(4) makes every later threaded_for call
    in the test see four workers, independent of the machine's core count.
    """
    import neighborgrid.threaded as threaded

    def set_workers(n):
        monkeypatch.setattr(threaded, "num_threads", lambda: n)

    return set_workers
