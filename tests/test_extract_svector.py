"""Tests for extracting fixed-size coordinate vectors from a (D, N) array."""

import numpy as np
import pytest

from neighborgrid.util import extract_svector


@pytest.fixture
def coords():
    """3 x 4 coordinate matrix, one particle per column."""
    return np.array([
        [0.0, 1.0, 2.0, 3.0],
        [10.0, 11.0, 12.0, 13.0],
        [20.0, 21.0, 22.0, 23.0],
    ])


def test_extract_column(coords):
    v = extract_svector(coords, 3, 2)
    assert isinstance(v, tuple)
    assert v == (2.0, 12.0, 22.0)


def test_every_entry_matches_array(coords):
    for i in range(coords.shape[1]):
        v = extract_svector(coords, 3, i)
        assert len(v) == 3
        for dim in range(3):
            assert v[dim] == coords[dim, i]


def test_fewer_dims_than_rows(coords):
    """Only the first ndims rows are read."""
    assert extract_svector(coords, 2, 1) == (1.0, 11.0)
    assert extract_svector(coords, 1, 3) == (3.0,)


def test_one_dimensional_system():
    coords = np.linspace(0.0, 1.0, 5).reshape(1, 5)
    assert extract_svector(coords, 1, 4) == (1.0,)


def test_result_does_not_alias_array(coords):
    v = extract_svector(coords, 3, 0)
    coords[0, 0] = 99.0
    assert v[0] == 0.0


def test_column_out_of_bounds(coords):
    with pytest.raises(IndexError):
        extract_svector(coords, 3, 4)
    with pytest.raises(IndexError):
        extract_svector(coords, 3, -1)


def test_too_many_dims(coords):
    with pytest.raises(IndexError):
        extract_svector(coords, 4, 0)


def test_invalid_ndims(coords):
    with pytest.raises(ValueError):
        extract_svector(coords, 0, 0)


def test_requires_matrix():
    with pytest.raises(ValueError):
        extract_svector(np.zeros(3), 1, 0)
