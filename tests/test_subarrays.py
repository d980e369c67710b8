import numpy as np
import pytest

from libstack.errors import InvalidArgumentError
from libstack.iter.subarrays import (
    iter_columns,
    iter_matrices,
    iter_rows,
    iter_subarrays,
)


def test_matrices():
    x = np.arange(24).reshape(2, 3, 4)
    views = list(iter_matrices(x))

    assert len(views) == 2
    assert np.array_equal(views[0], x[0])
    assert np.array_equal(views[1], x[1])


def test_matrices_of_a_matrix():
    """
    A 2-d array has no free dimension left to walk.
    """
    with pytest.raises(InvalidArgumentError):
        iter_matrices(np.zeros((3, 3)))


def test_rows():
    x = np.arange(24).reshape(2, 3, 4)
    rows = list(iter_rows(x))

    assert len(rows) == 6
    assert all(r.shape == (4,) for r in rows)
    assert np.array_equal(np.stack(rows), x.reshape(6, 4))


def test_columns():
    x = np.arange(6).reshape(2, 3)
    cols = list(iter_columns(x))

    assert len(cols) == 3
    for j, col in enumerate(cols):
        assert np.array_equal(col, x[:, j])


def test_subarrays():
    x = np.arange(24).reshape(2, 3, 4)

    assert len(list(iter_subarrays(x, 2))) == 2
    assert len(list(iter_subarrays(x, 1))) == 6

    elems = list(iter_subarrays(x, 0))
    assert len(elems) == 24
    assert [e.item() for e in elems] == list(range(24))


@pytest.mark.parametrize("ndims", [-1, 1.5, True, "2"])
def test_subarrays_bad_ndims(ndims):
    with pytest.raises(InvalidArgumentError):
        iter_subarrays(np.zeros((2, 2)), ndims)


def test_options_pass_through():
    x = np.zeros((2, 2, 2))
    for m in iter_matrices(x, readonly=False):
        m[...] = 1.0

    assert np.all(x == 1.0)
