from libstack import (
    fmt_ix,
    iter_ndim,
    next_cartesian_index,
    normalize_index,
    numel,
)


def test_fmt_ix():
    ix = (0, slice(None), slice(1, 3), slice(None, None, 2), slice(0, 2))
    assert fmt_ix(ix) == "(0,:,1:3,::2,0:2)"


def test_iter_ndim_row_major():
    assert list(iter_ndim((2, 3))) == [
        (0, 0),
        (0, 1),
        (0, 2),
        (1, 0),
        (1, 1),
        (1, 2),
    ]
    assert list(iter_ndim((2, 0))) == []


def test_numel():
    assert numel((2, 3, 4)) == 24
    assert numel((2, 0, 4)) == 0
    assert numel(()) == 1


def test_normalize_index():
    assert normalize_index(0, 3) == 0
    assert normalize_index(2, 3) == 2
    assert normalize_index(-1, 3) == 2
    assert normalize_index(-3, 3) == 0

    assert normalize_index(3, 3) is None
    assert normalize_index(-4, 3) is None


def test_next_cartesian_index_carries_leftward():
    shape = (2, 2)
    coord = [0, 0]

    seen = [tuple(coord)]
    wrapped = False
    while not wrapped:
        wrapped = next_cartesian_index(shape, coord)
        seen.append(tuple(coord))

    assert seen == [(0, 0), (0, 1), (1, 0), (1, 1), (0, 0)]


def test_next_cartesian_index_matches_iter_ndim():
    """
    Walking the odometer visits the same coordinates, in the same order, as
    the cartesian product of the dimension ranges.
    """
    shape = (3, 1, 2, 4)
    coord = [0] * len(shape)

    for expect in iter_ndim(shape):
        assert tuple(coord) == expect
        next_cartesian_index(shape, coord)

    assert coord == [0, 0, 0, 0]
