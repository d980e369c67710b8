from __future__ import annotations

import logging
from functools import reduce
from itertools import product
from operator import mul
from typing import Iterable, MutableSequence, Optional, Union

Shape = tuple[int, ...]  # type: ignore
Ix = tuple[Union[slice, int], ...]

logging.getLogger(__name__).addHandler(logging.NullHandler())


def fmt_ix(ix: Ix) -> str:
    out = "("
    for elem in ix:
        if isinstance(elem, int):
            out += f"{elem}"
        else:
            out += f"{elem.start if elem.start is not None else ''}:"
            out += f"{elem.stop if elem.stop is not None else ''}"
            if elem.step:
                out += f":{elem.step}"
        out += ","
    return out[:-1] + ")"


def iter_ndim(shape: Shape) -> Iterable[Shape]:
    """
    Iterate an arbitrary-dimensional shape in C (row-major) order.
    """
    yield from product(*(range(d) for d in shape))


def numel(shape: Shape) -> int:
    return reduce(mul, shape, 1)


def normalize_index(idx: int, ndim: int) -> Optional[int]:
    """
    Resolves a possibly negative dimension index against `ndim` dimensions.

    Returns None if the index does not address one of the dimensions.
    """
    if idx < 0:
        idx += ndim
    if 0 <= idx < ndim:
        return idx
    return None


def next_cartesian_index(shape: Shape, coord: MutableSequence[int]) -> bool:
    """
    Advances `coord` in place by one row-major step over `shape`.

    The last dimension varies fastest. Overflowing dimensions reset to zero
    and carry into the dimension before them.

    Returns:
        True if the carry ran past the first dimension, i.e. every index of
        `shape` has been visited and `coord` is back at the origin.
    """
    for dx in range(len(shape) - 1, -1, -1):
        coord[dx] += 1
        if coord[dx] < shape[dx]:
            return False
        coord[dx] = 0
    return True
