"""
Stack iterators over the trailing dimensions of an array.

These cover the common cases of iter_stacks: walking the matrices, rows or
columns of an arbitrary-dimensional array.
"""
from __future__ import annotations

from typing import Any

from libstack.errors import InvalidArgumentError
from libstack.iter import StackIterator, iter_stacks


def iter_subarrays(x: Any, ndims: int, **options: Any) -> StackIterator:
    """
    Iterates over the subarrays formed by the last `ndims` dimensions of `x`.

    For ndims == 0 every element is produced as a 0-d view.
    """
    if isinstance(ndims, bool) or not isinstance(ndims, int) or ndims < 0:
        raise InvalidArgumentError(
            "invalid argument. Number of subarray dimensions must be a "
            f"non-negative integer. Value: `{ndims!r}`."
        )
    return iter_stacks(x, list(range(-ndims, 0)), options)


def iter_matrices(x: Any, **options: Any) -> StackIterator:
    return iter_stacks(x, [-2, -1], options)


def iter_rows(x: Any, **options: Any) -> StackIterator:
    """
    Iterates over the rows of each matrix of `x`, as 1-d views along the last
    dimension.
    """
    return iter_stacks(x, [-1], options)


def iter_columns(x: Any, **options: Any) -> StackIterator:
    """
    Iterates over the columns of each matrix of `x`, as 1-d views along the
    second-to-last dimension.
    """
    return iter_stacks(x, [-2], options)
