"""
The small slice of the ndarray interface the stack iterators rely on.

Anything that quacks like a numpy.ndarray is accepted: a tuple `shape`, an
integer `size`, a `flags` object carrying `writeable`, and basic indexing
that returns views sharing the original buffer.
"""
from __future__ import annotations

import numbers
from typing import Any

import numpy as np

from libstack import Ix, Shape


def is_ndarray_like(x: Any) -> bool:
    # array classes expose `shape` etc. as descriptors, reject them
    if isinstance(x, type):
        return False
    shape = getattr(x, "shape", None)
    if not isinstance(shape, tuple):
        return False
    if not all(
        isinstance(d, numbers.Integral) and not isinstance(d, bool) and d >= 0
        for d in shape
    ):
        return False
    if not isinstance(getattr(x, "size", None), numbers.Integral):
        return False
    if not hasattr(getattr(x, "flags", None), "writeable"):
        return False
    return hasattr(x, "__getitem__")


def get_shape(x: Any) -> Shape:
    return tuple(int(d) for d in x.shape)


def is_read_only(x: Any) -> bool:
    return not x.flags.writeable


def slice_view(x: Any, ix: Ix, writable: bool) -> np.ndarray:
    """
    Returns the view of `x` selected by `ix`.

    Args:
        x: the source array.
        ix: one entry per dimension of `x`, either an int fixing the
            dimension or a slice keeping it.
        writable: if False, the returned view rejects writes. The source is
            left untouched.

    Returns:
        a view sharing the buffer of `x`. If every entry of `ix` is an int
        this is a 0-d view rather than a scalar copy.
    """
    assert len(ix) == len(x.shape), f"index {ix} does not match {x.shape}"

    # the trailing Ellipsis keeps all-int indices from collapsing to a scalar
    view = x[ix + (Ellipsis,)]

    if not writable:
        view.flags.writeable = False
    return view
