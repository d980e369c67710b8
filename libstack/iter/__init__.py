from __future__ import annotations

import logging
import numbers
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, Iterable, Iterator, NamedTuple, Optional, Union

import numpy as np

from libstack import (
    Ix,
    Shape,
    fmt_ix,
    iter_ndim,
    next_cartesian_index,
    normalize_index,
    numel,
)
from libstack.errors import (
    DimensionOrderError,
    DimensionRangeError,
    DimensionUniquenessError,
    InvalidArgumentError,
    ReadOnlyError,
)
from libstack.options import StackOptions
from libstack.view import get_shape, is_ndarray_like, is_read_only, slice_view

logger = logging.getLogger(__name__)


class Step(NamedTuple):
    """
    Result of a single advance of a stack iterator.

    `value` is None whenever `done` is True, unless a value was handed to
    `StackIterator.close`.
    """

    value: Any
    done: bool


@dataclass(frozen=True, eq=False)
class StackSpec:
    """
    Validated description of a stack of subarrays.

    A StackSpec is re-iterable: every call to `iter` returns a new,
    independent StackIterator starting from the first subarray.

    Attributes:
        array: the source array. Shared, never copied; its shape must not
            change while the spec is in use.
        stacked_dims: ascending dimensions kept at full range in every view.
        free_dims: ascending dimensions enumerated across views.
        free_shape: extents of the free dimensions.
        total_steps: number of views in the stack.
        writable: whether produced views accept writes.
    """

    array: Any = field(repr=False)
    stacked_dims: tuple[int, ...]
    free_dims: tuple[int, ...]
    free_shape: Shape
    total_steps: int
    writable: bool

    @property
    def ndim(self) -> int:
        return len(self.stacked_dims) + len(self.free_dims)

    @property
    def view_shape(self) -> Shape:
        shape = get_shape(self.array)
        return tuple(shape[dx] for dx in self.stacked_dims)

    def indices(self) -> Iterable[Ix]:
        """
        Yields the index selecting each view, in iteration order.
        """
        if self.total_steps == 0:
            return
        ixer = StackIx(self)
        for coord in iter_ndim(self.free_shape):
            yield ixer.put(coord).ix()

    def __len__(self) -> int:
        return self.total_steps

    def __iter__(self) -> StackIterator:
        return StackIterator(self)


class StackIx:
    """
    Per-dimension indexer reused across the steps of one iterator.

    Stacked dimensions hold a full slice for the lifetime of the indexer;
    only the entries of free dimensions are overwritten on each step.
    """

    def __init__(self, spec: StackSpec):
        self.free_dims = spec.free_dims
        self.indexers: list[Union[int, slice]] = [
            slice(None, None, None) for _ in range(spec.ndim)
        ]
        for dx in self.free_dims:
            self.indexers[dx] = 0

    def put(self, coord: Sequence[int]) -> StackIx:
        for dx, c in zip(self.free_dims, coord):
            self.indexers[dx] = c
        return self

    def ix(self) -> Ix:
        return tuple(self.indexers)

    def __str__(self) -> str:
        return fmt_ix(self.ix())


@dataclass
class Cursor:
    coordinate: list[int]
    step: int = 0
    done: bool = False


def _is_integer_sequence(dims: Any) -> bool:
    if isinstance(dims, np.ndarray):
        return dims.ndim == 1 and dims.dtype.kind in "iu"
    if isinstance(dims, (str, bytes, Mapping)) or not isinstance(
        dims, Sequence
    ):
        return False
    return all(
        isinstance(d, numbers.Integral) and not isinstance(d, (bool, np.bool_))
        for d in dims
    )


def stack_spec(
    x: Any,
    dims: Sequence[int],
    options: Optional[Union[StackOptions, Mapping[str, Any]]] = None,
    **kwargs: Any,
) -> StackSpec:
    """
    Validates a stacking request and derives the stack layout.

    Args:
        x: the ndarray to cut subarrays from.
        dims: the dimensions kept at full range in each subarray. Negative
            values count from the last dimension. After resolving negative
            values the dimensions must be strictly ascending.
        options: mapping or StackOptions. See StackOptions for the recognized
            keys.
        **kwargs: options given as keywords, overriding `options`.

    Raises:
        InvalidArgumentError: `x` is not an ndarray, `dims` is not a sequence
            of ints, `x` has no more than len(dims) dimensions, or `options`
            is malformed.
        DimensionRangeError: a dimension index is out of bounds.
        DimensionOrderError: dimension indices are not ascending.
        DimensionUniquenessError: a dimension index is repeated.
        ReadOnlyError: writable views were requested over a read-only array.
    """
    if not is_ndarray_like(x):
        raise InvalidArgumentError(
            f"invalid argument. First argument must be an ndarray. Value: `{x!r}`."
        )
    if not _is_integer_sequence(dims):
        raise InvalidArgumentError(
            "invalid argument. Second argument must be a sequence of integers. "
            f"Value: `{dims!r}`."
        )

    # work on a copy, the caller's sequence is left alone
    raw = [int(d) for d in dims]
    stacked = list(raw)
    n_stacked = len(stacked)

    shape = get_shape(x)
    ndim = len(shape)

    if ndim <= n_stacked:
        raise InvalidArgumentError(
            "invalid argument. First argument must be an ndarray having at "
            f"least {n_stacked + 1} dimensions. Number of dimensions: {ndim}."
        )

    for i, d in enumerate(stacked):
        dx = normalize_index(d, ndim)
        if dx is None:
            raise DimensionRangeError(
                "invalid argument. Dimension index exceeds the number of "
                f"dimensions. Number of dimensions: {ndim}. Value: `{d}`."
            )
        stacked[i] = dx

    for prev, cur in zip(stacked, stacked[1:]):
        if prev > cur:
            raise DimensionOrderError(
                "invalid argument. Dimension indices must be sorted in "
                f"ascending order. Value: `{raw}`."
            )
    for prev, cur in zip(stacked, stacked[1:]):
        if prev == cur:
            raise DimensionUniquenessError(
                "invalid argument. Dimension indices must be unique. "
                f"Value: `{raw}`."
            )

    opts = StackOptions.from_mapping(options, **kwargs)
    if opts.writable and is_read_only(x):
        raise ReadOnlyError("invalid option. Cannot write to read-only array.")

    free_dims = tuple(dx for dx in range(ndim) if dx not in stacked)
    free_shape = tuple(shape[dx] for dx in free_dims)

    # a zero-extent stacked dimension empties the stack as well
    total_steps = numel(free_shape) if numel(shape) else 0

    spec = StackSpec(
        array=x,
        stacked_dims=tuple(stacked),
        free_dims=free_dims,
        free_shape=free_shape,
        total_steps=total_steps,
        writable=opts.writable,
    )
    logger.debug(
        "stacking dims %s of shape %s over free dims %s: %d subarrays",
        spec.stacked_dims,
        shape,
        spec.free_dims,
        total_steps,
    )
    return spec


class StackIterator(Iterator[Any]):
    """
    Iterates over the subarrays of a stack, one view per step.

    The free dimensions are walked in row-major order: the last free
    dimension varies fastest. Views share the buffer of the source array, so
    writes to the source are visible through them.

    Not safe for concurrent use; the cursor is mutated in place on every
    step.
    """

    def __init__(self, spec: StackSpec):
        self.spec = spec
        self.cursor = Cursor(
            coordinate=[0] * len(spec.free_dims),
            done=spec.total_steps == 0,
        )
        self._ixer = StackIx(spec)
        self._index: Optional[Ix] = None

    @property
    def index(self) -> Optional[Ix]:
        """
        The index of the most recently produced view, or None before the
        first step.
        """
        return self._index

    @property
    def done(self) -> bool:
        return self.cursor.done

    def advance(self) -> Step:
        cursor = self.cursor
        if cursor.done:
            return Step(None, True)

        if cursor.step >= self.spec.total_steps:
            cursor.done = True
            logger.debug("stack exhausted after %d subarrays", cursor.step)
            return Step(None, True)

        ix = self._ixer.put(cursor.coordinate).ix()
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("subarray %d at %s", cursor.step, fmt_ix(ix))

        view = slice_view(self.spec.array, ix, self.spec.writable)
        self._index = ix

        cursor.step += 1
        wrapped = next_cartesian_index(self.spec.free_shape, cursor.coordinate)
        assert wrapped == (
            cursor.step == self.spec.total_steps
        ), f"odometer wrapped={wrapped} at step {cursor.step}"

        return Step(view, False)

    def close(self, value: Any = None) -> Step:
        """
        Finishes the iterator early. Safe to call repeatedly.
        """
        self.cursor.done = True
        return Step(value, True)

    def fresh(self) -> StackIterator:
        """
        Returns a new iterator over the same stack, starting from the first
        subarray. The cursor of this iterator is not shared.
        """
        return iter_stacks(
            self.spec.array,
            self.spec.stacked_dims,
            StackOptions(readonly=not self.spec.writable),
        )

    def __next__(self) -> Any:
        step = self.advance()
        if step.done:
            raise StopIteration
        return step.value

    def __iter__(self) -> StackIterator:
        return self

    def __length_hint__(self) -> int:
        if self.cursor.done:
            return 0
        return self.spec.total_steps - self.cursor.step


def iter_stacks(
    x: Any,
    dims: Sequence[int],
    options: Optional[Union[StackOptions, Mapping[str, Any]]] = None,
    **kwargs: Any,
) -> StackIterator:
    """
    Returns an iterator over each subarray in a stack of subarrays.

    Each subarray keeps the dimensions `dims` of `x` at full range and fixes
    every other dimension to a single index:

        >>> x = np.arange(8).reshape(2, 2, 2)
        >>> it = iter_stacks(x, [1, 2])
        >>> next(it).tolist()
        [[0, 1], [2, 3]]
        >>> next(it).tolist()
        [[4, 5], [6, 7]]

    Views are read-only unless `readonly=False` is given.

    See `stack_spec` for arguments and raised errors.
    """
    return StackIterator(stack_spec(x, dims, options, **kwargs))
