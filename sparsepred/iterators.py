"""
Index/value iteration over dense vectors.

A dense vector stores every element explicitly, zeros included. Most
consumers (dot products, scoring loops, sparse conversions) only care about
the non-zero entries, so this module exposes them as a lazy stream of
``(index, value)`` pairs:

    >>> it = make_vector_index_value_iterator([0, 0, 3, 0, -5, 0, 0, 7])
    >>> list(it)
    [IndexValue(index=2, value=3), IndexValue(index=4, value=-5), IndexValue(index=7, value=7)]

---------------------------------------------------------------------
State
---------------------------------------------------------------------
An ``IndexValueIterator`` borrows the sequence it walks and keeps three
pieces of state:

- ``current`` : position of the element the iterator is parked on,
- ``end``     : one past the last position (fixed at construction),
- ``index``   : logical index, incremented once per element visited,
                skipped zeros included.

After construction and after every ``advance()`` the iterator is either
exhausted (``current == end``) or parked on a non-zero element. Zero means
exact equality with ``0``; no tolerance is applied.

The sequence is never copied nor mutated. It must not be modified while an
iterator over it is in use.
"""

from __future__ import annotations

from typing import Any, Generic, NamedTuple, Optional, Sequence, TypeVar

import numpy as np
import torch

from sparsepred.exceptions import InvalidRangeError, IteratorExhaustedError

T = TypeVar("T")


# =============================================================================
# Types
# =============================================================================

class IndexValue(NamedTuple):
    """
    A single non-zero entry of a dense vector.

    Attributes
    ----------
    index : int
        Position of the entry in the dense vector (relative to ``begin``).
    value :
        The entry itself, as stored in the vector.
    """
    index: int
    value: Any


# =============================================================================
# Iterator
# =============================================================================

class IndexValueIterator(Generic[T]):
    """
    Forward-only iterator over the non-zero entries of a dense sequence.

    Parameters
    ----------
    sequence : Sequence
        Dense storage to walk. Any object supporting ``len`` and integer
        indexing works (lists, tuples, 1-D numpy arrays, 1-D tensors).
    begin : int, optional
        First position to visit. Default is 0.
    end : int, optional
        One past the last position to visit. Defaults to ``len(sequence)``.

    Raises
    ------
    InvalidRangeError
        If ``0 <= begin <= end <= len(sequence)`` does not hold.

    Notes
    -----
    Besides the explicit ``is_valid`` / ``advance`` / ``current`` cursor
    interface, the iterator implements the Python iterator protocol, so it
    can be consumed by ``for`` loops, ``list`` or ``dict``. Both views share
    the same state: once consumed, it stays exhausted.
    """

    def __init__(self, sequence: Sequence[T], begin: int = 0, end: Optional[int] = None) -> None:
        length = len(sequence)
        if end is None:
            end = length
        if not 0 <= begin <= end <= length:
            raise InvalidRangeError(begin, end, length)

        self._sequence = sequence
        self._current = begin
        self._end = end
        self._index = 0
        self._skip_zeros()

    # ------------------------------------------------------------------

    def _skip_zeros(self) -> None:
        while self._current < self._end and self._sequence[self._current] == 0:
            self._current += 1
            self._index += 1

    def is_valid(self) -> bool:
        """Return True while the iterator is parked on a non-zero entry."""
        return self._current < self._end

    def has_next(self) -> bool:
        """Alias of ``is_valid``."""
        return self.is_valid()

    def advance(self) -> None:
        """
        Move to the next non-zero entry, or to the end of the range.

        Raises
        ------
        IteratorExhaustedError
            If the iterator is already exhausted. Callers are expected to
            check ``is_valid()`` first.
        """
        if not self.is_valid():
            raise IteratorExhaustedError("advance() called on an exhausted iterator.")
        self._current += 1
        self._index += 1
        self._skip_zeros()

    def current(self) -> IndexValue:
        """
        Return the entry the iterator is parked on.

        Calling this repeatedly without ``advance()`` returns the same pair.

        Raises
        ------
        IteratorExhaustedError
            If the iterator is exhausted.
        """
        if not self.is_valid():
            raise IteratorExhaustedError("current() called on an exhausted iterator.")
        return IndexValue(self._index, self._sequence[self._current])

    # ------------------------------------------------------------------

    def __iter__(self) -> IndexValueIterator[T]:
        return self

    def __next__(self) -> IndexValue:
        if not self.is_valid():
            raise StopIteration
        entry = self.current()
        self.advance()
        return entry

    def __repr__(self) -> str:
        state = f"index={self._index}" if self.is_valid() else "exhausted"
        return f"{type(self).__name__}({state})"


# =============================================================================
# Vector adapter
# =============================================================================

def make_vector_index_value_iterator(vector: Any) -> IndexValueIterator:
    """
    Build an ``IndexValueIterator`` over the full extent of a vector.

    Parameters
    ----------
    vector :
        A Python sequence, a 1-D ``numpy.ndarray`` or a 1-D ``torch.Tensor``.
        Tensors are viewed through numpy (CPU tensors share their storage,
        other devices are copied to host memory first). ``bfloat16`` tensors,
        which numpy cannot represent, are copied to ``float32``.

    Returns
    -------
    IndexValueIterator
        Iterator over the non-zero entries of ``vector``.

    Raises
    ------
    ValueError
        If ``vector`` is an array or tensor with more than one dimension.
    """
    if isinstance(vector, torch.Tensor):
        if vector.ndim != 1:
            raise ValueError(f"Expected a 1-D tensor, got shape {tuple(vector.shape)}.")
        vector = vector.detach().cpu()
        if vector.dtype == torch.bfloat16:
            # numpy has no bfloat16; float32 holds every bfloat16 value exactly.
            vector = vector.float()
        vector = vector.numpy()
    elif isinstance(vector, np.ndarray) and vector.ndim != 1:
        raise ValueError(f"Expected a 1-D array, got shape {vector.shape}.")

    return IndexValueIterator(vector)
