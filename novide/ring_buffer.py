"""A fixed-size circular buffer with wrap-around indexing."""

from __future__ import annotations

import copy
import operator
from collections.abc import Iterable, Iterator
from typing import Generic, TypeVar

T = TypeVar("T")


class RingBuffer(Generic[T]):
    """A ring buffer that is always full.

    Indexing is relative to the current start and wraps around in both
    directions, so negative indices and indices past the size are valid.
    """

    def __init__(self, size: int, default_value: T) -> None:
        if size < 0:
            raise ValueError("size must not be negative")
        self._elements: list[T] = [copy.copy(default_value) for _ in range(size)]
        self._current = 0

    def _array_index(self, index: int) -> int:
        if not self._elements:
            raise IndexError("ring buffer is empty")
        return (self._current + operator.index(index)) % len(self._elements)

    def clone_from_iter(self, iterable: Iterable[T]) -> None:
        """Overwrite elements in logical order with copies from ``iterable``."""
        for position, value in zip(range(len(self._elements)), iterable):
            self[position] = copy.copy(value)

    def is_empty(self) -> bool:
        return not self._elements

    def __len__(self) -> int:
        return len(self._elements)

    def __getitem__(self, index: int) -> T:
        return self._elements[self._array_index(index)]

    def __setitem__(self, index: int, value: T) -> None:
        self._elements[self._array_index(index)] = value

    def __iter__(self) -> Iterator[T]:
        return self.iter_range()

    def iter_range(self, start: int | None = None, end: int | None = None) -> Iterator[T]:
        """Yield the elements from logical index ``start`` up to, not including, ``end``."""
        first = 0 if start is None else start
        last = len(self._elements) if end is None else end
        for index in range(first, last):
            yield self[index]

    def resize(self, new_size: int, default_value: T) -> None:
        """Change the size, keeping the logical order and resetting the start."""
        if new_size < 0:
            raise ValueError("size must not be negative")
        if new_size > 0 and self._elements:
            pivot = self._array_index(0)
            self._elements = self._elements[pivot:] + self._elements[:pivot]
        if new_size <= len(self._elements):
            del self._elements[new_size:]
        else:
            missing = new_size - len(self._elements)
            self._elements.extend(copy.copy(default_value) for _ in range(missing))
        self._current = 0

    def rotate(self, num: int) -> None:
        """Move the logical start by ``num`` positions."""
        self._current += num