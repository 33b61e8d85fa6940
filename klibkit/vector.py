"""A growable vector with explicit capacity management."""

from __future__ import annotations

from typing import Any, Iterable, Iterator


def _roundup_pow2(x: int) -> int:
    return 1 << (x - 1).bit_length() if x > 1 else 1


class Vector:
    """Dynamic array that tracks a capacity separate from its size.

    ``push`` doubles the capacity when full (starting at 2); ``at`` and item
    assignment grow the vector to cover an index, padding with ``fill`` and
    rounding the capacity up to a power of two.
    """

    def __init__(self, items: Iterable[Any] = (), fill: Any = None) -> None:
        self._items = list(items)
        self._capacity = len(self._items)
        self.fill = fill

    def push(self, value: Any) -> None:
        """Append ``value``."""
        if len(self._items) == self._capacity:
            self._capacity = self._capacity << 1 if self._capacity else 2
        self._items.append(value)

    def pop(self) -> Any:
        """Remove and return the last element."""
        if not self._items:
            raise IndexError("pop from empty vector")
        return self._items.pop()

    def resize(self, capacity: int) -> None:
        """Set the capacity, dropping elements beyond it."""
        if capacity < 0:
            raise ValueError("capacity must not be negative")
        self._capacity = capacity
        del self._items[capacity:]

    def copy_from(self, other: "Vector") -> None:
        """Replace the contents with those of ``other``."""
        if self._capacity < len(other):
            self._capacity = len(other)
        self._items = list(other)

    def at(self, index: int) -> Any:
        """Return the element at ``index``, growing the vector to include it."""
        if index < 0:
            raise IndexError("negative index")
        size = len(self._items)
        if self._capacity <= index:
            self._capacity = _roundup_pow2(index + 1)
        if size <= index:
            self._items.extend([self.fill] * (index + 1 - size))
        return self._items[index]

    def __len__(self) -> int:
        return len(self._items)

    def __getitem__(self, index: Any) -> Any:
        return self._items[index]

    def __setitem__(self, index: int, value: Any) -> None:
        if index >= 0:
            self.at(index)
        self._items[index] = value

    def __iter__(self) -> Iterator[Any]:
        return iter(self._items)

    def capacity(self) -> int:
        """Return the number of slots currently reserved."""
        return self._capacity

    def __repr__(self) -> str:
        return f"Vector({self._items!r})"