"""Array storage: raw array data, windowed views over it, and their owner."""

from __future__ import annotations

from itertools import islice
from typing import Iterator

from tnac.values import Value


class ArrayData:
    """Growable sequence of values owned by a value store."""

    def __init__(self, val_store: Store, prealloc: int = 0) -> None:
        if prealloc < 0:
            raise ValueError(f"preallocation size must not be negative: {prealloc}")
        self._items: list[Value] = []
        self._store = val_store

    def size(self) -> int:
        return len(self._items)

    def add(self, item: Value) -> None:
        self._items.append(item)

    def val_store(self) -> Store:
        return self._store

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Value]:
        return iter(self._items)

    def __reversed__(self) -> Iterator[Value]:
        return reversed(self._items)

    def __getitem__(self, idx: int) -> Value:
        return self._items[idx]

    def __repr__(self) -> str:
        return f"ArrayData({self._items!r})"


class ArrayWrapper:
    """A window over array data given by an offset and an optional item count.

    Without a count the window reaches to the end of the data, following
    it as it grows.
    """

    def __init__(self, arr: ArrayData, offset: int = 0, count: int | None = None) -> None:
        if offset < 0:
            raise ValueError(f"offset must not be negative: {offset}")
        if count is not None and count < 0:
            raise ValueError(f"count must not be negative: {count}")
        self._data = arr
        self._offset = offset
        self._count = count

    def data(self) -> ArrayData:
        return self._data

    def offset(self) -> int:
        return self._offset

    def size(self) -> int:
        available = max(len(self._data) - self._offset, 0)
        if self._count is None:
            return available
        return min(self._count, available)

    def id(self) -> int:
        """Identity of the underlying data, shared by all its wrappers."""
        return id(self._data)

    def val_store(self) -> Store:
        return self._data.val_store()

    def __len__(self) -> int:
        return self.size()

    def __iter__(self) -> Iterator[Value]:
        return islice(iter(self._data), self._offset, self._offset + self.size())

    def __reversed__(self) -> Iterator[Value]:
        return reversed(list(self))

    def __getitem__(self, idx: int) -> Value:
        size = self.size()
        if idx < 0:
            idx += size
        if not 0 <= idx < size:
            raise IndexError(f"array index out of range: {idx}")
        return self._data[self._offset + idx]

    def __repr__(self) -> str:
        return f"ArrayWrapper({list(self)!r})"


class Store:
    """Owns every array and array view created during compilation or evaluation."""

    def __init__(self) -> None:
        self._arrays: list[ArrayData] = []
        self._wrappers: list[ArrayWrapper] = []

    def allocate_array(self, size: int) -> ArrayData:
        """Create a new empty array expected to hold ``size`` items."""
        arr = ArrayData(self, size)
        self._arrays.append(arr)
        return arr

    def wrap(self, arr: ArrayData, offset: int = 0, size: int | None = None) -> ArrayWrapper:
        """View ``size`` items of ``arr`` from ``offset``; the whole tail if no size."""
        wrapper = ArrayWrapper(arr, offset, size)
        self._wrappers.append(wrapper)
        return wrapper

    def rewrap(self, wrapper: ArrayWrapper, offset: int, size: int) -> ArrayWrapper:
        """View a part of an existing view; ``offset`` is relative to that view."""
        if offset < 0 or size < 0:
            raise ValueError("offset and size must not be negative")
        available = max(wrapper.size() - offset, 0)
        return self.wrap(wrapper.data(), wrapper.offset() + offset, min(size, available))