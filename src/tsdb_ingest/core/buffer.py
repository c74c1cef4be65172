"""Fixed-capacity circular buffer with queue semantics.

Storage is a list of ``capacity + 1`` slots. One slot is always vacant so
that ``head == tail`` means empty and a full buffer never needs a separate
flag. The occupied slots are the circular interval ``(head, tail]``.
"""

import copy
from collections.abc import Iterator
from typing import Any, Generic, TypeVar

from tsdb_ingest.core.errors import CapacityExceeded
from tsdb_ingest.core.models import OverflowPolicy

T = TypeVar("T")


class BoundedHistoryBuffer(Generic[T]):
    """A ring buffer holding at most ``capacity`` most recent values.

    Not thread-safe: callers sharing an instance must synchronize access.

    Args:
        capacity: Maximum number of values held.
        policy: EVICT_OLDEST drops the oldest value when full,
            REJECT_ON_FULL refuses new values instead.
        default: Fill value used when ``prefill`` is true.
        prefill: Start logically full of ``capacity`` copies of ``default``.

    Example:
        ```python
        buf: BoundedHistoryBuffer[int] = BoundedHistoryBuffer(3)
        for i in range(5):
            buf.append(i)
        buf.to_list()  # [2, 3, 4]
        ```
    """

    def __init__(
        self,
        capacity: int,
        policy: OverflowPolicy = OverflowPolicy.EVICT_OLDEST,
        default: T | None = None,
        prefill: bool = False,
    ) -> None:
        if not isinstance(capacity, int) or isinstance(capacity, bool):
            raise TypeError(f"capacity must be an int, got {type(capacity).__name__}")
        if capacity <= 0:
            raise ValueError(f"capacity must be positive, got {capacity}")
        self._length = capacity + 1
        self._policy = policy
        self._slots: list[Any] = [None] * self._length
        self._head = 0
        self._tail = 0
        if prefill:
            # slot 0 stays vacant, slots 1..capacity hold the default
            self._slots[1:] = [default] * capacity
            self._tail = capacity

    def capacity(self) -> int:
        """Return the maximum number of values the buffer can hold."""
        return self._length - 1

    @property
    def policy(self) -> OverflowPolicy:
        return self._policy

    def _wrap(self, index: int) -> int:
        return index % self._length

    def size(self) -> int:
        """Return the number of values held."""
        return self._wrap(self._tail - self._head + self._length)

    def __len__(self) -> int:
        return self.size()

    def is_full(self) -> bool:
        return self.size() == self.capacity()

    def get(self, index: int) -> T:
        """Return the value at a logical position, 0 being the oldest.

        Raises:
            IndexError: If ``index`` is outside ``[0, size())``.
        """
        size = self.size()
        if index < 0 or index >= size:
            raise IndexError(f"Index out of bounds: {index}, expected: [0; {size})")
        return self._slots[self._wrap(self._head + index + 1)]

    def __getitem__(self, index: int) -> T:
        if index < 0:
            index += self.size()
        return self.get(index)

    def append(self, value: T) -> bool:
        """Add a value after the newest one.

        Under EVICT_OLDEST a full buffer drops its oldest value first and the
        call always succeeds. Under REJECT_ON_FULL a full buffer is left
        untouched and False is returned.
        """
        if self.is_full():
            if self._policy is OverflowPolicy.REJECT_ON_FULL:
                return False
            self._head = self._wrap(self._head + 1)
            self._slots[self._head] = None
        self._tail = self._wrap(self._tail + 1)
        self._slots[self._tail] = value
        return True

    def force_append(self, value: T) -> None:
        """Add a value, raising instead of returning False when rejected.

        Raises:
            CapacityExceeded: If the buffer rejects on overflow and is full.
        """
        if not self.append(value):
            raise CapacityExceeded(self.capacity())

    def remove_oldest(self, default: T | None = None) -> T | None:
        """Remove and return the oldest value, or ``default`` if empty."""
        if self._head == self._tail:
            return default
        self._head = self._wrap(self._head + 1)
        value = self._slots[self._head]
        self._slots[self._head] = None
        return value

    def peek_oldest(self, default: T | None = None) -> T | None:
        """Return the oldest value without removing it, or ``default``."""
        if self._head == self._tail:
            return default
        return self._slots[self._wrap(self._head + 1)]

    def pop_oldest(self) -> T:
        """Remove and return the oldest value.

        Raises:
            IndexError: If the buffer is empty.
        """
        if self._head == self._tail:
            raise IndexError("pop from an empty buffer")
        return self.remove_oldest()  # type: ignore[return-value]

    def oldest(self) -> T:
        """Return the oldest value.

        Raises:
            IndexError: If the buffer is empty.
        """
        if self._head == self._tail:
            raise IndexError("buffer is empty")
        return self._slots[self._wrap(self._head + 1)]

    def clear(self) -> None:
        """Drop every value."""
        self._slots = [None] * self._length
        self._head = self._tail = 0

    def to_list(self) -> list[T]:
        """Return the held values, oldest first, as a new list."""
        if self._tail == self._head:
            return []
        if self._tail > self._head:
            return self._slots[self._head + 1 : self._tail + 1]
        # wrapped: (head, end of storage] then [0, tail]
        return self._slots[self._head + 1 :] + self._slots[: self._tail + 1]

    def __iter__(self) -> Iterator[T]:
        return iter(self.to_list())

    def __contains__(self, value: object) -> bool:
        return value in self.to_list()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BoundedHistoryBuffer):
            return NotImplemented
        return (
            self.capacity() == other.capacity()
            and self.to_list() == other.to_list()
        )

    def __hash__(self) -> int:
        return hash((self.capacity(), self.size(), tuple(self.to_list())))

    def copy(self) -> "BoundedHistoryBuffer[T]":
        """Return an independent buffer with the same capacity and contents."""
        clone: BoundedHistoryBuffer[T] = BoundedHistoryBuffer(
            self.capacity(), self._policy
        )
        for value in self.to_list():
            clone.append(value)
        return clone

    __copy__ = copy

    def __deepcopy__(self, memo: dict[int, Any]) -> "BoundedHistoryBuffer[T]":
        clone: BoundedHistoryBuffer[T] = BoundedHistoryBuffer(
            self.capacity(), self._policy
        )
        memo[id(self)] = clone
        for value in self.to_list():
            clone.append(copy.deepcopy(value, memo))
        return clone

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(capacity={self.capacity()}, "
            f"policy={self._policy.name}, values={self.to_list()!r})"
        )
