from __future__ import annotations

import collections
from abc import ABC, abstractmethod
from typing import Any, Hashable, Iterator, Optional

from workshop.errors import InvariantViolation

Item = Hashable


class RecencyStore(ABC):
    """
    Items ordered most recently inserted first (position 0 is the front).
    Lookups are linear scans; stores are small and items are unique.
    """

    def __init__(self) -> None:
        self._items: "collections.deque[Any]" = collections.deque()

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Any]:
        return iter(self._items)

    def __contains__(self, item: object) -> bool:
        return item in self._items

    def __repr__(self) -> str:
        return f"{type(self).__name__}({list(self._items)!r})"

    def is_empty(self) -> bool:
        return not self._items

    @abstractmethod
    def is_full(self) -> bool:
        ...

    def find(self, item: Item) -> Optional[int]:
        for pos, held in enumerate(self._items):
            if held == item:
                return pos
        return None

    @abstractmethod
    def insert_front(self, item: Item) -> Optional[Any]:
        ...

    def remove_at(self, position: int) -> Any:
        if isinstance(position, bool) or not isinstance(position, int) or not 0 <= position < len(self._items):
            raise InvariantViolation(f"position {position!r} does not hold an item")
        item = self._items[position]
        del self._items[position]
        return item

    def remove_oldest(self) -> Any:
        if not self._items:
            raise InvariantViolation("remove_oldest() on an empty store")
        return self._items.pop()

    @staticmethod
    def _check_item(item: Item) -> None:
        # None is reserved for "nothing evicted"
        if item is None:
            raise InvariantViolation("None cannot be stored")


class BoundedRecencyStore(RecencyStore):
    """
    Fixed-capacity store. Inserting into a full store pushes out the least
    recently inserted item and hands it back to the caller.
    """

    def __init__(self, capacity: int):
        if isinstance(capacity, bool) or not isinstance(capacity, int) or capacity < 1:
            raise InvariantViolation(f"capacity must be a positive int, got {capacity!r}")
        super().__init__()
        self._cap = capacity

    def __repr__(self) -> str:
        return f"{type(self).__name__}(capacity={self._cap}, items={list(self._items)!r})"

    @property
    def capacity(self) -> int:
        return self._cap

    def is_full(self) -> bool:
        return len(self._items) >= self._cap

    def insert_front(self, item: Item) -> Optional[Any]:
        self._check_item(item)
        evicted = self._items.pop() if self.is_full() else None
        self._items.appendleft(item)
        return evicted


class UnboundedStore(RecencyStore):
    """Terminal sink: same ordering as a tier, but it never evicts."""

    def is_full(self) -> bool:
        return False

    def insert_front(self, item: Item) -> Optional[Any]:
        self._check_item(item)
        self._items.appendleft(item)
        return None
