"""
Growable, order-preserving record store shared by members and equipment.

The store keeps records in insertion order and tracks an explicit capacity
so the growth/shrink policy is observable:

- capacity starts at 10 and doubles when an insert finds the store full;
- after a successful delete, if 0 < count <= capacity // 2 the capacity is
  halved once. It is a single halving per delete, never a shrink-to-fit.

Ids are keys but the store does not enforce uniqueness; the id counter
(``next_id``) is the uniqueness guarantor and never moves backwards.
"""

from __future__ import annotations

from typing import Callable, Generic, Iterable, Iterator, List, Optional, Protocol, TypeVar

from gymms.errors import AllocationFailure
from gymms.utils.logging import get_logger

log = get_logger(__name__)

INITIAL_CAPACITY = 10


class Keyed(Protocol):
    id: int


T = TypeVar("T", bound=Keyed)


class RecordStore(Generic[T]):
    """
    Ordered collection of records keyed by ``id``.

    Lookups return the stored objects themselves, so callers may mutate a
    found record in place.
    """

    def __init__(self, capacity: int = INITIAL_CAPACITY) -> None:
        self._records: List[T] = []
        self._capacity = max(capacity, INITIAL_CAPACITY)
        self._next_id = 1

    @classmethod
    def from_records(cls, records: Iterable[T]) -> "RecordStore[T]":
        """
        Build a store holding ``records`` in the given order.

        Capacity is ``max(count, 10)`` and the id counter resumes at
        ``max(id) + 1`` (1 for an empty set).
        """
        items = list(records)
        store: RecordStore[T] = cls(capacity=max(len(items), INITIAL_CAPACITY))
        store._records = items
        store._next_id = max((r.id for r in items), default=0) + 1
        return store

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def count(self) -> int:
        return len(self._records)

    @property
    def next_id(self) -> int:
        return self._next_id

    @property
    def is_empty(self) -> bool:
        return not self._records

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[T]:
        return iter(list(self._records))

    def allocate_id(self) -> int:
        """Hand out the next unused id."""
        assigned = self._next_id
        self._next_id += 1
        return assigned

    def insert(self, record: T) -> None:
        """
        Append ``record``, doubling capacity first when the store is full.

        Raises
        ------
        AllocationFailure
            If the interpreter cannot allocate room for the record.
        """
        try:
            if len(self._records) == self._capacity:
                self._capacity *= 2
                log.debug("Store grown", extra={"capacity": self._capacity})
            self._records.append(record)
        except MemoryError as exc:
            raise AllocationFailure(f"Could not grow store to hold record id={record.id}") from exc

        if record.id >= self._next_id:
            self._next_id = record.id + 1

    def delete_by_id(self, record_id: int) -> bool:
        """
        Remove the first record with ``record_id``, keeping the others in order.

        Returns False, leaving contents and capacity untouched, if no record
        matches.
        """
        index = self._index_of(record_id)
        if index is None:
            log.warning("Delete of unknown id", extra={"id": record_id})
            return False

        del self._records[index]

        count = len(self._records)
        if count > 0 and count <= self._capacity // 2:
            self._capacity //= 2
            log.debug("Store shrunk", extra={"capacity": self._capacity, "count": count})
        return True

    def find_by_id(self, record_id: int) -> Optional[T]:
        index = self._index_of(record_id)
        return None if index is None else self._records[index]

    def find_all(self, predicate: Callable[[T], bool]) -> List[T]:
        """All records satisfying ``predicate``, in stored order."""
        return [r for r in self._records if predicate(r)]

    def list(self) -> List[T]:
        """Full contents in stored order. An empty list is a valid state."""
        return list(self._records)

    def _index_of(self, record_id: int) -> Optional[int]:
        for index, record in enumerate(self._records):
            if record.id == record_id:
                return index
        return None

    def __repr__(self) -> str:
        return f"RecordStore(count={len(self._records)}, capacity={self._capacity}, next_id={self._next_id})"


def new_store() -> RecordStore:
    """An empty store with the initial capacity of 10."""
    return RecordStore()


__all__ = ["INITIAL_CAPACITY", "Keyed", "RecordStore", "new_store"]
