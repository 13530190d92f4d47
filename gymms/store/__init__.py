"""
Record store package for the Gym Management System.

One ``RecordStore`` instance owns the records of one entity type.
"""

from gymms.store.queries import find_members_by_name
from gymms.store.record_store import INITIAL_CAPACITY, RecordStore, new_store

__all__ = [
    "INITIAL_CAPACITY",
    "RecordStore",
    "new_store",
    "find_members_by_name",
]
