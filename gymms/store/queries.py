"""
Name-based lookups over the member store.
"""

from __future__ import annotations

from typing import List, Optional

from gymms.domain.models import Member
from gymms.store.record_store import RecordStore


def find_members_by_name(
    store: RecordStore[Member],
    first_name: Optional[str] = None,
    last_name: Optional[str] = None,
) -> List[Member]:
    """
    Members whose first and/or last name match exactly, ignoring case.

    Parameters
    ----------
    store : RecordStore[Member]
        Store to search.
    first_name, last_name : str | None
        Names to match. When both are given a member must match both.

    Raises
    ------
    ValueError
        If neither name is given.
    """
    if first_name is None and last_name is None:
        raise ValueError("At least one of first_name or last_name is required.")

    first = first_name.casefold() if first_name is not None else None
    last = last_name.casefold() if last_name is not None else None

    def _matches(member: Member) -> bool:
        if first is not None and member.first_name.casefold() != first:
            return False
        if last is not None and member.last_name.casefold() != last:
            return False
        return True

    return store.find_all(_matches)


__all__ = ["find_members_by_name"]
