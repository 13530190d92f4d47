"""
Exception hierarchy for the Gym Management System.

Only conditions the caller cannot recover from in-line are exceptions here.
Not-found lookups and rejected status transitions are returned as values
(``None``, ``False``, ``TransitionResult``) by the components that detect them.
"""

from __future__ import annotations


class GymError(Exception):
    """Base class for all gymms errors."""


class AllocationFailure(GymError):
    """A record store could not grow its backing storage. Fatal."""


class PersistenceError(GymError):
    """A data file could not be read or written."""


class CorruptDataFileError(PersistenceError):
    """A data file exists but does not hold a valid record set."""


class RecordEncodingError(PersistenceError):
    """A record cannot be represented in the fixed-width file layout."""


__all__ = [
    "GymError",
    "AllocationFailure",
    "PersistenceError",
    "CorruptDataFileError",
    "RecordEncodingError",
]
