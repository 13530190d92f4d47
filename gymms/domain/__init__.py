"""
Domain package for the Gym Management System.

Exports the date helpers and record models shared by stores, services and
persistence. Keep this package focused on data definitions and validation.
"""

from gymms.domain.dates import NO_DATE, Date, Ordering
from gymms.domain.models import (
    Equipment,
    EquipmentStatus,
    Gender,
    Member,
    Relation,
    Report,
)

__all__ = [
    "Date",
    "NO_DATE",
    "Ordering",
    "Equipment",
    "EquipmentStatus",
    "Gender",
    "Member",
    "Relation",
    "Report",
]
