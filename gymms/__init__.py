"""
Gym Management System - members, equipment and equipment-health reports.

This package tracks gym members and fitness equipment and persists both
record sets across restarts. It provides:

- A growable, order-preserving record store shared by both entity types
- Calendar date validation and age calculation
- An equipment status engine (operational / under maintenance with repair ETA)
- Equipment report aggregation
- A portable fixed-width binary file format for each store

The command line front-end lives in ``gymms.main``.
"""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"

# Public API exports
from gymms.config import Settings, get_settings
from gymms.domain.dates import NO_DATE, Date
from gymms.domain.models import Equipment, EquipmentStatus, Gender, Member, Relation, Report
from gymms.errors import (
    AllocationFailure,
    CorruptDataFileError,
    GymError,
    PersistenceError,
    RecordEncodingError,
)
from gymms.infrastructure.persistence import (
    load_equipment,
    load_members,
    save_equipment,
    save_members,
)
from gymms.services.producer import EquipmentDraft, MemberDraft, RecordProducer
from gymms.services.reports import ReportAggregator, generate_report
from gymms.services.status import EquipmentStatusEngine, TransitionResult
from gymms.session import GymSession
from gymms.store.queries import find_members_by_name
from gymms.store.record_store import RecordStore, new_store
from gymms.utils.logging import configure_logging, get_logger

__all__ = [
    # Version info
    "__version__",
    "__license__",
    # Configuration
    "Settings",
    "get_settings",
    # Domain
    "Date",
    "NO_DATE",
    "Equipment",
    "EquipmentStatus",
    "Gender",
    "Member",
    "Relation",
    "Report",
    # Errors
    "GymError",
    "AllocationFailure",
    "PersistenceError",
    "CorruptDataFileError",
    "RecordEncodingError",
    # Stores
    "RecordStore",
    "new_store",
    "find_members_by_name",
    # Services
    "EquipmentStatusEngine",
    "TransitionResult",
    "ReportAggregator",
    "generate_report",
    "EquipmentDraft",
    "MemberDraft",
    "RecordProducer",
    # Persistence
    "load_members",
    "save_members",
    "load_equipment",
    "save_equipment",
    # Session
    "GymSession",
    # Logging
    "configure_logging",
    "get_logger",
]
