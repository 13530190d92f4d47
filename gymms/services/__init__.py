"""
Services package for the Gym Management System.

Re-exports the status engine, report aggregation and the record producer so
downstream code can import from ``gymms.services`` directly.
"""

from gymms.services.producer import EquipmentDraft, MemberDraft, RecordProducer
from gymms.services.reports import ReportAggregator, generate_report
from gymms.services.status import (
    EquipmentStatusEngine,
    TransitionResult,
    apply_operational,
    apply_under_maintenance,
)

__all__ = [
    # Status
    "EquipmentStatusEngine",
    "TransitionResult",
    "apply_operational",
    "apply_under_maintenance",
    # Reports
    "ReportAggregator",
    "generate_report",
    # Producer
    "EquipmentDraft",
    "MemberDraft",
    "RecordProducer",
]
