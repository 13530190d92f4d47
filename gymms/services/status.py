"""
Equipment status engine.

An equipment record is either ``Operational`` (repair ETA is the sentinel) or
``Under Maintenance`` (repair ETA is a valid date no earlier than the day it
was set). Transitions never raise for bad input: they return a
``TransitionResult`` and leave the record untouched unless the result is OK.

The functional/broken split is not touched here; status is a manually set
field layered on top of the split recorded at creation.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from gymms.domain import dates
from gymms.domain.dates import NO_DATE, Date, Ordering
from gymms.domain.models import Equipment, EquipmentStatus
from gymms.store.record_store import RecordStore
from gymms.utils.logging import get_logger

log = get_logger(__name__)


class TransitionResult(str, Enum):
    OK = "ok"
    NOT_FOUND = "not_found"
    INVALID_DATE = "invalid_date"
    PAST_DATE = "past_date"


def check_repair_eta(eta: Date, today: Optional[Date] = None) -> TransitionResult:
    """Validate a candidate repair ETA against the calendar and ``today``."""
    if not eta.is_valid():
        return TransitionResult.INVALID_DATE
    current = today if today is not None else dates.today()
    if dates.compare(eta, current) is Ordering.LESS:
        return TransitionResult.PAST_DATE
    return TransitionResult.OK


def apply_operational(equipment: Equipment) -> TransitionResult:
    equipment.status = EquipmentStatus.OPERATIONAL
    equipment.repair_eta = NO_DATE
    return TransitionResult.OK


def apply_under_maintenance(
    equipment: Equipment, eta: Date, today: Optional[Date] = None
) -> TransitionResult:
    """
    Put ``equipment`` under maintenance until ``eta``.

    Returns INVALID_DATE or PAST_DATE, without touching the record, when the
    ETA is rejected.
    """
    result = check_repair_eta(eta, today)
    if result is not TransitionResult.OK:
        return result
    equipment.status = EquipmentStatus.UNDER_MAINTENANCE
    equipment.repair_eta = eta
    return TransitionResult.OK


class EquipmentStatusEngine:
    """Id-based status transitions over an equipment store."""

    def __init__(self, store: RecordStore[Equipment]) -> None:
        self._store = store

    def mark_operational(self, equipment_id: int) -> TransitionResult:
        equipment = self._store.find_by_id(equipment_id)
        if equipment is None:
            log.warning("Status change for unknown equipment", extra={"equipment_id": equipment_id})
            return TransitionResult.NOT_FOUND
        result = apply_operational(equipment)
        log.info(
            "Equipment marked operational",
            extra={"equipment_id": equipment_id, "equipment": equipment.name},
        )
        return result

    def mark_under_maintenance(
        self, equipment_id: int, eta: Date, today: Optional[Date] = None
    ) -> TransitionResult:
        equipment = self._store.find_by_id(equipment_id)
        if equipment is None:
            log.warning("Status change for unknown equipment", extra={"equipment_id": equipment_id})
            return TransitionResult.NOT_FOUND

        result = apply_under_maintenance(equipment, eta, today)
        if result is TransitionResult.OK:
            log.info(
                "Equipment under maintenance",
                extra={"equipment_id": equipment_id, "equipment": equipment.name, "repair_eta": str(eta)},
            )
        else:
            log.warning(
                "Repair ETA rejected",
                extra={"equipment_id": equipment_id, "repair_eta": str(eta), "reason": result.value},
            )
        return result


__all__ = [
    "TransitionResult",
    "EquipmentStatusEngine",
    "apply_operational",
    "apply_under_maintenance",
    "check_repair_eta",
]
