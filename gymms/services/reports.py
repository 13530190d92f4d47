"""
Equipment report aggregation.

Reports are recomputed from the equipment store on demand and never stored.
"""

from __future__ import annotations

from typing import Optional

from gymms.domain import dates
from gymms.domain.dates import Date
from gymms.domain.models import Equipment, Report
from gymms.store.record_store import RecordStore
from gymms.utils.logging import get_logger

log = get_logger(__name__)

SUMMARY_TEMPLATE = (
    "Total Equipment: {total}\n"
    "Functional Equipment: {functional}\n"
    "Broken Equipment: {broken}\n"
)


def generate_report(
    store: RecordStore[Equipment], report_id: int = 1, today: Optional[Date] = None
) -> Report:
    """
    Sum quantities across every equipment record.

    An empty store yields a report with all totals at zero.
    """
    total = functional = broken = 0
    for equipment in store.list():
        total += equipment.total_quantity
        functional += equipment.functional_count
        broken += equipment.broken_count

    return Report(
        id=report_id,
        generated_date=today if today is not None else dates.today(),
        total_equipment_count=total,
        total_functional_count=functional,
        total_broken_count=broken,
        summary_text=SUMMARY_TEMPLATE.format(total=total, functional=functional, broken=broken),
    )


class ReportAggregator:
    """Generates reports with increasing case numbers, starting at 1."""

    def __init__(self) -> None:
        self._next_report_id = 1

    def generate(self, store: RecordStore[Equipment], today: Optional[Date] = None) -> Report:
        report = generate_report(store, report_id=self._next_report_id, today=today)
        self._next_report_id += 1
        log.info(
            "Report generated",
            extra={
                "report_id": report.id,
                "total": report.total_equipment_count,
                "broken": report.total_broken_count,
            },
        )
        return report


__all__ = ["SUMMARY_TEMPLATE", "ReportAggregator", "generate_report"]
