"""
Session lifecycle for the Gym Management System.

A session loads both record stores at startup and writes them back at
shutdown, mirroring a single run of the application:

    from gymms.session import GymSession

    with GymSession() as session:
        session.status_engine.mark_operational(3)

Stores are saved only when the ``with`` block exits cleanly.
"""

from __future__ import annotations

from types import TracebackType
from typing import Optional, Type

from gymms.config import Settings, get_settings
from gymms.domain.dates import Date
from gymms.domain.models import Equipment, Member, Report
from gymms.infrastructure.persistence import (
    EQUIPMENT_CODEC,
    MEMBER_CODEC,
    load_equipment,
    load_members,
    write_file,
)
from gymms.services.producer import RecordProducer
from gymms.services.reports import ReportAggregator
from gymms.services.status import EquipmentStatusEngine
from gymms.store.record_store import RecordStore
from gymms.utils.logging import get_logger

log = get_logger(__name__)


class GymSession:
    """
    Owns the member and equipment stores for the duration of one run.

    Parameters
    ----------
    settings : Settings | None
        Source of the data file paths. Defaults to ``get_settings()``.
    """

    def __init__(self, settings: Optional[Settings] = None) -> None:
        self.settings = settings or get_settings()
        self.members: RecordStore[Member] = RecordStore()
        self.equipment: RecordStore[Equipment] = RecordStore()
        self.reports = ReportAggregator()
        self._opened = False

    @property
    def producer(self) -> RecordProducer:
        return RecordProducer(self.members, self.equipment)

    @property
    def status_engine(self) -> EquipmentStatusEngine:
        return EquipmentStatusEngine(self.equipment)

    def open(self) -> "GymSession":
        self.members, next_member_id = load_members(self.settings.members_path)
        self.equipment, next_equipment_id = load_equipment(self.settings.equipment_path)
        self._opened = True
        log.info(
            "Session opened",
            extra={
                "members": len(self.members),
                "equipment": len(self.equipment),
                "next_member_id": next_member_id,
                "next_equipment_id": next_equipment_id,
            },
        )
        return self

    def save(self) -> None:
        """
        Write both stores.

        Both file images are encoded before either file is replaced, so a
        record that does not fit its columns leaves both files as they were.
        Members are written first; if the equipment write then fails the
        members file is already updated.
        """
        members = MEMBER_CODEC.encode_file(self.members.list())
        equipment = EQUIPMENT_CODEC.encode_file(self.equipment.list())
        write_file(members, self.settings.members_path, MEMBER_CODEC.label)
        write_file(equipment, self.settings.equipment_path, EQUIPMENT_CODEC.label)

    def generate_report(self, today: Optional[Date] = None) -> Report:
        return self.reports.generate(self.equipment, today=today)

    def __enter__(self) -> "GymSession":
        return self.open()

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        if exc_type is not None:
            log.warning("Session aborted, stores not saved", extra={"error": repr(exc)})
            return
        if self._opened:
            self.save()


__all__ = ["GymSession"]
