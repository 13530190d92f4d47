"""
End-to-end tests for a gym session.

These tests drive the whole stack against a temporary data directory and
verify that:
1. Records added in one session survive into the next
2. Id counters resume after the highest stored id
3. A session that fails does not write its changes
"""

from __future__ import annotations

import pytest

from gymms.domain.dates import Date
from gymms.domain.models import Equipment, EquipmentStatus
from gymms.errors import RecordEncodingError
from gymms.services.producer import EquipmentDraft, MemberDraft
from gymms.services.status import TransitionResult
from gymms.session import GymSession

ETA = Date(day=20, month=6, year=2024)
EXPECTED_TOTAL = 9
EXPECTED_BROKEN = 3


def _member_draft(first_name: str) -> MemberDraft:
    return MemberDraft(
        first_name=first_name,
        last_name="Gagnon",
        phone_num="5145550123",
        gender="M",
        emergency_name="Julie Gagnon",
        emergency_phone="5145550124",
        emergency_relation="Relative",
        date_of_birth="10/10/1985",
    )


class TestSessionRoundTrip:
    """A full open, mutate, save and reopen cycle."""

    def test_state_survives_restart(self, test_settings, fixed_today):
        with GymSession(test_settings) as session:
            producer = session.producer
            for name in ("Marc", "Luc", "Paul"):
                producer.add_member(_member_draft(name))
            producer.add_equipment(EquipmentDraft(name="Treadmill", total_quantity=6))
            producer.add_equipment(
                EquipmentDraft(name="Bike", total_quantity=3, broken_count=3, repair_eta=ETA)
            )
            assert session.status_engine.mark_under_maintenance(1, ETA) is TransitionResult.OK
            assert session.members.delete_by_id(2)

        with GymSession(test_settings) as session:
            assert [m.first_name for m in session.members] == ["Marc", "Paul"]
            assert session.members.next_id == 4
            assert session.equipment.next_id == 3

            treadmill = session.equipment.find_by_id(1)
            assert treadmill.status is EquipmentStatus.UNDER_MAINTENANCE
            assert treadmill.repair_eta == ETA

            report = session.generate_report()
            assert report.id == 1
            assert report.generated_date == fixed_today
            assert report.total_equipment_count == EXPECTED_TOTAL
            assert report.total_broken_count == EXPECTED_BROKEN

            member = session.producer.add_member(_member_draft("Anne"))
            assert member.id == 4

    def test_failed_session_is_not_saved(self, test_settings, fixed_today):
        with GymSession(test_settings) as session:
            session.producer.add_member(_member_draft("Marc"))

        with pytest.raises(RuntimeError):
            with GymSession(test_settings) as session:
                session.producer.add_member(_member_draft("Luc"))
                raise RuntimeError("boom")

        with GymSession(test_settings) as session:
            assert [m.first_name for m in session.members] == ["Marc"]

    def test_status_changes_do_not_touch_quantity_split(self, test_settings, fixed_today):
        with GymSession(test_settings) as session:
            session.producer.add_equipment(
                EquipmentDraft(name="Rower", total_quantity=4, broken_count=1, repair_eta=ETA)
            )
            assert session.status_engine.mark_operational(1) is TransitionResult.OK

        with GymSession(test_settings) as session:
            rower = session.equipment.find_by_id(1)
            assert rower.status is EquipmentStatus.OPERATIONAL
            assert rower.repair_eta.is_sentinel
            assert (rower.functional_count, rower.broken_count) == (4 - 1, 1)

    def test_unencodable_record_leaves_both_files_unchanged(self, test_settings, fixed_today):
        with GymSession(test_settings) as session:
            session.producer.add_member(_member_draft("Marc"))
            session.producer.add_equipment(EquipmentDraft(name="Treadmill", total_quantity=2))
        members_before = test_settings.members_path.read_bytes()
        equipment_before = test_settings.equipment_path.read_bytes()

        session = GymSession(test_settings).open()
        session.producer.add_member(_member_draft("Luc"))
        # 30 characters fit the model but need 60 of the 50 bytes on disk.
        session.equipment.insert(
            Equipment(id=2, name="é" * 30, total_quantity=1, functional_count=1, broken_count=0)
        )
        with pytest.raises(RecordEncodingError):
            session.save()

        assert test_settings.members_path.read_bytes() == members_before
        assert test_settings.equipment_path.read_bytes() == equipment_before
