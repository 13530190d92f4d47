"""
Pytest configuration for the Gym Management System.

Provides fixtures for:
- A frozen "today" so date-dependent rules are deterministic
- Sample member/equipment records and stores
- Settings pointing at a temporary data directory
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Generator

import pytest

from gymms import config
from gymms.config import Settings
from gymms.domain import dates
from gymms.domain.dates import NO_DATE, Date
from gymms.domain.models import Equipment, EquipmentStatus, Gender, Member, Relation
from gymms.store.record_store import RecordStore

FIXED_TODAY = Date(day=15, month=6, year=2024)


@pytest.fixture
def fixed_today(monkeypatch) -> Date:
    """Pin ``dates.today()`` to 15/06/2024."""
    monkeypatch.setattr(dates, "today", lambda: FIXED_TODAY)
    return FIXED_TODAY


@pytest.fixture
def make_member() -> Callable[..., Member]:
    def _make(member_id: int = 1, **overrides) -> Member:
        fields = {
            "id": member_id,
            "first_name": "Ahmed",
            "last_name": "Hassan",
            "phone_num": "5145550101",
            "gender": Gender.M,
            "emergency_name": "Mona Hassan",
            "emergency_phone": "5145550102",
            "emergency_relation": Relation.SPOUSE,
            "date_of_birth": Date(day=15, month=6, year=2000),
        }
        fields.update(overrides)
        return Member(**fields)

    return _make


@pytest.fixture
def make_equipment() -> Callable[..., Equipment]:
    def _make(
        equipment_id: int = 1,
        name: str = "Treadmill",
        total: int = 5,
        broken: int = 0,
        repair_eta: Date = NO_DATE,
    ) -> Equipment:
        return Equipment(
            id=equipment_id,
            name=name,
            total_quantity=total,
            functional_count=total - broken,
            broken_count=broken,
            status=EquipmentStatus.UNDER_MAINTENANCE if broken else EquipmentStatus.OPERATIONAL,
            repair_eta=repair_eta,
        )

    return _make


@pytest.fixture
def member_store(make_member) -> RecordStore[Member]:
    store: RecordStore[Member] = RecordStore()
    store.insert(make_member(1))
    store.insert(make_member(2, first_name="Mona", last_name="Ali", gender=Gender.F))
    store.insert(make_member(3, first_name="Omar", last_name="Samy"))
    return store


@pytest.fixture
def equipment_store(make_equipment) -> RecordStore[Equipment]:
    store: RecordStore[Equipment] = RecordStore()
    store.insert(make_equipment(1, "Treadmill", total=5))
    store.insert(
        make_equipment(2, "Rowing Machine", total=3, broken=2, repair_eta=Date(day=1, month=7, year=2024))
    )
    return store


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    path = tmp_path / "data"
    path.mkdir()
    return path


@pytest.fixture
def test_settings(data_dir: Path) -> Settings:
    return Settings(GYM_DATA_DIR=data_dir, LOG_LEVEL="WARNING")


@pytest.fixture
def cli_env(monkeypatch, data_dir: Path) -> Generator[Path, None, None]:
    """
    Point the cached settings at a temporary data directory for CLI tests.
    """
    monkeypatch.setenv("GYM_DATA_DIR", str(data_dir))
    monkeypatch.setenv("LOG_LEVEL", "WARNING")
    config.get_settings.cache_clear()
    yield data_dir
    config.get_settings.cache_clear()
