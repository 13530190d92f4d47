"""
Domain models for the Gym Management System.

Defines the two persisted record types (members and equipment) and the
transient equipment report. Text field limits match the fixed-width columns
of the data files written by ``gymms.infrastructure.persistence``.
"""
from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field, model_validator

from gymms.domain.dates import NO_DATE, Date

# Column widths in bytes (UTF-8) of the on-disk layout.
NAME_WIDTH = 50
PHONE_WIDTH = 15
RELATION_WIDTH = 10
STATUS_WIDTH = 20


class Gender(str, Enum):
    M = "M"
    F = "F"


class Relation(str, Enum):
    """Relationship of a member's emergency contact to the member."""

    SPOUSE = "Spouse"
    PARTNER = "Partner"
    FRIEND = "Friend"
    RELATIVE = "Relative"
    PARENT = "Parent"
    OTHER = "Other"


class EquipmentStatus(str, Enum):
    OPERATIONAL = "Operational"
    UNDER_MAINTENANCE = "Under Maintenance"


class Member(BaseModel):
    """
    A registered gym member.

    Field values are trusted to have passed producer validation; the model only
    enforces types and column widths so a store handle can be mutated in place.
    """

    id: int = Field(..., ge=1, description="Store-assigned unique id.")
    first_name: str = Field(..., max_length=NAME_WIDTH)
    last_name: str = Field(..., max_length=NAME_WIDTH)
    phone_num: str = Field(..., max_length=PHONE_WIDTH)
    gender: Gender
    emergency_name: str = Field(..., max_length=NAME_WIDTH, description="Emergency contact's full name.")
    emergency_phone: str = Field(..., max_length=PHONE_WIDTH)
    emergency_relation: Relation
    date_of_birth: Date

    model_config = {"validate_assignment": True}

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


class Equipment(BaseModel):
    """
    A type of gym equipment and the health of its units.

    ``status`` and ``repair_eta`` are managed by the status engine and are not
    re-derived from the functional/broken split once the record exists.
    """

    id: int = Field(..., ge=1, description="Store-assigned unique id.")
    name: str = Field(..., min_length=1, max_length=NAME_WIDTH)
    total_quantity: int = Field(..., gt=0)
    functional_count: int = Field(..., ge=0)
    broken_count: int = Field(..., ge=0)
    status: EquipmentStatus = Field(EquipmentStatus.OPERATIONAL)
    repair_eta: Date = Field(NO_DATE, description="Date repairs should be done; sentinel when operational.")

    model_config = {"validate_assignment": True}

    @model_validator(mode="after")
    def _check_quantity_split(self) -> "Equipment":
        if self.functional_count + self.broken_count != self.total_quantity:
            raise ValueError(
                f"functional_count ({self.functional_count}) + broken_count "
                f"({self.broken_count}) must equal total_quantity ({self.total_quantity})"
            )
        return self


class Report(BaseModel):
    """Point-in-time equipment health summary. Never persisted."""

    id: int
    generated_date: Date
    total_equipment_count: int = 0
    total_functional_count: int = 0
    total_broken_count: int = 0
    summary_text: str = ""

    model_config = {"frozen": True}


__all__ = [
    "NAME_WIDTH",
    "PHONE_WIDTH",
    "RELATION_WIDTH",
    "STATUS_WIDTH",
    "Gender",
    "Relation",
    "EquipmentStatus",
    "Member",
    "Equipment",
    "Report",
]
