"""
Record producer: validated construction and update of member/equipment records.

Drafts hold everything a record needs except its id. They enforce the input
rules the stores rely on (names, phone numbers, ages, quantity splits) so the
core never sees an invalid value. Ids are allocated only after a draft has
passed validation.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from gymms.domain import dates
from gymms.domain.dates import NO_DATE, Date
from gymms.domain.models import (
    NAME_WIDTH,
    PHONE_WIDTH,
    Equipment,
    EquipmentStatus,
    Gender,
    Member,
    Relation,
)
from gymms.services.status import TransitionResult, check_repair_eta
from gymms.store.record_store import RecordStore
from gymms.utils.logging import get_logger

log = get_logger(__name__)

MINIMUM_MEMBER_AGE = 13
MIN_NAME_LENGTH = 2
MIN_PHONE_DIGITS = 7


def _check_fits(value: str, width: int) -> str:
    size = len(value.encode("utf-8"))
    if size > width:
        raise ValueError(f"is {size} bytes in UTF-8, the limit is {width}")
    return value


def _check_person_name(value: str) -> str:
    if len(value) < MIN_NAME_LENGTH:
        raise ValueError(f"must have at least {MIN_NAME_LENGTH} characters")
    if not all(ch.isalpha() or ch.isspace() for ch in value):
        raise ValueError("may only contain letters and spaces")
    return _check_fits(value, NAME_WIDTH)


def _check_phone(value: str) -> str:
    if not value.isdigit() or not value.isascii():
        raise ValueError("must contain digits only")
    if len(value) < MIN_PHONE_DIGITS:
        raise ValueError(f"must have at least {MIN_PHONE_DIGITS} digits")
    return _check_fits(value, PHONE_WIDTH)


def _coerce_date(value: Any) -> Any:
    if isinstance(value, str):
        return dates.parse_date(value)
    return value


class MemberDraft(BaseModel):
    """Validated member input, minus the id."""

    first_name: str = Field(..., max_length=NAME_WIDTH)
    last_name: str = Field(..., max_length=NAME_WIDTH)
    phone_num: str = Field(..., max_length=PHONE_WIDTH)
    gender: Gender
    emergency_name: str = Field(..., max_length=NAME_WIDTH)
    emergency_phone: str = Field(..., max_length=PHONE_WIDTH)
    emergency_relation: Relation
    date_of_birth: Date

    @field_validator("first_name", "last_name", "emergency_name")
    @classmethod
    def _names(cls, value: str) -> str:
        return _check_person_name(value)

    @field_validator("phone_num", "emergency_phone")
    @classmethod
    def _phones(cls, value: str) -> str:
        return _check_phone(value)

    @field_validator("gender", mode="before")
    @classmethod
    def _gender_upper(cls, value: Any) -> Any:
        return value.upper() if isinstance(value, str) else value

    @field_validator("emergency_relation", mode="before")
    @classmethod
    def _relation_title(cls, value: Any) -> Any:
        return value.capitalize() if isinstance(value, str) else value

    @field_validator("date_of_birth", mode="before")
    @classmethod
    def _dob_text(cls, value: Any) -> Any:
        return _coerce_date(value)

    @field_validator("date_of_birth")
    @classmethod
    def _dob_age(cls, value: Date) -> Date:
        if not value.is_valid():
            raise ValueError("is not a valid date")
        if dates.age(value, dates.today()) < MINIMUM_MEMBER_AGE:
            raise ValueError(f"member must be at least {MINIMUM_MEMBER_AGE} years old")
        return value


class EquipmentDraft(BaseModel):
    """Validated equipment input, minus the id and derived status."""

    name: str = Field(..., max_length=NAME_WIDTH)
    total_quantity: int = Field(..., gt=0)
    broken_count: int = Field(0, ge=0)
    repair_eta: Optional[Date] = None

    @field_validator("name")
    @classmethod
    def _name_present(cls, value: str) -> str:
        if not value:
            raise ValueError("equipment name cannot be empty")
        return _check_fits(value, NAME_WIDTH)

    @field_validator("repair_eta", mode="before")
    @classmethod
    def _eta_text(cls, value: Any) -> Any:
        return _coerce_date(value)

    @model_validator(mode="after")
    def _check_split(self) -> "EquipmentDraft":
        if self.broken_count > self.total_quantity:
            raise ValueError(f"broken_count must be between 0 and {self.total_quantity}")
        if self.broken_count > 0 and self.repair_eta is None:
            raise ValueError("repair_eta is required when some units are broken")
        return self

    @property
    def functional_count(self) -> int:
        return self.total_quantity - self.broken_count


class RecordProducer:
    """
    Builds records from drafts and hands them to the stores.

    Parameters
    ----------
    members : RecordStore[Member]
        Store receiving new members; also the source of member ids.
    equipment : RecordStore[Equipment]
        Store receiving new equipment; also the source of equipment ids.
    """

    def __init__(self, members: RecordStore[Member], equipment: RecordStore[Equipment]) -> None:
        self._members = members
        self._equipment = equipment

    def add_member(self, draft: MemberDraft) -> Member:
        member = Member(id=self._members.allocate_id(), **dict(draft))
        self._members.insert(member)
        log.info("Member added", extra={"member_id": member.id})
        return member

    def update_member(self, member_id: int, **changes: Any) -> Optional[Member]:
        """
        Replace individual fields of a member.

        Every change is validated before any is applied. Returns None if the
        member does not exist.

        Raises
        ------
        pydantic.ValidationError
            If any changed field is invalid; the member is left unchanged.
        """
        member = self._members.find_by_id(member_id)
        if member is None:
            return None

        unknown = set(changes) - set(MemberDraft.model_fields)
        if unknown:
            raise ValueError(f"Unknown member field(s): {', '.join(sorted(unknown))}")

        current = member.model_dump(exclude={"id"})
        draft = MemberDraft(**{**current, **changes})
        for field_name in changes:
            setattr(member, field_name, getattr(draft, field_name))

        log.info("Member updated", extra={"member_id": member_id, "fields": sorted(changes)})
        return member

    def add_equipment(self, draft: EquipmentDraft, today: Optional[Date] = None) -> Equipment:
        """
        Create equipment with status derived from its quantity split.

        Broken units put the equipment under maintenance until the draft's
        repair ETA, which must be a valid date no earlier than ``today``.
        """
        status = EquipmentStatus.OPERATIONAL
        eta = NO_DATE
        if draft.broken_count > 0 and draft.repair_eta is not None:
            result = check_repair_eta(draft.repair_eta, today)
            if result is TransitionResult.INVALID_DATE:
                raise ValueError(f"Invalid repair ETA {draft.repair_eta}.")
            if result is TransitionResult.PAST_DATE:
                raise ValueError("Repair ETA cannot be in the past.")
            status = EquipmentStatus.UNDER_MAINTENANCE
            eta = draft.repair_eta

        equipment = Equipment(
            id=self._equipment.allocate_id(),
            name=draft.name,
            total_quantity=draft.total_quantity,
            functional_count=draft.functional_count,
            broken_count=draft.broken_count,
            status=status,
            repair_eta=eta,
        )
        self._equipment.insert(equipment)
        log.info("Equipment added", extra={"equipment_id": equipment.id, "status": status.value})
        return equipment


__all__ = [
    "MINIMUM_MEMBER_AGE",
    "MemberDraft",
    "EquipmentDraft",
    "RecordProducer",
]
