"""
Binary persistence for record stores.

Each entity type lives in its own file, always written and read as a whole.
The layout is explicit, little-endian and padding-free so files are portable
across platforms:

    header (12 bytes)          "<4sHHi"
      0  magic        4s   b"GYMM" members / b"GYME" equipment
      4  version      H    FORMAT_VERSION
      6  record_size  H    size in bytes of one record
      8  count        i    number of records that follow

    member record (207 bytes)  "<i50s50s15sc50s15s10siii"
      id, first_name, last_name, phone_num, gender, emergency_name,
      emergency_phone, emergency_relation, dob.day, dob.month, dob.year

    equipment record (98 bytes) "<i50siii20siii"
      id, name, total_quantity, functional_count, broken_count, status,
      repair_eta.day, repair_eta.month, repair_eta.year

Text columns hold UTF-8 padded with trailing zero bytes.

Usage:
    from gymms.infrastructure.persistence import load_members, save_members

    members, next_id = load_members("members.dat")
    save_members(members, "members.dat")
"""

from __future__ import annotations

import abc
import os
import struct
import tempfile
from pathlib import Path
from typing import Generic, List, Tuple, TypeVar

from pydantic import ValidationError

from gymms.domain.dates import Date
from gymms.domain.models import (
    NAME_WIDTH,
    PHONE_WIDTH,
    RELATION_WIDTH,
    STATUS_WIDTH,
    Equipment,
    Member,
)
from gymms.errors import CorruptDataFileError, PersistenceError, RecordEncodingError
from gymms.store.record_store import RecordStore
from gymms.utils.logging import get_logger

log = get_logger(__name__)

FORMAT_VERSION = 1
HEADER = struct.Struct("<4sHHi")

T = TypeVar("T", Member, Equipment)


def _pack_text(value: str, width: int, column: str) -> bytes:
    encoded = value.encode("utf-8")
    if len(encoded) > width:
        raise RecordEncodingError(f"{column} is {len(encoded)} bytes, column holds {width}")
    return encoded


def _unpack_text(raw: bytes) -> str:
    return raw.split(b"\0", 1)[0].decode("utf-8")


def _unpack_date(day: int, month: int, year: int, column: str) -> Date:
    date = Date(day=day, month=month, year=year)
    if not date.is_sentinel and not date.is_valid():
        raise ValueError(f"{column} {day}/{month}/{year} is not a valid date")
    return date


class AbstractRecordCodec(abc.ABC, Generic[T]):
    """
    Fixed-width encoding of one record type plus the file framing around it.

    Subclasses set ``magic`` and ``layout`` and implement ``pack``/``unpack``
    for a single record.
    """

    magic: bytes
    layout: struct.Struct
    label: str

    @abc.abstractmethod
    def pack(self, record: T) -> bytes:  # pragma: no cover - interface only
        raise NotImplementedError

    @abc.abstractmethod
    def unpack(self, fields: tuple) -> T:  # pragma: no cover - interface only
        raise NotImplementedError

    @property
    def record_size(self) -> int:
        return self.layout.size

    def encode_file(self, records: List[T]) -> bytes:
        chunks = [HEADER.pack(self.magic, FORMAT_VERSION, self.record_size, len(records))]
        chunks.extend(self.pack(record) for record in records)
        return b"".join(chunks)

    def decode_file(self, data: bytes) -> List[T]:
        """
        Parse a whole file image.

        Raises
        ------
        CorruptDataFileError
            If the header does not describe this record type, the length does
            not match the declared count, or any record fails validation.
        """
        if len(data) < HEADER.size:
            raise CorruptDataFileError(f"{self.label} file is truncated: {len(data)} bytes")

        magic, version, record_size, count = HEADER.unpack_from(data, 0)
        if magic != self.magic:
            raise CorruptDataFileError(f"Not a {self.label} file (magic {magic!r})")
        if version != FORMAT_VERSION:
            raise CorruptDataFileError(f"Unsupported {self.label} file version {version}")
        if record_size != self.record_size:
            raise CorruptDataFileError(
                f"{self.label} record size {record_size} does not match expected {self.record_size}"
            )
        if count < 0:
            raise CorruptDataFileError(f"Negative {self.label} record count {count}")

        expected = HEADER.size + count * record_size
        if len(data) != expected:
            raise CorruptDataFileError(
                f"{self.label} file holds {len(data)} bytes, header declares {expected}"
            )

        records: List[T] = []
        body = memoryview(data)[HEADER.size :]
        for index, fields in enumerate(self.layout.iter_unpack(body)):
            try:
                records.append(self.unpack(fields))
            except (ValidationError, UnicodeDecodeError, ValueError) as exc:
                raise CorruptDataFileError(f"Invalid {self.label} record #{index}: {exc}") from exc
        return records


class MemberCodec(AbstractRecordCodec[Member]):
    magic = b"GYMM"
    layout = struct.Struct(
        f"<i{NAME_WIDTH}s{NAME_WIDTH}s{PHONE_WIDTH}sc{NAME_WIDTH}s{PHONE_WIDTH}s{RELATION_WIDTH}siii"
    )
    label = "member"

    def pack(self, record: Member) -> bytes:
        dob = record.date_of_birth
        return self.layout.pack(
            record.id,
            _pack_text(record.first_name, NAME_WIDTH, "first_name"),
            _pack_text(record.last_name, NAME_WIDTH, "last_name"),
            _pack_text(record.phone_num, PHONE_WIDTH, "phone_num"),
            record.gender.value.encode("ascii"),
            _pack_text(record.emergency_name, NAME_WIDTH, "emergency_name"),
            _pack_text(record.emergency_phone, PHONE_WIDTH, "emergency_phone"),
            _pack_text(record.emergency_relation.value, RELATION_WIDTH, "emergency_relation"),
            dob.day,
            dob.month,
            dob.year,
        )

    def unpack(self, fields: tuple) -> Member:
        (
            record_id,
            first_name,
            last_name,
            phone_num,
            gender,
            emergency_name,
            emergency_phone,
            emergency_relation,
            day,
            month,
            year,
        ) = fields
        return Member(
            id=record_id,
            first_name=_unpack_text(first_name),
            last_name=_unpack_text(last_name),
            phone_num=_unpack_text(phone_num),
            gender=gender.decode("ascii"),
            emergency_name=_unpack_text(emergency_name),
            emergency_phone=_unpack_text(emergency_phone),
            emergency_relation=_unpack_text(emergency_relation),
            date_of_birth=_unpack_date(day, month, year, "date_of_birth"),
        )


class EquipmentCodec(AbstractRecordCodec[Equipment]):
    magic = b"GYME"
    layout = struct.Struct(f"<i{NAME_WIDTH}siii{STATUS_WIDTH}siii")
    label = "equipment"

    def pack(self, record: Equipment) -> bytes:
        eta = record.repair_eta
        return self.layout.pack(
            record.id,
            _pack_text(record.name, NAME_WIDTH, "name"),
            record.total_quantity,
            record.functional_count,
            record.broken_count,
            _pack_text(record.status.value, STATUS_WIDTH, "status"),
            eta.day,
            eta.month,
            eta.year,
        )

    def unpack(self, fields: tuple) -> Equipment:
        record_id, name, total, functional, broken, status, day, month, year = fields
        return Equipment(
            id=record_id,
            name=_unpack_text(name),
            total_quantity=total,
            functional_count=functional,
            broken_count=broken,
            status=_unpack_text(status),
            repair_eta=_unpack_date(day, month, year, "repair_eta"),
        )


MEMBER_CODEC = MemberCodec()
EQUIPMENT_CODEC = EquipmentCodec()


def write_file(payload: bytes, path: Path | str, label: str) -> None:
    """
    Replace ``path`` with an already encoded file image.

    The image is written to a temporary file next to ``path`` and moved into
    place, so a failure at any point leaves the previous file untouched.

    Raises
    ------
    PersistenceError
        If the file cannot be written.
    """
    target = Path(path)
    tmp_path: Path | None = None
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            "wb", dir=target.parent, prefix=f".{target.name}.", suffix=".tmp", delete=False
        ) as handle:
            tmp_path = Path(handle.name)
            handle.write(payload)
            handle.flush()
            os.fsync(handle.fileno())
        os.replace(tmp_path, target)
    except OSError as exc:
        if tmp_path is not None:
            tmp_path.unlink(missing_ok=True)
        log.error(f"Error opening {label} file for writing", extra={"path": str(target)})
        raise PersistenceError(f"Could not save {label} file {target}: {exc}") from exc

    log.info(f"Saved {label} file", extra={"path": str(target), "bytes": len(payload)})


def save(store: RecordStore[T], path: Path | str, codec: AbstractRecordCodec[T]) -> None:
    """
    Write every record of ``store`` to ``path``, replacing the file atomically.

    Raises
    ------
    RecordEncodingError
        If a record does not fit the fixed-width layout. Nothing is written.
    PersistenceError
        If the file cannot be written.
    """
    write_file(codec.encode_file(store.list()), path, codec.label)


def load(path: Path | str, codec: AbstractRecordCodec[T]) -> Tuple[RecordStore[T], int]:
    """
    Read a store back from ``path``.

    A missing file is the normal first-run state and yields an empty store
    (capacity 10) with next id 1.

    Returns
    -------
    (RecordStore, int)
        The loaded store and the next id to assign, ``max(id) + 1`` or 1.

    Raises
    ------
    CorruptDataFileError
        If the file exists but is not a valid record file.
    PersistenceError
        If the file exists but cannot be read.
    """
    source = Path(path)
    if not source.exists():
        log.info(f"No {codec.label} file yet, starting empty", extra={"path": str(source)})
        empty: RecordStore[T] = RecordStore()
        return empty, empty.next_id

    try:
        data = source.read_bytes()
    except OSError as exc:
        raise PersistenceError(f"Could not read {codec.label} file {source}: {exc}") from exc

    store = RecordStore.from_records(codec.decode_file(data))
    log.info(
        f"Loaded {codec.label} records",
        extra={"path": str(source), "count": len(store), "next_id": store.next_id},
    )
    return store, store.next_id


def save_members(store: RecordStore[Member], path: Path | str) -> None:
    save(store, path, MEMBER_CODEC)


def load_members(path: Path | str) -> Tuple[RecordStore[Member], int]:
    return load(path, MEMBER_CODEC)


def save_equipment(store: RecordStore[Equipment], path: Path | str) -> None:
    save(store, path, EQUIPMENT_CODEC)


def load_equipment(path: Path | str) -> Tuple[RecordStore[Equipment], int]:
    return load(path, EQUIPMENT_CODEC)


__all__ = [
    "FORMAT_VERSION",
    "HEADER",
    "AbstractRecordCodec",
    "MemberCodec",
    "EquipmentCodec",
    "MEMBER_CODEC",
    "EQUIPMENT_CODEC",
    "save",
    "write_file",
    "load",
    "save_members",
    "load_members",
    "save_equipment",
    "load_equipment",
]
