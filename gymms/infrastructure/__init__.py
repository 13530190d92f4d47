"""
Infrastructure package for the Gym Management System.

Centralizes file persistence of record stores. Keep this layer focused on
I/O and encoding, decoupled from status and report logic.
"""

from gymms.infrastructure.persistence import (
    EQUIPMENT_CODEC,
    MEMBER_CODEC,
    load,
    load_equipment,
    load_members,
    save,
    save_equipment,
    save_members,
)

__all__ = [
    "EQUIPMENT_CODEC",
    "MEMBER_CODEC",
    "load",
    "load_equipment",
    "load_members",
    "save",
    "save_equipment",
    "save_members",
]
