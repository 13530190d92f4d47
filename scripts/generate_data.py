"""
Sample data generator for the Gym Management System.

Builds deterministic pseudo-random members and equipment through the record
producer and writes them to the configured data files.
"""

from __future__ import annotations

import random
import sys
from datetime import date, timedelta
from pathlib import Path
from typing import Optional

import typer

from gymms.config import get_settings
from gymms.domain.dates import Date
from gymms.domain.models import Equipment, Gender, Member, Relation
from gymms.infrastructure.persistence import save_equipment, save_members
from gymms.services.producer import EquipmentDraft, MemberDraft, RecordProducer
from gymms.store.record_store import RecordStore
from gymms.utils.logging import configure_logging, get_logger

app = typer.Typer(help="Generate sample members and equipment data files.")
log = get_logger(__name__)

_FIRST_NAMES = ["Ahmed", "Mona", "Omar", "Sara", "Liam", "Emma", "Noah", "Ava", "Lucas", "Mia"]
_LAST_NAMES = ["Hassan", "Ali", "Samy", "Smith", "Brown", "Tremblay", "Martin", "Roy", "Gagnon", "Lee"]
_EQUIPMENT_NAMES = [
    "Treadmill",
    "Rowing Machine",
    "Stationary Bike",
    "Bench Press",
    "Squat Rack",
    "Dumbbell Set",
    "Cable Machine",
    "Elliptical",
    "Leg Press",
    "Kettlebell Set",
]


def _phone(rng: random.Random) -> str:
    return "".join(str(rng.randint(0, 9)) for _ in range(10))


def _generate_stores(
    members: int, equipment: int, seed: int, today: date
) -> tuple[RecordStore[Member], RecordStore[Equipment]]:
    rng = random.Random(seed)
    member_store: RecordStore[Member] = RecordStore()
    equipment_store: RecordStore[Equipment] = RecordStore()
    producer = RecordProducer(member_store, equipment_store)

    for _ in range(members):
        birth_year = today.year - rng.randint(14, 70)
        producer.add_member(
            MemberDraft(
                first_name=rng.choice(_FIRST_NAMES),
                last_name=rng.choice(_LAST_NAMES),
                phone_num=_phone(rng),
                gender=rng.choice(list(Gender)),
                emergency_name=f"{rng.choice(_FIRST_NAMES)} {rng.choice(_LAST_NAMES)}",
                emergency_phone=_phone(rng),
                emergency_relation=rng.choice(list(Relation)),
                date_of_birth=Date(day=rng.randint(1, 28), month=rng.randint(1, 12), year=birth_year),
            )
        )

    for i in range(equipment):
        total = rng.randint(1, 12)
        broken = rng.choice([0, 0, 0, rng.randint(0, total)])
        eta = Date.from_date(today + timedelta(days=rng.randint(1, 60))) if broken else None
        producer.add_equipment(
            EquipmentDraft(
                name=_EQUIPMENT_NAMES[i % len(_EQUIPMENT_NAMES)],
                total_quantity=total,
                broken_count=broken,
                repair_eta=eta,
            ),
            today=Date.from_date(today),
        )

    return member_store, equipment_store


@app.command()
def main(
    members: int = typer.Option(25, "--members", "-m", help="Number of members to generate."),
    equipment: int = typer.Option(10, "--equipment", "-e", help="Number of equipment items."),
    seed: int = typer.Option(42, "--seed", help="Random seed for reproducible data."),
    data_dir: Optional[Path] = typer.Option(
        None, "--data-dir", help="Directory for the data files (default from settings)."
    ),
) -> None:
    """
    Generate sample data and overwrite the members/equipment data files.
    """
    settings = get_settings()
    configure_logging(level=settings.log_level)
    target_dir = data_dir or settings.data_dir

    member_store, equipment_store = _generate_stores(members, equipment, seed, date.today())
    save_members(member_store, target_dir / settings.members_file)
    save_equipment(equipment_store, target_dir / settings.equipment_file)

    typer.echo(
        f"Wrote {len(member_store)} members and {len(equipment_store)} equipment items to {target_dir}."
    )


if __name__ == "__main__":
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)
