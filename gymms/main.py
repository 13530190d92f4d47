from __future__ import annotations

import sys
from contextlib import contextmanager
from typing import Iterator, NoReturn, Optional

import typer
from pydantic import ValidationError

from gymms.config import get_settings
from gymms.domain import dates
from gymms.errors import GymError
from gymms.reporter import print_equipment, print_members, print_report
from gymms.services.producer import EquipmentDraft, MemberDraft
from gymms.services.status import TransitionResult
from gymms.session import GymSession
from gymms.store.queries import find_members_by_name
from gymms.utils.logging import configure_logging

app = typer.Typer(help="Gym Management System CLI.")
member_app = typer.Typer(help="Manage gym members.")
equipment_app = typer.Typer(help="Manage gym equipment.")
app.add_typer(member_app, name="member")
app.add_typer(equipment_app, name="equipment")


def _fail(message: str, code: int = 2) -> NoReturn:
    typer.echo(f"Error: {message}", err=True)
    raise typer.Exit(code=code)


def _validation_message(exc: ValueError) -> str:
    if isinstance(exc, ValidationError):
        return "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or 'input'}: {err['msg']}" for err in exc.errors()
        )
    return str(exc)


@contextmanager
def _open_session() -> Iterator[GymSession]:
    """Load both stores, yield, and save them if the command succeeded."""
    try:
        with GymSession(get_settings()) as session:
            yield session
    except GymError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from exc


@app.callback()
def _configure() -> None:
    settings = get_settings()
    configure_logging(level=settings.log_level, json_logs=settings.log_json)


@app.command()
def info() -> None:
    """
    Show effective configuration values.
    """
    settings = get_settings()
    typer.echo(
        f"members={settings.members_path} | equipment={settings.equipment_path} | "
        f"env={settings.app_env} log_level={settings.log_level}"
    )


@app.command()
def report() -> None:
    """
    Generate an equipment health report.
    """
    with _open_session() as session:
        print_report(session.generate_report())


@member_app.command("add")
def member_add(
    first_name: str = typer.Option(..., "--first-name", help="At least 2 letters."),
    last_name: str = typer.Option(..., "--last-name"),
    phone: str = typer.Option(..., "--phone", help="Digits only, at least 7."),
    gender: str = typer.Option(..., "--gender", help="M or F."),
    emergency_name: str = typer.Option(..., "--emergency-name"),
    emergency_phone: str = typer.Option(..., "--emergency-phone"),
    relation: str = typer.Option(
        ..., "--relation", help="Spouse, Partner, Friend, Relative, Parent or Other."
    ),
    dob: str = typer.Option(..., "--dob", help="Date of birth, dd/mm/yyyy."),
) -> None:
    """
    Register a new member.
    """
    with _open_session() as session:
        try:
            draft = MemberDraft(
                first_name=first_name,
                last_name=last_name,
                phone_num=phone,
                gender=gender,
                emergency_name=emergency_name,
                emergency_phone=emergency_phone,
                emergency_relation=relation,
                date_of_birth=dob,
            )
        except ValueError as exc:
            _fail(_validation_message(exc))
        member = session.producer.add_member(draft)
        typer.echo(f"Member added successfully! ID: {member.id}")


@member_app.command("list")
def member_list() -> None:
    """
    List all members.
    """
    with _open_session() as session:
        print_members(session.members.list())


@member_app.command("find")
def member_find(
    member_id: Optional[int] = typer.Option(None, "--id", help="Find by member ID."),
    first_name: Optional[str] = typer.Option(None, "--first-name"),
    last_name: Optional[str] = typer.Option(None, "--last-name"),
) -> None:
    """
    Find members by ID or by first and/or last name (case-insensitive).
    """
    with _open_session() as session:
        if member_id is not None:
            member = session.members.find_by_id(member_id)
            if member is None:
                _fail(f"Member with ID {member_id} not found.", code=1)
            print_members([member])
            return

        try:
            found = find_members_by_name(session.members, first_name, last_name)
        except ValueError as exc:
            _fail(str(exc))
        if not found:
            _fail("No members found with that name.", code=1)
        print_members(found)


@member_app.command("update")
def member_update(
    member_id: int = typer.Argument(..., help="Member ID."),
    first_name: Optional[str] = typer.Option(None, "--first-name"),
    last_name: Optional[str] = typer.Option(None, "--last-name"),
    phone: Optional[str] = typer.Option(None, "--phone"),
    gender: Optional[str] = typer.Option(None, "--gender"),
    emergency_name: Optional[str] = typer.Option(None, "--emergency-name"),
    emergency_phone: Optional[str] = typer.Option(None, "--emergency-phone"),
    relation: Optional[str] = typer.Option(None, "--relation"),
    dob: Optional[str] = typer.Option(None, "--dob"),
) -> None:
    """
    Update one or more details of a member.
    """
    changes = {
        "first_name": first_name,
        "last_name": last_name,
        "phone_num": phone,
        "gender": gender,
        "emergency_name": emergency_name,
        "emergency_phone": emergency_phone,
        "emergency_relation": relation,
        "date_of_birth": dob,
    }
    changes = {k: v for k, v in changes.items() if v is not None}
    if not changes:
        _fail("Nothing to update.")

    with _open_session() as session:
        try:
            member = session.producer.update_member(member_id, **changes)
        except ValueError as exc:
            _fail(_validation_message(exc))
        if member is None:
            _fail(f"Member with ID {member_id} not found.", code=1)
        typer.echo("Member details updated successfully!")


@member_app.command("delete")
def member_delete(member_id: int = typer.Argument(..., help="Member ID.")) -> None:
    """
    Delete a member.
    """
    with _open_session() as session:
        if not session.members.delete_by_id(member_id):
            _fail(f"Member with ID {member_id} not found.", code=1)
        typer.echo("Member deleted successfully!")


@equipment_app.command("add")
def equipment_add(
    name: str = typer.Option(..., "--name"),
    quantity: int = typer.Option(..., "--quantity", help="Total number of units."),
    broken: int = typer.Option(0, "--broken", help="Units needing repair."),
    eta: Optional[str] = typer.Option(
        None, "--eta", help="Repair ETA, dd/mm/yyyy. Required when units are broken."
    ),
) -> None:
    """
    Add equipment. Status is derived from the number of broken units.
    """
    with _open_session() as session:
        try:
            draft = EquipmentDraft(
                name=name, total_quantity=quantity, broken_count=broken, repair_eta=eta
            )
            equipment = session.producer.add_equipment(draft)
        except ValueError as exc:
            _fail(_validation_message(exc))
        typer.echo(f"Equipment added successfully! ID: {equipment.id}")


@equipment_app.command("list")
def equipment_list() -> None:
    """
    List all equipment.
    """
    with _open_session() as session:
        print_equipment(session.equipment.list())


@equipment_app.command("status")
def equipment_status(
    equipment_id: int = typer.Argument(..., help="Equipment ID."),
    status: str = typer.Argument(..., help="'operational' or 'maintenance'."),
    eta: Optional[str] = typer.Option(None, "--eta", help="Repair ETA, dd/mm/yyyy."),
) -> None:
    """
    Change the status of a piece of equipment.
    """
    choice = status.lower()
    if choice not in ("operational", "maintenance"):
        _fail("Status must be 'operational' or 'maintenance'.")

    with _open_session() as session:
        engine = session.status_engine
        if choice == "operational":
            result = engine.mark_operational(equipment_id)
        else:
            if eta is None:
                _fail("--eta is required for maintenance.")
            try:
                repair_eta = dates.parse_date(eta)
            except ValueError as exc:
                _fail(str(exc))
            result = engine.mark_under_maintenance(equipment_id, repair_eta)

        if result is TransitionResult.NOT_FOUND:
            _fail(f"Equipment with ID {equipment_id} not found.", code=1)
        if result is TransitionResult.INVALID_DATE:
            _fail("Invalid date entered.")
        if result is TransitionResult.PAST_DATE:
            _fail("Repair ETA cannot be in the past.")
        typer.echo("The equipment status has been successfully updated.")


@equipment_app.command("delete")
def equipment_delete(equipment_id: int = typer.Argument(..., help="Equipment ID.")) -> None:
    """
    Delete equipment.
    """
    with _open_session() as session:
        if not session.equipment.delete_by_id(equipment_id):
            _fail(f"Equipment with ID {equipment_id} not found.", code=1)
        typer.echo("Equipment deleted successfully!")


def main() -> None:
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)


if __name__ == "__main__":
    main()
