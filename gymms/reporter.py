from __future__ import annotations

from typing import Iterable, Optional

from rich import box
from rich.console import Console
from rich.table import Table

from gymms.domain.models import Equipment, EquipmentStatus, Member, Report


def print_members(members: Iterable[Member], console: Optional[Console] = None) -> None:
    """
    Render members as a rich table, or a notice when there are none.
    """
    console = console or Console()
    rows = list(members)
    if not rows:
        console.print("[yellow]There are no current members in the database.[/yellow]")
        return

    table = Table(title="Members", box=box.ROUNDED)
    table.add_column("ID", justify="right", style="cyan", no_wrap=True)
    table.add_column("Name", style="bold")
    table.add_column("Phone")
    table.add_column("Gender", justify="center")
    table.add_column("Date of Birth", justify="right")
    table.add_column("Emergency Contact")
    table.add_column("Emergency Phone")
    table.add_column("Relation", style="magenta")

    for m in rows:
        table.add_row(
            str(m.id),
            m.full_name,
            m.phone_num,
            m.gender.value,
            str(m.date_of_birth),
            m.emergency_name,
            m.emergency_phone,
            m.emergency_relation.value,
        )

    console.print(table)


def print_equipment(items: Iterable[Equipment], console: Optional[Console] = None) -> None:
    """
    Render equipment as a rich table. The repair ETA column is blank for
    operational equipment.
    """
    console = console or Console()
    rows = list(items)
    if not rows:
        console.print("[yellow]No equipment found.[/yellow]")
        return

    table = Table(title="Equipment", box=box.ROUNDED)
    table.add_column("ID", justify="right", style="cyan", no_wrap=True)
    table.add_column("Name", style="bold")
    table.add_column("Total", justify="right")
    table.add_column("Functional", justify="right", style="green")
    table.add_column("Broken", justify="right", style="red")
    table.add_column("Status")
    table.add_column("Repair ETA", justify="right", style="yellow")

    for e in rows:
        under_maintenance = e.status is EquipmentStatus.UNDER_MAINTENANCE
        table.add_row(
            str(e.id),
            e.name,
            str(e.total_quantity),
            str(e.functional_count),
            str(e.broken_count),
            f"[red]{e.status.value}[/red]" if under_maintenance else f"[green]{e.status.value}[/green]",
            str(e.repair_eta) if under_maintenance else "",
        )

    console.print(table)


def print_report(report: Report, console: Optional[Console] = None) -> None:
    console = console or Console()

    table = Table(
        title=f"Equipment Report #{report.id}",
        box=box.ROUNDED,
        caption=f"Report Date: {report.generated_date}",
    )
    table.add_column("Metric", style="cyan")
    table.add_column("Count", justify="right", style="bold")
    table.add_row("Total Equipment", str(report.total_equipment_count))
    table.add_row("Functional Equipment", f"[green]{report.total_functional_count}[/green]")
    table.add_row("Broken Equipment", f"[red]{report.total_broken_count}[/red]")

    console.print(table)
