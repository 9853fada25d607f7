#!/usr/bin/env python3
"""Well-being log CLI for database setup and catalog upkeep."""

import argparse
from datetime import date

import questionary
from rich.console import Console
from rich.table import Table

from wellbeing import db
from wellbeing.commands import (
    AddWellBeingValueCmd,
    CommandHandler,
    CreateWellBeingTypeCmd,
    GetAllWellBeingDataCmd,
)
from wellbeing.config import config, configure_logging
from wellbeing.store import create_store

console = Console()

DEFAULT_TYPES = [
    ("observation", "alcohol", False),
    ("observation", "sleep", False),
    ("observation", "food", True),
    ("observation", "sun exposure", False),
    ("symptom", "headache", False),
    ("symptom", "tiredness", False),
    ("symptom", "nausea", False),
    ("symptom", "allergy", True),
]


def get_handler() -> CommandHandler:
    return CommandHandler.for_store(create_store(config))


def init_db():
    """Apply the SQL migrations to DATABASE_URL."""
    if not config.database_url:
        console.print("[red]DATABASE_URL is not set.[/]")
        return

    applied = db.apply_migrations()
    for name in applied:
        console.print(f"[green]Applied {name}[/]")


def list_entries(start: date = None, end: date = None, handler: CommandHandler = None):
    """Print entries in a date range as a table."""
    handler = handler or get_handler()
    entries = handler.get_all_data(GetAllWellBeingDataCmd(start_date=start, end_date=end))
    if not entries:
        console.print("[dim]No entries found.[/]")
        return

    table = Table(title="Entries")
    table.add_column("Date")
    table.add_column("Category")
    table.add_column("Type")
    table.add_column("Values")
    for entry in entries:
        table.add_row(entry.date.isoformat(), entry.category, entry.type, ", ".join(entry.values))
    console.print(table)


def select_type(handler: CommandHandler) -> str | None:
    """Prompt the user to pick a defined type from the catalogue."""
    choices = [
        questionary.Choice(title=f"{item.category} / {type_name}", value=type_name)
        for item in handler.get_catalogue()
        for type_name in item.types
    ]
    if not choices:
        console.print("[red]No types defined.[/]")
        return None
    return questionary.select("Select a type:", choices=choices).ask()


def add_value(handler: CommandHandler = None):
    """Interactively add an allowed value to a type."""
    handler = handler or get_handler()
    type_name = select_type(handler)
    if not type_name:
        return

    value = questionary.text("Value:").ask()
    if not value:
        console.print("[dim]Cancelled.[/]")
        return
    notable = questionary.confirm("Flag as notable?", default=False).ask()

    console.print(
        f"[yellow]Will add [bold]{value}[/bold] to {type_name}"
        f"{' (notable)' if notable else ''}.[/]"
    )
    if not questionary.confirm("Proceed with these changes?").ask():
        console.print("[dim]Cancelled.[/]")
        return

    handler.add_value(AddWellBeingValueCmd(type=type_name, value=value, notable=bool(notable)))
    console.print(f"[green]Added {value} to {type_name}.[/]")


def seed_catalog(handler: CommandHandler = None):
    """Create the default observation and symptom types, skipping existing ones."""
    handler = handler or get_handler()
    existing = {
        (item.category.lower(), type_name.lower())
        for item in handler.get_catalogue()
        for type_name in item.types
    }

    for category, type_name, allow_multiple in DEFAULT_TYPES:
        if (category, type_name.lower()) in existing:
            console.print(f"Skipping {category}/{type_name} - already exists")
            continue
        handler.create_type(CreateWellBeingTypeCmd(category, type_name, allow_multiple))
        console.print(f"Created: {category}/{type_name}")


def clean_orphans(handler: CommandHandler = None):
    """Delete allowed values whose type is no longer defined."""
    handler = handler or get_handler()
    orphans = handler.find_orphan_values()
    if not orphans:
        console.print("[green]No orphaned values.[/]")
        return

    for orphan in orphans:
        console.print(f"  {orphan.type}: {orphan.value}")
    console.print(f"[yellow]Will delete {len(orphans)} orphaned values.[/]")

    if not questionary.confirm("Proceed with these changes?").ask():
        console.print("[dim]Cancelled.[/]")
        return

    removed = handler.clean_orphan_values()
    console.print(f"[green]Removed {removed} values.[/]")


def main(argv=None):
    parser = argparse.ArgumentParser(description="Well-being log CLI")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("init-db", help="Create the database tables")
    list_parser = subparsers.add_parser("list-entries", help="Show recorded entries")
    list_parser.add_argument("--start", type=date.fromisoformat, help="YYYY-MM-DD")
    list_parser.add_argument("--end", type=date.fromisoformat, help="YYYY-MM-DD")
    subparsers.add_parser("add-value", help="Add an allowed value to a type")
    subparsers.add_parser("seed-catalog", help="Create the default types")
    subparsers.add_parser("clean-orphans", help="Delete values of deleted types")

    args = parser.parse_args(argv)
    configure_logging("WARNING")

    if args.command == "init-db":
        init_db()
    elif args.command == "list-entries":
        list_entries(args.start, args.end)
    elif args.command == "add-value":
        add_value()
    elif args.command == "seed-catalog":
        seed_catalog()
    elif args.command == "clean-orphans":
        clean_orphans()


if __name__ == "__main__":
    main()
