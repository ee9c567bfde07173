#!/usr/bin/env python3
"""peopledb CLI for day-to-day record keeping."""

import argparse
from contextlib import contextmanager
from datetime import datetime
from decimal import Decimal, InvalidOperation

import questionary
from rich.console import Console
from rich.table import Table

from peopledb import db
from peopledb.logging_config import setup_logging
from peopledb.person import PeopleRepository, Person

console = Console()


@contextmanager
def people_repository():
    """Yield a PeopleRepository whose work is committed when the block exits."""
    with db.get_connection() as conn:
        yield PeopleRepository(db.Executor(conn))


def build_choices(people: list[Person]) -> list[questionary.Choice]:
    """Convert people to questionary choices with the person as the value."""
    return [
        questionary.Choice(title=f"{p.first_name} {p.last_name} (#{p.id})", value=p)
        for p in people
    ]


def is_aware_datetime(text: str) -> bool | str:
    try:
        value = datetime.fromisoformat(text)
    except ValueError:
        return "Use ISO format, e.g. 1980-11-15T15:00-06:00"
    if value.tzinfo is None:
        return "Include a UTC offset, e.g. -06:00"
    return True


def is_decimal(text: str) -> bool | str:
    try:
        Decimal(text)
    except InvalidOperation:
        return "Enter a number, e.g. 73000.50"
    return True


def list_people():
    """Print every person in the table."""
    with people_repository() as repo:
        people = repo.find_all()

    if not people:
        console.print("[red]No people found.[/]")
        return

    table = Table("ID", "First name", "Last name", "Date of birth", "Salary")
    for p in people:
        table.add_row(str(p.id), p.first_name, p.last_name, p.dob.isoformat(), str(p.salary))
    console.print(table)


def count_people():
    """Print the number of people in the table."""
    with people_repository() as repo:
        console.print(f"People: [bold]{repo.count()}[/]")


def add_person():
    """Prompt for a new person and save it."""
    first_name = questionary.text("First name:").ask()
    last_name = questionary.text("Last name:").ask()
    dob = questionary.text("Date of birth (ISO 8601 with offset):", validate=is_aware_datetime).ask()
    if not (first_name and last_name and dob):
        console.print("[dim]Cancelled.[/]")
        return

    person = Person(first_name=first_name, last_name=last_name, dob=datetime.fromisoformat(dob))
    console.print(f"[yellow]Will save {person}.[/]")
    if not questionary.confirm("Proceed with these changes?").ask():
        console.print("[dim]Cancelled.[/]")
        return

    with people_repository() as repo:
        repo.save(person)
    console.print(f"[green]Saved {person.first_name} {person.last_name} with ID {person.id}.[/]")


def raise_salary():
    """Set a new salary for a selected person."""
    with people_repository() as repo:
        people = repo.find_all()
        if not people:
            console.print("[red]No people found.[/]")
            return

        person = questionary.select("Select a person:", choices=build_choices(people)).ask()
        if not person:
            return
        salary = questionary.text(
            f"New salary (currently {person.salary}):", validate=is_decimal
        ).ask()
        if not salary:
            console.print("[dim]Cancelled.[/]")
            return

        person.salary = Decimal(salary)
        repo.update(person)
    console.print(f"[green]Updated salary for {person.first_name} {person.last_name}.[/]")


def remove_people():
    """Delete one or more selected people."""
    with people_repository() as repo:
        people = repo.find_all()
        if not people:
            console.print("[red]No people found.[/]")
            return

        selected = questionary.checkbox("Select people to delete:", choices=build_choices(people)).ask()
        if not selected:
            console.print("[dim]Nothing selected.[/]")
            return

        console.print(f"[yellow]Will delete {len(selected)} people.[/]")
        if not questionary.confirm("Proceed with these changes?").ask():
            console.print("[dim]Cancelled.[/]")
            return

        repo.delete(*selected)
    console.print(f"[green]Deleted {len(selected)} people.[/]")


def main():
    parser = argparse.ArgumentParser(description="peopledb CLI")
    parser.add_argument("--log-level", help="Override PEOPLEDB_LOG_LEVEL")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("list", help="List all people")
    subparsers.add_parser("count", help="Count people")
    subparsers.add_parser("add", help="Add a person")
    subparsers.add_parser("raise-salary", help="Change a person's salary")
    subparsers.add_parser("remove", help="Delete people")

    args = parser.parse_args()
    setup_logging(args.log_level)

    if args.command == "list":
        list_people()
    elif args.command == "count":
        count_people()
    elif args.command == "add":
        add_person()
    elif args.command == "raise-salary":
        raise_salary()
    elif args.command == "remove":
        remove_people()


if __name__ == "__main__":
    main()
