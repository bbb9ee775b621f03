"""Helpers shared by CLI commands."""

from __future__ import annotations

import sys

import click
from rich.console import Console
from rich.markup import escape

from edgeform.form.validation import Violation
from edgeform.form.wire import load_model
from edgeform.schema.registry import resource_types

console = Console(stderr=True, soft_wrap=True)

RESOURCE_CHOICE = click.Choice([t.value for t in resource_types()])


def load_or_exit(path: str) -> dict:
    """Load a model file, exiting with status 1 on a malformed document."""
    try:
        return load_model(path)
    except ValueError as exc:
        console.print(f"[red]Error:[/red] {escape(path)}: {escape(str(exc))}")
        sys.exit(1)


def print_violations(violations: tuple[Violation, ...]) -> None:
    console.print(f"[red]{len(violations)} violation(s)[/red]")
    for violation in violations:
        console.print(f"  [cyan]{escape(violation.path or '<model>')}[/cyan]: {escape(violation.message)}")
