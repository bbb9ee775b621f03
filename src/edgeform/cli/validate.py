"""CLI command: edgeform validate <resource> <file> — check a model offline."""

from __future__ import annotations

import sys

import click
from rich.markup import escape

from edgeform.cli._common import RESOURCE_CHOICE, console, load_or_exit, print_violations
from edgeform.form.validation import validate as validate_model
from edgeform.schema.registry import get_schema


@click.command()
@click.argument("resource", type=RESOURCE_CHOICE)
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
def validate(resource: str, path: str) -> None:
    """Validate the RESOURCE model in PATH (YAML or JSON)."""
    definition = get_schema(resource)
    model = load_or_exit(path)

    violations = validate_model(model, definition)
    if violations:
        print_violations(violations)
        sys.exit(1)

    console.print(f"[green]{definition.title} in {escape(path)} is valid.[/green]")
