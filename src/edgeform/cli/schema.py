"""CLI commands: edgeform schema / edgeform new — inspect resource schemas."""

from __future__ import annotations

from collections.abc import Iterator

import click
from rich.table import Table

from edgeform.cli._common import RESOURCE_CHOICE, console
from edgeform.form.state import blank_record
from edgeform.form.wire import dump_model
from edgeform.schema.models import Composite, FieldKind, ListField, Scalar, Schema
from edgeform.schema.registry import get_schema, resource_types


@click.command()
@click.argument("resource", type=RESOURCE_CHOICE, required=False)
def schema(resource: str | None) -> None:
    """List resource types, or show the fields of RESOURCE."""
    if resource is None:
        table = Table(title="Resource types")
        table.add_column("Type", style="cyan")
        table.add_column("Title")
        table.add_column("Endpoint", style="dim")
        for resource_type in resource_types():
            definition = get_schema(resource_type)
            table.add_row(resource_type.value, definition.title, definition.endpoint or "-")
        console.print(table)
        return

    definition = get_schema(resource)
    table = Table(title=definition.title)
    table.add_column("Field", style="cyan")
    table.add_column("Type")
    table.add_column("Constraints", style="dim")
    table.add_column("Required")
    for row in _rows(definition, ""):
        table.add_row(*row)
    console.print(table)


@click.command()
@click.argument("resource", type=RESOURCE_CHOICE)
def new(resource: str) -> None:
    """Print a blank RESOURCE model as YAML."""
    click.echo(dump_model(blank_record(get_schema(resource))), nl=False)


def _rows(definition: Schema, prefix: str) -> Iterator[tuple[str, str, str, str]]:
    for name, descriptor in definition.fields:
        path = f"{prefix}{name}"
        required = "yes" if name in definition.required else ""
        if isinstance(descriptor, Scalar):
            yield path, descriptor.kind.value, _constraints(descriptor), required
        elif isinstance(descriptor, Composite):
            yield path, "object", "", required
            yield from _rows(descriptor.schema, f"{path}.")
        else:
            yield path, "list", "seeded" if descriptor.seeded else "", required
            yield from _item_rows(descriptor, f"{path}[]")


def _item_rows(descriptor: ListField, path: str) -> Iterator[tuple[str, str, str, str]]:
    item = descriptor.item
    if isinstance(item, Composite):
        yield from _rows(item.schema, f"{path}.")
    else:
        yield path, item.kind.value, _constraints(item), ""


def _constraints(descriptor: Scalar) -> str:
    parts: list[str] = []
    if descriptor.minimum is not None or descriptor.maximum is not None:
        low = "" if descriptor.minimum is None else descriptor.minimum
        high = "" if descriptor.maximum is None else descriptor.maximum
        parts.append(f"[{low}..{high}]")
    if descriptor.kind is FieldKind.ENUM:
        parts.append(" | ".join(descriptor.choices))
    if descriptor.pattern:
        parts.append("pattern")
    if descriptor.default is not None:
        parts.append(f"default={descriptor.default}")
    if descriptor.readonly:
        parts.append("read-only")
    return ", ".join(parts)
