"""Submit-time validation of form models against their schema.

Every field is checked and every problem is reported, so a caller can show
all errors at once. Composite fields (filters, modifiers) are only checked
when the model actually populates them.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass
from functools import lru_cache
from typing import Any

from edgeform.form.state import (
    PathElement,
    blank_record,
    format_path,
    is_empty,
    is_not_a_number,
)
from edgeform.schema.models import (
    Composite,
    FieldKind,
    ListField,
    Scalar,
    Schema,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Violation:
    """A single constraint failure, located by its field path."""

    path: str
    message: str


def validate(model: Mapping[str, Any], schema: Schema) -> tuple[Violation, ...]:
    """Check ``model`` against ``schema``; an empty result means valid."""
    violations: list[Violation] = []
    _check_record(model, schema, (), violations)
    if violations:
        logger.debug(
            "%s failed validation with %d violation(s)",
            schema.title,
            len(violations),
        )
    return tuple(violations)


def is_valid(model: Mapping[str, Any], schema: Schema) -> bool:
    return not validate(model, schema)


def is_populated(value: object) -> bool:
    """Whether an optional composite value carries any data at all."""
    if not isinstance(value, Mapping):
        return not is_empty(value)
    return any(is_populated(v) for v in value.values())


def is_untouched(record: object, schema: Schema) -> bool:
    """Whether a dynamic-list record still equals its blank template."""
    return isinstance(record, Mapping) and dict(record) == blank_record(schema)


def _check_record(
    record: Mapping[str, Any],
    schema: Schema,
    prefix: tuple[PathElement, ...],
    out: list[Violation],
) -> None:
    if not isinstance(record, Mapping):
        out.append(Violation(format_path(prefix), f"{schema.title} must be an object."))
        return

    for name, descriptor in schema.fields:
        path = prefix + (name,)
        value = record.get(name)
        title = descriptor.title or name

        if is_empty(value) or (
            isinstance(descriptor, Composite) and not is_populated(value)
        ):
            if name in schema.required:
                out.append(Violation(format_path(path), f"{title} is required."))
            elif isinstance(descriptor, Scalar) and is_not_a_number(value):
                out.append(Violation(format_path(path), f"{title} must be a number."))
            continue

        if isinstance(descriptor, Scalar):
            message = _check_scalar(descriptor, value, title)
            if message:
                out.append(Violation(format_path(path), message))
        elif isinstance(descriptor, Composite):
            _check_record(value, descriptor.schema, path, out)
        else:
            _check_list(value, descriptor, path, out)

    for low, high in schema.ordered:
        low_value, high_value = record.get(low), record.get(high)
        if _is_number(low_value) and _is_number(high_value) and low_value > high_value:
            out.append(
                Violation(
                    format_path(prefix + (low,)),
                    f"{schema.title_of(low)} must be <= {schema.title_of(high)}.",
                )
            )


def _check_list(
    items: object,
    descriptor: ListField,
    path: tuple[PathElement, ...],
    out: list[Violation],
) -> None:
    title = descriptor.title or str(path[-1])
    if not isinstance(items, (list, tuple)):
        out.append(Violation(format_path(path), f"{title} must be a list."))
        return

    item = descriptor.item
    for index, entry in enumerate(items):
        entry_path = path + (index,)
        if isinstance(item, Composite):
            if descriptor.seeded and is_untouched(entry, item.schema):
                continue
            _check_record(entry, item.schema, entry_path, out)
            continue

        item_title = item.title or title
        if is_empty(entry):
            out.append(Violation(format_path(entry_path), f"{item_title} is required."))
            continue
        message = _check_scalar(item, entry, item_title)
        if message:
            out.append(Violation(format_path(entry_path), message))


def _check_scalar(descriptor: Scalar, value: object, title: str) -> str | None:
    """Return the first constraint message ``value`` breaks, or None."""
    if descriptor.kind is FieldKind.NUMBER:
        if not _is_number(value):
            return f"{title} must be a number."
        low, high = descriptor.minimum, descriptor.maximum
        if (low is not None and value < low) or (high is not None and value > high):  # type: ignore[operator]
            return f"{title} must be in [{_bound(low)}..{_bound(high)}]."
        return None

    if not isinstance(value, str):
        return f"{title} must be text."

    if descriptor.pattern and not _compiled(descriptor.pattern).match(value):
        return descriptor.validation_message or f"{title} has an invalid format."

    if descriptor.kind is FieldKind.ENUM and value not in descriptor.choices:
        return f"{title} must be one of [{', '.join(descriptor.choices)}]."

    return None


def _is_number(value: object) -> bool:
    return (
        isinstance(value, (int, float))
        and not isinstance(value, bool)
        and not is_not_a_number(value)
    )


def _bound(value: int | None) -> str:
    return "" if value is None else str(value)


@lru_cache(maxsize=None)
def _compiled(pattern: str) -> re.Pattern[str]:
    return re.compile(pattern)
