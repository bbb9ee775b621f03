"""Form model state — immutable updates of in-progress resource models.

A form model is a plain dict shaped like its schema: scalars, nested dicts
for composite fields and lists for list fields. Every function here returns
a new model and leaves its input untouched. Nothing is validated on edit;
bad values are kept and reported by validation at submit time.
"""

from __future__ import annotations

import copy
import math
from collections.abc import Callable, Mapping, Sequence
from typing import Any, Union

from edgeform.schema.models import (
    Composite,
    FieldDescriptor,
    FieldKind,
    ListField,
    Scalar,
    Schema,
)

NOT_A_NUMBER = float("nan")

PathElement = Union[str, int]
_Leaf = Callable[[Any, Any], Any]


def is_not_a_number(value: object) -> bool:
    return isinstance(value, float) and math.isnan(value)


def is_empty(value: object) -> bool:
    """True for values that count as absent: None, "", [], {} and NaN."""
    if value is None or is_not_a_number(value):
        return True
    if isinstance(value, (str, list, tuple, dict)):
        return len(value) == 0
    return False


def coerce(descriptor: Scalar, raw: object) -> Any:
    """Convert raw input to the field's kind.

    Numbers are truncated to integers. Anything that does not parse as a
    finite number becomes NOT_A_NUMBER instead of raising. Strings and
    enums pass through unchanged.
    """
    if descriptor.kind is not FieldKind.NUMBER:
        return raw
    if isinstance(raw, bool):
        return NOT_A_NUMBER
    if isinstance(raw, int):
        return raw
    if isinstance(raw, str):
        raw = raw.strip()
        if not raw:
            return NOT_A_NUMBER
        try:
            return int(raw)
        except ValueError:
            pass
    try:
        value = float(raw)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return NOT_A_NUMBER
    if not math.isfinite(value):
        return NOT_A_NUMBER
    return math.trunc(value)


def blank_record(schema: Schema) -> dict[str, Any]:
    """Template record for ``schema``: "" for text, 0 for numbers.

    Declared defaults win over the blanks. Read-only and composite fields
    are left out; seeded lists get one blank record of their own.
    """
    record: dict[str, Any] = {}
    for name, descriptor in schema.fields:
        if isinstance(descriptor, Scalar):
            if descriptor.readonly:
                continue
            if descriptor.default is not None:
                record[name] = descriptor.default
            elif descriptor.kind is FieldKind.NUMBER:
                record[name] = 0
            else:
                record[name] = ""
        elif isinstance(descriptor, ListField):
            record[name] = _seed(descriptor)
    return record


def list_templates(schema: Schema) -> dict[str, dict[str, Any]]:
    """Blank templates of the seeded list fields of ``schema``, by field name."""
    return {
        name: blank_record(descriptor.item.schema)
        for name, descriptor in schema.fields
        if isinstance(descriptor, ListField)
        and descriptor.seeded
        and isinstance(descriptor.item, Composite)
    }


def new_model(schema: Schema) -> dict[str, Any]:
    """An empty model for the new-resource flow, with seeded lists filled."""
    return {name: [template] for name, template in list_templates(schema).items()}


def set_scalar_field(
    model: Mapping[str, Any],
    schema: Schema,
    name: str,
    raw: object,
) -> dict[str, Any]:
    """Return a new model with top-level field ``name`` set to ``raw`` (coerced)."""
    return set_path(model, schema, (name,), raw)


def set_list_entry_field(
    model: Mapping[str, Any],
    schema: Schema,
    list_name: str,
    index: int,
    field_name: str,
    raw: object,
) -> dict[str, Any]:
    """Return a new model with one field of ``list_name[index]`` replaced.

    Raises IndexError when ``index`` does not address an existing entry.
    """
    return set_path(model, schema, (list_name, index, field_name), raw)


def set_path(
    model: Mapping[str, Any],
    schema: Schema,
    path: Sequence[PathElement],
    raw: object,
) -> dict[str, Any]:
    """Set a nested scalar addressed by field names and list indices.

    Example path: ``("traffic_rules", 0, "source", "ip_filter", "address")``.
    Missing composite objects along the path are created; list indices
    must already exist.
    """

    def assign(descriptor: FieldDescriptor, current: object) -> Any:
        if not isinstance(descriptor, Scalar):
            raise TypeError(f"{format_path(path)} is not a scalar field")
        return coerce(descriptor, raw)

    return _update_record(model, schema, _checked(path), assign)


def append_list_entry(
    model: Mapping[str, Any],
    list_name: str,
    template: object,
) -> dict[str, Any]:
    """Return a new model with a copy of ``template`` appended to ``list_name``.

    Existing entries keep their positions; the new entry takes the next index.
    """
    items = model.get(list_name, [])
    if not isinstance(items, list):
        raise TypeError(f"{list_name} is not a list")
    return {**model, list_name: [*items, copy.deepcopy(template)]}


def append_path(
    model: Mapping[str, Any],
    schema: Schema,
    path: Sequence[PathElement],
    template: object,
) -> dict[str, Any]:
    """Append ``template`` to a list field nested anywhere in the model."""

    def append(descriptor: FieldDescriptor, current: object) -> Any:
        if not isinstance(descriptor, ListField):
            raise TypeError(f"{format_path(path)} is not a list field")
        return [*(current or []), copy.deepcopy(template)]  # type: ignore[misc]

    return _update_record(model, schema, _checked(path), append)


def reset_lists(
    model: Mapping[str, Any],
    templates: Mapping[str, object],
) -> dict[str, Any]:
    """Replace each named list with a single copy of its blank template."""
    updated = dict(model)
    for name, template in templates.items():
        updated[name] = [copy.deepcopy(template)]
    return updated


def _seed(descriptor: ListField) -> list[Any]:
    if descriptor.seeded and isinstance(descriptor.item, Composite):
        return [blank_record(descriptor.item.schema)]
    return []


def _checked(path: Sequence[PathElement]) -> tuple[PathElement, ...]:
    path = tuple(path)
    if not path:
        raise ValueError("Field path cannot be empty")
    return path


def _update_record(
    record: Mapping[str, Any],
    schema: Schema,
    path: tuple[PathElement, ...],
    leaf: _Leaf,
) -> dict[str, Any]:
    name, rest = path[0], path[1:]
    if not isinstance(name, str):
        raise TypeError(f"Expected a field name in {schema.title}, got {name!r}")
    descriptor = schema.descriptor(name)
    current = record.get(name)

    if not rest:
        value = leaf(descriptor, current)
    elif isinstance(descriptor, Composite):
        value = _update_record(current or {}, descriptor.schema, rest, leaf)
    elif isinstance(descriptor, ListField):
        value = _update_list(current or [], descriptor, name, rest, leaf)
    else:
        raise TypeError(f"Scalar field '{name}' has no sub-fields")

    return {**record, name: value}


def _update_list(
    items: list[Any],
    descriptor: ListField,
    name: str,
    path: tuple[PathElement, ...],
    leaf: _Leaf,
) -> list[Any]:
    index, rest = path[0], path[1:]
    if isinstance(index, bool) or not isinstance(index, int):
        raise TypeError(f"Expected an index into '{name}', got {index!r}")
    # Negative indices are rejected; entries are addressed by position only
    if not 0 <= index < len(items):
        raise IndexError(f"{name}[{index}] is out of range (length {len(items)})")

    item = descriptor.item
    if not rest:
        value = leaf(item, items[index])
    elif isinstance(item, Composite):
        value = _update_record(items[index], item.schema, rest, leaf)
    else:
        raise TypeError(f"Items of '{name}' have no sub-fields")

    return [*items[:index], value, *items[index + 1 :]]


def format_path(path: Sequence[PathElement]) -> str:
    """Render a path as ``traffic_rules[2].source.ip_filter.address``."""
    text = ""
    for element in path:
        if isinstance(element, int) and not isinstance(element, bool):
            text += f"[{element}]"
        elif text:
            text += f".{element}"
        else:
            text = str(element)
    return text
