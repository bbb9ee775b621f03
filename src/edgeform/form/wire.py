"""Convert form models to and from the controller's wire shape and YAML files."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from edgeform.form.state import is_empty
from edgeform.form.validation import is_populated, is_untouched
from edgeform.schema.models import Composite, ListField, Scalar, Schema

logger = logging.getLogger(__name__)


def to_wire(model: Mapping[str, Any], schema: Schema) -> dict[str, Any]:
    """Serialize a form model to the JSON body the controller expects.

    Empty optional values and unpopulated filters are dropped rather than
    sent as blanks. Untouched template records of dynamic lists are
    dropped too. Required fields are always emitted.
    """
    data: dict[str, Any] = {}
    for name, descriptor in schema.fields:
        if name not in model:
            continue
        value = model[name]

        if isinstance(descriptor, Composite):
            if not is_populated(value):
                continue
            data[name] = to_wire(value, descriptor.schema)
        elif isinstance(descriptor, ListField):
            items = _list_to_wire(value or [], descriptor)
            if items or name in schema.required:
                data[name] = items
        else:
            if is_empty(value) and name not in schema.required:
                continue
            data[name] = value
    return data


def from_wire(data: Mapping[str, Any], schema: Schema) -> dict[str, Any]:
    """Build a form model from a fetched resource for the edit flow.

    Keys the schema does not know are dropped; JSON nulls become absent.
    """
    if not isinstance(data, Mapping):
        raise ValueError(f"{schema.title} payload must be a mapping")

    model: dict[str, Any] = {}
    for name, descriptor in schema.fields:
        value = data.get(name)
        if value is None:
            continue
        if isinstance(descriptor, Composite):
            model[name] = from_wire(value, descriptor.schema)
        elif isinstance(descriptor, ListField):
            model[name] = _list_from_wire(value, descriptor, name)
        else:
            model[name] = value

    ignored = sorted(set(data) - set(schema.field_names))
    if ignored:
        logger.debug("Ignoring unknown %s field(s): %s", schema.title, ", ".join(ignored))
    return model


def load_model(path: str | Path) -> dict[str, Any]:
    """Load a form model from a YAML (or JSON) file."""
    text = Path(path).read_text(encoding="utf-8")
    return load_model_from_string(text)


def load_model_from_string(text: str) -> dict[str, Any]:
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid YAML: {exc}") from exc
    if not isinstance(data, dict):
        raise ValueError("Model document must be a mapping")
    return data


def dump_model(model: Mapping[str, Any]) -> str:
    """Serialize a model to YAML, keeping field order."""
    text: str = yaml.safe_dump(dict(model), default_flow_style=False, sort_keys=False)
    return text


def _list_to_wire(items: list[Any], descriptor: ListField) -> list[Any]:
    item = descriptor.item
    if isinstance(item, Scalar):
        return [entry for entry in items if not is_empty(entry)]

    out: list[Any] = []
    for entry in items:
        if descriptor.seeded and is_untouched(entry, item.schema):
            continue
        out.append(to_wire(entry, item.schema))
    return out


def _list_from_wire(value: object, descriptor: ListField, name: str) -> list[Any]:
    if not isinstance(value, list):
        raise ValueError(f"{name} must be a list")
    item = descriptor.item
    if isinstance(item, Scalar):
        return list(value)
    return [from_wire(entry, item.schema) for entry in value]
