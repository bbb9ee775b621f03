"""Schema data models — immutable field descriptors and resource schemas."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Union


class FieldKind(enum.Enum):
    """Value type of a scalar field."""

    STRING = "string"
    NUMBER = "number"
    ENUM = "enum"


@dataclass(frozen=True)
class Scalar:
    """A single typed value with optional constraints."""

    kind: FieldKind
    title: str = ""
    minimum: int | None = None
    maximum: int | None = None
    pattern: str | None = None
    validation_message: str = ""
    choices: tuple[str, ...] = ()
    default: str | int | None = None
    readonly: bool = False

    def __post_init__(self) -> None:
        if self.kind is FieldKind.ENUM and not self.choices:
            raise ValueError(f"Enum field '{self.title}' declares no choices")
        if (
            self.minimum is not None
            and self.maximum is not None
            and self.minimum > self.maximum
        ):
            raise ValueError(
                f"Field '{self.title}' has minimum {self.minimum} > maximum {self.maximum}"
            )


@dataclass(frozen=True)
class Composite:
    """A field whose value is itself a structured object."""

    schema: Schema

    @property
    def title(self) -> str:
        return self.schema.title


@dataclass(frozen=True)
class ListField:
    """An ordered, index-addressable sequence of items.

    ``item`` is a Composite for lists of records or a Scalar for lists of
    plain values. Seeded lists always start with one blank record.
    """

    item: Union[Composite, Scalar]
    title: str = ""
    seeded: bool = False


FieldDescriptor = Union[Scalar, Composite, ListField]


@dataclass(frozen=True)
class Schema:
    """Declarative description of one resource type."""

    title: str
    fields: tuple[tuple[str, FieldDescriptor], ...] = ()
    required: frozenset[str] = frozenset()
    ordered: tuple[tuple[str, str], ...] = ()
    endpoint: str = ""

    def __post_init__(self) -> None:
        names = self.field_names
        if len(set(names)) != len(names):
            raise ValueError(f"Schema '{self.title}' declares a field twice")

        missing = sorted(self.required - set(names))
        if missing:
            raise ValueError(
                f"Schema '{self.title}' requires unknown field(s): {', '.join(missing)}"
            )

        for low, high in self.ordered:
            for name in (low, high):
                descriptor = self.get(name)
                if not isinstance(descriptor, Scalar) or descriptor.kind is not FieldKind.NUMBER:
                    raise ValueError(
                        f"Schema '{self.title}' orders non-numeric field '{name}'"
                    )

    @property
    def field_names(self) -> tuple[str, ...]:
        return tuple(name for name, _ in self.fields)

    def get(self, name: str) -> FieldDescriptor | None:
        """Return the descriptor for ``name``, or None if the field is unknown."""
        for field_name, descriptor in self.fields:
            if field_name == name:
                return descriptor
        return None

    def descriptor(self, name: str) -> FieldDescriptor:
        """Return the descriptor for ``name``; raises KeyError if unknown."""
        descriptor = self.get(name)
        if descriptor is None:
            raise KeyError(f"Schema '{self.title}' has no field '{name}'")
        return descriptor

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.get(name) is not None

    def title_of(self, name: str) -> str:
        """Display title of a field, falling back to its name."""
        descriptor = self.descriptor(name)
        return descriptor.title or name


def string(title: str, **constraints: object) -> Scalar:
    return Scalar(FieldKind.STRING, title=title, **constraints)  # type: ignore[arg-type]


def number(title: str, **constraints: object) -> Scalar:
    return Scalar(FieldKind.NUMBER, title=title, **constraints)  # type: ignore[arg-type]


def choice(title: str, choices: tuple[str, ...], **constraints: object) -> Scalar:
    return Scalar(FieldKind.ENUM, title=title, choices=choices, **constraints)  # type: ignore[arg-type]


def schema(
    title: str,
    *fields: tuple[str, FieldDescriptor],
    required: tuple[str, ...] = (),
    ordered: tuple[tuple[str, str], ...] = (),
    endpoint: str = "",
) -> Schema:
    """Build a Schema from ``(name, descriptor)`` pairs in display order."""
    return Schema(
        title=title,
        fields=tuple(fields),
        required=frozenset(required),
        ordered=ordered,
        endpoint=endpoint,
    )
