"""Form editor — one editing session over a single form model."""

from __future__ import annotations

import enum
import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from edgeform.client.notify import Notifier, Severity
from edgeform.client.transport import Err, Transport
from edgeform.form import state
from edgeform.form.state import PathElement
from edgeform.form.validation import Violation, validate
from edgeform.form.wire import from_wire, to_wire
from edgeform.schema.models import Composite, ListField, Schema

logger = logging.getLogger(__name__)


class SubmitStatus(enum.Enum):
    """How a submit attempt ended."""

    SAVED = "saved"
    INVALID = "invalid"
    FAILED = "failed"
    IGNORED = "ignored"
    DISCARDED = "discarded"


@dataclass(frozen=True)
class SubmitOutcome:
    status: SubmitStatus
    model: Any = None
    message: str = ""
    violations: tuple[Violation, ...] = ()


class FormEditor:
    """Owns the in-progress model for one create or edit dialog.

    Edits replace ``model`` with a new value. ``submit`` validates, sends
    the wire form of the model and reports the result through the
    notifier. Only one submit may be in flight; a model is kept after a
    failed submit so the user can retry.
    """

    def __init__(
        self,
        schema: Schema,
        model: Mapping[str, Any] | None = None,
        notifier: Notifier | None = None,
    ) -> None:
        self.schema = schema
        self.model: dict[str, Any] = (
            dict(model) if model is not None else state.new_model(schema)
        )
        self.notifier = notifier
        self.submitting = False
        self.closed = False
        self.editing = False
        self.violations: tuple[Violation, ...] = ()

    # --- editing ---

    def set_field(self, name: str, raw: object) -> None:
        self.model = state.set_scalar_field(self.model, self.schema, name, raw)

    def set_path(self, path: Sequence[PathElement], raw: object) -> None:
        self.model = state.set_path(self.model, self.schema, path, raw)

    def set_entry_field(self, list_name: str, index: int, field_name: str, raw: object) -> None:
        self.model = state.set_list_entry_field(
            self.model, self.schema, list_name, index, field_name, raw
        )

    def append_entry(self, list_name: str, template: object | None = None) -> int:
        """Append a blank (or given) record to a top-level list; returns its index."""
        if template is None:
            template = self.template_for(list_name)
        self.model = state.append_list_entry(self.model, list_name, template)
        return len(self.model[list_name]) - 1

    def append_path(self, path: Sequence[PathElement], template: object) -> None:
        self.model = state.append_path(self.model, self.schema, path, template)

    def template_for(self, list_name: str) -> object:
        """Blank record for a top-level list of records, "" for plain values."""
        descriptor = self.schema.descriptor(list_name)
        if not isinstance(descriptor, ListField):
            raise TypeError(f"{list_name} is not a list field")
        if isinstance(descriptor.item, Composite):
            return state.blank_record(descriptor.item.schema)
        return ""

    # --- lifecycle ---

    def close(self) -> None:
        """Close the editing surface; late responses are dropped."""
        self.closed = True

    def reopen(self) -> None:
        """Reopen the surface.

        A create dialog discards half-entered dynamic list records; a
        fetched model is kept as is.
        """
        if not self.editing:
            self.model = state.reset_lists(self.model, state.list_templates(self.schema))
        self.violations = ()
        self.closed = False

    async def load(self, transport: Transport, path: str) -> bool:
        """Replace the model with a fetched resource for the edit flow."""
        result = await transport.fetch_resource(path)
        if self.closed:
            return False
        if isinstance(result, Err):
            self._notify(result.message, Severity.ERROR)
            return False
        self.model = from_wire(result.value or {}, self.schema)
        self.editing = True
        self.violations = ()
        return True

    def check(self) -> tuple[Violation, ...]:
        self.violations = validate(self.model, self.schema)
        return self.violations

    async def submit(
        self,
        transport: Transport,
        path: str,
        update: bool = False,
    ) -> SubmitOutcome:
        """Validate and send the model; create by default, update if asked."""
        if self.closed:
            logger.debug("%s editor is closed; ignoring submit", self.schema.title)
            return SubmitOutcome(SubmitStatus.IGNORED)
        if self.submitting:
            logger.debug("Submit of %s already in flight; ignoring", self.schema.title)
            return SubmitOutcome(SubmitStatus.IGNORED)

        violations = self.check()
        if violations:
            return SubmitOutcome(SubmitStatus.INVALID, violations=violations)

        body = to_wire(self.model, self.schema)
        self.submitting = True
        try:
            if update:
                result = await transport.update_resource(path, body)
            else:
                result = await transport.create_resource(path, body)
        finally:
            self.submitting = False

        if self.closed:
            logger.debug("%s editor closed before %s returned", self.schema.title, path)
            return SubmitOutcome(SubmitStatus.DISCARDED)

        if isinstance(result, Err):
            self._notify(result.message, Severity.ERROR)
            return SubmitOutcome(SubmitStatus.FAILED, message=result.message)

        verb = "updated" if update else "added"
        message = f"Successfully {verb} {self.schema.title.lower()}."
        self._notify(message, Severity.SUCCESS)
        saved = result.value if result.value is not None else body
        self.model = state.new_model(self.schema)
        self.editing = False
        self.close()
        return SubmitOutcome(SubmitStatus.SAVED, model=saved, message=message)

    def _notify(self, message: str, severity: Severity) -> None:
        if self.notifier is not None:
            self.notifier.notify(message, severity)
