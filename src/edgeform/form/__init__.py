"""Form models: state updates, validation, wire codec and the editor."""

from edgeform.form.editor import FormEditor, SubmitOutcome, SubmitStatus
from edgeform.form.state import (
    NOT_A_NUMBER,
    append_list_entry,
    new_model,
    reset_lists,
    set_list_entry_field,
    set_path,
    set_scalar_field,
)
from edgeform.form.validation import Violation, is_valid, validate
from edgeform.form.wire import from_wire, to_wire

__all__ = [
    "NOT_A_NUMBER",
    "FormEditor",
    "SubmitOutcome",
    "SubmitStatus",
    "Violation",
    "append_list_entry",
    "from_wire",
    "is_valid",
    "new_model",
    "reset_lists",
    "set_list_entry_field",
    "set_path",
    "set_scalar_field",
    "to_wire",
    "validate",
]
