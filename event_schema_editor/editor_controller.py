"""
Editor controller for the event schema editor.

The controller is a two-state machine (form mode / JSON mode) that owns
the authoritative field list, the JSON text buffer, the event type name and
an optional FieldEditorSession for the field currently being added or
edited. Form mode treats the field list as authoritative; JSON mode treats
the text buffer as authoritative. Every transition either completes or
leaves the previous state untouched.
"""

import copy
import json
import logging
from dataclasses import dataclass, field as dataclass_field
from enum import Enum
from typing import Dict, Any, List, Optional, Callable

from .diff_utils import summarize_schema_changes
from .exceptions import InvalidTransitionError, SchemaDecodeError
from .field_model import SchemaField, FieldType
from .schema_decoder import decode_schema
from .schema_encoder import encode_fields, render_schema_json
from .schema_validation import (
    validate_event_type_name,
    validate_field_list,
    validate_raw_schema,
    validate_field,
)

logger = logging.getLogger(__name__)

SubmitCallback = Callable[[str, Dict[str, Any]], bool]


class EditorMode(str, Enum):
    """Which representation is authoritative for editing."""
    FORM = "form"
    JSON = "json"


class SubmissionStatus(str, Enum):
    ACCEPTED = "accepted"
    INVALID = "invalid"      # blocked by local validation
    REJECTED = "rejected"    # persistence boundary failed


@dataclass
class SubmissionResult:
    """Outcome of EditorController.submit."""
    status: SubmissionStatus
    event_type: str
    schema: Optional[Dict[str, Any]] = None
    errors: List[str] = dataclass_field(default_factory=list)

    @property
    def success(self) -> bool:
        return self.status == SubmissionStatus.ACCEPTED

    @property
    def message(self) -> Optional[str]:
        return self.errors[0] if self.errors else None


class FieldEditorSession:
    """Working copy of one field while it is being added or edited."""

    def __init__(self, field: SchemaField, is_new: bool):
        self.field = field
        self.is_new = is_new

    @property
    def title(self) -> str:
        return "Add Field" if self.is_new else "Edit Field"

    def update(self, **changes: Any) -> None:
        """Apply attribute changes to the working copy."""
        for key, value in changes.items():
            setattr(self.field, key, value)

    def warnings(self) -> List[str]:
        """Advisory constraint problems of the working copy."""
        return validate_field(self.field)


class EditorController:
    """Owns the editing state of one event schema."""

    def __init__(self, submit: Optional[SubmitCallback] = None, json_indent: int = 2,
                 lowercase_event_type: bool = True):
        self._submit = submit
        self.json_indent = json_indent
        self.lowercase_event_type = lowercase_event_type

        self.mode = EditorMode.FORM
        self.event_type = ""
        self.json_text = ""
        self.session: Optional[FieldEditorSession] = None
        self.errors: List[str] = []
        self.baseline: Optional[Dict[str, Any]] = None
        self._fields: List[SchemaField] = []

    @classmethod
    def from_schema(cls, schema: Dict[str, Any], event_type: str = "", **kwargs: Any) -> "EditorController":
        """
        Create a controller editing a previously produced schema.

        Raises:
            SchemaDecodeError: If the schema has no usable 'properties' object
        """
        controller = cls(**kwargs)
        controller._fields = decode_schema(schema)
        controller.event_type = event_type
        controller.baseline = copy.deepcopy(schema)
        logger.info(f"Editor loaded schema for '{event_type}' with {len(controller._fields)} fields")
        return controller

    @property
    def fields(self) -> List[SchemaField]:
        """Copy of the authoritative field list."""
        return [field.model_copy(deep=True) for field in self._fields]

    def get_field(self, field_id: str) -> Optional[SchemaField]:
        for field in self._fields:
            if field.id == field_id:
                return field.model_copy(deep=True)
        return None

    def set_event_type(self, name: str) -> None:
        self.event_type = name

    # Field list operations (form mode)

    def _require_form_mode(self, operation: str) -> None:
        if self.mode != EditorMode.FORM:
            raise InvalidTransitionError(operation, self.mode.value)

    def _require_no_session(self, operation: str) -> None:
        if self.session is not None:
            raise InvalidTransitionError(operation, self.mode.value, "a field is being edited")

    def start_adding_field(self) -> FieldEditorSession:
        """Open a session for a new, empty text field."""
        self._require_form_mode("add a field")
        self._require_no_session("add a field")
        self.session = FieldEditorSession(SchemaField(type=FieldType.STRING), is_new=True)
        return self.session

    def start_editing_field(self, field_id: str) -> FieldEditorSession:
        """
        Open a session editing a copy of an existing field.

        Raises:
            KeyError: If no field has the given id
        """
        self._require_form_mode("edit a field")
        self._require_no_session("edit a field")
        field = self.get_field(field_id)
        if field is None:
            raise KeyError(field_id)
        self.session = FieldEditorSession(field, is_new=False)
        return self.session

    def save_field(self) -> bool:
        """
        Commit the session's field into the list (upsert by id) and close it.

        A name already used by another field is refused; the session stays
        open and the error is recorded in `errors`.

        Returns:
            True if the field was committed
        """
        if self.session is None:
            raise InvalidTransitionError("save a field", self.mode.value, "no field is being edited")

        field = self.session.field.normalized()
        clash = any(other.name == field.name and other.id != field.id for other in self._fields)
        if clash:
            self.errors = [f"Field name \"{field.name}\" is already in use"]
            return False

        for index, existing in enumerate(self._fields):
            if existing.id == field.id:
                self._fields[index] = field
                break
        else:
            self._fields.append(field)

        logger.debug(f"Saved field '{field.name}' ({field.type})")
        self.session = None
        self.errors = []
        return True

    def cancel_field_edit(self) -> None:
        """Discard the open session; the field list is untouched."""
        self.session = None

    def remove_field(self, field_id: str) -> bool:
        """
        Remove a field by id.

        Returns:
            True if a field was removed
        """
        self._require_form_mode("remove a field")
        self._require_no_session("remove a field")
        remaining = [field for field in self._fields if field.id != field_id]
        removed = len(remaining) != len(self._fields)
        self._fields = remaining
        return removed

    # Mode transitions

    def switch_to_json(self) -> None:
        """Encode the field list into the JSON buffer and enter JSON mode."""
        self._require_form_mode("switch to JSON")
        if self.session is not None:
            logger.debug("Discarding open field session on switch to JSON")
            self.session = None

        self.json_text = render_schema_json(encode_fields(self._fields), indent=self.json_indent)
        self.mode = EditorMode.JSON
        self.errors = []
        logger.info(f"Switched to JSON mode with {len(self._fields)} fields")

    def set_json_text(self, text: str) -> None:
        if self.mode != EditorMode.JSON:
            raise InvalidTransitionError("edit JSON", self.mode.value)
        self.json_text = text

    def switch_to_form(self) -> bool:
        """
        Decode the JSON buffer into the field list and enter form mode.

        On failure the mode stays JSON, the field list is unchanged and the
        problem is recorded in `errors`.

        Returns:
            True if the transition happened
        """
        if self.mode != EditorMode.JSON:
            raise InvalidTransitionError("switch to form", self.mode.value)

        errors = validate_raw_schema(self.json_text, allow_empty=True)
        if errors:
            self.errors = errors
            logger.info(f"Switch to form rejected: {errors[0]}")
            return False

        try:
            fields = decode_schema(json.loads(self.json_text))
        except SchemaDecodeError as e:
            self.errors = [e.message]
            logger.info(f"Switch to form rejected: {e.message}")
            return False

        self._fields = fields
        self.session = None
        self.mode = EditorMode.FORM
        self.errors = []
        logger.info(f"Switched to form mode with {len(fields)} fields")
        return True

    # Preview and submission

    def current_schema(self) -> Optional[Dict[str, Any]]:
        """
        Schema currently represented by the editor.

        Returns:
            Encoded field list in form mode; parsed buffer in JSON mode, or
            None when the buffer is not a JSON object
        """
        if self.mode == EditorMode.FORM:
            return encode_fields(self._fields)

        try:
            document = json.loads(self.json_text)
        except (TypeError, ValueError):
            return None
        return document if isinstance(document, dict) else None

    def pending_changes(self) -> Dict[str, List[str]]:
        """Properties added, removed or modified since the baseline."""
        return summarize_schema_changes(self.baseline, self.current_schema())

    def can_submit(self) -> bool:
        if self.mode == EditorMode.FORM:
            return len(self._fields) > 0
        return bool(self.json_text.strip())

    def _build_schema(self) -> Dict[str, Any]:
        """Schema for submission; the editor content has already been validated."""
        if self.mode == EditorMode.FORM:
            return encode_fields(self._fields)
        return json.loads(self.json_text)

    def submit(self, submit: Optional[SubmitCallback] = None) -> SubmissionResult:
        """
        Validate the editor content and hand it to the persistence boundary.

        Args:
            submit: Persistence callback; defaults to the one given at construction

        Returns:
            SubmissionResult; INVALID for local validation failures, REJECTED
            when the persistence boundary fails, ACCEPTED otherwise
        """
        submit = submit or self._submit
        if submit is None:
            raise ValueError("No persistence callback configured")

        errors = validate_event_type_name(self.event_type)
        if not errors:
            if self.mode == EditorMode.FORM:
                errors = validate_field_list(self._fields)
            else:
                errors = validate_raw_schema(self.json_text)

        if errors:
            self.errors = errors[:1]
            logger.info(f"Submission blocked: {errors[0]}")
            return SubmissionResult(SubmissionStatus.INVALID, self.event_type, errors=errors)

        schema = self._build_schema()
        event_type = self.event_type.lower() if self.lowercase_event_type else self.event_type

        try:
            accepted = submit(event_type, schema)
        except Exception as e:
            logger.error(f"Persistence failed for '{event_type}': {e}", exc_info=True)
            self.errors = [str(e) or "An unexpected error occurred"]
            return SubmissionResult(SubmissionStatus.REJECTED, event_type, schema, list(self.errors))

        if not accepted:
            self.errors = ["Failed to create schema. Please try again."]
            logger.warning(f"Persistence boundary rejected schema for '{event_type}'")
            return SubmissionResult(SubmissionStatus.REJECTED, event_type, schema, list(self.errors))

        self.baseline = copy.deepcopy(schema)
        self.errors = []
        logger.info(f"Submitted schema for '{event_type}' with {len(schema['properties'])} properties")
        return SubmissionResult(SubmissionStatus.ACCEPTED, event_type, schema)
