"""
Validation rules for the event schema editor.

Every check is pure and returns a list of error messages; an empty list
means the input is acceptable. Callers decide whether a failure blocks a
mode switch or a submission.
"""

import re
import json
import logging
from typing import List, Optional, Sequence

from .field_model import SchemaField, FieldType, NUMERIC_TYPES

logger = logging.getLogger(__name__)

NAME_PATTERN = re.compile(r"[A-Za-z0-9_]+")


def validate_event_type_name(name: str) -> List[str]:
    """
    Validate the event type a schema is registered under.

    Args:
        name: Event type name entered by the user

    Returns:
        List of validation errors
    """
    if not name or not name.strip():
        return ["Event type is required"]
    if not NAME_PATTERN.fullmatch(name):
        return ["Event type must contain only alphanumeric characters and underscores"]
    return []


def validate_field_list(fields: Sequence[SchemaField]) -> List[str]:
    """
    Validate the field list before it is encoded for submission.

    Args:
        fields: Ordered field list held by the editor

    Returns:
        List of validation errors
    """
    errors = []

    if not fields:
        return ["Add at least one field to create a schema"]

    for field in fields:
        errors.extend(_validate_single_field_name(field.name))

    duplicates = find_duplicate_names(fields)
    if duplicates:
        errors.append(f"Field names must be unique (duplicated: {', '.join(duplicates)})")

    return errors


def _validate_single_field_name(field_name: str) -> List[str]:
    """Validate a single field name and return its validation errors."""
    if not field_name or not field_name.strip():
        return ["All field names are required"]
    if not NAME_PATTERN.fullmatch(field_name):
        return [f"Field name \"{field_name}\" must contain only alphanumeric characters and underscores"]
    return []


def find_duplicate_names(fields: Sequence[SchemaField]) -> List[str]:
    """
    Find property names used by more than one field (case-sensitive).

    Args:
        fields: Field list to inspect

    Returns:
        Duplicated names in order of first repetition
    """
    seen = set()
    duplicates: List[str] = []
    for field in fields:
        if field.name in seen and field.name not in duplicates:
            duplicates.append(field.name)
        seen.add(field.name)
    return duplicates


def validate_raw_schema(json_text: str, allow_empty: bool = False) -> List[str]:
    """
    Validate raw JSON Schema text typed into the JSON editor.

    Args:
        json_text: Text of the JSON editor buffer
        allow_empty: Accept a document whose 'properties' object has no keys

    Returns:
        List of validation errors
    """
    try:
        document = json.loads(json_text)
    except (TypeError, ValueError) as e:
        return [f"Invalid JSON: {str(e)}"]

    if not isinstance(document, dict) or not isinstance(document.get('properties'), dict):
        return ["JSON must have a \"properties\" object"]

    if not allow_empty and len(document['properties']) == 0:
        return ["Schema must have at least one property"]

    return []


def validate_regex_pattern(pattern: Optional[str]) -> Optional[str]:
    """
    Validate regex pattern with safe regex compilation testing.

    Args:
        pattern: Regular expression pattern to validate

    Returns:
        Error message if invalid, None if valid
    """
    if not pattern:
        return None

    try:
        re.compile(pattern)
        return None
    except re.error as e:
        return f"Invalid regex pattern: {str(e)}"


def validate_field(field: SchemaField) -> List[str]:
    """
    Check the constraints of a single field while it is being edited.

    These messages are advisory; they are shown next to the field editor
    but never block saving the field or submitting the schema.

    Args:
        field: Field being edited

    Returns:
        List of validation warnings
    """
    warnings = []
    label = field.name or "(unnamed)"
    kind = field.kind

    if kind in NUMERIC_TYPES:
        if field.minimum is not None and field.maximum is not None and field.minimum > field.maximum:
            warnings.append(f"Field '{label}' minimum cannot be greater than maximum")

    elif kind == FieldType.ENUM:
        values = [value for value in (field.enum or []) if value.strip()]
        if not values:
            warnings.append(f"Field '{label}' of type 'enum' should have at least one value")
        elif len(values) != len(set(values)):
            warnings.append(f"Field '{label}' enum values contain duplicates")

    elif kind == FieldType.STRING:
        pattern_error = validate_regex_pattern(field.pattern)
        if pattern_error:
            warnings.append(f"Field '{label}' has {pattern_error}")

    return warnings
