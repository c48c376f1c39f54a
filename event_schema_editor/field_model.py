"""
Field model for the event schema editor.
Defines the UI-facing representation of one JSON Schema property.
"""

import uuid
import logging
from enum import Enum
from typing import Dict, Any, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

logger = logging.getLogger(__name__)

# Pattern used for phone fields (E.164 style)
PHONE_PATTERN = r"^\+?[1-9]\d{1,14}$"

Number = Union[int, float]


class FieldType(str, Enum):
    """Closed set of UI field kinds."""
    STRING = "string"
    ENUM = "enum"
    EMAIL = "email"
    NUMBER = "number"
    INTEGER = "integer"
    BOOLEAN = "boolean"
    DATE = "date"
    DATETIME = "datetime"
    PHONE = "phone"
    URL = "url"


FIELD_TYPE_LABELS: Dict[FieldType, str] = {
    FieldType.STRING: "Text",
    FieldType.ENUM: "Dropdown/Enum",
    FieldType.EMAIL: "Email",
    FieldType.NUMBER: "Number",
    FieldType.INTEGER: "Integer",
    FieldType.BOOLEAN: "True/False",
    FieldType.DATE: "Date",
    FieldType.DATETIME: "Date & Time",
    FieldType.PHONE: "Phone",
    FieldType.URL: "URL",
}

# Suggested custom formats for plain text fields
STRING_FORMATS: Dict[str, str] = {
    "email": "Email",
    "uri": "URL",
    "date": "Date",
    "date-time": "Date & Time",
    "phone": "Phone",
}

NUMERIC_TYPES = (FieldType.NUMBER, FieldType.INTEGER)


def new_field_id() -> str:
    """Generate an opaque identity for a field in the current editing session."""
    return uuid.uuid4().hex


def parse_field_type(value: str) -> Optional[FieldType]:
    """
    Map a stored type string to a known field kind.

    Args:
        value: Type string held by a field

    Returns:
        Matching FieldType, or None for pass-through kinds such as 'array'
    """
    try:
        return FieldType(value)
    except ValueError:
        return None


class SchemaField(BaseModel):
    """
    One entry of the editor's field list.

    The `type` attribute holds a FieldType value. Other strings only appear
    when a hand-written schema declares a type the editor has no kind for;
    such fields are carried through as a bare type.
    """

    model_config = ConfigDict(validate_assignment=True)

    id: str = Field(default_factory=new_field_id)
    name: str = ""
    type: str = FieldType.STRING.value
    required: bool = False
    description: str = ""
    enum: Optional[List[str]] = None
    minimum: Optional[Number] = None
    maximum: Optional[Number] = None
    format: Optional[str] = None
    pattern: Optional[str] = None

    @field_validator("type", mode="before")
    @classmethod
    def _unwrap_field_type(cls, value: Any) -> Any:
        if isinstance(value, FieldType):
            return value.value
        return value

    @field_validator("description", mode="before")
    @classmethod
    def _none_description(cls, value: Any) -> Any:
        return "" if value is None else value

    @property
    def kind(self) -> Optional[FieldType]:
        """Known field kind, or None for a pass-through type."""
        return parse_field_type(self.type)

    @property
    def is_numeric(self) -> bool:
        return self.kind in NUMERIC_TYPES

    def normalized(self) -> "SchemaField":
        """
        Return a copy holding only the attributes its type encodes.

        Attributes left behind after the type was changed in the editor
        (e.g. a pattern on what is now a number field) are dropped, blank
        enum values are removed and empty format/pattern strings become absent.
        """
        kind = self.kind
        updates: Dict[str, Any] = {
            'enum': None,
            'minimum': None,
            'maximum': None,
            'format': None,
            'pattern': None,
        }

        if kind == FieldType.ENUM:
            values = [value for value in (self.enum or []) if value.strip()]
            updates['enum'] = values or None
        elif kind in NUMERIC_TYPES:
            updates['minimum'] = self.minimum
            updates['maximum'] = self.maximum
        elif kind == FieldType.STRING:
            updates['format'] = self.format or None
            updates['pattern'] = self.pattern or None

        return self.model_copy(update=updates)

    def comparable(self) -> Dict[str, Any]:
        """Field content without its session identity."""
        return self.model_dump(exclude={'id'})


def describe_constraints(field: SchemaField) -> List[str]:
    """
    Build the short constraint badges shown next to a field in the list.

    Args:
        field: Field to describe

    Returns:
        List of badge strings, empty when the field has no constraints
    """
    badges = []

    if field.enum:
        badges.append(f"{len(field.enum)} options")

    if field.minimum is not None and field.maximum is not None:
        badges.append(f"{field.minimum}-{field.maximum}")
    elif field.minimum is not None:
        badges.append(f"≥ {field.minimum}")
    elif field.maximum is not None:
        badges.append(f"≤ {field.maximum}")

    if field.format:
        badges.append(field.format)

    if field.pattern:
        badges.append("Regex pattern")

    return badges


def field_type_label(field_type: str) -> str:
    """Human readable label for a field type, falling back to the raw type."""
    kind = parse_field_type(field_type)
    if kind is None:
        return field_type
    return FIELD_TYPE_LABELS[kind]
