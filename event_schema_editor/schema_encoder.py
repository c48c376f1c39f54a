"""
Encoder turning the editor's field list into a JSON Schema document.
"""

import json
import logging
from typing import Dict, Any, Callable, List, Sequence

from .exceptions import DuplicateFieldNameError
from .field_model import SchemaField, FieldType, PHONE_PATTERN
from .schema_validation import find_duplicate_names

logger = logging.getLogger(__name__)


def _encode_enum(field: SchemaField) -> Dict[str, Any]:
    fragment: Dict[str, Any] = {'type': 'string'}
    if field.enum:
        fragment['enum'] = list(field.enum)
    return fragment


def _encode_string(field: SchemaField) -> Dict[str, Any]:
    fragment: Dict[str, Any] = {'type': 'string'}
    if field.format:
        fragment['format'] = field.format
    if field.pattern:
        fragment['pattern'] = field.pattern
    return fragment


def _encode_numeric(field: SchemaField) -> Dict[str, Any]:
    fragment: Dict[str, Any] = {'type': field.type}
    if field.minimum is not None:
        fragment['minimum'] = field.minimum
    if field.maximum is not None:
        fragment['maximum'] = field.maximum
    return fragment


def _formatted_string(string_format: str) -> Callable[[SchemaField], Dict[str, Any]]:
    def encode(field: SchemaField) -> Dict[str, Any]:
        return {'type': 'string', 'format': string_format}
    return encode


def _encode_bare_type(field: SchemaField) -> Dict[str, Any]:
    return {'type': field.type}


FIELD_ENCODERS: Dict[FieldType, Callable[[SchemaField], Dict[str, Any]]] = {
    FieldType.STRING: _encode_string,
    FieldType.ENUM: _encode_enum,
    FieldType.EMAIL: _formatted_string('email'),
    FieldType.NUMBER: _encode_numeric,
    FieldType.INTEGER: _encode_numeric,
    FieldType.BOOLEAN: _encode_bare_type,
    FieldType.DATE: _formatted_string('date'),
    FieldType.DATETIME: _formatted_string('date-time'),
    FieldType.PHONE: lambda field: {'type': 'string', 'pattern': PHONE_PATTERN},
    FieldType.URL: _formatted_string('uri'),
}

_missing_encoders = set(FieldType) - set(FIELD_ENCODERS)
if _missing_encoders:
    raise RuntimeError(f"No schema encoder for field types: {sorted(t.value for t in _missing_encoders)}")


def encode_field(field: SchemaField) -> Dict[str, Any]:
    """
    Encode one field as a JSON Schema property.

    Args:
        field: Field to encode

    Returns:
        Property schema fragment
    """
    kind = field.kind
    if kind is None:
        fragment = _encode_bare_type(field)
    else:
        fragment = FIELD_ENCODERS[kind](field)

    if field.description:
        fragment['description'] = field.description

    return fragment


def encode_fields(fields: Sequence[SchemaField]) -> Dict[str, Any]:
    """
    Encode an ordered field list as a JSON Schema object document.

    Property and required-name order follow the field list so the JSON
    preview is stable.

    Args:
        fields: Ordered field list with unique names

    Returns:
        Document shaped {type: "object", properties: {...}, required?: [...]}

    Raises:
        DuplicateFieldNameError: If two fields share a name
    """
    duplicates = find_duplicate_names(fields)
    if duplicates:
        raise DuplicateFieldNameError(duplicates[0])

    properties: Dict[str, Any] = {}
    required: List[str] = []

    for field in fields:
        properties[field.name] = encode_field(field)
        if field.required:
            required.append(field.name)

    schema: Dict[str, Any] = {'type': 'object', 'properties': properties}
    if required:
        schema['required'] = required

    logger.debug(f"Encoded {len(properties)} fields ({len(required)} required)")
    return schema


def render_schema_json(schema: Dict[str, Any], indent: int = 2) -> str:
    """
    Pretty-print a schema document for the JSON editor and preview.

    Args:
        schema: Schema document
        indent: Indentation width

    Returns:
        JSON text
    """
    return json.dumps(schema, indent=indent, ensure_ascii=False)
