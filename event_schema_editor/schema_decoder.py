"""
Decoder turning a JSON Schema document back into editor fields.

Several field kinds compile to the same underlying JSON Schema shape, so
the field kind is inferred with a fixed precedence:

1. ``enum`` present                      -> enum
2. ``format`` email / date / date-time / uri -> email / date / datetime / url
3. string with the exact phone pattern   -> phone
4. string                                -> string (custom format/pattern kept)
5. number / integer                      -> same kind (minimum/maximum kept)
6. any other declared type               -> passed through verbatim

Schemas that were not produced by the encoder decode on a best-effort
basis: a hand-written pattern identical to the phone pattern becomes a
phone field.
"""

import json
import logging
from typing import Dict, Any, List, Optional

from .exceptions import SchemaDecodeError
from .field_model import SchemaField, FieldType, PHONE_PATTERN, parse_field_type

logger = logging.getLogger(__name__)

# Checked in order, after the enum check
FORMAT_FIELD_TYPES = (
    ('email', FieldType.EMAIL),
    ('date', FieldType.DATE),
    ('date-time', FieldType.DATETIME),
    ('uri', FieldType.URL),
)


def _numeric_bound(property_name: str, key: str, value: Any) -> Optional[Any]:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        logger.warning(f"Ignoring non-numeric {key} {value!r} on property '{property_name}'")
        return None
    return value


def _read_required(schema: Dict[str, Any]) -> List[str]:
    required = schema.get('required', [])
    if not isinstance(required, list):
        logger.warning(f"Ignoring 'required' of type {type(required).__name__}; expected a list")
        return []
    return [name for name in required if isinstance(name, str)]


def decode_property(name: str, prop: Dict[str, Any], required: bool = False) -> SchemaField:
    """
    Decode one property schema into a field.

    Args:
        name: Property key
        prop: Property schema
        required: Whether the property is listed in the document's 'required'

    Returns:
        Decoded field with a fresh identity
    """
    description = prop.get('description') or ''
    field = SchemaField(
        name=name,
        required=required,
        description=description if isinstance(description, str) else str(description),
    )

    declared_type = prop.get('type')
    prop_format = prop.get('format')
    pattern = prop.get('pattern')

    if prop.get('enum') is not None:
        values = prop['enum'] if isinstance(prop['enum'], list) else [prop['enum']]
        field.type = FieldType.ENUM
        field.enum = [str(value) for value in values]
        return field

    for format_name, field_type in FORMAT_FIELD_TYPES:
        if prop_format == format_name:
            field.type = field_type
            return field

    if declared_type == 'string':
        if pattern == PHONE_PATTERN:
            field.type = FieldType.PHONE
            return field
        field.type = FieldType.STRING
        if prop_format:
            field.format = str(prop_format)
        if pattern:
            field.pattern = str(pattern)
        return field

    if declared_type in (FieldType.NUMBER.value, FieldType.INTEGER.value):
        field.type = declared_type
        field.minimum = _numeric_bound(name, 'minimum', prop.get('minimum'))
        field.maximum = _numeric_bound(name, 'maximum', prop.get('maximum'))
        return field

    if isinstance(declared_type, str) and declared_type:
        if parse_field_type(declared_type) is None:
            logger.debug(f"Property '{name}' has type '{declared_type}'; carrying bare type")
        field.type = declared_type
        return field

    logger.debug(f"Property '{name}' declares no usable type; treating as string")
    return field


def decode_schema(schema: Any) -> List[SchemaField]:
    """
    Decode a JSON Schema document into an ordered field list.

    Args:
        schema: Parsed JSON Schema document

    Returns:
        Fields in 'properties' order

    Raises:
        SchemaDecodeError: If 'properties' is missing or is not an object of objects
    """
    if not isinstance(schema, dict):
        raise SchemaDecodeError("Schema must be a JSON object")

    properties = schema.get('properties')
    if not isinstance(properties, dict):
        raise SchemaDecodeError("JSON must have a \"properties\" object")

    for name, prop in properties.items():
        if not isinstance(prop, dict):
            raise SchemaDecodeError(f"Property \"{name}\" must be an object", property_name=name)

    required = set(_read_required(schema))
    fields = [decode_property(name, prop, name in required) for name, prop in properties.items()]

    logger.debug(f"Decoded {len(fields)} fields from schema")
    return fields


def decode_schema_text(json_text: str) -> List[SchemaField]:
    """
    Parse JSON Schema text and decode it into fields.

    Raises:
        SchemaDecodeError: If the text is not valid JSON or not a decodable schema
    """
    try:
        schema = json.loads(json_text)
    except (TypeError, ValueError) as e:
        raise SchemaDecodeError(f"Invalid JSON: {str(e)}")
    return decode_schema(schema)
