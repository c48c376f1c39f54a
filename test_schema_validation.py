"""
Unit tests for schema_validation module.
"""

import pytest

from event_schema_editor.field_model import SchemaField
from event_schema_editor.schema_validation import (
    find_duplicate_names,
    validate_event_type_name,
    validate_field,
    validate_field_list,
    validate_raw_schema,
    validate_regex_pattern,
)


class TestValidateEventTypeName:
    """Test cases for event type name validation."""

    @pytest.mark.parametrize("name", ["order_placed", "OrderPlaced", "v2_event", "_", "123"])
    def test_valid_names(self, name):
        assert validate_event_type_name(name) == []

    @pytest.mark.parametrize("name", ["", "   "])
    def test_blank_name(self, name):
        assert validate_event_type_name(name) == ["Event type is required"]

    def test_name_with_space(self):
        """An event type containing a space is refused."""
        errors = validate_event_type_name("order placed")

        assert errors == ["Event type must contain only alphanumeric characters and underscores"]

    @pytest.mark.parametrize("name", ["order-placed", "order.placed", "café", "a/b"])
    def test_other_invalid_characters(self, name):
        assert len(validate_event_type_name(name)) == 1

    @pytest.mark.parametrize("name", ["order_placed\n", "order_placed\r\n", "\norder_placed"])
    def test_surrounding_newline_rejected(self, name):
        assert validate_event_type_name(name) == ["Event type must contain only alphanumeric characters and underscores"]


class TestValidateFieldList:
    """Test cases for field list validation."""

    def test_valid_list(self):
        fields = [SchemaField(name="email", type="email"), SchemaField(name="amount", type="number")]

        assert validate_field_list(fields) == []

    def test_empty_list(self):
        assert validate_field_list([]) == ["Add at least one field to create a schema"]

    def test_blank_name(self):
        fields = [SchemaField(name="email"), SchemaField(name="")]

        assert validate_field_list(fields) == ["All field names are required"]

    def test_invalid_name(self):
        errors = validate_field_list([SchemaField(name="first name")])

        assert errors == ['Field name "first name" must contain only alphanumeric characters and underscores']

    def test_duplicate_names(self):
        fields = [SchemaField(name="a"), SchemaField(name="b"), SchemaField(name="a")]

        assert validate_field_list(fields) == ["Field names must be unique (duplicated: a)"]

    def test_trailing_newline_in_name(self):
        errors = validate_field_list([SchemaField(name="amount\n")])

        assert errors == ['Field name "amount\n" must contain only alphanumeric characters and underscores']

    def test_names_are_case_sensitive(self):
        assert validate_field_list([SchemaField(name="Email"), SchemaField(name="email")]) == []

    def test_collects_every_problem(self):
        fields = [SchemaField(name=""), SchemaField(name="bad name"), SchemaField(name="x"), SchemaField(name="x")]

        errors = validate_field_list(fields)

        assert len(errors) == 3
        assert errors[0] == "All field names are required"


class TestFindDuplicateNames:
    """Test cases for find_duplicate_names."""

    def test_no_duplicates(self):
        assert find_duplicate_names([SchemaField(name="a"), SchemaField(name="b")]) == []

    def test_reports_each_name_once(self):
        fields = [SchemaField(name=n) for n in ["b", "a", "b", "a", "b"]]

        assert find_duplicate_names(fields) == ["b", "a"]


class TestValidateRawSchema:
    """Test cases for JSON editor buffer validation."""

    def test_valid_schema(self):
        text = '{"type": "object", "properties": {"email": {"type": "string"}}}'

        assert validate_raw_schema(text) == []

    def test_invalid_json(self):
        errors = validate_raw_schema('{"type": "object"')

        assert len(errors) == 1
        assert errors[0].startswith("Invalid JSON:")

    def test_empty_buffer(self):
        assert validate_raw_schema("")[0].startswith("Invalid JSON:")

    @pytest.mark.parametrize("text", [
        '{"type": "object"}',
        '{"properties": []}',
        '["properties"]',
        '"properties"',
    ])
    def test_missing_properties_object(self, text):
        assert validate_raw_schema(text) == ['JSON must have a "properties" object']

    def test_empty_properties(self):
        errors = validate_raw_schema('{"type": "object", "properties": {}}')

        assert errors == ["Schema must have at least one property"]

    def test_empty_properties_allowed(self):
        assert validate_raw_schema('{"properties": {}}', allow_empty=True) == []


class TestValidateRegexPattern:
    """Test cases for regex pattern checking."""

    def test_empty_pattern(self):
        assert validate_regex_pattern(None) is None
        assert validate_regex_pattern("") is None

    def test_valid_pattern(self):
        assert validate_regex_pattern(r"^[A-Z]{3}-\d{4}$") is None

    def test_invalid_pattern(self):
        assert validate_regex_pattern("[unclosed").startswith("Invalid regex pattern:")


class TestValidateField:
    """Test cases for the advisory per-field warnings."""

    def test_clean_field(self):
        assert validate_field(SchemaField(name="qty", type="integer", minimum=1, maximum=5)) == []

    def test_minimum_above_maximum(self):
        field = SchemaField(name="qty", type="number", minimum=10, maximum=1)

        assert validate_field(field) == ["Field 'qty' minimum cannot be greater than maximum"]

    def test_enum_without_values(self):
        field = SchemaField(name="status", type="enum", enum=["", " "])

        assert validate_field(field) == ["Field 'status' of type 'enum' should have at least one value"]

    def test_enum_duplicates(self):
        field = SchemaField(name="status", type="enum", enum=["a", "a"])

        assert validate_field(field) == ["Field 'status' enum values contain duplicates"]

    def test_invalid_pattern(self):
        field = SchemaField(name="code", type="string", pattern="(")

        warnings = validate_field(field)

        assert len(warnings) == 1
        assert warnings[0].startswith("Field 'code' has Invalid regex pattern:")

    def test_unnamed_field(self):
        field = SchemaField(type="enum")

        assert validate_field(field) == ["Field '(unnamed)' of type 'enum' should have at least one value"]

    def test_constraints_of_other_kinds_ignored(self):
        field = SchemaField(name="email", type="email", minimum=10, maximum=1, pattern="(")

        assert validate_field(field) == []
