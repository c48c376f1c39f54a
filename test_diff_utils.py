"""
Unit tests for diff_utils module.
"""

import pytest

from event_schema_editor.diff_utils import (
    EMPTY_SCHEMA,
    calculate_schema_diff,
    summarize_schema_changes,
    has_schema_changes,
    format_change_summary,
)


@pytest.fixture
def baseline():
    return {
        "type": "object",
        "properties": {
            "email": {"type": "string", "format": "email"},
            "amount": {"type": "number", "minimum": 0},
            "status": {"type": "string", "enum": ["new", "paid"]},
        },
        "required": ["email"],
    }


def _copy(schema):
    return {
        **schema,
        "properties": {name: dict(prop) for name, prop in schema["properties"].items()},
        "required": list(schema.get("required", [])),
    }


class TestCalculateSchemaDiff:
    """Test class for the raw DeepDiff comparison."""

    def test_no_changes(self, baseline):
        assert not calculate_schema_diff(baseline, _copy(baseline))

    def test_none_treated_as_empty_schema(self):
        assert not calculate_schema_diff(None, EMPTY_SCHEMA)
        assert not calculate_schema_diff(None, None)

    def test_required_order_ignored(self, baseline):
        current = _copy(baseline)
        baseline["required"] = ["email", "amount"]
        current["required"] = ["amount", "email"]

        assert not calculate_schema_diff(baseline, current)


class TestSummarizeSchemaChanges:
    """Test class for per-property change summaries."""

    def test_no_changes(self, baseline):
        summary = summarize_schema_changes(baseline, _copy(baseline))

        assert summary == {"added": [], "removed": [], "modified": []}

    def test_property_added(self, baseline):
        current = _copy(baseline)
        current["properties"]["phone"] = {"type": "string"}

        assert summarize_schema_changes(baseline, current)["added"] == ["phone"]

    def test_property_removed(self, baseline):
        current = _copy(baseline)
        del current["properties"]["amount"]

        summary = summarize_schema_changes(baseline, current)

        assert summary["removed"] == ["amount"]
        assert summary["modified"] == []

    def test_property_type_changed(self, baseline):
        current = _copy(baseline)
        current["properties"]["amount"] = {"type": "integer", "minimum": 0}

        assert summarize_schema_changes(baseline, current)["modified"] == ["amount"]

    def test_constraint_added(self, baseline):
        current = _copy(baseline)
        current["properties"]["amount"]["maximum"] = 100

        assert summarize_schema_changes(baseline, current)["modified"] == ["amount"]

    def test_enum_value_added(self, baseline):
        current = _copy(baseline)
        current["properties"]["status"]["enum"] = ["new", "paid", "refunded"]

        assert summarize_schema_changes(baseline, current)["modified"] == ["status"]

    def test_required_flag_added(self, baseline):
        current = _copy(baseline)
        current["required"] = ["email", "amount"]

        assert summarize_schema_changes(baseline, current)["modified"] == ["amount"]

    def test_required_list_removed(self, baseline):
        current = _copy(baseline)
        del current["required"]

        assert summarize_schema_changes(baseline, current)["modified"] == ["email"]

    def test_added_property_not_reported_as_modified(self, baseline):
        current = _copy(baseline)
        current["properties"]["phone"] = {"type": "string"}
        current["required"] = ["email", "phone"]

        summary = summarize_schema_changes(baseline, current)

        assert summary["added"] == ["phone"]
        assert summary["modified"] == []

    def test_new_schema_reports_everything_added(self, baseline):
        summary = summarize_schema_changes(None, baseline)

        assert summary == {"added": ["amount", "email", "status"], "removed": [], "modified": []}

    def test_all_properties_removed(self, baseline):
        current = {"type": "object", "properties": {}}

        summary = summarize_schema_changes(baseline, current)

        assert summary == {"added": [], "removed": ["amount", "email", "status"], "modified": []}
        assert has_schema_changes(summary)

    def test_first_property_added_to_empty_schema(self):
        current = {"type": "object", "properties": {"sku": {"type": "string"}}}

        summary = summarize_schema_changes(EMPTY_SCHEMA, current)

        assert summary == {"added": ["sku"], "removed": [], "modified": []}

    def test_unparsable_current_schema(self, baseline):
        summary = summarize_schema_changes(baseline, None)

        assert summary["removed"] == ["amount", "email", "status"]

    def test_names_sorted(self, baseline):
        current = _copy(baseline)
        current["properties"]["zeta"] = {"type": "string"}
        current["properties"]["alpha"] = {"type": "string"}

        assert summarize_schema_changes(baseline, current)["added"] == ["alpha", "zeta"]

    def test_top_level_keys_ignored(self, baseline):
        current = _copy(baseline)
        current["title"] = "Order placed"

        summary = summarize_schema_changes(baseline, current)

        assert not has_schema_changes(summary)


class TestHasSchemaChanges:
    """Test class for has_schema_changes."""

    def test_empty_summary(self):
        assert has_schema_changes({"added": [], "removed": [], "modified": []}) is False

    def test_missing_keys(self):
        assert has_schema_changes({}) is False

    @pytest.mark.parametrize("key", ["added", "removed", "modified"])
    def test_any_change(self, key):
        assert has_schema_changes({key: ["email"]}) is True


class TestFormatChangeSummary:
    """Test class for the Streamlit change summary."""

    def test_no_changes(self):
        assert format_change_summary({"added": [], "removed": [], "modified": []}) == "✅ **No changes detected**"

    def test_with_changes(self):
        summary = {"added": ["phone", "sku"], "removed": [], "modified": ["email"]}

        text = format_change_summary(summary)

        assert text == "➕ **Added:** phone, sku\n\n✏️ **Modified:** email"

    def test_removed(self):
        assert format_change_summary({"removed": ["amount"]}) == "➖ **Removed:** amount"
