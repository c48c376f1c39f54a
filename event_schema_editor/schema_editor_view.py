"""
Schema Editor View for the event schema editor.
Provides the Streamlit page for building an event schema either field by
field or as raw JSON, backed by the session's EditorController.
"""

import streamlit as st
import logging

from .diff_utils import format_change_summary, has_schema_changes
from .editor_controller import EditorController, EditorMode, FieldEditorSession, SubmissionStatus
from .exceptions import SchemaEditorError, log_error_with_context
from .field_model import (
    FieldType,
    STRING_FORMATS,
    describe_constraints,
    field_type_label,
)
from .schema_encoder import render_schema_json
from .schema_validation import validate_event_type_name
from .session_manager import SessionManager
from .ui_feedback import Notify, show_validation_results

logger = logging.getLogger(__name__)

JSON_PLACEHOLDER = """{
  "type": "object",
  "properties": {
    "email": {
      "type": "string",
      "format": "email"
    }
  },
  "required": ["email"]
}"""


class SchemaEditorView:
    """Renders the schema editor page."""

    @staticmethod
    def render() -> None:
        """Main entry point for rendering the schema editor."""
        try:
            controller = SessionManager.get_controller()

            SchemaEditorView._render_sidebar()
            SchemaEditorView._render_header(controller)
            SchemaEditorView._render_mode_toggle(controller)

            SchemaEditorView._render_event_type_input(controller)

            if controller.mode == EditorMode.FORM:
                SchemaEditorView._render_field_list(controller)
                if controller.session is not None:
                    SchemaEditorView._render_field_editor(controller, controller.session)
            else:
                SchemaEditorView._render_json_editor(controller)

            if controller.errors:
                show_validation_results(controller.errors)

            SchemaEditorView._render_preview(controller)
            SchemaEditorView._render_submit(controller)

        except SchemaEditorError as e:
            log_error_with_context(e, "rendering schema editor")
            st.error(f"❌ **Schema Editor Error:** {e.message}")
            for suggestion in e.recovery_suggestions:
                st.info(f"• {suggestion}")

        except Exception as e:
            logger.error(f"Unexpected error in Schema Editor: {e}", exc_info=True)
            Notify.error("Unexpected Error in Schema Editor")
            st.error("❌ **Unexpected Error**")
            st.error(f"**Technical Details:** {str(e)}")
            st.info("• Refresh the page to restart the Schema Editor")

    @staticmethod
    def _render_sidebar() -> None:
        """Render stored event types with load / new actions."""
        store = SessionManager.get_store()
        with st.sidebar:
            st.header("📚 Event Schemas")

            if st.button("➕ New Schema", key="new_schema_btn"):
                SessionManager.new_schema()
                st.rerun()

            event_types = store.list_event_types()
            if not event_types:
                st.caption("No schemas saved yet.")
                return

            selected = st.selectbox("Stored event types", options=event_types, key="stored_event_type")
            versions = store.list_versions(selected)
            st.caption(f"{len(versions)} version(s), active v{versions[-1]}")

            if st.button("📂 Load Active Schema", key="load_schema_btn"):
                if SessionManager.load_event_type(selected):
                    Notify.success(f"Loaded schema for {selected}")
                    st.rerun()
                else:
                    Notify.error(f"Could not load schema for {selected}")

    @staticmethod
    def _render_header(controller: EditorController) -> None:
        loaded = SessionManager.get_loaded_event_type()
        st.header(f"✏️ Edit Event Schema: {loaded}" if loaded else "🆕 Create Event Schema")

        changes = controller.pending_changes()
        if loaded and has_schema_changes(changes):
            with st.expander("📝 Unsaved changes", expanded=False):
                st.markdown(format_change_summary(changes))

    @staticmethod
    def _render_mode_toggle(controller: EditorController) -> None:
        col1, col2 = st.columns(2)
        with col1:
            if st.button("📝 Form Builder", key="form_mode_btn",
                         disabled=controller.mode == EditorMode.FORM):
                SchemaEditorView._handle_mode_switch(controller, EditorMode.FORM)
        with col2:
            if st.button("{ } JSON Editor", key="json_mode_btn",
                         disabled=controller.mode == EditorMode.JSON):
                SchemaEditorView._handle_mode_switch(controller, EditorMode.JSON)

    @staticmethod
    def _handle_mode_switch(controller: EditorController, target: EditorMode) -> bool:
        """
        Switch the editor to the target mode.

        Returns:
            True if the mode changed
        """
        if target == EditorMode.JSON:
            controller.switch_to_json()
            st.session_state.json_editor_revision = st.session_state.get('json_editor_revision', 0) + 1
            st.rerun()
            return True

        if controller.switch_to_form():
            Notify.success(f"Loaded {len(controller.fields)} fields from JSON")
            st.rerun()
            return True

        Notify.error("Fix the JSON before switching to the form builder")
        return False

    @staticmethod
    def _render_event_type_input(controller: EditorController) -> None:
        revision = SessionManager.get_editor_revision()
        event_type = st.text_input(
            "Event Type",
            value=controller.event_type,
            key=f"event_type_input_{revision}",
            placeholder="e.g. order_placed",
            help="Letters, digits and underscores only; stored in lower case"
        )
        controller.set_event_type(event_type)

        if event_type:
            show_validation_results(validate_event_type_name(event_type))

    @staticmethod
    def _render_field_list(controller: EditorController) -> None:
        """Render the committed fields with edit / remove actions."""
        st.subheader("🏷️ Schema Fields")
        read_only = controller.session is not None

        if st.button("➕ Add Field", type="primary", key="add_field_btn", disabled=read_only):
            controller.start_adding_field()
            st.rerun()

        fields = controller.fields
        if not fields:
            st.info("No fields defined yet. Click 'Add Field' to get started.")
            return

        for field in fields:
            col1, col2, col3 = st.columns([6, 1, 1])
            with col1:
                required_indicator = " 🔴" if field.required else ""
                st.markdown(f"**{field.name}** ({field_type_label(field.type)}){required_indicator}")
                badges = describe_constraints(field)
                if field.description or badges:
                    st.caption(" · ".join([field.description] + badges if field.description else badges))
            with col2:
                if st.button("✏️", key=f"edit_{field.id}", help="Edit field", disabled=read_only):
                    controller.start_editing_field(field.id)
                    st.rerun()
            with col3:
                if st.button("🗑️", key=f"remove_{field.id}", help="Remove field", disabled=read_only):
                    controller.remove_field(field.id)
                    Notify.info(f"Removed field: {field.name}")
                    st.rerun()

    @staticmethod
    def _render_field_editor(controller: EditorController, session: FieldEditorSession) -> None:
        """Render inputs for the field being added or edited."""
        field = session.field
        key = field.id

        with st.container(border=True):
            st.subheader(session.title)

            name = st.text_input("Field Name", value=field.name, key=f"field_name_{key}",
                                 placeholder="e.g. customer_email")

            type_options = [kind.value for kind in FieldType]
            if field.type not in type_options:
                type_options.append(field.type)
            field_type = st.selectbox(
                "Field Type",
                options=type_options,
                index=type_options.index(field.type),
                format_func=field_type_label,
                key=f"field_type_{key}"
            )

            description = st.text_input("Description", value=field.description, key=f"field_desc_{key}")
            required = st.checkbox("Required", value=field.required, key=f"field_required_{key}")

            session.update(name=name, type=field_type, description=description, required=required)
            SchemaEditorView._render_type_specific_inputs(session)

            warnings = session.warnings()
            if warnings:
                show_validation_results([], warnings)

            col1, col2 = st.columns(2)
            with col1:
                if st.button("💾 Save Field", type="primary", key=f"save_field_{key}"):
                    SchemaEditorView._handle_save_field(controller)
            with col2:
                if st.button("✖️ Cancel", key=f"cancel_field_{key}"):
                    controller.cancel_field_edit()
                    st.rerun()

    @staticmethod
    def _render_type_specific_inputs(session: FieldEditorSession) -> None:
        field = session.field
        key = field.id
        kind = field.kind

        if kind == FieldType.ENUM:
            enum_text = st.text_area(
                "Enum Values",
                value='\n'.join(field.enum or []),
                key=f"field_enum_{key}",
                help="Enter each value on a separate line",
                height=120
            )
            session.update(enum=[value.strip() for value in enum_text.split('\n') if value.strip()])

        elif kind in (FieldType.NUMBER, FieldType.INTEGER):
            col1, col2 = st.columns(2)
            with col1:
                minimum = st.text_input("Minimum", value=_number_text(field.minimum), key=f"field_min_{key}")
            with col2:
                maximum = st.text_input("Maximum", value=_number_text(field.maximum), key=f"field_max_{key}")
            session.update(minimum=_parse_number(minimum), maximum=_parse_number(maximum))

        elif kind == FieldType.STRING:
            format_options = [""] + list(STRING_FORMATS)
            if field.format and field.format not in format_options:
                format_options.append(field.format)
            string_format = st.selectbox(
                "Format (Optional)",
                options=format_options,
                index=format_options.index(field.format or ""),
                format_func=lambda value: STRING_FORMATS.get(value, value) if value else "None",
                key=f"field_format_{key}"
            )
            pattern = st.text_input("Pattern (Regex, Optional)", value=field.pattern or "",
                                    key=f"field_pattern_{key}", placeholder="^[A-Z]{3}-\\d{4}$")
            session.update(format=string_format or None, pattern=pattern or None)

    @staticmethod
    def _handle_save_field(controller: EditorController) -> bool:
        """Commit the open field session."""
        name = controller.session.field.name if controller.session else ""
        if controller.save_field():
            Notify.success(f"Saved field: {name}")
            st.rerun()
            return True

        Notify.error(controller.errors[0] if controller.errors else "Could not save field")
        return False

    @staticmethod
    def _render_json_editor(controller: EditorController) -> None:
        revision = st.session_state.get('json_editor_revision', 0)
        json_text = st.text_area(
            "JSON Schema",
            value=controller.json_text,
            key=f"json_editor_{revision}",
            placeholder=JSON_PLACEHOLDER,
            height=360
        )
        controller.set_json_text(json_text)

    @staticmethod
    def _render_preview(controller: EditorController) -> None:
        if controller.mode != EditorMode.FORM:
            return

        show_preview = st.toggle("👁️ Show JSON Preview", key="show_json_preview")
        if show_preview:
            st.code(render_schema_json(controller.current_schema(), indent=controller.json_indent),
                    language="json")

    @staticmethod
    def _render_submit(controller: EditorController) -> None:
        st.divider()
        if st.button("🚀 Create Schema", type="primary", key="submit_schema_btn",
                     disabled=not controller.can_submit()):
            SchemaEditorView._handle_submit(controller)

    @staticmethod
    def _handle_submit(controller: EditorController) -> bool:
        """Submit the schema and report the outcome."""
        result = controller.submit()

        if result.status == SubmissionStatus.ACCEPTED:
            Notify.success(f"Schema saved for {result.event_type}")
            return True

        if result.status == SubmissionStatus.INVALID:
            Notify.warn(result.message or "Schema is not valid")
        else:
            Notify.error(result.message or "Failed to create schema. Please try again.")
        return False


def _number_text(value) -> str:
    return "" if value is None else str(value)


def _parse_number(text: str):
    """Parse a numeric text input; blank or invalid input clears the bound."""
    text = (text or "").strip()
    if not text:
        return None
    try:
        return int(text)
    except ValueError:
        pass
    try:
        return float(text)
    except ValueError:
        logger.debug(f"Ignoring non-numeric bound input: {text!r}")
        return None
