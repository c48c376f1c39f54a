"""
Session state management for the event schema editor page.
Keeps one EditorController and the schema store per Streamlit session.
"""

import streamlit as st
from typing import Dict, Any, Optional
from datetime import datetime
import logging

from .config_loader import get_config_value
from .editor_controller import EditorController
from .exceptions import SchemaDecodeError
from .schema_store import FileSchemaStore

logger = logging.getLogger(__name__)

CONTROLLER_KEY = 'schema_editor_controller'
STORE_KEY = 'schema_store'


class SessionManager:
    """Manages Streamlit session state for the schema editor."""

    @staticmethod
    def initialize(config: Dict[str, Any]):
        """Initialize session state variables with default values."""
        defaults = {
            'config': config,
            CONTROLLER_KEY: None,
            STORE_KEY: None,
            'loaded_event_type': None,
            'editor_revision': 0,
            'show_json_preview': False,
            'session_id': None,
        }

        for key, default_value in defaults.items():
            if key not in st.session_state:
                st.session_state[key] = default_value

        if not st.session_state.session_id:
            st.session_state.session_id = f"session_{datetime.now().strftime('%Y%m%d_%H%M%S')}"

        logger.info(f"Session initialized: {st.session_state.session_id}")

    @staticmethod
    def get_config() -> Dict[str, Any]:
        return st.session_state.get('config') or {}

    @staticmethod
    def get_store() -> FileSchemaStore:
        """Get the schema store, creating it from configuration on first use."""
        store = st.session_state.get(STORE_KEY)
        if store is None:
            schemas_dir = get_config_value(SessionManager.get_config(), 'storage', 'schemas_dir', 'event_schemas')
            store = FileSchemaStore(schemas_dir)
            st.session_state[STORE_KEY] = store
        return store

    @staticmethod
    def _controller_options() -> Dict[str, Any]:
        config = SessionManager.get_config()
        return {
            'submit': SessionManager.get_store().submit,
            'json_indent': get_config_value(config, 'editor', 'json_indent', 2),
            'lowercase_event_type': get_config_value(config, 'editor', 'lowercase_event_type', True),
        }

    @staticmethod
    def get_controller() -> EditorController:
        """Get the editor controller, creating an empty one on first use."""
        controller = st.session_state.get(CONTROLLER_KEY)
        if controller is None:
            controller = EditorController(**SessionManager._controller_options())
            st.session_state[CONTROLLER_KEY] = controller
        return controller

    @staticmethod
    def new_schema():
        """Replace the editor with an empty one."""
        SessionManager._replace_controller(EditorController(**SessionManager._controller_options()), None)
        logger.info("Started a new schema")

    @staticmethod
    def load_event_type(event_type: str) -> bool:
        """
        Replace the editor with one editing the active schema of an event type.

        Returns:
            True if the schema was loaded
        """
        schema = SessionManager.get_store().load_active(event_type)
        if schema is None:
            logger.warning(f"No stored schema for {event_type}")
            return False

        try:
            controller = EditorController.from_schema(schema, event_type, **SessionManager._controller_options())
        except SchemaDecodeError as e:
            logger.error(f"Stored schema for {event_type} cannot be edited: {e.message}")
            return False

        SessionManager._replace_controller(controller, event_type)
        return True

    @staticmethod
    def get_loaded_event_type() -> Optional[str]:
        return st.session_state.get('loaded_event_type')

    @staticmethod
    def get_editor_revision() -> int:
        """Counter bumped whenever the editor is replaced; part of widget keys."""
        return st.session_state.get('editor_revision', 0)

    @staticmethod
    def _replace_controller(controller: EditorController, event_type: Optional[str]):
        st.session_state[CONTROLLER_KEY] = controller
        st.session_state.loaded_event_type = event_type
        st.session_state.editor_revision = SessionManager.get_editor_revision() + 1

    @staticmethod
    def get_session_info() -> Dict[str, Any]:
        """Get session information for debugging."""
        controller = st.session_state.get(CONTROLLER_KEY)
        return {
            'session_id': st.session_state.get('session_id', 'unknown'),
            'loaded_event_type': SessionManager.get_loaded_event_type(),
            'mode': controller.mode.value if controller else None,
            'field_count': len(controller.fields) if controller else 0,
            'field_session_open': bool(controller and controller.session),
        }
