"""
Main Streamlit application for the event schema editor.
Builds JSON Schemas for event types with a form builder or a raw JSON editor.
"""

import streamlit as st
import logging
from pathlib import Path

from event_schema_editor.config_loader import load_config, get_config_value
from event_schema_editor.schema_editor_view import SchemaEditorView
from event_schema_editor.session_manager import SessionManager


def get_logging_level(level_str):
    """Map string logging level to logging constant."""
    level_map = {
        'DEBUG': logging.DEBUG,
        'INFO': logging.INFO,
        'WARNING': logging.WARNING,
        'ERROR': logging.ERROR,
        'CRITICAL': logging.CRITICAL
    }
    return level_map.get(str(level_str).upper(), logging.INFO)


def configure_logging(config):
    """Configure root logging from the 'logging.level' setting."""
    log_level_str = get_config_value(config, 'logging', 'level', 'INFO')
    logging.basicConfig(level=get_logging_level(log_level_str))
    logger = logging.getLogger(__name__)
    logger.info(f"Logging configured to level: {log_level_str}")
    return logger


def main():
    """Main application entry point."""
    config = load_config(Path("config.yaml"), use_cache=True)
    logger = configure_logging(config)

    app_name = get_config_value(config, 'app', 'name', 'Event Schema Editor')
    st.set_page_config(page_title=app_name, page_icon="🧩", layout="wide")

    SessionManager.initialize(config)
    logger.debug(f"Session info: {SessionManager.get_session_info()}")

    st.title(f"🧩 {app_name}")
    st.caption(f"Version {get_config_value(config, 'app', 'version', 'Unknown')}")

    SchemaEditorView.render()


if __name__ == "__main__":
    main()
