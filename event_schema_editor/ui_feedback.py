"""
UI feedback utilities for the event schema editor.
Provides toast-first notifications and validation message rendering.
"""

import streamlit as st
from typing import List, Optional
import logging

logger = logging.getLogger(__name__)


class Notify:
    """
    Toast-first notification helper.
    Prefers st.toast for non-blocking notifications when available and falls
    back to the inline st.success/info/warning/error elements.

    Usage:
    Notify.success("Schema saved")
    Notify.error("Something went wrong.")
    """

    ICONS = {
        'success': '✅',
        'info': 'ℹ️',
        'warning': '⚠️',
        'error': '❌'
    }

    @staticmethod
    def _display_notification(message: str, notification_type: str = 'info') -> None:
        """Internal method to display notification based on type."""
        icon = Notify.ICONS.get(notification_type, 'ℹ️')

        if hasattr(st, 'toast'):
            try:
                st.toast(message, icon=icon)
                return
            except Exception as e:
                logger.error(f"Error using st.toast: {e}", exc_info=True)

        full_message = f"{icon} {message}"
        if notification_type == 'success':
            st.success(full_message)
        elif notification_type == 'warning':
            st.warning(full_message)
        elif notification_type == 'error':
            st.error(full_message)
        else:
            st.info(full_message)

    @staticmethod
    def success(message: str) -> None:
        """Show success notification."""
        Notify._display_notification(message, 'success')

    @staticmethod
    def info(message: str) -> None:
        """Show info notification."""
        Notify._display_notification(message, 'info')

    @staticmethod
    def warn(message: str) -> None:
        """Show warning notification."""
        Notify._display_notification(message, 'warning')

    @staticmethod
    def error(message: str) -> None:
        """Show error notification."""
        Notify._display_notification(message, 'error')


def show_validation_results(errors: List[str], warnings: Optional[List[str]] = None):
    """Render validation errors and warnings inline."""
    for error in errors:
        st.error(f"❌ {error}")

    for warning in warnings or []:
        st.warning(f"⚠️ {warning}")
