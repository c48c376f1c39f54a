"""
Custom exception classes for the event schema editor.

This module provides the error taxonomy shared by the codec, the editor
controller, the schema store and the configuration loader.
"""

import logging
from typing import Optional, Dict, Any, List
from pathlib import Path

logger = logging.getLogger(__name__)


class SchemaEditorError(Exception):
    """
    Base exception for schema editor errors.

    Attributes:
        message: Error message
        context: Additional context information
        recovery_suggestions: List of suggested recovery actions
    """

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None,
                 recovery_suggestions: Optional[List[str]] = None):
        self.message = message
        self.context = context or {}
        self.recovery_suggestions = recovery_suggestions or []
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message

    def get_full_details(self) -> Dict[str, Any]:
        """Get complete error details including context and suggestions."""
        return {
            'error_type': self.__class__.__name__,
            'message': self.message,
            'context': self.context,
            'recovery_suggestions': self.recovery_suggestions
        }


class LocalValidationError(SchemaEditorError):
    """
    Exception raised when editor input fails a local validation rule.

    Always recoverable: the user fixes the input and retries the
    transition or submission that was blocked.
    """

    def __init__(self, errors: List[str], message: Optional[str] = None):
        self.errors = list(errors)

        if message is None:
            message = self.errors[0] if self.errors else "Validation failed"

        super().__init__(message, {'errors': self.errors},
                         ["Correct the reported fields and try again"])


class DuplicateFieldNameError(LocalValidationError):
    """Exception raised when two fields share the same property name."""

    def __init__(self, field_name: str):
        self.field_name = field_name
        super().__init__([f"Field name \"{field_name}\" is already in use"],
                         message=f"Duplicate field name: {field_name}")


class SchemaDecodeError(SchemaEditorError):
    """
    Exception raised when a JSON Schema document cannot be turned into fields.

    This covers unparsable JSON text and documents whose 'properties'
    member is missing or is not an object of objects.
    """

    def __init__(self, message: str, property_name: Optional[str] = None):
        self.property_name = property_name
        context = {'property_name': property_name} if property_name else {}

        recovery_suggestions = [
            "Make sure the document is valid JSON",
            "Make sure the document has a \"properties\" object",
            "Make sure every property is described by an object"
        ]

        super().__init__(message, context, recovery_suggestions)


class InvalidTransitionError(SchemaEditorError):
    """Exception raised when an editor operation is not legal in the current state."""

    def __init__(self, operation: str, mode: str, reason: Optional[str] = None):
        self.operation = operation
        self.mode = mode

        message = f"Cannot {operation} in {mode} mode"
        if reason:
            message = f"{message}: {reason}"

        super().__init__(message, {'operation': operation, 'mode': mode})


class PersistenceError(SchemaEditorError):
    """
    Exception raised when a finished schema cannot be persisted.

    The editor state is left untouched so the user can retry.
    """

    def __init__(self, event_type: str, original_error: Exception,
                 message: Optional[str] = None):
        self.event_type = event_type
        self.original_error = original_error

        if message is None:
            message = f"Failed to save schema for {event_type}: {str(original_error)}"

        context = {
            'event_type': event_type,
            'original_error_type': type(original_error).__name__,
            'original_error_message': str(original_error)
        }

        recovery_suggestions = [
            "Check that the schema storage location is writable",
            "Try submitting the schema again"
        ]

        super().__init__(message, context, recovery_suggestions)


class ConfigurationLoadError(SchemaEditorError):
    """
    Exception raised when configuration file loading fails.

    This includes YAML parsing errors, file not found, permission issues, etc.
    """

    def __init__(self, config_path: Path, original_error: Exception,
                 message: Optional[str] = None):
        self.config_path = config_path
        self.original_error = original_error

        if message is None:
            message = f"Failed to load configuration from {config_path}: {str(original_error)}"

        context = {
            'config_path': str(config_path),
            'original_error_type': type(original_error).__name__,
            'original_error_message': str(original_error)
        }

        recovery_suggestions = [
            "Check if config.yaml exists and is readable",
            "Verify YAML syntax is correct",
            "Application will use default configuration as fallback"
        ]

        super().__init__(message, context, recovery_suggestions)


def log_error_with_context(error: SchemaEditorError, operation: str) -> None:
    """
    Log error with full context information.

    Args:
        error: SchemaEditorError instance
        operation: Description of the operation that failed
    """
    logger.error(f"Schema editor error during {operation}")
    logger.error(f"Error type: {type(error).__name__}")
    logger.error(f"Error message: {error.message}")

    if error.context:
        logger.error("Error context:")
        for key, value in error.context.items():
            logger.error(f"  {key}: {value}")

    if error.recovery_suggestions:
        logger.info("Recovery suggestions:")
        for i, suggestion in enumerate(error.recovery_suggestions, 1):
            logger.info(f"  {i}. {suggestion}")
