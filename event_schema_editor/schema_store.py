"""
File-backed schema store for the event schema editor.

Each accepted submission is written as a new numbered version:

    <root>/<event_type>/v<N>.yaml

containing the event type, the version number, a creation timestamp and
the JSON Schema document. The highest version is the active schema.
"""

import os
import re
import logging
import yaml
from datetime import datetime
from pathlib import Path
from typing import Dict, Any, List, Optional, Tuple, Union

from .exceptions import PersistenceError

logger = logging.getLogger(__name__)

VERSION_FILE_PATTERN = re.compile(r"^v(\d+)\.yaml$")


class FileSchemaStore:
    """Persists finished event schemas as versioned YAML files."""

    def __init__(self, root: Union[str, Path]):
        self.root = Path(root)
        self.last_error: Optional[str] = None

    def submit(self, event_type: str, schema: Dict[str, Any]) -> bool:
        """
        Persist a finished schema as the next version of an event type.

        Args:
            event_type: Event type name (already validated)
            schema: JSON Schema document

        Returns:
            True if the schema was stored, False otherwise (see last_error)
        """
        success, error_msg = self.save_event_schema(event_type, schema)
        self.last_error = error_msg
        return success

    def save_event_schema(self, event_type: str, schema: Dict[str, Any]) -> Tuple[bool, Optional[str]]:
        """
        Save a schema as a new version with atomic file replacement.

        Args:
            event_type: Event type name
            schema: JSON Schema document

        Returns:
            Tuple of (success: bool, error_message: Optional[str])
        """
        if not isinstance(schema, dict):
            error_msg = "Schema data must be a dictionary"
            logger.error(f"Save failed for {event_type}: {error_msg}")
            return False, error_msg

        try:
            path = self._write_version(event_type, schema)
        except PersistenceError as e:
            logger.error(f"Save failed for {event_type}: {e.message}")
            return False, e.message

        logger.info(f"Successfully saved schema for {event_type}: {path}")
        return True, None

    def _write_version(self, event_type: str, schema: Dict[str, Any]) -> Path:
        event_dir = self.root / event_type
        try:
            event_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise PersistenceError(event_type, e, f"Cannot create directory {event_dir}: {str(e)}")

        version = self._latest_version_number(event_type) + 1
        target_path = event_dir / f"v{version}.yaml"
        temp_path = target_path.with_suffix(".yaml.tmp")

        document = {
            'event_type': event_type,
            'version': version,
            'created_at': datetime.now().isoformat(timespec='seconds'),
            'schema': schema,
        }

        try:
            with open(temp_path, 'w', encoding='utf-8') as f:
                yaml.safe_dump(
                    document,
                    f,
                    default_flow_style=False,
                    indent=2,
                    sort_keys=False,
                    allow_unicode=True
                )
            # Atomic move from temp to final location
            os.replace(temp_path, target_path)
            return target_path
        except (OSError, yaml.YAMLError) as e:
            raise PersistenceError(event_type, e)
        finally:
            if temp_path.exists():
                try:
                    temp_path.unlink()
                except OSError as e:
                    logger.warning(f"Could not remove temp file {temp_path}: {e}")

    def list_event_types(self) -> List[str]:
        """
        List event types that have at least one stored version.

        Returns:
            Sorted event type names
        """
        if not self.root.is_dir():
            return []

        try:
            return sorted(
                entry.name for entry in self.root.iterdir()
                if entry.is_dir() and self.list_versions(entry.name)
            )
        except OSError as e:
            logger.error(f"Error scanning schema store {self.root}: {e}")
            return []

    def list_versions(self, event_type: str) -> List[int]:
        """
        List stored version numbers of an event type.

        Returns:
            Ascending version numbers
        """
        event_dir = self.root / event_type
        if not event_dir.is_dir():
            return []

        versions = []
        try:
            for entry in event_dir.iterdir():
                match = VERSION_FILE_PATTERN.match(entry.name)
                if match:
                    versions.append(int(match.group(1)))
        except OSError as e:
            logger.error(f"Error scanning versions of {event_type}: {e}")
            return []

        return sorted(versions)

    def _latest_version_number(self, event_type: str) -> int:
        versions = self.list_versions(event_type)
        return versions[-1] if versions else 0

    def load_version(self, event_type: str, version: int) -> Optional[Dict[str, Any]]:
        """
        Load one stored version document.

        Args:
            event_type: Event type name
            version: Version number

        Returns:
            Stored document (event_type, version, created_at, schema), or None if loading failed
        """
        path = self.root / event_type / f"v{version}.yaml"
        if not path.exists():
            logger.error(f"Schema version not found: {path}")
            return None

        try:
            with open(path, 'r', encoding='utf-8') as f:
                document = yaml.safe_load(f)
        except yaml.YAMLError as e:
            logger.error(f"YAML parsing error in {path}: {e}")
            return None
        except OSError as e:
            logger.error(f"OS error reading {path}: {e}")
            return None

        if not isinstance(document, dict) or not isinstance(document.get('schema'), dict):
            logger.error(f"Invalid schema version format in {path}")
            return None

        return document

    def load_active(self, event_type: str) -> Optional[Dict[str, Any]]:
        """
        Load the active (highest version) schema of an event type.

        Returns:
            JSON Schema document, or None if the event type has no stored schema
        """
        latest = self._latest_version_number(event_type)
        if latest == 0:
            return None

        document = self.load_version(event_type, latest)
        if document is None:
            return None

        logger.info(f"Loaded active schema for {event_type} (v{latest})")
        return document['schema']
