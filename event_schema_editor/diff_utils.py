"""
Diff utilities for the event schema editor.
Compares two JSON Schema documents with DeepDiff and reduces the result to
the property names that were added, removed or modified.
"""

from typing import Dict, Any, List, Optional, Set
from deepdiff import DeepDiff
import logging

logger = logging.getLogger(__name__)

EMPTY_SCHEMA: Dict[str, Any] = {'type': 'object', 'properties': {}}


def calculate_schema_diff(baseline: Optional[Dict[str, Any]], current: Optional[Dict[str, Any]]) -> DeepDiff:
    """
    Calculate the raw difference between two schema documents.

    Args:
        baseline: Schema the editor was loaded from (None for a new schema)
        current: Schema currently being edited

    Returns:
        DeepDiff result in tree view
    """
    return DeepDiff(
        baseline or EMPTY_SCHEMA,
        current or EMPTY_SCHEMA,
        ignore_order=True,  # 'required' is a set semantically
        view='tree'
    )


def summarize_schema_changes(baseline: Optional[Dict[str, Any]], current: Optional[Dict[str, Any]]) -> Dict[str, List[str]]:
    """
    Summarize which properties changed between two schema documents.

    A property whose fragment changed, or whose membership in 'required'
    changed, is reported as modified. Added and removed properties are not
    also reported as modified.

    Args:
        baseline: Schema the editor was loaded from (None for a new schema)
        current: Schema currently being edited

    Returns:
        Dictionary with sorted 'added', 'removed' and 'modified' property names
    """
    baseline_names = _property_names(baseline)
    current_names = _property_names(current)
    added = current_names - baseline_names
    removed = baseline_names - current_names
    modified = set()

    try:
        diff = calculate_schema_diff(baseline, current)
    except Exception as e:
        logger.error(f"Error calculating schema diff: {e}", exc_info=True)
        return {'added': [], 'removed': [], 'modified': []}

    for levels in diff.values():
        for level in levels:
            path = level.path(output_format='list')
            if not path:
                continue

            # A whole-object change at root['properties'] is covered by the key sets
            if path[0] == 'properties' and len(path) >= 2:
                modified.add(str(path[1]))

            elif path[0] == 'required':
                modified.update(_required_names(level.t1))
                modified.update(_required_names(level.t2))

    modified -= added | removed
    summary = {
        'added': sorted(added),
        'removed': sorted(removed),
        'modified': sorted(modified),
    }
    logger.debug(f"Schema change summary: {summary}")
    return summary


def _property_names(schema: Optional[Dict[str, Any]]) -> Set[str]:
    """Property names declared by a schema document."""
    properties = (schema or EMPTY_SCHEMA).get('properties')
    if not isinstance(properties, dict):
        return set()
    return {str(name) for name in properties}


def _required_names(value: Any) -> List[str]:
    """Property names referenced by one side of a 'required' change."""
    if isinstance(value, str):
        return [value]
    if isinstance(value, list):
        return [item for item in value if isinstance(item, str)]
    return []


def has_schema_changes(summary: Dict[str, List[str]]) -> bool:
    """
    Check if a change summary reports any change.

    Args:
        summary: Result of summarize_schema_changes

    Returns:
        True if there are changes, False otherwise
    """
    return any(summary.get(key) for key in ('added', 'removed', 'modified'))


def format_change_summary(summary: Dict[str, List[str]]) -> str:
    """
    Format a change summary for display in Streamlit.

    Args:
        summary: Result of summarize_schema_changes

    Returns:
        Markdown string
    """
    if not has_schema_changes(summary):
        return "✅ **No changes detected**"

    lines = []
    if summary.get('added'):
        lines.append(f"➕ **Added:** {', '.join(summary['added'])}")
    if summary.get('removed'):
        lines.append(f"➖ **Removed:** {', '.join(summary['removed'])}")
    if summary.get('modified'):
        lines.append(f"✏️ **Modified:** {', '.join(summary['modified'])}")
    return "\n\n".join(lines)
