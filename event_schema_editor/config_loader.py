"""
Configuration loading utilities for the event schema editor.

This module loads the optional config.yaml, merges it over the built-in
defaults and validates the values the editor relies on.
"""

import yaml
from pathlib import Path
from typing import Dict, Any, List, Optional
import logging
from copy import deepcopy

from .exceptions import ConfigurationLoadError, log_error_with_context

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("config.yaml")
VALID_LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')

_config_cache: Optional[Dict[str, Any]] = None


def deep_merge(base_dict: Dict[str, Any], update_dict: Dict[str, Any]) -> Dict[str, Any]:
    """
    Deep merge two dictionaries, with update_dict taking precedence.

    Args:
        base_dict: Base dictionary (defaults)
        update_dict: Dictionary to merge in (user config)

    Returns:
        Merged dictionary
    """
    result = deepcopy(base_dict)

    for key, value in update_dict.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = deepcopy(value)

    return result


def get_default_config() -> Dict[str, Any]:
    """
    Get default configuration.

    Returns:
        Dictionary with default configuration
    """
    return {
        'app': {
            'name': 'Event Schema Editor',
            'version': '1.0.0',
            'debug': False
        },
        'logging': {
            'level': 'INFO'
        },
        'storage': {
            'schemas_dir': 'event_schemas'
        },
        'editor': {
            'json_indent': 2,
            'lowercase_event_type': True
        }
    }


def read_config_file(config_path: Path) -> Optional[Dict[str, Any]]:
    """
    Read a YAML configuration file.

    Args:
        config_path: Path to the configuration file

    Returns:
        Parsed mapping, or None when the file is empty

    Raises:
        ConfigurationLoadError: If the file cannot be read, parsed, or is not a mapping
    """
    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            user_config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationLoadError(config_path, e)
    except (IOError, OSError) as e:
        raise ConfigurationLoadError(config_path, e)

    if user_config is None:
        return None

    if not isinstance(user_config, dict):
        raise ConfigurationLoadError(
            config_path,
            TypeError(f"expected a mapping, got {type(user_config).__name__}")
        )

    return user_config


def load_config(config_path: Optional[Path] = None, use_cache: bool = False) -> Dict[str, Any]:
    """
    Load application configuration merged over the defaults.

    Args:
        config_path: Optional path to config file (defaults to config.yaml)
        use_cache: Return the configuration loaded by a previous cached call

    Returns:
        Complete configuration dictionary
    """
    global _config_cache

    if use_cache and _config_cache is not None:
        return _config_cache

    if config_path is None:
        config_path = DEFAULT_CONFIG_PATH

    default_config = get_default_config()
    config = default_config

    if not config_path.exists():
        logger.warning(f"Configuration file not found: {config_path}")
        logger.info("Using default configuration")
    else:
        try:
            user_config = read_config_file(config_path)
            if user_config is None:
                logger.warning(f"Configuration file is empty: {config_path}")
            else:
                config = deep_merge(default_config, user_config)
                logger.info(f"Successfully loaded configuration from {config_path}")
        except ConfigurationLoadError as e:
            log_error_with_context(e, "configuration loading")
            logger.info("Using default configuration")

    problems = validate_config(config)
    for problem in problems:
        logger.warning(f"Configuration problem: {problem}")

    if use_cache:
        _config_cache = config
    return config


def clear_config_cache() -> None:
    """Forget the cached configuration."""
    global _config_cache
    _config_cache = None


def validate_config(config: Dict[str, Any]) -> List[str]:
    """
    Validate configuration structure and values.

    Args:
        config: Configuration dictionary to validate

    Returns:
        List of configuration problems (empty if valid)
    """
    problems = []

    for section in ('app', 'logging', 'storage', 'editor'):
        if not isinstance(config.get(section), dict):
            problems.append(f"Missing required configuration section: {section}")

    level = config.get('logging', {}).get('level', 'INFO')
    if not isinstance(level, str) or level.upper() not in VALID_LOG_LEVELS:
        problems.append(f"logging.level must be one of {', '.join(VALID_LOG_LEVELS)}")

    schemas_dir = config.get('storage', {}).get('schemas_dir')
    if not isinstance(schemas_dir, str) or not schemas_dir.strip():
        problems.append("storage.schemas_dir must be a non-empty string")

    indent = config.get('editor', {}).get('json_indent', 2)
    if isinstance(indent, bool) or not isinstance(indent, int) or indent < 0:
        problems.append("editor.json_indent must be a non-negative integer")

    return problems


def get_config_value(config: Dict[str, Any], section: str, key: str, default: Any = None) -> Any:
    """
    Get a specific configuration value.

    Args:
        config: Configuration dictionary
        section: Configuration section (e.g., 'editor', 'storage')
        key: Configuration key within section
        default: Default value if not found

    Returns:
        Configuration value or default
    """
    section_values = config.get(section, {})
    if not isinstance(section_values, dict):
        return default
    return section_values.get(key, default)
