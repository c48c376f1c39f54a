"""
Tests for the configuration-based logging setup in streamlit_app.
"""

import logging
from unittest.mock import patch

import pytest

from streamlit_app import get_logging_level, configure_logging


@pytest.mark.parametrize("level_str", ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'])
def test_logging_levels(level_str):
    """Test every supported level maps to its logging constant."""
    assert get_logging_level(level_str) == getattr(logging, level_str)


def test_level_names_are_case_insensitive():
    assert get_logging_level('debug') == logging.DEBUG


@pytest.mark.parametrize("level_str", ['VERBOSE', '', None, 10])
def test_unknown_level_falls_back_to_info(level_str):
    assert get_logging_level(level_str) == logging.INFO


def test_configure_logging_uses_config_level():
    config = {'logging': {'level': 'WARNING'}}

    with patch('logging.basicConfig') as mock_basic_config:
        configure_logging(config)

    mock_basic_config.assert_called_once_with(level=logging.WARNING)


def test_configure_logging_without_logging_section():
    with patch('logging.basicConfig') as mock_basic_config:
        configure_logging({})

    mock_basic_config.assert_called_once_with(level=logging.INFO)
