"""Configuration management for the search engine.

This module provides Hydra-based configuration loading with command-line
overrides and validation of the search, logging and cli sections.
"""

from .config_manager import ConfigManager, load_config, get_config, get_parameter, reset_config
from .validators import validate_config, check_config_consistency, ConfigValidationError

__all__ = [
    'ConfigManager',
    'load_config',
    'get_config',
    'get_parameter',
    'reset_config',
    'validate_config',
    'check_config_consistency',
    'ConfigValidationError'
]
