"""Configuration module for Sprint Health Metrics.

This module provides configuration loading and error handling utilities.
"""

from .exceptions import ConfigError, DataError
from .loader import config_to_options, create_default_options

__all__ = ["config_to_options", "create_default_options", "ConfigError", "DataError"]
