"""
Configuration module for vectordist.

This module provides configuration management including
loading settings from YAML files and environment variables.

Example:
    >>> from config import Settings, load_config
    >>>
    >>> settings = load_config()
    >>> print(settings.log_level)
    >>> print(settings.gradient_check.atol)
"""

from .settings import (
    Settings,
    GradientCheckConfig,
    load_config,
    get_default_config_path,
)

__all__ = [
    "Settings",
    "GradientCheckConfig",
    "load_config",
    "get_default_config_path",
]
