"""
BubbleFinder v0.1.0

Configuration management for BubbleFinder.

Author: BubbleFinder Development Team
License: MIT License - See LICENSE
"""

from .schema import (
    DEFAULT_CONFIG,
    ConfigValidationError,
    load_config,
    save_config_template,
    validate_config,
)

__all__ = [
    "DEFAULT_CONFIG",
    "ConfigValidationError",
    "load_config",
    "save_config_template",
    "validate_config",
]
