"""
BubbleFinder v0.1.0

Configuration schema for BubbleFinder.

Defines all available configuration parameters with defaults and validation.

Author: BubbleFinder Development Team
License: MIT License - See LICENSE
"""

import copy
from typing import Dict, Any, Optional, List
from pathlib import Path
import yaml


LOG_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']


class ConfigValidationError(Exception):
    """Raised when configuration validation fails."""

    def __init__(self, errors: List[str]):
        self.errors = errors
        super().__init__("; ".join(errors))


# Default configuration values
DEFAULT_CONFIG = {
    # ========================================================================
    # Bubble Search
    # ========================================================================
    'bubbles': {
        'start_node': 1,  # Node the first scan starts from
        'max_restarts': 100,  # Probe budget after a stalled divergence
        'probe_step': 1,  # Id distance between successive probes
        'max_rounds': 10,  # Scanning passes, each resuming after the last bubble
    },

    # ========================================================================
    # Output
    # ========================================================================
    'output': {
        'csv_path': None,  # Also write the bubble table here

        # Logging
        'logging': {
            'level': 'WARNING',  # 'DEBUG', 'INFO', 'WARNING', 'ERROR'
            'log_file': None,
        },
    },
}


def load_config(config_path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load configuration from file or return defaults.

    Args:
        config_path: Path to YAML config file (None = use defaults)

    Returns:
        Configuration dictionary

    Raises:
        FileNotFoundError: If config_path is given but does not exist
    """
    config = copy.deepcopy(DEFAULT_CONFIG)

    if config_path:
        config_path = Path(config_path)
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        with open(config_path) as f:
            user_config = yaml.safe_load(f) or {}

        if not isinstance(user_config, dict):
            raise ConfigValidationError([f"Configuration root must be a mapping: {config_path}"])

        # Deep merge user config into defaults
        config = _deep_merge(config, user_config)

    return config


def _deep_merge(base: Dict, override: Dict) -> Dict:
    """
    Deep merge two dictionaries.

    Args:
        base: Base dictionary
        override: Override dictionary

    Returns:
        Merged dictionary
    """
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value

    return result


def save_config_template(output_path: Path):
    """
    Save the default configuration as a YAML template.

    Args:
        output_path: Output file path
    """
    with open(output_path, 'w') as f:
        yaml.dump(DEFAULT_CONFIG, f, default_flow_style=False, sort_keys=False)


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def validate_config(config: Dict[str, Any]) -> List[str]:
    """
    Validate configuration dictionary.

    Args:
        config: Configuration to validate

    Returns:
        List of validation errors (empty if valid)
    """
    errors = []

    bubbles = config.get('bubbles', {})
    start_node = bubbles.get('start_node')
    if not _is_int(start_node) or start_node < 0:
        errors.append(f"bubbles.start_node must be an unsigned integer, got {start_node!r}")

    max_restarts = bubbles.get('max_restarts')
    if not _is_int(max_restarts) or max_restarts < 0:
        errors.append(f"bubbles.max_restarts must be >= 0, got {max_restarts!r}")

    for key in ('probe_step', 'max_rounds'):
        value = bubbles.get(key)
        if not _is_int(value) or value < 1:
            errors.append(f"bubbles.{key} must be >= 1, got {value!r}")

    level = config.get('output', {}).get('logging', {}).get('level')
    if level not in LOG_LEVELS:
        errors.append(f"Invalid logging level: {level} (choose from {', '.join(LOG_LEVELS)})")

    return errors
