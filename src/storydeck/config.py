"""Configuration loader with YAML and environment variable support.

This module reads ~/.config/storydeck/config.yaml and lets environment
variables with the STORYDECK_* prefix override individual settings.

Environment variables:
- STORYDECK_WIDGET_LAUNCHER_LABEL: Override widget.launcher_label
- STORYDECK_WIDGET_CLEAR_COMMAND_ON_SUBMIT: Override widget.clear_command_on_submit
- STORYDECK_RETENTION_MAX_CONVERSATION_ENTRIES: Override retention.max_conversation_entries
"""

import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from storydeck.models.config import Config
from storydeck.utils.logging import get_logger


logger = get_logger(__name__)

DEFAULT_CONFIG_PATH = Path.home() / ".config" / "storydeck" / "config.yaml"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def load_config(config_path: Optional[Path] = None) -> Config:
    """Load configuration from YAML file with environment variable overrides.

    A missing file is not an error: every setting has a default.

    Args:
        config_path: Path to config file. If None, uses ~/.config/storydeck/config.yaml

    Returns:
        Validated Config object

    Raises:
        ValueError: If the config file is not valid YAML or fails validation
    """
    if config_path is None:
        config_path = DEFAULT_CONFIG_PATH

    if config_path.exists():
        with config_path.open() as f:
            try:
                data = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ValueError(f"Invalid YAML in {config_path}: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Configuration in {config_path} must be a mapping")
        logger.info("config_file_read", path=str(config_path))
    else:
        logger.info("config_file_missing_using_defaults", path=str(config_path))
        data = {}

    data = _apply_env_overrides(data)

    return Config(**data)


def _apply_env_overrides(data: Dict[str, Any]) -> Dict[str, Any]:
    """Apply environment variable overrides to configuration data.

    Environment variables use the format: STORYDECK_SECTION_KEY
    For example: STORYDECK_WIDGET_LAUNCHER_LABEL sets data['widget']['launcher_label']

    Args:
        data: Base configuration dictionary from YAML

    Returns:
        Configuration dictionary with environment overrides applied
    """
    for section in ("widget", "placeholder", "retention"):
        if data.get(section) is None:
            data[section] = {}

    if env_label := os.getenv("STORYDECK_WIDGET_LAUNCHER_LABEL"):
        data["widget"]["launcher_label"] = env_label

    if env_clear := os.getenv("STORYDECK_WIDGET_CLEAR_COMMAND_ON_SUBMIT"):
        lowered = env_clear.strip().lower()
        if lowered in _TRUE_VALUES:
            data["widget"]["clear_command_on_submit"] = True
        elif lowered in _FALSE_VALUES:
            data["widget"]["clear_command_on_submit"] = False
        else:
            logger.warning("config_env_override_ignored", variable="STORYDECK_WIDGET_CLEAR_COMMAND_ON_SUBMIT", value=env_clear)

    if env_max := os.getenv("STORYDECK_RETENTION_MAX_CONVERSATION_ENTRIES"):
        try:
            data["retention"]["max_conversation_entries"] = int(env_max)
        except ValueError:
            logger.warning("config_env_override_ignored", variable="STORYDECK_RETENTION_MAX_CONVERSATION_ENTRIES", value=env_max)

    return data
