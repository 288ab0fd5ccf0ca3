from __future__ import annotations

"""
Configuration Domain Management.

Handles the runtime configuration dictionary and its optional persistent
copy in the user data directory. Persisted values act as the base layer
that command-line overrides are merged onto.
"""

import json
import logging
import os
from typing import Any, Dict

from stringfinder.domain.constants import (
    CONFIG_FILE_NAME,
    CURRENT_CONFIG_VERSION,
    DEFAULT_ARCHIVE_EXTENSION,
    DEFAULT_ENCODING,
)
from stringfinder.infra.fs import get_user_data_dir

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Configuration Models (Dict-based)
# -----------------------------------------------------------------------------
def get_default_config() -> Dict[str, Any]:
    """
    Generate the default runtime configuration.

    Returns:
        Dict[str, Any]: Default configuration values.
    """
    return {
        # IO Paths
        "input_path": "",
        "marker_file": "",
        "output_path": "",

        # Expansion
        "skip_expansion": False,
        "archive_extension": DEFAULT_ARCHIVE_EXTENSION,

        # Content decoding
        "encoding": DEFAULT_ENCODING,

        # Output Format
        "json_output": False,

        # Diagnostics
        "log_file": "",
    }


def get_config_file_path() -> str:
    """Return the location of the persisted configuration file."""
    return os.path.join(get_user_data_dir(create=False), CONFIG_FILE_NAME)


# -----------------------------------------------------------------------------
# Persistence Logic
# -----------------------------------------------------------------------------
def load_config(path: str = "") -> Dict[str, Any]:
    """
    Load the persisted configuration merged over the defaults.

    Unknown keys are dropped. A missing file yields the defaults; a
    corrupted one is reported and ignored.

    Args:
        path: Optional explicit config file location.

    Returns:
        Dict[str, Any]: The resolved configuration.
    """
    config_file = path or get_config_file_path()
    defaults = get_default_config()

    if not os.path.exists(config_file):
        logger.debug(f"Config file not found at {config_file}. Using defaults.")
        return defaults

    try:
        with open(config_file, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.error(f"Failed to load config: {e}. Using defaults.")
        return defaults

    if not isinstance(data, dict):
        logger.warning("Corrupted config file. Using defaults.")
        return defaults

    for key in defaults:
        if key in data:
            defaults[key] = data[key]
    return defaults


def save_config(config: Dict[str, Any], path: str = "") -> str:
    """
    Persist the known keys of a configuration to disk.

    Args:
        config: The configuration dictionary to save.
        path: Optional explicit config file location.

    Returns:
        str: The path written to.
    """
    config_file = path or os.path.join(get_user_data_dir(), CONFIG_FILE_NAME)
    known = get_default_config()
    payload: Dict[str, Any] = {k: config.get(k, v) for k, v in known.items()}
    payload["version"] = CURRENT_CONFIG_VERSION

    os.makedirs(os.path.dirname(os.path.abspath(config_file)), exist_ok=True)
    with open(config_file, "w", encoding="utf-8") as f:
        json.dump(payload, f, ensure_ascii=False, indent=4)
    logger.debug(f"Configuration saved to {config_file}")
    return config_file
