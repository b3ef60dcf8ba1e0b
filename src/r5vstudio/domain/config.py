from __future__ import annotations

"""
Configuration Domain Management.

Handles persistent storage of user preferences (tree depth, compression
level, logging) as JSON in the per-user data directory. Stored values are
merged over defaults so that new keys appear automatically.
"""

import json
import logging
import os
from typing import Any, Dict, Optional

from r5vstudio.domain.constants import (
    CURRENT_CONFIG_VERSION,
    DEFAULT_COMPRESSION_LEVEL,
    DEFAULT_TREE_DEPTH,
)
from r5vstudio.infra.fs import atomic_write_text, get_user_data_dir, safe_mkdir

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "config.json"


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
        # Workspace tree
        "tree_max_depth": DEFAULT_TREE_DEPTH,

        # Project container
        "compression_level": DEFAULT_COMPRESSION_LEVEL,

        # Diagnostics
        "log_level": "INFO",
        "save_log_file": False,

        # Interface
        "locale": "en",
    }


def get_config_path() -> str:
    """Absolute path of the persisted configuration file."""
    return os.path.join(get_user_data_dir(), CONFIG_FILENAME)


# -----------------------------------------------------------------------------
# Persistence Logic
# -----------------------------------------------------------------------------
def load_config(path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load the configuration from disk merged over the defaults.

    A missing or unreadable file is not an error: defaults are returned and
    the problem is logged.

    Args:
        path: Override for the configuration file location.

    Returns:
        Dict[str, Any]: The effective configuration.
    """
    config = get_default_config()
    config_path = path or get_config_path()

    if not os.path.exists(config_path):
        logger.debug("Config file not found. Returning defaults.")
        return config

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.error(f"Failed to load config: {e}. Using defaults.")
        return config

    if not isinstance(data, dict):
        logger.warning("Corrupted config file. Resetting to defaults.")
        return config

    stored = data.get("settings", {})
    if isinstance(stored, dict):
        config.update(stored)
    return config


def save_config(config: Dict[str, Any], path: Optional[str] = None) -> bool:
    """
    Persist the configuration to disk with a version stamp.

    Args:
        config: The configuration dictionary to save.
        path: Override for the configuration file location.

    Returns:
        bool: True if the file was written.
    """
    config_path = path or get_config_path()
    document = {"version": CURRENT_CONFIG_VERSION, "settings": dict(config)}
    ok, err = safe_mkdir(os.path.dirname(os.path.abspath(config_path)))
    if not ok:
        logger.error(f"Failed to create configuration directory: {err}")
        return False

    try:
        atomic_write_text(config_path, json.dumps(document, ensure_ascii=False, indent=4))
    except OSError as e:
        logger.error(f"Failed to save configuration: {e}")
        return False

    logger.debug(f"Configuration saved to {config_path}")
    return True
