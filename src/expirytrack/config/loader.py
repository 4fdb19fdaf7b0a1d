# SPDX-License-Identifier: MIT
"""
Configuration loader for expirytrack.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Any, Optional

import yaml

from expirytrack.core.exceptions import ExpiryTrackConfigError
from . import defaults

logger = logging.getLogger(__name__)

CONFIG_FILE_NAMES = (".expirytrack.yml", ".expirytrack.yaml")

_INT_KEYS = (
    "collection_window_days",
    "countdown_window_days",
    "plausibility_years",
    "subscription_lifetime_days",
)
_BOOL_KEYS = ("day_first",)


def load_config(config_path: Optional[str] = None, search_root: str = ".") -> Dict[str, Any]:
    """
    Load configuration following the search order.

    Args:
        config_path: Explicit config path from the --config CLI flag
        search_root: Directory searched for .expirytrack.yml/.expirytrack.yaml

    Returns:
        Dictionary containing the effective configuration

    Raises:
        ExpiryTrackConfigError: If a config file is malformed or an explicitly
            provided config is missing
    """
    # 1. Explicit --config
    if config_path:
        config_abs_path = Path(config_path).resolve()
        if not config_abs_path.exists():
            raise ExpiryTrackConfigError(
                f"Specified config file not found: {config_abs_path}",
                config_path=str(config_abs_path),
            )
        return _load_from(config_abs_path)

    # 2. .expirytrack.yml or .expirytrack.yaml in the search root
    root = Path(search_root).resolve()
    for config_name in CONFIG_FILE_NAMES:
        config_file = root / config_name
        if config_file.exists():
            return _load_from(config_file)

    # 3. Built-in defaults
    logger.debug("Using default configuration")
    return get_default_config()


def _load_from(config_path: Path) -> Dict[str, Any]:
    try:
        config = _load_yaml_config(config_path)
    except yaml.YAMLError as e:
        raise ExpiryTrackConfigError(
            f"Failed to parse config file: {e}", config_path=str(config_path)
        ) from e
    except ValueError as e:
        raise ExpiryTrackConfigError(str(e), config_path=str(config_path)) from e
    logger.info("Loaded config: %s", config_path)
    return config


def _load_yaml_config(config_path: Path) -> Dict[str, Any]:
    """Load and validate a YAML config file."""
    with open(config_path, "r", encoding="utf-8") as f:
        config = yaml.safe_load(f)

    if config is None:
        config = {}

    if not isinstance(config, dict):
        raise ValueError("Config must be a dictionary")

    _validate_config(config)
    return _apply_defaults(config)


def _validate_config(config: Dict[str, Any]) -> None:
    known = set(_INT_KEYS) | set(_BOOL_KEYS)
    for key in list(config):
        if key not in known:
            logger.warning("Ignoring unknown config key: %s", key)
            del config[key]

    for key in _INT_KEYS:
        if key not in config:
            continue
        value = config[key]
        # bool is an int subclass; reject it explicitly
        if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
            raise ValueError(f"{key} must be a positive integer, got {value!r}")

    for key in _BOOL_KEYS:
        if key in config and not isinstance(config[key], bool):
            raise ValueError(f"{key} must be true or false, got {config[key]!r}")


def _apply_defaults(config: Dict[str, Any]) -> Dict[str, Any]:
    """Fill in default values for keys the file leaves out."""
    for key, value in get_default_config().items():
        config.setdefault(key, value)
    return config


def get_default_config() -> Dict[str, Any]:
    """
    Get the default configuration.

    Returns:
        Dictionary with default thresholds
    """
    return {
        "collection_window_days": defaults.COLLECTION_WINDOW_DAYS,
        "countdown_window_days": defaults.COUNTDOWN_WINDOW_DAYS,
        "plausibility_years": defaults.PLAUSIBILITY_YEARS,
        "subscription_lifetime_days": defaults.SUBSCRIPTION_LIFETIME_DAYS,
        "day_first": defaults.DAY_FIRST,
    }


def create_default_config_template() -> str:
    """
    Create a minimal .expirytrack.yml template with commented examples.

    Returns:
        YAML string with the default configuration
    """
    return f"""# expirytrack configuration

# Days before expiry at which a certificate or subscription counts as
# "expiring soon" in stats and listings
collection_window_days: {defaults.COLLECTION_WINDOW_DAYS}

# Days covered by the countdown bar on a single certificate
countdown_window_days: {defaults.COUNTDOWN_WINDOW_DAYS}

# Dates extracted from scanned text further than this many years from
# today are discarded
plausibility_years: {defaults.PLAUSIBILITY_YEARS}

# Assumed subscription term for the renewal progress bar
subscription_lifetime_days: {defaults.SUBSCRIPTION_LIFETIME_DAYS}

# Read stored dates like 03/04/2025 as day/month/year
day_first: {"true" if defaults.DAY_FIRST else "false"}
"""
