"""Configuration loader for seed data files."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Optional

from .. import config

# Configuration directory
CONFIG_DIR = Path(__file__).parent


def load_config(config_name: str, config_dir: Optional[Path] = None) -> Dict[str, Any]:
    """Load a configuration file by name.

    Args:
        config_name: Name of the config file (without .json extension)
        config_dir: Directory to look in. Defaults to this package directory.

    Returns:
        Dictionary containing the configuration

    Raises:
        FileNotFoundError: If the configuration file doesn't exist
        json.JSONDecodeError: If the configuration file is invalid JSON

    Example:
        >>> config = load_config('categories')
        >>> config['categories'][0]['id']
        'home'
    """
    config_path = (config_dir or CONFIG_DIR) / f"{config_name}.json"
    return _read_json(config_path)


def get_catalog_config(path: Optional[Path] = None) -> Dict[str, Any]:
    """Get the category catalog seed.

    Args:
        path: Optional explicit seed file. Defaults to ``config.CATALOG_PATH``,
              which honours ``DEEP_POCKETS_CATALOG_PATH``.

    Returns:
        Catalog configuration dictionary with a ``categories`` list

    Example:
        >>> seed = get_catalog_config()
        >>> len(seed['categories']) > 30
        True
    """
    return _read_json(Path(path) if path else config.CATALOG_PATH)


def get_config_value(config_name: str, *keys: str, default: Any = None) -> Any:
    """Get a nested configuration value by key path.

    Args:
        config_name: Name of the config file
        *keys: Path to the nested value (e.g., 'version')
        default: Default value if key path doesn't exist

    Returns:
        The configuration value at the specified path, or default if not found

    Example:
        >>> get_config_value('categories', 'version')
        1
    """
    try:
        value: Any = load_config(config_name)
        for key in keys:
            value = value[key]
        return value
    except (KeyError, IndexError, TypeError, FileNotFoundError):
        return default


def _read_json(config_path: Path) -> Dict[str, Any]:
    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path, 'r', encoding='utf-8') as f:
        return json.load(f)
