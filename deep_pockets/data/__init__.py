"""Seed data files and loaders.

The category catalog is stored as JSON so allocation percentages and
assumption defaults can be tuned without code changes.
"""

from .defaults import load_config, get_catalog_config, get_config_value

__all__ = ['load_config', 'get_catalog_config', 'get_config_value']
