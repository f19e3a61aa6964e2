"""Configuration handling for license-gate."""
from __future__ import annotations

from license_gate.config.defaults import DEFAULT_CONFIG_NAMES, get_default_policy
from license_gate.config.loader import (
    find_config_file,
    load_config_file,
    load_policy,
)

__all__ = [
    "DEFAULT_CONFIG_NAMES",
    "find_config_file",
    "get_default_policy",
    "load_config_file",
    "load_policy",
]
