"""Policy configuration discovery and loading for license-gate."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Optional

import yaml

from license_gate.config.defaults import DEFAULT_CONFIG_NAMES, get_default_policy
from license_gate.exceptions import ConfigurationError
from license_gate.models.package import RootPackage
from license_gate.models.policy import Policy

logger = logging.getLogger(__name__)


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Find a policy file in the specified directory.

    Searches for `.license-gate.yaml` first, then `.license-gate.yml`.

    Args:
        start_dir: Directory to search. Defaults to current working directory.

    Returns:
        Path to the policy file if found, None otherwise.
    """
    search_dir = start_dir or Path.cwd()
    for name in DEFAULT_CONFIG_NAMES:
        config_path = search_dir / name
        if config_path.exists():
            return config_path
    return None


def load_config_file(path: Path) -> dict[str, Any]:
    """Load the raw policy block from a YAML file.

    Args:
        path: Path to the policy file.

    Returns:
        The parsed mapping; empty for an empty file.

    Raises:
        ConfigurationError: If file cannot be read, has invalid YAML,
            or its root is not a mapping.
    """
    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, PermissionError) as e:
        raise ConfigurationError(
            f"Cannot read configuration file '{path}': {e}"
        ) from e

    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigurationError(
            f"Invalid YAML syntax in '{path}': {e}"
        ) from e

    # Empty file or only comments
    if data is None:
        return {}

    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Invalid configuration in '{path}': "
            f"expected a mapping at root level, got {type(data).__name__}"
        )

    return data


def load_policy(
    config_path: str | None = None,
    root: Optional[RootPackage] = None,
    project_dir: Path | None = None,
) -> Policy:
    """Load the policy of the root project.

    Sources, first match wins:
    1. The file given by config_path
    2. The [tool.license-gate] table of the root project's manifest
    3. A policy file discovered in the project directory
    4. The default (empty) policy

    Args:
        config_path: Optional path to a policy file.
        root: Root project, whose manifest may carry the policy block.
        project_dir: Directory searched for a policy file.

    Returns:
        Normalized Policy.

    Raises:
        ConfigurationError: If a policy file exists but is invalid.
    """
    if config_path is not None:
        logger.debug("Loading policy from %s", config_path)
        return Policy.from_config(load_config_file(Path(config_path)))

    if root is not None and root.config:
        logger.debug("Loading policy from the [tool] table of %s", root.pretty_name)
        return Policy.from_config(root.config)

    discovered = find_config_file(project_dir)
    if discovered is not None:
        logger.debug("Loading policy from %s", discovered)
        return Policy.from_config(load_config_file(discovered))

    return get_default_policy()
