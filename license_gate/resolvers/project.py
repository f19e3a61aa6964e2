"""Loading of the root project from its pyproject.toml."""
from __future__ import annotations

import logging
import tomllib
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from packaging.requirements import InvalidRequirement, Requirement
from packaging.utils import canonicalize_name

from license_gate.constants import CONFIG_TABLE
from license_gate.exceptions import ConfigurationError
from license_gate.models.package import RootPackage
from license_gate.resolvers.metadata import licenses_from_metadata, runtime_requirements

logger = logging.getLogger(__name__)

PYPROJECT_NAME = "pyproject.toml"

UNKNOWN_VERSION = "unknown"


def find_manifest(project_dir: Path | None = None) -> Path:
    """Return the path of the project manifest.

    Args:
        project_dir: Project directory. Defaults to current working directory.

    Returns:
        Path to pyproject.toml in the project directory (may not exist).
    """
    return (project_dir or Path.cwd()) / PYPROJECT_NAME


def load_root_package(project_dir: Path | None = None) -> RootPackage:
    """Load the root project from pyproject.toml.

    Args:
        project_dir: Project directory. Defaults to current working directory.

    Returns:
        RootPackage with identity, requirements and policy block.

    Raises:
        ConfigurationError: If the manifest cannot be read, is not valid TOML
            or has no project name.
    """
    path = find_manifest(project_dir)
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigurationError(f"Cannot read project manifest '{path}': {e}") from e

    try:
        data = tomllib.loads(content)
    except tomllib.TOMLDecodeError as e:
        raise ConfigurationError(f"Invalid TOML syntax in '{path}': {e}") from e

    return root_package_from_manifest(data, source=str(path))


def root_package_from_manifest(data: dict[str, Any], source: str = PYPROJECT_NAME) -> RootPackage:
    """Build a RootPackage from parsed pyproject.toml data.

    Args:
        data: Parsed manifest.
        source: Manifest location used in error messages.

    Returns:
        RootPackage built from the [project] table.

    Raises:
        ConfigurationError: If the [project] table or its name is missing.
    """
    project = data.get("project")
    if not isinstance(project, dict):
        raise ConfigurationError(f"Missing [project] table in '{source}'")

    name = project.get("name")
    if not isinstance(name, str) or not name:
        raise ConfigurationError(f"Missing project name in '{source}'")

    version = project.get("version")
    if not isinstance(version, str) or not version:
        version = UNKNOWN_VERSION

    license_expression = None
    license_text = None
    license_value = project.get("license")
    if isinstance(license_value, str):
        license_expression = license_value
    elif isinstance(license_value, dict) and isinstance(license_value.get("text"), str):
        license_text = license_value["text"]

    classifiers = [c for c in project.get("classifiers", []) if isinstance(c, str)]
    dependencies = [d for d in project.get("dependencies", []) if isinstance(d, str)]

    return RootPackage(
        name=canonicalize_name(name),
        pretty_name=name,
        version=version,
        licenses=licenses_from_metadata(
            license_expression=license_expression,
            license_text=license_text,
            classifiers=classifiers,
        ),
        requires=runtime_requirements(dependencies),
        dev_requires=_dev_requirement_names(project, data),
        config=_tool_config(data),
    )


def _dev_requirement_names(project: dict[str, Any], data: dict[str, Any]) -> list[str]:
    """Collect names from optional-dependencies and dependency-groups."""
    groups: list[Iterable[Any]] = []

    optional = project.get("optional-dependencies")
    if isinstance(optional, dict):
        groups.extend(v for v in optional.values() if isinstance(v, list))

    dependency_groups = data.get("dependency-groups")
    if isinstance(dependency_groups, dict):
        groups.extend(v for v in dependency_groups.values() if isinstance(v, list))

    names: list[str] = []
    for group in groups:
        for req_str in group:
            # {include-group = "..."} entries have no requirement of their own
            if not isinstance(req_str, str):
                continue
            try:
                name = canonicalize_name(Requirement(req_str).name)
            except InvalidRequirement:
                logger.debug("Skipping malformed requirement %r", req_str)
                continue
            if name not in names:
                names.append(name)
    return names


def _tool_config(data: dict[str, Any]) -> dict[str, Any]:
    """Return the [tool.license-gate] table, or an empty dict."""
    tool = data.get("tool")
    if not isinstance(tool, dict):
        return {}
    config = tool.get(CONFIG_TABLE)
    if not isinstance(config, dict):
        return {}
    return config
