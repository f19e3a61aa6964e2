"""Package events from pip installation reports.

`pip install --dry-run --report report.json ...` writes the packages it
would install. Each entry becomes one install or update event for the
install-time gate.
"""
from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Optional

from license_gate.exceptions import ConfigurationError
from license_gate.models.events import Operation, PackageEvent
from license_gate.resolvers.metadata import package_from_json_metadata
from license_gate.resolvers.repository import PackageRepository

logger = logging.getLogger(__name__)


def load_install_report(
    path: Path,
    installed: Optional[PackageRepository] = None,
) -> list[PackageEvent]:
    """Read a pip installation report and turn it into package events.

    Args:
        path: Path to the JSON report.
        installed: Packages already installed, used to tell updates apart
            from fresh installs.

    Returns:
        One event per package in the report, in report order.

    Raises:
        ConfigurationError: If the report cannot be read or is malformed.
    """
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigurationError(f"Cannot read install report '{path}': {e}") from e

    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Invalid JSON in install report '{path}': {e}") from e

    return events_from_report(data, installed, source=str(path))


def events_from_report(
    report: Any,
    installed: Optional[PackageRepository] = None,
    source: str = "install report",
) -> list[PackageEvent]:
    """Turn parsed pip installation report data into package events.

    Args:
        report: Parsed report.
        installed: Packages already installed.
        source: Report location used in error messages.

    Returns:
        One event per package in the report.

    Raises:
        ConfigurationError: If the report has no list of installs.
    """
    if not isinstance(report, Mapping) or not isinstance(report.get("install"), list):
        raise ConfigurationError(
            f"Invalid install report '{source}': expected an 'install' list"
        )

    events: list[PackageEvent] = []
    for item in report["install"]:
        metadata = item.get("metadata") if isinstance(item, Mapping) else None
        package = (
            package_from_json_metadata(metadata)
            if isinstance(metadata, Mapping)
            else None
        )
        if package is None:
            logger.debug("Skipping install report entry without name or version")
            continue

        current = installed.find(package.name) if installed is not None else None
        if current is not None and current.version != package.version:
            events.append(
                PackageEvent(
                    operation=Operation.UPDATE,
                    package=package,
                    initial_package=current,
                )
            )
        else:
            events.append(PackageEvent(operation=Operation.INSTALL, package=package))

    return events
