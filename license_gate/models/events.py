"""Package lifecycle event models."""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from license_gate.models.package import Package


class Operation(Enum):
    """Kind of package operation carried by an event."""

    INSTALL = "install"
    UPDATE = "update"
    UNINSTALL = "uninstall"


class GateOutcome(Enum):
    """Result of running the install-time gate on one event."""

    SKIPPED = "skipped"
    PASSED = "passed"
    WARNED = "warned"


class PackageEvent(BaseModel):
    """One package install/update/uninstall event."""

    model_config = {"extra": "forbid"}

    operation: Operation = Field(description="Kind of operation")
    package: Package = Field(
        description="Package being installed, or the target of an update"
    )
    initial_package: Optional[Package] = Field(
        default=None,
        description="Previously installed package for updates",
    )
