"""Install-time license gate.

Checks each package install or update against the project's policy, the
way the check-licenses command does for an installed environment, but
aborts on the first disallowed package instead of reporting.
"""
from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Optional

from rich.console import Console

from license_gate.analysis.policy import evaluate_package, is_self_package
from license_gate.exceptions import LicenseNotAllowedError
from license_gate.models.events import GateOutcome, Operation, PackageEvent
from license_gate.models.policy import Policy

logger = logging.getLogger(__name__)

GATED_OPERATIONS = (Operation.INSTALL, Operation.UPDATE)


class GateContext:
    """State shared by all events of one install run.

    Holds the policy loaded at activation and the console warnings are
    written to.
    """

    def __init__(self, policy: Policy, console: Optional[Console] = None) -> None:
        """Initialize the context.

        Args:
            policy: Policy of the root project, read-only from here on.
            console: Console for warnings. Defaults to a stderr console.
        """
        self.policy = policy
        self.console = console if console is not None else Console(stderr=True)


class InstallGate:
    """Allows, warns about or blocks package installs based on licenses."""

    def __init__(self, context: GateContext) -> None:
        self._context = context

    def handle(self, event: PackageEvent) -> GateOutcome:
        """Check the package of one install/update event.

        Args:
            event: The lifecycle event.

        Returns:
            SKIPPED, PASSED or WARNED.

        Raises:
            LicenseNotAllowedError: If the package's licenses are not allowed
                and it is not whitelisted.
        """
        if event.operation not in GATED_OPERATIONS:
            return GateOutcome.SKIPPED

        package = event.package
        if is_self_package(package):
            logger.debug("Skipping license check of %s itself", package.pretty_name)
            return GateOutcome.SKIPPED

        decision = evaluate_package(self._context.policy, package)
        if decision.allowed:
            logger.debug(
                "Licenses of %s %s are allowed", package.pretty_name, package.version
            )
            return GateOutcome.PASSED

        if not decision.exception_applied:
            raise LicenseNotAllowedError(package.pretty_name, package.licenses)

        self._context.console.print(
            f'WARNING: Licenses "{", ".join(package.licenses)}" of package '
            f'"{package.pretty_name}" are not allowed to be used in the project '
            "but the package has been whitelisted.",
            style="yellow",
            markup=False,
            highlight=False,
            soft_wrap=True,
        )
        return GateOutcome.WARNED

    def check_events(self, events: Iterable[PackageEvent]) -> list[GateOutcome]:
        """Run the gate over events in order.

        Args:
            events: Lifecycle events of one install run.

        Returns:
            Outcome per event.

        Raises:
            LicenseNotAllowedError: At the first blocked package; later
                events are not checked.
        """
        return [self.handle(event) for event in events]
