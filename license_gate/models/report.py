"""Report Pydantic models."""

from __future__ import annotations

from collections.abc import Iterable

from pydantic import BaseModel, Field

from license_gate.models.package import Package, RootPackage
from license_gate.models.policy import Policy


class ReportEntry(BaseModel):
    """License check result for a single dependency."""

    model_config = {"extra": "forbid"}

    version: str = Field(description="Package version")
    licenses: list[str] = Field(
        default_factory=list, description="Declared license identifiers"
    )
    allowed: bool = Field(description="Whether the package may be used")
    exception_applied: bool = Field(
        default=False, description="Disallowed but whitelisted by package name"
    )


class Report(BaseModel):
    """Result of checking all dependencies of a root project."""

    model_config = {"extra": "forbid"}

    root_name: str = Field(description="Display name of the root project")
    root_version: str = Field(description="Version of the root project")
    root_licenses: list[str] = Field(
        default_factory=list, description="Licenses of the root project"
    )
    entries: dict[str, ReportEntry] = Field(
        default_factory=dict,
        description="Dependencies keyed by display name, sorted by name",
    )

    @property
    def has_violations(self) -> bool:
        """Check if any dependency is disallowed, whitelisted or not.

        Returns:
            True if at least one entry is not allowed.
        """
        return any(not entry.allowed for entry in self.entries.values())

    @property
    def has_unresolved_violations(self) -> bool:
        """Check if any dependency is disallowed without an exception.

        Returns:
            True if at least one entry is neither allowed nor whitelisted.
        """
        return any(
            not entry.allowed and not entry.exception_applied
            for entry in self.entries.values()
        )

    @classmethod
    def from_packages(
        cls,
        root: RootPackage,
        packages: Iterable[Package],
        policy: Policy,
    ) -> Report:
        """Evaluate packages against a policy and build the report.

        Args:
            root: The project being checked.
            packages: Collected dependencies.
            policy: Policy of the root project.

        Returns:
            Report with one entry per package display name.
        """
        # analysis.policy imports the models package, which imports this module
        from license_gate.analysis.policy import evaluate_package

        entries: dict[str, ReportEntry] = {}
        for package in packages:
            decision = evaluate_package(policy, package)
            entries[package.pretty_name] = ReportEntry(
                version=package.version,
                licenses=list(package.licenses),
                allowed=decision.allowed,
                exception_applied=decision.exception_applied,
            )

        return cls(
            root_name=root.pretty_name,
            root_version=root.version,
            root_licenses=list(root.licenses),
            entries=dict(sorted(entries.items())),
        )
