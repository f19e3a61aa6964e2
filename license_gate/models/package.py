"""Package Pydantic models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class Package(BaseModel):
    """A resolved package from the package database."""

    model_config = {"extra": "forbid"}

    name: str = Field(description="Canonical package name (unique key)")
    pretty_name: str = Field(description="Package name as declared in metadata")
    version: str = Field(description="Resolved version")
    licenses: list[str] = Field(
        default_factory=list,
        description="Declared license identifiers in declaration order",
    )
    requires: list[str] = Field(
        default_factory=list,
        description="Canonical names of runtime requirements",
    )


class RootPackage(Package):
    """The project being checked.

    Carries the development requirements that are never traversed in
    runtime-only mode, plus the policy block of its manifest.
    """

    dev_requires: list[str] = Field(
        default_factory=list,
        description="Canonical names of development/optional requirements",
    )
    config: dict[str, Any] = Field(
        default_factory=dict,
        description="The [tool.license-gate] table of the manifest",
    )
