"""Policy-related Pydantic models for license-gate."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, Field

from license_gate.constants import (
    BLACKLIST_KEY,
    WHITELIST_KEY,
    WHITELISTED_PACKAGES_KEY,
)


def _string_list(value: Any) -> frozenset[str]:
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, (list, tuple)):
        return frozenset()
    return frozenset(item for item in value if isinstance(item, str) and item)


def _string_mapping(value: Any) -> dict[str, str]:
    if not isinstance(value, Mapping):
        return {}
    return {
        key: constraint
        for key, constraint in value.items()
        if isinstance(key, str) and key and isinstance(constraint, str)
    }


class Policy(BaseModel):
    """License policy of the root project.

    Built once per run from the project's configuration block and never
    mutated afterwards.
    """

    model_config = {"extra": "forbid", "frozen": True}

    whitelist: frozenset[str] = Field(
        default_factory=frozenset,
        description="License identifiers explicitly permitted",
    )
    blacklist: frozenset[str] = Field(
        default_factory=frozenset,
        description="License identifiers explicitly forbidden",
    )
    whitelisted_packages: dict[str, str] = Field(
        default_factory=dict,
        description="Package names tolerated despite a disallowed license, "
        "mapped to a version constraint kept as metadata",
    )

    @classmethod
    def from_config(cls, config: Any) -> Policy:
        """Create a Policy from a loosely-typed configuration mapping.

        Never raises. Anything that is not a mapping is treated as an empty
        configuration, unknown keys are ignored and entries of the wrong
        type are dropped.

        Args:
            config: The raw configuration block (may be None).

        Returns:
            Normalized Policy.
        """
        if not isinstance(config, Mapping):
            return cls()

        return cls(
            whitelist=_string_list(config.get(WHITELIST_KEY)),
            blacklist=_string_list(config.get(BLACKLIST_KEY)),
            whitelisted_packages=_string_mapping(config.get(WHITELISTED_PACKAGES_KEY)),
        )


class Decision(BaseModel):
    """Outcome of evaluating one package against a policy."""

    model_config = {"extra": "forbid", "frozen": True}

    allowed: bool = Field(default=True, description="Whether the package may be used")
    exception_applied: bool = Field(
        default=False,
        description="Disallowed but listed in whitelisted-packages",
    )
