"""Default configuration values for license-gate."""

from __future__ import annotations

from license_gate.models.policy import Policy

# Policy file names searched for in the project directory
DEFAULT_CONFIG_NAMES = [".license-gate.yaml", ".license-gate.yml"]


def get_default_policy() -> Policy:
    """Get the policy used when nothing is configured.

    Returns:
        Policy with empty lists, which allows every package.
    """
    return Policy()
