"""License policy evaluation for a single package."""
from __future__ import annotations

from packaging.utils import canonicalize_name

from license_gate.constants import PLUGIN_PACKAGE_NAME
from license_gate.models.package import Package
from license_gate.models.policy import Decision, Policy


def is_self_package(package: Package) -> bool:
    """Check if the package is license-gate itself.

    Args:
        package: Package to check.

    Returns:
        True if the package's canonical name is this tool's name.
    """
    return canonicalize_name(package.name) == PLUGIN_PACKAGE_NAME


def evaluate_package(policy: Policy, package: Package) -> Decision:
    """Decide whether a package may be used under a policy.

    The blacklist is checked first and wins over the whitelist. A non-empty
    whitelist then narrows the result: the package needs at least one
    whitelisted license. An entry in whitelisted_packages never makes the
    package allowed, it only marks the disallowed result as tolerated.
    License and package name matching is case-sensitive.

    Args:
        policy: Policy of the root project.
        package: Package to evaluate.

    Returns:
        Decision for the package.
    """
    # The checker is added to a project on purpose, whatever its license.
    if is_self_package(package):
        return Decision(allowed=True, exception_applied=False)

    licenses = set(package.licenses)

    allowed = True
    if policy.blacklist:
        allowed = not (licenses & policy.blacklist)
    if allowed and policy.whitelist:
        allowed = bool(licenses & policy.whitelist)

    exception_applied = (
        not allowed and package.pretty_name in policy.whitelisted_packages
    )

    return Decision(allowed=allowed, exception_applied=exception_applied)
