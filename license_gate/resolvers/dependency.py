"""Collection of the dependency set to check.

Provides DependencyCollector for the full package set of a database and
for the transitive closure of the root's runtime requirements.
"""
from __future__ import annotations

import logging
from collections import deque

from packaging.utils import canonicalize_name

from license_gate.models.package import Package, RootPackage
from license_gate.resolvers.repository import PackageRepository

logger = logging.getLogger(__name__)


class DependencyCollector:
    """Collects the packages of a repository that a root project uses."""

    def __init__(self, repository: PackageRepository) -> None:
        self._repository = repository

    def collect(self, root: RootPackage, no_dev: bool = False) -> dict[str, Package]:
        """Collect packages to check, sorted by name.

        Args:
            root: The project being checked.
            no_dev: Only follow runtime requirements from the root instead of
                taking every package in the repository.

        Returns:
            Mapping of package name to package, sorted by name.
        """
        if no_dev:
            packages = self.collect_required(root)
        else:
            packages = self.collect_all(root)
        return dict(sorted(packages.items()))

    def collect_all(self, root: RootPackage) -> dict[str, Package]:
        """Collect every package in the repository.

        Later packages with the same name replace earlier ones. The root
        project is left out when it is installed into its own environment.

        Args:
            root: The project being checked.

        Returns:
            Mapping of package name to package, in repository order.
        """
        root_name = canonicalize_name(root.name)
        bucket: dict[str, Package] = {}
        for package in self._repository.get_packages():
            if canonicalize_name(package.name) == root_name:
                continue
            bucket[package.name] = package
        return bucket

    def collect_required(self, root: RootPackage) -> dict[str, Package]:
        """Collect the transitive closure of the root's runtime requirements.

        Breadth-first over requirement names. A package already collected is
        never expanded again, so requirement cycles terminate. Development
        requirements of the root are not followed.

        Args:
            root: The project being checked.

        Returns:
            Mapping of package name to package, in discovery order.
        """
        bucket: dict[str, Package] = {}
        visited: set[str] = {canonicalize_name(root.name)}
        queue: deque[str] = deque(root.requires)

        while queue:
            name = canonicalize_name(queue.popleft())
            if name in visited:
                continue
            visited.add(name)

            package = self._repository.find(name)
            if package is None:
                logger.debug("Requirement %s is not installed, skipping", name)
                continue

            bucket[package.name] = package
            queue.extend(package.requires)

        return bucket
