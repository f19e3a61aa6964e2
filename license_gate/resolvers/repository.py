"""Package databases the dependency collector reads from."""
from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from importlib.metadata import distributions
from pathlib import Path
from typing import Optional

from packaging.utils import canonicalize_name

from license_gate.exceptions import ConfigurationError
from license_gate.models.package import Package
from license_gate.resolvers.metadata import package_from_distribution

logger = logging.getLogger(__name__)


class PackageRepository:
    """In-memory database of resolved packages.

    Packages keep their insertion order. Lookups by name return the last
    package registered under that name.
    """

    def __init__(self, packages: Iterable[Package] = ()) -> None:
        self._packages: list[Package] = list(packages)
        self._index: dict[str, Package] = {}
        for package in self._packages:
            self._index[canonicalize_name(package.name)] = package

    def get_packages(self) -> list[Package]:
        """Return all packages in insertion order, duplicates included."""
        return list(self._packages)

    def find(self, name: str) -> Optional[Package]:
        """Find a package by name.

        Args:
            name: Package name, canonicalized before lookup.

        Returns:
            The last package registered under the name, or None.
        """
        return self._index.get(canonicalize_name(name))

    def __len__(self) -> int:
        return len(self._packages)


class EnvironmentRepository(PackageRepository):
    """Packages installed in a Python environment."""

    @classmethod
    def from_paths(cls, paths: Optional[Sequence[str]] = None) -> EnvironmentRepository:
        """Read installed distributions from sys.path or the given directories.

        Args:
            paths: Directories to search (e.g. a virtualenv's site-packages).
                Defaults to sys.path of the running interpreter.

        Returns:
            Repository of installed packages.

        Raises:
            ConfigurationError: If a given directory does not exist or the
                installed metadata cannot be read.
        """
        search_paths: Optional[list[str]] = None
        if paths:
            search_paths = []
            for path in paths:
                if not Path(path).is_dir():
                    raise ConfigurationError(
                        f"Package database '{path}' does not exist or is not a directory"
                    )
                search_paths.append(str(path))

        try:
            dists = (
                distributions(path=search_paths)
                if search_paths is not None
                else distributions()
            )
            packages = [
                package
                for package in (package_from_distribution(dist) for dist in dists)
                if package is not None
            ]
        except OSError as e:
            raise ConfigurationError(f"Cannot read installed packages: {e}") from e

        logger.debug("Found %d installed packages", len(packages))
        return cls(packages)
