"""Package database and dependency resolution for license-gate."""

from license_gate.resolvers.dependency import DependencyCollector
from license_gate.resolvers.pip_report import events_from_report, load_install_report
from license_gate.resolvers.project import load_root_package
from license_gate.resolvers.repository import EnvironmentRepository, PackageRepository

__all__ = [
    "DependencyCollector",
    "EnvironmentRepository",
    "PackageRepository",
    "events_from_report",
    "load_install_report",
    "load_root_package",
]
