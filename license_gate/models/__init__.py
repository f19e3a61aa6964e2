"""Pydantic data models for license-gate."""

from license_gate.models.events import GateOutcome, Operation, PackageEvent
from license_gate.models.package import Package, RootPackage
from license_gate.models.policy import Decision, Policy
from license_gate.models.report import Report, ReportEntry

__all__ = [
    "Decision",
    "GateOutcome",
    "Operation",
    "Package",
    "PackageEvent",
    "Policy",
    "Report",
    "ReportEntry",
    "RootPackage",
]
