"""Output formatters for license-gate."""

from license_gate.output.report_json import ReportJsonFormatter
from license_gate.output.text import TextFormatter

__all__ = [
    "ReportJsonFormatter",
    "TextFormatter",
]
