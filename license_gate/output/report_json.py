"""JSON output formatter for license reports."""
import json
from typing import Any

from license_gate.models.report import Report


class ReportJsonFormatter:
    """Format license reports as JSON output.

    Field names are stable and the output is deterministic, so the same
    report always serializes to the same bytes.
    """

    def format_report(self, report: Report) -> str:
        """Format a report as a JSON string.

        Args:
            report: The report to format.

        Returns:
            JSON string representation of the report.
        """
        return json.dumps(self._build_output(report), indent=2)

    def _build_output(self, report: Report) -> dict[str, Any]:
        return {
            "name": report.root_name,
            "version": report.root_version,
            "license": list(report.root_licenses),
            "dependencies": {
                name: {
                    "version": entry.version,
                    "license": list(entry.licenses),
                    "allowed_to_use": entry.allowed,
                    "whitelisted": entry.exception_applied,
                }
                for name, entry in sorted(report.entries.items())
            },
        }
