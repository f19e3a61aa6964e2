"""Text report formatter using Rich."""
from typing import Optional

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from license_gate.models.report import Report, ReportEntry

# Width used to measure the table without squeezing any column
_UNBOUNDED_WIDTH = 10_000


def format_licenses(licenses: list[str]) -> str:
    """Join licenses for display, or "none" if there are none."""
    return ", ".join(licenses) or "none"


def format_allowed(entry: ReportEntry) -> str:
    """Describe whether a dependency may be used.

    Args:
        entry: Report entry of the dependency.

    Returns:
        "yes", "no" or "no (whitelisted)".
    """
    if entry.allowed:
        return "yes"
    if entry.exception_applied:
        return "no (whitelisted)"
    return "no"


class TextFormatter:
    """Format license reports for terminal display using Rich.

    Prints the root project's identity followed by a compact table of all
    dependencies with their licenses and whether they may be used.
    """

    def __init__(self, console: Optional[Console] = None) -> None:
        """Initialize the formatter with a Rich console.

        Args:
            console: Optional Rich Console instance. If not provided,
                a new Console will be created.
        """
        self._console = console if console is not None else Console()

    def format_report(self, report: Report) -> None:
        """Format and display a report.

        Args:
            report: The report to display.
        """
        self._console.print(f"Name: [yellow]{escape(report.root_name)}[/yellow]")
        self._console.print(f"Version: [yellow]{escape(report.root_version)}[/yellow]")
        self._console.print(
            f"Licenses: [yellow]{escape(format_licenses(report.root_licenses))}[/yellow]"
        )
        self._console.print("Dependencies:")
        self._console.print("")

        table = Table(box=box.SIMPLE_HEAD, show_edge=False, pad_edge=False)
        table.add_column("Name", style="cyan", no_wrap=True)
        table.add_column("Version", style="magenta")
        table.add_column("License", style="green")
        table.add_column("Allowed to Use?")

        for name, entry in sorted(report.entries.items()):
            table.add_row(
                escape(name),
                escape(entry.version),
                escape(format_licenses(entry.licenses)),
                self._styled_allowed(entry),
            )

        # Rows are never shrunk below their content, even on narrow consoles
        natural_width = self._console.measure(
            table, options=self._console.options.update_width(_UNBOUNDED_WIDTH)
        ).maximum
        if natural_width > self._console.width:
            table.width = natural_width
        self._console.print(table, crop=False)

    @staticmethod
    def _styled_allowed(entry: ReportEntry) -> str:
        if entry.allowed:
            color = "green"
        elif entry.exception_applied:
            color = "yellow"
        else:
            color = "red"
        return f"[{color}]{format_allowed(entry)}[/{color}]"
