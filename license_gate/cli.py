"""CLI entry point for license-gate."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click
from rich.console import Console

from license_gate import __version__
from license_gate.config import load_policy
from license_gate.constants import EXIT_ERROR, EXIT_ISSUES, EXIT_SUCCESS
from license_gate.exceptions import (
    LicenseGateError,
    LicenseNotAllowedError,
    UnsupportedFormatError,
)
from license_gate.gate import GateContext, InstallGate
from license_gate.log import configure_logging
from license_gate.models.report import Report
from license_gate.output.report_json import ReportJsonFormatter
from license_gate.output.text import TextFormatter
from license_gate.resolvers.dependency import DependencyCollector
from license_gate.resolvers.pip_report import load_install_report
from license_gate.resolvers.project import load_root_package
from license_gate.resolvers.repository import EnvironmentRepository

logger = logging.getLogger(__name__)

# Module-level console for consistent output
_console = Console()
# Separate console for warnings and errors (writes to stderr)
_error_console = Console(stderr=True)


@click.group()
@click.version_option(version=__version__)
@click.option(
    "--verbose",
    "-v",
    "verbose_flag",
    is_flag=True,
    default=False,
    help="Show debug output.",
)
def main(verbose_flag: bool) -> None:
    """License Gate - Check dependency licenses against a project policy.

    The policy lives in the [tool.license-gate] table of pyproject.toml
    (or a .license-gate.yaml file) and lists allowed licenses (whitelist),
    forbidden licenses (blacklist) and packages tolerated despite their
    license (whitelisted-packages).

    \b
    Examples:
        license-gate check-licenses
        license-gate check-licenses --format json
        license-gate check-licenses --no-dev
        license-gate gate report.json
    """
    configure_logging(verbose_flag)
    logger.debug("license-gate %s has been enabled", __version__)


@main.command(name="check-licenses")
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(["text", "json"], case_sensitive=False),
    default="text",
    help="Format of the output: text or json (default: text).",
)
@click.option(
    "--no-dev",
    "no_dev",
    is_flag=True,
    default=False,
    help="Only check runtime requirements of the project, not dev packages.",
)
@click.option(
    "--project",
    "-p",
    "project_path",
    type=click.Path(exists=True, file_okay=False),
    default=".",
    help="Project directory containing pyproject.toml (default: current directory).",
)
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Path to a policy file.",
)
@click.option(
    "--path",
    "site_paths",
    multiple=True,
    help="Directory holding installed packages (repeatable, default: sys.path).",
)
def check_licenses(
    output_format: str,
    no_dev: bool,
    project_path: str,
    config_path: str | None,
    site_paths: tuple[str, ...],
) -> None:
    """Validate licenses of installed packages against the project policy.

    Displays the licenses of the installed packages and whether they are
    allowed or forbidden to be used in the root project.

    \b
    Examples:
        license-gate check-licenses
        license-gate check-licenses --format json
        license-gate check-licenses --no-dev
        license-gate check-licenses --project path/to/project
        license-gate check-licenses --path .venv/lib/python3.12/site-packages
    """
    format_value = output_format.lower()

    try:
        project_dir = Path(project_path)
        root = load_root_package(project_dir)
        policy = load_policy(config_path, root, project_dir)

        repository = EnvironmentRepository.from_paths(list(site_paths) or None)
        packages = DependencyCollector(repository).collect(root, no_dev=no_dev)
        logger.debug("Checking %d packages", len(packages))

        report = Report.from_packages(root, packages.values(), policy)
        violation_found = _display_report(report, format_value)

        if violation_found:
            sys.exit(EXIT_ISSUES)
        sys.exit(EXIT_SUCCESS)

    except LicenseGateError as e:
        _display_error(e, format_value)
        sys.exit(EXIT_ERROR)


@main.command()
@click.argument("report_path", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--project",
    "-p",
    "project_path",
    type=click.Path(exists=True, file_okay=False),
    default=".",
    help="Project directory containing pyproject.toml (default: current directory).",
)
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Path to a policy file.",
)
@click.option(
    "--path",
    "site_paths",
    multiple=True,
    help="Directory holding installed packages (repeatable, default: sys.path).",
)
def gate(
    report_path: str,
    project_path: str,
    config_path: str | None,
    site_paths: tuple[str, ...],
) -> None:
    """Check packages about to be installed against the project policy.

    Reads the installation report written by
    `pip install --dry-run --report REPORT_PATH ...` and fails on the first
    package whose licenses are not allowed. Whitelisted packages only
    produce a warning.

    \b
    Examples:
        pip install --dry-run --report report.json -r requirements.txt
        license-gate gate report.json && pip install -r requirements.txt
    """
    try:
        project_dir = Path(project_path)
        root = load_root_package(project_dir)
        policy = load_policy(config_path, root, project_dir)

        installed = EnvironmentRepository.from_paths(list(site_paths) or None)
        events = load_install_report(Path(report_path), installed)

        install_gate = InstallGate(GateContext(policy, console=_error_console))
        try:
            install_gate.check_events(events)
        except LicenseNotAllowedError as e:
            _error_console.print(
                str(e),
                style="red bold",
                markup=False,
                highlight=False,
                soft_wrap=True,
            )
            sys.exit(EXIT_ISSUES)

        sys.exit(EXIT_SUCCESS)

    except LicenseGateError as e:
        _display_error(e, "text")
        sys.exit(EXIT_ERROR)


def _display_report(report: Report, format_type: str) -> bool:
    """Display a report in the specified format.

    The text format counts whitelisted packages as resolved; the json
    format reports every disallowed package as a violation.

    Args:
        report: The report to display.
        format_type: Output format (text, json).

    Returns:
        True if a violation was found for this format.

    Raises:
        UnsupportedFormatError: If the format is not text or json. The
            --format option already rejects other values, so this only
            guards callers outside the CLI.
    """
    if format_type == "text":
        TextFormatter(console=_console).format_report(report)
        return report.has_unresolved_violations

    if format_type == "json":
        click.echo(ReportJsonFormatter().format_report(report))
        return report.has_violations

    raise UnsupportedFormatError(format_type)


def _display_error(error: LicenseGateError, format_type: str) -> None:
    """Display error message to user.

    All errors are written to stderr for consistent CI/CD behavior.

    Args:
        error: The exception that occurred.
        format_type: Output format type for styling.
    """
    error_type = type(error).__name__
    message = f"Error: {error_type}: {error}"

    if format_type == "text":
        _error_console.print(
            message, style="red bold", markup=False, highlight=False, soft_wrap=True
        )
    else:
        click.echo(message, err=True)


if __name__ == "__main__":
    main()
