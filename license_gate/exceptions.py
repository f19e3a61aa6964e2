"""Custom exceptions for license-gate."""


class LicenseGateError(Exception):
    """Base exception for all license-gate errors."""

    pass


class ConfigurationError(LicenseGateError):
    """Exception raised when configuration or the package database is unusable."""

    pass


class UnsupportedFormatError(LicenseGateError):
    """Exception raised when a report format is not supported."""

    def __init__(self, format_name: str) -> None:
        super().__init__(
            f'Unsupported format "{format_name}". See help for supported formats.'
        )
        self.format_name = format_name


class LicenseNotAllowedError(LicenseGateError):
    """Exception raised when a package is installed with a disallowed license."""

    def __init__(self, package_name: str, licenses: list[str]) -> None:
        super().__init__(
            f'ERROR: Licenses "{", ".join(licenses)}" of package "{package_name}" '
            "are not allowed to be used in the project. Installation failed."
        )
        self.package_name = package_name
        self.licenses = list(licenses)
