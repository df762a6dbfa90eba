"""
Exception classes for the versioning module.
"""

from typing import Optional


class VersioningError(Exception):
    """Base exception for all versioning-related errors."""

    pass


class VersionFormatError(VersioningError):
    """Raised when a version string has an invalid format."""

    def __init__(self, version_string: str, expected_format: str = "x.y.z"):
        self.version_string = version_string
        self.expected_format = expected_format
        super().__init__(
            f"Invalid version format: '{version_string}'. "
            f"Expected format: {expected_format}"
        )


class ConfigurationError(VersioningError):
    """Raised when the configuration cannot be loaded or is invalid."""

    def __init__(self, message: str, path: Optional[str] = None):
        self.message = message
        self.path = path
        if path:
            super().__init__(f"Invalid configuration in {path}: {message}")
        else:
            super().__init__(f"Invalid configuration: {message}")


class RepositoryError(VersioningError):
    """Raised when the git repository cannot be opened or read."""

    def __init__(self, path: str, message: str = ""):
        self.path = path
        if message:
            super().__init__(f"Repository error for {path}: {message}")
        else:
            super().__init__(f"Could not open git repository at {path}")


class NoBaseVersionError(VersioningError):
    """Raised when no strategy produced a base version and no fallback is configured."""

    def __init__(self, branch_name: str = ""):
        self.branch_name = branch_name
        where = f" on branch '{branch_name}'" if branch_name else ""
        super().__init__(
            f"No base version found{where} and no fallback-version is configured"
        )
