"""Exception classes for libreoffice-installer operations."""


class InstallerError(Exception):
    """Base exception for libreoffice-installer operations."""

    error_prefix: str = "Operation failed"

    def __init__(self, message: str, target: str | None = None) -> None:
        """Initialize error with message and optional target.

        Args:
            message: Error message describing the failure.
            target: Optional name of the URL, path or process that failed.

        """
        super().__init__(message)
        self.message = message
        self.target = target

    def __str__(self) -> str:
        """Return formatted error message."""
        if self.target:
            return f"{self.error_prefix} for '{self.target}': {self.message}"
        return f"{self.error_prefix}: {self.message}"


class NetworkError(InstallerError):
    """Raised when a host is unreachable, returns non-2xx or bad content."""

    error_prefix = "Network request failed"


class ChecksumMismatchError(InstallerError):
    """Raised when a downloaded artifact fails integrity verification."""

    error_prefix = "Checksum verification failed"


class ProbeError(InstallerError):
    """Raised when installed bundle metadata cannot be read."""

    error_prefix = "Probe failed"


class QuitFailureError(InstallerError):
    """Raised when running instances could not be enumerated or quit."""

    error_prefix = "Quit failed"


class MountError(InstallerError):
    """Raised when a disk image cannot be attached or detached."""

    error_prefix = "Disk image operation failed"


class CopyError(InstallerError):
    """Raised when the application bundle cannot be replaced."""

    error_prefix = "Copy failed"


class UnsupportedArchitectureError(InstallerError):
    """Raised when no disk image exists for the machine architecture."""

    error_prefix = "Unsupported architecture"


class CommandError(InstallerError):
    """Raised when an external command cannot be started."""

    error_prefix = "Command failed"


class ConfigurationError(InstallerError):
    """Raised when the settings file cannot be parsed."""

    error_prefix = "Configuration error"
