"""Domain types for libreoffice-installer.

Frozen dataclasses and enums shared by the core services, plus the
TypedDicts describing the loaded settings.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import TypedDict


class InstallChannel(Enum):
    """How the installed bundle was obtained."""

    DIRECT = "direct"
    # Store-managed copies are replaced by the direct build
    LOCKED_STORE = "locked_store"


class Comparison(Enum):
    """Outcome of comparing two version strings."""

    LESS = "less"
    EQUAL = "equal"
    GREATER = "greater"
    INCOMPARABLE = "incomparable"


class UpgradeReason(Enum):
    """Why an installation is required."""

    MISSING = "missing"
    LOCKED_CHANNEL = "locked_channel"
    OUTDATED = "outdated"
    VERSION_UNKNOWN = "version_unknown"


@dataclass(frozen=True, slots=True)
class InstalledApp:
    """Snapshot of the application bundle at the target path."""

    path: Path
    present: bool
    version: str | None = None
    channel: InstallChannel = InstallChannel.DIRECT

    @classmethod
    def missing(cls, path: Path) -> "InstalledApp":
        """Return a snapshot for a bundle that does not exist."""
        return cls(path=path, present=False)


@dataclass(frozen=True, slots=True)
class UpgradeRequirement:
    """Whether an install is needed, and why.

    ``reason`` is set exactly when ``required`` is true.
    """

    required: bool
    reason: UpgradeReason | None = None

    def __post_init__(self) -> None:
        """Reject a reason without a requirement and vice versa."""
        if self.required != (self.reason is not None):
            msg = (
                "reason must be set exactly when installation is required: "
                f"required={self.required}, reason={self.reason}"
            )
            raise ValueError(msg)

    def __bool__(self) -> bool:
        return self.required

    @classmethod
    def because(cls, reason: UpgradeReason) -> "UpgradeRequirement":
        return cls(required=True, reason=reason)

    @classmethod
    def not_required(cls) -> "UpgradeRequirement":
        return cls(required=False)


@dataclass(frozen=True, slots=True)
class RunningInstance:
    """A running application process and its owner."""

    pid: int
    user: str


@dataclass(frozen=True, slots=True)
class InstallResult:
    """Outcome of one install-or-upgrade run."""

    version: str
    requirement: UpgradeRequirement
    installed: bool


class NetworkConfig(TypedDict):
    """Network configuration section."""

    timeout_seconds: int


class ReleaseConfig(TypedDict):
    """Release lookup configuration section."""

    version_url: str
    architecture: str


class DirectoryConfig(TypedDict):
    """Directory configuration section."""

    download: Path
    logs: Path


class GlobalConfig(TypedDict):
    """Complete settings after parsing and conversion."""

    log_level: str
    console_log_level: str
    network: NetworkConfig
    release: ReleaseConfig
    directory: DirectoryConfig
