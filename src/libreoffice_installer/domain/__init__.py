"""Pure domain types and version logic."""

from libreoffice_installer.domain.types import (
    Comparison,
    InstallChannel,
    InstalledApp,
    InstallResult,
    RunningInstance,
    UpgradeReason,
    UpgradeRequirement,
)
from libreoffice_installer.domain.version import (
    compare_versions,
    parse_version,
)

__all__ = [
    "Comparison",
    "InstallChannel",
    "InstallResult",
    "InstalledApp",
    "RunningInstance",
    "UpgradeReason",
    "UpgradeRequirement",
    "compare_versions",
    "parse_version",
]
