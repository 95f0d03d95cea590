"""Inspect the installed application bundle."""

from pathlib import Path
from typing import Protocol

from libreoffice_installer.constants import (
    DEFAULTS_BIN,
    INFO_PLIST_RELATIVE_PATH,
    STORE_RECEIPT_RELATIVE_PATH,
    VERSION_PLIST_KEY,
)
from libreoffice_installer.core.commands import CommandRunner
from libreoffice_installer.domain.types import InstallChannel, InstalledApp
from libreoffice_installer.exceptions import ProbeError
from libreoffice_installer.logger import get_logger

logger = get_logger(__name__)


class InstalledAppProbe(Protocol):
    """Anything that can report the state of the installed bundle."""

    path: Path

    async def probe(self) -> InstalledApp: ...


class BundleProbe:
    """Probe a macOS application bundle on disk."""

    def __init__(
        self, path: Path, runner: CommandRunner | None = None
    ) -> None:
        self.path = path
        self.runner = runner or CommandRunner()

    def is_present(self) -> bool:
        return self.path.is_dir()

    def installed_from_store(self) -> bool:
        """Check for the App Store receipt inside the bundle."""
        return (self.path / STORE_RECEIPT_RELATIVE_PATH).is_file()

    async def read_version(self) -> str:
        """Read the short version string from ``Info.plist``.

        Raises:
            ProbeError: If ``defaults`` fails or prints nothing

        """
        plist = self.path / INFO_PLIST_RELATIVE_PATH
        result = await self.runner.run(
            DEFAULTS_BIN, "read", str(plist), VERSION_PLIST_KEY
        )
        if not result.ok:
            raise ProbeError(result.first_error_line(), target=str(plist))

        version = result.stdout.strip()
        if not version:
            msg = f"{VERSION_PLIST_KEY} is empty"
            raise ProbeError(msg, target=str(plist))
        return version

    async def probe(self) -> InstalledApp:
        """Take a snapshot of the bundle.

        An unreadable version is reported as None so the bundle gets
        reinstalled rather than aborting the run.
        """
        if not self.is_present():
            return InstalledApp.missing(self.path)

        channel = (
            InstallChannel.LOCKED_STORE
            if self.installed_from_store()
            else InstallChannel.DIRECT
        )
        try:
            version = await self.read_version()
        except ProbeError as e:
            logger.warning("Unable to read installed version: %s", e)
            version = None

        logger.debug(
            "Probed %s: version=%s channel=%s",
            self.path,
            version,
            channel.value,
        )
        return InstalledApp(
            path=self.path, present=True, version=version, channel=channel
        )
