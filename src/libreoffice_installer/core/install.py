"""Install or upgrade the application bundle.

The orchestrator runs these steps in order:

1. Look up the latest stable version
2. Probe the installed bundle and decide whether to install
3. Download and verify the disk image
4. Quit running instances
5. Mount the image and replace the bundle
6. Unmount

Replacing the bundle is not atomic. The old bundle is removed before
the new one is copied, so a failed copy leaves no bundle behind and the
next run reinstalls it as missing.
"""

import shutil
from pathlib import Path

from libreoffice_installer.constants import (
    APP_BUNDLE_NAME,
    APP_NAME,
    DITTO_BIN,
    PROCESS_NAME,
    VERSION_URL,
)
from libreoffice_installer.core.commands import CommandRunner
from libreoffice_installer.core.decision import needs_installation
from libreoffice_installer.core.disk_image import DiskImageManager
from libreoffice_installer.core.download import DownloadService
from libreoffice_installer.core.probe import InstalledAppProbe
from libreoffice_installer.core.processes import RunningInstanceTerminator
from libreoffice_installer.core.release import fetch_latest_version
from libreoffice_installer.core.verification import acquire_disk_image
from libreoffice_installer.domain.types import InstallResult
from libreoffice_installer.exceptions import CopyError
from libreoffice_installer.logger import get_logger

logger = get_logger(__name__)


class InstallOrchestrator:
    """Drive one install-or-upgrade run."""

    def __init__(
        self,
        download_service: DownloadService,
        probe: InstalledAppProbe,
        terminator: RunningInstanceTerminator,
        disk_images: DiskImageManager,
        arch: str,
        work_dir: Path,
        version_url: str = VERSION_URL,
        runner: CommandRunner | None = None,
    ) -> None:
        """Initialize the orchestrator.

        Args:
            download_service: Service for pages and artifacts
            probe: Reports the state of the installed bundle
            terminator: Quits running instances
            disk_images: Mounts the downloaded image
            arch: Supported architecture name
            work_dir: Directory receiving the downloads
            version_url: Download page listing the versions
            runner: Command runner used for the copy

        """
        self.download_service = download_service
        self.probe = probe
        self.terminator = terminator
        self.disk_images = disk_images
        self.arch = arch
        self.work_dir = work_dir
        self.version_url = version_url
        self.runner = runner or CommandRunner()

    @property
    def app_path(self) -> Path:
        return self.probe.path

    async def run(self) -> InstallResult:
        """Install the latest version when needed.

        Returns:
            The target version and whether it was installed

        Raises:
            InstallerError: Any step failure, after the image is unmounted

        """
        logger.debug("State: fetching latest version")
        version = await fetch_latest_version(
            self.download_service, self.version_url
        )

        logger.debug("State: probing %s", self.app_path)
        installed = await self.probe.probe()
        requirement = needs_installation(installed, version)
        if not requirement:
            logger.info("%s %s is already up to date.", APP_NAME, version)
            return InstallResult(
                version=version, requirement=requirement, installed=False
            )

        logger.debug("State: downloading (%s)", requirement.reason.value)
        image = await acquire_disk_image(
            self.download_service, version, self.arch, self.work_dir
        )

        logger.debug("State: quitting running instances")
        await self.terminator.quit_all(PROCESS_NAME)

        logger.debug("State: mounting %s", image.name)
        async with self.disk_images.mounted(image) as mount_point:
            logger.debug("State: replacing bundle")
            await self.replace_bundle(mount_point / APP_BUNDLE_NAME)
        logger.debug("State: unmounted")

        logger.info("%s %s has been installed.", APP_NAME, version)
        return InstallResult(
            version=version, requirement=requirement, installed=True
        )

    async def replace_bundle(self, source: Path) -> None:
        """Replace the installed bundle with ``source``.

        ``ditto`` preserves the bundle's extended attributes and
        code signature.

        Raises:
            CopyError: If the source is missing or any step fails

        """
        if not source.is_dir():
            msg = f"{APP_BUNDLE_NAME} not found on disk image"
            raise CopyError(msg, target=str(source))

        dest = self.app_path
        if dest.exists():
            try:
                shutil.rmtree(dest)
            except OSError as e:
                msg = f"cannot remove old bundle: {e}"
                raise CopyError(msg, target=str(dest)) from e

        try:
            dest.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise CopyError(str(e), target=str(dest.parent)) from e

        result = await self.runner.run(DITTO_BIN, str(source), str(dest))
        if not result.ok:
            raise CopyError(result.first_error_line(), target=str(dest))
        logger.debug("Copied %s to %s", source, dest)
