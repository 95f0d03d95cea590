"""Attach and detach disk images with ``hdiutil``."""

import contextlib
import tempfile
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

from libreoffice_installer.constants import HDIUTIL_BIN, MOUNT_POINT_PREFIX
from libreoffice_installer.core.commands import CommandRunner
from libreoffice_installer.exceptions import MountError
from libreoffice_installer.logger import get_logger

logger = get_logger(__name__)


class DiskImageManager:
    """Mount disk images at private temporary mount points."""

    def __init__(self, runner: CommandRunner | None = None) -> None:
        self.runner = runner or CommandRunner()

    async def attach(self, image: Path) -> Path:
        """Attach ``image`` without showing it in Finder.

        Returns:
            The mount point

        Raises:
            MountError: If the mount point or attach fails

        """
        try:
            mount_point = Path(tempfile.mkdtemp(prefix=MOUNT_POINT_PREFIX))
        except OSError as e:
            msg = f"attach disk image: {e}"
            raise MountError(msg, target=str(image)) from e

        result = await self.runner.run(
            HDIUTIL_BIN,
            "attach",
            str(image),
            "-mountpoint",
            str(mount_point),
            "-nobrowse",
        )
        if not result.ok:
            with contextlib.suppress(OSError):
                mount_point.rmdir()
            raise MountError(result.first_error_line(), target=str(image))

        logger.debug("Attached %s at %s", image.name, mount_point)
        return mount_point

    async def detach(self, mount_point: Path) -> None:
        """Detach the image mounted at ``mount_point``.

        Raises:
            MountError: If hdiutil fails

        """
        result = await self.runner.run(
            HDIUTIL_BIN, "detach", str(mount_point)
        )
        if not result.ok:
            raise MountError(
                result.first_error_line(), target=str(mount_point)
            )
        with contextlib.suppress(OSError):
            mount_point.rmdir()
        logger.debug("Detached %s", mount_point)

    @asynccontextmanager
    async def mounted(self, image: Path) -> AsyncIterator[Path]:
        """Keep ``image`` attached for the duration of the block.

        The image is detached on every exit path. When the block fails,
        a detach failure is logged and the block's error is raised.
        """
        mount_point = await self.attach(image)
        try:
            yield mount_point
        except BaseException:
            try:
                await self.detach(mount_point)
            except MountError as e:
                logger.error("%s", e)
            raise
        await self.detach(mount_point)
