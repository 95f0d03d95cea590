"""CLI runner for libreoffice-installer.

Loads settings, configures logging and drives one install run. Any
installer error is logged and turned into exit status 1.
"""

import sys
from argparse import Namespace

from libreoffice_installer import __version__
from libreoffice_installer.config import Paths, SettingsManager
from libreoffice_installer.core.commands import CommandRunner
from libreoffice_installer.core.disk_image import DiskImageManager
from libreoffice_installer.core.download import (
    DownloadService,
    create_http_session,
)
from libreoffice_installer.core.install import InstallOrchestrator
from libreoffice_installer.core.probe import BundleProbe
from libreoffice_installer.core.processes import RunningInstanceTerminator
from libreoffice_installer.core.release import detect_architecture
from libreoffice_installer.domain.types import GlobalConfig, InstallResult
from libreoffice_installer.exceptions import InstallerError
from libreoffice_installer.logger import get_logger, setup_logging

from .parser import CLIParser

logger = get_logger(__name__)

EXIT_FAILURE = 1


class CLIRunner:
    """CLI command runner and orchestrator."""

    def __init__(
        self, settings_manager: SettingsManager | None = None
    ) -> None:
        self.settings_manager = settings_manager or SettingsManager()
        self.runner = CommandRunner()

    async def run(self, argv: list[str] | None = None) -> None:
        """Run the CLI application.

        Raises:
            SystemExit: With status 1 on a missing target volume or any
                installer error

        """
        args = CLIParser().parse_args(argv)

        if args.version:
            print(__version__)  # noqa: T201
            return

        if not args.target_volume:
            logger.error(
                "Missing target volume: expected it as the third argument"
            )
            sys.exit(EXIT_FAILURE)

        try:
            global_config = self.settings_manager.load_global_config()
            self._setup_logging(global_config, verbose=args.verbose)
            await self._install(args, global_config)
        except InstallerError as e:
            logger.error("%s", e)
            sys.exit(EXIT_FAILURE)

    def _setup_logging(
        self, global_config: GlobalConfig, *, verbose: bool
    ) -> None:
        console_level = (
            "DEBUG" if verbose else global_config["console_log_level"]
        )
        setup_logging(
            console_level=console_level,
            file_level=global_config["log_level"],
            log_file=Paths.log_file(global_config["directory"]["logs"]),
        )

    async def _install(
        self, args: Namespace, global_config: GlobalConfig
    ) -> InstallResult:
        arch = detect_architecture(
            args.arch or global_config["release"]["architecture"]
        )
        app_path = Paths.app_bundle(args.target_volume)

        async with create_http_session(global_config) as session:
            orchestrator = InstallOrchestrator(
                download_service=DownloadService(session),
                probe=BundleProbe(app_path, self.runner),
                terminator=RunningInstanceTerminator(self.runner),
                disk_images=DiskImageManager(self.runner),
                arch=arch,
                work_dir=global_config["directory"]["download"],
                version_url=global_config["release"]["version_url"],
                runner=self.runner,
            )
            return await orchestrator.run()
