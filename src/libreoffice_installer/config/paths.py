"""Path constants and utilities for libreoffice-installer."""

import os
import tempfile
from pathlib import Path

from libreoffice_installer.constants import (
    APP_BUNDLE_RELATIVE_PATH,
    CONFIG_DIR_ENV,
    CONFIG_FILE_NAME,
    DEFAULT_CONFIG_DIR,
    LOG_DIR_ENV,
    LOG_FILE_NAME,
)


class Paths:
    """Application paths and directory structure.

    Directories are resolved on each call so environment overrides set by
    tests or management tooling take effect without re-importing.
    """

    @classmethod
    def config_dir(cls) -> Path:
        """Get the directory holding ``settings.conf``."""
        override = os.environ.get(CONFIG_DIR_ENV)
        if override:
            return cls.expand_path(override)
        return Path(DEFAULT_CONFIG_DIR)

    @classmethod
    def settings_file(cls) -> Path:
        return cls.config_dir() / CONFIG_FILE_NAME

    @classmethod
    def default_log_dir(cls) -> Path:
        override = os.environ.get(LOG_DIR_ENV)
        if override:
            return cls.expand_path(override)
        return cls.config_dir() / "logs"

    @classmethod
    def log_file(cls, log_dir: Path) -> Path:
        return log_dir / LOG_FILE_NAME

    @classmethod
    def default_download_dir(cls) -> Path:
        return Path(tempfile.gettempdir())

    @classmethod
    def app_bundle(cls, target_volume: str | Path) -> Path:
        """Get the bundle location on the target volume.

        Args:
            target_volume: Volume root passed by the package installer

        Returns:
            ``<target_volume>/Applications/LibreOffice.app``

        Example:
            >>> Paths.app_bundle("/")
            PosixPath('/Applications/LibreOffice.app')

        """
        return Path(target_volume) / APP_BUNDLE_RELATIVE_PATH

    @classmethod
    def expand_path(cls, path_str: str) -> Path:
        """Expand and resolve path with ~ and relative path support."""
        return Path(path_str).expanduser().resolve(strict=False)
