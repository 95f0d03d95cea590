"""Optional INI settings for libreoffice-installer.

The installer works without any settings file. When
``settings.conf`` exists in the configuration directory, its values
override the built-in defaults:

    [DEFAULT]
    log_level = DEBUG
    console_log_level = INFO

    [network]
    timeout_seconds = 60

    [release]
    version_url = https://update.libreoffice.org/description
    architecture = auto

    [directory]
    download = /private/tmp
    logs = /Library/Logs/libreoffice-installer
"""

import configparser
import logging
from pathlib import Path

from libreoffice_installer.config.paths import Paths
from libreoffice_installer.constants import (
    ARCH_AUTO,
    DEFAULT_CONSOLE_LOG_LEVEL,
    DEFAULT_LOG_LEVEL,
    DEFAULT_TIMEOUT_SECONDS,
    KEY_ARCHITECTURE,
    KEY_CONSOLE_LOG_LEVEL,
    KEY_DOWNLOAD,
    KEY_LOG_LEVEL,
    KEY_LOGS,
    KEY_TIMEOUT_SECONDS,
    KEY_VERSION_URL,
    SECTION_DEFAULT,
    SECTION_DIRECTORY,
    SECTION_NETWORK,
    SECTION_RELEASE,
    VERSION_URL,
)
from libreoffice_installer.domain.types import (
    DirectoryConfig,
    GlobalConfig,
    NetworkConfig,
    ReleaseConfig,
)
from libreoffice_installer.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

# Raw INI config dictionary: flat DEFAULT keys plus one dict per section
RawConfigDict = dict[str, str | dict[str, str]]


def _strip_inline_comment(value: str) -> str:
    """Strip an inline comment (anything after ``'  #'``) from a value.

    A ``#`` or ``;`` inside the value, as in a URL fragment, is kept.
    """
    if "  #" in value:
        value = value.split("  #")[0]
    return value.strip()


class SettingsManager:
    """Loads settings from INI with built-in defaults."""

    def __init__(self, settings_file: Path | None = None) -> None:
        """Initialize settings manager.

        Args:
            settings_file: Settings file path
                (defaults to Paths.settings_file())

        """
        self.settings_file = settings_file or Paths.settings_file()

    def get_default_config(self) -> RawConfigDict:
        """Get default configuration values."""
        return {
            KEY_LOG_LEVEL: DEFAULT_LOG_LEVEL,
            KEY_CONSOLE_LOG_LEVEL: DEFAULT_CONSOLE_LOG_LEVEL,
            SECTION_NETWORK: {
                KEY_TIMEOUT_SECONDS: str(DEFAULT_TIMEOUT_SECONDS),
            },
            SECTION_RELEASE: {
                KEY_VERSION_URL: VERSION_URL,
                KEY_ARCHITECTURE: ARCH_AUTO,
            },
            SECTION_DIRECTORY: {
                KEY_DOWNLOAD: str(Paths.default_download_dir()),
                KEY_LOGS: str(Paths.default_log_dir()),
            },
        }

    def _create_parser(
        self, defaults: RawConfigDict
    ) -> configparser.ConfigParser:
        """Create ConfigParser populated with defaults."""
        config = configparser.ConfigParser(
            inline_comment_prefixes=("#", ";"),
            interpolation=None,
        )

        flat_defaults = {
            key: str(value)
            for key, value in defaults.items()
            if not isinstance(value, dict)
        }
        config.read_dict({SECTION_DEFAULT: flat_defaults})

        for key, value in defaults.items():
            if isinstance(value, dict):
                config.add_section(key)
                for subkey, subvalue in value.items():
                    config.set(key, subkey, str(subvalue))

        return config

    def load_global_config(self) -> GlobalConfig:
        """Load settings, overlaying the settings file on the defaults.

        Returns:
            Typed global configuration

        Raises:
            ConfigurationError: If the file is malformed or holds
                invalid values

        """
        config = self._create_parser(self.get_default_config())

        if self.settings_file.exists():
            try:
                config.read(self.settings_file, encoding="utf-8")
            except configparser.Error as e:
                raise ConfigurationError(
                    str(e), target=str(self.settings_file)
                ) from e
            logger.debug("Loaded settings from %s", self.settings_file)
        else:
            logger.debug(
                "No settings file at %s, using defaults", self.settings_file
            )

        return self._convert_to_global_config(config)

    def _convert_to_global_config(
        self, config: configparser.ConfigParser
    ) -> GlobalConfig:
        """Convert the parsed INI into a typed GlobalConfig."""

        def get(section: str, key: str) -> str:
            return _strip_inline_comment(config.get(section, key, raw=True))

        raw_timeout = get(SECTION_NETWORK, KEY_TIMEOUT_SECONDS)
        try:
            timeout_seconds = int(raw_timeout)
        except ValueError:
            timeout_seconds = 0
        if timeout_seconds <= 0:
            msg = (
                f"{SECTION_NETWORK}.{KEY_TIMEOUT_SECONDS} must be a "
                f"positive integer, got {raw_timeout!r}"
            )
            raise ConfigurationError(msg, target=str(self.settings_file))

        return GlobalConfig(
            log_level=get(SECTION_DEFAULT, KEY_LOG_LEVEL).upper(),
            console_log_level=get(
                SECTION_DEFAULT, KEY_CONSOLE_LOG_LEVEL
            ).upper(),
            network=NetworkConfig(timeout_seconds=timeout_seconds),
            release=ReleaseConfig(
                version_url=get(SECTION_RELEASE, KEY_VERSION_URL),
                architecture=get(SECTION_RELEASE, KEY_ARCHITECTURE).lower(),
            ),
            directory=DirectoryConfig(
                download=Paths.expand_path(
                    get(SECTION_DIRECTORY, KEY_DOWNLOAD)
                ),
                logs=Paths.expand_path(get(SECTION_DIRECTORY, KEY_LOGS)),
            ),
        )
