"""Configuration management.

- SettingsManager: optional INI settings with built-in defaults
- Paths: path constants and utilities
"""

from libreoffice_installer.config.paths import Paths
from libreoffice_installer.config.settings import SettingsManager
from libreoffice_installer.domain.types import GlobalConfig

__all__ = [
    "GlobalConfig",
    "Paths",
    "SettingsManager",
]
