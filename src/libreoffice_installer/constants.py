"""Centralized constants for libreoffice-installer.

Constants are grouped by concern and annotated with ``typing.Final``.

Usage:
    from libreoffice_installer.constants import APP_NAME
"""

from typing import Final

# =============================================================================
# Application Constants
# =============================================================================

APP_NAME: Final[str] = "LibreOffice"
APP_BUNDLE_NAME: Final[str] = f"{APP_NAME}.app"
APP_BUNDLE_RELATIVE_PATH: Final[str] = f"Applications/{APP_BUNDLE_NAME}"
PROCESS_NAME: Final[str] = "soffice"

INFO_PLIST_RELATIVE_PATH: Final[str] = "Contents/Info.plist"
VERSION_PLIST_KEY: Final[str] = "CFBundleShortVersionString"
STORE_RECEIPT_RELATIVE_PATH: Final[str] = "Contents/_MASReceipt/receipt"

# =============================================================================
# Release Constants
# =============================================================================

VERSION_URL: Final[str] = "https://update.libreoffice.org/description"
VERSION_SPAN_CLASS: Final[str] = "dl_version_number"
EXPECTED_VERSION_COUNT: Final[int] = 2
STABLE_VERSION_INDEX: Final[int] = 1

DISK_IMAGE_URL_TEMPLATE: Final[str] = (
    "https://download.documentfoundation.org/libreoffice/stable/"
    "{version}/mac/{dir_arch}/LibreOffice_{version}_MacOS_{file_arch}.dmg"
)
CHECKSUM_SUFFIX: Final[str] = ".sha256"

# Maps accepted architecture names to (directory, filename) components
ARCHITECTURES: Final[dict[str, tuple[str, str]]] = {
    "arm64": ("aarch64", "aarch64"),
    "aarch64": ("aarch64", "aarch64"),
    "amd64": ("x86_64", "x86-64"),
    "x86_64": ("x86_64", "x86-64"),
}
ARCH_AUTO: Final[str] = "auto"

# =============================================================================
# System Utilities
# =============================================================================

DEFAULTS_BIN: Final[str] = "/usr/bin/defaults"
HDIUTIL_BIN: Final[str] = "/usr/bin/hdiutil"
DITTO_BIN: Final[str] = "/usr/bin/ditto"
PGREP_BIN: Final[str] = "pgrep"
PS_BIN: Final[str] = "ps"
SUDO_BIN: Final[str] = "sudo"
OSASCRIPT_BIN: Final[str] = "osascript"

# pgrep exits 1 when nothing matched
PGREP_NO_MATCH_EXIT_CODE: Final[int] = 1

MOUNT_POINT_PREFIX: Final[str] = "libreoffice-installer-"

# =============================================================================
# Network Constants
# =============================================================================

CHUNK_SIZE: Final[int] = 8192
DEFAULT_TIMEOUT_SECONDS: Final[int] = 30

# =============================================================================
# Configuration Constants
# =============================================================================

CONFIG_FILE_NAME: Final[str] = "settings.conf"
DEFAULT_CONFIG_DIR: Final[str] = (
    "/Library/Application Support/libreoffice-installer"
)
CONFIG_DIR_ENV: Final[str] = "LIBREOFFICE_INSTALLER_CONFIG_DIR"
LOG_DIR_ENV: Final[str] = "LIBREOFFICE_INSTALLER_LOG_DIR"
LOG_FILE_NAME: Final[str] = "libreoffice-installer.log"

SECTION_DEFAULT: Final[str] = "DEFAULT"
SECTION_NETWORK: Final[str] = "network"
SECTION_RELEASE: Final[str] = "release"
SECTION_DIRECTORY: Final[str] = "directory"

KEY_LOG_LEVEL: Final[str] = "log_level"
KEY_CONSOLE_LOG_LEVEL: Final[str] = "console_log_level"
KEY_TIMEOUT_SECONDS: Final[str] = "timeout_seconds"
KEY_VERSION_URL: Final[str] = "version_url"
KEY_ARCHITECTURE: Final[str] = "architecture"
KEY_DOWNLOAD: Final[str] = "download"
KEY_LOGS: Final[str] = "logs"

DEFAULT_LOG_LEVEL: Final[str] = "INFO"
DEFAULT_CONSOLE_LOG_LEVEL: Final[str] = "INFO"

# =============================================================================
# Logging Constants
# =============================================================================

LOGGER_ROOT_NAME: Final[str] = "libreoffice_installer"

LOG_ROTATION_THRESHOLD_BYTES: Final[int] = 1024 * 1024  # 1 MB
LOG_BACKUP_COUNT: Final[int] = 3

LOG_CONSOLE_FORMAT: Final[str] = (
    "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
LOG_CONSOLE_DATE_FORMAT: Final[str] = "%H:%M:%S"
LOG_FILE_FORMAT: Final[str] = (
    "%(asctime)s - %(name)s - %(levelname)s - "
    "%(funcName)s:%(lineno)d - %(message)s"
)
LOG_FILE_DATE_FORMAT: Final[str] = "%Y-%m-%d %H:%M:%S"

LOG_COLORS: Final[dict[str, str]] = {
    "DEBUG": "\033[36m",  # Cyan
    "INFO": "\033[32m",  # Green
    "WARNING": "\033[33m",  # Yellow
    "ERROR": "\033[31m",  # Red
    "CRITICAL": "\033[35m",  # Magenta
    "RESET": "\033[0m",
}
