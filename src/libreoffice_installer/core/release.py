"""Discover the latest stable release and its download locations."""

import platform
from html.parser import HTMLParser

from libreoffice_installer.constants import (
    ARCH_AUTO,
    ARCHITECTURES,
    CHECKSUM_SUFFIX,
    DISK_IMAGE_URL_TEMPLATE,
    EXPECTED_VERSION_COUNT,
    STABLE_VERSION_INDEX,
    VERSION_SPAN_CLASS,
    VERSION_URL,
)
from libreoffice_installer.core.download import DownloadService
from libreoffice_installer.exceptions import (
    NetworkError,
    UnsupportedArchitectureError,
)
from libreoffice_installer.logger import get_logger

logger = get_logger(__name__)


class VersionSpanParser(HTMLParser):
    """Collect the text of ``<span>`` elements carrying a CSS class."""

    def __init__(self, css_class: str = VERSION_SPAN_CLASS) -> None:
        super().__init__()
        self.css_class = css_class
        self.versions: list[str] = []
        self._in_span = False

    def handle_starttag(
        self, tag: str, attrs: list[tuple[str, str | None]]
    ) -> None:
        if tag != "span":
            return
        classes = (dict(attrs).get("class") or "").split()
        if self.css_class in classes:
            self._in_span = True

    def handle_endtag(self, tag: str) -> None:
        if tag == "span":
            self._in_span = False

    def handle_data(self, data: str) -> None:
        text = data.strip()
        if self._in_span and text:
            self.versions.append(text)


def parse_downloadable_versions(html: str) -> list[str]:
    """Return every version advertised on the page, in order."""
    parser = VersionSpanParser()
    parser.feed(html)
    parser.close()
    return parser.versions


async def fetch_latest_version(
    download_service: DownloadService, url: str = VERSION_URL
) -> str:
    """Fetch the version to install from the release description page.

    The page lists the experimental line first and the current release
    second. Any other count means the layout changed, so the run stops
    instead of guessing.

    Raises:
        NetworkError: If the page cannot be fetched or has an
            unexpected number of versions

    """
    html = await download_service.fetch_text(url)
    versions = parse_downloadable_versions(html)
    if len(versions) != EXPECTED_VERSION_COUNT:
        msg = (
            f"expected {EXPECTED_VERSION_COUNT} versions, "
            f"found {len(versions)}: {versions}"
        )
        raise NetworkError(msg, target=url)

    version = versions[STABLE_VERSION_INDEX]
    logger.info("Latest stable version: %s", version)
    return version


def disk_image_url(version: str, arch: str) -> str:
    """Build the disk image URL for ``version`` and ``arch``.

    Raises:
        UnsupportedArchitectureError: If ``arch`` has no disk image

    """
    try:
        dir_arch, file_arch = ARCHITECTURES[arch]
    except KeyError:
        msg = f"no disk image for {arch!r}"
        raise UnsupportedArchitectureError(msg, target=arch) from None
    return DISK_IMAGE_URL_TEMPLATE.format(
        version=version, dir_arch=dir_arch, file_arch=file_arch
    )


def checksum_url(version: str, arch: str) -> str:
    """Build the URL of the SHA-256 file published next to the image."""
    return disk_image_url(version, arch) + CHECKSUM_SUFFIX


def detect_architecture(configured: str = ARCH_AUTO) -> str:
    """Resolve the architecture to download for.

    Args:
        configured: Architecture name, or ``auto`` to use the machine's

    Raises:
        UnsupportedArchitectureError: If the result is not supported

    """
    arch = configured.lower()
    if arch == ARCH_AUTO:
        arch = platform.machine().lower()
    if arch not in ARCHITECTURES:
        msg = f"no disk image for {arch!r}"
        raise UnsupportedArchitectureError(msg, target=arch)
    logger.debug("Using architecture %s", arch)
    return arch
