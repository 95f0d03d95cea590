"""SHA-256 verification of downloaded disk images."""

import hashlib
from pathlib import Path

from libreoffice_installer.constants import CHUNK_SIZE
from libreoffice_installer.core.download import (
    DownloadService,
    get_filename_from_url,
)
from libreoffice_installer.core.release import checksum_url, disk_image_url
from libreoffice_installer.exceptions import ChecksumMismatchError
from libreoffice_installer.logger import get_logger

logger = get_logger(__name__)


def parse_checksum(content: str) -> str:
    """Extract the digest from ``sha256sum``-style content.

    The published files read ``<hex digest>  <file name>``.

    Raises:
        ChecksumMismatchError: If the content is empty

    """
    tokens = content.split()
    if not tokens:
        msg = "checksum file is empty"
        raise ChecksumMismatchError(msg)
    return tokens[0]


class Verifier:
    """Compute and check the SHA-256 digest of a file."""

    def __init__(self, file_path: Path) -> None:
        self.file_path = file_path

    def compute_hash(self) -> str:
        """Hash the file in chunks.

        Raises:
            ChecksumMismatchError: If the file cannot be read

        """
        digest = hashlib.sha256()
        try:
            with self.file_path.open("rb") as f:
                for chunk in iter(lambda: f.read(CHUNK_SIZE), b""):
                    digest.update(chunk)
        except OSError as e:
            msg = f"failed to calculate checksum: {e}"
            raise ChecksumMismatchError(
                msg, target=str(self.file_path)
            ) from e
        return digest.hexdigest()

    def verify_hash(self, expected: str) -> None:
        """Compare the file digest with ``expected`` (case-insensitive).

        Raises:
            ChecksumMismatchError: If the digests differ

        """
        actual = self.compute_hash()
        if actual.lower() != expected.strip().lower():
            msg = f"expected {expected}, got {actual}"
            raise ChecksumMismatchError(msg, target=str(self.file_path))
        logger.debug("Checksum verified for %s", self.file_path.name)


async def acquire_disk_image(
    download_service: DownloadService,
    version: str,
    arch: str,
    dest_dir: Path,
) -> Path:
    """Download the disk image and its checksum, then verify it.

    Returns:
        Path of the verified disk image

    Raises:
        NetworkError: If either download fails
        ChecksumMismatchError: If verification fails

    """
    image_url = disk_image_url(version, arch)
    sha_url = checksum_url(version, arch)

    logger.info("Downloading %s.", get_filename_from_url(image_url))
    image = await download_service.download_file(
        image_url, dest_dir / get_filename_from_url(image_url)
    )
    sha_file = await download_service.download_file(
        sha_url, dest_dir / get_filename_from_url(sha_url)
    )

    try:
        content = sha_file.read_text(encoding="utf-8")
    except OSError as e:
        msg = f"cannot read checksum file: {e}"
        raise ChecksumMismatchError(msg, target=str(sha_file)) from e

    Verifier(image).verify_hash(parse_checksum(content))
    return image
