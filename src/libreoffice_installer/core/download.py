"""HTTP session and download service.

Pages are fetched as text. Artifacts are streamed to disk in chunks so
a disk image never has to fit in memory.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path
from urllib.parse import unquote, urlparse

import aiofiles
import aiohttp

from libreoffice_installer.constants import CHUNK_SIZE
from libreoffice_installer.domain.types import GlobalConfig
from libreoffice_installer.exceptions import NetworkError
from libreoffice_installer.logger import get_logger

logger = get_logger(__name__)


@asynccontextmanager
async def create_http_session(
    global_config: GlobalConfig,
) -> AsyncIterator[aiohttp.ClientSession]:
    """Create an aiohttp session configured from settings.

    Only connect and read timeouts are bounded. The total is left open
    because disk images are several hundred megabytes.
    """
    timeout_seconds = global_config["network"]["timeout_seconds"]
    timeout = aiohttp.ClientTimeout(
        total=None,
        sock_connect=timeout_seconds,
        sock_read=timeout_seconds,
    )
    async with aiohttp.ClientSession(timeout=timeout) as session:
        yield session


def get_filename_from_url(url: str) -> str:
    """Extract the file name from the last URL path segment."""
    return unquote(Path(urlparse(url).path).name)


class DownloadService:
    """Fetch pages and download files over a shared session."""

    def __init__(self, session: aiohttp.ClientSession) -> None:
        self.session = session

    async def fetch_text(self, url: str) -> str:
        """Fetch ``url`` and return the decoded body.

        Raises:
            NetworkError: On connection errors, timeouts or non-2xx status

        """
        logger.debug("Fetching %s", url)
        try:
            async with self.session.get(url) as response:
                response.raise_for_status()
                return await response.text()
        except (aiohttp.ClientError, TimeoutError) as e:
            raise NetworkError(str(e) or type(e).__name__, target=url) from e

    async def download_file(self, url: str, dest: Path) -> Path:
        """Stream ``url`` into ``dest``.

        A partially written file is removed when the download fails.

        Returns:
            ``dest``

        Raises:
            NetworkError: On HTTP failures or when ``dest`` is not writable

        """
        logger.debug("Downloading %s to %s", url, dest)
        try:
            dest.parent.mkdir(parents=True, exist_ok=True)
            async with self.session.get(url) as response:
                response.raise_for_status()
                async with aiofiles.open(dest, "wb") as f:
                    async for chunk in response.content.iter_chunked(
                        CHUNK_SIZE
                    ):
                        await f.write(chunk)
        except (aiohttp.ClientError, TimeoutError) as e:
            self._remove_partial(dest)
            raise NetworkError(str(e) or type(e).__name__, target=url) from e
        except OSError as e:
            self._remove_partial(dest)
            raise NetworkError(f"cannot write {dest}: {e}", target=url) from e

        logger.debug("Downloaded %s", dest.name)
        return dest

    @staticmethod
    def _remove_partial(dest: Path) -> None:
        try:
            dest.unlink(missing_ok=True)
        except OSError as e:
            logger.warning("Could not remove partial download %s: %s", dest, e)
