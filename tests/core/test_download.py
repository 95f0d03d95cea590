"""Tests for DownloadService."""

from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import aiohttp
import pytest

from libreoffice_installer.core.download import (
    DownloadService,
    create_http_session,
    get_filename_from_url,
)
from libreoffice_installer.exceptions import NetworkError


@pytest.fixture
def tmp_file(tmp_path: Path) -> Path:
    return tmp_path / "downloads" / "testfile.dmg"


@pytest.fixture
def mock_session():
    """Provide a mock aiohttp.ClientSession."""
    return MagicMock()


async def async_chunk_gen(chunks: list[bytes]):
    for chunk in chunks:
        yield chunk


def make_response(chunks=(), text="", error=None) -> AsyncMock:
    mock_response = AsyncMock()
    mock_response.__aenter__.return_value = mock_response
    mock_response.content.iter_chunked = lambda size: async_chunk_gen(
        list(chunks)
    )
    mock_response.text = AsyncMock(return_value=text)
    mock_response.raise_for_status = MagicMock(side_effect=error)
    return mock_response


def http_error(status: int) -> aiohttp.ClientResponseError:
    return aiohttp.ClientResponseError(
        request_info=MagicMock(), history=(), status=status, message="Nope"
    )


def test_get_filename_from_url():
    url = (
        "https://download.documentfoundation.org/libreoffice/stable/7.4.7/"
        "mac/aarch64/LibreOffice_7.4.7_MacOS_aarch64.dmg.sha256"
    )
    assert (
        get_filename_from_url(url)
        == "LibreOffice_7.4.7_MacOS_aarch64.dmg.sha256"
    )


@pytest.mark.asyncio
async def test_fetch_text_success(mock_session):
    mock_session.get.return_value = make_response(text="<html></html>")
    service = DownloadService(mock_session)
    assert await service.fetch_text("https://x/") == "<html></html>"


@pytest.mark.asyncio
async def test_fetch_text_http_error(mock_session):
    mock_session.get.return_value = make_response(error=http_error(404))
    service = DownloadService(mock_session)
    with pytest.raises(NetworkError) as exc_info:
        await service.fetch_text("https://x/")
    assert exc_info.value.target == "https://x/"


@pytest.mark.asyncio
async def test_fetch_text_timeout(mock_session):
    mock_session.get.side_effect = TimeoutError()
    service = DownloadService(mock_session)
    with pytest.raises(NetworkError, match="TimeoutError"):
        await service.fetch_text("https://x/")


@pytest.mark.asyncio
async def test_download_file_success(tmp_file, mock_session):
    mock_session.get.return_value = make_response(
        chunks=[b"hello ", b"world"]
    )
    service = DownloadService(mock_session)

    result = await service.download_file("https://x/f.dmg", tmp_file)

    assert result == tmp_file
    assert tmp_file.read_bytes() == b"hello world"


@pytest.mark.asyncio
async def test_download_file_http_error(tmp_file, mock_session):
    mock_session.get.return_value = make_response(error=http_error(500))
    service = DownloadService(mock_session)

    with pytest.raises(NetworkError):
        await service.download_file("https://x/f.dmg", tmp_file)
    assert not tmp_file.exists()


@pytest.mark.asyncio
async def test_download_file_removes_partial(tmp_file, mock_session):
    async def failing_chunks(size):
        yield b"partial"
        raise aiohttp.ClientPayloadError("connection reset")

    response = make_response()
    response.content.iter_chunked = failing_chunks
    mock_session.get.return_value = response
    service = DownloadService(mock_session)

    with pytest.raises(NetworkError, match="connection reset"):
        await service.download_file("https://x/f.dmg", tmp_file)
    assert not tmp_file.exists()


@pytest.mark.asyncio
async def test_create_http_session_timeouts():
    config = {"network": {"timeout_seconds": 12}}
    async with create_http_session(config) as session:
        assert session.timeout.total is None
        assert session.timeout.sock_connect == 12
        assert session.timeout.sock_read == 12
    assert session.closed
