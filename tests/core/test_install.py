"""Tests for InstallOrchestrator."""

from contextlib import asynccontextmanager
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from libreoffice_installer.constants import DITTO_BIN
from libreoffice_installer.core.install import InstallOrchestrator
from libreoffice_installer.domain.types import (
    InstallChannel,
    InstalledApp,
    UpgradeReason,
)
from libreoffice_installer.exceptions import CopyError, QuitFailureError

MODULE = "libreoffice_installer.core.install"


@pytest.fixture
def app_path(tmp_path: Path) -> Path:
    return tmp_path / "volume" / "Applications" / "LibreOffice.app"


@pytest.fixture
def mount_point(tmp_path: Path) -> Path:
    source = tmp_path / "mnt" / "LibreOffice.app" / "Contents"
    source.mkdir(parents=True)
    return tmp_path / "mnt"


@pytest.fixture
def disk_images(mount_point: Path) -> MagicMock:
    manager = MagicMock()
    manager.events = []

    @asynccontextmanager
    async def mounted(image):
        manager.events.append(("attach", image))
        try:
            yield mount_point
        finally:
            manager.events.append(("detach", image))

    manager.mounted = mounted
    return manager


def make_orchestrator(
    app_path, disk_images, scripted_runner, installed, tmp_path
):
    probe = MagicMock()
    probe.path = app_path
    probe.probe = AsyncMock(return_value=installed)
    terminator = MagicMock()
    terminator.quit_all = AsyncMock()
    return InstallOrchestrator(
        download_service=MagicMock(),
        probe=probe,
        terminator=terminator,
        disk_images=disk_images,
        arch="arm64",
        work_dir=tmp_path,
        version_url="https://x/dl",
        runner=scripted_runner,
    )


@pytest.mark.asyncio
async def test_up_to_date_skips_everything(
    app_path, disk_images, scripted_runner, tmp_path, caplog
):
    caplog.set_level("INFO")
    installed = InstalledApp(path=app_path, present=True, version="7.4.7")
    orchestrator = make_orchestrator(
        app_path, disk_images, scripted_runner, installed, tmp_path
    )

    with (
        patch(
            f"{MODULE}.fetch_latest_version",
            AsyncMock(return_value="7.4.7"),
        ),
        patch(f"{MODULE}.acquire_disk_image", AsyncMock()) as acquire,
    ):
        result = await orchestrator.run()

    assert result.installed is False
    assert result.version == "7.4.7"
    acquire.assert_not_awaited()
    orchestrator.terminator.quit_all.assert_not_awaited()
    assert disk_images.events == []
    assert scripted_runner.calls == []
    assert "LibreOffice 7.4.7 is already up to date." in caplog.text


@pytest.mark.asyncio
async def test_outdated_is_replaced(
    app_path, disk_images, scripted_runner, tmp_path, caplog
):
    caplog.set_level("INFO")
    (app_path / "Contents").mkdir(parents=True)
    installed = InstalledApp(path=app_path, present=True, version="7.3.0")
    orchestrator = make_orchestrator(
        app_path, disk_images, scripted_runner, installed, tmp_path
    )
    image = tmp_path / "image.dmg"

    with (
        patch(
            f"{MODULE}.fetch_latest_version",
            AsyncMock(return_value="7.4.7"),
        ),
        patch(
            f"{MODULE}.acquire_disk_image", AsyncMock(return_value=image)
        ) as acquire,
    ):
        result = await orchestrator.run()

    assert result.installed is True
    assert result.requirement.reason is UpgradeReason.OUTDATED
    acquire.assert_awaited_once_with(
        orchestrator.download_service, "7.4.7", "arm64", tmp_path
    )
    orchestrator.terminator.quit_all.assert_awaited_once_with("soffice")
    assert disk_images.events == [("attach", image), ("detach", image)]
    assert scripted_runner.calls == [
        (
            DITTO_BIN,
            str(tmp_path / "mnt" / "LibreOffice.app"),
            str(app_path),
        )
    ]
    # Old bundle removed before the copy
    assert not app_path.exists()
    assert "LibreOffice 7.4.7 has been installed." in caplog.text


@pytest.mark.asyncio
async def test_store_copy_is_replaced(
    app_path, disk_images, scripted_runner, tmp_path
):
    installed = InstalledApp(
        path=app_path,
        present=True,
        version="9.9.9",
        channel=InstallChannel.LOCKED_STORE,
    )
    orchestrator = make_orchestrator(
        app_path, disk_images, scripted_runner, installed, tmp_path
    )
    with (
        patch(
            f"{MODULE}.fetch_latest_version",
            AsyncMock(return_value="7.4.7"),
        ),
        patch(
            f"{MODULE}.acquire_disk_image",
            AsyncMock(return_value=tmp_path / "image.dmg"),
        ),
    ):
        result = await orchestrator.run()

    assert result.requirement.reason is UpgradeReason.LOCKED_CHANNEL
    assert result.installed is True


@pytest.mark.asyncio
async def test_copy_failure_still_unmounts(
    app_path, disk_images, scripted_runner, tmp_path
):
    scripted_runner.add(DITTO_BIN, returncode=1, stderr="ditto: No space\n")
    orchestrator = make_orchestrator(
        app_path,
        disk_images,
        scripted_runner,
        InstalledApp.missing(app_path),
        tmp_path,
    )
    image = tmp_path / "image.dmg"

    with (
        patch(
            f"{MODULE}.fetch_latest_version",
            AsyncMock(return_value="7.4.7"),
        ),
        patch(
            f"{MODULE}.acquire_disk_image", AsyncMock(return_value=image)
        ),
        pytest.raises(CopyError, match="No space"),
    ):
        await orchestrator.run()

    assert disk_images.events == [("attach", image), ("detach", image)]


@pytest.mark.asyncio
async def test_quit_failure_aborts_before_mount(
    app_path, disk_images, scripted_runner, tmp_path
):
    orchestrator = make_orchestrator(
        app_path,
        disk_images,
        scripted_runner,
        InstalledApp.missing(app_path),
        tmp_path,
    )
    orchestrator.terminator.quit_all.side_effect = QuitFailureError(
        "unable to quit LibreOffice"
    )

    with (
        patch(
            f"{MODULE}.fetch_latest_version",
            AsyncMock(return_value="7.4.7"),
        ),
        patch(
            f"{MODULE}.acquire_disk_image",
            AsyncMock(return_value=tmp_path / "image.dmg"),
        ),
        pytest.raises(QuitFailureError),
    ):
        await orchestrator.run()

    assert disk_images.events == []
    assert scripted_runner.calls == []


@pytest.mark.asyncio
async def test_replace_bundle_requires_source(
    app_path, disk_images, scripted_runner, tmp_path
):
    orchestrator = make_orchestrator(
        app_path,
        disk_images,
        scripted_runner,
        InstalledApp.missing(app_path),
        tmp_path,
    )
    with pytest.raises(CopyError, match="not found on disk image"):
        await orchestrator.replace_bundle(tmp_path / "nowhere.app")
    assert scripted_runner.calls == []
