"""Tests for the install decision."""

from pathlib import Path

import pytest

from libreoffice_installer.core.decision import needs_installation
from libreoffice_installer.domain.types import (
    InstallChannel,
    InstalledApp,
    UpgradeReason,
)

APP_PATH = Path("/Applications/LibreOffice.app")


def installed(version, channel=InstallChannel.DIRECT):
    return InstalledApp(
        path=APP_PATH, present=True, version=version, channel=channel
    )


def test_missing_bundle_requires_install(caplog):
    caplog.set_level("INFO")
    requirement = needs_installation(
        InstalledApp.missing(APP_PATH), "7.5.3"
    )
    assert requirement.required
    assert requirement.reason is UpgradeReason.MISSING
    assert "LibreOffice is missing." in caplog.text


def test_store_copy_replaced_even_when_newer():
    requirement = needs_installation(
        installed("99.0.0", InstallChannel.LOCKED_STORE), "7.5.3"
    )
    assert requirement.reason is UpgradeReason.LOCKED_CHANNEL


@pytest.mark.parametrize("version", [None, "", "garbage"])
def test_unknown_version_requires_install(version):
    requirement = needs_installation(installed(version), "7.5.3")
    assert requirement.reason is UpgradeReason.VERSION_UNKNOWN


def test_malformed_target_requires_install():
    requirement = needs_installation(installed("7.5.3"), "not-a-version")
    assert requirement.reason is UpgradeReason.VERSION_UNKNOWN


def test_outdated_requires_install():
    requirement = needs_installation(installed("7.4.7"), "7.5.3")
    assert requirement.reason is UpgradeReason.OUTDATED


@pytest.mark.parametrize("version", ["7.5.3", "7.5.3.2", "24.2.0"])
def test_up_to_date_or_newer_is_left_alone(version):
    requirement = needs_installation(installed(version), "7.5.3")
    assert not requirement
    assert requirement.reason is None
