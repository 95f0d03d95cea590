"""Decide whether the bundle has to be (re)installed."""

from libreoffice_installer.constants import APP_NAME
from libreoffice_installer.domain.types import (
    Comparison,
    InstallChannel,
    InstalledApp,
    UpgradeReason,
    UpgradeRequirement,
)
from libreoffice_installer.domain.version import compare_versions
from libreoffice_installer.logger import get_logger

logger = get_logger(__name__)


def needs_installation(
    app: InstalledApp, target_version: str
) -> UpgradeRequirement:
    """Decide whether ``target_version`` must be installed over ``app``.

    Checks run in order and the first match wins:

    1. Bundle missing
    2. Bundle installed from the App Store
    3. Installed version missing or not comparable
    4. Installed version older than the target

    A newer installed version is left alone.
    """
    if not app.present:
        logger.info("%s is missing.", APP_NAME)
        return UpgradeRequirement.because(UpgradeReason.MISSING)

    if app.channel is InstallChannel.LOCKED_STORE:
        logger.info(
            "%s was installed from the App Store and will be replaced.",
            APP_NAME,
        )
        return UpgradeRequirement.because(UpgradeReason.LOCKED_CHANNEL)

    comparison = compare_versions(app.version, target_version)
    if comparison is Comparison.INCOMPARABLE:
        logger.info(
            "Cannot compare installed version %r with %s.",
            app.version,
            target_version,
        )
        return UpgradeRequirement.because(UpgradeReason.VERSION_UNKNOWN)

    if comparison is Comparison.LESS:
        logger.info(
            "%s %s is older than %s.", APP_NAME, app.version, target_version
        )
        return UpgradeRequirement.because(UpgradeReason.OUTDATED)

    return UpgradeRequirement.not_required()
