"""Version parsing and comparison.

Both sides of a comparison must be dotted numeric strings such as
``7.5.3`` or ``7.5.3.2``. Anything else (pre-release tags, a leading
``v``, empty strings) is treated as incomparable so callers can fall
back to reinstalling.
"""

import re

from packaging.version import InvalidVersion, Version

from libreoffice_installer.domain.types import Comparison

_DOTTED_NUMERIC_RE = re.compile(r"^\d+(?:\.\d+)*$")


def parse_version(value: str | None) -> Version | None:
    """Parse a dotted numeric version string.

    Args:
        value: Version string, possibly with surrounding whitespace

    Returns:
        Parsed Version, or None if the string is not dotted numeric

    """
    if value is None:
        return None
    value = value.strip()
    if not _DOTTED_NUMERIC_RE.match(value):
        return None
    try:
        return Version(value)
    except InvalidVersion:
        return None


def compare_versions(v1: str | None, v2: str | None) -> Comparison:
    """Compare two version strings component by component.

    Missing trailing components count as zero, so ``7.5.3`` equals
    ``7.5.3.0`` and is less than ``7.5.3.2``.

    Examples:
        >>> compare_versions("7.5.3", "7.5.4")
        <Comparison.LESS: 'less'>
        >>> compare_versions("7.5", "unknown")
        <Comparison.INCOMPARABLE: 'incomparable'>

    """
    parsed1 = parse_version(v1)
    parsed2 = parse_version(v2)
    if parsed1 is None or parsed2 is None:
        return Comparison.INCOMPARABLE
    if parsed1 < parsed2:
        return Comparison.LESS
    if parsed1 > parsed2:
        return Comparison.GREATER
    return Comparison.EQUAL
