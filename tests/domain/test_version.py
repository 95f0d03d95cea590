"""Tests for version parsing and comparison."""

import pytest
from packaging.version import Version

from libreoffice_installer.domain import (
    Comparison,
    compare_versions,
    parse_version,
)


@pytest.mark.parametrize(
    ("v1", "v2", "expected"),
    [
        ("7.5.3", "7.5.4", Comparison.LESS),
        ("7.4.7", "7.5.3", Comparison.LESS),
        ("7.5.10", "7.5.9", Comparison.GREATER),
        ("24.8.2", "7.6.7", Comparison.GREATER),
        ("7.5.3", "7.5.3", Comparison.EQUAL),
        ("7.5.3", "7.5.3.0", Comparison.EQUAL),
        ("7.5.3", "7.5.3.2", Comparison.LESS),
        ("7.5.3.2", "7.5.3", Comparison.GREATER),
    ],
)
def test_compare_versions(v1, v2, expected):
    assert compare_versions(v1, v2) is expected


@pytest.mark.parametrize(
    ("v1", "v2"),
    [
        ("", "7.5.3"),
        ("7.5.3", ""),
        (None, "7.5.3"),
        ("unknown", "7.5.3"),
        ("v7.5.3", "7.5.3"),
        ("7.5.3rc1", "7.5.3"),
        ("7..5", "7.5.3"),
    ],
)
def test_compare_versions_incomparable(v1, v2):
    assert compare_versions(v1, v2) is Comparison.INCOMPARABLE


def test_parse_version_strips_whitespace():
    assert parse_version(" 7.6.4\n") == Version("7.6.4")


def test_parse_version_rejects_non_numeric():
    assert parse_version("7.6.4-beta") is None
