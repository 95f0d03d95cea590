"""Tests for the main entry point."""

from unittest.mock import patch

import pytest

from libreoffice_installer import main as main_module


def test_main_exits_on_unexpected_error():
    def explode(coro):
        coro.close()
        raise RuntimeError("boom")

    with (
        patch.object(main_module.uvloop, "run", side_effect=explode),
        pytest.raises(SystemExit) as exc_info,
    ):
        main_module.main()
    assert exc_info.value.code == 1


def test_main_exits_on_keyboard_interrupt():
    def interrupt(coro):
        coro.close()
        raise KeyboardInterrupt

    with (
        patch.object(main_module.uvloop, "run", side_effect=interrupt),
        pytest.raises(SystemExit) as exc_info,
    ):
        main_module.main()
    assert exc_info.value.code == 1


def test_main_passes_through_exit_status():
    def succeed(coro):
        coro.close()

    with patch.object(main_module.uvloop, "run", side_effect=succeed):
        main_module.main()
