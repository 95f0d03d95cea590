"""Pytest configuration and fixtures for libreoffice-installer tests."""

import logging

import pytest

from libreoffice_installer.core.commands import CommandResult


@pytest.fixture(autouse=True)
def enable_log_propagation():
    """Enable log propagation for all package loggers during tests.

    This allows pytest's caplog fixture to capture logs from loggers
    created with propagate=False in production code.
    """
    original_propagation = {}
    for name in list(logging.Logger.manager.loggerDict.keys()):
        if name.startswith("libreoffice_installer"):
            logger = logging.getLogger(name)
            original_propagation[name] = logger.propagate
            logger.propagate = True

    yield

    for name, propagate_value in original_propagation.items():
        logger = logging.getLogger(name)
        logger.propagate = propagate_value


class ScriptedRunner:
    """Command runner returning scripted results instead of spawning.

    Each scripted result is matched by argument prefix and consumed once.
    Unscripted commands succeed with empty output.
    """

    def __init__(self) -> None:
        self.calls: list[tuple[str, ...]] = []
        self._script: list[tuple[tuple[str, ...], CommandResult]] = []

    def add(
        self,
        *prefix: str,
        returncode: int = 0,
        stdout: str = "",
        stderr: str = "",
    ) -> None:
        result = CommandResult(
            args=prefix,
            returncode=returncode,
            stdout=stdout,
            stderr=stderr,
        )
        self._script.append((prefix, result))

    def calls_to(self, program: str) -> list[tuple[str, ...]]:
        return [call for call in self.calls if call[0] == program]

    async def run(self, *args: str) -> CommandResult:
        self.calls.append(args)
        for index, (prefix, result) in enumerate(self._script):
            if args[: len(prefix)] == prefix:
                del self._script[index]
                return CommandResult(
                    args=args,
                    returncode=result.returncode,
                    stdout=result.stdout,
                    stderr=result.stderr,
                )
        return CommandResult(args=args, returncode=0)


@pytest.fixture
def scripted_runner() -> ScriptedRunner:
    """Provide a runner that records calls and replays scripted output."""
    return ScriptedRunner()
