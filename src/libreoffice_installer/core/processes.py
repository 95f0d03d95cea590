"""Find and quit running instances of the application.

The installer usually runs as root while the application belongs to
logged-in users, so the quit request is sent as each owning user.
"""

import asyncio
import os
import pwd

from libreoffice_installer.constants import (
    APP_NAME,
    OSASCRIPT_BIN,
    PGREP_BIN,
    PGREP_NO_MATCH_EXIT_CODE,
    PROCESS_NAME,
    PS_BIN,
    SUDO_BIN,
)
from libreoffice_installer.core.commands import CommandRunner
from libreoffice_installer.domain.types import RunningInstance
from libreoffice_installer.exceptions import QuitFailureError
from libreoffice_installer.logger import get_logger

logger = get_logger(__name__)


def pids_to_option(pids: list[int]) -> str:
    """Join pids into the comma separated form ``ps -p`` expects."""
    return ",".join(str(pid) for pid in pids)


def owners(instances: list[RunningInstance]) -> list[str]:
    """Return the distinct owning users in first-seen order."""
    return list(dict.fromkeys(instance.user for instance in instances))


class RunningInstanceTerminator:
    """Ask every running instance to quit and confirm they are gone."""

    def __init__(
        self,
        runner: CommandRunner | None = None,
        app_name: str = APP_NAME,
        current_user: str | None = None,
    ) -> None:
        self.runner = runner or CommandRunner()
        self.app_name = app_name
        # Effective user, not $USER: a postinstall runs as root with the
        # console user's environment
        self.current_user = (
            current_user or pwd.getpwuid(os.geteuid()).pw_name
        )

    async def find_pids(self, process_name: str) -> list[int]:
        """List pids whose process name is exactly ``process_name``.

        Raises:
            QuitFailureError: If pgrep fails or prints garbage

        """
        result = await self.runner.run(PGREP_BIN, "-x", process_name)
        if result.returncode == PGREP_NO_MATCH_EXIT_CODE:
            return []
        if not result.ok:
            raise QuitFailureError(
                f"pgrep failed: {result.first_error_line()}",
                target=process_name,
            )

        pids = []
        for line in result.stdout.split():
            try:
                pids.append(int(line))
            except ValueError:
                msg = f"unexpected pgrep output {line!r}"
                raise QuitFailureError(msg, target=process_name) from None
        return pids

    async def running_instances(
        self, pids: list[int]
    ) -> list[RunningInstance]:
        """Pair each of ``pids`` with its owning user.

        Raises:
            QuitFailureError: If ps fails or prints garbage

        """
        result = await self.runner.run(
            PS_BIN, "-p", pids_to_option(pids), "-o", "pid=,user="
        )
        if not result.ok:
            raise QuitFailureError(
                f"ps failed: {result.first_error_line()}",
                target=pids_to_option(pids),
            )

        instances = []
        for line in result.stdout.splitlines():
            if not line.strip():
                continue
            try:
                pid, user = line.split(maxsplit=1)
                instances.append(RunningInstance(int(pid), user.strip()))
            except ValueError:
                msg = f"unexpected ps output {line!r}"
                raise QuitFailureError(
                    msg, target=pids_to_option(pids)
                ) from None
        return instances

    def quit_command(self, user: str) -> tuple[str, ...]:
        """Build the AppleScript quit command to run as ``user``."""
        script = f'quit app "{self.app_name}"'
        if user == self.current_user:
            return (OSASCRIPT_BIN, "-e", script)
        return (
            SUDO_BIN,
            "--non-interactive",
            "--user",
            user,
            OSASCRIPT_BIN,
            "-e",
            script,
        )

    async def quit_app(self, user: str) -> None:
        """Ask the instance owned by ``user`` to quit.

        Raises:
            QuitFailureError: If osascript (or sudo) fails

        """
        logger.debug("Asking %s to quit %s", user, self.app_name)
        result = await self.runner.run(*self.quit_command(user))
        if not result.ok:
            raise QuitFailureError(result.first_error_line(), target=user)

    async def quit_all(self, process_name: str = PROCESS_NAME) -> None:
        """Quit every running instance of the application.

        Quit requests for all owners run concurrently. Every failure is
        collected into one error before anything is re-checked.

        Raises:
            QuitFailureError: If any quit request fails or an instance
                is still running afterwards

        """
        pids = await self.find_pids(process_name)
        if not pids:
            logger.debug("No running %s processes", process_name)
            return

        instances = await self.running_instances(pids)
        users = owners(instances)
        logger.info(
            "Quitting %s for %s.", self.app_name, ", ".join(users)
        )
        results = await asyncio.gather(
            *(self.quit_app(user) for user in users),
            return_exceptions=True,
        )

        failures = []
        for user, outcome in zip(users, results, strict=True):
            if isinstance(outcome, QuitFailureError):
                failures.append(f"{user} ({outcome.message})")
            elif isinstance(outcome, BaseException):
                raise outcome
        if failures:
            msg = "quit request failed for " + ", ".join(failures)
            raise QuitFailureError(msg, target=self.app_name)

        remaining = await self.find_pids(process_name)
        if remaining:
            msg = (
                f"unable to quit {self.app_name}, still running: "
                f"{pids_to_option(remaining)}"
            )
            raise QuitFailureError(msg, target=process_name)
