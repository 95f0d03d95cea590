"""External command execution.

All system utilities (``defaults``, ``pgrep``, ``ps``, ``osascript``,
``hdiutil``, ``ditto``) run through CommandRunner so tests can swap in
a scripted runner.
"""

import asyncio
import shlex
from dataclasses import dataclass

from libreoffice_installer.exceptions import CommandError
from libreoffice_installer.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class CommandResult:
    """Captured outcome of a finished command."""

    args: tuple[str, ...]
    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    def first_error_line(self) -> str:
        """Return the first line of stderr, or the exit status."""
        for line in self.stderr.splitlines():
            if line.strip():
                return line.strip()
        return f"exit status {self.returncode}"

    def __str__(self) -> str:
        return shlex.join(self.args)


class CommandRunner:
    """Run commands asynchronously and capture their output."""

    async def run(self, *args: str) -> CommandResult:
        """Run a command to completion.

        A non-zero exit status is returned, not raised, because callers
        give exit codes different meanings.

        Raises:
            CommandError: If the executable cannot be started

        """
        logger.debug("Running: %s", shlex.join(args))
        try:
            process = await asyncio.create_subprocess_exec(
                *args,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            raise CommandError(str(e), target=args[0]) from e

        stdout, stderr = await process.communicate()
        result = CommandResult(
            args=tuple(args),
            returncode=process.returncode,
            stdout=stdout.decode(errors="replace"),
            stderr=stderr.decode(errors="replace"),
        )
        logger.debug("%s exited with %d", args[0], result.returncode)
        return result
