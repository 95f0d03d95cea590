"""Main entry point for libreoffice-installer."""

import sys

import uvloop

from libreoffice_installer.cli import CLIRunner
from libreoffice_installer.logger import flush_all_handlers, get_logger

logger = get_logger(__name__)


async def async_main() -> None:
    """Run the CLI asynchronously."""
    runner = CLIRunner()
    await runner.run()


def main() -> None:
    """Run the CLI application on the uvloop event loop.

    Exits with status 1 when interrupted or on an unexpected error.
    """
    try:
        uvloop.run(async_main())
    except KeyboardInterrupt:
        logger.error("Cancelled by user")
        sys.exit(1)
    except Exception:
        logger.exception("Unexpected error")
        sys.exit(1)
    finally:
        flush_all_handlers()


if __name__ == "__main__":
    main()
