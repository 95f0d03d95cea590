"""CLI argument parser for libreoffice-installer.

The tool runs as a package ``postinstall`` script, so the positional
layout follows the installer's convention: package path, install
location, then the target volume.
"""

import argparse
from argparse import Namespace

from libreoffice_installer.constants import ARCHITECTURES


class CLIParser:
    """Command-line argument parser for libreoffice-installer."""

    def parse_args(self, argv: list[str] | None = None) -> Namespace:
        """Parse command-line arguments.

        Args:
            argv: Arguments without the program name
                (defaults to ``sys.argv[1:]``)

        Returns:
            Namespace: Parsed arguments namespace.

        """
        parser = self._create_main_parser()
        self._add_positionals(parser)
        self._add_global_options(parser)
        return parser.parse_args(argv)

    def _create_main_parser(self) -> argparse.ArgumentParser:
        return argparse.ArgumentParser(
            prog="libreoffice-installer",
            description="Install or upgrade LibreOffice on macOS",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog="""
Examples:
  # As a package postinstall script
  %(prog)s "$PACKAGE_PATH" "$INSTALL_LOCATION" "$TARGET_VOLUME"

  # Install on the boot volume with verbose output
  %(prog)s --verbose - - /
""",
        )

    def _add_positionals(self, parser: argparse.ArgumentParser) -> None:
        # The first two installer arguments are accepted and ignored
        parser.add_argument("arg1", nargs="?", help=argparse.SUPPRESS)
        parser.add_argument("arg2", nargs="?", help=argparse.SUPPRESS)
        parser.add_argument(
            "target_volume",
            nargs="?",
            help="volume to install on (e.g. /)",
        )

    def _add_global_options(self, parser: argparse.ArgumentParser) -> None:
        parser.add_argument(
            "--version",
            action="store_true",
            help="show the installer version and exit",
        )
        parser.add_argument(
            "--verbose",
            action="store_true",
            help="log debug output to the console",
        )
        parser.add_argument(
            "--arch",
            choices=sorted(ARCHITECTURES),
            help="override the detected architecture",
        )
