"""CLI package for libreoffice-installer."""

from libreoffice_installer.cli.parser import CLIParser
from libreoffice_installer.cli.runner import CLIRunner

__all__ = ["CLIParser", "CLIRunner"]
