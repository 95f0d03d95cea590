"""Top-level package for libreoffice-installer."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("libreoffice-installer")
except PackageNotFoundError:
    # Running from a source checkout without an install
    __version__ = "dev"
