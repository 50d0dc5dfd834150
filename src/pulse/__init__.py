"""pulse package."""

from importlib.metadata import PackageNotFoundError, version

__all__ = ["__version__"]

try:
    __version__ = version("pulse-survey")
except PackageNotFoundError:
    __version__ = "0.1.0"  # editable install or not installed
