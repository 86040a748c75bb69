"""navgen - Intent launcher and binder generator for Android activities."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("navgen")
except PackageNotFoundError:
    __version__ = "(local)"
