"""bselect - interactively select git branches and print them to stdout."""

from importlib.metadata import PackageNotFoundError, version as _pkg_version

try:
    __version__ = _pkg_version("bselect")
except PackageNotFoundError:
    __version__ = "0.4.0"  # fallback for editable installs / dev
