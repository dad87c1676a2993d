"""Exception hierarchy for bselect.

Provides a structured exception tree so callers can catch broad
categories (``BselectError``) or specific failure modes.

This module is a base-layer module: it must NOT import from any
other ``bselect`` submodule.
"""

from __future__ import annotations


class BselectError(Exception):
    """Base exception for all bselect errors."""


class GitError(BselectError):
    """Failures locating a repository or reading its references."""


class NotADirectory(GitError):
    """The starting path does not exist or cannot be canonicalized."""


class NotARepository(GitError):
    """No ``.git`` directory was found in the path or any of its parents."""


class RefParseError(GitError):
    """An I/O failure while walking the reference tree.

    The offending path is kept on ``path``; the underlying ``OSError`` is
    chained as ``__cause__``.
    """

    def __init__(self, message: str, path: str = "") -> None:
        super().__init__(message)
        self.path = path

    def __reduce__(self):
        return (type(self), (self.args[0], self.path))


class InvalidPattern(BselectError):
    """A filter string is not a valid regular expression."""

    def __init__(self, message: str, pattern: str = "") -> None:
        super().__init__(message)
        self.pattern = pattern

    def __reduce__(self):
        return (type(self), (self.args[0], self.pattern))


class NoMatchingBranches(BselectError):
    """Discovery succeeded but no branch survived the inclusion/filter rules."""


class ConfigError(BselectError):
    """Config file cannot be located, read, parsed or written."""


class SelectError(BselectError):
    """The interactive selection widget cannot run."""
