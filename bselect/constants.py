"""Configuration defaults for bselect.

Environment overrides:
  BSELECT_CONFIG_HOME     directory that holds ``git-branch-selector/``
  BSELECT_DEBUG=1         enable debug logging
  BSELECT_NONINTERACTIVE=1  refuse to open the selection widget
  BSELECT_GIT_TIMEOUT     seconds allowed for the ``git`` backend
"""

from __future__ import annotations

import os
from pathlib import Path


def _env_int(key: str, default: int) -> int:
    """Read an integer from an environment variable, returning default on parse failure."""
    try:
        return int(os.environ.get(key, str(default)))
    except (ValueError, TypeError):
        return default


# ============================================================================
# Repository Layout
# ============================================================================

GIT_DIR: str = ".git"
"""Name of the repository metadata directory."""

REFS_DIR: str = "refs"
LOCAL_REFS_NAMESPACE: str = "heads"
REMOTE_REFS_NAMESPACE: str = "remotes"

REMOTE_DISPLAY_PREFIX: str = "remotes/"
"""Prefix prepended to remote branch names in their display form."""


# ============================================================================
# Config File Location
# ============================================================================

CONFIG_DIR_NAME: str = "git-branch-selector"
CONFIG_FILE_NAME: str = "config.json"

DEFAULT_THEME: str = "default"


def get_config_home() -> Path:
    """Get the base directory for per-user configuration.

    Respects BSELECT_CONFIG_HOME, then XDG_CONFIG_HOME.
    Defaults to ~/.config if neither is set.
    """
    for key in ("BSELECT_CONFIG_HOME", "XDG_CONFIG_HOME"):
        home_str = os.environ.get(key)
        if home_str:
            return Path(home_str)
    return Path.home() / ".config"


def get_config_path() -> Path:
    """Path to the bselect config file."""
    return get_config_home() / CONFIG_DIR_NAME / CONFIG_FILE_NAME


# ============================================================================
# Timeouts
# ============================================================================

TIMEOUT_GIT_QUERY: int = _env_int("BSELECT_GIT_TIMEOUT", 30)
"""Seconds allowed for a ``git for-each-ref`` call."""
