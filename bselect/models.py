from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, field_validator

from bselect.constants import REMOTE_DISPLAY_PREFIX


class BranchType(str, Enum):
    """Namespace a branch was discovered in."""

    LOCAL = "local"
    REMOTE = "remote"


class Branch(BaseModel):
    """A discovered branch.

    ``name`` is relative to its namespace root (``refs/heads`` or
    ``refs/remotes``) and uses ``/`` as the hierarchy separator, e.g.
    ``user/feature-x`` or ``origin/main``.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    """Branch name relative to its namespace."""

    branch_type: BranchType
    """Local or remote-tracking."""

    @field_validator("name")
    @classmethod
    def name_is_clean(cls, value: str) -> str:
        if not value:
            raise ValueError("branch name must not be empty")
        if value != value.strip():
            raise ValueError(f"branch name has surrounding whitespace: {value!r}")
        return value

    @classmethod
    def local(cls, name: str) -> Branch:
        return cls(name=name, branch_type=BranchType.LOCAL)

    @classmethod
    def remote(cls, name: str) -> Branch:
        return cls(name=name, branch_type=BranchType.REMOTE)

    @property
    def is_remote(self) -> bool:
        return self.branch_type is BranchType.REMOTE

    def display(self) -> str:
        """Display form used for filtering and output.

        Remote branches are prefixed with ``remotes/`` so that
        ``origin/main`` shows (and matches) as ``remotes/origin/main``.
        """
        if self.is_remote:
            return f"{REMOTE_DISPLAY_PREFIX}{self.name}"
        return self.name

    def __str__(self) -> str:
        return self.display()
