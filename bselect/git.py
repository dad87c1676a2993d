"""Branch discovery straight from the on-disk reference store.

Handles:
  - Locating the ``.git`` directory from any path inside a work tree
  - Walking ``refs/heads`` and ``refs/remotes`` into flat branch names
  - Skipping symbolic references such as ``refs/remotes/origin/HEAD``

Only the loose (one file per reference) layout is read. References that
``git pack-refs`` has moved into ``.git/packed-refs`` are not seen; use the
``git`` executable backend (``bselect.git_cli``) for such repositories.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import NamedTuple, Protocol

from pydantic import ValidationError

from bselect.constants import GIT_DIR, LOCAL_REFS_NAMESPACE, REFS_DIR, REMOTE_REFS_NAMESPACE
from bselect.errors import NotADirectory, NotARepository, RefParseError
from bselect.models import Branch, BranchType
from bselect.utils import log_debug


class BranchGetter(Protocol):
    """Anything that can enumerate the branches of one repository."""

    def branches(self) -> list[Branch]:
        ...


# ============================================================================
# Repository Discovery
# ============================================================================


def discover_repo(start_dir: str | Path) -> Path:
    """Find the ``.git`` directory for *start_dir*.

    Walks from the canonicalized *start_dir* up through its ancestors and
    returns the first ``.git`` directory found.

    Args:
        start_dir: Any path inside the work tree.

    Returns:
        Absolute path to the metadata directory.

    Raises:
        NotADirectory: If *start_dir* cannot be canonicalized.
        NotARepository: If the filesystem root is reached without a match.
    """
    try:
        current = Path(start_dir).resolve(strict=True)
    except (OSError, RuntimeError) as exc:
        raise NotADirectory(f"'{start_dir}' not a directory") from exc

    while not (current / GIT_DIR).is_dir():
        parent = current.parent
        if parent == current:
            raise NotARepository(
                f"not a git repository (or any of its parents): '{start_dir}'"
            )
        current = parent

    git_dir = current / GIT_DIR
    log_debug(f"Found repository metadata at {git_dir}")
    return git_dir


# ============================================================================
# Reference Tree Walking
# ============================================================================


class RefEntry(NamedTuple):
    """A loose reference file read during a walk."""

    relative_path: str
    raw_content: bytes

    @property
    def is_symbolic(self) -> bool:
        # Object ids are hex digests and never contain '/', while symbolic
        # refs read "ref: refs/...". No further parsing is attempted.
        return b"/" in self.raw_content


def parse_refs(namespace_dir: str | Path) -> list[str]:
    """List the direct references below *namespace_dir*.

    Nested directories produce slash-joined names (``user/feature``).
    Order follows directory iteration and is not sorted.

    Args:
        namespace_dir: e.g. ``.git/refs/heads``.

    Returns:
        Reference names relative to *namespace_dir*; empty if the directory
        does not exist.

    Raises:
        RefParseError: If a directory or reference file cannot be read.
    """
    namespace_dir = Path(namespace_dir)
    if not namespace_dir.is_dir():
        return []
    return [entry.relative_path for entry in _walk_ref_dir(namespace_dir) if not entry.is_symbolic]


def _walk_ref_dir(directory: Path) -> list[RefEntry]:
    entries: list[RefEntry] = []
    try:
        with os.scandir(directory) as it:
            items = list(it)
    except OSError as exc:
        raise RefParseError(f"could not parse refs: '{directory}': {exc}", path=str(directory)) from exc

    for item in items:
        path = Path(item.path)
        try:
            is_file = item.is_file(follow_symlinks=False)
            is_dir = item.is_dir(follow_symlinks=False)
        except OSError as exc:
            raise RefParseError(f"could not parse refs: '{path}': {exc}", path=str(path)) from exc

        if is_file:
            entries.append(RefEntry(item.name, _read_ref(path)))
        elif is_dir:
            entries.extend(
                RefEntry(f"{item.name}/{child.relative_path}", child.raw_content)
                for child in _walk_ref_dir(path)
            )
    return entries


def _read_ref(path: Path) -> bytes:
    try:
        return path.read_bytes()
    except OSError as exc:
        raise RefParseError(f"could not parse refs: '{path}': {exc}", path=str(path)) from exc


# ============================================================================
# Filesystem Backend
# ============================================================================


def branch_from_ref(name: str, branch_type: BranchType, path: str | Path) -> Branch:
    """Build a :class:`Branch` for the reference stored at *path*.

    Raises:
        RefParseError: If *name* is not a usable branch name.
    """
    try:
        return Branch(name=name, branch_type=branch_type)
    except ValidationError as exc:
        raise RefParseError(f"could not parse refs: '{path}': invalid branch name {name!r}", path=str(path)) from exc


@dataclass(frozen=True)
class FsBranchGetter:
    """Reads branches from the loose reference files of a repository."""

    repo_dir: Path

    def branches(self) -> list[Branch]:
        refs_dir = discover_repo(self.repo_dir) / REFS_DIR
        local_dir = refs_dir / LOCAL_REFS_NAMESPACE
        remote_dir = refs_dir / REMOTE_REFS_NAMESPACE
        branches = [
            branch_from_ref(name, BranchType.LOCAL, local_dir / name)
            for name in parse_refs(local_dir)
        ]
        local_count = len(branches)
        branches.extend(
            branch_from_ref(name, BranchType.REMOTE, remote_dir / name)
            for name in parse_refs(remote_dir)
        )
        log_debug(f"Read {local_count} local and {len(branches) - local_count} remote refs from {refs_dir}")
        return branches
