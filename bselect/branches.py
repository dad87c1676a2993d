"""Candidate selection: discovery, inclusion rules and filtering."""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence
from pathlib import Path

from bselect.errors import NoMatchingBranches
from bselect.filters import compile_filters, matches_regex
from bselect.git import BranchGetter, FsBranchGetter
from bselect.models import Branch
from bselect.utils import log_debug


def filter_branches(
    branches: Iterable[Branch],
    include_remotes: bool,
    patterns: Sequence[str],
) -> list[Branch]:
    """Apply inclusion and pattern rules to *branches*.

    Remote branches are dropped unless *include_remotes* is set. The result
    is sorted by display form.

    Raises:
        InvalidPattern: If any pattern does not compile.
        NoMatchingBranches: If nothing is left.
    """
    return _select(branches, include_remotes, compile_filters(patterns))


def _select(
    branches: Iterable[Branch],
    include_remotes: bool,
    compiled: Sequence[re.Pattern[str]],
) -> list[Branch]:
    out = [
        b for b in branches
        if (include_remotes or not b.is_remote) and matches_regex(b, compiled)
    ]
    if not out:
        raise NoMatchingBranches("no matching branches")
    return sorted(out, key=Branch.display)


def enumerate_branches(
    repo_dir: str | Path,
    include_remotes: bool = False,
    filter_patterns: Sequence[str] = (),
    getter: BranchGetter | None = None,
) -> list[Branch]:
    """Discover the branches of the repository containing *repo_dir* and filter them.

    Args:
        repo_dir: Any path inside the work tree.
        include_remotes: Keep remote-tracking branches.
        filter_patterns: Regular expressions; a branch is kept if any matches.
        getter: Discovery backend; defaults to reading loose refs from disk.

    Returns:
        Matching branches sorted by display form.

    Raises:
        NotADirectory, NotARepository, RefParseError: From discovery.
        InvalidPattern: If a pattern does not compile.
        NoMatchingBranches: If no branch survives the rules.
    """
    # compiled before discovery so a bad pattern fails without disk access
    compiled = compile_filters(filter_patterns)
    if getter is None:
        getter = FsBranchGetter(Path(repo_dir))
    found = getter.branches()
    log_debug(f"Discovered {len(found)} branch(es) via {type(getter).__name__}")
    return _select(found, include_remotes, compiled)
