"""Branch discovery through the ``git`` executable.

Alternative to :class:`bselect.git.FsBranchGetter` for repositories whose
references have been packed. Uses ``git for-each-ref`` so that packed and
loose references are both reported.
"""

from __future__ import annotations

import subprocess
from dataclasses import dataclass
from pathlib import Path

from bselect.constants import LOCAL_REFS_NAMESPACE, REFS_DIR, REMOTE_REFS_NAMESPACE, TIMEOUT_GIT_QUERY
from bselect.errors import GitError
from bselect.git import branch_from_ref
from bselect.models import Branch, BranchType
from bselect.utils import log_debug

_LOCAL_PREFIX = f"{REFS_DIR}/{LOCAL_REFS_NAMESPACE}/"
_REMOTE_PREFIX = f"{REFS_DIR}/{REMOTE_REFS_NAMESPACE}/"

# refname and symref target separated by a tab; symref is empty for direct refs
_FORMAT = "%(refname)%09%(symref)"


def parse_for_each_ref(output: str) -> list[Branch]:
    """Turn ``git for-each-ref`` output into branches.

    Symbolic references (e.g. ``refs/remotes/origin/HEAD``) and anything
    outside the heads/remotes namespaces are dropped.

    Raises:
        RefParseError: If a reference name is not a usable branch name.
    """
    branches: list[Branch] = []
    for line in output.splitlines():
        if not line.strip():
            continue
        refname, _, symref = line.partition("\t")
        if symref.strip():
            continue
        if refname.startswith(_LOCAL_PREFIX):
            branches.append(branch_from_ref(refname[len(_LOCAL_PREFIX):], BranchType.LOCAL, refname))
        elif refname.startswith(_REMOTE_PREFIX):
            branches.append(branch_from_ref(refname[len(_REMOTE_PREFIX):], BranchType.REMOTE, refname))
    return branches


@dataclass(frozen=True)
class GitCliBranchGetter:
    """Reads branches by running ``git for-each-ref`` in *repo_dir*."""

    repo_dir: Path
    timeout: int = TIMEOUT_GIT_QUERY

    def branches(self) -> list[Branch]:
        cmd = [
            "git", "-C", str(self.repo_dir),
            "for-each-ref", f"--format={_FORMAT}",
            _LOCAL_PREFIX.rstrip("/"), _REMOTE_PREFIX.rstrip("/"),
        ]
        log_debug(f"Running: {' '.join(cmd)}")
        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                check=False,
                timeout=self.timeout,
            )
        except FileNotFoundError as exc:
            raise GitError("could not read repository: git executable not found") from exc
        except subprocess.TimeoutExpired as exc:
            raise GitError(f"could not read repository: git timed out after {self.timeout}s") from exc

        if result.returncode != 0:
            stderr = result.stderr.strip() if result.stderr else f"exit code {result.returncode}"
            raise GitError(f"could not read repository: {stderr}")

        return parse_for_each_ref(result.stdout)
