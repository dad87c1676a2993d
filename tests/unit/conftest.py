"""
Pytest configuration for unit tests.

Builds fake ``.git`` directories by hand so that the filesystem backend can
be tested without the git executable.
"""

from pathlib import Path

import pytest

SHA_MAIN = "e2bf29060f42743538be07c164820cdeca0d9d2b"
SHA_OTHER = "a9c68440003151dd3cf7ffa4eaedd425d221d268"
SHA_DEV = "da7d6bf0955fa4d511067c00551fee04c613079d"
SHA_UPSTREAM = "707a178071655bed661318a5344557fe3e9a6ce1"


def write_ref(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)


@pytest.fixture
def git_tree(tmp_path):
    """Work tree with local and remote loose refs.

    Layout::

        .git/refs/heads/main
        .git/refs/heads/other_branch
        .git/refs/heads/user/some_dev_branch
        .git/refs/remotes/origin/main
        .git/refs/remotes/origin/remote_branch
        .git/refs/remotes/origin/HEAD          (symbolic)
        .git/refs/remotes/upstream/main
    """
    root = tmp_path / "work"
    heads = root / ".git" / "refs" / "heads"
    remotes = root / ".git" / "refs" / "remotes"

    write_ref(heads / "main", SHA_MAIN + "\n")
    write_ref(heads / "other_branch", SHA_OTHER + "\n")
    write_ref(heads / "user" / "some_dev_branch", SHA_DEV + "\n")

    write_ref(remotes / "origin" / "main", SHA_MAIN + "\n")
    write_ref(remotes / "origin" / "remote_branch", SHA_MAIN + "\n")
    write_ref(remotes / "origin" / "HEAD", "ref: refs/remotes/origin/main\n")
    write_ref(remotes / "upstream" / "main", SHA_UPSTREAM + "\n")
    return root


@pytest.fixture
def empty_repo(tmp_path):
    """Work tree with a bare ``.git`` directory and no refs at all."""
    root = tmp_path / "empty"
    (root / ".git").mkdir(parents=True)
    return root
