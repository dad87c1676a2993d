"""
Top-level pytest conftest.py -- shared fixtures.

Provides:
    has_git      - session-scoped check for the git executable
    requires_git - skip the test when git is not installed
    local_repo   - temporary directory with a deterministic git repo
    git_cmd      - helper running git with a fixed identity
    _isolated_env - BSELECT_* variables point at the test's tmp_path (autouse)
"""

import os
import shutil
import subprocess

import pytest


@pytest.fixture(autouse=True)
def _isolated_env(tmp_path, monkeypatch):
    """Keep config writes inside tmp_path and reset behaviour switches."""
    monkeypatch.setenv("BSELECT_CONFIG_HOME", str(tmp_path / "config-home"))
    monkeypatch.delenv("BSELECT_DEBUG", raising=False)
    monkeypatch.delenv("BSELECT_NONINTERACTIVE", raising=False)


@pytest.fixture(scope="session")
def has_git():
    """Check whether git is available on this system."""
    return shutil.which("git") is not None


@pytest.fixture
def requires_git(has_git):
    """Skip the test when git is not installed."""
    if not has_git:
        pytest.skip("git is not available")


def run_git(repo, *args):
    """Run git in *repo* with a fixed identity, raising on failure."""
    env = {
        **os.environ,
        "GIT_AUTHOR_NAME": "Test User",
        "GIT_AUTHOR_EMAIL": "test@example.com",
        "GIT_COMMITTER_NAME": "Test User",
        "GIT_COMMITTER_EMAIL": "test@example.com",
    }
    return subprocess.run(
        ["git", "-c", "commit.gpgsign=false", *args],
        cwd=str(repo), env=env, capture_output=True, text=True, check=True,
    )


@pytest.fixture
def git_cmd():
    """Return the run_git helper for tests that need to shape a repo."""
    return run_git


@pytest.fixture
def local_repo(tmp_path, requires_git):
    """Create a temporary directory containing a deterministic git repo.

    The repo has ``main`` as its default branch, a single ``README.md``,
    one initial commit and a ``feature/login`` branch.  Yields the
    ``pathlib.Path`` to the repo root.
    """
    repo = tmp_path / "repo"
    repo.mkdir()

    run_git(repo, "init", "-b", "main")
    (repo / "README.md").write_text("# Test Repository\n")
    run_git(repo, "add", "README.md")
    run_git(repo, "commit", "-m", "Initial commit")
    run_git(repo, "branch", "feature/login")

    yield repo
