"""Unit tests for bselect/branches.py (candidate selection)."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest

from bselect.branches import enumerate_branches, filter_branches
from bselect.errors import InvalidPattern, NoMatchingBranches, NotARepository
from bselect.filters import compile_filters
from bselect.models import Branch


class StaticGetter:
    """BranchGetter returning a fixed list."""

    def __init__(self, branches):
        self._branches = list(branches)
        self.calls = 0

    def branches(self):
        self.calls += 1
        return list(self._branches)


def make_branches():
    return [
        Branch.local("feature/xyz"),
        Branch.local("123-add_a_new_feature"),
        Branch.remote("ABC"),
        Branch.local("456-fix_a_bug"),
    ]


class TestFilterBranches:
    """Tests for filter_branches()."""

    def test_excludes_remotes_by_default(self):
        out = filter_branches(make_branches(), include_remotes=False, patterns=[])

        assert all(not b.is_remote for b in out)
        assert len(out) == 3

    def test_includes_remotes_when_asked(self):
        out = filter_branches(make_branches(), include_remotes=True, patterns=[])

        assert Branch.remote("ABC") in out
        assert len(out) == 4

    def test_sorted_by_display_form(self):
        out = filter_branches(make_branches(), include_remotes=True, patterns=[])

        displays = [b.display() for b in out]
        assert displays == sorted(displays)
        assert displays[-1] == "remotes/ABC"

    def test_multiple_filters_are_ored(self):
        out = filter_branches(
            make_branches() + [Branch.local("some_other_branch-123")],
            include_remotes=False,
            patterns=["feature/", "^[0-9]+.*$"],
        )

        assert [b.name for b in out] == ["123-add_a_new_feature", "456-fix_a_bug", "feature/xyz"]

    def test_filters_and_all(self):
        branches = make_branches() + [Branch.remote("feature/remote_feature")]

        out = filter_branches(branches, include_remotes=True, patterns=["^[0-9]+", "remotes/feature"])

        assert [b.display() for b in out] == [
            "123-add_a_new_feature",
            "456-fix_a_bug",
            "remotes/feature/remote_feature",
        ]

    def test_no_match_raises(self):
        with pytest.raises(NoMatchingBranches, match="no matching branches"):
            filter_branches(make_branches(), include_remotes=False, patterns=["no_match"])

    def test_only_remotes_without_all_raises(self):
        with pytest.raises(NoMatchingBranches):
            filter_branches([Branch.remote("origin/main")], include_remotes=False, patterns=[])

    def test_empty_input_raises(self):
        with pytest.raises(NoMatchingBranches):
            filter_branches([], include_remotes=True, patterns=[])

    def test_invalid_pattern_raises(self):
        with pytest.raises(InvalidPattern):
            filter_branches(make_branches(), include_remotes=True, patterns=["("])


class TestEnumerateBranches:
    """Tests for enumerate_branches()."""

    def test_local_only(self):
        getter = StaticGetter([Branch.local("main"), Branch.remote("origin/main")])

        out = enumerate_branches(".", include_remotes=False, getter=getter)

        assert out == [Branch.local("main")]

    def test_with_remotes(self):
        getter = StaticGetter([Branch.remote("origin/main"), Branch.local("main")])

        out = enumerate_branches(".", include_remotes=True, getter=getter)

        assert [b.display() for b in out] == ["main", "remotes/origin/main"]

    def test_invalid_pattern_fails_before_discovery(self):
        getter = StaticGetter([Branch.local("main")])

        with pytest.raises(InvalidPattern):
            enumerate_branches(".", filter_patterns=["[a-"], getter=getter)

        assert getter.calls == 0

    def test_patterns_compiled_once(self):
        getter = StaticGetter([Branch.local("main"), Branch.local("dev")])

        with patch("bselect.branches.compile_filters", wraps=compile_filters) as mock_compile:
            out = enumerate_branches(".", filter_patterns=["^ma"], getter=getter)

        assert out == [Branch.local("main")]
        mock_compile.assert_called_once_with(["^ma"])

    def test_discovery_errors_propagate(self):
        getter = MagicMock()
        getter.branches.side_effect = NotARepository("not a git repository")

        with pytest.raises(NotARepository):
            enumerate_branches(".", getter=getter)

    def test_default_getter_reads_disk(self, git_tree):
        out = enumerate_branches(git_tree, include_remotes=True)

        assert [b.display() for b in out] == [
            "main",
            "other_branch",
            "remotes/origin/main",
            "remotes/origin/remote_branch",
            "remotes/upstream/main",
            "user/some_dev_branch",
        ]

    def test_default_getter_local_only(self, git_tree):
        out = enumerate_branches(git_tree)

        assert [b.name for b in out] == ["main", "other_branch", "user/some_dev_branch"]

    def test_filter_against_disk(self, git_tree):
        out = enumerate_branches(git_tree, include_remotes=True, filter_patterns=["^remotes/origin/"])

        assert [b.name for b in out] == ["origin/main", "origin/remote_branch"]

    def test_empty_repository_has_no_matches(self, empty_repo):
        with pytest.raises(NoMatchingBranches):
            enumerate_branches(empty_repo, include_remotes=True)
