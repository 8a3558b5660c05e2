"""Shared fixtures: an in-memory SourceHost and record builders."""

from __future__ import annotations

from collections import Counter
from datetime import datetime, timezone

import pytest

from prnotes_core.errors import NoReleaseFound
from prnotes_core.models import ChangeRequest, Commit

MERGED = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


def _make_pr(number, title="", merged=True, base="main", author="alice"):
    return ChangeRequest(
        number=number,
        title=title or f"PR {number}",
        author=author,
        merged_at=MERGED if merged else None,
        base_branch=base,
    )


def _make_commit(sha, message="", tree=None):
    return Commit(sha=sha, message=message or f"commit {sha}", tree_sha=tree if tree is not None else f"tree-{sha}")


class FakeHost:
    """SourceHost over fixed data, paging with a small page size.

    ``errors`` maps a method name to an exception raised on its Nth call
    (``(exc, n)``, 1-based) so tests can fail a run partway through.
    """

    def __init__(
        self,
        pulls,
        commits=None,
        default_branch="main",
        release_tag="v1.0.0",
        compare=None,
        page_size=2,
        errors=None,
    ):
        self.pulls = list(pulls)
        self.commits = commits or {}
        self.default_branch = default_branch
        self.release_tag = release_tag
        self.compare = list(compare or [])
        self.page_size = page_size
        self.errors = errors or {}
        self.calls = Counter()
        self.compared = []
        self.hooks = {}

    def _record(self, name, *args):
        self.calls[name] += 1
        if name in self.hooks:
            self.hooks[name](*args)
        if name in self.errors:
            exc, nth = self.errors[name]
            if self.calls[name] == nth:
                raise exc

    def _page(self, items, cursor):
        start = cursor or 0
        end = start + self.page_size
        return list(items[start:end]), (end if end < len(items) else None)

    def get_default_branch(self):
        self._record("get_default_branch")
        return self.default_branch

    def list_pulls(self, cursor):
        self._record("list_pulls", cursor)
        return self._page(self.pulls, cursor)

    def list_pull_commits(self, number, cursor):
        self._record("list_pull_commits", number, cursor)
        return self._page(self.commits.get(number, []), cursor)

    def get_latest_release_tag(self):
        self._record("get_latest_release_tag")
        if self.release_tag is None:
            raise NoReleaseFound("acme/widgets has no releases")
        return self.release_tag

    def compare_commits(self, base, head):
        self._record("compare_commits", base, head)
        self.compared.append((base, head))
        return list(self.compare)


@pytest.fixture
def fake_host():
    return FakeHost


@pytest.fixture
def make_pr():
    return _make_pr


@pytest.fixture
def make_commit():
    return _make_commit
