"""GitHub access for release notes, behind a small host interface.

The traversal only needs five calls from the hosting API. They are declared
by SourceHost so tests can drive the algorithm with an in-memory double;
GitHubHost implements them on top of PyGithub and converts every response
into the frozen records of prnotes_core.models.
"""

from __future__ import annotations

import logging
from typing import Callable, Protocol, TypeVar

import requests
from github import Auth, Github, GithubException, UnknownObjectException

from prnotes_core.errors import FetchError, NoReleaseFound
from prnotes_core.models import ChangeRequest, Commit
from prnotes_core.paging import PAGE_SIZE, Cursor

logger = logging.getLogger(__name__)

T = TypeVar("T")


class SourceHost(Protocol):
    def get_default_branch(self) -> str: ...

    def list_pulls(self, cursor: Cursor) -> tuple[list[ChangeRequest], Cursor]: ...

    def list_pull_commits(self, number: int, cursor: Cursor) -> tuple[list[Commit], Cursor]: ...

    def get_latest_release_tag(self) -> str: ...

    def compare_commits(self, base: str, head: str) -> list[Commit]: ...


def to_change_request(pr) -> ChangeRequest:
    user = pr.user
    return ChangeRequest(
        number=pr.number,
        title=pr.title or "",
        author=user.login if user is not None else None,
        merged_at=pr.merged_at,
        base_branch=pr.base.ref,
    )


def to_commit(commit) -> Commit:
    git_commit = commit.commit
    tree = git_commit.tree
    return Commit(
        sha=commit.sha,
        message=git_commit.message or "",
        tree_sha=tree.sha if tree is not None else None,
    )


def _call(operation: str, fn: Callable[[], T]) -> T:
    try:
        return fn()
    except GithubException as e:
        message = e.data.get("message") if isinstance(e.data, dict) else e.data
        raise FetchError(operation, f"{e.status} {message}") from e
    except requests.RequestException as e:
        raise FetchError(operation, e) from e


class GitHubHost:
    """SourceHost backed by the GitHub REST API through PyGithub.

    Cursors are 0-based page indexes, and a page shorter than the client's
    ``per_page`` is the last one. An injected ``client`` keeps its own
    ``per_page`` (PyGithub defaults to 30); the built-in one asks for
    PAGE_SIZE. The repository object is created lazily, so constructing a
    GitHubHost performs no network access.
    """

    def __init__(self, org: str, repo: str, token: str | None = None, client: Github | None = None):
        self.full_name = f"{org}/{repo}"
        if client is None:
            auth = Auth.Token(token) if token else None
            client = Github(auth=auth, per_page=PAGE_SIZE)
        self._gh = client
        self._repo = client.get_repo(self.full_name, lazy=True)
        # PyGithub pull objects listed but whose commits are not fully paged yet.
        self._pulls: dict = {}

    def _next_cursor(self, page: int, items: list) -> Cursor:
        # GitHub returns full pages until the last one.
        return page + 1 if len(items) >= self._gh.per_page else None

    def get_default_branch(self) -> str:
        branch = _call(f"get repository {self.full_name}", lambda: self._repo.default_branch)
        logger.debug("%s default branch: %s", self.full_name, branch)
        return branch

    def list_pulls(self, cursor: Cursor) -> tuple[list[ChangeRequest], Cursor]:
        page = cursor or 0
        pulls = _call(
            f"listing PRs of {self.full_name} (page {page + 1})",
            lambda: list(self._repo.get_pulls(state="closed").get_page(page)),
        )
        for pr in pulls:
            self._pulls[pr.number] = pr
        return [to_change_request(pr) for pr in pulls], self._next_cursor(page, pulls)

    def list_pull_commits(self, number: int, cursor: Cursor) -> tuple[list[Commit], Cursor]:
        page = cursor or 0
        operation = f"listing commits of PR #{number} (page {page + 1})"

        def fetch():
            pr = self._pulls.get(number)
            if pr is None:
                pr = self._pulls[number] = self._repo.get_pull(number)
            return [to_commit(c) for c in pr.get_commits().get_page(page)]

        commits = _call(operation, fetch)
        next_cursor = self._next_cursor(page, commits)
        if next_cursor is None:
            self._pulls.pop(number, None)
        return commits, next_cursor

    def get_latest_release_tag(self) -> str:
        try:
            release = self._repo.get_latest_release()
        except UnknownObjectException as e:
            raise NoReleaseFound(f"{self.full_name} has no releases") from e
        except GithubException as e:
            raise FetchError(f"get latest release of {self.full_name}", f"{e.status} {e.data}") from e
        except requests.RequestException as e:
            raise FetchError(f"get latest release of {self.full_name}", e) from e
        return release.tag_name

    def compare_commits(self, base: str, head: str) -> list[Commit]:
        """Every commit in ``base...head``.

        ``Comparison.commits`` is a PaginatedList from PyGithub 2.2 on, so
        iterating it follows pages past the 250 commits GitHub returns inline.
        """
        return _call(
            f"compare commits {base}...{head}",
            lambda: [to_commit(c) for c in self._repo.compare(base, head).commits],
        )
