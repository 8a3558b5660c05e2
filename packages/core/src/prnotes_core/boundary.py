"""Which commits are new since the latest release.

The boundary is the set of tree fingerprints of the commits GitHub reports
in the comparison ``<latest release tag>...<default branch>``. A merged pull
request belongs in the notes when at least one of its own commits has a
fingerprint in that set.

Pull request commits and comparison commits are different objects: a
squash or rebase merge rewrites SHAs but keeps the resulting tree, which is
why membership is tested on tree SHAs rather than commit SHAs. The flip side
is that two unrelated commits producing the same tree compare equal.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable

from prnotes_core.errors import MalformedData
from prnotes_core.models import Commit
from prnotes_core.paging import CancelEvent, check_cancelled

logger = logging.getLogger(__name__)


def fingerprint(commit: Commit) -> str:
    """Return the content fingerprint of *commit*.

    A missing fingerprint is an error: skipping the commit would silently
    change which pull requests match the boundary.
    """
    if not commit.tree_sha:
        raise MalformedData(f"commit {commit.sha} has no tree SHA")
    return commit.tree_sha


def fingerprints_of(commits: Iterable[Commit]) -> frozenset[str]:
    return frozenset(fingerprint(c) for c in commits)


class BoundaryResolver:
    """Resolves the boundary on first use and remembers it for the run.

    Each host call is made at most once per resolver. The orchestrator owns a
    single resolver per run and hands it to every process_change_request()
    call.
    """

    def __init__(self, host, cancel: CancelEvent | None = None):
        self._host = host
        self._cancel = cancel
        self._default_branch: str | None = None
        self._tag: str | None = None
        self._fingerprints: frozenset[str] | None = None

    def default_branch(self) -> str:
        if self._default_branch is None:
            check_cancelled(self._cancel, "fetching the repository")
            self._default_branch = self._host.get_default_branch()
        return self._default_branch

    def latest_release_tag(self) -> str:
        if self._tag is None:
            check_cancelled(self._cancel, "fetching the latest release")
            self._tag = self._host.get_latest_release_tag()
        return self._tag

    def fingerprints(self) -> frozenset[str]:
        if self._fingerprints is None:
            branch = self.default_branch()
            tag = self.latest_release_tag()
            check_cancelled(self._cancel, f"comparing {tag}...{branch}")
            commits = self._host.compare_commits(tag, branch)
            self._fingerprints = fingerprints_of(commits)
            logger.info(
                "%d commit(s) on %s since release %s (%d distinct trees)",
                len(commits),
                branch,
                tag,
                len(self._fingerprints),
            )
        return self._fingerprints


@dataclass(frozen=True)
class StaticBoundary:
    """An already-resolved boundary, for callers that computed it elsewhere."""

    branch: str
    tree_shas: frozenset[str]

    def default_branch(self) -> str:
        return self.branch

    def fingerprints(self) -> frozenset[str]:
        return self.tree_shas
