"""Value types shared by the traversal, the GitHub adapter and the CLI.

Host responses are mapped into these at the adapter edge so the rest of
prnotes_core never touches PyGithub objects.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class ChangeRequest:
    """A closed pull request as listed by the host."""

    number: int
    title: str
    author: str | None = None
    merged_at: datetime | None = None  # None = closed without merging
    base_branch: str = ""


@dataclass(frozen=True)
class Commit:
    """A commit of a pull request or of a comparison.

    ``tree_sha`` is the content fingerprint: two commits with identical
    resulting trees share it even when their SHAs differ.
    """

    sha: str
    message: str
    tree_sha: str | None = None


@dataclass(frozen=True)
class RenderOptions:
    include_commits: bool = False
    include_author: bool = False


@dataclass(frozen=True)
class NotesConfig:
    """Validated settings for one run of build_release_notes()."""

    org: str
    repo: str
    github_token: str | None = None
    stop_at: int | None = None
    include_commits: bool = False
    since_latest_release: bool = False
    include_author: bool = False

    @property
    def full_name(self) -> str:
        return f"{self.org}/{self.repo}"

    @property
    def render_options(self) -> RenderOptions:
        return RenderOptions(include_commits=self.include_commits, include_author=self.include_author)


class Step(enum.Enum):
    """Verdict of processing one pull request."""

    CONTINUE = "continue"
    STOP = "stop"
