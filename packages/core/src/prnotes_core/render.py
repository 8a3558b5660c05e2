"""Plain-text formatting of pull requests and their commits."""

from __future__ import annotations

from prnotes_core.models import ChangeRequest, Commit, RenderOptions

MAX_MESSAGE_CHARS = 90
ELLIPSIS = "..."


def summarize_message(message: str) -> str:
    """First line of a commit message, cut to 90 characters, stripped."""
    msg = message.split("\n", 1)[0]
    if len(msg) > MAX_MESSAGE_CHARS:
        msg = msg[:MAX_MESSAGE_CHARS] + ELLIPSIS
    return msg.strip()


def render_header(pr: ChangeRequest, include_author: bool = False) -> str:
    if include_author and pr.author:
        return f"- PR #{pr.number} - @{pr.author} - {pr.title}"
    return f"- PR #{pr.number} {pr.title}"


def render_commit(commit: Commit) -> str:
    return f"    - {commit.sha} {summarize_message(commit.message)}"


def render_change_request(pr: ChangeRequest, commits: list[Commit], options: RenderOptions) -> list[str]:
    """Lines for one pull request, without trailing newlines.

    With commits enabled the block ends with an empty line, even when the
    pull request has no commits.
    """
    lines = [render_header(pr, options.include_author)]
    if options.include_commits:
        lines.extend(render_commit(c) for c in commits)
        lines.append("")
    return lines
