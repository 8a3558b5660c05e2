"""Decide whether one pull request goes into the notes, and render it."""

from __future__ import annotations

import logging

from prnotes_core.boundary import fingerprints_of
from prnotes_core.models import ChangeRequest, NotesConfig, Step
from prnotes_core.paging import CancelEvent, check_cancelled, walk_pages
from prnotes_core.render import render_change_request

logger = logging.getLogger(__name__)


def process_change_request(
    pr: ChangeRequest,
    host,
    config: NotesConfig,
    boundary,
    cancel: CancelEvent | None = None,
) -> tuple[Step, list[str]]:
    """Return the verdict for *pr* and the lines to write for it.

    Checks run in this order, each able to end processing early:

    1. ``pr.number == config.stop_at`` stops the run, merged or not.
    2. Unmerged pull requests are skipped.
    3. With ``since_latest_release``, pull requests not based on the default
       branch are skipped, and a pull request whose commits share no tree
       fingerprint with the boundary stops the run. Pull requests are listed
       newest first, so every older one is assumed to predate the release too.

    ``boundary`` only needs ``default_branch()`` and ``fingerprints()``; it is
    not consulted unless ``since_latest_release`` is set.
    """
    if config.stop_at is not None and pr.number == config.stop_at:
        logger.debug("Reached PR #%d (stop-at)", pr.number)
        return Step.STOP, []

    if pr.merged_at is None:
        logger.debug("Skipping PR #%d: closed without merging", pr.number)
        return Step.CONTINUE, []

    check_cancelled(cancel, f"listing commits of PR #{pr.number}")
    commits = list(
        walk_pages(
            lambda cursor: host.list_pull_commits(pr.number, cursor),
            cancel,
            what=f"commits of PR #{pr.number}",
        )
    )

    if config.since_latest_release:
        if pr.base_branch != boundary.default_branch():
            logger.debug("Skipping PR #%d: based on %s", pr.number, pr.base_branch)
            return Step.CONTINUE, []

        if not fingerprints_of(commits) & boundary.fingerprints():
            logger.debug("PR #%d has no commits since the latest release", pr.number)
            return Step.STOP, []

    return Step.CONTINUE, render_change_request(pr, commits, config.render_options)
