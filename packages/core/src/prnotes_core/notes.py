"""Release notes orchestration: walk closed pull requests, newest first."""

from __future__ import annotations

import logging
from typing import TextIO

from prnotes_core.boundary import BoundaryResolver
from prnotes_core.errors import ConfigError
from prnotes_core.models import NotesConfig, Step
from prnotes_core.paging import CancelEvent, walk_pages
from prnotes_core.processor import process_change_request

logger = logging.getLogger(__name__)


def build_release_notes(
    out: TextIO,
    config: NotesConfig,
    host=None,
    cancel: CancelEvent | None = None,
) -> int:
    """Write release notes for ``config.org/config.repo`` to *out*.

    Lines are written as soon as each pull request is processed, so when an
    error aborts the run the notes already written stay in *out*. Returns the
    number of pull requests written.

    ``host`` defaults to a GitHubHost for the configured repository; tests
    pass an in-memory SourceHost instead.
    """
    if not config.org:
        raise ConfigError("org is required")
    if not config.repo:
        raise ConfigError("repo is required")

    if host is None:
        from prnotes_core.gh.host import GitHubHost

        host = GitHubHost(config.org, config.repo, token=config.github_token)

    # Resolved on first use only, then shared by every pull request of the run.
    boundary = BoundaryResolver(host, cancel)

    written = 0
    for pr in walk_pages(host.list_pulls, cancel, what=f"PRs of {config.full_name}"):
        step, lines = process_change_request(pr, host, config, boundary, cancel)
        if step is Step.STOP:
            break
        for line in lines:
            out.write(line + "\n")
        if lines:
            written += 1

    logger.debug("Wrote %d PR(s) for %s", written, config.full_name)
    return written
