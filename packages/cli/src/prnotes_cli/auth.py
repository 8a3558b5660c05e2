"""GitHub token resolution for the CLI.

This is the only place that reads GITHUB_TOKEN or asks the gh CLI; the core
only ever sees the token handed to it in NotesConfig.

Sources, first non-empty wins:
  1. explicit token (--github-token or github_token in .prnotes.yml)
  2. GITHUB_TOKEN environment variable
  3. `gh auth token` (GitHub CLI session)

No token at all is allowed: public repositories can be read anonymously,
just under a much lower rate limit.
"""

from __future__ import annotations

import logging
import os
import subprocess

logger = logging.getLogger(__name__)

_GH_TIMEOUT_SECONDS = 5


def _from_env() -> str | None:
    return os.environ.get("GITHUB_TOKEN") or None


def _from_gh_cli() -> str | None:
    try:
        result = subprocess.run(
            ["gh", "auth", "token"],
            capture_output=True,
            text=True,
            timeout=_GH_TIMEOUT_SECONDS,
        )
    except (FileNotFoundError, subprocess.TimeoutExpired) as e:
        logger.debug("gh CLI unavailable: %s", type(e).__name__)
        return None
    if result.returncode != 0:
        return None
    return result.stdout.strip() or None


def resolve_github_token(explicit: str | None = None) -> str | None:
    """Return a GitHub token, or None for anonymous access. Never raises."""
    if explicit:
        return explicit
    for source, lookup in (("GITHUB_TOKEN", _from_env), ("gh CLI session", _from_gh_cli)):
        token = lookup()
        if token:
            logger.debug("Using GitHub token from %s.", source)
            return token
    logger.debug("No GitHub token found; using anonymous access.")
    return None
