"""Error taxonomy for release notes generation.

Every failure aborts the run. Nothing is retried and nothing already written
to the output stream is retracted, so callers receiving one of these errors
must treat the notes printed so far as incomplete.
"""

from __future__ import annotations


class ReleaseNotesError(Exception):
    """Base class for all prnotes errors."""


class ConfigError(ReleaseNotesError):
    """Required configuration is missing or invalid. Raised before any network access."""


class FetchError(ReleaseNotesError):
    """A call to the hosting API failed."""

    def __init__(self, operation: str, detail: object):
        self.operation = operation
        self.detail = detail
        super().__init__(f"{operation}: {detail}")


class NoReleaseFound(ReleaseNotesError):
    """--since-latest-release was requested but the repository has no releases."""


class MalformedData(ReleaseNotesError):
    """A host record is missing a field the algorithm depends on."""


class Cancelled(ReleaseNotesError):
    """The run was cancelled from outside."""
