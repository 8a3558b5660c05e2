"""Cursor-following iteration over paginated host collections."""

from __future__ import annotations

import logging
from typing import Callable, Iterator, Optional, Protocol, TypeVar

from prnotes_core.errors import Cancelled

logger = logging.getLogger(__name__)

# GitHub's maximum page size; keeps round-trips to a minimum.
PAGE_SIZE = 100

T = TypeVar("T")

Cursor = Optional[int]
FetchPage = Callable[[Cursor], tuple[list[T], Cursor]]


class CancelEvent(Protocol):
    def is_set(self) -> bool: ...


def check_cancelled(cancel: CancelEvent | None, what: str) -> None:
    """Raise Cancelled if the caller asked to stop before *what* starts."""
    if cancel is not None and cancel.is_set():
        raise Cancelled(f"cancelled before {what}")


def walk_pages(fetch_page: FetchPage, cancel: CancelEvent | None = None, what: str = "page fetch") -> Iterator[T]:
    """Yield every item of a paginated collection, one page at a time.

    ``fetch_page(cursor)`` returns ``(items, next_cursor)``; the first call
    receives ``None`` and a ``None`` next cursor ends the walk. The next page
    is only requested once the caller has consumed the current one.

    Errors from ``fetch_page`` propagate as-is. Items yielded before the
    failure are not retracted.
    """
    cursor: Cursor = None
    pages = 0
    while True:
        check_cancelled(cancel, what)
        items, next_cursor = fetch_page(cursor)
        pages += 1
        logger.debug("%s: page %d returned %d item(s)", what, pages, len(items))
        yield from items
        if next_cursor is None:
            return
        cursor = next_cursor
