"""URL frontier: pending queue + visited set for one crawl run."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field


@dataclass(frozen=True)
class LinkFilter:
    """Decides which discovered links are worth crawling on a site.

    A link is accepted when it starts with ``prefix``, looks like a
    pagination or detail page, and carries none of ``ignore_markers``
    (e.g. the ``?units`` toggle that re-renders the same page in other
    units).
    """

    prefix: str
    pagination_markers: tuple[str, ...] = ()
    detail_markers: tuple[str, ...] = ()
    ignore_markers: tuple[str, ...] = ()

    def is_pagination(self, url: str) -> bool:
        return any(marker in url for marker in self.pagination_markers)

    def is_detail(self, url: str) -> bool:
        return any(marker in url for marker in self.detail_markers)

    def accepts(self, url: str) -> bool:
        if not url.startswith(self.prefix):
            return False
        if any(marker in url for marker in self.ignore_markers):
            return False
        return self.is_pagination(url) or self.is_detail(url)


class UrlFrontier:
    """Pending and visited URL sets.

    A URL is in at most one of the two sets, and a visited URL never goes
    back to pending. Pending URLs are handed out first-in first-out.
    """

    def __init__(self, link_filter: LinkFilter):
        self.link_filter = link_filter
        self._queue: deque[str] = deque()
        self._pending: set[str] = set()
        self._visited: set[str] = set()

    def is_visited(self, url: str) -> bool:
        return url in self._visited

    def is_pending(self, url: str) -> bool:
        return url in self._pending

    def mark_visited(self, url: str) -> None:
        if url in self._pending:
            self._pending.discard(url)
            self._queue.remove(url)
        self._visited.add(url)

    def seed(self, url: str) -> bool:
        """Queue a start page, bypassing the link filter."""
        return self._enqueue(url)

    def offer(self, url: str) -> bool:
        """Queue *url* if the filter accepts it and it is new.

        Returns:
            True when the URL was added to pending.
        """
        if not self.link_filter.accepts(url):
            return False
        return self._enqueue(url)

    def take_next(self) -> str | None:
        """Remove and return the oldest pending URL (None when empty)."""
        if not self._queue:
            return None
        url = self._queue.popleft()
        self._pending.discard(url)
        return url

    def _enqueue(self, url: str) -> bool:
        if url in self._visited or url in self._pending:
            return False
        self._queue.append(url)
        self._pending.add(url)
        return True

    @property
    def pending(self) -> frozenset[str]:
        return frozenset(self._pending)

    @property
    def visited(self) -> frozenset[str]:
        return frozenset(self._visited)

    @property
    def has_pending(self) -> bool:
        return bool(self._queue)

    @property
    def pending_count(self) -> int:
        return len(self._queue)

    @property
    def visited_count(self) -> int:
        return len(self._visited)


@dataclass
class CrawlStats:
    """Counters for the summary log line."""

    fetched: int = 0
    fetch_failed: int = 0
    skipped: int = 0
    extracted: int = 0
    created: int = 0
    updated: int = 0
    unchanged: int = 0
    persist_failed: int = 0
    errors: int = 0


@dataclass
class CrawlSession:
    """All mutable state of one crawl run."""

    site_name: str
    frontier: UrlFrontier
    records: list[dict] = field(default_factory=list)
    stats: CrawlStats = field(default_factory=CrawlStats)
    aborted: bool = False
