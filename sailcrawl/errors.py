"""Exception types raised across the crawl pipeline."""

from __future__ import annotations


class CrawlError(Exception):
    """Base class for every failure the crawler reports."""


class FetchError(CrawlError):
    """A page could not be retrieved (network, timeout or non-2xx)."""

    def __init__(self, url: str, reason: str, status_code: int | None = None):
        self.url = url
        self.reason = reason
        self.status_code = status_code
        super().__init__(f"{url}: {reason}")


class ExtractionError(CrawlError):
    """The fetched document lacks the structure the extractor expects."""


class PersistenceError(CrawlError):
    """The store was unreachable or rejected a write."""
