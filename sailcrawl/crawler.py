"""Crawl orchestration.

Flow per URL:
  1. take the next pending URL from the frontier
  2. mark it visited (it is never fetched twice in a run)
  3. fetch it
  4. detail page: extract -> normalize -> persist (or log)
  5. queue the outbound links the site's filter accepts
  6. wait a random interval

One URL at a time, by design: the sites throttle or block aggressive
clients.
"""

from __future__ import annotations

import logging
import random
import time
from typing import Callable

from sailcrawl.config import REQUEST_INTERVAL_MAX, REQUEST_INTERVAL_MIN
from sailcrawl.errors import FetchError, PersistenceError
from sailcrawl.extractor import extract, extract_links
from sailcrawl.fetcher import Document, Fetcher
from sailcrawl.frontier import CrawlSession, UrlFrontier
from sailcrawl.normalizer import to_document
from sailcrawl.persister import Persister, UpsertOutcome
from sailcrawl.sites import SiteConfig

logger = logging.getLogger(__name__)


class Crawler:
    """Drives one site's crawl through a Fetcher and a Persister."""

    def __init__(
        self,
        site: SiteConfig,
        fetcher: Fetcher,
        persister: Persister | None = None,
        sleep: Callable[[float], None] = time.sleep,
        interval: tuple[float, float] = (REQUEST_INTERVAL_MIN, REQUEST_INTERVAL_MAX),
    ):
        self.site = site
        self.fetcher = fetcher
        self.persister = persister
        self.interval = interval
        self._sleep = sleep

    def new_session(self) -> CrawlSession:
        """A fresh session with the site's seed pages queued."""
        frontier = UrlFrontier(self.site.link_filter)
        for url in self.site.seed_urls:
            frontier.seed(url)
        return CrawlSession(site_name=self.site.name, frontier=frontier)

    def wait_interval(self) -> None:
        """Sleep a uniformly random time within ``self.interval`` seconds."""
        self._sleep(random.uniform(*self.interval))

    def run(self, session: CrawlSession | None = None) -> CrawlSession:
        """Crawl until the frontier is empty.

        The fetcher is opened for the run and closed on every exit path. A
        failure escaping the loop aborts the run; records already written
        stay written.
        """
        if session is None:
            session = self.new_session()

        logger.info(
            "=== Crawl start: site=%s, seeds=%d ===",
            self.site.name, session.frontier.pending_count,
        )
        start_time = time.time()

        try:
            with self.fetcher:
                while self.step(session):
                    pass
        except Exception:
            session.aborted = True
            logger.exception("Crawl aborted: site=%s", self.site.name)

        stats = session.stats
        logger.info("=== Crawl %s ===", "aborted" if session.aborted else "finished")
        logger.info(
            "fetched=%d, fetch_failed=%d, skipped=%d, extracted=%d, "
            "created=%d, updated=%d, unchanged=%d, persist_failed=%d, errors=%d, "
            "elapsed=%.1fs",
            stats.fetched, stats.fetch_failed, stats.skipped, stats.extracted,
            stats.created, stats.updated, stats.unchanged, stats.persist_failed,
            stats.errors, time.time() - start_time,
        )
        return session

    def step(self, session: CrawlSession) -> bool:
        """Process one pending URL.

        Returns:
            False when nothing was pending.
        """
        frontier = session.frontier
        url = frontier.take_next()
        if url is None:
            return False

        if frontier.is_visited(url):
            session.stats.skipped += 1
            logger.info("Already visited: %s", url)
            return True

        frontier.mark_visited(url)
        try:
            self._process(session, url)
        except Exception:
            session.stats.errors += 1
            logger.exception("Error processing %s", url)
        finally:
            self.wait_interval()
        return True

    def _process(self, session: CrawlSession, url: str) -> None:
        try:
            document = self.fetcher.fetch(url)
        except FetchError as e:
            session.stats.fetch_failed += 1
            logger.warning("Fetch failed: url=%s, reason=%s", url, e.reason)
            return

        session.stats.fetched += 1
        logger.info("Fetched: %s", url)

        if self.site.link_filter.is_detail(url):
            links = self._handle_listing(session, document)
        else:
            links = extract_links(document)

        queued = sum(1 for link in links if session.frontier.offer(link))
        logger.info(
            "Links: %d found, %d queued, %d pending",
            len(links), queued, session.frontier.pending_count,
        )

    def _handle_listing(self, session: CrawlSession, document: Document) -> list[str]:
        raw = extract(document)
        record = self.site.normalize(raw)
        session.records.append(to_document(record))
        session.stats.extracted += 1

        if not self.site.persist or self.persister is None:
            logger.info("Listing: %s", record)
            return raw.links

        try:
            outcome = self.persister.upsert(record)
        except PersistenceError as e:
            session.stats.persist_failed += 1
            logger.error("Persist failed: url=%s, error=%s", raw.url, e)
            return raw.links

        if outcome is UpsertOutcome.CREATED:
            session.stats.created += 1
        elif outcome is UpsertOutcome.UPDATED:
            session.stats.updated += 1
        else:
            session.stats.unchanged += 1
        return raw.links
