"""Page retrieval.

The crawler only needs "give me the document at this URL". Two transports
provide it:
  1. HttpFetcher: requests + BeautifulSoup (default)
  2. BrowserFetcher: headless Chromium via Playwright, for pages that
     need JavaScript to render their spec tables

Both are context managers; the underlying session or browser is released
when the ``with`` block exits, whatever the reason.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

import requests
from bs4 import BeautifulSoup

from sailcrawl.config import REQUEST_HEADERS, REQUEST_TIMEOUT
from sailcrawl.errors import FetchError

logger = logging.getLogger(__name__)


class Document:
    """A fetched page with the DOM queries the extractor relies on."""

    def __init__(self, url: str, html: str):
        self.url = url
        self.html = html
        self._soup: BeautifulSoup | None = None

    @property
    def soup(self) -> BeautifulSoup:
        if self._soup is None:
            self._soup = BeautifulSoup(self.html, "html.parser")
        return self._soup

    @property
    def text(self) -> str:
        return self.soup.get_text(separator=" ", strip=True)

    def select(self, selector: str) -> list:
        return self.soup.select(selector)

    def heading(self) -> str | None:
        """Text of the first ``<h1>``, or None when the page has none."""
        h1 = self.soup.find("h1")
        if h1 is None:
            return None
        return " ".join(h1.get_text().split())

    def paragraphs(self) -> list[str]:
        return [p.get_text().strip() for p in self.soup.find_all("p")]

    def table_rows(self) -> list[list[str]]:
        """Cell texts of every ``<tr>`` (``<td>`` cells only)."""
        rows = []
        for tr in self.soup.find_all("tr"):
            cells = tr.find_all("td")
            rows.append([td.get_text().strip() for td in cells])
        return rows

    def anchor_hrefs(self) -> list[str]:
        """Raw ``href`` values of every anchor, in document order."""
        hrefs = []
        for a in self.soup.find_all("a", href=True):
            href = a["href"].strip()
            if href:
                hrefs.append(href)
        return hrefs


class Fetcher(ABC):
    """Base transport. Subclasses implement ``fetch``."""

    def open(self) -> None:
        """Acquire the underlying resource."""

    def close(self) -> None:
        """Release the underlying resource. Safe to call twice."""

    @abstractmethod
    def fetch(self, url: str) -> Document:
        """Retrieve *url*.

        Raises:
            FetchError: network failure, timeout or non-2xx status.
        """

    def __enter__(self):
        try:
            self.open()
        except BaseException:
            # a half-opened resource (e.g. driver up, browser not) is released
            self.close()
            raise
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


class HttpFetcher(Fetcher):
    """Plain HTTP GET with browser-like headers."""

    def __init__(self, timeout: float = REQUEST_TIMEOUT, headers: dict | None = None):
        self.timeout = timeout
        self.headers = headers or REQUEST_HEADERS
        self._session: requests.Session | None = None

    def open(self) -> None:
        if self._session is None:
            self._session = requests.Session()
            self._session.headers.update(self.headers)

    def close(self) -> None:
        if self._session is not None:
            self._session.close()
            self._session = None

    def fetch(self, url: str) -> Document:
        self.open()
        try:
            resp = self._session.get(url, timeout=self.timeout)
            resp.raise_for_status()
        except requests.Timeout as e:
            raise FetchError(url, f"timeout: {e}") from e
        except requests.HTTPError as e:
            status = e.response.status_code if e.response is not None else None
            raise FetchError(url, f"HTTP {status}", status_code=status) from e
        except requests.RequestException as e:
            raise FetchError(url, f"network: {e}") from e

        return Document(resp.url or url, resp.text)


class BrowserFetcher(Fetcher):
    """Render pages in headless Chromium.

    Playwright is imported lazily so the HTTP path works without a browser
    install (``pip install sailcrawl[browser]`` + ``playwright install``).
    """

    def __init__(self, timeout: float = REQUEST_TIMEOUT, headless: bool = True):
        self.timeout = timeout
        self.headless = headless
        self._playwright = None
        self._browser = None

    def open(self) -> None:
        if self._browser is not None:
            return
        from playwright.sync_api import sync_playwright  # noqa: PLC0415

        self._playwright = sync_playwright().start()
        self._browser = self._playwright.chromium.launch(headless=self.headless)
        logger.info("Browser started (headless=%s)", self.headless)

    def close(self) -> None:
        if self._browser is not None:
            self._browser.close()
            self._browser = None
        if self._playwright is not None:
            self._playwright.stop()
            self._playwright = None
            logger.info("Browser closed")

    def fetch(self, url: str) -> Document:
        from playwright.sync_api import Error as PlaywrightError  # noqa: PLC0415
        from playwright.sync_api import TimeoutError as PlaywrightTimeout  # noqa: PLC0415

        self.open()
        page = self._browser.new_page()
        try:
            resp = page.goto(
                url,
                timeout=int(self.timeout * 1000),
                wait_until="networkidle",
            )
            if resp is not None and not resp.ok:
                raise FetchError(url, f"HTTP {resp.status}", status_code=resp.status)
            return Document(page.url or url, page.content())
        except PlaywrightTimeout as e:
            raise FetchError(url, f"timeout: {e}") from e
        except PlaywrightError as e:
            raise FetchError(url, f"browser: {e}") from e
        finally:
            page.close()
