"""Sailboat crawler: main entry point.

Usage:
  sailcrawl sailboatdata [--dry-run] [--browser]
  sailcrawl yachtworld
  sailcrawl --help

Flow:
  1. queue the site's seed pages
  2. crawl pending URLs one at a time until none are left
  3. detail pages are normalized and upserted (sailboatdata) or logged
     (yachtworld)
"""

from __future__ import annotations

import logging
import sys
from datetime import datetime

import typer

from sailcrawl.config import LOG_DIR
from sailcrawl.crawler import Crawler
from sailcrawl.db import InMemoryStore, SupabaseStore
from sailcrawl.fetcher import BrowserFetcher, HttpFetcher
from sailcrawl.frontier import CrawlSession
from sailcrawl.persister import Persister
from sailcrawl.sites import SITES, get_site


def setup_logging() -> None:
    """Initial logging setup."""
    LOG_DIR.mkdir(parents=True, exist_ok=True)
    log_file = LOG_DIR / f"crawler_{datetime.now().strftime('%Y%m%d')}.log"
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=[
            logging.StreamHandler(sys.stdout),
            logging.FileHandler(log_file, encoding="utf-8"),
        ],
    )


def run(site_name: str, dry_run: bool = False, browser: bool = False) -> CrawlSession:
    """Crawl one site from its seed pages until the frontier is empty."""
    site = get_site(site_name)
    store = InMemoryStore() if dry_run else SupabaseStore()
    fetcher = BrowserFetcher() if browser else HttpFetcher()
    crawler = Crawler(site, fetcher, persister=Persister(store))
    return crawler.run()


app = typer.Typer(
    name="sailcrawl",
    help="Crawl a sailboat site and store what it lists.",
    no_args_is_help=True,
    add_completion=False,
)


@app.command()
def crawl(
    site: str = typer.Argument(..., help=f"Site to crawl ({', '.join(sorted(SITES))})."),
    dry_run: bool = typer.Option(False, "--dry-run", help="Keep records in memory, no Supabase writes."),
    browser: bool = typer.Option(False, "--browser", help="Render pages in headless Chromium."),
) -> None:
    """Crawl SITE from its seed pages until no pending URL is left."""
    if site not in SITES:
        raise typer.BadParameter(
            f"unknown site {site!r} (known: {', '.join(sorted(SITES))})",
            param_hint="SITE",
        )

    setup_logging()
    session = run(site, dry_run=dry_run, browser=browser)
    if session.aborted:
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
