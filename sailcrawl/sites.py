"""Crawlable sites and their per-site rules."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from sailcrawl.config import (
    SAILBOATDATA_BASE_URL,
    SAILBOATDATA_PAGE_COUNT,
    SAILBOATDATA_SEARCH_URL_TEMPLATE,
    YACHTWORLD_BASE_URL,
    YACHTWORLD_START_URL,
)
from sailcrawl.frontier import LinkFilter
from sailcrawl.models import ListingRecord, RawListingPage, VesselRecord
from sailcrawl.normalizer import normalize_listing, normalize_vessel


@dataclass(frozen=True)
class SiteConfig:
    name: str
    base_url: str
    seed_urls: tuple[str, ...]
    link_filter: LinkFilter
    normalize: Callable[[RawListingPage], VesselRecord | ListingRecord]
    persist: bool  # False: records are only logged and collected


SAILBOATDATA = SiteConfig(
    name="sailboatdata",
    base_url=SAILBOATDATA_BASE_URL,
    seed_urls=tuple(
        SAILBOATDATA_SEARCH_URL_TEMPLATE.format(page=i)
        for i in range(SAILBOATDATA_PAGE_COUNT)
    ),
    link_filter=LinkFilter(
        prefix=SAILBOATDATA_BASE_URL,
        pagination_markers=("page",),
        detail_markers=("/sailboat/",),
        ignore_markers=("?units",),
    ),
    normalize=normalize_vessel,
    persist=True,
)

YACHTWORLD = SiteConfig(
    name="yachtworld",
    base_url=YACHTWORLD_BASE_URL,
    seed_urls=(YACHTWORLD_START_URL,),
    link_filter=LinkFilter(
        prefix=YACHTWORLD_BASE_URL,
        pagination_markers=("/type-sail/page",),
        detail_markers=("/yacht/",),
    ),
    normalize=normalize_listing,
    persist=False,
)

SITES = {site.name: site for site in (SAILBOATDATA, YACHTWORLD)}


def get_site(name: str) -> SiteConfig:
    try:
        return SITES[name]
    except KeyError:
        raise KeyError(f"unknown site {name!r} (known: {', '.join(sorted(SITES))})") from None
