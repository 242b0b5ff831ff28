"""Raw field extraction from a fetched listing page.

Spec pages lay their data out as two-column table rows
(``<tr><td>LOA:</td><td>30.00 ft / 9.14 m</td></tr>``). Markup differs
between pages, so everything here is tolerant: rows of any other shape are
skipped and a page without a table simply yields no fields.
"""

from __future__ import annotations

import logging
from urllib.parse import urldefrag, urljoin

from sailcrawl.errors import ExtractionError
from sailcrawl.fetcher import Document
from sailcrawl.models import RawListingPage

logger = logging.getLogger(__name__)


def extract(document: Document) -> RawListingPage:
    """Build a RawListingPage from *document*.

    Missing structure is logged, never raised: the caller always gets a page
    (possibly with an empty title and no fields).
    """
    title = document.heading()
    if title is None:
        logger.warning("No <h1> on %s", document.url)
        title = ""

    try:
        fields = extract_fields(document)
    except ExtractionError as e:
        logger.warning("Field extraction failed: url=%s, error=%s", document.url, e)
        fields = {}

    return RawListingPage(
        url=document.url,
        title=title,
        fields=fields,
        links=extract_links(document),
        paragraphs=document.paragraphs(),
    )


def extract_fields(document: Document) -> dict[str, str]:
    """Map label -> value over every two-cell table row.

    Rows with any other cell count are ignored; a repeated label keeps the
    value of its last row.

    Raises:
        ExtractionError: the document has no table rows at all.
    """
    rows = document.table_rows()
    if not rows:
        raise ExtractionError("no table rows")

    fields: dict[str, str] = {}
    for cells in rows:
        if len(cells) != 2:
            continue
        label = clean_label(cells[0])
        if label:
            fields[label] = cells[1]
    return fields


def clean_label(text: str) -> str:
    """``"LOA:"`` -> ``"LOA"``."""
    label = text.strip()
    if label.endswith(":"):
        label = label[:-1].rstrip()
    return label


def extract_links(document: Document) -> list[str]:
    """Every anchor href, resolved against the page URL, without fragment."""
    return [urldefrag(urljoin(document.url, href)).url for href in document.anchor_hrefs()]
