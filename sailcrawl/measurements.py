"""Parsing of numeric, dual-unit and date values from listing text.

Dual-unit values look like ``"42.5 ft / 12.95 m"`` or
``"7,400 lb / 3,357 kg"``. Every parser here returns ``None`` when the text
does not hold a usable value; none of them raise.
"""

from __future__ import annotations

import logging
import re
from datetime import date, datetime

from dateutil import parser as date_parser

from sailcrawl.models import MeasurementPair

logger = logging.getLogger(__name__)

UNIT_SEPARATOR = "/"

# Leading numeric prefix, e.g. "42.5" in "42.5ft"
_FLOAT_PATTERN = re.compile(r"^[-+]?(?:\d+(?:\.\d*)?|\.\d+)")
_INT_PATTERN = re.compile(r"^[-+]?\d+")
_YEAR_PATTERN = re.compile(r"\d{4}")

# Missing month/day resolve to January 1st
_DATE_DEFAULT = datetime(2000, 1, 1)


def _clean_number_text(text: str) -> str:
    return text.strip().replace(",", "")


def parse_number(text: str | None) -> float | None:
    """Parse the leading decimal number of *text*.

    Thousands separators are ignored. ``"2.05"`` -> 2.05, ``"n/a"`` -> None.
    """
    if text is None:
        return None
    m = _FLOAT_PATTERN.match(_clean_number_text(text))
    if not m:
        return None
    return float(m.group(0))


def parse_integer(text: str | None) -> int | None:
    """Parse the leading integer of *text* (``"1,250 built"`` -> 1250)."""
    if text is None:
        return None
    m = _INT_PATTERN.match(_clean_number_text(text))
    if not m:
        return None
    return int(m.group(0))


def parse_measurement(text: str | None, position: int) -> float | None:
    """Parse one side of a dual-unit string.

    Args:
        text: raw value, e.g. ``"42.5 ft / 12.95 m"``
        position: 0 for the primary (imperial) side, 1 for the secondary

    Returns:
        The number at that position, or None when it is missing or not
        numeric.
    """
    if not text:
        return None

    tokens = text.split(UNIT_SEPARATOR)
    if position >= len(tokens):
        return None

    chunks = tokens[position].split()
    if not chunks:
        return None
    return parse_number(chunks[0])


def parse_pair(text: str | None) -> MeasurementPair | None:
    """Parse both sides of a dual-unit string.

    Returns:
        MeasurementPair, or None when neither side holds a number.
    """
    pair = MeasurementPair(
        primary=parse_measurement(text, 0),
        secondary=parse_measurement(text, 1),
    )
    if pair.is_empty():
        return None
    return pair


def parse_date(text: str | None) -> date | None:
    """Parse a free-text date such as ``"1975"`` or ``"March 1982"``.

    A four-digit year must be present; month and day default to January 1st.
    """
    if not text or not _YEAR_PATTERN.search(text):
        return None

    try:
        return date_parser.parse(text, default=_DATE_DEFAULT).date()
    except (ValueError, OverflowError) as e:
        logger.debug("Unparseable date %r: %s", text, e)
        return None


def parse_text(text: str | None) -> str | None:
    """Trimmed text, or None when empty."""
    if text is None:
        return None
    text = text.strip()
    return text or None


def collapse_whitespace(text: str) -> str:
    """Trim and turn every run of whitespace into one space."""
    return " ".join(text.split())
