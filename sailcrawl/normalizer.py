"""Raw label/value text -> typed records.

Pure functions, no I/O. A value that does not parse becomes None for that
field only; sibling fields are unaffected.
"""

from __future__ import annotations

import re

from sailcrawl.measurements import (
    collapse_whitespace,
    parse_date,
    parse_integer,
    parse_measurement,
    parse_number,
    parse_pair,
    parse_text,
)
from sailcrawl.models import ListingRecord, RawListingPage, VesselRecord

# Source label for each field, as printed on sailboatdata.com spec tables
TEXT_LABELS = {
    "hull_type": "Hull Type",
    "rigging_type": "Rigging Type",
    "construction": "Construction",
    "ballast_type": "Ballast Type",
    "designer": "Designer",
    "builders": "Builders",
    "association": "Associations",
    "products": "Products",
}

PAIR_LABELS = {
    "loa": "LOA",
    "lwl": "LWL",
    "sail_area": "S.A. (reported)",
    "beam": "Beam",
    "displacement": "Displacement",
    "ballast": "Ballast",
    "max_draft": "Max Draft",
    "i": "I",
    "j": "J",
    "p": "P",
    "e": "E",
    "spl_tps": "SPL/TPS",
    "isp": "ISP",
    "sail_area_fore": "S.A. Fore",
    "sail_area_main": "S.A. Main",
    "sail_area_total": "S.A. Total (100% Fore + Main Triangles)",
    "forestay_length": "Est. Forestay Length",
}

# Plain ratios, parsed as a whole
NUMBER_LABELS = {
    "sail_area_displacement": "S.A. / Displ.",
    "ballast_displacement": "Bal. / Displ.",
    "displacement_length": "Disp / Len",
    "capsize_ratio": "Capsize Screening Formula",
    "s_number": "S#",
}

# Values carrying a unit or a second figure ("6.47 kn"); first token only
LEADING_NUMBER_LABELS = {
    "hull_speed": "Hull Speed",
    "pound_inch_immersion": "Pounds/Inch Immersion",
    "sail_area_displacement_calc": "S.A./Displ. (calc.)",
}

INTEGER_LABELS = {
    "comfort_ratio": "Comfort Ratio",
    "built_number": "# Built",
}

DATE_LABELS = {
    "first_built": "First Built",
}

CURRENCY_MARKER = "US$"

_YEAR_PATTERN = re.compile(r"\d{4}")
_FEET_PATTERN = re.compile(r"(\d{2,3})ft")
_NON_DIGIT_PATTERN = re.compile(r"\D")


def normalize_vessel(raw: RawListingPage) -> VesselRecord:
    """Map a sailboatdata.com spec page onto a VesselRecord."""
    data = raw.fields
    values: dict = {}

    for name, label in TEXT_LABELS.items():
        values[name] = parse_text(data.get(label))
    for name, label in PAIR_LABELS.items():
        values[name] = parse_pair(data.get(label))
    for name, label in NUMBER_LABELS.items():
        values[name] = parse_number(data.get(label))
    for name, label in LEADING_NUMBER_LABELS.items():
        values[name] = parse_measurement(data.get(label), 0)
    for name, label in INTEGER_LABELS.items():
        values[name] = parse_integer(data.get(label))
    for name, label in DATE_LABELS.items():
        values[name] = parse_date(data.get(label))

    return VesselRecord(model=collapse_whitespace(raw.title), url=raw.url, **values)


def normalize_listing(raw: RawListingPage) -> ListingRecord:
    """Map a yachtworld.com listing page onto a ListingRecord."""
    title = raw.title
    return ListingRecord(
        url=raw.url,
        model=get_model(title),
        price=get_price(raw.paragraphs),
        year=get_year(title),
        feet=get_feet(title),
    )


def get_price(paragraphs: list[str]) -> int:
    """Digits of the first paragraph carrying a currency marker, else 0."""
    for text in paragraphs:
        if CURRENCY_MARKER in text:
            digits = _NON_DIGIT_PATTERN.sub("", text)
            return int(digits) if digits else 0
    return 0


def get_year(title: str) -> int:
    m = _YEAR_PATTERN.search(title)
    return int(m.group(0)) if m else 0


def get_feet(title: str) -> int:
    m = _FEET_PATTERN.search(title)
    return int(m.group(1)) if m else 0


def get_model(title: str) -> str:
    """``"2004 Beneteau Oceanis 393 | 39ft"`` -> ``"Beneteau Oceanis 393"``."""
    model = collapse_whitespace(title.split("|")[0])
    return collapse_whitespace(_YEAR_PATTERN.sub("", model, count=1))


def prune(document: dict) -> dict:
    """Drop absent values, recursively.

    ``None`` and empty strings are removed; a nested dict left with no
    values is removed as well. Pruning a pruned document returns an equal
    document.
    """
    pruned = {}
    for key, value in document.items():
        if isinstance(value, dict):
            value = prune(value)
            if not value:
                continue
        elif value is None or value == "":
            continue
        pruned[key] = value
    return pruned


def to_document(record: VesselRecord | ListingRecord) -> dict:
    """The pruned, persistable shape of *record*."""
    return prune(record.to_document())
