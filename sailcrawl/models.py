"""Data model definitions."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from datetime import date


@dataclass
class MeasurementPair:
    """One quantity expressed in two units (e.g. ft / m)."""

    primary: float | None = None  # imperial side (ft, ft², lb)
    secondary: float | None = None  # metric side (m, m², kg)

    def is_empty(self) -> bool:
        return self.primary is None and self.secondary is None

    def to_document(self) -> dict:
        return {"primary": self.primary, "secondary": self.secondary}


@dataclass
class RawListingPage:
    """Label/value text pulled from a single fetched page."""

    url: str
    title: str = ""
    fields: dict[str, str] = field(default_factory=dict)  # label -> value
    links: list[str] = field(default_factory=list)  # absolute URLs
    paragraphs: list[str] = field(default_factory=list)


# Units of each pair field, (primary, secondary)
UNIT_LABELS: dict[str, tuple[str, str]] = {
    "loa": ("ft", "m"),
    "lwl": ("ft", "m"),
    "sail_area": ("ft2", "m2"),
    "beam": ("ft", "m"),
    "displacement": ("lb", "kg"),
    "ballast": ("lb", "kg"),
    "max_draft": ("ft", "m"),
    "i": ("ft", "m"),
    "j": ("ft", "m"),
    "p": ("ft", "m"),
    "e": ("ft", "m"),
    "spl_tps": ("ft", "m"),
    "isp": ("ft", "m"),
    "sail_area_fore": ("ft2", "m2"),
    "sail_area_main": ("ft2", "m2"),
    "sail_area_total": ("ft2", "m2"),
    "forestay_length": ("ft", "m"),
}


@dataclass
class VesselRecord:
    """A sailboat design as stored in the sailboats table.

    Identity is the model name. Every attribute other than ``model`` is
    optional; ``None`` means the source page did not provide it.
    """

    model: str
    url: str | None = None
    hull_type: str | None = None
    rigging_type: str | None = None

    loa: MeasurementPair | None = None
    lwl: MeasurementPair | None = None
    sail_area: MeasurementPair | None = None
    beam: MeasurementPair | None = None
    displacement: MeasurementPair | None = None
    ballast: MeasurementPair | None = None
    max_draft: MeasurementPair | None = None
    i: MeasurementPair | None = None
    j: MeasurementPair | None = None
    p: MeasurementPair | None = None
    e: MeasurementPair | None = None
    spl_tps: MeasurementPair | None = None
    isp: MeasurementPair | None = None
    sail_area_fore: MeasurementPair | None = None
    sail_area_main: MeasurementPair | None = None
    sail_area_total: MeasurementPair | None = None
    forestay_length: MeasurementPair | None = None

    sail_area_displacement: float | None = None
    ballast_displacement: float | None = None
    displacement_length: float | None = None
    comfort_ratio: int | None = None
    capsize_ratio: float | None = None
    s_number: float | None = None
    hull_speed: float | None = None
    pound_inch_immersion: float | None = None
    sail_area_displacement_calc: float | None = None

    construction: str | None = None
    ballast_type: str | None = None
    designer: str | None = None
    builders: str | None = None
    association: str | None = None
    products: str | None = None
    first_built: date | None = None
    built_number: int | None = None

    @classmethod
    def field_names(cls) -> list[str]:
        return [f.name for f in fields(cls)]

    def to_document(self) -> dict:
        """Serialize every field to a JSON-ready dict.

        Absent values stay as ``None``; see ``normalizer.prune`` for the
        shape that is actually persisted.
        """
        doc: dict = {}
        for name in self.field_names():
            value = getattr(self, name)
            if isinstance(value, MeasurementPair):
                doc[name] = value.to_document()
            elif isinstance(value, date):
                doc[name] = value.isoformat()
            else:
                doc[name] = value
        return doc


@dataclass
class ListingRecord:
    """A boat-for-sale listing (price comparison data)."""

    url: str
    model: str
    price: int  # currency units, 0 = not found
    year: int  # 0 = not found
    feet: int  # 0 = not found

    def to_document(self) -> dict:
        return {
            "url": self.url,
            "model": self.model,
            "price": self.price,
            "year": self.year,
            "feet": self.feet,
        }
