"""Unit tests for the extractor module."""

from pathlib import Path

from sailcrawl.extractor import clean_label, extract, extract_fields, extract_links
from sailcrawl.fetcher import Document

FIXTURES_DIR = Path(__file__).parent / "fixtures"

DETAIL_URL = "https://sailboatdata.com/sailboat/catalina-30"


def _load_fixture(name: str) -> str:
    return (FIXTURES_DIR / name).read_text(encoding="utf-8")


def _detail_document() -> Document:
    return Document(DETAIL_URL, _load_fixture("sailboat_detail.html"))


class TestExtract:
    """extract tests."""

    def test_title_is_trimmed_h1(self):
        raw = extract(_detail_document())
        assert raw.title == "Catalina 30"
        assert raw.url == DETAIL_URL

    def test_two_cell_rows_become_fields(self):
        raw = extract(_detail_document())
        assert raw.fields["LOA"] == "29.92 ft / 9.12 m"
        assert raw.fields["Displacement"] == "10,200.00 lb / 4,627 kg"
        assert raw.fields["Disp / Len"] == "291.43"

    def test_duplicate_label_last_wins(self):
        raw = extract(_detail_document())
        assert raw.fields["Designer"] == "Frank V. Butler"

    def test_other_rows_ignored(self):
        raw = extract(_detail_document())
        assert "Notes" not in raw.fields
        assert "Rig and Sail Particulars" not in raw.fields

    def test_paragraphs_collected(self):
        raw = extract(_detail_document())
        assert raw.paragraphs == ["Sailboat specifications, drawings and ratios."]

    def test_no_heading(self):
        """A page without <h1> still yields a page with an empty title."""
        doc = Document(DETAIL_URL, "<table><tr><td>LOA:</td><td>10 ft / 3.05 m</td></tr></table>")
        raw = extract(doc)
        assert raw.title == ""
        assert raw.fields == {"LOA": "10 ft / 3.05 m"}

    def test_no_table(self):
        """A page without table rows yields no fields instead of failing."""
        raw = extract(Document(DETAIL_URL, "<html><body><h1>Alberg 30</h1></body></html>"))
        assert raw.title == "Alberg 30"
        assert raw.fields == {}


class TestExtractFields:
    """extract_fields tests."""

    def test_nested_cells(self):
        html = "<table><tr><td><b>Beam:</b></td><td> 10.83 ft / 3.30 m </td></tr></table>"
        assert extract_fields(Document(DETAIL_URL, html)) == {"Beam": "10.83 ft / 3.30 m"}


class TestCleanLabel:
    """clean_label tests."""

    def test_trailing_colon(self):
        assert clean_label("LOA:") == "LOA"
        assert clean_label(" S.A. / Displ.: ") == "S.A. / Displ."

    def test_no_colon(self):
        assert clean_label("Notes") == "Notes"


class TestExtractLinks:
    """extract_links tests."""

    def test_links_resolved_absolute(self):
        links = extract_links(_detail_document())
        assert links == [
            "https://sailboatdata.com/sailboat/catalina-27",
            "https://sailboatdata.com/sailboat/catalina-30/?units=metric",
            "https://www.facebook.com/sailboatdata",
        ]
