"""Tests for the fluent PDF adapter."""

from __future__ import annotations

import logging
from datetime import datetime

import pymupdf
import pytest
from fpdf import FPDF

from pdf_adapter import (
    AbstractPdfAdapter,
    EngineNotInitializedError,
    PageImportError,
    Pdf,
    PdfConfigurationError,
    PdfInterface,
    __version__,
)
from pdf_adapter.adapters.base import format_header_date
from pdf_adapter.config.loader import clear_cache
from pdf_adapter.config.models import PdfConfig
from pdf_adapter.constants import FONT_FAMILIES


@pytest.fixture(autouse=True)
def _fresh_cache():
    clear_cache()
    yield
    clear_cache()


@pytest.fixture
def pdf():
    """Adapter with an engine on the default Letter / portrait page."""
    return Pdf().initialize_page_setup("Letter", "Portrait")


@pytest.fixture
def sample_pdf(tmp_path):
    """Two-page PDF on disk to import from."""
    doc = FPDF()
    doc.set_font("helvetica", size=12)
    for label in ("Imported one", "Imported two"):
        doc.add_page()
        doc.cell(0, 10, label)
    path = tmp_path / "sample.pdf"
    doc.output(str(path))
    return path


def _open(data: bytes) -> pymupdf.Document:
    return pymupdf.open(stream=data, filetype="pdf")


# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------


class TestDefaults:
    def test_class_hierarchy(self):
        assert issubclass(Pdf, AbstractPdfAdapter)
        assert issubclass(Pdf, PdfInterface)

    def test_version(self):
        assert Pdf.VERSION == "1.13.0"
        assert __version__ == "1.13.0"

    def test_initial_state(self):
        p = Pdf()
        assert p.engine is None
        assert p.page_size == "Letter"
        assert p.page_orientation == "Portrait"
        assert p.filename == "document.pdf"
        assert p.output_destination == "I"
        assert p.font_type == "Times"
        assert p.font_size == 12
        assert p.character_encoding == "UTF-8"
        assert (p.margin_top, p.margin_right, p.margin_bottom, p.margin_left) == (11, 15, 14, 11)
        assert (p.margin_header, p.margin_footer) == (5, 9)
        assert p.page_footer == {}

    def test_accepted_values(self):
        assert Pdf.page_types == ("Letter", "Legal", "A4", "Tabloid")
        assert Pdf.output_types == ("I", "D", "F", "S")
        assert Pdf.orientation_types == ("Portrait", "Landscape")

    def test_config_overrides_defaults(self):
        cfg = PdfConfig.model_validate(
            {"font": {"type": "Courier", "size": 9}, "output": {"filename": "x.pdf", "destination": "S"}}
        )
        p = Pdf(config=cfg)
        assert p.font_size == 9
        assert p.filename == "x.pdf"
        assert p.output_destination == "S"

    def test_repr(self):
        assert "Letter" in repr(Pdf())


# ---------------------------------------------------------------------------
# Property plumbing
# ---------------------------------------------------------------------------


class TestProperties:
    def test_has_property(self):
        p = Pdf()
        assert p.has_property("margin_top")
        assert not p.has_property("nope")
        assert not p.has_property("render")
        assert not p.has_property("_config")

    def test_set_property_returns_self(self):
        p = Pdf()
        assert p.set_property("filename", "a.pdf") is p
        assert p.get_property("filename") == "a.pdf"

    def test_keyed_property(self):
        p = Pdf()
        p.set_property("page_footer", "<table/>", "odd")
        assert p.get_property("page_footer", "odd") == "<table/>"
        assert p.get_property("page_footer", "even") is None

    def test_unknown_property(self):
        with pytest.raises(AttributeError):
            Pdf().set_property("colour", "red")


# ---------------------------------------------------------------------------
# Engine lifecycle
# ---------------------------------------------------------------------------


class TestEngineSetup:
    def test_initialize_returns_self(self):
        p = Pdf()
        assert p.initialize_page_setup("A4", "Portrait") is p
        assert p.engine is not None

    def test_landscape_format(self):
        p = Pdf().initialize_page_setup("A4", "Landscape")
        assert p.page_orientation == "L"
        assert p.page_format == "A4-L"
        assert p.engine.page_format == "A4-L"

    def test_unknown_size_falls_back_to_letter_portrait(self):
        p = Pdf().initialize_page_setup("A3", "Landscape")
        assert p.page_size == "Letter"
        assert p.page_orientation == "P"
        assert p.page_format == "Letter"

    def test_margins_set_before_engine_are_used(self):
        p = Pdf().set_margin_left(30).set_margin_top(25).initialize_page_setup()
        assert p.engine.l_margin == 30
        assert p.engine.t_margin == 25

    @pytest.mark.parametrize(
        "call",
        [
            lambda p: p.set_meta_title("x"),
            lambda p: p.set_font_type("arial"),
            lambda p: p.set_font_size(10),
            lambda p: p.append_page_content("<p>x</p>"),
            lambda p: p.append_page_css("p { color: #000000 }"),
            lambda p: p.set_footer({"left": "x"}),
            lambda p: p.register_page_margins(),
            lambda p: p.render(),
        ],
    )
    def test_engine_required(self, call):
        with pytest.raises(EngineNotInitializedError):
            call(Pdf())


# ---------------------------------------------------------------------------
# Header / footer
# ---------------------------------------------------------------------------


class TestHeader:
    def test_date_format(self):
        assert format_header_date(datetime(2017, 3, 7, 16, 5)) == "3/07/2017 4:05 PM"
        assert format_header_date(datetime(2020, 12, 25, 0, 30)) == "12/25/2020 12:30 AM"
        assert format_header_date(datetime(2020, 1, 1, 12, 0)) == "1/01/2020 12:00 PM"

    def test_header_markup(self, pdf):
        pdf.set_header({"left": "Acme Corp|Billing", "right": "Printed {{date(\"n/d/Y g:i A\")}}"})
        assert "Acme Corp<br>Billing" in pdf.page_header
        assert "{{date" not in pdf.page_header
        assert "align='right'" in pdf.page_header
        assert pdf.page_content == pdf.page_header

    def test_header_is_written_to_body(self, pdf):
        data = pdf.set_header({"left": "Acme Corp", "right": "Statement"}).render()
        text = _open(data)[0].get_text()
        assert "Acme Corp" in text
        assert "Statement" in text

    def test_markup_with_quoted_angle_bracket(self, pdf):
        data = pdf.set_header({"left": 'Acme <span title="x>y">West</span>', "right": "Q1"}).render()
        text = _open(data)[0].get_text()
        assert "West" in text
        assert 'y"' not in text


class TestFooter:
    def test_page_tokens(self, pdf):
        cell = pdf.set_footer_content("right", 'Page {{ page("# of #") }}')
        assert "Page {PAGENO} of {nb}" in cell
        assert 'align="right"' in cell
        assert pdf.set_footer_content("left", '{{page("# of #")}}').count("{PAGENO} of {nb}") == 1

    def test_both_sides(self, pdf):
        assert pdf.set_footer({"LEFT": "Acme", "Center": "Confidential"}) is pdf
        footer = pdf.page_footer["both"]
        assert "Acme" in footer
        assert "Confidential" in footer
        assert footer.count("<td") == 3
        assert pdf.engine.mirror_margins is False

    @pytest.mark.parametrize("side", ["both", "odd", "even", "EVEN"])
    def test_every_side_reaches_every_page(self, pdf, side):
        pdf.set_footer({"center": "Running footer"}, side=side)
        assert list(pdf.page_footer) == [side.lower()]
        pdf.append_page_content("".join(f"<p>Line {i}</p>" for i in range(120)))
        doc = _open(pdf.render())
        assert doc.page_count >= 2
        assert all("Running footer" in page.get_text() for page in doc)

    def test_markup_with_quoted_angle_bracket(self, pdf):
        pdf.set_footer({"left": '<span title="a>b">Ref 7</span>'})
        text = _open(pdf.append_page_content("<p>Body</p>").render())[0].get_text()
        assert "Ref 7" in text
        assert 'b"' not in text

    def test_invalid_side(self, pdf):
        with pytest.raises(PdfConfigurationError):
            pdf.set_footer({"left": "x"}, side="left")

    def test_page_numbers_rendered(self, pdf):
        pdf.set_footer({"right": '{{ page("# of #") }}'})
        pdf.append_page_content("".join(f"<p>Line {i}</p>" for i in range(120)))
        doc = _open(pdf.set_output_destination("S").render())
        total = doc.page_count
        assert total >= 2
        assert f"1 of {total}" in doc[0].get_text()
        assert f"{total} of {total}" in doc[total - 1].get_text()


# ---------------------------------------------------------------------------
# Fonts, content, CSS
# ---------------------------------------------------------------------------


class TestFonts:
    def test_font_alias(self, pdf):
        pdf.set_font_type("garamond")
        assert pdf.font_type == FONT_FAMILIES["garamond"]
        assert pdf.engine.default_font_family == "times"

    def test_unknown_alias_uses_default(self, pdf):
        assert pdf.get_font_family("comic") == FONT_FAMILIES["default"]
        assert pdf.get_font_family(None) == FONT_FAMILIES["default"]
        pdf.set_font_type("comic")
        assert pdf.engine.default_font_family == "helvetica"

    def test_alias_case_insensitive(self):
        assert Pdf().get_font_family("Courier") == FONT_FAMILIES["courier"]

    def test_font_size(self, pdf):
        pdf.set_font_size(9)
        assert pdf.font_size == 9
        assert pdf.engine.default_font_size == 9


class TestContent:
    def test_append_content(self, pdf):
        data = pdf.append_page_content("<h1>Invoice</h1><p>Total due</p>").render()
        text = _open(data)[0].get_text()
        assert "Invoice" in text
        assert "Total due" in text

    def test_append_css(self, pdf):
        pdf.append_page_css("body { font-family: Courier; font-size: 10pt }")
        assert pdf.page_css.startswith("body")
        assert pdf.engine.default_font_family == "courier"
        assert pdf.engine.default_font_size == 10


# ---------------------------------------------------------------------------
# Margins
# ---------------------------------------------------------------------------


class TestMargins:
    def test_individual_setters_chain(self):
        p = Pdf()
        result = (
            p.set_margin_top(1)
            .set_margin_right(2)
            .set_margin_bottom(3)
            .set_margin_left(4)
            .set_margin_header(5)
            .set_margin_footer(6)
        )
        assert result is p
        assert (p.margin_top, p.margin_right, p.margin_bottom, p.margin_left) == (1, 2, 3, 4)
        assert (p.margin_header, p.margin_footer) == (5, 6)

    def test_set_margins_camel_case(self):
        p = Pdf().set_margins(
            {
                "marginTop": 20,
                "marginRight": 21,
                "marginBottom": 22,
                "marginLeft": 23,
                "marginHeader": 24,
                "marginFooter": 25,
            }
        )
        assert p.margin_top == 20
        assert p.margin_footer == 25

    def test_set_margins_missing_key(self):
        with pytest.raises(PdfConfigurationError, match="margin_footer"):
            Pdf().set_margins(
                {"margin_top": 1, "margin_right": 1, "margin_bottom": 1, "margin_left": 1, "margin_header": 1}
            )

    def test_register_page_margins(self, pdf):
        pdf.set_margin_left(40).set_margin_right(40).register_page_margins()
        assert pdf.engine.l_margin == 40
        assert pdf.engine.r_margin == 40


# ---------------------------------------------------------------------------
# Page format
# ---------------------------------------------------------------------------


class TestPageFormat:
    def test_initialize_uses_configured_page(self, caplog):
        cfg = PdfConfig.model_validate({"page": {"size": "A4", "orientation": "Landscape"}})
        p = Pdf(config=cfg)
        assert p.page_format == "A4-L"
        with caplog.at_level(logging.WARNING):
            p.initialize_page_setup()
        assert caplog.records == []
        assert p.engine.page_format == "A4-L"

    def test_unknown_orientation(self):
        with pytest.raises(PdfConfigurationError):
            Pdf().set_page_orientation("Xyz")
        with pytest.raises(PdfConfigurationError):
            Pdf().initialize_page_setup("A4", "sideways")

    def test_orientation_code(self):
        p = Pdf()
        assert p.orientation_code("landscape") == "L"
        assert p.orientation_code(None) == "P"

    def test_set_page_size(self):
        p = Pdf().set_page_size("Legal")
        assert p.page_size == "Legal"
        assert p.page_format == "Legal"

    def test_invalid_page_size(self):
        p = Pdf().set_page_size("Folio")
        assert p.page_size == "Letter"

    def test_shortcuts(self):
        p = Pdf()
        assert p.set_page_size_legal().page_size == "Legal"
        assert p.set_page_size_letter().page_size == "Letter"
        assert p.set_page_as_landscape().page_format == "Letter-L"
        assert p.set_page_as_portrait().page_format == "Letter"

    def test_orientation_keeps_size(self):
        p = Pdf().initialize_page_setup("Tabloid", "Portrait").set_page_orientation("landscape")
        assert p.page_format == "Tabloid-L"
        assert p.engine.page_format == "Tabloid-L"

    def test_rendered_page_size(self):
        data = Pdf().initialize_page_setup("A4", "Landscape").append_page_content("<p>x</p>").render()
        rect = _open(data)[0].rect
        assert rect.width == pytest.approx(841.9, abs=1)
        assert rect.height == pytest.approx(595.3, abs=1)


# ---------------------------------------------------------------------------
# Metadata
# ---------------------------------------------------------------------------


class TestMetadata:
    def test_forwarded_to_engine(self, pdf):
        pdf.set_meta_title("Report").set_meta_author("Ann").set_meta_subject("Q1").set_meta_creator("Billing")
        assert pdf.engine.title == "Report"
        assert pdf.engine.author == "Ann"
        assert pdf.engine.subject == "Q1"
        assert pdf.engine.creator == "Billing"

    def test_keywords_merge(self, pdf):
        pdf.set_meta_keywords(["invoice"]).set_meta_keywords(["2017", "march"])
        assert pdf.meta_keywords == ["invoice", "2017", "march"]
        assert pdf.engine.keywords == "invoice, 2017, march"

    def test_written_to_document(self, pdf):
        data = (
            pdf.set_meta_title("Report")
            .set_meta_author("Ann")
            .set_meta_keywords(["invoice"])
            .append_page_content("<p>x</p>")
            .render()
        )
        meta = _open(data).metadata
        assert meta["title"] == "Report"
        assert meta["author"] == "Ann"
        assert meta["keywords"] == "invoice"


# ---------------------------------------------------------------------------
# Output
# ---------------------------------------------------------------------------


class TestOutput:
    @pytest.mark.parametrize(
        "value, expected",
        [("I", "I"), ("d", "D"), ("file", "F"), ("S", "S"), ("B", "I"), ("browser", "I")],
    )
    def test_destination(self, value, expected):
        assert Pdf().set_output_destination(value).output_destination == expected

    def test_invalid_destination(self):
        with pytest.raises(PdfConfigurationError):
            Pdf().set_output_destination("X")

    def test_content_disposition(self):
        p = Pdf().set_filename("reports/q1.pdf")
        assert p.content_disposition() == 'inline; filename="q1.pdf"'
        assert p.set_output_destination("D").content_disposition() == 'attachment; filename="q1.pdf"'
        assert p.set_output_destination("S").content_disposition() is None

    def test_render_string(self, pdf):
        data = pdf.append_page_content("<p>Hello</p>").set_output_destination("S").render()
        assert data.startswith(b"%PDF")

    def test_render_file(self, pdf, tmp_path):
        target = tmp_path / "out.pdf"
        data = (
            pdf.append_page_content("<p>Hello</p>")
            .set_filename(str(target))
            .set_output_destination("F")
            .render()
        )
        assert target.read_bytes() == data

    def test_render_without_content(self, pdf):
        assert _open(pdf.render()).page_count == 1


# ---------------------------------------------------------------------------
# Page import
# ---------------------------------------------------------------------------


class TestImportPages:
    def test_missing_file(self, pdf, tmp_path):
        missing = tmp_path / "missing.pdf"
        with pytest.raises(FileNotFoundError, match=f'The file "{missing}" does not exist.'):
            pdf.import_pages(missing)

    def test_not_a_pdf(self, pdf, tmp_path):
        notes = tmp_path / "notes.txt"
        notes.write_text("plain text", encoding="utf-8")
        with pytest.raises(PageImportError):
            pdf.import_pages(notes)

    def test_pages_follow_content(self, pdf, sample_pdf):
        data = (
            pdf.append_page_content("<p>Intro</p>")
            .import_pages(sample_pdf)
            .append_page_content("<p>Closing</p>")
            .render()
        )
        doc = _open(data)
        assert doc.page_count == 4
        assert "Intro" in doc[0].get_text()
        assert "Imported one" in doc[1].get_text()
        assert "Imported two" in doc[2].get_text()
        assert "Closing" in doc[3].get_text()

    def test_only_imported_pages(self, pdf, sample_pdf):
        doc = _open(pdf.import_pages(sample_pdf).render())
        assert doc.page_count == 2
        assert "Imported one" in doc[0].get_text()

    def test_import_before_content(self, pdf, sample_pdf):
        doc = _open(pdf.import_pages(sample_pdf).append_page_content("<p>After</p>").render())
        assert doc.page_count == 3
        assert "Imported one" in doc[0].get_text()
        assert "After" in doc[2].get_text()

    def test_footer_numbers_count_imported_pages(self, pdf, tmp_path):
        source = FPDF()
        source.set_font("helvetica", size=12)
        for n in range(3):
            source.add_page()
            source.cell(0, 10, f"Appendix {n + 1}")
        source.output(str(tmp_path / "appendix.pdf"))

        pdf.set_footer({"right": '{{ page("# of #") }}'})
        data = (
            pdf.append_page_content("<p>Intro</p>")
            .import_pages(tmp_path / "appendix.pdf")
            .append_page_content("<p>Closing</p>")
            .render()
        )
        doc = _open(data)
        assert doc.page_count == 5
        assert "Appendix 1" in doc[1].get_text()
        assert "2 of 5" in doc[1].get_text()
        assert "Closing" in doc[4].get_text()
        assert "5 of 5" in doc[4].get_text()
