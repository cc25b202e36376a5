# =============================================================================
# Unit Tests - PDF Text Extractor
# =============================================================================
#
# Docling is replaced by FakeConverter; these tests cover page grouping,
# joining rules, and error mapping.
# =============================================================================

from types import SimpleNamespace

import pytest

from app.exceptions import ExtractionFailure
from app.services.extractor import UploadedDocument, extract_text

from conftest import FakeConverter, make_item, use_converter


def _pdf(content: bytes = b"%PDF-1.4 fake") -> UploadedDocument:
    return UploadedDocument(content=content, media_type="application/pdf", filename="site.pdf")


class TestExtractText:
    """Tests for extract_text()."""

    def test_fragments_on_a_page_joined_with_space(self):
        converter = FakeConverter(items=[
            make_item("Informed", 1),
            make_item("consent", 1),
            make_item("form", 1),
        ])
        with use_converter(converter):
            assert extract_text(_pdf()) == "Informed consent form"

    def test_pages_joined_with_newline_in_page_order(self):
        converter = FakeConverter(items=[
            make_item("Page two text", 2),
            make_item("Page one text", 1),
        ])
        with use_converter(converter):
            assert extract_text(_pdf()) == "Page one text\nPage two text"

    def test_page_without_text_keeps_its_line(self):
        converter = FakeConverter(
            items=[make_item("First", 1), make_item("Third", 3)],
            pages=[1, 2, 3],
        )
        with use_converter(converter):
            assert extract_text(_pdf()) == "First\n\nThird"

    def test_inner_whitespace_collapsed(self):
        converter = FakeConverter(items=[make_item("  Subject\n  014-007  ", 1)])
        with use_converter(converter):
            assert extract_text(_pdf()) == "Subject 014-007"

    def test_blank_items_skipped(self):
        converter = FakeConverter(items=[
            make_item("A", 1), make_item("   ", 1), make_item("B", 1),
        ])
        with use_converter(converter):
            assert extract_text(_pdf()) == "A B"

    def test_tables_exported_as_markdown(self):
        table = SimpleNamespace(
            label="table",
            prov=[SimpleNamespace(page_no=1)],
            export_to_markdown=lambda doc=None: "| Subjects | 12 |",
        )
        converter = FakeConverter(items=[make_item("Summary", 1), table])
        with use_converter(converter):
            assert extract_text(_pdf()) == "Summary | Subjects | 12 |"

    def test_no_text_returns_empty_lines(self):
        converter = FakeConverter(items=[], pages=[1, 2])
        with use_converter(converter):
            text = extract_text(_pdf())
        assert text == "\n"
        assert text.strip() == ""

    def test_converter_receives_upload_bytes(self):
        converter = FakeConverter(items=[make_item("x", 1)])
        with use_converter(converter):
            extract_text(_pdf(b"%PDF-1.7 bytes"))
        source = converter.sources[0]
        assert source.name == "site.pdf"
        assert source.stream.read() == b"%PDF-1.7 bytes"

    def test_parse_error_raises_extraction_failure(self):
        converter = FakeConverter(error=RuntimeError("not a PDF"))
        with use_converter(converter), pytest.raises(ExtractionFailure) as exc_info:
            extract_text(_pdf(b"garbage"))
        assert "not a PDF" in exc_info.value.details
        assert exc_info.value.status_code == 500


class TestUploadedDocument:
    def test_pdf_media_type(self):
        assert _pdf().is_pdf

    def test_other_media_type(self):
        doc = UploadedDocument(content=b"x", media_type="text/plain")
        assert not doc.is_pdf
