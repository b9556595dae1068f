"""Tests for PDF link extraction, deduplication and resolution."""

from __future__ import annotations

import importlib

import pytest
from bs4.builder import ParserRejectedMarkup

from pdf_harvester.domain import PdfLinkExtractor

extractor_module = importlib.import_module(
    "pdf_harvester.domain.services.pdf_link_extractor"
)

_PAGE_HTML = """\
<!DOCTYPE html>
<html>
<head><title>Safety Data Sheets</title></head>
<body>
  <ul>
    <li><a href="https://cdn.example.com/sds/Acetone.pdf">Acetone</a></li>
    <li><a href="/files/Ethanol.PDF">Ethanol</a></li>
    <li><a href="https://example.com/catalog">Catalog</a></li>
    <li><a href="https://cdn.example.com/sds/Acetone.pdf">Acetone again</a></li>
    <li><a name="anchor">No href</a></li>
    <li><a href="report.pdf?download=1">Query after suffix</a></li>
  </ul>
  <link rel="alternate" href="/feed.pdf">
  <div><section><a HREF="nested/Deep.pdf">Deep</a></section></div>
</body>
</html>
"""


class TestExtractLinks:
    def test_single_anchor(self) -> None:
        links = PdfLinkExtractor.extract_links('<a href="/docs/Sheet.PDF">x</a>')
        assert links == ["/docs/Sheet.PDF"]

    def test_preserves_document_order_and_duplicates(self) -> None:
        links = PdfLinkExtractor.extract_links(_PAGE_HTML)
        assert links == [
            "https://cdn.example.com/sds/Acetone.pdf",
            "/files/Ethanol.PDF",
            "https://cdn.example.com/sds/Acetone.pdf",
            "nested/Deep.pdf",
        ]

    def test_only_anchor_elements_are_considered(self) -> None:
        links = PdfLinkExtractor.extract_links(_PAGE_HTML)
        assert "/feed.pdf" not in links

    def test_suffix_must_end_the_value(self) -> None:
        links = PdfLinkExtractor.extract_links(_PAGE_HTML)
        assert "report.pdf?download=1" not in links

    def test_values_are_not_modified(self) -> None:
        html = '<a href=" https://h/Upper Case.Pdf">x</a>'
        assert PdfLinkExtractor.extract_links(html) == [" https://h/Upper Case.Pdf"]

    def test_every_result_is_a_literal_pdf_href(self) -> None:
        for link in PdfLinkExtractor.extract_links(_PAGE_HTML):
            assert f'"{link}"' in _PAGE_HTML or f"={link}" in _PAGE_HTML
            assert link.lower().endswith(".pdf")

    def test_pre_order_traversal(self) -> None:
        html = (
            '<div><a href="first.pdf">1</a><p><span><a href="second.pdf">2</a></span></p></div>'
            '<a href="third.pdf">3</a>'
        )
        assert PdfLinkExtractor.extract_links(html) == [
            "first.pdf",
            "second.pdf",
            "third.pdf",
        ]

    def test_deeply_nested_markup(self) -> None:
        html = "<div>" * 2000 + '<a href="deep.pdf">d</a>' + "</div>" * 2000
        assert PdfLinkExtractor.extract_links(html) == ["deep.pdf"]

    def test_malformed_html_is_not_fatal(self) -> None:
        html = '<html><body><a href="a.pdf">unclosed <div><p><a href="b.pdf">b</div></span>'
        assert PdfLinkExtractor.extract_links(html) == ["a.pdf", "b.pdf"]

    def test_rejected_markup_returns_empty(self, monkeypatch: pytest.MonkeyPatch) -> None:
        def reject(*args, **kwargs):
            raise ParserRejectedMarkup("rejected")

        monkeypatch.setattr(extractor_module, "BeautifulSoup", reject)
        assert PdfLinkExtractor.extract_links('<a href="a.pdf">a</a>') == []

    def test_other_parser_errors_propagate(self, monkeypatch: pytest.MonkeyPatch) -> None:
        def explode(*args, **kwargs):
            raise RuntimeError("bug")

        monkeypatch.setattr(extractor_module, "BeautifulSoup", explode)
        with pytest.raises(RuntimeError):
            PdfLinkExtractor.extract_links('<a href="a.pdf">a</a>')

    def test_no_links_returns_empty(self) -> None:
        assert PdfLinkExtractor.extract_links("<html><body>none</body></html>") == []
        assert PdfLinkExtractor.extract_links("") == []


class TestDeduplicate:
    def test_first_occurrence_wins(self) -> None:
        urls = ["http://h/b.pdf", "http://h/a.pdf", "http://h/b.pdf", "http://h/a.pdf"]
        assert PdfLinkExtractor.deduplicate(urls) == ["http://h/b.pdf", "http://h/a.pdf"]

    def test_uses_exact_string_equality(self) -> None:
        urls = ["http://h/a.pdf", "http://H/a.pdf", "http://h/a.pdf "]
        assert PdfLinkExtractor.deduplicate(urls) == urls

    def test_state_is_not_shared_between_calls(self) -> None:
        assert PdfLinkExtractor.deduplicate(["http://h/a.pdf"]) == ["http://h/a.pdf"]
        assert PdfLinkExtractor.deduplicate(["http://h/a.pdf"]) == ["http://h/a.pdf"]

    def test_accepts_generators(self) -> None:
        urls = (url for url in ["x.pdf", "x.pdf", "y.pdf"])
        assert PdfLinkExtractor.deduplicate(urls) == ["x.pdf", "y.pdf"]


class TestResolveLinks:
    def test_relative_links_are_joined(self) -> None:
        resolved = PdfLinkExtractor.resolve_links(
            ["/files/Ethanol.PDF", "nested/Deep.pdf", "https://cdn.example.com/a.pdf"],
            "https://example.com/pages/sds",
        )
        assert resolved == [
            "https://example.com/files/Ethanol.PDF",
            "https://example.com/pages/nested/Deep.pdf",
            "https://cdn.example.com/a.pdf",
        ]

    def test_links_resolving_to_the_same_url_are_merged(self) -> None:
        resolved = PdfLinkExtractor.resolve_links(
            ["/a.pdf", "https://example.com/a.pdf"], "https://example.com/"
        )
        assert resolved == ["https://example.com/a.pdf"]
