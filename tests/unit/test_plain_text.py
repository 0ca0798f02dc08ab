"""Unit tests for plain-text handling and Project Gutenberg cleanup."""

from __future__ import annotations

from collections.abc import Callable

from text_harvester.acquisition.fetcher import RawDocument
from text_harvester.extraction.strategies.plain_text import (
    PlainTextStrategy,
    is_gutenberg,
    normalize_line_breaks,
    strip_gutenberg_boilerplate,
)
from text_harvester.pipeline import assemble_text

_GUTENBERG_BOOK = (
    "The Project Gutenberg eBook of Pride and Prejudice\r\n"
    "This eBook is for the use of anyone anywhere.\r\n\r\n"
    "*** START OF THE PROJECT GUTENBERG EBOOK PRIDE AND PREJUDICE ***\r\n\r\n\r\n\r\n"
    "It is a truth universally acknowledged, that a single man in possession\r\n"
    "of a good fortune, must be in want of a wife.\r\n\r\n"
    "*** END OF THE PROJECT GUTENBERG EBOOK PRIDE AND PREJUDICE ***\r\n"
    "Updated editions will replace the previous one.\r\n"
)


class TestNormalizeLineBreaks:
    def test_crlf_and_cr_become_lf(self) -> None:
        assert normalize_line_breaks("a\r\nb\rc") == "a\nb\nc"

    def test_three_or_more_breaks_collapse(self) -> None:
        assert normalize_line_breaks("a\n\n\n\n\nb\n\nc") == "a\n\nb\n\nc"

    def test_single_lines_are_kept(self) -> None:
        assert normalize_line_breaks("line one\nline two") == "line one\nline two"


class TestGutenberg:
    def test_detected_by_host(self) -> None:
        assert is_gutenberg("https://www.gutenberg.org/cache/epub/1342/pg1342.txt", "no markers")

    def test_detected_by_marker(self) -> None:
        assert is_gutenberg("https://mirror.example.org/book.txt", _GUTENBERG_BOOK)

    def test_other_text_not_detected(self) -> None:
        assert not is_gutenberg("https://example.org/notes.txt", "Just some notes.")

    def test_boilerplate_is_excised(self) -> None:
        body = strip_gutenberg_boilerplate(normalize_line_breaks(_GUTENBERG_BOOK))
        assert body.startswith("It is a truth universally acknowledged")
        assert body.endswith("must be in want of a wife.")
        assert "Project Gutenberg" not in body

    def test_missing_end_marker_keeps_tail(self) -> None:
        text = "Header\n*** START OF THIS PROJECT GUTENBERG EBOOK X ***\nBody text continues"
        assert strip_gutenberg_boilerplate(text) == "Body text continues"

    def test_no_markers_is_unchanged(self) -> None:
        assert strip_gutenberg_boilerplate("  Plain body  ") == "Plain body"


class TestPlainTextStrategy:
    def test_line_structure_survives_assembly(self, make_document: Callable[..., RawDocument]) -> None:
        doc = make_document("https://example.org/poem.txt", "Line one\nLine two\n\nVerse two", content_type="text/plain")
        assert assemble_text(PlainTextStrategy().extract(doc)) == "Line one\nLine two\n\nVerse two"

    def test_paragraph_breaks_survive(self, make_document: Callable[..., RawDocument]) -> None:
        doc = make_document(
            "https://example.org/notes.txt",
            "First paragraph.\r\n\r\n\r\nSecond paragraph.\r\n",
            content_type="text/plain",
        )
        assert PlainTextStrategy().extract(doc) == ["First paragraph.\n\nSecond paragraph."]

    def test_gutenberg_book(self, make_document: Callable[..., RawDocument]) -> None:
        doc = make_document(
            "https://www.gutenberg.org/files/1342/1342-0.txt",
            _GUTENBERG_BOOK,
            content_type="text/plain; charset=utf-8",
        )
        (block,) = PlainTextStrategy().extract(doc)
        assert block.startswith("It is a truth universally acknowledged")
        assert "START OF" not in block
        assert "Updated editions" not in block

    def test_empty_document(self, make_document: Callable[..., RawDocument]) -> None:
        doc = make_document("https://example.org/empty.txt", "\r\n\r\n", content_type="text/plain")
        assert PlainTextStrategy().extract(doc) == []

    def test_inline_markers(self, make_document: Callable[..., RawDocument]) -> None:
        doc = make_document(
            "https://example.org/example.txt",
            "*** START OF EXAMPLE ***body text*** END OF EXAMPLE ***",
            content_type="text/plain",
        )
        assert PlainTextStrategy().extract(doc) == ["body text"]
