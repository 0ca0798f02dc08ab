"""Unit tests for the shared text normalizer."""

from __future__ import annotations

import pytest

from text_harvester.extraction.normalizer import clean, count_words


class TestClean:
    def test_strips_tags_and_collapses_whitespace(self) -> None:
        assert clean("<p>Hello   <b>world</b>\n\n</p>") == "Hello world"

    def test_adjacent_tags_do_not_fuse_words(self) -> None:
        assert clean("<li>one</li><li>two</li>") == "one two"

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("&quot;quoted&quot;", '"quoted"'),
            ("fish &amp; chips", "fish & chips"),
            ("&#39;single&#39;", "'single'"),
            ("wait&hellip;", "wait…"),
            ("a&nbsp;b", "a b"),
            ("&eacute;t&eacute;", "été"),
            ("&#169; 2024", "© 2024"),
        ],
    )
    def test_decodes_entities(self, raw: str, expected: str) -> None:
        assert clean(raw) == expected

    def test_entities_decoded_before_tags_stripped(self) -> None:
        assert clean("&lt;p&gt;x&lt;/p&gt;") == "x"

    def test_escaped_markup_is_removed(self) -> None:
        assert clean("before &lt;p&gt;inside&lt;/p&gt; after") == "before inside after"

    def test_empty_and_whitespace_only(self) -> None:
        assert clean("") == ""
        assert clean("  \n\t <br/> ") == ""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("while lo &lt; hi and arr[hi] &gt; key: hi -= 1", "while lo < hi and arr[hi] > key: hi -= 1"),
            ("if a < b and c > d:", "if a < b and c > d:"),
            ("x &lt;= 3 &amp;&amp; y &gt;= 4", "x <= 3 && y >= 4"),
            ("1 <2 and 3> 0", "1 <2 and 3> 0"),
            ("<p>5 &lt; 7</p>", "5 < 7"),
        ],
    )
    def test_bare_angle_brackets_survive(self, raw: str, expected: str) -> None:
        assert clean(raw) == expected

    def test_doctype_is_stripped(self) -> None:
        assert clean("<!DOCTYPE html><p>body</p>") == "body"

    @pytest.mark.parametrize(
        "raw",
        [
            "<div>  Caf&eacute; <em>society</em>\n</div>",
            "&lt;p&gt;x&lt;/p&gt;",
            "while lo &lt; hi and arr[hi] &gt; key",
            "a<b and c>d",
            "fish &amp; chips &hellip; &nbsp;and&nbsp;more",
            "<ul><li>one</li><li>two</li></ul>",
            "  already clean text  ",
            "5 > 3 < 4",
            "",
        ],
    )
    def test_idempotent(self, raw: str) -> None:
        once = clean(raw)
        assert clean(once) == once


class TestCountWords:
    def test_counts_whitespace_tokens(self) -> None:
        assert count_words("one two\tthree\nfour") == 4

    def test_empty_is_zero(self) -> None:
        assert count_words("   ") == 0
