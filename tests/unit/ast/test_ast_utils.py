#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/ast/test_ast_utils.py
"""Tests for AST utility functions."""

import pytest

from ftml.ast import Bold, Code, Link, Paragraph, Text, extract_text, iter_links, normalize_href, walk
from ftml.ast.builder import a, b, code, i, p, quote
from ftml.ast.utils import (
    SoftSpace,
    collapse_inline_whitespace,
    drop_soft_whitespace,
    is_self_describing_mailto,
    link_visible_text,
    merge_adjacent_text,
)


@pytest.mark.unit
class TestWalk:
    """Tests for walk and iter_links."""

    def test_walk_order(self):
        """Test depth-first document order."""
        para = p("a", b("b"), "c")
        kinds = [type(node).__name__ for node in walk(para)]
        assert kinds == ["Paragraph", "Text", "Bold", "Text", "Text"]

    def test_iter_links(self):
        """Test finding links anywhere in a tree."""
        tree = quote(p(a("one", "1")), p(b(a("two", "2"))))
        assert [link.url for link in iter_links(tree)] == ["one", "two"]


@pytest.mark.unit
class TestExtractText:
    """Tests for extract_text."""

    def test_single_node(self):
        """Test a single Text node."""
        assert extract_text(Text("Hello")) == "Hello"

    def test_nested_styles(self):
        """Test that styling is ignored."""
        assert extract_text([Text("Hello "), b(i("big")), Text(" world")]) == "Hello big world"

    def test_empty(self):
        """Test empty input."""
        assert extract_text([]) == ""


@pytest.mark.unit
class TestLinkHelpers:
    """Tests for href normalization and mailto detection."""

    @pytest.mark.parametrize(
        "url,expected",
        [
            ("https://x.test", "https://x.test"),
            ("  https://x.test ", "https://x.test"),
            ("mailto:a@b.com", "a@b.com"),
            ("MAILTO:a@b.com", "MAILTO:a@b.com"),
            (" mailto:a@b.com", "a@b.com"),
        ],
    )
    def test_normalize_href(self, url, expected):
        """Test stripping and mailto removal."""
        assert normalize_href(url) == expected

    def test_visible_text_prefers_content(self):
        """Test that link text wins over the target."""
        assert link_visible_text(a("https://x.test", "site")) == "site"

    def test_visible_text_falls_back_to_target(self):
        """Test an empty link."""
        assert link_visible_text(a("mailto:a@b.com")) == "a@b.com"

    def test_self_describing_mailto(self):
        """Test the mailto link whose text is its address."""
        assert is_self_describing_mailto(a("mailto:a@b.com", "a@b.com"))
        assert is_self_describing_mailto(a("mailto:a@b.com"))

    def test_other_links_are_not_self_describing(self):
        """Test links that need a footnote."""
        assert not is_self_describing_mailto(a("mailto:a@b.com", "write to us"))
        assert not is_self_describing_mailto(a("https://x.test", "https://x.test"))


@pytest.mark.unit
class TestDropSoftWhitespace:
    """Tests for the collapsing rule applied to parsed inline flows."""

    def test_leading_and_trailing_dropped(self):
        """Test that edge spaces disappear."""
        content = [SoftSpace(), Text("a"), SoftSpace()]
        assert drop_soft_whitespace(content) == [Text("a")]

    def test_double_soft_space_collapses(self):
        """Test that a soft space after a kept soft space is dropped."""
        content = [Text("a"), SoftSpace(), Bold(content=[SoftSpace(), Text("b")])]
        result = merge_adjacent_text(drop_soft_whitespace(content))
        assert result == [Text("a "), Bold(content=[Text("b")])]

    def test_hard_spaces_are_kept(self):
        """Test that plain Text spaces are content."""
        content = [Text(" "), Text("a"), Text(" ")]
        assert drop_soft_whitespace(content) == [Text(" "), Text("a"), Text(" ")]

    def test_trailing_removal_keeps_hard_space(self):
        """Test that a hard space before the trailing soft one survives."""
        hard = Text(" ")
        content = [Text("a"), hard, SoftSpace()]
        result = drop_soft_whitespace(content)
        assert len(result) == 2
        assert result[1] is hard

    def test_trailing_inside_span(self):
        """Test that the trailing space is removed from inside a span."""
        content = [Text("a"), Bold(content=[Text("b"), SoftSpace()])]
        assert drop_soft_whitespace(content) == [Text("a"), Bold(content=[Text("b")])]

    def test_plain_text_is_never_taken_for_a_soft_space(self):
        """Test that words built after many discarded soft spaces survive."""
        for _ in range(200):
            drop_soft_whitespace([SoftSpace(), SoftSpace(), Text("x"), SoftSpace()])
        content = [Text(f"w{n}") for n in range(50)]
        assert drop_soft_whitespace(content) == [Text(f"w{n}") for n in range(50)]


@pytest.mark.unit
class TestMergeAdjacentText:
    """Tests for merge_adjacent_text."""

    def test_merges_siblings(self):
        """Test merging neighbouring Text nodes."""
        assert merge_adjacent_text([Text("a"), Text(" "), Text("b")]) == [Text("a b")]

    def test_styled_spans_separate(self):
        """Test that spans break merging and are merged inside."""
        result = merge_adjacent_text([Text("a"), Bold(content=[Text("b"), Text("c")]), Text("d")])
        assert result == [Text("a"), Bold(content=[Text("bc")]), Text("d")]

    def test_soft_spaces_become_plain_text(self):
        """Test that a surviving soft space is emitted as a plain Text node."""
        result = merge_adjacent_text([Bold(content=[SoftSpace()])])
        assert type(result[0].content[0]) is Text


@pytest.mark.unit
class TestCollapseInlineWhitespace:
    """Tests for collapse_inline_whitespace."""

    def test_collapses_runs(self):
        """Test that every run becomes one space and edges are trimmed."""
        content = [Text("\n  Hello \t\n "), Bold(content=[Text("  world  ")]), Text("! ")]
        assert collapse_inline_whitespace(content) == [Text("Hello "), Bold(content=[Text("world ")]), Text("!")]

    def test_code_is_verbatim(self):
        """Test that whitespace inside code is untouched."""
        content = [Text("run "), Code(content=[Text("a  \n b")])]
        assert collapse_inline_whitespace(content) == [Text("run "), code("a  \n b")]

    def test_whitespace_only(self):
        """Test that whitespace-only content vanishes."""
        assert collapse_inline_whitespace([Text("  \n ")]) == []

    def test_nbsp_is_not_collapsible(self):
        """Test that non-breaking spaces are kept."""
        assert collapse_inline_whitespace([Text("a\u00a0\u00a0b")]) == [Text("a\u00a0\u00a0b")]

    def test_links_keep_targets(self):
        """Test that link attributes survive normalization."""
        content = [Link(url="x", content=[Text(" go ")])]
        assert collapse_inline_whitespace(content) == [Link(url="x", content=[Text("go")])]

    def test_paragraph_fixture(self):
        """Test that a collapsed paragraph equals the hand-built form."""
        assert Paragraph(content=collapse_inline_whitespace([Text(" a  b ")])) == p("a b")
