#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/renderers/test_ftml_renderer.py
"""Unit tests for the canonical FTML markup renderer."""

from io import BytesIO, StringIO

import pytest

from ftml.ast import Document
from ftml.ast.builder import a, b, code, h1, h2, i, li, mark, ol, p, quote, s, u, ul
from ftml.exceptions import InvalidOptionsError
from ftml.options.html import HtmlImportOptions
from ftml.renderers.ftml import FtmlRenderer, escape_attribute, escape_code, escape_text


def render(*blocks):
    return FtmlRenderer().render_to_string(Document(children=list(blocks)))


@pytest.mark.unit
class TestBlocks:
    """Test block layout."""

    def test_empty_document(self):
        """Test that nothing renders as the empty string."""
        assert render() == ""

    def test_paragraph(self):
        """Test a styled paragraph on one line."""
        assert render(p("Hello ", b("world"), "!")) == "<p>Hello <b>world</b>!</p>\n"

    def test_blocks_separated_by_blank_line(self):
        """Test top-level block separation."""
        assert render(h1("Title"), h2("Sub"), p("x")) == "<h1>Title</h1>\n\n<h2>Sub</h2>\n\n<p>x</p>\n"

    def test_list_layout(self):
        """Test that containers indent their children."""
        expected = "<ul>\n  <li>\n    <p>One</p>\n  </li>\n  <li>\n    <p>Two</p>\n  </li>\n</ul>\n"
        assert render(ul(li(p("One")), li(p("Two")))) == expected

    def test_nested_containers(self):
        """Test deeper nesting."""
        expected = (
            "<ol>\n"
            "  <li>\n"
            "    <p>A</p>\n"
            "    <blockquote>\n"
            "      <p>Q</p>\n"
            "    </blockquote>\n"
            "  </li>\n"
            "</ol>\n"
        )
        assert render(ol(li(p("A"), quote(p("Q"))))) == expected

    def test_empty_containers(self):
        """Test containers without children."""
        assert render(ul()) == "<ul>\n</ul>\n"
        assert render(ul(li())) == "<ul>\n  <li>\n  </li>\n</ul>\n"
        assert render(p()) == "<p></p>\n"


@pytest.mark.unit
class TestInline:
    """Test inline tags and text escaping."""

    def test_every_style(self):
        """Test the tag written for each span."""
        result = render(p(b("1"), i("2"), u("3"), s("4"), mark("5"), code("6"), a("x", "7")))
        assert result == '<p><b>1</b><i>2</i><u>3</u><s>4</s><mark>5</mark><code>6</code><a href="x">7</a></p>\n'

    def test_empty_span_is_a_pair(self):
        """Test that empty spans are never self-closed."""
        assert render(p(b(), a("x"))) == '<p><b></b><a href="x"></a></p>\n'

    def test_metacharacters(self):
        """Test escaping of markup characters."""
        assert render(p("a < b & c > d")) == "<p>a &lt; b &amp; c &gt; d</p>\n"

    def test_special_spaces(self):
        """Test named references for no-break and four-per-em spaces."""
        assert render(p("a\u00a0b\u2005c")) == "<p>a&nbsp;b&emsp14;c</p>\n"

    @pytest.mark.parametrize(
        "content,expected",
        [
            (" a", "&#32;a"),
            ("a ", "a&#32;"),
            ("a  b", "a &#32;b"),
            ("a\tb", "a&#9;b"),
            ("a\nb", "a&#10;b"),
            ("a\r\fb", "a&#13;&#12;b"),
            (" ", "&#32;"),
        ],
    )
    def test_significant_whitespace(self, content, expected):
        """Test that whitespace the parser would collapse is encoded."""
        assert render(p(content)) == f"<p>{expected}</p>\n"

    def test_space_before_span(self):
        """Test that a raw space is written once across a tag boundary."""
        assert render(p("a ", b(" b"))) == "<p>a <b>&#32;b</b></p>\n"

    def test_space_before_empty_tail(self):
        """Test a space followed only by an empty span."""
        assert render(p("a ", b())) == "<p>a&#32;<b></b></p>\n"

    def test_code_is_verbatim(self):
        """Test that code keeps its whitespace and escapes metacharacters."""
        assert render(p(code("  x <y>\n"))) == "<p><code>  x &lt;y&gt;\n</code></p>\n"

    def test_code_counts_as_content(self):
        """Test that a space before code is written raw."""
        assert render(p("run ", code(" "))) == "<p>run <code> </code></p>\n"

    def test_href_escaping(self):
        """Test attribute escaping."""
        assert render(p(a('x"&y', "t"))) == '<p><a href="x&quot;&amp;y">t</a></p>\n'


@pytest.mark.unit
class TestEscapeHelpers:
    """Test the module-level escaping helpers."""

    def test_escape_text(self):
        """Test single-character escaping."""
        assert escape_text("&") == "&amp;"
        assert escape_text("\t") == "&#9;"
        assert escape_text("x") == "x"

    def test_escape_code(self):
        """Test code escaping keeps whitespace."""
        assert escape_code("<a>\t&") == "&lt;a&gt;\t&amp;"

    def test_escape_attribute(self):
        """Test quotes in attributes."""
        assert escape_attribute('"<') == "&quot;&lt;"


@pytest.mark.unit
class TestOutput:
    """Test output sinks and options."""

    def test_text_stream(self):
        """Test rendering into a text stream."""
        buffer = StringIO()
        FtmlRenderer().render(Document(children=[p("x"), p("y")]), buffer)
        assert buffer.getvalue() == "<p>x</p>\n\n<p>y</p>\n"

    def test_binary_stream(self):
        """Test that binary streams receive UTF-8."""
        buffer = BytesIO()
        FtmlRenderer().render(Document(children=[p("café")]), buffer)
        assert buffer.getvalue() == "<p>café</p>\n".encode("utf-8")

    def test_iter_render_yields_blocks(self):
        """Test chunking per top-level block."""
        chunks = list(FtmlRenderer().iter_render(Document(children=[p("x"), p("y")])))
        assert chunks == ["<p>x</p>\n", "\n<p>y</p>\n"]

    def test_rejects_parser_options(self):
        """Test that parser options are refused."""
        with pytest.raises(InvalidOptionsError):
            FtmlRenderer(HtmlImportOptions())
