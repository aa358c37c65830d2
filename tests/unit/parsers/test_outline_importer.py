"""Unit tests for the outline (Markdown-like) importer."""

import pytest

from ftml.ast import Document, walk
from ftml.ast.builder import a, b, code, doc, h1, h2, h3, i, li, mark, ol, p, quote, s, u, ul
from ftml.ast.utils import SoftSpace
from ftml.exceptions import EncodingError, InvalidOptionsError
from ftml.options.html import HtmlImportOptions
from ftml.options.outline import OutlineImportOptions
from ftml.parsers.outline import OutlineImporter
from ftml.renderers.outline import OutlineRenderer


def import_outline(source, **options):
    return OutlineImporter(OutlineImportOptions(**options)).parse(source)


@pytest.mark.unit
class TestBlocks:
    """Test mapping outline blocks onto the document model."""

    def test_headings(self):
        """Test ATX and setext headings."""
        assert import_outline("# A\n\n## B\n\n### C").children == [h1("A"), h2("B"), h3("C")]
        assert import_outline("Title\n=====").children == [h1("Title")]

    def test_deep_headings_become_paragraphs(self):
        """Test that levels four to six have no heading counterpart."""
        assert import_outline("#### D\n\n###### F").children == [p("D"), p("F")]

    def test_unordered_list(self):
        """Test a bullet list."""
        assert import_outline("- One\n- Two").children == [ul(li(p("One")), li(p("Two")))]

    def test_ordered_list(self):
        """Test a numbered list."""
        assert import_outline("1. a\n2. b").children == [ol(li(p("a")), li(p("b")))]

    def test_nested_list(self):
        """Test a list inside an item."""
        assert import_outline("- Outer\n  1. Inner").children == [ul(li(p("Outer"), ol(li(p("Inner")))))]

    def test_loose_list(self):
        """Test items separated by blank lines."""
        assert import_outline("- One\n\n- Two").children == [ul(li(p("One")), li(p("Two")))]

    def test_hard_break_splits_list_paragraphs(self):
        """Test the backslash break the exporter writes between paragraphs of one item."""
        assert import_outline("- one\\\n  two").children == [ul(li(p("one"), p("two")))]

    def test_hard_break_splits_top_level_paragraph(self):
        """Test a two-space break outside lists."""
        assert import_outline("a  \nb").children == [p("a"), p("b")]

    def test_soft_break_is_a_space(self):
        """Test that a plain newline joins lines."""
        assert import_outline("a\nb").children == [p("a b")]

    def test_blockquote(self):
        """Test quoted paragraphs."""
        assert import_outline("> x\n>\n> y").children == [quote(p("x"), p("y"))]

    def test_code_block(self):
        """Test that fenced code keeps its whitespace as a code span."""
        assert import_outline("```\nline1\n  line2\n```").children == [p(code("line1\n  line2"))]

    def test_empty_code_block_is_dropped(self):
        """Test a fence with nothing inside."""
        assert import_outline("```\n```\n\nx").children == [p("x")]

    def test_thematic_break(self):
        """Test that a rule becomes a paragraph of dashes."""
        assert import_outline("a\n\n---\n\nb").children == [p("a"), p("---"), p("b")]

    def test_block_comment_is_dropped(self):
        """Test an HTML comment on its own line."""
        assert import_outline("<!-- note -->\n\nx").children == [p("x")]

    def test_empty_input(self):
        """Test that empty input gives an empty document."""
        assert import_outline("") == Document()
        assert import_outline("\n\n   \n") == Document()


@pytest.mark.unit
class TestInline:
    """Test inline styles, links and text."""

    def test_emphasis(self):
        """Test both emphasis delimiters."""
        assert import_outline("**b** _i_ *j*").children == [p(b("b"), " ", i("i"), " ", i("j"))]

    def test_nested_emphasis(self):
        """Test italic inside bold."""
        assert import_outline("**a _b_**").children == [p(b("a ", i("b")))]

    def test_code_span(self):
        """Test that code spans keep inner spacing."""
        assert import_outline("use `x  y` now").children == [p("use ", code("x  y"), " now")]

    def test_link(self):
        """Test an inline link."""
        doc_ = import_outline("[docs](https://x.test/a?b=1)")
        assert doc_.children == [p(a("https://x.test/a?b=1", "docs"))]

    def test_styled_link_text(self):
        """Test emphasis inside link text."""
        assert import_outline("[**go**](https://x.test)").children == [p(a("https://x.test", b("go")))]

    def test_image_becomes_link(self):
        """Test that an image turns into a link to the image."""
        doc_ = import_outline("![alt](https://x.test/i.png)")
        assert doc_.children == [p(a("https://x.test/i.png", "alt"))]

    def test_image_inside_link_keeps_its_text(self):
        """Test that links never nest."""
        doc_ = import_outline("[![alt](https://x.test/i.png)](https://x.test)")
        assert doc_.children == [p(a("https://x.test", "alt"))]

    def test_escapes_and_entities(self):
        """Test backslash escapes and character references."""
        doc_ = import_outline("1 \\* 2 &amp; 3 &lt;b&gt; \\[x\\]")
        assert doc_.children == [p("1 * 2 & 3 <b> [x]")]

    def test_whitespace_collapses(self):
        """Test runs of spaces between words."""
        assert import_outline("a    b").children == [p("a b")]

    def test_no_soft_spaces_escape_the_importer(self):
        """Test that only plain Text nodes reach the caller."""
        doc_ = import_outline("- a  <u> b </u>  c\n- **x** \n  y")
        assert not any(isinstance(node, SoftSpace) for node in walk(doc_))


@pytest.mark.unit
class TestInlineHtml:
    """Test inline tags the format passes through."""

    def test_style_tags(self):
        """Test tags for styles without outline syntax."""
        doc_ = import_outline("<u>a</u> <s>b</s> <mark>c</mark> <del>d</del> <ins>e</ins>")
        assert doc_.children == [p(u("a"), " ", s("b"), " ", mark("c"), " ", s("d"), " ", u("e"))]

    def test_tag_names_ignore_case(self):
        """Test upper-case tags."""
        assert import_outline("<U>a</U>").children == [p(u("a"))]

    def test_tags_inside_emphasis(self):
        """Test a tag pair inside a bold span."""
        assert import_outline("**<u>a</u> b**").children == [p(b(u("a"), " b"))]

    def test_nested_tags(self):
        """Test one tag span inside another."""
        assert import_outline("<mark>x <u>y</u></mark>").children == [p(mark("x ", u("y")))]

    def test_unclosed_tag_runs_to_paragraph_end(self):
        """Test a missing closing tag."""
        assert import_outline("<u>a b").children == [p(u("a b"))]

    def test_unmatched_closing_tag_is_ignored(self):
        """Test a closing tag with no opener."""
        assert import_outline("a</u> b").children == [p("a b")]

    def test_unknown_tags_are_text(self):
        """Test tags outside the style set."""
        assert import_outline("<span>b</span>").children == [p("<span>b</span>")]

    def test_inline_comment_is_dropped(self):
        """Test an HTML comment inside a paragraph."""
        assert import_outline("a <!-- note --> b").children == [p("a b")]

    def test_hard_break_inside_open_tag_is_a_space(self):
        """Test that a break inside a tag span does not split the paragraph."""
        assert import_outline("<u>a\\\nb</u>").children == [p(u("a b"))]


@pytest.mark.unit
class TestOptions:
    """Test importer configuration."""

    def test_strikethrough_default(self):
        """Test that ~~ is read by default."""
        assert import_outline("~~gone~~").children == [p(s("gone"))]

    def test_strikethrough_disabled(self):
        """Test reading ~~ literally."""
        assert import_outline("~~gone~~", parse_strikethrough=False).children == [p("~~gone~~")]

    def test_highlight_default(self):
        """Test that == is literal by default."""
        assert import_outline("==hi==").children == [p("==hi==")]

    def test_highlight_enabled(self):
        """Test reading == as highlighting."""
        assert import_outline("==hi==", parse_highlight=True).children == [p(mark("hi"))]

    def test_wrong_options_type(self):
        """Test that options for another importer are refused."""
        with pytest.raises(InvalidOptionsError):
            OutlineImporter(HtmlImportOptions())

    def test_default_options(self):
        """Test constructing without options."""
        assert OutlineImporter().parse("x").children == [p("x")]


@pytest.mark.unit
class TestInput:
    """Test the accepted input kinds."""

    def test_bytes(self):
        """Test UTF-8 bytes."""
        assert import_outline("café".encode("utf-8")).children == [p("café")]

    def test_invalid_utf8(self):
        """Test that undecodable bytes are refused."""
        with pytest.raises(EncodingError):
            import_outline(b"caf\xe9")

    def test_stream(self, tmp_path):
        """Test a binary file object."""
        path = tmp_path / "doc.md"
        path.write_text("# Title\n", encoding="utf-8")
        with open(path, "rb") as stream:
            assert import_outline(stream).children == [h1("Title")]


@pytest.mark.unit
class TestExportedText:
    """Test reading back what the outline exporter writes."""

    @pytest.mark.parametrize(
        "document",
        [
            doc(h1("Title"), p("Some ", b("bold"), ", ", i("italic"), " and ", code("a  b"), ".")),
            doc(ul(li(p("one"), p("two")), li(p("three"), ol(li(p("nested")))))),
            doc(quote(p(u("under"), " ", s("gone"), " ", mark("lit")), p("second"))),
            doc(p(a("https://x.test/a?b=1", "link"), " and ", a("mailto:a@b.com", i("mail")))),
            doc(p("1 * 2 & <3> [x] \\ `t` {y} snake_case")),
            doc(h2("Plan"), ol(li(p("first")), li(quote(p("quoted")))), h3(b("End"))),
        ],
    )
    def test_export_then_import(self, document):
        """Test that exported documents import to the same tree."""
        text = OutlineRenderer().render_to_string(document)
        assert import_outline(text) == document
