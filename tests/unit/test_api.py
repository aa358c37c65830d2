#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_api.py
"""Unit tests for the high-level API functions."""

from io import BytesIO, StringIO

import pytest

from ftml import (
    DisallowedElementError,
    Document,
    FormattingStyle,
    HtmlImportOptions,
    OutlineImportOptions,
    ValidationError,
    convert,
    import_html,
    import_outline,
    parse,
    render_terminal,
    write_markup,
    write_outline,
)
from ftml.ast.builder import a, b, mark, p


@pytest.mark.unit
class TestParse:
    """Test parse, import_html and import_outline."""

    def test_parse_text(self):
        """Test parsing a string."""
        assert parse("<p>Hello <b>world</b>!</p>") == Document(children=[p("Hello ", b("world"), "!")])

    def test_parse_error_propagates(self):
        """Test that parse errors reach the caller."""
        with pytest.raises(DisallowedElementError):
            parse('<p><a href="x"><a href="y">z</a></a></p>')

    def test_import_html_with_options(self):
        """Test passing importer options."""
        doc = import_html('<a href="page">x</a>', HtmlImportOptions(base_url="https://example.com/"))
        assert doc == Document(children=[p(a("https://example.com/page", "x"))])

    def test_import_outline(self):
        """Test importing outline text."""
        doc = import_outline("See [docs](https://x.test)")
        assert doc == Document(children=[p("See ", a("https://x.test", "docs"))])

    def test_import_outline_with_options(self):
        """Test passing outline importer options."""
        doc = import_outline("==x==", OutlineImportOptions(parse_highlight=True))
        assert doc == Document(children=[p(mark("x"))])


@pytest.mark.unit
class TestWriters:
    """Test the writer functions' return and stream behaviour."""

    def test_write_markup_returns_text(self):
        """Test that omitting output returns a string."""
        assert write_markup(Document(children=[p("x")])) == "<p>x</p>\n"

    def test_write_markup_to_stream(self):
        """Test writing to a caller stream."""
        buffer = StringIO()
        assert write_markup(Document(children=[p("x")]), buffer) is None
        assert buffer.getvalue() == "<p>x</p>\n"

    def test_write_outline(self):
        """Test outline export."""
        assert write_outline(Document(children=[p(b("x"))])) == "**x**\n"

    def test_render_terminal_to_binary_stream(self):
        """Test terminal output to a byte stream."""
        buffer = BytesIO()
        render_terminal(Document(children=[p("x")]), FormattingStyle(), buffer)
        assert buffer.getvalue() == b"x\n"

    def test_stream_errors_propagate(self):
        """Test that sink failures are not swallowed."""

        class BrokenSink:
            def write(self, data):
                raise OSError("disk full")

        with pytest.raises(OSError, match="disk full"):
            write_markup(Document(children=[p("x")]), BrokenSink())

    def test_unsupported_sink(self):
        """Test that a sink without write is refused."""
        with pytest.raises(TypeError):
            write_markup(Document(children=[p("x")]), object())


@pytest.mark.unit
class TestConvert:
    """Test the convert front door."""

    def test_default_normalizes(self):
        """Test ftml to ftml."""
        assert convert("<p>  a   b </p>") == "<p>a b</p>\n"

    def test_to_outline(self):
        """Test ftml to outline."""
        assert convert("<ul><li><p>One</p></li><li><p>Two</p></li></ul>", target_format="outline") == "- One\n- Two\n"

    def test_ascii_overrides_style(self):
        """Test that the target format decides the mode."""
        result = convert("<p><b>x</b></p>", target_format="ascii", style=FormattingStyle(ansi=True))
        assert result == "*x*\n"

    def test_ansi(self):
        """Test ANSI output with the default style."""
        assert convert("<p><b>x</b></p>", target_format="ansi") == "\x1b[1mx\x1b[0m\n"

    def test_from_html(self):
        """Test HTML input."""
        assert convert("<div><strong>x</strong></div>", source_format="html") == "<p><b>x</b></p>\n"

    def test_from_outline(self):
        """Test outline input."""
        assert convert("- **x**", source_format="outline") == "<ul>\n  <li>\n    <p><b>x</b></p>\n  </li>\n</ul>\n"

    def test_outline_options(self):
        """Test that outline options reach the importer."""
        options = OutlineImportOptions(parse_strikethrough=False)
        result = convert("~~x~~", source_format="outline", outline_options=options)
        assert result == "<p>~~x~~</p>\n"

    def test_to_stream(self):
        """Test writing the conversion to a stream."""
        buffer = StringIO()
        assert convert("<p>x</p>", target_format="outline", output=buffer) is None
        assert buffer.getvalue() == "x\n"

    @pytest.mark.parametrize(
        "kwargs,parameter",
        [({"source_format": "rtf"}, "source_format"), ({"target_format": "pdf"}, "target_format")],
    )
    def test_unknown_formats(self, kwargs, parameter):
        """Test format validation."""
        with pytest.raises(ValidationError) as exc_info:
            convert("<p>x</p>", **kwargs)
        assert exc_info.value.parameter_name == parameter
