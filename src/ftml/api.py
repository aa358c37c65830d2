#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/ftml/api.py
"""High-level entry points for parsing, writing and rendering FTML.

Every function is a self-contained transformation: nothing is cached and no
state survives between calls. Functions that produce text return it as a
string when ``output`` is None and otherwise write it to the given stream,
in which case stream errors propagate unchanged.

"""

from __future__ import annotations

import logging
from typing import Optional

from ftml.ast.nodes import Document
from ftml.constants import InputFormat, OutputFormat
from ftml.exceptions import ValidationError
from ftml.options.html import HtmlImportOptions
from ftml.options.outline import OutlineImportOptions
from ftml.options.terminal import FormattingStyle
from ftml.parsers.ftml import FtmlParser
from ftml.parsers.html import HtmlImporter
from ftml.parsers.outline import OutlineImporter
from ftml.renderers.base import BaseRenderer
from ftml.renderers.ftml import FtmlRenderer
from ftml.renderers.outline import OutlineRenderer
from ftml.renderers.terminal import TerminalRenderer
from ftml.utils.io_utils import OutputSink, SourceInput

logger = logging.getLogger(__name__)


def _emit(renderer: BaseRenderer, doc: Document, output: Optional[OutputSink]) -> Optional[str]:
    if output is None:
        return renderer.render_to_string(doc)
    renderer.render(doc, output)
    return None


def parse(input_data: SourceInput) -> Document:
    """Parse FTML markup into a Document.

    Parameters
    ----------
    input_data : str, bytes, IO[str] or IO[bytes]
        Markup text, UTF-8 bytes, or a readable stream

    Returns
    -------
    Document
        The parsed document

    Raises
    ------
    ParseError
        On the first violation of the markup grammar

    Examples
    --------
    >>> doc = parse("<p>Hello <b>world</b>!</p>")
    >>> len(doc.children)
    1

    """
    return FtmlParser().parse(input_data)


def import_html(input_data: SourceInput, options: HtmlImportOptions | None = None) -> Document:
    """Import general HTML into a Document on a best-effort basis.

    Parameters
    ----------
    input_data : str, bytes, IO[str] or IO[bytes]
        HTML content or a readable stream
    options : HtmlImportOptions, optional
        Import configuration (base URL, parser backend)

    Returns
    -------
    Document
        The imported document

    """
    return HtmlImporter(options).parse(input_data)


def import_outline(input_data: SourceInput, options: OutlineImportOptions | None = None) -> Document:
    """Import outline (Markdown-like) text into a Document.

    Reads what ``write_outline`` writes, and CommonMark in general on a
    best-effort basis.

    Parameters
    ----------
    input_data : str, bytes, IO[str] or IO[bytes]
        Outline text, UTF-8 bytes, or a readable stream
    options : OutlineImportOptions, optional
        Import configuration

    Returns
    -------
    Document
        The imported document

    Examples
    --------
    >>> write_markup(import_outline("Hello **world**"))
    '<p>Hello <b>world</b></p>\\n'

    """
    return OutlineImporter(options).parse(input_data)


def write_markup(doc: Document, output: Optional[OutputSink] = None) -> Optional[str]:
    """Serialize a Document to canonical FTML.

    Parameters
    ----------
    doc : Document
        Document to serialize
    output : IO[str] or IO[bytes], optional
        Destination stream; when omitted the markup is returned

    Returns
    -------
    str or None
        The markup if ``output`` is None

    """
    return _emit(FtmlRenderer(), doc, output)


def write_outline(doc: Document, output: Optional[OutputSink] = None) -> Optional[str]:
    """Export a Document to outline (Markdown-like) text.

    Parameters
    ----------
    doc : Document
        Document to export
    output : IO[str] or IO[bytes], optional
        Destination stream; when omitted the text is returned

    Returns
    -------
    str or None
        The outline text if ``output`` is None

    """
    return _emit(OutlineRenderer(), doc, output)


def render_terminal(doc: Document, style: FormattingStyle, output: Optional[OutputSink] = None) -> Optional[str]:
    """Render a Document for a terminal.

    Parameters
    ----------
    doc : Document
        Document to render
    style : FormattingStyle
        ANSI or ASCII mode, wrap width and link index format
    output : IO[str] or IO[bytes], optional
        Destination stream; when omitted the text is returned

    Returns
    -------
    str or None
        The rendered text if ``output`` is None

    Examples
    --------
    >>> render_terminal(parse('<p><a href="mailto:a@b.com">a@b.com</a></p>'), FormattingStyle())
    'a@b.com\\n'

    """
    return _emit(TerminalRenderer(style), doc, output)


def convert(
    input_data: SourceInput,
    source_format: InputFormat = "ftml",
    target_format: OutputFormat = "ftml",
    style: FormattingStyle | None = None,
    html_options: HtmlImportOptions | None = None,
    outline_options: OutlineImportOptions | None = None,
    output: Optional[OutputSink] = None,
) -> Optional[str]:
    """Read a document in one format and write it in another.

    Parameters
    ----------
    input_data : str, bytes, IO[str] or IO[bytes]
        Source content or a readable stream
    source_format : {"ftml", "html", "outline"}, default "ftml"
        How to read the input
    target_format : {"ftml", "outline", "ansi", "ascii"}, default "ftml"
        What to produce; ``ansi`` and ``ascii`` select the terminal
        renderer and override ``style.ansi``
    style : FormattingStyle, optional
        Terminal configuration; defaults to ``FormattingStyle()`` for the
        terminal targets
    html_options : HtmlImportOptions, optional
        Options for HTML input
    outline_options : OutlineImportOptions, optional
        Options for outline input
    output : IO[str] or IO[bytes], optional
        Destination stream; when omitted the result is returned

    Returns
    -------
    str or None
        The converted text if ``output`` is None

    Raises
    ------
    ValidationError
        For an unknown source or target format
    ParseError
        If FTML input is malformed
    EncodingError
        If FTML or outline bytes are not valid UTF-8

    """
    if source_format == "ftml":
        doc = parse(input_data)
    elif source_format == "html":
        doc = import_html(input_data, html_options)
    elif source_format == "outline":
        doc = import_outline(input_data, outline_options)
    else:
        raise ValidationError(
            f"Unknown source format: {source_format!r}", parameter_name="source_format", parameter_value=source_format
        )

    logger.debug("Converting %s document to %s", source_format, target_format)
    if target_format == "ftml":
        return write_markup(doc, output)
    if target_format == "outline":
        return write_outline(doc, output)
    if target_format in ("ansi", "ascii"):
        terminal_style = (style or FormattingStyle()).create_updated(ansi=target_format == "ansi")
        return render_terminal(doc, terminal_style, output)
    raise ValidationError(
        f"Unknown target format: {target_format!r}", parameter_name="target_format", parameter_value=target_format
    )
