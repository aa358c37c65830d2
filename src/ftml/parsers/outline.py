#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/ftml/parsers/outline.py
"""Outline (Markdown-like) to AST importer.

The outline text written by ``OutlineRenderer`` is CommonMark with a few
inline HTML tags, so it is read with mistune and the token stream is mapped
onto the FTML document model:

- ``#`` to ``###`` headings become headings, deeper ones plain paragraphs;
- a hard break (trailing backslash or two spaces) starts a new paragraph
  of the same container, which is how the exporter separates paragraphs
  within one list item;
- ``<u>``, ``<s>``/``<del>`` and ``<mark>`` tags open and close the styles
  the format has no syntax for;
- code blocks become a paragraph holding one code span, thematic breaks a
  ``---`` paragraph, images links to the image;
- HTML comments are dropped and any other HTML is kept as text.

The result satisfies the same invariants as a parsed FTML document.

"""

from __future__ import annotations

import logging
import re
from typing import Any

import mistune
from mistune.util import unescape

from ftml.ast.nodes import (
    BlockQuote,
    Bold,
    Code,
    Document,
    Heading,
    Highlight,
    Italic,
    Link,
    List,
    ListItem,
    Node,
    Paragraph,
    Strike,
    Styled,
    Text,
    Underline,
)
from ftml.ast.utils import collapse_inline_whitespace
from ftml.options.outline import OutlineImportOptions
from ftml.parsers.base import BaseParser
from ftml.parsers.ftml import FtmlParser
from ftml.utils.io_utils import SourceInput, read_source

logger = logging.getLogger(__name__)

_HTML_TAG = re.compile(r"<(/?)([A-Za-z][A-Za-z0-9]*)\s*>")
_HTML_COMMENT = re.compile(r"<!--.*?-->", re.DOTALL)


class _InlineBuilder:
    """Inline nodes of one paragraph, with the spans opened by HTML tags."""

    def __init__(self) -> None:
        self.nodes: list[Node] = []
        self.open: list[Styled] = []

    def add(self, node: Node) -> None:
        (self.open[-1].content if self.open else self.nodes).append(node)

    def start(self, style: type[Styled]) -> None:
        span = style(content=[])
        self.add(span)
        self.open.append(span)

    def end(self, style: type[Styled]) -> bool:
        for depth in range(len(self.open) - 1, -1, -1):
            if type(self.open[depth]) is style:
                del self.open[depth:]
                return True
        return False


class OutlineImporter(BaseParser):
    """Convert outline text to AST representation.

    Parameters
    ----------
    options : OutlineImportOptions or None, default = None
        Import configuration

    Examples
    --------
    >>> doc = OutlineImporter().parse("- **One**\\n- <u>Two</u>")
    >>> [type(item.children[0].content[0]).__name__ for item in doc.children[0].items]
    ['Bold', 'Underline']

    """

    SPAN_TOKENS: dict[str, type[Styled]] = {
        "strong": Bold,
        "emphasis": Italic,
        "strikethrough": Strike,
        "mark": Highlight,
    }

    HTML_STYLES: dict[str, type[Styled]] = {
        "b": Bold,
        "strong": Bold,
        "i": Italic,
        "em": Italic,
        "u": Underline,
        "ins": Underline,
        "s": Strike,
        "del": Strike,
        "mark": Highlight,
    }

    def __init__(self, options: OutlineImportOptions | None = None):
        """Initialize the importer with options."""
        BaseParser._validate_options_type(options, OutlineImportOptions, "outline")
        options = options or OutlineImportOptions()
        super().__init__(options)
        self.options: OutlineImportOptions = options

    def parse(self, input_data: SourceInput) -> Document:
        """Import outline text into an AST Document.

        Parameters
        ----------
        input_data : str, bytes, IO[str] or IO[bytes]
            Outline text, UTF-8 bytes, or a readable stream

        Returns
        -------
        Document
            The imported document

        Raises
        ------
        EncodingError
            If byte input is not valid UTF-8

        """
        content = FtmlParser._decode(read_source(input_data))

        plugins = []
        if self.options.parse_strikethrough:
            plugins.append("strikethrough")
        if self.options.parse_highlight:
            plugins.append("mark")
        markdown = mistune.create_markdown(plugins=plugins, renderer=None)

        tokens, _ = markdown.parse(content)
        document = Document(children=self._process_tokens(tokens))
        logger.debug("Imported outline text with %d top-level blocks", len(document.children))
        return document

    # ------------------------------------------------------------------
    # Blocks
    # ------------------------------------------------------------------

    def _process_tokens(self, tokens: list[dict[str, Any]]) -> list[Node]:
        blocks: list[Node] = []
        for token in tokens:
            blocks.extend(self._process_token(token))
        return blocks

    def _process_token(self, token: dict[str, Any]) -> list[Node]:
        """Process a single block token into zero or more blocks."""
        token_type = token.get("type", "")

        if token_type in ("paragraph", "block_text"):
            return self._process_paragraph(token)
        if token_type == "heading":
            return self._process_heading(token)
        if token_type == "list":
            items = [
                ListItem(children=self._process_tokens(child.get("children", [])))
                for child in token.get("children", [])
                if child.get("type") == "list_item"
            ]
            return [List(ordered=bool(token.get("attrs", {}).get("ordered")), items=items)]
        if token_type == "block_quote":
            return [BlockQuote(children=self._process_tokens(token.get("children", [])))]
        if token_type == "block_code":
            code = token.get("raw", "").rstrip("\n")
            return [Paragraph(content=[Code(content=[Text(code)])])] if code else []
        if token_type == "thematic_break":
            return [Paragraph(content=[Text("---")])]
        if token_type == "block_html":
            text = _HTML_COMMENT.sub("", token.get("raw", "")).strip()
            return [Paragraph(content=[Text(text)])] if text else []
        if token_type != "blank_line":
            logger.debug("Skipping unsupported outline token %r", token_type)
        return []

    def _process_heading(self, token: dict[str, Any]) -> list[Node]:
        level = token.get("attrs", {}).get("level", 1)
        builder = _InlineBuilder()
        self._process_inline_tokens(token.get("children", []), builder, in_link=False)
        content = collapse_inline_whitespace(builder.nodes)
        if level > 3:
            return [Paragraph(content=content)] if content else []
        return [Heading(level=level, content=content)]

    def _process_paragraph(self, token: dict[str, Any]) -> list[Node]:
        """Process a paragraph, splitting it at top-level hard breaks."""
        flows: list[list[Node]] = []
        builder = _InlineBuilder()
        for child in token.get("children", []):
            if child.get("type") == "linebreak" and not builder.open:
                flows.append(builder.nodes)
                builder = _InlineBuilder()
            else:
                self._process_inline_token(child, builder, in_link=False)
        flows.append(builder.nodes)

        paragraphs: list[Node] = []
        for flow in flows:
            content = collapse_inline_whitespace(flow)
            if content:
                paragraphs.append(Paragraph(content=content))
        return paragraphs

    # ------------------------------------------------------------------
    # Inline content
    # ------------------------------------------------------------------

    def _process_inline_tokens(self, tokens: list[dict[str, Any]], builder: _InlineBuilder, in_link: bool) -> None:
        for token in tokens:
            self._process_inline_token(token, builder, in_link)

    def _process_inline_children(self, token: dict[str, Any], in_link: bool) -> list[Node]:
        builder = _InlineBuilder()
        self._process_inline_tokens(token.get("children", []), builder, in_link)
        return builder.nodes

    def _process_inline_token(self, token: dict[str, Any], builder: _InlineBuilder, in_link: bool) -> None:
        token_type = token.get("type", "")

        if token_type == "text":
            builder.add(Text(unescape(token.get("raw", ""))))
        elif token_type in ("softbreak", "linebreak"):
            builder.add(Text(" "))
        elif token_type == "codespan":
            code = token.get("raw", "")
            builder.add(Code(content=[Text(code)] if code else []))
        elif token_type in ("link", "image"):
            if in_link:
                # links do not nest; the inner one keeps only its text
                self._process_inline_tokens(token.get("children", []), builder, in_link)
            else:
                url = token.get("attrs", {}).get("url", "")
                builder.add(Link(url=url, content=self._process_inline_children(token, in_link=True)))
        elif token_type in self.SPAN_TOKENS:
            builder.add(self.SPAN_TOKENS[token_type](content=self._process_inline_children(token, in_link)))
        elif token_type == "inline_html":
            self._process_inline_html(token.get("raw", ""), builder)
        elif "children" in token:
            self._process_inline_tokens(token["children"], builder, in_link)
        elif "raw" in token:
            builder.add(Text(token["raw"]))

    def _process_inline_html(self, html: str, builder: _InlineBuilder) -> None:
        """Open or close a span for a known tag; keep other HTML as text."""
        if html.startswith("<!--"):
            return
        match = _HTML_TAG.fullmatch(html)
        style = self.HTML_STYLES.get(match.group(2).lower()) if match else None
        if style is None:
            builder.add(Text(html))
        elif not match.group(1):
            builder.start(style)
        elif not builder.end(style):
            logger.debug("Ignoring unmatched closing tag %s", html)
