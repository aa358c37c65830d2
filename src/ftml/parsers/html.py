#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/ftml/parsers/html.py
"""Lenient HTML to AST importer.

General HTML is mapped onto the FTML document model on a best-effort basis.
Unlike the strict FTML parser this importer never rejects input:

- ``h1``-``h6`` become headings, levels beyond 3 clamping to 3;
- ``div``, ``section`` and other containers are flattened into their blocks,
  and stray inline content between blocks is wrapped in a paragraph;
- ``pre`` becomes a paragraph holding one code span;
- ``strong``/``em``/``ins``/``del``/``kbd`` and friends map onto the fixed
  style set, unknown inline tags are unwrapped;
- nested links are flattened and relative ``href`` values are resolved
  against ``HtmlImportOptions.base_url``;
- scripts, styles, the document head and comments are dropped.

The result satisfies the same invariants as a parsed FTML document.

"""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import urljoin

from bs4 import BeautifulSoup
from bs4.element import CData, Comment, Declaration, Doctype, NavigableString, ProcessingInstruction, Tag

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
    Text,
    Underline,
)
from ftml.ast.utils import collapse_inline_whitespace
from ftml.options.html import HtmlImportOptions
from ftml.parsers.base import BaseParser
from ftml.utils.io_utils import SourceInput, read_source

logger = logging.getLogger(__name__)

_SKIPPED_STRINGS = (Comment, Declaration, Doctype, ProcessingInstruction, CData)


class HtmlImporter(BaseParser):
    """Convert general HTML to AST representation.

    Parameters
    ----------
    options : HtmlImportOptions or None, default = None
        Import configuration

    Examples
    --------
    >>> doc = HtmlImporter().parse("<div><h5>Title</h5>Some <strong>text</strong></div>")
    >>> [type(block).__name__ for block in doc.children]
    ['Heading', 'Paragraph']

    """

    BLOCK_ELEMENTS = frozenset(
        {
            "address", "article", "aside", "blockquote", "body", "center", "dd", "details",
            "dialog", "div", "dl", "dt", "fieldset", "figcaption", "figure", "footer", "form",
            "h1", "h2", "h3", "h4", "h5", "h6", "header", "hgroup", "hr", "html", "li", "main",
            "nav", "ol", "p", "pre", "section", "summary", "table", "tbody", "td", "tfoot",
            "th", "thead", "tr", "ul",
        }
    )  # fmt: skip

    DROPPED_ELEMENTS = frozenset(
        {"head", "link", "meta", "noscript", "script", "style", "template", "title", "iframe", "object", "svg"}
    )

    INLINE_STYLES: dict[str, type] = {
        "b": Bold,
        "strong": Bold,
        "i": Italic,
        "em": Italic,
        "cite": Italic,
        "dfn": Italic,
        "var": Italic,
        "u": Underline,
        "ins": Underline,
        "s": Strike,
        "del": Strike,
        "strike": Strike,
        "mark": Highlight,
        "code": Code,
        "kbd": Code,
        "samp": Code,
        "tt": Code,
    }

    def __init__(self, options: HtmlImportOptions | None = None):
        """Initialize the importer with options."""
        BaseParser._validate_options_type(options, HtmlImportOptions, "html")
        options = options or HtmlImportOptions()
        super().__init__(options)
        self.options: HtmlImportOptions = options

    def parse(self, input_data: SourceInput) -> Document:
        """Import HTML into an AST Document.

        Parameters
        ----------
        input_data : str, bytes, IO[str] or IO[bytes]
            HTML content or a readable stream; BeautifulSoup detects the
            encoding of byte input

        Returns
        -------
        Document
            The imported document

        """
        soup = BeautifulSoup(read_source(input_data), self.options.parser)
        root = soup.body or soup
        document = Document(children=self._process_blocks(root))
        logger.debug("Imported HTML document with %d top-level blocks", len(document.children))
        return document

    # ------------------------------------------------------------------
    # Blocks
    # ------------------------------------------------------------------

    def _is_block_element(self, node: Any) -> bool:
        return isinstance(node, Tag) and node.name in self.BLOCK_ELEMENTS

    def _has_block_children(self, node: Tag) -> bool:
        return any(self._is_block_element(child) for child in node.children)

    def _process_blocks(self, node: Tag) -> list[Node]:
        """Process a container's children into blocks.

        Inline content between block elements is collected and wrapped in a
        Paragraph.
        """
        blocks: list[Node] = []
        inline_buffer: list[Node] = []

        for child in node.children:
            if self._is_block_element(child):
                self._flush_paragraph(inline_buffer, blocks)
                blocks.extend(self._process_block(child))
            else:
                inline_buffer.extend(self._process_inline(child, in_link=False))

        self._flush_paragraph(inline_buffer, blocks)
        return blocks

    @staticmethod
    def _flush_paragraph(inline_buffer: list[Node], blocks: list[Node]) -> None:
        if not inline_buffer:
            return
        content = collapse_inline_whitespace(list(inline_buffer))
        if content:
            blocks.append(Paragraph(content=content))
        inline_buffer.clear()

    def _process_block(self, node: Tag) -> list[Node]:
        name = node.name

        if name in ("h1", "h2", "h3", "h4", "h5", "h6"):
            level = min(int(name[1]), 3)
            return [Heading(level=level, content=collapse_inline_whitespace(self._process_inline_children(node)))]

        if name == "p" and not self._has_block_children(node):
            content = collapse_inline_whitespace(self._process_inline_children(node))
            return [Paragraph(content=content)] if content else []

        if name in ("ul", "ol"):
            items: list[ListItem] = []
            for child in node.children:
                if isinstance(child, Tag) and child.name == "li":
                    items.append(ListItem(children=self._process_blocks(child)))
                elif isinstance(child, Tag) or str(child).strip():
                    logger.debug("Dropping non-item content inside <%s>", name)
            return [List(ordered=name == "ol", items=items)]

        if name == "blockquote":
            return [BlockQuote(children=self._process_blocks(node))]

        if name == "pre":
            text = node.get_text()
            return [Paragraph(content=[Code(content=[Text(text)])])] if text else []

        if name == "hr":
            return []

        return self._process_blocks(node)

    # ------------------------------------------------------------------
    # Inline content
    # ------------------------------------------------------------------

    def _process_inline_children(self, node: Tag, in_link: bool = False) -> list[Node]:
        result: list[Node] = []
        for child in node.children:
            if self._is_block_element(child):
                logger.debug("Flattening block <%s> found in inline context", child.name)
                result.append(Text(" "))
                result.extend(self._process_inline_children(child, in_link))
                result.append(Text(" "))
                continue
            result.extend(self._process_inline(child, in_link))
        return result

    def _process_inline(self, node: Any, in_link: bool) -> list[Node]:
        if isinstance(node, _SKIPPED_STRINGS):
            return []
        if isinstance(node, NavigableString):
            text = str(node)
            return [Text(text)] if text else []
        if not isinstance(node, Tag):
            return []

        name = node.name
        if name in self.DROPPED_ELEMENTS:
            logger.debug("Dropping <%s> element", name)
            return []
        if name == "br":
            return [Text(" ")]
        if name == "img":
            alt = node.get("alt")
            return [Text(alt)] if isinstance(alt, str) and alt else []

        style = self.INLINE_STYLES.get(name)
        if style is Code:
            text = node.get_text()
            return [Code(content=[Text(text)] if text else [])]

        children = self._process_inline_children(node, in_link or name == "a")
        if style is not None:
            return [style(content=children)]

        if name == "a":
            href = node.get("href")
            if in_link or not isinstance(href, str):
                return children
            return [Link(url=self._resolve_url(href.strip()), content=children)]

        return children

    def _resolve_url(self, url: str) -> str:
        """Resolve a relative URL against the configured base URL."""
        if self.options.base_url:
            return urljoin(self.options.base_url, url)
        return url
