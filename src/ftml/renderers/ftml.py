#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/ftml/renderers/ftml.py
"""Canonical FTML markup renderer.

Every document has exactly one serialization:

- top-level blocks are separated by one blank line and the output ends
  with a newline (an empty document renders as the empty string);
- paragraphs and headings sit on one line;
- lists, list items and block quotes open and close on their own lines,
  their children indented two spaces per level;
- inline tags are always written as pairs, even when empty.

Text is written so that parsing the output reproduces the tree exactly. A
space the parser would keep is written raw; any other whitespace (leading,
trailing, doubled, tabs, newlines) is written as a numeric character
reference, which the parser treats as content.

"""

from __future__ import annotations

import logging
from typing import Iterator

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
from ftml.ast.visitors import NodeVisitor
from ftml.constants import MARKUP_WHITESPACE, NAMED_TEXT_ESCAPES
from ftml.options.base import BaseRendererOptions
from ftml.renderers.base import BaseRenderer

logger = logging.getLogger(__name__)

_INDENT = "  "
_TAG_NAMES: dict[type, str] = {
    Bold: "b",
    Italic: "i",
    Underline: "u",
    Strike: "s",
    Highlight: "mark",
    Code: "code",
}

# Inline part kinds
_TAG = "tag"
_HARD = "hard"
_SPACE = "space"


def escape_text(char: str) -> str:
    """Escape one character of non-code text."""
    if char in NAMED_TEXT_ESCAPES:
        return NAMED_TEXT_ESCAPES[char]
    if char in MARKUP_WHITESPACE:
        return f"&#{ord(char)};"
    return char


def escape_code(text: str) -> str:
    """Escape the markup metacharacters in code text."""
    return text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")


def escape_attribute(value: str) -> str:
    """Escape an attribute value for use inside double quotes."""
    return escape_code(value).replace('"', "&quot;")


class FtmlRenderer(NodeVisitor, BaseRenderer):
    """Render an AST to canonical FTML markup.

    Parameters
    ----------
    options : BaseRendererOptions or None, default = None
        Unused; the canonical form has no tunable options

    Examples
    --------
    >>> from ftml.ast.builder import p, b
    >>> FtmlRenderer().render_to_string(Document(children=[p("Hello ", b("world"))]))
    '<p>Hello <b>world</b></p>\\n'

    """

    def __init__(self, options: BaseRendererOptions | None = None):
        """Initialize the FTML renderer."""
        BaseRenderer._validate_options_type(options, BaseRendererOptions, "ftml")
        BaseRenderer.__init__(self, options)
        self._lines: list[str] = []
        self._depth = 0
        self._parts: list[tuple[str, str]] = []
        self._in_code = 0

    def iter_render(self, doc: Document) -> Iterator[str]:
        """Yield the canonical markup one top-level block at a time.

        Parameters
        ----------
        doc : Document
            Document to serialize

        Yields
        ------
        str
            Markup of the next block, preceded by the blank separator line
            for every block after the first

        """
        logger.debug("Writing %d top-level blocks as FTML", len(doc.children))
        for index, block in enumerate(doc.children):
            lines = self._block_lines(block)
            chunk = "\n".join(lines) + "\n"
            yield chunk if index == 0 else "\n" + chunk

    def _block_lines(self, block: Node) -> list[str]:
        self._lines = []
        self._depth = 0
        block.accept(self)
        return self._lines

    def _line(self, text: str) -> None:
        self._lines.append(_INDENT * self._depth + text)

    def _container(self, tag: str, children: list) -> None:
        self._line(f"<{tag}>")
        self._depth += 1
        for child in children:
            child.accept(self)
        self._depth -= 1
        self._line(f"</{tag}>")

    # ------------------------------------------------------------------
    # Blocks
    # ------------------------------------------------------------------

    def visit_document(self, node: Document) -> None:
        """Render every block, separated by blank lines."""
        for index, block in enumerate(node.children):
            if index:
                self._lines.append("")
            block.accept(self)

    def visit_paragraph(self, node: Paragraph) -> None:
        """Render a paragraph on one line."""
        self._line(f"<p>{self._render_inline(node.content)}</p>")

    def visit_heading(self, node: Heading) -> None:
        """Render a heading on one line."""
        tag = f"h{node.level}"
        self._line(f"<{tag}>{self._render_inline(node.content)}</{tag}>")

    def visit_list(self, node: List) -> None:
        """Render a list with one indented ``li`` block per item."""
        self._container("ol" if node.ordered else "ul", node.items)

    def visit_list_item(self, node: ListItem) -> None:
        """Render a list item and its block children."""
        self._container("li", node.children)

    def visit_block_quote(self, node: BlockQuote) -> None:
        """Render a block quote and its block children."""
        self._container("blockquote", node.children)

    # ------------------------------------------------------------------
    # Inline content
    # ------------------------------------------------------------------

    def _render_inline(self, content: list[Node]) -> str:
        """Render inline nodes, deciding how each space must be written.

        A space is written raw only where the parser would keep it: not at
        the start of the flow, not right after another raw space, and with
        some non-space content still to come. Everything else becomes
        ``&#32;``.
        """
        self._parts = []
        for node in content:
            node.accept(self)
        parts = self._parts

        content_follows = [False] * len(parts)
        seen_content = False
        for index in range(len(parts) - 1, -1, -1):
            content_follows[index] = seen_content
            if parts[index][0] == _HARD:
                seen_content = True

        output: list[str] = []
        at_start = True
        after_space = False
        for (kind, text), later in zip(parts, content_follows):
            if kind == _TAG:
                output.append(text)
            elif kind == _SPACE and not at_start and not after_space and later:
                output.append(" ")
                after_space = True
            else:
                output.append(text if kind == _HARD else "&#32;")
                at_start = False
                after_space = False
        return "".join(output)

    def _styled(self, node: Styled, open_tag: str, close_tag: str) -> None:
        self._parts.append((_TAG, open_tag))
        for child in node.content:
            child.accept(self)
        self._parts.append((_TAG, close_tag))

    def visit_text(self, node: Text) -> None:
        """Queue text characters; code text is verbatim apart from escaping."""
        if self._in_code:
            if node.content:
                self._parts.append((_HARD, escape_code(node.content)))
            return
        for char in node.content:
            if char == " ":
                self._parts.append((_SPACE, char))
            else:
                self._parts.append((_HARD, escape_text(char)))

    def _visit_simple_style(self, node: Styled) -> None:
        tag = _TAG_NAMES[type(node)]
        self._styled(node, f"<{tag}>", f"</{tag}>")

    def visit_bold(self, node: Bold) -> None:
        """Render ``<b>``."""
        self._visit_simple_style(node)

    def visit_italic(self, node: Italic) -> None:
        """Render ``<i>``."""
        self._visit_simple_style(node)

    def visit_underline(self, node: Underline) -> None:
        """Render ``<u>``."""
        self._visit_simple_style(node)

    def visit_strike(self, node: Strike) -> None:
        """Render ``<s>``."""
        self._visit_simple_style(node)

    def visit_highlight(self, node: Highlight) -> None:
        """Render ``<mark>``."""
        self._visit_simple_style(node)

    def visit_code(self, node: Code) -> None:
        """Render ``<code>``; text inside keeps its whitespace."""
        self._in_code += 1
        self._visit_simple_style(node)
        self._in_code -= 1

    def visit_link(self, node: Link) -> None:
        """Render ``<a href="...">``."""
        self._styled(node, f'<a href="{escape_attribute(node.url)}">', "</a>")
