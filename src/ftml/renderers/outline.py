#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/ftml/renderers/outline.py
"""Outline (Markdown-like) renderer.

This module exports the AST to a lightweight Markdown-flavoured text:

- headings become ``#`` runs, lists use ``-`` and ``1.`` markers with
  continuation lines indented by the marker width, block quotes prefix
  every line with ``> ``;
- bold, italic and code map to ``**``, ``_`` and backtick spans; underline,
  strike and highlight have no native syntax and are written as their
  ``<u>``, ``<s>`` and ``<mark>`` tags;
- links become ``[text](destination)``;
- consecutive paragraphs inside one list item are joined by a hard break
  (a trailing backslash) so they stay in the same item.

"""

from __future__ import annotations

import logging
import re
from typing import Iterator
from urllib.parse import quote

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
from ftml.ast.utils import extract_text, normalize_href
from ftml.ast.visitors import NodeVisitor
from ftml.constants import OUTLINE_ALWAYS_ESCAPE, OUTLINE_HARD_BREAK, OUTLINE_URL_SAFE
from ftml.options.base import BaseRendererOptions
from ftml.renderers.base import BaseRenderer, InlineContentMixin

logger = logging.getLogger(__name__)

_BLOCK_SEPARATOR = "\n\n"
_LINE_START_MARKER = re.compile(r"^(?:[#+\-]|\d+(?=[.)]))")
_BACKTICK_RUN = re.compile(r"`+")
_HTML_ENTITIES = {"&": "&amp;", "<": "&lt;", ">": "&gt;"}


class OutlineRenderer(NodeVisitor, InlineContentMixin, BaseRenderer):
    """Render an AST to outline text.

    Parameters
    ----------
    options : BaseRendererOptions or None, default = None
        Unused; the outline format has no tunable options

    Examples
    --------
    >>> from ftml.ast.builder import ul, li, p
    >>> OutlineRenderer().render_to_string(Document(children=[ul(li(p("One")), li(p("Two")))]))
    '- One\\n- Two\\n'

    """

    def __init__(self, options: BaseRendererOptions | None = None):
        """Initialize the outline renderer."""
        BaseRenderer._validate_options_type(options, BaseRendererOptions, "outline")
        BaseRenderer.__init__(self, options)
        self._output: list[str] = []

    def iter_render(self, doc: Document) -> Iterator[str]:
        """Yield the outline text one top-level block at a time.

        Parameters
        ----------
        doc : Document
            Document to export

        Yields
        ------
        str
            Text of the next block; the final chunk is the closing newline

        """
        logger.debug("Exporting %d top-level blocks as outline text", len(doc.children))
        for index, block in enumerate(doc.children):
            text = self._render_block(block)
            yield text if index == 0 else _BLOCK_SEPARATOR + text
        if doc.children:
            yield "\n"

    def _render_block(self, node: Node) -> str:
        saved_output = self._output
        self._output = []
        node.accept(self)
        result = "".join(self._output)
        self._output = saved_output
        return result

    # ------------------------------------------------------------------
    # Escaping
    # ------------------------------------------------------------------

    @staticmethod
    def _escape(text: str) -> str:
        """Escape outline metacharacters in inline text.

        Backslash, backticks, asterisks, braces and brackets are always
        escaped. Underscores are escaped only at word boundaries, so
        ``snake_case`` stays readable. ``<``, ``>`` and ``&`` become HTML
        entities because the format passes inline tags through.
        """
        escaped: list[str] = []
        for index, char in enumerate(text):
            if char in OUTLINE_ALWAYS_ESCAPE:
                escaped.append("\\" + char)
            elif char in _HTML_ENTITIES:
                escaped.append(_HTML_ENTITIES[char])
            elif char == "_":
                prev_alnum = index > 0 and text[index - 1].isalnum()
                next_alnum = index < len(text) - 1 and text[index + 1].isalnum()
                escaped.append(char if prev_alnum and next_alnum else "\\_")
            else:
                escaped.append(char)
        return "".join(escaped)

    @staticmethod
    def _escape_line_start(text: str) -> str:
        """Escape a leading marker that would turn a paragraph into a heading or list."""
        match = _LINE_START_MARKER.match(text)
        if match is None:
            return text
        if match.group()[0].isdigit():
            end = match.end()
            return f"{text[:end]}\\{text[end:]}"
        return "\\" + text

    # ------------------------------------------------------------------
    # Blocks
    # ------------------------------------------------------------------

    def visit_document(self, node: Document) -> None:
        """Render all blocks separated by blank lines."""
        self._output.append(_BLOCK_SEPARATOR.join(self._render_block(block) for block in node.children))

    def visit_paragraph(self, node: Paragraph) -> None:
        """Render a paragraph as a single line of inline text."""
        self._output.append(self._escape_line_start(self._render_inline_content(node.content)))

    def visit_heading(self, node: Heading) -> None:
        """Render a heading with one ``#`` per level."""
        content = self._render_inline_content(node.content)
        self._output.append(f"{'#' * node.level} {content}".rstrip())

    def visit_list(self, node: List) -> None:
        """Render list items, indenting continuation lines by the marker width."""
        items: list[str] = []
        for number, item in enumerate(node.items, start=1):
            marker = f"{number}. " if node.ordered else "- "
            lines = self._render_block(item).split("\n")
            first = f"{marker}{lines[0]}" if lines[0] else marker.rstrip()
            rest = [" " * len(marker) + line if line else "" for line in lines[1:]]
            items.append("\n".join([first, *rest]))
        self._output.append("\n".join(items))

    def visit_list_item(self, node: ListItem) -> None:
        """Render an item's blocks; paragraph after paragraph uses a hard break."""
        rendered = ""
        previous: Node | None = None
        for child in node.children:
            text = self._render_block(child)
            if previous is None:
                rendered = text
            elif isinstance(previous, Paragraph) and isinstance(child, Paragraph):
                rendered += OUTLINE_HARD_BREAK + text
            else:
                rendered += "\n" + text
            previous = child
        self._output.append(rendered)

    def visit_block_quote(self, node: BlockQuote) -> None:
        """Render the quoted blocks and prefix every line with ``> ``."""
        quoted = _BLOCK_SEPARATOR.join(self._render_block(child) for child in node.children)
        lines = [f"> {line}" if line else ">" for line in quoted.split("\n")]
        self._output.append("\n".join(lines))

    # ------------------------------------------------------------------
    # Inline content
    # ------------------------------------------------------------------

    def visit_text(self, node: Text) -> None:
        """Render escaped text."""
        self._output.append(self._escape(node.content))

    def visit_bold(self, node: Bold) -> None:
        """Render ``**bold**``."""
        self._output.append(f"**{self._render_inline_content(node.content)}**")

    def visit_italic(self, node: Italic) -> None:
        """Render ``_italic_``."""
        self._output.append(f"_{self._render_inline_content(node.content)}_")

    def visit_underline(self, node: Underline) -> None:
        """Pass underline through as a ``<u>`` tag."""
        self._output.append(f"<u>{self._render_inline_content(node.content)}</u>")

    def visit_strike(self, node: Strike) -> None:
        """Pass strike-through through as an ``<s>`` tag."""
        self._output.append(f"<s>{self._render_inline_content(node.content)}</s>")

    def visit_highlight(self, node: Highlight) -> None:
        """Pass highlighting through as a ``<mark>`` tag."""
        self._output.append(f"<mark>{self._render_inline_content(node.content)}</mark>")

    def visit_code(self, node: Code) -> None:
        """Render a code span with a fence longer than any backtick run inside.

        Nested styling inside code has no outline equivalent and is dropped;
        only the text is kept.
        """
        content = extract_text(node.content)
        if not content:
            return
        longest = max((len(run) for run in _BACKTICK_RUN.findall(content)), default=0)
        fence = "`" * (longest + 1)
        padded = content.startswith("`") or content.endswith("`")
        if content.startswith(" ") and content.endswith(" ") and content.strip():
            padded = True
        if padded:
            content = f" {content} "
        self._output.append(f"{fence}{content}{fence}")

    def visit_link(self, node: Link) -> None:
        """Render ``[text](destination)`` with a percent-encoded destination."""
        if extract_text(node.content):
            text = self._render_inline_content(node.content)
        else:
            text = self._escape(normalize_href(node.url))
        destination = quote(node.url.strip(), safe=OUTLINE_URL_SAFE)
        self._output.append(f"[{text}]({destination})")
