#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/ftml/renderers/terminal.py
"""Terminal renderer producing ANSI-styled or plain ASCII text.

Rendering flattens each block's inline content into pieces of text tagged
with the styles and link that apply to them, word-wraps the pieces to the
available width, and emits each visual line on its own.

In ANSI mode every line is assembled as a ``rich`` Text and written through a
capturing ``rich`` Console: styles become SGR sequences and links become
OSC-8 hyperlinks. Every line closes whatever it opened, so the indentation
prefixes added by lists and block quotes are never styled. Escape sequences
take no columns, so this mode keeps its own word packer.

In ASCII mode bold, italic and code get plain-text markers and links get a
footnote index (``¹`` or ``[1]``) referring to a URL list written after the
last block. A ``mailto:`` link whose text is the address itself gets no
index. Footnote numbering restarts with every render call. Lines are
wrapped with ``textwrap``; markers and footnote indices take columns.

Control characters never reach the terminal: in text they are shown as
U+FFFD, in link targets they are percent-encoded.

"""

from __future__ import annotations

import logging
import re
import textwrap
from dataclasses import dataclass
from typing import Iterator, Optional
from urllib.parse import quote

from rich.console import Console
from rich.segment import Segments
from rich.style import Style
from rich.text import Text as RichText

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
from ftml.ast.utils import (
    WHITESPACE_SPLIT_PATTERN,
    extract_text,
    is_self_describing_mailto,
    normalize_href,
)
from ftml.ast.visitors import NodeVisitor
from ftml.constants import (
    ANSI_STYLES,
    ASCII_MARKERS,
    MARKUP_WHITESPACE,
    SUPERSCRIPT_DIGITS,
)
from ftml.options.terminal import FormattingStyle
from ftml.renderers.base import BaseRenderer

logger = logging.getLogger(__name__)

# C0 and C1 controls; collapsible whitespace in text is laid out as spaces
_UNSAFE_TEXT = re.compile("[\x00-\x08\x0b\x0e-\x1f\x7f-\x9f]")
_UNSAFE_URL = re.compile("[\x00-\x1f\x7f-\x9f]")
_SPACES = str.maketrans(MARKUP_WHITESPACE, " " * len(MARKUP_WHITESPACE))


def terminal_safe_url(url: str) -> str:
    """Percent-encode the control characters of a link target.

    Examples
    --------
    >>> terminal_safe_url("https://x.test/\\x1b[2J")
    'https://x.test/%1B[2J'

    """
    return _UNSAFE_URL.sub(lambda match: quote(match.group(), safe=""), url)


@dataclass(frozen=True)
class _Piece:
    """A run of visible text with the styles and link that apply to it."""

    text: str
    styles: tuple[str, ...] = ()
    link: Optional[Style] = None


@dataclass
class _Token:
    """A word or a whitespace run made of one or more pieces."""

    is_space: bool
    pieces: list[_Piece]
    width: int


class _RenderState:
    """Bookkeeping for one render call."""

    def __init__(self, console: Optional[Console] = None) -> None:
        self.footnotes: dict[str, int] = {}
        self.console = console

    def footnote_index(self, url: str) -> int:
        if url not in self.footnotes:
            self.footnotes[url] = len(self.footnotes) + 1
        return self.footnotes[url]


class TerminalRenderer(NodeVisitor, BaseRenderer):
    """Render an AST for a fixed-width terminal.

    Block ``visit_*`` methods return the block's lines; inline ``visit_*``
    methods append pieces to the block being flattened.

    Parameters
    ----------
    options : FormattingStyle
        Rendering configuration; required, there is no implicit default

    Examples
    --------
    >>> from ftml.ast.builder import p, a
    >>> style = FormattingStyle(link_index_format="bracketed")
    >>> print(TerminalRenderer(style).render_to_string(Document(children=[p(a("https://x.test"))])), end="")
    https://x.test[1]
    <BLANKLINE>
    [1] https://x.test

    """

    def __init__(self, options: FormattingStyle):
        """Initialize the renderer with an explicit formatting style."""
        if options is None:
            raise TypeError("TerminalRenderer requires a FormattingStyle")
        BaseRenderer._validate_options_type(options, FormattingStyle, "terminal")
        BaseRenderer.__init__(self, options)
        self.style: FormattingStyle = options
        self._state = _RenderState()
        self._width: Optional[int] = None
        self._pieces: list[_Piece] = []
        self._styles: list[str] = []
        self._link: Optional[Style] = None

    def iter_render(self, doc: Document) -> Iterator[str]:
        """Yield the rendered text one top-level block at a time.

        Parameters
        ----------
        doc : Document
            Document to render

        Yields
        ------
        str
            Lines of the next block, then the footnote list in ASCII mode

        """
        self._state = _RenderState(self._create_console() if self.style.ansi else None)
        self._width = self.style.width or None
        logger.debug(
            "Rendering %d blocks for the terminal (ansi=%s, width=%s)",
            len(doc.children),
            self.style.ansi,
            self.style.width,
        )

        for index, block in enumerate(doc.children):
            text = "\n".join(block.accept(self)) + "\n"
            yield text if index == 0 else "\n" + text

        if self._state.footnotes:
            yield "\n" + "\n".join(self._footnote_lines()) + "\n"

    def _create_console(self) -> Console:
        # lines are laid out before they reach rich, so rich never wraps or crops
        return Console(
            color_system="standard",
            force_terminal=True,
            force_jupyter=False,
            force_interactive=False,
            no_color=False,
            soft_wrap=True,
            width=self.style.width or None,
            markup=False,
            emoji=False,
            highlight=False,
            legacy_windows=False,
        )

    def _footnote_lines(self) -> list[str]:
        labels = [(self._index_marker(index), url) for url, index in self._state.footnotes.items()]
        label_width = max(len(label) for label, _ in labels)
        return [f"{label:>{label_width}} {url}" for label, url in labels]

    def _index_marker(self, index: int) -> str:
        if self.style.link_index_format == "bracketed":
            return f"[{index}]"
        return str(index).translate(SUPERSCRIPT_DIGITS)

    # ------------------------------------------------------------------
    # Blocks
    # ------------------------------------------------------------------

    def _inner_width(self, prefix_width: int) -> Optional[int]:
        if self._width is None:
            return None
        return max(1, self._width - prefix_width)

    def _render_nested(self, node: Node, width: Optional[int]) -> list[str]:
        saved_width = self._width
        self._width = width
        lines = node.accept(self)
        self._width = saved_width
        return lines

    def _join_blocks(self, blocks: list[Node], width: Optional[int]) -> list[str]:
        lines: list[str] = []
        for index, block in enumerate(blocks):
            if index:
                lines.append("")
            lines.extend(self._render_nested(block, width))
        return lines

    def visit_document(self, node: Document) -> list[str]:
        """Render all blocks separated by blank lines (no footnotes)."""
        return self._join_blocks(node.children, self._width)

    def visit_paragraph(self, node: Paragraph) -> list[str]:
        """Render a word-wrapped paragraph."""
        lines, _ = self._layout(self._collect(node.content))
        return lines or [""]

    def visit_heading(self, node: Heading) -> list[str]:
        """Render a heading: h1 centered, h2 and h3 underlined."""
        base_styles = ("bold",) if self.style.ansi else ()
        rendered, widths = self._layout(self._collect(node.content, base_styles))
        if not rendered:
            rendered = [""]

        if node.level <= 1:
            if self._width is not None and len(widths) == 1 and widths[0] <= self._width:
                padding = (self._width - widths[0]) // 2
                rendered = [" " * padding + rendered[0]]
            return rendered

        underline = "=" if node.level == 2 else "-"
        widest = max(widths, default=0)
        if widest:
            rendered.append(underline * widest)
        return rendered

    def visit_list(self, node: List) -> list[str]:
        """Render list items with bullets or right-aligned numbers."""
        number_width = len(str(len(node.items)))
        lines: list[str] = []
        for number, item in enumerate(node.items, start=1):
            if node.ordered:
                marker = f"{number:>{number_width}}. "
            else:
                marker = f"{self.style.bullet} "
            indent = " " * len(marker)
            body = self._render_nested(item, self._inner_width(len(marker)))

            if number > 1:
                lines.append("")
            if not body or not body[0]:
                lines.append(marker.rstrip())
            else:
                lines.append(marker + body[0])
            lines.extend(indent + line if line else "" for line in body[1:])
        return lines

    def visit_list_item(self, node: ListItem) -> list[str]:
        """Render an item's blocks separated by blank lines."""
        return self._join_blocks(node.children, self._width)

    def visit_block_quote(self, node: BlockQuote) -> list[str]:
        """Render quoted blocks behind the quote prefix."""
        prefix = self.style.quote_prefix
        body = self._join_blocks(node.children, self._inner_width(len(prefix)))
        return [prefix + line if line else prefix.rstrip() for line in body]

    # ------------------------------------------------------------------
    # Inline flattening
    # ------------------------------------------------------------------

    def _collect(self, content: list[Node], base_styles: tuple[str, ...] = ()) -> list[_Piece]:
        self._pieces = []
        self._styles = list(base_styles)
        self._link = None
        for node in content:
            node.accept(self)
        return self._pieces

    def _append(self, text: str) -> None:
        if text:
            text = _UNSAFE_TEXT.sub("\ufffd", text)
            self._pieces.append(_Piece(text, tuple(self._styles), self._link))

    def _styled(self, node: Styled) -> None:
        if self.style.ansi:
            pushed = node.style not in self._styles
            if pushed:
                self._styles.append(node.style)
            for child in node.content:
                child.accept(self)
            if pushed:
                self._styles.pop()
            return

        open_marker, close_marker = ASCII_MARKERS.get(node.style, ("", ""))
        self._append(open_marker)
        for child in node.content:
            child.accept(self)
        self._append(close_marker)

    def visit_text(self, node: Text) -> None:
        """Add the text as a piece with the current styles."""
        self._append(node.content)

    def visit_bold(self, node: Bold) -> None:
        """Apply bold."""
        self._styled(node)

    def visit_italic(self, node: Italic) -> None:
        """Apply italic."""
        self._styled(node)

    def visit_underline(self, node: Underline) -> None:
        """Apply underline (no ASCII marker)."""
        self._styled(node)

    def visit_strike(self, node: Strike) -> None:
        """Apply strike-through (no ASCII marker)."""
        self._styled(node)

    def visit_highlight(self, node: Highlight) -> None:
        """Apply highlighting (no ASCII marker)."""
        self._styled(node)

    def visit_code(self, node: Code) -> None:
        """Apply code styling."""
        self._styled(node)

    def visit_link(self, node: Link) -> None:
        """Render link text as an OSC-8 hyperlink or with a footnote index."""
        has_text = bool(extract_text(node.content))
        url = terminal_safe_url(node.url.strip())

        if self.style.ansi:
            saved_link = self._link
            # one Style per link keeps a single OSC-8 id across wrapped lines
            self._link = Style(link=url)
            self._link_text(node, has_text)
            self._link = saved_link
            return

        self._link_text(node, has_text)
        if not is_self_describing_mailto(node):
            self._append(self._index_marker(self._state.footnote_index(url)))

    def _link_text(self, node: Link, has_text: bool) -> None:
        if has_text:
            for child in node.content:
                child.accept(self)
        else:
            self._append(normalize_href(node.url))

    # ------------------------------------------------------------------
    # Wrapping and emission
    # ------------------------------------------------------------------

    def _layout(self, pieces: list[_Piece]) -> tuple[list[str], list[int]]:
        """Wrap and emit one block's pieces.

        Returns
        -------
        tuple of (list of str, list of int)
            The rendered lines and the visible width of each

        """
        if not self.style.ansi:
            lines = self._wrap_plain("".join(piece.text for piece in pieces))
            return lines, [len(line) for line in lines]

        wrapped = self._wrap(pieces)
        widths = [sum(len(piece.text) for piece in line) for line in wrapped]
        return [self._emit(line) for line in wrapped], widths

    def _wrap_plain(self, text: str) -> list[str]:
        """Wrap unstyled text; every whitespace character counts as one space."""
        text = text.translate(_SPACES).lstrip(" ")
        if self._width is None:
            stripped = text.rstrip(" ")
            return [stripped] if stripped else []
        wrapper = textwrap.TextWrapper(
            width=max(1, self._width),
            expand_tabs=False,
            break_long_words=False,
            break_on_hyphens=False,
        )
        return wrapper.wrap(text)

    @staticmethod
    def _tokenize(pieces: list[_Piece]) -> list[_Token]:
        """Split pieces into words and whitespace runs.

        A word may span several pieces (``Hello<b>world</b>`` is one word).
        Whitespace inside code is shown as plain spaces.
        """
        tokens: list[_Token] = []
        for piece in pieces:
            for match in WHITESPACE_SPLIT_PATTERN.finditer(piece.text):
                chunk = match.group()
                is_space = chunk[0] in MARKUP_WHITESPACE
                if is_space:
                    chunk = " " * len(chunk)
                part = _Piece(chunk, piece.styles, piece.link)
                if tokens and tokens[-1].is_space == is_space:
                    tokens[-1].pieces.append(part)
                    tokens[-1].width += len(chunk)
                else:
                    tokens.append(_Token(is_space, [part], len(chunk)))
        return tokens

    def _wrap(self, pieces: list[_Piece]) -> list[list[_Piece]]:
        """Pack styled words into lines no wider than the current width.

        Follows the same rule as ``_wrap_plain`` while measuring only the
        visible text. Whitespace between words on the same line is kept as
        written and dropped where a line breaks. A word wider than the limit
        sits alone on its own line, unbroken.
        """
        limit = self._width
        lines: list[list[_Piece]] = []
        line: list[_Piece] = []
        line_width = 0
        pending: Optional[_Token] = None

        for token in self._tokenize(pieces):
            if token.is_space:
                pending = token if line else None
                continue
            space_width = pending.width if pending else 0
            if limit is not None and line and line_width + space_width + token.width > limit:
                lines.append(line)
                line, line_width, pending = [], 0, None
            if pending is not None:
                line.extend(pending.pieces)
                line_width += pending.width
                pending = None
            line.extend(token.pieces)
            line_width += token.width

        if line:
            lines.append(line)
        return lines

    @staticmethod
    def _runs(pieces: list[_Piece]) -> Iterator[tuple[str, Style]]:
        """Merge neighbouring pieces that look alike and resolve their rich style."""
        start = 0
        while start < len(pieces):
            first = pieces[start]
            end = start + 1
            while end < len(pieces) and pieces[end].styles == first.styles and pieces[end].link is first.link:
                end += 1
            styles = [ANSI_STYLES[name] for name in first.styles]
            if first.link is not None:
                styles.append(first.link)
            style = Style.combine(styles) if styles else Style.null()
            yield "".join(piece.text for piece in pieces[start:end]), style
            start = end

    def _emit(self, pieces: list[_Piece]) -> str:
        """Turn one visual line into ANSI text through the capturing console."""
        console = self._state.console
        line = RichText.assemble(*self._runs(pieces), end="")
        with console.capture() as capture:
            # Segments bypass Text wrapping; the line is already laid out
            console.print(Segments(line.render(console)), end="")
        return capture.get()
