#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/ftml/parsers/ftml.py
"""Strict parser for the FTML markup language.

FTML is a small subset of HTML5: the block tags ``p h1 h2 h3 ul ol li
blockquote`` and the inline tags ``b i u s mark code a``, with ``href`` on
``a`` as the only attribute. Parsing is single pass and non-recovering. The
first violation raises a ``ParseError`` subclass carrying the offset, line
and column of the offending token, and no partial document is returned.

Whitespace handling
-------------------
Outside ``code`` every run of ASCII whitespace in the source stands for one
space, including runs that span inline tag boundaries, and runs at the start
or end of a paragraph or heading are dropped. Whitespace written as a
character reference (``&#32;``, ``&nbsp;``) is content and never collapsed.
Inside ``code`` text is kept verbatim.

"""

from __future__ import annotations

import codecs
import logging
import re
from dataclasses import dataclass
from html.entities import html5
from typing import Optional

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
    SourceLocation,
    Strike,
    Text,
    Underline,
)
from ftml.ast.utils import WHITESPACE_SPLIT_PATTERN, SoftSpace, drop_soft_whitespace, merge_adjacent_text
from ftml.constants import (
    ALLOWED_TAGS,
    BLOCK_TAGS,
    HEADING_TAGS,
    INLINE_TAGS,
    LEAF_BLOCK_TAGS,
    LIST_TAGS,
    MARKUP_WHITESPACE,
)
from ftml.exceptions import (
    DisallowedElementError,
    EncodingError,
    InvalidAttributeError,
    ParseError,
    UnclosedElementError,
    UnexpectedTokenError,
)
from ftml.options.base import BaseParserOptions
from ftml.parsers.base import BaseParser
from ftml.utils.io_utils import SourceInput, read_source

logger = logging.getLogger(__name__)

_START_TAG = re.compile(
    r"<([A-Za-z][A-Za-z0-9]*)"
    r"((?:\s+[^\s=/>\"'<]+(?:\s*=\s*(?:\"[^\"]*\"|'[^']*'|[^\s\"'=<>`]+))?)*)"
    r"\s*(/?)>"
)
_END_TAG = re.compile(r"</([A-Za-z][A-Za-z0-9]*)\s*>")
_ATTRIBUTE = re.compile(r"([^\s=/>\"'<]+)(?:\s*=\s*(\"[^\"]*\"|'[^']*'|[^\s\"'=<>`]+))?")
_REFERENCE = re.compile(r"&(?:#([0-9]+)|#[xX]([0-9a-fA-F]+)|([A-Za-z][A-Za-z0-9]*));")

_INLINE_NODE_TYPES: dict[str, type] = {
    "b": Bold,
    "i": Italic,
    "u": Underline,
    "s": Strike,
    "mark": Highlight,
    "code": Code,
}

# Frame contexts
_BLOCK = "block"
_LIST = "list"
_INLINE = "inline"


def locate(source: str, position: int) -> tuple[int, int]:
    """Return the 1-based (line, column) of a character offset."""
    line = source.count("\n", 0, position) + 1
    column = position - (source.rfind("\n", 0, position) + 1) + 1
    return line, column


@dataclass
class _Token:
    """A start tag, end tag, or text run with its source offset."""

    kind: str
    position: int
    name: str = ""
    attributes: str = ""
    attributes_offset: int = 0
    self_closing: bool = False
    text: str = ""


@dataclass
class _Frame:
    """An open element on the parser stack."""

    tag: str
    node: Node
    position: int
    context: str


class _Scanner:
    """Restartable tokenizer over FTML source.

    The scanner's only state is ``pos``; creating a new scanner at any
    token boundary resumes tokenizing from there.
    """

    def __init__(self, source: str, pos: int = 0):
        self.source = source
        self.pos = pos

    def next_token(self) -> Optional[_Token]:
        """Return the next token, or None at end of input.

        Raises
        ------
        UnexpectedTokenError
            For comments, declarations, and anything that starts with ``<``
            but is not a well-formed tag

        """
        source = self.source
        start = self.pos
        if start >= len(source):
            return None

        if source.startswith("<", start):
            if source.startswith("</", start):
                match = _END_TAG.match(source, start)
                if match:
                    self.pos = match.end()
                    return _Token("end", start, name=match.group(1).lower())
            elif source.startswith(("<!", "<?"), start):
                raise self._error("comments, declarations and processing instructions are not allowed", start)
            else:
                match = _START_TAG.match(source, start)
                if match:
                    self.pos = match.end()
                    return _Token(
                        "start",
                        start,
                        name=match.group(1).lower(),
                        attributes=match.group(2),
                        attributes_offset=match.start(2),
                        self_closing=bool(match.group(3)),
                    )
            raise self._error("malformed tag", start)

        end = source.find("<", start)
        if end == -1:
            end = len(source)
        self.pos = end
        return _Token("text", start, text=source[start:end])

    def _error(self, message: str, position: int) -> UnexpectedTokenError:
        line, column = locate(self.source, position)
        return UnexpectedTokenError(message, position, line, column)


class _TreeBuilder:
    """Per-call parse state: the open-element stack and the document being built."""

    def __init__(self, source: str):
        self.source = source
        self.document = Document()
        self.stack: list[_Frame] = [_Frame("", self.document, 0, _BLOCK)]

    def build(self) -> Document:
        scanner = _Scanner(self.source)
        while True:
            token = scanner.next_token()
            if token is None:
                break
            if token.kind == "start":
                self._open(token)
            elif token.kind == "end":
                self._close(token)
            else:
                self._text(token)

        if len(self.stack) > 1:
            innermost = self.stack[-1]
            raise self._error(UnclosedElementError, f"<{innermost.tag}> is never closed", innermost.position)
        return self.document

    # ------------------------------------------------------------------
    # Token handlers
    # ------------------------------------------------------------------

    def _open(self, token: _Token) -> None:
        name = token.name
        if name not in ALLOWED_TAGS:
            raise self._error(DisallowedElementError, f"<{name}> is not an allowed element", token.position)
        if token.self_closing:
            raise self._error(UnexpectedTokenError, f"self-closing syntax is not allowed for <{name}>", token.position)

        parent = self.stack[-1]
        where = f"inside <{parent.tag}>" if parent.tag else "at document level"
        if parent.context == _LIST:
            if name != "li":
                raise self._error(DisallowedElementError, f"<{name}> is not allowed {where}", token.position)
        elif name == "li":
            raise self._error(DisallowedElementError, "<li> must be a direct child of <ul> or <ol>", token.position)
        elif parent.context == _BLOCK:
            if name in INLINE_TAGS:
                raise self._error(DisallowedElementError, f"inline <{name}> is not allowed {where}", token.position)
        else:
            if name in BLOCK_TAGS:
                raise self._error(DisallowedElementError, f"block <{name}> is not allowed {where}", token.position)
            if name == "a" and any(frame.tag == "a" for frame in self.stack):
                raise self._error(DisallowedElementError, "links cannot be nested", token.position)

        href = self._parse_attributes(token)
        location = SourceLocation(token.position, *locate(self.source, token.position))
        node, context = self._create_node(name, href, location)

        if parent.context == _LIST:
            parent.node.items.append(node)
        elif parent.context == _BLOCK:
            parent.node.children.append(node)
        else:
            parent.node.content.append(node)
        self.stack.append(_Frame(name, node, token.position, context))

    def _close(self, token: _Token) -> None:
        name = token.name
        if name not in ALLOWED_TAGS:
            raise self._error(DisallowedElementError, f"</{name}> is not an allowed element", token.position)

        top = self.stack[-1]
        if top.tag != name:
            expected = f", expected </{top.tag}>" if top.tag else ""
            raise self._error(UnexpectedTokenError, f"unexpected </{name}>{expected}", token.position)

        self.stack.pop()
        if name in LEAF_BLOCK_TAGS:
            block = top.node
            block.content = merge_adjacent_text(drop_soft_whitespace(block.content))

    def _text(self, token: _Token) -> None:
        parent = self.stack[-1]
        if parent.context != _INLINE:
            stray = token.text.lstrip(MARKUP_WHITESPACE)
            if stray:
                where = f"inside <{parent.tag}>" if parent.tag else "at document level"
                offset = token.position + len(token.text) - len(stray)
                raise self._error(UnexpectedTokenError, f"text is not allowed {where}", offset)
            return

        content = parent.node.content
        if any(frame.tag == "code" for frame in self.stack):
            content.append(Text(self._decode_references(token.text, token.position)))
            return

        for match in WHITESPACE_SPLIT_PATTERN.finditer(token.text):
            piece = match.group()
            if piece[0] in MARKUP_WHITESPACE:
                content.append(SoftSpace())
            else:
                content.append(Text(self._decode_references(piece, token.position + match.start())))

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _create_node(name: str, href: Optional[str], location: SourceLocation) -> tuple[Node, str]:
        if name == "p":
            return Paragraph(source_location=location), _INLINE
        if name in HEADING_TAGS:
            return Heading(level=HEADING_TAGS[name], source_location=location), _INLINE
        if name in LIST_TAGS:
            return List(ordered=name == "ol", source_location=location), _LIST
        if name == "li":
            return ListItem(source_location=location), _BLOCK
        if name == "blockquote":
            return BlockQuote(source_location=location), _BLOCK
        if name == "a":
            return Link(url=href or "", source_location=location), _INLINE
        return _INLINE_NODE_TYPES[name](source_location=location), _INLINE

    def _parse_attributes(self, token: _Token) -> Optional[str]:
        """Validate a start tag's attributes and return its ``href``, if any."""
        href: Optional[str] = None
        for match in _ATTRIBUTE.finditer(token.attributes):
            position = token.attributes_offset + match.start()
            attr_name = match.group(1).lower()
            if token.name != "a" or attr_name != "href":
                raise self._error(
                    InvalidAttributeError, f"attribute '{attr_name}' is not allowed on <{token.name}>", position
                )
            if href is not None:
                raise self._error(InvalidAttributeError, "duplicate href attribute", position)

            raw = match.group(2)
            if raw is None:
                raise self._error(InvalidAttributeError, "href requires a value", position)
            value_offset = token.attributes_offset + match.start(2)
            if raw[0] in "\"'":
                raw = raw[1:-1]
                value_offset += 1
            href = self._decode_references(raw, value_offset)

        if token.name == "a" and href is None:
            raise self._error(InvalidAttributeError, "<a> requires an href attribute", token.position)
        return href

    def _decode_references(self, raw: str, offset: int) -> str:
        """Decode character references in ``raw``, which starts at ``offset``."""
        if "&" not in raw:
            return raw

        parts: list[str] = []
        index = 0
        while True:
            amp = raw.find("&", index)
            if amp == -1:
                parts.append(raw[index:])
                break
            parts.append(raw[index:amp])
            match = _REFERENCE.match(raw, amp)
            if match is None:
                raise self._error(EncodingError, "'&' does not start a valid character reference", offset + amp)
            parts.append(self._resolve_reference(match, offset + amp))
            index = match.end()
        return "".join(parts)

    def _resolve_reference(self, match: re.Match, position: int) -> str:
        decimal, hexadecimal, name = match.groups()
        if name is not None:
            value = html5.get(f"{name};")
            if value is None:
                raise self._error(EncodingError, f"unknown character reference &{name};", position)
            return value

        codepoint = int(decimal) if decimal is not None else int(hexadecimal, 16)
        if codepoint == 0 or 0xD800 <= codepoint <= 0xDFFF or codepoint > 0x10FFFF:
            raise self._error(EncodingError, f"invalid code point in {match.group()}", position)
        return chr(codepoint)

    def _error(self, error_class: type[ParseError], message: str, position: int) -> ParseError:
        line, column = locate(self.source, position)
        return error_class(message, position, line, column)


class FtmlParser(BaseParser):
    """Convert FTML markup to AST representation.

    Parameters
    ----------
    options : BaseParserOptions or None, default = None
        Parser configuration; FTML parsing has no tunable options

    Examples
    --------
    >>> parser = FtmlParser()
    >>> doc = parser.parse("<p>Hello <b>world</b>!</p>")
    >>> doc.children[0].content[1]
    Bold(content=[Text(content='world')])

    """

    def __init__(self, options: BaseParserOptions | None = None):
        """Initialize the parser."""
        BaseParser._validate_options_type(options, BaseParserOptions, "ftml")
        super().__init__(options)

    def parse(self, input_data: SourceInput) -> Document:
        """Parse FTML markup into an AST Document.

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
            On the first grammar violation; the subclass names the kind

        """
        source = self._decode(read_source(input_data))
        logger.debug("Parsing %d characters of FTML", len(source))
        document = _TreeBuilder(source).build()
        logger.debug("Parsed FTML document with %d top-level blocks", len(document.children))
        return document

    @staticmethod
    def _decode(content: str | bytes) -> str:
        """Decode input bytes as strict UTF-8 and drop a leading byte order mark."""
        if isinstance(content, str):
            return content[1:] if content.startswith("\ufeff") else content

        skipped = len(codecs.BOM_UTF8) if content.startswith(codecs.BOM_UTF8) else 0
        body = content[skipped:]
        try:
            return body.decode("utf-8")
        except UnicodeDecodeError as exc:
            prefix = body[: exc.start].decode("utf-8")
            line, column = locate(prefix, len(prefix))
            raise EncodingError(
                "input is not valid UTF-8", exc.start + skipped, line, column, original_error=exc
            ) from exc
