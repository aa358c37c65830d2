#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/ftml/ast/builder.py
"""Builder helpers for constructing FTML documents in code.

Two styles are supported. ``DocumentBuilder`` offers a fluent interface for
appending blocks one at a time, and the free functions (``p``, ``h1``,
``ul``, ``b``, ``a`` ...) build nested trees in a single expression. Plain
strings passed to any helper are wrapped in ``Text`` nodes.

Examples
--------
>>> tree = doc(
...     p("Hello ", b("world"), "!"),
...     ul(li(p("One")), li(p("Two"))),
... )

"""

from __future__ import annotations

from typing import Union

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

InlineArg = Union[str, Node]


def _inline(parts: tuple[InlineArg, ...]) -> list[Node]:
    return [Text(part) if isinstance(part, str) else part for part in parts]


def doc(*children: Node) -> Document:
    """Create a Document from block nodes."""
    return Document(children=list(children))


def text(content: str) -> Text:
    """Create a Text node."""
    return Text(content)


def p(*content: InlineArg) -> Paragraph:
    """Create a Paragraph from strings and inline nodes."""
    return Paragraph(content=_inline(content))


def heading(level: int, *content: InlineArg) -> Heading:
    """Create a Heading of the given level."""
    return Heading(level=level, content=_inline(content))


def h1(*content: InlineArg) -> Heading:
    """Create a level 1 Heading."""
    return heading(1, *content)


def h2(*content: InlineArg) -> Heading:
    """Create a level 2 Heading."""
    return heading(2, *content)


def h3(*content: InlineArg) -> Heading:
    """Create a level 3 Heading."""
    return heading(3, *content)


def li(*children: Node) -> ListItem:
    """Create a ListItem from block nodes."""
    return ListItem(children=list(children))


def ul(*items: ListItem) -> List:
    """Create an unordered List."""
    return List(ordered=False, items=list(items))


def ol(*items: ListItem) -> List:
    """Create an ordered List."""
    return List(ordered=True, items=list(items))


def quote(*children: Node) -> BlockQuote:
    """Create a BlockQuote from block nodes."""
    return BlockQuote(children=list(children))


def b(*content: InlineArg) -> Bold:
    """Create a Bold span."""
    return Bold(content=_inline(content))


def i(*content: InlineArg) -> Italic:
    """Create an Italic span."""
    return Italic(content=_inline(content))


def u(*content: InlineArg) -> Underline:
    """Create an Underline span."""
    return Underline(content=_inline(content))


def s(*content: InlineArg) -> Strike:
    """Create a Strike span."""
    return Strike(content=_inline(content))


def mark(*content: InlineArg) -> Highlight:
    """Create a Highlight span."""
    return Highlight(content=_inline(content))


def code(*content: InlineArg) -> Code:
    """Create a Code span."""
    return Code(content=_inline(content))


def a(href: str, *content: InlineArg) -> Link:
    """Create a Link; omit ``content`` for a link with no visible text."""
    return Link(url=href, content=_inline(content))


class DocumentBuilder:
    """Helper for building complete documents.

    This class provides a fluent interface for constructing documents
    block by block. Every ``add_*`` method returns the builder so calls
    can be chained.

    Examples
    --------
    >>> doc = (DocumentBuilder()
    ...     .add_heading(1, ["Title"])
    ...     .add_paragraph(["Some ", b("bold"), " text."])
    ...     .add_list([[p("One")], [p("Two")]], ordered=True)
    ...     .get_document())

    """

    def __init__(self) -> None:
        """Initialize the document builder with an empty children list."""
        self.children: list[Node] = []

    def add_node(self, node: Node) -> DocumentBuilder:
        """Add a block node to the document.

        Parameters
        ----------
        node : Node
            Block-level node to add

        Returns
        -------
        DocumentBuilder
            Self for method chaining

        """
        self.children.append(node)
        return self

    def add_heading(self, level: int, content: list[InlineArg]) -> DocumentBuilder:
        """Add a heading with the given level and inline content."""
        return self.add_node(heading(level, *content))

    def add_paragraph(self, content: list[InlineArg]) -> DocumentBuilder:
        """Add a paragraph with the given inline content."""
        return self.add_node(p(*content))

    def add_block_quote(self, children: list[Node]) -> DocumentBuilder:
        """Add a block quote holding ``children``."""
        return self.add_node(quote(*children))

    def add_list(self, items: list[list[Node]], ordered: bool = False) -> DocumentBuilder:
        """Add a list.

        Parameters
        ----------
        items : list of list of Node
            One list of block nodes per item
        ordered : bool, default = False
            Whether the list is numbered

        Returns
        -------
        DocumentBuilder
            Self for method chaining

        """
        return self.add_node(List(ordered=ordered, items=[li(*blocks) for blocks in items]))

    def get_document(self) -> Document:
        """Return the finished Document."""
        return Document(children=list(self.children))
