#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/ftml/ast/nodes.py
"""AST node classes for document representation.

This module defines the node hierarchy for FTML documents. Each node is a
plain dataclass that supports the visitor pattern; there is no validation
logic here, so documents built directly by calling code are never
second-guessed. Enforcing the grammar is the parser's responsibility.

Node Hierarchy
--------------
All nodes inherit from the base Node class and support the visitor pattern.

Block-level nodes represent structural document elements:
    - Document, Paragraph, Heading, List, ListItem, BlockQuote

Inline nodes represent text and styling:
    - Text
    - Bold, Italic, Underline, Strike, Highlight, Code, Link (all ``Styled``)

Equality is structural: ``source_location`` is excluded from comparison so a
parsed document equals the same document built by hand.

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass(frozen=True)
class SourceLocation:
    """Location of a node's start tag in the markup source.

    Parameters
    ----------
    offset : int
        Character offset of the start tag
    line : int
        1-based line number
    column : int
        1-based column number

    """

    offset: int
    line: int
    column: int


class Node(ABC):
    """Base class for all AST nodes.

    Parameters
    ----------
    source_location : SourceLocation or None, default = None
        Information about where this node came from in the source

    """

    source_location: Optional[SourceLocation]

    @abstractmethod
    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this node.

        Parameters
        ----------
        visitor : Any
            A visitor object with visit_* methods

        Returns
        -------
        Any
            Result from the visitor's method

        """
        pass


def _location_field() -> Any:
    return field(default=None, compare=False, repr=False)


# ============================================================================
# Block-level nodes
# ============================================================================


@dataclass
class Document(Node):
    """Root document node holding the ordered top-level blocks.

    Parameters
    ----------
    children : list of Node, default = empty list
        Block-level nodes in document order

    """

    children: list[Node] = field(default_factory=list)
    source_location: Optional[SourceLocation] = _location_field()

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_document``."""
        return visitor.visit_document(self)


@dataclass
class Paragraph(Node):
    """Paragraph of inline content.

    Parameters
    ----------
    content : list of Node, default = empty list
        Inline nodes representing paragraph content

    """

    content: list[Node] = field(default_factory=list)
    source_location: Optional[SourceLocation] = _location_field()

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_paragraph``."""
        return visitor.visit_paragraph(self)


@dataclass
class Heading(Node):
    """Heading node (h1-h3).

    Parameters
    ----------
    level : int
        Heading level, 1 being the most important
    content : list of Node, default = empty list
        Inline nodes representing heading text

    """

    level: int
    content: list[Node] = field(default_factory=list)
    source_location: Optional[SourceLocation] = _location_field()

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_heading``."""
        return visitor.visit_heading(self)


@dataclass
class List(Node):
    """Ordered or unordered list.

    Parameters
    ----------
    ordered : bool, default = False
        Whether items are numbered
    items : list of ListItem, default = empty list
        List items in order

    """

    ordered: bool = False
    items: list[ListItem] = field(default_factory=list)
    source_location: Optional[SourceLocation] = _location_field()

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_list``."""
        return visitor.visit_list(self)


@dataclass
class ListItem(Node):
    """List item holding block-level children.

    Usually a single Paragraph, but an item may also hold nested lists,
    block quotes or several paragraphs.

    Parameters
    ----------
    children : list of Node, default = empty list
        Block-level nodes in the item

    """

    children: list[Node] = field(default_factory=list)
    source_location: Optional[SourceLocation] = _location_field()

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_list_item``."""
        return visitor.visit_list_item(self)


@dataclass
class BlockQuote(Node):
    """Block quote holding block-level children.

    Parameters
    ----------
    children : list of Node, default = empty list
        Block-level nodes inside the quote

    """

    children: list[Node] = field(default_factory=list)
    source_location: Optional[SourceLocation] = _location_field()

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_block_quote``."""
        return visitor.visit_block_quote(self)


# ============================================================================
# Inline nodes
# ============================================================================


@dataclass
class Text(Node):
    """Plain text leaf.

    Outside ``Code`` the content is whitespace-normalized by the parser;
    inside ``Code`` it is kept verbatim.

    Parameters
    ----------
    content : str
        Text content

    """

    content: str
    source_location: Optional[SourceLocation] = _location_field()

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_text``."""
        return visitor.visit_text(self)


class Styled(Node):
    """Base class for inline spans that apply one style to their children.

    Subclasses declare a ``content`` list of inline nodes and a ``style``
    name used by renderers to look up escape sequences and markers.
    """

    style: str = ""
    content: list[Node]


@dataclass
class Bold(Styled):
    """Bold span."""

    content: list[Node] = field(default_factory=list)
    source_location: Optional[SourceLocation] = _location_field()

    style = "bold"

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_bold``."""
        return visitor.visit_bold(self)


@dataclass
class Italic(Styled):
    """Italic span."""

    content: list[Node] = field(default_factory=list)
    source_location: Optional[SourceLocation] = _location_field()

    style = "italic"

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_italic``."""
        return visitor.visit_italic(self)


@dataclass
class Underline(Styled):
    """Underlined span."""

    content: list[Node] = field(default_factory=list)
    source_location: Optional[SourceLocation] = _location_field()

    style = "underline"

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_underline``."""
        return visitor.visit_underline(self)


@dataclass
class Strike(Styled):
    """Struck-through span."""

    content: list[Node] = field(default_factory=list)
    source_location: Optional[SourceLocation] = _location_field()

    style = "strike"

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_strike``."""
        return visitor.visit_strike(self)


@dataclass
class Highlight(Styled):
    """Highlighted (marked) span."""

    content: list[Node] = field(default_factory=list)
    source_location: Optional[SourceLocation] = _location_field()

    style = "highlight"

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_highlight``."""
        return visitor.visit_highlight(self)


@dataclass
class Code(Styled):
    """Inline code span; whitespace in its text is preserved verbatim."""

    content: list[Node] = field(default_factory=list)
    source_location: Optional[SourceLocation] = _location_field()

    style = "code"

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_code``."""
        return visitor.visit_code(self)


@dataclass
class Link(Styled):
    """Hyperlink span.

    A link never contains another link. An empty ``content`` list means the
    link has no visible text; renderers then show the normalized URL.

    Parameters
    ----------
    url : str
        Link target (the ``href`` attribute)
    content : list of Node, default = empty list
        Inline nodes forming the visible link text

    """

    url: str
    content: list[Node] = field(default_factory=list)
    source_location: Optional[SourceLocation] = _location_field()

    style = "link"

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_link``."""
        return visitor.visit_link(self)


BLOCK_NODES = (Paragraph, Heading, List, BlockQuote)
STYLE_NODES = (Bold, Italic, Underline, Strike, Highlight, Code, Link)
INLINE_NODES = (Text, *STYLE_NODES)


def get_node_children(node: Node) -> list[Node]:
    """Get all child nodes from a node.

    Parameters
    ----------
    node : Node
        The node to get children from

    Returns
    -------
    list of Node
        List of child nodes (empty list if node has no children)

    Examples
    --------
    >>> heading = Heading(level=1, content=[Text("Hello"), Bold(content=[Text("world")])])
    >>> len(get_node_children(heading))
    2

    """
    if isinstance(node, (Document, BlockQuote, ListItem)):
        return list(node.children)

    if isinstance(node, (Paragraph, Heading, Styled)):
        return list(node.content)

    if isinstance(node, List):
        return list(node.items)

    return []
