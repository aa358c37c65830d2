#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/ftml/ast/__init__.py
"""Document model for FTML.

The AST is a tree of dataclass nodes: blocks (Document, Paragraph, Heading,
List, ListItem, BlockQuote) holding inline spans (Text and the styled spans
Bold, Italic, Underline, Strike, Highlight, Code and Link). Renderers walk it
with ``NodeVisitor`` subclasses.

"""

from ftml.ast.builder import DocumentBuilder
from ftml.ast.nodes import (
    BLOCK_NODES,
    INLINE_NODES,
    STYLE_NODES,
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
    Styled,
    Text,
    Underline,
    get_node_children,
)
from ftml.ast.utils import extract_text, iter_links, normalize_href, walk
from ftml.ast.visitors import NodeVisitor

__all__ = [
    "BLOCK_NODES",
    "INLINE_NODES",
    "STYLE_NODES",
    "BlockQuote",
    "Bold",
    "Code",
    "Document",
    "DocumentBuilder",
    "Heading",
    "Highlight",
    "Italic",
    "Link",
    "List",
    "ListItem",
    "Node",
    "NodeVisitor",
    "Paragraph",
    "SourceLocation",
    "Strike",
    "Styled",
    "Text",
    "Underline",
    "extract_text",
    "get_node_children",
    "iter_links",
    "normalize_href",
    "walk",
]
