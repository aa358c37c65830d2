#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/ftml/ast/visitors.py
"""Visitor pattern implementation for AST traversal.

This module provides the visitor base class for traversing and processing
AST nodes. Every ``visit_*`` method is abstract, so a renderer that forgets
a node type cannot be instantiated: the set of node kinds is closed and each
visitor must handle all of them.

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

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
    get_node_children,
)


class NodeVisitor(ABC):
    """Abstract base class for AST node visitors.

    Subclasses implement one ``visit_*`` method per node type. Nodes call
    back into the visitor through ``node.accept(visitor)``.

    Examples
    --------
    Visitor that counts text characters:

        >>> class CharCounter(NodeVisitor):
        ...     def __init__(self):
        ...         self.count = 0
        ...     def visit_text(self, node):
        ...         self.count += len(node.content)
        ...     # ... remaining visit_* methods call self.generic_visit(node)

    """

    @abstractmethod
    def visit_document(self, node: Document) -> Any:
        """Visit a Document node."""

    @abstractmethod
    def visit_paragraph(self, node: Paragraph) -> Any:
        """Visit a Paragraph node."""

    @abstractmethod
    def visit_heading(self, node: Heading) -> Any:
        """Visit a Heading node."""

    @abstractmethod
    def visit_list(self, node: List) -> Any:
        """Visit a List node."""

    @abstractmethod
    def visit_list_item(self, node: ListItem) -> Any:
        """Visit a ListItem node."""

    @abstractmethod
    def visit_block_quote(self, node: BlockQuote) -> Any:
        """Visit a BlockQuote node."""

    @abstractmethod
    def visit_text(self, node: Text) -> Any:
        """Visit a Text node."""

    @abstractmethod
    def visit_bold(self, node: Bold) -> Any:
        """Visit a Bold node."""

    @abstractmethod
    def visit_italic(self, node: Italic) -> Any:
        """Visit an Italic node."""

    @abstractmethod
    def visit_underline(self, node: Underline) -> Any:
        """Visit an Underline node."""

    @abstractmethod
    def visit_strike(self, node: Strike) -> Any:
        """Visit a Strike node."""

    @abstractmethod
    def visit_highlight(self, node: Highlight) -> Any:
        """Visit a Highlight node."""

    @abstractmethod
    def visit_code(self, node: Code) -> Any:
        """Visit a Code node."""

    @abstractmethod
    def visit_link(self, node: Link) -> Any:
        """Visit a Link node."""

    def generic_visit(self, node: Node) -> None:
        """Visit every child of ``node`` in order.

        Parameters
        ----------
        node : Node
            Node whose children should be visited

        """
        for child in get_node_children(node):
            child.accept(self)
