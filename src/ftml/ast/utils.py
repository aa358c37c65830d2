#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/ftml/ast/utils.py
"""Traversal and normalization helpers for the FTML AST.

The whitespace helpers here implement the collapsing rule shared by the
strict parser and the HTML importer: inside a block's inline flow, runs of
collapsible whitespace become a single space, spaces at the edges of the flow
are trimmed, and text inside ``Code`` is left alone.

"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterator, Sequence, Union

from ftml.ast.nodes import Code, Link, Node, Styled, Text, get_node_children
from ftml.constants import MAILTO_PREFIX, MARKUP_WHITESPACE

_WS_CLASS = re.escape(MARKUP_WHITESPACE)
WHITESPACE_SPLIT_PATTERN = re.compile(rf"[{_WS_CLASS}]+|[^{_WS_CLASS}]+")


@dataclass
class SoftSpace(Text):
    """A single space standing for a run of collapsible source whitespace.

    Soft spaces only live while a block's inline flow is being normalized.
    ``drop_soft_whitespace`` decides which of them survive and
    ``merge_adjacent_text`` turns the survivors into plain Text.
    """

    content: str = " "


def walk(node: Node) -> Iterator[Node]:
    """Yield ``node`` and all of its descendants in document order."""
    yield node
    for child in get_node_children(node):
        yield from walk(child)


def iter_links(node: Node) -> Iterator[Link]:
    """Yield every Link under ``node`` in traversal order."""
    for descendant in walk(node):
        if isinstance(descendant, Link):
            yield descendant


def extract_text(nodes: Union[Node, Sequence[Node]]) -> str:
    """Concatenate the text of inline nodes, ignoring all styling.

    Parameters
    ----------
    nodes : Node or sequence of Node
        A single node or a list of inline nodes

    Returns
    -------
    str
        The visible text

    Examples
    --------
    >>> extract_text([Text("Hello "), Bold(content=[Text("world")])])
    'Hello world'

    """
    if isinstance(nodes, Node):
        nodes = [nodes]
    parts: list[str] = []
    for node in nodes:
        for descendant in walk(node):
            if isinstance(descendant, Text):
                parts.append(descendant.content)
    return "".join(parts)


def normalize_href(url: str) -> str:
    """Return the display form of a link target.

    Surrounding whitespace is stripped and a ``mailto:`` scheme is dropped, so
    ``mailto:a@b.com`` displays as ``a@b.com``.
    """
    href = url.strip()
    if href.startswith(MAILTO_PREFIX):
        return href[len(MAILTO_PREFIX) :]
    return href


def link_visible_text(link: Link) -> str:
    """Return the text a reader sees for ``link``.

    Links without any visible text show their normalized target instead.
    """
    text = extract_text(link.content)
    return text if text else normalize_href(link.url)


def is_self_describing_mailto(link: Link) -> bool:
    """Whether ``link`` is a ``mailto:`` link whose text is the address itself."""
    href = link.url.strip()
    if not href.startswith(MAILTO_PREFIX):
        return False
    return href[len(MAILTO_PREFIX) :] == link_visible_text(link)


class _FlowState:
    """Running state of a whitespace pass over one inline flow."""

    def __init__(self) -> None:
        self.at_start = True
        self.after_space = False
        self.trailing: tuple[list[Node], Node] | None = None


def drop_soft_whitespace(content: list[Node]) -> list[Node]:
    """Remove collapsible spaces that the whitespace rule does not keep.

    A ``SoftSpace`` is dropped at the start of the flow, directly after
    another kept soft space, or when no content follows it. Every other node
    is kept; empty Text nodes are removed.

    Parameters
    ----------
    content : list of Node
        Inline content of one block, possibly nested in styled spans

    Returns
    -------
    list of Node
        The pruned content; styled spans are pruned in place

    """
    state = _FlowState()

    def prune(nodes: list[Node]) -> list[Node]:
        kept: list[Node] = []
        for node in nodes:
            if isinstance(node, Text):
                if isinstance(node, SoftSpace):
                    if state.at_start or state.after_space:
                        continue
                    state.after_space = True
                    kept.append(node)
                    state.trailing = (kept, node)
                elif node.content:
                    state.at_start = False
                    state.after_space = False
                    state.trailing = None
                    kept.append(node)
            elif isinstance(node, Styled):
                node.content = prune(node.content)
                kept.append(node)
            else:
                kept.append(node)
        return kept

    result = prune(content)
    if state.trailing is not None:
        owner, trailing = state.trailing
        # identity, not equality: earlier kept soft spaces compare equal
        owner[:] = [node for node in owner if node is not trailing]
    return result


def merge_adjacent_text(content: list[Node]) -> list[Node]:
    """Merge neighbouring Text siblings, recursing into styled spans.

    Surviving soft spaces come out as plain Text.
    """
    merged: list[Node] = []
    for node in content:
        if isinstance(node, Styled):
            node.content = merge_adjacent_text(node.content)
        elif isinstance(node, SoftSpace):
            node = Text(node.content, source_location=node.source_location)
        if isinstance(node, Text) and merged and isinstance(merged[-1], Text):
            previous = merged[-1]
            merged[-1] = Text(previous.content + node.content, source_location=previous.source_location)
        else:
            merged.append(node)
    return merged


def collapse_inline_whitespace(content: list[Node]) -> list[Node]:
    """Normalize whitespace in a block's inline content.

    Used for trees whose text did not come from the strict parser (the HTML
    importer, hand-built fixtures). Every whitespace run outside ``Code``
    collapses to one space, runs at the flow edges are trimmed, and adjacent
    Text nodes are merged.

    Parameters
    ----------
    content : list of Node
        Inline nodes of one paragraph or heading

    Returns
    -------
    list of Node
        Normalized inline nodes

    """

    def split(nodes: list[Node], in_code: bool) -> list[Node]:
        pieces: list[Node] = []
        for node in nodes:
            if isinstance(node, Text) and not in_code:
                for match in WHITESPACE_SPLIT_PATTERN.finditer(node.content):
                    if match.group()[0] in MARKUP_WHITESPACE:
                        pieces.append(SoftSpace())
                    else:
                        pieces.append(Text(match.group()))
            elif isinstance(node, Styled):
                node.content = split(node.content, in_code or isinstance(node, Code))
                pieces.append(node)
            else:
                pieces.append(node)
        return pieces

    return merge_adjacent_text(drop_soft_whitespace(split(content, False)))
