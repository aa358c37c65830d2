#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/ftml/constants.py
"""Constants shared by the ftml parser and renderers.

This module holds the tag tables of the markup language, terminal styles
and the default values used by the option dataclasses.

"""

from __future__ import annotations

from typing import Literal

from rich.style import Style

# =============================================================================
# Type Definitions
# =============================================================================

LinkIndexFormat = Literal["superscript", "bracketed"]
InputFormat = Literal["ftml", "html", "outline"]
OutputFormat = Literal["ftml", "outline", "ansi", "ascii"]

# =============================================================================
# Markup language
# =============================================================================

HEADING_TAGS: dict[str, int] = {"h1": 1, "h2": 2, "h3": 3}
LIST_TAGS = frozenset({"ul", "ol"})
LEAF_BLOCK_TAGS = frozenset({"p", *HEADING_TAGS})
CONTAINER_TAGS = frozenset({"blockquote", "li", *LIST_TAGS})
BLOCK_TAGS = LEAF_BLOCK_TAGS | CONTAINER_TAGS
INLINE_TAGS = frozenset({"b", "i", "u", "s", "mark", "code", "a"})
ALLOWED_TAGS = BLOCK_TAGS | INLINE_TAGS

# Whitespace that the parser collapses; NBSP and other Unicode spaces are content
MARKUP_WHITESPACE = " \t\n\r\f"

# Characters written as named references by the markup writer
NAMED_TEXT_ESCAPES: dict[str, str] = {
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    "\u00a0": "&nbsp;",
    "\u2005": "&emsp14;",
}

# =============================================================================
# Terminal rendering
# =============================================================================

DEFAULT_WRAP_WIDTH = 72
DEFAULT_QUOTE_PREFIX = "| "
DEFAULT_BULLET = "-"
DEFAULT_LINK_INDEX_FORMAT: LinkIndexFormat = "superscript"

# rich styles keyed by style name; combined per run of text
ANSI_STYLES: dict[str, Style] = {
    "bold": Style(bold=True),
    "italic": Style(italic=True),
    "underline": Style(underline=True),
    "strike": Style(strike=True),
    "highlight": Style(reverse=True),
    "code": Style(color="cyan"),
}

# Plain-text equivalents; styles missing here render without markers
ASCII_MARKERS: dict[str, tuple[str, str]] = {
    "bold": ("*", "*"),
    "italic": ("_", "_"),
    "code": ("`", "`"),
}

SUPERSCRIPT_DIGITS = str.maketrans("0123456789", "⁰¹²³⁴⁵⁶⁷⁸⁹")

MAILTO_PREFIX = "mailto:"

# =============================================================================
# Outline export
# =============================================================================

OUTLINE_ALWAYS_ESCAPE = "\\`*{}[]"
OUTLINE_HARD_BREAK = "\\\n"
# Characters kept unescaped in outline link destinations
OUTLINE_URL_SAFE = "/:?#[]@!$&'*+,;=%~-._"
