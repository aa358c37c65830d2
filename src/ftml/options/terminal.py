#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/ftml/options/terminal.py
"""Configuration for the terminal renderer.

``FormattingStyle`` is always passed to the renderer explicitly; there is no
process-wide default that could change output between calls.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import get_args

from ftml.constants import (
    DEFAULT_BULLET,
    DEFAULT_LINK_INDEX_FORMAT,
    DEFAULT_QUOTE_PREFIX,
    DEFAULT_WRAP_WIDTH,
    LinkIndexFormat,
)
from ftml.exceptions import ValidationError
from ftml.options.base import BaseRendererOptions


@dataclass(frozen=True)
class FormattingStyle(BaseRendererOptions):
    """Rendering configuration for terminal output.

    Parameters
    ----------
    ansi : bool, default False
        Emit ANSI SGR styling and OSC-8 hyperlinks instead of plain ASCII
        markers with link footnotes.
    width : int, default 72
        Wrap column including indentation prefixes; 0 disables wrapping.
    link_index_format : {"superscript", "bracketed"}, default "superscript"
        How ASCII mode marks links that get a footnote.
    quote_prefix : str, default "| "
        Prefix written before every line of a block quote.
    bullet : str, default "-"
        Marker for unordered list items.

    Examples
    --------
    >>> style = FormattingStyle(ansi=True, width=80)
    >>> narrow = style.create_updated(width=40)

    """

    ansi: bool = field(
        default=False,
        metadata={"help": "Render with ANSI escape sequences and clickable links", "importance": "core"},
    )
    width: int = field(
        default=DEFAULT_WRAP_WIDTH,
        metadata={"help": "Wrap column (0 disables wrapping)", "type": int, "importance": "core"},
    )
    link_index_format: LinkIndexFormat = field(
        default=DEFAULT_LINK_INDEX_FORMAT,
        metadata={
            "help": "Footnote marker style for links in ASCII mode",
            "choices": list(get_args(LinkIndexFormat)),
            "importance": "core",
        },
    )
    quote_prefix: str = field(
        default=DEFAULT_QUOTE_PREFIX,
        metadata={"help": "Prefix for block quote lines", "importance": "advanced"},
    )
    bullet: str = field(
        default=DEFAULT_BULLET,
        metadata={"help": "Marker for unordered list items", "importance": "advanced"},
    )

    def __post_init__(self) -> None:
        """Validate option values."""
        if not isinstance(self.width, int) or self.width < 0:
            raise ValidationError(
                f"width must be a non-negative integer, got {self.width!r}",
                parameter_name="width",
                parameter_value=self.width,
            )
        if self.link_index_format not in get_args(LinkIndexFormat):
            raise ValidationError(
                f"link_index_format must be one of {get_args(LinkIndexFormat)}, got {self.link_index_format!r}",
                parameter_name="link_index_format",
                parameter_value=self.link_index_format,
            )
