#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/ftml/options/outline.py
"""Configuration options for importing outline (Markdown-like) text."""

from __future__ import annotations

from dataclasses import dataclass, field

from ftml.options.base import BaseParserOptions


@dataclass(frozen=True)
class OutlineImportOptions(BaseParserOptions):
    """Options for the outline importer.

    Parameters
    ----------
    parse_strikethrough : bool, default True
        Read ``~~text~~`` as strike-through.
    parse_highlight : bool, default False
        Read ``==text==`` as highlighted. The outline exporter writes
        highlighting as ``<mark>`` and does not escape ``=``, so this is off
        unless the input comes from elsewhere.

    """

    parse_strikethrough: bool = field(
        default=True,
        metadata={"help": "Read ~~text~~ as strike-through", "importance": "advanced"},
    )
    parse_highlight: bool = field(
        default=False,
        metadata={"help": "Read ==text== as highlighted", "importance": "advanced"},
    )
