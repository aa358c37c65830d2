#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/ftml/options/html.py
"""Configuration options for importing general HTML."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from ftml.options.base import BaseParserOptions


@dataclass(frozen=True)
class HtmlImportOptions(BaseParserOptions):
    """Options for the lenient HTML importer.

    Parameters
    ----------
    base_url : str or None, default None
        URL against which relative ``href`` values are resolved.
    parser : str, default "html.parser"
        BeautifulSoup tree builder to use.

    """

    base_url: Optional[str] = field(
        default=None,
        metadata={"help": "Base URL for resolving relative links", "importance": "core"},
    )
    parser: str = field(
        default="html.parser",
        metadata={"help": "BeautifulSoup parser backend", "importance": "advanced"},
    )
