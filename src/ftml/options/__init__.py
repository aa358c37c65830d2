"""Option dataclasses for ftml parsers and renderers."""

from ftml.options.base import BaseParserOptions, BaseRendererOptions, CloneFrozenMixin
from ftml.options.html import HtmlImportOptions
from ftml.options.outline import OutlineImportOptions
from ftml.options.terminal import FormattingStyle

__all__ = [
    "BaseParserOptions",
    "BaseRendererOptions",
    "CloneFrozenMixin",
    "FormattingStyle",
    "HtmlImportOptions",
    "OutlineImportOptions",
]
