"""Parsers producing the ftml AST."""

from ftml.parsers.base import BaseParser
from ftml.parsers.ftml import FtmlParser
from ftml.parsers.html import HtmlImporter
from ftml.parsers.outline import OutlineImporter

__all__ = ["BaseParser", "FtmlParser", "HtmlImporter", "OutlineImporter"]
