"""Renderers converting the ftml AST to text."""

from ftml.renderers.base import BaseRenderer, InlineContentMixin
from ftml.renderers.ftml import FtmlRenderer
from ftml.renderers.outline import OutlineRenderer
from ftml.renderers.terminal import TerminalRenderer

__all__ = ["BaseRenderer", "FtmlRenderer", "InlineContentMixin", "OutlineRenderer", "TerminalRenderer"]
