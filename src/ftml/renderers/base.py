#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/ftml/renderers/base.py
"""Base classes for AST renderers.

This module defines the abstract base class that all renderers inherit
from. Renderers produce their output as a sequence of text chunks (one per
top-level block, plus any trailer) so that ``render`` can hand each chunk to
the caller's sink as soon as it is ready.

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterator

from ftml.ast import Document
from ftml.ast.nodes import Node
from ftml.exceptions import InvalidOptionsError
from ftml.options.base import BaseRendererOptions
from ftml.utils.io_utils import OutputSink, write_content


class BaseRenderer(ABC):
    """Abstract base class for all AST renderers.

    Subclasses implement ``iter_render``; ``render`` and ``render_to_string``
    are built on top of it.

    Parameters
    ----------
    options : BaseRendererOptions or None, default = None
        Format-specific rendering options

    Examples
    --------
    Creating a custom renderer:

        >>> class MyCustomRenderer(BaseRenderer):
        ...     def iter_render(self, doc):
        ...         yield "rendered output"

    """

    def __init__(self, options: BaseRendererOptions | None = None):
        """Initialize the renderer with optional configuration."""
        self.options = options

    @abstractmethod
    def iter_render(self, doc: Document) -> Iterator[str]:
        """Yield the rendered document as successive text chunks.

        Parameters
        ----------
        doc : Document
            AST Document node to render

        Yields
        ------
        str
            The next piece of output

        """
        pass

    def render(self, doc: Document, output: OutputSink) -> None:
        """Render the AST to a caller-supplied sink.

        Each chunk is written as soon as it is produced. Exceptions raised by
        the sink propagate unchanged and stop rendering.

        Parameters
        ----------
        doc : Document
            AST Document node to render
        output : IO[str] or IO[bytes]
            Destination stream; binary streams receive UTF-8

        """
        for chunk in self.iter_render(doc):
            self.write_text_output(chunk, output)

    def render_to_string(self, doc: Document) -> str:
        """Render the AST to a string.

        Parameters
        ----------
        doc : Document
            AST Document node to render

        Returns
        -------
        str
            Rendered document as a string

        """
        return "".join(self.iter_render(doc))

    @staticmethod
    def _validate_options_type(options: BaseRendererOptions | None, expected_type: type, renderer_name: str) -> None:
        """Validate that options are of the correct type for this renderer.

        Parameters
        ----------
        options : BaseRendererOptions or None
            The options object to validate
        expected_type : type
            The expected options class type
        renderer_name : str
            Name of the renderer (for error messages)

        Raises
        ------
        InvalidOptionsError
            If options are not None and not an instance of expected_type

        """
        if options is not None and not isinstance(options, expected_type):
            raise InvalidOptionsError(
                converter_name=renderer_name,
                expected_type=expected_type,
                received_type=type(options),
            )

    @staticmethod
    def write_text_output(text: str, output: OutputSink) -> None:
        """Write text output to a text or binary stream.

        Parameters
        ----------
        text : str
            Rendered text to write
        output : IO[str] or IO[bytes]
            Output destination

        """
        write_content(text, output)


class InlineContentMixin:
    """Mixin providing the inline capture pattern for text-based renderers.

    The implementing class must have a ``_output`` attribute (list[str]) and
    visitor methods that append to it.
    """

    _output: list[str]

    def _render_inline_content(self, content: list[Node]) -> str:
        """Render a list of inline nodes to text.

        Parameters
        ----------
        content : list of Node
            Inline nodes to render

        Returns
        -------
        str
            Rendered inline content as a string

        """
        saved_output = self._output
        self._output = []
        for node in content:
            node.accept(self)
        result = "".join(self._output)
        self._output = saved_output
        return result
