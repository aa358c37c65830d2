#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/ftml/parsers/base.py
"""Base classes for document parsers.

This module defines the abstract base class that all parsers inherit from.
A parser turns some input representation into the ftml AST.

"""

from __future__ import annotations

from abc import ABC, abstractmethod

from ftml.ast import Document
from ftml.exceptions import InvalidOptionsError
from ftml.options.base import BaseParserOptions
from ftml.utils.io_utils import SourceInput


class BaseParser(ABC):
    """Abstract base class for all document parsers.

    Parameters
    ----------
    options : BaseParserOptions or None, default = None
        Format-specific parsing options

    Examples
    --------
    Creating a custom parser:

        >>> class MyCustomParser(BaseParser):
        ...     def parse(self, input_data):
        ...         return Document()

    """

    def __init__(self, options: BaseParserOptions | None = None):
        """Initialize the parser with optional configuration."""
        self.options = options

    @staticmethod
    def _validate_options_type(options: BaseParserOptions | None, expected_type: type, parser_name: str) -> None:
        """Validate that options are of the correct type for this parser.

        Parameters
        ----------
        options : BaseParserOptions or None
            The options object to validate
        expected_type : type
            The expected options class type
        parser_name : str
            Name of the parser (for error messages)

        Raises
        ------
        InvalidOptionsError
            If options are not None and not an instance of expected_type

        """
        if options is not None and not isinstance(options, expected_type):
            raise InvalidOptionsError(
                converter_name=parser_name,
                expected_type=expected_type,
                received_type=type(options),
            )

    @abstractmethod
    def parse(self, input_data: SourceInput) -> Document:
        """Parse the input into an AST Document.

        Parameters
        ----------
        input_data : str, bytes, IO[str] or IO[bytes]
            Document content or a readable stream

        Returns
        -------
        Document
            The parsed document

        """
        pass
