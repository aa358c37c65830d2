#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/ftml/exceptions.py
"""Custom exceptions for the ftml library.

This module defines specialized exception classes for the error conditions
that can occur while parsing markup or configuring renderers. Rendering a
well-formed document never raises on its own; exceptions raised by an
output sink are passed through unchanged.

Exception Hierarchy
-------------------
- FtmlError (base exception)

  - ValidationError (parameter/option validation)
    - InvalidOptionsError (wrong options class for a parser or renderer)

  - ParseError (markup input rejected by the strict parser)
    - UnexpectedTokenError (malformed tag, stray text, mismatched end tag)
    - UnclosedElementError (end of input with open elements)
    - DisallowedElementError (unknown tag or tag in the wrong context)
    - InvalidAttributeError (attribute other than ``href`` on ``a``)
    - EncodingError (invalid UTF-8 or character reference)

"""

from __future__ import annotations

from typing import Any, Optional


class FtmlError(Exception):
    """Base exception class for all ftml-specific errors.

    Parameters
    ----------
    message : str
        Human-readable description of the error
    original_error : Exception, optional
        The original exception that caused this error, if applicable

    Attributes
    ----------
    message : str
        The error message
    original_error : Exception or None
        The wrapped original exception, if any

    """

    def __init__(self, message: str, original_error: Exception | None = None):
        """Initialize the error with a message and optional original exception."""
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class ValidationError(FtmlError):
    """Exception raised for invalid input parameters or options.

    Parameters
    ----------
    message : str
        Description of the validation error
    parameter_name : str, optional
        Name of the invalid parameter
    parameter_value : any, optional
        The invalid value that was provided
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(
        self,
        message: str,
        parameter_name: str | None = None,
        parameter_value: Any = None,
        original_error: Exception | None = None,
    ):
        """Initialize the validation error with parameter details."""
        super().__init__(message, original_error=original_error)
        self.parameter_name = parameter_name
        self.parameter_value = parameter_value


class InvalidOptionsError(ValidationError):
    """Exception raised when an options object of the wrong class is supplied.

    Parameters
    ----------
    converter_name : str
        Name of the parser or renderer that received the options
    expected_type : type
        The options class that was expected
    received_type : type
        The class of the object actually received

    """

    def __init__(self, converter_name: str, expected_type: type, received_type: type):
        """Initialize with the offending and expected option types."""
        message = (
            f"{converter_name} expected options of type {expected_type.__name__}, "
            f"got {received_type.__name__}"
        )
        super().__init__(message, parameter_name="options", parameter_value=received_type)
        self.converter_name = converter_name
        self.expected_type = expected_type
        self.received_type = received_type


class ParseError(FtmlError):
    """Base exception for markup the strict parser refuses.

    Every parse error carries the offset of the offending token. For text
    input the offset counts characters; for undecodable byte input it is the
    byte offset of the first invalid byte.

    Parameters
    ----------
    message : str
        Description of the violation
    position : int
        Offset of the offending token
    line : int, optional
        1-based line of ``position``, if known
    column : int, optional
        1-based column of ``position``, if known
    original_error : Exception, optional
        Underlying exception (e.g. ``UnicodeDecodeError``)

    Attributes
    ----------
    kind : str
        Short name of the error category

    """

    kind = "ParseError"

    def __init__(
        self,
        message: str,
        position: int,
        line: Optional[int] = None,
        column: Optional[int] = None,
        original_error: Exception | None = None,
    ):
        """Initialize the parse error with its location."""
        location = f"offset {position}"
        if line is not None and column is not None:
            location = f"line {line}, column {column} (offset {position})"
        super().__init__(f"{message} at {location}", original_error=original_error)
        self.reason = message
        self.position = position
        self.line = line
        self.column = column


class UnexpectedTokenError(ParseError):
    """Raised for malformed tags, stray text, or mismatched end tags."""

    kind = "UnexpectedToken"


class UnclosedElementError(ParseError):
    """Raised when input ends while elements are still open.

    The position is that of the innermost unclosed start tag.
    """

    kind = "UnclosedElement"


class DisallowedElementError(ParseError):
    """Raised for unknown tags and tags used where they may not appear."""

    kind = "DisallowedElement"


class InvalidAttributeError(ParseError):
    """Raised for attributes other than a single ``href`` on ``a``."""

    kind = "InvalidAttribute"


class EncodingError(ParseError):
    """Raised for undecodable input bytes or invalid character references."""

    kind = "EncodingError"
