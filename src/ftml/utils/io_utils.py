#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/ftml/utils/io_utils.py
"""I/O utilities for caller-supplied sources and sinks.

The core never opens files itself: parsers receive text, bytes or a readable
stream, and renderers write to a stream the caller owns. These helpers hide
the text/binary distinction of those streams. Exceptions raised by a stream
propagate unchanged.

"""

from __future__ import annotations

import io
from io import BytesIO, StringIO
from typing import IO, Union, cast

SourceInput = Union[str, bytes, bytearray, IO[str], IO[bytes]]
OutputSink = Union[IO[str], IO[bytes]]


def is_binary_stream(stream: IO) -> bool:
    """Decide whether ``stream`` expects bytes rather than str.

    Parameters
    ----------
    stream : IO
        Writable or readable file-like object

    Returns
    -------
    bool
        True for binary streams

    """
    # Concrete types first, then io base classes, then the mode attribute
    if isinstance(stream, BytesIO):
        return True
    if isinstance(stream, StringIO):
        return False
    if isinstance(stream, io.TextIOBase):
        return False
    if isinstance(stream, (io.BufferedIOBase, io.RawIOBase)):
        return True
    mode = getattr(stream, "mode", "")
    return isinstance(mode, str) and "b" in mode


def write_content(content: str, output: OutputSink) -> None:
    """Write text to a caller-supplied sink.

    Binary sinks receive UTF-8 encoded bytes.

    Parameters
    ----------
    content : str
        Text to write
    output : IO[str] or IO[bytes]
        Destination stream

    Raises
    ------
    TypeError
        If ``output`` has no ``write`` method

    Examples
    --------
    >>> buffer = BytesIO()
    >>> write_content("<p>Hi</p>\\n", buffer)
    >>> buffer.getvalue()
    b'<p>Hi</p>\\n'

    """
    if not hasattr(output, "write"):
        raise TypeError(f"Unsupported output type: {type(output)}")

    if is_binary_stream(output):
        cast(IO[bytes], output).write(content.encode("utf-8"))
    else:
        cast(IO[str], output).write(content)


def read_source(input_data: SourceInput) -> Union[str, bytes]:
    """Return the full content of a parser input without decoding it.

    Parameters
    ----------
    input_data : str, bytes, bytearray, IO[str] or IO[bytes]
        Markup text, raw bytes, or a readable stream

    Returns
    -------
    str or bytes
        Text for text input, bytes for binary input

    Raises
    ------
    TypeError
        If the input type is not supported

    """
    if isinstance(input_data, str):
        return input_data
    if isinstance(input_data, (bytes, bytearray)):
        return bytes(input_data)
    if hasattr(input_data, "read"):
        content = input_data.read()
        if isinstance(content, (str, bytes)):
            return content
        raise TypeError(f"Stream returned unsupported content type: {type(content)}")
    raise TypeError(f"Unsupported input type: {type(input_data)}")


__all__ = ["OutputSink", "SourceInput", "is_binary_stream", "read_source", "write_content"]
