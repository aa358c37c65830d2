#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/ftml/logging_utils.py
"""Logging set-up for the ftml command-line front end.

Library modules only create ``logging.getLogger(__name__)`` loggers under the
``ftml`` namespace and never configure anything. The CLI calls
``configure_logging``, which attaches handlers to the ``ftml`` logger alone:
the root logger and handlers installed by an embedding application are left
untouched, and ftml records do not propagate to them.

"""

from __future__ import annotations

import logging
import sys
from typing import IO, Optional

from ftml.exceptions import ValidationError

PACKAGE_LOGGER = "ftml"

SIMPLE_FORMAT = "%(levelname)s: %(message)s"
TRACE_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s:%(lineno)d] %(message)s"
TRACE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# marks the handlers configure_logging owns, so a second call replaces them
_OWNED_ATTR = "_ftml_cli_handler"


def resolve_level(log_level: int | str) -> int:
    """Turn a level number or name into a level number.

    Raises
    ------
    ValidationError
        For a name the logging module does not know

    """
    if isinstance(log_level, int):
        return log_level
    resolved = logging.getLevelName(str(log_level).upper())
    if not isinstance(resolved, int):
        raise ValidationError(
            f"Unknown log level: {log_level!r}", parameter_name="log_level", parameter_value=log_level
        )
    return resolved


def _own(handler: logging.Handler, level: int, formatter: logging.Formatter) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(formatter)
    setattr(handler, _OWNED_ATTR, True)
    return handler


def configure_logging(
    log_level: int | str,
    log_file: Optional[str] = None,
    trace_mode: bool = False,
    stream: Optional[IO[str]] = None,
) -> logging.Logger:
    """Route ftml log records to stderr and, optionally, a file.

    Parameters
    ----------
    log_level : int | str
        Numeric logging level or level name (e.g., "INFO").
    log_file : str, optional
        Path of a file that receives the same records.
    trace_mode : bool, default False
        Emit timestamps, logger names and line numbers.
    stream : IO[str], optional
        Console stream; standard error by default, because standard output
        carries the converted document.

    Returns
    -------
    logging.Logger
        The configured ``ftml`` logger.

    """
    level = resolve_level(log_level)
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(level)
    package_logger.propagate = False

    for handler in list(package_logger.handlers):
        if getattr(handler, _OWNED_ATTR, False):
            package_logger.removeHandler(handler)
            handler.close()

    if trace_mode:
        formatter = logging.Formatter(TRACE_FORMAT, datefmt=TRACE_DATE_FORMAT)
    else:
        formatter = logging.Formatter(SIMPLE_FORMAT)

    package_logger.addHandler(_own(logging.StreamHandler(stream or sys.stderr), level, formatter))

    if log_file:
        try:
            file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        except OSError as exc:
            package_logger.warning("Could not create log file %s: %s", log_file, exc)
        else:
            package_logger.addHandler(_own(file_handler, level, formatter))
            package_logger.info("Logging to file: %s", log_file)

    return package_logger
