"""Command-line interface for the ftml toolkit.

The CLI is a thin wrapper over ``ftml.api.convert``. It reads one document
from a file or standard input, converts it to the requested format and
writes the result to standard output or a file. Formats are always chosen
explicitly; nothing is inferred from file extensions.

Examples
--------
Check and normalize a document:
    $ ftml notes.ftml

Export to outline text:
    $ ftml notes.ftml --to outline --out notes.md

View in the terminal with styling and clickable links:
    $ ftml notes.ftml --to ansi --width 100

Import an HTML page:
    $ curl -s https://example.com | ftml --from html --base-url https://example.com --to ascii

Read outline text back into markup:
    $ ftml notes.md --from outline
"""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import fields
from typing import IO, Optional, get_args

from ftml.api import convert
from ftml.constants import InputFormat, LinkIndexFormat, OutputFormat
from ftml.exceptions import FtmlError, ParseError
from ftml.logging_utils import configure_logging
from ftml.options.html import HtmlImportOptions
from ftml.options.outline import OutlineImportOptions
from ftml.options.terminal import FormattingStyle

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_PARSE_ERROR = 2


def _field_help(options_class: type, name: str) -> str:
    """Return the ``help`` metadata of an options dataclass field."""
    for option_field in fields(options_class):
        if option_field.name == name:
            return option_field.metadata.get("help", "")
    return ""


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser.

    Returns
    -------
    argparse.ArgumentParser
        Configured parser

    """
    parser = argparse.ArgumentParser(
        prog="ftml",
        description="Parse, normalize, export and render FTML documents.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__.split("Examples\n--------\n", 1)[1] if __doc__ else None,
    )
    parser.add_argument("input", nargs="?", default="-", help="Input file (default: standard input)")
    parser.add_argument(
        "--from",
        dest="source_format",
        choices=get_args(InputFormat),
        default="ftml",
        help="Input format (default: ftml)",
    )
    parser.add_argument(
        "--to",
        dest="target_format",
        choices=get_args(OutputFormat),
        default="ftml",
        help="Output format (default: ftml)",
    )
    parser.add_argument("--out", "-o", help="Output file (default: standard output)")

    terminal_group = parser.add_argument_group("terminal rendering")
    terminal_group.add_argument(
        "--width", type=int, default=FormattingStyle.width, help=_field_help(FormattingStyle, "width")
    )
    terminal_group.add_argument(
        "--link-index",
        dest="link_index_format",
        choices=get_args(LinkIndexFormat),
        default=FormattingStyle.link_index_format,
        help=_field_help(FormattingStyle, "link_index_format"),
    )
    terminal_group.add_argument(
        "--quote-prefix", default=FormattingStyle.quote_prefix, help=_field_help(FormattingStyle, "quote_prefix")
    )
    terminal_group.add_argument("--bullet", default=FormattingStyle.bullet, help=_field_help(FormattingStyle, "bullet"))

    html_group = parser.add_argument_group("HTML import")
    html_group.add_argument("--base-url", help=_field_help(HtmlImportOptions, "base_url"))

    outline_group = parser.add_argument_group("outline import")
    outline_group.add_argument(
        "--no-strikethrough",
        dest="parse_strikethrough",
        action="store_false",
        help="Read ~~text~~ literally instead of as strike-through",
    )
    outline_group.add_argument(
        "--highlight-syntax",
        dest="parse_highlight",
        action="store_true",
        help=_field_help(OutlineImportOptions, "parse_highlight"),
    )

    logging_group = parser.add_argument_group("logging")
    logging_group.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level (default: WARNING)",
    )
    logging_group.add_argument("--log-file", help="Also write log records to this file")
    logging_group.add_argument("--verbose", "-v", action="store_true", help="Shortcut for --log-level DEBUG")
    logging_group.add_argument("--trace", action="store_true", help="Debug logging with timestamps and logger names")
    return parser


def _setup_logging_level(parsed_args: argparse.Namespace) -> None:
    """Set up logging level based on command-line arguments.

    Parameters
    ----------
    parsed_args : argparse.Namespace
        Parsed command-line arguments

    """
    # --trace takes highest precedence, then --verbose, then --log-level
    if parsed_args.trace:
        log_level = logging.DEBUG
    elif parsed_args.verbose and parsed_args.log_level == "WARNING":
        log_level = logging.DEBUG
    else:
        log_level = getattr(logging, parsed_args.log_level.upper())

    configure_logging(log_level, log_file=parsed_args.log_file, trace_mode=parsed_args.trace)


def _read_input(path: str) -> bytes:
    if path == "-":
        return sys.stdin.buffer.read()
    with open(path, "rb") as handle:
        return handle.read()


def _write_output(result: str, path: Optional[str], stdout: IO[str]) -> None:
    if path is None:
        stdout.write(result)
        stdout.flush()
        return
    with open(path, "w", encoding="utf-8", newline="") as handle:
        handle.write(result)


def main(args: list[str] | None = None) -> int:
    """Run the command-line interface.

    Parameters
    ----------
    args : list of str, optional
        Arguments to parse instead of ``sys.argv[1:]``

    Returns
    -------
    int
        Process exit code

    """
    parser = create_parser()
    parsed_args = parser.parse_args(args)
    _setup_logging_level(parsed_args)

    try:
        style = FormattingStyle(
            width=parsed_args.width,
            link_index_format=parsed_args.link_index_format,
            quote_prefix=parsed_args.quote_prefix,
            bullet=parsed_args.bullet,
        )
        html_options = HtmlImportOptions(base_url=parsed_args.base_url)
        outline_options = OutlineImportOptions(
            parse_strikethrough=parsed_args.parse_strikethrough, parse_highlight=parsed_args.parse_highlight
        )
        source = _read_input(parsed_args.input)
        result = convert(
            source,
            source_format=parsed_args.source_format,
            target_format=parsed_args.target_format,
            style=style,
            html_options=html_options,
            outline_options=outline_options,
        )
        _write_output(result or "", parsed_args.out, sys.stdout)
    except ParseError as e:
        print(f"{parsed_args.input}: {e.kind}: {e}", file=sys.stderr)
        return EXIT_PARSE_ERROR
    except FtmlError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR
    except OSError as e:
        logger.debug("I/O failure", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR

    return EXIT_SUCCESS


if __name__ == "__main__":
    sys.exit(main())
