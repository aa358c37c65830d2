"""ftml - a strict HTML5-subset format for short formatted text.

ftml reads FTML markup into a small document tree, writes it back in a
canonical form, exports it to outline (Markdown-like) text and renders it for
terminals, either with ANSI styling and clickable links or as plain ASCII with
numbered link footnotes. General HTML and outline text can be imported on a
best-effort basis.

Examples
--------
Parse and normalize markup:

    >>> from ftml import parse, write_markup
    >>> write_markup(parse("<p>Hello   <b>world</b>!</p>"))
    '<p>Hello <b>world</b>!</p>\\n'

Render for a terminal:

    >>> from ftml import FormattingStyle, render_terminal
    >>> doc = parse('<p>See <a href="https://example.com">docs</a></p>')
    >>> print(render_terminal(doc, FormattingStyle(link_index_format="bracketed")), end="")
    See docs[1]
    <BLANKLINE>
    [1] https://example.com

Build a document in code:

    >>> from ftml.ast.builder import b, p
    >>> from ftml import Document, write_outline
    >>> write_outline(Document(children=[p("Hello ", b("world"))]))
    'Hello **world**\\n'

See Also
--------
ftml.ast : document tree node definitions and helpers
ftml.cli : command-line interface

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

from ftml.api import convert, import_html, import_outline, parse, render_terminal, write_markup, write_outline
from ftml.ast import (
    BlockQuote,
    Bold,
    Code,
    Document,
    DocumentBuilder,
    Heading,
    Highlight,
    Italic,
    Link,
    List,
    ListItem,
    Node,
    NodeVisitor,
    Paragraph,
    SourceLocation,
    Strike,
    Text,
    Underline,
)
from ftml.exceptions import (
    DisallowedElementError,
    EncodingError,
    FtmlError,
    InvalidAttributeError,
    InvalidOptionsError,
    ParseError,
    UnclosedElementError,
    UnexpectedTokenError,
    ValidationError,
)
from ftml.options import FormattingStyle, HtmlImportOptions, OutlineImportOptions

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # API
    "convert",
    "import_html",
    "import_outline",
    "parse",
    "render_terminal",
    "write_markup",
    "write_outline",
    # Options
    "FormattingStyle",
    "HtmlImportOptions",
    "OutlineImportOptions",
    # Nodes
    "BlockQuote",
    "Bold",
    "Code",
    "Document",
    "DocumentBuilder",
    "Heading",
    "Highlight",
    "Italic",
    "Link",
    "List",
    "ListItem",
    "Node",
    "NodeVisitor",
    "Paragraph",
    "SourceLocation",
    "Strike",
    "Text",
    "Underline",
    # Exceptions
    "DisallowedElementError",
    "EncodingError",
    "FtmlError",
    "InvalidAttributeError",
    "InvalidOptionsError",
    "ParseError",
    "UnclosedElementError",
    "UnexpectedTokenError",
    "ValidationError",
]
