"""Pytest configuration and shared fixtures for the ftml test suite.

This module provides shared fixtures, test configuration, and markers that
are used across the entire test suite.
"""

import logging
import os

import pytest
from hypothesis import Phase, Verbosity, settings

from ftml.ast.builder import a, b, code, h1, h2, i, li, ol, p, quote, ul
from ftml.ast.nodes import Document

# Register custom Hypothesis profiles
settings.register_profile("ci", max_examples=200, verbosity=Verbosity.verbose)
settings.register_profile("dev", max_examples=50)
settings.register_profile(
    "debug", max_examples=10, verbosity=Verbosity.verbose, phases=[Phase.explicit, Phase.reuse, Phase.generate]
)
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "e2e: End-to-end tests - full pipeline tests")
    config.addinivalue_line("markers", "slow: Slow tests that may take several seconds")
    config.addinivalue_line("markers", "cli: Tests related to command-line interface")


@pytest.fixture
def sample_markup() -> str:
    """Provide a document exercising every element kind.

    Returns
    -------
    str
        FTML source with headings, lists, a quote and all inline styles.

    """
    return """<h1>Release notes</h1>
<h2>Highlights</h2>
<p>This release is <b>faster</b>, <i>smaller</i> and <u>safer</u>.
  Old flags are <s>gone</s>; see <mark>below</mark>.</p>
<ul>
  <li><p>Run <code>make  test</code> first</p></li>
  <li>
    <p>Read the <a href="https://example.com/docs">docs</a></p>
    <blockquote><p>Quoted advice</p></blockquote>
  </li>
</ul>
<ol><li><p>One</p></li><li><p>Two</p></li></ol>
"""


@pytest.fixture
def sample_document() -> Document:
    """Provide a document built with the builder helpers.

    Returns
    -------
    Document
        Document with a heading, a styled paragraph, nested lists and a quote.

    """
    return Document(
        children=[
            h1("Title"),
            h2("Section"),
            p("Plain ", b("bold"), " and ", i("italic"), " with ", code("x = 1"), "."),
            ul(li(p("First")), li(p("Second"), ol(li(p("Nested"))))),
            quote(p("See ", a("https://example.com", "the site"), ".")),
        ]
    )


@pytest.fixture
def restore_package_logger():
    """Undo the handler changes configure_logging makes to the ftml logger."""
    package_logger = logging.getLogger("ftml")
    handlers, level, propagate = list(package_logger.handlers), package_logger.level, package_logger.propagate
    yield package_logger
    for handler in package_logger.handlers:
        if handler not in handlers:
            handler.close()
    package_logger.handlers[:] = handlers
    package_logger.setLevel(level)
    package_logger.propagate = propagate
