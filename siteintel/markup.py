"""HTML helpers shared by the acquisition tiers and the extraction engine."""

import re

from bs4 import BeautifulSoup

# Elements whose text is code or CSS rather than page content
NON_CONTENT_TAGS = ("script", "style")

_WHITESPACE = re.compile(r"\s+")


def parse(markup: str) -> BeautifulSoup:
    """Parse markup leniently with the stdlib-backed parser."""
    return BeautifulSoup(markup, "html.parser")


def strip_non_content(markup: str) -> str:
    """Remove ``<script>`` and ``<style>`` elements, including their text."""
    soup = parse(markup)
    for element in soup(NON_CONTENT_TAGS):
        element.decompose()
    return str(soup)


def visible_text(markup: str) -> str:
    """Text of the page with script/style removed and whitespace collapsed."""
    soup = parse(markup)
    for element in soup(NON_CONTENT_TAGS):
        element.decompose()
    return collapse_whitespace(soup.get_text(" "))


def collapse_whitespace(text: str) -> str:
    return _WHITESPACE.sub(" ", text).strip()
