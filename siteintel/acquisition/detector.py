"""Heuristics for spotting pages that only render their content client-side."""

import logging
from dataclasses import dataclass
from typing import Callable

from bs4 import BeautifulSoup, Tag

from siteintel.markup import parse

logger = logging.getLogger(__name__)


# Bump when a rule is added, removed or reordered
DETECTION_RULES_VERSION = 2

# Elements frameworks mount their application into
MOUNT_SELECTORS = [
    "#root",
    "#app",
    "#__next",  # Next.js
    "#__nuxt",  # Nuxt.js
    "#___gatsby",
    "[data-reactroot]",
    "[ng-app]",
    "[v-app]",
]

# Attributes that only exist until the framework has compiled the template
CLOAK_ATTRIBUTES = ["v-cloak", "ng-cloak"]

EMPTY_CONTAINER_THRESHOLD = 5
LOADING_MARKER = "Loading..."


def _is_empty(element: Tag) -> bool:
    if element.find(True) is not None:
        return False
    return not element.get_text(strip=True)


def _has_empty_mount_container(soup: BeautifulSoup) -> bool:
    for selector in MOUNT_SELECTORS:
        for element in soup.select(selector):
            if _is_empty(element):
                return True
    return False


def _has_cloak_attribute(soup: BeautifulSoup) -> bool:
    return any(soup.find(attrs={attr: True}) is not None for attr in CLOAK_ATTRIBUTES)


def _has_many_empty_containers(soup: BeautifulSoup) -> bool:
    empty = sum(1 for div in soup.find_all("div") if _is_empty(div))
    return empty > EMPTY_CONTAINER_THRESHOLD


def _has_loading_marker(soup: BeautifulSoup) -> bool:
    return LOADING_MARKER in soup.get_text()


@dataclass(frozen=True)
class DetectionRule:
    """A named predicate over parsed markup."""

    name: str
    predicate: Callable[[BeautifulSoup], bool]


# Evaluated in order; any match marks the page as JS-heavy
DETECTION_RULES: tuple[DetectionRule, ...] = (
    DetectionRule("empty-mount-container", _has_empty_mount_container),
    DetectionRule("cloak-attribute", _has_cloak_attribute),
    DetectionRule("empty-containers", _has_many_empty_containers),
    DetectionRule("loading-marker", _has_loading_marker),
)


def detect_signals(
    markup: str,
    rules: tuple[DetectionRule, ...] = DETECTION_RULES,
) -> list[str]:
    """Return the names of every rule that flags ``markup`` as a hollow shell.

    Markup with no content at all is reported as ``empty-document``.
    """
    if not markup or not markup.strip():
        return ["empty-document"]

    soup = parse(markup)
    return [rule.name for rule in rules if rule.predicate(soup)]


def looks_js_heavy(markup: str) -> bool:
    """Best-effort check whether the markup needs a browser to render.

    There is no false-negative guarantee: server-rendered pages that still
    defer most of their content to scripts may pass unflagged.
    """
    return bool(detect_signals(markup))


class JSHeavyDetector:
    """
    Detects JavaScript-heavy pages using an ordered rule table.

    Wraps :func:`detect_signals` so the orchestrator can log why a page
    was escalated and so the rule table can be swapped in tests.
    """

    def __init__(self, rules: tuple[DetectionRule, ...] = DETECTION_RULES):
        self.rules = rules

    def signals(self, markup: str) -> list[str]:
        signals = detect_signals(markup, self.rules)
        if signals:
            logger.debug(f"JS-heavy signals (rules v{DETECTION_RULES_VERSION}): {signals}")
        return signals

    def is_js_heavy(self, markup: str) -> bool:
        return bool(self.signals(markup))
