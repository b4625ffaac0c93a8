"""Ordered keyword rule tables used by the profile extractor."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class KeywordRule:
    """Assigns ``label`` when any keyword occurs in the text."""

    label: str
    keywords: tuple[str, ...]

    def matches(self, text: str) -> bool:
        return any(keyword in text for keyword in self.keywords)


@dataclass(frozen=True)
class RuleTable:
    """
    An ordered, versioned list of keyword rules.

    Rules are tried top to bottom and the first match wins, so the order
    of the table is the tie-break when text mentions several categories.
    """

    version: str
    rules: tuple[KeywordRule, ...]
    default: str

    def classify(self, text: str) -> str:
        """Label for ``text`` (matched case-insensitively), or the default."""
        rule = self.first_match(text)
        return rule.label if rule else self.default

    def first_match(self, text: str) -> Optional[KeywordRule]:
        lowered = text.lower()
        for rule in self.rules:
            if rule.matches(lowered):
                return rule
        return None


INDUSTRY_RULES = RuleTable(
    version="2024.1",
    rules=(
        KeywordRule("Retail", ("retail", "shop", "store")),
        KeywordRule("Technology", ("software", "technology", "digital")),
        KeywordRule("Food & Beverage", ("food", "restaurant", "catering")),
        KeywordRule("Professional Services", ("consult", "advice", "service")),
        KeywordRule("Manufacturing", ("manufacture", "factory", "production")),
    ),
    default="Other",
)
