"""Heuristic extraction of business profiles from page markup."""

from siteintel.extraction.extractor import ProfileExtractor, extract_profile
from siteintel.extraction.rules import INDUSTRY_RULES, KeywordRule, RuleTable

__all__ = [
    "INDUSTRY_RULES",
    "KeywordRule",
    "ProfileExtractor",
    "RuleTable",
    "extract_profile",
]
