"""Pattern-based extraction of a business profile from raw page markup."""

import html
import logging
import re
from typing import Callable, TypeVar

from siteintel.extraction.rules import INDUSTRY_RULES, RuleTable
from siteintel.markup import collapse_whitespace, strip_non_content, visible_text
from siteintel.models.profile import (
    UNKNOWN_BUSINESS,
    ContactInfo,
    ExtractedProfile,
    ProductStub,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ProfileExtractor:
    """
    Mines a business profile from whatever markup was acquired.

    Stateless and single pass. Each field is extracted on its own and
    falls back to its default if its pattern finds nothing or fails, so
    a profile is always returned once markup exists:
    - Business name from the <title>
    - Description from the meta description
    - Email, phone and street address
    - Product placeholders from h2/h3 headings
    - Industry from an ordered keyword rule table
    """

    TITLE_PATTERN = re.compile(r"<title\b[^>]*>(.*?)</title\s*>", re.IGNORECASE | re.DOTALL)

    META_DESCRIPTION_PATTERNS = [
        re.compile(
            r"<meta\b[^>]*\bname=[\"']description[\"'][^>]*\bcontent=([\"'])(.*?)\1[^>]*>",
            re.IGNORECASE | re.DOTALL,
        ),
        re.compile(
            r"<meta\b[^>]*\bcontent=([\"'])(.*?)\1[^>]*\bname=[\"']description[\"'][^>]*>",
            re.IGNORECASE | re.DOTALL,
        ),
    ]

    EMAIL_PATTERN = re.compile(r"[\w.-]+@[\w.-]+\.\w+")
    IMAGE_EXTENSIONS = (".png", ".jpg", ".jpeg", ".gif", ".svg", ".webp", ".avif", ".ico")

    PHONE_PATTERN = re.compile(
        r"(?<!\d)(?:\+\d{1,3}[ .-]?)?\(?\d{3}\)?[ .-]?\d{3}[ .-]?\d{4}(?!\d)"
    )

    ADDRESS_PATTERN = re.compile(
        r"\d+\s+[A-Za-z0-9\s,]{1,60}?"
        r"\b(?:Avenue|Lane|Road|Boulevard|Drive|Street|Ave|Dr|Rd|Blvd|Ln|St)\b\.?"
        r"(?:\s+[A-Za-z]+)?"
        r"(?:\s+[A-Z]{2}\s+\d{5}(?:-\d{4})?)?",
        re.IGNORECASE,
    )

    HEADING_PATTERN = re.compile(r"<h([1-3])\b[^>]*>(.*?)</h\1\s*>", re.IGNORECASE | re.DOTALL)

    TAG_PATTERN = re.compile(r"<[^>]+>")

    # Product placeholder limits
    MIN_PRODUCT_NAME_LENGTH = 3  # exclusive
    MAX_PRODUCT_NAME_LENGTH = 100  # exclusive
    MAX_PRODUCTS = 5

    def __init__(self, industry_rules: RuleTable = INDUSTRY_RULES):
        """Initialize the extractor.

        Args:
            industry_rules: Ordered keyword table used to label the industry.
        """
        self.industry_rules = industry_rules

    def extract(self, markup: str, source_url: str = "") -> ExtractedProfile:
        """Build a profile from ``markup``. Never raises for missing fields.

        Args:
            markup: Raw or rendered HTML.
            source_url: URL the markup came from, recorded on the profile.

        Returns:
            ExtractedProfile with every field populated or defaulted.
        """
        clean = self._safe("markup", lambda: strip_non_content(markup), markup or "")
        text = self._safe("text", lambda: visible_text(clean), "")

        headings = self._safe("headings", lambda: self.heading_pairs(clean), [])
        address = self._safe("address", lambda: self.extract_address(text), "")

        profile = ExtractedProfile(
            business_name=self._safe("title", lambda: self.extract_title(clean), UNKNOWN_BUSINESS),
            description=self._safe(
                "description", lambda: self.extract_meta_description(clean), ""
            ),
            contact_info=ContactInfo(
                email=self._safe("email", lambda: self.extract_email(clean), ""),
                phone=self._safe("phone", lambda: self.extract_phone(text), ""),
                address=address,
            ),
            products=self._safe("products", lambda: self.products_from_headings(headings), []),
            industry=self._safe(
                "industry", lambda: self.industry_rules.classify(text), self.industry_rules.default
            ),
            location=address,
            source_url=source_url,
        )

        logger.debug(
            f"Extracted profile for {source_url or 'markup'}: "
            f"name={profile.business_name!r}, industry={profile.industry!r}, "
            f"{len(profile.products)} products"
        )
        return profile

    def extract_title(self, markup: str) -> str:
        for match in self.TITLE_PATTERN.finditer(markup):
            title = self._clean_text(match.group(1))
            if title:
                return title
        return UNKNOWN_BUSINESS

    def extract_meta_description(self, markup: str) -> str:
        for pattern in self.META_DESCRIPTION_PATTERNS:
            match = pattern.search(markup)
            if match:
                return self._clean_text(match.group(2))
        return ""

    def extract_email(self, markup: str) -> str:
        for match in self.EMAIL_PATTERN.finditer(markup):
            # Retina asset names such as logo@2x.png look like addresses
            if not match.group(0).lower().endswith(self.IMAGE_EXTENSIONS):
                return match.group(0)
        return ""

    def extract_phone(self, text: str) -> str:
        match = self.PHONE_PATTERN.search(text)
        return match.group(0).strip() if match else ""

    def extract_address(self, text: str) -> str:
        match = self.ADDRESS_PATTERN.search(text)
        return collapse_whitespace(match.group(0)) if match else ""

    def heading_pairs(self, markup: str) -> list[tuple[int, str]]:
        """(level, text) for every h1-h3 heading, in document order."""
        pairs = []
        for match in self.HEADING_PATTERN.finditer(markup):
            text = self._clean_text(match.group(2))
            if text:
                pairs.append((int(match.group(1)), text))
        return pairs

    def extract_headings(self, markup: str, levels: tuple[int, ...] = (1, 2, 3)) -> list[str]:
        return [text for level, text in self.heading_pairs(markup) if level in levels]

    def products_from_headings(self, headings: list[tuple[int, str]]) -> list[ProductStub]:
        """Turn the first few h2/h3 headings into product placeholders.

        All h2 headings come before any h3, each level in document order.
        """
        ordered = [text for level, text in headings if level == 2] + [
            text for level, text in headings if level == 3
        ]
        names = [
            text
            for text in ordered
            if self.MIN_PRODUCT_NAME_LENGTH < len(text) < self.MAX_PRODUCT_NAME_LENGTH
        ]
        return [ProductStub(name=name) for name in names[: self.MAX_PRODUCTS]]

    def _clean_text(self, fragment: str) -> str:
        return collapse_whitespace(html.unescape(self.TAG_PATTERN.sub(" ", fragment)))

    def _safe(self, field: str, func: Callable[[], T], default: T) -> T:
        """Run one field's extraction, falling back to ``default`` on failure."""
        try:
            return func()
        except Exception as e:
            logger.debug(f"Extraction of {field} failed, using default: {e}")
            return default


def extract_profile(markup: str, source_url: str = "") -> ExtractedProfile:
    """Extract a profile with the default rule tables."""
    return ProfileExtractor().extract(markup, source_url)
