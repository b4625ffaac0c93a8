"""Business profile models produced by the extraction engine."""

from datetime import datetime, timezone
from typing import Any
from urllib.parse import urlparse

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


UNKNOWN_BUSINESS = "Unknown Business"
DEFAULT_INDUSTRY = "Other"


class ProfileModel(BaseModel):
    """Base for profile models; serializes with camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ContactInfo(ProfileModel):
    """Contact details found on the page. Empty string when not found."""

    email: str = ""
    phone: str = ""
    address: str = ""


class ProductStub(ProfileModel):
    """
    A coarse product placeholder derived from heading text.

    Not a verified catalog entry; description, category and
    specifications are left for the downstream workflow to fill in.
    """

    name: str
    description: str = ""
    category: str = ""
    specifications: dict[str, Any] = Field(default_factory=dict)


class ExtractedProfile(ProfileModel):
    """
    Structured business profile mined from a single page.

    Every string field is always present, defaulting to an empty
    string or a sentinel, and ``products`` is always a list.
    """

    business_name: str = UNKNOWN_BUSINESS
    description: str = ""
    contact_info: ContactInfo = Field(default_factory=ContactInfo)
    products: list[ProductStub] = Field(default_factory=list)
    industry: str = DEFAULT_INDUSTRY
    location: str = ""

    # Provenance
    source_url: str = ""
    extracted_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    def to_payload(self) -> dict[str, Any]:
        """JSON-ready dict using the camelCase wire names."""
        return self.model_dump(mode="json", by_alias=True)

    @classmethod
    def fallback_for(cls, url: str) -> "ExtractedProfile":
        """Build a placeholder profile named after the site's domain.

        Used when the website could not be acquired at all but the caller
        would rather continue with a stub than fail.
        """
        return cls(
            business_name=business_name_from_domain(url),
            description="Error: Could not extract information from this website.",
            industry="",
            source_url=url,
        )


def business_name_from_domain(url: str) -> str:
    """Turn ``https://www.acme-widgets.co.uk`` into ``Acme Widgets``."""
    candidate = url.strip()
    if "://" not in candidate:
        candidate = f"https://{candidate}"

    host = urlparse(candidate).hostname or ""
    if host.startswith("www."):
        host = host[4:]

    labels = [label for label in host.split(".") if label]
    if len(labels) < 2:
        return UNKNOWN_BUSINESS

    words = [word for word in labels[0].split("-") if word]
    return " ".join(word[:1].upper() + word[1:] for word in words) or UNKNOWN_BUSINESS
