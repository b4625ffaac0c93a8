"""Data models describing a single website acquisition."""

import logging
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, HttpUrl, TypeAdapter, ValidationError
from pydantic.alias_generators import to_camel

from siteintel.errors import InvalidUrl
from siteintel.models.config import DEFAULT_STATIC_TIMEOUT_SECONDS

logger = logging.getLogger(__name__)

_HTTP_URL = TypeAdapter(HttpUrl)


def normalize_url(url: str) -> str:
    """Ensure a URL carries a transport scheme and parses as HTTP(S).

    ``https://`` is prefixed when no scheme is present. The string is
    otherwise returned as given, so ``example.com`` becomes
    ``https://example.com`` without a trailing slash.

    Raises:
        InvalidUrl: If the result is not a valid HTTP(S) URL.
    """
    if not isinstance(url, str) or not url.strip():
        raise InvalidUrl("URL is required", url=url if isinstance(url, str) else None)

    candidate = url.strip()
    lowered = candidate.lower()
    if not lowered.startswith("http://") and not lowered.startswith("https://"):
        candidate = f"https://{candidate}"
        logger.debug(f"Added https:// scheme to URL: {candidate}")

    try:
        _HTTP_URL.validate_python(candidate)
    except ValidationError as e:
        raise InvalidUrl(f"Invalid website URL format: {url}", url=url) from e

    return candidate


class AcquisitionMethod(str, Enum):
    """Which tier produced the markup."""

    LIGHTWEIGHT = "lightweight"
    RENDERED = "rendered"


class AcquisitionRequest(BaseModel):
    """A normalized URL together with the lightweight-tier time budget."""

    url: str
    timeout_seconds: float = Field(default=DEFAULT_STATIC_TIMEOUT_SECONDS, gt=0)

    @classmethod
    def from_url(
        cls, url: str, timeout_seconds: float = DEFAULT_STATIC_TIMEOUT_SECONDS
    ) -> "AcquisitionRequest":
        """Normalize ``url`` and build a request for it."""
        return cls(url=normalize_url(url), timeout_seconds=timeout_seconds)


class StaticFetchResult(BaseModel):
    """Output of a plain HTTP fetch, after script/style stripping."""

    content: str
    status_code: int
    content_type: str = ""


class AcquisitionMetadata(BaseModel):
    """Transport details recorded alongside acquired markup."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    status_code: Optional[int] = None
    content_type: Optional[str] = None
    is_javascript_heavy: Optional[bool] = Field(default=None, alias="isJavaScriptHeavy")
    processing_time_ms: int = 0


class AcquisitionResult(BaseModel):
    """
    Markup obtained for one request.

    ``content`` is non-empty on success and ``method`` names the tier
    that actually produced it.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=True,
    )

    content: str = Field(min_length=1)
    method: AcquisitionMethod
    metadata: AcquisitionMetadata = Field(default_factory=AcquisitionMetadata)
