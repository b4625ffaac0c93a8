"""Service-boundary handler for website extraction requests."""

import logging
from typing import Any

from pydantic import BaseModel, Field, ValidationError

from siteintel.errors import AcquisitionError, InvalidUrl, OverallTimeout
from siteintel.pipeline import WebsiteIntelligencePipeline

logger = logging.getLogger(__name__)


class ExtractWebsiteRequest(BaseModel):
    """Incoming request body: ``{"url": "..."}``."""

    url: str = Field(min_length=1)


class ServiceResponse(BaseModel):
    """Status code plus JSON body for the web layer to send back."""

    status_code: int
    body: dict[str, Any]

    @property
    def is_client_error(self) -> bool:
        return 400 <= self.status_code < 500

    @property
    def is_server_error(self) -> bool:
        return self.status_code >= 500


def _error(status_code: int, error: str, details: str) -> ServiceResponse:
    return ServiceResponse(
        status_code=status_code,
        body={"success": False, "error": error, "details": details},
    )


async def handle_extract_website(
    payload: Any,
    pipeline: WebsiteIntelligencePipeline,
) -> ServiceResponse:
    """Validate ``payload``, run the pipeline, and shape the response.

    Client errors (400): missing or malformed body, unusable URL.
    Server errors: overall timeout (504), acquisition failure (502),
    anything else (500).
    """
    try:
        request = ExtractWebsiteRequest.model_validate(payload)
    except ValidationError as e:
        logger.info(f"Rejected extraction request: {e.error_count()} validation error(s)")
        return _error(400, "URL is required", str(e))

    try:
        profile = await pipeline.analyze(request.url)
    except InvalidUrl as e:
        return _error(400, "Invalid website URL", str(e))
    except OverallTimeout as e:
        return _error(504, "Website analysis timed out", str(e))
    except AcquisitionError as e:
        logger.error(f"Error extracting website data for {request.url}: {e}")
        return _error(502, "Failed to extract website data", str(e))
    except Exception as e:
        logger.exception(f"Unexpected error extracting website data for {request.url}")
        return _error(500, "Failed to extract website data", str(e))

    return ServiceResponse(
        status_code=200,
        body={"success": True, "data": profile.to_payload()},
    )
