"""Data models for the website intelligence pipeline."""

from siteintel.models.acquisition import (
    AcquisitionMetadata,
    AcquisitionMethod,
    AcquisitionRequest,
    AcquisitionResult,
    StaticFetchResult,
    normalize_url,
)
from siteintel.models.config import (
    BrowserConfig,
    FetchConfig,
    PipelineConfig,
)
from siteintel.models.profile import (
    ContactInfo,
    ExtractedProfile,
    ProductStub,
)

__all__ = [
    # Acquisition models
    "AcquisitionMetadata",
    "AcquisitionMethod",
    "AcquisitionRequest",
    "AcquisitionResult",
    "StaticFetchResult",
    "normalize_url",
    # Profile models
    "ContactInfo",
    "ExtractedProfile",
    "ProductStub",
    # Config models
    "BrowserConfig",
    "FetchConfig",
    "PipelineConfig",
]
