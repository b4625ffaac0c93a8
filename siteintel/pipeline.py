"""End-to-end website analysis: acquire markup, then extract a profile."""

import asyncio
import logging
import time
from typing import Optional

from siteintel.acquisition.engine import FetchOrchestrator
from siteintel.errors import OverallTimeout
from siteintel.extraction.extractor import ProfileExtractor
from siteintel.models.acquisition import normalize_url
from siteintel.models.config import PipelineConfig
from siteintel.models.profile import ExtractedProfile

logger = logging.getLogger(__name__)


class WebsiteIntelligencePipeline:
    """
    Turns a website URL into an ExtractedProfile under a time budget.

    The whole acquire-and-extract flow runs under one overall timeout.
    When it elapses the in-flight work is cancelled, not abandoned: the
    HTTP request is aborted and any open browser page is closed before
    OverallTimeout reaches the caller.

    Usage:
        async with WebsiteIntelligencePipeline() as pipeline:
            profile = await pipeline.analyze("example.com")
    """

    def __init__(
        self,
        config: Optional[PipelineConfig] = None,
        orchestrator: Optional[FetchOrchestrator] = None,
        extractor: Optional[ProfileExtractor] = None,
    ):
        """Initialize the pipeline.

        Args:
            config: Pipeline configuration. Uses defaults if not provided.
            orchestrator: Acquisition engine. Built from config if omitted.
            extractor: Profile extractor. Uses the default rule tables if omitted.
        """
        self.config = config or PipelineConfig()
        self.orchestrator = orchestrator or FetchOrchestrator(self.config)
        self.extractor = extractor or ProfileExtractor()

    async def analyze(self, url: str, timeout_seconds: Optional[float] = None) -> ExtractedProfile:
        """Acquire ``url`` and extract its business profile.

        Args:
            url: Website URL, with or without a scheme.
            timeout_seconds: Overrides the configured overall timeout.

        Returns:
            The extracted profile.

        Raises:
            InvalidUrl: Before any network activity, if the URL is unusable.
            OverallTimeout: If the analysis did not finish in time.
            NavigationTimeout, RenderFailure: If the rendered tier failed.
        """
        normalized = normalize_url(url)
        timeout = timeout_seconds or self.config.overall_timeout_seconds
        start_time = time.time()

        try:
            profile = await asyncio.wait_for(self._run(normalized), timeout=timeout)
        except asyncio.TimeoutError as e:
            logger.error(f"Analysis of {normalized} timed out after {timeout}s")
            raise OverallTimeout(url=normalized, timeout_seconds=timeout) from e

        logger.info(f"Analyzed {normalized} in {time.time() - start_time:.1f}s")
        return profile

    async def _run(self, url: str) -> ExtractedProfile:
        result = await self.orchestrator.acquire(url)
        return self.extractor.extract(result.content, source_url=url)

    async def close(self) -> None:
        """Release network and browser resources."""
        await self.orchestrator.close()

    async def __aenter__(self) -> "WebsiteIntelligencePipeline":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
