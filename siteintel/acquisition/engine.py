"""Two-tier acquisition engine: static fetch first, headless browser when needed."""

import logging
import time
from typing import Optional

from siteintel.acquisition.browser import BrowserManager
from siteintel.acquisition.detector import JSHeavyDetector
from siteintel.acquisition.rendered import RenderedFetcher
from siteintel.acquisition.static import StaticFetcher
from siteintel.errors import NetworkFailure
from siteintel.models.acquisition import (
    AcquisitionMetadata,
    AcquisitionMethod,
    AcquisitionRequest,
    AcquisitionResult,
)
from siteintel.models.config import PipelineConfig

logger = logging.getLogger(__name__)


class FetchOrchestrator:
    """
    Chooses between a cheap static fetch and an expensive rendered fetch.

    Strategy per request:
    1. Normalize the URL (fails fast with InvalidUrl)
    2. Plain HTTP fetch under a bounded timeout
    3. If the markup looks like a JS shell, or the fetch failed, render it
       in the shared headless browser instead

    Escalation is one-way and happens at most once. Rendered-tier errors
    propagate; there is no further fallback.

    Usage:
        async with FetchOrchestrator() as orchestrator:
            result = await orchestrator.acquire("example.com")
    """

    def __init__(
        self,
        config: Optional[PipelineConfig] = None,
        static_fetcher: Optional[StaticFetcher] = None,
        rendered_fetcher: Optional[RenderedFetcher] = None,
        detector: Optional[JSHeavyDetector] = None,
    ):
        """Initialize the orchestrator.

        Args:
            config: Pipeline configuration. Uses defaults if not provided.
            static_fetcher: Lightweight tier. Built from config if omitted.
            rendered_fetcher: Rendered tier. Built from config if omitted.
            detector: JS-heavy detector. Uses the default rule table if omitted.
        """
        self.config = config or PipelineConfig()

        # Initialize components
        self.browser_manager = (
            rendered_fetcher.browser_manager
            if rendered_fetcher is not None
            else BrowserManager(self.config.browser)
        )
        self.static_fetcher = static_fetcher or StaticFetcher(self.config.fetch)
        self.rendered_fetcher = rendered_fetcher or RenderedFetcher(
            self.browser_manager, self.config.browser
        )
        self.detector = detector or JSHeavyDetector()

    async def acquire(self, url: str) -> AcquisitionResult:
        """Acquire markup for ``url`` using the cheapest tier that works.

        Args:
            url: Website URL, with or without a scheme.

        Returns:
            AcquisitionResult whose ``method`` names the tier that produced it.

        Raises:
            InvalidUrl: If the URL cannot be normalized.
            NavigationTimeout: If escalation was needed and navigation timed out.
            RenderFailure: If escalation was needed and the browser failed.
        """
        start_time = time.time()
        request = AcquisitionRequest.from_url(
            url, timeout_seconds=self.config.fetch.static_timeout_seconds
        )

        try:
            static_result = await self.static_fetcher.fetch(
                request.url, timeout_seconds=request.timeout_seconds
            )
        except NetworkFailure as e:
            logger.warning(f"Lightweight fetch failed for {request.url} ({e}), falling back to browser")
            return await self._render(request.url, start_time)

        signals = self.detector.signals(static_result.content)
        if signals:
            logger.info(
                f"{request.url} appears to require JavaScript ({', '.join(signals)}), "
                f"falling back to browser"
            )
            return await self._render(request.url, start_time)

        duration_ms = int((time.time() - start_time) * 1000)
        logger.info(f"Acquired {request.url} via lightweight fetch in {duration_ms}ms")

        return AcquisitionResult(
            content=static_result.content,
            method=AcquisitionMethod.LIGHTWEIGHT,
            metadata=AcquisitionMetadata(
                status_code=static_result.status_code,
                content_type=static_result.content_type,
                is_javascript_heavy=False,
                processing_time_ms=duration_ms,
            ),
        )

    async def _render(self, url: str, start_time: float) -> AcquisitionResult:
        result = await self.rendered_fetcher.fetch(url)

        # Report time for the whole request, including the abandoned static attempt
        result.metadata.processing_time_ms = int((time.time() - start_time) * 1000)
        logger.info(
            f"Acquired {url} via rendered fetch in {result.metadata.processing_time_ms}ms"
        )
        return result

    async def close(self) -> None:
        """Release the HTTP session and shut down the browser."""
        await self.static_fetcher.close()
        await self.browser_manager.cleanup()

    async def __aenter__(self) -> "FetchOrchestrator":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
