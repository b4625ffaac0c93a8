"""Rendered acquisition: load the page in a headless browser and capture the DOM."""

import asyncio
import logging
import time
from typing import Optional

from playwright.async_api import (
    Error as PlaywrightError,
    TimeoutError as PlaywrightTimeoutError,
)

from siteintel.acquisition.browser import BrowserManager
from siteintel.errors import NavigationTimeout, RenderFailure
from siteintel.models.acquisition import (
    AcquisitionMetadata,
    AcquisitionMethod,
    AcquisitionResult,
)
from siteintel.models.config import BrowserConfig

logger = logging.getLogger(__name__)


class RenderedFetcher:
    """
    Fetches fully rendered markup through the shared browser.

    Each call gets its own page from the :class:`BrowserManager`; the page
    is released before the call returns, on success, error or cancellation.
    """

    def __init__(
        self,
        browser_manager: BrowserManager,
        config: Optional[BrowserConfig] = None,
    ):
        """Initialize the fetcher.

        Args:
            browser_manager: Owner of the shared browser process.
            config: Browser configuration. Defaults to the manager's config.
        """
        self.browser_manager = browser_manager
        self.config = config or browser_manager.config

    async def fetch(self, url: str) -> AcquisitionResult:
        """Navigate to ``url`` and return the rendered document.

        Waits for network idle (bounded by the navigation timeout), then a
        fixed settle delay for late script-driven rendering.

        Raises:
            NavigationTimeout: If navigation did not settle in time.
            RenderFailure: If the browser failed or produced no markup.
        """
        start_time = time.time()
        logger.info(f"Rendering {url} in headless browser")

        try:
            async with self.browser_manager.page() as page:
                await page.goto(
                    url,
                    wait_until="networkidle",
                    timeout=self.config.navigation_timeout_ms,
                )

                if self.config.settle_delay_ms > 0:
                    await asyncio.sleep(self.config.settle_delay_ms / 1000)

                content = await page.content()
        except PlaywrightTimeoutError as e:
            raise NavigationTimeout(
                f"Navigation to {url} timed out after {self.config.navigation_timeout_ms}ms",
                url=url,
            ) from e
        except PlaywrightError as e:
            raise RenderFailure(f"Rendering {url} failed: {e}", url=url) from e

        if not content or not content.strip():
            raise RenderFailure(f"Browser rendered no content for {url}", url=url)

        duration_ms = int((time.time() - start_time) * 1000)
        logger.debug(f"Rendered {url}: {len(content)} chars in {duration_ms}ms")

        return AcquisitionResult(
            content=content,
            method=AcquisitionMethod.RENDERED,
            metadata=AcquisitionMetadata(
                is_javascript_heavy=True,
                processing_time_ms=duration_ms,
            ),
        )
