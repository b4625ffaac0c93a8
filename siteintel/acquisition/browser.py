"""Lifecycle management for the shared Playwright browser."""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from playwright.async_api import (
    Browser,
    BrowserContext,
    Error as PlaywrightError,
    Page,
    Playwright,
    Route,
    async_playwright,
)

from siteintel.errors import RenderFailure
from siteintel.models.config import BrowserConfig

logger = logging.getLogger(__name__)


class BrowserManager:
    """
    Owns at most one headless browser process.

    The browser is launched lazily by the first caller of
    :meth:`get_browser` and reused by every later call until
    :meth:`cleanup`. Launching happens under a lock, so concurrent first
    calls share a single launch instead of racing to start duplicates.
    There is no idle teardown; the owner must call :meth:`cleanup`.

    Usage:
        manager = BrowserManager(BrowserConfig())
        async with manager.page() as page:
            await page.goto("https://example.com")
        await manager.cleanup()
    """

    def __init__(self, config: Optional[BrowserConfig] = None):
        """Initialize the browser manager.

        Args:
            config: Browser configuration. Uses defaults if not provided.
        """
        self.config = config or BrowserConfig()
        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None
        self._lock = asyncio.Lock()
        self._open_pages = 0
        self.launch_count = 0

    @property
    def is_launched(self) -> bool:
        return self._browser is not None

    @property
    def open_pages(self) -> int:
        """Number of pages currently checked out through :meth:`page`."""
        return self._open_pages

    async def get_browser(self) -> Browser:
        """Return the shared browser, launching it on first use.

        Raises:
            RenderFailure: If the browser could not be launched. The manager
                stays unlaunched so a later call can try again.
        """
        async with self._lock:
            if self._browser is not None and not self._browser.is_connected():
                logger.warning("Browser disconnected, relaunching")
                await self._teardown()

            if self._browser is None:
                await self._launch()

            return self._browser

    async def _launch(self) -> None:
        logger.info(
            f"Launching {self.config.browser_type} browser (headless={self.config.headless})"
        )
        try:
            self._playwright = await async_playwright().start()
            browser_type = getattr(self._playwright, self.config.browser_type)
            self._browser = await browser_type.launch(
                headless=self.config.headless,
                args=self.config.launch_args,
                timeout=self.config.launch_timeout_ms,
            )
        except (PlaywrightError, OSError, AttributeError) as e:
            await self._teardown()
            raise RenderFailure(f"Browser launch failed: {e}") from e
        except BaseException:
            # Cancelled mid-launch: stop the half-started driver before unwinding
            await self._teardown()
            raise

        self.launch_count += 1
        logger.info("Browser launched successfully")

    async def _teardown(self) -> None:
        browser, playwright = self._browser, self._playwright
        self._browser = None
        self._playwright = None

        if browser is not None:
            try:
                await browser.close()
            except PlaywrightError as e:
                logger.warning(f"Error closing browser: {e}")

        if playwright is not None:
            try:
                await playwright.stop()
            except PlaywrightError as e:
                logger.warning(f"Error stopping Playwright: {e}")

    async def cleanup(self) -> None:
        """Close the browser. Safe to call when nothing is launched."""
        async with self._lock:
            if self._browser is None and self._playwright is None:
                return
            logger.info("Closing browser")
            await self._teardown()
            logger.info("Browser closed")

    async def _create_context(self, browser: Browser) -> BrowserContext:
        context_options = {
            "viewport": {
                "width": self.config.viewport_width,
                "height": self.config.viewport_height,
            },
            "locale": self.config.locale,
            "ignore_https_errors": self.config.ignore_https_errors,
        }
        if self.config.user_agent:
            context_options["user_agent"] = self.config.user_agent

        return await browser.new_context(**context_options)

    async def _setup_resource_blocking(self, page: Page) -> None:
        """Abort requests for resources that carry no text content."""
        blocked_types = set(self.config.block_resources)

        async def route_handler(route: Route) -> None:
            if route.request.resource_type in blocked_types:
                await route.abort()
            else:
                await route.continue_()

        await page.route("**/*", route_handler)

    @asynccontextmanager
    async def page(self) -> AsyncGenerator[Page, None]:
        """Context manager for a fresh page with guaranteed cleanup.

        The page lives in its own browser context. Both are closed when the
        block exits, whether it returns, raises or is cancelled.

        Yields:
            A Page with viewport, timeouts and resource blocking applied.
        """
        browser = await self.get_browser()

        try:
            context = await self._create_context(browser)
        except PlaywrightError as e:
            raise RenderFailure(f"Could not open browser context: {e}") from e

        self._open_pages += 1
        page: Optional[Page] = None
        try:
            page = await context.new_page()
            page.set_default_navigation_timeout(self.config.navigation_timeout_ms)
            page.set_default_timeout(self.config.default_timeout_ms)
            page.on("pageerror", lambda error: logger.debug(f"Page script error: {error}"))
            page.on("crash", lambda _: logger.error("Page crashed"))

            if self.config.block_resources:
                await self._setup_resource_blocking(page)

            yield page
        finally:
            try:
                if page is not None:
                    try:
                        await page.close()
                    except PlaywrightError as e:
                        logger.warning(f"Error closing page: {e}")
                try:
                    await context.close()
                except PlaywrightError as e:
                    logger.warning(f"Error closing browser context: {e}")
            finally:
                self._open_pages -= 1

    async def __aenter__(self) -> "BrowserManager":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.cleanup()
