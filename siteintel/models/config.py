"""Configuration models for the website intelligence pipeline."""

import os
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/124.0.0.0 Safari/537.36"
)

DEFAULT_STATIC_TIMEOUT_SECONDS = 15.0


class BrowserConfig(BaseModel):
    """Configuration for the Playwright browser used by the rendered tier."""

    model_config = ConfigDict(validate_assignment=True)

    # Browser selection
    browser_type: Literal["chromium", "firefox", "webkit"] = "chromium"
    headless: bool = True
    launch_args: list[str] = Field(
        default_factory=lambda: [
            "--no-sandbox",
            "--disable-setuid-sandbox",
            "--disable-dev-shm-usage",
            "--disable-gpu",
        ]
    )
    launch_timeout_ms: int = 30000

    # Viewport
    viewport_width: int = 1280
    viewport_height: int = 800

    # Identity
    user_agent: Optional[str] = None
    locale: str = "en-US"
    ignore_https_errors: bool = True

    # Network
    block_resources: list[str] = Field(
        default_factory=lambda: ["image", "stylesheet", "font", "media"]
    )

    # Timing
    navigation_timeout_ms: int = 30000
    default_timeout_ms: int = 30000
    settle_delay_ms: int = 2000  # Wait after network idle for deferred rendering


class FetchConfig(BaseModel):
    """Configuration for the lightweight (plain HTTP) tier."""

    static_timeout_seconds: float = Field(default=DEFAULT_STATIC_TIMEOUT_SECONDS, gt=0)
    user_agent: str = DEFAULT_USER_AGENT
    accept: str = "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8"
    accept_language: str = "en-US,en;q=0.5"
    extra_headers: dict[str, str] = Field(default_factory=dict)

    def build_headers(self) -> dict[str, str]:
        """Request headers that make the fetch look like a regular browser."""
        headers = {
            "User-Agent": self.user_agent,
            "Accept": self.accept,
            "Accept-Language": self.accept_language,
        }
        headers.update(self.extra_headers)
        return headers


class PipelineConfig(BaseModel):
    """
    Complete configuration for acquiring and profiling a website.

    Combines the browser and fetch configs with the outer time budget
    applied around a whole analysis.
    """

    browser: BrowserConfig = Field(default_factory=BrowserConfig)
    fetch: FetchConfig = Field(default_factory=FetchConfig)
    overall_timeout_seconds: float = Field(default=60.0, gt=0)

    @classmethod
    def from_env(cls, **kwargs: Any) -> "PipelineConfig":
        """Create a config, overriding defaults from SITEINTEL_* variables."""
        config = cls(**kwargs)

        if "SITEINTEL_BROWSER" in os.environ:
            config.browser.browser_type = os.environ["SITEINTEL_BROWSER"]
        if "SITEINTEL_HEADLESS" in os.environ:
            config.browser.headless = os.environ["SITEINTEL_HEADLESS"].strip().lower() not in (
                "0",
                "false",
                "no",
                "off",
            )
        if "SITEINTEL_NAVIGATION_TIMEOUT_MS" in os.environ:
            config.browser.navigation_timeout_ms = int(os.environ["SITEINTEL_NAVIGATION_TIMEOUT_MS"])
        if "SITEINTEL_SETTLE_DELAY_MS" in os.environ:
            config.browser.settle_delay_ms = int(os.environ["SITEINTEL_SETTLE_DELAY_MS"])
        if "SITEINTEL_STATIC_TIMEOUT" in os.environ:
            config.fetch.static_timeout_seconds = float(os.environ["SITEINTEL_STATIC_TIMEOUT"])
        if "SITEINTEL_OVERALL_TIMEOUT" in os.environ:
            config.overall_timeout_seconds = float(os.environ["SITEINTEL_OVERALL_TIMEOUT"])

        return config
