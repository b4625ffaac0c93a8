"""Lightweight acquisition: a plain HTTP fetch without executing scripts."""

import asyncio
import logging
from typing import Optional

import aiohttp

from siteintel.errors import NetworkFailure
from siteintel.markup import strip_non_content
from siteintel.models.acquisition import StaticFetchResult
from siteintel.models.config import FetchConfig

logger = logging.getLogger(__name__)


class StaticFetcher:
    """
    Fetches raw markup over HTTP with a browser-like request signature.

    Script and style blocks are stripped from the body before it is
    returned, so keyword heuristics downstream never see code or CSS.
    The underlying ``aiohttp.ClientSession`` is created on first use and
    reused until :meth:`close`.
    """

    def __init__(
        self,
        config: Optional[FetchConfig] = None,
        session: Optional[aiohttp.ClientSession] = None,
    ):
        """Initialize the fetcher.

        Args:
            config: Fetch configuration. Uses defaults if not provided.
            session: Optional pre-built session; the fetcher closes it on close().
        """
        self.config = config or FetchConfig()
        self._session = session

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(headers=self.config.build_headers())
        return self._session

    async def fetch(self, url: str, timeout_seconds: Optional[float] = None) -> StaticFetchResult:
        """GET ``url`` and return its stripped markup.

        Args:
            url: Fully-qualified URL to fetch.
            timeout_seconds: Overrides the configured total timeout.

        Returns:
            StaticFetchResult with the cleaned markup, status and content type.

        Raises:
            NetworkFailure: On connection/DNS errors, timeouts or non-2xx status.
        """
        timeout = aiohttp.ClientTimeout(
            total=timeout_seconds or self.config.static_timeout_seconds
        )
        session = self._get_session()

        try:
            async with session.get(url, timeout=timeout, allow_redirects=True) as response:
                if response.status >= 400:
                    raise NetworkFailure(
                        f"HTTP {response.status} fetching {url}",
                        url=url,
                        status_code=response.status,
                    )
                body = await response.text(errors="replace")
                status_code = response.status
                content_type = response.headers.get("Content-Type", "")
        except asyncio.TimeoutError as e:
            raise NetworkFailure(f"Timed out fetching {url}", url=url) from e
        except aiohttp.ClientError as e:
            raise NetworkFailure(f"Failed to fetch {url}: {e}", url=url) from e
        except (UnicodeDecodeError, LookupError) as e:
            raise NetworkFailure(f"Could not decode response from {url}: {e}", url=url) from e

        logger.debug(f"Fetched {url}: HTTP {status_code}, {len(body)} chars ({content_type})")

        return StaticFetchResult(
            content=strip_non_content(body),
            status_code=status_code,
            content_type=content_type,
        )

    async def close(self) -> None:
        """Close the HTTP session."""
        if self._session:
            await self._session.close()
            self._session = None

    async def __aenter__(self) -> "StaticFetcher":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
