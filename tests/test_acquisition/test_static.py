"""Tests for lightweight (plain HTTP) acquisition."""

import asyncio

import aiohttp
import pytest
from unittest.mock import AsyncMock, MagicMock

from siteintel.acquisition.static import StaticFetcher
from siteintel.errors import NetworkFailure
from siteintel.models.config import FetchConfig


class FakeResponse:
    """Minimal stand-in for aiohttp.ClientResponse."""

    def __init__(self, body: str, status: int = 200, content_type: str = "text/html; charset=utf-8"):
        self.status = status
        self.headers = {"Content-Type": content_type}
        self._body = body

    async def text(self, errors: str = "strict") -> str:
        return self._body

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        return False


def make_session(response=None, error=None) -> MagicMock:
    session = MagicMock()
    session.closed = False
    session.close = AsyncMock()
    if error is not None:
        session.get = MagicMock(side_effect=error)
    else:
        session.get = MagicMock(return_value=response)
    return session


class TestFetchConfig:
    """Tests for the request signature."""

    def test_browser_like_headers(self):
        """Requests look like they come from a desktop browser."""
        headers = FetchConfig().build_headers()
        assert headers["User-Agent"].startswith("Mozilla/5.0")
        assert "text/html" in headers["Accept"]
        assert "en-US" in headers["Accept-Language"]

    def test_extra_headers_merged(self):
        """Extra headers are added to the default set."""
        headers = FetchConfig(extra_headers={"X-Trace": "1"}).build_headers()
        assert headers["X-Trace"] == "1"
        assert "User-Agent" in headers


class TestStaticFetcher:
    """Tests for StaticFetcher."""

    @pytest.mark.asyncio
    async def test_strips_script_and_style(self):
        """Script and style blocks are removed along with their text."""
        body = (
            "<html><head><style>.shop { color: red }</style></head>"
            "<body><h1>Acme</h1><script>var software = 1;</script></body></html>"
        )
        fetcher = StaticFetcher(session=make_session(FakeResponse(body)))

        result = await fetcher.fetch("https://example.com")

        assert "<h1>Acme</h1>" in result.content
        assert "<script" not in result.content
        assert "software" not in result.content
        assert ".shop" not in result.content

    @pytest.mark.asyncio
    async def test_returns_status_and_content_type(self):
        """Status code and content type are passed through."""
        fetcher = StaticFetcher(session=make_session(FakeResponse("<p>Hi</p>")))

        result = await fetcher.fetch("https://example.com")

        assert result.status_code == 200
        assert result.content_type == "text/html; charset=utf-8"

    @pytest.mark.asyncio
    async def test_uses_configured_timeout(self):
        """The GET is bounded by the configured total timeout."""
        session = make_session(FakeResponse("<p>Hi</p>"))
        fetcher = StaticFetcher(FetchConfig(static_timeout_seconds=7.5), session=session)

        await fetcher.fetch("https://example.com")

        timeout = session.get.call_args.kwargs["timeout"]
        assert isinstance(timeout, aiohttp.ClientTimeout)
        assert timeout.total == 7.5

    @pytest.mark.asyncio
    async def test_http_error_status_is_network_failure(self):
        """Non-success status codes raise NetworkFailure carrying the code."""
        fetcher = StaticFetcher(session=make_session(FakeResponse("Not found", status=404)))

        with pytest.raises(NetworkFailure) as exc_info:
            await fetcher.fetch("https://example.com/missing")

        assert exc_info.value.status_code == 404
        assert exc_info.value.url == "https://example.com/missing"

    @pytest.mark.asyncio
    async def test_dns_failure_is_network_failure(self):
        """Connection errors raise NetworkFailure."""
        error = aiohttp.ClientConnectionError("Cannot connect to host nowhere.invalid")
        fetcher = StaticFetcher(session=make_session(error=error))

        with pytest.raises(NetworkFailure):
            await fetcher.fetch("https://nowhere.invalid")

    @pytest.mark.asyncio
    async def test_timeout_is_network_failure(self):
        """Timeouts raise NetworkFailure."""
        fetcher = StaticFetcher(session=make_session(error=asyncio.TimeoutError()))

        with pytest.raises(NetworkFailure):
            await fetcher.fetch("https://example.com")

    @pytest.mark.asyncio
    async def test_unknown_charset_is_network_failure(self):
        """A body declared in an unknown encoding cannot be used."""
        response = FakeResponse("<p>Hi</p>")
        response.text = AsyncMock(side_effect=LookupError("unknown encoding: x-bogus"))
        fetcher = StaticFetcher(session=make_session(response))

        with pytest.raises(NetworkFailure):
            await fetcher.fetch("https://example.com")

    @pytest.mark.asyncio
    async def test_close_releases_session(self):
        """Closing the fetcher closes its HTTP session."""
        session = make_session(FakeResponse("<p>Hi</p>"))
        fetcher = StaticFetcher(session=session)

        await fetcher.close()
        await fetcher.close()

        session.close.assert_awaited_once()
