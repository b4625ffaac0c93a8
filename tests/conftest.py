"""Shared fixtures: a fake Playwright stack so browser code runs without Chromium."""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch

import pytest


def make_fake_page(content: str = "<html><body><h1>Rendered</h1></body></html>") -> MagicMock:
    page = MagicMock(name="page")
    page.goto = AsyncMock(return_value=None)
    page.content = AsyncMock(return_value=content)
    page.route = AsyncMock(return_value=None)
    page.close = AsyncMock(return_value=None)
    return page


@pytest.fixture
def fake_playwright():
    """Patch async_playwright in the browser module with in-memory fakes."""
    page = make_fake_page()

    context = MagicMock(name="context")
    context.new_page = AsyncMock(return_value=page)
    context.close = AsyncMock(return_value=None)

    browser = MagicMock(name="browser")
    browser.new_context = AsyncMock(return_value=context)
    browser.close = AsyncMock(return_value=None)
    browser.is_connected = MagicMock(return_value=True)

    playwright = MagicMock(name="playwright")
    playwright.chromium.launch = AsyncMock(return_value=browser)
    playwright.stop = AsyncMock(return_value=None)

    starter = MagicMock(name="async_playwright")
    starter.return_value.start = AsyncMock(return_value=playwright)

    with patch("siteintel.acquisition.browser.async_playwright", starter):
        yield SimpleNamespace(
            page=page,
            context=context,
            browser=browser,
            playwright=playwright,
            async_playwright=starter,
        )
