"""Error types raised while acquiring a website."""

from typing import Optional


class AcquisitionError(Exception):
    """Base error for anything that stops a website from being acquired."""

    def __init__(self, message: str, url: Optional[str] = None):
        super().__init__(message)
        self.url = url


class InvalidUrl(AcquisitionError, ValueError):
    """The input could not be turned into a fetchable HTTP(S) URL."""


class NetworkFailure(AcquisitionError):
    """The lightweight tier could not fetch the page.

    Recovered inside the orchestrator by escalating to the rendered tier.
    """

    def __init__(
        self,
        message: str,
        url: Optional[str] = None,
        status_code: Optional[int] = None,
    ):
        super().__init__(message, url)
        self.status_code = status_code


class NavigationTimeout(AcquisitionError):
    """The headless browser did not finish navigating within its budget."""


class RenderFailure(AcquisitionError):
    """The headless browser crashed, failed to launch, or rendered nothing."""


class OverallTimeout(AcquisitionError):
    """The whole analysis exceeded the caller's time budget."""

    def __init__(self, url: Optional[str] = None, timeout_seconds: Optional[float] = None):
        super().__init__("Website analysis timed out", url)
        self.timeout_seconds = timeout_seconds
