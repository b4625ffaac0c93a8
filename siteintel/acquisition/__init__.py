"""Tiered content acquisition for business websites."""

from siteintel.acquisition.browser import BrowserManager
from siteintel.acquisition.detector import JSHeavyDetector, detect_signals, looks_js_heavy
from siteintel.acquisition.engine import FetchOrchestrator
from siteintel.acquisition.rendered import RenderedFetcher
from siteintel.acquisition.static import StaticFetcher

__all__ = [
    "BrowserManager",
    "FetchOrchestrator",
    "JSHeavyDetector",
    "RenderedFetcher",
    "StaticFetcher",
    "detect_signals",
    "looks_js_heavy",
]
