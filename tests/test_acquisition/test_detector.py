"""Tests for the JavaScript-heavy page detector."""

import pytest

from siteintel.acquisition.detector import (
    DETECTION_RULES,
    DetectionRule,
    JSHeavyDetector,
    detect_signals,
    looks_js_heavy,
)


STATIC_PAGE = """
<html>
  <head><title>Acme Widgets</title></head>
  <body>
    <div id="root"><h1>Acme Widgets</h1><p>Industrial widgets since 1990.</p></div>
    <div class="spacer"></div>
  </body>
</html>
"""


class TestLooksJsHeavy:
    """Tests for the individual heuristics."""

    def test_static_page_not_flagged(self):
        """A server-rendered page with content passes."""
        assert looks_js_heavy(STATIC_PAGE) is False
        assert detect_signals(STATIC_PAGE) == []

    def test_empty_root_mount_flagged(self):
        """An empty #root container means the app renders client-side."""
        markup = '<html><body><div id="root"></div></body></html>'
        assert looks_js_heavy(markup) is True
        assert "empty-mount-container" in detect_signals(markup)

    @pytest.mark.parametrize(
        "mount",
        [
            '<div id="app"></div>',
            '<div id="__next">  </div>',
            '<div id="__nuxt"></div>',
            '<div data-reactroot=""></div>',
            '<div ng-app="shop"></div>',
        ],
    )
    def test_other_empty_mounts_flagged(self, mount):
        """Other framework mount points count when empty."""
        assert looks_js_heavy(f"<html><body>{mount}<p>Footer text</p></body></html>")

    def test_cloak_attribute_flagged(self):
        """Templates still hidden behind v-cloak have not been compiled."""
        markup = "<html><body><div v-cloak>{{ message }}</div></body></html>"
        assert detect_signals(markup) == ["cloak-attribute"]

    def test_more_than_five_empty_divs_flagged(self):
        """Six empty divs trigger the empty-container rule."""
        markup = "<html><body><p>Text</p>" + "<div></div>" * 6 + "</body></html>"
        assert "empty-containers" in detect_signals(markup)

    def test_five_empty_divs_not_flagged(self):
        """Exactly five empty divs is under the threshold."""
        markup = "<html><body><p>Text</p>" + "<div></div>" * 5 + "</body></html>"
        assert looks_js_heavy(markup) is False

    def test_loading_marker_flagged(self):
        """A literal 'Loading...' placeholder triggers escalation."""
        markup = "<html><body><main><p>Loading...</p></main></body></html>"
        assert detect_signals(markup) == ["loading-marker"]

    def test_empty_document_flagged(self):
        """No markup at all is a hollow shell."""
        assert detect_signals("") == ["empty-document"]
        assert looks_js_heavy("   \n") is True

    def test_signals_reported_in_rule_order(self):
        """Multiple signals come back in table order."""
        markup = '<div id="root"></div>' + "<div></div>" * 6 + "<p>Loading...</p>"
        assert detect_signals(markup) == [
            "empty-mount-container",
            "empty-containers",
            "loading-marker",
        ]


class TestJSHeavyDetector:
    """Tests for the detector wrapper."""

    def test_default_rules(self):
        """The detector uses the module rule table by default."""
        detector = JSHeavyDetector()
        assert detector.rules == DETECTION_RULES
        assert detector.is_js_heavy('<div id="root"></div>') is True

    def test_custom_rules(self):
        """A custom table replaces the defaults."""
        detector = JSHeavyDetector(
            rules=(DetectionRule("always", lambda soup: True),)
        )
        assert detector.signals(STATIC_PAGE) == ["always"]
