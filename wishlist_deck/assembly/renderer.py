"""
Page rendering

Converts filled HTML pages to PDF bytes with headless Chromium
(Playwright). One browser session is shared by every page of a run.
"""

import logging
from typing import Any, Mapping, Protocol

from playwright.sync_api import sync_playwright

logger = logging.getLogger(__name__)


class PageRenderer(Protocol):
    """Renders a complete HTML document to PDF bytes."""

    def render(self, html: str, print_options: Mapping[str, Any]) -> bytes:
        ...


class PlaywrightPageRenderer:
    """
    Chromium-backed renderer.

    Usage:
        with PlaywrightPageRenderer() as renderer:
            pdf_bytes = renderer.render(html, {"format": "A4", "print_background": True})

    Render errors are not caught; they abort the run.
    """

    def __init__(self, wait_until: str = "networkidle", timeout_ms: float = 60_000):
        self.wait_until = wait_until
        self.timeout_ms = timeout_ms
        self._playwright = None
        self._browser = None

    def __enter__(self):
        self.start()
        return self

    def __exit__(self, *args):
        self.close()

    def start(self) -> None:
        if self._browser is not None:
            return
        logger.debug("Launching headless Chromium...")
        self._playwright = sync_playwright().start()
        try:
            self._browser = self._playwright.chromium.launch()
        except BaseException:
            # e.g. Chromium not installed
            self._playwright.stop()
            self._playwright = None
            raise

    def render(self, html: str, print_options: Mapping[str, Any]) -> bytes:
        """
        Render one HTML page.

        Args:
            html: Complete HTML document
            print_options: Keyword arguments for Playwright's page.pdf()

        Returns:
            PDF bytes
        """
        self.start()
        page = self._browser.new_page()
        try:
            page.set_content(html, wait_until=self.wait_until, timeout=self.timeout_ms)
            return page.pdf(**dict(print_options))
        finally:
            page.close()

    def close(self) -> None:
        if self._browser is not None:
            self._browser.close()
            self._browser = None
        if self._playwright is not None:
            self._playwright.stop()
            self._playwright = None
