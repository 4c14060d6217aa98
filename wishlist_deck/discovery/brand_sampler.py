"""
Brand tone sampling

Pulls a short paragraph sample from the store's "about" pages so the
translator can match the brand's voice.
"""

import logging
from typing import Optional, Sequence
from urllib.parse import urljoin

import requests
from bs4 import BeautifulSoup

from ..common.http_client import fetch_html
from ..common.text_utils import collapse_whitespace

logger = logging.getLogger(__name__)

DEFAULT_ABOUT_PATHS = ('/pages/about', '/about', '/about-us', '/pages/our-story', '/our-story')
NO_SAMPLE_TEXT = 'No descriptive text found.'

MIN_SAMPLE_LENGTH = 50
MAX_SAMPLE_LENGTH = 500


class BrandSampler:
    """Finds a sample of the store's own marketing copy."""

    def __init__(
        self,
        session: requests.Session,
        about_paths: Sequence[str] = DEFAULT_ABOUT_PATHS,
        timeout: float = 20.0,
    ):
        self.session = session
        self.about_paths = about_paths
        self.timeout = timeout

    def sample(self, base_url: str) -> str:
        """
        Return up to 500 characters of paragraph text from the about page.

        Falls back to the homepage, then to a fixed placeholder.
        """
        logger.info("Scraping for brand language...")
        for path in self.about_paths:
            url = urljoin(base_url, path)
            logger.debug("Trying about page: %s", url)
            text = self._paragraph_text(url)
            if text:
                logger.info("Found about text at: %s", url)
                return text

        logger.warning("Could not find a dedicated about page with significant text.")
        text = self._paragraph_text(base_url)
        if text:
            logger.info("Using fallback text from homepage.")
            return text

        return NO_SAMPLE_TEXT

    def _paragraph_text(self, url: str) -> Optional[str]:
        html = fetch_html(self.session, url, self.timeout)
        if html is None:
            return None

        soup = BeautifulSoup(html, "lxml")
        text = collapse_whitespace(" ".join(p.get_text() for p in soup.find_all('p')))
        if len(text) <= MIN_SAMPLE_LENGTH:
            return None
        return text[:MAX_SAMPLE_LENGTH] + '...'
