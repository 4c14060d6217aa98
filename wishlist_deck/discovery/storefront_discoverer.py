"""
Product link discovery for Shopify-style storefronts

Walks the candidate collection pages, collects links to product pages,
drops gift cards and vouchers, and records the store's language.
"""

import logging
from typing import Optional, Sequence
from urllib.parse import urljoin

import requests
from bs4 import BeautifulSoup

from ..common.http_client import fetch_html
from ..models import DiscoveryResult, ProductLink
from .candidate_urls import (
    DEFAULT_CANDIDATE_PATHS,
    DEFAULT_PLATFORM_SUFFIXES,
    generate_candidate_urls,
)

logger = logging.getLogger(__name__)

PRODUCT_LINK_SELECTOR = 'a[href*="/products/"]'

DEFAULT_EXCLUSION_KEYWORDS = ('gift', 'voucher', 'gift-card', 'gift-voucher')
DEFAULT_PRODUCT_CARD_CLASSES = ('frenzy_product_item',)


class StorefrontDiscoverer:
    """Discovers product URLs by scraping a storefront's collection pages."""

    def __init__(
        self,
        session: requests.Session,
        link_ceiling: int = 25,
        exclusion_keywords: Sequence[str] = DEFAULT_EXCLUSION_KEYWORDS,
        product_card_classes: Sequence[str] = DEFAULT_PRODUCT_CARD_CLASSES,
        candidate_paths: Sequence[str] = DEFAULT_CANDIDATE_PATHS,
        platform_suffixes: Sequence[str] = DEFAULT_PLATFORM_SUFFIXES,
        timeout: float = 20.0,
    ):
        """
        Initialize the discoverer.

        Args:
            session: Shared HTTP session
            link_ceiling: Stop crawling once this many links are collected
            exclusion_keywords: Link text containing any of these is skipped
            product_card_classes: Container classes used when a link has no text
            candidate_paths: Collection paths to try, in priority order
            platform_suffixes: Domain suffixes that suppress the www. variant
            timeout: Per-request timeout in seconds
        """
        self.session = session
        self.link_ceiling = link_ceiling
        self.exclusion_keywords = [k.lower() for k in exclusion_keywords]
        self.product_card_classes = list(product_card_classes)
        self.candidate_paths = candidate_paths
        self.platform_suffixes = platform_suffixes
        self.timeout = timeout

    def discover(self, store: str, candidates: Optional[Sequence[str]] = None) -> DiscoveryResult:
        """
        Crawl candidate pages until enough product links are found.

        Args:
            store: Store URL or domain
            candidates: Pre-generated candidate URLs (default: generated from store)

        Returns:
            DiscoveryResult with ordered links and detected language
        """
        if candidates is None:
            candidates = generate_candidate_urls(store, self.candidate_paths, self.platform_suffixes)
        logger.info("Collection URLs to try: %d", len(candidates))
        for url in candidates:
            logger.debug("  %s", url)

        result = DiscoveryResult()

        for url in candidates:
            if self._ceiling_reached(result):
                break

            logger.info("Visiting: %s", url)
            html = fetch_html(self.session, url, self.timeout)
            if html is None:
                continue

            result.pages_visited.append(url)
            self.scan_page(html, url, result)

        logger.info("Total product URLs found: %d (excluded %d)",
                    len(result.links), len(result.excluded))
        return result

    def scan_page(self, html: str, page_url: str, result: DiscoveryResult) -> None:
        """
        Collect product links from one collection page into result.

        Args:
            html: Page HTML
            page_url: URL the page was fetched from, used to resolve relative links
            result: Accumulated discovery state (mutated)
        """
        soup = BeautifulSoup(html, "lxml")

        if not result.language_found:
            language = self._extract_language(soup)
            if language:
                result.language = language
                logger.info("Store language: %s", language)

        seen = set(result.urls)
        seen_excluded = {link.url for link in result.excluded}

        for anchor in soup.select(PRODUCT_LINK_SELECTOR):
            if self._ceiling_reached(result):
                break

            href = anchor.get('href')
            if not href:
                continue

            text = self._link_text(anchor)
            full_url = href if href.startswith('http') else urljoin(page_url, href)

            if self.is_excluded(text):
                if full_url not in seen_excluded:
                    seen_excluded.add(full_url)
                    logger.info("Skipped (gift/voucher): %s", href)
                    result.excluded.append(ProductLink(url=full_url, excluded=True))
                continue

            if full_url not in seen:
                seen.add(full_url)
                result.links.append(ProductLink(url=full_url))
                logger.debug("Added: %s", full_url)

    def is_excluded(self, text: str) -> bool:
        """Return True if link text matches an exclusion keyword (case-insensitive)."""
        text = text.lower()
        return any(keyword in text for keyword in self.exclusion_keywords)

    def _ceiling_reached(self, result: DiscoveryResult) -> bool:
        return len(result.links) >= self.link_ceiling

    def _link_text(self, anchor) -> str:
        """Visible link text, or the enclosing product card's text when empty."""
        text = anchor.get_text().strip().lower()
        if text or not self.product_card_classes:
            return text

        card = anchor.find_parent(class_=self.product_card_classes)
        if card is None:
            return ""
        return card.get_text().strip().lower()

    @staticmethod
    def _extract_language(soup: BeautifulSoup) -> Optional[str]:
        root = soup.find('html')
        if root is None:
            return None
        lang = root.get('lang')
        if isinstance(lang, list):
            lang = " ".join(lang)
        return lang.strip() if lang and lang.strip() else None
