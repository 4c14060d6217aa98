"""
Product Detail Fetcher

Resolves product page links to validated ProductRecords through the
storefront's product JSON endpoint.

Rejections (bad status, non-JSON body, missing title/price/image) are
logged and skipped. Image failures are fatal unless skip_failed_images
is set.
"""

from __future__ import annotations

import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, List, Optional

import requests

from ..common.errors import ImageProcessingError
from ..common.http_client import JSON_ACCEPT
from ..models import ProductLink, ProductRecord
from .image_processor import ImageProcessor
from .parsers import ProductJSONParser

logger = logging.getLogger(__name__)

_CENTS = Decimal("0.01")


def product_json_url(product_url: str) -> str:
    """Return the JSON endpoint for a product page URL."""
    return product_url if product_url.endswith('.json') else f"{product_url}.json"


def compute_new_price(price: Decimal, discount_rate: float) -> str:
    """
    Apply the promotional discount and round half-up to cents.

    Example:
        compute_new_price(Decimal("19.99"), 0.2) -> "15.99"
    """
    factor = Decimal(1) - Decimal(str(discount_rate))
    return str((price * factor).quantize(_CENTS, rounding=ROUND_HALF_UP))


class ProductDetailFetcher:
    """Fetches product JSON and builds ProductRecords."""

    def __init__(
        self,
        session: requests.Session,
        image_processor: ImageProcessor,
        discount_rate: float = 0.2,
        timeout: float = 20.0,
        skip_failed_images: bool = False,
    ):
        self.session = session
        self.image_processor = image_processor
        self.discount_rate = discount_rate
        self.timeout = timeout
        self.skip_failed_images = skip_failed_images
        self.parser = ProductJSONParser()

        self.skipped: list[dict] = []

    def fetch_products(self, links: Iterable[ProductLink | str], target_count: int) -> List[ProductRecord]:
        """
        Fetch products in link order until target_count are valid.

        Links after the last needed product are never requested.
        `skipped` only holds rejections from this call.
        """
        self.skipped = []
        products: List[ProductRecord] = []
        for link in links:
            if len(products) >= target_count:
                break
            url = link.url if isinstance(link, ProductLink) else link
            record = self.fetch(url)
            if record is not None:
                products.append(record)

        logger.info("Valid products: %d of %d needed", len(products), target_count)
        return products

    def fetch(self, product_url: str) -> Optional[ProductRecord]:
        """
        Fetch and validate one product.

        Returns:
            ProductRecord, or None if the product was rejected

        Raises:
            ImageProcessingError: If the image fails and skip_failed_images is off
        """
        json_url = product_json_url(product_url)
        logger.info("Scraping product JSON: %s", json_url)

        payload = self.fetch_json(json_url)
        product = self.parser.parse(payload)
        if not product:
            return self._skip(product_url, "invalid or missing JSON")

        title = self.parser.extract_title(product)
        price = self.parser.extract_price(product)
        image_url = self.parser.extract_image_url(product)

        if not title or price <= 0 or not image_url:
            return self._skip(product_url, "missing data or zero price")

        try:
            variants = self.image_processor.process(image_url, title)
        except ImageProcessingError as e:
            if not self.skip_failed_images:
                raise
            return self._skip(product_url, str(e))

        logger.info("%s - %s - using compressed images", title, price)

        return ProductRecord(
            title=title,
            price=price,
            new_price=compute_new_price(price, self.discount_rate),
            image_main=variants.main_data_uri,
            image_thumb=variants.thumb_data_uri,
            link=product_url,
        )

    def fetch_json(self, url: str):
        """
        GET a JSON document.

        Returns:
            Decoded body, or None on network error, non-2xx status,
            non-JSON content type or invalid JSON
        """
        try:
            response = self.session.get(url, headers={"Accept": JSON_ACCEPT}, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error("Error fetching JSON from %s: %s", url, e)
            return None

        if not response.ok:
            logger.error("Failed to fetch %s: %s %s", url, response.status_code, response.reason)
            return None

        content_type = response.headers.get('content-type', '')
        if 'application/json' not in content_type:
            logger.error("Unexpected Content-Type for %s: %s", url, content_type)
            logger.debug("Response snippet: %s...", response.text[:200])
            return None

        try:
            return response.json()
        except ValueError as e:
            logger.error("Invalid JSON from %s: %s", url, e)
            return None

    def _skip(self, product_url: str, reason: str) -> None:
        logger.warning("Skipping product: %s (%s)", product_url, reason)
        self.skipped.append({"url": product_url, "error": reason})
        return None
