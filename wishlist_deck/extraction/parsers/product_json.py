"""
Product JSON Parser

Reads the fields the deck needs from a Shopify product endpoint
(``<product-url>.json``). Only the first variant and first image are used.

Expected shape:
    {"product": {"title": "...", "variants": [{"price": "19.99"}], "images": [{"src": "..."}]}}
"""

import re
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Optional

_LEADING_NUMBER_RE = re.compile(r'^[+-]?(\d+(\.\d*)?|\.\d+)')


class ProductJSONParser:
    """
    Parses Shopify product JSON payloads.

    Usage:
        parser = ProductJSONParser()
        product = parser.parse(payload)
        title = parser.extract_title(product)
        price = parser.extract_price(product)
        image_url = parser.extract_image_url(product)
    """

    def parse(self, payload: Any) -> Dict[str, Any]:
        """
        Return the product object, or empty dict if the payload has none.

        Args:
            payload: Decoded JSON body
        """
        if not isinstance(payload, dict):
            return {}
        product = payload.get('product')
        return product if isinstance(product, dict) else {}

    def extract_title(self, product: Dict[str, Any]) -> str:
        if not product:
            return ""
        title = product.get('title')
        return title.strip() if isinstance(title, str) else ""

    def extract_price(self, product: Dict[str, Any]) -> Decimal:
        """
        Price of the first variant.

        Returns:
            Parsed price, or Decimal 0 when missing or unparseable
        """
        variant = self._first(product, 'variants')
        if not variant:
            return Decimal(0)
        return parse_price(variant.get('price'))

    def extract_image_url(self, product: Dict[str, Any]) -> str:
        """Source URL of the first image, or empty string."""
        image = self._first(product, 'images')
        if not image:
            return ""
        src = image.get('src')
        if not isinstance(src, str):
            return ""
        src = src.strip()
        # Shopify sometimes serves protocol-relative CDN URLs
        if src.startswith('//'):
            src = 'https:' + src
        return src

    @staticmethod
    def _first(product: Dict[str, Any], key: str) -> Optional[Dict[str, Any]]:
        if not product:
            return None
        items = product.get(key)
        if not isinstance(items, list) or not items or not isinstance(items[0], dict):
            return None
        return items[0]


def parse_price(value: Any) -> Decimal:
    """
    Parse the leading number of a price value ("19.99", 19.99, "19.99 EUR").

    Returns:
        Decimal price, or Decimal 0 if no number is present
    """
    if value is None or isinstance(value, bool):
        return Decimal(0)

    match = _LEADING_NUMBER_RE.match(str(value).strip())
    if not match:
        return Decimal(0)

    try:
        return Decimal(match.group(0))
    except InvalidOperation:
        return Decimal(0)
