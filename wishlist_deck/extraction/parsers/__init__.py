"""
Specialized parsers for product data extraction.

- ProductJSONParser: Shopify product endpoint JSON
"""

from .product_json import ProductJSONParser, parse_price

__all__ = [
    'ProductJSONParser',
    'parse_price',
]
