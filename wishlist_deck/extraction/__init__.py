"""
Product extraction modules.

Modules:
    product_fetcher - ProductDetailFetcher (product JSON -> ProductRecord)
    image_processor - ImageProcessor (full-size + thumbnail JPEG variants)
    parsers         - Specialized parsers for different data sources
"""

from .image_processor import ImageProcessor
from .parsers import ProductJSONParser, parse_price
from .product_fetcher import (
    ProductDetailFetcher,
    compute_new_price,
    product_json_url,
)

__all__ = [
    'ImageProcessor',
    'ProductDetailFetcher',
    'ProductJSONParser',
    'compute_new_price',
    'parse_price',
    'product_json_url',
]
