"""
Data models for the deck pipeline.

This module contains pure data classes with no business logic.
"""

from .product import (
    LANGUAGE_NOT_FOUND,
    DiscoveryResult,
    ImageVariants,
    ProductLink,
    ProductRecord,
    to_data_uri,
)
from .store import StoreTarget

__all__ = [
    'LANGUAGE_NOT_FOUND',
    'DiscoveryResult',
    'ImageVariants',
    'ProductLink',
    'ProductRecord',
    'StoreTarget',
    'to_data_uri',
]
