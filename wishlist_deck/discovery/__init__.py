"""
Discovery modules for Shopify-style storefronts.

Modules:
    candidate_urls        - Ordered collection URLs to crawl
    storefront_discoverer - StorefrontDiscoverer (product links + store language)
    brand_sampler         - BrandSampler (about-page text for tone matching)
"""

from .brand_sampler import NO_SAMPLE_TEXT, BrandSampler
from .candidate_urls import (
    DEFAULT_CANDIDATE_PATHS,
    DEFAULT_PLATFORM_SUFFIXES,
    generate_candidate_urls,
    is_platform_hosted,
)
from .storefront_discoverer import StorefrontDiscoverer

__all__ = [
    'BrandSampler',
    'NO_SAMPLE_TEXT',
    'DEFAULT_CANDIDATE_PATHS',
    'DEFAULT_PLATFORM_SUFFIXES',
    'generate_candidate_urls',
    'is_platform_hosted',
    'StorefrontDiscoverer',
]
