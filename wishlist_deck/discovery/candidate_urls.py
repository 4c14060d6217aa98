"""
Candidate URL generation

Builds the ordered list of collection/listing pages likely to link to
products on a Shopify-style storefront. No network access.
"""

from typing import List, Sequence

from ..common.text_utils import strip_domain

DEFAULT_CANDIDATE_PATHS = (
    '/collections/new',
    '/collections/best-sellers',
    '/collections/all',
    '/collections/sale',
    '/products',
    '/shop',
    '/',
)

# Multi-tenant hosting subdomains have no www. alias
DEFAULT_PLATFORM_SUFFIXES = ('.myshopify.com',)


def is_platform_hosted(domain: str, platform_suffixes: Sequence[str] = DEFAULT_PLATFORM_SUFFIXES) -> bool:
    """Return True if the domain is a platform subdomain (e.g., shop.myshopify.com)."""
    return any(domain.endswith(suffix) for suffix in platform_suffixes)


def generate_candidate_urls(
    raw: str,
    paths: Sequence[str] = DEFAULT_CANDIDATE_PATHS,
    platform_suffixes: Sequence[str] = DEFAULT_PLATFORM_SUFFIXES,
) -> List[str]:
    """
    Generate candidate collection URLs in crawl priority order.

    Each path is emitted for the bare domain, then for www.<domain> unless the
    domain is platform-hosted.

    Args:
        raw: Store URL or domain
        paths: Ordered path list
        platform_suffixes: Domain suffixes that suppress the www. variant

    Returns:
        Deduplicated URLs, first-seen order preserved
    """
    domain = strip_domain(raw)
    add_www = not is_platform_hosted(domain, platform_suffixes)

    urls = []
    for path in paths:
        urls.append(f"https://{domain}{path}")
        if add_www:
            urls.append(f"https://www.{domain}{path}")

    return list(dict.fromkeys(urls))
