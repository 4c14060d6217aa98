#!/usr/bin/env python3
"""
URL Discovery Script

Discovers product URLs on a Shopify-style store by crawling its collection
pages. Gift cards and vouchers are skipped.

Usage:
    python3 discover_urls.py shop.com
    python3 discover_urls.py shop.com --output data/shop.com/urls.txt --limit 10
"""

import argparse
import logging
import os
import sys

from wishlist_deck.common import create_session, load_settings, setup_logging
from wishlist_deck.discovery import StorefrontDiscoverer
from wishlist_deck.models import StoreTarget

logger = logging.getLogger(__name__)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        description="Discover product URLs on a Shopify-style store"
    )
    parser.add_argument("store_url", help="Store URL or domain")
    parser.add_argument(
        "--output", "-o",
        help="Output file for product URLs (one per line)"
    )
    parser.add_argument(
        "--limit", "-l",
        type=int,
        default=0,
        help="Stop after this many links (default: target products x multiplier from config)"
    )
    parser.add_argument(
        "--config", "-c",
        help="Settings file (default: config/deck.yaml)"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Verbose output"
    )

    args = parser.parse_args(argv)
    setup_logging(verbose=args.verbose)

    settings = load_settings(args.config)
    store = StoreTarget.from_input(args.store_url)

    print("=" * 60)
    print(f"{store.domain} URL Discovery")
    print("=" * 60)

    with create_session(settings.http) as session:
        discoverer = StorefrontDiscoverer(
            session,
            link_ceiling=args.limit or settings.link_ceiling,
            exclusion_keywords=settings.exclusion_keywords,
            product_card_classes=settings.product_card_classes,
            candidate_paths=settings.candidate_paths,
            platform_suffixes=settings.platform_suffixes,
            timeout=settings.http.timeout,
        )
        result = discoverer.discover(store.base_url)

    for url in result.urls:
        print(f"  {url}")

    if args.output:
        output_dir = os.path.dirname(args.output)
        if output_dir:
            os.makedirs(output_dir, exist_ok=True)
        with open(args.output, "w", encoding="utf-8") as f:
            for url in result.urls:
                f.write(url + "\n")
        logger.info("Saved %d URLs to %s", len(result.urls), args.output)

    # Summary
    print("\n" + "=" * 60)
    print("Summary")
    print("=" * 60)
    print(f"  Store:            {store.domain}")
    print(f"  Language:         {result.language}")
    print(f"  Pages visited:    {len(result.pages_visited)}")
    print(f"  Products found:   {len(result.links)}")
    print(f"  Excluded links:   {len(result.excluded)}")
    if args.output:
        print(f"  Output file:      {args.output}")
    print("=" * 60)

    return 0 if result.links else 1


if __name__ == "__main__":
    sys.exit(main())
