#!/usr/bin/env python3
"""
Wishlist Deck Generation Script

Discovers products on a Shopify-style store, translates the deck copy into
the store's language and writes <store-domain>.pdf.

Usage:
    python3 generate_deck.py shop.com owner@shop.com
    python3 generate_deck.py https://www.shop.com owner@shop.com --output-dir decks
    python3 generate_deck.py shop.myshopify.com owner@shop.com --no-localize --dump-html debug/

Exit codes:
    0  deck written
    1  missing arguments, not enough valid products, or a fatal error
"""

import argparse
import logging
import sys

from dotenv import load_dotenv

from wishlist_deck.common import DeckError, InsufficientProductsError, load_settings, setup_logging
from wishlist_deck.pipeline import DeckPipeline, build_localizer

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate a localized wishlist marketing deck (PDF) for a store"
    )
    parser.add_argument("store_url", nargs="?", help="Store URL or domain")
    parser.add_argument("to_email", nargs="?", help="Recipient address shown on the deck pages")
    parser.add_argument(
        "--output-dir", "-o",
        default=".",
        help="Directory for the output PDF (default: current directory)"
    )
    parser.add_argument(
        "--config", "-c",
        help="Settings file (default: config/deck.yaml)"
    )
    parser.add_argument(
        "--no-localize",
        action="store_true",
        help="Keep the English copy; skip the translation service"
    )
    parser.add_argument(
        "--dump-html",
        metavar="DIR",
        help="Write each filled page's HTML to DIR for debugging"
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose (debug) logging"
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress info messages, show only warnings and errors"
    )
    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(verbose=args.verbose, quiet=args.quiet)

    if not args.store_url or not args.to_email:
        parser.print_usage(sys.stderr)
        logger.error("Usage: generate_deck.py <storeUrl> <toEmail>")
        return 1

    load_dotenv()

    try:
        settings = load_settings(args.config)
    except (FileNotFoundError, DeckError) as e:
        logger.error("Could not load settings: %s", e)
        return 1

    print("=" * 60)
    print("Wishlist Deck Generation")
    print("=" * 60)
    print(f"  Store:        {args.store_url}")
    print(f"  Recipient:    {args.to_email}")
    print(f"  Products:     {settings.target_product_count}")
    print(f"  Output dir:   {args.output_dir}")

    with DeckPipeline(settings, html_dump_dir=args.dump_html) as pipeline:
        if not args.no_localize:
            pipeline.localizer = build_localizer(settings, pipeline.session)
        print(f"  Localization: {'on' if pipeline.localizer else 'off'}")

        try:
            output_path = pipeline.run(args.store_url, args.to_email, args.output_dir)
        except InsufficientProductsError as e:
            logger.error("%s", e)
            print(f"\n❌ Not enough valid products found ({e.found} of {e.required}).")
            return 1
        except Exception as e:
            logger.exception("Deck generation failed at stage '%s': %s", pipeline.stage.value, e)
            print(f"\n❌ Deck generation failed: {e}")
            return 1

    print(f"\n✅ Final PDF saved as {output_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
