"""Tests for wishlist_deck/discovery/storefront_discoverer.py"""

import requests

from wishlist_deck.discovery import StorefrontDiscoverer
from wishlist_deck.models import DiscoveryResult

PAGE_URL = "https://shop.com/collections/new"


def _page(lang, *hrefs):
    lang_attr = f' lang="{lang}"' if lang else ""
    anchors = "".join(f'<a href="{href}">Product {i}</a>' for i, href in enumerate(hrefs))
    return f"<html{lang_attr}><body>{anchors}</body></html>"


class TestScanPage:
    def test_collects_product_links_in_order(self, collection_page_html):
        result = DiscoveryResult()
        StorefrontDiscoverer(session=None).scan_page(collection_page_html, PAGE_URL, result)
        assert result.urls == [f"https://shop.com/products/p{i}" for i in range(1, 7)]

    def test_excludes_gift_cards_and_vouchers(self, collection_page_html):
        result = DiscoveryResult()
        StorefrontDiscoverer(session=None).scan_page(collection_page_html, PAGE_URL, result)
        assert [link.url for link in result.excluded] == [
            "https://shop.com/products/gift-card",
            "https://shop.com/products/voucher-50",
        ]
        assert all(link.excluded for link in result.excluded)

    def test_card_text_used_when_link_has_no_text(self, collection_page_html):
        result = DiscoveryResult()
        discoverer = StorefrontDiscoverer(session=None, product_card_classes=[])
        discoverer.scan_page(collection_page_html, PAGE_URL, result)
        # Without card lookup the image-only voucher link has no text to match
        assert "https://shop.com/products/voucher-50" in result.urls

    def test_detects_language(self, collection_page_html):
        result = DiscoveryResult()
        StorefrontDiscoverer(session=None).scan_page(collection_page_html, PAGE_URL, result)
        assert result.language == "de"
        assert result.language_found

    def test_first_language_wins(self):
        discoverer = StorefrontDiscoverer(session=None)
        result = DiscoveryResult()
        discoverer.scan_page(_page("de", "/products/a"), PAGE_URL, result)
        discoverer.scan_page(_page("fr", "/products/b"), PAGE_URL, result)
        assert result.language == "de"

    def test_language_from_later_page_when_first_has_none(self):
        discoverer = StorefrontDiscoverer(session=None)
        result = DiscoveryResult()
        discoverer.scan_page(_page(None, "/products/a"), PAGE_URL, result)
        assert not result.language_found
        discoverer.scan_page(_page("fr", "/products/b"), PAGE_URL, result)
        assert result.language == "fr"

    def test_scanning_twice_adds_nothing(self, collection_page_html):
        discoverer = StorefrontDiscoverer(session=None)
        result = DiscoveryResult()
        discoverer.scan_page(collection_page_html, PAGE_URL, result)
        first = list(result.urls)
        discoverer.scan_page(collection_page_html, PAGE_URL, result)
        assert result.urls == first

    def test_resolves_relative_links_against_page(self):
        result = DiscoveryResult()
        html = _page("en", "/products/a", "../products/b", "https://cdn.shop.com/products/c")
        StorefrontDiscoverer(session=None).scan_page(html, "https://www.shop.com/collections/all", result)
        assert result.urls == [
            "https://www.shop.com/products/a",
            "https://www.shop.com/products/b",
            "https://cdn.shop.com/products/c",
        ]

    def test_stops_at_link_ceiling(self, collection_page_html):
        result = DiscoveryResult()
        StorefrontDiscoverer(session=None, link_ceiling=3).scan_page(collection_page_html, PAGE_URL, result)
        assert len(result.urls) == 3


class TestIsExcluded:
    def test_case_insensitive(self):
        discoverer = StorefrontDiscoverer(session=None)
        assert discoverer.is_excluded("GIFT Card")
        assert discoverer.is_excluded("e-voucher")
        assert not discoverer.is_excluded("linen shirt")


class TestDiscover:
    def test_skips_failed_pages(self, fake_session, make_response, collection_page_html):
        session = fake_session({
            "https://shop.com/a": requests.exceptions.ConnectionError("refused"),
            "https://shop.com/c": make_response(text=collection_page_html),
        })
        result = StorefrontDiscoverer(session).discover(
            "shop.com", ["https://shop.com/a", "https://shop.com/b", "https://shop.com/c"]
        )
        assert result.pages_visited == ["https://shop.com/c"]
        assert len(result.urls) == 6

    def test_stops_visiting_once_ceiling_reached(self, fake_session, make_response, collection_page_html):
        session = fake_session({
            "https://shop.com/a": make_response(text=collection_page_html),
            "https://shop.com/b": make_response(text=collection_page_html),
        })
        result = StorefrontDiscoverer(session, link_ceiling=5).discover(
            "shop.com", ["https://shop.com/a", "https://shop.com/b"]
        )
        assert session.requested == ["https://shop.com/a"]
        assert len(result.urls) == 5

    def test_generates_candidates_when_not_given(self, fake_session):
        session = fake_session()
        result = StorefrontDiscoverer(session, candidate_paths=["/shop"]).discover("shop.com")
        assert session.requested == ["https://shop.com/shop", "https://www.shop.com/shop"]
        assert result.urls == []
        assert not result.language_found

    def test_duplicate_links_across_pages(self, fake_session, make_response):
        session = fake_session({
            "https://shop.com/a": make_response(text=_page("en", "/products/x", "/products/y")),
            "https://shop.com/b": make_response(text=_page("en", "/products/y", "/products/z")),
        })
        result = StorefrontDiscoverer(session).discover(
            "shop.com", ["https://shop.com/a", "https://shop.com/b"]
        )
        assert result.urls == [
            "https://shop.com/products/x",
            "https://shop.com/products/y",
            "https://shop.com/products/z",
        ]

    def test_rerun_is_idempotent(self, fake_session, make_response, collection_page_html):
        session = fake_session({
            "https://shop.com/a": make_response(text=collection_page_html),
            "https://shop.com/b": make_response(text=_page("fr", "/products/p7")),
        })
        discoverer = StorefrontDiscoverer(session)
        candidates = ["https://shop.com/a", "https://shop.com/b"]

        first = discoverer.discover("shop.com", candidates)
        second = discoverer.discover("shop.com", candidates)

        assert second.urls == first.urls
        assert second.excluded == first.excluded
        assert second.language == first.language == "de"
        assert second.pages_visited == first.pages_visited

    def test_excluded_links_recorded_once(self, fake_session, make_response, collection_page_html):
        session = fake_session({
            "https://shop.com/a": make_response(text=collection_page_html),
            "https://shop.com/b": make_response(text=collection_page_html),
        })
        result = StorefrontDiscoverer(session).discover("shop.com", ["https://shop.com/a", "https://shop.com/b"])
        assert [link.url for link in result.excluded] == [
            "https://shop.com/products/gift-card",
            "https://shop.com/products/voucher-50",
        ]
