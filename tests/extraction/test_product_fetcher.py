"""Tests for wishlist_deck/extraction/product_fetcher.py"""

from decimal import Decimal
from unittest.mock import MagicMock

import pytest
import requests

from wishlist_deck.common.errors import ImageProcessingError
from wishlist_deck.extraction import ProductDetailFetcher, compute_new_price, product_json_url
from wishlist_deck.models import ImageVariants, ProductLink


def _product_json(title="Leinenhemd", price="100.00", src="//cdn.shop.com/shirt.jpg"):
    product = {"title": title, "variants": [{"price": price}], "images": [{"src": src}] if src else []}
    return {"product": product}


@pytest.fixture
def image_processor():
    processor = MagicMock()
    processor.process.return_value = ImageVariants(main=b"main", thumb=b"thumb")
    return processor


@pytest.fixture
def json_response(make_response):
    def _response(data, status_code=200, content_type="application/json; charset=utf-8"):
        return make_response(status_code, text="{}", json_data=data, content_type=content_type)
    return _response


class TestComputeNewPrice:
    @pytest.mark.parametrize("price,expected", [
        ("100", "80.00"),
        ("19.99", "15.99"),
        ("0.05", "0.04"),
        ("12.345", "9.88"),
    ])
    def test_twenty_percent_off(self, price, expected):
        assert compute_new_price(Decimal(price), 0.2) == expected

    def test_zero_discount(self):
        assert compute_new_price(Decimal("10"), 0) == "10.00"


class TestProductJsonUrl:
    def test_appends_json(self):
        assert product_json_url("https://shop.com/products/a") == "https://shop.com/products/a.json"

    def test_already_json(self):
        assert product_json_url("https://shop.com/products/a.json") == "https://shop.com/products/a.json"


class TestFetch:
    def test_builds_record(self, fake_session, json_response, image_processor):
        session = fake_session({"https://shop.com/products/a.json": json_response(_product_json(price="19.99"))})
        record = ProductDetailFetcher(session, image_processor).fetch("https://shop.com/products/a")

        assert record.title == "Leinenhemd"
        assert record.price == Decimal("19.99")
        assert record.new_price == "15.99"
        assert record.link == "https://shop.com/products/a"
        assert record.image_main.startswith("data:image/jpeg;base64,")
        image_processor.process.assert_called_once_with("https://cdn.shop.com/shirt.jpg", "Leinenhemd")

    def test_rejects_non_2xx(self, fake_session, json_response, image_processor):
        session = fake_session({"https://shop.com/products/a.json": json_response(_product_json(), status_code=500)})
        fetcher = ProductDetailFetcher(session, image_processor)
        assert fetcher.fetch("https://shop.com/products/a") is None
        assert fetcher.skipped[0]["url"] == "https://shop.com/products/a"

    def test_rejects_html_content_type(self, fake_session, json_response, image_processor):
        session = fake_session({
            "https://shop.com/products/a.json": json_response(_product_json(), content_type="text/html"),
        })
        assert ProductDetailFetcher(session, image_processor).fetch("https://shop.com/products/a") is None
        image_processor.process.assert_not_called()

    def test_rejects_invalid_json(self, fake_session, make_response, image_processor):
        session = fake_session({
            "https://shop.com/products/a.json": make_response(text="{oops", content_type="application/json"),
        })
        assert ProductDetailFetcher(session, image_processor).fetch("https://shop.com/products/a") is None

    def test_rejects_network_error(self, fake_session, image_processor):
        session = fake_session({"https://shop.com/products/a.json": requests.exceptions.Timeout()})
        assert ProductDetailFetcher(session, image_processor).fetch("https://shop.com/products/a") is None

    @pytest.mark.parametrize("data", [
        {"products": []},
        _product_json(title=""),
        _product_json(price="0.00"),
        _product_json(price="free"),
        _product_json(src=None),
    ])
    def test_rejects_incomplete_product(self, fake_session, json_response, image_processor, data):
        session = fake_session({"https://shop.com/products/a.json": json_response(data)})
        fetcher = ProductDetailFetcher(session, image_processor)
        assert fetcher.fetch("https://shop.com/products/a") is None
        assert len(fetcher.skipped) == 1

    def test_image_failure_is_fatal_by_default(self, fake_session, json_response, image_processor):
        image_processor.process.side_effect = ImageProcessingError("broken")
        session = fake_session({"https://shop.com/products/a.json": json_response(_product_json())})
        with pytest.raises(ImageProcessingError):
            ProductDetailFetcher(session, image_processor).fetch("https://shop.com/products/a")

    def test_image_failure_skipped_when_configured(self, fake_session, json_response, image_processor):
        image_processor.process.side_effect = ImageProcessingError("broken")
        session = fake_session({"https://shop.com/products/a.json": json_response(_product_json())})
        fetcher = ProductDetailFetcher(session, image_processor, skip_failed_images=True)
        assert fetcher.fetch("https://shop.com/products/a") is None
        assert fetcher.skipped == [{"url": "https://shop.com/products/a", "error": "broken"}]


class TestFetchProducts:
    def test_keeps_order_and_stops_at_target(self, fake_session, json_response, image_processor):
        routes = {
            f"https://shop.com/products/p{i}.json": json_response(_product_json(title=f"P{i}"))
            for i in range(1, 6)
        }
        routes["https://shop.com/products/p2.json"] = json_response(_product_json(price="0"))
        session = fake_session(routes)
        links = [ProductLink(f"https://shop.com/products/p{i}") for i in range(1, 6)]

        products = ProductDetailFetcher(session, image_processor).fetch_products(links, 3)

        assert [p.title for p in products] == ["P1", "P3", "P4"]
        assert "https://shop.com/products/p5.json" not in session.requested

    def test_accepts_plain_urls(self, fake_session, json_response, image_processor):
        session = fake_session({"https://shop.com/products/a.json": json_response(_product_json())})
        products = ProductDetailFetcher(session, image_processor).fetch_products(["https://shop.com/products/a"], 5)
        assert len(products) == 1

    def test_returns_fewer_when_links_run_out(self, fake_session, image_processor):
        products = ProductDetailFetcher(fake_session(), image_processor).fetch_products(
            [ProductLink("https://shop.com/products/a")], 5
        )
        assert products == []

    def test_skipped_reset_per_call(self, fake_session, image_processor):
        fetcher = ProductDetailFetcher(fake_session(), image_processor)
        links = [ProductLink("https://shop.com/products/a")]

        fetcher.fetch_products(links, 5)
        fetcher.fetch_products(links, 5)

        assert fetcher.skipped == [{"url": "https://shop.com/products/a", "error": "invalid or missing JSON"}]
