"""Shared test fixtures."""

from decimal import Decimal
from io import BytesIO
from pathlib import Path
from unittest.mock import MagicMock

import pytest
import requests
from PIL import Image
from pypdf import PdfWriter

from wishlist_deck.common.config_loader import load_content_bundle, load_settings
from wishlist_deck.models import ProductRecord, StoreTarget, to_data_uri

FIXTURES_DIR = Path(__file__).parent / "fixtures"


def _make_response(status_code=200, text="", content=None, json_data=None, content_type="text/html"):
    response = MagicMock()
    response.status_code = status_code
    response.ok = status_code < 400
    response.reason = "OK" if response.ok else "Not Found"
    response.text = text
    response.content = content if content is not None else text.encode("utf-8")
    response.headers = {"content-type": content_type}
    if json_data is not None:
        response.json.return_value = json_data
    else:
        response.json.side_effect = ValueError("No JSON object could be decoded")
    if not response.ok:
        response.raise_for_status.side_effect = requests.HTTPError(f"{status_code} Error")
    return response


class FakeSession:
    """Routes GET requests to canned responses; unknown URLs get a 404."""

    def __init__(self, routes=None):
        self.routes = dict(routes or {})
        self.requested = []
        self.headers = {}
        self.closed = False

    def get(self, url, headers=None, timeout=None, **kwargs):
        self.requested.append(url)
        route = self.routes.get(url)
        if isinstance(route, Exception):
            raise route
        return route or _make_response(404)

    def close(self):
        self.closed = True

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()


def _blank_pdf(pages=1):
    writer = PdfWriter()
    for _ in range(pages):
        writer.add_blank_page(width=595, height=842)
    buffer = BytesIO()
    writer.write(buffer)
    return buffer.getvalue()


class FakeRenderer:
    """Returns a blank single-page PDF per render call."""

    def __init__(self, pages_per_render=1):
        self.pages_per_render = pages_per_render
        self.calls = []

    def render(self, html, print_options):
        self.calls.append((html, dict(print_options)))
        return _blank_pdf(self.pages_per_render)


@pytest.fixture
def fixtures_dir():
    """Return path to fixtures directory."""
    return FIXTURES_DIR


@pytest.fixture
def collection_page_html():
    """Load the collection page HTML fixture."""
    return (FIXTURES_DIR / "collection_page.html").read_text(encoding="utf-8")


@pytest.fixture
def about_page_html():
    """Load the about page HTML fixture."""
    return (FIXTURES_DIR / "about_page.html").read_text(encoding="utf-8")


@pytest.fixture
def make_response():
    """Factory for mocked requests.Response objects."""
    return _make_response


@pytest.fixture
def fake_session():
    """Factory for a session with canned GET responses."""
    return FakeSession


@pytest.fixture
def blank_pdf():
    """Factory for blank PDF documents."""
    return _blank_pdf


@pytest.fixture
def fake_renderer():
    return FakeRenderer()


@pytest.fixture
def settings():
    """Settings from the repo's config/deck.yaml, without secrets."""
    return load_settings(environ={})


@pytest.fixture
def content():
    """English content bundle from config/content_en.yaml."""
    return load_content_bundle()


@pytest.fixture
def store():
    return StoreTarget.from_input("shop.com")


@pytest.fixture
def jpeg_bytes():
    """A small in-memory JPEG."""
    buffer = BytesIO()
    Image.new("RGB", (800, 600), (200, 30, 30)).save(buffer, format="JPEG")
    return buffer.getvalue()


@pytest.fixture
def make_product():
    """Factory for valid ProductRecords."""
    def _make(title="Item A", price="100.00", new_price="80.00", link=None):
        return ProductRecord(
            title=title,
            price=Decimal(price),
            new_price=new_price,
            image_main=to_data_uri(b"main"),
            image_thumb=to_data_uri(b"thumb"),
            link=link or f"https://shop.com/products/{title.lower().replace(' ', '-')}",
        )
    return _make


@pytest.fixture
def products(make_product):
    """Five valid products, one per use case."""
    return [make_product(title=f"Item {letter}") for letter in "ABCDE"]
