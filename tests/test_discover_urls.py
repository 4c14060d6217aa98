"""Tests for the discover_urls.py command-line entry point"""

import logging
from unittest.mock import patch

import pytest

import discover_urls


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop the handler setup_logging attaches to the captured stderr."""
    yield
    logger = logging.getLogger("wishlist_deck")
    logger.handlers.clear()
    logger.setLevel(logging.WARNING)


class TestMain:
    def test_writes_url_file(self, fake_session, make_response, collection_page_html, tmp_path, capsys):
        session = fake_session({"https://shop.com/collections/new": make_response(text=collection_page_html)})
        output = tmp_path / "urls" / "shop.txt"

        with patch("discover_urls.create_session", return_value=session):
            assert discover_urls.main(["shop.com", "--output", str(output)]) == 0

        lines = output.read_text(encoding="utf-8").splitlines()
        assert lines[0] == "https://shop.com/products/p1"
        assert len(lines) == 6
        assert "Language:         de" in capsys.readouterr().out

    def test_limit(self, fake_session, make_response, collection_page_html, tmp_path):
        session = fake_session({"https://shop.com/collections/new": make_response(text=collection_page_html)})
        output = tmp_path / "shop.txt"

        with patch("discover_urls.create_session", return_value=session):
            discover_urls.main(["shop.com", "--limit", "2", "--output", str(output)])

        assert len(output.read_text(encoding="utf-8").splitlines()) == 2

    def test_nothing_found(self, fake_session):
        with patch("discover_urls.create_session", return_value=fake_session()):
            assert discover_urls.main(["shop.com"]) == 1
