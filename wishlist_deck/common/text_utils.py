"""
Text Utilities

Helpers for normalizing store domains and building safe file names.
"""

import re

_PROTOCOL_RE = re.compile(r'^https?://', re.IGNORECASE)
_WWW_RE = re.compile(r'^www\.', re.IGNORECASE)
_UNSAFE_CHARS_RE = re.compile(r'[^a-z0-9]', re.IGNORECASE)
_WHITESPACE_RE = re.compile(r'\s\s+')


def strip_domain(raw: str) -> str:
    """
    Reduce a store URL or domain to its bare host.

    Strips the http(s) protocol and a leading ``www.`` (matched in any case),
    then keeps the text before the first ``/``. Host case is preserved.

    Args:
        raw: Store input (e.g., "https://www.shop.com/collections/all")

    Returns:
        Bare host (e.g., "shop.com")
    """
    host = _PROTOCOL_RE.sub('', raw.strip())
    host = _WWW_RE.sub('', host)
    return host.split('/')[0]


def safe_filename(text: str) -> str:
    """
    Build a filesystem-safe name: every character outside [a-z0-9] becomes "_".

    Args:
        text: Any text (domain, product title)

    Returns:
        Lower-cased safe name
    """
    return _UNSAFE_CHARS_RE.sub('_', text).lower()


def collapse_whitespace(text: str) -> str:
    """Strip text and collapse runs of whitespace to a single space."""
    return _WHITESPACE_RE.sub(' ', text.strip())
