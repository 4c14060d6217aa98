"""
HTTP helpers

One requests.Session per run, shared by every collaborator that talks to
the storefront. Page fetches are soft: any failure returns None.
"""

import logging
from typing import Optional

import requests

from .config_loader import HttpSettings

logger = logging.getLogger(__name__)

HTML_ACCEPT = "text/html"
JSON_ACCEPT = "application/json"


def create_session(settings: Optional[HttpSettings] = None) -> requests.Session:
    """Create a session with browser-like default headers."""
    settings = settings or HttpSettings()
    session = requests.Session()
    session.headers.update({
        "User-Agent": settings.user_agent,
        "Accept-Language": settings.accept_language,
    })
    return session


def fetch_html(session: requests.Session, url: str, timeout: float) -> Optional[str]:
    """
    Fetch an HTML page.

    Args:
        session: Shared HTTP session
        url: Page URL
        timeout: Request timeout in seconds

    Returns:
        Page body, or None on network error, timeout, non-2xx status or empty body
    """
    try:
        response = session.get(url, headers={"Accept": HTML_ACCEPT}, timeout=timeout)
    except requests.RequestException as e:
        logger.warning("Error fetching HTML from %s: %s", url, e)
        return None

    if not response.ok:
        logger.debug("Failed to fetch %s: %s %s", url, response.status_code, response.reason)
        return None

    if not response.text:
        logger.debug("Empty body from %s", url)
        return None

    return response.text
