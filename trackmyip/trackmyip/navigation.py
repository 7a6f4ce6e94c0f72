import logging
import webbrowser
from urllib.parse import urlparse

from .exceptions import NavigationError

logger = logging.getLogger(__name__)

ALLOWED_SCHEMES = ('http', 'https')


def is_valid_url(url):
    """Absolute http(s) URL with a host."""
    parsed = urlparse(url)
    return parsed.scheme in ALLOWED_SCHEMES and bool(parsed.netloc)


def open_url(url):
    """
    Open `url` in the default web browser.

    Raises ValueError for a blank or non-http(s) URL and NavigationError
    when the browser cannot be started.
    """
    if not url or not url.strip():
        raise ValueError("URL must not be empty.")
    url = url.strip()
    if not is_valid_url(url):
        raise ValueError(f"Invalid URL: {url}")

    try:
        opened = webbrowser.open(url)
    except webbrowser.Error as e:
        raise NavigationError(f"Failed to open URL: {url}\nError: {e}") from e
    if not opened:
        raise NavigationError(f"Failed to open URL: {url}\nError: no web browser available")
    logger.info(f"Opened {url}")
