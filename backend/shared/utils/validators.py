"""
Shared validators for input sanitization.
"""

from urllib.parse import urlparse
from typing import Optional

# Internal hosts that must never appear in stored image URLs
BLOCKED_HOSTS = (
    "localhost",
    "127.0.0.1",
    "0.0.0.0",
    "169.254.",
    "[::1]",
    "metadata.google",
)

ALLOWED_SCHEMES = {"http", "https"}


def validate_image_url(url: Optional[str]) -> Optional[str]:
    """
    Validate and normalize a menu item image reference.

    Accepts absolute http(s) URLs on public hosts and site-relative
    paths ("/images/pizza.jpg"). Empty values become None.

    Raises:
        ValueError: If the URL is malformed or points somewhere it should not.
    """
    if url is None:
        return None

    url = url.strip()
    if not url:
        return None

    if url.startswith("/") and not url.startswith("//"):
        return url

    parsed = urlparse(url)
    scheme = parsed.scheme.lower()
    if scheme not in ALLOWED_SCHEMES:
        raise ValueError("Only http(s) URLs or site-relative paths are allowed")

    host = parsed.netloc.lower()
    if not host:
        raise ValueError("URL has no host")

    for blocked in BLOCKED_HOSTS:
        if blocked in host:
            raise ValueError("Internal URLs are not allowed")

    return url
