"""
URL Utilities

Helpers for storefront URLs: origins, handles and absolute links.
"""

import re
from typing import Optional
from urllib.parse import urljoin, urlparse

_SCHEME_RE = re.compile(r'^[a-zA-Z][a-zA-Z0-9+.\-]*:')


def has_scheme(url: str) -> bool:
    """Return True if the URL starts with a scheme such as 'https:'."""
    return bool(_SCHEME_RE.match(url or ""))


def get_origin(url: str) -> str:
    """
    Get the origin (scheme://host[:port]) of a URL.

    A bare domain like "shop.example" is treated as https.
    """
    if not has_scheme(url):
        url = "https://" + url.lstrip("/")
    parsed = urlparse(url)
    return f"{parsed.scheme}://{parsed.netloc}"


def normalize_store_url(url: str) -> str:
    """Return the store URL with a scheme and a trailing slash."""
    if not has_scheme(url):
        url = "https://" + url
    return url if url.endswith("/") else url + "/"


def absolute_url(href: str, base_url: str) -> str:
    """Resolve a possibly relative href against a page URL."""
    return urljoin(base_url, href)


def _handle_after(url: str, segment: str) -> Optional[str]:
    if not url or segment not in url:
        return None
    handle = url.split(segment, 1)[1]
    handle = re.split(r'[/?#]', handle, maxsplit=1)[0]
    return handle or None


def product_handle(url: str) -> Optional[str]:
    """
    Extract the product handle from a product URL.

    Example:
        "https://shop.example/collections/a/products/blue-shirt?variant=1" -> "blue-shirt"
    """
    return _handle_after(url, "/products/")


def collection_handle(url: str) -> Optional[str]:
    """
    Extract the collection handle from a collection URL.

    Example:
        "https://shop.example/collections/summer?page=2" -> "summer"
    """
    return _handle_after(url, "/collections/")


def with_page(url: str, page: int) -> str:
    """Return the collection URL for a given page number."""
    separator = "&" if "?" in url else "?"
    return f"{url}{separator}page={page}"
