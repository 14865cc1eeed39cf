"""
Collection discovery from a Shopify sitemap

Reads sitemap_collections_*.xml (from disk or over HTTP) and returns the
collections it lists, including their optional image entry.
"""

import logging
import os
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import requests

from ..common.constants import DEFAULT_USER_AGENT
from ..common.url_utils import collection_handle

logger = logging.getLogger(__name__)

NAMESPACES = {
    "ns": "http://www.sitemaps.org/schemas/sitemap/0.9",
    "image": "http://www.google.com/schemas/sitemap-image/1.1",
}


@dataclass
class SitemapCollection:
    """One <url> entry of a collections sitemap."""
    url: str
    handle: Optional[str] = None
    lastmod: Optional[str] = None
    changefreq: Optional[str] = None
    image: Optional[Dict[str, Optional[str]]] = None

    def to_metadata(self) -> Dict[str, Any]:
        return {
            "handle": self.handle,
            "url": self.url,
            "lastmod": self.lastmod,
            "image": self.image["url"] if self.image else None,
        }


class SitemapDiscoverer:
    """Discovers collection URLs from a sitemap file or URL."""

    def __init__(self, source: str, timeout: float = 30, session: Optional[requests.Session] = None):
        """
        Args:
            source: Path to a sitemap XML file, or its http(s) URL
            timeout: Request timeout in seconds when source is a URL
            session: Optional requests session (created when omitted)
        """
        self.source = source
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({"User-Agent": DEFAULT_USER_AGENT})
        self.collections: List[SitemapCollection] = []

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.session.close()

    def close(self):
        self.session.close()

    def is_remote(self) -> bool:
        return self.source.startswith(("http://", "https://"))

    def read_source(self) -> bytes:
        """
        Raw sitemap bytes.

        Raises:
            FileNotFoundError: If a local sitemap does not exist
            requests.RequestException: If a remote sitemap cannot be fetched
        """
        if self.is_remote():
            logger.info("Fetching sitemap from %s...", self.source)
            response = self.session.get(self.source, timeout=self.timeout)
            response.raise_for_status()
            return response.content

        if not os.path.exists(self.source):
            raise FileNotFoundError(f"Sitemap file not found: {self.source}")
        with open(self.source, "rb") as f:
            return f.read()

    def discover(self) -> List[SitemapCollection]:
        """
        Parse the sitemap into collections.

        Invalid XML or a document without <urlset> logs an error and
        returns an empty list.
        """
        content = self.read_source()
        try:
            root = ET.fromstring(content)
        except ET.ParseError as e:
            logger.error("Invalid sitemap XML in %s: %s", self.source, e)
            return []

        if root.tag != f"{{{NAMESPACES['ns']}}}urlset":
            logger.error("Invalid sitemap format: missing urlset in %s", self.source)
            return []

        self.collections = []
        for url_elem in root.findall("ns:url", NAMESPACES):
            loc = url_elem.findtext("ns:loc", default="", namespaces=NAMESPACES).strip()
            if not loc:
                continue

            self.collections.append(SitemapCollection(
                url=loc,
                handle=collection_handle(loc),
                lastmod=url_elem.findtext("ns:lastmod", namespaces=NAMESPACES),
                changefreq=url_elem.findtext("ns:changefreq", namespaces=NAMESPACES),
                image=self._parse_image(url_elem),
            ))

        logger.info("Found %d collections in sitemap", len(self.collections))
        return self.collections

    def _parse_image(self, url_elem: ET.Element) -> Optional[Dict[str, Optional[str]]]:
        image = url_elem.find("image:image", NAMESPACES)
        if image is None:
            return None
        return {
            "url": image.findtext("image:loc", namespaces=NAMESPACES),
            "title": image.findtext("image:title", namespaces=NAMESPACES),
            "caption": image.findtext("image:caption", namespaces=NAMESPACES),
        }

    def get_stats(self) -> dict:
        """Return discovery statistics."""
        return {
            "collections_found": len(self.collections),
            "with_images": sum(1 for c in self.collections if c.image),
        }
