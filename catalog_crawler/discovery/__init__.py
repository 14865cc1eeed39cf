"""
Collection discovery for Shopify storefronts.

Modules:
    sitemap_discoverer - SitemapDiscoverer for sitemap_collections_*.xml
"""

from ..common.url_utils import collection_handle
from .sitemap_discoverer import SitemapCollection, SitemapDiscoverer

__all__ = [
    'SitemapDiscoverer',
    'SitemapCollection',
    'collection_handle',
]
