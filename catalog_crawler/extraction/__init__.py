"""
Product extraction for Shopify storefronts.

Modules:
    variant_images - Variant image resolution and CDN URL normalization
    pricing - Cents heuristic and money string parsing
    page_fetcher - HTTP page loading with retries
    product_extractor - ProductPageExtractor for product pages
    collection_crawler - StoreCrawler and SitemapCrawler
    crawl_result - CrawlResult accumulator with flush()
    parsers - Specialized parsers for different data sources
"""

from .collection_crawler import SitemapCrawler, StoreCrawler
from .crawl_result import CrawlResult, save_json
from .page_fetcher import FetchedPage, NavigationError, PageFetcher
from .parsers import (
    CollectionPageParser,
    HTMLContentParser,
    ProductJsonParser,
    StructuredDataParser,
)
from .pricing import normalize_price, parse_money
from .product_extractor import ProductPageExtractor
from .variant_images import (
    normalize_image_url,
    resolve_variant_images,
    upscale_cdn_image,
)

__all__ = [
    # Crawlers
    'StoreCrawler',
    'SitemapCrawler',
    'CrawlResult',
    'save_json',
    # Fetching
    'PageFetcher',
    'FetchedPage',
    'NavigationError',
    # Extraction
    'ProductPageExtractor',
    # Variant images and prices
    'resolve_variant_images',
    'normalize_image_url',
    'upscale_cdn_image',
    'normalize_price',
    'parse_money',
    # Parsers
    'ProductJsonParser',
    'StructuredDataParser',
    'HTMLContentParser',
    'CollectionPageParser',
]
