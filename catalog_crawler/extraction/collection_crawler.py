"""
Collection Crawlers

Walk a storefront collection by collection and page by page, extracting
every product page found.

- StoreCrawler: discovers collections from <store>/collections and gathers
  everything into one CrawlResult
- SitemapCrawler: crawls the collections listed in a sitemap and writes one
  JSON file per collection
"""

from __future__ import annotations

import logging
import os
import time
from datetime import datetime, timezone
from typing import Any, Dict, Iterator, List, Optional

from bs4 import BeautifulSoup

from ..common.url_utils import normalize_store_url, product_handle, with_page
from ..models import CollectionInfo, ScrapedProduct
from ..validation import CrawlQualityTracker
from .crawl_result import CrawlResult, save_json
from .page_fetcher import NavigationError, PageFetcher, save_html
from .parsers import CollectionPageParser
from .product_extractor import ProductPageExtractor

logger = logging.getLogger(__name__)


class BaseCollectionCrawler:
    """Shared page walking and product extraction for the crawlers."""

    def __init__(
        self,
        fetcher: PageFetcher,
        delay: float = 1.0,
        max_pages: int = 0,
        max_pagination_probe: int = 10,
        tracker: CrawlQualityTracker | None = None,
        extractor_class=ProductPageExtractor,
    ):
        """
        Args:
            fetcher: Page fetcher shared by every request of the crawl
            delay: Pause between product pages in seconds
            max_pages: Maximum pages per collection (0 = all)
            max_pagination_probe: Pages to follow via rel="next" when a
                collection shows no numbered pagination
            tracker: Optional quality tracker fed with every product
            extractor_class: Product extractor (takes url and fetcher)
        """
        self.fetcher = fetcher
        self.delay = delay
        self.max_pages = max_pages
        self.max_pagination_probe = max_pagination_probe
        self.tracker = tracker
        self.extractor_class = extractor_class
        self.failed_urls: List[Dict[str, str]] = []

    def load(self, url: str) -> BeautifulSoup:
        page = self.fetcher.navigate(url)
        return BeautifulSoup(page.html, "lxml")

    def count_pages(self, soup: BeautifulSoup, collection_url: str) -> int:
        """
        Number of pages in a collection.

        Uses numbered pagination when present, otherwise follows
        <link rel="next"> up to max_pagination_probe pages.
        """
        parser = CollectionPageParser(soup, collection_url)
        total = parser.extract_page_count()
        if total > 1:
            return total

        next_url = parser.extract_next_link()
        if not next_url:
            return 1

        logger.info("Found next page link to: %s", next_url)
        current = 2
        while current <= self.max_pagination_probe:
            try:
                next_soup = self.load(next_url)
            except NavigationError as e:
                logger.error("Error checking pagination: %s", e)
                return current - 1

            next_url = CollectionPageParser(next_soup, next_url).extract_next_link()
            if not next_url:
                return current
            current += 1

        logger.info("Reached maximum pagination check limit of %d pages", self.max_pagination_probe)
        return self.max_pagination_probe

    def iter_product_urls(self, collection_url: str, first_page: BeautifulSoup) -> Iterator[str]:
        """Yield product URLs page by page; pages that fail to load are skipped."""
        total_pages = self.count_pages(first_page, collection_url)
        max_pages = min(self.max_pages, total_pages) if self.max_pages > 0 else total_pages
        logger.info("Found %d pages in collection, crawling %d", total_pages, max_pages)

        for page_number in range(1, max_pages + 1):
            if page_number == 1:
                soup = first_page
            else:
                try:
                    soup = self.load(with_page(collection_url, page_number))
                except NavigationError as e:
                    logger.error("Error navigating to page %d: %s", page_number, e)
                    continue

            links = CollectionPageParser(soup, collection_url).extract_product_links()
            logger.info("Found %d products on page %d/%d", len(links), page_number, max_pages)
            yield from links

    def extract_product(self, url: str) -> Optional[ScrapedProduct]:
        """Extract one product page; failures are logged and return None."""
        try:
            extractor = self.extractor_class(url, fetcher=self.fetcher)
            extractor.fetch()
            product = extractor.extract()
        except (NavigationError, ValueError, KeyError, TypeError, AttributeError) as e:
            error_msg = f"{type(e).__name__}: {str(e)[:200]}"
            logger.error("Error extracting data for %s: %s", url, error_msg)
            self.failed_urls.append({"url": url, "error": error_msg})
            return None

        if self.tracker is not None:
            self.tracker.record(product.to_dict())
        logger.info("Extracted %s (%s)", product.title, product.handle)
        return product

    def pause(self) -> None:
        if self.delay:
            time.sleep(self.delay)


class StoreCrawler(BaseCollectionCrawler):
    """
    Crawls every collection linked from a store's /collections page.

    Usage:
        with PageFetcher() as fetcher:
            crawler = StoreCrawler("https://shop.example", fetcher)
            result = CrawlResult("https://shop.example", "products.json")
            crawler.crawl(result)
    """

    def __init__(self, store_url: str, fetcher: PageFetcher, save_interval: int = 20, **kwargs: Any):
        super().__init__(fetcher, **kwargs)
        self.base_url = normalize_store_url(store_url)
        self.save_interval = save_interval

    def discover_collections(self) -> List[CollectionInfo]:
        """
        Collections to crawl, with /collections/all last.

        Raises:
            NavigationError: If the collections page cannot be loaded
        """
        collections_url = f"{self.base_url}collections"
        logger.info("Navigating to collections list: %s", collections_url)
        soup = self.load(collections_url)

        collections = CollectionPageParser(soup, collections_url).extract_collection_links()
        logger.info("Found %d collections", len(collections))

        regular = [c for c in collections if '/collections/all' not in c.url]
        all_products = [c for c in collections if '/collections/all' in c.url]
        if not all_products:
            all_products = [CollectionInfo(
                title='All Products',
                url=f"{self.base_url}collections/all",
                handle='all',
            )]
        return regular + all_products[:1]

    def crawl(self, result: CrawlResult) -> CrawlResult:
        """Crawl all collections into result, flushing progress as it goes."""
        collections = self.discover_collections()
        result.set_collections([c.to_dict() for c in collections])

        for index, collection in enumerate(collections, 1):
            if '/collections/frontpage' in collection.url and len(collections) > 1:
                logger.info('Skipping "Featured Products" collection')
                continue

            logger.info('Collection %d/%d: "%s" (%s)', index, len(collections),
                        collection.title, collection.url)
            try:
                count = self.crawl_collection(collection, result)
            except NavigationError as e:
                logger.error("Error processing collection %s: %s", collection.title, e)
                continue

            result.update_collection("url", collection.url, productCount=count, crawled=True)
            logger.info('Completed collection "%s" - found %d products', collection.title, count)
            result.flush()

        result.flush()
        return result

    def crawl_collection(self, collection: CollectionInfo, result: CrawlResult) -> int:
        """
        Crawl one collection into result.

        Returns:
            Number of new products added from this collection
        """
        first_page = self.load(collection.url)
        added = 0

        for url in self.iter_product_urls(collection.url, first_page):
            handle = product_handle(url)
            if result.has_product(handle):
                logger.debug('Product "%s" already crawled, skipping', handle)
                continue

            product = self.extract_product(url)
            if product is not None:
                if collection.title not in product.categories:
                    product.categories.append(collection.title)
                if result.add_product(product.to_dict(), key=product.handle or handle):
                    added += 1
                    if self.save_interval > 0 and result.total_products % self.save_interval == 0:
                        result.flush()
                # The page may report a different handle than its URL
                if handle:
                    result.mark_seen(handle)

            self.pause()

        return added


class SitemapCrawler(BaseCollectionCrawler):
    """
    Crawls the collections listed in a sitemap, one output file each.

    Usage:
        collections = SitemapDiscoverer("sitemap_collections_1.xml").discover()
        with PageFetcher() as fetcher:
            SitemapCrawler(fetcher, output_dir="processed_data/categories").crawl(collections)
    """

    def __init__(
        self,
        fetcher: PageFetcher,
        output_dir: str,
        save_html: bool = False,
        **kwargs: Any,
    ):
        super().__init__(fetcher, **kwargs)
        self.output_dir = output_dir
        self.save_html = save_html

    def crawl(self, collections: List[Any], debug_collection: str = "") -> List[Dict[str, Any]]:
        """
        Crawl sitemap collections and write <handle>.json per collection.

        Args:
            collections: SitemapCollection entries
            debug_collection: If set, only crawl the collection with this handle

        Returns:
            Summary dicts (handle, file, products, error)
        """
        if debug_collection:
            logger.info('Debug mode: only crawling collection "%s"', debug_collection)
            collections = [c for c in collections if c.handle == debug_collection]

        if not collections:
            logger.error("No collections found in sitemap")
            return []

        os.makedirs(self.output_dir, exist_ok=True)
        save_json(
            {
                "totalCollections": len(collections),
                "collections": [c.to_metadata() for c in collections],
            },
            os.path.join(self.output_dir, "collections_metadata.json"),
        )

        summary = []
        for index, collection in enumerate(collections, 1):
            logger.info("Processing collection %d/%d: %s", index, len(collections), collection.handle)

            if not collection.handle:
                logger.info("Skipping collection with no handle: %s", collection.url)
                continue

            record = self.crawl_collection(collection)
            output_file = os.path.join(self.output_dir, f"{collection.handle}.json")
            save_json(record, output_file)
            logger.info('Saved %d products for collection "%s" to %s',
                        len(record["products"]), collection.handle, output_file)

            summary.append({
                "handle": collection.handle,
                "file": output_file,
                "products": len(record["products"]),
                "error": record.get("error"),
            })

            if self.delay:
                time.sleep(self.delay * 2)

        return summary

    def crawl_collection(self, collection: Any) -> Dict[str, Any]:
        """Crawl one sitemap collection into a collection record."""
        try:
            page = self.fetcher.navigate(collection.url)
        except NavigationError as e:
            logger.error("Error crawling collection %s: %s", collection.handle, e)
            return {
                "handle": collection.handle,
                "url": collection.url,
                "error": str(e),
                "products": [],
            }

        self._snapshot(page.html, f"{collection.handle}_page1.html")
        soup = BeautifulSoup(page.html, "lxml")
        parser = CollectionPageParser(soup, collection.url)

        record = {
            "handle": collection.handle,
            "url": collection.url,
            "title": parser.extract_title(),
            "description": parser.extract_description(),
            "image": collection.image["url"] if collection.image else None,
            "products": [],
            "totalProducts": 0,
            "crawledAt": datetime.now(timezone.utc).isoformat(),
        }

        seen = set()
        for url in self.iter_product_urls(collection.url, soup):
            handle = product_handle(url)
            if handle in seen:
                continue

            product = self.extract_product(url)
            if product is not None:
                category = record["title"] or collection.handle
                if category not in product.categories:
                    product.categories.append(category)
                record["products"].append(product.to_dict())
                seen.update(h for h in (handle, product.handle) if h)
                record["totalProducts"] = len(record["products"])

            self.pause()

        return record

    def _snapshot(self, html: str, filename: str) -> None:
        if self.save_html:
            save_html(html, filename, os.path.join(self.output_dir, "debug"))
