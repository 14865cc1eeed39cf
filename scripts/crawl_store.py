#!/usr/bin/env python3
"""
Storefront Crawl Script

Crawls every collection of a Shopify store page by page and writes all
products to one JSON file. Progress is saved while crawling, so an
interrupted run keeps what it already found.

Usage:
    python3 scripts/crawl_store.py --url https://shop.example
    python3 scripts/crawl_store.py --url https://shop.example --pages 2 --output data/products.json
    python3 scripts/crawl_store.py --url shop.example --delay 2 --save-interval 50

Defaults come from config/crawler.yaml; flags override them.
"""

import argparse
import logging
import os
import sys

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from catalog_crawler.common.config_loader import load_crawler_settings
from catalog_crawler.common.log_config import setup_logging
from catalog_crawler.extraction import CrawlResult, NavigationError, PageFetcher, StoreCrawler
from catalog_crawler.validation import CrawlQualityTracker

logger = logging.getLogger(__name__)


def main():
    settings = load_crawler_settings()

    parser = argparse.ArgumentParser(
        description="Crawl all collections and products of a Shopify store"
    )
    parser.add_argument(
        "--url", "-u",
        required=True,
        help="Shopify store URL (e.g. https://shop.example)"
    )
    parser.add_argument(
        "--output", "-o",
        default="shopify_products.json",
        help="Output JSON file (default: shopify_products.json)"
    )
    parser.add_argument(
        "--pages", "-p",
        type=int,
        default=0,
        help="Maximum pages to crawl per collection (0 = all)"
    )
    parser.add_argument(
        "--timeout", "-t",
        type=float,
        default=settings["timeout"],
        help=f"Page load timeout in seconds (default: {settings['timeout']})"
    )
    parser.add_argument(
        "--retries", "-r",
        type=int,
        default=settings["retries"],
        help=f"Attempts per page (default: {settings['retries']})"
    )
    parser.add_argument(
        "--delay", "-d",
        type=float,
        default=settings["delay"],
        help=f"Delay between product pages in seconds (default: {settings['delay']})"
    )
    parser.add_argument(
        "--save-interval", "-s",
        type=int,
        default=settings["save_interval"],
        help=f"Save progress every N products, 0 = only after each collection (default: {settings['save_interval']})"
    )
    parser.add_argument(
        "--log-file",
        default=None,
        help="Also write a DEBUG log to this file"
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose (debug) logging"
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress info messages, show only warnings and errors"
    )

    args = parser.parse_args()
    setup_logging(verbose=args.verbose, quiet=args.quiet, log_file=args.log_file)

    print("=" * 60)
    print("Shopify Store Crawl")
    print("=" * 60)
    print(f"  Store:            {args.url}")
    print(f"  Output file:      {args.output}")
    print(f"  Pages/collection: {args.pages or 'all'}")
    print(f"  Timeout:          {args.timeout}s")
    print(f"  Retries:          {args.retries}")
    print(f"  Product delay:    {args.delay}s")
    print(f"  Save interval:    {args.save_interval}")

    tracker = CrawlQualityTracker()
    result = CrawlResult(store=args.url, output_path=args.output)

    with PageFetcher(
        timeout=args.timeout,
        retries=args.retries,
        wait_time=settings["wait_time"],
        user_agent=settings["user_agent"],
    ) as fetcher:
        crawler = StoreCrawler(
            args.url,
            fetcher,
            save_interval=args.save_interval,
            delay=args.delay,
            max_pages=args.pages,
            max_pagination_probe=settings["max_pagination_probe"],
            tracker=tracker,
        )
        try:
            crawler.crawl(result)
        except NavigationError as e:
            logger.error("Failed to crawl collections: %s", e)
            sys.exit(1)

    result.mark_completed()
    result.flush()

    print("\n" + "=" * 60)
    print("Crawling Completed")
    print("=" * 60)
    print(f"  Total products:   {result.total_products}")
    print(f"  Failed products:  {len(crawler.failed_urls)}")
    print(f"  Data saved to:    {args.output}")

    tracker.print_final_report()
    if tracker.has_critical_failures():
        logger.warning("More than 5%% of products have no image")


if __name__ == "__main__":
    main()
