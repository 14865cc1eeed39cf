#!/usr/bin/env python3
"""
Sitemap Collection Crawl Script

Crawls the collections listed in a Shopify collections sitemap and writes
one JSON file per collection plus collections_metadata.json.

Usage:
    python3 scripts/crawl_sitemap.py --sitemap sitemap_collections_1.xml
    python3 scripts/crawl_sitemap.py --sitemap https://shop.example/sitemap_collections_1.xml
    python3 scripts/crawl_sitemap.py --sitemap sitemap.xml --debug-collection summer --save-html
"""

import argparse
import logging
import os
import sys

import requests

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from catalog_crawler.common.config_loader import load_crawler_settings
from catalog_crawler.common.log_config import setup_logging
from catalog_crawler.discovery import SitemapDiscoverer
from catalog_crawler.extraction import PageFetcher, SitemapCrawler
from catalog_crawler.validation import CrawlQualityTracker

logger = logging.getLogger(__name__)


def main():
    settings = load_crawler_settings()

    parser = argparse.ArgumentParser(
        description="Crawl the collections listed in a Shopify sitemap"
    )
    parser.add_argument(
        "--sitemap", "-s",
        default="sitemap_collections_1.xml",
        help="Sitemap file path or URL (default: sitemap_collections_1.xml)"
    )
    parser.add_argument(
        "--output-dir", "-o",
        default="processed_data/categories",
        help="Output directory (default: processed_data/categories)"
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
        "--max-pages", "-p",
        type=int,
        default=0,
        help="Maximum pages per collection (0 = all)"
    )
    parser.add_argument(
        "--debug-collection",
        default="",
        help="Only crawl the collection with this handle"
    )
    parser.add_argument(
        "--wait-time", "-w",
        type=float,
        default=settings["wait_time"],
        help=f"Extra wait after each page load in seconds (default: {settings['wait_time']})"
    )
    parser.add_argument(
        "--save-html",
        action="store_true",
        help="Save collection page HTML for debugging"
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
    print("Sitemap Collection Crawl")
    print("=" * 60)
    print(f"  Sitemap:          {args.sitemap}")
    print(f"  Output dir:       {args.output_dir}")
    print(f"  Max pages:        {args.max_pages or 'all'}")
    print(f"  Timeout:          {args.timeout}s")
    print(f"  Retries:          {args.retries}")
    print(f"  Product delay:    {args.delay}s")
    if args.debug_collection:
        print(f"  Debug collection: {args.debug_collection}")

    try:
        with SitemapDiscoverer(args.sitemap, timeout=args.timeout) as discoverer:
            collections = discoverer.discover()
    except (FileNotFoundError, requests.RequestException) as e:
        logger.error("Could not read sitemap: %s", e)
        sys.exit(1)

    tracker = CrawlQualityTracker()
    with PageFetcher(
        timeout=args.timeout,
        retries=args.retries,
        wait_time=args.wait_time,
        user_agent=settings["user_agent"],
    ) as fetcher:
        crawler = SitemapCrawler(
            fetcher,
            output_dir=args.output_dir,
            save_html=args.save_html,
            delay=args.delay,
            max_pages=args.max_pages,
            max_pagination_probe=settings["max_pagination_probe"],
            tracker=tracker,
        )
        summary = crawler.crawl(collections, debug_collection=args.debug_collection)

    if not summary:
        sys.exit(1)

    print("\n" + "=" * 60)
    print("Crawling Completed")
    print("=" * 60)
    print(f"  Collections:      {len(summary)}")
    print(f"  Failed:           {sum(1 for s in summary if s['error'])}")
    print(f"  Products:         {sum(s['products'] for s in summary)}")
    print(f"  Output dir:       {args.output_dir}")

    tracker.print_final_report()


if __name__ == "__main__":
    main()
