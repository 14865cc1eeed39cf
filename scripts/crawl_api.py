#!/usr/bin/env python3
"""
Storefront API Crawl Script

Fetches products through the Shopify Storefront GraphQL API, either
collection by collection or as one product listing.

Usage:
    python3 scripts/crawl_api.py --store shop.example --access-token TOKEN
    python3 scripts/crawl_api.py --store shop.example --no-collections --limit 0

Credentials (in order of precedence):
    1. --access-token flag
    2. SHOPIFY_STOREFRONT_TOKEN environment variable (.env supported)
"""

import argparse
import logging
import os
import sys

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from dotenv import load_dotenv

from catalog_crawler.common.config_loader import load_storefront_settings
from catalog_crawler.common.log_config import setup_logging
from catalog_crawler.extraction import CrawlResult
from catalog_crawler.storefront import StorefrontAPIClient, StorefrontCatalog

load_dotenv()

logger = logging.getLogger(__name__)


def main():
    settings = load_storefront_settings()

    parser = argparse.ArgumentParser(
        description="Crawl Shopify products using the Storefront API"
    )
    parser.add_argument(
        "--store", "-s",
        required=True,
        help="Shopify store domain (without https://)"
    )
    parser.add_argument(
        "--access-token", "-t",
        default=os.environ.get("SHOPIFY_STOREFRONT_TOKEN"),
        help="Storefront API access token (default: SHOPIFY_STOREFRONT_TOKEN env var)"
    )
    parser.add_argument(
        "--output", "-o",
        default="shopify_products_api.json",
        help="Output JSON file (default: shopify_products_api.json)"
    )
    parser.add_argument(
        "--limit", "-l",
        type=int,
        default=settings["page_size"],
        help=f"Maximum products per listing, 0 for all (default: {settings['page_size']})"
    )
    parser.add_argument(
        "--collections",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Crawl products by collection (default: yes)"
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

    if not args.access_token:
        logger.error("No access token: pass --access-token or set SHOPIFY_STOREFRONT_TOKEN")
        sys.exit(1)

    print("=" * 60)
    print("Shopify Storefront API Crawl")
    print("=" * 60)
    print(f"  Store:            {args.store}")
    print(f"  Output file:      {args.output}")
    print(f"  Limit:            {args.limit or 'all'}")
    print(f"  By collections:   {args.collections}")

    with StorefrontAPIClient(
        args.store,
        args.access_token,
        api_version=settings["api_version"],
    ) as client:
        catalog = StorefrontCatalog(client, limit=args.limit, request_delay=settings["request_delay"])
        result = CrawlResult(store=catalog.store_url, output_path=args.output)
        catalog.crawl(result, by_collections=args.collections)

    result.mark_completed()
    result.flush()

    print("\n" + "=" * 60)
    print("Crawling Completed")
    print("=" * 60)
    print(f"  Total products:   {result.total_products}")
    print(f"  Data saved to:    {args.output}")


if __name__ == "__main__":
    main()
