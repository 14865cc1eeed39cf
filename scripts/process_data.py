#!/usr/bin/env python3
"""
Crawl Post-Processing Script

Turns a crawl output file into statistics, per-collection summaries,
categorized product lists and price buckets.

Usage:
    python3 scripts/process_data.py --input shopify_products.json
    python3 scripts/process_data.py --input shopify_products.json --output processed_data --format csv

Exit codes:
    0 = all files written
    1 = missing input file or no products in it
"""

import argparse
import logging
import os
import sys

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from catalog_crawler.common.log_config import setup_logging
from catalog_crawler.processing import process_crawl
from catalog_crawler.processing.exporter import OUTPUT_FORMATS

logger = logging.getLogger(__name__)


def main():
    parser = argparse.ArgumentParser(
        description="Process and analyze crawled Shopify product data"
    )
    parser.add_argument(
        "--input", "-i",
        default="shopify_products.json",
        help="Input JSON file with crawled products (default: shopify_products.json)"
    )
    parser.add_argument(
        "--output", "-o",
        default="processed_data",
        help="Output directory for processed data (default: processed_data)"
    )
    parser.add_argument(
        "--format", "-f",
        choices=OUTPUT_FORMATS,
        default="json",
        help="Output format (default: json)"
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
    setup_logging(verbose=args.verbose, quiet=args.quiet)

    print("=" * 60)
    print("Processing Product Data")
    print("=" * 60)
    print(f"  Input file:       {args.input}")
    print(f"  Output dir:       {args.output}")
    print(f"  Format:           {args.format}")

    try:
        written = process_crawl(args.input, args.output, fmt=args.format)
    except (FileNotFoundError, ValueError) as e:
        logger.error("Error processing data: %s", e)
        sys.exit(1)

    print("\n" + "=" * 60)
    print("Processing Completed")
    print("=" * 60)
    for path in written.values():
        print(f"  {path}")


if __name__ == "__main__":
    main()
