#!/usr/bin/env python3
"""
Saved Product Page Processor

Extracts the product JSON from a saved Shopify product page and adds a
resolved image URL to every variant.

Usage:
    python3 scripts/process_product_json.py page.html
    python3 scripts/process_product_json.py page.html processed_data/product.json --base-url https://shop.example
"""

import argparse
import logging
import os
import sys

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from catalog_crawler.common.log_config import setup_logging
from catalog_crawler.processing import process_product_html

logger = logging.getLogger(__name__)


def main():
    parser = argparse.ArgumentParser(
        description="Add variant images to the product JSON of a saved product page"
    )
    parser.add_argument(
        "input",
        nargs="?",
        default="shopify_products_image.json",
        help="Saved product page (default: shopify_products_image.json)"
    )
    parser.add_argument(
        "output",
        nargs="?",
        default="processed_data/shopify_products_clean.json",
        help="Output JSON file (default: processed_data/shopify_products_clean.json)"
    )
    parser.add_argument(
        "--base-url",
        help="Base URL for relative image paths (default: page canonical origin)"
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

    try:
        product = process_product_html(args.input, args.output, base_url=args.base_url)
    except (FileNotFoundError, ValueError) as e:
        logger.error("Error processing file: %s", e)
        sys.exit(1)

    print(f"Found product: {product.get('title')}")
    print(f"Variants: {len(product.get('variants') or [])}")
    print(f"Processed data saved to {args.output}")


if __name__ == "__main__":
    main()
