"""
Processed Data Exporter

Runs every statistics view over a crawl file and writes the results to an
output directory.
"""

import logging
import os
from typing import Any, Dict, List, Optional

from ..common.csv_utils import write_csv
from ..extraction.crawl_result import save_json
from .stats import (
    first_image,
    generate_categorized_products,
    generate_collection_data,
    generate_price_range_data,
    generate_stats,
    load_crawl,
    product_categories,
)

logger = logging.getLogger(__name__)

OUTPUT_FORMATS = ('json', 'csv')

CSV_COLUMNS = [
    'handle', 'title', 'url', 'price', 'compareAtPrice', 'onSale',
    'productType', 'vendor', 'variants', 'image', 'tags', 'categories',
]


def product_rows(products: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Flatten products into CSV rows; list cells are joined by write_csv."""
    rows = []
    for product in products:
        image = first_image(product)
        rows.append({
            'handle': product.get('handle'),
            'title': product.get('title'),
            'url': product.get('url'),
            'price': product.get('price'),
            'compareAtPrice': product.get('compareAtPrice'),
            'onSale': bool(product.get('onSale')),
            'productType': product.get('productType') or '',
            'vendor': product.get('vendor') or '',
            'variants': len(product.get('variants') or []),
            'image': image.get('url') if isinstance(image, dict) else (image or ''),
            'tags': product.get('tags') or [],
            'categories': product_categories(product),
        })
    return rows


def process_crawl(
    input_path: str,
    output_dir: str,
    fmt: str = 'json',
    price_ranges: Optional[List[Dict[str, Any]]] = None,
) -> Dict[str, str]:
    """
    Write stats.json, collections_data.json, categorized_products.json and
    price_ranges.json (plus products.csv for fmt="csv").

    Args:
        input_path: Crawl output JSON file
        output_dir: Directory for processed files (created if missing)
        fmt: "json" or "csv"
        price_ranges: Price buckets (defaults to config/crawler.yaml)

    Returns:
        Mapping of output name to written file path

    Raises:
        FileNotFoundError: If input_path does not exist
        ValueError: If the input holds no products or fmt is unknown
    """
    if fmt not in OUTPUT_FORMATS:
        raise ValueError(f"Unsupported format: {fmt}. Supported: {', '.join(OUTPUT_FORMATS)}")

    logger.info("Loading data from: %s", input_path)
    data = load_crawl(input_path)
    os.makedirs(output_dir, exist_ok=True)

    outputs = {
        'stats': (generate_stats(data, price_ranges), 'stats.json'),
        'collections': (generate_collection_data(data), 'collections_data.json'),
        'categorized': (generate_categorized_products(data), 'categorized_products.json'),
        'price_ranges': (generate_price_range_data(data, price_ranges), 'price_ranges.json'),
    }

    written = {}
    for name, (payload, filename) in outputs.items():
        path = os.path.join(output_dir, filename)
        save_json(payload, path)
        logger.info("Wrote %s", path)
        written[name] = path

    if fmt == 'csv':
        path = os.path.join(output_dir, 'products.csv')
        count = write_csv(path, product_rows(data['products']), fieldnames=CSV_COLUMNS)
        logger.info("Wrote %d products to %s", count, path)
        written['csv'] = path

    return written
