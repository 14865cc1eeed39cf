"""
Post-processing of crawl output.

Modules:
    stats - Statistics, collection, categorized and price range views
    exporter - process_crawl() writes every view to an output directory
    product_json_processor - Variant images for a saved product page
"""

from .exporter import process_crawl
from .product_json_processor import process_product_html
from .stats import (
    generate_categorized_products,
    generate_collection_data,
    generate_price_range_data,
    generate_stats,
    load_crawl,
)

__all__ = [
    'load_crawl',
    'generate_stats',
    'generate_collection_data',
    'generate_categorized_products',
    'generate_price_range_data',
    'process_crawl',
    'process_product_html',
]
