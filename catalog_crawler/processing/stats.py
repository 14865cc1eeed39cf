"""
Catalog Statistics

Aggregate views over a crawl output file: overall statistics, per-collection
summaries, categorized product lists and price buckets.

All functions take the crawl dict ({"products": [...], "collections": [...]})
and return plain JSON-serializable data.
"""

import json
import logging
import math
import os
from collections import Counter
from statistics import median
from typing import Any, Dict, List, Optional

from ..common.config_loader import load_price_ranges

logger = logging.getLogger(__name__)


def load_crawl(path: str) -> Dict[str, Any]:
    """
    Load a crawl output file.

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file holds no products
    """
    if not os.path.exists(path):
        raise FileNotFoundError(f"Input file not found: {path}")

    with open(path, 'r', encoding='utf-8') as f:
        data = json.load(f)

    products = data.get('products') if isinstance(data, dict) else None
    if not isinstance(products, list) or not products:
        raise ValueError("No products found in the input file")

    logger.info("Found %d products to process", len(products))
    return data


def product_price(product: Dict[str, Any]) -> Optional[float]:
    """Numeric price of a product, or None when missing or not a number."""
    price = product.get('price')
    if isinstance(price, bool) or not isinstance(price, (int, float)):
        return None
    if math.isnan(price):
        return None
    return price


def first_image(product: Dict[str, Any]) -> Optional[Any]:
    images = product.get('images') or []
    return images[0] if images else None


def product_categories(product: Dict[str, Any]) -> List[str]:
    """Collection titles of a product (page crawls use categories, API crawls collections)."""
    categories = product.get('categories')
    if not categories:
        categories = product.get('collections')
    return [c for c in categories or [] if c]


def price_bucket(price: float, price_ranges: List[Dict[str, Any]]) -> Optional[str]:
    """Label of the first half-open [min, max) bucket holding price."""
    for bucket in price_ranges:
        low = bucket.get('min') or 0
        high = bucket.get('max')
        if price >= low and (high is None or price < high):
            return bucket['label']
    return None


def _summary(product: Dict[str, Any], *keys: str) -> Dict[str, Any]:
    data = {
        'handle': product.get('handle'),
        'title': product.get('title'),
        'price': product.get('price'),
    }
    for key in keys:
        data[key] = product.get(key)
    data['url'] = product.get('url')
    data['image'] = first_image(product)
    return data


def generate_stats(data: Dict[str, Any], price_ranges: Optional[List[Dict[str, Any]]] = None) -> Dict[str, Any]:
    """Overall catalog statistics."""
    logger.info("Generating product statistics...")
    price_ranges = price_ranges or load_price_ranges()

    products = data.get('products') or []
    collections = data.get('collections') or []

    product_types: Counter = Counter()
    vendors: Counter = Counter()
    tags: Counter = Counter()
    ranges = {bucket['label']: 0 for bucket in price_ranges}
    prices = []
    has_images = has_variants = on_sale = 0

    for product in products:
        if product.get('productType'):
            product_types[product['productType']] += 1
        if product.get('vendor'):
            vendors[product['vendor']] += 1

        price = product_price(product)
        if price is not None:
            prices.append(price)
            label = price_bucket(price, price_ranges)
            if label:
                ranges[label] += 1

        if product.get('images'):
            has_images += 1
        if len(product.get('variants') or []) > 1:
            has_variants += 1
        if product.get('onSale'):
            on_sale += 1

        if isinstance(product.get('tags'), list):
            tags.update(t for t in product['tags'] if t)

    price_stats = {'min': None, 'max': None, 'avg': None, 'median': None, 'ranges': ranges}
    if prices:
        price_stats.update({
            'min': min(prices),
            'max': max(prices),
            'avg': sum(prices) / len(prices),
            'median': median(prices),
        })

    top_collections = sorted(
        (c for c in collections if _collection_count(c) > 0),
        key=_collection_count,
        reverse=True,
    )[:10]

    return {
        'totalProducts': len(products),
        'totalCollections': len(collections),
        'crawledCollections': sum(1 for c in collections if c.get('crawled')),
        'productTypes': dict(product_types),
        'vendors': dict(vendors),
        'priceStats': price_stats,
        'hasImages': has_images,
        'hasVariants': has_variants,
        'onSale': on_sale,
        'collectionsWithMostProducts': [
            {'title': c.get('title'), 'productCount': _collection_count(c), 'url': c.get('url')}
            for c in top_collections
        ],
        'popularTags': dict(tags.most_common(20)),
    }


def _collection_count(collection: Dict[str, Any]) -> int:
    # API crawls record crawledProducts instead of productCount
    return collection.get('productCount') or collection.get('crawledProducts') or 0


def generate_collection_data(data: Dict[str, Any]) -> Dict[str, Any]:
    """Products grouped by collection title with price summaries."""
    logger.info("Generating collection-specific data...")
    collections: Dict[str, Dict[str, Any]] = {}

    for product in data.get('products') or []:
        for category in product_categories(product):
            entry = collections.setdefault(category, {
                'title': category,
                'products': [],
                'productCount': 0,
                'avgPrice': 0,
                'priceRange': {'min': None, 'max': None},
                '_total': 0.0,
                '_priced': 0,
            })

            entry['products'].append({
                'handle': product.get('handle'),
                'title': product.get('title'),
                'price': product.get('price'),
                'compareAtPrice': product.get('compareAtPrice'),
                'onSale': product.get('onSale'),
                'url': product.get('url'),
                'images': (product.get('images') or [])[:1],
            })
            entry['productCount'] += 1

            price = product_price(product)
            if price is not None:
                entry['_total'] += price
                entry['_priced'] += 1
                price_range = entry['priceRange']
                if price_range['min'] is None or price < price_range['min']:
                    price_range['min'] = price
                if price_range['max'] is None or price > price_range['max']:
                    price_range['max'] = price

    for entry in collections.values():
        if entry['_priced']:
            entry['avgPrice'] = entry['_total'] / entry['_priced']
        del entry['_total']
        del entry['_priced']

    return collections


def generate_categorized_products(data: Dict[str, Any]) -> Dict[str, Any]:
    """On-sale, best value, by type and by vendor product lists."""
    logger.info("Generating categorized product lists...")
    on_sale = []
    by_type: Dict[str, List[Dict[str, Any]]] = {}
    by_vendor: Dict[str, List[Dict[str, Any]]] = {}

    for product in data.get('products') or []:
        price = product_price(product)
        compare_at = product.get('compareAtPrice')
        if product.get('onSale') and price is not None and compare_at and compare_at > price:
            item = _summary(product, 'compareAtPrice')
            item['discountPercent'] = (compare_at - price) / compare_at * 100
            on_sale.append(item)

        if product.get('productType'):
            by_type.setdefault(product['productType'], []).append(_summary(product))
        if product.get('vendor'):
            by_vendor.setdefault(product['vendor'], []).append(_summary(product))

    on_sale.sort(key=lambda p: p['discountPercent'], reverse=True)

    return {
        'onSale': on_sale,
        'bestValue': on_sale[:10],
        'byType': by_type,
        'byVendor': by_vendor,
    }


def generate_price_range_data(
    data: Dict[str, Any],
    price_ranges: Optional[List[Dict[str, Any]]] = None,
) -> Dict[str, Any]:
    """Products bucketed by price range; unpriced products are left out."""
    logger.info("Generating price range data...")
    price_ranges = price_ranges or load_price_ranges()

    buckets = {
        bucket['label']: {'range': [bucket.get('min') or 0, bucket.get('max')], 'products': []}
        for bucket in price_ranges
    }

    for product in data.get('products') or []:
        price = product_price(product)
        if price is None:
            continue
        label = price_bucket(price, price_ranges)
        if label:
            buckets[label]['products'].append(_summary(product))

    return buckets
