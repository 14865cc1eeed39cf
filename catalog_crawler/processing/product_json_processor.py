"""
Saved product page post-processor

Reads a saved product page, pulls out its embedded product JSON and gives
every variant a resolved "image" URL.
"""

import logging
from typing import Any, Dict, Optional

from bs4 import BeautifulSoup

from ..common.constants import DEFAULT_IMAGE_BASE_URL
from ..common.url_utils import get_origin, has_scheme
from ..extraction.crawl_result import save_json
from ..extraction.parsers import ProductJsonParser
from ..extraction.variant_images import resolve_variant_images

logger = logging.getLogger(__name__)


def page_base_url(soup: BeautifulSoup) -> str:
    """Origin from <link rel="canonical"> or og:url, else the Shopify CDN."""
    canonical = soup.find('link', rel='canonical')
    if canonical and has_scheme(canonical.get('href', '')):
        return get_origin(canonical['href'])

    og_url = soup.find('meta', property='og:url')
    if og_url and has_scheme(og_url.get('content', '')):
        return get_origin(og_url['content'])

    return DEFAULT_IMAGE_BASE_URL


def attach_variant_images(product_json: Dict[str, Any], base_url: str) -> Dict[str, Any]:
    """Set variant["image"] on every variant dict of product_json in place."""
    parser = ProductJsonParser()
    resolved = resolve_variant_images(
        parser.raw_images(product_json),
        parser.raw_variants(product_json),
        base_url,
    )

    variant_dicts = [v for v in product_json.get('variants') or [] if isinstance(v, dict)]
    for variant, result in zip(variant_dicts, resolved):
        variant['image'] = result.image
    return product_json


def process_product_html(input_file: str, output_file: str, base_url: Optional[str] = None) -> Dict[str, Any]:
    """
    Extract product JSON from a saved page and write it with variant images.

    Raises:
        FileNotFoundError: If input_file does not exist
        ValueError: If the page has no product JSON
    """
    logger.info("Processing %s...", input_file)
    with open(input_file, 'r', encoding='utf-8') as f:
        soup = BeautifulSoup(f.read(), 'lxml')

    product_json, source = ProductJsonParser().find_product_json(soup)
    if product_json is None:
        raise ValueError(f"No product JSON script tag found in {input_file}")

    logger.info("Found product: %s (from %s)", product_json.get('title'), source)
    logger.info("Variants: %d, Images: %d",
                len(product_json.get('variants') or []), len(product_json.get('images') or []))

    attach_variant_images(product_json, base_url or page_base_url(soup))
    save_json(product_json, output_file)
    logger.info("Processed data saved to %s", output_file)
    return product_json
