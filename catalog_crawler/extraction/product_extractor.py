"""
Product Page Extractor

Extracts one product from a storefront product page.

Embedded product JSON is preferred; when a page has none the extractor
falls back to JSON-LD and theme markup. Variant images always go through
the variant image resolver, so every variant image is absolute and
high-resolution.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from bs4 import BeautifulSoup

from ..common.url_utils import get_origin, product_handle
from ..models import RawImage, RawVariant, ResolvedVariant, ScrapedProduct
from .page_fetcher import PageFetcher
from .parsers import HTMLContentParser, ProductJsonParser, StructuredDataParser
from .pricing import estimate_compare_price
from .variant_images import (
    OPTION_MATCH_RULES,
    normalize_image_urls,
    resolve_variant_images,
)

logger = logging.getLogger(__name__)


class ProductPageExtractor:
    """Extracts product data from a Shopify product page."""

    def __init__(
        self,
        url: str,
        fetcher: PageFetcher | None = None,
        html: str | None = None,
    ):
        self.url = url
        self.final_url = url
        self.fetcher = fetcher
        self.html = None
        self.soup = None
        self.json_parser = ProductJsonParser()
        self.structured_parser = StructuredDataParser()
        if html is not None:
            self.load_html(html)

    def fetch(self) -> None:
        """Fetch the product page HTML."""
        if self.fetcher is None:
            self.fetcher = PageFetcher()
        page = self.fetcher.navigate(self.url)
        self.load_html(page.html, page.final_url)

    def load_html(self, html: str, final_url: Optional[str] = None) -> None:
        """Load pre-fetched HTML for extraction without a network request."""
        self.html = html
        self.final_url = final_url or self.url
        self.soup = BeautifulSoup(html, "lxml")

    def extract(self) -> ScrapedProduct:
        """Extract all product data."""
        if self.soup is None:
            raise ValueError(f"No HTML loaded for {self.url}")

        product_json, source = self.json_parser.find_product_json(self.soup)
        if product_json:
            logger.debug("Found product JSON data from source: %s", source)
            product = self._from_product_json(product_json, source)
            if product.title:
                return product

        logger.debug("No product JSON data found, falling back to DOM scraping")
        return self._from_dom()

    # ── Product JSON ──────────────────────────────────────────────────────────

    def _from_product_json(self, product_json: Dict[str, Any], source: str) -> ScrapedProduct:
        html_parser = HTMLContentParser(self.soup)

        raw_images = self.json_parser.raw_images(product_json)
        images = normalize_image_urls([img.src for img in raw_images], self.final_url)

        price, compare_at = self.json_parser.product_prices(product_json)
        on_sale = compare_at is not None and price is not None and compare_at > price

        raw_variants = self.json_parser.raw_variants(product_json)
        variants = resolve_variant_images(raw_images, raw_variants, self.final_url)
        for variant in variants:
            if not variant.price:
                variant.price = price

        logger.debug("Product has %d variants and %d images", len(variants), len(images))

        title = (product_json.get('title') or '').strip()
        return ScrapedProduct(
            url=self.final_url,
            handle=product_json.get('handle') or product_handle(self.final_url) or '',
            title=title,
            description=product_json.get('description') or product_json.get('body_html') or '',
            price=price,
            compare_at_price=compare_at,
            on_sale=on_sale,
            images=images,
            variants=variants,
            options=self.json_parser.options(product_json),
            product_type=product_json.get('type') or product_json.get('product_type') or None,
            vendor=product_json.get('vendor') or None,
            breadcrumbs=html_parser.extract_breadcrumbs(title),
            tags=self._tags(product_json.get('tags')),
            source=source,
        )

    # ── DOM fallback ──────────────────────────────────────────────────────────

    def _from_dom(self) -> ScrapedProduct:
        html_parser = HTMLContentParser(self.soup)
        json_ld = self.structured_parser.parse(self.soup)

        title = html_parser.extract_title()
        description = html_parser.extract_description()

        price, compare_at, on_sale = html_parser.extract_prices()
        if price is None and json_ld:
            price = self.structured_parser.extract_price(json_ld)

        images = self._collect_dom_images(html_parser, json_ld)
        meta_product = self.json_parser.find_analytics_meta(self.soup)

        options = []
        if meta_product:
            meta_images = self.json_parser.raw_images(meta_product)
            if not images and meta_images:
                images = normalize_image_urls([img.src for img in meta_images], self.final_url)
            variants = resolve_variant_images(
                meta_images or [RawImage(src=src) for src in images],
                self.json_parser.raw_variants(meta_product, prices_in_cents=True),
                self.final_url,
                rules=OPTION_MATCH_RULES,
            )
            options = self.json_parser.options(meta_product)
        else:
            options = html_parser.extract_options()
            available = self.structured_parser.extract_availability(json_ld)
            default = RawVariant(
                title='Default Title',
                price=price,
                compare_at_price=compare_at,
                available=True if available is None else available,
            )
            variants = resolve_variant_images(
                [RawImage(src=src) for src in images], [default], self.final_url
            )

        images = images or self._placeholder_images(html_parser)
        self._backfill_variant_images(variants, images)

        if html_parser.has_sale_badge():
            on_sale = True
            self._estimate_compare_prices(variants)

        return ScrapedProduct(
            url=self.final_url,
            handle=product_handle(self.final_url) or '',
            title=title,
            description=description,
            price=price,
            compare_at_price=compare_at,
            on_sale=on_sale,
            images=images,
            variants=variants,
            options=options,
            product_type=html_parser.extract_product_type(),
            vendor=html_parser.extract_vendor() or self.structured_parser.extract_vendor(json_ld) or None,
            breadcrumbs=html_parser.extract_breadcrumbs(title),
            tags=html_parser.extract_tags(),
            source="dom",
        )

    def _collect_dom_images(self, html_parser: HTMLContentParser, json_ld: Dict[str, Any]) -> List[str]:
        """Image cascade: JSON-LD, gallery markup, inline scripts, keyword <img> tags."""
        sources = [
            lambda: self.structured_parser.extract_images(json_ld),
            html_parser.extract_gallery_images,
            html_parser.extract_script_image_urls,
            html_parser.extract_keyword_images,
        ]
        for source in sources:
            images = normalize_image_urls(source(), self.final_url)
            if images:
                return images
        return []

    def _placeholder_images(self, html_parser: HTMLContentParser) -> List[str]:
        """Store logo, or a marker URL showing no image was found."""
        logo = normalize_image_urls([html_parser.extract_logo()], self.final_url)
        if logo:
            return logo
        logger.warning("No product images found on %s", self.final_url)
        return [get_origin(self.final_url) + '/no-image-available']

    @staticmethod
    def _backfill_variant_images(variants: List[ResolvedVariant], images: List[str]) -> None:
        if not images:
            return
        for variant in variants:
            if not variant.image:
                variant.image = images[0]

    @staticmethod
    def _estimate_compare_prices(variants: List[ResolvedVariant]) -> None:
        for variant in variants:
            if variant.compare_at_price is None and variant.price:
                variant.compare_at_price = estimate_compare_price(variant.price)
                variant.estimated_compare_price = True

    @staticmethod
    def _tags(tags: Any) -> List[str]:
        if isinstance(tags, str):
            return [t.strip() for t in tags.split(',') if t.strip()]
        if isinstance(tags, list):
            return [str(t) for t in tags if t]
        return []
