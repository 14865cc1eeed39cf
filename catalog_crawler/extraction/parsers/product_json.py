"""
Product JSON Parser

Shopify themes embed the product as JSON in the page. This parser finds
that JSON and converts it into RawImage / RawVariant models.

Sources, in priority order:
- <script id="ProductJson-product-template"> and similar template tags
- <script type="application/json"> whose id mentions "Product"
- inline assignments: var product = {...}; window.product = {...}; Product = {...};

Analytics metadata (var meta = {...}; / window.ShopifyAnalytics.meta = {...};)
is parsed separately; it carries variants but usually no images.
"""

import json
import logging
import re
from typing import Any, Dict, List, Optional, Tuple

from bs4 import BeautifulSoup

from ...models import ProductOption, RawImage, RawVariant
from ..pricing import normalize_price, price_from_cents

logger = logging.getLogger(__name__)


class ProductJsonParser:
    """
    Finds and converts embedded Shopify product JSON.

    Usage:
        parser = ProductJsonParser()
        product_json, source = parser.find_product_json(soup)
        if product_json:
            images = parser.raw_images(product_json)
            variants = parser.raw_variants(product_json)
    """

    TEMPLATE_SELECTOR = (
        'script#ProductJson-product-template, '
        'script#ProductJson-template, '
        'script[data-product-json]'
    )

    INLINE_PATTERNS = [
        re.compile(r'var\s+product\s*=\s*(\{[\s\S]*?\});'),
        re.compile(r'window\.product\s*=\s*(\{[\s\S]*?\});'),
        re.compile(r'Product\s*=\s*(\{[\s\S]*?\});'),
    ]

    META_PATTERNS = [
        re.compile(r'var meta\s*=\s*([^;]*);'),
        re.compile(r'window\.ShopifyAnalytics\.meta\s*=\s*([^;]*);'),
    ]

    def find_product_json(self, soup: BeautifulSoup) -> Tuple[Optional[Dict[str, Any]], Optional[str]]:
        """
        Locate the product JSON on a page.

        Returns:
            (product_json, source) or (None, None) when not found
        """
        script = soup.select_one(self.TEMPLATE_SELECTOR)
        if script is not None:
            data = self._loads(script.string or script.get_text())
            if isinstance(data, dict):
                return data, "product-template"

        for script in soup.find_all('script', type='application/json'):
            script_id = script.get('id') or ''
            if 'Product' not in script_id:
                continue
            data = self._loads(script.string or script.get_text())
            if isinstance(data, dict):
                return data, script_id

        for script in soup.find_all('script', src=False):
            content = script.string or script.get_text()
            if not content or ('product =' not in content and 'Product =' not in content):
                continue
            for pattern in self.INLINE_PATTERNS:
                match = pattern.search(content)
                if not match:
                    continue
                data = self._loads(match.group(1))
                if data is None:
                    # Some themes print the object with single quotes
                    data = self._loads(match.group(1).replace("'", '"'))
                if isinstance(data, dict):
                    return data, "script-variable"

        return None, None

    def find_analytics_meta(self, soup: BeautifulSoup) -> Optional[Dict[str, Any]]:
        """
        Locate ShopifyAnalytics product metadata with variants.

        Returns:
            The meta "product" object, or None
        """
        for script in soup.find_all('script', src=False):
            content = script.string or script.get_text()
            if not content or ('var meta' not in content and 'ShopifyAnalytics.meta' not in content):
                continue
            for pattern in self.META_PATTERNS:
                match = pattern.search(content)
                if not match:
                    continue
                meta = self._loads(match.group(1))
                if isinstance(meta, dict):
                    product = meta.get('product')
                    if isinstance(product, dict) and product.get('variants'):
                        return product
        return None

    def raw_images(self, product_json: Dict[str, Any]) -> List[RawImage]:
        """Convert product JSON images (strings or objects) to RawImage."""
        images = []
        for img in product_json.get('images') or []:
            if isinstance(img, str):
                images.append(RawImage(src=img))
            elif isinstance(img, dict) and img.get('src'):
                variant_ids = img.get('variant_ids')
                images.append(RawImage(
                    src=img['src'],
                    variant_ids=list(variant_ids) if isinstance(variant_ids, list) else [],
                    alt=img.get('alt') or '',
                ))
        return images

    def raw_variants(self, product_json: Dict[str, Any], prices_in_cents: bool = False) -> List[RawVariant]:
        """
        Convert product JSON variants to RawVariant.

        Args:
            product_json: Product object from the page
            prices_in_cents: True for sources that always use cents
                (analytics meta); otherwise the cents heuristic applies
        """
        to_price = price_from_cents if prices_in_cents else normalize_price
        variants = []

        for v in product_json.get('variants') or []:
            if not isinstance(v, dict):
                continue
            variants.append(RawVariant(
                id=v.get('id'),
                title=v.get('title') or v.get('name') or '',
                sku=v.get('sku') or None,
                option1=v.get('option1') or None,
                option2=v.get('option2') or None,
                option3=v.get('option3') or None,
                featured_image_src=self._featured_src(v.get('featured_image')),
                price=to_price(v.get('price')),
                compare_at_price=to_price(v.get('compare_at_price')) or None,
                available=self._availability(v),
            ))
        return variants

    def product_prices(self, product_json: Dict[str, Any]) -> Tuple[Optional[float], Optional[float]]:
        """
        Product-level price and compare-at price in major units.

        price_min is always in cents; a bare price goes through the
        cents heuristic.
        """
        if product_json.get('price_min') is not None:
            price = price_from_cents(product_json['price_min'])
            compare = price_from_cents(product_json.get('compare_at_price_min')) or None
        elif product_json.get('price') is not None:
            price = normalize_price(product_json['price'])
            compare = normalize_price(product_json.get('compare_at_price')) or None
        else:
            price, compare = None, None
        return price, compare

    def options(self, product_json: Dict[str, Any]) -> List[ProductOption]:
        """Convert product options; plain strings get an empty value list."""
        options = []
        for opt in product_json.get('options') or []:
            if isinstance(opt, str):
                options.append(ProductOption(name=opt))
            elif isinstance(opt, dict):
                options.append(ProductOption(
                    name=opt.get('name') or '',
                    values=list(opt.get('values') or []),
                ))
        return options

    @staticmethod
    def _featured_src(featured: Any) -> Optional[str]:
        if isinstance(featured, dict):
            return featured.get('src') or None
        if isinstance(featured, str):
            return featured or None
        return None

    @staticmethod
    def _availability(variant: Dict[str, Any]) -> Optional[bool]:
        if variant.get('available') is not None:
            return bool(variant['available'])
        quantity = variant.get('inventory_quantity')
        if isinstance(quantity, (int, float)):
            return quantity > 0
        return None

    @staticmethod
    def _loads(text: Optional[str]) -> Any:
        if not text:
            return None
        try:
            return json.loads(text)
        except (json.JSONDecodeError, TypeError):
            return None
