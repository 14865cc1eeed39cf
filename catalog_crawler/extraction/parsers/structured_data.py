"""
Structured Data Parser

Reads the schema.org Product block that Shopify themes embed as JSON-LD.
Used for images, vendor and price when a page has no product JSON.

Supported schema types: Product, ProductGroup (top level, in a list,
or inside an @graph container)
"""

import json
from typing import Any, Dict, Iterator, List, Optional

from bs4 import BeautifulSoup

from ..pricing import normalize_price


class StructuredDataParser:
    """
    Parses JSON-LD structured data from HTML pages.

    Usage:
        parser = StructuredDataParser()
        data = parser.parse(soup)
        images = parser.extract_images(data)
        price = parser.extract_price(data)
    """

    SUPPORTED_TYPES = ('Product', 'ProductGroup')

    def parse(self, soup: BeautifulSoup) -> Dict[str, Any]:
        """
        Return the first Product block on the page, or an empty dict.
        Blocks that fail to decode are skipped.
        """
        for script in soup.find_all('script', type='application/ld+json'):
            text = script.string or script.get_text()
            if not text or not text.strip():
                continue
            try:
                data = json.loads(text)
            except json.JSONDecodeError:
                continue

            for item in self._nodes(data):
                if self._is_product(item):
                    return item

        return {}

    def _nodes(self, data: Any) -> Iterator[Dict[str, Any]]:
        items = data if isinstance(data, list) else [data]
        for item in items:
            if not isinstance(item, dict):
                continue
            yield item
            graph = item.get('@graph')
            if isinstance(graph, list):
                yield from (node for node in graph if isinstance(node, dict))

    def _is_product(self, item: Dict[str, Any]) -> bool:
        types = item.get('@type')
        if isinstance(types, list):
            return any(t in self.SUPPORTED_TYPES for t in types)
        return types in self.SUPPORTED_TYPES

    def extract_images(self, data: Dict[str, Any]) -> List[str]:
        """Image URLs; "image" may be a string, an ImageObject or a list of either."""
        image = data.get('image') if data else None
        items = image if isinstance(image, list) else [image]

        urls = []
        for item in items:
            url = item.get('url') if isinstance(item, dict) else item
            if isinstance(url, str) and url and url not in urls:
                urls.append(url)
        return urls

    def extract_vendor(self, data: Dict[str, Any]) -> str:
        """Brand name, given as a string or a Brand object."""
        brand = data.get('brand') if data else None
        if isinstance(brand, dict):
            brand = brand.get('name')
        if not isinstance(brand, str):
            return ""
        return ' '.join(brand.split())

    def offers(self, data: Dict[str, Any]) -> List[Dict[str, Any]]:
        """Offer dicts, with AggregateOffer expanded to its nested offers."""
        offers = data.get('offers') if data else None
        if isinstance(offers, dict):
            nested = offers.get('offers')
            if offers.get('@type') == 'AggregateOffer' and isinstance(nested, list):
                return [o for o in nested if isinstance(o, dict)] or [offers]
            return [offers]
        if isinstance(offers, list):
            return [o for o in offers if isinstance(o, dict)]
        return []

    def extract_price(self, data: Dict[str, Any]) -> Optional[float]:
        """Lowest offer price (price or lowPrice), or None."""
        prices = []
        for offer in self.offers(data):
            price = normalize_price(offer.get('price', offer.get('lowPrice')))
            if price is not None:
                prices.append(price)
        return min(prices) if prices else None

    def extract_availability(self, data: Dict[str, Any]) -> Optional[bool]:
        """True if any offer is InStock, False if offers say otherwise, None without offers."""
        states = [str(o.get('availability') or '') for o in self.offers(data)]
        states = [s for s in states if s]
        if not states:
            return None
        return any(s.endswith('InStock') for s in states)
