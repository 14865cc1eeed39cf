"""
Crawl Result

Owned accumulator for one crawl run. Pipeline stages add collections and
products to it, and flush() writes the current snapshot to disk so an
interrupted crawl keeps its progress.
"""

from __future__ import annotations

import json
import logging
import os
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def save_json(data: Any, filepath: str) -> None:
    """Write JSON with 2-space indentation, creating parent directories."""
    directory = os.path.dirname(filepath)
    if directory:
        os.makedirs(directory, exist_ok=True)
    with open(filepath, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False)


class CrawlResult:
    """
    Collections and products gathered during a crawl.

    Usage::

        result = CrawlResult(store="https://shop.example", output_path="products.json")
        result.set_collections([c.to_dict() for c in collections])
        if result.add_product(product.to_dict(), key=product.handle):
            ...
        result.flush()
        result.mark_completed()
        result.flush()
    """

    def __init__(self, store: str, output_path: str):
        self.store = store
        self.output_path = output_path
        self.crawled_at = _now()
        self.completed_at: Optional[str] = None
        self.collections: List[Dict[str, Any]] = []
        self.products: List[Dict[str, Any]] = []
        self._seen: set[str] = set()
        self.flush_count = 0

    @property
    def total_products(self) -> int:
        return len(self.products)

    def has_product(self, key: Any) -> bool:
        return str(key) in self._seen

    def mark_seen(self, key: Any) -> None:
        """Treat key as crawled without adding a product (e.g. a URL alias)."""
        self._seen.add(str(key))

    def add_product(self, product: Dict[str, Any], key: Any) -> bool:
        """
        Add a product unless one with the same key was already added.

        Returns:
            True if the product was added
        """
        key = str(key)
        if key in self._seen:
            return False
        self._seen.add(key)
        self.products.append(product)
        return True

    def set_collections(self, collections: List[Dict[str, Any]]) -> None:
        self.collections = list(collections)

    def update_collection(self, match_key: str, match_value: Any, **fields: Any) -> bool:
        """
        Update the first collection whose match_key equals match_value.

        Returns:
            True if a collection was updated
        """
        for collection in self.collections:
            if collection.get(match_key) == match_value:
                collection.update(fields)
                return True
        return False

    def mark_completed(self) -> None:
        self.completed_at = _now()

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "store": self.store,
            "crawledAt": self.crawled_at,
            "collections": self.collections,
            "products": self.products,
            "totalProducts": self.total_products,
        }
        if self.completed_at:
            data["completedAt"] = self.completed_at
        return data

    def flush(self) -> None:
        """Write the current snapshot to output_path."""
        save_json(self.to_dict(), self.output_path)
        self.flush_count += 1
        logger.info("Progress saved to %s (%d products)", self.output_path, self.total_products)
