"""
Storefront Catalog

Reads collections and products through the Storefront API and maps them to
the same product schema the page crawlers produce.
"""

import logging
import time
from typing import Any, Dict, List, Optional

from ..extraction.crawl_result import CrawlResult
from ..extraction.variant_images import normalize_image_url, resolve_variant_images
from ..models import RawImage, RawVariant
from .api_client import StorefrontAPIClient
from .queries import COLLECTIONS_QUERY, PRODUCTS_BY_COLLECTION_QUERY, PRODUCTS_QUERY

logger = logging.getLogger(__name__)

MAX_PAGE_SIZE = 250


def _edges(connection: Optional[Dict]) -> List[Dict]:
    if not connection:
        return []
    return [edge["node"] for edge in connection.get("edges", [])]


def _amount(money: Optional[Dict]) -> Optional[float]:
    if not money or money.get("amount") in (None, ""):
        return None
    return float(money["amount"])


class StorefrontCatalog:
    """
    Collection and product listing over the Storefront API.

    Usage:
        with StorefrontAPIClient("shop.example", token) as client:
            catalog = StorefrontCatalog(client, limit=50)
            result = CrawlResult(store=catalog.store_url, output_path="products.json")
            catalog.crawl(result, by_collections=True)
    """

    def __init__(self, client: StorefrontAPIClient, limit: int = 50, request_delay: float = 0.5):
        """
        Args:
            client: Storefront API client
            limit: Maximum products per listing (0 = all)
            request_delay: Pause between paginated requests in seconds
        """
        self.client = client
        self.limit = limit
        self.request_delay = request_delay
        self.store_url = f"https://{client.store}"

    def _pause(self):
        if self.request_delay:
            time.sleep(self.request_delay)

    def get_collections(self) -> List[Dict[str, Any]]:
        """All non-empty collections, following cursor pagination."""
        logger.info("Fetching collections...")
        collections: List[Dict[str, Any]] = []
        cursor = None

        while True:
            data = self.client.graphql_request(
                COLLECTIONS_QUERY, {"first": MAX_PAGE_SIZE, "after": cursor}
            )
            if not data or not data.get("collections"):
                logger.error("Error fetching collections, stopping")
                break

            page = _edges(data["collections"])
            collections.extend(page)
            logger.info("Fetched %d collections, total: %d", len(page), len(collections))

            page_info = data["collections"].get("pageInfo") or {}
            if not page_info.get("hasNextPage"):
                break
            cursor = page_info.get("endCursor")
            self._pause()

        non_empty = [c for c in collections if (c.get("productsCount") or 0) > 0]
        logger.info("Found %d non-empty collections out of %d total collections",
                    len(non_empty), len(collections))
        return non_empty

    def get_products_by_collection(self, handle: str) -> List[Dict[str, Any]]:
        """Products of one collection, transformed, up to limit."""
        logger.info("Fetching products for collection: %s", handle)
        return self._paginate(
            PRODUCTS_BY_COLLECTION_QUERY,
            {"handle": handle},
            lambda data: data.get("collection"),
            label=f"collection {handle}",
        )

    def get_all_products(self) -> List[Dict[str, Any]]:
        """All products of the store, transformed, up to limit."""
        logger.info("Fetching products...")
        return self._paginate(
            PRODUCTS_QUERY, {}, lambda data: data, label="all products",
        )

    def _paginate(self, query: str, variables: Dict, container, label: str) -> List[Dict[str, Any]]:
        products: List[Dict[str, Any]] = []
        max_products = self.limit if self.limit > 0 else float("inf")
        cursor = None

        while len(products) < max_products:
            page_vars = dict(variables)
            page_vars["first"] = int(min(MAX_PAGE_SIZE, max_products - len(products)))
            page_vars["after"] = cursor

            data = self.client.graphql_request(query, page_vars)
            if not data:
                logger.error("Error fetching products for %s, stopping", label)
                break

            holder = container(data)
            if not holder:
                logger.error("Collection not found: %s", label)
                break

            collection_title = holder.get("title")
            connection = holder.get("products") or {}
            for node in _edges(connection):
                products.append(self.transform_product(node, collection_title))

            logger.info("Fetched products for %s, total: %d", label, len(products))

            page_info = connection.get("pageInfo") or {}
            if not page_info.get("hasNextPage"):
                break
            cursor = page_info.get("endCursor")
            if len(products) < max_products:
                self._pause()

        return products

    def transform_product(self, node: Dict[str, Any], collection_title: Optional[str] = None) -> Dict[str, Any]:
        """Map a GraphQL product node to the crawl output schema."""
        price = _amount((node.get("priceRange") or {}).get("minVariantPrice"))

        compare_raw = (node.get("compareAtPriceRange") or {}).get("maxVariantPrice") or {}
        compare_at = None
        if compare_raw.get("amount") not in (None, "", "0.0"):
            compare_at = float(compare_raw["amount"])
        on_sale = bool(compare_at is not None and price is not None and compare_at > price)

        image_nodes = _edges(node.get("images"))
        raw_images = [
            RawImage(src=img["url"], alt=img.get("altText") or "")
            for img in image_nodes if img.get("url")
        ]

        variant_nodes = _edges(node.get("variants"))
        raw_variants = []
        for variant in variant_nodes:
            values = [o.get("value") for o in variant.get("selectedOptions") or []]
            values += [None] * (3 - len(values))
            raw_variants.append(RawVariant(
                id=variant.get("id"),
                title=variant.get("title") or "",
                sku=variant.get("sku"),
                option1=values[0],
                option2=values[1],
                option3=values[2],
                featured_image_src=(variant.get("image") or {}).get("url"),
                price=_amount(variant.get("price")),
                compare_at_price=_amount(variant.get("compareAtPrice")),
                available=variant.get("availableForSale"),
            ))

        resolved = resolve_variant_images(raw_images, raw_variants, self.store_url)

        variants = []
        for variant, node_variant in zip(resolved, variant_nodes):
            variants.append({
                "id": variant.id,
                "title": variant.title,
                "availableForSale": variant.available,
                "quantityAvailable": node_variant.get("quantityAvailable"),
                "sku": variant.sku,
                "price": variant.price,
                "compareAtPrice": variant.compare_at_price,
                "options": [
                    {"name": o.get("name"), "value": o.get("value")}
                    for o in node_variant.get("selectedOptions") or []
                ],
                "image": variant.image,
            })

        product = {
            "id": node.get("id"),
            "title": node.get("title"),
            "handle": node.get("handle"),
            "url": f"{self.store_url}/products/{node.get('handle')}",
            "description": node.get("description"),
            "descriptionHtml": node.get("descriptionHtml"),
            "productType": node.get("productType"),
            "vendor": node.get("vendor"),
            "tags": node.get("tags") or [],
            "options": [
                {"name": o.get("name"), "values": o.get("values") or []}
                for o in node.get("options") or []
            ],
            "createdAt": node.get("createdAt"),
            "publishedAt": node.get("publishedAt"),
            "updatedAt": node.get("updatedAt"),
            "price": price,
            "compareAtPrice": compare_at,
            "onSale": on_sale,
            "variants": variants,
            "images": [normalize_image_url(img.src, self.store_url) for img in raw_images],
        }
        if collection_title:
            product["collections"] = [collection_title]
        return product

    def crawl(self, result: CrawlResult, by_collections: bool = True) -> CrawlResult:
        """
        Fill result with products, by collection or as one listing.

        Products are deduplicated by id; progress is flushed after every
        collection.
        """
        if not by_collections:
            logger.info("Crawling all products")
            for product in self.get_all_products():
                result.add_product(product, key=product["id"])
            result.flush()
            return result

        collections = self.get_collections()
        result.set_collections([
            {
                "id": c.get("id"),
                "handle": c.get("handle"),
                "title": c.get("title"),
                "description": c.get("description"),
                "productsCount": c.get("productsCount"),
                "image": c.get("image"),
                "url": f"{self.store_url}/collections/{c.get('handle')}",
            }
            for c in collections
        ])

        for index, collection in enumerate(collections, 1):
            logger.info('Collection %d/%d: "%s" (%s)', index, len(collections),
                        collection.get("title"), collection.get("handle"))

            products = self.get_products_by_collection(collection["handle"])
            added = sum(1 for p in products if result.add_product(p, key=p["id"]))

            result.update_collection("id", collection.get("id"), crawledProducts=len(products))
            logger.info('Added %d new products from collection "%s"', added, collection.get("title"))
            result.flush()

        return result
