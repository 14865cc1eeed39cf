"""Shared test fixtures."""

import json
from pathlib import Path

import pytest

from catalog_crawler.extraction.page_fetcher import FetchedPage, NavigationError
from catalog_crawler.models import RawImage, RawVariant

FIXTURES_DIR = Path(__file__).parent / "fixtures"


class FakeFetcher:
    """PageFetcher stand-in serving HTML from a url -> html dict."""

    def __init__(self, pages):
        self.pages = pages
        self.requested = []

    def navigate(self, url):
        self.requested.append(url)
        if url not in self.pages:
            raise NavigationError(f"Failed to navigate to {url} after 1 attempts: 404")
        return FetchedPage(url=url, final_url=url, status_code=200, html=self.pages[url])


def product_json_page(handle, title=None, price=12999, image=None):
    """Minimal product page carrying a ProductJson script."""
    product = {
        "id": abs(hash(handle)) % 100000,
        "title": title or handle.replace("-", " ").title(),
        "handle": handle,
        "price_min": price,
        "images": [image or f"//cdn.shopify.com/s/files/1/products/{handle}_small_.jpg"],
        "variants": [{"id": 1, "title": "Default Title", "price": price}],
    }
    return (
        '<html><body><script type="application/json" id="ProductJson-product-template">'
        f"{json.dumps(product)}</script></body></html>"
    )


@pytest.fixture
def fixtures_dir():
    """Return path to fixtures directory."""
    return FIXTURES_DIR


@pytest.fixture
def product_page_html():
    """Product page with embedded ProductJson."""
    return (FIXTURES_DIR / "product_page.html").read_text(encoding="utf-8")


@pytest.fixture
def dom_product_page_html():
    """Product page with JSON-LD and theme markup only."""
    return (FIXTURES_DIR / "dom_product_page.html").read_text(encoding="utf-8")


@pytest.fixture
def meta_product_page_html():
    """Product page with analytics meta variants and gallery images."""
    return (FIXTURES_DIR / "meta_product_page.html").read_text(encoding="utf-8")


@pytest.fixture
def collections_index_html():
    return (FIXTURES_DIR / "collections_index.html").read_text(encoding="utf-8")


@pytest.fixture
def collection_page_html():
    return (FIXTURES_DIR / "collection_page.html").read_text(encoding="utf-8")


@pytest.fixture
def sitemap_path():
    return str(FIXTURES_DIR / "sitemap_collections.xml")


@pytest.fixture
def fake_fetcher():
    """Factory for FakeFetcher instances."""
    return FakeFetcher


@pytest.fixture
def product_page_factory():
    """Factory for minimal ProductJson pages."""
    return product_json_page


@pytest.fixture
def sample_images():
    return [
        RawImage(src="/products/front_large_.jpg"),
        RawImage(src="/products/back_medium_.jpg", variant_ids=[2]),
    ]


@pytest.fixture
def sample_variants():
    return [
        RawVariant(id=1, featured_image_src="/products/one_small_.jpg"),
        RawVariant(id=2),
        RawVariant(id=3),
    ]


@pytest.fixture
def crawl_data():
    """Crawl output with a mix of sale, typed and unpriced products."""
    return {
        "store": "https://shop.example",
        "crawledAt": "2024-05-01T10:00:00+00:00",
        "collections": [
            {"title": "Shirts", "url": "https://shop.example/collections/shirts",
             "handle": "shirts", "productCount": 2, "crawled": True},
            {"title": "Mugs", "url": "https://shop.example/collections/mugs",
             "handle": "mugs", "productCount": 1, "crawled": True},
            {"title": "Empty", "url": "https://shop.example/collections/empty",
             "handle": "empty", "productCount": 0, "crawled": False},
        ],
        "products": [
            {
                "handle": "blue-shirt", "title": "Blue Shirt",
                "url": "https://shop.example/products/blue-shirt",
                "price": 40.0, "compareAtPrice": 50.0, "onSale": True,
                "images": ["https://cdn.shopify.com/blue_2048x2048_.jpg"],
                "variants": [{"id": 1}, {"id": 2}],
                "productType": "Shirts", "vendor": "Acme",
                "tags": ["cotton", "summer"], "categories": ["Shirts"],
            },
            {
                "handle": "green-shirt", "title": "Green Shirt",
                "url": "https://shop.example/products/green-shirt",
                "price": 15.0, "compareAtPrice": 30.0, "onSale": True,
                "images": ["https://cdn.shopify.com/green_2048x2048_.jpg"],
                "variants": [{"id": 3}],
                "productType": "Shirts", "vendor": "Acme",
                "tags": ["cotton"], "categories": ["Shirts", "All Products"],
            },
            {
                "handle": "red-mug", "title": "Red Mug",
                "url": "https://shop.example/products/red-mug",
                "price": 150.0, "compareAtPrice": None, "onSale": False,
                "images": [],
                "variants": [{"id": 4}],
                "productType": "Mugs", "vendor": "MugCo",
                "tags": ["kitchen", ""], "categories": ["Mugs"],
            },
            {
                "handle": "gift-card", "title": "Gift Card",
                "url": "https://shop.example/products/gift-card",
                "price": None, "onSale": False,
                "images": ["https://cdn.shopify.com/card.jpg"],
                "variants": [],
                "collections": ["Gifts"],
            },
        ],
        "totalProducts": 4,
    }


@pytest.fixture
def crawl_file(tmp_path, crawl_data):
    """crawl_data written to a JSON file."""
    path = tmp_path / "shopify_products.json"
    path.write_text(json.dumps(crawl_data), encoding="utf-8")
    return str(path)
