"""Tests for catalog_crawler/processing/stats.py"""

import json

import pytest

from catalog_crawler.processing.stats import (
    generate_categorized_products,
    generate_collection_data,
    generate_price_range_data,
    generate_stats,
    load_crawl,
    price_bucket,
    product_categories,
    product_price,
)

PRICE_RANGES = [
    {"label": "Under $10", "min": 0, "max": 10},
    {"label": "$10-$20", "min": 10, "max": 20},
    {"label": "$20-$50", "min": 20, "max": 50},
    {"label": "$50-$100", "min": 50, "max": 100},
    {"label": "Over $100", "min": 100, "max": None},
]


class TestLoadCrawl:
    def test_loads_file(self, crawl_file):
        assert len(load_crawl(crawl_file)["products"]) == 4

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_crawl(str(tmp_path / "missing.json"))

    def test_empty_products(self, tmp_path):
        path = tmp_path / "empty.json"
        path.write_text(json.dumps({"products": []}), encoding="utf-8")
        with pytest.raises(ValueError):
            load_crawl(str(path))


class TestHelpers:
    def test_product_price(self):
        assert product_price({"price": 0}) == 0
        assert product_price({"price": 12.5}) == 12.5
        assert product_price({"price": None}) is None
        assert product_price({"price": "12"}) is None
        assert product_price({"price": True}) is None
        assert product_price({"price": float("nan")}) is None

    def test_price_bucket_half_open(self):
        assert price_bucket(0, PRICE_RANGES) == "Under $10"
        assert price_bucket(10, PRICE_RANGES) == "$10-$20"
        assert price_bucket(99.99, PRICE_RANGES) == "$50-$100"
        assert price_bucket(5000, PRICE_RANGES) == "Over $100"

    def test_categories_fall_back_to_collections(self):
        assert product_categories({"categories": ["A", ""]}) == ["A"]
        assert product_categories({"categories": [], "collections": ["B"]}) == ["B"]
        assert product_categories({}) == []


class TestGenerateStats:
    def test_counts(self, crawl_data):
        stats = generate_stats(crawl_data, PRICE_RANGES)

        assert stats["totalProducts"] == 4
        assert stats["totalCollections"] == 3
        assert stats["crawledCollections"] == 2
        assert stats["hasImages"] == 3
        assert stats["hasVariants"] == 1
        assert stats["onSale"] == 2
        assert stats["productTypes"] == {"Shirts": 2, "Mugs": 1}
        assert stats["vendors"] == {"Acme": 2, "MugCo": 1}

    def test_price_stats(self, crawl_data):
        price_stats = generate_stats(crawl_data, PRICE_RANGES)["priceStats"]

        assert price_stats["min"] == 15.0
        assert price_stats["max"] == 150.0
        assert price_stats["avg"] == pytest.approx(68.333, rel=1e-3)
        assert price_stats["median"] == 40.0
        assert price_stats["ranges"] == {
            "Under $10": 0, "$10-$20": 1, "$20-$50": 1, "$50-$100": 0, "Over $100": 1,
        }

    def test_zero_price_counted(self):
        stats = generate_stats({"products": [{"price": 0}], "collections": []}, PRICE_RANGES)
        assert stats["priceStats"]["min"] == 0
        assert stats["priceStats"]["ranges"]["Under $10"] == 1

    def test_no_prices(self):
        stats = generate_stats({"products": [{"price": None}]}, PRICE_RANGES)
        assert stats["priceStats"]["avg"] is None
        assert stats["priceStats"]["median"] is None

    def test_top_collections_skip_empty(self, crawl_data):
        top = generate_stats(crawl_data, PRICE_RANGES)["collectionsWithMostProducts"]
        assert [c["title"] for c in top] == ["Shirts", "Mugs"]
        assert top[0] == {
            "title": "Shirts", "productCount": 2,
            "url": "https://shop.example/collections/shirts",
        }

    def test_api_collections_use_crawled_products(self):
        data = {"products": [], "collections": [{"title": "Sale", "crawledProducts": 7}]}
        top = generate_stats(data, PRICE_RANGES)["collectionsWithMostProducts"]
        assert top[0]["productCount"] == 7

    def test_popular_tags(self, crawl_data):
        tags = generate_stats(crawl_data, PRICE_RANGES)["popularTags"]
        assert tags == {"cotton": 2, "summer": 1, "kitchen": 1}
        assert list(tags)[0] == "cotton"


class TestCollectionData:
    def test_groups_by_category(self, crawl_data):
        collections = generate_collection_data(crawl_data)

        assert set(collections) == {"Shirts", "All Products", "Mugs", "Gifts"}
        shirts = collections["Shirts"]
        assert shirts["productCount"] == 2
        assert shirts["avgPrice"] == 27.5
        assert shirts["priceRange"] == {"min": 15.0, "max": 40.0}
        assert shirts["products"][0]["images"] == ["https://cdn.shopify.com/blue_2048x2048_.jpg"]

    def test_unpriced_collection(self, crawl_data):
        gifts = generate_collection_data(crawl_data)["Gifts"]
        assert gifts["productCount"] == 1
        assert gifts["avgPrice"] == 0
        assert gifts["priceRange"] == {"min": None, "max": None}
        assert "_total" not in gifts


class TestCategorizedProducts:
    def test_on_sale_sorted_by_discount(self, crawl_data):
        categorized = generate_categorized_products(crawl_data)

        assert [p["handle"] for p in categorized["onSale"]] == ["green-shirt", "blue-shirt"]
        assert categorized["onSale"][0]["discountPercent"] == 50.0
        assert categorized["onSale"][1]["discountPercent"] == 20.0
        assert categorized["bestValue"] == categorized["onSale"]

    def test_sale_flag_needs_lower_price(self):
        data = {"products": [{"handle": "x", "price": 20, "compareAtPrice": 10, "onSale": True}]}
        assert generate_categorized_products(data)["onSale"] == []

    def test_by_type_and_vendor(self, crawl_data):
        categorized = generate_categorized_products(crawl_data)

        assert [p["handle"] for p in categorized["byType"]["Shirts"]] == ["blue-shirt", "green-shirt"]
        assert list(categorized["byVendor"]) == ["Acme", "MugCo"]
        assert categorized["byType"]["Mugs"][0]["image"] is None


class TestPriceRangeData:
    def test_buckets(self, crawl_data):
        buckets = generate_price_range_data(crawl_data, PRICE_RANGES)

        assert buckets["Under $10"]["products"] == []
        assert [p["handle"] for p in buckets["$10-$20"]["products"]] == ["green-shirt"]
        assert [p["handle"] for p in buckets["$20-$50"]["products"]] == ["blue-shirt"]
        assert [p["handle"] for p in buckets["Over $100"]["products"]] == ["red-mug"]
        assert buckets["Over $100"]["range"] == [100, None]

    def test_unpriced_products_left_out(self, crawl_data):
        buckets = generate_price_range_data(crawl_data, PRICE_RANGES)
        handles = [p["handle"] for b in buckets.values() for p in b["products"]]
        assert "gift-card" not in handles
