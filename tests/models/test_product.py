"""Tests for catalog_crawler/models/product.py"""

import pytest

from catalog_crawler.models import (
    CollectionInfo,
    ProductOption,
    RawImage,
    RawVariant,
    ResolvedVariant,
    ScrapedProduct,
)


class TestRawModels:
    def test_raw_image_defaults(self):
        img = RawImage(src="https://cdn.shopify.com/a.jpg")
        assert img.variant_ids == []
        assert img.alt == ""

    def test_option_values_skip_empty(self):
        variant = RawVariant(id=1, option1="S", option2=None, option3="Blue")
        assert variant.option_values == ["S", "Blue"]

    def test_numeric_option_values_become_strings(self):
        variant = RawVariant(id=1, option1=42, option2=0)
        assert variant.option_values == ["42", "0"]


class TestResolvedVariant:
    def test_from_raw_copies_fields(self):
        raw = RawVariant(id=7, title="S", sku="SKU-7", option1="S", price=12.5)
        resolved = ResolvedVariant.from_raw(raw, "https://cdn.shopify.com/a.jpg")
        assert resolved.id == 7
        assert resolved.sku == "SKU-7"
        assert resolved.price == 12.5
        assert resolved.image == "https://cdn.shopify.com/a.jpg"

    def test_to_dict_keys(self):
        resolved = ResolvedVariant(id=1, title="S", option1="S", price=10.0)
        data = resolved.to_dict()
        assert data["compareAtPrice"] is None
        assert data["sku"] == ""
        assert data["options"] == ["S"]
        assert data["image"] is None
        assert "estimatedComparePrice" not in data

    def test_estimated_flag_serialized(self):
        resolved = ResolvedVariant(id=1, price=10.0, compare_at_price=11.5, estimated_compare_price=True)
        assert resolved.to_dict()["estimatedComparePrice"] is True


class TestScrapedProduct:
    def test_raises_on_empty_url(self):
        with pytest.raises(ValueError, match="URL is required"):
            ScrapedProduct(url="", handle="a", title="A")

    def test_to_dict_uses_camel_case(self):
        product = ScrapedProduct(
            url="https://shop.example/products/a",
            handle="a",
            title="A",
            price=10.0,
            compare_at_price=12.0,
            on_sale=True,
            variants=[ResolvedVariant(id=1, price=10.0)],
            options=[ProductOption(name="Size", values=["S", "M"])],
            product_type="Shirts",
        )
        data = product.to_dict()
        assert data["compareAtPrice"] == 12.0
        assert data["onSale"] is True
        assert data["productType"] == "Shirts"
        assert data["options"] == [{"name": "Size", "values": ["S", "M"]}]
        assert data["variants"][0]["id"] == 1
        assert "source" not in data

    def test_list_defaults_are_independent(self):
        a = ScrapedProduct(url="https://shop.example/products/a", handle="a", title="A")
        b = ScrapedProduct(url="https://shop.example/products/b", handle="b", title="B")
        a.categories.append("Shirts")
        assert b.categories == []


class TestCollectionInfo:
    def test_to_dict(self):
        info = CollectionInfo(title="Shirts", url="https://shop.example/collections/shirts", handle="shirts")
        assert info.to_dict() == {
            "title": "Shirts",
            "url": "https://shop.example/collections/shirts",
            "handle": "shirts",
            "productCount": 0,
            "crawled": False,
        }
