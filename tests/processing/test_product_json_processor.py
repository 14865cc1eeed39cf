"""Tests for catalog_crawler/processing/product_json_processor.py"""

import json

import pytest
from bs4 import BeautifulSoup

from catalog_crawler.processing.product_json_processor import (
    attach_variant_images,
    page_base_url,
    process_product_html,
)

CDN = "https://cdn.shopify.com/s/files/1/products"


class TestPageBaseUrl:
    def test_canonical(self, product_page_html):
        soup = BeautifulSoup(product_page_html, "lxml")
        assert page_base_url(soup) == "https://shop.example"

    def test_og_url(self):
        soup = BeautifulSoup(
            '<meta property="og:url" content="https://other.example/products/x">', "lxml"
        )
        assert page_base_url(soup) == "https://other.example"

    def test_default_cdn(self):
        soup = BeautifulSoup("<html><head></head></html>", "lxml")
        assert page_base_url(soup) == "https://cdn.shopify.com"


class TestProcessProductHtml:
    def test_writes_variant_images(self, fixtures_dir, tmp_path):
        output = tmp_path / "processed.json"
        product = process_product_html(str(fixtures_dir / "product_page.html"), str(output))

        images = [v["image"] for v in product["variants"]]
        assert images == [
            f"{CDN}/shirt-blue_2048x2048_.jpg",
            f"{CDN}/shirt-back_2048x2048_.jpg",
            f"{CDN}/shirt-front_2048x2048_.jpg",
        ]
        saved = json.loads(output.read_text(encoding="utf-8"))
        assert saved["variants"][1]["image"] == images[1]
        assert saved["handle"] == "blue-shirt"

    def test_no_product_json(self, tmp_path):
        page = tmp_path / "page.html"
        page.write_text("<html><body><h1>Nothing</h1></body></html>", encoding="utf-8")
        with pytest.raises(ValueError):
            process_product_html(str(page), str(tmp_path / "out.json"))

    def test_missing_input(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            process_product_html(str(tmp_path / "nope.html"), str(tmp_path / "out.json"))


class TestAttachVariantImages:
    def test_relative_image_on_store_origin(self):
        product = {
            "images": ["/files/shirt_small_.jpg"],
            "variants": [{"id": 1, "featured_image": None}],
        }
        attach_variant_images(product, "https://shop.example")
        assert product["variants"][0]["image"] == "https://shop.example/files/shirt_2048x2048_.jpg"

    def test_no_images(self):
        product = {"images": [], "variants": [{"id": 1}]}
        attach_variant_images(product, "https://shop.example")
        assert product["variants"][0]["image"] is None
