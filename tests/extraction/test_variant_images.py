"""Tests for catalog_crawler/extraction/variant_images.py"""

from catalog_crawler.extraction.variant_images import (
    OPTION_MATCH_RULES,
    is_shopify_cdn_url,
    normalize_image_url,
    normalize_image_urls,
    resolve_variant_images,
    upscale_cdn_image,
)
from catalog_crawler.models import RawImage, RawVariant

BASE = "https://shop.example"


class TestUpscale:
    def test_rewrites_named_size(self):
        url = "https://cdn.shopify.com/s/files/1/shirt_small_.jpg"
        assert upscale_cdn_image(url) == "https://cdn.shopify.com/s/files/1/shirt_2048x2048_.jpg"

    def test_only_first_token_rewritten(self):
        url = "https://cdn.shopify.com/s/files/1/a_large_b_small_.jpg"
        assert upscale_cdn_image(url) == "https://cdn.shopify.com/s/files/1/a_2048x2048_b_small_.jpg"

    def test_idempotent(self):
        once = upscale_cdn_image("https://cdn.shopify.com/a_grande_.jpg")
        assert upscale_cdn_image(once) == once

    def test_all_size_tokens(self):
        for token in ("pico", "icon", "thumb", "small", "compact",
                      "medium", "large", "grande", "original"):
            assert upscale_cdn_image(f"https://cdn.shopify.com/a_{token}_.png").endswith("a_2048x2048_.png")


class TestCdnDetection:
    def test_cdn_host(self):
        assert is_shopify_cdn_url("https://cdn.shopify.com/s/files/a.jpg")

    def test_store_cdn_proxy_path(self):
        assert is_shopify_cdn_url("https://other.example/cdn/shop/products/a.jpg")

    def test_store_origin(self):
        assert is_shopify_cdn_url("https://shop.example/a.jpg", BASE)

    def test_foreign_host(self):
        assert not is_shopify_cdn_url("https://images.example/a_small_.jpg", BASE)


class TestNormalizeImageUrl:
    def test_relative_path_uses_origin(self):
        assert normalize_image_url("/files/a_small_.jpg", BASE + "/products/x") == \
            "https://shop.example/files/a_2048x2048_.jpg"

    def test_protocol_relative(self):
        assert normalize_image_url("//cdn.shopify.com/a_medium_.jpg", BASE) == \
            "https://cdn.shopify.com/a_2048x2048_.jpg"

    def test_foreign_url_unchanged(self):
        url = "https://images.example/a_small_.jpg"
        assert normalize_image_url(url, BASE) == url

    def test_empty_returns_none(self):
        assert normalize_image_url("", BASE) is None
        assert normalize_image_url(None, BASE) is None

    def test_without_base_uses_cdn(self):
        assert normalize_image_url("/s/files/a_small_.jpg", None) == \
            "https://cdn.shopify.com/s/files/a_2048x2048_.jpg"

    def test_list_dedupes(self):
        urls = normalize_image_urls(["/a_small_.jpg", "/a_small_.jpg", "", "/b.jpg"], BASE)
        assert urls == ["https://shop.example/a_2048x2048_.jpg", "https://shop.example/b.jpg"]


class TestResolveVariantImages:
    def test_featured_image_wins(self, sample_images, sample_variants):
        resolved = resolve_variant_images(sample_images, sample_variants, BASE)
        assert resolved[0].image == "https://shop.example/products/one_2048x2048_.jpg"

    def test_variant_id_mapping(self, sample_images, sample_variants):
        resolved = resolve_variant_images(sample_images, sample_variants, BASE)
        assert resolved[1].image == "https://shop.example/products/back_2048x2048_.jpg"

    def test_first_image_fallback(self, sample_images, sample_variants):
        resolved = resolve_variant_images(sample_images, sample_variants, BASE)
        assert resolved[2].image == "https://shop.example/products/front_2048x2048_.jpg"

    def test_featured_beats_mapping(self):
        images = [RawImage(src="/mapped.jpg", variant_ids=["1"])]
        variants = [RawVariant(id="1", featured_image_src="/featured.jpg")]
        resolved = resolve_variant_images(images, variants, BASE)
        assert resolved[0].image == "https://shop.example/featured.jpg"

    def test_last_mapping_wins(self):
        images = [
            RawImage(src="/first.jpg", variant_ids=[5]),
            RawImage(src="/second.jpg", variant_ids=[5]),
        ]
        resolved = resolve_variant_images(images, [RawVariant(id=5)], BASE)
        assert resolved[0].image == "https://shop.example/second.jpg"

    def test_ids_compared_as_strings(self):
        images = [RawImage(src="/a.jpg"), RawImage(src="/b.jpg", variant_ids=["42"])]
        resolved = resolve_variant_images(images, [RawVariant(id=42)], BASE)
        assert resolved[0].image == "https://shop.example/b.jpg"

    def test_no_images_gives_none(self):
        resolved = resolve_variant_images([], [RawVariant(id=1)], BASE)
        assert resolved[0].image is None

    def test_variant_without_id_skips_mapping(self):
        images = [RawImage(src="/a.jpg"), RawImage(src="/b.jpg", variant_ids=[None, 1])]
        resolved = resolve_variant_images(images, [RawVariant()], BASE)
        assert resolved[0].image == "https://shop.example/a.jpg"

    def test_output_matches_input_order(self, sample_images, sample_variants):
        resolved = resolve_variant_images(sample_images, sample_variants, BASE)
        assert [v.id for v in resolved] == [1, 2, 3]

    def test_shared_relative_image(self):
        images = [RawImage(src="/a_small_.jpg", variant_ids=["9"])]
        variants = [RawVariant(id="9"), RawVariant(id="10")]
        resolved = resolve_variant_images(images, variants, BASE)
        assert [v.image for v in resolved] == [
            "https://shop.example/a_2048x2048_.jpg",
            "https://shop.example/a_2048x2048_.jpg",
        ]

    def test_empty_variants(self, sample_images):
        assert resolve_variant_images(sample_images, [], BASE) == []


class TestOptionMatchRules:
    def test_matches_option_value_in_filename(self):
        images = [RawImage(src="/mug-red.jpg"), RawImage(src="/mug-blue.jpg")]
        variants = [RawVariant(id=1, option1="Blue")]
        resolved = resolve_variant_images(images, variants, BASE, rules=OPTION_MATCH_RULES)
        assert resolved[0].image == "https://shop.example/mug-blue.jpg"

    def test_matches_alt_text(self):
        images = [RawImage(src="/1.jpg", alt="Red"), RawImage(src="/2.jpg", alt="Green mug")]
        variants = [RawVariant(id=1, option1="Green")]
        resolved = resolve_variant_images(images, variants, BASE, rules=OPTION_MATCH_RULES)
        assert resolved[0].image == "https://shop.example/2.jpg"

    def test_default_rules_ignore_options(self):
        images = [RawImage(src="/mug-red.jpg"), RawImage(src="/mug-blue.jpg")]
        variants = [RawVariant(id=1, option1="Blue")]
        resolved = resolve_variant_images(images, variants, BASE)
        assert resolved[0].image == "https://shop.example/mug-red.jpg"

    def test_numeric_option_value(self):
        images = [RawImage(src="/shoe-40.jpg"), RawImage(src="/shoe-42.jpg")]
        variants = [RawVariant(id=1, option1=42)]
        resolved = resolve_variant_images(images, variants, BASE, rules=OPTION_MATCH_RULES)
        assert resolved[0].image == "https://shop.example/shoe-42.jpg"
