"""Tests for CrawlQualityTracker."""

from catalog_crawler.validation.crawl_tracker import CrawlQualityTracker


def _product(handle="product-1", price=10.0, images=True, variant_images=(True,)):
    return {
        "handle": handle,
        "price": price,
        "images": ["https://cdn.shopify.com/a.jpg"] if images else [],
        "variants": [
            {"id": i, "image": "https://cdn.shopify.com/a.jpg" if has else None}
            for i, has in enumerate(variant_images)
        ],
    }


class TestBasicCounting:
    def test_initial_state(self):
        t = CrawlQualityTracker()
        assert t.total == 0
        assert t.without_images == 0
        assert t.price_min is None

    def test_complete_product(self):
        t = CrawlQualityTracker()
        t.record(_product())
        assert t.total == 1
        assert t.without_images == 0
        assert t.without_price == 0
        assert t.variants_total == 1

    def test_without_images(self):
        t = CrawlQualityTracker()
        t.record(_product(images=False, variant_images=(False, False)))
        assert t.without_images == 1
        assert t.all_variants_imageless == 1
        assert t.variants_without_image == 2

    def test_some_variants_imageless(self):
        t = CrawlQualityTracker()
        t.record(_product(variant_images=(True, False)))
        assert t.variants_without_image == 1
        assert t.all_variants_imageless == 0

    def test_product_without_variants_not_imageless(self):
        t = CrawlQualityTracker()
        t.record(_product(variant_images=()))
        assert t.all_variants_imageless == 0


class TestPrices:
    def test_range(self):
        t = CrawlQualityTracker()
        for price in (25.0, 5.0, 0):
            t.record(_product(handle=str(price), price=price))
        assert t.price_min == 0
        assert t.price_max == 25.0

    def test_missing_price(self):
        t = CrawlQualityTracker()
        t.record(_product(price=None))
        assert t.without_price == 1
        assert t.price_min is None


class TestDuplicates:
    def test_duplicate_handles(self):
        t = CrawlQualityTracker()
        t.record(_product("a"))
        t.record(_product("a"))
        t.record(_product("b"))
        assert t.duplicate_handles == ["a"]
        assert t.get_stats()["duplicate_handles"] == 1


class TestGate:
    def test_empty_passes(self):
        assert CrawlQualityTracker().has_critical_failures() is False

    def test_imageless_share_fails(self):
        t = CrawlQualityTracker()
        for i in range(9):
            t.record(_product(f"p{i}"))
        t.record(_product("bare", images=False))
        assert t.has_critical_failures() is True
        assert t.has_critical_failures(threshold_pct=20.0) is False


class TestReport:
    def test_report_output(self, capsys):
        t = CrawlQualityTracker()
        t.record(_product("a", price=12.5))
        t.print_final_report()
        out = capsys.readouterr().out
        assert "Quality Report  [PASS]" in out
        assert "Total products:        1" in out

    def test_empty_report(self, capsys):
        CrawlQualityTracker().print_final_report()
        assert "No products processed" in capsys.readouterr().out
