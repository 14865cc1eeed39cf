"""
CrawlQualityTracker

Tracks data quality metrics across the whole crawl and prints summaries.
"""

from __future__ import annotations

from typing import Any, Dict


class CrawlQualityTracker:
    """
    Aggregate quality tracker for a crawl run.

    A product whose variants all lack an image is a data-quality signal,
    not an error; the tracker counts these and reports them at the end.

    Usage::

        tracker = CrawlQualityTracker()
        # inside crawl loop:
        tracker.record(product.to_dict())
        # after loop:
        tracker.print_final_report()
    """

    def __init__(self) -> None:
        self.total: int = 0
        self.without_images: int = 0
        self.without_price: int = 0
        self.variants_total: int = 0
        self.variants_without_image: int = 0
        # every variant of the product has image None
        self.all_variants_imageless: int = 0

        # Duplicate handle tracking
        self.seen_handles: set[str] = set()
        self.duplicate_handles: list[str] = []

        # Price range tracking
        self.price_min: float | None = None
        self.price_max: float | None = None

    # ── Public API ────────────────────────────────────────────────────────────

    def record(self, product: Dict[str, Any]) -> None:
        """Record one serialized product."""
        self.total += 1

        if not product.get("images"):
            self.without_images += 1

        variants = product.get("variants") or []
        missing = sum(1 for v in variants if not v.get("image"))
        self.variants_total += len(variants)
        self.variants_without_image += missing
        if variants and missing == len(variants):
            self.all_variants_imageless += 1

        handle = product.get("handle")
        if handle:
            if handle in self.seen_handles:
                self.duplicate_handles.append(handle)
            else:
                self.seen_handles.add(handle)

        price = product.get("price")
        if isinstance(price, (int, float)) and not isinstance(price, bool):
            if self.price_min is None or price < self.price_min:
                self.price_min = price
            if self.price_max is None or price > self.price_max:
                self.price_max = price
        else:
            self.without_price += 1

    def print_final_report(self) -> None:
        """Print a quality report table at the end of the crawl."""
        if self.total == 0:
            print("\n[Quality] No products processed.")
            return

        gate = "PASS" if not self.has_critical_failures() else "FAIL"

        print("\n" + "=" * 60)
        print(f"Quality Report  [{gate}]")
        print("=" * 60)
        print(f"  Total products:        {self.total}")
        print(f"  Without images:        {self.without_images:>6}  ({self._pct(self.without_images):.1f}%)")
        print(f"  Without price:         {self.without_price:>6}  ({self._pct(self.without_price):.1f}%)")
        print(f"  All variants imageless:{self.all_variants_imageless:>6}  "
              f"({self._pct(self.all_variants_imageless):.1f}%)")
        print(f"  Variants without image:{self.variants_without_image:>6} of {self.variants_total}")

        if self.duplicate_handles:
            print(
                f"\n  Duplicate handles: {len(self.duplicate_handles)} "
                f"(e.g. {self.duplicate_handles[0]!r})"
            )

        if self.price_min is not None:
            print(f"\n  Price range: {self.price_min:.2f} – {self.price_max:.2f}")

        print("\n  Gate (>5% imageless = FAIL):", gate)
        print("=" * 60)

    def has_critical_failures(self, threshold_pct: float = 5.0) -> bool:
        """Return True if the share of imageless products exceeds threshold_pct."""
        if self.total == 0:
            return False
        imageless = max(self.without_images, self.all_variants_imageless)
        return self._pct(imageless) > threshold_pct

    def get_stats(self) -> dict:
        return {
            "total": self.total,
            "without_images": self.without_images,
            "without_price": self.without_price,
            "variants_without_image": self.variants_without_image,
            "all_variants_imageless": self.all_variants_imageless,
            "duplicate_handles": len(self.duplicate_handles),
        }

    # ── Helpers ───────────────────────────────────────────────────────────────

    def _pct(self, count: int) -> float:
        return count / self.total * 100 if self.total else 0.0
