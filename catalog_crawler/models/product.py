"""
Product data models.

Pure data classes for representing scraped storefront data.
Serialization uses the camelCase keys of the JSON output files.
"""

from dataclasses import asdict, dataclass, field, fields
from typing import Any, Dict, List, Optional


@dataclass
class RawImage:
    """One product photo, possibly tagged as belonging to specific variants."""
    src: str
    variant_ids: List[Any] = field(default_factory=list)
    alt: str = ""


@dataclass
class RawVariant:
    """One purchasable SKU as found on the page or in the API response."""
    id: Any = None
    title: str = ""
    sku: Optional[str] = None
    option1: Optional[str] = None
    option2: Optional[str] = None
    option3: Optional[str] = None
    featured_image_src: Optional[str] = None
    price: Optional[float] = None
    compare_at_price: Optional[float] = None
    available: Optional[bool] = None

    @property
    def option_values(self) -> List[str]:
        # JSON options can be numbers (e.g. size 42)
        return [str(v) for v in (self.option1, self.option2, self.option3) if v not in (None, "")]


@dataclass
class ResolvedVariant(RawVariant):
    """RawVariant with its chosen absolute, high-resolution image URL."""
    image: Optional[str] = None
    estimated_compare_price: bool = False

    @classmethod
    def from_raw(cls, raw: RawVariant, image: Optional[str]) -> "ResolvedVariant":
        values = {f.name: getattr(raw, f.name) for f in fields(RawVariant)}
        return cls(image=image, **values)

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "id": self.id,
            "title": self.title,
            "price": self.price,
            "compareAtPrice": self.compare_at_price,
            "sku": self.sku or "",
            "available": self.available,
            "option1": self.option1,
            "option2": self.option2,
            "option3": self.option3,
            "options": self.option_values,
            "image": self.image,
        }
        if self.estimated_compare_price:
            data["estimatedComparePrice"] = True
        return data


@dataclass
class ProductOption:
    """Product option such as Size or Color."""
    name: str
    values: List[str] = field(default_factory=list)


@dataclass
class ScrapedProduct:
    """
    Product scraped from a storefront product page.

    Field Groups:
    - Identity: url, handle, title
    - Content: description (inner HTML)
    - Pricing: price, compare_at_price, on_sale
    - Media: images (absolute, high-resolution URLs)
    - Variants/options
    - Classification: product_type, vendor, breadcrumbs, tags, categories
    """

    url: str
    handle: str
    title: str
    description: str = ""
    price: Optional[float] = None
    compare_at_price: Optional[float] = None
    on_sale: bool = False
    images: List[str] = field(default_factory=list)
    variants: List[ResolvedVariant] = field(default_factory=list)
    options: List[ProductOption] = field(default_factory=list)
    product_type: Optional[str] = None
    vendor: Optional[str] = None
    breadcrumbs: List[str] = field(default_factory=list)
    tags: List[str] = field(default_factory=list)
    categories: List[str] = field(default_factory=list)

    # Where the product data came from (e.g. "product-template", "dom")
    source: str = ""

    def __post_init__(self):
        """Validate required fields after initialization."""
        if not self.url:
            raise ValueError("Product URL is required")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "url": self.url,
            "handle": self.handle,
            "title": self.title,
            "description": self.description,
            "price": self.price,
            "compareAtPrice": self.compare_at_price,
            "onSale": self.on_sale,
            "images": list(self.images),
            "variants": [v.to_dict() for v in self.variants],
            "options": [asdict(o) for o in self.options],
            "productType": self.product_type,
            "vendor": self.vendor,
            "breadcrumbs": list(self.breadcrumbs),
            "tags": list(self.tags),
            "categories": list(self.categories),
        }


@dataclass
class CollectionInfo:
    """Collection link found on a storefront."""
    title: str
    url: str
    handle: str = ""
    product_count: int = 0
    crawled: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "url": self.url,
            "handle": self.handle,
            "productCount": self.product_count,
            "crawled": self.crawled,
        }
