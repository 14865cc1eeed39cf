"""
Variant Image Resolver

Chooses a single image for every variant of a product and normalizes image
URLs to an absolute, high-resolution form.

Resolution is an ordered rule table: each rule looks at one variant and
returns an image URL or None, and the first non-None result wins.

Default order:
    1. the variant's own featured image
    2. an image whose variant_ids list contains the variant ID
    3. the first product image
    4. None

Usage:
    resolved = resolve_variant_images(images, variants, "https://shop.example")
    for variant in resolved:
        print(variant.id, variant.image)
"""

import logging
import re
from typing import Callable, Dict, List, Optional, Sequence, Tuple
from urllib.parse import urljoin, urlparse

from ..common.constants import (
    CDN_SIZE_TOKENS,
    DEFAULT_IMAGE_BASE_URL,
    HIGH_RES_TOKEN,
    SHOPIFY_CDN_HOST,
)
from ..common.url_utils import get_origin, has_scheme
from ..models import RawImage, RawVariant, ResolvedVariant

logger = logging.getLogger(__name__)

_SIZE_TOKEN_RE = re.compile(r'_(' + '|'.join(CDN_SIZE_TOKENS) + r')_')


def is_shopify_cdn_url(url: str, store_origin: Optional[str] = None) -> bool:
    """
    Check whether an absolute URL is served by the Shopify CDN.

    Besides cdn.shopify.com this covers the /cdn/shop/ proxy and any path on
    the storefront's own origin, which Shopify serves through the same CDN.
    """
    parsed = urlparse(url)
    host = parsed.netloc.lower()

    if SHOPIFY_CDN_HOST in host:
        return True
    if parsed.path.startswith("/cdn/shop/"):
        return True
    if store_origin:
        return host == urlparse(store_origin).netloc.lower()
    return False


def upscale_cdn_image(url: str) -> str:
    """
    Rewrite a named size tier (e.g. "_small_") to the high-resolution token.

    Only the first token is replaced. Already rewritten URLs are unchanged.
    """
    return _SIZE_TOKEN_RE.sub(f"_{HIGH_RES_TOKEN}_", url, count=1)


def normalize_image_url(src: Optional[str], base_url: Optional[str]) -> Optional[str]:
    """
    Make an image URL absolute and high-resolution.

    Args:
        src: Image URL as found on the page (may be relative or protocol-relative)
        base_url: Product page URL or store URL; only its origin is used

    Returns:
        Normalized URL, or None for empty input
    """
    if not src or not isinstance(src, str):
        return None
    src = src.strip()
    if not src:
        return None

    origin = get_origin(base_url) if base_url else DEFAULT_IMAGE_BASE_URL
    url = src if has_scheme(src) else urljoin(origin + "/", src)

    if is_shopify_cdn_url(url, origin):
        url = upscale_cdn_image(url)
    return url


def normalize_image_urls(srcs: Sequence[Optional[str]], base_url: Optional[str]) -> List[str]:
    """Normalize a list of image URLs, dropping empties and duplicates."""
    urls = []
    for src in srcs:
        url = normalize_image_url(src, base_url)
        if url and url not in urls:
            urls.append(url)
    return urls


class ResolutionContext:
    """Per-product lookup data shared by the resolution rules."""

    def __init__(self, images: Sequence[RawImage], base_url: Optional[str]):
        self.images = list(images or [])
        self.base_url = base_url
        self.by_variant_id = self._map_variant_ids()

    def normalize(self, src: Optional[str]) -> Optional[str]:
        return normalize_image_url(src, self.base_url)

    def _map_variant_ids(self) -> Dict[str, str]:
        mapping: Dict[str, str] = {}
        for image in self.images:
            if not image.variant_ids:
                continue
            url = self.normalize(image.src)
            if not url:
                continue
            # Later images overwrite earlier ones for the same variant
            for variant_id in image.variant_ids:
                if variant_id is not None:
                    mapping[str(variant_id)] = url
        return mapping


Rule = Callable[[RawVariant, ResolutionContext], Optional[str]]


def featured_image_rule(variant: RawVariant, context: ResolutionContext) -> Optional[str]:
    return context.normalize(variant.featured_image_src)


def variant_id_rule(variant: RawVariant, context: ResolutionContext) -> Optional[str]:
    if variant.id is None:
        return None
    return context.by_variant_id.get(str(variant.id))


def option_value_rule(variant: RawVariant, context: ResolutionContext) -> Optional[str]:
    """Match option values (e.g. "blue") against image file names and alt text."""
    values = [v.lower() for v in variant.option_values]
    if not values:
        return None

    for image in context.images:
        filename = (image.src or "").split("/")[-1].lower()
        alt = (image.alt or "").lower()
        if any(v in filename or v in alt for v in values):
            return context.normalize(image.src)
    return None


def first_image_rule(variant: RawVariant, context: ResolutionContext) -> Optional[str]:
    if not context.images:
        return None
    return context.normalize(context.images[0].src)


DEFAULT_RULES: Tuple[Tuple[str, Rule], ...] = (
    ("featured_image", featured_image_rule),
    ("variant_id", variant_id_rule),
    ("first_image", first_image_rule),
)

# Used for legacy theme scripts where variants carry no featured image
OPTION_MATCH_RULES: Tuple[Tuple[str, Rule], ...] = (
    ("featured_image", featured_image_rule),
    ("variant_id", variant_id_rule),
    ("option_value", option_value_rule),
    ("first_image", first_image_rule),
)


def resolve_variant_images(
    images: Sequence[RawImage],
    variants: Sequence[RawVariant],
    base_url: Optional[str],
    rules: Sequence[Tuple[str, Rule]] = DEFAULT_RULES,
) -> List[ResolvedVariant]:
    """
    Pick one image per variant.

    Args:
        images: Product images in page order
        variants: Product variants in page order
        base_url: Product page or store URL for resolving relative paths
        rules: Ordered (name, rule) pairs; first non-None result wins

    Returns:
        ResolvedVariant list, same length and order as variants.
        A variant's image is None when no rule produced one.
    """
    context = ResolutionContext(images, base_url)
    resolved = []

    for variant in variants:
        image = None
        for name, rule in rules:
            image = rule(variant, context)
            if image:
                logger.debug("Variant %s image from %s", variant.id, name)
                break
        resolved.append(ResolvedVariant.from_raw(variant, image or None))

    return resolved
