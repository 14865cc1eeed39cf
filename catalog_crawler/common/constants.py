"""
Shared constants for the project.

Single source of truth for Shopify-specific vocabulary used by the
extraction and processing modules.
"""

# Shopify CDN host; storefronts also proxy it under /cdn/shop/ on their own domain
SHOPIFY_CDN_HOST = "cdn.shopify.com"

# Legacy named size tiers embedded in CDN file names (e.g. "shirt_small_.jpg")
CDN_SIZE_TOKENS = (
    "pico", "icon", "thumb", "small", "compact",
    "medium", "large", "grande", "original",
)
HIGH_RES_TOKEN = "2048x2048"

# Prices above this are assumed to be in minor units (cents).
# Ambiguous for genuine prices above 10000 in major units; kept for compatibility.
CENTS_THRESHOLD = 10000

# Fallback base for relative image paths when no page origin is known
DEFAULT_IMAGE_BASE_URL = "https://cdn.shopify.com"

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)
