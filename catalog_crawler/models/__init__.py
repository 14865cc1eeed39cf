"""
Data models for catalog crawling.

This module contains pure data classes with no business logic.
"""

from .product import (
    CollectionInfo,
    ProductOption,
    RawImage,
    RawVariant,
    ResolvedVariant,
    ScrapedProduct,
)

__all__ = [
    'RawImage',
    'RawVariant',
    'ResolvedVariant',
    'ProductOption',
    'ScrapedProduct',
    'CollectionInfo',
]
