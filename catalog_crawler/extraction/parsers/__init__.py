"""
Specialized parsers for storefront pages.

Each parser handles a specific data source:
- ProductJsonParser: embedded product JSON and analytics metadata
- StructuredDataParser: JSON-LD structured data (schema.org)
- HTMLContentParser: theme markup fallbacks
- CollectionPageParser: collection listings and pagination
"""

from .collection_parser import CollectionPageParser
from .html_parser import HTMLContentParser
from .product_json import ProductJsonParser
from .structured_data import StructuredDataParser

__all__ = [
    'ProductJsonParser',
    'StructuredDataParser',
    'HTMLContentParser',
    'CollectionPageParser',
]
