"""
Shopify Storefront API access.

Modules:
    api_client - StorefrontAPIClient for GraphQL requests
    queries - GraphQL documents for collections and products
    catalog - StorefrontCatalog listing and product transformation
"""

from .api_client import StorefrontAPIClient
from .catalog import StorefrontCatalog

__all__ = [
    'StorefrontAPIClient',
    'StorefrontCatalog',
]
