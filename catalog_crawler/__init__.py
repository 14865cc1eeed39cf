"""
Shopify Catalog Crawler

Modules:
    models      - Data models (RawImage, RawVariant, ResolvedVariant, ScrapedProduct)
    common      - Shared utilities (config loader, logging, URL and CSV helpers)
    extraction  - Page fetching, product extraction, variant image resolution
    discovery   - Collection discovery from storefront sitemaps
    storefront  - Storefront GraphQL API client and catalog crawler
    processing  - Post-processing of crawled JSON into statistics
    validation  - Crawl data quality tracking
"""
