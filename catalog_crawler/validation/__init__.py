"""
Crawl validation.

Modules:
    crawl_tracker - CrawlQualityTracker for image/price coverage reports
"""

from .crawl_tracker import CrawlQualityTracker

__all__ = ['CrawlQualityTracker']
