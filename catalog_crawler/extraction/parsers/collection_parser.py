"""
Collection Page Parser

Reads storefront listing pages: the /collections index, collection pages
and their pagination.
"""

import re
from typing import List, Optional

from bs4 import BeautifulSoup

from ...common.url_utils import absolute_url, collection_handle
from ...models import CollectionInfo


class CollectionPageParser:
    """
    Parses collection listing markup.

    Usage:
        parser = CollectionPageParser(soup, page_url)
        collections = parser.extract_collection_links()
        total_pages = parser.extract_page_count()
        product_urls = parser.extract_product_links()
    """

    PAGINATION_SELECTOR = (
        '.pagination, .pagination-wrapper, nav[role="navigation"], .pager, '
        '.pages, ul.page-numbers, .paginate, .pgn, [data-pagination], '
        '[class*="pagination"]'
    )

    PRODUCT_LINK_SELECTOR = 'a.product-card, a[href*="/products/"]'

    def __init__(self, soup: BeautifulSoup, page_url: str):
        self.soup = soup
        self.page_url = page_url

    def extract_collection_links(self) -> List[CollectionInfo]:
        """
        Collection links on the page, deduplicated by absolute URL.

        Links into products and links without a usable title are skipped.
        """
        found = {}
        for link in self.soup.select('a[href*="/collections/"]'):
            href = link.get('href') or ''
            if '/collections/' not in href or '/products/' in href:
                continue

            title = self._clean_text(link.get_text()) or self._clean_text(link.get('title', ''))
            if not title:
                continue

            url = absolute_url(href, self.page_url)
            # Later duplicates replace earlier ones, keeping first-seen order
            found[url] = CollectionInfo(
                title=title,
                url=url,
                handle=collection_handle(url) or '',
            )
        return list(found.values())

    def extract_page_count(self) -> int:
        """Highest page number shown in the pagination block, or 1."""
        pagination = self.soup.select_one(self.PAGINATION_SELECTOR)
        if not pagination:
            return 1

        numbers = []
        for element in pagination.find_all(['span', 'a']):
            match = re.match(r'\s*(\d+)', element.get_text())
            if match:
                numbers.append(int(match.group(1)))
        return max(numbers) if numbers else 1

    def extract_next_link(self) -> Optional[str]:
        """Absolute URL from <link rel="next">, if present."""
        link = self.soup.find('link', rel='next')
        if not link or not link.get('href'):
            return None
        return absolute_url(link['href'], self.page_url)

    def extract_product_links(self) -> List[str]:
        """Absolute product URLs in page order, without duplicates."""
        urls = []
        for link in self.soup.select(self.PRODUCT_LINK_SELECTOR):
            href = link.get('href')
            if not href:
                continue
            url = absolute_url(href, self.page_url)
            if '/products/' in url and url not in urls:
                urls.append(url)
        return urls

    def extract_title(self) -> str:
        element = self.soup.select_one('h1, .collection-title, .collection-header h1')
        return self._clean_text(element.get_text()) if element else ""

    def extract_description(self) -> str:
        element = self.soup.select_one('.collection-description, .collection__description')
        return element.decode_contents().strip() if element else ""

    def _clean_text(self, text: str) -> str:
        """Clean and normalize text."""
        if not text:
            return ""
        return ' '.join(text.split()).strip()
