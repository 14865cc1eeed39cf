"""
HTML Content Parser

Extracts product information from theme markup when a page carries no
embedded product JSON:
- Title and description from common Shopify theme selectors
- Rendered price and compare-at price
- Gallery images, inline script image URLs, keyword-matched <img> tags
- Option selectors, product type, vendor, breadcrumbs, tags

Every method tries a cascade of selectors used by popular themes and
returns an empty value when nothing matches.
"""

import re
from typing import List, Optional, Tuple

from bs4 import BeautifulSoup

from ...models import ProductOption
from ..pricing import parse_money


class HTMLContentParser:
    """
    Parses product content from HTML elements.

    Usage:
        parser = HTMLContentParser(soup)
        title = parser.extract_title()
        price, compare_at, on_sale = parser.extract_prices()
        images = parser.extract_gallery_images()
    """

    TITLE_SELECTOR = 'h1, .product-title, .product__title'

    DESCRIPTION_SELECTORS = [
        '.product__description',
        '.product-single__description',
        '[data-product-description]',
        '.product-description',
        '#product-description',
        '.description',
        '[itemprop="description"]',
    ]

    PRICE_SELECTOR = (
        '.price, .product__price, [data-product-price], .product-price, '
        '.price__current, .product-single__price, .price--item, '
        '[data-item="price"], [itemprop="price"]'
    )

    COMPARE_PRICE_SELECTOR = (
        '.price--compare-at, .product__price--compare, [data-compare-price], '
        '.compare-at-price, .product-compare-price, .price__old, '
        '.price--on-sale .price__sale, .product-single__price--compare, '
        '[data-item="comparePrice"]'
    )

    GALLERY_SELECTOR = (
        '.product__media img, .product-single__media img, .product-image, '
        '.product__image, [data-product-image], .product-featured-img, '
        '.product-gallery__image img, .product-single__photo img, '
        '#ProductPhotoImg, .product-main-image, [data-zoom-image], '
        '.slick-slide img, .product__slide img, .swiper-slide img, '
        'img[itemprop="image"], .fotorama__img, .product-gallery__image, '
        '.product-image-main img, .product_image img'
    )

    IMAGE_ATTRIBUTES = [
        'src', 'data-src', 'data-zoom-image', 'data-full-resolution',
        'data-image', 'data-zoom-src',
    ]

    OPTION_SELECTOR = (
        '.product-form__option, .single-option-selector, select[data-option], '
        '.swatch, [data-product-variants], .product-options, .js-product-options'
    )

    PRODUCT_IMAGE_KEYWORDS = ['product', 'item', 'main', 'featured', 'gallery', 'zoom']

    SALE_BADGE_SELECTOR = (
        '.sale-badge, .on-sale, .price--on-sale, .price--sale, '
        '.product-tag--sale, .price-sale'
    )

    BREADCRUMB_SELECTOR = (
        '.breadcrumb, .breadcrumbs, nav[aria-label="breadcrumb"] li, '
        '.breadcrumb__item, .breadcrumb-item'
    )

    _BACKGROUND_RE = re.compile(r'background-image\s*:\s*url\([\'"]?(.*?)[\'"]?\)', re.IGNORECASE)
    _SCRIPT_IMAGE_RE = re.compile(
        r'"((?:(?:https?|ftp)://|//)[^"\s]+?\.(?:png|jpe?g|gif|webp)(?:\?[^"\s]*)?)"',
        re.IGNORECASE,
    )

    def __init__(self, soup: BeautifulSoup):
        """
        Initialize the HTML parser.

        Args:
            soup: BeautifulSoup object of the product page
        """
        self.soup = soup

    def extract_title(self) -> str:
        element = self.soup.select_one(self.TITLE_SELECTOR)
        return self._clean_text(element.get_text()) if element else ""

    def extract_description(self) -> str:
        """Return the inner HTML of the first description block found."""
        for selector in self.DESCRIPTION_SELECTORS:
            element = self.soup.select_one(selector)
            if element:
                html = element.decode_contents().strip()
                if html:
                    return html
        return ""

    def extract_prices(self) -> Tuple[Optional[float], Optional[float], bool]:
        """
        Extract the rendered price and compare-at price.

        Returns:
            (price, compare_at_price, on_sale)
        """
        price_elem = self.soup.select_one(self.PRICE_SELECTOR)
        if not price_elem:
            return None, None, False

        price = parse_money(price_elem.get_text(strip=True))

        compare_elem = self.soup.select_one(self.COMPARE_PRICE_SELECTOR)
        if not compare_elem:
            return price, None, False

        compare_at = parse_money(compare_elem.get_text(strip=True))
        on_sale = bool(price is not None and compare_at is not None and compare_at > price)
        return price, compare_at, on_sale

    def extract_gallery_images(self) -> List[str]:
        """Image URLs from gallery elements, trying lazy-load attributes too."""
        urls = []
        for element in self.soup.select(self.GALLERY_SELECTOR):
            src = ""
            for attr in self.IMAGE_ATTRIBUTES:
                value = element.get(attr)
                if value:
                    src = value
                    break

            if not src:
                match = self._BACKGROUND_RE.search(element.get('style') or '')
                if match:
                    src = match.group(1)

            if src and src not in urls:
                urls.append(src)
        return urls

    def extract_script_image_urls(self) -> List[str]:
        """Image URLs quoted inside the first inline script that lists images."""
        for script in self.soup.find_all('script', src=False):
            content = script.string or script.get_text()
            if not content or ('"images"' not in content and '"image"' not in content):
                continue

            content = content.replace('\\/', '/')
            urls = []
            for url in self._SCRIPT_IMAGE_RE.findall(content):
                if url not in urls:
                    urls.append(url)
            if urls:
                return urls
        return []

    def extract_keyword_images(self) -> List[str]:
        """Any <img> whose src, class or id suggests a product photo."""
        urls = []
        for img in self.soup.find_all('img'):
            src = img.get('src')
            if not src:
                continue

            classes = ' '.join(img.get('class') or []).lower()
            img_id = (img.get('id') or '').lower()
            src_lower = src.lower()
            looks_like_product = any(
                keyword in src_lower or keyword in classes or keyword in img_id
                for keyword in self.PRODUCT_IMAGE_KEYWORDS
            )

            if looks_like_product and 'icon' not in src_lower and 'logo' not in src_lower:
                if src not in urls:
                    urls.append(src)
        return urls

    def extract_logo(self) -> str:
        logo = self.soup.select_one('.site-header__logo img, .header__logo img, .logo img')
        return logo.get('src', '') if logo else ""

    def extract_options(self) -> List[ProductOption]:
        """Options from theme option selectors (names and values only)."""
        options = []
        for element in self.soup.select(self.OPTION_SELECTOR):
            label = element.find('label')
            name = (
                element.get('data-option-name')
                or element.get('data-option')
                or (self._clean_text(label.get_text()) if label else "")
                or 'Option'
            )

            values = []
            for choice in element.select('input, option, .swatch-element, [data-value]'):
                value = choice.get('value') or choice.get('data-value') or self._clean_text(choice.get_text())
                if value:
                    values.append(value)

            options.append(ProductOption(name=name, values=values))
        return options

    def extract_product_type(self) -> Optional[str]:
        element = self.soup.select_one('.product-type, [itemprop="category"]')
        if not element:
            return None
        return self._clean_text(element.get_text()) or None

    def extract_vendor(self) -> Optional[str]:
        element = self.soup.select_one(
            '.product__vendor, .product-single__vendor, .vendor, [itemprop="brand"]'
        )
        if not element:
            return None
        return self._clean_text(element.get_text()) or None

    def extract_breadcrumbs(self, title: str = "") -> List[str]:
        crumbs = []
        for element in self.soup.select(self.BREADCRUMB_SELECTOR):
            text = self._clean_text(element.get_text())
            if not text or 'Home' in text:
                continue
            if title and title in text:
                continue
            crumbs.append(text)
        return crumbs

    def extract_tags(self) -> List[str]:
        """Tag elements plus meta keywords."""
        tags = [
            self._clean_text(t.get_text())
            for t in self.soup.select('.product-tag, .tag')
        ]

        keywords = self.soup.find('meta', attrs={'name': 'keywords'})
        if keywords and keywords.get('content'):
            tags.extend(k.strip() for k in keywords['content'].split(','))

        return [t for t in tags if t]

    def has_sale_badge(self) -> bool:
        return self.soup.select_one(self.SALE_BADGE_SELECTOR) is not None

    def _clean_text(self, text: str) -> str:
        """Clean and normalize text."""
        if not text:
            return ""
        return ' '.join(text.split()).strip()
