"""Tests for catalog_crawler/extraction/parsers/collection_parser.py"""

from bs4 import BeautifulSoup

from catalog_crawler.extraction.parsers import CollectionPageParser

INDEX_URL = "https://shop.example/collections"
COLLECTION_URL = "https://shop.example/collections/shirts"


def parser_for(html, url=COLLECTION_URL):
    return CollectionPageParser(BeautifulSoup(html, "lxml"), url)


class TestCollectionLinks:
    def test_dedupes_and_skips_products(self, collections_index_html):
        links = parser_for(collections_index_html, INDEX_URL).extract_collection_links()
        assert [c.url for c in links] == [
            "https://shop.example/collections/shirts",
            "https://shop.example/collections/frontpage",
            "https://shop.example/collections/mugs",
        ]

    def test_title_falls_back_to_title_attribute(self, collections_index_html):
        links = parser_for(collections_index_html, INDEX_URL).extract_collection_links()
        assert links[2].title == "Mugs"
        assert links[2].handle == "mugs"


class TestPagination:
    def test_page_count_from_numbers(self, collection_page_html):
        assert parser_for(collection_page_html).extract_page_count() == 3

    def test_page_count_without_pagination(self):
        assert parser_for("<div></div>").extract_page_count() == 1

    def test_next_link(self, collection_page_html):
        assert parser_for(collection_page_html).extract_next_link() == \
            "https://shop.example/collections/shirts?page=2"

    def test_no_next_link(self):
        assert parser_for("<div></div>").extract_next_link() is None


class TestProductLinks:
    def test_unique_absolute_in_order(self, collection_page_html):
        assert parser_for(collection_page_html).extract_product_links() == [
            "https://shop.example/collections/shirts/products/blue-shirt",
            "https://shop.example/products/green-shirt",
        ]

    def test_title_and_description(self, collection_page_html):
        parser = parser_for(collection_page_html)
        assert parser.extract_title() == "Shirts"
        assert parser.extract_description() == "<p>All our shirts.</p>"
