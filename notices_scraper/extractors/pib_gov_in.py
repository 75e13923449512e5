"""
Extractor for pib.gov.in (Press Information Bureau).
"""

from bs4 import BeautifulSoup

from notices_scraper.core.models import DataSource, ScrapedItem

from .base import BaseExtractor, link_href, link_text
from .registry import register_extractor

MIN_TITLE_LENGTH = 15


@register_extractor
class PIBExtractor(BaseExtractor):
    """Press release links from the content area or release tables."""

    DOMAIN = "pib.gov.in"
    SELECTOR = ".content-area a, table tr"

    def extract(self, soup: BeautifulSoup, source: DataSource, max_items: int) -> list[ScrapedItem]:
        items: list[ScrapedItem] = []
        if max_items <= 0:
            return items

        for elem in soup.select(self.SELECTOR):
            link = elem if elem.name == "a" else elem.find("a")
            title = link_text(link)
            if len(title) <= MIN_TITLE_LENGTH:
                continue

            item = self._make_item(title, link_href(link), source)
            if item is None:
                continue

            items.append(item)
            if len(items) >= max_items:
                break

        return items
