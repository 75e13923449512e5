"""
Extractor for mahagst.gov.in (Maharashtra GST Department).
"""

from typing import Optional

from bs4 import BeautifulSoup, Tag

from notices_scraper.core.models import DataSource, ScrapedItem

from .base import BaseExtractor, link_href, link_text
from .registry import register_extractor


@register_extractor
class MahaGSTExtractor(BaseExtractor):
    """
    Card-style listing: each notification is an article or item block.

    The title is the first link's text, falling back to the block heading
    when the link wraps an icon or button only.
    """

    DOMAIN = "mahagst.gov.in"
    BLOCK_SELECTOR = "article, .notification-item, .update-item"
    HEADING_SELECTOR = "h3, h4, .title"
    DATE_SELECTOR = ".date, time"

    def _date_text(self, block: Tag) -> Optional[str]:
        date_elem = block.select_one(self.DATE_SELECTOR)
        if date_elem is None:
            return None
        return date_elem.get_text(" ", strip=True) or None

    def extract(self, soup: BeautifulSoup, source: DataSource, max_items: int) -> list[ScrapedItem]:
        items: list[ScrapedItem] = []
        if max_items <= 0:
            return items

        for block in soup.select(self.BLOCK_SELECTOR):
            link = block.find("a")
            title = link_text(link) or link_text(block.select_one(self.HEADING_SELECTOR))

            item = self._make_item(title, link_href(link), source, self._date_text(block))
            if item is None:
                continue

            items.append(item)
            if len(items) >= max_items:
                break

        return items
