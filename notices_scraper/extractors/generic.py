"""
Fallback extractor for sites without a dedicated strategy.

Favors precision: only long link texts that mention a regulatory
document type are kept, so navigation chrome is skipped.
"""

from bs4 import BeautifulSoup

from notices_scraper.core.models import DataSource, ScrapedItem

from .base import BaseExtractor, link_href, link_text
from .registry import register_default_extractor

MIN_TITLE_LENGTH = 20

REGULATORY_KEYWORDS = ("notification", "circular", "order", "amendment")


def is_relevant_title(title: str) -> bool:
    lowered = title.lower()
    return len(title) > MIN_TITLE_LENGTH and any(keyword in lowered for keyword in REGULATORY_KEYWORDS)


@register_default_extractor
class GenericExtractor(BaseExtractor):
    """Any anchor whose text looks like a notice title."""

    def extract(self, soup: BeautifulSoup, source: DataSource, max_items: int) -> list[ScrapedItem]:
        items: list[ScrapedItem] = []
        if max_items <= 0:
            return items

        for link in soup.find_all("a"):
            title = link_text(link)
            if not is_relevant_title(title):
                continue

            item = self._make_item(title, link_href(link), source)
            if item is None:
                continue

            items.append(item)
            if len(items) >= max_items:
                break

        return items
