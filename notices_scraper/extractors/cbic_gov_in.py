"""
Extractor for cbic.gov.in (Central Board of Indirect Taxes and Customs).

GST, customs and excise pages share the same legacy htdocs layout:
link lists inside tables, Joomla content panes and plain <ul> menus.
Hrefs without a leading slash are relative to the site root.
"""

from urllib.parse import urlparse

from bs4 import BeautifulSoup

from notices_scraper.core.models import DataSource, ScrapedItem

from .base import BaseExtractor, link_href, link_text
from .registry import register_extractor

MIN_TITLE_LENGTH = 10

NON_NAVIGABLE_PREFIXES = ("#", "javascript:", "mailto:")


@register_extractor
class CBICExtractor(BaseExtractor):
    """Links from tables, content panes and lists; no dates on the page."""

    DOMAIN = "cbic.gov.in"
    LINK_SELECTOR = "table a, .contentpaneopen a, ul li a"

    def _absolute_url(self, href: str, source: DataSource) -> str:
        """Bare relative hrefs on CBIC pages are site-root paths."""
        if href.startswith("/") or urlparse(href).scheme:
            return super()._absolute_url(href, source)
        return f"{source.origin}/{href}"

    def extract(self, soup: BeautifulSoup, source: DataSource, max_items: int) -> list[ScrapedItem]:
        items: list[ScrapedItem] = []
        if max_items <= 0:
            return items

        for link in soup.select(self.LINK_SELECTOR):
            title = link_text(link)
            href = link_href(link)
            if len(title) <= MIN_TITLE_LENGTH or href.lower().startswith(NON_NAVIGABLE_PREFIXES):
                continue

            item = self._make_item(title, href, source)
            if item is None:
                continue

            items.append(item)
            if len(items) >= max_items:
                break

        return items
