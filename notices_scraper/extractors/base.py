"""
Abstract base classes for site-specific notice extractors.

Each government website (incometaxindia.gov.in, rbi.org.in, etc.) has
its own extractor that maps a parsed listing page to ScrapedItems.
Extractors are pure: no network access and no date parsing.
"""

import re
from abc import ABC, abstractmethod
from typing import Optional
from urllib.parse import urljoin, urlparse

import structlog
from bs4 import BeautifulSoup, Tag

from notices_scraper.core.models import DataSource, ScrapedItem

logger = structlog.get_logger(__name__)


def normalize_title(title: Optional[str]) -> str:
    """Collapse internal whitespace and strip the ends."""
    if not title:
        return ""
    return re.sub(r"\s+", " ", title).strip()


def link_text(tag: Optional[Tag]) -> str:
    if tag is None:
        return ""
    return normalize_title(tag.get_text(" ", strip=True))


def link_href(tag: Optional[Tag]) -> str:
    if tag is None:
        return ""
    return (tag.get("href") or "").strip()


class BaseExtractor(ABC):
    """
    Base class for site-specific notice extraction.

    Subclasses set DOMAIN and implement extract(). The registry routes a
    source to the first extractor whose DOMAIN occurs in the URL host.
    """

    DOMAIN: Optional[str] = None

    def __init__(self):
        self.logger = logger.bind(extractor=self.__class__.__name__)

    def can_handle(self, url: str) -> bool:
        """
        Check if this extractor handles the given URL.

        Args:
            url: Source URL (e.g., "https://www.rbi.org.in/Scripts/NotificationUser.aspx")

        Returns:
            True if DOMAIN is part of the URL host
        """
        if not self.DOMAIN:
            return False
        return self.DOMAIN in urlparse(url).netloc.lower()

    @abstractmethod
    def extract(self, soup: BeautifulSoup, source: DataSource, max_items: int) -> list[ScrapedItem]:
        """
        Extract candidate notices from a parsed listing page.

        Args:
            soup: Parsed document
            source: Source the page was fetched from
            max_items: Stop once this many items have been found

        Returns:
            Items in document order, at most max_items
        """

    def get_extractor_name(self) -> str:
        """Return human-readable extractor name (e.g., 'RBIExtractor')"""
        return self.__class__.__name__

    def _absolute_url(self, href: str, source: DataSource) -> str:
        """Resolve a relative href against the source's own URL."""
        if href.startswith("//"):
            return f"{urlparse(source.url).scheme}:{href}"
        if href.startswith("/"):
            return f"{source.origin}{href}"
        if urlparse(href).scheme:
            return href
        return urljoin(source.url, href)

    def _make_item(
        self,
        title: str,
        href: str,
        source: DataSource,
        date: Optional[str] = None,
    ) -> Optional[ScrapedItem]:
        """Build an item, or None when title or href is missing."""
        title = normalize_title(title)
        if not title or not href:
            return None

        return ScrapedItem(
            title=title,
            url=self._absolute_url(href, source),
            source=source.name,
            category=source.category,
            date=normalize_title(date) or None,
        )


class TableRowExtractor(BaseExtractor):
    """
    Extractor for listings laid out as table rows.

    Takes the first link in each row as the notice and, when DATE_CELL
    is set, the text of that cell as the raw date.
    """

    ROW_SELECTOR = "table tr"
    DATE_CELL: Optional[int] = None

    def accept_title(self, title: str) -> bool:
        return True

    def _cell_text(self, row: Tag, index: Optional[int]) -> Optional[str]:
        if index is None:
            return None
        cells = row.find_all("td")
        if index >= len(cells):
            return None
        return cells[index].get_text(" ", strip=True) or None

    def extract(self, soup: BeautifulSoup, source: DataSource, max_items: int) -> list[ScrapedItem]:
        items: list[ScrapedItem] = []
        if max_items <= 0:
            return items

        for row in soup.select(self.ROW_SELECTOR):
            link = row.find("a")
            title = link_text(link)
            if not title or not self.accept_title(title):
                continue

            item = self._make_item(title, link_href(link), source, self._cell_text(row, self.DATE_CELL))
            if item is None:
                continue

            items.append(item)
            if len(items) >= max_items:
                break

        return items
