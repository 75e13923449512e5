"""
Extractor for rbi.org.in (Reserve Bank of India).
"""

from .base import TableRowExtractor
from .registry import register_extractor


@register_extractor
class RBIExtractor(TableRowExtractor):
    """Notification table: date in the first cell, link in the row."""

    DOMAIN = "rbi.org.in"
    ROW_SELECTOR = "table tr"
    DATE_CELL = 0

    def accept_title(self, title: str) -> bool:
        # Header and navigation rows link back to "Notifications"
        return "notification" not in title.lower()
