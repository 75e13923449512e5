"""
Extractor for sebi.gov.in (Securities and Exchange Board of India).
"""

from .base import TableRowExtractor
from .registry import register_extractor


@register_extractor
class SEBIExtractor(TableRowExtractor):
    """Circular listing table with the date in the first cell."""

    DOMAIN = "sebi.gov.in"
    ROW_SELECTOR = "table tr"
    DATE_CELL = 0
