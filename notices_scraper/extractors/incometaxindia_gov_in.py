"""
Extractor for incometaxindia.gov.in (Income Tax Department).

The site publishes notifications and circulars as SharePoint list views.
"""

from .base import TableRowExtractor
from .registry import register_extractor


@register_extractor
class IncomeTaxExtractor(TableRowExtractor):
    """First link per SharePoint list row, date in the second cell."""

    DOMAIN = "incometaxindia.gov.in"
    ROW_SELECTOR = "table tr, .ms-listviewtable tr"
    DATE_CELL = 1
