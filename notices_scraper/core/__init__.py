"""
Core layer - stable foundation for the scraping system.

Components:
- models: DataSource, ScrapedItem, ActionItems dataclasses
- http_client: Timeout-bounded HTTP client with browser headers
- dates: Indian date parsing, recency and relative-time helpers
"""

from .models import ActionItems, DataSource, ScrapedItem, ScrapeOutcome, SourceType
from .dates import (
    parse_indian_date,
    is_within_days,
    get_relative_time,
    format_date,
    sort_by_date,
)
from .http_client import HttpClient

__all__ = [
    "ActionItems",
    "DataSource",
    "ScrapedItem",
    "ScrapeOutcome",
    "SourceType",
    "parse_indian_date",
    "is_within_days",
    "get_relative_time",
    "format_date",
    "sort_by_date",
    "HttpClient",
]
