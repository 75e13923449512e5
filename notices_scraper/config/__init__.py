"""Source catalog configuration."""

from .loader import (
    PRIORITY_SOURCE_NAMES,
    ConfigLoader,
    get_all_data_sources,
    get_data_sources_by_category,
    get_data_sources_by_name,
    list_categories,
    load_catalog,
)

__all__ = [
    "PRIORITY_SOURCE_NAMES",
    "ConfigLoader",
    "get_all_data_sources",
    "get_data_sources_by_category",
    "get_data_sources_by_name",
    "list_categories",
    "load_catalog",
]
