"""
Site-specific extractors for government notice listings.

Each domain has its own extractor that turns a parsed listing page into
ScrapedItems. Importing this package registers all of them.
"""

from .base import BaseExtractor, TableRowExtractor, normalize_title
from .registry import REGISTRY, ExtractorRegistry, register_extractor
from .incometaxindia_gov_in import IncomeTaxExtractor
from .rbi_org_in import RBIExtractor
from .cbic_gov_in import CBICExtractor
from .sebi_gov_in import SEBIExtractor
from .mahagst_gov_in import MahaGSTExtractor
from .pib_gov_in import PIBExtractor
from .generic import GenericExtractor

__all__ = [
    "BaseExtractor",
    "TableRowExtractor",
    "normalize_title",
    "REGISTRY",
    "ExtractorRegistry",
    "register_extractor",
    "IncomeTaxExtractor",
    "RBIExtractor",
    "CBICExtractor",
    "SEBIExtractor",
    "MahaGSTExtractor",
    "PIBExtractor",
    "GenericExtractor",
]
