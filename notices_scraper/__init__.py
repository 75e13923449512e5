"""
Notices Scraper - recent Indian financial/tax regulatory notices.

Architecture:
- core/: Stable foundation (models, HTTP client, date normalization)
- extractors/: Site-specific extraction strategies, one per domain
- config/: YAML-driven source catalog
- plugins/: Optional extensions (LLM action-item analysis)
- orchestrator: Concurrent fetch, extract and recency filtering
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
